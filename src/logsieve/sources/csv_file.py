"""Loader for labelled log CSV files.

Expected columns::

    LineId,Label,Timestamp,Date,Node,Time,NodeRepeat,Type,Component,Level,Content,EventId,EventTemplate

NodeRepeat, Type and EventId are read but not kept. Rows with too few
columns or a non-integer LineId are skipped and counted.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from ..models import LogRecord

logger = logging.getLogger(__name__)

# Column positions in the source CSV
COL_LINE_ID = 0
COL_LABEL = 1
COL_TIMESTAMP = 2
COL_DATE = 3
COL_NODE = 4
COL_TIME = 5
COL_COMPONENT = 8
COL_LEVEL = 9
COL_CONTENT = 10
COL_EVENT_TEMPLATE = 12

MIN_COLUMNS = COL_CONTENT + 1


@dataclass
class LoadResult:
    """Records parsed from a CSV file plus the number of skipped rows."""
    records: List[LogRecord] = field(default_factory=list)
    skipped: int = 0


def parse_row(row: Sequence[str]) -> Optional[LogRecord]:
    """Build a ``LogRecord`` from one CSV row, or ``None`` if it is malformed."""
    if len(row) < MIN_COLUMNS:
        return None
    try:
        line_id = int(row[COL_LINE_ID].strip())
    except ValueError:
        return None
    return LogRecord(
        line_id=line_id,
        label=row[COL_LABEL],
        timestamp=row[COL_TIMESTAMP],
        date=row[COL_DATE],
        node=row[COL_NODE],
        time=row[COL_TIME],
        component=row[COL_COMPONENT],
        level=row[COL_LEVEL],
        content=row[COL_CONTENT],
        event_template=row[COL_EVENT_TEMPLATE] if len(row) > COL_EVENT_TEMPLATE else "",
    )


def load_csv(path: str) -> LoadResult:
    """Read every data row of the CSV at *path*, skipping the header.

    Raises:
        RuntimeError: If the file does not exist.
    """
    p = Path(path)
    if not p.exists():
        raise RuntimeError(f"File not found: {p}")

    result = LoadResult()
    with open(p, "r", encoding="utf-8", errors="ignore", newline="") as f:
        reader = csv.reader(f)
        next(reader, None)
        for row_no, row in enumerate(reader, start=1):
            if not row or not any(cell.strip() for cell in row):
                continue
            rec = parse_row(row)
            if rec is None:
                logger.warning("Skipping malformed row %d in %s", row_no, p)
                result.skipped += 1
                continue
            result.records.append(rec)
    return result
