"""Parallel batch runner.

Records are split into small consecutive chunks which are queued on a
fixed-size thread pool; idle workers pull the next chunk, so expensive
records do not stall a statically assigned range. Each record belongs to
exactly one chunk and is therefore written by exactly one worker.

The only shared mutable resource is the progress callback, which is
invoked under a lock so console lines never interleave. A callback that
raises is logged and the batch carries on.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional, Sequence

from .classifier import analyze
from .models import LogRecord
from .report import render_record_report
from .rules import DEFAULT_RULES, RuleTable

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 10
DEFAULT_PROGRESS_EVERY = 100

ProgressCallback = Callable[[int, int], None]


def print_progress(index: int, total: int) -> None:
    print(f"  Processed: {index}/{total}")


class BatchRunner:
    """Drive stage 1 and stage 2 over every record of a batch in place."""

    def __init__(
        self,
        num_workers: int,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        progress_every: int = DEFAULT_PROGRESS_EVERY,
        rules: RuleTable = DEFAULT_RULES,
        on_progress: Optional[ProgressCallback] = None,
    ) -> None:
        if num_workers < 1:
            raise ValueError(f"num_workers must be >= 1, got {num_workers}")
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")
        self.num_workers = num_workers
        self.chunk_size = chunk_size
        self.progress_every = progress_every
        self.rules = rules
        self.on_progress = on_progress or print_progress
        self._progress_lock = threading.Lock()

    def run(self, records: Sequence[LogRecord]) -> int:
        """Process every record exactly once and return the failure count."""
        total = len(records)
        if total == 0:
            return 0

        starts = range(0, total, self.chunk_size)
        with ThreadPoolExecutor(max_workers=self.num_workers, thread_name_prefix="logsieve") as executor:
            futures = [executor.submit(self._run_chunk, records, start, total) for start in starts]
            failed = sum(f.result() for f in futures)

        if failed:
            logger.warning("%d of %d records failed and were left unclassified", failed, total)
        return failed

    def _run_chunk(self, records: Sequence[LogRecord], start: int, total: int) -> int:
        failed = 0
        for i in range(start, min(start + self.chunk_size, total)):
            if not self.process_one(records[i]):
                failed += 1
            self._report_progress(i, total)
        return failed

    def process_one(self, record: LogRecord) -> bool:
        """Classify and render one record. Returns False if it failed."""
        try:
            analyze(record, self.rules)
            render_record_report(record)
            record.total_time_ms = record.stage1_time_ms + record.stage2_time_ms
        except Exception:
            logger.exception("Failed to process record line_id=%s", record.line_id)
            record.reset_outputs()
            return False
        return True

    def _report_progress(self, index: int, total: int) -> None:
        # Cadence follows the original sequence position, not completion order
        if self.progress_every <= 0 or index == 0 or index % self.progress_every:
            return
        with self._progress_lock:
            try:
                self.on_progress(index, total)
            except Exception:
                logger.exception("Progress callback failed at %d/%d", index, total)
