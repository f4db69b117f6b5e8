"""Tests for logsieve.sources: CSV loader and read_records dispatcher.

Validates that ``load_csv`` parses the labelled log columns into
``LogRecord`` objects in input order, skips and counts malformed rows,
tolerates blank lines and quoted content, and that ``read_records``
routes CLI arguments to the loader with a source description.
"""

import pytest

from logsieve.sources import read_records
from logsieve.sources.csv_file import load_csv, parse_row


# ---------------------------------------------------------------------------
# load_csv
# ---------------------------------------------------------------------------
class TestLoadCsv:
    """Verify CSV parsing into records."""

    def test_parses_fields(self, write_csv):
        """Every CSV column lands on the matching record field."""
        path = write_csv([("Network", "ERROR", "net", "Connection timeout")])
        result = load_csv(str(path))
        assert result.skipped == 0
        rec = result.records[0]
        assert rec.line_id == 1
        assert rec.label == "Network"
        assert rec.component == "net"
        assert rec.level == "ERROR"
        assert rec.content == "Connection timeout"
        assert rec.node == "R02-M1-N0"
        assert rec.event_template == "Connection timeout"

    def test_preserves_order(self, write_csv, sample_rows):
        """Records come back in file order."""
        result = load_csv(str(write_csv(sample_rows)))
        assert [r.line_id for r in result.records] == list(range(1, len(sample_rows) + 1))

    def test_quoted_content_with_commas(self, write_csv):
        """Commas inside quoted content should stay in the content field."""
        path = write_csv([("-", "INFO", "app", "ready, waiting, idle")])
        assert load_csv(str(path)).records[0].content == "ready, waiting, idle"

    def test_malformed_rows_skipped_and_counted(self, tmp_path):
        """Rows with a non-integer id or too few columns are skipped."""
        f = tmp_path / "bad.csv"
        f.write_text(
            "LineId,Label,Timestamp,Date,Node,Time,NodeRepeat,Type,Component,Level,Content,EventId,EventTemplate\n"
            "1,-,t,d,n,tm,nr,ty,comp,INFO,ok line,E1,tpl\n"
            "abc,-,t,d,n,tm,nr,ty,comp,INFO,bad id,E2,tpl\n"
            "3,-,t,d\n"
            "\n"
            "4,-,t,d,n,tm,nr,ty,comp,ERROR,another line,E4,tpl\n"
        )
        result = load_csv(str(f))
        assert [r.line_id for r in result.records] == [1, 4]
        assert result.skipped == 2

    def test_header_only(self, tmp_path):
        """A header-only file yields no records and no skips."""
        f = tmp_path / "empty.csv"
        f.write_text("LineId,Label,Timestamp,Date,Node,Time,NodeRepeat,Type,Component,Level,Content,EventId,EventTemplate\n")
        result = load_csv(str(f))
        assert result.records == []
        assert result.skipped == 0

    def test_missing_event_template_tolerated(self):
        """A row that stops after Content is still accepted."""
        rec = parse_row(["7", "-", "t", "d", "n", "tm", "nr", "ty", "comp", "INFO", "text"])
        assert rec is not None
        assert rec.event_template == ""

    def test_nonexistent_file_raises(self, tmp_path):
        """A missing path raises ``RuntimeError``."""
        with pytest.raises(RuntimeError, match="File not found"):
            load_csv(str(tmp_path / "missing.csv"))


# ---------------------------------------------------------------------------
# read_records dispatcher
# ---------------------------------------------------------------------------
class TestReadRecords:
    """Verify argument routing and source description."""

    def test_input_dispatches(self, write_csv, make_args):
        """An input path is loaded and described as ``csv:<path>``."""
        path = write_csv([("-", "INFO", "app", "hello world")])
        loaded, src_desc = read_records(make_args(input=str(path)))
        assert len(loaded.records) == 1
        assert src_desc == f"csv:{path}"

    def test_no_source_raises(self, make_args):
        """Without an input path there is nothing to read."""
        with pytest.raises(RuntimeError, match="No log source"):
            read_records(make_args(input=""))
