"""Shared pytest fixtures for the logsieve test suite.

Provides record factories, a realistic labelled batch, a CSV writer for
loader/CLI tests, and an argument factory so individual test modules stay
focused on assertions rather than boilerplate setup.
"""

from __future__ import annotations

import argparse
import csv
from pathlib import Path

import pytest

from logsieve.models import LogRecord

CSV_HEADER = [
    "LineId", "Label", "Timestamp", "Date", "Node", "Time", "NodeRepeat",
    "Type", "Component", "Level", "Content", "EventId", "EventTemplate",
]


@pytest.fixture
def make_record():
    """Factory fixture that builds a ``LogRecord`` with only the fields a test cares about."""

    def _make(line_id: int = 1, content: str = "", level: str = "INFO", label: str = "-", **overrides) -> LogRecord:
        return LogRecord(line_id=line_id, content=content, level=level, label=label, **overrides)

    return _make


@pytest.fixture
def sample_rows() -> list[tuple[str, str, str, str]]:
    """Provide ``(label, level, component, content)`` tuples covering every rule category.

    Lines mix fault and normal content, strong and weak matches, and
    INFO/ERROR/FATAL levels so the gate, confidence tiers and issue
    categories are all exercised.
    """
    return [
        # Four Network triggers at ERROR level
        ("Network", "ERROR", "net", "Connection timeout: socket refused"),
        # Plain INFO line with no trigger at all
        ("-", "INFO", "app", "service started normally"),
        # Resource triggers, WARNING level
        ("Resource", "WARNING", "kernel", "memory usage exceeded capacity limit"),
        # Security triggers
        ("Security", "ERROR", "sshd", "authentication failed: permission denied for user"),
        # Hardware triggers at FATAL level
        ("Hardware", "FATAL", "kernel", "device driver firmware fault"),
        # Single weak match at INFO level: gated back to normal
        ("-", "INFO", "app", "opened port listener"),
        # Application triggers
        ("Application", "ERROR", "app", "fatal exception: core dumped after crash"),
        # Configuration issue category with no fault trigger
        ("-", "INFO", "cfg", "reloading configuration"),
        # Ground truth disagrees with what the rules predict
        ("Network", "INFO", "app", "ordinary heartbeat message"),
        # Empty content
        ("-", "INFO", "app", ""),
    ]


@pytest.fixture
def sample_records(sample_rows, make_record) -> list[LogRecord]:
    """A small labelled batch built from ``sample_rows``."""
    return [
        make_record(line_id=i, label=label, level=level, component=comp, content=content)
        for i, (label, level, comp, content) in enumerate(sample_rows, start=1)
    ]


@pytest.fixture
def write_csv(tmp_path: Path):
    """Factory fixture that writes a labelled log CSV and returns its path.

    Each row is ``(label, level, component, content)``; the remaining
    columns are filled with plausible constants.
    """

    def _write(rows, name: str = "logs.csv") -> Path:
        path = tmp_path / name
        with open(path, "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(CSV_HEADER)
            for i, (label, level, comp, content) in enumerate(rows, start=1):
                writer.writerow([
                    i, label, "1117838570", "2005.06.03", "R02-M1-N0", "2005-06-03-15.42.50",
                    "R02-M1-N0", "RAS", comp, level, content, f"E{i}", content,
                ])
        return path

    return _write


@pytest.fixture
def make_args():
    """Factory fixture that builds ``argparse.Namespace`` objects with sensible defaults.

    Mirrors every attribute ``cli.parse_args`` sets so tests never hit
    AttributeError on an unexpected missing field.
    """

    def _make(**overrides) -> argparse.Namespace:
        defaults = dict(
            input="",
            output_dir="output/",
            threads=4,
            chunk_size=10,
            progress_every=100,
            json=False,
            no_save=False,
            log_level="WARNING",
            notify_ntfy_topic="",
            notify_ntfy_server="https://ntfy.sh",
            notify_telegram_token="",
            notify_telegram_chat_id="",
        )
        defaults.update(overrides)
        return argparse.Namespace(**defaults)

    return _make
