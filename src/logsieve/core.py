"""Core analysis pipeline: run the batch, time it, aggregate statistics.

This module ties together the parallel runner, the statistics aggregator
and OS memory accounting into one call used by the CLI.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Optional, Sequence

from .models import LogRecord
from .resources import peak_memory_mb
from .rules import DEFAULT_RULES, RuleTable
from .runner import DEFAULT_CHUNK_SIZE, DEFAULT_PROGRESS_EVERY, BatchRunner, ProgressCallback
from .stats import EmptyBatchError, PerformanceStats, aggregate


@dataclass
class BatchOutcome:
    """Result of one batch run."""
    stats: PerformanceStats
    failures: int


def analyze_batch(
    records: Sequence[LogRecord],
    num_threads: int,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    progress_every: int = DEFAULT_PROGRESS_EVERY,
    rules: RuleTable = DEFAULT_RULES,
    on_progress: Optional[ProgressCallback] = None,
) -> BatchOutcome:
    """Classify *records* in place on *num_threads* workers and aggregate.

    Raises:
        EmptyBatchError: If *records* is empty. Nothing is processed.
    """
    if not records:
        raise EmptyBatchError("No logs to process.")

    runner = BatchRunner(
        num_workers=num_threads,
        chunk_size=chunk_size,
        progress_every=progress_every,
        rules=rules,
        on_progress=on_progress,
    )

    start = time.perf_counter()
    failures = runner.run(records)
    elapsed = time.perf_counter() - start

    stats = aggregate(records, elapsed, num_threads, peak_memory_mb=peak_memory_mb())
    return BatchOutcome(stats=stats, failures=failures)
