"""Batch statistics: throughput, stage timing, accuracy and keyword counts.

``aggregate`` reduces a finished batch to an immutable ``PerformanceStats``
snapshot. The snapshot only depends on per-record fields, so it is the same
for any worker count or scheduling order (timings aside).
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Dict, Sequence, Tuple

from .models import LogRecord

SCENARIO = "logsieve"


class EmptyBatchError(ValueError):
    """Raised when statistics are requested for a batch with no records."""


@dataclass(frozen=True)
class PerformanceStats:
    """Aggregate figures for one batch run.

    Attributes:
        total_logs: Number of records in the batch.
        num_threads: Worker count used for the run.
        total_time_sec: Wall-clock duration of the run.
        stage1_time_sec: Summed classification time across records.
        stage2_time_sec: Summed report-rendering time across records.
        throughput_logs_per_sec: ``total_logs / total_time_sec``.
        avg_time_per_log_ms: Mean of stage 1 + stage 2 per record.
        stage1_percentage: Share of stage time spent in stage 1 (0 if no stage time).
        stage2_percentage: Share of stage time spent in stage 2 (0 if no stage time).
        correct_predictions: Records whose predicted label equals the ground truth.
        accuracy_percentage: ``100 * correct_predictions / total_logs``.
        avg_keywords_count: Mean keyword list length.
        avg_keywords_chars: Mean summed keyword length.
        peak_memory_mb: Peak resident memory, supplied by the caller.
    """
    total_logs: int
    num_threads: int
    total_time_sec: float
    stage1_time_sec: float
    stage2_time_sec: float
    throughput_logs_per_sec: float
    avg_time_per_log_ms: float
    stage1_percentage: float
    stage2_percentage: float
    correct_predictions: int
    accuracy_percentage: float
    avg_keywords_count: float
    avg_keywords_chars: float
    peak_memory_mb: int = 0

    def to_dict(self) -> dict:
        """Return the persisted JSON shape, rounded like the console output."""
        return {
            "metadata": {
                "scenario": SCENARIO,
                "total_logs_processed": self.total_logs,
                "num_threads": self.num_threads,
                "total_time_seconds": round(self.total_time_sec, 6),
            },
            "throughput": {
                "logs_per_second": round(self.throughput_logs_per_sec, 3),
                "avg_time_per_log_ms": round(self.avg_time_per_log_ms, 3),
            },
            "stage_breakdown": {
                "stage1_time_sec": round(self.stage1_time_sec, 6),
                "stage2_time_sec": round(self.stage2_time_sec, 6),
                "stage1_percentage": round(self.stage1_percentage, 2),
                "stage2_percentage": round(self.stage2_percentage, 2),
            },
            "accuracy": {
                "correct": self.correct_predictions,
                "total": self.total_logs,
                "accuracy_percentage": round(self.accuracy_percentage, 2),
            },
            "keywords_statistics": {
                "avg_keywords_count": round(self.avg_keywords_count, 2),
                "avg_keywords_chars": round(self.avg_keywords_chars, 2),
            },
            "memory_usage": {
                "peak_memory_mb": self.peak_memory_mb,
            },
        }


def aggregate(
    records: Sequence[LogRecord],
    wall_clock_seconds: float,
    num_threads: int,
    peak_memory_mb: int = 0,
) -> PerformanceStats:
    """Compute a ``PerformanceStats`` snapshot for a finished batch.

    Raises:
        EmptyBatchError: If *records* is empty.
    """
    n = len(records)
    if n == 0:
        raise EmptyBatchError("Cannot aggregate statistics for an empty batch.")

    sum_stage1 = 0.0
    sum_stage2 = 0.0
    total_keywords = 0
    total_keyword_chars = 0
    correct = 0

    for r in records:
        sum_stage1 += r.stage1_time_ms
        sum_stage2 += r.stage2_time_ms
        total_keywords += len(r.keywords)
        total_keyword_chars += sum(len(kw) for kw in r.keywords)
        if r.is_correct:
            correct += 1

    stage1_sec = sum_stage1 / 1000.0
    stage2_sec = sum_stage2 / 1000.0

    # Leave both shares at zero rather than divide by an empty stage total
    stage1_pct = stage2_pct = 0.0
    total_stage = stage1_sec + stage2_sec
    if total_stage > 0:
        stage1_pct = stage1_sec / total_stage * 100.0
        stage2_pct = stage2_sec / total_stage * 100.0

    throughput = n / wall_clock_seconds if wall_clock_seconds > 0 else 0.0

    return PerformanceStats(
        total_logs=n,
        num_threads=num_threads,
        total_time_sec=wall_clock_seconds,
        stage1_time_sec=stage1_sec,
        stage2_time_sec=stage2_sec,
        throughput_logs_per_sec=throughput,
        avg_time_per_log_ms=(sum_stage1 + sum_stage2) / n,
        stage1_percentage=stage1_pct,
        stage2_percentage=stage2_pct,
        correct_predictions=correct,
        accuracy_percentage=100.0 * correct / n,
        avg_keywords_count=total_keywords / n,
        avg_keywords_chars=total_keyword_chars / n,
        peak_memory_mb=peak_memory_mb,
    )


def label_distribution(records: Sequence[LogRecord]) -> Tuple[Dict[str, int], Dict[str, int]]:
    """Return ``(ground_truth, predicted)`` label counts, each sorted by label."""
    ground_truth = Counter(r.label for r in records)
    predicted = Counter(r.predicted_label for r in records)
    return dict(sorted(ground_truth.items())), dict(sorted(predicted.items()))
