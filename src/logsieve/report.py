"""Per-record report rendering and run output formatters (text, JSON, CSV)."""

from __future__ import annotations

import csv
import json
import time
from pathlib import Path
from typing import Sequence, Tuple

from .models import NORMAL_LABEL, LogRecord
from .stats import PerformanceStats, label_distribution

RESULTS_HEADER = (
    "LineId",
    "GroundTruth",
    "PredictedLabel",
    "Confidence",
    "Severity",
    "Stage1TimeMs",
    "Stage2TimeMs",
    "TotalTimeMs",
    "KeywordsCount",
)

_RULE = "=" * 80


def render_record_report(record: LogRecord) -> None:
    """Build the one-line report for *record* (stage 2) and time it."""
    start = time.perf_counter()
    label = _display_label(record.predicted_label)
    record.report = (
        f"[{record.line_id}][{record.severity_level}] {label} "
        f"({record.confidence}, {record.issue_category}) "
        f"component={record.affected_component or '-'} "
        f"keywords={','.join(record.keywords)}"
    )
    record.stage2_time_ms = (time.perf_counter() - start) * 1000.0


def _display_label(label: str) -> str:
    return "Normal (-)" if not label or label == NORMAL_LABEL else label


def print_text_report(stats: PerformanceStats) -> None:
    """Print the performance summary to stdout."""
    print()
    print(_RULE)
    print("PERFORMANCE ANALYSIS SUMMARY")
    print(_RULE)

    print("\n--- Overall Throughput ---")
    print(f"Total logs: {stats.total_logs}")
    print(f"Threads: {stats.num_threads}")
    print(f"Total time: {stats.total_time_sec:.3f} seconds")
    print(f"Throughput: {stats.throughput_logs_per_sec:.2f} logs/sec")
    print(f"Avg time per log: {stats.avg_time_per_log_ms:.3f} ms")

    print("\n--- Stage Breakdown ---")
    print(f"Stage 1: {stats.stage1_time_sec:.3f}s ({stats.stage1_percentage:.1f}%)")
    print(f"Stage 2: {stats.stage2_time_sec:.3f}s ({stats.stage2_percentage:.1f}%)")

    print("\n--- Prediction Accuracy ---")
    print(f"Correct: {stats.correct_predictions}/{stats.total_logs}")
    print(f"Accuracy: {stats.accuracy_percentage:.1f}%")

    print("\n--- Keywords Statistics ---")
    print(f"Avg keywords per log: {stats.avg_keywords_count:.1f}")
    print(f"Avg chars per log: {stats.avg_keywords_chars:.1f}")

    print("\n--- Memory Usage ---")
    print(f"Peak memory: {stats.peak_memory_mb} MB")
    print(_RULE)


def print_label_distribution(records: Sequence[LogRecord]) -> None:
    """Print ground-truth and predicted label counts side by side."""
    ground_truth, predicted = label_distribution(records)
    print("\n--- Label Distribution ---")
    for title, dist in (("Ground Truth", ground_truth), ("Predicted", predicted)):
        print(f"\n{title}:")
        for label, count in dist.items():
            print(f"  {_display_label(label)}: {count}")


def stats_to_json(stats: PerformanceStats) -> str:
    """Serialize the stats snapshot to a pretty-printed JSON string."""
    return json.dumps(stats.to_dict(), indent=2)


def save_stats_json(stats: PerformanceStats, path: Path) -> None:
    """Write the stats snapshot to *path* as JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(stats_to_json(stats) + "\n", encoding="utf-8")


def save_detailed_results(records: Sequence[LogRecord], path: Path) -> None:
    """Write one CSV row per record with its prediction and timings."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(RESULTS_HEADER)
        for r in records:
            writer.writerow(
                [
                    r.line_id,
                    r.label,
                    r.predicted_label,
                    r.confidence,
                    r.severity_level,
                    f"{r.stage1_time_ms:.3f}",
                    f"{r.stage2_time_ms:.3f}",
                    f"{r.stage1_time_ms + r.stage2_time_ms:.3f}",
                    len(r.keywords),
                ]
            )



def print_sweep_summary(results: Sequence[Tuple[int, PerformanceStats]]) -> None:
    """Print throughput per thread count, with speedup over the first run."""
    print("\nResults summary:")
    base = results[0][1].throughput_logs_per_sec if results else 0.0
    for threads, stats in results:
        speedup = stats.throughput_logs_per_sec / base if base > 0 else 0.0
        print(f"  {threads} threads: {stats.throughput_logs_per_sec:.2f} logs/sec (x{speedup:.2f})")
