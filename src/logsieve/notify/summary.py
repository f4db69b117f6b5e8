"""Structured run summary shared by the notification channels.

The summary counts predicted faults per category and per severity tier.
The worst tier seen among the faults sets the message title and each
channel's urgency.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from ..models import NORMAL_LABEL, LogRecord
from ..severity import SEVERITY_TIERS
from ..stats import PerformanceStats

# ntfy priority names, keyed by the worst fault tier
NTFY_PRIORITY = {"CRITICAL": "urgent", "ERROR": "high", "WARNING": "default", "INFO": "low"}

# Tiers that should ring on Telegram; lower tiers are delivered silently
LOUD_TIERS = ("CRITICAL", "ERROR")


@dataclass(frozen=True)
class FaultSummary:
    """Per-run fault counts plus the headline accuracy and throughput."""

    total_logs: int
    accuracy_percentage: float
    throughput_logs_per_sec: float
    num_threads: int
    by_category: Dict[str, int] = field(default_factory=dict)
    """Fault count per predicted category, most frequent first."""
    by_severity: Dict[str, int] = field(default_factory=dict)
    """Fault count per severity tier, worst tier first."""
    src_desc: str = ""

    @property
    def fault_count(self) -> int:
        return sum(self.by_category.values())

    @property
    def worst_severity(self) -> str:
        """Highest tier among the faults, or ``"INFO"`` when there are none."""
        for tier in SEVERITY_TIERS:
            if self.by_severity.get(tier):
                return tier
        return "INFO"

    @property
    def title(self) -> str:
        return f"logsieve [{self.worst_severity}]: {self.fault_count} faults in {self.total_logs} logs"

    @property
    def ntfy_priority(self) -> str:
        return NTFY_PRIORITY[self.worst_severity]

    @property
    def tags(self) -> List[str]:
        """Lower-cased fault categories, most frequent first."""
        return [c.lower() for c in self.by_category]

    @property
    def silent(self) -> bool:
        return self.worst_severity not in LOUD_TIERS

    def to_text(self, max_items: int = 10) -> str:
        """Render the body of the message (the title is sent separately)."""
        lines: List[str] = []
        if self.src_desc:
            lines.append(f"Source: {self.src_desc}")
        lines.append(
            f"Accuracy: {self.accuracy_percentage:.1f}% | "
            f"throughput={self.throughput_logs_per_sec:.2f} logs/sec | threads={self.num_threads}"
        )
        if self.by_severity:
            lines.append("Severity: " + ", ".join(f"{t}={n}" for t, n in self.by_severity.items()))
        lines.append("")

        ranked = list(self.by_category.items())
        for label, count in ranked[:max_items]:
            lines.append(f"[{label}] x{count}")

        if len(ranked) > max_items:
            lines.append(f"...and {len(ranked) - max_items} more.")
        return "\n".join(lines).rstrip() + "\n"


def is_fault(record: LogRecord) -> bool:
    return bool(record.predicted_label) and record.predicted_label != NORMAL_LABEL


def build_summary(stats: PerformanceStats, records: Sequence[LogRecord], src_desc: str = "") -> FaultSummary:
    """Count the predicted faults in *records* and pair them with *stats*."""
    faults = [r for r in records if is_fault(r)]
    categories = Counter(r.predicted_label for r in faults)
    tiers = Counter(r.severity_level for r in faults)
    return FaultSummary(
        total_logs=stats.total_logs,
        accuracy_percentage=stats.accuracy_percentage,
        throughput_logs_per_sec=stats.throughput_logs_per_sec,
        num_threads=stats.num_threads,
        by_category=dict(categories.most_common()),
        by_severity={t: tiers[t] for t in SEVERITY_TIERS if tiers[t]},
        src_desc=src_desc,
    )
