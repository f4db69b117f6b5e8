"""Record and result data structures shared by the classifier and runner."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

NORMAL_LABEL = "-"
MAX_KEYWORDS = 10


@dataclass(frozen=True)
class ClassificationResult:
    """Outputs of one ``classify`` call.

    Attributes:
        predicted_label: Fault category name, or ``"-"`` when no fault was detected.
        confidence: ``"low"``, ``"medium"`` or ``"high"``.
        severity_level: Normalized severity tier (CRITICAL / ERROR / WARNING / INFO).
        issue_category: Configuration, Performance, Connectivity or General.
        keywords: Sorted, deduplicated keywords (at most ten).
    """
    predicted_label: str
    confidence: str
    severity_level: str
    issue_category: str
    keywords: Tuple[str, ...]


@dataclass
class LogRecord:
    """One log line plus its analysis outputs and timing.

    Input fields are populated by the loader; output fields are written by
    exactly one worker during a batch run.
    """
    line_id: int
    label: str = NORMAL_LABEL
    timestamp: str = ""
    date: str = ""
    node: str = ""
    time: str = ""
    component: str = ""
    level: str = ""
    content: str = ""
    event_template: str = ""

    predicted_label: str = ""
    confidence: str = ""
    severity_level: str = ""
    affected_component: str = ""
    issue_category: str = ""
    keywords: List[str] = field(default_factory=list)
    report: str = ""

    stage1_time_ms: float = 0.0
    stage2_time_ms: float = 0.0
    total_time_ms: float = 0.0

    def apply(self, result: ClassificationResult) -> None:
        """Copy a classification result onto this record's output fields."""
        self.predicted_label = result.predicted_label
        self.confidence = result.confidence
        self.severity_level = result.severity_level
        self.issue_category = result.issue_category
        self.keywords = list(result.keywords)

    def reset_outputs(self) -> None:
        """Clear every output and timing field back to its default."""
        self.predicted_label = ""
        self.confidence = ""
        self.severity_level = ""
        self.affected_component = ""
        self.issue_category = ""
        self.keywords = []
        self.report = ""
        self.stage1_time_ms = 0.0
        self.stage2_time_ms = 0.0
        self.total_time_ms = 0.0

    @property
    def is_correct(self) -> bool:
        return self.predicted_label == self.label
