"""Rule-based fault classifier (stage 1 of the pipeline).

For one log line this module:
  1. Extracts keywords (see ``normalize``).
  2. Scores every category in the rule table by symmetric substring match.
  3. Picks the best category, with an INFO-level gate back to normal.
  4. Derives confidence, severity tier and a coarse issue category.

Every function here is pure and reads the rule table without mutating it,
so records can be classified from any number of threads at once.
"""

from __future__ import annotations

import time
from typing import Dict, Sequence, Tuple

from .models import NORMAL_LABEL, ClassificationResult, LogRecord
from .normalize import extract_keywords
from .rules import DEFAULT_RULES, RuleTable
from .severity import severity_tier

# (substring, category) pairs checked per keyword, first hit wins
ISSUE_HINTS = (
    ("config", "Configuration"),
    ("perform", "Performance"),
    ("connect", "Connectivity"),
)
DEFAULT_ISSUE_CATEGORY = "General"


def _matches(keyword: str, trigger: str) -> bool:
    return trigger in keyword or keyword in trigger


def score_categories(keywords: Sequence[str], rules: RuleTable = DEFAULT_RULES) -> Dict[str, int]:
    """Count symmetric keyword/trigger matches for every category.

    A single keyword may score several triggers of the same category.
    The returned dict preserves the table's category order.
    """
    scores: Dict[str, int] = {}
    for category in rules.categories():
        triggers = rules.lookup(category)
        scores[category] = sum(1 for kw in keywords for t in triggers if _matches(kw, t))
    return scores


def best_category(scores: Dict[str, int]) -> Tuple[str, int]:
    """Return ``(category, score)`` for the strictly highest score.

    Ties keep the category seen first. When nothing scores above zero the
    result is ``(NORMAL_LABEL, 0)``.
    """
    best_label, max_score = NORMAL_LABEL, 0
    for category, score in scores.items():
        if score > max_score:
            best_label, max_score = category, score
    return best_label, max_score


def gate_label(best_label: str, max_score: int, level: str) -> str:
    """Fall back to the normal label for unmatched or weak INFO-level lines."""
    if max_score == 0:
        return NORMAL_LABEL
    if max_score <= 1 and level == "INFO":
        return NORMAL_LABEL
    return best_label


def confidence_for(keywords: Sequence[str], label: str, rules: RuleTable = DEFAULT_RULES) -> str:
    """Return ``"low"``, ``"medium"`` or ``"high"`` for a predicted *label*.

    For the normal label, confidence drops to ``"low"`` as soon as any
    keyword contains a trigger from any category. For a fault label, each
    keyword matching one of the category's triggers counts once.
    """
    if label == NORMAL_LABEL:
        has_problem = any(
            t in kw for category in rules.categories() for kw in keywords for t in rules.lookup(category)
        )
        return "low" if has_problem else "high"

    if label not in rules:
        return "low"

    triggers = rules.lookup(label)
    match_count = sum(1 for kw in keywords if any(_matches(kw, t) for t in triggers))
    if match_count >= 3:
        return "high"
    if match_count >= 1:
        return "medium"
    return "low"


def issue_category(keywords: Sequence[str]) -> str:
    """Map keywords to Configuration / Performance / Connectivity / General."""
    for kw in keywords:
        for hint, category in ISSUE_HINTS:
            if hint in kw:
                return category
    return DEFAULT_ISSUE_CATEGORY


def classify(text: str, level: str, rules: RuleTable = DEFAULT_RULES) -> ClassificationResult:
    """Classify one log line's *text* given its raw severity *level*.

    Total over any string input: empty text yields no keywords, the normal
    label and ``"high"`` confidence.
    """
    keywords = extract_keywords(text)
    best_label, max_score = best_category(score_categories(keywords, rules))
    label = gate_label(best_label, max_score, level)
    return ClassificationResult(
        predicted_label=label,
        confidence=confidence_for(keywords, label, rules),
        severity_level=severity_tier(level),
        issue_category=issue_category(keywords),
        keywords=tuple(keywords),
    )


def analyze(record: LogRecord, rules: RuleTable = DEFAULT_RULES) -> None:
    """Run stage 1 on *record* in place and record its duration."""
    start = time.perf_counter()
    record.apply(classify(record.content, record.level, rules))
    record.affected_component = record.component
    record.stage1_time_ms = (time.perf_counter() - start) * 1000.0
