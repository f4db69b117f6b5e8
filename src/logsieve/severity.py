"""Raw log level to severity tier mapping.

Matching is case-sensitive: only the exact upper-case level names are
recognised. Anything else, including ``"error"`` in lower case, is
``"INFO"``.
"""

from __future__ import annotations

CRITICAL_LEVELS = ("CRITICAL", "FATAL")
ERROR_LEVELS = ("ERROR",)
WARNING_LEVELS = ("WARN", "WARNING")

SEVERITY_TIERS = ("CRITICAL", "ERROR", "WARNING", "INFO")


def severity_tier(level: str) -> str:
    """Classify a raw *level* as ``"CRITICAL"``, ``"ERROR"``, ``"WARNING"`` or ``"INFO"``."""
    if level in CRITICAL_LEVELS:
        return "CRITICAL"
    if level in ERROR_LEVELS:
        return "ERROR"
    if level in WARNING_LEVELS:
        return "WARNING"
    return "INFO"
