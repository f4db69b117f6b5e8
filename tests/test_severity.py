"""Tests for logsieve.severity: raw level to severity tier mapping.

Validates that ``severity_tier`` maps the exact upper-case level names to
their tiers, is case-sensitive, and defaults everything else to ``"INFO"``.
"""

import pytest

from logsieve.severity import severity_tier


class TestSeverityTier:
    """Verify the fixed mapping and its default."""

    @pytest.mark.parametrize(
        "level,expected",
        [
            ("CRITICAL", "CRITICAL"),
            ("FATAL", "CRITICAL"),
            ("ERROR", "ERROR"),
            ("WARN", "WARNING"),
            ("WARNING", "WARNING"),
            ("INFO", "INFO"),
        ],
    )
    def test_known_levels(self, level, expected):
        """Each recognised upper-case level maps to its tier."""
        assert severity_tier(level) == expected

    @pytest.mark.parametrize("level", ["error", "Fatal", "warn", "DEBUG", "SEVERE", ""])
    def test_everything_else_is_info(self, level):
        """Matching is case-sensitive; unknown or differently-cased levels fall
        through to ``"INFO"``."""
        assert severity_tier(level) == "INFO"
