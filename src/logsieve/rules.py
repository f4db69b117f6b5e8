"""Fixed keyword rule table used to score fault categories.

Each category maps to a set of lowercase trigger substrings. The table is
built once at import time and is never mutated afterwards, so worker
threads share it without locking.

Categories are always enumerated in alphabetical order. Best-category
selection breaks ties by this order, which keeps results reproducible.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Iterator, Mapping, Tuple

# --- Trigger substrings per fault category ------------------------------------
NETWORK_TRIGGERS = (
    "connection",
    "timeout",
    "network",
    "socket",
    "refused",
    "unreachable",
    "dns",
    "port",
    "link",
)

RESOURCE_TRIGGERS = (
    "memory",
    "cpu",
    "disk",
    "allocation",
    "limit",
    "exceeded",
    "usage",
    "capacity",
    "resource",
)

SECURITY_TRIGGERS = (
    "authentication",
    "permission",
    "denied",
    "unauthorized",
    "access",
    "login",
    "credential",
    "security",
    "auth",
)

HARDWARE_TRIGGERS = (
    "hardware",
    "device",
    "driver",
    "firmware",
    "physical",
)

APPLICATION_TRIGGERS = (
    "error",
    "exception",
    "failed",
    "crash",
    "abort",
    "core",
    "fault",
    "fatal",
    "panic",
    "signal",
)


class RuleTable(Mapping[str, FrozenSet[str]]):
    """Immutable ``category -> trigger substrings`` mapping."""

    def __init__(self, rules: Mapping[str, Iterable[str]]) -> None:
        table: Dict[str, FrozenSet[str]] = {
            name: frozenset(t.lower() for t in rules[name]) for name in sorted(rules)
        }
        self._rules = MappingProxyType(table)
        self._order: Tuple[str, ...] = tuple(table)

    def lookup(self, category: str) -> FrozenSet[str]:
        """Return the trigger set for *category*.

        Raises:
            KeyError: If *category* is not in the table.
        """
        return self._rules[category]

    def categories(self) -> Tuple[str, ...]:
        """Category names in enumeration (alphabetical) order."""
        return self._order

    def __getitem__(self, category: str) -> FrozenSet[str]:
        return self._rules[category]

    def __iter__(self) -> Iterator[str]:
        return iter(self._order)

    def __len__(self) -> int:
        return len(self._order)

    def __repr__(self) -> str:
        return f"RuleTable({list(self._order)!r})"


DEFAULT_RULES = RuleTable(
    {
        "Network": NETWORK_TRIGGERS,
        "Resource": RESOURCE_TRIGGERS,
        "Security": SECURITY_TRIGGERS,
        "Hardware": HARDWARE_TRIGGERS,
        "Application": APPLICATION_TRIGGERS,
    }
)
