"""Peak memory lookup via OS resource accounting."""

from __future__ import annotations

import resource
import sys


def peak_memory_mb() -> int:
    """Return this process's peak resident set size in whole megabytes.

    ``ru_maxrss`` is reported in bytes on macOS and in kilobytes on Linux.
    """
    maxrss = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    if sys.platform == "darwin":
        return int(maxrss // (1024 * 1024))
    return int(maxrss // 1024)
