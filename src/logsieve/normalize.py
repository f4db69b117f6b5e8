"""Keyword extraction for rule scoring.

Text is split on ASCII whitespace only, so a non-breaking space stays
inside its token. Each token is reduced to its ASCII letters and digits
(non-ASCII characters are dropped before lower-casing, so e.g. the Kelvin
sign never folds into ``k``), and short tokens are dropped. The survivors
are sorted, deduplicated and capped, so the "top" keywords are simply the
first ones in lexical order rather than the most frequent ones.
"""

from __future__ import annotations

import re
from typing import List

from .models import MAX_KEYWORDS

MIN_KEYWORD_LEN = 3

_ASCII_WS_RE = re.compile(r"[ \t\n\r\f\v]+")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")


def normalize_token(token: str) -> str:
    """Lower-case *token* and strip everything except ``[a-z0-9]``."""
    ascii_only = token.encode("ascii", "ignore").decode("ascii")
    return _NON_ALNUM_RE.sub("", ascii_only.lower())


def extract_keywords(text: str, limit: int = MAX_KEYWORDS) -> List[str]:
    """Return up to *limit* unique normalized keywords from *text*.

    Returns ``[]`` for empty or whitespace-only input.
    """
    tokens = {normalize_token(tok) for tok in _ASCII_WS_RE.split(text)}
    kept = sorted(tok for tok in tokens if len(tok) >= MIN_KEYWORD_LEN)
    return kept[:limit]
