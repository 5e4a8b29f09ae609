from __future__ import annotations
import re
from typing import Any

# trailing run of non-whitespace = the term being typed
_TRAILING = re.compile(r"\S*\Z")


def as_query(value: Any) -> str:
    """Queries that are not strings (None, numbers, ...) behave like ''."""
    return value if isinstance(value, str) else ""


def split_trailing_term(query: str) -> tuple[str, str]:
    """
    Split the raw input into (before, current):
      - before: everything up to and including the last whitespace char
      - current: the token after it (may be '')
    before + current == query always holds.
    """
    m = _TRAILING.search(query)
    cut = m.start() if m else len(query)
    return query[:cut], query[cut:]


def fold(s: str | None) -> str:
    """Case-insensitive comparison form."""
    return (s or "").lower()
