"""
Structured query parsing: ``/key #tag free text``.

Rules, applied in order to the trimmed input:
  1. Quick-access key - FIRST-MATCH strategy: only the leftmost ``/`` +
     ASCII alphanumerics ending on a word boundary is taken as the key and
     cut out of the text at the position it matched. Any later ``/token``
     is not special and survives as a literal text term, slash included.
  2. Tags - every ``#`` + TAG_CHARS run, left to right, duplicates kept.
     All of them are cut out of the text.
  3. Whatever is left is split on whitespace into text terms.

A lone ``/`` or ``#`` matches neither pattern and stays a text term.
"""
from __future__ import annotations
import re
from typing import Any

from .models import ParsedQuery
from .normalize import as_query

# ASCII-only so the trailing \b sits where an ASCII word ends ("/abc" in "/abcé")
QUICK_ACCESS_RE = re.compile(r"/([A-Za-z0-9]+)\b", re.ASCII)

# Tag characters: ASCII word chars and '-', plus
#   U+3040-U+309F Hiragana
#   U+30A0-U+30FF Katakana
#   U+4E00-U+9FAF CJK unified ideographs
TAG_CHARS = "A-Za-z0-9_\\-\u3040-\u309F\u30A0-\u30FF\u4E00-\u9FAF"
TAG_RE = re.compile(f"#([{TAG_CHARS}]+)")


def _take_first_quick_access(text: str) -> tuple[str | None, str]:
    m = QUICK_ACCESS_RE.search(text)
    if m is None:
        return None, text
    return m.group(1), (text[:m.start()] + text[m.end():]).strip()


def parse_search_query(query: Any) -> ParsedQuery:
    """Parse raw input into a ParsedQuery. Never raises."""
    raw = as_query(query)
    if not raw:
        return ParsedQuery(original_query="")

    remaining = raw.strip()
    key, remaining = _take_first_quick_access(remaining)

    tags = tuple(TAG_RE.findall(remaining))
    remaining = TAG_RE.sub("", remaining).strip()

    return ParsedQuery(
        quick_access_key=key,
        tags=tags,
        text_terms=tuple(remaining.split()),
        original_query=raw,
    )
