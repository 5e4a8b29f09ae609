from __future__ import annotations
import math
from typing import Any, Iterable, List, Optional, Sequence

from . import config as CFG
from .models import MatchRange, Prompt, Suggestion, SuggestionList, SuggestionType
from .normalize import as_query, split_trailing_term
from .vocabulary import Vocabulary

# dropdown order between categories; "text" is reserved, nothing produces it yet
_PRIORITY = {"quickAccess": 1, "tag": 2, "text": 3}

_LABELS = {"tag": "Tag", "quickAccess": "Quick access"}
_MARKERS = {"tag": "#", "quickAccess": "/"}
_ID_PREFIX = {"tag": "tag", "quickAccess": "quickaccess"}


def _category(kind: SuggestionType, entries: Sequence[str], needle: str,
              before: str, cap: int) -> List[Suggestion]:
    """
    Suggestions for one marker ('#' or '/'). An empty needle lists the first
    `cap` entries; otherwise entries containing the needle (any position,
    case-insensitive), with match_range shifted by one for the marker.
    """
    marker = _MARKERS[kind]
    low = needle.lower()
    out: List[Suggestion] = []
    for entry in entries:
        if len(out) >= cap:
            break
        rng = None
        if low:
            at = entry.lower().find(low)
            if at < 0:
                continue
            rng = MatchRange(start=at + 1, end=at + len(low) + 1)
        out.append(Suggestion(
            id=f"{_ID_PREFIX[kind]}-{entry}",
            type=kind,
            text=f"{marker}{entry}",
            value=f"{before}{marker}{entry} ",
            description=f"{_LABELS[kind]}: {entry}",
            match_range=rng,
        ))
    return out


def _order_key(s: Suggestion):
    # within a category either every suggestion has a range or none does
    if s.match_range is not None:
        return (_PRIORITY[s.type], s.match_range.start, "", "")
    # collation order: case-insensitive first, lowercase before uppercase on ties
    return (_PRIORITY[s.type], 0, s.text.casefold(), s.text.swapcase())


def generate_suggestions(prompts: Iterable[Prompt], query: Any, *,
                         max_suggestions: int = CFG.MAX_SUGGESTIONS,
                         include_tags: bool = True,
                         include_quick_access: bool = True,
                         disabled: bool = False,
                         vocabulary: Optional[Vocabulary] = None) -> SuggestionList:
    """
    Dropdown candidates for the term currently being typed (after the last
    whitespace). Only '#tag' and '/key' terms produce suggestions.
    """
    q = as_query(query)
    if disabled or not q.strip() or max_suggestions <= 0:
        return SuggestionList()

    vocab = vocabulary if vocabulary is not None else Vocabulary.from_prompts(prompts)
    before, current = split_trailing_term(q)
    cap = math.ceil(max_suggestions / CFG.CATEGORY_SHARE)

    found: List[Suggestion] = []
    if include_tags and current.startswith("#"):
        found += _category("tag", vocab.tags, current[1:], before, cap)
    if include_quick_access and current.startswith("/"):
        found += _category("quickAccess", vocab.quick_access_keys, current[1:], before, cap)

    seen: set[tuple[str, str]] = set()
    unique: List[Suggestion] = []
    for s in found:
        if (s.type, s.text) in seen:
            continue
        seen.add((s.type, s.text))
        unique.append(s)

    unique.sort(key=_order_key)
    return SuggestionList(suggestions=tuple(unique[:max_suggestions]))
