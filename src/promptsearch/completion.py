from __future__ import annotations
from typing import Any, Iterable, Optional, Sequence

from .models import CompletionType, InlineCompletion, Prompt
from .normalize import as_query, split_trailing_term
from .vocabulary import Vocabulary


def _first_extension(entries: Sequence[str], prefix: str) -> Optional[str]:
    """
    First entry (sorted order) that starts with `prefix` but is not equal to
    it, ignoring case. Prefix match only; an empty prefix takes entries[0].
    """
    p = prefix.lower()
    for entry in entries:
        e = entry.lower()
        if e.startswith(p) and e != p:
            return entry
    return None


def inline_completion(prompts: Iterable[Prompt], query: Any, *,
                      disabled: bool = False,
                      vocabulary: Optional[Vocabulary] = None) -> InlineCompletion:
    """
    Ghost text for the trailing '/key' or '#tag' term, e.g. '/r' -> 'eact'.
    The typed text keeps the user's casing; the appended remainder carries
    the vocabulary entry's casing ('/R' + 'eact' -> '/React').
    """
    q = as_query(query)
    none = InlineCompletion(completion="", full_text=q, type=None)
    if disabled or not q.strip():
        return none

    before, current = split_trailing_term(q)
    if current.startswith("/"):
        kind: CompletionType = "quickAccess"
    elif current.startswith("#"):
        kind = "tag"
    else:
        return none

    vocab = vocabulary if vocabulary is not None else Vocabulary.from_prompts(prompts)
    entries = vocab.quick_access_keys if kind == "quickAccess" else vocab.tags
    prefix = current[1:]
    match = _first_extension(entries, prefix)
    if match is None:
        return none

    rest = match[len(prefix):]
    return InlineCompletion(completion=rest, full_text=before + current + rest, type=kind)
