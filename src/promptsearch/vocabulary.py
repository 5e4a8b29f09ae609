from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple

from .models import Prompt

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Vocabulary:
    """Sorted, de-duplicated tags and quick-access keys of one corpus version."""
    tags: Tuple[str, ...] = ()
    quick_access_keys: Tuple[str, ...] = ()

    @classmethod
    def from_prompts(cls, prompts: Iterable[Prompt]) -> "Vocabulary":
        tags: set[str] = set()
        keys: set[str] = set()
        for p in prompts:
            tags.update(p.tags)
            if p.quick_access_key:
                keys.add(p.quick_access_key)
        return cls(tags=tuple(sorted(tags)), quick_access_keys=tuple(sorted(keys)))

    def __len__(self) -> int:
        return len(self.tags) + len(self.quick_access_keys)


class VocabularyCache:
    """
    Holds the vocabulary of the last corpus it was asked about.
    Keyed by corpus identity: a different corpus object means a full rebuild,
    the same object means the cached vocabulary. Entries are never patched.
    The corpus reference is kept alive so its id() cannot be recycled.
    """
    def __init__(self) -> None:
        self._corpus: Optional[Any] = None
        self._vocab: Optional[Vocabulary] = None

    def get(self, prompts: Iterable[Prompt]) -> Vocabulary:
        if self._vocab is not None and prompts is self._corpus:
            return self._vocab
        vocab = Vocabulary.from_prompts(prompts)
        self._corpus, self._vocab = prompts, vocab
        log.debug("vocabulary rebuilt: tags=%d keys=%d", len(vocab.tags), len(vocab.quick_access_keys))
        return vocab

    def clear(self) -> None:
        self._corpus = None
        self._vocab = None
