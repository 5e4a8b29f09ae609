# promptsearch/engine.py
from __future__ import annotations

import logging
from typing import Iterable, Optional

from . import config as CFG
from .completion import inline_completion
from .config import SearchWeights
from .loader import load_prompts
from .models import InlineCompletion, Prompt, SearchResult, SuggestionList
from .parser import parse_search_query
from .scorer import filter_prompts, score_search_results
from .store import MemoryStore, PromptStore, make_store
from .suggestions import generate_suggestions
from .vocabulary import Vocabulary, VocabularyCache

log = logging.getLogger(__name__)


class Engine:
    """
    Thin orchestration layer that glues together:
      - prompt storage (CRUD) via a PromptStore,
      - vocabulary cache keyed by the store's current snapshot,
      - the pure query functions (parse / score / suggest / complete).

    Public API (used by CLI/Flask):
      * build(roots, ...):  load JSON prompts -> attach a store
      * attach(store):      use an existing store
      * search(query):      ranked SearchResults
      * filter(query):      prompts to display (whole corpus for an empty query)
      * suggest(query):     dropdown suggestions
      * complete(query):    inline ghost-text completion
      * shutdown():         close underlying resources

    Every query call reads the store's snapshot at call time.
    """

    # ------------- lifecycle -------------

    def __init__(self, weights: Optional[SearchWeights] = None) -> None:
        self.weights = weights or CFG.DEFAULT_WEIGHTS
        self._store: Optional[PromptStore] = None
        self._vocab = VocabularyCache()

    # /* ~~~ Load prompts from JSON roots and wire up storage ~~~ */
    def build(
        self,
        roots: Iterable[str] = (),
        *,
        db_dsn: Optional[str] = None,     # "memory://" or "json:///path"
        verbose: bool = False,
    ) -> None:
        if verbose:
            logging.basicConfig(level=logging.INFO)

        roots = list(roots)
        if not roots and not db_dsn:
            raise ValueError("build(): need at least one root or a db_dsn")

        prompts: list[Prompt] = []
        if roots:
            log.info("Loading prompts from %s", roots)
            prompts = load_prompts(roots)

        dsn = db_dsn or "memory://"
        log.info("Initializing prompt store: %s", dsn)
        self.attach(make_store(dsn, prompts=prompts))

    def attach(self, store: PromptStore) -> None:
        if self._store is not None and self._store is not store:
            self._store.close()
        self._store = store
        self._vocab.clear()
        log.info("Engine attached to store: prompts=%d", store.count())

    @property
    def store(self) -> PromptStore:
        if self._store is None:
            raise RuntimeError("Engine not initialized. Call build() or attach() first.")
        return self._store

    # ------------- query -------------

    def corpus(self) -> tuple[Prompt, ...]:
        return self.store.snapshot()

    def vocabulary(self) -> Vocabulary:
        return self._vocab.get(self.corpus())

    # /* ~~~ Rank the corpus for a raw query ~~~ */
    def search(self, query: str, *, top_k: Optional[int] = CFG.TOP_K) -> list[SearchResult]:
        parsed = parse_search_query(query)
        rows = score_search_results(self.corpus(), parsed, self.weights)
        log.debug("search %r -> %d results", query, len(rows))
        if top_k is not None:
            rows = rows[:max(0, top_k)]
        return rows

    def filter(self, query: str) -> list[Prompt]:
        return filter_prompts(self.corpus(), parse_search_query(query), self.weights)

    def suggest(
        self,
        query: str,
        *,
        max_suggestions: int = CFG.MAX_SUGGESTIONS,
        include_tags: bool = True,
        include_quick_access: bool = True,
        disabled: bool = False,
    ) -> SuggestionList:
        corpus = self.corpus()
        return generate_suggestions(
            corpus, query,
            max_suggestions=max_suggestions,
            include_tags=include_tags,
            include_quick_access=include_quick_access,
            disabled=disabled,
            vocabulary=self._vocab.get(corpus),
        )

    def complete(self, query: str, *, disabled: bool = False) -> InlineCompletion:
        corpus = self.corpus()
        return inline_completion(corpus, query, disabled=disabled, vocabulary=self._vocab.get(corpus))

    # ------------- teardown -------------

    # /* ~~~ Close underlying resources ~~~ */
    def shutdown(self) -> None:
        try:
            if self._store:
                self._store.close()
        finally:
            self._store = None
            self._vocab.clear()
            log.info("Engine shutdown complete")


def engine_for(prompts: Iterable[Prompt], weights: Optional[SearchWeights] = None) -> Engine:
    """Convenience: an Engine over an in-memory list of prompts."""
    eng = Engine(weights)
    eng.attach(MemoryStore(prompts))
    return eng
