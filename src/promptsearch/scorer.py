from __future__ import annotations
from typing import Iterable, List, Optional

from .config import DEFAULT_WEIGHTS, SearchWeights
from .models import MatchType, ParsedQuery, Prompt, SearchResult
from .normalize import fold


def _dedupe(terms: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(terms))


def _text_hit(term: str, prompt: Prompt, weights: SearchWeights) -> Optional[tuple[float, bool]]:
    """
    Score one free-text term against a prompt.
    Returns (points, is_title_tier) or None when the term is found nowhere.
    First hit wins: quick-access key, tags, title, then content.
    """
    t = fold(term)
    if t in fold(prompt.quick_access_key):
        return weights.title_match, True
    if any(t in fold(tag) for tag in prompt.tags):
        return weights.title_match, True
    if prompt.title and t in fold(prompt.title):
        return weights.title_match, True
    if t in fold(prompt.content):
        return weights.content_match, False
    return None


def score_prompt(prompt: Prompt, query: ParsedQuery,
                 weights: SearchWeights = DEFAULT_WEIGHTS) -> Optional[SearchResult]:
    """
    Score a single prompt. None means excluded: every criterion present in
    the query (key, each tag, each text term) must hold.
    """
    score: float = 0
    matched: List[str] = []
    match_type: MatchType = "content"
    by_key = by_tag = by_text = False

    if query.quick_access_key:
        if fold(prompt.quick_access_key) != fold(query.quick_access_key):
            return None
        score += weights.quick_access_match
        matched.append(query.quick_access_key)
        match_type = "quickAccess"
        by_key = True

    if query.tags:
        have = {fold(t) for t in prompt.tags}
        for tag in query.tags:
            if fold(tag) not in have:
                return None
            score += weights.exact_tag_match
            # record the first spelling the user typed for this tag
            matched.append(next(q for q in query.tags if fold(q) == fold(tag)))
        by_tag = True
        if not by_key:
            match_type = "tag"

    if query.text_terms:
        title_tier = False
        for term in query.text_terms:
            hit = _text_hit(term, prompt, weights)
            if hit is None:
                return None
            points, in_title = hit
            score += points
            matched.append(term)
            title_tier = title_tier or in_title
        by_text = True
        if not by_key and not by_tag:
            match_type = "title" if title_tier else "content"

    if score == 0:
        return None

    if sum((by_key, by_tag, by_text)) > 1:
        match_type = "mixed"

    return SearchResult(item=prompt, score=score, match_type=match_type,
                        matched_terms=_dedupe(matched))


def score_search_results(prompts: Iterable[Prompt], query: ParsedQuery,
                         weights: SearchWeights = DEFAULT_WEIGHTS) -> list[SearchResult]:
    """
    Rank the corpus against a parsed query.
    Sorted by score descending; equal scores keep corpus order (sorted() is stable).
    An empty query yields no results - showing the whole corpus is the caller's call.
    """
    if query.is_empty:
        return []
    rows = []
    for p in prompts:
        r = score_prompt(p, query, weights)
        if r is not None:
            rows.append(r)
    return sorted(rows, key=lambda r: r.score, reverse=True)


def filter_prompts(prompts: Iterable[Prompt], query: ParsedQuery,
                   weights: SearchWeights = DEFAULT_WEIGHTS) -> list[Prompt]:
    """Prompts to display for a query: the whole corpus when the query is empty, else ranked matches."""
    prompts = list(prompts)
    if query.is_empty:
        return prompts
    return [r.item for r in score_search_results(prompts, query, weights)]
