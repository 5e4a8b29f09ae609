"""Public API for the prompt search engine."""
from __future__ import annotations

from .completion import inline_completion
from .config import DEFAULT_WEIGHTS, SearchWeights, load_weights
from .engine import Engine, engine_for
from .models import (
    InlineCompletion,
    MatchRange,
    ParsedQuery,
    Prompt,
    SearchResult,
    Suggestion,
    SuggestionList,
)
from .parser import parse_search_query
from .scorer import filter_prompts, score_search_results
from .suggestions import generate_suggestions
from .vocabulary import Vocabulary, VocabularyCache

__all__ = [
    "DEFAULT_WEIGHTS", "Engine", "InlineCompletion", "MatchRange", "ParsedQuery",
    "Prompt", "SearchResult", "SearchWeights", "Suggestion", "SuggestionList",
    "Vocabulary", "VocabularyCache", "engine_for", "filter_prompts",
    "generate_suggestions", "inline_completion", "load_weights",
    "parse_search_query", "score_search_results",
]
