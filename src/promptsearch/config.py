from __future__ import annotations
import json
from dataclasses import dataclass, fields
from typing import Any, Mapping

# Score weights
QUICK_ACCESS_MATCH: int = 1000
EXACT_TAG_MATCH: int = 100
TITLE_MATCH: int = 50
CONTENT_MATCH: int = 10

# /* ~~~ reserved for typo-tolerant matching, not read by the scorer ~~~ */
FUZZY_TITLE_MATCH: int = 25
FUZZY_CONTENT_MATCH: int = 5

# Suggestion dropdown
MAX_SUGGESTIONS: int = 10
CATEGORY_SHARE: int = 3   # each category gets ceil(MAX_SUGGESTIONS / CATEGORY_SHARE) slots

# Result limit for Engine.search / CLI (None = everything that matched)
TOP_K: int | None = None


@dataclass(frozen=True)
class SearchWeights:
    quick_access_match: float = QUICK_ACCESS_MATCH
    exact_tag_match: float = EXACT_TAG_MATCH
    title_match: float = TITLE_MATCH
    content_match: float = CONTENT_MATCH
    fuzzy_title_match: float = FUZZY_TITLE_MATCH
    fuzzy_content_match: float = FUZZY_CONTENT_MATCH

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SearchWeights":
        """
        Build weights from a partial mapping. Keys may be snake_case or the
        camelCase names used by the UI ({"quickAccessMatch": 1000, ...}).
        Missing keys keep their defaults.
        """
        known = {f.name: f.name for f in fields(cls)}
        known.update({_camel(f.name): f.name for f in fields(cls)})
        values: dict[str, float] = {}
        for key, raw in data.items():
            name = known.get(key)
            if name is None:
                raise ValueError(f"unknown search weight: {key!r}")
            if isinstance(raw, bool) or not isinstance(raw, (int, float)):
                raise ValueError(f"search weight {key!r} must be a number, got {raw!r}")
            values[name] = raw
        return cls(**values)

    def to_dict(self) -> dict[str, float]:
        return {_camel(f.name): getattr(self, f.name) for f in fields(self)}


DEFAULT_WEIGHTS = SearchWeights()


def load_weights(path: str) -> SearchWeights:
    """Read a JSON weight object from disk."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object of weights")
    return SearchWeights.from_mapping(data)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)
