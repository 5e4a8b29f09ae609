from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal, Mapping, Optional, Tuple

MatchType = Literal["quickAccess", "tag", "title", "content", "mixed"]
SuggestionType = Literal["tag", "quickAccess", "text"]
CompletionType = Optional[Literal["quickAccess", "tag"]]


@dataclass(frozen=True)
class Prompt:
    id: str
    content: str
    title: Optional[str] = None
    tags: Tuple[str, ...] = ()
    quick_access_key: Optional[str] = None    # intended unique, not enforced here
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Prompt":
        """Accepts camelCase (UI/export format) or snake_case records."""
        if data.get("id") is None:
            raise ValueError("prompt record has no 'id'")
        content = data.get("content")
        if not isinstance(content, str):
            raise ValueError(f"prompt {data['id']!r}: 'content' must be a string")
        title = data.get("title")
        tags = data.get("tags") or ()
        if isinstance(tags, str):
            raise ValueError(f"prompt {data['id']!r}: 'tags' must be a list")
        key = _pick(data, "quickAccessKey", "quick_access_key")
        return cls(
            id=str(data["id"]),
            content=content,
            title=str(title) if title is not None else None,
            tags=tuple(str(t) for t in tags),
            quick_access_key=str(key) if key else None,
            created_at=_parse_ts(_pick(data, "createdAt", "created_at")),
            updated_at=_parse_ts(_pick(data, "updatedAt", "updated_at")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "tags": list(self.tags),
            "quickAccessKey": self.quick_access_key,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }


@dataclass(frozen=True)
class ParsedQuery:
    quick_access_key: Optional[str] = None
    tags: Tuple[str, ...] = ()          # order of appearance, duplicates kept
    text_terms: Tuple[str, ...] = ()
    original_query: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.quick_access_key and not self.tags and not self.text_terms

    def to_dict(self) -> dict[str, Any]:
        return {
            "quickAccessKey": self.quick_access_key,
            "tags": list(self.tags),
            "textTerms": list(self.text_terms),
            "originalQuery": self.original_query,
        }


@dataclass(frozen=True)
class SearchResult:
    item: Prompt
    score: float
    match_type: MatchType
    matched_terms: Tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "item": self.item.to_dict(),
            "score": self.score,
            "matchType": self.match_type,
            "matchedTerms": list(self.matched_terms),
        }


@dataclass(frozen=True)
class MatchRange:
    start: int
    end: int


@dataclass(frozen=True)
class Suggestion:
    id: str
    type: SuggestionType
    text: str                 # display form, e.g. "#react"
    value: str                # full input text after accepting the suggestion
    description: Optional[str] = None
    match_range: Optional[MatchRange] = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"id": self.id, "type": self.type, "text": self.text, "value": self.value}
        if self.description is not None:
            out["description"] = self.description
        if self.match_range is not None:
            out["matchRange"] = {"start": self.match_range.start, "end": self.match_range.end}
        return out


@dataclass(frozen=True)
class SuggestionList:
    suggestions: Tuple[Suggestion, ...] = field(default_factory=tuple)

    @property
    def is_visible(self) -> bool:
        return len(self.suggestions) > 0

    @property
    def count(self) -> int:
        return len(self.suggestions)

    def to_dict(self) -> dict[str, Any]:
        return {
            "suggestions": [s.to_dict() for s in self.suggestions],
            "isVisible": self.is_visible,
            "count": self.count,
        }


@dataclass(frozen=True)
class InlineCompletion:
    completion: str           # remainder to append, "" when nothing to offer
    full_text: str
    type: CompletionType = None

    def to_dict(self) -> dict[str, Any]:
        return {"completion": self.completion, "fullText": self.full_text, "type": self.type}


def _pick(data: Mapping[str, Any], *keys: str) -> Any:
    for k in keys:
        if data.get(k) is not None:
            return data[k]
    return None


def _parse_ts(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise ValueError(f"bad timestamp: {value!r}") from None
