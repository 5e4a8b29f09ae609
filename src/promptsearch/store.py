from __future__ import annotations
import dataclasses
from datetime import datetime, timezone
from typing import Dict, Iterable, Iterator, Optional, Protocol, Sequence, Tuple

from .models import Prompt

_UNSET = object()


class PromptStore(Protocol):
    # Create
    def create(self, p: Prompt) -> None: ...
    def bulk_create(self, items: Iterable[Prompt]) -> int: ...
    # Read
    def read(self, pid: str) -> Prompt: ...
    def read_many(self, ids: Iterable[str]) -> Iterator[Prompt]: ...
    def count(self) -> int: ...
    def snapshot(self) -> Tuple[Prompt, ...]: ...
    # Update
    def update(
        self,
        pid: str,
        *,
        title: object = _UNSET,
        content: Optional[str] = None,
        tags: Optional[Sequence[str]] = None,
        quick_access_key: object = _UNSET,
    ) -> Prompt: ...
    # Delete
    def delete(self, pid: str) -> None: ...
    # lifecycle
    def close(self) -> None: ...


class MemoryStore(PromptStore):
    """
    In-memory CRUD over prompts, insertion-ordered.
    snapshot() hands out one immutable tuple per corpus version: the same
    object until the next write, a new object after it.
    """
    def __init__(self, prompts: Optional[Iterable[Prompt]] = None) -> None:
        self._rows: Dict[str, Prompt] = {}
        self._snap: Optional[Tuple[Prompt, ...]] = None
        if prompts:
            for p in prompts:
                self._rows[p.id] = p

    # C
    def create(self, p: Prompt) -> None:
        self._rows[p.id] = p
        self._snap = None

    def bulk_create(self, items: Iterable[Prompt]) -> int:
        n = 0
        for p in items:
            self._rows[p.id] = p; n += 1
        self._snap = None
        return n

    # R
    def read(self, pid: str) -> Prompt:
        try:
            return self._rows[pid]
        except KeyError:
            raise KeyError(pid) from None

    def read_many(self, ids: Iterable[str]) -> Iterator[Prompt]:
        for pid in ids:
            p = self._rows.get(pid)
            if p is not None:
                yield p

    def count(self) -> int:
        return len(self._rows)

    def snapshot(self) -> Tuple[Prompt, ...]:
        if self._snap is None:
            self._snap = tuple(self._rows.values())
        return self._snap

    # U
    def update(
        self,
        pid: str,
        *,
        title: object = _UNSET,
        content: Optional[str] = None,
        tags: Optional[Sequence[str]] = None,
        quick_access_key: object = _UNSET,
    ) -> Prompt:
        """title / quick_access_key accept None to clear them; omit to keep."""
        p = self.read(pid)
        changes: dict = {"updated_at": datetime.now(timezone.utc)}
        if title is not _UNSET:
            changes["title"] = title
        if content is not None:
            changes["content"] = content
        if tags is not None:
            changes["tags"] = tuple(tags)
        if quick_access_key is not _UNSET:
            changes["quick_access_key"] = quick_access_key or None
        new = dataclasses.replace(p, **changes)
        self._rows[pid] = new
        self._snap = None
        return new

    # D
    def delete(self, pid: str) -> None:
        if self._rows.pop(pid, None) is not None:
            self._snap = None

    def close(self) -> None:
        self._rows.clear()
        self._snap = None


def make_store(dsn: str, *, prompts: Optional[Iterable[Prompt]] = None) -> PromptStore:
    """
    Factory:
      - memory://      -> MemoryStore (seeded with `prompts` if given)
      - json:///path   -> MemoryStore seeded from a JSON file or folder
    """
    if dsn.startswith("memory://"):
        return MemoryStore(prompts)

    if dsn.startswith("json:///"):
        from .loader import load_prompts
        path = dsn.removeprefix("json:///")
        # json:///rel/x.json is cwd-relative, json:////abs/x.json is absolute
        store = MemoryStore(load_prompts([path]))
        if prompts:
            store.bulk_create(prompts)
        return store

    raise ValueError(f"Unsupported store DSN: {dsn}")
