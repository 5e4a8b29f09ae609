from __future__ import annotations
import json
import logging
import os
from typing import Any, Iterable, Iterator, List

from .models import Prompt

log = logging.getLogger(__name__)


def _iter_json_files(roots: Iterable[str]) -> Iterator[str]:
    """Yield *.json paths: files as given, directories walked recursively in sorted order."""
    for root in roots:
        root = os.path.abspath(root)
        if os.path.isfile(root):
            yield root
            continue
        found: List[str] = []
        for dirpath, _, filenames in os.walk(root):
            for fn in filenames:
                if fn.lower().endswith(".json"):
                    found.append(os.path.join(dirpath, fn))
        yield from sorted(found)


def _records(doc: Any, path: str) -> List[Any]:
    # either a bare list or an export object {"prompts": [...]}
    if isinstance(doc, list):
        return doc
    if isinstance(doc, dict) and isinstance(doc.get("prompts"), list):
        return doc["prompts"]
    raise ValueError(f"{path}: expected a list of prompts or an object with a 'prompts' list")


def load_prompts(roots: Iterable[str]) -> List[Prompt]:
    """
    Read prompts from JSON files or folders of JSON files.
    Corpus order = file order, then record order inside each file.
    """
    prompts: List[Prompt] = []
    file_count = 0
    for path in _iter_json_files(roots):
        try:
            with open(path, "r", encoding="utf-8") as f:
                doc = json.load(f)
        except OSError as e:
            log.warning("skipping unreadable file %s: %s", path, e)
            continue
        except json.JSONDecodeError as e:
            raise ValueError(f"{path}: invalid JSON ({e})") from e

        for i, rec in enumerate(_records(doc, path)):
            if not isinstance(rec, dict):
                raise ValueError(f"{path}: record #{i} is not an object")
            try:
                prompts.append(Prompt.from_dict(rec))
            except ValueError as e:
                raise ValueError(f"{path}: record #{i}: {e}") from e
        file_count += 1

    log.info("loaded %d prompts from %d files", len(prompts), file_count)
    return prompts


def dump_prompts(prompts: Iterable[Prompt], path: str) -> None:
    """Write prompts in the same JSON shape load_prompts() reads."""
    tmp = f"{path}.tmp"
    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    with open(tmp, "w", encoding="utf-8") as f:
        json.dump({"prompts": [p.to_dict() for p in prompts]}, f, ensure_ascii=False, indent=2)
    os.replace(tmp, path)
