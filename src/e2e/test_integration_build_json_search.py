# src/e2e/test_integration_build_json_search.py

import json
from pathlib import Path

import pytest

from promptsearch.engine import Engine

PROMPTS = [
    {"id": "1", "title": "TypeScript Review Guidelines", "content": "guide",
     "tags": ["review", "typescript", "guidelines"], "quickAccessKey": "rvw",
     "createdAt": "2024-05-01T10:00:00Z", "updatedAt": "2024-05-02T10:00:00Z"},
    {"id": "4", "title": "Code Review Checklist", "content": "...",
     "tags": ["review", "checklist"]},
]


def _seed(tmp: Path) -> str:
    root = tmp / "Library"; root.mkdir()
    (root / "prompts.json").write_text(json.dumps({"prompts": PROMPTS}), encoding="utf-8")
    return str(root)


@pytest.mark.e2e
def test_tag_key_and_mixed_scenarios(tmp_path: Path):
    eng = Engine()
    try:
        eng.build(roots=[_seed(tmp_path)])

        rows = eng.search("#review")
        assert [(r.item.id, r.match_type, r.score) for r in rows] == [("1", "tag", 100), ("4", "tag", 100)]

        rows = eng.search("/rvw")
        assert [(r.item.id, r.match_type, r.score) for r in rows] == [("1", "quickAccess", 1000)]

        rows = eng.search("/rvw #typescript guide")
        assert len(rows) == 1
        assert rows[0].match_type == "mixed"
        assert rows[0].matched_terms == ("rvw", "typescript", "guide")
    finally:
        eng.shutdown()


@pytest.mark.e2e
def test_top_k_and_empty_query(tmp_path: Path):
    eng = Engine()
    try:
        eng.build(roots=[_seed(tmp_path)])
        assert len(eng.search("#review", top_k=1)) == 1
        assert eng.search("") == []
        assert [p.id for p in eng.filter("")] == ["1", "4"]
        assert [p.id for p in eng.filter("checklist")] == ["4"]
    finally:
        eng.shutdown()


@pytest.mark.e2e
def test_suggest_and_complete_through_engine(tmp_path: Path):
    eng = Engine()
    try:
        eng.build(roots=[_seed(tmp_path)])
        sug = eng.suggest("#")
        assert [s.text for s in sug.suggestions] == ["#checklist", "#guidelines", "#review", "#typescript"]
        comp = eng.complete("/r")
        assert (comp.completion, comp.full_text, comp.type) == ("vw", "/rvw", "quickAccess")
        assert eng.complete("/rvw").type is None
    finally:
        eng.shutdown()


@pytest.mark.e2e
def test_json_dsn_loads_the_same_corpus(tmp_path: Path):
    root = _seed(tmp_path)
    eng = Engine()
    try:
        eng.build(db_dsn=f"json:///{root}/prompts.json")
        assert eng.store.count() == 2
        assert eng.search("/rvw")[0].item.created_at.year == 2024
    finally:
        eng.shutdown()


def test_engine_requires_initialization():
    eng = Engine()
    with pytest.raises(RuntimeError):
        eng.search("#review")
    with pytest.raises(ValueError):
        eng.build()
