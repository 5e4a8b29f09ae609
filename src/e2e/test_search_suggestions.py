# src/e2e/test_search_suggestions.py

from promptsearch.models import MatchRange, Prompt
from promptsearch.suggestions import generate_suggestions
from promptsearch.vocabulary import Vocabulary


def _prompts(tags=(), keys=()) -> list[Prompt]:
    out = [Prompt(id=f"t{i}", content="x", tags=(t,)) for i, t in enumerate(tags)]
    out += [Prompt(id=f"k{i}", content="x", quick_access_key=k) for i, k in enumerate(keys)]
    return out


def test_hash_alone_lists_sorted_tags():
    res = generate_suggestions(_prompts(tags=["database", "backend"]), "#")
    assert res.is_visible
    assert [s.text for s in res.suggestions] == ["#backend", "#database"]
    first = res.suggestions[0]
    assert first.type == "tag"
    assert first.value == "#backend "
    assert first.match_range is None
    assert first.id == "tag-backend"


def test_substring_match_ordered_by_position():
    res = generate_suggestions(_prompts(tags=["react", "refactor", "prefetch"]), "#re")
    texts = [s.text for s in res.suggestions]
    assert texts == ["#react", "#refactor", "#prefetch"]
    assert res.suggestions[0].match_range == MatchRange(start=1, end=3)
    assert res.suggestions[2].match_range == MatchRange(start=2, end=4)


def test_case_insensitive_contains():
    res = generate_suggestions(_prompts(tags=["TypeScript"]), "#script")
    assert [s.text for s in res.suggestions] == ["#TypeScript"]
    assert res.suggestions[0].match_range == MatchRange(start=5, end=11)


def test_slash_uses_quick_access_vocabulary():
    res = generate_suggestions(_prompts(tags=["review"], keys=["rvw", "react"]), "/r")
    assert [(s.type, s.text) for s in res.suggestions] == [("quickAccess", "/react"), ("quickAccess", "/rvw")]
    assert res.suggestions[0].id == "quickaccess-react"
    assert res.suggestions[0].description == "Quick access: react"


def test_prefix_before_current_term_is_kept_in_value():
    res = generate_suggestions(_prompts(tags=["review"]), "fix bug #rev")
    assert res.suggestions[0].value == "fix bug #review "


def test_only_trailing_term_is_analyzed():
    res = generate_suggestions(_prompts(tags=["review"]), "#rev ")
    assert not res.is_visible
    assert res.count == 0


def test_category_cap_is_a_third_of_max():
    tags = [f"tag{i:02d}" for i in range(20)]
    res = generate_suggestions(_prompts(tags=tags), "#tag")
    assert res.count == 4          # ceil(10 / 3)
    res = generate_suggestions(_prompts(tags=tags), "#", max_suggestions=3)
    assert [s.text for s in res.suggestions] == ["#tag00"]


def test_shared_tags_are_deduplicated():
    prompts = [Prompt(id=str(i), content="x", tags=("shared",)) for i in range(5)]
    res = generate_suggestions(prompts, "#sh")
    assert [s.text for s in res.suggestions] == ["#shared"]


def test_disabled_empty_and_plain_text_give_nothing():
    prompts = _prompts(tags=["review"], keys=["rvw"])
    assert generate_suggestions(prompts, "#r", disabled=True).count == 0
    assert generate_suggestions(prompts, "").count == 0
    assert generate_suggestions(prompts, "   ").count == 0
    assert generate_suggestions(prompts, None).count == 0
    assert generate_suggestions(prompts, "review").count == 0


def test_category_switches():
    prompts = _prompts(tags=["review"], keys=["rvw"])
    assert generate_suggestions(prompts, "#r", include_tags=False).count == 0
    assert generate_suggestions(prompts, "/r", include_quick_access=False).count == 0
    assert generate_suggestions(prompts, "/r", include_tags=False).count == 1


def test_explicit_vocabulary_is_used_instead_of_corpus():
    vocab = Vocabulary(tags=("from-index",))
    res = generate_suggestions([], "#from", vocabulary=vocab)
    assert [s.text for s in res.suggestions] == ["#from-index"]


def test_to_dict_uses_ui_field_names():
    res = generate_suggestions(_prompts(tags=["react"]), "#re")
    d = res.to_dict()
    assert d["isVisible"] is True and d["count"] == 1
    assert d["suggestions"][0]["matchRange"] == {"start": 1, "end": 3}


def test_lone_marker_orders_like_collation():
    res = generate_suggestions(_prompts(tags=["Zeta", "alpha", "beta"]), "#")
    assert [s.text for s in res.suggestions] == ["#alpha", "#beta", "#Zeta"]
    res = generate_suggestions(_prompts(tags=["React", "react"]), "#")
    assert [s.text for s in res.suggestions] == ["#react", "#React"]


def test_cap_applies_to_sorted_vocabulary_before_ordering():
    # capping happens on code-point sorted entries, ordering afterwards
    res = generate_suggestions(_prompts(tags=["Zeta", "alpha"]), "#", max_suggestions=3)
    assert [s.text for s in res.suggestions] == ["#Zeta"]
