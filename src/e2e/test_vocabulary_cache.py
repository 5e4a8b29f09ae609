# src/e2e/test_vocabulary_cache.py

from promptsearch.models import Prompt
from promptsearch.vocabulary import Vocabulary, VocabularyCache


def test_vocabulary_is_sorted_and_unique():
    v = Vocabulary.from_prompts([
        Prompt(id="1", content="x", tags=("b", "a"), quick_access_key="zz"),
        Prompt(id="2", content="x", tags=("a", "c"), quick_access_key="aa"),
        Prompt(id="3", content="x"),
    ])
    assert v.tags == ("a", "b", "c")
    assert v.quick_access_keys == ("aa", "zz")
    assert len(v) == 5


def test_cache_hits_on_same_corpus_object():
    corpus = (Prompt(id="1", content="x", tags=("a",)),)
    cache = VocabularyCache()
    assert cache.get(corpus) is cache.get(corpus)


def test_cache_rebuilds_when_corpus_identity_changes():
    cache = VocabularyCache()
    first = [Prompt(id="1", content="x", tags=("a",))]
    v1 = cache.get(first)
    second = first + [Prompt(id="2", content="x", tags=("b",))]
    v2 = cache.get(second)
    assert v1.tags == ("a",)
    assert v2.tags == ("a", "b")
    # an equal-but-distinct corpus is still a different version
    assert cache.get(list(second)) is not v2


def test_clear_drops_cached_entry():
    corpus = (Prompt(id="1", content="x", tags=("a",)),)
    cache = VocabularyCache()
    v = cache.get(corpus)
    cache.clear()
    assert cache.get(corpus) is not v
