"""Unit tests for sentence2vec.sentence2vec and sentence2vec.text."""

import pytest

from sentence2vec.sentence2vec import Sentence2Vec, as_provider, vector_for
from sentence2vec.text import tokenize, trim_non_alnum
from sentence2vec.types import VectorProvider, WordVec
from sentence2vec.word2vec import Word2Vec

PROVIDER = {"cat": [1.0, 0.0], "dog": [0.0, 1.0]}


# ---------------------------------------------------------------------------
# text
# ---------------------------------------------------------------------------


def test_trim_non_alnum():
    assert trim_non_alnum("...Hello, world!?") == "Hello, world"
    assert trim_non_alnum("!!!") == ""
    assert trim_non_alnum("") == ""


def test_tokenize():
    assert tokenize("The Cat!") == ["the", "cat"]
    assert tokenize("  \"Hello\",  (World)... ") == ["hello", "world"]
    assert tokenize("don't stop") == ["don't", "stop"]
    assert tokenize("") == []
    assert tokenize("-- ; --") == []


def test_tokenize_unicode():
    assert tokenize("Éléphant, Café!") == ["éléphant", "café"]


# ---------------------------------------------------------------------------
# vector_for
# ---------------------------------------------------------------------------


def test_vector_for_single_match():
    assert vector_for("The Cat!", PROVIDER) == WordVec([1.0, 0.0])


def test_vector_for_empty():
    assert vector_for("", PROVIDER) is None


def test_vector_for_no_match():
    assert vector_for("the bird", PROVIDER) is None


def test_vector_for_mean():
    assert vector_for("cat dog", PROVIDER).tolist() == [0.5, 0.5]


def test_vector_for_repeated_words():
    assert vector_for("cat cat dog", PROVIDER).tolist() == pytest.approx([2 / 3, 1 / 3])


def test_vector_for_callable():
    calls = []

    def lookup(word):
        calls.append(word)
        return PROVIDER.get(word)

    assert vector_for("Dog.", lookup).tolist() == [0.0, 1.0]
    assert calls == ["dog"]


def test_vector_for_store(store):
    vec = vector_for("Chat et chien", store)
    assert vec.tolist() == [0.5, 0.5, 0.0]


def test_vector_for_dim_mismatch():
    with pytest.raises(ValueError, match="expected 2"):
        vector_for("cat bird", {"cat": [1.0, 0.0], "bird": [1.0, 0.0, 0.0]})


def test_as_provider():
    w2v = Word2Vec(2, PROVIDER)
    assert as_provider(w2v) is w2v
    assert isinstance(as_provider(PROVIDER), VectorProvider)
    with pytest.raises(TypeError):
        as_provider(42)


# ---------------------------------------------------------------------------
# Sentence2Vec
# ---------------------------------------------------------------------------


@pytest.fixture
def s2v():
    return Sentence2Vec(Word2Vec(2, PROVIDER))


def test_get_vec(s2v):
    assert s2v.get_vec("This is a test.") is None
    assert s2v.get_vec("A cat.").dim == 2


def test_cosine_identical(s2v):
    assert s2v.cosine("The cat.", "the CAT") == 1.0


def test_cosine_orthogonal(s2v):
    assert s2v.cosine("cat", "dog") == 0.0


def test_cosine_absent(s2v):
    assert s2v.cosine("cat", "") is None
    assert s2v.cosine("", "dog") is None


def test_cosine_ranks(store):
    s2v = Sentence2Vec(store)
    close = s2v.cosine("le chat", "le poisson")
    far = s2v.cosine("le chat", "le chien")
    assert close > far


def test_repr(s2v):
    assert "Sentence2Vec" in repr(s2v)
