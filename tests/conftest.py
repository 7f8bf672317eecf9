"""Shared fixtures for the sentence2vec test suite."""

from pathlib import Path

import pytest

from sentence2vec import Word2Vec

CORPUS = """5 3
chat 1.0 0.0 0.0
chien 0.0 1.0 0.0
oiseau 0.0 0.0 1.0
poisson 1.0 1.0 0.0
souris 0.5 0.25 -2.0
"""


@pytest.fixture
def corpus_path(tmp_path: Path) -> Path:
    path = tmp_path / "word2vec.txt"
    path.write_text(CORPUS, encoding="utf-8")
    return path


@pytest.fixture
def store(corpus_path: Path) -> Word2Vec:
    return Word2Vec.load_from_txt(corpus_path)


@pytest.fixture
def make_store():
    """Factory for a store of ``n`` words w000, w001, ... with distinct vectors."""

    def _make(n: int, dim: int = 2) -> Word2Vec:
        return Word2Vec(dim, {f"w{i:03d}": [float(i)] + [1.0] * (dim - 1) for i in range(n)})

    return _make
