"""Sentence vectors by averaging word vectors.

The averager only needs ``get_vec(word)``; a Word2Vec store, a plain mapping
or any callable can serve as the provider.
"""

from __future__ import annotations

import logging
from collections import abc
from typing import Callable, Mapping, Optional, Union

import numpy as np

from .text import tokenize
from .types import DTYPE, VectorLike, VectorProvider, WordVec

logger = logging.getLogger(__name__)

ProviderLike = Union[
    VectorProvider,
    Mapping[str, VectorLike],
    Callable[[str], Optional[VectorLike]],
]


class _MappingProvider:
    def __init__(self, mapping: Mapping[str, VectorLike]) -> None:
        self._mapping = mapping

    def get_vec(self, word: str) -> Optional[WordVec]:
        vec = self._mapping.get(word)
        return None if vec is None else WordVec(vec)


class _CallableProvider:
    def __init__(self, fn: Callable[[str], Optional[VectorLike]]) -> None:
        self._fn = fn

    def get_vec(self, word: str) -> Optional[WordVec]:
        vec = self._fn(word)
        return None if vec is None else WordVec(vec)


def as_provider(source: ProviderLike) -> VectorProvider:
    """Adapt a store, mapping or callable to the VectorProvider protocol."""
    if isinstance(source, VectorProvider):
        return source
    if isinstance(source, abc.Mapping):
        return _MappingProvider(source)
    if callable(source):
        return _CallableProvider(source)
    raise TypeError(
        f"Expected an object with get_vec(), a mapping or a callable, "
        f"got {type(source).__name__}."
    )


def vector_for(sentence: str, provider: ProviderLike) -> Optional[WordVec]:
    """Mean of the vectors of the words of ``sentence`` known to ``provider``.

    Returns None when no word matched.
    """
    provider = as_provider(provider)
    total: Optional[np.ndarray] = None
    count = 0
    for word in tokenize(sentence):
        vec = provider.get_vec(word)
        if vec is None:
            continue
        if total is None:
            total = np.zeros(vec.dim, dtype=DTYPE)
        elif vec.dim != total.size:
            raise ValueError(
                f"Vector of {word!r} has dim {vec.dim}, expected {total.size}."
            )
        total += vec.vec
        count += 1

    if total is None:
        logger.debug("No word of %r matched", sentence)
        return None
    return WordVec(total / DTYPE(count))


class Sentence2Vec:
    """Sentence vectors over a word-vector provider.

    Parameters
    ----------
    provider : Word2Vec store, mapping of word -> vector, or callable.
    """

    def __init__(self, provider: ProviderLike) -> None:
        self.provider: VectorProvider = as_provider(provider)

    def get_vec(self, sentence: str) -> Optional[WordVec]:
        """Average vector of the sentence, None if no word is known."""
        return vector_for(sentence, self.provider)

    def cosine(self, sentence1: str, sentence2: str) -> Optional[float]:
        """Squared cosine of two sentence vectors, None if either is absent."""
        vec1 = self.get_vec(sentence1)
        vec2 = self.get_vec(sentence2)
        if vec1 is None or vec2 is None:
            return None
        return vec1.cosine(vec2)

    def __repr__(self) -> str:
        return f"Sentence2Vec(provider={self.provider!r})"
