"""Similarity metric for sentence2vec.

All functions operate on 1-D numpy float32 arrays.

squared_cosine — ``dot(a, b)^2 / (|a|^2 * |b|^2)``, in [0, 1].

The score is the square of the usual cosine similarity, so opposite vectors
score the same as identical ones. Stored similarity scores depend on this
exact formula.
"""

from __future__ import annotations

import logging

import numpy as np

logger = logging.getLogger(__name__)


def dot_product(a: np.ndarray, b: np.ndarray) -> float:
    """Raw dot product of two vectors."""
    return float(np.dot(a, b))


def squared_norm(a: np.ndarray) -> float:
    return float(np.dot(a, a))


def squared_cosine(a: np.ndarray, b: np.ndarray) -> float:
    """Squared cosine similarity between two vectors.

    Returns NaN (0/0) when either vector has zero norm; a warning is logged
    but nothing is raised.
    """
    dot = dot_product(a, b)
    norm1 = squared_norm(a)
    norm2 = squared_norm(b)
    if norm1 == 0.0 or norm2 == 0.0:
        logger.warning("The norm of a vector is 0; cosine is undefined.")
        return float("nan")
    return float(dot * dot / (norm1 * norm2))
