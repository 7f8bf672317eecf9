"""Unit tests for sentence2vec.similarity."""

import logging
import math

import numpy as np
import pytest

from sentence2vec.similarity import dot_product, squared_cosine, squared_norm


def test_dot_product_known():
    a = np.array([1.0, 2.0, 3.0], dtype=np.float32)
    b = np.array([4.0, 5.0, 6.0], dtype=np.float32)
    assert dot_product(a, b) == pytest.approx(32.0)


def test_squared_norm_known():
    assert squared_norm(np.array([3.0, 4.0], dtype=np.float32)) == pytest.approx(25.0)


def test_squared_cosine_identical():
    a = np.array([0.1, 0.2, 0.3], dtype=np.float32)
    assert squared_cosine(a, a) == 1.0


def test_squared_cosine_orthogonal():
    a = np.array([1.0, 0.0], dtype=np.float32)
    b = np.array([0.0, 1.0], dtype=np.float32)
    assert squared_cosine(a, b) == 0.0


def test_squared_cosine_discards_sign():
    a = np.array([1.0, 0.0], dtype=np.float32)
    b = np.array([-1.0, 0.0], dtype=np.float32)
    assert squared_cosine(a, b) == pytest.approx(1.0)


def test_squared_cosine_is_square_of_cosine():
    a = np.array([1.0, 2.0, 3.0], dtype=np.float32)
    b = np.array([-2.0, 0.5, 1.0], dtype=np.float32)
    cos = float(np.dot(a, b) / (np.linalg.norm(a) * np.linalg.norm(b)))
    assert squared_cosine(a, b) == pytest.approx(cos ** 2, rel=1e-5)


def test_squared_cosine_zero_norm(caplog):
    a = np.zeros(3, dtype=np.float32)
    b = np.ones(3, dtype=np.float32)
    with caplog.at_level(logging.WARNING, logger="sentence2vec.similarity"):
        assert math.isnan(squared_cosine(a, b))
    assert "norm of a vector is 0" in caplog.text
