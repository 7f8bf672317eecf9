"""Core record types for sentence2vec.

WordVec        — immutable fixed-length float32 word vector.
VectorProvider — anything that answers ``get_vec(word)`` with an optional
                 WordVec (a Word2Vec store, a remote lookup service, ...).
"""

from __future__ import annotations

from typing import List, Optional, Protocol, Sequence, Union, runtime_checkable

import numpy as np

from .similarity import squared_cosine

DTYPE = np.float32

VectorLike = Union["WordVec", Sequence[float], np.ndarray]


# ---------------------------------------------------------------------------
# WordVec
# ---------------------------------------------------------------------------


class WordVec:
    """Word vector of dimension D.

    The components are stored as a read-only 1-D ``numpy.float32`` array, so
    the length fixed at construction can never change afterwards.

    Parameters
    ----------
    values : sequence of floats or 1-D array.
    dim    : expected dimension; a vector of any other length is rejected.
    """

    __slots__ = ("_vec",)

    def __init__(self, values: VectorLike, dim: Optional[int] = None) -> None:
        if isinstance(values, WordVec):
            arr = values._vec
        else:
            arr = np.array(values, dtype=DTYPE)
        if arr.ndim != 1:
            raise ValueError("WordVec must be a 1-D array.")
        if arr.size == 0:
            raise ValueError("WordVec must not be empty.")
        if dim is not None and arr.size != dim:
            raise ValueError(
                f"WordVec dim mismatch: expected {dim}, got {arr.size}."
            )
        arr.flags.writeable = False
        self._vec = arr

    # ------------------------------------------------------------------

    @property
    def vec(self) -> np.ndarray:
        """Read-only float32 view of the components."""
        return self._vec

    @property
    def dim(self) -> int:
        return int(self._vec.size)

    def tolist(self) -> List[float]:
        return self._vec.tolist()

    def cosine(self, other: "WordVec") -> float:
        """Squared cosine similarity ``dot^2 / (|a|^2 |b|^2)``.

        NaN when either vector has zero norm.
        """
        if other.dim != self.dim:
            raise ValueError(
                f"Cannot compare vectors of dim {self.dim} and {other.dim}."
            )
        return squared_cosine(self._vec, other._vec)

    def __len__(self) -> int:
        return self.dim

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WordVec):
            return NotImplemented
        return self.dim == other.dim and bool(np.array_equal(self._vec, other._vec))

    def __hash__(self) -> int:
        # Adding 0.0 turns -0.0 into 0.0, matching __eq__.
        return hash((self._vec + DTYPE(0.0)).tobytes())

    def __repr__(self) -> str:
        head = ", ".join(f"{x:.4g}" for x in self._vec[:4])
        tail = ", ..." if self.dim > 4 else ""
        return f"WordVec(dim={self.dim} [{head}{tail}])"


# ---------------------------------------------------------------------------
# VectorProvider
# ---------------------------------------------------------------------------


@runtime_checkable
class VectorProvider(Protocol):
    """Source of word vectors used by sentence averaging."""

    def get_vec(self, word: str) -> Optional[WordVec]:
        ...
