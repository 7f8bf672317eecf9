"""Word2Vec — in-memory word -> vector store.

Public API
----------
Word2Vec
    .load_from_txt()            — parse a text corpus (header + ``word f1 … fD``)
    .load_from_bytes()          — load a binary store written by save_to_bytes
    .from_word_vecs()           — build from an existing mapping
    .save_to_bytes()            — write the binary store (atomic rename)
    .get_vec()                  — lookup, None when absent
    .cosine()                   — squared cosine of two words
    .get_subset()               — new store restricted to a word list
    .get_subset_from_wordlist() — same, word list read from a file
    .partition()                — shard into a folder / file tree
    .stats()                    — live statistics dict
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from . import codec
from .exceptions import FormatError, VectorIOError
from .partition import PartitionPlan, partition
from .types import VectorLike, WordVec

logger = logging.getLogger(__name__)


class Word2Vec:
    """Mapping from word to a WordVec of fixed dimension.

    Every vector held by the store has exactly ``dim`` components; this is
    checked on every insertion path (constructor, text and binary loading).
    Stores are not mutated after construction: subsets and shards are new,
    independent stores.

    Parameters
    ----------
    dim : int
        Dimensionality of all vectors in the store.
    word_vecs : mapping, optional
        Initial word -> vector entries. Plain sequences and arrays are
        converted to WordVec.
    """

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def __init__(
        self,
        dim: int,
        word_vecs: Optional[Mapping[str, VectorLike]] = None,
    ) -> None:
        if dim < 1:
            raise ValueError(f"dim must be >= 1, got {dim}")
        self.dim: int = dim
        self._word_vecs: Dict[str, WordVec] = {}
        for word, vec in (word_vecs or {}).items():
            self._word_vecs[self._validate_word(word)] = self._validate(vec)

    @classmethod
    def from_word_vecs(
        cls,
        word_vecs: Mapping[str, VectorLike],
        dim: Optional[int] = None,
    ) -> "Word2Vec":
        """Build a store from a mapping, inferring ``dim`` when omitted."""
        if dim is None:
            if not word_vecs:
                raise ValueError("Cannot infer dim from an empty mapping.")
            dim = len(next(iter(word_vecs.values())))
        return cls(dim, word_vecs)

    @classmethod
    def load_from_txt(cls, path, dim: Optional[int] = None) -> "Word2Vec":
        """Load a store from a text corpus.

        The first line is a header (word count and dimension) and is ignored.
        Every following line is ``word f1 f2 ... fD``. Blank lines are skipped.
        Any other line that does not hold exactly ``dim + 1`` tokens, or whose
        components are not floats, fails the whole load.

        Parameters
        ----------
        path : text file path.
        dim  : expected dimension; inferred from the first data line if omitted.

        Raises
        ------
        FormatError   on the first malformed line.
        VectorIOError if the file cannot be opened or read.
        """
        source = str(path)
        word_vecs: Dict[str, WordVec] = {}
        line_no = 0
        try:
            with open(path, "rb") as f:
                next(f, None)
                for line_no, raw in enumerate(f, start=2):
                    tokens = raw.decode("utf-8").split()
                    if not tokens:
                        continue
                    if dim is None:
                        dim = len(tokens) - 1
                        if dim < 1:
                            raise FormatError(
                                f"{source}:{line_no}: line has no vector components",
                                path=source, line_no=line_no,
                            )
                    word, vec = _parse_line(tokens, dim, source, line_no)
                    if word in word_vecs:
                        logger.debug("Duplicate word %r at %s:%d", word, source, line_no)
                    word_vecs[word] = vec
        except UnicodeDecodeError as e:
            raise FormatError(
                f"{source}:{line_no}: not valid UTF-8 ({e.reason})",
                path=source, line_no=line_no,
            ) from e
        except OSError as e:
            raise VectorIOError(f"Cannot read {source}: {e}", path=source) from e

        if dim is None:
            raise FormatError(f"{source}: no vectors found", path=source)
        logger.info("Loaded %d vectors of dim %d from %s", len(word_vecs), dim, source)
        return cls._from_validated(dim, word_vecs)

    @classmethod
    def load_from_bytes(cls, path, dim: Optional[int] = None) -> "Word2Vec":
        """Load a store written by :meth:`save_to_bytes`.

        Raises
        ------
        DeserializationError if the file does not match the binary format or
                             holds vectors of another dimension than ``dim``.
        VectorIOError        if the file cannot be read.
        """
        file_dim, word_vecs = codec.read_file(path, expected_dim=dim)
        logger.info("Loaded %d vectors of dim %d from %s", len(word_vecs), file_dim, path)
        return cls._from_validated(file_dim, word_vecs)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _validate(self, vec: VectorLike) -> WordVec:
        return WordVec(vec, dim=self.dim)

    @staticmethod
    def _validate_word(word: str) -> str:
        if not isinstance(word, str) or not word:
            raise ValueError(f"Word must be a non-empty string, got {word!r}.")
        return word

    @classmethod
    def _from_validated(cls, dim: int, word_vecs: Dict[str, WordVec]) -> "Word2Vec":
        store = cls(dim)
        store._word_vecs = word_vecs
        return store

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save_to_bytes(self, path) -> Path:
        """Write the store in the binary format.

        Raises
        ------
        VectorIOError on any write failure; the destination is left untouched.
        """
        return codec.write_file(path, self._word_vecs, self.dim)

    def to_bytes(self) -> bytes:
        return codec.encode(self._word_vecs, self.dim)

    @classmethod
    def from_bytes(cls, data: bytes, dim: Optional[int] = None) -> "Word2Vec":
        file_dim, word_vecs = codec.decode(data, expected_dim=dim)
        return cls._from_validated(file_dim, word_vecs)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get_vec(self, word: str) -> Optional[WordVec]:
        """Vector of ``word``, or None if the word is not in the store."""
        return self._word_vecs.get(word)

    def cosine(self, word1: str, word2: str) -> Optional[float]:
        """Squared cosine similarity of two words, None if either is absent."""
        vec1 = self.get_vec(word1)
        vec2 = self.get_vec(word2)
        if vec1 is None or vec2 is None:
            return None
        return vec1.cosine(vec2)

    def words(self) -> List[str]:
        """All words in ascending code-point order."""
        return sorted(self._word_vecs)

    def items(self) -> Iterator[Tuple[str, WordVec]]:
        return iter(self._word_vecs.items())

    # ------------------------------------------------------------------
    # Subsets
    # ------------------------------------------------------------------

    def get_subset(self, words: Iterable[str]) -> "Word2Vec":
        """New store holding the words of ``words`` that are in this store.

        Unknown words and duplicates in ``words`` are ignored.
        """
        subset: Dict[str, WordVec] = {}
        for word in words:
            vec = self._word_vecs.get(word)
            if vec is not None:
                subset[word] = vec
        logger.debug("Subset keeps %d of %d words", len(subset), len(self))
        return self._from_validated(self.dim, subset)

    def get_subset_from_wordlist(self, path) -> "Word2Vec":
        """Like :meth:`get_subset`, with one word per line read from ``path``.

        Raises
        ------
        VectorIOError if the word list cannot be opened or read.
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                words = [line.strip() for line in f]
        except (OSError, UnicodeDecodeError) as e:
            raise VectorIOError(f"Cannot read word list {path}: {e}", path=str(path)) from e
        return self.get_subset(w for w in words if w)

    # ------------------------------------------------------------------
    # Partition
    # ------------------------------------------------------------------

    def partition(
        self,
        dist,
        n_files: int,
        n_folders: int,
        max_workers: Optional[int] = None,
    ) -> PartitionPlan:
        """Shard the store into ``n_folders`` folders and ``n_files`` files.

        See :func:`sentence2vec.partition.partition`.
        """
        return partition(self, dist, n_files, n_folders, max_workers=max_workers)

    # ------------------------------------------------------------------
    # Stats
    # ------------------------------------------------------------------

    def stats(self) -> Dict[str, Any]:
        """Return live statistics for the store."""
        return {
            "dim": self.dim,
            "word_count": len(self._word_vecs),
            "bytes_per_vector": self.dim * 4,
        }

    def __len__(self) -> int:
        return len(self._word_vecs)

    def __contains__(self, word: object) -> bool:
        return word in self._word_vecs

    def __iter__(self) -> Iterator[str]:
        return iter(self._word_vecs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Word2Vec):
            return NotImplemented
        return self.dim == other.dim and self._word_vecs == other._word_vecs

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        s = self.stats()
        return f"Word2Vec(dim={s['dim']} words={s['word_count']})"


def _parse_line(tokens: List[str], dim: int, source: str, line_no: int) -> Tuple[str, WordVec]:
    if len(tokens) != dim + 1:
        raise FormatError(
            f"{source}:{line_no}: vector of {tokens[0]!r} has "
            f"{len(tokens) - 1} components, expected {dim}",
            path=source, line_no=line_no,
        )
    # float() also accepts digit separators such as "1_0".
    bad = next((t for t in tokens[1:] if "_" in t), None)
    if bad is not None:
        raise FormatError(
            f"{source}:{line_no}: could not convert string to float: {bad!r}",
            path=source, line_no=line_no,
        )
    try:
        values = [float(t) for t in tokens[1:]]
    except ValueError as e:
        raise FormatError(f"{source}:{line_no}: {e}", path=source, line_no=line_no) from e
    return tokens[0], WordVec(values, dim=dim)
