"""Binary store format for sentence2vec.

Layout (little-endian)::

    magic    4 bytes  b"S2VB"
    version  u16
    dim      u32      vector dimension D, >= 1
    count    u64      number of entries
    entries  count x (u32 byte length, UTF-8 word, D x float32)

Entries are written in sorted word order, so equal stores encode to equal
bytes.
"""

from __future__ import annotations

import logging
import os
import stat
import struct
import tempfile
import threading
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple, Union

import numpy as np

from .exceptions import DeserializationError, VectorIOError
from .types import WordVec

logger = logging.getLogger(__name__)

MAGIC = b"S2VB"
VERSION = 1

_HEADER = struct.Struct("<4sHIQ")
_WORD_LEN = struct.Struct("<I")
_FLOAT = np.dtype("<f4")
_UMASK_LOCK = threading.Lock()

PathLike = Union[str, "os.PathLike[str]"]


# ---------------------------------------------------------------------------
# Encode / decode
# ---------------------------------------------------------------------------


def encode(word_vecs: Mapping[str, WordVec], dim: int) -> bytes:
    """Serialise a word -> WordVec mapping of dimension ``dim``."""
    if dim < 1:
        raise ValueError(f"dim must be >= 1, got {dim}")
    parts = [_HEADER.pack(MAGIC, VERSION, dim, len(word_vecs))]
    for word in sorted(word_vecs):
        vec = word_vecs[word]
        if vec.dim != dim:
            raise ValueError(
                f"Vector of {word!r} has dim {vec.dim}, expected {dim}."
            )
        raw = word.encode("utf-8")
        parts.append(_WORD_LEN.pack(len(raw)))
        parts.append(raw)
        parts.append(vec.vec.astype(_FLOAT, copy=False).tobytes())
    return b"".join(parts)


def decode(
    data: bytes,
    expected_dim: Optional[int] = None,
    source: Optional[str] = None,
) -> Tuple[int, Dict[str, WordVec]]:
    """Parse bytes produced by :func:`encode`.

    Returns
    -------
    (dim, word_vecs)

    Raises
    ------
    DeserializationError if the bytes do not match the schema.
    """

    def fail(message: str) -> DeserializationError:
        where = f" in {source}" if source else ""
        return DeserializationError(f"{message}{where}", path=source)

    view = memoryview(data)
    if len(view) < _HEADER.size:
        raise fail("Truncated header")
    magic, version, dim, count = _HEADER.unpack_from(view, 0)
    if magic != MAGIC:
        raise fail(f"Bad magic {bytes(magic)!r}")
    if version != VERSION:
        raise fail(f"Unsupported format version {version}")
    if dim < 1:
        raise fail("Dimension must be >= 1")
    if expected_dim is not None and dim != expected_dim:
        raise fail(f"Dimension mismatch: expected {expected_dim}, got {dim}")

    vec_size = dim * _FLOAT.itemsize
    # Smallest possible entry is a 1-byte word; reject absurd counts early.
    if count > (len(view) - _HEADER.size) // (_WORD_LEN.size + 1 + vec_size):
        raise fail(f"Entry count {count} exceeds payload size")

    word_vecs: Dict[str, WordVec] = {}
    offset = _HEADER.size
    for _ in range(count):
        if offset + _WORD_LEN.size > len(view):
            raise fail("Truncated entry")
        (length,) = _WORD_LEN.unpack_from(view, offset)
        offset += _WORD_LEN.size
        end = offset + length + vec_size
        if length == 0:
            raise fail("Empty word")
        if end > len(view):
            raise fail("Truncated entry")
        try:
            word = bytes(view[offset:offset + length]).decode("utf-8")
        except UnicodeDecodeError:
            raise fail("Word is not valid UTF-8") from None
        offset += length
        if word in word_vecs:
            raise fail(f"Duplicate word {word!r}")
        arr = np.frombuffer(view[offset:end], dtype=_FLOAT).astype(np.float32)
        word_vecs[word] = WordVec(arr, dim=dim)
        offset = end

    if offset != len(view):
        raise fail(f"{len(view) - offset} trailing bytes")
    return dim, word_vecs


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------


def read_file(
    path: PathLike,
    expected_dim: Optional[int] = None,
) -> Tuple[int, Dict[str, WordVec]]:
    """Read and decode a binary store file."""
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise VectorIOError(f"Cannot read {path}: {e}", path=str(path)) from e
    return decode(data, expected_dim=expected_dim, source=str(path))


def write_file(path: PathLike, word_vecs: Mapping[str, WordVec], dim: int) -> Path:
    """Encode and write a binary store file.

    The bytes go to a temporary file in the same directory which is then
    renamed over ``path``, so a failed write never leaves a truncated store.
    """
    path = Path(path)
    payload = encode(word_vecs, dim)
    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
        with os.fdopen(fd, "wb") as f:
            f.write(payload)
        os.chmod(tmp_name, _file_mode(path))
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise VectorIOError(f"Cannot write {path}: {e}", path=str(path)) from e
    logger.debug("Wrote %d entries to %s", len(word_vecs), path)
    return path


def _file_mode(path: Path) -> int:
    """Mode for a new store: the existing file's mode, else 0o666 minus umask."""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        pass
    with _UMASK_LOCK:
        umask = os.umask(0)
        os.umask(umask)
    return 0o666 & ~umask
