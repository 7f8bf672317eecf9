"""Exceptions raised by sentence2vec.

"Word not found" and "no sentence word matched" are never errors: lookups
return ``None`` for those cases.
"""

from __future__ import annotations

from typing import Optional


class Word2VecError(Exception):
    """Base exception for all sentence2vec errors."""
    pass


class FormatError(Word2VecError, ValueError):
    """
    A line of a text corpus could not be parsed.

    Raised when:
    - a data line does not hold exactly D + 1 tokens
    - a component token is not a float
    """

    def __init__(self, message: str, path: Optional[str] = None, line_no: Optional[int] = None):
        super().__init__(message)
        self.path = path
        self.line_no = line_no


class DeserializationError(Word2VecError, ValueError):
    """
    A binary store does not match the expected schema.

    Raised when:
    - magic bytes or format version are wrong
    - the payload is truncated or has trailing bytes
    - the stored dimension differs from the expected one
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class VectorIOError(Word2VecError, OSError):
    """Opening, reading, writing or creating a file or directory failed."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class InvalidArgumentError(Word2VecError, ValueError):
    """A parameter is unusable, e.g. a partition count of zero."""
    pass
