"""Sentence preprocessing."""

from __future__ import annotations

from typing import List


def _is_alnum(c: str) -> bool:
    return c.isalnum()


def trim_non_alnum(text: str) -> str:
    """Strip leading and trailing characters that are not alphanumeric."""
    start, end = 0, len(text)
    while start < end and not _is_alnum(text[start]):
        start += 1
    while end > start and not _is_alnum(text[end - 1]):
        end -= 1
    return text[start:end]


def tokenize(sentence: str) -> List[str]:
    """Lower-case ``sentence``, trim punctuation and split on whitespace.

    >>> tokenize("The Cat!")
    ['the', 'cat']
    """
    sentence = trim_non_alnum(sentence.lower())
    tokens = (trim_non_alnum(word) for word in sentence.split())
    return [t for t in tokens if t]
