"""sentence2vec — word-vector store and sentence averaging.

Loads a word -> vector table from a text corpus, stores it in a compact
binary format, answers lookups and (squared) cosine queries, averages word
vectors into sentence vectors and shards the table into a folder tree.

Public API::

    from sentence2vec import Word2Vec, WordVec, Sentence2Vec, partition
"""

from .exceptions import (
    DeserializationError,
    FormatError,
    InvalidArgumentError,
    VectorIOError,
    Word2VecError,
)
from .types import VectorProvider, WordVec
from .similarity import squared_cosine
from .word2vec import Word2Vec
from .partition import PartitionPlan, ShardSpec, partition, plan_partition
from .sentence2vec import Sentence2Vec, as_provider, vector_for
from .text import tokenize

__version__ = "0.1.0"
__all__ = [
    "Word2Vec",
    "WordVec",
    "VectorProvider",
    "Sentence2Vec",
    "vector_for",
    "as_provider",
    "tokenize",
    "squared_cosine",
    "partition",
    "plan_partition",
    "PartitionPlan",
    "ShardSpec",
    "Word2VecError",
    "FormatError",
    "DeserializationError",
    "VectorIOError",
    "InvalidArgumentError",
]
