"""Defaults and environment-driven settings for sentence2vec."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .exceptions import InvalidArgumentError

# --- partition layout ---
PARTITION_ROOT = "word2vec"   # subdirectory created under the destination
SHARD_EXTENSION = ".bin"      # binary store files

# --- logging ---
DEFAULT_LOG_LEVEL = "WARNING"

ENV_LOG_LEVEL = "SENTENCE2VEC_LOG_LEVEL"
ENV_MAX_WORKERS = "SENTENCE2VEC_MAX_WORKERS"


@dataclass(frozen=True)
class Settings:
    """Runtime settings, overridable from the environment."""

    log_level: str = DEFAULT_LOG_LEVEL
    max_workers: Optional[int] = None

    def __post_init__(self) -> None:
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise InvalidArgumentError(f"Unknown log level {self.log_level!r}.")
        if self.max_workers is not None and self.max_workers < 1:
            raise InvalidArgumentError(
                f"max_workers must be >= 1, got {self.max_workers}."
            )

    @property
    def log_level_no(self) -> int:
        return logging.getLevelName(self.log_level.upper())

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        workers = env.get(ENV_MAX_WORKERS)
        if workers is not None:
            try:
                max_workers: Optional[int] = int(workers)
            except ValueError:
                raise InvalidArgumentError(
                    f"{ENV_MAX_WORKERS} must be an integer, got {workers!r}."
                ) from None
        else:
            max_workers = None
        return cls(
            log_level=env.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL),
            max_workers=max_workers,
        )
