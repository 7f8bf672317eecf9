"""Partitioning of a Word2Vec store into a folder / file tree.

Words are sorted, then walked in order. A new folder starts every
``N // n_folders`` words and the pending words are flushed to a file every
``N // n_files`` words and at the last word. Folders are named after their
first word, files after the word at which they are flushed. The remainder
of both integer divisions ends up in the last group.

Layout::

    <dist>/word2vec/<folder word>/<file word>.bin
"""

from __future__ import annotations

import logging
import os
import threading
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Tuple

from . import codec
from .config import PARTITION_ROOT, SHARD_EXTENSION
from .exceptions import InvalidArgumentError, VectorIOError
from .types import WordVec

if TYPE_CHECKING:
    from .word2vec import Word2Vec

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Plan
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ShardSpec:
    """One output file: its folder, its name and the words it holds."""

    folder: str
    name: str
    words: Tuple[str, ...]

    def relpath(self, extension: str = SHARD_EXTENSION) -> Path:
        return Path(self.folder) / f"{self.name}{extension}"


@dataclass
class PartitionPlan:
    """Assignment of every word to exactly one (folder, file) pair."""

    words_per_folder: int
    words_per_file: int
    folders: List[str] = field(default_factory=list)
    shards: List[ShardSpec] = field(default_factory=list)

    def shard_for(self, word: str) -> Optional[ShardSpec]:
        for shard in self.shards:
            if word in shard.words:
                return shard
        return None

    @property
    def word_count(self) -> int:
        return sum(len(s.words) for s in self.shards)


def _is_boundary(i: int, step: int) -> bool:
    # A step of 0 (fewer words than groups) only opens a group at the start.
    if step == 0:
        return i == 0
    return i % step == 0


def _check_count(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"{name} must be an integer, got {value!r}.")
    if value < 1:
        raise InvalidArgumentError(f"{name} must be >= 1, got {value}.")


def _check_name(word: str) -> None:
    seps = {"/", "\0", os.sep}
    if os.altsep:
        seps.add(os.altsep)
    if word in ("", ".", "..") or any(s in word for s in seps):
        raise InvalidArgumentError(
            f"Word {word!r} cannot be used as a file or folder name."
        )


def plan_partition(words: Iterable[str], n_files: int, n_folders: int) -> PartitionPlan:
    """Compute the folder / file assignment without touching the filesystem.

    Parameters
    ----------
    words     : the store's words, in any order.
    n_files   : number of files to aim for (>= 1).
    n_folders : number of folders to aim for (>= 1).

    Raises
    ------
    InvalidArgumentError for counts below 1 or words unusable as path names.
    """
    _check_count("n_files", n_files)
    _check_count("n_folders", n_folders)

    ordered = sorted(words)
    total = len(ordered)
    plan = PartitionPlan(
        words_per_folder=total // n_folders,
        words_per_file=total // n_files,
    )

    folder = ""
    pending: List[str] = []
    for i, word in enumerate(ordered):
        if _is_boundary(i, plan.words_per_folder):
            _check_name(word)
            folder = word
            plan.folders.append(folder)

        pending.append(word)

        if _is_boundary(i, plan.words_per_file) or i == total - 1:
            _check_name(word)
            plan.shards.append(ShardSpec(folder, word, tuple(pending)))
            pending = []
    return plan


# ---------------------------------------------------------------------------
# Partition
# ---------------------------------------------------------------------------


def partition(
    store: "Word2Vec",
    dist,
    n_files: int,
    n_folders: int,
    max_workers: Optional[int] = None,
    root_dirname: str = PARTITION_ROOT,
    extension: str = SHARD_EXTENSION,
) -> PartitionPlan:
    """Write ``store`` as a tree of binary stores under ``dist/word2vec``.

    Parameters
    ----------
    store       : the store to shard.
    dist        : destination directory.
    n_files     : number of files to aim for.
    n_folders   : number of folders to aim for.
    max_workers : if > 1, shard files are written by a thread pool of that
                  size; the plan, and therefore the output, is the same.

    Returns
    -------
    The PartitionPlan that was written.

    Raises
    ------
    InvalidArgumentError before any write if a count is below 1.
    VectorIOError naming the failing path. Files written before the failure
    are left on disk.
    """
    if max_workers is not None:
        _check_count("max_workers", max_workers)

    logger.info("Partitioning into %d folders and %d files", n_folders, n_files)
    logger.info("Sorting %d words", len(store))
    plan = plan_partition(store, n_files, n_folders)
    logger.info("Done sorting")

    root = Path(dist) / root_dirname
    _mkdir(root)
    for folder in plan.folders:
        _mkdir(root / folder)
        logger.debug("Created folder %s", root / folder)

    failed = threading.Event()

    def write(shard: ShardSpec) -> Optional[Path]:
        # Shards not yet started when another write failed are skipped.
        if failed.is_set():
            return None
        entries: Dict[str, WordVec] = {w: store.get_vec(w) for w in shard.words}
        try:
            path = codec.write_file(root / shard.relpath(extension), entries, store.dim)
        except Exception:
            failed.set()
            raise
        logger.debug("Created file %s", path)
        return path

    if max_workers is None or max_workers == 1:
        for shard in plan.shards:
            write(shard)
    else:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            futures = [pool.submit(write, shard) for shard in plan.shards]
            done, pending = wait(futures, return_when=FIRST_EXCEPTION)
            for future in pending:
                future.cancel()
            for future in futures:
                if future in done:
                    future.result()

    logger.info(
        "Wrote %d files in %d folders under %s",
        len(plan.shards), len(plan.folders), root,
    )
    return plan


def _mkdir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise VectorIOError(f"Cannot create directory {path}: {e}", path=str(path)) from e
