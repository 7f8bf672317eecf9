"""sentence2vec command line.

Subcommands:
    convert     text corpus -> binary store
    extract     binary store + word list -> smaller binary store
    partition   binary store -> word2vec/<folder>/<file>.bin tree
    similarity  cosine of two sentences over a binary store

Examples:
    sentence2vec convert cc.en.300.vec cc.en.300.bin --dim 300
    sentence2vec extract cc.en.300.bin wordlist.txt common.en.300.bin
    sentence2vec partition cc.en.300.bin shards/ --files 1000 --folders 30
    sentence2vec similarity common.en.300.bin "I love apples." "I love pears"
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import Settings
from .exceptions import Word2VecError
from .log import configure_logging
from .sentence2vec import Sentence2Vec
from .word2vec import Word2Vec

logger = logging.getLogger(__name__)


def _cmd_convert(args: argparse.Namespace, settings: Settings) -> int:
    store = Word2Vec.load_from_txt(args.source, dim=args.dim)
    store.save_to_bytes(args.dest)
    logger.info("Saved %r to %s", store, args.dest)
    return 0


def _cmd_extract(args: argparse.Namespace, settings: Settings) -> int:
    store = Word2Vec.load_from_bytes(args.model, dim=args.dim)
    subset = store.get_subset_from_wordlist(args.wordlist)
    subset.save_to_bytes(args.dest)
    logger.info("Kept %d of %d words", len(subset), len(store))
    return 0


def _cmd_partition(args: argparse.Namespace, settings: Settings) -> int:
    store = Word2Vec.load_from_bytes(args.model, dim=args.dim)
    workers = args.workers if args.workers is not None else settings.max_workers
    plan = store.partition(args.dest, args.files, args.folders, max_workers=workers)
    print(f"{len(plan.shards)} files in {len(plan.folders)} folders")
    return 0


def _cmd_similarity(args: argparse.Namespace, settings: Settings) -> int:
    store = Word2Vec.load_from_bytes(args.model, dim=args.dim)
    score = Sentence2Vec(store).cosine(args.sentence1, args.sentence2)
    if score is None:
        print("No known word in one of the sentences.")
        return 2
    print(f"{score:.6f}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sentence2vec",
        description="Word-vector store: convert, extract, partition and compare.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: $SENTENCE2VEC_LOG_LEVEL or WARNING)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("convert", help="Convert a text corpus to a binary store")
    p.add_argument("source", help="Text corpus (header line, then 'word f1 ... fD')")
    p.add_argument("dest", help="Binary store to write")
    p.add_argument("--dim", type=int, default=None, help="Expected vector dimension")
    p.set_defaults(func=_cmd_convert)

    p = sub.add_parser("extract", help="Keep only the words of a word list")
    p.add_argument("model", help="Binary store")
    p.add_argument("wordlist", help="One word per line")
    p.add_argument("dest", help="Binary store to write")
    p.add_argument("--dim", type=int, default=None, help="Expected vector dimension")
    p.set_defaults(func=_cmd_extract)

    p = sub.add_parser("partition", help="Shard a binary store into folders and files")
    p.add_argument("model", help="Binary store")
    p.add_argument("dest", help="Destination directory")
    p.add_argument("--files", type=int, required=True, help="Number of files")
    p.add_argument("--folders", type=int, required=True, help="Number of folders")
    p.add_argument("--workers", type=int, default=None, help="Parallel shard writers")
    p.add_argument("--dim", type=int, default=None, help="Expected vector dimension")
    p.set_defaults(func=_cmd_partition)

    p = sub.add_parser("similarity", help="Cosine similarity of two sentences")
    p.add_argument("model", help="Binary store")
    p.add_argument("sentence1")
    p.add_argument("sentence2")
    p.add_argument("--dim", type=int, default=None, help="Expected vector dimension")
    p.set_defaults(func=_cmd_similarity)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env()
        if args.log_level:
            settings = Settings(log_level=args.log_level, max_workers=settings.max_workers)
    except Word2VecError as e:
        parser.error(str(e))
    configure_logging(settings.log_level_no)

    try:
        return args.func(args, settings)
    except Word2VecError as e:
        logger.error("%s: %s", type(e).__name__, e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
