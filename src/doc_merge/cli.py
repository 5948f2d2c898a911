"""Command-line interface for doc-merge."""

import argparse
import logging
import sys
from pathlib import Path

from doc_merge import __version__
from doc_merge.errors import DocMergeError
from doc_merge.indexer import DocSiteMerger
from doc_merge.models import DEFAULT_ASSET_SUFFIXES, MergeOptions

logger = logging.getLogger("doc_merge")

DEFAULT_SOURCE = Path("target/doc")


def configure_logging(verbosity: int = 0) -> None:
    """Send log records to stderr.

    Args:
        verbosity: Negative for warnings only, 0 for info, positive for debug.
    """
    if verbosity < 0:
        level = logging.WARNING
    elif verbosity > 0:
        level = logging.DEBUG
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", stream=sys.stderr, force=True)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="doc-merge",
        description="Merge individual cargo doc sites into a shared rustdoc site.",
    )
    parser.add_argument(
        "--src",
        action="append",
        type=Path,
        help=f"Documentation to merge in; repeat for each source (default: ./{DEFAULT_SOURCE})",
    )
    parser.add_argument(
        "--dest",
        required=True,
        type=Path,
        help="Root of the shared rustdoc site",
    )
    parser.add_argument(
        "--index-crate",
        help="Crate whose index.html becomes the site's entry point",
    )
    parser.add_argument(
        "--create-dest",
        action="store_true",
        help="Create the destination directory if it does not exist",
    )
    parser.add_argument(
        "--asset-suffix",
        action="append",
        default=[],
        metavar="SUFFIX",
        help="Extra top-level file suffix to copy, e.g. .txt (repeatable)",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_const", const=1, dest="verbosity", default=0)
    verbosity.add_argument("-q", "--quiet", action="store_const", const=-1, dest="verbosity")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run doc-merge.

    Args:
        argv: Arguments without the program name, ``sys.argv[1:]`` if omitted.

    Returns:
        Process exit status.
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.verbosity)

    extra_suffixes = tuple(s if s.startswith(".") else f".{s}" for s in args.asset_suffix)
    options = MergeOptions(
        sources=tuple(args.src or [DEFAULT_SOURCE]),
        dest=args.dest,
        index_crate=args.index_crate,
        create_dest=args.create_dest,
        asset_suffixes=DEFAULT_ASSET_SUFFIXES + extra_suffixes,
    )

    try:
        result = DocSiteMerger().merge(options)
    except (DocMergeError, OSError) as exc:
        logger.error("Fatal: %s", exc)
        return 1

    logger.info("Merged %d crates into %s", len(result.crates), options.dest)
    return 0


if __name__ == "__main__":
    sys.exit(main())
