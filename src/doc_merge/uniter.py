"""Copies per-crate page trees into the merged site."""

import logging
import shutil
from collections.abc import Iterable
from pathlib import Path

from doc_merge.errors import ConfigurationError

logger = logging.getLogger(__name__)


def unite_directory(src: Path, dest: Path, asset_suffixes: Iterable[str]) -> int:
    """Copy a documentation root's directories and asset files into ``dest``.

    Subdirectories are copied recursively and top-level files only when their
    suffix is listed in ``asset_suffixes``. Generated ``.js`` data such as
    search-index.js is never in that list; it is merged, not copied.
    Existing files are overwritten.

    Args:
        src: Source documentation root, e.g. ``target/doc``.
        dest: Existing destination root.
        asset_suffixes: File suffixes copied from the top level of ``src``.

    Returns:
        Number of top-level entries copied.

    Raises:
        ConfigurationError: If either root is missing.
    """
    if not src.is_dir():
        msg = f"Source documentation not found at {src}. Did you run `cargo doc`?"
        raise ConfigurationError(msg)
    if not dest.is_dir():
        msg = f"Destination directory {dest} is missing"
        raise ConfigurationError(msg)

    suffixes = {suffix.lower() for suffix in asset_suffixes}
    copied = 0
    for entry in sorted(src.iterdir()):
        target = dest / entry.name
        if entry.is_dir():
            shutil.copytree(entry, target, dirs_exist_ok=True)
        elif entry.is_file() and entry.suffix.lower() in suffixes:
            # A symlinked entry point would otherwise be written through.
            if target.is_symlink():
                target.unlink()
            shutil.copy2(entry, target)
        else:
            logger.debug("Skipping %s", entry)
            continue
        logger.debug("Copied %s", entry)
        copied += 1

    logger.info("Copied %d entries from %s", copied, src)
    return copied
