"""Creates the merged site's index.html entry point."""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

ENTRY_POINT_FILE = "index.html"


def link_entry_point(dest: Path, unit_name: str) -> Path:
    """Point ``dest/index.html`` at one crate's own index page.

    Any existing entry point, including a dangling symlink, is removed
    first. The link is relative so the site can be moved.

    Args:
        dest: Destination documentation root.
        unit_name: Crate whose index page becomes the entry point.

    Returns:
        Path of the entry point link.
    """
    entry_point = dest / ENTRY_POINT_FILE
    if entry_point.is_symlink() or entry_point.exists():
        entry_point.unlink()
        logger.debug("Removed existing %s", entry_point)

    target = Path(unit_name) / ENTRY_POINT_FILE
    os.symlink(target, entry_point)
    logger.info("Linked %s -> %s", entry_point, target)
    return entry_point
