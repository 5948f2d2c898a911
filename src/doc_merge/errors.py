"""Exceptions raised while merging documentation sites."""

from pathlib import Path


class DocMergeError(Exception):
    """Base class for every fatal merge condition."""


class ConfigurationError(DocMergeError, ValueError):
    """Raised for bad source or destination paths and bad merge options."""


class IndexFormatError(DocMergeError, ValueError):
    """Raised when a search index file is missing or cannot be decoded."""

    def __init__(self, path: Path | str, reason: str) -> None:
        """Initialise the error.

        Args:
            path: Search index file (or a label for in-memory text).
            reason: What was wrong with it.
        """
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")
