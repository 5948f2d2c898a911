"""In-memory merged search index for a combined rustdoc site."""

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from doc_merge.errors import IndexFormatError
from doc_merge.models import UNIT_NAME_PATTERN, SearchIndex

logger = logging.getLogger(__name__)


class MergedIndex:
    """Maps crate names to their search index records.

    Later upserts replace earlier ones, so folding sources in order gives
    "last source wins". Iteration is always in lexicographic name order,
    whatever order the records arrived in.
    """

    def __init__(self) -> None:
        """Initialise an empty index."""
        self._records: dict[str, Any] = {}

    def upsert_unit(self, name: str, record: Any, source: Path | str = "<merged index>") -> None:
        """Insert or replace the record for one crate.

        Args:
            name: Crate name.
            record: Opaque search index record for the crate.
            source: Where the record came from, for error messages.

        Raises:
            IndexFormatError: If the name is not a valid crate name.
        """
        if not UNIT_NAME_PATTERN.match(name):
            raise IndexFormatError(source, f"invalid crate name: {name!r}")
        if name in self._records and self._records[name] != record:
            logger.debug("Replacing search index record for %s", name)
        self._records[name] = record

    def upsert_index(self, search_index: SearchIndex) -> None:
        """Insert or replace every record of a decoded search index.

        Args:
            search_index: Records read from one search-index.js file.
        """
        for name, record in search_index.records.items():
            self.upsert_unit(name, record, search_index.source)
        logger.debug("Merged %d crates from %s", len(search_index.records), search_index.source)

    def unit_names(self) -> list[str]:
        """Return the merged crate names in lexicographic order."""
        return sorted(self._records)

    def items(self) -> Iterator[tuple[str, Any]]:
        """Yield ``(name, record)`` pairs in lexicographic name order."""
        for name in self.unit_names():
            yield name, self._records[name]

    def get_unit_count(self) -> int:
        """Return the number of merged crates."""
        return len(self._records)

    def __contains__(self, name: object) -> bool:
        return name in self._records

    def __len__(self) -> int:
        return len(self._records)
