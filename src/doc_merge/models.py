"""Data models for merged rustdoc sites."""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

# rustdoc normalises crate names, so "-" never reaches the index.
UNIT_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_]+$")


@dataclass(frozen=True)
class IndexFormat:
    """Fixed wrapper text around the JSON payload of a search-index.js file.

    The payload sits in a single-quoted JavaScript string between ``prefix``
    and ``suffix``. ``opening`` and ``closing`` delimit the JSON container;
    each is separated from the entries by a line continuation.
    """

    name: str
    prefix: str
    suffix: str
    opening: str
    closing: str

    @property
    def uses_pairs(self) -> bool:
        """Whether the payload is a list of ``[name, record]`` pairs."""
        return self.opening == "["


MAP_FORMAT = IndexFormat(
    name="map",
    prefix="var searchIndex = new Map(JSON.parse('",
    suffix=(
        "'));\n"
        "if (typeof exports !== 'undefined') exports.searchIndex = searchIndex;\n"
        "else if (window.initSearch) window.initSearch(searchIndex);\n"
    ),
    opening="[",
    closing="]",
)

OBJECT_FORMAT = IndexFormat(
    name="object",
    prefix="var searchIndex = JSON.parse('",
    suffix=(
        "');\n"
        "if (typeof window !== 'undefined' && window.initSearch) {window.initSearch(searchIndex)};\n"
        "if (typeof exports !== 'undefined') {exports.searchIndex = searchIndex};\n"
    ),
    opening="{",
    closing="}",
)

INDEX_FORMATS = (MAP_FORMAT, OBJECT_FORMAT)

DEFAULT_ASSET_SUFFIXES = (".html", ".css", ".svg", ".png", ".ico", ".woff", ".woff2", ".ttf")


@dataclass
class SearchIndex:
    """Index records decoded from one search-index.js file."""

    source: Path
    index_format: IndexFormat
    records: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class MergeOptions:
    """Options for a single merge run."""

    sources: tuple[Path, ...]
    dest: Path
    index_crate: str | None = None
    create_dest: bool = False
    asset_suffixes: tuple[str, ...] = DEFAULT_ASSET_SUFFIXES


@dataclass
class MergeResult:
    """Outcome of a merge run."""

    crates: list[str]
    search_index_path: Path
    crates_path: Path
    copied_entries: int
    entry_point: Path | None = None
