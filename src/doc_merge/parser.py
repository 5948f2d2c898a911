"""Parser for rustdoc search-index.js files."""

import json
import logging
import re
from pathlib import Path
from typing import Any

from doc_merge.errors import IndexFormatError
from doc_merge.models import INDEX_FORMATS, UNIT_NAME_PATTERN, IndexFormat, SearchIndex

logger = logging.getLogger(__name__)

# Body of a single-quoted JavaScript string literal, up to the closing quote.
_LITERAL_BODY = re.compile(r"(?:[^'\\\r\n]+|\\(?:\r\n|[\s\S]))*")

_ESCAPE = re.compile(r"\\(u[0-9A-Fa-f]{4}|x[0-9A-Fa-f]{2}|\r\n|[\s\S])")

_SIMPLE_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
    "\n": "",
    "\r\n": "",
}


class SearchIndexParser:
    """Decodes the per-crate records embedded in a rustdoc search index."""

    SEARCH_INDEX_FILE = "search-index.js"

    def parse_file(self, root: Path) -> SearchIndex:
        """Read and decode the search index of a documentation root.

        Args:
            root: Directory holding ``search-index.js``.

        Returns:
            SearchIndex with one record per crate.

        Raises:
            IndexFormatError: If the file is missing, unreadable as UTF-8 or
                not in a supported format.
        """
        path = root / self.SEARCH_INDEX_FILE
        if not path.is_file():
            raise IndexFormatError(path, "search index not found. Did you run `cargo doc`?")

        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise IndexFormatError(path, f"not valid UTF-8 ({exc.reason})") from exc

        search_index = self.parse_text(text, source=path)
        logger.debug("Parsed %d crates from %s", len(search_index.records), path)
        return search_index

    def parse_text(self, text: str, source: Path | str = "<string>") -> SearchIndex:
        """Decode search index text.

        Args:
            text: Full contents of a search-index.js file.
            source: Path (or label) used in error messages.

        Returns:
            SearchIndex with one record per crate.

        Raises:
            IndexFormatError: If the text is not in a supported format.
        """
        index_format = self._detect_format(text, source)
        literal = self._unwrap(text, index_format, source)
        payload = self._unescape(literal, source)

        try:
            data = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise IndexFormatError(source, f"invalid JSON payload: {exc}") from exc

        records = self._collect_records(data, index_format, source)
        return SearchIndex(source=Path(source), index_format=index_format, records=records)

    def _detect_format(self, text: str, source: Path | str) -> IndexFormat:
        """Pick the wrapper format whose prefix the text starts with.

        Args:
            text: Search index text.
            source: Path used in error messages.

        Returns:
            Matching IndexFormat.
        """
        for index_format in INDEX_FORMATS:
            if text.startswith(index_format.prefix):
                return index_format
        raise IndexFormatError(source, "unrecognised search index wrapper")

    def _unwrap(self, text: str, index_format: IndexFormat, source: Path | str) -> str:
        """Return the raw (still escaped) string literal between the wrappers.

        Args:
            text: Search index text.
            index_format: Format detected from the prefix.
            source: Path used in error messages.

        Returns:
            Body of the JavaScript string literal.
        """
        start = len(index_format.prefix)
        match = _LITERAL_BODY.match(text, start)
        end = match.end() if match else start
        if text[end : end + 1] != "'":
            raise IndexFormatError(source, "unterminated string literal")

        suffix = index_format.suffix.rstrip()
        if not text.startswith(suffix, end):
            raise IndexFormatError(source, "unexpected text after the search index payload")

        # Newer generators append a "//{...}" comment; blank and comment lines are dropped.
        for line in text[end + len(suffix) :].splitlines():
            stripped = line.strip()
            if stripped and not stripped.startswith("//"):
                raise IndexFormatError(source, "unexpected text after the search index payload")

        return text[start:end]

    def _unescape(self, literal: str, source: Path | str) -> str:
        """Resolve JavaScript escape sequences and line continuations.

        Args:
            literal: Body of a single-quoted JavaScript string.
            source: Path used in error messages.

        Returns:
            The string value the JavaScript engine would see.
        """

        def replace(match: re.Match[str]) -> str:
            escaped = match.group(1)
            if escaped in _SIMPLE_ESCAPES:
                return _SIMPLE_ESCAPES[escaped]
            if len(escaped) > 1:
                return chr(int(escaped[1:], 16))
            if escaped in "ux":
                raise IndexFormatError(source, f"malformed \\{escaped} escape")
            return escaped

        return _ESCAPE.sub(replace, literal)

    def _collect_records(self, data: Any, index_format: IndexFormat, source: Path | str) -> dict[str, Any]:
        """Turn the decoded payload into a name-to-record mapping.

        Args:
            data: Decoded JSON payload.
            index_format: Format the payload was wrapped in.
            source: Path used in error messages.

        Returns:
            Mapping from crate name to its opaque record, in file order.
        """
        if index_format.uses_pairs:
            if not isinstance(data, list):
                raise IndexFormatError(source, "payload is not a list of [name, record] pairs")
            pairs = []
            for entry in data:
                if not isinstance(entry, list) or len(entry) != 2:
                    raise IndexFormatError(source, f"malformed entry: {str(entry)[:60]}")
                pairs.append((entry[0], entry[1]))
        else:
            if not isinstance(data, dict):
                raise IndexFormatError(source, "payload is not an object")
            pairs = list(data.items())

        records: dict[str, Any] = {}
        for name, record in pairs:
            if not isinstance(name, str) or not UNIT_NAME_PATTERN.match(name):
                raise IndexFormatError(source, f"invalid crate name: {name!r}")
            if name in records:
                raise IndexFormatError(source, f"duplicate crate name: {name}")
            records[name] = record
        return records
