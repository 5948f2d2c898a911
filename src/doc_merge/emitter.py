"""Writes the merged search-index.js and crates.js files."""

import json
import logging
import os
import re
import tempfile
from pathlib import Path

from doc_merge.database import MergedIndex
from doc_merge.models import IndexFormat

logger = logging.getLogger(__name__)

# Lone surrogates are valid in JSON text but cannot be written as UTF-8.
_SURROGATE = re.compile("[\ud800-\udfff]")


class IndexEmitter:
    """Serialises a merged index in the format rustdoc's search UI loads."""

    SEARCH_INDEX_FILE = "search-index.js"
    CRATES_FILE = "crates.js"

    def encode_search_index(self, merged: MergedIndex, index_format: IndexFormat) -> str:
        """Render the full text of a search-index.js file.

        Args:
            merged: Merged index to serialise.
            index_format: Wrapper format to emit.

        Returns:
            File contents.
        """
        entries = []
        for name, record in merged.items():
            if index_format.uses_pairs:
                entry = self._dump([name, record])
            else:
                entry = f"{self._dump(name)}:{self._dump(record)}"
            entries.append(self._escape(entry))

        literal = f"{index_format.opening}\\\n" + ",\\\n".join(entries) + f"\\\n{index_format.closing}"
        return index_format.prefix + literal + index_format.suffix

    def encode_crate_listing(self, merged: MergedIndex) -> str:
        """Render the full text of a crates.js file.

        Args:
            merged: Merged index whose crate names are listed.

        Returns:
            File contents.
        """
        return f"window.ALL_CRATES = {self._dump(merged.unit_names())};"

    def write(self, dest: Path, merged: MergedIndex, index_format: IndexFormat) -> tuple[Path, Path]:
        """Replace search-index.js and crates.js in a destination root.

        Args:
            dest: Destination documentation root.
            merged: Merged index to write.
            index_format: Wrapper format for search-index.js.

        Returns:
            Paths of the search index and crate listing files.
        """
        search_index_path = dest / self.SEARCH_INDEX_FILE
        crates_path = dest / self.CRATES_FILE

        self._atomic_write(search_index_path, self.encode_search_index(merged, index_format))
        logger.info("Wrote %s with %d crates", search_index_path, merged.get_unit_count())

        self._atomic_write(crates_path, self.encode_crate_listing(merged))
        logger.info("Wrote %s", crates_path)

        return search_index_path, crates_path

    @staticmethod
    def _dump(value: object) -> str:
        """Serialise JSON compactly, as serde_json does for rustdoc."""
        text = json.dumps(value, separators=(",", ":"), ensure_ascii=False)
        return _SURROGATE.sub(lambda match: f"\\u{ord(match.group()):04x}", text)

    @staticmethod
    def _escape(json_text: str) -> str:
        """Escape JSON text for a single-quoted JavaScript string literal."""
        return json_text.replace("\\", "\\\\").replace("'", "\\'")

    @staticmethod
    def _atomic_write(path: Path, content: str) -> None:
        """Write a file through a temporary sibling and an atomic rename.

        Args:
            path: Target file.
            content: Text to write.
        """
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
                handle.write(content)
                handle.flush()
                os.fsync(handle.fileno())
            os.chmod(tmp_name, 0o644)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
