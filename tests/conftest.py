"""Shared fixtures for doc-merge tests."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from doc_merge.database import MergedIndex
from doc_merge.emitter import IndexEmitter
from doc_merge.models import MAP_FORMAT, IndexFormat


@pytest.fixture
def make_doc_root(tmp_path: Path) -> Callable[..., Path]:
    """Build fake ``cargo doc`` output directories.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        Factory taking a directory name and a crate-to-record mapping.
    """

    def factory(dirname: str, records: dict[str, Any], index_format: IndexFormat = MAP_FORMAT) -> Path:
        root = tmp_path / dirname
        root.mkdir()
        merged = MergedIndex()
        for name, record in records.items():
            merged.upsert_unit(name, record)
            crate_dir = root / name
            crate_dir.mkdir()
            (crate_dir / "index.html").write_text(f"<h1>{name} from {dirname}</h1>")
            (crate_dir / "all.html").write_text(f"<h1>All items in {name}</h1>")

        static_dir = root / "static.files"
        static_dir.mkdir()
        (static_dir / "main.js").write_text("// rustdoc main")
        (root / "help.html").write_text(f"<h1>Help from {dirname}</h1>")
        (root / "src-files.js").write_text("var srcIndex = new Map();")

        emitter = IndexEmitter()
        (root / "search-index.js").write_text(emitter.encode_search_index(merged, index_format))
        (root / "crates.js").write_text(emitter.encode_crate_listing(merged))
        return root

    return factory
