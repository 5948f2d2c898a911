"""Tests for the merged index."""

from pathlib import Path

import pytest

from doc_merge.database import MergedIndex
from doc_merge.errors import IndexFormatError
from doc_merge.models import MAP_FORMAT, SearchIndex


@pytest.fixture
def merged() -> MergedIndex:
    """Create an empty merged index.

    Returns:
        MergedIndex instance.
    """
    return MergedIndex()


def test_upsert_unit(merged: MergedIndex) -> None:
    """Test inserting a record."""
    merged.upsert_unit("alpha", {"doc": "Alpha"})

    assert merged.get_unit_count() == 1
    assert dict(merged.items()) == {"alpha": {"doc": "Alpha"}}
    assert "alpha" in merged


def test_upsert_unit_replaces_existing(merged: MergedIndex) -> None:
    """Test that a later record for the same crate wins."""
    merged.upsert_unit("alpha", {"doc": "old"})
    merged.upsert_unit("alpha", {"doc": "new"})

    assert merged.get_unit_count() == 1
    assert dict(merged.items()) == {"alpha": {"doc": "new"}}


def test_upsert_unit_rejects_invalid_name(merged: MergedIndex) -> None:
    """Test that names unsafe as directory names are refused."""
    with pytest.raises(IndexFormatError, match="invalid crate name") as excinfo:
        merged.upsert_unit("../etc", {}, source=Path("a/search-index.js"))

    assert excinfo.value.path == Path("a/search-index.js")


def test_contains_unmerged_crate(merged: MergedIndex) -> None:
    """Test membership of a crate that was never merged."""
    merged.upsert_unit("alpha", {})

    assert "missing" not in merged


def test_unit_names_are_sorted(merged: MergedIndex) -> None:
    """Test that names come out in lexicographic order."""
    for name in ["gamma", "alpha", "beta"]:
        merged.upsert_unit(name, {})

    assert merged.unit_names() == ["alpha", "beta", "gamma"]
    assert [name for name, _ in merged.items()] == ["alpha", "beta", "gamma"]


def test_upsert_index_last_source_wins(merged: MergedIndex) -> None:
    """Test folding two sources that both define the same crate."""
    first = SearchIndex(source=Path("a"), index_format=MAP_FORMAT, records={"alpha": {"doc": "rec1"}})
    second = SearchIndex(
        source=Path("b"),
        index_format=MAP_FORMAT,
        records={"beta": {"doc": "rec2"}, "alpha": {"doc": "rec3"}},
    )

    merged.upsert_index(first)
    merged.upsert_index(second)

    assert dict(merged.items()) == {"alpha": {"doc": "rec3"}, "beta": {"doc": "rec2"}}
    assert len(merged) == 2


def test_order_independent_of_insertion(merged: MergedIndex) -> None:
    """Test that insertion order does not change the output order."""
    other = MergedIndex()
    for name in ["beta", "alpha"]:
        merged.upsert_unit(name, {"n": name})
    for name in ["alpha", "beta"]:
        other.upsert_unit(name, {"n": name})

    assert list(merged.items()) == list(other.items())

