"""Tests for the command-line interface."""

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from doc_merge.cli import build_parser, configure_logging, main


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Leave the root logger as pytest configured it.

    Yields:
        Nothing.
    """
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_main_merges_sources(make_doc_root: Callable[..., Path], tmp_path: Path) -> None:
    """Test a successful run."""
    a = make_doc_root("a", {"alpha": {"doc": "A"}})
    b = make_doc_root("b", {"beta": {"doc": "B"}})
    dest = tmp_path / "site"

    status = main(["--src", str(a), "--src", str(b), "--dest", str(dest), "--create-dest", "--index-crate", "alpha"])

    assert status == 0
    assert (dest / "crates.js").read_text() == 'window.ALL_CRATES = ["alpha","beta"];'
    assert (dest / "index.html").is_symlink()


def test_main_reports_fatal_errors(
    make_doc_root: Callable[..., Path], tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Test that configuration errors give exit status 1 and a diagnostic."""
    a = make_doc_root("a", {"alpha": {"doc": "A"}})

    status = main(["--src", str(a), "--dest", str(tmp_path / "missing")])

    assert status == 1
    assert "Fatal: Destination directory" in capsys.readouterr().err


def test_main_requires_dest() -> None:
    """Test that argparse rejects a missing --dest."""
    with pytest.raises(SystemExit) as excinfo:
        main(["--src", "docs"])

    assert excinfo.value.code == 2


def test_default_source(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Test that ./target/doc is used when no source is given."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "site").mkdir()

    status = main(["--dest", "site"])

    assert status == 1
    assert "Source documentation not found at target/doc" in capsys.readouterr().err


def test_asset_suffix_option() -> None:
    """Test that --asset-suffix is repeatable."""
    args = build_parser().parse_args(["--dest", "d", "--asset-suffix", ".txt", "--asset-suffix", "json"])

    assert args.asset_suffix == [".txt", "json"]
    assert args.src is None


@pytest.mark.parametrize(("flag", "level"), [([], logging.INFO), (["-v"], logging.DEBUG), (["-q"], logging.WARNING)])
def test_verbosity(flag: list[str], level: int) -> None:
    """Test the logging level chosen by -v and -q."""
    args = build_parser().parse_args(["--dest", "d", *flag])

    configure_logging(args.verbosity)

    assert logging.getLogger().level == level
