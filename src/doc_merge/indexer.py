"""Merges rustdoc output directories into one shared documentation site."""

import logging
from pathlib import Path

from doc_merge.database import MergedIndex
from doc_merge.emitter import IndexEmitter
from doc_merge.errors import ConfigurationError
from doc_merge.linker import ENTRY_POINT_FILE, link_entry_point
from doc_merge.models import MergeOptions, MergeResult, SearchIndex
from doc_merge.parser import SearchIndexParser
from doc_merge.uniter import unite_directory

logger = logging.getLogger(__name__)


class DocSiteMerger:
    """Combines the ``cargo doc`` output of several crates into one site.

    Every search index is read and merged before anything is written, so a
    bad source or option leaves the destination untouched.
    """

    MIN_SOURCES = 2

    def __init__(self, parser: SearchIndexParser | None = None, emitter: IndexEmitter | None = None) -> None:
        """Initialise the merger.

        Args:
            parser: Search index parser, a default one if omitted.
            emitter: Search index emitter, a default one if omitted.
        """
        self.parser = parser or SearchIndexParser()
        self.emitter = emitter or IndexEmitter()

    def merge(self, options: MergeOptions) -> MergeResult:
        """Merge the sources into the destination.

        Args:
            options: Sources, destination and entry point settings.

        Returns:
            MergeResult describing the written site.

        Raises:
            ConfigurationError: If paths or options are invalid.
            IndexFormatError: If any search index cannot be decoded.
            OSError: If copying or writing fails.
        """
        self._check_paths(options)
        logger.info("Found %d documentation sources", len(options.sources))

        indexes = self._read_indexes(options)
        merged = self.merge_indexes(indexes)
        index_format = indexes[-1].index_format
        if any(index.index_format != index_format for index in indexes):
            logger.warning("Sources use different search index formats; writing the %s format", index_format.name)

        if options.index_crate is not None:
            self._check_index_crate(options, merged)

        if not options.dest.is_dir():
            logger.info("Creating destination directory %s", options.dest)
            options.dest.mkdir(parents=True)

        copied = 0
        for src in options.sources:
            copied += unite_directory(src, options.dest, options.asset_suffixes)

        for name in merged.unit_names():
            if not (options.dest / name).is_dir():
                logger.warning("Crate %s is in the search index but has no pages in %s", name, options.dest)

        search_index_path, crates_path = self.emitter.write(options.dest, merged, index_format)

        entry_point = None
        if options.index_crate is not None:
            entry_point = link_entry_point(options.dest, options.index_crate)

        return MergeResult(
            crates=merged.unit_names(),
            search_index_path=search_index_path,
            crates_path=crates_path,
            copied_entries=copied,
            entry_point=entry_point,
        )

    @staticmethod
    def merge_indexes(indexes: list[SearchIndex]) -> MergedIndex:
        """Fold decoded search indexes into one, later ones winning.

        Args:
            indexes: Search indexes, oldest first.

        Returns:
            MergedIndex holding every crate once.
        """
        merged = MergedIndex()
        for search_index in indexes:
            merged.upsert_index(search_index)
        return merged

    def _check_paths(self, options: MergeOptions) -> None:
        """Validate the source and destination roots.

        Args:
            options: Merge options to check.
        """
        if not options.sources:
            msg = "At least one documentation source is required"
            raise ConfigurationError(msg)

        for src in options.sources:
            if not src.is_dir():
                msg = f"Source documentation not found at {src}. Did you run `cargo doc`?"
                raise ConfigurationError(msg)
            if options.dest.exists() and src.resolve() == options.dest.resolve():
                msg = f"Source {src} is the destination"
                raise ConfigurationError(msg)

        if options.dest.exists() and not options.dest.is_dir():
            msg = f"Destination {options.dest} is not a directory"
            raise ConfigurationError(msg)
        if not options.dest.exists() and not options.create_dest:
            msg = f"Destination directory {options.dest} not found. If this is intentional, use `--create-dest`."
            raise ConfigurationError(msg)

    def _read_indexes(self, options: MergeOptions) -> list[SearchIndex]:
        """Decode the destination's index (if any) and every source's index.

        Args:
            options: Merge options.

        Returns:
            Search indexes in merge order: destination first, then sources.
        """
        indexes = []
        if (options.dest / self.parser.SEARCH_INDEX_FILE).is_file():
            indexes.append(self.parser.parse_file(options.dest))
            logger.info("Merging into existing search index in %s", options.dest)

        if len(indexes) + len(options.sources) < self.MIN_SOURCES:
            msg = (
                f"Nothing to merge: {options.dest} has no search index yet, "
                f"so at least {self.MIN_SOURCES} sources are required"
            )
            raise ConfigurationError(msg)

        for src in options.sources:
            indexes.append(self.parser.parse_file(src))
        return indexes

    def _check_index_crate(self, options: MergeOptions, merged: MergedIndex) -> None:
        """Ensure the designated entry point crate exists and has pages.

        Args:
            options: Merge options naming the index crate.
            merged: The merged index.
        """
        name = options.index_crate
        if name not in merged:
            msg = f"Index crate {name} is not among the merged crates: {', '.join(merged.unit_names())}"
            raise ConfigurationError(msg)

        roots: list[Path] = [*options.sources, options.dest]
        if not any((root / name / ENTRY_POINT_FILE).is_file() for root in roots):
            msg = f"Index crate {name} has no {name}/{ENTRY_POINT_FILE} page"
            raise ConfigurationError(msg)
