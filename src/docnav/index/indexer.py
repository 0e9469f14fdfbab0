"""Document indexing pipeline."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Dict, List

from docnav.index.scanner import DEFAULT_MODULE, scan_docs_directory
from docnav.index.search import SearchEngine
from docnav.index.store import DocumentStore
from docnav.ingestion.markdown import extract_metadata, extract_title
from docnav.models import DocumentEntry, ScannedFile
from docnav.utils.files import read_document, strip_ordering_prefix

LOGGER = logging.getLogger(__name__)


def build_document_id(relative_path: str) -> str:
    """Derive a stable id, e.g. ``02-components/buttons/button.md`` -> ``components/buttons/button``."""
    segments = PurePosixPath(relative_path).with_suffix("").parts
    return "/".join(strip_ordering_prefix(segment) for segment in segments)


@dataclass(slots=True)
class IndexStats:
    total_files: int = 0
    indexed_files: int = 0
    failed_files: int = 0
    duration_ms: float = 0.0
    by_module: Dict[str, int] = field(default_factory=dict)
    by_category: Dict[str, int] = field(default_factory=dict)
    failed_paths: List[str] = field(default_factory=list)

    def record(self, entry: DocumentEntry) -> None:
        self.indexed_files += 1
        self.by_module[entry.module] = self.by_module.get(entry.module, 0) + 1
        if entry.category:
            self.by_category[entry.category] = self.by_category.get(entry.category, 0) + 1

    def record_failure(self, relative_path: str) -> None:
        self.failed_files += 1
        self.failed_paths.append(relative_path)


@dataclass(slots=True)
class IndexResult:
    store: DocumentStore
    engine: SearchEngine
    stats: IndexStats


class IndexBuilder:
    """Coordinates scanning, extraction, storage and search indexing."""

    def __init__(
        self,
        store: DocumentStore,
        engine: SearchEngine,
        *,
        fallback_module: str = DEFAULT_MODULE,
    ) -> None:
        self.store = store
        self.engine = engine
        self.fallback_module = fallback_module

    def build(self, docs_path: Path) -> IndexStats:
        """Rebuild the store and engine from every document under ``docs_path``.

        Both are cleared before anything is read. A file that cannot be read
        or parsed is logged and counted; a directory that cannot be listed
        aborts the build.
        """
        started = time.perf_counter()
        self.store.clear()
        self.engine.clear()

        scanned_files = scan_docs_directory(Path(docs_path), fallback_module=self.fallback_module)
        if not scanned_files:
            LOGGER.warning("No documents found under %s", docs_path)

        stats = IndexStats(total_files=len(scanned_files))
        for scanned in scanned_files:
            try:
                entry = self._process_file(scanned)
            except Exception as exc:
                LOGGER.error("Failed to index %s: %s", scanned.relative_path, exc)
                stats.record_failure(scanned.relative_path)
                continue
            self.store.add_document(entry)
            stats.record(entry)

        self.engine.build_index(self.store.get_all_documents())
        stats.duration_ms = (time.perf_counter() - started) * 1000
        LOGGER.info(
            "Indexed %d of %d documents in %.1f ms (%d failed)",
            stats.indexed_files,
            stats.total_files,
            stats.duration_ms,
            stats.failed_files,
        )
        return stats

    def _process_file(self, scanned: ScannedFile) -> DocumentEntry:
        LOGGER.debug("Processing: %s", scanned.relative_path)
        content = read_document(scanned.path)
        return DocumentEntry(
            id=build_document_id(scanned.relative_path),
            title=extract_title(content),
            content=content,
            path=scanned.path,
            relative_path=scanned.relative_path,
            module=scanned.module,
            category=scanned.category,
            metadata=extract_metadata(content),
        )


def build_index(
    docs_path: Path,
    store: DocumentStore | None = None,
    engine: SearchEngine | None = None,
    *,
    fallback_module: str = DEFAULT_MODULE,
) -> IndexResult:
    """Index ``docs_path`` into the given store and engine, or fresh ones."""
    store = store if store is not None else DocumentStore()
    engine = engine if engine is not None else SearchEngine()
    stats = IndexBuilder(store, engine, fallback_module=fallback_module).build(docs_path)
    return IndexResult(store=store, engine=engine, stats=stats)
