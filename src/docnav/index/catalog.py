"""Long-lived handle over one indexed documentation corpus."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Tuple

from docnav.index.indexer import IndexBuilder, IndexStats
from docnav.index.scanner import DEFAULT_MODULE
from docnav.index.search import DEFAULT_SEARCH_LIMIT, SearchEngine
from docnav.index.store import DocumentStore
from docnav.ingestion.markdown import extract_code_blocks, extract_props_section
from docnav.models import DocumentEntry, SearchResult

LOGGER = logging.getLogger(__name__)


class DocumentCatalog:
    """High-level API over a document store and search engine pair.

    Build one with :meth:`open` and pass it to whatever needs to query the
    corpus. :meth:`reindex` rebuilds in place and must not run while other
    calls are reading from the same catalog; to reindex under live readers,
    open a fresh catalog and swap the reference instead.
    """

    def __init__(
        self,
        docs_path: Path,
        *,
        store: DocumentStore | None = None,
        engine: SearchEngine | None = None,
        fallback_module: str = DEFAULT_MODULE,
    ) -> None:
        self.docs_path = Path(docs_path)
        self.store = store if store is not None else DocumentStore()
        self.engine = engine if engine is not None else SearchEngine()
        self.fallback_module = fallback_module
        self.stats: IndexStats | None = None

    @classmethod
    def open(cls, docs_path: Path, *, fallback_module: str = DEFAULT_MODULE) -> "DocumentCatalog":
        """Create a catalog and index ``docs_path`` into it."""
        catalog = cls(docs_path, fallback_module=fallback_module)
        catalog.reindex()
        return catalog

    def reindex(self) -> IndexStats:
        LOGGER.info("Indexing documents from %s", self.docs_path)
        builder = IndexBuilder(self.store, self.engine, fallback_module=self.fallback_module)
        self.stats = builder.build(self.docs_path)
        return self.stats

    def search(
        self, query: str, *, limit: int = DEFAULT_SEARCH_LIMIT, module: Optional[str] = None
    ) -> List[SearchResult]:
        return self.engine.search(query, limit, module)

    def get(self, doc_id: str) -> Optional[DocumentEntry]:
        return self.store.get_by_id(doc_id)

    def find(self, name: str) -> Optional[DocumentEntry]:
        return self.store.find_by_name(name)

    def by_category(self, category: str) -> List[DocumentEntry]:
        return self.store.get_by_category(category)

    def by_module(self, module: str) -> List[DocumentEntry]:
        return self.store.get_by_module(module)

    def modules(self) -> List[Tuple[str, int]]:
        return self.store.get_modules()

    def categories(self) -> List[Tuple[str, int]]:
        return self.store.get_categories()

    def resolve(self, name: str) -> Optional[DocumentEntry]:
        """Look ``name`` up as an exact id first, then as a fuzzy name."""
        return self.get(name) or self.find(name)

    def code_examples(self, name: str) -> Optional[List[str]]:
        """Code blocks of the document ``name`` resolves to, or None if unknown."""
        entry = self.resolve(name)
        if entry is None:
            return None
        return extract_code_blocks(entry.content)

    def props_reference(self, name: str) -> Optional[str]:
        entry = self.resolve(name)
        if entry is None:
            return None
        return extract_props_section(entry.content)
