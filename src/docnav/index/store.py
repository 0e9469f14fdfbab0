"""In-memory document store."""

from __future__ import annotations

import logging
import re
from pathlib import PurePosixPath
from typing import Dict, Iterable, List, Optional, Tuple

from docnav.models import DocumentEntry
from docnav.utils.files import strip_ordering_prefix

LOGGER = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_name(name: str) -> str:
    return name.lower().strip()


class DocumentStore:
    """Owner of the canonical document collection and its lookup indexes.

    Entries live only in the primary index; the category, module and name
    indexes hold document ids. Ids are appended to the list indexes as
    documents are added. Re-adding an id replaces the primary entry without
    pruning the secondary indexes, which is safe because every rebuild goes
    through :meth:`clear` first.
    """

    def __init__(self) -> None:
        self._documents: Dict[str, DocumentEntry] = {}
        self._category_index: Dict[str, List[str]] = {}
        self._module_index: Dict[str, List[str]] = {}
        self._name_index: Dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._documents)

    def __contains__(self, doc_id: object) -> bool:
        return doc_id in self._documents

    def add_document(self, entry: DocumentEntry) -> None:
        self._documents[entry.id] = entry
        self._module_index.setdefault(entry.module, []).append(entry.id)
        if entry.category:
            self._category_index.setdefault(entry.category, []).append(entry.id)
        self._index_names(entry)

    def get_by_id(self, doc_id: str) -> Optional[DocumentEntry]:
        return self._documents.get(doc_id)

    def find_by_name(self, name: str) -> Optional[DocumentEntry]:
        """Resolve a loosely typed name to a document.

        Tries an exact normalized match, then the first registered name the
        query is a prefix of, then the first registered name containing it.
        """
        query = normalize_name(name)
        if not query:
            return None

        doc_id = self._name_index.get(query)
        if doc_id is None:
            doc_id = next(
                (value for key, value in self._name_index.items() if key.startswith(query)),
                None,
            )
        if doc_id is None:
            doc_id = next(
                (value for key, value in self._name_index.items() if query in key),
                None,
            )
        return self._documents.get(doc_id) if doc_id is not None else None

    def get_by_category(self, category: str) -> List[DocumentEntry]:
        return self._resolve(self._category_index.get(category, ()))

    def get_by_module(self, module: str) -> List[DocumentEntry]:
        return self._resolve(self._module_index.get(module, ()))

    def get_all_documents(self) -> List[DocumentEntry]:
        return list(self._documents.values())

    def get_categories(self) -> List[Tuple[str, int]]:
        """Return ``(category, document count)`` pairs sorted by name."""
        return sorted((category, len(ids)) for category, ids in self._category_index.items())

    def get_modules(self) -> List[Tuple[str, int]]:
        """Return ``(module, document count)`` pairs sorted by name."""
        return sorted((module, len(ids)) for module, ids in self._module_index.items())

    def clear(self) -> None:
        self._documents.clear()
        self._category_index.clear()
        self._module_index.clear()
        self._name_index.clear()

    def _resolve(self, ids: Iterable[str]) -> List[DocumentEntry]:
        return [self._documents[doc_id] for doc_id in ids if doc_id in self._documents]

    def _index_names(self, entry: DocumentEntry) -> None:
        title = normalize_name(entry.title)
        variants = [title]

        stem = PurePosixPath(entry.relative_path).stem
        if stem:
            variants.append(normalize_name(stem))
            unprefixed = strip_ordering_prefix(stem)
            if unprefixed != stem:
                variants.append(normalize_name(unprefixed))

        variants.append(title.replace("-", ""))
        variants.append(_WHITESPACE_RE.sub("", title))

        for variant in variants:
            if not variant:
                continue
            previous = self._name_index.get(variant)
            if previous is not None and previous != entry.id:
                LOGGER.debug("Name %r now resolves to %s instead of %s", variant, entry.id, previous)
            self._name_index[variant] = entry.id
