"""Core docnav data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple


@dataclass(slots=True)
class ScannedFile:
    """A document file found by the scanner, classified by its location."""

    path: Path
    relative_path: str
    module: str
    category: Optional[str] = None


@dataclass(frozen=True, slots=True)
class DocumentMetadata:
    """Structured attributes parsed from a document's markdown."""

    package_name: Optional[str] = None
    import_statement: Optional[str] = None
    description: Optional[str] = None
    see_also: Tuple[str, ...] = ()
    has_props_table: bool = False
    has_code_examples: bool = False


@dataclass(frozen=True, slots=True)
class DocumentEntry:
    """Canonical indexed record: content, classification and metadata."""

    id: str
    title: str
    content: str
    path: Path
    relative_path: str
    module: str
    category: Optional[str]
    metadata: DocumentMetadata


@dataclass(slots=True)
class Posting:
    document_id: str
    term_frequency: int


@dataclass(slots=True)
class MatchedField:
    field: str
    score: float


@dataclass(slots=True)
class SearchResult:
    """Ranked hit returned by the search engine."""

    document: DocumentEntry
    relevance: int
    excerpt: str
    matched_fields: List[MatchedField] = field(default_factory=list)
