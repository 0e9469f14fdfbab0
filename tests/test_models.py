"""Tests for docnav data models."""

from __future__ import annotations

from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

from docnav.models import (
    DocumentEntry,
    DocumentMetadata,
    MatchedField,
    Posting,
    ScannedFile,
    SearchResult,
)


class TestDocumentMetadata:
    """Test DocumentMetadata dataclass."""

    def test_defaults(self) -> None:
        """Should default to empty/false values."""
        metadata = DocumentMetadata()

        assert metadata.package_name is None
        assert metadata.import_statement is None
        assert metadata.description is None
        assert metadata.see_also == ()
        assert metadata.has_props_table is False
        assert metadata.has_code_examples is False

    def test_is_immutable(self) -> None:
        """Should reject attribute assignment."""
        metadata = DocumentMetadata(description="text")

        with pytest.raises(FrozenInstanceError):
            metadata.description = "other"  # type: ignore[misc]


class TestDocumentEntry:
    """Test DocumentEntry dataclass."""

    def test_create_entry(self) -> None:
        entry = DocumentEntry(
            id="components/buttons/button",
            title="Button",
            content="# Button",
            path=Path("/docs/02-components/buttons/button.md"),
            relative_path="02-components/buttons/button.md",
            module="components",
            category="buttons",
            metadata=DocumentMetadata(),
        )

        assert entry.id == "components/buttons/button"
        assert entry.category == "buttons"

    def test_is_immutable(self) -> None:
        entry = DocumentEntry(
            id="a",
            title="A",
            content="",
            path=Path("/a.md"),
            relative_path="a.md",
            module="foundation",
            category=None,
            metadata=DocumentMetadata(),
        )

        with pytest.raises(FrozenInstanceError):
            entry.title = "B"  # type: ignore[misc]


class TestSearchTypes:
    """Test search-related dataclasses."""

    def test_scanned_file_category_defaults_to_none(self) -> None:
        scanned = ScannedFile(path=Path("/docs/a.md"), relative_path="a.md", module="foundation")

        assert scanned.category is None

    def test_posting(self) -> None:
        posting = Posting(document_id="a", term_frequency=3)

        assert posting.document_id == "a"
        assert posting.term_frequency == 3

    def test_search_result_matched_fields_default(self) -> None:
        entry = DocumentEntry(
            id="a",
            title="A",
            content="",
            path=Path("/a.md"),
            relative_path="a.md",
            module="foundation",
            category=None,
            metadata=DocumentMetadata(),
        )
        result = SearchResult(document=entry, relevance=50, excerpt="x")
        other = SearchResult(document=entry, relevance=10, excerpt="y")
        result.matched_fields.append(MatchedField(field="title", score=1.0))

        assert other.matched_fields == []
        assert result.matched_fields[0].field == "title"
