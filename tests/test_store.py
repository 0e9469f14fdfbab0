"""Tests for DocumentStore."""

from __future__ import annotations

import pytest

from docnav.index.store import DocumentStore, normalize_name


@pytest.fixture
def store(entry_factory):
    """Store holding the Button / ToggleButton / Input / Theming corpus."""
    store = DocumentStore()
    store.add_document(
        entry_factory(
            "components/buttons/button",
            "Button",
            category="buttons",
            relative_path="02-components/buttons/button.md",
        )
    )
    store.add_document(
        entry_factory(
            "components/buttons/toggle-button",
            "Toggle Button",
            category="buttons",
            relative_path="02-components/buttons/toggle-button.md",
        )
    )
    store.add_document(
        entry_factory(
            "components/forms/input",
            "Input",
            category="forms",
            relative_path="02-components/forms/input.md",
        )
    )
    store.add_document(
        entry_factory(
            "foundation/theming",
            "Theming Guide",
            module="foundation",
            relative_path="01-foundation/03-theming.md",
        )
    )
    return store


class TestNormalizeName:
    def test_lowercases_and_trims(self) -> None:
        assert normalize_name("  BUTTON ") == "button"


class TestPrimaryIndex:
    """Test id lookups and length."""

    def test_get_by_id(self, store) -> None:
        entry = store.get_by_id("components/forms/input")

        assert entry is not None
        assert entry.title == "Input"

    def test_get_unknown_id(self, store) -> None:
        assert store.get_by_id("missing") is None

    def test_len_and_contains(self, store) -> None:
        assert len(store) == 4
        assert "foundation/theming" in store
        assert "missing" not in store

    def test_readd_overwrites_primary_entry(self, store, entry_factory) -> None:
        replacement = entry_factory(
            "components/forms/input",
            "Text Input",
            category="forms",
            relative_path="02-components/forms/input.md",
        )
        store.add_document(replacement)

        assert store.get_by_id("components/forms/input") is replacement
        assert len(store) == 4

    def test_get_all_documents_in_insertion_order(self, store) -> None:
        ids = [entry.id for entry in store.get_all_documents()]

        assert ids == [
            "components/buttons/button",
            "components/buttons/toggle-button",
            "components/forms/input",
            "foundation/theming",
        ]


class TestFindByName:
    """Test fuzzy name lookup strategies."""

    def test_exact_title_case_insensitive(self, store) -> None:
        assert store.find_by_name("BUTTON").id == "components/buttons/button"

    def test_title_without_spaces(self, store) -> None:
        assert store.find_by_name("togglebutton").id == "components/buttons/toggle-button"

    def test_filename_stem(self, store) -> None:
        assert store.find_by_name("toggle-button").id == "components/buttons/toggle-button"

    def test_filename_without_ordering_prefix(self, store) -> None:
        assert store.find_by_name("theming").id == "foundation/theming"

    def test_filename_with_ordering_prefix(self, store) -> None:
        assert store.find_by_name("03-theming").id == "foundation/theming"

    def test_prefix_match(self, store) -> None:
        assert store.find_by_name("inp").id == "components/forms/input"

    def test_exact_match_not_shadowed_by_prefix(self, entry_factory) -> None:
        """An earlier name that merely starts with the query must not win."""
        store = DocumentStore()
        store.add_document(entry_factory("components/buttons/button-group", "ButtonGroup"))
        store.add_document(entry_factory("components/buttons/button", "Button"))

        assert store.find_by_name("button").id == "components/buttons/button"

    def test_substring_match(self, store) -> None:
        assert store.find_by_name("guide").id == "foundation/theming"

    def test_prefix_preferred_over_substring(self, store) -> None:
        # "toggle" is a prefix of the toggle-button names; nothing contains it earlier.
        assert store.find_by_name("toggle").id == "components/buttons/toggle-button"

    def test_no_match(self, store) -> None:
        assert store.find_by_name("carousel") is None

    def test_blank_name(self, store) -> None:
        assert store.find_by_name("   ") is None

    def test_reflexive_for_unique_titles(self, store) -> None:
        for entry in store.get_all_documents():
            assert store.find_by_name(entry.title) is entry

    def test_collision_last_write_wins(self, entry_factory) -> None:
        store = DocumentStore()
        store.add_document(entry_factory("a/overview", "Overview", module="a"))
        store.add_document(entry_factory("b/overview", "Overview", module="b"))

        assert store.find_by_name("overview").id == "b/overview"


class TestListIndexes:
    """Test category and module listers."""

    def test_get_by_category(self, store) -> None:
        ids = [entry.id for entry in store.get_by_category("buttons")]

        assert ids == ["components/buttons/button", "components/buttons/toggle-button"]

    def test_get_by_module(self, store) -> None:
        assert [entry.id for entry in store.get_by_module("foundation")] == ["foundation/theming"]
        assert len(store.get_by_module("components")) == 3

    def test_unknown_keys_return_empty(self, store) -> None:
        assert store.get_by_category("charts") == []
        assert store.get_by_module("patterns") == []

    def test_lists_are_copies(self, store) -> None:
        first = store.get_by_category("buttons")
        first.clear()

        assert len(store.get_by_category("buttons")) == 2

    def test_every_categorized_document_in_one_bucket_each(self, store) -> None:
        for entry in store.get_all_documents():
            if entry.category is None:
                continue
            category_hits = [
                name for name, _ in store.get_categories()
                if entry in store.get_by_category(name)
            ]
            module_hits = [
                name for name, _ in store.get_modules() if entry in store.get_by_module(name)
            ]
            assert category_hits == [entry.category]
            assert module_hits == [entry.module]

    def test_get_categories_and_modules_sorted_with_counts(self, store) -> None:
        assert store.get_categories() == [("buttons", 2), ("forms", 1)]
        assert store.get_modules() == [("components", 3), ("foundation", 1)]


class TestClear:
    def test_clear_resets_every_index(self, store) -> None:
        store.clear()

        assert len(store) == 0
        assert store.get_by_category("buttons") == []
        assert store.get_by_module("components") == []
        assert store.find_by_name("button") is None
        assert store.get_categories() == []
        assert store.get_modules() == []
