"""Utility helpers for working with documentation files."""

from __future__ import annotations

import re
from pathlib import Path

DOCUMENT_EXTENSIONS = frozenset({".md", ".markdown"})

_ORDERING_PREFIX_RE = re.compile(r"^\d+-")


def strip_ordering_prefix(name: str) -> str:
    """Remove a leading ``NN-`` ordering prefix, e.g. ``01-foundation`` -> ``foundation``."""
    return _ORDERING_PREFIX_RE.sub("", name)


def is_document_file(path: Path) -> bool:
    return path.is_file() and path.suffix.lower() in DOCUMENT_EXTENSIONS


def is_hidden(path: Path) -> bool:
    return path.name.startswith(".")


def read_document(path: Path) -> str:
    """Read a document as UTF-8 text."""
    with path.open("r", encoding="utf-8") as handle:
        return handle.read()
