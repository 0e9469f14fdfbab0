"""Directory scanner with filesystem-driven taxonomy discovery.

Top-level folders named ``NN-name`` become module ``name``; the immediate
subfolders of whichever folder resolves to the ``components`` module become
categories. Nothing is hardcoded: adding a folder adds a module or category
on the next scan.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Set, Tuple

from docnav.models import ScannedFile
from docnav.utils.files import is_document_file, is_hidden, strip_ordering_prefix

LOGGER = logging.getLogger(__name__)

COMPONENTS_MODULE = "components"
DEFAULT_MODULE = "foundation"


def scan_docs_directory(root: Path, *, fallback_module: str = DEFAULT_MODULE) -> List[ScannedFile]:
    """Return every document under ``root``, classified and sorted by relative path.

    Any directory that cannot be read raises ``OSError``; no partial corpus is
    ever returned.
    """
    root = Path(root).resolve()
    folder_to_module = discover_modules(root)
    categories = discover_categories(root, folder_to_module)
    LOGGER.debug(
        "Discovered %d modules and %d categories under %s",
        len(folder_to_module),
        len(categories),
        root,
    )

    results: List[ScannedFile] = []
    for path in _walk(root):
        relative_path = path.relative_to(root).as_posix()
        classification = classify_file(
            relative_path, folder_to_module, categories, fallback_module=fallback_module
        )
        if classification is None:
            LOGGER.debug("Skipping unclassified file %s", relative_path)
            continue
        module, category = classification
        results.append(
            ScannedFile(path=path, relative_path=relative_path, module=module, category=category)
        )

    results.sort(key=lambda scanned: scanned.relative_path)
    return results


def discover_modules(root: Path) -> Dict[str, str]:
    """Map each root-level folder name to its module name."""
    return {
        child.name: strip_ordering_prefix(child.name)
        for child in sorted(root.iterdir())
        if child.is_dir() and not is_hidden(child)
    }


def discover_categories(root: Path, folder_to_module: Dict[str, str]) -> Set[str]:
    """Collect the immediate subfolders of the components module folder."""
    for folder, module in folder_to_module.items():
        if module == COMPONENTS_MODULE:
            return {
                child.name
                for child in (root / folder).iterdir()
                if child.is_dir() and not is_hidden(child)
            }
    return set()


def classify_file(
    relative_path: str,
    folder_to_module: Dict[str, str],
    categories: Set[str],
    *,
    fallback_module: str = DEFAULT_MODULE,
) -> Optional[Tuple[str, Optional[str]]]:
    """Derive ``(module, category)`` from a corpus-relative POSIX path."""
    segments = relative_path.split("/")
    module = folder_to_module.get(segments[0])
    if module is None:
        if len(segments) == 1:
            return fallback_module, None
        return None

    category = None
    if module == COMPONENTS_MODULE and len(segments) >= 3 and segments[1] in categories:
        category = segments[1]
    return module, category


def _walk(directory: Path) -> Iterator[Path]:
    """Yield document files depth-first."""
    for child in sorted(directory.iterdir()):
        if is_hidden(child):
            continue
        if child.is_dir():
            yield from _walk(child)
        elif is_document_file(child):
            yield child
