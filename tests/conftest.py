"""Shared pytest fixtures for docnav unit tests."""
from __future__ import annotations

from pathlib import Path

import pytest

from docnav.models import DocumentEntry, DocumentMetadata

BUTTON_DOC = """# Button

> **Package**: `@fluentui/react-button`
> **Import**: `import { Button } from '@fluentui/react-components'`

## Overview

A button triggers an action. Use a button for the primary call to action;
every button supports icons.

## Usage

```tsx
<Button appearance="primary">Save</Button>
```

## Props Reference

| Prop | Type | Default |
|------|------|---------|
| appearance | string | secondary |

### Notes

Sizes follow the button scale.

## See Also

- [ToggleButton](./toggle-button.md)
- [Link](../navigation/link.md)
"""

INPUT_DOC = """# Input

## Overview

Text input for forms. Collects a single line of text from the user.

```tsx
<Input placeholder="Name" />
```
"""

THEMING_DOC = """# Theming

## Overview

Design tokens and themes control colors, typography and spacing.
"""

OVERVIEW_DOC = """# Documentation Overview

Start here for an introduction to the library.
"""


@pytest.fixture()
def docs_tree(tmp_path: Path) -> Path:
    """Corpus with a foundation module, components with two categories and a root file."""
    root = tmp_path / "docs"
    buttons = root / "02-components" / "buttons"
    forms = root / "02-components" / "forms"
    foundation = root / "01-foundation"
    for folder in (buttons, forms, foundation):
        folder.mkdir(parents=True)

    (buttons / "button.md").write_text(BUTTON_DOC, encoding="utf-8")
    (forms / "input.md").write_text(INPUT_DOC, encoding="utf-8")
    (foundation / "03-theming.md").write_text(THEMING_DOC, encoding="utf-8")
    (root / "00-overview.md").write_text(OVERVIEW_DOC, encoding="utf-8")
    (root / "02-components" / "notes.txt").write_text("not a document", encoding="utf-8")
    return root


def make_entry(
    doc_id: str,
    title: str,
    content: str = "",
    *,
    module: str = "components",
    category: str | None = None,
    relative_path: str | None = None,
    description: str | None = None,
) -> DocumentEntry:
    relative = relative_path or f"{doc_id}.md"
    return DocumentEntry(
        id=doc_id,
        title=title,
        content=content,
        path=Path("/docs") / relative,
        relative_path=relative,
        module=module,
        category=category,
        metadata=DocumentMetadata(description=description),
    )


@pytest.fixture()
def entry_factory():
    return make_entry
