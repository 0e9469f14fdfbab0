"""Markdown metadata extraction.

Parses one document's raw markdown into a title and a
:class:`~docnav.models.DocumentMetadata`: package and import hints from
quote annotations such as ``> **Package**: `@scope/pkg` ``, a bounded
description, "See Also" references and content indicators (props tables,
code examples).
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

from docnav.models import DocumentMetadata
from docnav.utils.text import is_structural_line, normalize_whitespace, truncate_words

UNTITLED = "Untitled"
DESCRIPTION_MAX_CHARS = 300

CODE_LANGUAGES = frozenset(
    {"typescript", "ts", "tsx", "javascript", "js", "jsx", "python", "py"}
)

_FENCED_BLOCK_RE = re.compile(r"```[\s\S]*?```")
_HEADING_RE = re.compile(r"^(#{1,6})\s+(.+?)\s*#*\s*$")
_H1_RE = re.compile(r"^#[ \t]+(.+)$", re.MULTILINE)
_ANY_HEADING_RE = re.compile(r"^#{1,6}[ \t]+(.+)$", re.MULTILINE)
_LINK_RE = re.compile(r"\[([^\]]+)\]\([^)]*\)")
_FENCE_TAG_RE = re.compile(r"^[ \t]*```[ \t]*([\w+#-]*)", re.MULTILINE)
_CODE_BLOCK_RE = re.compile(r"```[ \t]*([\w+#-]*)[^\n]*\n([\s\S]*?)```")
_PROPS_HEADING_RE = re.compile(
    r"^#{1,6}[ \t]+Props(?:[ \t]+Reference)?[ \t]*$", re.IGNORECASE | re.MULTILINE
)
_PROP_TABLE_HEADER_RE = re.compile(r"^[ \t]*\|[ \t]*Prop[ \t]*\|", re.IGNORECASE | re.MULTILINE)


def extract_metadata(content: str) -> DocumentMetadata:
    """Extract all metadata attributes from raw markdown."""
    return DocumentMetadata(
        package_name=_extract_annotation(content, "Package"),
        import_statement=_extract_annotation(content, "Import", "Usage"),
        description=extract_description(content),
        see_also=tuple(extract_see_also(content)),
        has_props_table=detect_props_table(content),
        has_code_examples=detect_code_examples(content),
    )


def extract_title(content: str) -> str:
    """Return the first ``#`` heading, else the first heading of any level."""
    prose = _FENCED_BLOCK_RE.sub("", content)
    match = _H1_RE.search(prose) or _ANY_HEADING_RE.search(prose)
    if match:
        return match.group(1).strip()
    return UNTITLED


def _extract_annotation(content: str, *labels: str) -> Optional[str]:
    """Find the value of a ``> **Label**: value`` quote annotation.

    The label may or may not be bold and the value may be wrapped in inline
    code; the first matching label wins.
    """
    for label in labels:
        pattern = re.compile(
            rf"^[ \t]*>[ \t]*\*{{0,2}}{re.escape(label)}\*{{0,2}}[ \t]*:[ \t]*\*{{0,2}}[ \t]*"
            r"(?:`([^`\n]+)`|([^\n]+?))[ \t]*$",
            re.IGNORECASE | re.MULTILINE,
        )
        match = pattern.search(content)
        if match:
            value = (match.group(1) or match.group(2)).strip()
            if value:
                return value
    return None


def extract_description(content: str, *, max_chars: int = DESCRIPTION_MAX_CHARS) -> Optional[str]:
    """Return a short description of the document.

    Priority: the first paragraph after an ``Overview`` heading, then the
    first paragraph after the title heading, then the first line of prose.
    """
    lines = content.split("\n")

    overview_index = _find_heading(lines, re.compile(r"^#{1,6}\s+Overview\b", re.IGNORECASE))
    if overview_index is not None:
        paragraph = _find_next_paragraph(lines, overview_index + 1)
        if paragraph:
            return truncate_words(paragraph, max_chars)

    title_index = _find_heading(lines, re.compile(r"^#\s+"))
    if title_index is not None:
        paragraph = _find_next_paragraph(lines, title_index + 1)
        if paragraph:
            return truncate_words(paragraph, max_chars)

    for line in lines:
        stripped = line.strip()
        if stripped and not is_structural_line(stripped):
            return truncate_words(stripped, max_chars)
    return None


def _find_heading(lines: List[str], pattern: re.Pattern) -> Optional[int]:
    for index, line in enumerate(lines):
        if pattern.match(line):
            return index
    return None


def _find_next_paragraph(lines: List[str], start: int) -> Optional[str]:
    """Collect the first run of prose lines at or after ``start``.

    Leading blank lines are skipped, quote annotations are ignored and any
    other structural line ends the search.
    """
    parts: List[str] = []
    for line in lines[start:]:
        stripped = line.strip()
        if not stripped:
            if parts:
                break
            continue
        if stripped.startswith(">"):
            continue
        if is_structural_line(stripped):
            break
        parts.append(stripped)
    return normalize_whitespace(parts) or None


def extract_see_also(content: str) -> List[str]:
    """Return the link texts listed under a ``See Also`` heading."""
    lines = content.split("\n")
    start = _find_heading(lines, re.compile(r"^#{1,6}\s+See\s+Also\b", re.IGNORECASE))
    if start is None:
        return []

    references: List[str] = []
    for line in lines[start + 1 :]:
        stripped = line.strip()
        if stripped.startswith("#"):
            break
        references.extend(text.strip() for text in _LINK_RE.findall(stripped))
    return references


def detect_props_table(content: str) -> bool:
    return bool(_PROPS_HEADING_RE.search(content) or _PROP_TABLE_HEADER_RE.search(content))


def detect_code_examples(content: str, languages: Iterable[str] = CODE_LANGUAGES) -> bool:
    allowed = frozenset(language.lower() for language in languages)
    return any(tag.lower() in allowed for tag in _FENCE_TAG_RE.findall(content))


def extract_code_blocks(content: str, languages: Iterable[str] = CODE_LANGUAGES) -> List[str]:
    """Return the bodies of fenced code blocks in a recognized language, in order."""
    allowed = frozenset(language.lower() for language in languages)
    return [
        match.group(2).strip()
        for match in _CODE_BLOCK_RE.finditer(content)
        if match.group(1).lower() in allowed
    ]


def extract_section(content: str, heading: str) -> Optional[str]:
    """Return a section verbatim, from its heading to the next peer heading.

    ``heading`` matches case-insensitively as a whole-word prefix of the
    heading text, so ``"Props"`` finds ``## Props Reference``. Heading-like
    lines inside fenced code do not start or end a section.
    """
    name_re = re.compile(rf"{re.escape(heading)}\b", re.IGNORECASE)
    lines = content.split("\n")
    section: List[str] = []
    level = 0
    in_fence = False

    for line in lines:
        if line.strip().startswith("```"):
            in_fence = not in_fence
            if section:
                section.append(line)
            continue

        match = None if in_fence else _HEADING_RE.match(line)
        if section:
            if match and len(match.group(1)) <= level:
                break
            section.append(line)
        elif match and name_re.match(match.group(2)):
            level = len(match.group(1))
            section.append(line)

    if not section:
        return None
    return "\n".join(section).strip()


def extract_props_section(content: str) -> Optional[str]:
    return extract_section(content, "Props")
