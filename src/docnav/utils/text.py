"""Text helpers shared by the extractor and the search engine."""

from __future__ import annotations

ELLIPSIS = "..."

# Line prefixes that mark markdown structure rather than prose.
STRUCTURAL_PREFIXES = ("#", "|", "```", "---", ">")


def is_structural_line(line: str) -> bool:
    """Return True for headings, tables, fences, rules and quote lines."""
    return line.strip().startswith(STRUCTURAL_PREFIXES)


def truncate_words(text: str, max_chars: int) -> str:
    """Truncate ``text`` at a word boundary, appending an ellipsis marker.

    When the first word alone runs past ``max_chars`` it is kept whole and
    the cut moves to the next space; a text that is one word is returned
    unchanged.
    """
    if len(text) <= max_chars:
        return text
    if text[max_chars] == " ":
        cut = max_chars
    else:
        cut = text.rfind(" ", 0, max_chars)
        if cut <= 0:
            cut = text.find(" ", max_chars)
            if cut == -1:
                return text
    return text[:cut].rstrip() + ELLIPSIS


def truncate_chars(text: str, max_chars: int) -> str:
    """Truncate ``text`` at a character boundary, appending an ellipsis marker."""
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + ELLIPSIS


def normalize_whitespace(lines: list[str]) -> str:
    """Collapse stripped, non-empty lines into one space-separated string."""
    return " ".join(line.strip() for line in lines if line.strip())
