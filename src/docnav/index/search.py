"""TF-IDF search over the indexed documents.

The engine tokenizes every document once in :meth:`SearchEngine.build_index`
and afterwards answers queries from its own inverted index without touching
the corpus again. Title, description and content are scored separately and
weighted so that title hits dominate.
"""

from __future__ import annotations

import logging
import math
import re
from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from docnav.models import DocumentEntry, MatchedField, Posting, SearchResult
from docnav.utils.text import is_structural_line, truncate_chars

LOGGER = logging.getLogger(__name__)

DEFAULT_SEARCH_LIMIT = 10
MAX_SEARCH_LIMIT = 50
EXCERPT_MAX_CHARS = 200
NO_EXCERPT = "No excerpt available."

TITLE_WEIGHT = 10.0
DESCRIPTION_WEIGHT = 5.0
CONTENT_WEIGHT = 1.0

STOP_WORDS = frozenset(
    {
        "a", "an", "and", "are", "as", "at", "be", "but", "by", "for",
        "from", "has", "have", "he", "her", "his", "how", "i", "if", "in",
        "is", "it", "its", "just", "let", "may", "my", "no", "not", "of",
        "on", "or", "our", "own", "say", "she", "so", "than", "that", "the",
        "their", "them", "then", "there", "these", "they", "this", "to", "too",
        "us", "was", "we", "what", "when", "which", "who", "will", "with",
        "you", "your",
    }
)

_FENCED_CODE_RE = re.compile(r"```[\s\S]*?```")
_INLINE_CODE_RE = re.compile(r"`[^`]+`")
_IMAGE_RE = re.compile(r"!\[([^\]]*)\]\([^)]+\)")
_LINK_RE = re.compile(r"\[([^\]]+)\]\([^)]+\)")
_MARKDOWN_PUNCTUATION_RE = re.compile(r"[*_~#>|]")
_TOKEN_SPLIT_RE = re.compile(r"[^a-z0-9-]+")
_OVERVIEW_RE = re.compile(r"^#{1,6}\s+Overview\b", re.IGNORECASE)


def tokenize(text: str) -> List[str]:
    """Split text into search tokens; duplicates are kept for term counts."""
    text = text.lower()
    text = _FENCED_CODE_RE.sub(" ", text)
    text = _INLINE_CODE_RE.sub(" ", text)
    text = _IMAGE_RE.sub(r"\1", text)
    text = _LINK_RE.sub(r"\1", text)
    text = _MARKDOWN_PUNCTUATION_RE.sub(" ", text)
    return [
        token
        for token in _TOKEN_SPLIT_RE.split(text)
        if len(token) >= 2 and token not in STOP_WORDS
    ]


def clamp_limit(limit: int) -> int:
    return min(max(1, limit), MAX_SEARCH_LIMIT)


@dataclass(slots=True)
class IndexedDocument:
    """Pre-tokenized fields of one document."""

    entry: DocumentEntry
    title_tokens: List[str]
    description_tokens: List[str]
    content_tokens: List[str]


class SearchEngine:
    """Inverted-index TF-IDF search engine.

    Usage: ``build_index()`` with the full corpus, ``search()`` per query.
    Calling ``build_index()`` again replaces the previous index.
    """

    def __init__(self) -> None:
        self._inverted_index: Dict[str, List[Posting]] = {}
        self._documents: Dict[str, IndexedDocument] = {}
        self._total_documents = 0

    @property
    def vocabulary_size(self) -> int:
        return len(self._inverted_index)

    @property
    def document_count(self) -> int:
        return self._total_documents

    def postings(self, token: str) -> List[Posting]:
        return list(self._inverted_index.get(token, ()))

    def build_index(self, documents: Iterable[DocumentEntry]) -> None:
        """Replace the index contents with ``documents``."""
        self.clear()
        for entry in documents:
            indexed = IndexedDocument(
                entry=entry,
                title_tokens=tokenize(entry.title),
                description_tokens=tokenize(entry.metadata.description or ""),
                content_tokens=tokenize(entry.content),
            )
            self._documents[entry.id] = indexed

            counts = Counter(indexed.title_tokens)
            counts.update(indexed.description_tokens)
            counts.update(indexed.content_tokens)
            for token, count in counts.items():
                self._inverted_index.setdefault(token, []).append(
                    Posting(document_id=entry.id, term_frequency=count)
                )

        self._total_documents = len(self._documents)
        LOGGER.debug(
            "Search index holds %d documents and %d tokens",
            self._total_documents,
            self.vocabulary_size,
        )

    def clear(self) -> None:
        self._inverted_index.clear()
        self._documents.clear()
        self._total_documents = 0

    def search(
        self,
        query: str,
        limit: int = DEFAULT_SEARCH_LIMIT,
        module: Optional[str] = None,
    ) -> List[SearchResult]:
        """Rank documents against ``query``.

        Results are ordered by descending score with ties broken by document
        id. ``limit`` is clamped into ``[1, MAX_SEARCH_LIMIT]`` and
        ``module`` restricts scoring to one module.
        """
        query_tokens = tokenize(query)
        if not query_tokens:
            return []

        idf = {token: self._idf(token) for token in set(query_tokens)}
        scored: List[Tuple[float, str, List[MatchedField]]] = []
        for doc_id, indexed in self._documents.items():
            if module is not None and indexed.entry.module != module:
                continue
            score, matched = self._score_document(indexed, query_tokens, idf)
            if score > 0:
                scored.append((score, doc_id, matched))

        scored.sort(key=lambda item: (-item[0], item[1]))
        max_score = self._max_possible_score(len(query_tokens))

        results: List[SearchResult] = []
        for score, doc_id, matched in scored[: clamp_limit(limit)]:
            entry = self._documents[doc_id].entry
            results.append(
                SearchResult(
                    document=entry,
                    relevance=min(math.floor(score / max_score * 100 + 0.5), 100),
                    excerpt=extract_excerpt(entry.content, query_tokens),
                    matched_fields=matched,
                )
            )
        return results

    def _score_document(
        self,
        indexed: IndexedDocument,
        query_tokens: Sequence[str],
        idf: Dict[str, float],
    ) -> Tuple[float, List[MatchedField]]:
        total = 0.0
        matched: List[MatchedField] = []
        fields = (
            ("title", indexed.title_tokens, TITLE_WEIGHT),
            ("description", indexed.description_tokens, DESCRIPTION_WEIGHT),
            ("content", indexed.content_tokens, CONTENT_WEIGHT),
        )
        for token in query_tokens:
            for name, tokens, weight in fields:
                tf = _term_frequency(token, tokens)
                if tf == 0:
                    continue
                score = tf * idf[token] * weight
                if score > 0:
                    total += score
                    matched.append(MatchedField(field=name, score=score))
        return total, matched

    def _idf(self, token: str) -> float:
        """Inverse document frequency, falling back to prefix matches.

        A token with no exact postings borrows the aggregate posting count of
        every indexed token it prefixes; with none of those either it
        contributes nothing.
        """
        postings = self._inverted_index.get(token)
        if postings:
            containing = len(postings)
        else:
            containing = sum(
                len(entries)
                for indexed_token, entries in self._inverted_index.items()
                if indexed_token.startswith(token)
            )
        if containing == 0 or self._total_documents == 0:
            return 0.0
        return math.log(self._total_documents / containing) + 1

    def _max_possible_score(self, query_token_count: int) -> float:
        # Every query token matching the whole title of the rarest possible term.
        max_idf = math.log(max(self._total_documents, 1)) + 1
        return query_token_count * TITLE_WEIGHT * max_idf


def _term_frequency(token: str, field_tokens: Sequence[str]) -> float:
    """Share of ``field_tokens`` equal to or starting with ``token``."""
    if not field_tokens:
        return 0.0
    count = sum(1 for field_token in field_tokens if field_token.startswith(token))
    return count / len(field_tokens)


def extract_excerpt(content: str, query_tokens: Sequence[str], max_chars: int = EXCERPT_MAX_CHARS) -> str:
    """Pick a line of prose that shows where the query matched."""
    lines = content.split("\n")
    for line in lines:
        stripped = line.strip()
        if not stripped or is_structural_line(stripped):
            continue
        lowered = stripped.lower()
        if any(token in lowered for token in query_tokens):
            return truncate_chars(stripped, max_chars)

    for index, line in enumerate(lines):
        if _OVERVIEW_RE.match(line):
            for candidate in lines[index + 1 : index + 5]:
                stripped = candidate.strip()
                if stripped and not stripped.startswith(("#", ">")):
                    return truncate_chars(stripped, max_chars)
            break

    return NO_EXCERPT
