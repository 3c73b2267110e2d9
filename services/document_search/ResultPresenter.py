"""Presentation helpers for search results: score buckets, percentages,
file sizes and query highlighting. All functions are pure."""

import re

from shared.models.document import Document
from shared.models.search import PresentedResult, SearchResultItem

HIGHLIGHT_MARKER = ("<mark>", "</mark>")
MIN_HIGHLIGHT_TOKEN_LENGTH = 3
UNKNOWN_DOCUMENT_TITLE = "Unknown Document"
_SIZE_UNITS = ["Bytes", "KB", "MB", "GB"]


def score_bucket(score: float) -> str:
    """Map a relevance score to "high" (> 0.8), "medium" (> 0.6) or "low"."""
    if score > 0.8:
        return "high"
    if score > 0.6:
        return "medium"
    return "low"


def format_score(score: float) -> str:
    """Render a score in [0, 1] as a percentage with one decimal, e.g. 0.873 → "87.3"."""
    return f"{score * 100:.1f}"


def format_file_size(size: int) -> str:
    """Render a byte count with base-1024 units, e.g. 1536 → "1.5 KB"."""
    if size <= 0:
        return "0 Bytes"
    value = float(size)
    exponent = 0
    while value >= 1024 and exponent < len(_SIZE_UNITS) - 1:
        value /= 1024
        exponent += 1
    return f"{round(value, 2):g} {_SIZE_UNITS[exponent]}"


def _highlight_pattern(query: str) -> re.Pattern | None:
    # short tokens would light up every "a", "of", "is"
    tokens = [token for token in query.split() if len(token) >= MIN_HIGHLIGHT_TOKEN_LENGTH]
    if not tokens:
        return None
    # longest first, so "abcdef" is not cut short by an "abc" alternative
    tokens.sort(key=len, reverse=True)
    return re.compile("|".join(re.escape(token) for token in tokens), re.IGNORECASE)


def highlight_segments(content: str, query: str) -> list[tuple[str, bool]]:
    """Split content into (text, is_match) segments for the active query.

    Returns a single unmatched segment when no query token is long enough.
    """
    pattern = _highlight_pattern(query)
    if pattern is None:
        return [(content, False)] if content else []

    segments: list[tuple[str, bool]] = []
    position = 0
    for match in pattern.finditer(content):
        if match.start() == match.end():
            continue
        if match.start() > position:
            segments.append((content[position:match.start()], False))
        segments.append((match.group(0), True))
        position = match.end()
    if position < len(content):
        segments.append((content[position:], False))
    return segments


def highlight(content: str, query: str, marker: tuple[str, str] = HIGHLIGHT_MARKER) -> str:
    """Wrap every occurrence of a query token (case-insensitive) in the marker.

    Tokens of two characters or fewer are ignored; if none remain the content
    is returned unchanged.
    """
    opening, closing = marker
    return "".join(
        f"{opening}{text}{closing}" if is_match else text
        for text, is_match in highlight_segments(content, query)
    )


def summarize(count: int, query: str) -> str:
    return f'Found {count} result{"" if count == 1 else "s"} for "{query}"'


def present(results: list[SearchResultItem], query: str, documents: list[Document] | None = None) -> list[PresentedResult]:
    """Turn raw search results into display rows, resolving document titles.

    Args:
        results: Ranked results as returned by the search service.
        query: The query that produced them, used for highlighting.
        documents: Known documents, used to resolve titles and file details.
    """
    by_id = {document.id: document for document in documents or []}
    rows: list[PresentedResult] = []
    for rank, result in enumerate(results, start=1):
        document = by_id.get(result.document_id)
        rows.append(
            PresentedResult(
                rank=rank,
                document_id=result.document_id,
                chunk_id=result.chunk_id,
                score=result.score,
                score_text=format_score(result.score),
                bucket=score_bucket(result.score),
                content=result.content,
                highlighted=highlight(result.content, query),
                title=document.title if document and document.title else UNKNOWN_DOCUMENT_TITLE,
                file_name=document.file_name if document else None,
                page_count=document.page_count if document else None,
            )
        )
    return rows
