"""Pydantic models for search requests and responses."""

from pydantic import BaseModel, field_validator

MIN_SEARCH_LIMIT = 1
MAX_SEARCH_LIMIT = 20
DEFAULT_SEARCH_LIMIT = 5


def clamp_limit(limit: int) -> int:
    """Clamp a result-count limit into [MIN_SEARCH_LIMIT, MAX_SEARCH_LIMIT]."""
    return max(MIN_SEARCH_LIMIT, min(int(limit), MAX_SEARCH_LIMIT))


class SearchRequest(BaseModel):
    """A semantic search query, optionally restricted to a single document."""

    query: str
    document_id: str | None = None
    limit: int = DEFAULT_SEARCH_LIMIT

    @field_validator("limit")
    @classmethod
    def _clamp(cls, value: int) -> int:
        return clamp_limit(value)


class SearchResultItem(BaseModel):
    """A single matching chunk returned by the search service."""

    document_id: str
    chunk_id: str
    content: str
    score: float


class SearchResponse(BaseModel):
    results: list[SearchResultItem] = []


class PresentedResult(BaseModel):
    """A search result prepared for display.

    Attributes:
        rank (int): 1-based position in the result list.
        bucket (str): "high", "medium" or "low".
        score_text (str): Score as a percentage with one decimal, e.g. "87.3".
        highlighted (str): Content with query terms wrapped in highlight markers.
        title (str): Title of the source document, or "Unknown Document".
    """

    rank: int
    document_id: str
    chunk_id: str
    score: float
    score_text: str
    bucket: str
    content: str
    highlighted: str
    title: str
    file_name: str | None = None
    page_count: int | None = None
