"""Pydantic models for document metadata.

  Document               - a registered document as returned by the metadata API.
  DocumentCreateRequest  - payload sent to register an uploaded file.
  DocumentsListResponse  - wrapper returned by the list endpoint.
"""

from pydantic import BaseModel


class Document(BaseModel):
    """A document known to the metadata API.

    The id is server-assigned and unique within the registry. created_at is kept
    as the raw string the backend sends, since backends disagree on the format.
    """

    id: str
    title: str
    file_name: str
    file_url: str
    file_size: int
    created_at: str | None = None
    owner_id: str | None = None
    page_count: int | None = None
    processing_status: str | None = None


class DocumentCreateRequest(BaseModel):
    """Metadata registration payload for a file already placed in the remote store."""

    title: str
    file_url: str
    file_name: str
    file_size: int


class DocumentsListResponse(BaseModel):
    documents: list[Document] = []
