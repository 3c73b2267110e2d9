import asyncio
import logging

import pytest

from shared.helper.HelperConfig import HelperConfig
from shared.models.document import Document, DocumentCreateRequest
from shared.models.errors import ServiceError
from shared.models.search import SearchRequest, SearchResponse, SearchResultItem
from shared.models.upload import BlobUploadResult, UploadFile

_WORKSPACE_ENV = [
    "UPLOAD_MAX_FILE_SIZE",
    "UPLOAD_ALLOWED_TYPES",
    "UPLOAD_SIMULATE_PROGRESS",
    "UPLOAD_PROGRESS_INTERVAL",
    "UPLOAD_PROGRESS_STEP",
    "UPLOAD_PROGRESS_CEILING",
    "UPLOAD_RESET_DELAY",
    "SEARCH_DEFAULT_LIMIT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in _WORKSPACE_ENV:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def helper_config() -> HelperConfig:
    return HelperConfig(logger=logging.getLogger("tests"))


def make_document(document_id: str, title: str = "Doc", **kwargs) -> Document:
    defaults = {
        "file_name": f"{title.lower()}.pdf",
        "file_url": f"https://blob.test/{document_id}.pdf",
        "file_size": 1024,
    }
    defaults.update(kwargs)
    return Document(id=document_id, title=title, **defaults)


def make_pdf(name: str = "notes.pdf", size: int = 2048) -> UploadFile:
    return UploadFile.from_bytes(name, b"%PDF" + b"0" * (size - 4))


class FakeBlobClient:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.uploads: list[tuple[str, str]] = []
        self.deleted: list[str] = []

    async def do_upload(self, file: UploadFile, access_token: str) -> BlobUploadResult:
        self.uploads.append((file.name, access_token))
        if self.error:
            raise self.error
        return BlobUploadResult(
            url=f"https://blob.test/stored-{len(self.uploads)}.pdf",
            pathname=f"stored-{len(self.uploads)}.pdf",
            file_size=file.size,
            file_name=file.name,
        )


class FakeDocumentClient:
    """In-memory metadata API. Gates let a test hold a call open until released."""

    def __init__(self, documents: list[Document] | None = None) -> None:
        self.documents = list(documents or [])
        self.create_error: Exception | None = None
        self.fetch_error: Exception | None = None
        self.delete_error: Exception | None = None
        self.create_requests: list[DocumentCreateRequest] = []
        self.create_gates: list[asyncio.Event | None] = []
        self.fetch_gates: list[asyncio.Event | None] = []
        self.fetch_results: list[list[Document] | Exception] = []
        self.delete_calls: list[str] = []
        self.on_delete = None
        self._next_id = 100

    async def do_create_document(self, request: DocumentCreateRequest) -> Document:
        self.create_requests.append(request)
        gate = self.create_gates.pop(0) if self.create_gates else None
        if gate is not None:
            await gate.wait()
        if self.create_error:
            raise self.create_error
        self._next_id += 1
        return Document(
            id=str(self._next_id),
            title=request.title,
            file_name=request.file_name,
            file_url=request.file_url,
            file_size=request.file_size,
        )

    async def do_fetch_documents(self) -> list[Document]:
        gate = self.fetch_gates.pop(0) if self.fetch_gates else None
        result = self.fetch_results.pop(0) if self.fetch_results else None
        if gate is not None:
            await gate.wait()
        if isinstance(result, Exception):
            raise result
        if result is not None:
            return list(result)
        if self.fetch_error:
            raise self.fetch_error
        return list(self.documents)

    async def do_delete_document(self, document_id: str) -> None:
        self.delete_calls.append(document_id)
        if self.on_delete:
            self.on_delete(document_id)
        if self.delete_error:
            raise self.delete_error
        self.documents = [doc for doc in self.documents if doc.id != document_id]


class FakeSearchClient:
    def __init__(self) -> None:
        self.requests: list[SearchRequest] = []
        self.responses: list[list[SearchResultItem] | Exception] = []
        self.gates: list[asyncio.Event | None] = []

    async def do_search(self, request: SearchRequest) -> SearchResponse:
        self.requests.append(request)
        gate = self.gates.pop(0) if self.gates else None
        result = self.responses.pop(0) if self.responses else []
        if gate is not None:
            await gate.wait()
        if isinstance(result, Exception):
            raise result
        return SearchResponse(results=result)


def service_error(message: str | None = None, status_code: int = 500) -> ServiceError:
    return ServiceError(message or f"failed with status {status_code}", status_code=status_code, server_message=message)


@pytest.fixture
def blob_client() -> FakeBlobClient:
    return FakeBlobClient()


@pytest.fixture
def document_client() -> FakeDocumentClient:
    return FakeDocumentClient()


@pytest.fixture
def search_client() -> FakeSearchClient:
    return FakeSearchClient()
