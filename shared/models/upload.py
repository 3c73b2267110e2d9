"""Pydantic models for the upload workflow.

  UploadFile          - candidate file handle (in-memory bytes or a path on disk).
  BlobUploadResult    - what the remote store reports after storing the bytes.
  UploadMilestone     - named upload stages, each mapped to a progress percentage.
  UploadSession       - ephemeral state of the current upload.
"""

import mimetypes
from enum import Enum
from pathlib import Path

from pydantic import BaseModel


class UploadFile(BaseModel):
    """A file the user picked for upload.

    Either content holds the bytes, or path points at a file on disk that is
    read lazily when the bytes are actually sent.
    """

    name: str
    content_type: str
    size: int
    content: bytes | None = None
    path: str | None = None

    @classmethod
    def from_bytes(cls, name: str, content: bytes, content_type: str = "application/pdf") -> "UploadFile":
        return cls(name=name, content_type=content_type, size=len(content), content=content)

    @classmethod
    def from_path(cls, path: str | Path, content_type: str | None = None) -> "UploadFile":
        """Build a handle for a local file, guessing the media type from its extension."""
        file_path = Path(path)
        if content_type is None:
            content_type = mimetypes.guess_type(file_path.name)[0] or "application/octet-stream"
        return cls(
            name=file_path.name,
            content_type=content_type,
            size=file_path.stat().st_size,
            path=str(file_path),
        )

    @property
    def extension(self) -> str:
        return Path(self.name).suffix.lstrip(".").lower()

    @property
    def stem(self) -> str:
        return Path(self.name).stem

    def read_bytes(self) -> bytes:
        if self.content is not None:
            return self.content
        if self.path is None:
            raise ValueError(f"Upload file '{self.name}' has neither content nor a path.")
        return Path(self.path).read_bytes()


class BlobUploadResult(BaseModel):
    url: str
    pathname: str
    content_type: str | None = None
    content_disposition: str | None = None
    file_size: int
    file_name: str


class UploadMilestone(str, Enum):
    VALIDATED = "validated"
    REMOTE_UPLOAD_COMPLETE = "remote_upload_complete"
    REGISTRATION_PENDING = "registration_pending"
    REGISTRATION_COMPLETE = "registration_complete"


MILESTONE_PROGRESS: dict[UploadMilestone, int] = {
    UploadMilestone.VALIDATED: 10,
    UploadMilestone.REMOTE_UPLOAD_COMPLETE: 50,
    UploadMilestone.REGISTRATION_PENDING: 60,
    UploadMilestone.REGISTRATION_COMPLETE: 100,
}


class UploadStatus(str, Enum):
    IDLE = "idle"
    UPLOADING = "uploading"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class UploadSession(BaseModel):
    """The upload currently owned by an orchestrator."""

    file: UploadFile
    title: str
    generation: int
    status: UploadStatus = UploadStatus.UPLOADING
    error: str | None = None
