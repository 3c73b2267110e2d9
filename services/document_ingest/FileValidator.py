"""Precondition checks for candidate uploads."""

from pydantic import BaseModel

from shared.helper.HelperConfig import HelperConfig
from shared.models.upload import UploadFile

MAX_FILE_SIZE = 50 * 1024 * 1024
PDF_MIME_TYPE = "application/pdf"


class FileValidationResult(BaseModel):
    valid: bool
    reason: str | None = None


class FileValidator:
    """Checks size and media type of a file before anything is sent over the network."""

    def __init__(self, max_file_size: int = MAX_FILE_SIZE, allowed_types: list[str] | None = None) -> None:
        self.max_file_size = max_file_size
        self.allowed_types = allowed_types or [PDF_MIME_TYPE]

    @classmethod
    def from_config(cls, helper_config: HelperConfig) -> "FileValidator":
        return cls(
            max_file_size=int(helper_config.get_number_val("UPLOAD_MAX_FILE_SIZE", default=MAX_FILE_SIZE)),
            allowed_types=helper_config.get_list_val("UPLOAD_ALLOWED_TYPES", default=[PDF_MIME_TYPE]),
        )

    def validate(self, file: UploadFile) -> FileValidationResult:
        """Validate a candidate upload. Size is checked before type.

        Args:
            file (UploadFile): The candidate file.

        Returns:
            FileValidationResult: valid=True, or valid=False with a human-readable reason.
        """
        if file.size > self.max_file_size:
            return FileValidationResult(
                valid=False,
                reason=f"File size exceeds {self.max_file_size / (1024 * 1024):g}MB limit",
            )
        if file.content_type not in self.allowed_types:
            if self.allowed_types == [PDF_MIME_TYPE]:
                return FileValidationResult(valid=False, reason="Only PDF files are allowed")
            return FileValidationResult(valid=False, reason=f"Only files of type {', '.join(self.allowed_types)} are allowed")
        return FileValidationResult(valid=True)
