import pytest

from services.document_ingest.FileValidator import MAX_FILE_SIZE, FileValidator
from shared.models.upload import UploadFile


def _file(size: int, content_type: str = "application/pdf") -> UploadFile:
    return UploadFile(name="candidate.pdf", content_type=content_type, size=size)


class TestFileValidator:
    def test_accepts_pdf_within_limit(self):
        result = FileValidator().validate(_file(1024))
        assert result.valid is True
        assert result.reason is None

    def test_accepts_pdf_exactly_at_limit(self):
        assert FileValidator().validate(_file(MAX_FILE_SIZE)).valid is True

    @pytest.mark.parametrize("content_type", ["application/pdf", "image/png", "text/plain", ""])
    def test_oversized_file_reports_size_reason_regardless_of_type(self, content_type):
        result = FileValidator().validate(_file(MAX_FILE_SIZE + 1, content_type))
        assert result.valid is False
        assert result.reason == "File size exceeds 50MB limit"

    @pytest.mark.parametrize("content_type", ["image/png", "application/x-pdf", "APPLICATION/PDF", "text/plain"])
    def test_non_pdf_reports_type_reason(self, content_type):
        result = FileValidator().validate(_file(10, content_type))
        assert result.valid is False
        assert result.reason == "Only PDF files are allowed"

    def test_limit_constant_is_fifty_mebibytes(self):
        assert MAX_FILE_SIZE == 52_428_800

    def test_reads_limits_from_config(self, helper_config, monkeypatch):
        monkeypatch.setenv("UPLOAD_MAX_FILE_SIZE", "1048576")
        monkeypatch.setenv("UPLOAD_ALLOWED_TYPES", "[application/pdf, text/plain]")
        validator = FileValidator.from_config(helper_config)

        assert validator.validate(_file(10, "text/plain")).valid is True
        oversized = validator.validate(_file(2 * 1024 * 1024))
        assert oversized.reason == "File size exceeds 1MB limit"
        wrong_type = validator.validate(_file(10, "image/png"))
        assert wrong_type.reason == "Only files of type application/pdf, text/plain are allowed"
