"""Upload orchestrator.

Drives one upload through validate → remote store → metadata registration →
registry update:

  1. FileValidator rejects oversized or non-PDF files before any network call.
  2. The blob client stores the bytes with the caller's access token.
  3. The document client registers title, URL, file name and size.
  4. The created document is prepended to the DocumentRegistry.

A registration failure after a successful blob upload leaves the stored file
without a document record. No compensating delete is issued.
"""

from shared.clients.blob.BlobClientInterface import BlobClientInterface
from shared.clients.documents.DocumentClientInterface import DocumentClientInterface
from shared.helper.HelperConfig import HelperConfig
from shared.helper.OperationFence import OperationFence
from shared.models.document import Document, DocumentCreateRequest
from shared.models.errors import ValidationError, WorkspaceError
from shared.models.upload import UploadFile, UploadMilestone, UploadSession, UploadStatus
from services.document_ingest.DocumentRegistry import DocumentRegistry
from services.document_ingest.FileValidator import FileValidator
from services.document_ingest.ProgressTracker import ProgressTracker


class UploadOrchestrator:
    """Runs uploads and owns the progress, status and error slots shown to the user."""

    def __init__(
        self,
        helper_config: HelperConfig,
        blob_client: BlobClientInterface,
        document_client: DocumentClientInterface,
        registry: DocumentRegistry,
        validator: FileValidator | None = None,
        tracker: ProgressTracker | None = None,
    ) -> None:
        self.logging = helper_config.get_logger()
        self._blob_client = blob_client
        self._document_client = document_client
        self._registry = registry
        self._validator = validator or FileValidator.from_config(helper_config)
        self.tracker = tracker or ProgressTracker(
            interval=float(helper_config.get_number_val("UPLOAD_PROGRESS_INTERVAL", default=0.1)),
            step=int(helper_config.get_number_val("UPLOAD_PROGRESS_STEP", default=10)),
            ceiling=int(helper_config.get_number_val("UPLOAD_PROGRESS_CEILING", default=90)),
        )
        self._simulate_progress = helper_config.get_bool_val("UPLOAD_SIMULATE_PROGRESS", default=False)
        self._reset_delay = float(helper_config.get_number_val("UPLOAD_RESET_DELAY", default=1.0))
        self._fence = OperationFence("upload")

        self.session: UploadSession | None = None
        self.error: str | None = None

    ##########################################
    ################ GETTER ##################
    ##########################################

    @property
    def progress(self) -> int:
        return self.tracker.percent

    @property
    def status(self) -> UploadStatus:
        return self.session.status if self.session else UploadStatus.IDLE

    @property
    def is_uploading(self) -> bool:
        return self.status == UploadStatus.UPLOADING

    def clear_error(self) -> None:
        self.error = None

    ##########################################
    ################ CORE ####################
    ##########################################

    async def do_upload(self, file: UploadFile, title: str, access_token: str) -> Document:
        """Upload a file and register it as a document.

        Args:
            file (UploadFile): The candidate file.
            title (str): Title shown for the document.
            access_token (str): Write token for the remote store.

        Returns:
            Document: The registered document, already prepended to the registry.

        Raises:
            ValidationError: If the file fails validation. No network call is made.
            WorkspaceError: If the remote store or the metadata API failed.
        """
        token = self._fence.issue()
        session = UploadSession(file=file, title=title, generation=token)
        self.session = session
        self.error = None
        self.tracker.reset()
        self.logging.info("Upload #%d started for '%s' (%d bytes)", token, file.name, file.size)

        validation = self._validator.validate(file)
        if not validation.valid:
            error = ValidationError(validation.reason)
            self._fail(session, error)
            raise error
        self._reach(token, UploadMilestone.VALIDATED)

        try:
            blob = await self._blob_client.do_upload(file, access_token)
        except Exception as e:
            self._fail(session, e)
            raise
        self._reach(token, UploadMilestone.REMOTE_UPLOAD_COMPLETE)

        self._reach(token, UploadMilestone.REGISTRATION_PENDING)
        if self._simulate_progress and self._fence.is_current(token):
            self.tracker.start_estimate()
        try:
            document = await self._document_client.do_create_document(
                DocumentCreateRequest(
                    title=title,
                    file_url=blob.url,
                    file_name=blob.file_name,
                    file_size=blob.file_size,
                )
            )
        except Exception as e:
            self.logging.warning("Blob %s was stored but not registered; it stays orphaned.", blob.url)
            self._fail(session, e)
            raise
        finally:
            if self._fence.is_current(token):
                self.tracker.stop_estimate()

        # the document exists server-side, so the registry takes it even if overtaken
        self._registry.add(document)
        session.status = UploadStatus.SUCCEEDED
        if self._fence.is_current(token):
            self.tracker.reach(UploadMilestone.REGISTRATION_COMPLETE)
            self.tracker.schedule_reset(self._reset_delay)
        else:
            self.logging.debug("Upload #%d was superseded, leaving progress untouched", token)
        self.logging.info("Upload #%d complete - document %s registered", token, document.id)
        return document

    ##########################################
    ############### HELPERS ##################
    ##########################################

    def _reach(self, token: int, milestone: UploadMilestone) -> None:
        if self._fence.is_current(token):
            self.tracker.reach(milestone)

    def _fail(self, session: UploadSession, error: Exception) -> None:
        """Record a failed upload. Shared slots are only written for the current upload."""
        message = self._describe(error)
        session.status = UploadStatus.FAILED
        session.error = message
        if not self._fence.is_current(session.generation):
            self.logging.debug("Upload #%d failed after being superseded: %s", session.generation, message)
            return
        self.tracker.reset()
        self.error = message
        self.logging.error("Upload #%d failed: %s", session.generation, message)

    def _describe(self, error: Exception) -> str:
        if isinstance(error, WorkspaceError):
            return error.message
        return str(error) or "Upload failed"
