"""Document registry - the client-side cache of registered documents.

The list only changes through confirmed operations: a successful fetch
replaces it, a successful registration prepends to it and a confirmed delete
removes from it. A failed fetch clears it rather than leaving it stale.
"""

from shared.clients.documents.DocumentClientInterface import DocumentClientInterface
from shared.helper.HelperConfig import HelperConfig
from shared.helper.OperationFence import OperationFence
from shared.models.document import Document
from shared.models.errors import server_message_or


class DocumentRegistry:
    """Authoritative in-memory list of the user's documents, most recent first."""

    def __init__(self, helper_config: HelperConfig, document_client: DocumentClientInterface) -> None:
        self.logging = helper_config.get_logger()
        self._document_client = document_client
        self._fetch_fence = OperationFence("fetch")

        self._documents: list[Document] = []
        self.is_loading = False
        self.error: str | None = None

    ##########################################
    ################ GETTER ##################
    ##########################################

    @property
    def documents(self) -> list[Document]:
        return list(self._documents)

    def get(self, document_id: str) -> Document | None:
        for document in self._documents:
            if document.id == document_id:
                return document
        return None

    def __len__(self) -> int:
        return len(self._documents)

    ##########################################
    ############### MUTATIONS ################
    ##########################################

    def add(self, document: Document) -> None:
        """Prepend a newly registered document, replacing any entry with the same id."""
        self._supersede_fetch()
        self._documents = [document] + [doc for doc in self._documents if doc.id != document.id]

    def _supersede_fetch(self) -> None:
        # a fetch already in flight carries a snapshot older than this mutation
        if self.is_loading:
            self.logging.debug("Local change supersedes fetch #%d", self._fetch_fence.latest)
        self._fetch_fence.issue()
        self.is_loading = False

    def clear_error(self) -> None:
        self.error = None

    def clear(self) -> None:
        self._documents = []

    ##########################################
    ############### REQUESTS #################
    ##########################################

    async def do_fetch(self) -> None:
        """Replace the local list with the documents known to the metadata API.

        On failure the list is cleared and an error recorded; the failure is
        not re-raised. Only the most recently started fetch may write.
        """
        token = self._fetch_fence.issue()
        self.is_loading = True
        self.error = None
        try:
            documents = await self._document_client.do_fetch_documents()
        except Exception as e:
            if not self._fetch_fence.is_current(token):
                self.logging.debug("Discarding failure of superseded fetch #%d: %s", token, e)
                return
            self.logging.error("Fetching documents failed: %s", e)
            self._documents = []
            self.error = server_message_or(e, "Failed to fetch documents")
            self.is_loading = False
            return

        if not self._fetch_fence.is_current(token):
            self.logging.debug("Discarding result of superseded fetch #%d", token)
            return
        self._documents = list(documents)
        self.is_loading = False
        self.logging.info("Document registry loaded with %d documents", len(self._documents))

    async def do_delete(self, document_id: str) -> None:
        """Delete a document remotely, then drop it from the local list.

        The local list is only touched after the metadata API confirmed the
        deletion.

        Raises:
            WorkspaceError: If the deletion failed. The error is also recorded.
        """
        try:
            await self._document_client.do_delete_document(document_id)
        except Exception as e:
            self.logging.error("Deleting document %s failed: %s", document_id, e)
            self.error = server_message_or(e, "Failed to delete document")
            raise
        self._supersede_fetch()
        self._documents = [doc for doc in self._documents if doc.id != document_id]
