from abc import abstractmethod

from shared.clients.ClientInterface import ClientInterface
from shared.helper.HelperConfig import HelperConfig
from shared.models.document import Document, DocumentCreateRequest, DocumentsListResponse


class DocumentClientInterface(ClientInterface):
    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_client_type(self) -> str:
        return "documents"

    ################ ENDPOINTS ##################
    @abstractmethod
    def _get_endpoint_documents(self) -> str:
        """
        Returns the endpoint path for listing and creating documents (e.g. "/api/documents").
        """
        pass

    @abstractmethod
    def _get_endpoint_document_details(self, document_id: str) -> str:
        """
        Returns the endpoint path for a single document (e.g. "/api/documents/{id}").

        Args:
            document_id (str): The ID of the document.
        """
        pass

    ##########################################
    ########### PAYLOAD BUILDER ##############
    ##########################################

    @abstractmethod
    def get_create_payload(self, request: DocumentCreateRequest) -> dict:
        pass

    ##########################################
    ########### RESPONSE PARSER ##############
    ##########################################

    @abstractmethod
    def _parse_endpoint_document(self, response: dict) -> Document:
        pass

    def _parse_endpoint_documents(self, response: dict | list) -> DocumentsListResponse:
        """
        Parses a listing response. Accepts both {"documents": [...]} and a bare list.
        """
        items = response.get("documents", []) if isinstance(response, dict) else response
        return DocumentsListResponse(documents=[self._parse_endpoint_document(item) for item in items or []])

    ##########################################
    ############### REQUESTS #################
    ##########################################

    async def do_create_document(self, request: DocumentCreateRequest) -> Document:
        """
        Registers the metadata of a file that already sits in the remote store.

        Returns:
            Document: The created document record.

        Raises:
            TransportError: If the metadata API could not be reached.
            ServiceError: If the metadata API rejected the registration.
        """
        resp = await self.do_request(
            method="POST",
            json=self.get_create_payload(request),
            endpoint=self._get_endpoint_documents(),
            raise_on_error=True,
        )
        document = self._parse_endpoint_document(resp.json())
        self.logging.info("Registered document %s (%r) on %s", document.id, document.title[:60], self.get_engine_name())
        return document

    async def do_fetch_documents(self) -> list[Document]:
        """
        Fetches all documents of the current user.

        Raises:
            TransportError: If the metadata API could not be reached.
            ServiceError: If the metadata API rejected the request.
        """
        resp = await self.do_request(method="GET", endpoint=self._get_endpoint_documents(), raise_on_error=True)
        documents = self._parse_endpoint_documents(resp.json()).documents
        self.logging.info("Fetched %d documents from %s", len(documents), self.get_engine_name())
        return documents

    async def do_delete_document(self, document_id: str) -> None:
        """
        Deletes a document by id.

        Raises:
            TransportError: If the metadata API could not be reached.
            ServiceError: If the metadata API rejected the deletion.
        """
        await self.do_request(
            method="DELETE",
            endpoint=self._get_endpoint_document_details(document_id),
            raise_on_error=True,
        )
        self.logging.info("Deleted document %s on %s", document_id, self.get_engine_name())
