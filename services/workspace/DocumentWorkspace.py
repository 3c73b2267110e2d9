"""Composition root for the document workspace.

Builds the configured clients, owns the state containers (registry, upload
orchestrator, search controller) and controls their lifecycle. Nothing is
created at import time; callers construct, boot() and close() explicitly.
"""

import httpx

from shared.clients.ClientInterface import ClientInterface
from shared.clients.blob.BlobClientInterface import BlobClientInterface
from shared.clients.blob.BlobClientManager import BlobClientManager
from shared.clients.documents.DocumentClientInterface import DocumentClientInterface
from shared.clients.documents.DocumentClientManager import DocumentClientManager
from shared.clients.search.SearchClientInterface import SearchClientInterface
from shared.clients.search.SearchClientManager import SearchClientManager
from shared.helper.HelperConfig import HelperConfig
from shared.models.errors import WorkspaceError
from shared.models.search import PresentedResult
from services.document_ingest.DocumentRegistry import DocumentRegistry
from services.document_ingest.UploadOrchestrator import UploadOrchestrator
from services.document_search import ResultPresenter
from services.document_search.SearchController import SearchController


class DocumentWorkspace:
    def __init__(
        self,
        helper_config: HelperConfig,
        blob_client: BlobClientInterface | None = None,
        document_client: DocumentClientInterface | None = None,
        search_client: SearchClientInterface | None = None,
    ) -> None:
        self.logging = helper_config.get_logger()
        self.helper_config = helper_config

        self.blob_client = blob_client or BlobClientManager(helper_config=helper_config).get_client()
        self.document_client = document_client or DocumentClientManager(helper_config=helper_config).get_client()
        self.search_client = search_client or SearchClientManager(helper_config=helper_config).get_client()

        self.registry = DocumentRegistry(helper_config=helper_config, document_client=self.document_client)
        self.uploader = UploadOrchestrator(
            helper_config=helper_config,
            blob_client=self.blob_client,
            document_client=self.document_client,
            registry=self.registry,
        )
        self.search = SearchController(helper_config=helper_config, search_client=self.search_client)

    def _clients(self) -> list[ClientInterface]:
        return [self.blob_client, self.document_client, self.search_client]

    ##########################################
    ############### LIFECYCLE ################
    ##########################################

    async def boot(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.logging.info("Booting workspace clients...")
        for client in self._clients():
            await client.boot(transport=transport)
        self.logging.info("Workspace clients booted.")

    async def close(self) -> None:
        self.uploader.tracker.close()
        for client in self._clients():
            await client.close()
        self.registry.clear()
        self.search.clear_results()
        self.logging.info("Workspace closed.")

    async def check_connections(self) -> bool:
        """Check the metadata and search services.

        Failures are logged, not raised; the workspace stays usable and the
        individual operations report their own errors.

        Returns:
            bool: True if every checked service answered with a 2xx status.
        """
        healthy = True
        for client in [self.document_client, self.search_client]:
            try:
                result: httpx.Response = await client.do_healthcheck()
            except WorkspaceError as e:
                self.logging.warning("%s client '%s' is not reachable: %s", client.get_client_type(), client.get_engine_name(), e)
                healthy = False
                continue
            if not result.is_success:
                self.logging.warning(
                    "%s client '%s' answered the healthcheck with status %d.",
                    client.get_client_type(),
                    client.get_engine_name(),
                    result.status_code,
                )
                healthy = False
        return healthy

    ##########################################
    ################ VIEWS ###################
    ##########################################

    def presented_results(self) -> list[PresentedResult]:
        """The current search results as display rows, with titles from the registry."""
        return ResultPresenter.present(self.search.results, self.search.query, self.registry.documents)
