from abc import abstractmethod

from shared.clients.ClientInterface import ClientInterface
from shared.helper.HelperConfig import HelperConfig
from shared.models.search import SearchRequest, SearchResponse, SearchResultItem


class SearchClientInterface(ClientInterface):
    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_client_type(self) -> str:
        return "search"

    ################ ENDPOINTS ##################
    @abstractmethod
    def _get_endpoint_search(self) -> str:
        pass

    ##########################################
    ########### PAYLOAD BUILDER ##############
    ##########################################

    @abstractmethod
    def get_search_payload(self, request: SearchRequest) -> dict:
        """
        Builds the backend-specific request body for a search.
        """
        pass

    ##########################################
    ########### RESPONSE PARSER ##############
    ##########################################

    @abstractmethod
    def _parse_search_hit(self, hit: dict) -> SearchResultItem:
        pass

    def _parse_endpoint_search(self, response: dict) -> SearchResponse:
        return SearchResponse(results=[self._parse_search_hit(hit) for hit in response.get("results", []) or []])

    ##########################################
    ############### REQUESTS #################
    ##########################################

    async def do_search(self, request: SearchRequest) -> SearchResponse:
        """
        Runs a semantic search. The ranking itself happens on the backend.

        Args:
            request (SearchRequest): Query text, optional document filter and a clamped limit.

        Returns:
            SearchResponse: The ranked result chunks.

        Raises:
            TransportError: If the search service could not be reached.
            ServiceError: If the search service rejected the query.
        """
        self.logging.info(
            "Searching %s - query=%r document_id=%s limit=%d",
            self.get_engine_name(),
            request.query[:80],
            request.document_id,
            request.limit,
        )
        resp = await self.do_request(
            method="POST",
            json=self.get_search_payload(request),
            endpoint=self._get_endpoint_search(),
            raise_on_error=True,
        )
        return self._parse_endpoint_search(resp.json())
