"""Search controller - owns the query, filter and limit state and the result list.

Request assembly → remote search → result replacement. Explicit overrides
win over the stored defaults, and the query that was actually sent is written
back after a successful search. Failures are recorded, never re-raised.
"""

from enum import Enum

from shared.clients.search.SearchClientInterface import SearchClientInterface
from shared.helper.HelperConfig import HelperConfig
from shared.helper.OperationFence import OperationFence
from shared.models.errors import StateError, server_message_or
from shared.models.search import DEFAULT_SEARCH_LIMIT, SearchRequest, SearchResultItem, clamp_limit

EMPTY_QUERY_MESSAGE = "Please enter a search query"
SEARCH_FAILED_MESSAGE = "Search failed. Please try again."


class SearchStatus(str, Enum):
    IDLE = "idle"
    SEARCHING = "searching"
    HAS_RESULTS = "has_results"
    ERRORED = "errored"


class SearchController:
    def __init__(self, helper_config: HelperConfig, search_client: SearchClientInterface) -> None:
        self.logging = helper_config.get_logger()
        self._search_client = search_client
        self._fence = OperationFence("search")

        self.query = ""
        self.selected_document_id: str | None = None
        self.limit = clamp_limit(helper_config.get_number_val("SEARCH_DEFAULT_LIMIT", default=DEFAULT_SEARCH_LIMIT))
        self.results: list[SearchResultItem] = []
        self.error: str | None = None
        self.status = SearchStatus.IDLE

    @property
    def is_searching(self) -> bool:
        return self.status == SearchStatus.SEARCHING

    ##########################################
    ################ SETTER ##################
    ##########################################

    def set_query(self, query: str) -> None:
        self.query = query

    def set_selected_document(self, document_id: str | None) -> None:
        self.selected_document_id = document_id

    def set_limit(self, limit: int) -> None:
        """Store the result-count limit, silently clamped into [1, 20]."""
        self.limit = clamp_limit(limit)

    def clear_results(self) -> None:
        """Forget the results and the query that produced them."""
        self.results = []
        self.query = ""
        self.status = SearchStatus.IDLE

    def clear_error(self) -> None:
        self.error = None

    ##########################################
    ################ CORE ####################
    ##########################################

    def build_request(self, query: str | None = None, document_id: str | None = None, limit: int | None = None) -> SearchRequest:
        """Merge explicit overrides with the stored defaults.

        An override that is None, empty or 0 counts as not supplied and the
        stored value is used instead.

        Raises:
            StateError: If the effective query is empty after trimming.
        """
        effective_query = (query or self.query).strip()
        if not effective_query:
            raise StateError(EMPTY_QUERY_MESSAGE)
        return SearchRequest(
            query=effective_query,
            document_id=document_id or self.selected_document_id,
            limit=limit or self.limit,
        )

    async def do_search(self, query: str | None = None, document_id: str | None = None, limit: int | None = None) -> None:
        """Run a search and store its outcome.

        An empty query is rejected locally without calling the search service.
        When searches overlap only the most recently started one may write,
        and a rejected query also supersedes any search still in flight.
        """
        token = self._fence.issue()
        try:
            request = self.build_request(query=query, document_id=document_id, limit=limit)
        except StateError as e:
            self.error = e.message
            self.status = SearchStatus.ERRORED
            return

        self.status = SearchStatus.SEARCHING
        self.error = None
        try:
            response = await self._search_client.do_search(request)
        except Exception as e:
            if not self._fence.is_current(token):
                self.logging.debug("Discarding failure of superseded search #%d: %s", token, e)
                return
            self.logging.error("Search #%d for %r failed: %s", token, request.query[:80], e)
            self.results = []
            self.error = server_message_or(e, SEARCH_FAILED_MESSAGE)
            self.status = SearchStatus.ERRORED
            return

        if not self._fence.is_current(token):
            self.logging.debug("Discarding results of superseded search #%d", token)
            return
        self.results = list(response.results)
        self.query = request.query
        self.error = None
        self.status = SearchStatus.HAS_RESULTS
        self.logging.info("Search #%d for %r returned %d results", token, request.query[:80], len(self.results))
