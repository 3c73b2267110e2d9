from shared.clients.search.SearchClientInterface import SearchClientInterface
from shared.helper.HelperConfig import HelperConfig
from shared.models.config import EnvConfig
from shared.models.search import SearchRequest, SearchResultItem


class SearchClientSelfstudy(SearchClientInterface):
    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)
        self._base_url = self.get_config_val("BASE_URL", default=None, val_type="string")
        self._api_token = self.get_config_val("API_TOKEN", default="", val_type="string")

    ################ GENERAL ##################
    def _get_engine_name(self) -> str:
        return "Selfstudy"

    ################ CONFIG ##################
    def _get_required_config(self) -> list[EnvConfig]:
        return [
            EnvConfig(env_key="BASE_URL", val_type="string", default=None),
            EnvConfig(env_key="API_TOKEN", val_type="string", default=""),
        ]

    ################ AUTH ##################
    def _get_auth_header(self) -> dict:
        if self._api_token:
            return {"Authorization": f"Bearer {self._api_token}"}
        return {}

    ################ ENDPOINTS ##################
    def _get_base_url(self) -> str:
        return self._base_url

    def _get_endpoint_healthcheck(self) -> str:
        return "/health"

    def _get_endpoint_search(self) -> str:
        return "/api/documents/search"

    ##########################################
    ########### PAYLOAD BUILDER ##############
    ##########################################

    def get_search_payload(self, request: SearchRequest) -> dict:
        payload = {"query": request.query, "limit": request.limit}
        if request.document_id:
            payload["document_id"] = request.document_id
        return payload

    ##########################################
    ########### RESPONSE PARSER ##############
    ##########################################

    def _parse_search_hit(self, hit: dict) -> SearchResultItem:
        return SearchResultItem(
            document_id=str(hit.get("document_id")),
            chunk_id=str(hit.get("chunk_id")),
            content=hit.get("content") or "",
            score=float(hit.get("score") or 0.0),
        )
