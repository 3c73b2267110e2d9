from shared.clients.documents.DocumentClientInterface import DocumentClientInterface
from shared.helper.HelperConfig import HelperConfig
from shared.models.config import EnvConfig
from shared.models.document import Document, DocumentCreateRequest


class DocumentClientSelfstudy(DocumentClientInterface):
    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)
        self._base_url = self.get_config_val("BASE_URL", default=None, val_type="string")
        self._api_token = self.get_config_val("API_TOKEN", default="", val_type="string")

    ##########################################
    ################ GETTER ##################
    ##########################################

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

    def _get_endpoint_documents(self) -> str:
        return "/api/documents"

    def _get_endpoint_document_details(self, document_id: str) -> str:
        return f"/api/documents/{document_id}"

    ##########################################
    ########### PAYLOAD BUILDER ##############
    ##########################################

    def get_create_payload(self, request: DocumentCreateRequest) -> dict:
        return request.model_dump()

    ##########################################
    ########### RESPONSE PARSER ##############
    ##########################################

    def _parse_endpoint_document(self, response: dict) -> Document:
        owner_id = response.get("user_id")
        return Document(
            id=str(response.get("id")),
            title=response.get("title") or "",
            file_name=response.get("file_name") or "",
            file_url=response.get("file_url") or "",
            file_size=response.get("file_size") or 0,
            # older backends send uploaded_at instead of created_at
            created_at=response.get("created_at") or response.get("uploaded_at"),
            owner_id=str(owner_id) if owner_id is not None else None,
            page_count=response.get("page_count"),
            processing_status=response.get("processing_status"),
        )
