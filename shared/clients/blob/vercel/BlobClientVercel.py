from shared.clients.blob.BlobClientInterface import BlobClientInterface
from shared.helper.HelperConfig import HelperConfig
from shared.models.config import EnvConfig
from shared.models.upload import BlobUploadResult, UploadFile


class BlobClientVercel(BlobClientInterface):
    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)
        self._base_url = self.get_config_val("BASE_URL", default="https://blob.vercel-storage.com", val_type="string")
        self._api_version = self.get_config_val("API_VERSION", default="7", val_type="string")

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_engine_name(self) -> str:
        return "Vercel"

    ################ CONFIG ##################
    def _get_required_config(self) -> list[EnvConfig]:
        return [
            EnvConfig(env_key="BASE_URL", val_type="string", default="https://blob.vercel-storage.com"),
            EnvConfig(env_key="API_VERSION", val_type="string", default="7"),
        ]

    ################ AUTH ##################
    def _get_auth_header(self) -> dict:
        # the write token is per upload, see _get_upload_headers()
        return {}

    def _get_upload_headers(self, file: UploadFile, access_token: str) -> dict:
        return {
            "Authorization": f"Bearer {access_token}",
            "x-api-version": self._api_version,
            "x-content-type": file.content_type,
            "x-add-random-suffix": "0",
            "Content-Type": file.content_type,
        }

    ################ ENDPOINTS ##################
    def _get_base_url(self) -> str:
        return self._base_url

    def _get_endpoint_healthcheck(self) -> str:
        return "/"

    def _get_endpoint_put(self, storage_name: str) -> str:
        return f"/{storage_name}"

    ##########################################
    ########### RESPONSE PARSER ##############
    ##########################################

    def _parse_upload_response(self, response: dict, file: UploadFile, storage_name: str) -> BlobUploadResult:
        return BlobUploadResult(
            url=response.get("url"),
            pathname=response.get("pathname") or storage_name,
            content_type=response.get("contentType"),
            content_disposition=response.get("contentDisposition"),
            # size and name describe the local file, not the stored object
            file_size=file.size,
            file_name=file.name,
        )
