import uuid
from abc import abstractmethod

from shared.clients.ClientInterface import ClientInterface
from shared.helper.HelperConfig import HelperConfig
from shared.models.errors import ServiceError, TransportError
from shared.models.upload import BlobUploadResult, UploadFile


class BlobClientInterface(ClientInterface):
    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_client_type(self) -> str:
        return "blob"

    def get_storage_name(self, file: UploadFile) -> str:
        """
        Returns a collision-free object name for the file, keeping its extension.
        E.g. "3f1c...e2.pdf"
        """
        return f"{uuid.uuid4()}.{file.extension or 'bin'}"

    ################ ENDPOINTS ##################
    @abstractmethod
    def _get_endpoint_put(self, storage_name: str) -> str:
        """
        Returns the endpoint path the file bytes are PUT to.

        Args:
            storage_name (str): The object name assigned by get_storage_name().
        """
        pass

    ################ AUTH ##################
    @abstractmethod
    def _get_upload_headers(self, file: UploadFile, access_token: str) -> dict:
        """
        Returns the headers for a single upload, including the caller-supplied token.
        """
        pass

    ##########################################
    ########### RESPONSE PARSER ##############
    ##########################################

    @abstractmethod
    def _parse_upload_response(self, response: dict, file: UploadFile, storage_name: str) -> BlobUploadResult:
        pass

    ##########################################
    ############### REQUESTS #################
    ##########################################

    async def do_upload(self, file: UploadFile, access_token: str) -> BlobUploadResult:
        """
        Stores the file bytes in the remote store.

        Args:
            file (UploadFile): The file to store.
            access_token (str): Write token for the remote store, supplied by the caller.

        Returns:
            BlobUploadResult: Remote URL and storage name, plus the local size and file name.

        Raises:
            TransportError: If the remote store could not be reached.
            ServiceError: If the remote store rejected the upload.
        """
        storage_name = self.get_storage_name(file)
        self.logging.info("Uploading '%s' (%d bytes) to %s as %s", file.name, file.size, self.get_engine_name(), storage_name)
        try:
            resp = await self.do_request(
                method="PUT",
                content=file.read_bytes(),
                endpoint=self._get_endpoint_put(storage_name),
                additional_headers=self._get_upload_headers(file, access_token),
                raise_on_error=True,
            )
        except ServiceError as e:
            raise ServiceError(f"Upload failed: {e.message}", status_code=e.status_code, server_message=e.server_message) from e
        except TransportError as e:
            raise TransportError(f"Upload failed: {e.message}") from e
        return self._parse_upload_response(resp.json(), file, storage_name)
