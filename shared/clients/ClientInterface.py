from abc import ABC, abstractmethod

import httpx
from typing import Any
from shared.models.config import EnvConfig
from shared.models.errors import ServiceError, StateError, TransportError

from shared.helper.HelperConfig import HelperConfig


class ClientInterface(ABC):
    def __init__(self, helper_config: HelperConfig):
        self.logging = helper_config.get_logger()
        self._helper_config = helper_config
        self.timeout = helper_config.get_number_val(f"{self.get_client_type().upper()}_TIMEOUT", default=30.0)

        self._client: httpx.AsyncClient | None = None
        self.validate_full_configuration()

    ##########################################
    ############### CHECKER ##################
    ##########################################

    def validate_full_configuration(self) -> None:
        """
        Validates that all required configuration values for the client are set and valid.

        Raises:
            ValueError: If any required configuration value is missing or invalid.
        """
        for config in self._get_required_config():
            _ = self.get_config_val(raw_key=config.env_key, default=config.default, val_type=config.val_type)

    def is_booted(self) -> bool:
        return self._client is not None

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def get_client_type(self) -> str:
        """
        Returns the type of the client in lowercase. E.g. "documents"
        """
        return self._get_client_type().lower()

    @abstractmethod
    def _get_client_type(self) -> str:
        pass

    def get_engine_name(self) -> str:
        """
        Returns the name of the engine used by the client in lowercase. E.g. "vercel"
        """
        return self._get_engine_name().lower()

    @abstractmethod
    def _get_engine_name(self) -> str:
        pass

    ################ CONFIG ##################
    @abstractmethod
    def _get_required_config(self) -> list[EnvConfig]:
        """
        Returns all configuration settings the client reads.

        Returns:
            list[EnvConfig]: A list containing the details of each configuration key.
        """
        pass

    def _get_config_key_name(self, raw_key: str) -> str:
        """
        Returns:
            str: The full configuration key name for the client. E.g. "SEARCH_SELFSTUDY_BASE_URL"
        """
        key_prefix = f"{self.get_client_type().upper()}_{self.get_engine_name().upper()}"
        return f"{key_prefix}_{raw_key.upper()}"

    def get_config_val(self, raw_key: str, default: Any = None, val_type: str = "string") -> Any:
        """
        Retrieves the value of a configuration key for the client.

        Args:
            raw_key (str): The engine-relative configuration key name
            default (Any): The value to return if the configuration key is not set
            val_type (str): The type of the configuration value ("string", "number", "bool", "list")
        """
        key = self._get_config_key_name(raw_key)
        if val_type == "string":
            return self._helper_config.get_string_val(key, default=default)
        elif val_type == "number":
            return self._helper_config.get_number_val(key, default=default)
        elif val_type == "bool":
            return self._helper_config.get_bool_val(key, default=default)
        elif val_type == "list":
            return self._helper_config.get_list_val(key, default=default)
        else:
            raise ValueError(f"Unsupported config value type '{val_type}' for env key '{raw_key}' in {self.get_client_type().upper()} client '{self.get_engine_name()}'.")

    ################ AUTH ##################
    @abstractmethod
    def _get_auth_header(self) -> dict:
        """
        Returns the default authentication header for the backend, or an empty dict.
        """
        pass

    ################ ENDPOINTS ##################
    @abstractmethod
    def _get_base_url(self) -> str:
        """
        Returns the base URL of the backend (e.g. "http://localhost:8000").
        """
        pass

    @abstractmethod
    def _get_endpoint_healthcheck(self) -> str:
        pass

    ##########################################
    ########### RESPONSE PARSER ##############
    ##########################################

    def _extract_error_message(self, response: httpx.Response) -> str | None:
        """
        Extracts the human-readable failure message from an error response.

        Understands {"error": "..."}, {"error": {"message": "..."}}, {"message": "..."}
        and {"detail": "..."} bodies.

        Returns:
            str | None: The message, or None if the body carries none.
        """
        try:
            body = response.json()
        except ValueError:
            return None
        if not isinstance(body, dict):
            return None
        message = body.get("error") or body.get("message") or body.get("detail")
        if isinstance(message, dict):
            message = message.get("message")
        if isinstance(message, str) and message.strip():
            return message.strip()
        return None

    ##########################################
    ############### REQUESTS #################
    ##########################################

    async def do_healthcheck(self) -> httpx.Response:
        """Check if the backend is healthy by sending a test request."""
        return await self.do_request(method="GET", endpoint=self._get_endpoint_healthcheck())

    ##########################################
    ############ CORE REQUESTS ###############
    ##########################################

    async def boot(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        """Initialise the HTTP client.

        Args:
            transport: Optional transport override, e.g. an httpx.MockTransport.
        """
        self._client = httpx.AsyncClient(timeout=self.timeout, transport=transport)

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def do_request(
        self,
        method: str = "GET",
        endpoint: str = "",
        content: bytes | None = None,
        json: dict | None = None,
        additional_headers: dict | None = None,
        raise_on_error: bool = False,
    ) -> httpx.Response:
        """Send an HTTP request to the backend.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE).
            endpoint: Path appended to the base URL; a leading slash is optional.
            content: Raw bytes body. The caller passes its media type via additional_headers.
            json: JSON body. Ignored when content is given.
            additional_headers: Extra headers that override the auth header.
            raise_on_error: Raise ServiceError on a non-2xx status.

        Returns:
            The raw httpx.Response.

        Raises:
            StateError: If the client was not booted.
            TransportError: If the backend could not be reached.
            ServiceError: If raise_on_error is set and the status is not 2xx.
        """
        if self._client is None:
            raise StateError(f"{self.get_client_type()} client is not booted. Call boot() before making requests.")

        path = endpoint.strip().lstrip("/")
        url = f"{self._get_base_url().rstrip('/')}/{path}" if path else self._get_base_url().rstrip("/")
        headers = {**self._get_auth_header(), **(additional_headers or {})}

        try:
            if content is not None:
                response = await self._client.request(method, url, headers=headers, content=content)
            else:
                response = await self._client.request(method, url, headers=headers, json=json)
        except httpx.HTTPError as e:
            self.logging.error("%s %s could not be completed: %s", method, url, e)
            raise TransportError(f"Could not reach {self.get_client_type()} service: {e}") from e

        if raise_on_error and not response.is_success:
            server_message = self._extract_error_message(response)
            self.logging.error("%s %s answered %d: %s", method, url, response.status_code, server_message or response.text)
            raise ServiceError(
                server_message or f"Request to {url} failed with status {response.status_code}",
                status_code=response.status_code,
                server_message=server_message,
            )

        return response
