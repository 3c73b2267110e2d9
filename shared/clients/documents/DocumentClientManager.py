from shared.helper.HelperConfig import HelperConfig
from shared.clients.documents.DocumentClientInterface import DocumentClientInterface


class DocumentClientManager:
    """Manager class to instantiate the configured document metadata client."""

    def __init__(self, helper_config: HelperConfig):
        self.helper_config = helper_config
        self.logging = helper_config.get_logger()
        self.client = self._initialize_client()

    def _get_engine_from_env(self) -> str:
        """Read the document engine name from DOCUMENTS_ENGINE, e.g. "Selfstudy".

        Raises:
            ValueError: If DOCUMENTS_ENGINE is not set or empty.
        """
        engine = self.helper_config.get_string_val("DOCUMENTS_ENGINE")
        return engine.strip().lower().capitalize()

    def _initialize_client(self) -> DocumentClientInterface:
        engine = self._get_engine_from_env()
        class_name = f"DocumentClient{engine}"
        try:
            module = __import__(
                f"shared.clients.documents.{engine.lower()}.{class_name}",
                fromlist=[class_name],
            )
            client_class = getattr(module, class_name)
        except (ImportError, AttributeError) as e:
            raise ValueError("Unsupported documents engine '%s'. Error: %s" % (engine, e))
        client = client_class(helper_config=self.helper_config)
        self.logging.debug("Instantiated documents client for engine: %s", engine)
        return client

    def get_client(self) -> DocumentClientInterface:
        return self.client
