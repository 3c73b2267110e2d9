from pydantic import BaseModel


class EnvConfig(BaseModel):
    """
    A single environment setting a client needs before it can be booted.

    The full variable name is derived by the client as "<TYPE>_<ENGINE>_<ENV_KEY>",
    e.g. "DOCUMENTS_SELFSTUDY_BASE_URL".

    Attributes:
        env_key (str): The engine-relative key, e.g. "BASE_URL".
        val_type (str): One of "string", "number", "bool" and "list".
        default (str | int | float | bool | list | None): Fallback value. None marks the setting as required.
    """

    env_key: str
    val_type: str = "string"
    default: str | int | float | bool | list | None = None

    @property
    def is_required(self) -> bool:
        return self.default is None
