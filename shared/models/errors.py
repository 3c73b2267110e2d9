"""Error taxonomy shared by the clients and the workspace components.

  WorkspaceError     - common base, always carries a human-readable message.
  ValidationError    - local precondition failure, no external call was made.
  StateError         - locally invalid request shape (e.g. an empty search query).
  TransportError     - the external service could not be reached.
  ServiceError       - the external service answered with a failure status.
"""


class WorkspaceError(Exception):
    """Base class for every error raised by the workspace layer."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(WorkspaceError):
    """A candidate upload failed a local precondition check."""


class StateError(WorkspaceError):
    """A request was rejected locally before any external call."""


class TransportError(WorkspaceError):
    """The external service was unreachable or the connection failed."""


class ServiceError(WorkspaceError):
    """The external service rejected the request.

    Attributes:
        status_code (int | None): HTTP status code of the failed response.
        server_message (str | None): The message supplied by the service, if any.
    """

    def __init__(self, message: str, status_code: int | None = None, server_message: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.server_message = server_message


def server_message_or(error: Exception, fallback: str) -> str:
    """Return the service-supplied message of an error, or the fallback text."""
    if isinstance(error, ServiceError) and error.server_message:
        return error.server_message
    return fallback
