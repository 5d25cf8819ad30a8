"""Exception taxonomy shared by the store and the HTTP boundary."""

from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_503_SERVICE_UNAVAILABLE,
)


class HashBrownsError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code: int = HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthorized(HashBrownsError):
    """Raised when the request host is not on the allowlist."""

    status_code = HTTP_403_FORBIDDEN
    default_message = "Be patient with everyone."


class BadRequest(HashBrownsError):
    """Raised for a missing key, an empty body or an unsupported method."""

    status_code = HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class NotFound(HashBrownsError):
    """Raised when a key has no stored value."""

    status_code = HTTP_404_NOT_FOUND
    default_message = "Value not found"


class StorageUnavailable(HashBrownsError):
    """Raised when the storage backend cannot be reached."""

    status_code = HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Storage unavailable"
