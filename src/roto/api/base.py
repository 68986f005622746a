"""Network error taxonomy for the recipe backend."""

from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of ways a backend call can fail."""

    INVALID_URL = "invalid_url"
    INVALID_RESPONSE = "invalid_response"
    SERVER_ERROR = "server_error"
    DECODING_ERROR = "decoding_error"
    UNKNOWN = "unknown"


class NetworkError(Exception):
    """Base exception for backend call failures."""

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class InvalidURLError(NetworkError):
    """Base URL plus endpoint did not form a usable URL."""

    kind = ErrorKind.INVALID_URL


class InvalidResponseError(NetworkError):
    """The transport did not return a well-formed HTTP response."""

    kind = ErrorKind.INVALID_RESPONSE


class ServerError(NetworkError):
    """HTTP status outside 200-299."""

    kind = ErrorKind.SERVER_ERROR

    def __init__(self, status_code: int, detail: str | None = None):
        super().__init__(f"Server returned status {status_code}", status_code=status_code)
        self.detail = detail


class DecodingError(NetworkError):
    """Response body did not match the expected shape."""

    kind = ErrorKind.DECODING_ERROR


class UnknownNetworkError(NetworkError):
    """Any other failure: timeout, DNS, TLS, connection reset."""

    kind = ErrorKind.UNKNOWN

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause


_MESSAGES = {
    ErrorKind.INVALID_URL: "Invalid URL configuration",
    ErrorKind.INVALID_RESPONSE: "Invalid response from server",
    ErrorKind.DECODING_ERROR: "Error processing server response",
    ErrorKind.UNKNOWN: "An unexpected error occurred",
}


def user_message(error: NetworkError) -> str:
    """Short text a screen can show for a failed generation."""
    if isinstance(error, ServerError):
        return f"Server error: {error.status_code}"
    return _MESSAGES[error.kind]
