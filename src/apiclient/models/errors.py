from typing import Optional


class ConfigurationError(Exception):
    """Raised when client configuration read from the environment is invalid."""

    pass


class APIClientError(Exception):
    """Base class for every failure reported by a fetch."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class InvalidURLError(APIClientError):
    def __init__(self, url: str, reason: Optional[str] = None) -> None:
        self.url = url
        message = f"Invalid URL: {url!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class InvalidRequestError(APIClientError):
    """The request or its result type could not be built.

    Raised before anything is sent, e.g. for header values httpx cannot
    encode or a result type pydantic cannot generate a schema for.
    """

    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(f"Invalid request: {type(cause).__name__}: {cause}")


class NilDataError(APIClientError):
    def __init__(self, message: str = "Response contained no data") -> None:
        super().__init__(message)


class DecodingError(APIClientError):
    """The response body is not valid JSON or does not match the result type.

    The underlying pydantic ``ValidationError`` is kept on ``cause`` and is
    also chained as ``__cause__``.
    """

    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(f"Failed to decode response: {cause}")


class TransportError(APIClientError):
    """Network level failure (connection, timeout, protocol) from httpx."""

    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(f"Transport error: {type(cause).__name__}: {cause}")


class HTTPStatusError(APIClientError):
    """A response arrived with a status code outside of 2xx."""

    kind = "HTTP error"

    def __init__(self, status_code: int, body: str = "") -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"{self.kind} (status {status_code})")


class InformationalResponseError(HTTPStatusError):
    kind = "Informational response"


class RedirectionResponseError(HTTPStatusError):
    kind = "Redirection response"


class ClientError(HTTPStatusError):
    kind = "Client error"


class ServerError(HTTPStatusError):
    kind = "Server error"


def error_for_status(status_code: int, body: str = "") -> Optional[HTTPStatusError]:
    """Map a status code to its error, or ``None`` for 2xx.

    Ranges are checked in order; anything that is not 1xx, 2xx, 3xx or 4xx
    (5xx and unknown codes alike) is a :class:`ServerError`.
    """
    if 100 <= status_code <= 199:
        return InformationalResponseError(status_code, body)
    if 200 <= status_code <= 299:
        return None
    if 300 <= status_code <= 399:
        return RedirectionResponseError(status_code, body)
    if 400 <= status_code <= 499:
        return ClientError(status_code, body)
    return ServerError(status_code, body)
