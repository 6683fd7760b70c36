from .errors import (
    APIClientError,
    ClientError,
    ConfigurationError,
    DecodingError,
    HTTPStatusError,
    InformationalResponseError,
    InvalidRequestError,
    InvalidURLError,
    NilDataError,
    RedirectionResponseError,
    ServerError,
    TransportError,
    error_for_status,
)
from .metrics import MetricsSnapshot
from .outcome import Outcome

__all__ = [
    "APIClientError",
    "ClientError",
    "ConfigurationError",
    "DecodingError",
    "HTTPStatusError",
    "InformationalResponseError",
    "InvalidRequestError",
    "InvalidURLError",
    "MetricsSnapshot",
    "NilDataError",
    "Outcome",
    "RedirectionResponseError",
    "ServerError",
    "TransportError",
    "error_for_status",
]
