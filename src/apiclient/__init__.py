"""Single-shot HTTP request helper with typed JSON decoding and call metrics."""

from ._api_client import APIClient
from ._config import Config
from ._metrics import MetricsAggregator
from ._services import FetchService
from ._utils import RequestSpec
from .models import (
    APIClientError,
    ClientError,
    ConfigurationError,
    DecodingError,
    HTTPStatusError,
    InformationalResponseError,
    InvalidRequestError,
    InvalidURLError,
    MetricsSnapshot,
    NilDataError,
    Outcome,
    RedirectionResponseError,
    ServerError,
    TransportError,
)

__all__ = [
    "APIClient",
    "APIClientError",
    "ClientError",
    "Config",
    "ConfigurationError",
    "DecodingError",
    "FetchService",
    "HTTPStatusError",
    "InformationalResponseError",
    "InvalidRequestError",
    "InvalidURLError",
    "MetricsAggregator",
    "MetricsSnapshot",
    "NilDataError",
    "Outcome",
    "RedirectionResponseError",
    "RequestSpec",
    "ServerError",
    "TransportError",
]
