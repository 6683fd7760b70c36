from ._logs import setup_logging
from ._request_spec import PreparedRequest, RequestSpec, prepare_request

__all__ = [
    "PreparedRequest",
    "RequestSpec",
    "prepare_request",
    "setup_logging",
]
