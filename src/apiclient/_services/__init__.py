from .fetch_service import FetchService

__all__ = [
    "FetchService",
]
