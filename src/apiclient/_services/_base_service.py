from logging import getLogger

from httpx import AsyncClient, Client, Headers, Request, Response

from .._config import Config
from .._utils._request_spec import PreparedRequest
from .._utils._ssl_context import get_httpx_client_kwargs
from .._utils.constants import HEADER_USER_AGENT, LOGGER_NAME, USER_AGENT


class BaseService:
    def __init__(self, config: Config) -> None:
        self._logger = getLogger(LOGGER_NAME)
        self._config = config

        default_client_kwargs = get_httpx_client_kwargs(
            follow_redirects=self._config.follow_redirects
        )

        client_kwargs = {
            **default_client_kwargs,  # SSL, redirects
            "headers": Headers(self.default_headers),
        }

        self._client = Client(**client_kwargs)
        self._client_async = AsyncClient(**client_kwargs)

        self._logger.debug(f"HEADERS: {self.default_headers}")

        super().__init__()

    def build_request(self, prepared: PreparedRequest) -> Request:
        return self._client.build_request(**prepared.build_kwargs())

    def build_request_async(self, prepared: PreparedRequest) -> Request:
        return self._client_async.build_request(**prepared.build_kwargs())

    def send(self, request: Request) -> Response:
        self._log_request(request)
        return self._client.send(request)

    async def send_async(self, request: Request) -> Response:
        self._log_request(request)
        return await self._client_async.send(request)

    def close(self) -> None:
        """Close the sync client. The async client needs :meth:`aclose`."""
        self._client.close()

    async def aclose(self) -> None:
        """Close both clients."""
        await self._client_async.aclose()
        self._client.close()

    def _log_request(self, request: Request) -> None:
        self._logger.debug(f"Request: {request.method} {request.url}")

    @property
    def default_headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            HEADER_USER_AGENT: USER_AGENT,
            **self.custom_headers,
        }

    @property
    def custom_headers(self) -> dict[str, str]:
        return {}
