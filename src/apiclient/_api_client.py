from concurrent.futures import Future
from logging import getLogger
from typing import Any, Optional, Union

from dotenv import load_dotenv

from ._config import Config
from ._metrics import MetricsAggregator
from ._services.fetch_service import Completion, FetchService
from ._utils._logs import setup_logging
from ._utils._request_spec import RequestSpec
from ._utils.constants import LOGGER_NAME
from .models.outcome import Outcome

load_dotenv()


class APIClient:
    """Entry point that wires configuration, metrics and the fetch service.

    Build one instance at the application's composition root and pass it to
    whatever needs to issue requests. Every fetch made through the same
    instance feeds the same :attr:`metrics`.

    Examples:
        ```python
        from pydantic import BaseModel

        from apiclient import APIClient


        class Item(BaseModel):
            id: int
            name: str


        with APIClient(token="secret") as client:
            items = client.fetch(
                "https://api.example.com/items",
                parameters={"q": "shoes", "limit": 10},
                result_type=list[Item],
            )
            print(client.metrics.success_rate())
        ```
    """

    def __init__(
        self,
        *,
        timeout: Optional[float] = None,
        token: Optional[str] = None,
        print_response: Optional[bool] = None,
        debug: Optional[bool] = None,
        follow_redirects: Optional[bool] = None,
        max_workers: Optional[int] = None,
    ) -> None:
        self._config = Config.from_env(
            timeout=timeout,
            token=token,
            print_response=print_response,
            debug=debug,
            follow_redirects=follow_redirects,
            max_workers=max_workers,
        )

        setup_logging(self._config.debug)
        log = getLogger(LOGGER_NAME)

        log.debug("CONFIG:")
        log.debug(f"{self._config.model_dump(exclude={'token'})}\n")

        self._metrics = MetricsAggregator()
        self._fetch_service = FetchService(self._config, self._metrics)

    @property
    def config(self) -> Config:
        return self._config

    @property
    def metrics(self) -> MetricsAggregator:
        return self._metrics

    @property
    def fetch_service(self) -> FetchService:
        return self._fetch_service

    def fetch(
        self,
        base_url: str,
        *,
        method: str = "GET",
        parameters: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
        body: Optional[bytes] = None,
        timeout: Optional[Union[int, float]] = None,
        token: Optional[str] = None,
        print_response: Optional[bool] = None,
        result_type: Any = Any,
    ) -> Any:
        """Issue one request and return the body decoded as ``result_type``.

        Unset ``timeout``, ``token`` and ``print_response`` fall back to the
        client configuration. Raises an :class:`~apiclient.APIClientError`
        subclass on failure.
        """
        spec = self._spec(
            base_url, method, parameters, headers, body, timeout, token, print_response
        )
        return self._fetch_service.fetch(spec, result_type=result_type)

    async def fetch_async(
        self,
        base_url: str,
        *,
        method: str = "GET",
        parameters: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
        body: Optional[bytes] = None,
        timeout: Optional[Union[int, float]] = None,
        token: Optional[str] = None,
        print_response: Optional[bool] = None,
        result_type: Any = Any,
    ) -> Any:
        """Asynchronous version of :meth:`fetch`."""
        spec = self._spec(
            base_url, method, parameters, headers, body, timeout, token, print_response
        )
        return await self._fetch_service.fetch_async(spec, result_type=result_type)

    def submit(
        self,
        base_url: str,
        *,
        completion: Optional[Completion] = None,
        method: str = "GET",
        parameters: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
        body: Optional[bytes] = None,
        timeout: Optional[Union[int, float]] = None,
        token: Optional[str] = None,
        print_response: Optional[bool] = None,
        result_type: Any = Any,
    ) -> "Future[Outcome[Any]]":
        """Dispatch in the background; ``completion`` receives the outcome."""
        spec = self._spec(
            base_url, method, parameters, headers, body, timeout, token, print_response
        )
        return self._fetch_service.submit(
            spec, completion=completion, result_type=result_type
        )

    def close(self) -> None:
        """Stop the worker pool and close the sync transport.

        The async transport is bound to an event loop and is only closed by
        :meth:`aclose`; use ``async with`` once :meth:`fetch_async` was used.
        """
        self._fetch_service.close()

    async def aclose(self) -> None:
        """Stop the worker pool and close both transports."""
        await self._fetch_service.aclose()

    def __enter__(self) -> "APIClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    async def __aenter__(self) -> "APIClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    def _spec(
        self,
        base_url: str,
        method: str,
        parameters: Optional[dict[str, Any]],
        headers: Optional[dict[str, str]],
        body: Optional[bytes],
        timeout: Optional[Union[int, float]],
        token: Optional[str],
        print_response: Optional[bool],
    ) -> RequestSpec:
        return RequestSpec(
            base_url=base_url,
            method=method,
            parameters=parameters,
            headers=headers,
            body=body,
            timeout=self._config.timeout if timeout is None else timeout,
            token=token,
            print_response=(
                self._config.print_response
                if print_response is None
                else print_response
            ),
        )
