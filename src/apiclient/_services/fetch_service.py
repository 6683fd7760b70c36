import json
from concurrent.futures import Future, ThreadPoolExecutor
from contextlib import contextmanager
from functools import lru_cache
from typing import Any, Callable, Generator, Optional

import httpx
from opentelemetry import trace
from opentelemetry.trace import Span, SpanKind
from pydantic import TypeAdapter, ValidationError

from .._config import Config
from .._metrics import MetricsAggregator
from .._utils._request_spec import PreparedRequest, RequestSpec, prepare_request
from ..models.errors import (
    APIClientError,
    DecodingError,
    InvalidRequestError,
    NilDataError,
    TransportError,
    error_for_status,
)
from ..models.outcome import Outcome
from ._base_service import BaseService

Completion = Callable[[Outcome[Any]], None]

tracer = trace.get_tracer(__name__)


@lru_cache(maxsize=128)
def _type_adapter(result_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(result_type)


def _type_adapter_for(result_type: Any) -> TypeAdapter[Any]:
    try:
        return _type_adapter(result_type)
    except TypeError as e:
        # PydanticSchemaGenerationError and unhashable types both land here
        raise InvalidRequestError(e) from e


def _build(
    build_request: Callable[[PreparedRequest], httpx.Request],
    prepared: PreparedRequest,
) -> httpx.Request:
    try:
        return build_request(prepared)
    except (httpx.InvalidURL, ValueError, TypeError) as e:
        raise InvalidRequestError(e) from e


class FetchService(BaseService):
    """Issues single-shot requests and turns responses into typed results.

    Each call builds its request from a :class:`RequestSpec`, records the
    start in the metrics aggregator, sends it through httpx and classifies
    the response by status range before decoding the JSON body into the
    requested result type. Exactly one outcome is produced per call: the
    decoded value, or one :class:`APIClientError` subclass.

    Three surfaces share that pipeline:

    - :meth:`fetch` blocks the calling thread and raises on failure.
    - :meth:`fetch_async` is awaited on the caller's event loop.
    - :meth:`submit` runs on a worker thread and reports through a
      completion callback and the returned future.
    """

    def __init__(self, config: Config, metrics: MetricsAggregator) -> None:
        super().__init__(config=config)
        self._metrics = metrics
        self._executor = ThreadPoolExecutor(
            max_workers=config.max_workers, thread_name_prefix="apiclient-fetch"
        )

    @property
    def metrics(self) -> MetricsAggregator:
        return self._metrics

    def fetch(self, spec: RequestSpec, result_type: Any = Any) -> Any:
        """Send the request described by ``spec`` and decode the response.

        Args:
            spec: The request to issue.
            result_type: Type the JSON body is validated into. Anything
                pydantic's ``TypeAdapter`` accepts; ``Any`` returns plain JSON.

        Returns:
            The decoded response body.

        Raises:
            InvalidURLError: The URL could not be built. No metrics recorded.
            InvalidRequestError: Headers, body or ``result_type`` could not be
                turned into a request or a decoder. No metrics recorded.
            TransportError: The request failed below HTTP.
            InformationalResponseError: Status 1xx.
            RedirectionResponseError: Status 3xx.
            ClientError: Status 4xx.
            ServerError: Status 5xx or unrecognized.
            NilDataError: A 2xx response without a body.
            DecodingError: The body does not validate as ``result_type``.
        """
        prepared = prepare_request(spec, self._config.token)
        adapter = _type_adapter_for(result_type)
        request = _build(self.build_request, prepared)

        with self._span(prepared) as span:
            self._metrics.record_started()
            try:
                response = self.send(request)
            except httpx.RequestError as e:
                raise self._failed(TransportError(e), prepared) from e
            except Exception:
                self._metrics.record_outcome(False)
                raise
            return self._complete(spec, prepared, response, adapter, span)

    async def fetch_async(self, spec: RequestSpec, result_type: Any = Any) -> Any:
        """Asynchronous version of :meth:`fetch`."""
        prepared = prepare_request(spec, self._config.token)
        adapter = _type_adapter_for(result_type)
        request = _build(self.build_request_async, prepared)

        with self._span(prepared) as span:
            self._metrics.record_started()
            try:
                response = await self.send_async(request)
            except httpx.RequestError as e:
                raise self._failed(TransportError(e), prepared) from e
            except Exception:
                self._metrics.record_outcome(False)
                raise
            return self._complete(spec, prepared, response, adapter, span)

    def submit(
        self,
        spec: RequestSpec,
        completion: Optional[Completion] = None,
        result_type: Any = Any,
    ) -> "Future[Outcome[Any]]":
        """Dispatch ``spec`` on a worker thread without blocking the caller.

        ``completion`` is called exactly once with the :class:`Outcome`, on
        the worker thread, after the transport has finished. The returned
        future resolves to the same outcome. Unexpected exceptions are
        delivered in the outcome too; if ``completion`` itself raises, the
        future holds that exception instead.
        """
        return self._executor.submit(self._run, spec, completion, result_type)

    def close(self) -> None:
        self._executor.shutdown(wait=True)
        super().close()

    async def aclose(self) -> None:
        self._executor.shutdown(wait=True)
        await super().aclose()

    def _run(
        self,
        spec: RequestSpec,
        completion: Optional[Completion],
        result_type: Any,
    ) -> Outcome[Any]:
        try:
            outcome: Outcome[Any] = Outcome.success(self.fetch(spec, result_type))
        except APIClientError as e:
            outcome = Outcome.failure(e)
        except Exception as e:
            self._logger.exception(f"Unexpected error fetching {spec.base_url}")
            outcome = Outcome.failure(e)

        if completion is not None:
            completion(outcome)
        return outcome

    def _complete(
        self,
        spec: RequestSpec,
        prepared: PreparedRequest,
        response: httpx.Response,
        adapter: TypeAdapter[Any],
        span: Span,
    ) -> Any:
        status_code = response.status_code

        span.set_attribute("http.response.status_code", status_code)
        if spec.print_response:
            self._logger.info(f"Status: {status_code}")

        status_error = error_for_status(status_code, response.text)
        if status_error is not None:
            raise self._failed(status_error, prepared)

        if not response.content:
            raise self._failed(NilDataError(), prepared)

        try:
            value = adapter.validate_json(response.content)
        except ValidationError as e:
            raise self._failed(DecodingError(e), prepared) from e

        self._metrics.record_outcome(True)
        if spec.print_response:
            self._print_json(response.content)
        return value

    def _failed(self, error: APIClientError, prepared: PreparedRequest) -> APIClientError:
        self._metrics.record_outcome(False)
        self._logger.warning(f"{prepared.method} {prepared.url} failed: {error}")
        return error

    def _print_json(self, content: bytes) -> None:
        try:
            pretty = json.dumps(json.loads(content), indent=2, ensure_ascii=False)
        except ValueError:
            return
        self._logger.info(pretty)

    @contextmanager
    def _span(self, prepared: PreparedRequest) -> Generator[Span, None, None]:
        with tracer.start_as_current_span(
            "apiclient.fetch",
            kind=SpanKind.CLIENT,
            attributes={
                "http.request.method": prepared.method.upper(),
                "url.full": str(prepared.url),
            },
        ) as span:
            yield span
