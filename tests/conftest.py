from typing import Generator

import pytest

from apiclient._config import Config
from apiclient._metrics import MetricsAggregator
from apiclient._services.fetch_service import FetchService

ENV_VARS = (
    "APICLIENT_TIMEOUT",
    "APICLIENT_ACCESS_TOKEN",
    "APICLIENT_PRINT_RESPONSE",
    "APICLIENT_DEBUG",
    "APICLIENT_FOLLOW_REDIRECTS",
    "APICLIENT_MAX_WORKERS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clean environment variables before each test."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def base_url() -> str:
    return "https://api.example.com"


@pytest.fixture
def token() -> str:
    return "secret-token"


@pytest.fixture
def config() -> Config:
    return Config()


@pytest.fixture
def metrics() -> MetricsAggregator:
    return MetricsAggregator()


@pytest.fixture
def service(
    config: Config, metrics: MetricsAggregator
) -> Generator[FetchService, None, None]:
    service = FetchService(config=config, metrics=metrics)
    yield service
    service.close()


class FakeClock:
    """Manually advanced replacement for ``time.monotonic``."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
