import json
import logging
from typing import Any

import pytest
from pydantic import BaseModel
from pytest_httpx import HTTPXMock

from apiclient import APIClient, ClientError, Outcome


class Item(BaseModel):
    id: int
    name: str


@pytest.fixture
def client():
    with APIClient() as client:
        yield client


class TestAPIClient:
    def test_config_from_constructor(self):
        with APIClient(timeout=5, token="1234567890", max_workers=2) as client:
            assert client.config.timeout == 5
            assert client.config.token == "1234567890"
            assert client.config.max_workers == 2

    def test_config_from_env(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("APICLIENT_ACCESS_TOKEN", "from-env")
        monkeypatch.setenv("APICLIENT_TIMEOUT", "7")

        with APIClient() as client:
            assert client.config.token == "from-env"
            assert client.config.timeout == 7

    def test_fetch(
        self, httpx_mock: HTTPXMock, client: APIClient, base_url: str
    ):
        httpx_mock.add_response(
            url=f"{base_url}/items?q=shoes&limit=10",
            json={"id": 1, "name": "shoe"},
        )

        result = client.fetch(
            f"{base_url}/items",
            parameters={"q": "shoes", "limit": 10},
            result_type=Item,
        )

        assert result == Item(id=1, name="shoe")
        assert client.metrics.total_count() == 1
        assert client.metrics.successful_count() == 1

    def test_default_timeout_from_config(self, httpx_mock: HTTPXMock, base_url: str):
        httpx_mock.add_response(url=f"{base_url}/items", json=[])

        with APIClient(timeout=9) as client:
            client.fetch(f"{base_url}/items")

        sent_request = httpx_mock.get_request()
        if sent_request is None:
            raise Exception("No request was sent")

        assert sent_request.extensions["timeout"]["read"] == 9

    def test_call_token_overrides_configured_token(
        self, httpx_mock: HTTPXMock, base_url: str
    ):
        httpx_mock.add_response(url=f"{base_url}/me", json={}, is_reusable=True)

        with APIClient(token="configured") as client:
            client.fetch(f"{base_url}/me")
            client.fetch(f"{base_url}/me", token="per-call")

        first, second = httpx_mock.get_requests()
        assert first.headers.get_list("Authorization") == ["Bearer configured"]
        assert second.headers.get_list("Authorization") == ["Bearer per-call"]

    def test_client_error(
        self, httpx_mock: HTTPXMock, client: APIClient, base_url: str
    ):
        httpx_mock.add_response(
            url=f"{base_url}/items/404", status_code=404, json={"id": 1, "name": "x"}
        )

        with pytest.raises(ClientError) as exc_info:
            client.fetch(f"{base_url}/items/404", result_type=Item)

        assert exc_info.value.status_code == 404
        assert client.metrics.failed_count() == 1
        assert client.metrics.success_rate() == 0.0

    def test_submit(self, httpx_mock: HTTPXMock, client: APIClient, base_url: str):
        httpx_mock.add_response(
            url=f"{base_url}/items", method="POST", json={"id": 5, "name": "new"}
        )
        received: list[Outcome[Any]] = []

        future = client.submit(
            f"{base_url}/items",
            method="POST",
            parameters={"name": "new"},
            completion=received.append,
            result_type=Item,
        )

        assert future.result(timeout=10).unwrap() == Item(id=5, name="new")
        assert len(received) == 1

    def test_success_rate_across_calls(
        self, httpx_mock: HTTPXMock, client: APIClient, base_url: str
    ):
        httpx_mock.add_response(url=f"{base_url}/ok", json={}, is_reusable=True)
        httpx_mock.add_response(url=f"{base_url}/missing", status_code=404)

        for _ in range(3):
            client.fetch(f"{base_url}/ok")
        with pytest.raises(ClientError):
            client.fetch(f"{base_url}/missing")

        assert client.metrics.success_rate() == 75.0
        assert client.metrics.requests_per_minute() == 4.0

    @pytest.mark.anyio
    async def test_fetch_async(self, httpx_mock: HTTPXMock, base_url: str):
        httpx_mock.add_response(
            url=f"{base_url}/items/1", json={"id": 1, "name": "shoe"}
        )

        async with APIClient() as client:
            result = await client.fetch_async(f"{base_url}/items/1", result_type=Item)

            assert result == Item(id=1, name="shoe")
            assert client.metrics.successful_count() == 1

    @pytest.mark.anyio
    async def test_aclose_closes_both_transports(
        self, httpx_mock: HTTPXMock, base_url: str
    ):
        httpx_mock.add_response(url=f"{base_url}/items", json=[], is_reusable=True)

        async with APIClient() as client:
            client.fetch(f"{base_url}/items")
            await client.fetch_async(f"{base_url}/items")

        assert client.fetch_service._client.is_closed
        assert client.fetch_service._client_async.is_closed

    def test_close_leaves_async_transport_to_aclose(self):
        client = APIClient()
        client.close()

        assert client.fetch_service._client.is_closed
        assert not client.fetch_service._client_async.is_closed

    @pytest.mark.parametrize("from_env", [False, True])
    def test_print_response_configured_client_wide(
        self,
        httpx_mock: HTTPXMock,
        base_url: str,
        caplog: pytest.LogCaptureFixture,
        monkeypatch: pytest.MonkeyPatch,
        from_env: bool,
    ):
        httpx_mock.add_response(
            url=f"{base_url}/items/1", json={"id": 1, "name": "shoe"}
        )
        caplog.set_level(logging.INFO, logger="apiclient")
        if from_env:
            monkeypatch.setenv("APICLIENT_PRINT_RESPONSE", "true")
            client = APIClient()
        else:
            client = APIClient(print_response=True)

        with client:
            assert client.config.print_response is True
            client.fetch(f"{base_url}/items/1", result_type=Item)

        messages = [
            record.getMessage()
            for record in caplog.records
            if record.name == "apiclient"
        ]
        assert "Status: 200" in messages
        assert json.dumps({"id": 1, "name": "shoe"}, indent=2) in messages

    def test_print_response_overridden_per_call(
        self,
        httpx_mock: HTTPXMock,
        base_url: str,
        caplog: pytest.LogCaptureFixture,
    ):
        httpx_mock.add_response(url=f"{base_url}/items", json=[])
        caplog.set_level(logging.INFO, logger="apiclient")

        with APIClient(print_response=True) as client:
            client.fetch(f"{base_url}/items", print_response=False)

        assert "Status: 200" not in [
            record.getMessage()
            for record in caplog.records
            if record.name == "apiclient"
        ]
