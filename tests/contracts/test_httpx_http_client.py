"""Contract tests for the httpx-backed HttpClient."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from designer_connectors.clients.http_client import HttpRequestOptions, HttpxHttpClient
from designer_connectors.errors import HttpClientError


def _client(handler) -> tuple[HttpxHttpClient, httpx.AsyncClient]:  # type: ignore[no-untyped-def]
    transport_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpxHttpClient(http_client=transport_client, default_headers={"x-ms-user-agent": "designer"}), transport_client


def test_get_sends_query_parameters_and_headers() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"value": [1, 2]})

    client, _ = _client(handler)
    result = asyncio.run(
        client.get(
            HttpRequestOptions(
                uri="https://designer.local/conn/extensions/proxy/items",
                query_parameters={"api-version": "2018-07-01-preview", "top": 5, "skip": None},
                headers={"x-trace": "t-1"},
            )
        )
    )

    assert result == {"value": [1, 2]}
    request = seen[0]
    assert request.method == "GET"
    assert request.url.params["api-version"] == "2018-07-01-preview"
    assert request.url.params["top"] == "5"
    assert "skip" not in request.url.params
    assert request.headers["x-trace"] == "t-1"
    assert request.headers["x-ms-user-agent"] == "designer"
    assert request.content == b""


def test_post_and_put_send_json_content() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    client, _ = _client(handler)
    options = HttpRequestOptions(uri="https://designer.local/dynamicInvoke", content={"request": {"path": "/foo"}})

    asyncio.run(client.post(options))
    asyncio.run(client.put(options))

    assert [request.method for request in seen] == ["POST", "PUT"]
    assert json.loads(seen[0].content) == {"request": {"path": "/foo"}}


def test_empty_body_resolves_to_none() -> None:
    client, _ = _client(lambda request: httpx.Response(204))
    assert asyncio.run(client.get(HttpRequestOptions(uri="https://designer.local/empty"))) is None


def test_error_status_raises_with_connector_message() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"error": {"code": "NotFound", "message": "Connection not found"}})

    client, _ = _client(handler)

    with pytest.raises(HttpClientError) as excinfo:
        asyncio.run(client.get(HttpRequestOptions(uri="https://designer.local/missing")))

    assert str(excinfo.value) == "Connection not found"
    assert excinfo.value.code == "HTTP_REQUEST_FAILED"
    assert excinfo.value.status_code == 404
    assert excinfo.value.body == {"error": {"code": "NotFound", "message": "Connection not found"}}


def test_error_status_with_text_body_uses_text() -> None:
    client, _ = _client(lambda request: httpx.Response(502, text="bad gateway"))

    with pytest.raises(HttpClientError) as excinfo:
        asyncio.run(client.get(HttpRequestOptions(uri="https://designer.local/gateway")))

    assert str(excinfo.value) == "bad gateway"
    assert excinfo.value.status_code == 502


def test_non_json_success_payload_is_rejected() -> None:
    client, _ = _client(lambda request: httpx.Response(200, text="<html>not-json</html>"))

    with pytest.raises(HttpClientError) as excinfo:
        asyncio.run(client.get(HttpRequestOptions(uri="https://designer.local/html")))

    assert excinfo.value.code == "HTTP_BAD_RESPONSE_JSON"


def test_transport_error_is_reported_as_unavailable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client, _ = _client(handler)

    with pytest.raises(HttpClientError) as excinfo:
        asyncio.run(client.get(HttpRequestOptions(uri="https://designer.local/down")))

    assert excinfo.value.code == "HTTP_UNAVAILABLE"
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


def test_injected_async_client_is_not_closed() -> None:
    client, transport_client = _client(lambda request: httpx.Response(200, json={}))
    asyncio.run(client.aclose())
    assert not transport_client.is_closed


def test_owned_async_client_is_closed() -> None:
    async def _run() -> bool:
        async with HttpxHttpClient(timeout_seconds=1.0) as client:
            inner = client._client
        return inner.is_closed

    assert asyncio.run(_run())
