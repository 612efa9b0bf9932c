"""HTTP client capability used for dynamic connector calls."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

import httpx

from designer_connectors.errors import HttpClientError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpRequestOptions:
    uri: str
    query_parameters: Mapping[str, Any] = field(default_factory=dict)
    headers: Mapping[str, str] | None = None
    content: Any = None


class HttpClient(Protocol):
    """Transport boundary: each call resolves to the decoded JSON body."""

    async def get(self, options: HttpRequestOptions) -> Any:
        ...

    async def post(self, options: HttpRequestOptions) -> Any:
        ...

    async def put(self, options: HttpRequestOptions) -> Any:
        ...


class HttpxHttpClient:
    """``httpx.AsyncClient`` backed implementation of :class:`HttpClient`."""

    def __init__(
        self,
        *,
        timeout_seconds: float = 60.0,
        default_headers: Mapping[str, str] | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._default_headers = dict(default_headers or {})
        self._client = http_client or httpx.AsyncClient(timeout=timeout_seconds)
        self._owns_client = http_client is None

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> HttpxHttpClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def get(self, options: HttpRequestOptions) -> Any:
        return await self._send("GET", options)

    async def post(self, options: HttpRequestOptions) -> Any:
        return await self._send("POST", options)

    async def put(self, options: HttpRequestOptions) -> Any:
        return await self._send("PUT", options)

    async def _send(self, method: str, options: HttpRequestOptions) -> Any:
        headers = {**self._default_headers, **dict(options.headers or {})}
        try:
            response = await self._client.request(
                method,
                options.uri,
                params=_query_params(options.query_parameters),
                headers=headers,
                json=options.content,
            )
        except httpx.HTTPError as exc:
            raise HttpClientError(str(exc) or f"{method} {options.uri} failed.", code="HTTP_UNAVAILABLE") from exc
        return self._parse_response(response)

    def _parse_response(self, response: httpx.Response) -> Any:
        body = _decode_body(response)
        if response.status_code >= 400:
            logger.debug("Dynamic call returned HTTP %s for %s", response.status_code, response.request.url)
            raise HttpClientError(
                _error_message(body) or response.text or f"Request failed with status {response.status_code}.",
                code="HTTP_REQUEST_FAILED",
                status_code=response.status_code,
                body=body,
            )
        return body


def _query_params(values: Mapping[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as exc:
        if response.status_code >= 400:
            return None
        raise HttpClientError(
            "Response is not valid JSON.",
            code="HTTP_BAD_RESPONSE_JSON",
            status_code=response.status_code,
        ) from exc


def _error_message(body: Any) -> str | None:
    if not isinstance(body, Mapping):
        return None
    error = body.get("error")
    if isinstance(error, Mapping) and isinstance(error.get("message"), str):
        return error["message"]
    if isinstance(body.get("message"), str):
        return body["message"]
    return None


__all__ = ["HttpClient", "HttpRequestOptions", "HttpxHttpClient"]
