"""Adapter that dispatches dynamic connector calls and normalizes their responses.

Three addressing modes share one call path:

* managed identity: ``POST <base_url>/dynamicInvoke`` with the request wrapped
  in an envelope, answered by a ``{statusCode, body, headers}`` envelope;
* ARM resource connectors: proxied through the API Hub connection;
* everything else: proxied through the designer runtime connection.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from enum import Enum
from typing import Any

from designer_connectors.clients.http_client import HttpClient, HttpRequestOptions
from designer_connectors.errors import (
    ConnectorResponseData,
    ConnectorServiceError,
    ConnectorServiceErrorCode,
    RequestFailureData,
    UnsupportedMethodError,
)
from designer_connectors.helpers import get_client_request_id_from_headers, is_arm_resource_id, path_combine
from designer_connectors.messages import (
    DYNAMIC_API_EXECUTION_FAILED,
    DYNAMIC_CALL_DIAGNOSTICS,
    DYNAMIC_CALL_FAILED,
    DYNAMIC_CALL_FAILED_WITH_CODE,
    format_message,
)
from designer_connectors.observability import log_dynamic_call_event
from designer_connectors.schemas import ApiHubServiceDetails, ManagedIdentityRequestProperties

logger = logging.getLogger(__name__)

_COMPONENT = "dynamic_api"
_REQUEST_KEYS = ("method", "path", "body", "queries", "headers")


class ConnectionAddressing(str, Enum):
    MANAGED_IDENTITY = "managedIdentity"
    ARM_RESOURCE = "armResource"
    GENERIC = "generic"


def resolve_addressing(connector_id: str, *, is_managed_identity: bool) -> ConnectionAddressing:
    if is_managed_identity:
        return ConnectionAddressing.MANAGED_IDENTITY
    if is_arm_resource_id(connector_id):
        return ConnectionAddressing.ARM_RESOURCE
    return ConnectionAddressing.GENERIC


def _mapping(value: object) -> Mapping[str, Any]:
    if isinstance(value, Mapping):
        return value
    return {}


def _connector_error_message(envelope: Mapping[str, Any], default_message: str) -> str:
    body = _mapping(envelope.get("body"))
    status_code = envelope.get("statusCode")
    message = body.get("message") or envelope.get("message")
    if status_code is not None and message:
        return format_message(DYNAMIC_CALL_FAILED_WITH_CODE, error_code=status_code, message=message)
    error_message = _mapping(body.get("error")).get("message")
    if error_message is not None:
        return str(error_message)
    return default_message


def unwrap_dynamic_response(raw: Any, request_url: str) -> Any:
    """Return the body of a successful ``dynamicInvoke`` envelope.

    Some transports nest the envelope once more under ``response``. Any status
    other than ``"OK"`` raises ``API_EXECUTION_FAILED_WITH_ERROR`` carrying the
    full envelope.
    """
    root = _mapping(raw)
    envelope = root.get("response")
    if envelope is None:
        envelope = raw
    connector_response = _mapping(envelope)
    if connector_response.get("statusCode") == "OK":
        return connector_response.get("body")

    message = _connector_error_message(
        connector_response,
        format_message(DYNAMIC_CALL_FAILED, url=request_url),
    )
    client_request_id = get_client_request_id_from_headers(connector_response.get("headers"))
    if client_request_id:
        message = f"{message} {format_message(DYNAMIC_CALL_DIAGNOSTICS, client_request_id=client_request_id)}"

    log_dynamic_call_event(
        logger,
        level=logging.WARNING,
        message="Dynamic call returned a failure envelope",
        component=_COMPONENT,
        operation="unwrap",
        uri=request_url,
        error_code=ConnectorServiceErrorCode.API_EXECUTION_FAILED_WITH_ERROR.value,
        statusCode=connector_response.get("statusCode"),
        clientRequestId=client_request_id,
    )
    raise ConnectorServiceError(
        code=ConnectorServiceErrorCode.API_EXECUTION_FAILED_WITH_ERROR,
        message=message,
        data=ConnectorResponseData(connector_response=envelope),
    )


def _properties_payload(
    properties: ManagedIdentityRequestProperties | Mapping[str, Any] | None,
) -> Any:
    if isinstance(properties, ManagedIdentityRequestProperties):
        return properties.to_payload()
    if properties is None:
        return None
    return dict(properties)


class DynamicApiInvoker:
    """Routes a dynamic call to the right endpoint for its connection type."""

    def __init__(
        self,
        *,
        base_url: str,
        api_hub: ApiHubServiceDetails,
        http_client: HttpClient,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_hub = api_hub
        self._http_client = http_client

    def build_uri(self, *, addressing: ConnectionAddressing, connection_id: str, path: str | None) -> str:
        if addressing is ConnectionAddressing.MANAGED_IDENTITY:
            return f"{self._base_url}/dynamicInvoke"
        if addressing is ConnectionAddressing.ARM_RESOURCE:
            base = self._api_hub.base_url.rstrip("/")
        else:
            base = self._base_url
        return path_combine(f"{base}/{connection_id}/extensions/proxy", path)

    async def invoke(
        self,
        *,
        connection_id: str,
        connector_id: str,
        parameters: Mapping[str, Any],
        is_managed_identity: bool = False,
        managed_identity_properties: ManagedIdentityRequestProperties | Mapping[str, Any] | None = None,
    ) -> Any:
        method = parameters.get("method")
        path = parameters.get("path")
        addressing = resolve_addressing(connector_id, is_managed_identity=bool(is_managed_identity))
        uri = self.build_uri(addressing=addressing, connection_id=connection_id, path=path)

        log_dynamic_call_event(
            logger,
            level=logging.DEBUG,
            message="Dispatching dynamic call",
            component=_COMPONENT,
            operation="invoke",
            connector_id=connector_id,
            connection_id=connection_id,
            addressing=addressing.value,
            request_method=method,
            uri=uri,
        )
        try:
            if addressing is ConnectionAddressing.MANAGED_IDENTITY:
                response = await self._http_client.post(
                    HttpRequestOptions(
                        uri=uri,
                        query_parameters={"api-version": self._api_hub.api_version},
                        content={
                            "request": {key: parameters[key] for key in _REQUEST_KEYS if key in parameters},
                            "properties": _properties_payload(managed_identity_properties),
                        },
                    )
                )
            else:
                response = await self._dispatch_proxy(method=method, uri=uri, parameters=parameters)
        except Exception as exc:
            message = str(exc) or format_message(DYNAMIC_API_EXECUTION_FAILED, parameters=path)
            log_dynamic_call_event(
                logger,
                level=logging.WARNING,
                message="Dynamic call failed",
                component=_COMPONENT,
                operation="invoke",
                connector_id=connector_id,
                connection_id=connection_id,
                addressing=addressing.value,
                request_method=method,
                uri=uri,
                error_code=ConnectorServiceErrorCode.API_EXECUTION_FAILED.value,
                cause=type(exc).__name__,
            )
            raise ConnectorServiceError(
                code=ConnectorServiceErrorCode.API_EXECUTION_FAILED,
                message=message,
                data=RequestFailureData(request_method=method, uri=uri, input_path=path),
            ) from exc

        if addressing is ConnectionAddressing.MANAGED_IDENTITY:
            return unwrap_dynamic_response(response, uri)
        return response

    async def _dispatch_proxy(self, *, method: object, uri: str, parameters: Mapping[str, Any]) -> Any:
        options = HttpRequestOptions(
            uri=uri,
            query_parameters={"api-version": self._api_hub.api_version, **dict(parameters.get("queries") or {})},
            headers=parameters.get("headers"),
        )
        body = parameters.get("body")
        normalized = method.lower() if isinstance(method, str) else ""
        if normalized == "get":
            return await self._http_client.get(options)
        if normalized == "post":
            return await self._http_client.post(replace(options, content=body) if body else options)
        if normalized == "put":
            return await self._http_client.put(replace(options, content=body) if body else options)
        raise UnsupportedMethodError(method)


__all__ = [
    "ConnectionAddressing",
    "DynamicApiInvoker",
    "resolve_addressing",
    "unwrap_dynamic_response",
]
