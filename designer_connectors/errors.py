"""Error types raised by the connector service."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from designer_connectors.messages import UNSUPPORTED_DYNAMIC_METHOD, format_message


class ConnectorServiceErrorCode(str, Enum):
    API_EXECUTION_FAILED = "API_EXECUTION_FAILED"
    API_EXECUTION_FAILED_WITH_ERROR = "API_EXECUTION_FAILED_WITH_ERROR"
    OPERATION_NOT_SUPPORTED = "OPERATION_NOT_SUPPORTED"


@dataclass(frozen=True)
class RequestFailureData:
    """Diagnostics attached when the dynamic call could not be dispatched."""

    request_method: str | None
    uri: str
    input_path: str | None

    def to_payload(self) -> dict[str, Any]:
        return {
            "requestMethod": self.request_method,
            "uri": self.uri,
            "inputPath": self.input_path,
        }


@dataclass(frozen=True)
class ConnectorResponseData:
    """Diagnostics attached when the connector answered with a failure envelope."""

    connector_response: Any

    def to_payload(self) -> dict[str, Any]:
        return {"connectorResponse": self.connector_response}


@dataclass(frozen=True)
class OperationData:
    connector_id: str
    operation_id: str

    def to_payload(self) -> dict[str, Any]:
        return {"connectorId": self.connector_id, "operationId": self.operation_id}


ConnectorServiceErrorData = RequestFailureData | ConnectorResponseData | OperationData


class ConnectorServiceError(Exception):
    """Structured failure of a dynamic value or schema resolution."""

    def __init__(
        self,
        *,
        code: ConnectorServiceErrorCode,
        message: str,
        data: ConnectorServiceErrorData | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data


class ArgumentError(ValueError):
    """Required configuration is missing."""


class UnsupportedMethodError(Exception):
    """Dynamic call requested an HTTP method the proxy routes do not accept."""

    def __init__(self, method: object) -> None:
        super().__init__(format_message(UNSUPPORTED_DYNAMIC_METHOD, method=method))
        self.method = method


class HttpClientError(Exception):
    """Transport-level failure reported by an HTTP client implementation."""

    def __init__(
        self,
        message: str,
        *,
        code: str = "HTTP_REQUEST_FAILED",
        status_code: int | None = None,
        body: Any = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.status_code = status_code
        self.body = body


def error_payload(exc: ConnectorServiceError) -> dict[str, Any]:
    """Build the JSON error envelope callers use to render diagnostics."""
    payload: dict[str, Any] = {
        "error": {
            "code": exc.code.value,
            "message": exc.message,
        },
    }
    if exc.data is not None:
        payload["error"]["data"] = exc.data.to_payload()
    return payload


__all__ = [
    "ArgumentError",
    "ConnectorResponseData",
    "ConnectorServiceError",
    "ConnectorServiceErrorCode",
    "ConnectorServiceErrorData",
    "HttpClientError",
    "OperationData",
    "RequestFailureData",
    "UnsupportedMethodError",
    "error_payload",
]
