"""Structured logging helpers for dynamic connector calls."""

from __future__ import annotations

import logging


def dynamic_call_log_fields(
    *,
    component: str,
    operation: str,
    connector_id: str | None = None,
    connection_id: str | None = None,
    addressing: str | None = None,
    request_method: str | None = None,
    uri: str | None = None,
    error_code: str | None = None,
    **details: object,
) -> dict[str, object]:
    fields: dict[str, object] = {
        "component": component,
        "operation": operation,
    }
    if connector_id is not None:
        fields["connectorId"] = connector_id
    if connection_id is not None:
        fields["connectionId"] = connection_id
    if addressing is not None:
        fields["addressing"] = addressing
    if request_method is not None:
        fields["requestMethod"] = request_method
    if uri is not None:
        fields["uri"] = uri
    if error_code is not None:
        fields["errorCode"] = error_code
    for key, value in details.items():
        if value is None:
            continue
        fields[key] = value
    return fields


def log_dynamic_call_event(
    logger: logging.Logger,
    *,
    level: int,
    message: str,
    component: str,
    operation: str,
    connector_id: str | None = None,
    connection_id: str | None = None,
    addressing: str | None = None,
    request_method: str | None = None,
    uri: str | None = None,
    error_code: str | None = None,
    **details: object,
) -> None:
    logger.log(
        level,
        message,
        extra=dynamic_call_log_fields(
            component=component,
            operation=operation,
            connector_id=connector_id,
            connection_id=connection_id,
            addressing=addressing,
            request_method=request_method,
            uri=uri,
            error_code=error_code,
            **details,
        ),
    )
