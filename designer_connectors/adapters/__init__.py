"""Adapters for the backing connector APIs."""

from designer_connectors.adapters.dynamic_api import (
    ConnectionAddressing,
    DynamicApiInvoker,
    resolve_addressing,
    unwrap_dynamic_response,
)

__all__ = [
    "ConnectionAddressing",
    "DynamicApiInvoker",
    "resolve_addressing",
    "unwrap_dynamic_response",
]
