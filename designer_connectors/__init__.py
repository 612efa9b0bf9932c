"""Dynamic values and schemas for workflow connector operations."""

from designer_connectors.context import ConnectorContext
from designer_connectors.errors import (
    ArgumentError,
    ConnectorServiceError,
    ConnectorServiceErrorCode,
    UnsupportedMethodError,
)
from designer_connectors.schemas import (
    LegacyDynamicSchemaExtension,
    LegacyDynamicValuesExtension,
    ListDynamicValue,
    OperationInfo,
)
from designer_connectors.services import ConnectorService, ConnectorServiceOptions, LegacyDynamicResolver

__all__ = [
    "ArgumentError",
    "ConnectorContext",
    "ConnectorService",
    "ConnectorServiceError",
    "ConnectorServiceErrorCode",
    "ConnectorServiceOptions",
    "LegacyDynamicResolver",
    "LegacyDynamicSchemaExtension",
    "LegacyDynamicValuesExtension",
    "ListDynamicValue",
    "OperationInfo",
    "UnsupportedMethodError",
]
