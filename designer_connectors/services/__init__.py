"""Dynamic value and schema resolution services."""

from designer_connectors.services.connector_service import (
    ClientProviderStrategy,
    ConnectorService,
    ConnectorServiceOptions,
    DynamicResolutionStrategy,
    LegacyPathBasedStrategy,
    get_invoke_parameters,
)
from designer_connectors.services.legacy_resolver import LegacyDynamicResolver

__all__ = [
    "ClientProviderStrategy",
    "ConnectorService",
    "ConnectorServiceOptions",
    "DynamicResolutionStrategy",
    "LegacyDynamicResolver",
    "LegacyPathBasedStrategy",
    "get_invoke_parameters",
]
