"""Connector service: allow-list gate and dynamic resolution strategy dispatch."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol

from designer_connectors.adapters.dynamic_api import DynamicApiInvoker
from designer_connectors.clients.http_client import HttpClient
from designer_connectors.errors import (
    ArgumentError,
    ConnectorServiceError,
    ConnectorServiceErrorCode,
    OperationData,
)
from designer_connectors.helpers import equals
from designer_connectors.messages import OPERATION_CLIENT_MISSING, format_message
from designer_connectors.schemas import ApiHubServiceDetails, ListDynamicValue, OperationInfo
from designer_connectors.services.legacy_resolver import LegacyDynamicResolver

logger = logging.getLogger(__name__)

GetSchemaFunction = Callable[[dict[str, Any]], Awaitable[dict[str, Any]]]
GetValuesFunction = Callable[[dict[str, Any]], Awaitable[list[ListDynamicValue]]]
GetConfigurationFunction = Callable[[str], Awaitable[dict[str, Any]]]


@dataclass(frozen=True)
class ConnectorServiceOptions:
    """Read-only configuration shared by every resolution call."""

    api_version: str | None = None
    base_url: str | None = None
    http_client: HttpClient | None = None
    client_supported_operations: tuple[OperationInfo, ...] | None = None
    schema_client: Mapping[str, GetSchemaFunction] | None = None
    values_client: Mapping[str, GetValuesFunction] | None = None
    api_hub_service_details: ApiHubServiceDetails | None = None
    get_configuration: GetConfigurationFunction | None = None

    def __post_init__(self) -> None:
        if not self.api_version:
            raise ArgumentError("apiVersion required")
        if not self.base_url:
            raise ArgumentError("baseUrl required")
        if self.http_client is None:
            raise ArgumentError("httpClient required")
        if self.client_supported_operations is None:
            raise ArgumentError("clientSupportedOperations required")
        if self.schema_client is None:
            raise ArgumentError("schemaClient required")
        if self.values_client is None:
            raise ArgumentError("valuesClient required")
        if self.api_hub_service_details is None:
            raise ArgumentError("apiHubServiceDetails required")
        object.__setattr__(self, "client_supported_operations", tuple(self.client_supported_operations))


def get_invoke_parameters(parameters: Mapping[str, Any], dynamic_state: Mapping[str, Any] | None) -> dict[str, Any]:
    """Merge dynamic-state parameters over the caller's parameters.

    A dynamic-state entry only overrides when it defines a ``value`` key.
    """
    invoke_parameters = dict(parameters)
    additional_parameters = (dynamic_state or {}).get("parameters")
    if not isinstance(additional_parameters, Mapping):
        return invoke_parameters

    for parameter_name, entry in additional_parameters.items():
        if isinstance(entry, Mapping) and "value" in entry:
            invoke_parameters[parameter_name] = entry["value"]
    return invoke_parameters


class DynamicResolutionStrategy(Protocol):
    async def get_list_dynamic_values(
        self,
        *,
        connection_id: str | None,
        connector_id: str,
        operation_id: str,
        parameter_alias: str | None,
        parameters: Mapping[str, Any],
        dynamic_state: Mapping[str, Any],
    ) -> list[ListDynamicValue] | Any:
        ...

    async def get_dynamic_schema(
        self,
        *,
        connection_id: str | None,
        connector_id: str,
        operation_id: str,
        parameter_alias: str | None,
        parameters: Mapping[str, Any],
        dynamic_state: Mapping[str, Any],
    ) -> Any:
        ...


class LegacyPathBasedStrategy:
    """Resolves through the connection's backing API using a legacy extension.

    ``dynamic_state`` carries ``extension``, ``parameters``,
    ``parameterArrayType``, ``isManagedIdentityConnection`` and
    ``managedIdentityProperties``.
    """

    def __init__(self, resolver: LegacyDynamicResolver) -> None:
        self._resolver = resolver

    async def get_list_dynamic_values(
        self,
        *,
        connection_id: str | None,
        connector_id: str,
        operation_id: str,
        parameter_alias: str | None,
        parameters: Mapping[str, Any],
        dynamic_state: Mapping[str, Any],
    ) -> list[ListDynamicValue] | Any:
        return await self._resolver.resolve_values(
            connection_id=connection_id or "",
            connector_id=connector_id,
            parameters=get_invoke_parameters(parameters, dynamic_state),
            extension=dynamic_state.get("extension") or {},
            parameter_array_type=dynamic_state.get("parameterArrayType"),
            is_managed_identity=bool(dynamic_state.get("isManagedIdentityConnection")),
            managed_identity_properties=dynamic_state.get("managedIdentityProperties"),
        )

    async def get_dynamic_schema(
        self,
        *,
        connection_id: str | None,
        connector_id: str,
        operation_id: str,
        parameter_alias: str | None,
        parameters: Mapping[str, Any],
        dynamic_state: Mapping[str, Any],
    ) -> Any:
        return await self._resolver.resolve_schema(
            connection_id=connection_id or "",
            connector_id=connector_id,
            parameters=get_invoke_parameters(parameters, dynamic_state),
            extension=dynamic_state.get("extension") or {},
            is_managed_identity=bool(dynamic_state.get("isManagedIdentityConnection")),
            managed_identity_properties=dynamic_state.get("managedIdentityProperties"),
        )


class ClientProviderStrategy:
    """Resolves through clients registered per operation id."""

    def __init__(
        self,
        *,
        values_client: Mapping[str, GetValuesFunction],
        schema_client: Mapping[str, GetSchemaFunction],
        get_configuration: GetConfigurationFunction | None = None,
    ) -> None:
        self._values_client = values_client
        self._schema_client = schema_client
        self._get_configuration = get_configuration

    async def get_list_dynamic_values(
        self,
        *,
        connection_id: str | None,
        connector_id: str,
        operation_id: str,
        parameter_alias: str | None,
        parameters: Mapping[str, Any],
        dynamic_state: Mapping[str, Any],
    ) -> list[ListDynamicValue] | Any:
        client = self._client_for(self._values_client, "values", connector_id, operation_id)
        args = await self._client_args(connection_id, connector_id, operation_id, parameter_alias, parameters, dynamic_state)
        return await client(args)

    async def get_dynamic_schema(
        self,
        *,
        connection_id: str | None,
        connector_id: str,
        operation_id: str,
        parameter_alias: str | None,
        parameters: Mapping[str, Any],
        dynamic_state: Mapping[str, Any],
    ) -> Any:
        client = self._client_for(self._schema_client, "schema", connector_id, operation_id)
        args = await self._client_args(connection_id, connector_id, operation_id, parameter_alias, parameters, dynamic_state)
        return await client(args)

    @staticmethod
    def _client_for(clients: Mapping[str, Any], kind: str, connector_id: str, operation_id: str) -> Any:
        client = clients.get(operation_id)
        if client is None:
            for registered_id, candidate in clients.items():
                if equals(registered_id, operation_id):
                    client = candidate
                    break
        if client is None:
            raise ConnectorServiceError(
                code=ConnectorServiceErrorCode.OPERATION_NOT_SUPPORTED,
                message=format_message(
                    OPERATION_CLIENT_MISSING,
                    kind=kind,
                    operation_id=operation_id,
                    connector_id=connector_id,
                ),
                data=OperationData(connector_id=connector_id, operation_id=operation_id),
            )
        return client

    async def _client_args(
        self,
        connection_id: str | None,
        connector_id: str,
        operation_id: str,
        parameter_alias: str | None,
        parameters: Mapping[str, Any],
        dynamic_state: Mapping[str, Any],
    ) -> dict[str, Any]:
        args: dict[str, Any] = {
            **get_invoke_parameters(parameters, dynamic_state),
            "connectorId": connector_id,
            "operationId": operation_id,
        }
        if connection_id is not None:
            args["connectionId"] = connection_id
        if parameter_alias is not None:
            args["parameterAlias"] = parameter_alias
        if self._get_configuration is not None and connection_id:
            args["configuration"] = await self._get_configuration(connection_id)
        return args


class ConnectorService:
    """Entry point for dynamic value and schema resolution."""

    def __init__(self, options: ConnectorServiceOptions) -> None:
        self._options = options
        invoker = DynamicApiInvoker(
            base_url=options.base_url,
            api_hub=options.api_hub_service_details,
            http_client=options.http_client,
        )
        self._legacy_resolver = LegacyDynamicResolver(invoker=invoker)
        self._legacy_strategy = LegacyPathBasedStrategy(self._legacy_resolver)
        self._client_strategy = ClientProviderStrategy(
            values_client=options.values_client or {},
            schema_client=options.schema_client or {},
            get_configuration=options.get_configuration,
        )

    @property
    def options(self) -> ConnectorServiceOptions:
        return self._options

    def is_client_supported_operation(self, connector_id: str, operation_id: str) -> bool:
        return any(
            equals(connector_id, operation.connector_id) and equals(operation_id, operation.operation_id)
            for operation in self._options.client_supported_operations or ()
        )

    def strategy_for(self, connector_id: str, operation_id: str) -> DynamicResolutionStrategy:
        if self.is_client_supported_operation(connector_id, operation_id):
            return self._client_strategy
        return self._legacy_strategy

    async def get_list_dynamic_values(
        self,
        *,
        connection_id: str | None,
        connector_id: str,
        operation_id: str,
        parameter_alias: str | None,
        parameters: Mapping[str, Any],
        dynamic_state: Mapping[str, Any] | None = None,
    ) -> list[ListDynamicValue] | Any:
        strategy = self.strategy_for(connector_id, operation_id)
        logger.debug("Resolving dynamic values for %s/%s via %s", connector_id, operation_id, type(strategy).__name__)
        return await strategy.get_list_dynamic_values(
            connection_id=connection_id,
            connector_id=connector_id,
            operation_id=operation_id,
            parameter_alias=parameter_alias,
            parameters=parameters,
            dynamic_state=dynamic_state or {},
        )

    async def get_dynamic_schema(
        self,
        *,
        connection_id: str | None,
        connector_id: str,
        operation_id: str,
        parameter_alias: str | None,
        parameters: Mapping[str, Any],
        dynamic_state: Mapping[str, Any] | None = None,
    ) -> Any:
        strategy = self.strategy_for(connector_id, operation_id)
        logger.debug("Resolving dynamic schema for %s/%s via %s", connector_id, operation_id, type(strategy).__name__)
        return await strategy.get_dynamic_schema(
            connection_id=connection_id,
            connector_id=connector_id,
            operation_id=operation_id,
            parameter_alias=parameter_alias,
            parameters=parameters,
            dynamic_state=dynamic_state or {},
        )

    async def get_legacy_dynamic_values(self, **kwargs: Any) -> list[ListDynamicValue] | Any:
        return await self._legacy_resolver.resolve_values(**kwargs)

    async def get_legacy_dynamic_schema(self, **kwargs: Any) -> Any:
        return await self._legacy_resolver.resolve_schema(**kwargs)


__all__ = [
    "ClientProviderStrategy",
    "ConnectorService",
    "ConnectorServiceOptions",
    "DynamicResolutionStrategy",
    "GetConfigurationFunction",
    "GetSchemaFunction",
    "GetValuesFunction",
    "LegacyPathBasedStrategy",
    "get_invoke_parameters",
]
