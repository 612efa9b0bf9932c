"""Explicit runtime context replacing process-wide connector state."""

from __future__ import annotations

from collections.abc import Mapping
from types import TracebackType

from designer_connectors.clients.http_client import HttpClient, HttpxHttpClient
from designer_connectors.config import Settings, get_settings
from designer_connectors.constants import CLIENT_SUPPORTED_OPERATIONS
from designer_connectors.schemas import OperationInfo
from designer_connectors.services.connector_service import (
    ConnectorService,
    ConnectorServiceOptions,
    GetConfigurationFunction,
    GetSchemaFunction,
    GetValuesFunction,
)


class ConnectorContext:
    """Holds the settings, transport and service built once at startup."""

    def __init__(
        self,
        *,
        settings: Settings,
        http_client: HttpClient,
        service: ConnectorService,
        owns_http_client: bool,
    ) -> None:
        self.settings = settings
        self.http_client = http_client
        self.service = service
        self._owns_http_client = owns_http_client

    @classmethod
    def create(
        cls,
        *,
        settings: Settings | None = None,
        http_client: HttpClient | None = None,
        client_supported_operations: tuple[OperationInfo, ...] = CLIENT_SUPPORTED_OPERATIONS,
        schema_client: Mapping[str, GetSchemaFunction] | None = None,
        values_client: Mapping[str, GetValuesFunction] | None = None,
        get_configuration: GetConfigurationFunction | None = None,
    ) -> ConnectorContext:
        resolved_settings = settings or get_settings()
        client = http_client or HttpxHttpClient(timeout_seconds=resolved_settings.http_timeout_seconds)
        service = ConnectorService(
            ConnectorServiceOptions(
                api_version=resolved_settings.api_version,
                base_url=resolved_settings.base_url,
                http_client=client,
                client_supported_operations=client_supported_operations,
                schema_client=schema_client or {},
                values_client=values_client or {},
                api_hub_service_details=resolved_settings.api_hub_service_details(),
                get_configuration=get_configuration,
            )
        )
        return cls(
            settings=resolved_settings,
            http_client=client,
            service=service,
            owns_http_client=http_client is None,
        )

    async def aclose(self) -> None:
        if self._owns_http_client and isinstance(self.http_client, HttpxHttpClient):
            await self.http_client.aclose()

    async def __aenter__(self) -> ConnectorContext:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()


__all__ = ["ConnectorContext"]
