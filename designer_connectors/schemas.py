"""Pydantic models for connector operations and legacy dynamic extensions."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

OBJECT_TYPE = "object"


class OperationInfo(BaseModel):
    """Connector/operation identity pair used by the client allow-list."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    connector_id: str = Field(..., alias="connectorId")
    operation_id: str = Field(..., alias="operationId")


class ApiHubServiceDetails(BaseModel):
    """API Hub endpoint used for ARM-addressed connections."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    api_version: str = Field(..., alias="apiVersion")
    base_url: str = Field(..., alias="baseUrl")
    subscription_id: str = Field(default="", alias="subscriptionId")
    resource_group: str = Field(default="", alias="resourceGroup")


class ManagedIdentityRequestProperties(BaseModel):
    """Connection properties forwarded to ``dynamicInvoke`` for managed identity calls."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    connection: dict[str, Any] | None = None
    connection_runtime_url: str | None = Field(default=None, alias="connectionRuntimeUrl")
    authentication: dict[str, Any] | None = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class LegacyDynamicValuesExtension(BaseModel):
    """Path-based description of where pick-list values live in a response.

    Paths are ``/``-delimited property names, e.g. ``value/items``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    value_collection: str | None = Field(default=None, alias="value-collection")
    value_path: str = Field(default="", alias="value-path")
    value_title: str | None = Field(default=None, alias="value-title")
    value_description: str | None = Field(default=None, alias="value-description")
    value_selectable: str | None = Field(default=None, alias="value-selectable")

    @classmethod
    def coerce(
        cls, extension: LegacyDynamicValuesExtension | Mapping[str, Any]
    ) -> LegacyDynamicValuesExtension:
        if isinstance(extension, cls):
            return extension
        return cls.model_validate(dict(extension))


class LegacyDynamicSchemaExtension(BaseModel):
    """Path-based description of where a dynamic schema lives in a response."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    value_path: str | None = Field(default=None, alias="value-path")

    @classmethod
    def coerce(
        cls, extension: LegacyDynamicSchemaExtension | Mapping[str, Any]
    ) -> LegacyDynamicSchemaExtension:
        if isinstance(extension, cls):
            return extension
        return cls.model_validate(dict(extension))


class ListDynamicValue(BaseModel):
    """One resolved pick-list entry."""

    model_config = ConfigDict(populate_by_name=True)

    value: Any = None
    display_name: Any = Field(default=None, alias="displayName")
    description: Any = None
    disabled: bool = False

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "value": self.value,
            "displayName": self.display_name,
            "disabled": self.disabled,
        }
        if self.description is not None:
            payload["description"] = self.description
        return payload


__all__ = [
    "OBJECT_TYPE",
    "ApiHubServiceDetails",
    "LegacyDynamicSchemaExtension",
    "LegacyDynamicValuesExtension",
    "ListDynamicValue",
    "ManagedIdentityRequestProperties",
    "OperationInfo",
]
