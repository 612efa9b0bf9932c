"""Legacy path-based resolution of dynamic values and schemas."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from designer_connectors.adapters.dynamic_api import DynamicApiInvoker
from designer_connectors.helpers import (
    equals,
    get_json_value,
    get_object_property_value,
    is_missing,
    present_or_none,
    split_path,
)
from designer_connectors.schemas import (
    OBJECT_TYPE,
    LegacyDynamicSchemaExtension,
    LegacyDynamicValuesExtension,
    ListDynamicValue,
    ManagedIdentityRequestProperties,
)

logger = logging.getLogger(__name__)


def _is_absent(response: Any) -> bool:
    if response is None:
        return True
    if isinstance(response, (Mapping, list)):
        return False
    return not response


class LegacyDynamicResolver:
    """Resolves values and schemas described by legacy extension descriptors."""

    def __init__(self, *, invoker: DynamicApiInvoker) -> None:
        self._invoker = invoker

    async def resolve_values(
        self,
        *,
        connection_id: str,
        connector_id: str,
        parameters: Mapping[str, Any],
        extension: LegacyDynamicValuesExtension | Mapping[str, Any],
        parameter_array_type: str | None = None,
        is_managed_identity: bool = False,
        managed_identity_properties: ManagedIdentityRequestProperties | Mapping[str, Any] | None = None,
    ) -> list[ListDynamicValue] | Any:
        """Map the response collection to ``ListDynamicValue`` entries.

        When the collection cannot be found or is empty the raw response body is
        returned unchanged; callers must accept either shape.
        """
        descriptor = LegacyDynamicValuesExtension.coerce(extension)
        response = await self._invoker.invoke(
            connection_id=connection_id,
            connector_id=connector_id,
            parameters=parameters,
            is_managed_identity=is_managed_identity,
            managed_identity_properties=managed_identity_properties,
        )

        values = get_object_property_value(response, split_path(descriptor.value_collection))
        if not isinstance(values, list) or not values:
            logger.debug("No value collection at '%s'; returning raw response", descriptor.value_collection)
            return response

        return [self._to_dynamic_value(item, descriptor, parameter_array_type) for item in values]

    @staticmethod
    def _to_dynamic_value(
        item: Any,
        descriptor: LegacyDynamicValuesExtension,
        parameter_array_type: str | None,
    ) -> ListDynamicValue:
        if parameter_array_type and parameter_array_type != OBJECT_TYPE:
            value = display_name = get_json_value(item)
        else:
            value = present_or_none(get_object_property_value(item, split_path(descriptor.value_path)))
            display_name = (
                present_or_none(get_object_property_value(item, split_path(descriptor.value_title)))
                if descriptor.value_title
                else value
            )

        description = (
            present_or_none(get_object_property_value(item, split_path(descriptor.value_description)))
            if descriptor.value_description
            else None
        )

        is_selectable = True
        if descriptor.value_selectable:
            selectable = get_object_property_value(item, split_path(descriptor.value_selectable))
            if not is_missing(selectable) and selectable is not None:
                is_selectable = bool(selectable)

        return ListDynamicValue(
            value=value,
            display_name=display_name,
            description=description,
            disabled=not is_selectable,
        )

    async def resolve_schema(
        self,
        *,
        connection_id: str,
        connector_id: str,
        parameters: Mapping[str, Any],
        extension: LegacyDynamicSchemaExtension | Mapping[str, Any],
        is_managed_identity: bool = False,
        managed_identity_properties: ManagedIdentityRequestProperties | Mapping[str, Any] | None = None,
    ) -> Any | None:
        descriptor = LegacyDynamicSchemaExtension.coerce(extension)
        response = await self._invoker.invoke(
            connection_id=connection_id,
            connector_id=connector_id,
            parameters=parameters,
            is_managed_identity=is_managed_identity,
            managed_identity_properties=managed_identity_properties,
        )

        if _is_absent(response):
            return None
        if not descriptor.value_path:
            return {"type": OBJECT_TYPE, "properties": response}

        # The schema convention makes a trailing "properties" implicit.
        schema_path = split_path(descriptor.value_path)
        if schema_path and equals(schema_path[-1], "properties"):
            schema_path = schema_path[:-1]
        return present_or_none(get_object_property_value(response, schema_path))


__all__ = ["LegacyDynamicResolver"]
