"""Path traversal and request helpers shared by the dynamic call pipeline."""

from __future__ import annotations

import copy
import re
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any, Final

CLIENT_REQUEST_ID_HEADER: Final = "x-ms-client-request-id"

_ARM_RESOURCE_ID_PATTERN = re.compile(
    r"^/subscriptions/[^/]+(/resourcegroups/[^/]+)?/providers/[^/]+/[^/]+/[^/]+",
    re.IGNORECASE,
)


class _Missing(Enum):
    MISSING = "MISSING"

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Final = _Missing.MISSING


def is_missing(value: object) -> bool:
    return value is MISSING


def present_or_none(value: object) -> Any:
    return None if value is MISSING else value


def equals(left: object, right: object) -> bool:
    """Case-insensitive string equality; ``None`` only equals ``None``."""
    if left is None or right is None:
        return left is right
    return str(left).casefold() == str(right).casefold()


def split_path(path: str | None) -> list[str]:
    if not path:
        return []
    return path.split("/")


def _property_value(container: Mapping[str, Any], key: str, *, case_sensitive: bool) -> Any:
    if key in container:
        return container[key]
    if case_sensitive:
        return MISSING
    for candidate, value in container.items():
        if isinstance(candidate, str) and equals(candidate, key):
            return value
    return MISSING


def get_object_property_value(
    root: Any,
    path: Sequence[str],
    *,
    case_sensitive: bool = False,
) -> Any:
    """Walk ``path`` through nested mappings and return the value found.

    Returns ``MISSING`` as soon as a segment cannot be resolved, so a present
    ``None``, ``False`` or ``0`` stays distinguishable from absence. Keys are
    matched exactly first and then case-insensitively unless ``case_sensitive``
    is set. Lists are indexed by numeric segments. Never raises.
    """
    current = root
    for segment in path:
        if current is None or current is MISSING:
            return MISSING
        if isinstance(current, Mapping):
            current = _property_value(current, segment, case_sensitive=case_sensitive)
        elif isinstance(current, list) and segment.isdecimal():
            index = int(segment)
            if index >= len(current):
                return MISSING
            current = current[index]
        else:
            return MISSING
    return current


def get_json_value(value: Any) -> Any:
    """Detach a response element so callers can keep it as a plain value."""
    if isinstance(value, (Mapping, list)):
        return copy.deepcopy(value)
    return value


def path_combine(url: str, path: str | None) -> str:
    if not url or not path:
        return url or path or ""
    return f"{url.rstrip('/')}/{path.lstrip('/')}"


def is_arm_resource_id(resource_id: str | None) -> bool:
    if not resource_id:
        return False
    return _ARM_RESOURCE_ID_PATTERN.match(resource_id) is not None


def get_client_request_id_from_headers(headers: object) -> str | None:
    if not isinstance(headers, Mapping):
        return None
    for name, value in headers.items():
        if not isinstance(name, str) or name.lower() != CLIENT_REQUEST_ID_HEADER:
            continue
        if isinstance(value, list):
            value = value[0] if value else None
        if value is None:
            return None
        text = str(value).strip()
        return text or None
    return None


__all__ = [
    "CLIENT_REQUEST_ID_HEADER",
    "MISSING",
    "equals",
    "get_client_request_id_from_headers",
    "get_json_value",
    "get_object_property_value",
    "is_arm_resource_id",
    "is_missing",
    "path_combine",
    "present_or_none",
    "split_path",
]
