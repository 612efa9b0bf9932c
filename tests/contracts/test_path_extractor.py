"""Contract tests for path traversal and request helpers."""

from __future__ import annotations

import pytest

from designer_connectors.helpers import (
    MISSING,
    equals,
    get_client_request_id_from_headers,
    get_json_value,
    get_object_property_value,
    is_arm_resource_id,
    is_missing,
    path_combine,
    present_or_none,
    split_path,
)


@pytest.mark.parametrize("root", [{"a": 1}, [1, 2], None, 0, False, "text"])
def test_empty_path_returns_root_unchanged(root) -> None:  # type: ignore[no-untyped-def]
    assert get_object_property_value(root, []) is root


def test_nested_value_is_extracted() -> None:
    assert get_object_property_value({"a": {"b": 5}}, ["a", "b"]) == 5


def test_missing_segment_returns_sentinel_not_error() -> None:
    result = get_object_property_value({"a": {"b": 5}}, ["a", "c"])
    assert result is MISSING
    assert is_missing(result)
    assert present_or_none(result) is None


def test_present_falsy_values_are_not_missing() -> None:
    root = {"zero": 0, "no": False, "null": None, "empty": ""}
    assert get_object_property_value(root, ["zero"]) == 0
    assert get_object_property_value(root, ["no"]) is False
    assert get_object_property_value(root, ["null"]) is None
    assert get_object_property_value(root, ["empty"]) == ""
    assert not is_missing(get_object_property_value(root, ["null"]))


def test_traversal_stops_at_null_and_scalars() -> None:
    assert get_object_property_value({"a": None}, ["a", "b"]) is MISSING
    assert get_object_property_value({"a": 3}, ["a", "b"]) is MISSING
    assert get_object_property_value(None, ["a"]) is MISSING


def test_keys_fall_back_to_case_insensitive_match() -> None:
    root = {"Value": {"Items": [1, 2]}}
    assert get_object_property_value(root, ["value", "items"]) == [1, 2]
    assert get_object_property_value(root, ["value"], case_sensitive=True) is MISSING


def test_exact_key_wins_over_case_insensitive_match() -> None:
    root = {"name": "exact", "NAME": "upper"}
    assert get_object_property_value(root, ["NAME"]) == "upper"
    assert get_object_property_value(root, ["name"]) == "exact"


def test_numeric_segments_index_lists() -> None:
    root = {"rows": [{"id": "r0"}, {"id": "r1"}]}
    assert get_object_property_value(root, ["rows", "1", "id"]) == "r1"
    assert get_object_property_value(root, ["rows", "5", "id"]) is MISSING
    assert get_object_property_value(root, ["rows", "first"]) is MISSING


@pytest.mark.parametrize("segment", ["²", "①", "-1", "1.0", " 1"])
def test_non_decimal_list_segments_resolve_to_missing(segment: str) -> None:
    assert get_object_property_value({"a": [1, 2]}, ["a", segment]) is MISSING


def test_split_path() -> None:
    assert split_path("value/items") == ["value", "items"]
    assert split_path("") == []
    assert split_path(None) == []


def test_get_json_value_detaches_containers() -> None:
    element = {"id": 1, "tags": ["a"]}
    copied = get_json_value(element)
    assert copied == element
    assert copied is not element
    assert copied["tags"] is not element["tags"]
    assert get_json_value("plain") == "plain"
    assert get_json_value(7) == 7


def test_equals_is_case_insensitive_and_none_safe() -> None:
    assert equals("Properties", "properties")
    assert not equals("a", "b")
    assert equals(None, None)
    assert not equals(None, "none")


@pytest.mark.parametrize(
    ("url", "path", "expected"),
    [
        ("https://x/conn/extensions/proxy", "/bar", "https://x/conn/extensions/proxy/bar"),
        ("https://x/conn/extensions/proxy/", "bar/baz", "https://x/conn/extensions/proxy/bar/baz"),
        ("https://x/conn/extensions/proxy", "", "https://x/conn/extensions/proxy"),
        ("https://x/conn/extensions/proxy", None, "https://x/conn/extensions/proxy"),
    ],
)
def test_path_combine(url: str, path: str | None, expected: str) -> None:
    assert path_combine(url, path) == expected


@pytest.mark.parametrize(
    ("resource_id", "expected"),
    [
        ("/subscriptions/sub/providers/Microsoft.Web/locations/westus/managedApis/sql", True),
        ("/SUBSCRIPTIONS/sub/resourceGroups/rg/providers/Microsoft.Web/connections/sql-1", True),
        ("connectionProviders/xmlOperations", False),
        ("/serviceProviders/serviceBus", False),
        ("", False),
        (None, False),
    ],
)
def test_is_arm_resource_id(resource_id: str | None, expected: bool) -> None:
    assert is_arm_resource_id(resource_id) is expected


def test_client_request_id_header_lookup() -> None:
    assert get_client_request_id_from_headers({"X-MS-Client-Request-Id": "abc-123"}) == "abc-123"
    assert get_client_request_id_from_headers({"x-ms-client-request-id": ["first", "second"]}) == "first"
    assert get_client_request_id_from_headers({"Content-Type": "application/json"}) is None
    assert get_client_request_id_from_headers(None) is None
