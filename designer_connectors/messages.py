"""User-facing message templates for dynamic call failures.

Templates use ``str.format`` placeholders so a localized table can replace
them without touching the call sites.
"""

from __future__ import annotations

DYNAMIC_CALL_FAILED = "Error executing the api - {url}"
DYNAMIC_CALL_FAILED_WITH_CODE = "Error code: '{error_code}', Message: '{message}'."
DYNAMIC_CALL_DIAGNOSTICS = "More diagnostic information: x-ms-client-request-id is '{client_request_id}'."
DYNAMIC_API_EXECUTION_FAILED = "Error executing the api '{parameters}'."
UNSUPPORTED_DYNAMIC_METHOD = "Unsupported dynamic call connector method - '{method}'"
OPERATION_CLIENT_MISSING = "No {kind} client registered for operation '{operation_id}' of connector '{connector_id}'."


def format_message(template: str, **values: object) -> str:
    """Render a message template with its substitution values."""
    return template.format(**values)


__all__ = [
    "DYNAMIC_API_EXECUTION_FAILED",
    "DYNAMIC_CALL_DIAGNOSTICS",
    "DYNAMIC_CALL_FAILED",
    "DYNAMIC_CALL_FAILED_WITH_CODE",
    "OPERATION_CLIENT_MISSING",
    "UNSUPPORTED_DYNAMIC_METHOD",
    "format_message",
]
