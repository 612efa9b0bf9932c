"""Contract tests for the designer-connectors CLI commands."""

from __future__ import annotations

import json

from typer.testing import CliRunner

from designer_connectors.cli import main as cli_main
from designer_connectors.config import Settings
from designer_connectors.context import ConnectorContext
from tests.contracts.fake_http import RecordingHttpClient

runner = CliRunner()


def _use_client(monkeypatch, client: RecordingHttpClient) -> None:  # type: ignore[no-untyped-def]
    settings = Settings(_env_file=None, base_url="https://designer.local/api")
    monkeypatch.setattr(
        cli_main,
        "_build_context",
        lambda: ConnectorContext.create(settings=settings, http_client=client),
    )


def test_supported_reports_allow_listed_operation(monkeypatch) -> None:
    _use_client(monkeypatch, RecordingHttpClient())

    result = runner.invoke(cli_main.app, ["supported", "connectionProviders/xmlOperations", "xmlValidation"])

    assert result.exit_code == 0
    assert "client supported" in result.output


def test_supported_exits_non_zero_for_legacy_operation(monkeypatch) -> None:
    _use_client(monkeypatch, RecordingHttpClient())

    result = runner.invoke(cli_main.app, ["supported", "connectionProviders/sql", "getTables"])

    assert result.exit_code == 1


def test_values_resolves_through_legacy_extension(monkeypatch) -> None:
    client = RecordingHttpClient({"value": [{"Name": "orders"}, {"Name": "customers"}]})
    _use_client(monkeypatch, client)

    result = runner.invoke(
        cli_main.app,
        [
            "values",
            "--connection-id",
            "sql-conn",
            "--connector-id",
            "connectionProviders/sql",
            "--request",
            json.dumps({"method": "get", "path": "/tables"}),
            "--extension",
            json.dumps({"value-collection": "value", "value-path": "Name"}),
        ],
    )

    assert result.exit_code == 0
    assert "Resolved 2 values" in result.output
    assert client.last_call.options.uri == "https://designer.local/api/sql-conn/extensions/proxy/tables"


def test_values_rejects_invalid_json(monkeypatch) -> None:
    client = RecordingHttpClient()
    _use_client(monkeypatch, client)

    result = runner.invoke(
        cli_main.app,
        [
            "values",
            "--connection-id",
            "c",
            "--connector-id",
            "connectionProviders/sql",
            "--request",
            "{not json",
            "--extension",
            "{}",
        ],
    )

    assert result.exit_code == 2
    assert client.calls == []


def test_schema_failure_exits_with_error_code(monkeypatch) -> None:
    _use_client(monkeypatch, RecordingHttpClient({"statusCode": "NotFound", "body": {"message": "gone"}}))

    result = runner.invoke(
        cli_main.app,
        [
            "schema",
            "--connection-id",
            "c",
            "--connector-id",
            "connectionProviders/sql",
            "--request",
            json.dumps({"method": "get", "path": "/schema"}),
            "--managed-identity",
        ],
    )

    assert result.exit_code == 1
    assert "API_EXECUTION_FAILED_WITH_ERROR" in result.output


def test_schema_prints_extracted_schema(monkeypatch) -> None:
    _use_client(monkeypatch, RecordingHttpClient({"id": {"type": "integer"}}))

    result = runner.invoke(
        cli_main.app,
        [
            "schema",
            "--connection-id",
            "c",
            "--connector-id",
            "connectionProviders/sql",
            "--request",
            json.dumps({"method": "get", "path": "/schema"}),
        ],
    )

    assert result.exit_code == 0
    assert "properties" in result.output
