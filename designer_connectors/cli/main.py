"""Designer connectors CLI - resolve dynamic values and schemas from a terminal."""

import asyncio
import json
from typing import Any

import typer
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from designer_connectors.context import ConnectorContext
from designer_connectors.errors import ConnectorServiceError, error_payload
from designer_connectors.schemas import ListDynamicValue

app = typer.Typer(
    name="designer-connectors",
    help="Resolve dynamic values and schemas for workflow connector operations",
    no_args_is_help=True,
)

console = Console()


def _build_context() -> ConnectorContext:
    return ConnectorContext.create()


def _parse_json_option(raw: str, option: str) -> dict[str, Any]:
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as exc:
        console.print(f"[red]{option} is not valid JSON: {exc.msg}[/red]")
        raise typer.Exit(2) from exc
    if not isinstance(parsed, dict):
        console.print(f"[red]{option} must be a JSON object.[/red]")
        raise typer.Exit(2)
    return parsed


def _print_json(value: Any, title: str) -> None:
    console.print(Panel(Syntax(json.dumps(value, indent=2, default=str), "json"), title=title, border_style="cyan"))


def _print_failure(exc: ConnectorServiceError) -> None:
    console.print(
        Panel(
            Syntax(json.dumps(error_payload(exc), indent=2, default=str), "json"),
            title=f"[red]{exc.code.value}[/red]",
            border_style="red",
        )
    )


@app.command()
def status() -> None:
    """Show the resolved connector service configuration."""
    context = _build_context()
    settings = context.settings

    table = Table(title="Connector Service", border_style="cyan")
    table.add_column("Setting", style="bold white")
    table.add_column("Value", style="dim")
    table.add_row("Base URL", settings.base_url)
    table.add_row("API version", settings.api_version)
    table.add_row("API Hub base URL", settings.api_hub_base_url)
    table.add_row("API Hub API version", settings.api_hub_api_version)
    table.add_row("Workflow reference", settings.workflow_reference_id or "N/A")
    table.add_row(
        "Client supported operations",
        str(len(context.service.options.client_supported_operations or ())),
    )
    console.print(table)
    asyncio.run(context.aclose())


@app.command()
def supported(connector_id: str, operation_id: str) -> None:
    """Check whether an operation is resolved by a registered client."""
    context = _build_context()
    try:
        is_supported = context.service.is_client_supported_operation(connector_id, operation_id)
    finally:
        asyncio.run(context.aclose())
    if is_supported:
        console.print(f"[green]{connector_id}/{operation_id} is client supported[/green]")
        return
    console.print(f"[yellow]{connector_id}/{operation_id} resolves through the legacy API[/yellow]")
    raise typer.Exit(1)


async def _resolve_values(
    connection_id: str,
    connector_id: str,
    request: dict[str, Any],
    extension: dict[str, Any],
    array_type: str | None,
    managed_identity: bool,
) -> Any:
    async with _build_context() as context:
        return await context.service.get_legacy_dynamic_values(
            connection_id=connection_id,
            connector_id=connector_id,
            parameters=request,
            extension=extension,
            parameter_array_type=array_type,
            is_managed_identity=managed_identity,
        )


async def _resolve_schema(
    connection_id: str,
    connector_id: str,
    request: dict[str, Any],
    extension: dict[str, Any],
    managed_identity: bool,
) -> Any:
    async with _build_context() as context:
        return await context.service.get_legacy_dynamic_schema(
            connection_id=connection_id,
            connector_id=connector_id,
            parameters=request,
            extension=extension,
            is_managed_identity=managed_identity,
        )


@app.command()
def values(
    connection_id: str = typer.Option(..., "--connection-id", help="Connection name or resource id"),
    connector_id: str = typer.Option(..., "--connector-id", help="Connector id"),
    request: str = typer.Option(..., "--request", help='Request JSON, e.g. {"method": "get", "path": "/items"}'),
    extension: str = typer.Option(..., "--extension", help="Legacy dynamic values extension JSON"),
    array_type: str = typer.Option("", "--array-type", help="Item type when the parameter is an array"),
    managed_identity: bool = typer.Option(False, "--managed-identity/--no-managed-identity"),
) -> None:
    """Resolve dynamic values through the connection's backing API."""
    request_payload = _parse_json_option(request, "--request")
    extension_payload = _parse_json_option(extension, "--extension")
    try:
        result = asyncio.run(
            _resolve_values(
                connection_id,
                connector_id,
                request_payload,
                extension_payload,
                array_type or None,
                managed_identity,
            )
        )
    except ConnectorServiceError as exc:
        _print_failure(exc)
        raise typer.Exit(1) from exc

    if not isinstance(result, list) or not all(isinstance(item, ListDynamicValue) for item in result):
        _print_json(result, "Raw response")
        return

    table = Table(title="Dynamic Values", border_style="cyan")
    table.add_column("Value", style="bold cyan")
    table.add_column("Display name", style="white")
    table.add_column("Description", style="dim")
    table.add_column("Selectable", justify="center")
    for item in result:
        table.add_row(
            json.dumps(item.value, default=str),
            str(item.display_name),
            "" if item.description is None else str(item.description),
            "[red]No[/red]" if item.disabled else "[green]Yes[/green]",
        )
    console.print(table)
    console.print(f"\n[dim]Resolved {len(result)} values[/dim]")


@app.command()
def schema(
    connection_id: str = typer.Option(..., "--connection-id", help="Connection name or resource id"),
    connector_id: str = typer.Option(..., "--connector-id", help="Connector id"),
    request: str = typer.Option(..., "--request", help="Request JSON"),
    extension: str = typer.Option("{}", "--extension", help="Legacy dynamic schema extension JSON"),
    managed_identity: bool = typer.Option(False, "--managed-identity/--no-managed-identity"),
) -> None:
    """Resolve a dynamic schema through the connection's backing API."""
    request_payload = _parse_json_option(request, "--request")
    extension_payload = _parse_json_option(extension, "--extension")
    try:
        result = asyncio.run(
            _resolve_schema(connection_id, connector_id, request_payload, extension_payload, managed_identity)
        )
    except ConnectorServiceError as exc:
        _print_failure(exc)
        raise typer.Exit(1) from exc

    if result is None:
        console.print("[yellow]No schema found in the response.[/yellow]")
        return
    _print_json(result, "Dynamic Schema")


if __name__ == "__main__":
    app()
