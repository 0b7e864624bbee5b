"""Commands that run a single action against the configured pod."""

from __future__ import annotations

import asyncio
import json
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.table import Table

from solid_mcp.config import PodConfig, load_config
from solid_mcp.core.actions import ACTIONS, ActionDispatcher
from solid_mcp.core.errors import ConfigError
from solid_mcp.core.ports.transport import Fetch
from solid_mcp.core.resolver import ResourceResolver

console = Console()

PodUrlOption = Annotated[
    str | None, typer.Option("--pod-url", help="Base URL of the pod (default: $SOLID_POD_URL).")
]
AuthTypeOption = Annotated[
    str | None, typer.Option("--auth-type", help="bearer, dpop or cookie (default: $SOLID_AUTH_TYPE).")
]
TokenOption = Annotated[str | None, typer.Option("--token", help="Credential (default: $SOLID_TOKEN).")]


def _get_fetch() -> Fetch:
    from solid_mcp.transport.httpx_transport import HttpxFetch

    return HttpxFetch(follow_redirects=True)


def _load_config(pod_url: str | None, auth_type: str | None, token: str | None) -> PodConfig:
    try:
        return load_config(pod_url, auth_type, token)
    except ConfigError as exc:
        console.print(str(exc), style="red", markup=False)
        raise typer.Exit(2) from exc


def _run(config: PodConfig, action: str, parameters: dict[str, Any]) -> dict[str, Any]:
    fetch = _get_fetch()
    dispatcher = ActionDispatcher(ResourceResolver(config, fetch))

    async def _go() -> dict[str, Any]:
        try:
            return await dispatcher.handle({"action": action, "parameters": parameters})
        finally:
            aclose = getattr(fetch, "aclose", None)
            if aclose is not None:
                await aclose()

    return asyncio.run(_go())


def _render_value(value: Any) -> str:
    if isinstance(value, bytes):
        return f"<{len(value)} bytes>"
    return str(value)


def call(
    action: Annotated[str, typer.Argument(help="Action name, e.g. read_resource.")],
    params: Annotated[str, typer.Option("--params", "-p", help="Action parameters as a JSON object.")] = "{}",
    pod_url: PodUrlOption = None,
    auth_type: AuthTypeOption = None,
    token: TokenOption = None,
) -> None:
    """Run one action and print the response envelope as JSON."""
    try:
        parameters = json.loads(params)
    except json.JSONDecodeError as exc:
        console.print(f"--params is not valid JSON: {exc}", style="red", markup=False)
        raise typer.Exit(2) from exc

    response = _run(_load_config(pod_url, auth_type, token), action, parameters)
    console.print_json(json.dumps(response, default=_render_value))
    if response["status"] == "error":
        raise typer.Exit(1)


def ls(
    uri: Annotated[str, typer.Argument(help="Container to list.")] = "/",
    pod_url: PodUrlOption = None,
    auth_type: AuthTypeOption = None,
    token: TokenOption = None,
) -> None:
    """List the children of a container."""
    response = _run(_load_config(pod_url, auth_type, token), "list_container", {"uri": uri})
    if response["status"] == "error":
        console.print(response["error"], style="red", markup=False)
        raise typer.Exit(1)

    children = response["result"]["children"]
    table = Table(title=response["result"]["container"]["uri"], show_lines=False)
    for header in ("uri", "type", "contentType"):
        table.add_column(header)
    for child in children:
        table.add_row(child["uri"], child["type"], child.get("contentType", ""))
    console.print(table)
    console.print(f"({len(children)} children)")


def actions() -> None:
    """List the available actions and their parameters."""
    table = Table(show_lines=False)
    table.add_column("action")
    table.add_column("parameters")
    table.add_column("description")
    for name, model in ACTIONS.items():
        fields = ", ".join(f if info.is_required() else f"{f}?" for f, info in model.model_fields.items())
        table.add_row(name, fields, (model.__doc__ or "").strip())
    console.print(table)
