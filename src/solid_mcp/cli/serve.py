from typing import Annotated

import typer
from rich.console import Console

from solid_mcp.cli.pod import AuthTypeOption, PodUrlOption, TokenOption, _get_fetch, _load_config

serve_app = typer.Typer(help="Start servers.")
console = Console(stderr=True)


@serve_app.callback()
def serve() -> None:
    """Start servers."""


@serve_app.command("mcp")
def mcp(
    transport: Annotated[str, typer.Option(help="stdio, sse or http.")] = "stdio",
    host: str = "127.0.0.1",
    port: int = 8000,
    pod_url: PodUrlOption = None,
    auth_type: AuthTypeOption = None,
    token: TokenOption = None,
) -> None:
    """Start the MCP server."""
    from solid_mcp.core.actions import ActionDispatcher
    from solid_mcp.core.resolver import ResourceResolver
    from solid_mcp.mcp.server import create_mcp_server

    config = _load_config(pod_url, auth_type, token)
    server = create_mcp_server(ActionDispatcher(ResourceResolver(config, _get_fetch())))
    console.print(f"[green]Starting MCP server for {config.pod_url} (transport: {transport})[/green]")
    if transport == "stdio":
        server.run(transport="stdio")
    else:
        server.run(transport=transport, host=host, port=port)  # type: ignore[arg-type]
