import logging
import sys
from typing import Annotated

import typer

from solid_mcp.cli.pod import actions, call, ls
from solid_mcp.cli.serve import serve_app

app = typer.Typer(
    name="solid-mcp",
    help="Solid MCP CLI: drive a Solid pod through named actions.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def configure(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output to stderr.")] = False,
) -> None:
    # stdout carries MCP stdio traffic, so logs always go to stderr.
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


app.command("call")(call)
app.command("ls")(ls)
app.command("actions")(actions)
app.add_typer(serve_app, name="serve")


def main() -> None:
    app()
