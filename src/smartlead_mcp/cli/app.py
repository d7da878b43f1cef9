"""Click CLI application for smartlead-mcp.

Entry point: ``smartlead-mcp = "smartlead_mcp.cli.app:cli"``
"""

from __future__ import annotations

import asyncio
import json as json_mod
import sys
from typing import TYPE_CHECKING, Any

import click

from smartlead_mcp import __version__
from smartlead_mcp.config.loader import load_config
from smartlead_mcp.core.errors import ConfigError

if TYPE_CHECKING:
    from smartlead_mcp.config.schema import SmartleadConfig
    from smartlead_mcp.tools.normalize import ToolResult


def _error(msg: str) -> None:
    """Print an error message to stderr and exit."""
    click.echo(f"Error: {msg}", err=True)
    sys.exit(1)


def _load_config(
    config_path: str | None,
    overrides: dict[str, Any] | None = None,
) -> SmartleadConfig:
    """Load config with user-friendly error handling."""
    try:
        return load_config(path=config_path, overrides=overrides)
    except ConfigError as e:
        _error(str(e))
        raise  # unreachable, keeps mypy happy


# ── CLI group ────────────────────────────────────────────────────


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="smartlead-mcp")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True),
    default=None,
    help="Path to config file.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None) -> None:
    """smartlead-mcp - Smartlead campaign API as MCP tools."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# ── serve ────────────────────────────────────────────────────────


@cli.command()
@click.option(
    "--transport",
    type=click.Choice(["stdio", "sse"]),
    default=None,
    help="Transport to serve on (overrides config).",
)
@click.option("--host", default=None, help="Host to bind to for sse.")
@click.option("--port", type=int, default=None, help="Port to bind to for sse.")
@click.pass_context
def serve(
    ctx: click.Context,
    transport: str | None,
    host: str | None,
    port: int | None,
) -> None:
    """Start the MCP server."""
    from smartlead_mcp.core.logsink import configure_logging
    from smartlead_mcp.mcp.server import run_server

    server_overrides = {
        key: value
        for key, value in (("transport", transport), ("host", host), ("port", port))
        if value is not None
    }
    overrides = {"server": server_overrides} if server_overrides else None
    config = _load_config(ctx.obj["config_path"], overrides)
    configure_logging(config.logging.level)

    click.echo("Initializing Smartlead MCP Server...", err=True)
    try:
        asyncio.run(run_server(config))
    except KeyboardInterrupt:
        # Ctrl-C is a clean shutdown
        return
    except Exception as e:
        _error(f"Fatal error running server: {e}")


# ── tools ────────────────────────────────────────────────────────


@cli.command()
@click.option(
    "--json", "as_json", is_flag=True, default=False, help="Print full schemas."
)
def tools(as_json: bool) -> None:
    """List the tools the server exposes."""
    from smartlead_mcp.tools.catalog import list_tools

    specs = list_tools()
    if as_json:
        click.echo(
            json_mod.dumps(
                [
                    {
                        "name": s.name,
                        "description": s.description,
                        "inputSchema": s.input_schema,
                    }
                    for s in specs
                ],
                indent=2,
            )
        )
        return

    width = max(len(s.name) for s in specs)
    for s in specs:
        click.echo(f"{s.name:<{width}}  {s.description}")


# ── call ─────────────────────────────────────────────────────────


@cli.command()
@click.argument("name")
@click.option(
    "--args",
    "raw_args",
    default="{}",
    help="Tool arguments as a JSON object.",
)
@click.pass_context
def call(ctx: click.Context, name: str, raw_args: str) -> None:
    """Invoke one tool against the Smartlead API and print the result."""
    try:
        arguments = json_mod.loads(raw_args)
    except json_mod.JSONDecodeError as e:
        _error(f"--args is not valid JSON: {e}")
        return

    config = _load_config(ctx.obj["config_path"])

    from smartlead_mcp.core.logsink import configure_logging

    configure_logging(config.logging.level)
    result = asyncio.run(_call_async(config, name, arguments))
    click.echo(result.text)
    if result.is_error:
        sys.exit(1)


async def _call_async(
    config: SmartleadConfig, name: str, arguments: Any
) -> ToolResult:
    """Run one invocation with side-channel logging."""
    from smartlead_mcp.client import SmartleadClient
    from smartlead_mcp.core.logsink import LoggingMode, LogSink
    from smartlead_mcp.gateway import Gateway

    async with SmartleadClient.from_config(config.api) as client:
        gateway = Gateway(
            client,
            LogSink(LoggingMode.SIDE_CHANNEL),
            config.retry.to_policy(),
        )
        return await gateway.invoke(name, arguments)
