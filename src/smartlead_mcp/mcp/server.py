"""MCP server exposing the Smartlead tools."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolRequest, LoggingLevel, ServerResult, Tool

from smartlead_mcp import __version__
from smartlead_mcp.client import SmartleadClient
from smartlead_mcp.core.logsink import LoggingMode, LogSink
from smartlead_mcp.gateway import Gateway

if TYPE_CHECKING:
    from smartlead_mcp.config.schema import SmartleadConfig
    from smartlead_mcp.core.retry import RetryPolicy
    from smartlead_mcp.gateway import RemoteCaller
    from smartlead_mcp.tools.catalog import ToolSpec

logger = logging.getLogger(__name__)

SERVER_NAME = "smartlead-mcp"


def _to_mcp_tool(spec: ToolSpec) -> Tool:
    return Tool(
        name=spec.name,
        description=spec.description,
        inputSchema=spec.input_schema,
    )


def create_server(
    client: RemoteCaller,
    mode: LoggingMode,
    policy: RetryPolicy | None = None,
) -> tuple[Server[Any], Gateway]:
    """Build the MCP server and the gateway behind it.

    The logging mode is bound here and shared by every request handler.
    """
    server: Server[Any] = Server(SERVER_NAME, version=__version__)
    sink = LogSink(mode, session_getter=lambda: server.request_context.session)
    gateway = Gateway(client, sink, policy)

    @server.list_tools()  # type: ignore[no-untyped-call, untyped-decorator]
    async def list_tools() -> list[Tool]:
        """List available MCP tools."""
        return [_to_mcp_tool(spec) for spec in gateway.list_tools()]

    # Registered directly so the SDK neither re-validates arguments against
    # the published schema nor turns failures into its own error results.
    async def call_tool(request: CallToolRequest) -> ServerResult:
        result = await gateway.invoke(request.params.name, request.params.arguments)
        return ServerResult(result.to_mcp())

    server.request_handlers[CallToolRequest] = call_tool

    @server.set_logging_level()  # type: ignore[no-untyped-call, untyped-decorator]
    async def set_logging_level(level: LoggingLevel) -> None:
        await sink.log("debug", f"Client requested log level: {level}")

    return server, gateway


async def _announce(gateway: Gateway, config: SmartleadConfig) -> None:
    await gateway.sink.log("info", "Smartlead MCP Server initialized successfully")
    await gateway.sink.log("info", f"Configuration: API URL: {config.api.base_url}")


async def run_stdio(config: SmartleadConfig) -> None:
    """Serve over stdio. Logs go to stderr so stdout stays protocol-only."""
    async with SmartleadClient.from_config(config.api) as client:
        server, gateway = create_server(
            client, LoggingMode.SIDE_CHANNEL, config.retry.to_policy()
        )
        logger.info("Running in stdio mode, logging will be directed to stderr")
        async with stdio_server() as (read_stream, write_stream):
            await _announce(gateway, config)
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )


async def run_sse(config: SmartleadConfig) -> None:
    """Serve over HTTP with Server-Sent Events.

    Logs are sent to the connected client as MCP log notifications.
    """
    import uvicorn
    from mcp.server.sse import SseServerTransport
    from starlette.applications import Starlette
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.routing import Mount, Route

    async with SmartleadClient.from_config(config.api) as client:
        server, gateway = create_server(
            client, LoggingMode.PROTOCOL_NATIVE, config.retry.to_policy()
        )
        sse = SseServerTransport("/messages/")

        async def handle_sse(request: Request) -> Response:
            async with sse.connect_sse(
                request.scope,
                request.receive,
                request._send,
            ) as (read_stream, write_stream):
                await server.run(
                    read_stream,
                    write_stream,
                    server.create_initialization_options(),
                )
            return Response()

        app = Starlette(
            routes=[
                Route("/sse", endpoint=handle_sse, methods=["GET"]),
                Mount("/messages/", app=sse.handle_post_message),
            ]
        )
        await _announce(gateway, config)
        uv = uvicorn.Server(
            uvicorn.Config(
                app,
                host=config.server.host,
                port=config.server.port,
                log_level=config.logging.level.lower(),
            )
        )
        await uv.serve()


async def run_server(config: SmartleadConfig) -> None:
    """Start the MCP server on the configured transport."""
    if config.server.transport == "sse":
        await run_sse(config)
    else:
        await run_stdio(config)
