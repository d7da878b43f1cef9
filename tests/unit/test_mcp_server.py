"""Tests for the MCP server wiring."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from mcp.types import (
    CallToolRequest,
    CallToolRequestParams,
    CallToolResult,
    ListToolsRequest,
    ListToolsResult,
)

from smartlead_mcp.config.schema import SmartleadConfig
from smartlead_mcp.core.logsink import LOGGER_NAME, LoggingMode
from smartlead_mcp.core.retry import RetryPolicy
from smartlead_mcp.mcp.server import SERVER_NAME, create_server, run_server, run_stdio
from smartlead_mcp.tools.catalog import list_tools


def _config(**server) -> SmartleadConfig:
    return SmartleadConfig.model_validate(
        {"api": {"api_key": "sk-test"}, "server": server}
    )


async def _call(server, name, arguments):
    handler = server.request_handlers[CallToolRequest]
    request = CallToolRequest(
        method="tools/call",
        params=CallToolRequestParams(name=name, arguments=arguments),
    )
    return (await handler(request)).root


# ─── create_server ────────────────────────────────────────────


class TestCreateServer:
    def test_server_identity(self, make_client):
        server, _ = create_server(make_client(), LoggingMode.SIDE_CHANNEL)
        assert server.name == SERVER_NAME

    def test_mode_bound_to_sink(self, make_client):
        _, gateway = create_server(make_client(), LoggingMode.PROTOCOL_NATIVE)
        assert gateway.sink.mode is LoggingMode.PROTOCOL_NATIVE

    def test_policy_passed_through(self, make_client):
        policy = RetryPolicy(max_attempts=5)
        _, gateway = create_server(make_client(), LoggingMode.SIDE_CHANNEL, policy)
        assert gateway.policy is policy

    def test_capabilities(self, make_client):
        server, _ = create_server(make_client(), LoggingMode.SIDE_CHANNEL)
        caps = server.create_initialization_options().capabilities
        assert caps.tools is not None
        assert caps.logging is not None

    async def test_list_tools(self, make_client):
        server, _ = create_server(make_client(), LoggingMode.SIDE_CHANNEL)
        handler = server.request_handlers[ListToolsRequest]

        result = (await handler(ListToolsRequest(method="tools/list"))).root

        assert isinstance(result, ListToolsResult)
        assert [t.name for t in result.tools] == [t.name for t in list_tools()]
        create = result.tools[0]
        assert create.inputSchema["required"] == ["name"]


# ─── call_tool ────────────────────────────────────────────────


class TestCallTool:
    async def test_success(self, make_client):
        client = make_client({"id": 7})
        server, _ = create_server(client, LoggingMode.SIDE_CHANNEL)

        result = await _call(server, "smartlead_get_campaign", {"campaign_id": 7})

        assert isinstance(result, CallToolResult)
        assert result.isError is False
        assert '"id": 7' in result.content[0].text
        assert client.calls[0]["path"] == "/campaigns/7"

    async def test_schema_not_enforced_by_sdk(self, make_client):
        client = make_client()
        server, _ = create_server(client, LoggingMode.SIDE_CHANNEL)

        result = await _call(server, "smartlead_get_campaign", {"campaign_id": "7"})

        assert result.isError is True
        assert result.content[0].text.startswith(
            "Error: Invalid arguments for smartlead_get_campaign"
        )
        assert client.calls == []

    async def test_missing_arguments(self, make_client):
        server, _ = create_server(make_client(), LoggingMode.SIDE_CHANNEL)
        result = await _call(server, "smartlead_get_campaign", None)
        assert result.isError is True
        assert result.content[0].text == "Error: No arguments provided"

    async def test_unknown_tool(self, make_client):
        server, _ = create_server(make_client(), LoggingMode.SIDE_CHANNEL)
        result = await _call(server, "smartlead_nope", {})
        assert result.isError is True
        assert result.content[0].text == "Error: Unknown tool: smartlead_nope"

    async def test_protocol_native_without_session_falls_back(
        self, make_client, caplog
    ):
        caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)
        server, _ = create_server(make_client(), LoggingMode.PROTOCOL_NATIVE)

        await _call(server, "smartlead_get_campaign", {"campaign_id": 1})

        messages = [r.getMessage() for r in caplog.records if r.name == LOGGER_NAME]
        assert any("Received request for tool" in m for m in messages)


# ─── Transports ───────────────────────────────────────────────


class TestRunServer:
    async def test_dispatches_stdio(self):
        with (
            patch("smartlead_mcp.mcp.server.run_stdio", new_callable=AsyncMock) as stdio,
            patch("smartlead_mcp.mcp.server.run_sse", new_callable=AsyncMock) as sse,
        ):
            await run_server(_config())
        stdio.assert_awaited_once()
        sse.assert_not_awaited()

    async def test_dispatches_sse(self):
        with (
            patch("smartlead_mcp.mcp.server.run_stdio", new_callable=AsyncMock) as stdio,
            patch("smartlead_mcp.mcp.server.run_sse", new_callable=AsyncMock) as sse,
        ):
            await run_server(_config(transport="sse"))
        sse.assert_awaited_once()
        stdio.assert_not_awaited()

    async def test_stdio_uses_side_channel(self):
        server = MagicMock()
        server.run = AsyncMock()
        gateway = MagicMock()
        gateway.sink.log = AsyncMock()

        @asynccontextmanager
        async def fake_stdio():
            yield ("read", "write")

        with (
            patch(
                "smartlead_mcp.mcp.server.create_server",
                return_value=(server, gateway),
            ) as create,
            patch("smartlead_mcp.mcp.server.stdio_server", fake_stdio),
        ):
            await run_stdio(_config())

        assert create.call_args.args[1] is LoggingMode.SIDE_CHANNEL
        server.run.assert_awaited_once()
        assert server.run.await_args.args[:2] == ("read", "write")
        logged = [c.args[1] for c in gateway.sink.log.await_args_list]
        assert logged == [
            "Smartlead MCP Server initialized successfully",
            "Configuration: API URL: https://server.smartlead.ai/api/v1",
        ]

    async def test_missing_api_key_refused(self):
        with pytest.raises(ValueError, match="API key"):
            await run_stdio(SmartleadConfig())
