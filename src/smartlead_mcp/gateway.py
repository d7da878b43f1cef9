"""Tool-invocation gateway.

Dispatches a named tool call through validation, the retrying remote call,
and the normalizer. Whatever happens, :meth:`Gateway.invoke` returns one
:class:`~smartlead_mcp.tools.normalize.ToolResult` and never raises.
"""

from __future__ import annotations

import time
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Protocol

from smartlead_mcp.core.errors import UnknownToolError
from smartlead_mcp.core.result import Err, Ok
from smartlead_mcp.core.retry import RetryPolicy, retry_with_backoff
from smartlead_mcp.tools.arguments import validate_arguments
from smartlead_mcp.tools.catalog import get_tool, list_tools
from smartlead_mcp.tools.normalize import normalize

if TYPE_CHECKING:
    from collections.abc import Iterable

    from smartlead_mcp.core.logsink import LogSink
    from smartlead_mcp.core.result import Outcome
    from smartlead_mcp.tools.catalog import RemoteRequest, ToolSpec
    from smartlead_mcp.tools.normalize import ToolResult


class RemoteCaller(Protocol):
    """Anything that can issue one HTTP call against the API."""

    async def call(
        self,
        method: str,
        path: str,
        body: Any = None,
        query: dict[str, Any] | None = None,
    ) -> Any: ...


class Gateway:
    """Routes tool invocations to the Smartlead API.

    Args:
        client: Remote call executor.
        sink: Logging sink, fixed for the process.
        policy: Retry policy for rate-limited calls.
        tools: Tool catalog. Defaults to every Smartlead tool.
    """

    def __init__(
        self,
        client: RemoteCaller,
        sink: LogSink,
        policy: RetryPolicy | None = None,
        tools: Iterable[ToolSpec] | None = None,
    ) -> None:
        self._client = client
        self._sink = sink
        self._policy = policy or RetryPolicy()
        # None means the built-in catalog
        self._tools: dict[str, ToolSpec] | None = (
            {t.name: t for t in tools} if tools is not None else None
        )

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    @property
    def sink(self) -> LogSink:
        return self._sink

    def list_tools(self) -> list[ToolSpec]:
        if self._tools is None:
            return list_tools()
        return list(self._tools.values())

    def _lookup(self, name: str) -> ToolSpec | None:
        if self._tools is None:
            return get_tool(name)
        return self._tools.get(name)

    async def invoke(self, name: str, arguments: dict[str, Any] | None) -> ToolResult:
        """Run one tool invocation and return its result envelope."""
        start = time.monotonic()
        await self._sink.log(
            "info",
            f"[{datetime.now(UTC).isoformat()}] Received request for tool: {name}",
        )
        try:
            outcome = await self._dispatch(name, arguments)
        except Exception as e:
            outcome = Err(e)

        if isinstance(outcome, Err):
            await self._sink.log(
                "error",
                {
                    "message": f"Request failed: {outcome.error}",
                    "tool": name,
                    "arguments": arguments,
                    "timestamp": datetime.now(UTC).isoformat(),
                    "duration": _elapsed_ms(start),
                },
            )

        result = normalize(outcome)
        await self._sink.log("info", f"Request completed in {_elapsed_ms(start)}ms")
        return result

    async def _dispatch(self, name: str, arguments: Any) -> Outcome[Any]:
        spec = self._lookup(name)
        if spec is None:
            return Err(UnknownToolError(name))

        validated = validate_arguments(name, spec.arguments, arguments)
        if isinstance(validated, Err):
            return validated

        return await self._execute(spec.build(validated.value))

    async def _execute(self, request: RemoteRequest) -> Outcome[Any]:
        async def _call() -> Any:
            return await self._client.call(
                request.method,
                request.path,
                body=request.body,
                query=request.query,
            )

        try:
            payload = await retry_with_backoff(
                _call,
                request.context,
                self._policy,
                on_retry=self._warn,
            )
        except Exception as e:
            return Err(e)
        return Ok(payload)

    async def _warn(self, message: str) -> None:
        await self._sink.log("warning", message)


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)
