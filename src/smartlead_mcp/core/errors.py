"""Exception hierarchy for smartlead-mcp.

Every module imports from here. The hierarchy is:

    SmartleadError
    ├── ConfigError
    ├── ToolError(tool)
    │   ├── InvalidParamsError
    │   └── UnknownToolError
    └── ApiError(status_code, message, payload)
        └── RateLimitError
"""

from __future__ import annotations

from typing import Any


class SmartleadError(Exception):
    """Base exception for all smartlead-mcp errors."""


# ─── Configuration Errors ─────────────────────────────────────


class ConfigError(SmartleadError):
    """Invalid or missing configuration. Fatal at startup."""


# ─── Tool Errors ──────────────────────────────────────────────


class ToolError(SmartleadError):
    """Base for errors raised before a tool reaches the remote API."""

    def __init__(self, tool: str, message: str) -> None:
        self.tool = tool
        super().__init__(message)


class InvalidParamsError(ToolError):
    """Arguments failed the tool's shape validation."""


class UnknownToolError(ToolError):
    """No tool with this name is registered."""

    def __init__(self, tool: str) -> None:
        super().__init__(tool, f"Unknown tool: {tool}")


# ─── Remote API Errors ────────────────────────────────────────


class ApiError(SmartleadError):
    """Non-2xx response or transport failure from the Smartlead API.

    ``status_code`` is ``None`` for transport-level failures.
    ``remote_message`` is the message supplied in the response body, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        remote_message: str | None = None,
        payload: Any = None,
    ) -> None:
        self.status_code = status_code
        self.remote_message = remote_message
        self.payload = payload
        super().__init__(message)


class RateLimitError(ApiError):
    """HTTP 429 from the Smartlead API."""
