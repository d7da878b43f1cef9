"""Smartlead tool catalog, argument validation, and result envelope."""

from smartlead_mcp.tools.arguments import MAX_BULK_LEADS, validate_arguments
from smartlead_mcp.tools.catalog import RemoteRequest, ToolSpec, get_tool, list_tools
from smartlead_mcp.tools.normalize import (
    TextBlock,
    ToolResult,
    error_result,
    normalize,
    success_result,
)

__all__ = [
    "MAX_BULK_LEADS",
    "RemoteRequest",
    "TextBlock",
    "ToolResult",
    "ToolSpec",
    "error_result",
    "get_tool",
    "list_tools",
    "normalize",
    "success_result",
    "validate_arguments",
]
