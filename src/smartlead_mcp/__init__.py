"""smartlead-mcp - Smartlead campaign API exposed as MCP tools."""

__version__ = "1.0.0"
