"""Core types, errors, and shared utilities."""

from smartlead_mcp.core.errors import (
    ApiError,
    ConfigError,
    InvalidParamsError,
    RateLimitError,
    SmartleadError,
    ToolError,
    UnknownToolError,
)
from smartlead_mcp.core.logsink import LoggingMode, LogSink, configure_logging
from smartlead_mcp.core.result import Err, Ok, Outcome
from smartlead_mcp.core.retry import (
    RetryPolicy,
    compute_delay,
    is_rate_limited,
    retry_with_backoff,
)

__all__ = [
    "ApiError",
    "ConfigError",
    "Err",
    "InvalidParamsError",
    "LogSink",
    "LoggingMode",
    "Ok",
    "Outcome",
    "RateLimitError",
    "RetryPolicy",
    "SmartleadError",
    "ToolError",
    "UnknownToolError",
    "configure_logging",
    "compute_delay",
    "is_rate_limited",
    "retry_with_backoff",
]
