"""Configuration loading and validation."""

from smartlead_mcp.config.loader import load_config
from smartlead_mcp.config.schema import (
    ApiConfig,
    LoggingConfig,
    RetryConfig,
    ServerConfig,
    SmartleadConfig,
)

__all__ = [
    "ApiConfig",
    "LoggingConfig",
    "RetryConfig",
    "ServerConfig",
    "SmartleadConfig",
    "load_config",
]
