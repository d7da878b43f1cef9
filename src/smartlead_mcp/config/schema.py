"""Pydantic models for smartlead-mcp configuration."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from smartlead_mcp.core.retry import RetryPolicy

DEFAULT_API_URL = "https://server.smartlead.ai/api/v1"


class ApiConfig(BaseModel):
    """Smartlead API connection settings."""

    api_key: str | None = None
    base_url: str = DEFAULT_API_URL
    timeout: float = Field(default=30.0, gt=0)


class RetryConfig(BaseModel):
    """Retry policy for rate-limited calls. Delays are in milliseconds."""

    max_attempts: int = Field(default=3, ge=1)
    initial_delay: float = Field(default=1000, ge=0)
    max_delay: float = Field(default=10000, ge=0)
    backoff_factor: float = Field(default=2, ge=1)

    def to_policy(self) -> RetryPolicy:
        return RetryPolicy(
            max_attempts=self.max_attempts,
            initial_delay_ms=self.initial_delay,
            max_delay_ms=self.max_delay,
            backoff_factor=self.backoff_factor,
        )


class ServerConfig(BaseModel):
    """MCP server transport settings."""

    transport: Literal["stdio", "sse"] = "stdio"
    host: str = "127.0.0.1"
    port: int = 8000


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    @field_validator("level", mode="before")
    @classmethod
    def _upper(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


class SmartleadConfig(BaseModel):
    """Top-level configuration for smartlead-mcp."""

    api: ApiConfig = Field(default_factory=ApiConfig)
    retry: RetryConfig = Field(default_factory=RetryConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
