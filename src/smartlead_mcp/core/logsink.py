"""Logging sink shared by every request handler.

The sink writes either to a side channel (stderr through stdlib logging),
which keeps the stdio protocol stream clean, or as MCP ``notifications/message``
sent over the active session. The mode is chosen once, when the transport is
known, and cannot be changed afterwards.
"""

from __future__ import annotations

import enum
import json
import logging
import sys
from typing import TYPE_CHECKING, Any, Literal

if TYPE_CHECKING:
    from collections.abc import Callable

    from mcp.server.session import ServerSession

LogLevel = Literal[
    "debug", "info", "notice", "warning", "error", "critical", "alert", "emergency"
]

LOGGER_NAME = "smartlead_mcp"

_STDLIB_LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "notice": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
    "alert": logging.CRITICAL,
    "emergency": logging.CRITICAL,
}


class LoggingMode(enum.Enum):
    SIDE_CHANNEL = "side_channel"
    PROTOCOL_NATIVE = "protocol_native"


def format_data(data: Any) -> str:
    """Render a log payload as a single line of text."""
    if isinstance(data, str):
        return data
    try:
        return json.dumps(data, default=str)
    except (TypeError, ValueError):
        return repr(data)


class LogSink:
    """Write-once logging destination.

    Args:
        mode: Where entries go for the lifetime of the sink.
        session_getter: Returns the MCP session of the request being
            handled. Only used in protocol-native mode; it may raise
            ``LookupError`` outside a request.
        logger: Side-channel logger. Defaults to the package logger.
    """

    def __init__(
        self,
        mode: LoggingMode,
        session_getter: Callable[[], ServerSession] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._mode = mode
        self._session_getter = session_getter
        self._logger = logger or logging.getLogger(LOGGER_NAME)

    @property
    def mode(self) -> LoggingMode:
        return self._mode

    async def log(self, level: LogLevel, data: Any) -> None:
        """Emit one entry. Never raises."""
        if self._mode is LoggingMode.PROTOCOL_NATIVE and await self._send(level, data):
            return
        self._write_side_channel(level, data)

    async def _send(self, level: LogLevel, data: Any) -> bool:
        if self._session_getter is None:
            return False
        try:
            session = self._session_getter()
            payload = data if isinstance(data, (str, dict, list)) else format_data(data)
            await session.send_log_message(level=level, data=payload, logger=LOGGER_NAME)
        except Exception:
            # No active request, or the peer went away
            return False
        return True

    def _write_side_channel(self, level: str, data: Any) -> None:
        # stdlib logging reports handler failures itself instead of raising
        self._logger.log(
            _STDLIB_LEVELS.get(level, logging.INFO),
            "%s",
            format_data(data),
            extra={"mcp_level": level},
        )


class _LevelTagFormatter(logging.Formatter):
    """Prefix each line with its MCP level, or the stdlib level name."""

    def format(self, record: logging.LogRecord) -> str:
        record.level_tag = getattr(record, "mcp_level", record.levelname.lower())
        return super().format(record)


class _StderrHandler(logging.StreamHandler):  # type: ignore[type-arg]
    def __init__(self) -> None:
        super().__init__(sys.stderr)
        self.setFormatter(_LevelTagFormatter("[%(level_tag)s] %(message)s"))


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Send package logs to stderr, tagged with their level.

    stdout stays reserved for the stdio protocol stream. Calling this
    again replaces the previous handler.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, _StderrHandler):
            logger.removeHandler(handler)
    logger.addHandler(_StderrHandler())
    logger.setLevel(level.upper())
    return logger
