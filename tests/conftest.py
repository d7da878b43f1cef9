"""Shared test fixtures for smartlead-mcp."""

from __future__ import annotations

import os
from typing import Any

import pytest

from smartlead_mcp.core.logsink import LoggingMode, LogSink

SMARTLEAD_ENV_VARS = (
    "SMARTLEAD_API_KEY",
    "SMARTLEAD_API_URL",
    "SMARTLEAD_RETRY_MAX_ATTEMPTS",
    "SMARTLEAD_RETRY_INITIAL_DELAY",
    "SMARTLEAD_RETRY_MAX_DELAY",
    "SMARTLEAD_RETRY_BACKOFF_FACTOR",
    "SMARTLEAD_LOG_LEVEL",
)


class FakeClient:
    """Records every remote call and replays scripted outcomes.

    Each entry of *outcomes* is either a value to return or an exception
    to raise. The last entry repeats once the script runs out.
    """

    def __init__(self, *outcomes: Any) -> None:
        self.outcomes = list(outcomes) or [{"ok": True}]
        self.calls: list[dict[str, Any]] = []

    async def call(
        self,
        method: str,
        path: str,
        body: Any = None,
        query: dict[str, Any] | None = None,
    ) -> Any:
        self.calls.append(
            {"method": method, "path": path, "body": body, "query": query}
        )
        index = min(len(self.calls), len(self.outcomes)) - 1
        outcome = self.outcomes[index]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class RecordingSink(LogSink):
    """Side-channel sink that also keeps entries in memory."""

    def __init__(self) -> None:
        super().__init__(LoggingMode.SIDE_CHANNEL)
        self.entries: list[tuple[str, Any]] = []

    async def log(self, level: Any, data: Any) -> None:
        self.entries.append((level, data))
        await super().log(level, data)

    def messages(self, level: str) -> list[Any]:
        return [data for lvl, data in self.entries if lvl == level]


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def make_client() -> type[FakeClient]:
    """Factory for scripted remote clients."""
    return FakeClient


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Any) -> Any:
    """Isolate config discovery from the developer's machine."""
    for var in SMARTLEAD_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    yield
    # .env loading writes straight to os.environ
    for var in SMARTLEAD_ENV_VARS:
        os.environ.pop(var, None)
