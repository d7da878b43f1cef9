"""Result envelope and the normalizer that produces it.

Every tool invocation, successful or not, ends as exactly one
:class:`ToolResult`.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Literal

from mcp.types import CallToolResult, TextContent

from smartlead_mcp.core.errors import ApiError
from smartlead_mcp.core.result import Err, Ok, Outcome


@dataclass(frozen=True, slots=True)
class TextBlock:
    text: str
    type: Literal["text"] = "text"


@dataclass(frozen=True, slots=True)
class ToolResult:
    """Uniform result of one tool invocation."""

    content: tuple[TextBlock, ...]
    is_error: bool = False

    @property
    def text(self) -> str:
        return "\n".join(block.text for block in self.content)

    def to_mcp(self) -> CallToolResult:
        return CallToolResult(
            content=[TextContent(type="text", text=b.text) for b in self.content],
            isError=self.is_error,
        )


def error_message(error: Any) -> str:
    """Human-readable message for a failure.

    Remote errors prefer the message supplied by the API.
    """
    if isinstance(error, ApiError):
        return f"API Error: {error.remote_message or error}"
    return f"Error: {error}"


def success_result(payload: Any) -> ToolResult:
    text = json.dumps(payload, indent=2, ensure_ascii=False, default=str)
    return ToolResult(content=(TextBlock(text),))


def error_result(error: Any) -> ToolResult:
    return ToolResult(content=(TextBlock(error_message(error)),), is_error=True)


def normalize(outcome: Outcome[Any]) -> ToolResult:
    """Convert an outcome into the result envelope."""
    if isinstance(outcome, Ok):
        try:
            return success_result(outcome.value)
        except (TypeError, ValueError) as e:
            return error_result(e)
    if isinstance(outcome, Err):
        return error_result(outcome.error)
    return error_result(outcome)
