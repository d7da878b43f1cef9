"""Retry with exponential backoff for rate-limited API calls."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar

from smartlead_mcp.core.errors import ApiError, RateLimitError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

T = TypeVar("T")

_RATE_LIMIT_MARKERS = ("429", "rate limit")


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    """Process-wide retry policy. Delays are in milliseconds."""

    max_attempts: int = 3
    initial_delay_ms: float = 1000
    max_delay_ms: float = 10000
    backoff_factor: float = 2

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            msg = f"max_attempts must be >= 1, got {self.max_attempts}"
            raise ValueError(msg)


def is_rate_limited(error: BaseException) -> bool:
    """Check if an error should trigger a retry.

    A structured status code wins when the error carries one; otherwise
    the message is searched for a rate-limit marker.
    """
    if isinstance(error, RateLimitError):
        return True
    if isinstance(error, ApiError) and error.status_code is not None:
        return error.status_code == 429
    text = str(error).lower()
    return any(marker in text for marker in _RATE_LIMIT_MARKERS)


def compute_delay(attempt: int, policy: RetryPolicy) -> float:
    """Backoff delay in milliseconds after a failed *attempt* (1-based)."""
    delay: float = policy.initial_delay_ms * policy.backoff_factor ** (attempt - 1)
    return min(delay, policy.max_delay_ms)


async def retry_with_backoff(
    fn: Callable[[], Awaitable[T]],
    context: str,
    policy: RetryPolicy | None = None,
    on_retry: Callable[[str], Awaitable[None]] | None = None,
    attempt: int = 1,
) -> T:
    """Execute fn, retrying while it fails with a rate limit.

    Args:
        fn: Zero-arg callable returning an awaitable.
        context: Human-readable label used in the retry log line.
        policy: Retry policy. Uses defaults if None.
        on_retry: Optional async callback receiving the warning message
            emitted before each retry.
        attempt: Number of the first attempt, normally 1.

    Returns:
        The result of fn().

    Raises:
        The last error once ``policy.max_attempts`` is reached, or the first
        error immediately when it is not a rate limit.
    """
    cfg = policy or RetryPolicy()

    while True:
        try:
            return await fn()
        except Exception as e:
            if not is_rate_limited(e) or attempt >= cfg.max_attempts:
                raise
            delay_ms = compute_delay(attempt, cfg)
            if on_retry is not None:
                await on_retry(
                    f"Rate limit hit for {context}. "
                    f"Attempt {attempt}/{cfg.max_attempts}. "
                    f"Retrying in {delay_ms:.0f}ms"
                )
            await asyncio.sleep(delay_ms / 1000)
            attempt += 1
