"""Explicit outcome type for the request path.

Request-time failures travel as :class:`Err` values instead of raised
exceptions, so every branch of the gateway ends in exactly one outcome.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T


@dataclass(frozen=True, slots=True)
class Err:
    """Failed outcome carrying the error that caused it."""

    error: BaseException


Outcome = Ok[T] | Err
