"""
Result types and error hierarchy for kbbot.

This module provides:
1. Result[T, E] type for the subprocess plumbing
2. Domain-specific exception hierarchy with a ``kind`` tag per error class

Usage:
    from kbbot.core.result import Ok, Err, Result, TransportError

    async def run() -> Result[str, TransportError]:
        if failed:
            return Err(TransportError("keybase exited with status 2"))
        return Ok(stdout)

    output = (await run()).unwrap()  # raises the contained error on Err
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, ClassVar, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E", bound=Exception)


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Represents a successful result containing a value."""

    value: T

    def unwrap(self) -> T:
        """Return the contained value."""
        return self.value

    def and_then(self, fn: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Chain operations that may fail."""
        return fn(self.value)


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Represents a failed result containing an error."""

    error: E

    def unwrap(self) -> T:
        """Raise the contained error."""
        raise self.error

    def and_then(self, fn: Callable[[T], Result[U, E]]) -> Err[E]:
        """Short-circuit for Err - returns self unchanged."""
        return self


# Type alias for Result
Result = Ok[T] | Err[E]


# ---------------------------------------------------------------------------
# Domain-specific error hierarchy
# ---------------------------------------------------------------------------


class KbBotError(Exception):
    """Base exception for all kbbot errors.

    ``kind`` is a stable tag callers can branch on instead of matching
    message text.
    """

    kind: ClassVar[str] = "kbbot"

    def __init__(self, message: str, *, context: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} [{ctx_str}]"
        return self.message


class UninitializedSessionError(KbBotError):
    """Raised when a call is attempted before the bot session is ready."""

    kind = "uninitialized_session"


class TransportError(KbBotError):
    """Raised when the keybase process cannot be run or reports a failure.

    Examples:
    - Executable not found on PATH
    - Non-zero exit status
    - Unparsable JSON on stdout
    - An ``error`` member in the API response
    - Call timed out
    """

    kind = "transport_failure"


class OperationFailedError(KbBotError):
    """Raised when the API answered without error but returned nothing usable."""

    kind = "operation_failed"

    def __init__(self, operation: str, *, context: dict | None = None) -> None:
        super().__init__(operation, context=context)
        self.operation = operation


__all__ = [
    # Result types
    "Ok",
    "Err",
    "Result",
    # Error hierarchy
    "KbBotError",
    "UninitializedSessionError",
    "TransportError",
    "OperationFailedError",
]
