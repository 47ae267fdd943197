"""
Library exceptions.

Failures of user code travel inside futures untouched; these are only
raised for contract violations of the library itself.
"""

from __future__ import annotations


class EventualError(Exception):
    """Base class for errors raised by eventual."""


class CallbackContractError(EventualError):
    """A completion callback was invoked twice, or with both value and error."""


class ArityError(EventualError, ValueError):
    """Number of per-slot arguments does not match the tuple arity."""

    def __init__(self, operation: str, expected: int, got: int) -> None:
        super().__init__(f"{operation}() expects {expected} values, got {got}")
        self.operation = operation
        self.expected = expected
        self.got = got


class LazyFailure(EventualError):
    """Error payload of a lazy computation that is not an exception itself."""

    def __init__(self, error: object) -> None:
        super().__init__(str(error))
        self.error = error


def to_exception(error: object) -> BaseException:
    """Exception for an Error payload; non-exceptions are wrapped in LazyFailure."""
    if isinstance(error, BaseException):
        return error
    return LazyFailure(error)


__all__ = (
    "EventualError",
    "CallbackContractError",
    "ArityError",
    "LazyFailure",
    "to_exception",
)
