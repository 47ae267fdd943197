"""
Derivation rules — the per-slot state machine.

A rule maps the terminal outcome of an upstream future to the outcome of
the derived one:

    ValuePresent → ValuePresent (passthrough, unless the rule maps values)
    Empty        → X
    Failed       → Y

Rules are plain functions over kungfu values. The lifting layer applies one
rule to one future; the tuple layer applies one rule per slot.
"""

from __future__ import annotations

from collections.abc import Callable

from kungfu import Ok, Error, Some, Nothing

from eventual._types import Outcome, Rule, Effect, FailureEffect

# ═══════════════════════════════════════════════════════════════════════════════
# Outcome Helpers
# ═══════════════════════════════════════════════════════════════════════════════


def present[T](value: T | None) -> Outcome[T]:
    """Successful outcome of a plain value; None is the empty marker."""
    if value is None:
        return Ok(Nothing())
    return Ok(Some(value))


def apply_rule[T, U](rule: Rule[T, U], result: Outcome[T]) -> Outcome[U]:
    """Apply rule; an exception raised by it becomes the derived failure."""
    try:
        return rule(result)
    except Exception as exc:
        return Error(exc)


# ═══════════════════════════════════════════════════════════════════════════════
# Rules
# ═══════════════════════════════════════════════════════════════════════════════


def defaulting[T](
    supplier: Callable[[], T],
    on_default: Effect | None = None,
) -> Rule[T, T]:
    """Empty → supplier(). Supplier and effect run only for empty outcomes."""
    def rule(result: Outcome[T]) -> Outcome[T]:
        match result:
            case Ok(Nothing()):
                if on_default is not None:
                    on_default()
                return present(supplier())
            case _:
                return result
    return rule


def recovering[T](
    on_failure: Callable[[BaseException], T],
    on_empty: Callable[[], T],
) -> Rule[T, T]:
    """Failed → on_failure(cause), Empty → on_empty(). Exactly one fires."""
    def rule(result: Outcome[T]) -> Outcome[T]:
        match result:
            case Ok(Some(_)):
                return result
            case Ok(_):
                return present(on_empty())
            case Error(cause):
                return present(on_failure(cause))
    return rule


def falling_back[T](
    value: T,
    on_failure: FailureEffect | None = None,
    on_empty: Effect | None = None,
) -> Rule[T, T]:
    """Failed or Empty → value, observing which case happened."""
    def failure(cause: BaseException) -> T:
        if on_failure is not None:
            on_failure(cause)
        return value

    def empty() -> T:
        if on_empty is not None:
            on_empty()
        return value

    return recovering(failure, empty)


def emptying[T](result: Outcome[T]) -> Outcome[T]:
    """Any success → Empty. Failures pass through."""
    match result:
        case Ok(_):
            return Ok(Nothing())
        case _:
            return result


def silencing[T](result: Outcome[T]) -> Outcome[T]:
    """Failed → Empty, cause discarded."""
    match result:
        case Error(_):
            return Ok(Nothing())
        case _:
            return result


def mapping_some[T, U](fn: Callable[[T], U]) -> Rule[T, U]:
    """ValuePresent → fn(value). Empty and Failed pass through."""
    def rule(result: Outcome[T]) -> Outcome[U]:
        match result:
            case Ok(Some(value)):
                return present(fn(value))
            case _:
                return result  # type: ignore[return-value]
    return rule


def mapping[T, U](fn: Callable[[T | None], U]) -> Rule[T, U]:
    """Any success → fn(value or None). Failures pass through."""
    def rule(result: Outcome[T]) -> Outcome[U]:
        match result:
            case Ok(Some(value)):
                return present(fn(value))
            case Ok(_):
                return present(fn(None))
            case _:
                return result  # type: ignore[return-value]
    return rule


__all__ = (
    "present",
    "apply_rule",
    "defaulting",
    "recovering",
    "falling_back",
    "emptying",
    "silencing",
    "mapping_some",
    "mapping",
)
