"""
Core types for eventual.

Re-exports from kungfu/combinators + the outcome vocabulary shared by
the lifting and tuple layers.
"""

from __future__ import annotations

from collections.abc import Callable

# Re-export from kungfu
from kungfu import Result, Ok, Error, Option, Some, Nothing, LazyCoroResult

# Re-export from combinators
from combinators import LCR

# ═══════════════════════════════════════════════════════════════════════════════
# Outcome — Terminal State of a Future
# ═══════════════════════════════════════════════════════════════════════════════

type Outcome[T] = Result[Option[T], BaseException]
"""
Terminal state of a future:

    Ok(Some(value))  — succeeded with a value
    Ok(Nothing())    — succeeded empty (result is None)
    Error(cause)     — failed (cancellation counts as CancelledError)
"""

type Cause = Option[BaseException]
"""Failure cause when recovering: Nothing() for empty, Some(e) for failure."""

type Rule[T, U] = Callable[[Outcome[T]], Outcome[U]]
"""Per-future derivation: maps the upstream outcome to the derived one."""

# ═══════════════════════════════════════════════════════════════════════════════
# Callback Shapes
# ═══════════════════════════════════════════════════════════════════════════════

type Done[T] = Callable[..., None]
"""Completion callback handed to a registrar: done(value=None, error=None)."""

type Registrar[T] = Callable[[Done[T]], object]
"""Function that registers a completion callback with some async API."""

type ResultDone[T] = Callable[[Result[T, BaseException]], None]
"""Completion callback receiving a kungfu Result."""

type ResultRegistrar[T] = Callable[[ResultDone[T]], object]

type Effect = Callable[[], object]
"""Zero-argument side effect."""

type FailureEffect = Callable[[BaseException], object]
"""Side effect observing a failure cause."""

# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    # Re-exports from kungfu
    "Result",
    "Ok",
    "Error",
    "Option",
    "Some",
    "Nothing",
    "LazyCoroResult",
    # Re-exports from combinators
    "LCR",
    # Outcome vocabulary
    "Outcome",
    "Cause",
    "Rule",
    # Callbacks
    "Done",
    "Registrar",
    "ResultDone",
    "ResultRegistrar",
    "Effect",
    "FailureEffect",
)
