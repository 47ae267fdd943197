"""
Future — thin adapters over asyncio futures.

asyncio owns creation, resolution and scheduling. This module only reads
and writes futures in terms of Outcome and derives new ones through
done-callbacks, so nothing here blocks or spawns work:

    from eventual import future as F

    doubled = F.map(F.succeeded(21), lambda n: n * 2)
    await doubled  # 42
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from kungfu import Ok, Error, Some, Nothing

from eventual._types import Outcome, Rule
from eventual._rules import apply_rule, mapping

logger = logging.getLogger(__name__)

# ═══════════════════════════════════════════════════════════════════════════════
# Argument Contract
# ═══════════════════════════════════════════════════════════════════════════════


def require[T](future: asyncio.Future[T] | None, name: str = "future") -> asyncio.Future[T]:
    """Reject None and non-futures before anything gets wrapped."""
    if future is None:
        raise TypeError(f"{name} must not be None")
    if not asyncio.isfuture(future):
        raise TypeError(f"{name} must be a future, got {type(future).__name__}")
    return future


def as_cause(exc: BaseException) -> BaseException:
    """asyncio refuses StopIteration as a failure; re-raise it as RuntimeError."""
    if isinstance(exc, StopIteration):
        cause = RuntimeError(f"{type(exc).__name__} raised into a future")
        cause.__cause__ = exc
        return cause
    return exc


# ═══════════════════════════════════════════════════════════════════════════════
# Construction
# ═══════════════════════════════════════════════════════════════════════════════


def pending[T]() -> asyncio.Future[T]:
    """Unresolved future on the running loop."""
    return asyncio.get_running_loop().create_future()


def succeeded[T](value: T | None = None) -> asyncio.Future[T]:
    """Already-resolved future. No value means an empty success."""
    future: asyncio.Future[T] = pending()
    future.set_result(value)  # type: ignore[arg-type]
    return future


def empty[T]() -> asyncio.Future[T]:
    """Already-resolved empty future."""
    return succeeded(None)


def failed[T](cause: BaseException) -> asyncio.Future[T]:
    """Already-failed future."""
    future: asyncio.Future[T] = pending()
    settle(future, Error(cause))
    return future


# ═══════════════════════════════════════════════════════════════════════════════
# Reading / Writing Outcomes
# ═══════════════════════════════════════════════════════════════════════════════


def outcome[T](future: asyncio.Future[T]) -> Outcome[T]:
    """
    Terminal state of a done future.

    Raises asyncio.InvalidStateError while the future is pending.
    """
    if future.cancelled():
        return Error(asyncio.CancelledError())
    cause = future.exception()
    if cause is not None:
        return Error(cause)
    value = future.result()
    if value is None:
        return Ok(Nothing())
    return Ok(Some(value))


def settle[T](target: asyncio.Future[T], result: Outcome[T]) -> None:
    """Resolve target from an outcome. A target already done is left as is."""
    if target.done():
        logger.debug("Dropping %r: %r is already done", result, target)
        return
    match result:
        case Ok(Some(value)):
            target.set_result(value)
        case Ok(_):
            target.set_result(None)  # type: ignore[arg-type]
        case Error(asyncio.CancelledError()):
            target.cancel()
        case Error(cause):
            target.set_exception(as_cause(cause))


def on_complete[T](
    future: asyncio.Future[T],
    callback: Callable[[Outcome[T]], object],
) -> None:
    """Observe the outcome once, when the runtime resolves the future."""
    require(future).add_done_callback(lambda f: callback(outcome(f)))


# ═══════════════════════════════════════════════════════════════════════════════
# Derivation
# ═══════════════════════════════════════════════════════════════════════════════


def derive[T, U](future: asyncio.Future[T], rule: Rule[T, U]) -> asyncio.Future[U]:
    """
    New future resolved by rule once `future` resolves.

    Exceptions raised by the rule fail the derived future; the source is
    never modified.
    """
    source = require(future)
    target: asyncio.Future[U] = source.get_loop().create_future()
    source.add_done_callback(lambda f: settle(target, apply_rule(rule, outcome(f))))
    return target


def map[T, U](future: asyncio.Future[T], fn: Callable[[T | None], U]) -> asyncio.Future[U]:
    """Transform a success (empty included) with a possibly-throwing fn."""
    return derive(future, mapping(fn))


def compose[T, U](
    future: asyncio.Future[T],
    fn: Callable[[T | None], Awaitable[U]],
) -> asyncio.Future[U]:
    """Like map, but fn returns an awaitable whose outcome is adopted."""
    source = require(future)
    loop = source.get_loop()
    target: asyncio.Future[U] = loop.create_future()

    def relay(f: asyncio.Future[T]) -> None:
        match outcome(f):
            case Ok(Some(value)):
                arg: T | None = value
            case Ok(_):
                arg = None
            case failure:
                settle(target, failure)  # type: ignore[arg-type]
                return
        try:
            inner = asyncio.ensure_future(fn(arg), loop=loop)
        except Exception as exc:
            settle(target, Error(exc))
            return
        inner.add_done_callback(lambda i: settle(target, outcome(i)))

    source.add_done_callback(relay)
    return target


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "require",
    "as_cause",
    "pending",
    "succeeded",
    "empty",
    "failed",
    "outcome",
    "settle",
    "on_complete",
    "derive",
    "map",
    "compose",
)
