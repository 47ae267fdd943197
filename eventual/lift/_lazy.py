"""
Bridge between futures and kungfu's LazyCoroResult.

A future runs once and is shared; a LazyCoroResult runs every time it is
awaited. to_lazy() observes a future without re-running anything,
from_lazy() runs a lazy computation exactly once.
"""

from __future__ import annotations

import asyncio

from kungfu import Ok, Error, Result, Some, LazyCoroResult

from eventual import future as F
from eventual._errors import to_exception
from eventual._rules import present
from eventual._types import LCR

# Keeps driver tasks referenced until they finish.
_drivers: set[asyncio.Task[None]] = set()


def to_lazy[T](future: asyncio.Future[T]) -> LazyCoroResult[T | None, BaseException]:
    """
    View a future as LazyCoroResult.

    Awaiting it waits for the future and reports Ok(value), Ok(None) for an
    empty success or Error(cause). Awaiting again reads the same outcome.
    """
    source = F.require(future)

    async def observe() -> Result[T | None, BaseException]:
        await asyncio.wait((source,))
        match F.outcome(source):
            case Ok(Some(value)):
                return Ok(value)
            case Ok(_):
                return Ok(None)
            case Error(cause):
                return Error(cause)

    return LazyCoroResult(observe)


def from_lazy[T, E](lazy: LCR[T, E]) -> asyncio.Future[T]:
    """
    Run a lazy computation once, as a future on the running loop.

    Error payloads that are not exceptions are wrapped in LazyFailure; a
    cancelled computation cancels the future.

    Example:
        from combinators import lift as L

        user = from_lazy(L.catching_async(lambda: api.user(42), on_error=str))
    """
    target: asyncio.Future[T] = F.pending()

    async def drive() -> None:
        try:
            result = await lazy
        except asyncio.CancelledError:
            target.cancel()
            raise
        except Exception as exc:
            F.settle(target, Error(exc))
            return
        match result:
            case Ok(value):
                F.settle(target, present(value))
            case Error(error):
                F.settle(target, Error(to_exception(error)))

    task = asyncio.get_running_loop().create_task(drive())
    _drivers.add(task)
    task.add_done_callback(_drivers.discard)
    return target


__all__ = ("to_lazy", "from_lazy")
