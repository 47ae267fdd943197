"""
wrap() / join_wrap() — run throwing code, get a future back.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

from kungfu import Error

from eventual import future as F
from eventual._rules import present

# ═══════════════════════════════════════════════════════════════════════════════
# wrap() — Synchronous Computation
# ═══════════════════════════════════════════════════════════════════════════════


def wrap[T](fn: Callable[..., T], *args: object, **kwargs: object) -> asyncio.Future[T]:
    """
    Call fn(*args, **kwargs) now and return an already-resolved future.

    Arguments are passed as given, None included, so fn decides whether an
    absent input is an error:

        L.wrap(int, "1")    # succeeded with 1
        L.wrap(int, "@")    # failed with ValueError
        L.wrap(int, None)   # failed with TypeError raised by int()
    """
    target: asyncio.Future[T] = F.pending()
    try:
        value = fn(*args, **kwargs)
    except Exception as exc:
        F.settle(target, Error(exc))
    else:
        F.settle(target, present(value))
    return target


# ═══════════════════════════════════════════════════════════════════════════════
# join_wrap() — Computation Returning a Future
# ═══════════════════════════════════════════════════════════════════════════════


def join_wrap[T](
    fn: Callable[..., Awaitable[T]],
    *args: object,
    **kwargs: object,
) -> asyncio.Future[T]:
    """
    Call fn(*args, **kwargs) and flatten the future it returns.

    A returned future is passed through as the same object; coroutines and
    other awaitables are scheduled on the running loop. If fn raises, or
    returns something that is not awaitable, the result is a failed future.

        L.join_wrap(lambda: F.map(divisor, lambda i: 2 // i))
    """
    try:
        return asyncio.ensure_future(fn(*args, **kwargs))
    except Exception as exc:
        return F.failed(exc)


flat_wrap = join_wrap
"""Alias of join_wrap()."""


__all__ = ("wrap", "join_wrap", "flat_wrap")
