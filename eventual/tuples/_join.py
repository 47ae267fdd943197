"""
Join family — collapse the slots of a tuple into one future.

Built on asyncio.gather() as the "wait for all" primitive; outcomes are
read back from the slots themselves so that failures are reported in slot
order rather than completion order.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import Any

from kungfu import Ok, Error, Some

from eventual import future as F
from eventual._types import Outcome


def collect(futures: Sequence[asyncio.Future[Any]]) -> Outcome[tuple[Any, ...]]:
    """Tuple of slot values (None for empty), or the first failure in slot order."""
    values: list[Any] = []
    for future in futures:
        match F.outcome(future):
            case Ok(Some(value)):
                values.append(value)
            case Ok(_):
                values.append(None)
            case failure:
                return failure  # type: ignore[return-value]
    return Ok(Some(tuple(values)))


def settled(futures: Sequence[asyncio.Future[Any]]) -> asyncio.Future[list[Any]]:
    """Resolves once every slot is resolved, whatever the outcomes. Never fails."""
    return asyncio.gather(*futures, return_exceptions=True)


def joined(futures: Sequence[asyncio.Future[Any]]) -> asyncio.Future[tuple[Any, ...]]:
    """Wait for all slots; fail with the first failed slot."""
    return F.derive(settled(futures), lambda _: collect(futures))


def all_succeeded(futures: Sequence[asyncio.Future[Any]]) -> asyncio.Future[tuple[Any, ...]]:
    """Succeed when all slots succeed; fail as soon as one fails."""
    loop = futures[0].get_loop()
    target: asyncio.Future[tuple[Any, ...]] = loop.create_future()
    remaining = len(futures)

    def arrive(future: asyncio.Future[Any]) -> None:
        nonlocal remaining
        remaining -= 1
        if target.done():
            return
        match F.outcome(future):
            case Error(_) as failure:
                F.settle(target, failure)
            case _ if remaining == 0:
                F.settle(target, collect(futures))

    for future in futures:
        future.add_done_callback(arrive)
    return target


def any_succeeded(futures: Sequence[asyncio.Future[Any]]) -> asyncio.Future[Any]:
    """Value of the first slot to succeed; the last slot's failure if none does."""
    loop = futures[0].get_loop()
    target: asyncio.Future[Any] = loop.create_future()
    remaining = len(futures)

    def arrive(future: asyncio.Future[Any]) -> None:
        nonlocal remaining
        remaining -= 1
        if target.done():
            return
        match F.outcome(future):
            case Ok(_) as success:
                F.settle(target, success)
            case _ if remaining == 0:
                F.settle(target, F.outcome(futures[-1]))

    for future in futures:
        future.add_done_callback(arrive)
    return target


__all__ = ("collect", "settled", "joined", "all_succeeded", "any_succeeded")
