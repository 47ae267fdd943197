"""
Recovery combinators for a single future.

Each returns a new future; the source is never touched. A value success
always passes through, the empty and failed cases are handled per
operation:

    operation               Empty              Failed
    ─────────────────────   ────────────────   ──────────────────
    default_with            value              passthrough
    default_with_lazy       supplier()         passthrough
    fallback_with           value              value
    fallback_with_mapper    mapper(Nothing())  mapper(Some(cause))
    fallback_with_mappers   on_empty()         on_failure(cause)
    otherwise_empty         passthrough        empty
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable

from kungfu import Some, Nothing

from eventual import future as F
from eventual._types import Cause
from eventual._rules import (
    defaulting,
    recovering,
    falling_back,
    emptying,
    silencing,
    mapping_some,
)

# ═══════════════════════════════════════════════════════════════════════════════
# Defaults — Empty Only
# ═══════════════════════════════════════════════════════════════════════════════


def default_with[T](future: asyncio.Future[T], value: T) -> asyncio.Future[T]:
    """Replace an empty success with value. Failures pass through."""
    return F.derive(future, defaulting(lambda: value))


def default_with_lazy[T](
    future: asyncio.Future[T],
    supplier: Callable[[], T],
) -> asyncio.Future[T]:
    """Like default_with(), but supplier is called only if the future is empty."""
    return F.derive(future, defaulting(supplier))


# ═══════════════════════════════════════════════════════════════════════════════
# Fallbacks — Empty and Failed
# ═══════════════════════════════════════════════════════════════════════════════


def fallback_with[T](future: asyncio.Future[T], value: T) -> asyncio.Future[T]:
    """Replace an empty success or a failure with value."""
    return F.derive(future, falling_back(value))


def fallback_with_mapper[T](
    future: asyncio.Future[T],
    mapper: Callable[[Cause], T],
) -> asyncio.Future[T]:
    """
    Compute the fallback from the optional cause.

    mapper gets Nothing() when recovering from an empty success and
    Some(cause) when recovering from a failure; it runs at most once.

    Example:
        def rate_for(cause: Cause) -> float:
            match cause:
                case Some(TimeoutError()):
                    return cached_rate
                case _:
                    return 1.0

        L.fallback_with_mapper(fetch_rate(), rate_for)
    """
    return F.derive(future, recovering(
        lambda cause: mapper(Some(cause)),
        lambda: mapper(Nothing()),
    ))


def fallback_with_mappers[T](
    future: asyncio.Future[T],
    on_failure: Callable[[BaseException], T],
    on_empty: Callable[[], T],
) -> asyncio.Future[T]:
    """Separate fallbacks for the failed and the empty case; one fires at most."""
    return F.derive(future, recovering(on_failure, on_empty))


# ═══════════════════════════════════════════════════════════════════════════════
# Reshaping
# ═══════════════════════════════════════════════════════════════════════════════


def map_empty[T](future: asyncio.Future[T]) -> asyncio.Future[T]:
    """Discard the value: every success becomes empty. Failures pass through."""
    return F.derive(future, emptying)


def otherwise_empty[T](future: asyncio.Future[T]) -> asyncio.Future[T]:
    """Downgrade a failure to an empty success."""
    return F.derive(future, silencing)


def map_some[T, U](future: asyncio.Future[T], fn: Callable[[T], U]) -> asyncio.Future[U]:
    """Apply fn to a present value only; empty and failed pass through."""
    return F.derive(future, mapping_some(fn))


__all__ = (
    "default_with",
    "default_with_lazy",
    "fallback_with",
    "fallback_with_mapper",
    "fallback_with_mappers",
    "map_empty",
    "otherwise_empty",
    "map_some",
)
