"""
FutureTuple — a fixed-arity tuple of independently resolving futures.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any

from eventual import future as F
from eventual._errors import ArityError
from eventual._types import Effect, FailureEffect, Rule
from eventual._rules import defaulting, falling_back, emptying, silencing
from eventual.tuples._dispatch import dispatch
from eventual.tuples._join import joined, all_succeeded, any_succeeded, settled

# ═══════════════════════════════════════════════════════════════════════════════
# FutureTuple
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class FutureTuple[*Ts]:
    """
    N futures held side by side, each with its own payload type.

    The tuple never changes: every operation returns a new FutureTuple whose
    slot i is derived from slot i of this one and resolves when it does.
    Slots are independent; a failure in one never affects another. Side
    effects of slots that resolve in the same loop turn run in slot order.

    Example:
        from eventual import tuples as T

        user, rate = T.of(fetch_user(uid), fetch_rate("EUR")).fallback(
            GUEST, 1.0,
            on_failure=lambda e: logger.warning("recovered: %r", e),
        ).futures
    """

    futures: tuple[*Ts]

    def __post_init__(self) -> None:
        if not self.futures:
            raise ValueError("FutureTuple needs at least one future")
        for index, future in enumerate(self.futures):
            F.require(future, f"future #{index}")  # type: ignore[arg-type]
        loop = self._slots[0].get_loop()
        if any(f.get_loop() is not loop for f in self._slots):
            raise ValueError("FutureTuple futures must belong to the same event loop")

    @classmethod
    def of(cls, *futures: *Ts) -> FutureTuple[*Ts]:
        """Hold the given futures as they are; tup[i] is futures[i]."""
        return cls(futures)

    # ───────────────────────────────────────────────────────────────────────
    # Positional access
    # ───────────────────────────────────────────────────────────────────────

    @property
    def _slots(self) -> tuple[asyncio.Future[Any], ...]:
        return self.futures  # type: ignore[return-value]

    def __len__(self) -> int:
        return len(self.futures)

    def __getitem__(self, index: int) -> asyncio.Future[Any]:
        return self._slots[index]

    def __iter__(self) -> Iterator[asyncio.Future[Any]]:
        return iter(self._slots)

    # ───────────────────────────────────────────────────────────────────────
    # Per-slot derivation
    # ───────────────────────────────────────────────────────────────────────

    def _derive(self, rules: Sequence[Rule[Any, Any]]) -> FutureTuple[*Ts]:
        return FutureTuple(dispatch(self._slots, rules))  # type: ignore[arg-type]

    def _check_arity(self, operation: str, values: tuple[object, ...]) -> None:
        if len(values) != len(self):
            raise ArityError(operation, len(self), len(values))

    def map_empty(self) -> FutureTuple[*Ts]:
        """Every success becomes empty; failures pass through."""
        return self._derive([emptying] * len(self))

    def defaults(self, *values: object, on_default: Effect | None = None) -> FutureTuple[*Ts]:
        """
        Replace empty slots with the matching value.

        on_default runs once per slot that actually received its default,
        never for value or failed slots.
        """
        self._check_arity("defaults", values)
        return self._derive([defaulting(_constant(v), on_default) for v in values])

    def otherwise(
        self,
        *values: object,
        on_failure: FailureEffect | None = None,
    ) -> FutureTuple[*Ts]:
        """
        Replace empty and failed slots with the matching value.

        on_failure observes the cause of every failed slot; empty slots are
        replaced silently.
        """
        self._check_arity("otherwise", values)
        return self._derive([falling_back(v, on_failure=on_failure) for v in values])

    def otherwise_empty(self) -> FutureTuple[*Ts]:
        """Failed slots become empty successes; successes pass through."""
        return self._derive([silencing] * len(self))

    def fallback(
        self,
        *values: object,
        on_failure: FailureEffect | None = None,
        on_empty: Effect | None = None,
    ) -> FutureTuple[*Ts]:
        """
        Replace empty and failed slots with the matching value.

        Exactly one of on_failure(cause) / on_empty() runs per replaced slot.
        """
        self._check_arity("fallback", values)
        return self._derive([
            falling_back(v, on_failure=on_failure, on_empty=on_empty) for v in values
        ])

    # ───────────────────────────────────────────────────────────────────────
    # Joining
    # ───────────────────────────────────────────────────────────────────────

    def join(self) -> asyncio.Future[tuple[Any, ...]]:
        """Tuple of values once all slots resolved; first failure in slot order."""
        return joined(self._slots)

    def all(self) -> asyncio.Future[tuple[Any, ...]]:
        """Tuple of values once all slots succeeded; fails on the first failure."""
        return all_succeeded(self._slots)

    def any(self) -> asyncio.Future[Any]:
        """Value of the first slot to succeed."""
        return any_succeeded(self._slots)

    def apply[R](self, fn: Callable[..., R]) -> asyncio.Future[R]:
        """fn(*values) after join() succeeds."""
        return F.map(self.join(), lambda values: fn(*values))  # type: ignore[misc]

    def compose[R](self, fn: Callable[..., Awaitable[R]]) -> asyncio.Future[R]:
        """Like apply(), with fn returning an awaitable."""
        return F.compose(self.join(), lambda values: fn(*values))  # type: ignore[misc]

    def map_anyway[R](self, fn: Callable[[FutureTuple[*Ts]], R]) -> asyncio.Future[R]:
        """fn(self) once every slot resolved, whatever the outcomes."""
        return F.map(settled(self._slots), lambda _: fn(self))


def _constant[T](value: T) -> Callable[[], T]:
    return lambda: value


def of[*Ts](*futures: *Ts) -> FutureTuple[*Ts]:
    """Shortcut for FutureTuple.of()."""
    return FutureTuple.of(*futures)


__all__ = ("FutureTuple", "of")
