"""
Slot dispatch — derive one future per slot, in slot order.

Every slot is derived on its own as soon as its upstream resolves. Slots
whose upstreams resolve within the same loop turn are collected first and
then processed by one flush in ascending slot order, so side effects of
the per-slot rules are observed in declaration order:

    turn k:    upstream[3] done → arrive(3) → flush scheduled
               upstream[1] done → arrive(1)
    turn k+1:  flush → rule[1], rule[3]
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from functools import partial
from typing import Any

from eventual import future as F
from eventual._rules import apply_rule
from eventual._types import Outcome, Rule


class SlotDispatch:
    """One-shot dispatcher owning the derived futures of a tuple operation."""

    __slots__ = ("_loop", "_rules", "_targets", "_ready", "_scheduled")

    def __init__(
        self,
        sources: Sequence[asyncio.Future[Any]],
        rules: Sequence[Rule[Any, Any]],
    ) -> None:
        self._loop = sources[0].get_loop()
        self._rules = tuple(rules)
        self._targets: tuple[asyncio.Future[Any], ...] = tuple(
            self._loop.create_future() for _ in sources
        )
        self._ready: dict[int, Outcome[Any]] = {}
        self._scheduled = False
        for index, source in enumerate(sources):
            source.add_done_callback(partial(self._arrive, index))

    @property
    def targets(self) -> tuple[asyncio.Future[Any], ...]:
        return self._targets

    def _arrive(self, index: int, source: asyncio.Future[Any]) -> None:
        self._ready[index] = F.outcome(source)
        if not self._scheduled:
            self._scheduled = True
            self._loop.call_soon(self._flush)

    def _flush(self) -> None:
        self._scheduled = False
        ready, self._ready = self._ready, {}
        for index in sorted(ready):
            F.settle(self._targets[index], apply_rule(self._rules[index], ready[index]))


def dispatch(
    sources: Sequence[asyncio.Future[Any]],
    rules: Sequence[Rule[Any, Any]],
) -> tuple[asyncio.Future[Any], ...]:
    """Derived futures for sources, slot i resolved by rules[i]."""
    return SlotDispatch(sources, rules).targets


__all__ = ("SlotDispatch", "dispatch")
