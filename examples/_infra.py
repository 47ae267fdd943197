"""Shared infrastructure for examples."""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from collections.abc import Callable, Coroutine
from dataclasses import dataclass, field


# Types
@dataclass(frozen=True, slots=True)
class Quote:
    symbol: str
    price: float


# Errors
@dataclass(frozen=True, slots=True)
class Unavailable(Exception):
    symbol: str

    def __str__(self) -> str:
        return f"{self.symbol} unavailable"


# Fake callback-style client, answers from a worker thread
@dataclass(slots=True)
class QuoteFeed:
    prices: dict[str, float | None] = field(default_factory=lambda: {
        "ACME": 12.5,
        "GLOBEX": None,
        "INITECH": 3.25,
    })
    latency: float = 0.02

    def quote(self, symbol: str, done: Callable[..., None]) -> None:
        def work() -> None:
            time.sleep(self.latency)
            if symbol not in self.prices:
                done(error=Unavailable(symbol))
                return
            price = self.prices[symbol]
            done(Quote(symbol, price) if price is not None else None)

        threading.Thread(target=work, daemon=True).start()


# Helpers
def banner(title: str) -> None:
    print(f"\n{'─' * 50}\n{title}\n{'─' * 50}")


def run(main: Callable[[], Coroutine[object, object, None]]) -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    asyncio.run(main())
