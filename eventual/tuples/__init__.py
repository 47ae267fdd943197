"""
Tuples — fixed-arity tuples of futures with per-slot recovery.

    from eventual import tuples as T

    tup = T.of(fetch_user(uid), fetch_orders(uid), fetch_rate("EUR"))

    # Per slot: value passes through, empty/failed → literal
    recovered = tup.fallback(GUEST, [], 1.0, on_failure=report)

    # Collapse into one future
    user, orders, rate = await recovered.join()
"""

from eventual.tuples._types import FutureTuple, of
from eventual.tuples._dispatch import SlotDispatch, dispatch

__all__ = (
    "FutureTuple",
    "of",
    "SlotDispatch",
    "dispatch",
)
