"""
eventual — composition helpers for asyncio futures.

    from eventual import future as F  # Runtime adapters (map, compose, outcome)
    from eventual import lift as L    # Lift calls and callbacks into futures
    from eventual import tuples as T  # Fixed-arity tuples with per-slot recovery
"""

from eventual import future
from eventual import lift
from eventual import tuples
from eventual._types import (
    Outcome,
    Cause,
    Rule,
)
from eventual._errors import (
    EventualError,
    CallbackContractError,
    ArityError,
    LazyFailure,
)

__version__ = "0.1.0"

__all__ = (
    "future",
    "lift",
    "tuples",
    "Outcome",
    "Cause",
    "Rule",
    "EventualError",
    "CallbackContractError",
    "ArityError",
    "LazyFailure",
)
