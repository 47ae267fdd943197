"""
Lift — turn throwing calls, callback APIs and nested futures into futures.

    from eventual import lift as L

    parsed = L.wrap(int, "42")                        # already resolved
    config = L.futurize(lambda done: api.load(done))  # callback style
    ratio = L.join_wrap(lambda: F.map(parsed, lambda n: 2 // n))

Recovery of a single future:

    L.default_with(maybe_name, "anonymous")     # empty → value
    L.fallback_with(fetch_rate(), 1.0)          # empty or failed → value
    L.fallback_with_mappers(fetch_rate(), on_failure, on_empty)
"""

from eventual.lift._policy import (
    Violation,
    Policy,
    IGNORE,
    WARN,
    RAISE,
    STRICT,
)
from eventual.lift._futurize import futurize, futurize_result
from eventual.lift._wrap import wrap, join_wrap, flat_wrap
from eventual.lift._recover import (
    default_with,
    default_with_lazy,
    fallback_with,
    fallback_with_mapper,
    fallback_with_mappers,
    map_empty,
    otherwise_empty,
    map_some,
)
from eventual.lift._lazy import to_lazy, from_lazy

__all__ = (
    # Policy
    "Violation",
    "Policy",
    "IGNORE",
    "WARN",
    "RAISE",
    "STRICT",
    # Lifting
    "futurize",
    "futurize_result",
    "wrap",
    "join_wrap",
    "flat_wrap",
    # Recovery
    "default_with",
    "default_with_lazy",
    "fallback_with",
    "fallback_with_mapper",
    "fallback_with_mappers",
    "map_empty",
    "otherwise_empty",
    "map_some",
    # Lazy bridge
    "to_lazy",
    "from_lazy",
)
