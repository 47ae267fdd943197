"""
Lift — callbacks, throwing calls and lazy results as futures.

Level 4: eventual.lift
Level 3: combinators.lift
Level 2: kungfu.Result
"""

from functools import partial

from kungfu import Some, Nothing
from combinators import lift as C
from eventual import future as F
from eventual import lift as L
from eventual import Cause
from examples._infra import QuoteFeed, Unavailable, banner, run


async def fetch_volume(symbol: str) -> int:
    if symbol == "GLOBEX":
        raise Unavailable(symbol)
    return 1_000


async def main() -> None:
    feed = QuoteFeed()

    banner("futurize: callback API → future")
    acme = await L.futurize(partial(feed.quote, "ACME"))
    print(f"  ACME: {acme.price}")

    banner("default_with: empty → value")
    globex = L.map_some(L.futurize(partial(feed.quote, "GLOBEX")), lambda q: q.price)
    print(f"  GLOBEX: {await L.default_with(globex, 0.0)}")

    banner("fallback_with_mapper: failure or empty → value")

    def explain(cause: Cause) -> str:
        match cause:
            case Some(error):
                return f"failed ({error})"
            case Nothing():
                return "no quote"
            case _:
                return "?"

    missing = L.futurize(partial(feed.quote, "UMBRELLA"))
    print(f"  UMBRELLA: {await L.fallback_with_mapper(missing, explain)}")

    banner("wrap: throwing call → future")
    parsed = L.wrap(int, "%")
    print(f"  int('%'): {await L.fallback_with(F.map(parsed, str), 'not a number')}")

    banner("from_lazy: LazyCoroResult → future")
    volume = L.from_lazy(C.catching_async(lambda: fetch_volume("GLOBEX"), on_error=str))
    print(f"  GLOBEX volume: {await L.fallback_with(volume, 0)}")


if __name__ == "__main__":
    run(main)
