"""
Tuples — recover every slot of a fixed-size group independently.

Level 4: eventual.tuples
Level 4: eventual.lift
"""

from functools import partial

from eventual import lift as L
from eventual import tuples as T
from examples._infra import Quote, QuoteFeed, banner, run


async def main() -> None:
    feed = QuoteFeed()
    symbols = ("ACME", "GLOBEX", "INITECH", "UMBRELLA")
    quotes = T.of(*[L.futurize(partial(feed.quote, s)) for s in symbols])

    banner("fallback: one replacement per slot")
    placeholders = [Quote(s, 0.0) for s in symbols]
    recovered = quotes.fallback(
        *placeholders,
        on_failure=lambda cause: print(f"  ✗ {cause}"),
        on_empty=lambda: print("  ∅ no quote"),
    )
    for quote in await recovered.join():
        print(f"  {quote.symbol}: {quote.price}")

    banner("otherwise_empty + apply: total of what is known")
    known = quotes.otherwise_empty()
    total = await known.apply(lambda *qs: sum(q.price for q in qs if q is not None))
    print(f"  total: {total}")

    banner("map_anyway: report once every slot settled")
    report = quotes.map_anyway(
        lambda t: [("failed" if f.exception() else "ok") for f in t]
    )
    print(f"  {await report}")


if __name__ == "__main__":
    run(main)
