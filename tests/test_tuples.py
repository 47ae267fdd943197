"""Tests for FutureTuple: construction, per-slot recovery and ordering."""

from __future__ import annotations

import asyncio

import pytest

from eventual import future as F
from eventual import tuples as T
from eventual import ArityError
from tests._support import (
    REPLACEMENTS,
    VALUES,
    assert_failed_with,
    assert_succeed_with,
    settled,
    with_empties,
    with_failures,
    with_values,
)


async def assert_slots(expected: tuple[object, ...], tup: T.FutureTuple) -> None:
    assert len(tup) == len(expected)
    for value, future in zip(expected, tup):
        await assert_succeed_with(value, future)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

async def test_of_keeps_identity() -> None:
    futures = [F.empty(), F.pending(), *with_values()[2:]]

    tup = T.of(*futures)

    assert len(tup) == 8
    for index, future in enumerate(futures):
        assert tup[index] is future
    assert list(tup) == futures
    assert tup.futures == tuple(futures)
    futures[1].cancel()


async def test_of_class_constructor() -> None:
    a, b = F.succeeded(1), F.succeeded("x")
    tup = T.FutureTuple.of(a, b)
    first, second = tup.futures
    assert first is a
    assert second is b


async def test_of_requires_futures() -> None:
    with pytest.raises(ValueError):
        T.of()
    with pytest.raises(TypeError, match="future #1 must not be None"):
        T.of(F.succeeded(1), None)


async def test_of_rejects_futures_of_other_loops() -> None:
    other_loop = asyncio.new_event_loop()
    try:
        foreign = other_loop.create_future()
        with pytest.raises(ValueError, match="same event loop"):
            T.of(F.succeeded(1), foreign)
    finally:
        other_loop.close()


async def test_literal_count_must_match_arity() -> None:
    tup = T.of(F.succeeded(1), F.empty())
    with pytest.raises(ArityError) as info:
        tup.defaults(0)
    assert info.value.expected == 2
    assert info.value.got == 1
    with pytest.raises(ValueError):
        tup.otherwise(0, 1, 2)
    with pytest.raises(ValueError):
        tup.fallback(0)


async def test_derived_tuple_is_new() -> None:
    tup = T.of(*with_values())
    derived = tup.defaults(*REPLACEMENTS)
    assert derived is not tup
    for source, new in zip(tup, derived):
        assert source is not new


# ---------------------------------------------------------------------------
# map_empty()
# ---------------------------------------------------------------------------

async def test_map_empty() -> None:
    await assert_slots((None,) * 8, T.of(*with_values()).map_empty())

    tup = T.of(*with_failures()).map_empty()
    for index, future in enumerate(tup):
        await assert_failed_with(RuntimeError, future, f"fail{index}")


async def test_map_empty_twice_changes_nothing() -> None:
    mixed = T.of(F.succeeded(1), F.empty(), F.failed(RuntimeError("fail")))

    once = mixed.map_empty()
    twice = once.map_empty()

    for first, second in zip(once, twice):
        await settled(first, second)
        assert F.outcome(first).__class__ is F.outcome(second).__class__
    await assert_succeed_with(None, twice[0])
    await assert_succeed_with(None, twice[1])
    await assert_failed_with(RuntimeError, twice[2], "fail")


# ---------------------------------------------------------------------------
# otherwise()
# ---------------------------------------------------------------------------

async def test_otherwise() -> None:
    await assert_slots(VALUES, T.of(*with_values()).otherwise(*REPLACEMENTS))
    await assert_slots(REPLACEMENTS, T.of(*with_failures()).otherwise(*REPLACEMENTS))
    await assert_slots(REPLACEMENTS, T.of(*with_empties()).otherwise(*REPLACEMENTS))


async def test_otherwise_with_effect() -> None:
    causes_a: list[BaseException] = []
    tup_a = T.of(*with_values()).otherwise(*REPLACEMENTS, on_failure=causes_a.append)
    await assert_slots(VALUES, tup_a)
    assert causes_a == []

    causes_b: list[BaseException] = []
    tup_b = T.of(*with_failures()).otherwise(*REPLACEMENTS, on_failure=causes_b.append)
    await assert_slots(REPLACEMENTS, tup_b)
    assert [str(c) for c in causes_b] == [f"fail{i}" for i in range(8)]


async def test_otherwise_with_effect_skips_empty_slots() -> None:
    causes: list[BaseException] = []
    futures = [
        F.succeeded(1), F.empty(), F.failed(RuntimeError("fail2")), F.empty(),
        F.failed(RuntimeError("fail4")), F.succeeded("x"), F.empty(), F.failed(RuntimeError("fail7")),
    ]

    tup = T.of(*futures).otherwise(*REPLACEMENTS, on_failure=causes.append)

    await assert_slots((1, "default", False, 0.0, "\0", "x", 0j, ()), tup)
    assert [str(c) for c in causes] == ["fail2", "fail4", "fail7"]


# ---------------------------------------------------------------------------
# otherwise_empty()
# ---------------------------------------------------------------------------

async def test_otherwise_empty() -> None:
    await assert_slots(VALUES, T.of(*with_values()).otherwise_empty())
    await assert_slots((None,) * 8, T.of(*with_failures()).otherwise_empty())
    await assert_slots((None,) * 8, T.of(*with_empties()).otherwise_empty())


# ---------------------------------------------------------------------------
# defaults()
# ---------------------------------------------------------------------------

async def test_defaults() -> None:
    await assert_slots(VALUES, T.of(*with_values()).defaults(*REPLACEMENTS))
    await assert_slots(REPLACEMENTS, T.of(*with_empties()).defaults(*REPLACEMENTS))


async def test_defaults_keep_failures() -> None:
    tup = T.of(*with_failures()).defaults(*REPLACEMENTS)
    for index, future in enumerate(tup):
        await assert_failed_with(RuntimeError, future, f"fail{index}")


async def test_defaults_with_effect() -> None:
    applied_a: list[None] = []
    tup_a = T.of(*with_values()).defaults(*REPLACEMENTS, on_default=lambda: applied_a.append(None))
    await assert_slots(VALUES, tup_a)
    assert len(applied_a) == 0

    applied_b: list[None] = []
    tup_b = T.of(*with_empties()).defaults(*REPLACEMENTS, on_default=lambda: applied_b.append(None))
    await assert_slots(REPLACEMENTS, tup_b)
    assert len(applied_b) == 8


async def test_defaults_with_effect_ignores_failed_slots() -> None:
    applied: list[None] = []
    tup = T.of(F.empty(), F.failed(RuntimeError("fail")), F.succeeded(3)).defaults(
        "a", "b", "c", on_default=lambda: applied.append(None)
    )
    await assert_succeed_with("a", tup[0])
    await assert_failed_with(RuntimeError, tup[1], "fail")
    await assert_succeed_with(3, tup[2])
    assert len(applied) == 1


# ---------------------------------------------------------------------------
# fallback()
# ---------------------------------------------------------------------------

def mixed_futures() -> list[asyncio.Future]:
    futures = with_values()
    futures[0] = F.failed(RuntimeError("fail0"))
    futures[1] = F.empty()
    return futures


async def test_fallback() -> None:
    await assert_slots(VALUES, T.of(*with_values()).fallback(*REPLACEMENTS))
    await assert_slots(
        (0, "default", *VALUES[2:]),
        T.of(*mixed_futures()).fallback(*REPLACEMENTS),
    )


async def test_fallback_with_effect() -> None:
    empties_a: list[None] = []
    causes_a: list[BaseException] = []
    tup_a = T.of(*with_values()).fallback(
        *REPLACEMENTS,
        on_failure=causes_a.append,
        on_empty=lambda: empties_a.append(None),
    )
    await assert_slots(VALUES, tup_a)
    assert empties_a == []
    assert causes_a == []

    empties_b: list[None] = []
    causes_b: list[BaseException] = []
    tup_b = T.of(*mixed_futures()).fallback(
        *REPLACEMENTS,
        on_failure=causes_b.append,
        on_empty=lambda: empties_b.append(None),
    )
    await assert_slots((0, "default", *VALUES[2:]), tup_b)
    assert len(empties_b) == 1
    assert [str(c) for c in causes_b] == ["fail0"]


async def test_fallback_effects_interleave_in_slot_order() -> None:
    events: list[str] = []
    futures = [F.empty(), F.failed(RuntimeError("f1")), F.empty(), F.failed(RuntimeError("f3"))]

    tup = T.of(*futures).fallback(
        0, 0, 0, 0,
        on_failure=lambda cause: events.append(f"failure:{cause}"),
        on_empty=lambda: events.append("empty"),
    )

    await settled(*tup)
    assert events == ["empty", "failure:f1", "empty", "failure:f3"]


# ---------------------------------------------------------------------------
# Independence and ordering
# ---------------------------------------------------------------------------

async def test_raising_callback_fails_only_its_slot() -> None:
    def explode(cause: BaseException) -> None:
        if str(cause) == "fail1":
            raise ValueError("observer broke")

    tup = T.of(
        F.failed(RuntimeError("fail0")), F.failed(RuntimeError("fail1")), F.failed(RuntimeError("fail2"))
    ).otherwise("a", "b", "c", on_failure=explode)

    await assert_succeed_with("a", tup[0])
    await assert_failed_with(ValueError, tup[1], "observer broke")
    await assert_succeed_with("c", tup[2])


async def test_same_turn_resolution_runs_effects_in_slot_order() -> None:
    causes: list[str] = []
    sources = [F.pending() for _ in range(4)]
    tup = T.of(*sources).otherwise(0, 0, 0, 0, on_failure=lambda c: causes.append(str(c)))

    for index in (3, 1, 0, 2):
        sources[index].set_exception(RuntimeError(f"fail{index}"))

    await settled(*tup)
    assert causes == ["fail0", "fail1", "fail2", "fail3"]


async def test_slots_resolve_independently_across_turns() -> None:
    causes: list[str] = []
    sources = [F.pending(), F.pending(), F.pending()]
    tup = T.of(*sources).otherwise(0, 0, 0, on_failure=lambda c: causes.append(str(c)))

    sources[2].set_exception(RuntimeError("fail2"))
    await assert_succeed_with(0, tup[2])
    assert not tup[0].done()
    assert not tup[1].done()

    sources[0].set_exception(RuntimeError("fail0"))
    await assert_succeed_with(0, tup[0])
    assert not tup[1].done()

    sources[1].set_result("late")
    await assert_succeed_with("late", tup[1])
    assert causes == ["fail2", "fail0"]


async def test_each_slot_callback_fires_once() -> None:
    calls: list[None] = []
    source = F.pending()
    tup = T.of(source, F.succeeded(1)).defaults("d", 0, on_default=lambda: calls.append(None))

    source.set_result(None)
    await settled(*tup)
    await asyncio.sleep(0.01)

    assert len(calls) == 1
