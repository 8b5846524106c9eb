from __future__ import annotations

import pytest

from weightedrandom import (
    BagSampler,
    NoValuesRegistered,
    SeededRandomSource,
    WeightedSampler,
    WeightTable,
    create_bag,
    create_float,
    pick_key,
    pick_key_seeded,
)
from weightedrandom.core.random_source import CallableRandomSource


def _fixed(value: int) -> CallableRandomSource:
    return CallableRandomSource(lambda low, high: value)


def test_factories_return_fresh_samplers() -> None:
    first, second = create_float(), create_float()
    assert isinstance(first, WeightedSampler)
    assert first is not second
    first.register_value("a")
    assert len(second) == 0
    assert isinstance(create_bag(), BagSampler)


def test_factories_accept_shared_table() -> None:
    table = WeightTable()
    create_float(table=table).register_value("a", 2)
    bag = create_bag(rng=SeededRandomSource(1), table=table)
    assert bag.cycle_length() == 2


@pytest.mark.parametrize(("draw", "expected"), [(1, "a"), (2, "b"), (4, "b")])
def test_pick_key_walks_integer_weights(draw: int, expected: str) -> None:
    assert pick_key({"a": 1, "b": 3}, _fixed(draw)) == expected


def test_pick_key_draw_range_uses_rounded_total() -> None:
    requested: list[tuple[int, int]] = []

    def draw(low: int, high: int) -> int:
        requested.append((low, high))
        return high

    assert pick_key({"a": 0.2, "b": "1.5"}, CallableRandomSource(draw)) == "b"
    assert requested == [(1, 2)]


def test_pick_key_treats_bad_weights_as_zero() -> None:
    assert pick_key({"a": "heavy", "b": -2, "c": 1}, _fixed(1)) == "c"


def test_pick_key_all_zero_returns_first_key() -> None:
    assert pick_key({"first": 0, "second": None}) == "first"


def test_pick_key_requires_keys() -> None:
    with pytest.raises(NoValuesRegistered):
        pick_key({})


def test_pick_key_seeded_is_reproducible() -> None:
    weights = {"common": 5, "rare": 1, "epic": 1}
    first = [pick_key_seeded(weights, seed, "loot") for seed in range(40)]
    assert first == [pick_key_seeded(weights, seed, "loot") for seed in range(40)]
    assert set(first) <= set(weights)
    assert len(set(first)) > 1
