from __future__ import annotations

import enum

import pytest

from weightedrandom.core.errors import EmptyGroup, InvalidWeight
from weightedrandom.core.models import Group, ValueKind, ValueMap, WeightedEntry, classify, export_value, lookup_key
from weightedrandom.core.random_source import CallableRandomSource
from weightedrandom.core.table import WeightTable
from weightedrandom.sampling.weighted import WeightedSampler


class _Colour(enum.Enum):
    RED = "red"


class _Labelled:
    def __str__(self) -> str:
        return "labelled"


class _Plain:
    pass


def test_classify_covers_all_kinds() -> None:
    assert classify("a") is ValueKind.SCALAR
    assert classify(3.5) is ValueKind.SCALAR
    assert classify(None) is ValueKind.SCALAR
    assert classify(_Colour.RED) is ValueKind.SCALAR
    assert classify((1, ("x", 2))) is ValueKind.SCALAR
    assert classify((1, [2])) is ValueKind.REFERENCE
    assert classify({"a": 1}) is ValueKind.REFERENCE
    assert classify(_Plain()) is ValueKind.REFERENCE
    assert classify(Group(["a"])) is ValueKind.GROUP
    assert classify(WeightedSampler()) is ValueKind.NESTED


def test_lookup_key_distinguishes_numeric_types() -> None:
    assert lookup_key(1) != lookup_key(1.0)
    assert lookup_key(1) != lookup_key(True)
    assert lookup_key("a") == lookup_key("a")
    obj = _Plain()
    assert lookup_key(obj) == lookup_key(obj)
    assert lookup_key(_Plain()) != lookup_key(obj)


def test_group_requires_members() -> None:
    with pytest.raises(EmptyGroup):
        Group([])


def test_group_preserves_order_and_picks_by_index() -> None:
    group = Group(x for x in ["wolf", "bear", "lion"])
    assert group.members() == ("wolf", "bear", "lion")
    assert group.count_members() == 3
    assert len(group) == 3

    requested: list[tuple[int, int]] = []

    def draw(low: int, high: int) -> int:
        requested.append((low, high))
        return high

    assert group.pick_one(CallableRandomSource(draw)) == "lion"
    assert requested == [(0, 2)]
    assert group.pick_one(CallableRandomSource(lambda low, high: low)) == "wolf"


def test_group_pick_one_default_source() -> None:
    group = Group(["a", "b", "c"])
    for _ in range(50):
        assert group.pick_one() in {"a", "b", "c"}


def test_group_pick_is_uniform(seeded_rng) -> None:
    group = Group(["a", "b", "c", "d"])
    counts = {m: 0 for m in group.members()}
    for _ in range(8000):
        counts[group.pick_one(seeded_rng)] += 1
    for count in counts.values():
        assert abs(count / 8000 - 0.25) < 0.03


@pytest.mark.parametrize("weight", [0, -3, float("nan")])
def test_weighted_entry_rejects_bad_weight(weight) -> None:
    with pytest.raises(InvalidWeight):
        WeightedEntry("a", weight)


def test_weighted_entry_is_immutable_and_coerces_weight() -> None:
    entry = WeightedEntry("a", 2)
    assert entry.weight == 2.0
    assert isinstance(entry.weight, float)
    with pytest.raises(AttributeError):
        entry.weight = 3.0  # type: ignore[misc]


def test_array_copy_exports_values() -> None:
    assert WeightedEntry("a", 1.5).get_array_copy() == {"value": "a", "weight": 1.5}
    assert WeightedEntry(Group(["x", 1]), 2).get_array_copy() == {"value": ["x", 1], "weight": 2.0}
    assert export_value(_Colour.RED) == "red"
    assert export_value((1, [2, 3])) == [1, [2, 3]]
    assert export_value({"k": (1,)}) == {"k": [1]}
    assert export_value(_Labelled()) == "labelled"
    plain = _Plain()
    assert export_value(plain) == f"[object:_Plain#{id(plain)}]"


def test_payload_round_trip_reproduces_probability() -> None:
    table = WeightTable()
    table.register("apple", 70)
    table.register("banana", 30)
    exported = [entry.to_payload().to_dict() for entry in table.entries()]

    rebuilt = WeightTable()
    for item in exported:
        rebuilt.register(item["value"], item["weight"])

    for value in ("apple", "banana"):
        assert rebuilt.probability_of(value) == pytest.approx(table.probability_of(value))


def test_value_map_keys_like_the_table() -> None:
    loot = ["sword"]
    mapping = ValueMap([(1, "int"), (1.0, "float"), (True, "bool"), (loot, "list")])
    assert len(mapping) == 4
    assert mapping[1] == "int"
    assert mapping[1.0] == "float"
    assert mapping[True] == "bool"
    assert mapping[loot] == "list"
    assert ["sword"] not in mapping
    assert list(mapping) == [1, 1.0, True, loot]
    with pytest.raises(KeyError):
        mapping["missing"]


def test_value_map_equality() -> None:
    assert ValueMap([("a", 1), ("b", 2)]) == {"a": 1, "b": 2}
    assert ValueMap([("a", 1)]) != {"a": 2}
    assert ValueMap([(1, 1), (True, 1)]) != {1: 1}
    assert ValueMap([(["x"], 1)]) != {"x": 1}
    assert ValueMap() == {}
