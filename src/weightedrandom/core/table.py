"""Ordered (value -> weight) storage shared by samplers and analytics."""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from .errors import NotRegistered, ZeroTotalWeight
from .models import ValueKind, WeightedEntry, classify, coerce_weight, lookup_key

__all__ = ["Slot", "WeightTable"]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Slot:
    index: int
    value: Any
    kind: ValueKind
    key: Hashable
    weight: float

    def entry(self) -> WeightedEntry:
        return WeightedEntry.from_slot(self.value, self.weight)


class WeightTable:
    """Slots kept in insertion order with a lazily cached total weight.

    Slot indices are handed out once and never reused, so they stay valid
    references across removals of other slots.
    """

    def __init__(self) -> None:
        self._slots: dict[Hashable, Slot] = {}
        self._by_index: dict[int, Slot] = {}
        self._next_index = 0
        self._total: float | None = None
        self._counts: dict[int, int] = {}
        self.tracking = False

    @classmethod
    def unchecked(cls, entries: Iterable[tuple[Any, float]]) -> WeightTable:
        """Build a table without weight validation.

        Registration never admits a non-positive weight, so this is the only
        way to obtain e.g. a zero-total table for exercising the guards that
        protect draws and normalisation against one.
        """

        table = cls()
        for value, weight in entries:
            table._insert(value, float(weight))
        return table

    def register(self, value: Any, weight: float) -> int:
        checked = coerce_weight(weight)
        slot = self.find(value)
        if slot is not None:
            slot.weight = checked
            self._invalidate()
            return slot.index
        return self._insert(value, checked).index

    def register_many(self, pairs: Iterable[tuple[Any, float]]) -> list[int]:
        checked = [(value, coerce_weight(weight)) for value, weight in pairs]
        return [self.register(value, weight) for value, weight in checked]

    def _insert(self, value: Any, weight: float) -> Slot:
        kind = classify(value)
        key = lookup_key(value, kind)
        slot = self._slots.get(key)
        if slot is not None:
            slot.weight = weight
        else:
            slot = Slot(index=self._next_index, value=value, kind=kind, key=key, weight=weight)
            self._next_index += 1
            self._slots[key] = slot
            self._by_index[slot.index] = slot
        self._invalidate()
        return slot

    def remove(self, value: Any) -> None:
        slot = self.require(value)
        del self._slots[slot.key]
        del self._by_index[slot.index]
        self._counts.pop(slot.index, None)
        self._invalidate()

    def find(self, value: Any) -> Slot | None:
        return self._slots.get(lookup_key(value))

    def require(self, value: Any) -> Slot:
        slot = self.find(value)
        if slot is None:
            raise NotRegistered(f"value {value!r} is not registered")
        return slot

    def slot_at(self, index: int) -> Slot:
        try:
            return self._by_index[index]
        except KeyError:
            raise NotRegistered(f"no slot with index {index}") from None

    def slots(self) -> list[Slot]:
        return list(self._slots.values())

    def entries(self) -> Iterator[WeightedEntry]:
        for slot in list(self._slots.values()):
            yield slot.entry()

    def __iter__(self) -> Iterator[Slot]:
        return iter(self.slots())

    def __len__(self) -> int:
        return len(self._slots)

    def __contains__(self, value: object) -> bool:
        return self.find(value) is not None

    def total_weight(self) -> float:
        if self._total is None:
            self._total = self.compute_total_weight()
        return self._total

    def compute_total_weight(self) -> float:
        """Sum every slot weight; ``total_weight`` caches this between mutations."""

        return sum(slot.weight for slot in self._slots.values())

    def probability_of(self, value: Any) -> float:
        slot = self.require(value)
        total = self.total_weight()
        if total <= 0.0:
            raise ZeroTotalWeight("cannot compute probability: total weight is zero")
        return slot.weight / total

    def normalized(self) -> list[tuple[Slot, float]]:
        total = self.total_weight()
        if total <= 0.0:
            raise ZeroTotalWeight("cannot normalise: total weight is zero")
        return [(slot, slot.weight / total) for slot in self._slots.values()]

    def update_weights(self, updates: Mapping[int, float]) -> None:
        """Replace several slot weights at once, all or nothing."""

        checked = {index: coerce_weight(weight) for index, weight in updates.items()}
        targets = {index: self.slot_at(index) for index in checked}
        for index, slot in targets.items():
            slot.weight = checked[index]
        self._invalidate()

    def _invalidate(self) -> None:
        self._total = None

    def record_selection(self, slot: Slot) -> None:
        if not self.tracking:
            return
        self._counts[slot.index] = self._counts.get(slot.index, 0) + 1

    def selection_counts(self) -> dict[int, int]:
        return dict(self._counts)

    def seed_selection_counts(self, counts: Mapping[int, int]) -> None:
        """Replace the counter history, e.g. restored from an earlier run."""

        for index, count in counts.items():
            self.slot_at(index)
            if count < 0:
                raise ValueError("selection counts must be non-negative")
        self._counts = {index: int(count) for index, count in counts.items()}

    def reset_selection_counts(self) -> None:
        logger.debug("Resetting %d selection counters", len(self._counts))
        self._counts.clear()
