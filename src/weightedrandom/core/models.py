"""Value objects stored in a weight table.

A registered payload is classified once, at registration time, into one of
four kinds.  The kind decides both how the payload is looked up (by value or
by identity) and how a draw resolves it (returned as-is, a group member, or
a draw from a nested sampler).
"""

from __future__ import annotations

import enum
import math
import numbers
from collections.abc import Hashable, Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol, TypeVar, runtime_checkable

from .errors import EmptyGroup, InvalidWeight
from .random_source import RandomSource, default_source
from .schemas import WeightedEntryPayload

__all__ = [
    "ValueKind",
    "Generative",
    "Group",
    "WeightedEntry",
    "classify",
    "lookup_key",
    "coerce_weight",
    "export_value",
    "members_of",
    "ValueMap",
]


class ValueKind(enum.Enum):
    SCALAR = "scalar"
    REFERENCE = "reference"
    GROUP = "group"
    NESTED = "nested"


@runtime_checkable
class Generative(Protocol):
    """Anything that can be drawn from; nested samplers satisfy this."""

    def generate(self) -> Any: ...


_SCALAR_TYPES = (str, bytes, numbers.Number, enum.Enum, type(None))


def _is_scalar(value: Any) -> bool:
    if isinstance(value, _SCALAR_TYPES):
        return True
    if isinstance(value, (tuple, frozenset)):
        return all(_is_scalar(item) for item in value)
    return False


def classify(value: Any) -> ValueKind:
    if isinstance(value, Group):
        return ValueKind.GROUP
    if isinstance(value, Generative):
        return ValueKind.NESTED
    if _is_scalar(value):
        return ValueKind.SCALAR
    return ValueKind.REFERENCE


def lookup_key(value: Any, kind: ValueKind | None = None) -> Hashable:
    """Return the key two registrations must share to count as the same value.

    Scalars match by type and value, so ``1``, ``1.0`` and ``True`` stay
    distinct.  Everything else matches only the very same object.
    """

    if kind is None:
        kind = classify(value)
    if kind is ValueKind.SCALAR:
        return ("scalar", type(value), value)
    return ("ref", id(value))


def coerce_weight(weight: Any) -> float:
    if isinstance(weight, bool) or not isinstance(weight, numbers.Real):
        raise InvalidWeight(f"weight must be a real number, got {type(weight).__name__}")
    value = float(weight)
    if not value > 0:
        raise InvalidWeight(f"weight must be greater than zero, got {weight!r}")
    if math.isinf(value):
        raise InvalidWeight("weight must be finite")
    return value


class Group:
    """Members sharing one weight slot; a draw picks one uniformly."""

    __slots__ = ("_members",)

    def __init__(self, members: Iterable[Any]) -> None:
        items = tuple(members)
        if not items:
            raise EmptyGroup("group must contain at least one member")
        self._members = items

    def pick_one(self, rng: RandomSource | None = None) -> Any:
        source = rng or default_source()
        return self._members[source.randint(0, len(self._members) - 1)]

    def members(self) -> tuple[Any, ...]:
        return self._members

    def count_members(self) -> int:
        return len(self._members)

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self):
        return iter(self._members)

    def __repr__(self) -> str:
        return f"Group({list(self._members)!r})"


@dataclass(frozen=True, slots=True)
class WeightedEntry:
    """Immutable ``(value, weight)`` pair as handed out by a table."""

    value: Any
    weight: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "weight", coerce_weight(self.weight))

    @classmethod
    def from_slot(cls, value: Any, weight: float) -> WeightedEntry:
        """Snapshot a stored slot as is, without re-validating its weight.

        Tables built with ``WeightTable.unchecked`` may hold zero weights;
        reading them back must not fail.
        """

        entry = object.__new__(cls)
        object.__setattr__(entry, "value", value)
        object.__setattr__(entry, "weight", float(weight))
        return entry

    def get_array_copy(self) -> dict[str, Any]:
        return {"value": export_value(self.value), "weight": self.weight}

    def to_payload(self) -> WeightedEntryPayload:
        return WeightedEntryPayload(value=export_value(self.value), weight=self.weight)


def export_value(value: Any) -> Any:
    """Convert a payload into plain data for display or JSON."""

    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, enum.Enum):
        return export_value(value.value)
    if isinstance(value, Group):
        return [export_value(member) for member in value.members()]
    if isinstance(value, (list, tuple)):
        return [export_value(item) for item in value]
    if isinstance(value, dict):
        return {str(key): export_value(item) for key, item in value.items()}
    for attr in ("to_dict", "model_dump"):
        method = getattr(value, attr, None)
        if callable(method):
            return method()
    if type(value).__str__ is not object.__str__:
        return str(value)
    return f"[object:{type(value).__name__}#{id(value)}]"


def members_of(value: Any, kind: ValueKind) -> Sequence[Any]:
    if kind is ValueKind.GROUP:
        return value.members()
    return (value,)


V = TypeVar("V")


class ValueMap(Mapping[Any, V]):
    """Read-only mapping keyed the way a weight table matches values.

    A plain dict would merge ``1``, ``1.0`` and ``True``, or two equal but
    distinct objects, into one key.  Here each registered value keeps its own
    entry, and lookups accept unhashable values too.
    """

    __slots__ = ("_entries",)

    def __init__(self, pairs: Iterable[tuple[Any, V]] = ()) -> None:
        self._entries: dict[Hashable, tuple[Any, V]] = {}
        for value, item in pairs:
            self._entries[lookup_key(value)] = (value, item)

    def __getitem__(self, value: Any) -> V:
        try:
            return self._entries[lookup_key(value)][1]
        except KeyError:
            raise KeyError(value) from None

    def __contains__(self, value: object) -> bool:
        return lookup_key(value) in self._entries

    def __iter__(self) -> Iterator[Any]:
        return (value for value, _ in self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mapping):
            return NotImplemented
        if len(self) != len(other):
            return False
        try:
            return all(value in other and other[value] == item for value, item in self._entries.values())
        except TypeError:
            # unhashable value against a plain dict
            return False

    def pairs(self) -> list[tuple[Any, V]]:
        return list(self._entries.values())

    def __repr__(self) -> str:
        return f"ValueMap({self.pairs()!r})"
