"""Configuration and the registration surface shared by both samplers."""

from __future__ import annotations

import abc
import numbers
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from ..analysis.distribution import DEFAULT_ADJUST_FLOOR, DistributionAnalytics
from ..core import feature_flags
from ..core.errors import InvalidCount
from ..core.models import Group, ValueMap, WeightedEntry, coerce_weight
from ..core.random_source import RandomSource, default_source
from ..core.table import Slot, WeightTable
from .resolver import resolve_value

__all__ = ["SamplerConfig", "BaseSampler", "DEFAULT_PRECISION", "HIGH_PRECISION"]

DEFAULT_PRECISION = 1_000_000
HIGH_PRECISION = 1_000_000_000


@dataclass(frozen=True, slots=True)
class SamplerConfig:
    """Tunables for a sampler instance.

    ``precision`` is the number of steps per unit of weight used to quantise
    the uniform draw; ``None`` picks the default (or the high precision one
    when the ``sampling.high_precision`` flag is on).  ``track_selections``
    set to ``None`` defers to the ``tracking.selections`` flag.
    """

    precision: int | None = None
    max_attempts_factor: int = 10
    adjust_floor: float = DEFAULT_ADJUST_FLOOR
    track_selections: bool | None = None

    def __post_init__(self) -> None:
        if self.precision is not None and self.precision < 1:
            raise ValueError("precision must be at least 1")
        if self.max_attempts_factor < 1:
            raise ValueError("max_attempts_factor must be at least 1")
        if self.adjust_floor <= 0:
            raise ValueError("adjust_floor must be positive")

    def resolved_precision(self) -> int:
        if self.precision is not None:
            return self.precision
        if feature_flags.is_enabled(feature_flags.HIGH_PRECISION):
            return HIGH_PRECISION
        return DEFAULT_PRECISION

    def resolved_tracking(self) -> bool:
        if self.track_selections is not None:
            return self.track_selections
        return feature_flags.is_enabled(feature_flags.TRACK_SELECTIONS)


class BaseSampler(abc.ABC):
    """Owns a weight table and exposes registration, lookup and analytics.

    Mutating methods return the sampler so registrations can be chained.
    Several samplers may share one table; they then see each other's
    registrations and selection counters.
    """

    def __init__(
        self,
        table: WeightTable | None = None,
        *,
        rng: RandomSource | None = None,
        config: SamplerConfig | None = None,
    ) -> None:
        self.table = table if table is not None else WeightTable()
        self.rng = rng or default_source()
        self.config = config or SamplerConfig()
        if self.config.resolved_tracking():
            self.table.tracking = True
        self.analytics = DistributionAnalytics(self.table, adjust_floor=self.config.adjust_floor)

    # -- draws --------------------------------------------------------------

    @abc.abstractmethod
    def generate(self) -> Any: ...

    @abc.abstractmethod
    def generate_multiple(self, count: int) -> Iterator[Any]: ...

    @abc.abstractmethod
    def generate_multiple_without_duplicates(self, count: int) -> Iterator[Any]: ...

    def pick_key(self) -> Any:
        return self.generate()

    def _emit(self, slot: Slot, rng: RandomSource, *, share_source: bool = False) -> Any:
        self.table.record_selection(slot)
        return resolve_value(slot.value, slot.kind, rng, share_source=share_source)

    @staticmethod
    def _check_count(count: int) -> None:
        if isinstance(count, bool) or not isinstance(count, numbers.Integral):
            raise InvalidCount(f"sample count must be an integer, got {type(count).__name__}")
        if count <= 0:
            raise InvalidCount("sample count must be greater than zero")

    # -- registration -------------------------------------------------------

    def register_value(self, value: Any, weight: float = 1) -> BaseSampler:
        self.table.register(value, weight)
        return self

    def register_values(self, values: Mapping[Any, float] | Iterable[tuple[Any, float]]) -> BaseSampler:
        pairs = list(values.items()) if isinstance(values, Mapping) else list(values)
        self.table.register_many(pairs)
        return self

    def register_group(self, members: Iterable[Any], weight: float = 1) -> BaseSampler:
        checked = coerce_weight(weight)
        self.table.register(Group(members), checked)
        return self

    def register_weighted_value(self, entry: WeightedEntry) -> BaseSampler:
        return self.register_value(entry.value, entry.weight)

    def remove_value(self, value: Any) -> BaseSampler:
        self.table.remove(value)
        return self

    def remove_weighted_value(self, entry: WeightedEntry) -> BaseSampler:
        return self.remove_value(entry.value)

    # -- lookup -------------------------------------------------------------

    def get_weighted_values(self) -> Iterator[WeightedEntry]:
        return self.table.entries()

    def get_weighted_value(self, value: Any) -> WeightedEntry:
        return self.table.require(value).entry()

    def get_probability(self, value: Any) -> float:
        return self.table.probability_of(value)

    def normalize_weights(self) -> ValueMap[float]:
        return ValueMap((slot.value, probability) for slot, probability in self.table.normalized())

    def total_weight(self) -> float:
        return self.table.total_weight()

    def __len__(self) -> int:
        return len(self.table)

    def __contains__(self, value: object) -> bool:
        return value in self.table

    # -- selection tracking -------------------------------------------------

    def enable_selection_tracking(self) -> BaseSampler:
        self.table.tracking = True
        return self

    def disable_selection_tracking(self) -> BaseSampler:
        self.table.tracking = False
        return self

    def get_selection_counts(self) -> ValueMap[int]:
        counts = self.table.selection_counts()
        return ValueMap((slot.value, counts[slot.index]) for slot in self.table.slots() if slot.index in counts)

    def reset_selection_counts(self) -> BaseSampler:
        self.table.reset_selection_counts()
        return self

    # -- analytics ----------------------------------------------------------

    def get_distribution(self) -> ValueMap[float]:
        return self.analytics.normalized_distribution()

    def get_entropy(self, *, flatten: bool = False) -> float:
        return self.analytics.entropy(flatten=flatten)

    def get_expected_value(self) -> float | None:
        return self.analytics.expected_value()

    def get_variance(self) -> float | None:
        return self.analytics.variance()

    def get_standard_deviation(self) -> float | None:
        return self.analytics.standard_deviation()

    def decay_weight(self, value: Any, factor: float) -> BaseSampler:
        self.analytics.decay_weight(value, factor)
        return self

    def boost_weight(self, value: Any, factor: float) -> BaseSampler:
        self.analytics.boost_weight(value, factor)
        return self

    def decay_all_weights(self, factor: float) -> BaseSampler:
        self.analytics.decay_all_weights(factor)
        return self

    def boost_all_weights(self, factor: float) -> BaseSampler:
        self.analytics.boost_all_weights(factor)
        return self

    def auto_adjust_weights(self, strength: float = 0.5) -> BaseSampler:
        self.analytics.auto_adjust_weights(strength)
        return self
