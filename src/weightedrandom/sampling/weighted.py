"""Independent weighted draws (with replacement).

A draw quantises a uniform number in ``[0, total)`` to ``1 / precision`` and
walks the slots in insertion order, subtracting each weight until the
remainder goes negative.  That is inverse-CDF sampling over the slot
weights, exact up to the quantisation step.  Totals below one are drawn
at a proportionally finer step so small weights stay distinguishable.
"""

from __future__ import annotations

import dataclasses
import logging
import math
from collections.abc import Iterator
from typing import Any

from ..core.errors import ExhaustedAttempts, InvalidCount, NoValuesRegistered, ZeroTotalWeight
from ..core.models import lookup_key
from ..core.random_source import RandomSource, SeededRandomSource
from ..core.table import Slot
from .base import BaseSampler

__all__ = ["WeightedSampler"]

logger = logging.getLogger(__name__)


class WeightedSampler(BaseSampler):
    def select_slot(self, rng: RandomSource | None = None) -> Slot:
        """Pick one slot without resolving or recording it."""

        slots = self.table.slots()
        if not slots:
            raise NoValuesRegistered("at least one value should be registered")
        total = self.table.total_weight()
        if total <= 0.0:
            raise ZeroTotalWeight("total weight must be greater than zero")

        precision = self.config.resolved_precision()
        if total < 1.0 and math.isfinite(precision / total):
            # keep at least `precision` steps across a small total
            precision = math.ceil(precision / total)
        steps = max(1, int(total * precision))
        remainder = (rng or self.rng).randint(0, steps - 1) / precision

        for slot in slots:
            remainder -= slot.weight
            if remainder < 0:
                return slot

        logger.debug("Cumulative walk exhausted (remainder=%.9f); using last slot.", remainder)
        return slots[-1]

    def generate(self) -> Any:
        return self._emit(self.select_slot(), self.rng)

    def generate_with(self, rng: RandomSource) -> Any:
        """One draw taking every random decision from *rng*.

        The walk, a group pick and any nested ``WeightedSampler`` all consume
        *rng*.  Nested bag samplers keep drawing from their own pool.
        """

        return self._emit(self.select_slot(rng), rng, share_source=True)

    def pick_key_seeded(self, seed: int, namespace: str = "") -> Any:
        """Draw with a throwaway deterministic source.

        The same ``(seed, namespace)`` over the same table always yields the
        same result, through groups and nested weighted samplers alike.
        """

        return self.generate_with(SeededRandomSource(seed, namespace))

    def generate_multiple(self, count: int) -> Iterator[Any]:
        self._check_count(count)
        return self._draws(count)

    def _draws(self, count: int) -> Iterator[Any]:
        for _ in range(count):
            yield self.generate()

    def generate_multiple_without_duplicates(self, count: int) -> Iterator[Any]:
        """Yield *count* distinct results, rejecting repeats.

        Rejections are capped at ``max_attempts_factor * count``; hitting the
        cap raises ``ExhaustedAttempts`` from the iterator, after the distinct
        values found so far have been yielded.
        """

        self._check_count(count)
        if count > len(self.table):
            raise InvalidCount(f"sample count {count} exceeds registered value count {len(self.table)}")
        return self._distinct_draws(count)

    def _distinct_draws(self, count: int) -> Iterator[Any]:
        budget = self.config.max_attempts_factor * count
        returned: list[Any] = []
        seen: set[Any] = set()
        rejected = 0
        while len(returned) < count:
            sample = self.generate()
            key = lookup_key(sample)
            if key in seen:
                rejected += 1
                if rejected >= budget:
                    logger.warning(
                        "Gave up after %d rejected draws with %d/%d distinct values", rejected, len(returned), count
                    )
                    raise ExhaustedAttempts("unable to generate enough unique values without duplicates")
                continue
            seen.add(key)
            returned.append(sample)
            yield sample

    def set_max_attempts_factor(self, factor: int) -> WeightedSampler:
        self.config = dataclasses.replace(self.config, max_attempts_factor=factor)
        return self
