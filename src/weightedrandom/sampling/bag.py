"""Fair draws without replacement (bag / urn model).

Each slot contributes ``round(weight)`` tokens to a pool which is shuffled
and consumed front to back.  Over one full pass every value comes up exactly
as many times as its rounded weight; the pool is rebuilt from the current
table on the first draw after it runs out.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator
from typing import Any

from ..core.errors import NoValuesRegistered
from ..core.random_source import shuffle
from ..core.table import Slot
from .base import BaseSampler

__all__ = ["BagSampler", "token_count"]

logger = logging.getLogger(__name__)


def token_count(weight: float) -> int:
    """Round half away from zero; weights below 0.5 contribute nothing."""

    return int(math.floor(weight + 0.5))


class BagSampler(BaseSampler):
    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._pool: list[Slot] = []
        self._cursor = 0

    @property
    def is_filled(self) -> bool:
        return bool(self._pool)

    def cycle_length(self) -> int:
        """Number of draws in a full pass over the current table."""

        return sum(token_count(slot.weight) for slot in self.table.slots())

    def remaining(self) -> int:
        return len(self._pool) - self._cursor

    def reset(self) -> BagSampler:
        """Discard the current pool; the next draw starts a fresh cycle."""

        self._pool = []
        self._cursor = 0
        return self

    def _refill(self) -> None:
        pool: list[Slot] = []
        for slot in self.table.slots():
            pool.extend([slot] * token_count(slot.weight))
        if not pool:
            raise NoValuesRegistered("cannot refill bag: no values registered")
        shuffle(pool, self.rng)
        self._pool = pool
        self._cursor = 0
        logger.debug("Refilled bag with %d tokens from %d slots", len(pool), len(self.table))

    def _next_slot(self) -> Slot:
        if not self._pool:
            self._refill()
        slot = self._pool[self._cursor]
        self._cursor += 1
        if self._cursor >= len(self._pool):
            self.reset()
        return slot

    def generate(self) -> Any:
        return self._emit(self._next_slot(), self.rng)

    def generate_multiple(self, count: int) -> Iterator[Any]:
        self._check_count(count)
        return self._draws(count)

    def _draws(self, count: int) -> Iterator[Any]:
        for _ in range(count):
            yield self.generate()

    def generate_multiple_without_duplicates(self, count: int) -> Iterator[Any]:
        """Same as :meth:`generate_multiple`.

        A single cycle never repeats a value whose weight rounds to one, so
        no rejection is needed.  Requests spanning a cycle boundary can and
        will repeat values from the previous cycle.
        """

        self._check_count(count)
        if count > self.cycle_length():
            logger.debug("Requested %d unique draws across a %d-token cycle", count, self.cycle_length())
        return self._draws(count)
