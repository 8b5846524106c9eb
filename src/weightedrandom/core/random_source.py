"""Uniform random integer sources consumed by the samplers.

The samplers only ever ask for ``randint(low, high)`` with inclusive bounds;
everything else (float draws, shuffles, group picks) is derived from it.
That keeps the contract small enough that deterministic stand-ins for
tests or replay are trivial to provide.
"""

from __future__ import annotations

import hashlib
import random
from collections.abc import Callable, MutableSequence
from typing import Protocol, TypeVar, runtime_checkable

__all__ = [
    "RandomSource",
    "SystemRandomSource",
    "SeededRandomSource",
    "CallableRandomSource",
    "default_source",
    "shuffle",
]

T = TypeVar("T")


@runtime_checkable
class RandomSource(Protocol):
    def randint(self, low: int, high: int) -> int:
        """Return a uniformly distributed integer in ``[low, high]``."""
        ...


class SystemRandomSource:
    """OS entropy backed source, suitable where draws must not be predictable."""

    def __init__(self) -> None:
        self._random = random.SystemRandom()

    def randint(self, low: int, high: int) -> int:
        return self._random.randint(low, high)


class SeededRandomSource:
    """Deterministic stream keyed by ``(seed, namespace)``.

    Two sources built from the same pair replay the same sequence.  Distinct
    namespaces under one seed give unrelated streams, which lets callers
    keep e.g. loot rolls and encounter rolls reproducible independently.
    """

    def __init__(self, seed: int, namespace: str = "") -> None:
        self.seed = int(seed)
        self.namespace = namespace
        self._random = random.Random(_derive_seed(self.seed, namespace))

    def fork(self, namespace: str) -> SeededRandomSource:
        child = f"{self.namespace}/{namespace}" if self.namespace else namespace
        return SeededRandomSource(self.seed, child)

    def randint(self, low: int, high: int) -> int:
        return self._random.randint(low, high)

    def __repr__(self) -> str:
        return f"SeededRandomSource(seed={self.seed!r}, namespace={self.namespace!r})"


class CallableRandomSource:
    """Adapt a bare ``func(low, high) -> int`` to the source protocol."""

    def __init__(self, func: Callable[[int, int], int]) -> None:
        self._func = func

    def randint(self, low: int, high: int) -> int:
        return int(self._func(low, high))


def _derive_seed(seed: int, namespace: str) -> int:
    if not namespace:
        return seed
    digest = hashlib.sha256(f"{seed}:{namespace}".encode("utf-8")).hexdigest()
    return int(digest[:16], 16)


def default_source() -> RandomSource:
    return SystemRandomSource()


def shuffle(items: MutableSequence[T], rng: RandomSource) -> None:
    """Fisher-Yates shuffle in place using only ``rng.randint``."""

    for i in range(len(items) - 1, 0, -1):
        j = rng.randint(0, i)
        items[i], items[j] = items[j], items[i]
