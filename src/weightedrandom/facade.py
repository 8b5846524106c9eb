"""Entry points for callers who do not want to wire samplers themselves."""

from __future__ import annotations

import logging
import math
from collections.abc import Hashable, Mapping

from .analysis.distribution import as_number
from .core.errors import NoValuesRegistered
from .core.random_source import RandomSource, SeededRandomSource, default_source
from .core.table import WeightTable
from .sampling.bag import BagSampler
from .sampling.base import SamplerConfig
from .sampling.weighted import WeightedSampler

__all__ = ["create_float", "create_bag", "pick_key", "pick_key_seeded"]

logger = logging.getLogger(__name__)


def create_float(
    rng: RandomSource | None = None,
    config: SamplerConfig | None = None,
    table: WeightTable | None = None,
) -> WeightedSampler:
    return WeightedSampler(table, rng=rng, config=config)


def create_bag(
    rng: RandomSource | None = None,
    config: SamplerConfig | None = None,
    table: WeightTable | None = None,
) -> BagSampler:
    return BagSampler(table, rng=rng, config=config)


def _sanitize(weights: Mapping[Hashable, object]) -> dict[Hashable, float]:
    out: dict[Hashable, float] = {}
    for key, raw in weights.items():
        number = as_number(raw)
        out[key] = number if number is not None and number > 0 else 0.0
    return out


def pick_key(weights: Mapping[Hashable, object], rng: RandomSource | None = None) -> Hashable:
    """Pick one key of a plain ``key -> weight`` mapping.

    Weights are read leniently: numeric strings count, anything non-numeric
    or non-positive counts as zero.  Each weight is rounded up to a whole
    number before the draw, so fractional weights are coarser here than in
    :class:`WeightedSampler`.  When every weight is zero the first key wins.
    """

    if not weights:
        raise NoValuesRegistered("cannot pick from an empty weight mapping")
    sanitized = _sanitize(weights)
    first = next(iter(weights))
    total = sum(sanitized.values())
    if total <= 0.0:
        logger.debug("All weights are zero; returning the first key %r", first)
        return first

    draw = (rng or default_source()).randint(1, math.ceil(total))
    for key, weight in sanitized.items():
        draw -= math.ceil(weight)
        if draw <= 0:
            return key
    return first


def pick_key_seeded(weights: Mapping[Hashable, object], seed: int, namespace: str = "") -> Hashable:
    return pick_key(weights, SeededRandomSource(seed, namespace))
