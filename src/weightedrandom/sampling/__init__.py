"""Weighted draws with and without replacement."""

from .bag import BagSampler
from .base import BaseSampler, SamplerConfig
from .resolver import resolve_value
from .weighted import WeightedSampler

__all__ = ["BagSampler", "BaseSampler", "SamplerConfig", "WeightedSampler", "resolve_value"]
