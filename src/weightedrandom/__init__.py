"""Weighted random selection with and without replacement."""

from __future__ import annotations

from .analysis import DistributionAnalytics
from .core import (
    CallableRandomSource,
    DecayUnderflow,
    EmptyGroup,
    ExhaustedAttempts,
    Group,
    InvalidCount,
    InvalidWeight,
    NotRegistered,
    NoValuesRegistered,
    RandomSource,
    SeededRandomSource,
    SystemRandomSource,
    ValueMap,
    WeightedEntry,
    WeightedRandomError,
    WeightTable,
    ZeroTotalWeight,
)
from .facade import create_bag, create_float, pick_key, pick_key_seeded
from .sampling import BagSampler, SamplerConfig, WeightedSampler

__all__ = [
    "BagSampler",
    "CallableRandomSource",
    "DecayUnderflow",
    "DistributionAnalytics",
    "EmptyGroup",
    "ExhaustedAttempts",
    "Group",
    "InvalidCount",
    "InvalidWeight",
    "NoValuesRegistered",
    "NotRegistered",
    "RandomSource",
    "SamplerConfig",
    "SeededRandomSource",
    "SystemRandomSource",
    "ValueMap",
    "WeightTable",
    "WeightedEntry",
    "WeightedRandomError",
    "WeightedSampler",
    "ZeroTotalWeight",
    "create_bag",
    "create_float",
    "pick_key",
    "pick_key_seeded",
]
