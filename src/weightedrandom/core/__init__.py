"""Weight table, value model and error taxonomy."""

from .errors import (
    DecayUnderflow,
    EmptyGroup,
    ExhaustedAttempts,
    InvalidCount,
    InvalidWeight,
    NotRegistered,
    NoValuesRegistered,
    WeightedRandomError,
    ZeroTotalWeight,
)
from .models import Group, ValueKind, ValueMap, WeightedEntry
from .random_source import CallableRandomSource, RandomSource, SeededRandomSource, SystemRandomSource
from .table import Slot, WeightTable

__all__ = [
    "CallableRandomSource",
    "DecayUnderflow",
    "EmptyGroup",
    "ExhaustedAttempts",
    "Group",
    "InvalidCount",
    "InvalidWeight",
    "NoValuesRegistered",
    "NotRegistered",
    "RandomSource",
    "SeededRandomSource",
    "Slot",
    "SystemRandomSource",
    "ValueKind",
    "ValueMap",
    "WeightTable",
    "WeightedEntry",
    "WeightedRandomError",
    "ZeroTotalWeight",
]
