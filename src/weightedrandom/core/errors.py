"""Exception taxonomy shared by tables, samplers and analytics.

Every error derives from :class:`WeightedRandomError` and from the builtin
that best describes it, so callers may catch either.
"""

from __future__ import annotations

__all__ = [
    "WeightedRandomError",
    "InvalidWeight",
    "EmptyGroup",
    "NotRegistered",
    "NoValuesRegistered",
    "ZeroTotalWeight",
    "InvalidCount",
    "ExhaustedAttempts",
    "DecayUnderflow",
]


class WeightedRandomError(Exception):
    """Base class for all weightedrandom failures."""


class InvalidWeight(WeightedRandomError, ValueError):
    pass


class EmptyGroup(WeightedRandomError, ValueError):
    pass


class NotRegistered(WeightedRandomError, LookupError):
    pass


class NoValuesRegistered(WeightedRandomError, LookupError):
    pass


class ZeroTotalWeight(WeightedRandomError, RuntimeError):
    pass


class InvalidCount(WeightedRandomError, ValueError):
    pass


class ExhaustedAttempts(WeightedRandomError, RuntimeError):
    pass


class DecayUnderflow(WeightedRandomError, ValueError):
    pass
