"""Environment driven feature flags.

Samplers read a couple of process-wide defaults from here so deployments can
flip behaviour without touching call sites.  Flags are listed in the
``WEIGHTEDRANDOM_FEATURES`` environment variable (comma separated, case
insensitive) and can be overridden for a block of code::

    from weightedrandom.core import feature_flags

    with feature_flags.override(enable={feature_flags.TRACK_SELECTIONS}):
        sampler = WeightedSampler()  # tracking already on

Known flags:

``tracking.selections``
    New samplers start with selection tracking enabled.
``sampling.high_precision``
    The default draw precision becomes one part in 10**9 instead of 10**6.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Final

__all__ = [
    "TRACK_SELECTIONS",
    "HIGH_PRECISION",
    "env_flags",
    "is_enabled",
    "override",
    "set_env_flags",
]

_ENV_VAR: Final = "WEIGHTEDRANDOM_FEATURES"

TRACK_SELECTIONS: Final = "tracking.selections"
HIGH_PRECISION: Final = "sampling.high_precision"


def _flag_names(flags: Iterable[str]) -> frozenset[str]:
    return frozenset(name.strip().lower() for name in flags if name.strip())


@dataclass(frozen=True, slots=True)
class _Override:
    enable: frozenset[str]
    disable: frozenset[str]

    def decide(self, name: str) -> bool | None:
        if name in self.disable:
            return False
        if name in self.enable:
            return True
        return None


_active: list[_Override] = []


def env_flags() -> frozenset[str]:
    """Flags currently listed in the environment variable."""

    return _flag_names(os.environ.get(_ENV_VAR, "").split(","))


def is_enabled(flag: str) -> bool:
    """Return True when *flag* is switched on.

    The innermost :func:`override` naming the flag decides; without one the
    environment variable does.
    """

    name = flag.strip().lower()
    for layer in reversed(_active):
        decision = layer.decide(name)
        if decision is not None:
            return decision
    return name in env_flags()


@contextmanager
def override(*, enable: Iterable[str] = (), disable: Iterable[str] = ()) -> Iterator[None]:
    """Force flags on or off for the duration of the block."""

    _active.append(_Override(_flag_names(enable), _flag_names(disable)))
    try:
        yield
    finally:
        _active.pop()


def set_env_flags(flags: Iterable[str]) -> None:
    os.environ[_ENV_VAR] = ",".join(sorted(_flag_names(flags)))
