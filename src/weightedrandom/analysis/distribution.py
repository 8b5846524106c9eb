"""Read-mostly statistics over a weight table.

Everything here is derived from the same slot weights the samplers draw
from, so the numbers describe exactly what a ``WeightedSampler`` would do.
The decay/boost helpers are the only writers; they go through
``WeightTable.update_weights`` so a rejected adjustment leaves every weight
untouched.
"""

from __future__ import annotations

import logging
import math
import numbers
from typing import Any

import numpy as np

from ..core.errors import DecayUnderflow
from ..core.models import ValueKind, ValueMap, lookup_key, members_of
from ..core.table import WeightTable

__all__ = ["DistributionAnalytics", "DEFAULT_ADJUST_FLOOR", "as_number"]

logger = logging.getLogger(__name__)

DEFAULT_ADJUST_FLOOR = 1e-6


def as_number(value: Any) -> float | None:
    """Return *value* as a float when it reads as a number, else None."""

    if isinstance(value, bool):
        return None
    if isinstance(value, numbers.Real):
        number = float(value)
        return number if math.isfinite(number) else None
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
        return number if math.isfinite(number) else None
    return None


class DistributionAnalytics:
    def __init__(self, table: WeightTable, *, adjust_floor: float = DEFAULT_ADJUST_FLOOR) -> None:
        if adjust_floor <= 0:
            raise ValueError("adjust_floor must be positive")
        self.table = table
        self.adjust_floor = adjust_floor

    # -- distribution -------------------------------------------------------

    def distribution_items(self) -> list[tuple[Any, float]]:
        """Per-value probabilities with group mass split across members.

        A value reachable both directly and through a group is reported once
        with the summed probability.  Order follows first appearance.
        """

        if not len(self.table):
            return []
        merged: dict[Any, list[Any]] = {}
        for slot, probability in self.table.normalized():
            members = members_of(slot.value, slot.kind)
            share = probability / len(members)
            for member in members:
                key = lookup_key(member)
                if key in merged:
                    merged[key][1] += share
                else:
                    merged[key] = [member, share]
        return [(member, share) for member, share in merged.values()]

    def normalized_distribution(self) -> ValueMap[float]:
        """Mapping form of :meth:`distribution_items`."""

        return ValueMap(self.distribution_items())

    def entropy(self, *, flatten: bool = False) -> float:
        """Shannon entropy in bits.

        By default each slot counts as one outcome, bounded by
        ``log2(slot_count)``.  With ``flatten=True`` group members count as
        separate outcomes, matching :meth:`distribution_items`.
        """

        if not len(self.table):
            return 0.0
        if flatten:
            probs = np.array([p for _, p in self.distribution_items()], dtype=float)
        else:
            probs = np.array([p for _, p in self.table.normalized()], dtype=float)
        probs = probs[probs > 0.0]
        return max(0.0, float(-np.sum(probs * np.log2(probs))))

    # -- moments ------------------------------------------------------------

    def _numeric_slots(self) -> tuple[np.ndarray, np.ndarray]:
        xs: list[float] = []
        ws: list[float] = []
        for slot in self.table.slots():
            if slot.kind is not ValueKind.SCALAR:
                continue
            number = as_number(slot.value)
            if number is None:
                continue
            xs.append(number)
            ws.append(slot.weight)
        return np.array(xs, dtype=float), np.array(ws, dtype=float)

    def expected_value(self) -> float | None:
        xs, ws = self._numeric_slots()
        if xs.size == 0 or ws.sum() <= 0:
            return None
        return float(np.average(xs, weights=ws))

    def variance(self) -> float | None:
        mean = self.expected_value()
        if mean is None:
            return None
        xs, ws = self._numeric_slots()
        return float(np.average((xs - mean) ** 2, weights=ws))

    def standard_deviation(self) -> float | None:
        var = self.variance()
        if var is None:
            return None
        return math.sqrt(var)

    # -- adjustments --------------------------------------------------------

    def decay_weight(self, value: Any, factor: float) -> float:
        _check_decay_factor(factor)
        slot = self.table.require(value)
        updated = slot.weight * factor
        if updated <= 0.0:
            raise DecayUnderflow(f"decaying {value!r} by {factor} would drop its weight to zero")
        self.table.update_weights({slot.index: updated})
        return updated

    def boost_weight(self, value: Any, factor: float) -> float:
        _check_boost_factor(factor)
        slot = self.table.require(value)
        updated = slot.weight * factor
        self.table.update_weights({slot.index: updated})
        return updated

    def decay_all_weights(self, factor: float) -> None:
        _check_decay_factor(factor)
        updates = {slot.index: slot.weight * factor for slot in self.table.slots()}
        if any(weight <= 0.0 for weight in updates.values()):
            raise DecayUnderflow(f"decaying by {factor} would drop a weight to zero")
        self.table.update_weights(updates)

    def boost_all_weights(self, factor: float) -> None:
        _check_boost_factor(factor)
        self.table.update_weights({slot.index: slot.weight * factor for slot in self.table.slots()})

    def auto_adjust_weights(self, strength: float = 0.5) -> bool:
        """Nudge weights so under-drawn slots become likelier and vice versa.

        Returns False without touching anything when no selection has been
        recorded yet.
        """

        if not 0.0 < strength <= 1.0:
            raise ValueError("strength must be in (0, 1]")
        slots = self.table.slots()
        counts = self.table.selection_counts()
        total = sum(counts.get(slot.index, 0) for slot in slots)
        if not slots or total <= 0:
            logger.debug("No recorded selections; auto adjustment skipped.")
            return False

        expected = total / len(slots)
        updates: dict[int, float] = {}
        for slot in slots:
            ratio = counts.get(slot.index, 0) / expected
            updates[slot.index] = max(self.adjust_floor, slot.weight * (1.0 + strength * (1.0 - ratio)))
        self.table.update_weights(updates)
        logger.debug("Auto-adjusted %d weights from %d selections (strength=%.3f)", len(updates), total, strength)
        return True


def _check_decay_factor(factor: float) -> None:
    if factor <= 0.0:
        raise DecayUnderflow(f"decay factor {factor} would drop weights to zero")
    if not factor <= 1.0:
        raise ValueError("decay factor must be in (0, 1]")


def _check_boost_factor(factor: float) -> None:
    if not factor >= 1.0:
        raise ValueError("boost factor must be >= 1")
