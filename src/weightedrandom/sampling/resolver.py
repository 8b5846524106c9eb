"""Turn a drawn slot value into what the caller receives.

Groups yield one member, nested samplers are drawn from, anything else is
returned unchanged.  Nesting depth is whatever the caller built; a sampler
registered inside itself recurses until Python's recursion limit is hit.
"""

from __future__ import annotations

from typing import Any

from ..core.models import ValueKind, classify
from ..core.random_source import RandomSource

__all__ = ["resolve_value"]


def resolve_value(
    value: Any,
    kind: ValueKind | None = None,
    rng: RandomSource | None = None,
    *,
    share_source: bool = False,
) -> Any:
    """Resolve *value*, picking group members with *rng*.

    With ``share_source`` a nested sampler that offers ``generate_with`` draws
    from *rng* as well, so a whole nested draw replays from one seeded
    source.  Otherwise nested samplers use their own source.
    """

    if kind is None:
        kind = classify(value)
    if kind is ValueKind.GROUP:
        return value.pick_one(rng)
    if kind is ValueKind.NESTED:
        draw_with = getattr(value, "generate_with", None) if share_source and rng is not None else None
        if callable(draw_with):
            return draw_with(rng)
        return value.generate()
    return value
