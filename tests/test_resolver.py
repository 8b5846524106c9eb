from __future__ import annotations

from weightedrandom.core.models import Group, ValueKind
from weightedrandom.core.random_source import CallableRandomSource
from weightedrandom.sampling.resolver import resolve_value


class _Counter:
    def __init__(self) -> None:
        self.calls = 0

    def generate(self) -> str:
        self.calls += 1
        return f"draw-{self.calls}"


def test_plain_values_pass_through() -> None:
    payload = {"k": 1}
    assert resolve_value("a") == "a"
    assert resolve_value(payload) is payload
    assert resolve_value(None) is None


def test_group_resolves_to_member() -> None:
    group = Group(["a", "b", "c"])
    assert resolve_value(group, rng=CallableRandomSource(lambda low, high: 1)) == "b"


def test_anything_with_generate_is_drawn_from() -> None:
    nested = _Counter()
    assert resolve_value(nested) == "draw-1"
    assert resolve_value(nested, ValueKind.NESTED) == "draw-2"
    assert nested.calls == 2


def test_explicit_kind_overrides_inspection() -> None:
    nested = _Counter()
    assert resolve_value(nested, ValueKind.REFERENCE) is nested
    assert nested.calls == 0


class _SourceAware(_Counter):
    def __init__(self) -> None:
        super().__init__()
        self.sources: list[object] = []

    def generate_with(self, rng) -> str:
        self.sources.append(rng)
        return "shared"


def test_shared_source_reaches_nested_draws() -> None:
    nested = _SourceAware()
    source = CallableRandomSource(lambda low, high: low)
    assert resolve_value(nested, rng=source, share_source=True) == "shared"
    assert nested.sources == [source]
    assert resolve_value(nested, rng=source) == "draw-1"
    assert resolve_value(_Counter(), rng=source, share_source=True) == "draw-1"
