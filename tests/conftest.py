from __future__ import annotations

import sys
from collections.abc import Callable, Iterable
from pathlib import Path

import pytest

# Ensure "src" is on sys.path for imports in tests
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from weightedrandom.core.random_source import CallableRandomSource, SeededRandomSource  # noqa: E402


@pytest.fixture(autouse=True)
def _clean_feature_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("WEIGHTEDRANDOM_FEATURES", raising=False)


@pytest.fixture
def seeded_rng() -> SeededRandomSource:
    return SeededRandomSource(1234)


@pytest.fixture
def scripted_rng() -> Callable[[Iterable[int]], CallableRandomSource]:
    """Build a source replaying the given integers, clamped to the requested range."""

    def build(values: Iterable[int]) -> CallableRandomSource:
        iterator = iter(values)

        def draw(low: int, high: int) -> int:
            return max(low, min(high, next(iterator)))

        return CallableRandomSource(draw)

    return build
