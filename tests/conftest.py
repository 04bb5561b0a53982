"""Shared fixtures for the pet simulation tests."""

import random

import pytest

from brain.cognition.needs import NeedsModel
from brain.pet import Pet
from shared.types import ItemTarget, Viewport


class FakeItems:
    """In-memory item stations that record consumption."""

    def __init__(self, targets: dict[str, ItemTarget]) -> None:
        self.targets = targets
        self.levels = {"food": 100.0, "water": 100.0, "bed": 100.0}
        self.consumed: list[tuple[str, float]] = []

    def get_item_targets(self) -> dict[str, ItemTarget]:
        return dict(self.targets)

    def consume(self, kind: str, amount: float) -> float:
        self.consumed.append((kind, amount))
        self.levels[kind] = max(0.0, min(100.0, self.levels[kind] - amount))
        return self.levels[kind]

    def get_levels(self) -> dict[str, float]:
        return dict(self.levels)


class FakeGateway:
    """Persistence stand-in with a canned load result."""

    def __init__(self, stored: dict[str, float] | None = None) -> None:
        self.stored = stored
        self.saves: list[dict[str, float]] = []
        self.closed = False

    def load(self) -> dict[str, float] | None:
        return dict(self.stored) if self.stored else None

    def save(self, stats: dict[str, float]) -> bool:
        self.saves.append(dict(stats))
        return True

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def viewport() -> Viewport:
    """An 800x600 overlay (floor line at y=597)."""
    return Viewport(width=800, height=600)


@pytest.fixture
def item_targets(viewport: Viewport) -> dict[str, ItemTarget]:
    """Targets matching the default floor layout."""
    return {
        "food": ItemTarget(x=54.0, y=viewport.floor_base),
        "water": ItemTarget(x=144.0, y=viewport.floor_base),
        "bed": ItemTarget(x=264.0, y=viewport.floor_base),
    }


@pytest.fixture
def items(item_targets: dict[str, ItemTarget]) -> FakeItems:
    return FakeItems(item_targets)


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def make_pet(viewport: Viewport):
    """Factory for pets standing on the floor with chosen stats."""

    def _make(x: float = 400.0, **stats: float) -> Pet:
        values = {"energy": 90.0, "food": 80.0, "water": 80.0, "happiness": 70.0}
        values.update(stats)
        return Pet(needs=NeedsModel(initial=values), position=[x, viewport.floor_line])

    return _make


@pytest.fixture
def make_items():
    """Factory for item stations at arbitrary positions."""
    return FakeItems


@pytest.fixture
def make_gateway():
    """Factory for persistence stand-ins holding a saved snapshot."""
    return FakeGateway
