"""
Refocus Pet - Item Registry
Food bowl, water bowl and bed laid out along the floor.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from shared.constants import (
    BED_EXTRA_GAP,
    ITEM_BASE_X,
    ITEM_GAP,
    ITEM_SPRITE_WIDTH,
    NEED_MAX,
    NEED_MIN,
)
from shared.types import ItemTarget, Viewport

logger = logging.getLogger(__name__)

ITEM_KINDS: tuple[str, ...] = ("food", "water", "bed")
CONSUMABLE_KINDS: tuple[str, ...] = ("food", "water")


@dataclass
class ItemState:
    """State of a single item station."""

    kind: str
    left: float = 0.0  # left edge of the sprite
    floor_y: float = 0.0
    level: float = NEED_MAX

    @property
    def target(self) -> ItemTarget:
        """Navigation target: sprite center on the floor."""
        return ItemTarget(x=self.left + ITEM_SPRITE_WIDTH / 2, y=self.floor_y)


class ItemRegistry:
    """
    Owns the three item stations.

    Stations sit on the floor at fixed offsets from the left edge. Food and
    water levels deplete as the pet consumes them; the bed never depletes.
    Call layout() again after a resize so targets follow the floor.
    """

    def __init__(self, viewport: Viewport | None = None) -> None:
        self._items: dict[str, ItemState] = {kind: ItemState(kind) for kind in ITEM_KINDS}
        self.layout(viewport or Viewport())

    def layout(self, viewport: Viewport) -> None:
        """Place items on the floor of the given viewport."""
        lefts = {
            "food": ITEM_BASE_X,
            "water": ITEM_BASE_X + ITEM_GAP,
            "bed": ITEM_BASE_X + ITEM_GAP * 2 + BED_EXTRA_GAP,
        }
        for kind, item in self._items.items():
            item.left = lefts[kind]
            item.floor_y = viewport.floor_base
        logger.debug(f"Items laid out for {viewport.width:.0f}x{viewport.height:.0f}")

    def get_item_targets(self) -> dict[str, ItemTarget]:
        """Copies of the current navigation targets keyed by kind."""
        return {kind: item.target for kind, item in self._items.items()}

    def consume(self, kind: str, amount: float) -> float:
        """
        Remove supply from a consumable item.

        Args:
            kind: "food" or "water"
            amount: Amount to remove

        Returns:
            The item's new level, or 0 for unknown kinds
        """
        item = self._items.get(kind)
        if item is None:
            return 0.0
        if kind in CONSUMABLE_KINDS:
            item.level = max(NEED_MIN, min(NEED_MAX, item.level - amount))
        return item.level

    def get_levels(self) -> dict[str, float]:
        """Current supply levels keyed by kind."""
        return {kind: item.level for kind, item in self._items.items()}
