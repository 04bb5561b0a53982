"""
Refocus Pet - Idle Roaming
Picks where the pet wanders when it has nothing to do.
"""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Mapping

from shared.types import ItemTarget, Viewport

from ...config import BehaviorConfig

if TYPE_CHECKING:
    from ...motion import MovementController
    from ...pet import Pet

logger = logging.getLogger(__name__)

# Band starts used when the registry has no position for a station
FALLBACK_BAND_STARTS: dict[str, float] = {
    "food": 40.0,
    "water": 180.0,
    "bed": 320.0,
}

ROAM_POOLS: tuple[str, ...] = ("food", "water", "bed", "random")


class IdleRoamer:
    """
    Chooses idle roam targets and times how long the pet lingers at them.

    A target is drawn uniformly from four pools: a band around the food
    bowl, the water bowl or the bed, or any x across the viewport.
    """

    def __init__(
        self,
        viewport: Viewport,
        movement: MovementController,
        config: BehaviorConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config or BehaviorConfig()
        self._viewport = viewport
        self._movement = movement
        self._rng = rng or random.Random()

    def candidates(self, item_targets: Mapping[str, ItemTarget] | None = None) -> list[float]:
        """One candidate x per pool."""
        band = self.config.idle_band_width
        choices = []
        for pool in ROAM_POOLS:
            if pool == "random":
                span = max(0.0, self._viewport.width - self.config.idle_random_margin)
                choices.append(self._rng.random() * span)
                continue
            target = (item_targets or {}).get(pool)
            start = target.x - band / 2 if target else FALLBACK_BAND_STARTS[pool]
            choices.append(start + self._rng.random() * band)
        return choices

    def choose_target(
        self,
        pet: Pet,
        item_targets: Mapping[str, ItemTarget] | None = None,
    ) -> float:
        """
        Pick a new idle target and store it on the pet.

        Returns:
            The chosen x, clamped to where the pet can actually stand
        """
        target_x = self._movement.clamp_x(self._rng.choice(self.candidates(item_targets)))
        pet.idle_target_x = target_x
        logger.debug(f"New idle target x={target_x:.1f}")
        return target_x

    def update(
        self,
        pet: Pet,
        delta_seconds: float,
        settled: bool,
        item_targets: Mapping[str, ItemTarget] | None = None,
    ) -> None:
        """
        Count down while the pet rests at its idle target.

        Args:
            pet: Pet whose idle timer and target are updated
            delta_seconds: Time elapsed in seconds
            settled: Whether the pet is inside the dead zone of its target
            item_targets: Current station positions for the next draw
        """
        if not settled:
            return
        pet.idle_timer -= delta_seconds
        if pet.idle_timer <= 0:
            low, high = self.config.idle_wait_range
            pet.idle_timer = self._rng.uniform(low, high)
            self.choose_target(pet, item_targets)
