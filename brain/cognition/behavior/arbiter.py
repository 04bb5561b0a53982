"""
Refocus Pet - Desire Arbiter
Chooses and locks a single pursued need, with critical overrides.
"""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

from shared.types import Desire

from ...config import BehaviorConfig

if TYPE_CHECKING:
    from ...pet import Pet
    from ..needs import NeedsModel

logger = logging.getLogger(__name__)

# Checked in this order; the first critical stat wins
CRITICAL_ORDER: tuple[Desire, ...] = (Desire.WATER, Desire.FOOD, Desire.BED)

# Candidates for the dominant need, in tie-break order
DOMINANT_ORDER: tuple[Desire, ...] = (Desire.BED, Desire.WATER, Desire.FOOD)


class DesireArbiter:
    """
    Decides which need the pet is committed to.

    A lock, once taken, is kept across ticks until the pet has restored the
    stat to a randomly sampled target value. This hysteresis stops the pet
    from flip-flopping between two needs that are nearly tied. The only
    thing that can replace a held lock is a critical stat, which always wins.
    """

    def __init__(
        self,
        config: BehaviorConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """
        Initialize the arbiter.

        Args:
            config: Thresholds and target ranges. Defaults to BehaviorConfig().
            rng: Random source for target sampling.
        """
        self.config = config or BehaviorConfig()
        self._rng = rng or random.Random()

    def critical_need(self, needs: NeedsModel) -> Desire | None:
        """Return the first need whose stat is below its critical floor."""
        for desire in CRITICAL_ORDER:
            need = needs.get_need(desire.stat)
            if need.is_critical(self.config.critical_threshold(desire.stat)):
                return desire
        return None

    def dominant_need(self, needs: NeedsModel) -> Desire | None:
        """Return the lowest need if it is below the start threshold."""
        stat, value = needs.lowest(tuple(d.stat for d in DOMINANT_ORDER))
        if value < self.config.start_need_threshold:
            return next(d for d in DOMINANT_ORDER if d.stat == stat)
        return None

    def sample_target(self, desire: Desire) -> int:
        """Sample the stat value at which a fresh lock on desire releases."""
        ranges = {
            Desire.FOOD: self.config.food_target_range,
            Desire.WATER: self.config.water_target_range,
            Desire.BED: self.config.bed_target_range,
        }
        low, high = ranges[desire]
        return round(self._rng.uniform(low, high))

    def release_threshold(self, desire: Desire, locked_target_value: float | None) -> float:
        """Locked target if one was sampled, otherwise the static fallback."""
        if locked_target_value is not None:
            return locked_target_value
        return self.config.satisfy_threshold(desire.stat)

    def should_release(self, pet: Pet) -> bool:
        """Check whether the pet's current lock is satisfied."""
        if pet.locked_desire is None:
            return False
        threshold = self.release_threshold(pet.locked_desire, pet.locked_target_value)
        return pet.needs.get_need(pet.locked_desire.stat).is_satisfied(threshold)

    def update(self, pet: Pet, pointer_chase: bool = False) -> Desire | None:
        """
        Update the pet's lock and desire for this tick.

        Args:
            pet: Pet whose locked_desire, locked_target_value and desire are set
            pointer_chase: While True the lock is left alone and desire is None

        Returns:
            The locked desire after the update
        """
        if pointer_chase:
            pet.desire = None
            return pet.locked_desire

        previous = pet.locked_desire
        next_lock = previous

        critical = self.critical_need(pet.needs)
        if critical is not None:
            next_lock = critical
        elif next_lock is None:
            next_lock = self.dominant_need(pet.needs)

        if next_lock is not None and next_lock is not previous:
            pet.locked_target_value = self.sample_target(next_lock)
            logger.debug(
                f"Locked {next_lock.value} (was {previous.value if previous else None}, "
                f"critical={critical is not None}, target={pet.locked_target_value})"
            )

        pet.locked_desire = next_lock
        pet.desire = next_lock
        return next_lock
