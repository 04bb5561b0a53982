"""
Refocus Pet - Behavior State Machine
Turns the locked desire and item proximity into an activity, and applies
the effects of eating, drinking and sleeping.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Mapping

from shared.types import Activity, Desire, ItemSource, ItemTarget

from ...config import BehaviorConfig
from .arbiter import DesireArbiter
from .roaming import IdleRoamer

if TYPE_CHECKING:
    from ...motion import MovementController
    from ...pet import Pet

logger = logging.getLogger(__name__)


class BehaviorStateMachine:
    """
    Activity state machine for the pet.

    States are idle, eating, drinking and sleeping. Pointer chasing is not a
    state of its own: while it is active the pet only follows the pointer and
    the item logic is skipped entirely.

    Transitions per tick:
        - any state -> eating/drinking/sleeping when the desired item is within
          arrival distance horizontally
        - eating/drinking/sleeping -> idle when the stat reaches its release
          threshold (a new roam target is picked)
        - anything not consuming moves toward the item, the idle target or the
          pointer, and is reported as idle
    """

    def __init__(
        self,
        arbiter: DesireArbiter,
        movement: MovementController,
        roamer: IdleRoamer,
        config: BehaviorConfig | None = None,
    ) -> None:
        """
        Initialize the state machine.

        Args:
            arbiter: Supplies release thresholds for the current lock
            movement: Integrates motion when the pet is not settled
            roamer: Picks idle targets after releases and while wandering
            config: Activity rates. Defaults to BehaviorConfig().
        """
        self.config = config or BehaviorConfig()
        self._arbiter = arbiter
        self._movement = movement
        self._roamer = roamer

    def step(
        self,
        pet: Pet,
        delta_seconds: float,
        items: ItemSource | None = None,
        pointer_chase: bool = False,
        pointer: tuple[float, float] = (0.0, 0.0),
    ) -> None:
        """
        Run one tick of activity selection, effects and movement.

        Args:
            pet: Pet to update in place
            delta_seconds: Time elapsed in seconds
            items: Item stations; None behaves like a registry with no targets
            pointer_chase: Whether the pet is chasing the pointer this tick
            pointer: Latest pointer coordinates
        """
        targets: Mapping[str, ItemTarget] = items.get_item_targets() if items else {}
        floor_line = self._movement.viewport.floor_line

        pursuing = False
        if pointer_chase:
            desired = pointer
        else:
            idle_x = pet.idle_target_x if pet.idle_target_x is not None else pet.x
            desired = (idle_x, floor_line)
            if pet.desire is not None:
                target = targets.get(pet.desire.value)
                if target is not None:
                    pursuing = True
                    desired = (target.x, floor_line)
                    if abs(pet.x - target.x) < self.config.arrival_distance:
                        self._arrive(pet, pet.desire, delta_seconds)

        if not pointer_chase and self._consume(pet, delta_seconds, items, targets):
            return

        # Walking and chasing have no activity of their own and report idle
        if pet.activity is not Activity.IDLE:
            logger.debug(f"Leaving {pet.activity.value} without release")
            pet.activity = Activity.IDLE

        profile = self.config.chase_profile if pointer_chase else self.config.walk_profile
        result = self._movement.step(pet, delta_seconds, desired, profile)

        if not pointer_chase and not pursuing:
            self._roamer.update(pet, delta_seconds, result.settled_x, targets)

    def _arrive(self, pet: Pet, desire: Desire, delta_seconds: float) -> None:
        """Enter the consuming state for desire, with a small happiness bump."""
        if pet.activity is not desire.activity:
            logger.debug(f"Arrived at {desire.value}, now {desire.activity.value}")
        pet.activity = desire.activity
        pet.needs.satisfy("happiness", self.config.arrival_happiness_rate * delta_seconds)

    def _consume(
        self,
        pet: Pet,
        delta_seconds: float,
        items: ItemSource | None,
        targets: Mapping[str, ItemTarget],
    ) -> bool:
        """
        Apply the current consuming activity, if any.

        Returns:
            True if the pet was consuming this tick and must not move
        """
        desire = pet.desire
        if desire is None or desire is not pet.locked_desire:
            return False
        if pet.activity is not desire.activity:
            return False

        if desire is Desire.BED:
            bed = targets.get("bed")
            if bed is not None:
                pet.position[0] = bed.x
                pet.idle_target_x = bed.x
            pet.position[1] = self._movement.viewport.floor_line
            pet.needs.satisfy("energy", self.config.sleep_energy_rate * delta_seconds)
            pet.needs.satisfy("happiness", self.config.sleep_happiness_rate * delta_seconds)
        elif desire is Desire.WATER:
            pet.needs.satisfy("water", self.config.drink_rate * delta_seconds)
            if items is not None:
                items.consume("water", self.config.drink_consume_rate * delta_seconds)
        else:
            pet.needs.satisfy("food", self.config.eat_rate * delta_seconds)
            if items is not None:
                items.consume("food", self.config.eat_consume_rate * delta_seconds)
        pet.stop()

        if self._arbiter.should_release(pet):
            logger.info(
                f"Finished {pet.activity.value}: {desire.stat}={pet.needs[desire.stat]:.1f}"
            )
            pet.release_lock()
            pet.activity = Activity.IDLE
            self._roamer.choose_target(pet, targets)
        return True
