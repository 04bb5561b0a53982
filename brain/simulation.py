"""
Refocus Pet - Pet Simulation
Per-instance context and the per-frame tick callback.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from shared.constants import DEFAULT_START_X
from shared.types import Activity, ItemSource, ItemTarget, PresentationState, Viewport

from .cognition.behavior import BehaviorStateMachine, DesireArbiter, IdleRoamer
from .cognition.needs import NeedsModel, clamp_stat
from .config import BehaviorConfig
from .motion import MovementController
from .pet import Pet

if TYPE_CHECKING:
    from .storage import PersistenceGateway

logger = logging.getLogger(__name__)

TOOLTIP_LABELS: tuple[tuple[str, str], ...] = (
    ("energy", "Energy"),
    ("food", "Food"),
    ("water", "Water"),
    ("happiness", "Happiness"),
)


def format_percent(value: float) -> str:
    """Format a stat as a whole percentage, rounding halves up."""
    return f"{math.floor(clamp_stat(value) + 0.5)}%"


@dataclass
class SimulationContext:
    """
    Inputs and timers belonging to one simulation instance.

    Input fields may be written at any time by the host; they take effect
    on the next tick.
    """

    pointer_x: float = 0.0
    pointer_y: float = 0.0
    laser_active: bool = False  # state of the host's laser toggle
    save_accumulator: float = 0.0
    tick_count: int = 0
    rng: random.Random = field(default_factory=random.Random, repr=False)

    @property
    def pointer(self) -> tuple[float, float]:
        return (self.pointer_x, self.pointer_y)


class PetSimulation:
    """
    Runs the pet for one overlay session.

    Each call to tick() performs, in order:
        1. autosave bookkeeping
        2. need decay (fast while chasing the pointer)
        3. desire arbitration
        4. activity selection, consumption effects and movement
        5. presentation record for the renderer
    """

    def __init__(
        self,
        items: ItemSource | None = None,
        gateway: PersistenceGateway | None = None,
        config: BehaviorConfig | None = None,
        viewport: Viewport | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """
        Initialize the simulation and load saved stats.

        Args:
            items: Item stations the pet eats, drinks and sleeps at
            gateway: Snapshot storage. None disables persistence.
            config: Behavior tuning. Defaults to BehaviorConfig().
            viewport: Overlay bounds. Defaults to Viewport().
            rng: Random source shared by arbitration and roaming
        """
        self.config = config or BehaviorConfig()
        self._items = items
        self._gateway = gateway
        self._viewport = viewport or Viewport()
        self._context = SimulationContext(rng=rng or random.Random())

        needs = NeedsModel(self.config)
        saved = gateway.load() if gateway else None
        if saved:
            needs.restore(saved)
            logger.info(f"Restored pet stats: {needs}")

        self._pet = Pet(
            needs=needs,
            position=np.array([DEFAULT_START_X, self._viewport.floor_line]),
        )

        rng_source = self._context.rng
        self._movement = MovementController(self._viewport, self._pet.width, self._pet.height)
        self._arbiter = DesireArbiter(self.config, rng_source)
        self._roamer = IdleRoamer(self._viewport, self._movement, self.config, rng_source)
        self._state_machine = BehaviorStateMachine(
            self._arbiter, self._movement, self._roamer, self.config
        )

        self._roamer.choose_target(self._pet, self._item_targets())

    @property
    def pet(self) -> Pet:
        return self._pet

    @property
    def context(self) -> SimulationContext:
        return self._context

    @property
    def viewport(self) -> Viewport:
        return self._viewport

    @property
    def arbiter(self) -> DesireArbiter:
        return self._arbiter

    @property
    def roamer(self) -> IdleRoamer:
        return self._roamer

    # -------------------------------------------------------------------------
    # Host inputs
    # -------------------------------------------------------------------------

    def set_chasing_laser(self, active: bool) -> None:
        """Enable or disable pointer chasing on the pet."""
        self._pet.pointer_chase_enabled = bool(active)
        logger.info(f"Laser chase {'enabled' if active else 'disabled'}")

    def set_laser_active(self, active: bool) -> None:
        """Record the state of the host's laser toggle."""
        self._context.laser_active = bool(active)

    def is_pointer_chase_active(self) -> bool:
        """Pointer chasing needs both the pet flag and the host toggle."""
        return self._pet.pointer_chase_enabled and self._context.laser_active

    def update_pointer(self, x: float, y: float) -> None:
        """Record the latest pointer position."""
        self._context.pointer_x = float(x)
        self._context.pointer_y = float(y)

    def resize(self, width: float, height: float) -> None:
        """Resize the viewport the pet is confined to."""
        self._viewport.width = float(width)
        self._viewport.height = float(height)
        self._pet.position[0] = self._movement.clamp_x(self._pet.position[0])
        self._pet.position[1] = min(self._pet.position[1], self._viewport.floor_line)

    # -------------------------------------------------------------------------
    # Tick
    # -------------------------------------------------------------------------

    def tick(self, dt: float) -> PresentationState:
        """
        Advance the simulation by dt seconds.

        Args:
            dt: Elapsed time since the previous tick. Negative or non-finite
                values are treated as zero.

        Returns:
            The presentation record for this frame
        """
        if not math.isfinite(dt) or dt < 0:
            dt = 0.0

        ctx = self._context
        pet = self._pet
        chasing = self.is_pointer_chase_active()
        ctx.tick_count += 1

        ctx.save_accumulator += dt
        if ctx.save_accumulator >= self.config.autosave_interval_s:
            ctx.save_accumulator = 0.0
            self.save()

        pet.needs.update(dt, fast_drain=chasing)
        self._arbiter.update(pet, pointer_chase=chasing)
        self._state_machine.step(
            pet, dt, items=self._items, pointer_chase=chasing, pointer=ctx.pointer
        )

        pet.hover = pet.contains_point(ctx.pointer_x, ctx.pointer_y)

        logger.debug(
            f"Pet state: {pet.activity.value}, desire: {pet.desire}, "
            f"locked: {pet.locked_desire}, x: {pet.x:.1f}"
        )
        return self.presentation()

    def presentation(self) -> PresentationState:
        """Build the presentation record for the current state."""
        pet = self._pet
        stats = pet.stats
        percentages = {name: format_percent(stats[name]) for name, _ in TOOLTIP_LABELS}
        tooltip = " | ".join(
            f"{label}: {percentages[name]}" for name, label in TOOLTIP_LABELS
        )
        return PresentationState(
            x=pet.x,
            y=pet.y,
            facing=pet.facing,
            activity=pet.activity,
            hover=pet.hover,
            tooltip=tooltip,
            stat_percentages=percentages,
            sleeping=pet.activity is Activity.SLEEPING,
            laser_dot=self._context.pointer if self.is_pointer_chase_active() else None,
            item_levels=self._items.get_levels() if self._items else {},
        )

    # -------------------------------------------------------------------------
    # Persistence hooks
    # -------------------------------------------------------------------------

    def save(self) -> bool:
        """Snapshot the stats. Never raises."""
        if self._gateway is None:
            return False
        return self._gateway.save(self._pet.stats)

    def on_visibility_change(self, hidden: bool) -> None:
        """Host hook: the overlay was hidden or shown."""
        if hidden:
            self.save()

    def shutdown(self) -> None:
        """Host hook: the overlay is being torn down."""
        self.save()
        logger.info("Pet simulation shut down")

    def _item_targets(self) -> dict[str, ItemTarget]:
        return self._items.get_item_targets() if self._items else {}
