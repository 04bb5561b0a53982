"""
Refocus Pet - Virtual Pet
Drives the pet simulation from an asyncio frame loop without a renderer.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Callable

from brain import BehaviorConfig, PetSimulation
from brain.storage import Database, PersistenceGateway
from shared.types import PresentationState, Viewport

from .config import EmulatorConfig
from .items import ItemRegistry

logger = logging.getLogger(__name__)


class VirtualPet:
    """
    Hosts a PetSimulation the way the browser overlay would.

    Features:
    - Calls tick() once per frame with the measured elapsed time
    - Owns the item stations and the snapshot storage
    - Accepts laser toggle, pointer and resize input at any time
    - Provides state updates for connected viewers
    """

    def __init__(
        self,
        config: EmulatorConfig | None = None,
        on_state_change: Callable[[PresentationState], None] | None = None,
        behavior_config: BehaviorConfig | None = None,
        gateway: PersistenceGateway | None = None,
    ) -> None:
        """
        Initialize virtual pet.

        Args:
            config: Emulator configuration
            on_state_change: Callback after every tick with the new state
            behavior_config: Brain tuning. Defaults to BehaviorConfig().
            gateway: Snapshot storage. Built from config when None.
        """
        self._config = config or EmulatorConfig()
        self._on_state_change = on_state_change
        self._viewport = Viewport(self._config.viewport_width, self._config.viewport_height)
        self._items = ItemRegistry(self._viewport)

        if gateway is None and self._config.persistence_enabled:
            gateway = PersistenceGateway(
                Database(self._config.db_path), storage_key=self._config.storage_key
            )
        self._gateway = gateway

        self._simulation = PetSimulation(
            items=self._items,
            gateway=self._gateway,
            config=behavior_config,
            viewport=self._viewport,
        )
        self._state = self._simulation.presentation()

        self._running = False
        self._tick_task: asyncio.Task[None] | None = None

    @property
    def state(self) -> PresentationState:
        """Get the most recent presentation state."""
        return self._state

    @property
    def simulation(self) -> PetSimulation:
        return self._simulation

    @property
    def items(self) -> ItemRegistry:
        return self._items

    @property
    def is_running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Start the frame loop."""
        if self._running:
            return
        self._running = True
        self._tick_task = asyncio.create_task(self._tick_loop())
        logger.info(f"Virtual pet started at {self._config.fps} fps")

    async def stop(self) -> None:
        """Stop the frame loop, save the stats and release storage."""
        self._running = False

        if self._tick_task and not self._tick_task.done():
            self._tick_task.cancel()
            try:
                await self._tick_task
            except asyncio.CancelledError:
                pass
        self._tick_task = None

        self._simulation.shutdown()
        if self._gateway is not None:
            self._gateway.close()
        logger.info("Virtual pet stopped")

    async def _tick_loop(self) -> None:
        """Tick with variable dt until stopped."""
        last = time.monotonic()
        while self._running:
            await asyncio.sleep(self._config.tick_interval_s)
            now = time.monotonic()
            self.step(now - last)
            last = now

    def step(self, dt: float) -> PresentationState:
        """Run a single tick and notify listeners."""
        self._state = self._simulation.tick(dt)
        self._notify_state_change()
        return self._state

    def set_state_callback(self, callback: Callable[[PresentationState], None] | None) -> None:
        """Replace the callback run after every tick."""
        self._on_state_change = callback

    def _notify_state_change(self) -> None:
        if self._on_state_change:
            self._on_state_change(self._state)

    # -------------------------------------------------------------------------
    # Input
    # -------------------------------------------------------------------------

    def set_laser(self, active: bool) -> None:
        """Flip the laser toggle and tell the pet to chase (or stop)."""
        self._simulation.set_laser_active(active)
        self._simulation.set_chasing_laser(active)

    def update_pointer(self, x: float, y: float) -> None:
        self._simulation.update_pointer(x, y)

    def resize(self, width: float, height: float) -> None:
        """Resize the overlay and move the items onto the new floor."""
        self._simulation.resize(width, height)
        self._items.layout(self._viewport)
        logger.info(f"Viewport resized to {width:.0f}x{height:.0f}")

    def set_visibility(self, hidden: bool) -> None:
        self._simulation.on_visibility_change(hidden)

    def get_status(self) -> dict[str, Any]:
        """Full status for the API."""
        return {
            "running": self._running,
            "state": self._state.to_dict(),
            "pet": self._simulation.pet.to_dict(),
            "viewport": self._viewport.to_dict(),
            "items": {
                kind: {**target.to_dict(), "level": self._items.get_levels()[kind]}
                for kind, target in self._items.get_item_targets().items()
            },
            "laser_active": self._simulation.is_pointer_chase_active(),
        }
