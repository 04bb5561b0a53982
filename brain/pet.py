"""
Refocus Pet - Pet State
The single simulated pet: stats, kinematics and behavior bookkeeping.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np

from shared.constants import DEFAULT_START_X, PET_HEIGHT, PET_WIDTH
from shared.types import Activity, Desire

from .cognition.needs import NeedsModel


@dataclass
class Pet:
    """
    Current state of the pet.

    Position is the bottom-left corner of the pet's bounding box in screen
    pixels, so y is the line the pet stands on.
    """

    needs: NeedsModel = field(default_factory=NeedsModel)
    position: np.ndarray = field(
        default_factory=lambda: np.array([DEFAULT_START_X, 0.0])
    )
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(2))
    facing: int = 1  # -1 = left, 1 = right

    # Behavior
    activity: Activity = Activity.IDLE
    desire: Desire | None = None
    locked_desire: Desire | None = None
    locked_target_value: float | None = None

    # Idle roaming
    idle_timer: float = 0.0
    idle_target_x: float | None = None

    # Input-derived flags
    pointer_chase_enabled: bool = False
    hover: bool = False

    width: float = field(default=PET_WIDTH, repr=False)
    height: float = field(default=PET_HEIGHT, repr=False)

    def __post_init__(self) -> None:
        self.position = np.asarray(self.position, dtype=float).copy()
        self.velocity = np.asarray(self.velocity, dtype=float).copy()

    @property
    def x(self) -> float:
        return float(self.position[0])

    @property
    def y(self) -> float:
        return float(self.position[1])

    @property
    def stats(self) -> dict[str, float]:
        """Current stat values keyed by name."""
        return self.needs.snapshot()

    def stop(self) -> None:
        """Zero the velocity."""
        self.velocity[:] = 0.0

    def release_lock(self) -> None:
        """Drop the pursued need and its release target."""
        self.locked_desire = None
        self.locked_target_value = None
        self.desire = None

    def contains_point(self, px: float, py: float) -> bool:
        """Check whether a point lies inside the pet's bounding box."""
        left, top = self.x, self.y - self.height
        return left <= px <= left + self.width and top <= py <= top + self.height

    def to_dict(self) -> dict[str, Any]:
        """Convert state to dictionary for JSON serialization."""
        return {
            "x": self.x,
            "y": self.y,
            "vx": float(self.velocity[0]),
            "vy": float(self.velocity[1]),
            "facing": self.facing,
            "activity": self.activity.value,
            "desire": self.desire.value if self.desire else None,
            "locked_desire": self.locked_desire.value if self.locked_desire else None,
            "locked_target_value": self.locked_target_value,
            "idle_target_x": self.idle_target_x,
            "pointer_chase_enabled": self.pointer_chase_enabled,
            "hover": self.hover,
            "stats": self.stats,
        }
