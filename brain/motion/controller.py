"""
Refocus Pet - Movement Controller
Steering, drag and clamped integration toward a desired point.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any

import numpy as np

from shared.constants import PET_HEIGHT, PET_WIDTH, VIEWPORT_EDGE_MARGIN
from shared.types import Viewport

if TYPE_CHECKING:
    from ..pet import Pet


@dataclass(frozen=True)
class MovementProfile:
    """Tuning for one style of motion (px/s, px/s^2, 1/s)."""

    max_speed_x: float
    accel_x: float
    max_speed_y: float
    accel_y: float
    drag: float
    dead_zone: float = 8.0  # no steering closer than this
    pin_to_floor: bool = True

    def validate(self) -> list[str]:
        """Validate profile values and return list of errors."""
        errors = []
        for name in ("max_speed_x", "accel_x", "max_speed_y", "accel_y"):
            if getattr(self, name) <= 0:
                errors.append(f"{name} must be positive")
        if self.drag < 0:
            errors.append("drag must not be negative")
        if self.dead_zone < 0:
            errors.append("dead_zone must not be negative")
        return errors

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MovementProfile:
        """Create profile from dictionary, ignoring unknown keys."""
        valid_fields = {f for f in cls.__dataclass_fields__}
        return cls(**{k: v for k, v in data.items() if k in valid_fields})


# Damped walking along the floor
WALK_PROFILE = MovementProfile(
    max_speed_x=120.0,
    accel_x=600.0,
    max_speed_y=90.0,
    accel_y=500.0,
    drag=6.0,
)

# Snappy pointer tracking with vertical freedom
CHASE_PROFILE = MovementProfile(
    max_speed_x=340.0,
    accel_x=2000.0,
    max_speed_y=260.0,
    accel_y=1600.0,
    drag=2.0,
    pin_to_floor=False,
)


@dataclass
class MovementResult:
    """Offsets to the desired point measured before the step."""

    dx: float
    dy: float
    dead_zone: float

    @property
    def settled_x(self) -> bool:
        """Whether the pet was horizontally inside the dead zone."""
        return abs(self.dx) <= self.dead_zone


class MovementController:
    """
    Moves the pet toward a desired point with bang-bang steering.

    Each axis accelerates at a constant rate toward the target unless it is
    already inside the dead zone, then linear drag is applied and the speed
    is clamped. Position is kept on screen afterwards.
    """

    def __init__(
        self,
        viewport: Viewport,
        pet_width: float = PET_WIDTH,
        pet_height: float = PET_HEIGHT,
    ) -> None:
        """
        Initialize the movement controller.

        Args:
            viewport: Overlay bounds, read on every step so resizes apply
            pet_width: Pet bounding box width in pixels
            pet_height: Pet bounding box height in pixels
        """
        self._viewport = viewport
        self._pet_width = pet_width
        self._pet_height = pet_height

    @property
    def viewport(self) -> Viewport:
        return self._viewport

    def step(
        self,
        pet: Pet,
        dt: float,
        desired: tuple[float, float],
        profile: MovementProfile,
    ) -> MovementResult:
        """
        Advance the pet's velocity and position by dt seconds.

        Args:
            pet: Pet whose position, velocity and facing are updated in place
            dt: Time delta in seconds
            desired: Target point (x, y) in screen pixels
            profile: Speed, acceleration and drag tuning to use

        Returns:
            MovementResult with the pre-step offsets to the target
        """
        delta = np.asarray(desired, dtype=float) - pet.position
        accel = np.array([profile.accel_x, profile.accel_y])
        max_speed = np.array([profile.max_speed_x, profile.max_speed_y])

        steer = np.where(np.abs(delta) > profile.dead_zone, np.sign(delta) * accel, 0.0)

        pet.velocity += steer * dt
        pet.velocity -= pet.velocity * profile.drag * dt
        np.clip(pet.velocity, -max_speed, max_speed, out=pet.velocity)

        pet.position += pet.velocity * dt
        if pet.velocity[0] != 0:
            pet.facing = 1 if pet.velocity[0] > 0 else -1

        floor_line = self._viewport.floor_line
        if profile.pin_to_floor:
            pet.position[1] = floor_line
        else:
            pet.position[1] = min(floor_line, max(self._pet_height, pet.position[1]))

        pet.position[0] = self.clamp_x(pet.position[0])

        return MovementResult(
            dx=float(delta[0]), dy=float(delta[1]), dead_zone=profile.dead_zone
        )

    def clamp_x(self, x: float) -> float:
        """Clamp an x coordinate to the walkable part of the viewport."""
        max_x = self._viewport.width - self._pet_width - VIEWPORT_EDGE_MARGIN
        return max(VIEWPORT_EDGE_MARGIN, min(max_x, x))
