"""
Refocus Pet - Behavior Configuration
Tunable rates and thresholds for needs, arbitration and activities.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from shared.constants import AUTOSAVE_INTERVAL_S

from .motion import CHASE_PROFILE, WALK_PROFILE, MovementProfile

_PROFILE_FIELDS = ("walk_profile", "chase_profile")
_RANGE_FIELDS = (
    "food_target_range",
    "water_target_range",
    "bed_target_range",
    "idle_wait_range",
)


@dataclass
class BehaviorConfig:
    """Configuration for the pet brain with the overlay's tuning as defaults."""

    # Decay (points per second)
    energy_decay_rate: float = 0.8
    food_decay_rate: float = 0.5
    water_decay_rate: float = 0.6
    happiness_decay_rate: float = 0.05
    chase_drain_factor: float = 3.0  # multiplier on energy/food/water while chasing
    chase_happiness_gain: float = 0.8

    # Arbitration
    start_need_threshold: float = 60.0  # begin pursuing when the lowest stat dips below
    critical_water: float = 10.0
    critical_food: float = 10.0
    critical_energy: float = 10.0
    satisfy_water: float = 80.0  # fallback release values
    satisfy_food: float = 80.0
    satisfy_energy: float = 95.0
    food_target_range: tuple[float, float] = (72.0, 92.0)
    water_target_range: tuple[float, float] = (72.0, 92.0)
    bed_target_range: tuple[float, float] = (92.0, 99.0)

    # Activities (points per second)
    arrival_distance: float = 12.0
    arrival_happiness_rate: float = 4.0
    eat_rate: float = 12.0
    eat_consume_rate: float = 8.0
    drink_rate: float = 20.0
    drink_consume_rate: float = 10.0
    sleep_energy_rate: float = 5.0
    sleep_happiness_rate: float = 0.2

    # Idle roaming
    idle_wait_range: tuple[float, float] = (2.0, 5.0)
    idle_band_width: float = 80.0
    idle_random_margin: float = 120.0

    # Movement
    walk_profile: MovementProfile = field(default_factory=lambda: WALK_PROFILE)
    chase_profile: MovementProfile = field(default_factory=lambda: CHASE_PROFILE)

    # Persistence
    autosave_interval_s: float = AUTOSAVE_INTERVAL_S

    def critical_threshold(self, stat: str) -> float:
        """Critical floor for energy, food or water."""
        return {
            "water": self.critical_water,
            "food": self.critical_food,
            "energy": self.critical_energy,
        }[stat]

    def satisfy_threshold(self, stat: str) -> float:
        """Static release value for energy, food or water."""
        return {
            "water": self.satisfy_water,
            "food": self.satisfy_food,
            "energy": self.satisfy_energy,
        }[stat]

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors."""
        errors = []

        for name in (
            "energy_decay_rate",
            "food_decay_rate",
            "water_decay_rate",
            "happiness_decay_rate",
            "chase_happiness_gain",
        ):
            if getattr(self, name) < 0:
                errors.append(f"{name} must not be negative")
        if self.chase_drain_factor < 1:
            errors.append("chase_drain_factor must be at least 1")
        if not 0 <= self.start_need_threshold <= 100:
            errors.append("start_need_threshold must be within 0-100")
        if self.arrival_distance <= 0:
            errors.append("arrival_distance must be positive")
        if self.autosave_interval_s <= 0:
            errors.append("autosave_interval_s must be positive")

        for name in _RANGE_FIELDS:
            low, high = getattr(self, name)
            if low > high:
                errors.append(f"{name} lower bound exceeds upper bound")
        for name in ("food_target_range", "water_target_range", "bed_target_range"):
            low, high = getattr(self, name)
            if low < 0 or high > 100:
                errors.append(f"{name} must be within 0-100")

        for name in _PROFILE_FIELDS:
            errors.extend(f"{name}: {e}" for e in getattr(self, name).validate())

        return errors

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BehaviorConfig:
        """Create config from dictionary, ignoring unknown keys."""
        valid_fields = {f for f in cls.__dataclass_fields__}
        filtered = {k: v for k, v in data.items() if k in valid_fields}
        for name in _PROFILE_FIELDS:
            if isinstance(filtered.get(name), dict):
                filtered[name] = MovementProfile.from_dict(filtered[name])
        for name in _RANGE_FIELDS:
            if name in filtered:
                filtered[name] = tuple(filtered[name])
        return cls(**filtered)
