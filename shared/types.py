"""
Refocus Pet - Shared Types
Plain dataclass records passed between the simulation brain and its hosts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol

from .constants import (
    DEFAULT_VIEWPORT_HEIGHT,
    DEFAULT_VIEWPORT_WIDTH,
    FLOOR_THICKNESS,
    PET_FLOOR_OFFSET,
)


# =============================================================================
# ENUMS
# =============================================================================


class Activity(Enum):
    """What the pet is currently doing."""

    IDLE = "idle"
    EATING = "eating"
    DRINKING = "drinking"
    SLEEPING = "sleeping"


class Desire(Enum):
    """A need the pet can pursue, named after the item that satisfies it."""

    FOOD = "food"
    WATER = "water"
    BED = "bed"

    @property
    def stat(self) -> str:
        """Name of the stat this desire restores."""
        return "energy" if self is Desire.BED else self.value

    @property
    def activity(self) -> Activity:
        """Consuming activity performed at this desire's item."""
        return _DESIRE_ACTIVITIES[self]


_DESIRE_ACTIVITIES: dict[Desire, Activity] = {
    Desire.FOOD: Activity.EATING,
    Desire.WATER: Activity.DRINKING,
    Desire.BED: Activity.SLEEPING,
}


# =============================================================================
# GEOMETRY
# =============================================================================


@dataclass
class ItemTarget:
    """Position an item exposes for navigation (center x, floor y)."""

    x: float
    y: float

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}


@dataclass
class Viewport:
    """Size of the overlay the pet lives in, in pixels."""

    width: float = DEFAULT_VIEWPORT_WIDTH
    height: float = DEFAULT_VIEWPORT_HEIGHT

    @property
    def floor_base(self) -> float:
        """Top of the floor strip."""
        return self.height - FLOOR_THICKNESS

    @property
    def floor_line(self) -> float:
        """Y coordinate the pet's bottom edge rests on."""
        return self.floor_base - PET_FLOOR_OFFSET

    def to_dict(self) -> dict[str, float]:
        return {"width": self.width, "height": self.height}


# =============================================================================
# COLLABORATORS
# =============================================================================


class ItemSource(Protocol):
    """The item stations as seen by the simulation."""

    def get_item_targets(self) -> dict[str, ItemTarget]: ...

    def consume(self, kind: str, amount: float) -> float: ...

    def get_levels(self) -> dict[str, float]: ...


# =============================================================================
# PRESENTATION
# =============================================================================


@dataclass
class PresentationState:
    """
    Everything a renderer needs to draw one frame of the pet.

    Produced by the simulation after every tick. The tooltip text is only
    meaningful while hover is True, but it is always filled in.
    """

    x: float
    y: float
    facing: int
    activity: Activity
    hover: bool
    tooltip: str
    stat_percentages: dict[str, str]
    sleeping: bool
    laser_dot: tuple[float, float] | None = None
    item_levels: dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "x": self.x,
            "y": self.y,
            "facing": self.facing,
            "activity": self.activity.value,
            "hover": self.hover,
            "tooltip": self.tooltip,
            "stat_percentages": dict(self.stat_percentages),
            "sleeping": self.sleeping,
            "laser_dot": list(self.laser_dot) if self.laser_dot else None,
            "item_levels": dict(self.item_levels),
        }
