"""
Refocus Pet - Motion
Steering-based movement integration.
"""

from .controller import (
    CHASE_PROFILE,
    WALK_PROFILE,
    MovementController,
    MovementProfile,
    MovementResult,
)

__all__ = [
    "MovementController",
    "MovementProfile",
    "MovementResult",
    "WALK_PROFILE",
    "CHASE_PROFILE",
]
