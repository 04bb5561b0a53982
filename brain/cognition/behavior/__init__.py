"""
Refocus Pet - Behavior System
Desire arbitration, idle roaming and the activity state machine.
"""

from .arbiter import CRITICAL_ORDER, DOMINANT_ORDER, DesireArbiter
from .roaming import ROAM_POOLS, IdleRoamer
from .state_machine import BehaviorStateMachine

__all__ = [
    "DesireArbiter",
    "IdleRoamer",
    "BehaviorStateMachine",
    "CRITICAL_ORDER",
    "DOMINANT_ORDER",
    "ROAM_POOLS",
]
