"""
Refocus Pet - Brain
Needs, desire arbitration, activity state machine and movement for the pet.
"""

from .config import BehaviorConfig
from .pet import Pet
from .simulation import PetSimulation, SimulationContext

__all__ = [
    "BehaviorConfig",
    "Pet",
    "PetSimulation",
    "SimulationContext",
]
