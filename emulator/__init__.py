"""
Refocus Pet - Emulator
Headless host for the pet: item stations, frame loop and web interface.
"""

from .app import EmulatorServer, create_app
from .config import EmulatorConfig
from .items import ItemRegistry, ItemState
from .virtual_pet import VirtualPet

__all__ = [
    "create_app",
    "EmulatorServer",
    "EmulatorConfig",
    "ItemRegistry",
    "ItemState",
    "VirtualPet",
]
