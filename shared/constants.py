"""
Refocus Pet - Shared Constants
Defaults used by both the simulation brain and the emulator.
"""

# Persistence
STATS_STORAGE_KEY = "refocus_pet_stats_v1"
AUTOSAVE_INTERVAL_S = 1.0  # seconds of simulated time between snapshots

# Needs System
NEED_MIN = 0.0
NEED_MAX = 100.0
DEFAULT_STATS: dict[str, float] = {
    "energy": 90.0,
    "food": 80.0,
    "water": 80.0,
    "happiness": 70.0,
}

# Pet geometry (pixels)
PET_WIDTH = 24
PET_HEIGHT = 18
FLOOR_THICKNESS = 2  # floor base sits this far above the viewport bottom
PET_FLOOR_OFFSET = 1  # pet rests 1px above the floor base
VIEWPORT_EDGE_MARGIN = 2

# Item layout (pixels)
ITEM_SPRITE_WIDTH = 64
ITEM_BASE_X = 22
ITEM_GAP = 90
BED_EXTRA_GAP = 30

# Default viewport
DEFAULT_VIEWPORT_WIDTH = 1280
DEFAULT_VIEWPORT_HEIGHT = 720
DEFAULT_START_X = 220.0

# Emulator
DEFAULT_EMULATOR_HOST = "0.0.0.0"
DEFAULT_EMULATOR_PORT = 8080
DEFAULT_FPS = 60
