"""
Refocus Pet - Emulator Configuration
Centralized configuration for the headless pet host.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from shared.constants import (
    DEFAULT_EMULATOR_HOST,
    DEFAULT_EMULATOR_PORT,
    DEFAULT_FPS,
    DEFAULT_VIEWPORT_HEIGHT,
    DEFAULT_VIEWPORT_WIDTH,
    STATS_STORAGE_KEY,
)


@dataclass
class EmulatorConfig:
    """Configuration for the emulator with sensible defaults."""

    # Web server
    host: str = DEFAULT_EMULATOR_HOST
    port: int = DEFAULT_EMULATOR_PORT

    # Timing
    fps: int = DEFAULT_FPS  # tick loop frequency; dt is still measured

    # Overlay
    viewport_width: float = DEFAULT_VIEWPORT_WIDTH
    viewport_height: float = DEFAULT_VIEWPORT_HEIGHT

    # Persistence
    db_path: str | None = None  # None = ~/.refocus-pet/pet.db
    storage_key: str = STATS_STORAGE_KEY
    persistence_enabled: bool = True

    def __post_init__(self) -> None:
        self.port = int(os.getenv("REFOCUS_PET_PORT", self.port))
        self.fps = int(os.getenv("REFOCUS_PET_FPS", self.fps))
        self.db_path = os.getenv("REFOCUS_PET_DB_PATH", self.db_path)

    @property
    def tick_interval_s(self) -> float:
        """Target time between ticks in seconds."""
        return 1.0 / self.fps

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors."""
        errors = []

        if not 0 < self.port < 65536:
            errors.append("port must be between 1 and 65535")
        if self.fps <= 0:
            errors.append("fps must be positive")
        if self.viewport_width <= 0:
            errors.append("viewport_width must be positive")
        if self.viewport_height <= 0:
            errors.append("viewport_height must be positive")
        if not self.storage_key:
            errors.append("storage_key must not be empty")

        return errors

    @classmethod
    def from_dict(cls, data: dict) -> EmulatorConfig:
        """Create config from dictionary, ignoring unknown keys."""
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_fields}
        return cls(**filtered)
