"""
Refocus Pet - Need Base Class
Represents a single bounded stat (energy, food, water, happiness).
"""

from dataclasses import dataclass

from shared.constants import NEED_MAX, NEED_MIN


def clamp_stat(value: float) -> float:
    """Clamp a stat value to the 0-100 range."""
    return max(NEED_MIN, min(NEED_MAX, value))


@dataclass
class Need:
    """
    A single need that decays over time and can be restored by activities.

    Values range from 0 (empty) to 100 (full). Every change goes through
    clamping so the value can never leave that range.
    """

    name: str
    value: float = NEED_MAX
    decay_rate: float = 0.0  # Points lost per second

    def __post_init__(self) -> None:
        self.value = clamp_stat(float(self.value))

    def decay(self, delta_seconds: float, factor: float = 1.0) -> None:
        """
        Decay the need over time.

        Args:
            delta_seconds: Time elapsed in seconds
            factor: Multiplier applied to the decay rate
        """
        self.value = clamp_stat(self.value - self.decay_rate * factor * delta_seconds)

    def satisfy(self, amount: float) -> None:
        """Increase the need value by a positive amount."""
        self.value = clamp_stat(self.value + abs(amount))

    def set(self, value: float) -> None:
        """Set the value directly, clamped."""
        self.value = clamp_stat(float(value))

    def is_critical(self, threshold: float) -> bool:
        """Check if the need is strictly below a critical floor."""
        return self.value < threshold

    def is_satisfied(self, threshold: float) -> bool:
        """Check if the need has reached a satisfaction threshold."""
        return self.value >= threshold

    def __str__(self) -> str:
        return f"{self.name}: {self.value:.1f}/100"
