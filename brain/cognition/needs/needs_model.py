"""
Refocus Pet - Needs Model
Per-tick decay and regeneration of the pet's four stats.
"""

from __future__ import annotations

from typing import Mapping

from shared.constants import DEFAULT_STATS

from ...config import BehaviorConfig
from .need import Need

STAT_NAMES: tuple[str, ...] = ("energy", "food", "water", "happiness")

# Stats drained faster while chasing the pointer
DRAINED_STATS: tuple[str, ...] = ("energy", "food", "water")


class NeedsModel:
    """
    Holds the pet's energy, food, water and happiness.

    Energy, food and water drain at their own rates, multiplied while the
    pet chases the pointer. Happiness drifts down slowly, except while
    chasing, when it rises instead.
    """

    def __init__(
        self,
        config: BehaviorConfig | None = None,
        initial: Mapping[str, float] | None = None,
    ) -> None:
        """
        Initialize the needs model.

        Args:
            config: Decay rates and drain factor. Defaults to BehaviorConfig().
            initial: Starting values by stat name. Missing stats use defaults.
        """
        self.config = config or BehaviorConfig()
        rates = {
            "energy": self.config.energy_decay_rate,
            "food": self.config.food_decay_rate,
            "water": self.config.water_decay_rate,
            "happiness": self.config.happiness_decay_rate,
        }
        values = dict(DEFAULT_STATS)
        if initial:
            values.update({k: v for k, v in initial.items() if k in STAT_NAMES})

        self.needs: dict[str, Need] = {
            name: Need(name=name, value=values[name], decay_rate=rates[name])
            for name in STAT_NAMES
        }

    def update(self, delta_seconds: float, fast_drain: bool = False) -> None:
        """
        Apply one tick of decay.

        Args:
            delta_seconds: Time elapsed in seconds
            fast_drain: True while the pet is chasing the pointer
        """
        factor = self.config.chase_drain_factor if fast_drain else 1.0
        for name in DRAINED_STATS:
            self.needs[name].decay(delta_seconds, factor)

        happiness = self.needs["happiness"]
        if fast_drain:
            happiness.satisfy(self.config.chase_happiness_gain * delta_seconds)
        else:
            happiness.decay(delta_seconds)

    def get_need(self, name: str) -> Need | None:
        """Get a specific need by name."""
        return self.needs.get(name)

    def __getitem__(self, name: str) -> float:
        return self.needs[name].value

    def satisfy(self, name: str, amount: float) -> None:
        """Raise a stat by a positive amount, clamped."""
        self.needs[name].satisfy(amount)

    def lowest(self, names: tuple[str, ...]) -> tuple[str, float]:
        """
        Find the lowest of the given stats.

        Ties go to the name listed first.
        """
        name = min(names, key=lambda n: self.needs[n].value)
        return name, self.needs[name].value

    def snapshot(self) -> dict[str, float]:
        """Flat {stat: value} record for persistence and display."""
        return {name: need.value for name, need in self.needs.items()}

    def restore(self, snapshot: Mapping[str, float]) -> None:
        """Overwrite stats from a snapshot, ignoring unknown names."""
        for name, value in snapshot.items():
            if name in self.needs:
                self.needs[name].set(value)

    def __str__(self) -> str:
        return ", ".join(str(need) for need in self.needs.values())
