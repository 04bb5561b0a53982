"""
Refocus Pet - Needs Module
Bounded stats that drain over time and drive the pet's desires.
"""

from .need import Need, clamp_stat
from .needs_model import DRAINED_STATS, STAT_NAMES, NeedsModel

__all__ = [
    "Need",
    "NeedsModel",
    "STAT_NAMES",
    "DRAINED_STATS",
    "clamp_stat",
]
