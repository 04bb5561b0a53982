"""
Refocus Pet - Storage Module
Database and best-effort persistence of the pet's stats.
"""

from .database import Base, Database
from .models import KeyValueModel
from .persistence import PersistenceGateway, coerce_stat, normalize_stats

__all__ = [
    "Database",
    "Base",
    "KeyValueModel",
    "PersistenceGateway",
    "coerce_stat",
    "normalize_stats",
]
