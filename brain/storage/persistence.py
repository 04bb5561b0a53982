"""
Refocus Pet - Stats Persistence
Best-effort load/save of the pet's stat snapshot.
"""

from __future__ import annotations

import json
import logging
import math
from typing import Any, Mapping

from shared.constants import DEFAULT_STATS, STATS_STORAGE_KEY

from ..cognition.needs import STAT_NAMES, clamp_stat
from .database import Database
from .models import KeyValueModel

logger = logging.getLogger(__name__)


def coerce_stat(value: Any, default: float) -> float:
    """
    Turn a stored value into a valid stat.

    Missing, non-numeric and non-finite values fall back to default;
    everything else is clamped to 0-100.
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return clamp_stat(number)


def normalize_stats(data: Mapping[str, Any]) -> dict[str, float]:
    """Build a complete {energy, food, water, happiness} record from raw data."""
    return {name: coerce_stat(data.get(name), DEFAULT_STATS[name]) for name in STAT_NAMES}


class PersistenceGateway:
    """
    Saves and loads stat snapshots under a single storage key.

    Storage is best effort: any failure is logged and swallowed. A failed
    load returns None so the caller keeps its defaults, and a failed save
    returns False and leaves whatever was stored before.
    """

    def __init__(self, database: Database, storage_key: str = STATS_STORAGE_KEY) -> None:
        """
        Initialize the gateway.

        Args:
            database: Database to store snapshots in. Initialized on first use.
            storage_key: Key the snapshot is stored under
        """
        self._database = database
        self._storage_key = storage_key

    def load(self) -> dict[str, float] | None:
        """
        Load the stored snapshot.

        Returns:
            A complete, clamped stats record, or None if nothing usable is stored
        """
        try:
            raw = self._read_raw()
            if not raw:
                return None
            data = json.loads(raw)
        except Exception as e:
            logger.warning(f"Failed to load pet stats: {e}")
            return None

        if not isinstance(data, dict):
            logger.warning(f"Ignoring stored pet stats of type {type(data).__name__}")
            return None
        return normalize_stats(data)

    def save(self, stats: Mapping[str, float]) -> bool:
        """
        Store a snapshot of the given stats.

        Returns:
            True if the snapshot was written
        """
        payload = {
            name: coerce_stat(stats.get(name), DEFAULT_STATS[name]) for name in STAT_NAMES
        }
        try:
            self._write_raw(json.dumps(payload))
        except Exception as e:
            logger.warning(f"Failed to save pet stats: {e}")
            return False
        return True

    def close(self) -> None:
        """Release the database connection. The next load or save reopens it."""
        self._database.close()

    def _ensure_initialized(self) -> None:
        if not self._database.is_initialized:
            self._database.initialize()

    def _read_raw(self) -> str | None:
        self._ensure_initialized()
        with self._database.session() as session:
            row = session.get(KeyValueModel, self._storage_key)
            return row.value if row is not None else None

    def _write_raw(self, value: str) -> None:
        self._ensure_initialized()
        with self._database.session() as session:
            row = session.get(KeyValueModel, self._storage_key)
            if row is None:
                session.add(KeyValueModel(key=self._storage_key, value=value))
            else:
                row.value = value
            session.commit()
