"""
Tests for the database layer and stats persistence.
"""

import json
from unittest.mock import MagicMock

import pytest

from brain.storage import (
    Database,
    KeyValueModel,
    PersistenceGateway,
    coerce_stat,
    normalize_stats,
)
from shared.constants import STATS_STORAGE_KEY


@pytest.fixture
def database(tmp_path):
    db = Database(tmp_path / "state" / "pet.db")
    yield db
    db.close()


@pytest.fixture
def persistence(database):
    return PersistenceGateway(database)


def write_raw(database, value, key=STATS_STORAGE_KEY):
    if not database.is_initialized:
        database.initialize()
    with database.session() as session:
        session.merge(KeyValueModel(key=key, value=value))
        session.commit()


def broken_database():
    db = MagicMock()
    db.is_initialized = True
    db.session.side_effect = RuntimeError("disk unavailable")
    return db


class TestDatabase:
    """Tests for Database."""

    def test_initialize_creates_file(self, tmp_path):
        db = Database(tmp_path / "nested" / "dir" / "pet.db")
        assert not db.is_initialized

        db.initialize()

        assert db.is_initialized
        assert db.db_path.exists()
        db.close()
        assert not db.is_initialized

    def test_session_requires_initialize(self, tmp_path):
        db = Database(tmp_path / "pet.db")
        with pytest.raises(RuntimeError):
            with db.session():
                pass


class TestCoercion:
    """Tests for stat coercion."""

    def test_valid_values(self):
        assert coerce_stat(55, 0.0) == 55.0
        assert coerce_stat("61.5", 0.0) == 61.5

    def test_clamped_values(self):
        assert coerce_stat(150, 0.0) == 100.0
        assert coerce_stat(-4, 50.0) == 0.0

    def test_invalid_values_use_default(self):
        for value in (None, "abc", float("nan"), float("inf"), True, [1]):
            assert coerce_stat(value, 42.0) == 42.0

    def test_normalize_fills_defaults(self):
        """Test missing fields default rather than becoming zero."""
        assert normalize_stats({"energy": 10}) == {
            "energy": 10.0,
            "food": 80.0,
            "water": 80.0,
            "happiness": 70.0,
        }


class TestPersistenceGateway:
    """Tests for PersistenceGateway."""

    def test_load_empty(self, persistence):
        assert persistence.load() is None

    def test_round_trip(self, persistence):
        """Test a saved snapshot loads back unchanged."""
        stats = {"energy": 55.0, "food": 61.0, "water": 72.0, "happiness": 40.0}

        assert persistence.save(stats)
        assert persistence.load() == stats

    def test_round_trip_new_gateway(self, database, tmp_path):
        """Test snapshots survive a fresh database handle."""
        stats = {"energy": 55.0, "food": 61.0, "water": 72.0, "happiness": 40.0}
        PersistenceGateway(database).save(stats)
        database.close()

        reopened = Database(database.db_path)
        try:
            assert PersistenceGateway(reopened).load() == stats
        finally:
            reopened.close()

    def test_save_overwrites(self, persistence):
        persistence.save({"energy": 1.0, "food": 2.0, "water": 3.0, "happiness": 4.0})
        persistence.save({"energy": 5.0, "food": 6.0, "water": 7.0, "happiness": 8.0})
        assert persistence.load()["energy"] == 5.0

    def test_stored_as_json(self, persistence, database):
        persistence.save({"energy": 55.0, "food": 61.0, "water": 72.0, "happiness": 40.0})
        with database.session() as session:
            row = session.get(KeyValueModel, STATS_STORAGE_KEY)
            assert json.loads(row.value)["water"] == 72.0

    def test_malformed_json(self, persistence, database):
        """Test unparseable data loads as nothing."""
        write_raw(database, "{not json")
        assert persistence.load() is None

    def test_non_object_json(self, persistence, database):
        write_raw(database, "[1, 2, 3]")
        assert persistence.load() is None

    def test_partial_and_non_finite_fields(self, persistence, database):
        """Test bad fields default while good fields are kept."""
        write_raw(database, '{"energy": NaN, "food": "abc", "water": 150, "happiness": 12}')
        assert persistence.load() == {
            "energy": 90.0,
            "food": 80.0,
            "water": 100.0,
            "happiness": 12.0,
        }

    def test_custom_storage_key(self, database):
        first = PersistenceGateway(database, storage_key="a")
        second = PersistenceGateway(database, storage_key="b")
        first.save({"energy": 1.0, "food": 1.0, "water": 1.0, "happiness": 1.0})
        assert second.load() is None

    def test_save_failure_is_swallowed(self):
        """Test storage errors never propagate out of save."""
        gateway = PersistenceGateway(broken_database())
        assert gateway.save({"energy": 1.0}) is False

    def test_load_failure_is_swallowed(self):
        gateway = PersistenceGateway(broken_database())
        assert gateway.load() is None

    def test_close_releases_database(self, persistence, database):
        """Test close disposes the engine and the next load reopens it."""
        stats = {"energy": 55.0, "food": 61.0, "water": 72.0, "happiness": 40.0}
        persistence.save(stats)

        persistence.close()

        assert not database.is_initialized
        assert persistence.load() == stats
        assert database.is_initialized
