"""
Tests for the per-frame pet simulation.
"""

import random
from unittest.mock import MagicMock

import pytest

from brain import BehaviorConfig, PetSimulation
from brain.simulation import format_percent
from brain.storage import PersistenceGateway
from shared.types import Activity, Desire


@pytest.fixture
def simulation(items, viewport):
    return PetSimulation(items=items, viewport=viewport, rng=random.Random(5))


def set_stats(sim, **stats):
    sim.pet.needs.restore(stats)


def enable_chase(sim, pointer=(500.0, 300.0)):
    sim.set_chasing_laser(True)
    sim.set_laser_active(True)
    sim.update_pointer(*pointer)


class TestInitialization:
    """Tests for simulation setup."""

    def test_defaults_without_storage(self, simulation, viewport):
        pet = simulation.pet
        assert pet.stats == {"energy": 90.0, "food": 80.0, "water": 80.0, "happiness": 70.0}
        assert pet.x == 220.0
        assert pet.y == viewport.floor_line
        assert pet.activity is Activity.IDLE
        assert pet.idle_target_x is not None

    def test_restores_saved_stats(self, items, viewport, make_gateway):
        saved = {"energy": 55.0, "food": 61.0, "water": 72.0, "happiness": 40.0}
        sim = PetSimulation(items=items, gateway=make_gateway(saved), viewport=viewport)
        assert sim.pet.stats == saved

    def test_initial_presentation(self, simulation):
        """Test the tooltip text before the first tick."""
        state = simulation.presentation()
        assert state.tooltip == "Energy: 90% | Food: 80% | Water: 80% | Happiness: 70%"
        assert not state.hover
        assert not state.sleeping
        assert state.laser_dot is None


class TestTick:
    """Tests for PetSimulation.tick."""

    def test_baseline_decay(self, simulation):
        simulation.tick(1.0)
        stats = simulation.pet.stats
        assert stats["energy"] == pytest.approx(89.2)
        assert stats["food"] == pytest.approx(79.5)
        assert stats["water"] == pytest.approx(79.4)
        assert stats["happiness"] == pytest.approx(69.95)

    def test_critical_starvation_locks_bed(self, simulation):
        """Test low energy takes a bed lock with a high release target."""
        set_stats(simulation, energy=15.0, food=50.0, water=50.0)

        simulation.tick(0.016)

        assert simulation.pet.locked_desire is Desire.BED
        assert 92 <= simulation.pet.locked_target_value <= 99

    def test_arrival_through_tick(self, make_items, viewport, item_targets):
        """Test the pet starts eating on the tick it comes within range."""
        item_targets["food"].x = 108.0
        sim = PetSimulation(items=make_items(item_targets), viewport=viewport)
        set_stats(sim, food=50.0)
        sim.pet.position[0] = 100.0

        sim.tick(0.1)

        assert sim.pet.locked_desire is Desire.FOOD
        assert sim.pet.activity is Activity.EATING

    def test_satisfied_release(self, simulation, viewport):
        """Test a water lock releases once water reaches its target."""
        pet = simulation.pet
        pet.position[0] = 144.0
        pet.locked_desire = Desire.WATER
        pet.locked_target_value = 85

        for _ in range(10):
            simulation.tick(0.1)
            if pet.needs["water"] >= 85:
                break
            assert pet.activity is Activity.DRINKING

        assert pet.locked_desire is None
        assert pet.activity is Activity.IDLE
        assert 2.0 <= pet.idle_target_x <= viewport.width - 26.0

    def test_pointer_chase_drains_faster(self, simulation):
        """Test chasing triples drain, raises happiness and keeps the lock."""
        pet = simulation.pet
        pet.locked_desire = Desire.FOOD
        pet.locked_target_value = 85
        enable_chase(simulation)

        simulation.tick(1.0)

        assert pet.needs["energy"] == pytest.approx(87.6)
        assert pet.needs["food"] == pytest.approx(78.5)
        assert pet.needs["water"] == pytest.approx(78.2)
        assert pet.needs["happiness"] == pytest.approx(70.8)
        assert pet.desire is None
        assert pet.locked_desire is Desire.FOOD

    def test_chase_requires_toggle_and_flag(self, simulation):
        simulation.set_chasing_laser(True)
        assert not simulation.is_pointer_chase_active()
        simulation.set_laser_active(True)
        assert simulation.is_pointer_chase_active()
        simulation.set_chasing_laser(False)
        assert not simulation.is_pointer_chase_active()

    def test_lock_resumes_after_chase(self, simulation):
        pet = simulation.pet
        pet.locked_desire = Desire.FOOD
        pet.locked_target_value = 85
        enable_chase(simulation)
        simulation.tick(0.1)

        simulation.set_laser_active(False)
        simulation.tick(0.1)

        assert pet.desire is Desire.FOOD

    def test_laser_dot_while_chasing(self, simulation):
        enable_chase(simulation, pointer=(400.0, 250.0))
        state = simulation.tick(0.016)
        assert state.laser_dot == (400.0, 250.0)

    def test_sleeping_flag(self, simulation):
        pet = simulation.pet
        set_stats(simulation, energy=30.0)
        pet.position[0] = 264.0

        state = simulation.tick(0.1)

        assert state.activity is Activity.SLEEPING
        assert state.sleeping

    def test_hover(self, simulation):
        """Test hover follows the pointer over the pet's bounding box."""
        pet = simulation.pet
        simulation.update_pointer(pet.x + 5, pet.y - 5)
        assert simulation.tick(0.0).hover

        simulation.update_pointer(pet.x + 100, pet.y - 5)
        assert not simulation.tick(0.0).hover

    @pytest.mark.parametrize("dt", [-1.0, float("nan"), float("inf")])
    def test_invalid_dt_is_zero(self, simulation, dt):
        before = simulation.pet.stats
        x = simulation.pet.x

        simulation.tick(dt)

        assert simulation.pet.stats == before
        assert simulation.pet.x == x

    def test_invariants_over_long_run(self, items, viewport):
        """Test stats, position and speed stay bounded under random input."""
        rng = random.Random(11)
        sim = PetSimulation(items=items, viewport=viewport, rng=random.Random(12))
        chase = BehaviorConfig().chase_profile

        for _ in range(3000):
            if rng.random() < 0.01:
                sim.set_chasing_laser(rng.random() < 0.5)
                sim.set_laser_active(True)
            sim.update_pointer(rng.uniform(-100, 900), rng.uniform(-100, 700))
            sim.tick(rng.uniform(0.0, 0.5))

            pet = sim.pet
            for value in pet.stats.values():
                assert 0.0 <= value <= 100.0
            assert 2.0 <= pet.x <= viewport.width - 26.0
            assert pet.height <= pet.y <= viewport.floor_line
            assert abs(pet.velocity[0]) <= chase.max_speed_x
            assert abs(pet.velocity[1]) <= chase.max_speed_y


class TestPresentation:
    """Tests for the presentation record."""

    def test_format_percent(self):
        assert format_percent(49.5) == "50%"
        assert format_percent(49.4) == "49%"
        assert format_percent(0.4) == "0%"
        assert format_percent(100.0) == "100%"

    def test_tooltip_rounds(self, simulation):
        set_stats(simulation, energy=12.5, food=7.49, water=99.6, happiness=0.0)
        assert simulation.presentation().tooltip == (
            "Energy: 13% | Food: 7% | Water: 100% | Happiness: 0%"
        )

    def test_item_levels(self, simulation):
        assert simulation.presentation().item_levels == {
            "food": 100.0,
            "water": 100.0,
            "bed": 100.0,
        }

    def test_to_dict(self, simulation):
        data = simulation.presentation().to_dict()
        assert data["activity"] == "idle"
        assert data["stat_percentages"]["energy"] == "90%"


class TestPersistenceHooks:
    """Tests for autosave and host lifecycle hooks."""

    def test_autosave_every_second(self, items, viewport, gateway):
        sim = PetSimulation(items=items, gateway=gateway, viewport=viewport)

        sim.tick(0.5)
        assert gateway.saves == []
        sim.tick(0.5)
        assert len(gateway.saves) == 1
        sim.tick(0.4)
        assert len(gateway.saves) == 1

    def test_visibility_hidden_saves(self, items, viewport, gateway):
        sim = PetSimulation(items=items, gateway=gateway, viewport=viewport)

        sim.on_visibility_change(False)
        assert gateway.saves == []
        sim.on_visibility_change(True)
        assert gateway.saves == [sim.pet.stats]

    def test_shutdown_saves(self, items, viewport, gateway):
        sim = PetSimulation(items=items, gateway=gateway, viewport=viewport)
        sim.shutdown()
        assert len(gateway.saves) == 1

    def test_storage_failure_does_not_break_tick(self, items, viewport):
        """Test a broken database never stops the simulation."""
        database = MagicMock()
        database.is_initialized = True
        database.session.side_effect = OSError("read-only file system")
        sim = PetSimulation(
            items=items, gateway=PersistenceGateway(database), viewport=viewport
        )

        for _ in range(5):
            sim.tick(0.5)

        assert sim.pet.stats["energy"] == pytest.approx(88.0)
        assert sim.save() is False

    def test_save_without_gateway(self, simulation):
        assert simulation.save() is False


class TestResize:
    """Tests for viewport changes."""

    def test_resize_clamps_pet(self, simulation):
        simulation.pet.position[0] = 700.0
        simulation.resize(100, 300)

        assert simulation.pet.x == 74.0
        assert simulation.pet.y <= simulation.viewport.floor_line

    def test_walks_on_new_floor(self, simulation):
        simulation.resize(800, 300)
        simulation.tick(0.1)
        assert simulation.pet.y == simulation.viewport.floor_line
