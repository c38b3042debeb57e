"""
Tests for GalaxySimulation: stepping, time step cap, reset, diagnostics.
"""

import numpy as np
import pytest

from galaxy import Bodies, Body, GalaxySimulation, RandomSource


@pytest.fixture
def simulation(small_config):
    return GalaxySimulation(small_config, seed=42)


class TestGalaxySimulation:

    def test_builds_population(self, simulation, small_config):
        assert simulation.num_bodies == small_config.count
        assert simulation.time == 0.0
        assert not simulation.use_gpu
        np.testing.assert_allclose(simulation.enclosed_mass, np.cumsum(simulation.bodies.masses))

    def test_update_advances_time(self, simulation):
        before = simulation.bodies.positions.copy()
        simulation.update(0.01)
        simulation.update(0.01)
        assert simulation.time == pytest.approx(0.02)
        assert simulation.step_count == 2
        assert not np.array_equal(simulation.bodies.positions[1:], before[1:])
        np.testing.assert_array_equal(simulation.bodies.positions[0], before[0])

    def test_max_dt_caps_step(self, small_config):
        sim = GalaxySimulation(small_config.copy(max_dt=0.005), seed=1)
        sim.update(1.0)
        assert sim.time == pytest.approx(0.005)

    def test_same_seed_same_galaxy(self, small_config):
        a = GalaxySimulation(small_config, seed=9)
        b = GalaxySimulation(small_config, random_source=RandomSource(seed=9))
        np.testing.assert_array_equal(a.bodies.positions, b.bodies.positions)

    def test_reset_regenerates(self, simulation):
        simulation.update(0.01)
        simulation.reset()
        assert simulation.time == 0.0
        assert simulation.step_count == 0
        assert np.all(np.diff(simulation.bodies.distances_sq()) >= 0)


class TestSuppliedBodies:

    @pytest.fixture
    def prebuilt(self):
        return Bodies.from_records([
            Body(mass=1_000.0),
            Body(position=(10.0, 0.0, 0.0), velocity=(0.0, 0.0, -10.0), mass=1.0),
        ])

    def test_uses_population_as_is(self, small_config, prebuilt):
        sim = GalaxySimulation(small_config, initial_bodies=prebuilt)
        assert sim.bodies is prebuilt
        assert sim.num_bodies == 2
        assert sim.enclosed_mass is None

    def test_reset_restores_initial_state(self, small_config, prebuilt):
        sim = GalaxySimulation(small_config, initial_bodies=prebuilt)
        sim.update(0.01)
        assert sim.bodies.positions[1, 2] != 0.0
        sim.reset()
        assert sim.bodies[1].position == (10.0, 0.0, 0.0)
        assert sim.bodies[1].velocity == (0.0, 0.0, -10.0)


class TestDiagnostics:

    def test_report(self, simulation, small_config):
        report = simulation.diagnostics()
        assert report["count"] == small_config.count
        assert sum(report["mass_histogram"]) == small_config.count - 1
        assert report["total_mass"] == pytest.approx(simulation.bodies.masses.sum())
        assert report["mean_stellar_mass"] == pytest.approx(simulation.bodies.masses[1:].mean())
        assert report["max_radius"] > 0

    def test_empty_galaxy(self, small_config):
        sim = GalaxySimulation(small_config.copy(count=0), seed=0)
        sim.update(0.1)
        report = sim.diagnostics()
        assert report["count"] == 0
        assert report["max_radius"] == 0.0
