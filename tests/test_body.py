"""
Tests for body storage and the packed record layout.
"""

import numpy as np
import pytest

from galaxy import BODY_DTYPE, Bodies, Body, BodyDataError


class TestBodies:

    def test_zeros(self):
        bodies = Bodies.zeros(4)
        assert len(bodies) == 4
        assert bodies.positions.shape == (4, 3)
        assert bodies.masses.dtype == np.float64

    def test_getitem_returns_record(self):
        bodies = Bodies.from_records([Body(position=(1.0, 2.0, 3.0), mass=5.0, temperature=100.0)])
        body = bodies[0]
        assert isinstance(body, Body)
        assert body.position == (1.0, 2.0, 3.0)
        assert body.mass == 5.0
        assert body.temperature == 100.0

    def test_records(self):
        records = [Body(mass=1.0), Body(position=(1.0, 0.0, 0.0), mass=2.0)]
        assert Bodies.from_records(records).records() == records

    def test_take_reorders_every_field(self):
        bodies = Bodies.zeros(3)
        bodies.masses[:] = [1.0, 2.0, 3.0]
        bodies.radii[:] = [10.0, 20.0, 30.0]
        taken = bodies.take(np.array([2, 0, 1]))
        np.testing.assert_array_equal(taken.masses, [3.0, 1.0, 2.0])
        np.testing.assert_array_equal(taken.radii, [30.0, 10.0, 20.0])

    def test_copy_is_independent(self):
        bodies = Bodies.zeros(2)
        clone = bodies.copy()
        clone.positions[1] = 9.0
        np.testing.assert_array_equal(bodies.positions, 0.0)

    def test_sort_is_stable_for_ties(self):
        bodies = Bodies.zeros(4)
        bodies.positions[:] = [(3, 0, 0), (0, 1, 0), (1, 0, 0), (0, 0, 1)]
        bodies.masses[:] = [1.0, 2.0, 3.0, 4.0]
        ordered = bodies.sorted_by_distance()
        np.testing.assert_array_equal(ordered.masses, [2.0, 3.0, 4.0, 1.0])

    def test_shape_mismatch_raises(self):
        with pytest.raises(BodyDataError, match="masses"):
            Bodies(np.zeros((2, 3)), np.zeros((2, 3)), np.zeros(3), np.zeros(2), np.zeros(2), np.zeros(2))

    def test_non_numeric_raises(self):
        with pytest.raises(BodyDataError, match="positions"):
            Bodies([["a", "b", "c"]], np.zeros((1, 3)), [1.0], [0.0], [0.0], [0.0])


class TestValidate:

    def test_generated_style_population_is_valid(self):
        bodies = Bodies.from_records([Body(mass=1e6), Body(position=(1.0, 0.0, 0.0), mass=2.0)])
        assert bodies.validate() is bodies

    def test_center_mass_not_checked(self):
        Bodies.from_records([Body(mass=0.0), Body(mass=1.0)]).validate()

    def test_non_positive_star_mass(self):
        bodies = Bodies.from_records([Body(mass=1.0), Body(mass=0.0)])
        with pytest.raises(BodyDataError, match="body 1 has non-positive mass"):
            bodies.validate()

    def test_negative_temperature(self):
        bodies = Bodies.from_records([Body(mass=1.0), Body(mass=1.0, temperature=-5.0)])
        with pytest.raises(BodyDataError, match="negative temperature"):
            bodies.validate()

    def test_non_finite_values(self):
        bodies = Bodies.from_records([Body(mass=1.0), Body(mass=1.0)])
        bodies.velocities[1, 0] = np.nan
        with pytest.raises(BodyDataError, match="velocities"):
            bodies.validate()


class TestPackedBuffer:

    def test_record_layout(self):
        assert BODY_DTYPE.itemsize == 48
        assert BODY_DTYPE.names[:3] == ("position", "mass", "velocity")

    def test_buffer_preserves_bodies(self):
        bodies = Bodies.from_records([
            Body(position=(1.5, -2.0, 3.25), velocity=(0.5, 0.0, -1.0), mass=8.0,
                 radius=0.25, temperature=5778.0, luminosity=12.0,
                 apparent_radius=1.0, apparent_luminosity=0.5),
        ])
        buffer = bodies.to_buffer()
        assert buffer.dtype == BODY_DTYPE
        assert buffer.nbytes == 48

        restored = Bodies.from_buffer(buffer)
        assert restored[0] == bodies[0]

    def test_wrong_dtype_rejected(self):
        with pytest.raises(BodyDataError):
            Bodies.from_buffer(np.zeros(3))
