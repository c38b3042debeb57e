"""
Pytest fixtures for the galaxy test suite.
"""

import pytest

from galaxy import GalaxyConfig, GalaxyGenerator, RandomSource, SequenceRandomSource


@pytest.fixture
def small_config():
    """Small but fully featured galaxy: two arms, linear remap, no halo."""
    return GalaxyConfig(
        count=200,
        mass_range=(1_000.0, 50_000.0),
        reference_mass=10_000.0,
        mass_integrate_step=10.0,
    )


@pytest.fixture
def random_source():
    return RandomSource(seed=1234)


@pytest.fixture
def sequence_source():
    """Deterministic source; no value maps a sphere point onto the origin."""
    return SequenceRandomSource([0.9, 0.15, 0.7, 0.35, 0.05, 0.6, 0.8, 0.25, 0.45, 0.95, 0.1])


@pytest.fixture
def generated(small_config, random_source):
    """Generated (not yet orbit-initialized) bodies for small_config."""
    return GalaxyGenerator(small_config, random_source).generate()
