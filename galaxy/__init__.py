"""Procedural spiral galaxy generation and central-mass gravity simulation."""

from .body import Bodies, Body, BODY_DTYPE
from .config import GalaxyConfig, DarkMatterHalo, VelocityModel
from .curve import Curve
from .errors import GalaxyConfigError, BodyDataError
from .generator import GalaxyGenerator, generate_galaxy, build_mass_sampler, mass_histogram
from .gravity import acceleration, step
from .imf import kroupa
from .orbits import initialize_orbital_velocities
from .random_source import RandomSource, SequenceRandomSource
from .sampling import InverseSampler, cumulative
from .simulation import GalaxySimulation

__all__ = [
    "Bodies",
    "Body",
    "BODY_DTYPE",
    "GalaxyConfig",
    "DarkMatterHalo",
    "VelocityModel",
    "Curve",
    "GalaxyConfigError",
    "BodyDataError",
    "GalaxyGenerator",
    "generate_galaxy",
    "build_mass_sampler",
    "mass_histogram",
    "acceleration",
    "step",
    "kroupa",
    "initialize_orbital_velocities",
    "RandomSource",
    "SequenceRandomSource",
    "InverseSampler",
    "cumulative",
    "GalaxySimulation",
]
