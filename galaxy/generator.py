"""
Procedural galaxy generation.

Builds the initial body population: a fixed central mass at index 0 and
stars spread through a flattened sphere, pulled toward logarithmic spiral
arms, with masses drawn from the Kroupa IMF and temperature, radius and
luminosity derived from mass. The result is sorted by distance from the
origin, which the orbital velocity pass depends on.
"""

from typing import Optional, Tuple

import numpy as np

from .body import Bodies
from .config import GalaxyConfig
from .curve import Curve
from .imf import kroupa
from .orbits import initialize_orbital_velocities
from .random_source import RandomSource
from .sampling import InverseSampler, cumulative, inverse_lerp, lerp, sigmoid


HISTOGRAM_BINS = 10


def build_mass_sampler(config: GalaxyConfig) -> InverseSampler:
    """Normalized Kroupa CDF over the configured mass range."""
    reference_mass = config.reference_mass
    cdf = cumulative(
        lambda m: kroupa(m, reference_mass),
        config.mass_min,
        config.mass_max,
        config.mass_integrate_step,
        True,
    )
    return InverseSampler(cdf)


def mass_histogram(bodies: Bodies, mass_range: Tuple[float, float],
                   bins: int = HISTOGRAM_BINS) -> Tuple[np.ndarray, float]:
    """
    Count stellar masses (body 0 excluded) in equal-width bins over mass_range.

    Returns (counts, mean stellar mass). A mass equal to the range maximum
    falls in the last bin.
    """
    stars = bodies.masses[1:]
    if stars.size == 0:
        return np.zeros(bins, dtype=np.int64), 0.0

    idx = np.floor(bins * inverse_lerp(mass_range[0], mass_range[1], stars)).astype(np.int64)
    idx = np.clip(idx, 0, bins - 1)
    counts = np.bincount(idx, minlength=bins)
    return counts, float(stars.sum() / stars.size)


def _evaluate_remap(remap, magnitudes: np.ndarray) -> np.ndarray:
    if isinstance(remap, Curve):
        return remap(magnitudes)
    return np.fromiter((remap(float(m)) for m in magnitudes), dtype=np.float64,
                       count=magnitudes.size)


class GalaxyGenerator:
    """Generates a galaxy from a GalaxyConfig and a random source."""

    def __init__(self, config: Optional[GalaxyConfig] = None, random_source=None):
        self.config = config or GalaxyConfig()
        self.random = random_source if random_source is not None else RandomSource()
        self.enclosed_mass: Optional[np.ndarray] = None

    def generate(self) -> Bodies:
        """Center + stars, sorted by ascending distance from the origin."""
        cfg = self.config.validate()
        n = cfg.count

        bodies = Bodies.zeros(n)
        if n == 0:
            return bodies

        # Galactic center: fixed mass at the origin, no radiative attributes
        bodies.masses[0] = cfg.central_mass

        m = n - 1
        if m > 0:
            mass_sampler = build_mass_sampler(cfg)
            rs = self.random

            positions = self._disk_positions(m)
            velocities = cfg.max_velocity_offset * rs.inside_unit_sphere(m)

            masses = lerp(cfg.mass_min, cfg.mass_max, mass_sampler.sample(rs.uniform(m)))

            temperatures = cfg.reference_temperature * np.sqrt(masses / cfg.reference_mass)
            temperatures *= rs.range(1.0 - cfg.temperature_variability,
                                     1.0 + cfg.temperature_variability, m)

            radii = cfg.reference_radius * np.power(masses / cfg.reference_mass, 0.8)
            radii *= rs.range(1.0 - cfg.radius_variability, 1.0 + cfg.radius_variability, m)

            luminosities = radii ** 2 * (temperatures * cfg.luminosity_temperature_scale) ** 4

            bodies.positions[1:] = positions
            bodies.velocities[1:] = velocities
            bodies.masses[1:] = masses
            bodies.temperatures[1:] = temperatures
            bodies.radii[1:] = radii
            bodies.luminosities[1:] = luminosities

        return bodies.sorted_by_distance()

    def _disk_positions(self, m: int) -> np.ndarray:
        """Positions for stars 1..m: remapped sphere, spiral blend, depth scale."""
        cfg = self.config
        rs = self.random

        positions = rs.inside_unit_sphere(m)
        magnitudes = np.linalg.norm(positions, axis=1)
        positions *= (cfg.radius * _evaluate_remap(cfg.radius_remap, magnitudes))[:, None]

        if cfg.arm_count > 0:
            arm_offset = rs.range(0.0, cfg.max_arm_angle, m)
            spiral_radius = cfg.spiral_start_radius * np.exp(arm_offset * cfg.spiral_looseness)
            arm_offset += np.radians(
                rs.range(-cfg.spiral_angular_scatter, cfg.spiral_angular_scatter, m)
            )

            # Star i (i >= 1) belongs to arm i mod arm_count
            arm_index = np.arange(1, m + 1) % cfg.arm_count
            arm_angle = 2.0 * np.pi * arm_index / cfg.arm_count
            core_smoothing = 2.0 * sigmoid(cfg.spiral_core_smoothing * arm_offset) - 1.0

            # Rotating (cos a, 0, sin a) by arm_angle about +Y gives angle a - arm_angle
            phi = arm_offset - arm_angle
            scatter = cfg.spiral_radius_scatter * rs.inside_unit_sphere(m)
            ux = spiral_radius * core_smoothing * np.cos(phi) + scatter[:, 0]
            uz = spiral_radius * core_smoothing * np.sin(phi) + scatter[:, 2]

            positions[:, 0] = lerp(positions[:, 0], ux, cfg.spiral_bias)
            positions[:, 2] = lerp(positions[:, 2], uz, cfg.spiral_bias)

        positions *= np.asarray(cfg.depth_scale, dtype=np.float64)
        return positions

    def build(self, initial_bodies=None) -> Bodies:
        """
        Full initialization: generation, orbital velocities, mass diagnostics.

        A non-empty initial_bodies population is returned unchanged and
        skips all of the above.
        """
        if initial_bodies is not None and len(initial_bodies) > 0:
            if not isinstance(initial_bodies, Bodies):
                initial_bodies = Bodies.from_records(initial_bodies)
            if self.config.validate_initial_bodies:
                initial_bodies.validate()
            return initial_bodies

        cfg = self.config
        bodies = self.generate()
        self.enclosed_mass = initialize_orbital_velocities(
            bodies, cfg.g_constant, cfg.dark_matter, cfg.velocity_model
        )

        if len(bodies) > 0:
            counts, mean_mass = mass_histogram(bodies, cfg.mass_range)
            for i, count in enumerate(counts):
                print(f"[Galaxy] HIST[{i}] = {count}")
            print(f"[Galaxy] Average mass: {mean_mass:.1f}")

        return bodies


def generate_galaxy(config: Optional[GalaxyConfig] = None, random_source=None,
                    initial_bodies=None) -> Bodies:
    """Build an initialized galaxy (see GalaxyGenerator.build)."""
    return GalaxyGenerator(config, random_source).build(initial_bodies)
