"""
Gravity model and per-tick integration.

Acceleration combines two closed-form terms: a point mass at the galactic
center (the enclosed mass) and an optional NFW-like dark-matter halo.
There is no pairwise N-body force; every body is independent during a
tick, so the step kernel runs in parallel across bodies.
"""

import math
import numpy as np
from numba import njit, prange


# ============================================================================
# ACCELERATION TERMS
# ============================================================================

@njit(cache=True)
def dark_matter_enclosed_mass(r: float, central_density: float, scale_radius: float) -> float:
    """Halo mass inside radius r: 4 pi rho0 rs^3 (ln(1 + r/rs) - r/(r + rs))."""
    if r <= 0.0 or central_density == 0.0 or scale_radius == 0.0:
        return 0.0
    rs = scale_radius
    return 4.0 * math.pi * central_density * rs * rs * rs * (
        math.log(1.0 + r / rs) - r / (r + rs)
    )


@njit(cache=True)
def central_acceleration(px: float, py: float, pz: float,
                         enclosed_mass: float, G: float) -> tuple:
    """Point-mass pull toward the origin: -p / |p|^3 * G * M. Zero at the origin."""
    r_sq = px * px + py * py + pz * pz
    if r_sq == 0.0:
        return 0.0, 0.0, 0.0
    r = math.sqrt(r_sq)
    f = -G * enclosed_mass / (r_sq * r)
    return px * f, py * f, pz * f


@njit(cache=True)
def dark_matter_acceleration(px: float, py: float, pz: float, G: float,
                             central_density: float, scale_radius: float) -> tuple:
    """Halo pull: -p/|p| * G * M_halo(r) / r^2. Zero at the origin or when disabled."""
    r_sq = px * px + py * py + pz * pz
    if r_sq == 0.0 or central_density == 0.0 or scale_radius == 0.0:
        return 0.0, 0.0, 0.0
    r = math.sqrt(r_sq)
    m = dark_matter_enclosed_mass(r, central_density, scale_radius)
    f = -G * m / (r_sq * r)
    return px * f, py * f, pz * f


@njit(cache=True)
def total_acceleration(px: float, py: float, pz: float, enclosed_mass: float, G: float,
                       central_density: float, scale_radius: float) -> tuple:
    ax, ay, az = central_acceleration(px, py, pz, enclosed_mass, G)
    hx, hy, hz = dark_matter_acceleration(px, py, pz, G, central_density, scale_radius)
    return ax + hx, ay + hy, az + hz


def acceleration(position, enclosed_mass: float, g_constant: float, halo=None) -> np.ndarray:
    """Acceleration vector at position (relative to the galactic center)."""
    density, scale = halo_params(halo)
    px, py, pz = (float(c) for c in position)
    return np.array(
        total_acceleration(px, py, pz, float(enclosed_mass), float(g_constant), density, scale)
    )


def halo_params(halo) -> tuple:
    if halo is None:
        return 0.0, 0.0
    return float(halo.central_density), float(halo.scale_radius)


# ============================================================================
# INTEGRATION
# ============================================================================

@njit(parallel=True, fastmath=True, cache=True)
def step_bodies(
    positions: np.ndarray,
    velocities: np.ndarray,
    masses: np.ndarray,
    dt: float,
    G: float,
    central_density: float,
    scale_radius: float,
    num_bodies: int,
):
    """
    Semi-implicit Euler step for every body except index 0.

    Body 0 is the galactic center: it supplies the central mass and stays
    fixed. Other bodies are pulled toward its position.
    """
    if num_bodies == 0:
        return

    cx = positions[0, 0]
    cy = positions[0, 1]
    cz = positions[0, 2]
    central_mass = masses[0]

    for i in prange(1, num_bodies):
        ax, ay, az = total_acceleration(
            positions[i, 0] - cx,
            positions[i, 1] - cy,
            positions[i, 2] - cz,
            central_mass, G, central_density, scale_radius
        )

        velocities[i, 0] += ax * dt
        velocities[i, 1] += ay * dt
        velocities[i, 2] += az * dt

        positions[i, 0] += velocities[i, 0] * dt
        positions[i, 1] += velocities[i, 1] * dt
        positions[i, 2] += velocities[i, 2] * dt


def step(bodies, dt: float, g_constant: float, halo=None):
    """Advance bodies in place by dt and return them."""
    density, scale = halo_params(halo)
    step_bodies(
        bodies.positions,
        bodies.velocities,
        bodies.masses,
        float(dt),
        float(g_constant),
        density,
        scale,
        len(bodies),
    )
    return bodies
