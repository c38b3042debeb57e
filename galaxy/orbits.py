"""
Initial orbital velocities.

Bodies must be sorted by increasing distance from the origin. Walking
outward, each body is given the circular speed for the mass enclosed by
all closer bodies (shell theorem), then its own mass joins the total.
The running total makes this pass strictly sequential.
"""

import math
import numpy as np
from numba import njit

from .config import VelocityModel
from .gravity import total_acceleration, halo_params


@njit(cache=True)
def compute_orbital_velocities(
    positions: np.ndarray,
    velocities: np.ndarray,
    masses: np.ndarray,
    G: float,
    central_density: float,
    scale_radius: float,
    use_shell_model: bool,
    enclosed_out: np.ndarray,
):
    """
    Add a tangential orbital velocity to every body after index 0.

    enclosed_out[i] receives the enclosed mass after body i is processed,
    i.e. the sum of masses[0..i].
    """
    n = positions.shape[0]
    if n == 0:
        return

    enclosed = masses[0]
    enclosed_out[0] = enclosed

    for i in range(1, n):
        px = positions[i, 0]
        py = positions[i, 1]
        pz = positions[i, 2]
        r_sq = px * px + py * py + pz * pz

        # Tangent direction: normalize(cross(up, p)) with up = +Y
        tx = pz
        tz = -px
        t_len = math.sqrt(tx * tx + tz * tz)

        if r_sq > 0.0 and t_len > 0.0:
            r = math.sqrt(r_sq)
            if use_shell_model:
                speed = math.sqrt(G * enclosed / r)
            else:
                ax, ay, az = total_acceleration(
                    px, py, pz, enclosed, G, central_density, scale_radius
                )
                speed = math.sqrt(math.sqrt(ax * ax + ay * ay + az * az) * r)

            velocities[i, 0] += speed * tx / t_len
            velocities[i, 2] += speed * tz / t_len

        enclosed += masses[i]
        enclosed_out[i] = enclosed


def initialize_orbital_velocities(bodies, g_constant: float, halo=None,
                                  model: VelocityModel = VelocityModel.ACCELERATION) -> np.ndarray:
    """
    Put bodies on approximately circular orbits, in place.

    Returns the running enclosed-mass table (one entry per body).
    """
    density, scale = halo_params(halo)
    enclosed = np.zeros(len(bodies), dtype=np.float64)
    compute_orbital_velocities(
        bodies.positions,
        bodies.velocities,
        bodies.masses,
        float(g_constant),
        density,
        scale,
        VelocityModel(model) is VelocityModel.SHELL,
        enclosed,
    )
    return enclosed
