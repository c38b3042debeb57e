"""View-only body attributes: apparent size/brightness and star colors."""

import numpy as np
from numba import njit, prange


@njit(parallel=True, cache=True)
def compute_apparent(
    radii: np.ndarray,
    luminosities: np.ndarray,
    apparent_radii: np.ndarray,
    apparent_luminosities: np.ndarray,
    radius_mul: float,
    radius_exp: float,
    luminosity_mul: float,
    luminosity_exp: float,
    num_bodies: int
):
    """apparent = mul * value ** exp, for radius and luminosity."""
    for i in prange(num_bodies):
        apparent_radii[i] = radius_mul * radii[i] ** radius_exp
        apparent_luminosities[i] = luminosity_mul * luminosities[i] ** luminosity_exp


def fill_apparent(bodies, settings: dict):
    """Fill bodies.apparent_radii / apparent_luminosities in place."""
    compute_apparent(
        bodies.radii,
        bodies.luminosities,
        bodies.apparent_radii,
        bodies.apparent_luminosities,
        float(settings["radius_mul"]),
        float(settings["radius_exp"]),
        float(settings["luminosity_mul"]),
        float(settings["luminosity_exp"]),
        len(bodies),
    )
    return bodies


@njit(parallel=True, fastmath=True, cache=True)
def compute_colors_by_temperature(
    temperatures: np.ndarray,
    apparent_luminosities: np.ndarray,
    colors: np.ndarray,
    num_bodies: int,
    max_luminosity: float,
    min_brightness: float
):
    """Star color from surface temperature, scaled by relative brightness.

    Color distribution:
    - < 3500K: Red-orange
    - 3500-5000K: Red-orange → Orange-yellow
    - 5000-6500K: Orange-yellow → Warm white (Sun-like)
    - 6500-10000K: Warm white → Blue-white
    - > 10000K: Blue-white → Blue (saturates at 30000K)
    """
    for i in prange(num_bodies):
        t = temperatures[i]

        if t < 3500.0:
            r, g, b = 1.0, 0.45, 0.25
        elif t < 5000.0:
            s = (t - 3500.0) / 1500.0
            r = 1.0
            g = 0.45 + 0.30 * s
            b = 0.25 + 0.25 * s
        elif t < 6500.0:
            s = (t - 5000.0) / 1500.0
            r = 1.0
            g = 0.75 + 0.20 * s
            b = 0.50 + 0.35 * s
        elif t < 10000.0:
            s = (t - 6500.0) / 3500.0
            r = 1.0 - 0.15 * s
            g = 0.95 - 0.05 * s
            b = 0.85 + 0.15 * s
        else:
            s = min(1.0, (t - 10000.0) / 20000.0)
            r = 0.85 - 0.25 * s
            g = 0.90 - 0.20 * s
            b = 1.0

        brightness = min_brightness
        if max_luminosity > 0.0:
            brightness += (1.0 - min_brightness) * min(1.0, apparent_luminosities[i] / max_luminosity)

        colors[i, 0] = r * brightness
        colors[i, 1] = g * brightness
        colors[i, 2] = b * brightness


def star_colors(bodies, min_brightness: float) -> np.ndarray:
    """(n, 3) float32 colors for a body population."""
    colors = np.zeros((len(bodies), 3), dtype=np.float32)
    max_luminosity = float(bodies.apparent_luminosities.max()) if len(bodies) else 0.0
    compute_colors_by_temperature(
        bodies.temperatures, bodies.apparent_luminosities, colors,
        len(bodies), max_luminosity, float(min_brightness)
    )
    return colors


def size_classes(apparent_radii: np.ndarray, percentiles=(70.0, 95.0)) -> np.ndarray:
    """Bucket bodies into 0/1/2 (small/medium/large) by apparent radius."""
    if apparent_radii.size == 0:
        return np.zeros(0, dtype=np.int64)
    thresholds = np.percentile(apparent_radii, percentiles)
    return np.digitize(apparent_radii, thresholds, right=True)
