"""
Discrete inverse-transform sampling.

cumulative() turns a density function into a cumulative table and
InverseSampler maps a uniform draw to a position inside that table.
"""

from typing import Callable, List

import numpy as np


def lerp(a, b, t):
    """Linear interpolation, unclamped."""
    return a + (b - a) * t


def inverse_lerp(a, b, value):
    """Fraction of the way value lies between a and b, clamped to [0, 1]."""
    if a == b:
        return 0.0
    return np.clip((value - a) / (b - a), 0.0, 1.0)


def sigmoid(x):
    return 1.0 / (1.0 + np.exp(-x))


def cumulative(
    density_func: Callable[[float], float],
    a: float,
    b: float,
    step: float,
    normalize: bool,
) -> List[float]:
    """
    Left-Riemann running sum of density_func over [a, b).

    x walks from a in increments of step (b excluded). Each sample adds
    density_func(x) to the running sum, which is appended to the table.
    The sum is not multiplied by step: step only controls the sample
    density. With normalize, every entry is divided by the final sum.

    Returns an empty list when a >= b.
    """
    if not step > 0:
        raise ValueError(f"Integration step must be positive, got {step!r}")

    cdf = []
    total = 0.0
    x = a
    while x < b:
        total += density_func(x)
        cdf.append(total)
        x += step

    if normalize and cdf:
        cdf = [value / total for value in cdf]

    return cdf


class InverseSampler:
    """
    Maps a uniform t in [0, 1] to a normalized index into a CDF table.

    sample(t) binary-searches the table for t: an exact match uses the
    matching index, otherwise the insertion point (the first entry greater
    than t). The result is index / len(table), a position within the
    table rather than a value; callers remap it with lerp(min, max, y).
    Resolution is bounded by the table density.
    """

    def __init__(self, cdf):
        self.cdf = np.asarray(cdf, dtype=np.float64)
        if self.cdf.ndim != 1 or self.cdf.size == 0:
            raise ValueError("InverseSampler needs a non-empty 1-D CDF table")

    def __len__(self) -> int:
        return self.cdf.size

    def sample(self, t):
        """Sample a scalar or an array of uniform draws."""
        index = np.searchsorted(self.cdf, t, side="left")
        if np.ndim(index) == 0:
            return int(index) / self.cdf.size
        return index / self.cdf.size

