"""
Random number sources used by galaxy generation.

Generation only needs two kinds of draws: uniform scalars in [0, 1) and
uniform points inside the unit sphere. Anything providing uniform(),
range() and inside_unit_sphere() with the same signatures can be
passed to the generator.
"""

import itertools
from typing import Iterable, Optional

import numpy as np


class RandomSource:
    """numpy Generator backed random source."""

    def __init__(self, seed: Optional[int] = None, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def uniform(self, size=None):
        """Uniform draw(s) in [0, 1)."""
        return self.rng.random(size)

    def range(self, low: float, high: float, size=None):
        """Uniform draw(s) in [low, high)."""
        return low + (high - low) * self.uniform(size)

    def inside_unit_sphere(self, size=None) -> np.ndarray:
        """Uniform point(s) inside the unit ball, shape (3,) or (size, 3)."""
        n = 1 if size is None else size
        direction = self.rng.normal(0.0, 1.0, (n, 3))
        norms = np.linalg.norm(direction, axis=1, keepdims=True)
        norms[norms == 0.0] = 1.0
        radius = np.cbrt(self.rng.random((n, 1)))
        points = direction / norms * radius
        if size is None:
            return points[0]
        return points


class SequenceRandomSource:
    """
    Replays a fixed cycle of uniform values.

    Sphere points are built from three consecutive values mapped to
    [-1, 1] and scaled by 1/sqrt(3), so they always lie inside the unit
    sphere. Used for deterministic scenarios and tests.
    """

    def __init__(self, values: Iterable[float]):
        values = [float(v) for v in values]
        if not values:
            raise ValueError("SequenceRandomSource needs at least one value")
        self.values = values
        self._cycle = itertools.cycle(values)

    def _take(self, n: int) -> np.ndarray:
        return np.fromiter(itertools.islice(self._cycle, n), dtype=np.float64, count=n)

    def uniform(self, size=None):
        if size is None:
            return float(self._take(1)[0])
        return self._take(size)

    def range(self, low: float, high: float, size=None):
        return low + (high - low) * self.uniform(size)

    def inside_unit_sphere(self, size=None) -> np.ndarray:
        n = 1 if size is None else size
        points = (self._take(3 * n).reshape(n, 3) * 2.0 - 1.0) / np.sqrt(3.0)
        if size is None:
            return points[0]
        return points
