"""Keyframe curve used to remap normalized generation radius."""

from typing import Iterable, Tuple

import numpy as np


class Curve:
    """
    Piecewise-linear curve over sorted (time, value) keys.

    Evaluation outside the key range clamps to the first/last value.
    Works on scalars and arrays, so a Curve can be used anywhere a
    float -> float remap function is accepted.
    """

    def __init__(self, keys: Iterable[Tuple[float, float]]):
        keys = sorted((float(t), float(v)) for t, v in keys)
        if not keys:
            raise ValueError("Curve needs at least one key")

        self.times = np.array([t for t, _ in keys], dtype=np.float64)
        self.values = np.array([v for _, v in keys], dtype=np.float64)

        if np.any(np.diff(self.times) <= 0):
            raise ValueError("Curve key times must be unique")

    @classmethod
    def linear(cls, start: float = 0.0, end: float = 1.0) -> "Curve":
        """Straight line from (0, start) to (1, end)."""
        return cls([(0.0, start), (1.0, end)])

    @property
    def keys(self):
        return list(zip(self.times.tolist(), self.values.tolist()))

    def evaluate(self, t):
        result = np.interp(t, self.times, self.values)
        if np.ndim(result) == 0:
            return float(result)
        return result

    __call__ = evaluate

    def is_monotonic(self) -> bool:
        return bool(np.all(np.diff(self.values) >= 0))

    def __repr__(self) -> str:
        return f"Curve({self.keys})"
