"""
Body storage.

Bodies are kept as a struct of arrays (one float64 array per attribute)
so the numba kernels can walk them directly. BODY_DTYPE is the packed
per-body record a compute device consumes; to_buffer()/from_buffer()
convert between the two layouts.
"""

from dataclasses import dataclass
from typing import Iterable, List, Tuple

import numpy as np

from .errors import BodyDataError


BODY_DTYPE = np.dtype([
    ("position", np.float32, (3,)),
    ("mass", np.float32),
    ("velocity", np.float32, (3,)),
    ("radius", np.float32),
    ("temperature", np.float32),
    ("luminosity", np.float32),
    ("apparent_radius", np.float32),
    ("apparent_luminosity", np.float32),
])


@dataclass
class Body:
    """A single body record. Index 0 of a population is the galactic center."""
    position: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    velocity: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    mass: float = 0.0
    radius: float = 0.0
    temperature: float = 0.0
    luminosity: float = 0.0
    apparent_radius: float = 0.0
    apparent_luminosity: float = 0.0


_SCALAR_FIELDS = (
    "masses", "radii", "temperatures", "luminosities",
    "apparent_radii", "apparent_luminosities",
)


class Bodies:
    """
    Fixed-size body population.

    Attributes:
        positions: (n, 3) world-space positions
        velocities: (n, 3) velocities
        masses, radii, temperatures, luminosities: (n,) physical attributes
        apparent_radii, apparent_luminosities: (n,) view-only values the host fills
    """

    def __init__(self, positions, velocities, masses, radii, temperatures, luminosities,
                 apparent_radii=None, apparent_luminosities=None):
        self.positions = _as_array(positions, "positions").reshape(-1, 3)
        n = self.positions.shape[0]
        self.velocities = _as_array(velocities, "velocities").reshape(-1, 3)
        self.masses = _as_array(masses, "masses")
        self.radii = _as_array(radii, "radii")
        self.temperatures = _as_array(temperatures, "temperatures")
        self.luminosities = _as_array(luminosities, "luminosities")
        self.apparent_radii = (
            np.zeros(n) if apparent_radii is None else _as_array(apparent_radii, "apparent_radii")
        )
        self.apparent_luminosities = (
            np.zeros(n) if apparent_luminosities is None
            else _as_array(apparent_luminosities, "apparent_luminosities")
        )

        if self.velocities.shape[0] != n:
            raise BodyDataError(
                f"velocities has {self.velocities.shape[0]} rows, expected {n}"
            )
        for name in _SCALAR_FIELDS:
            arr = getattr(self, name)
            if arr.shape != (n,):
                raise BodyDataError(f"{name} has shape {arr.shape}, expected ({n},)")

    @classmethod
    def zeros(cls, n: int) -> "Bodies":
        return cls(
            np.zeros((n, 3)), np.zeros((n, 3)),
            np.zeros(n), np.zeros(n), np.zeros(n), np.zeros(n),
        )

    @classmethod
    def from_records(cls, records: Iterable[Body]) -> "Bodies":
        records = list(records)
        bodies = cls.zeros(len(records))
        for i, rec in enumerate(records):
            bodies.positions[i] = rec.position
            bodies.velocities[i] = rec.velocity
            bodies.masses[i] = rec.mass
            bodies.radii[i] = rec.radius
            bodies.temperatures[i] = rec.temperature
            bodies.luminosities[i] = rec.luminosity
            bodies.apparent_radii[i] = rec.apparent_radius
            bodies.apparent_luminosities[i] = rec.apparent_luminosity
        return bodies

    @classmethod
    def from_buffer(cls, buffer: np.ndarray) -> "Bodies":
        """Unpack a BODY_DTYPE record array."""
        buffer = np.asarray(buffer)
        if buffer.dtype != BODY_DTYPE:
            raise BodyDataError(f"Expected BODY_DTYPE records, got {buffer.dtype}")
        return cls(
            buffer["position"], buffer["velocity"], buffer["mass"],
            buffer["radius"], buffer["temperature"], buffer["luminosity"],
            buffer["apparent_radius"], buffer["apparent_luminosity"],
        )

    def to_buffer(self) -> np.ndarray:
        """Pack into a BODY_DTYPE record array (float32, 48 bytes per body)."""
        buffer = np.zeros(len(self), dtype=BODY_DTYPE)
        buffer["position"] = self.positions
        buffer["mass"] = self.masses
        buffer["velocity"] = self.velocities
        buffer["radius"] = self.radii
        buffer["temperature"] = self.temperatures
        buffer["luminosity"] = self.luminosities
        buffer["apparent_radius"] = self.apparent_radii
        buffer["apparent_luminosity"] = self.apparent_luminosities
        return buffer

    def __len__(self) -> int:
        return self.positions.shape[0]

    def __getitem__(self, i: int) -> Body:
        return Body(
            position=tuple(self.positions[i].tolist()),
            velocity=tuple(self.velocities[i].tolist()),
            mass=float(self.masses[i]),
            radius=float(self.radii[i]),
            temperature=float(self.temperatures[i]),
            luminosity=float(self.luminosities[i]),
            apparent_radius=float(self.apparent_radii[i]),
            apparent_luminosity=float(self.apparent_luminosities[i]),
        )

    def records(self) -> List[Body]:
        return [self[i] for i in range(len(self))]

    def take(self, order) -> "Bodies":
        """New population reordered by the given index array."""
        return Bodies(
            self.positions[order], self.velocities[order], self.masses[order],
            self.radii[order], self.temperatures[order], self.luminosities[order],
            self.apparent_radii[order], self.apparent_luminosities[order],
        )

    def copy(self) -> "Bodies":
        return self.take(np.arange(len(self)))

    def distances_sq(self) -> np.ndarray:
        return np.einsum("ij,ij->i", self.positions, self.positions)

    def sorted_by_distance(self) -> "Bodies":
        """Ascending squared distance from the origin; ties keep their order."""
        return self.take(np.argsort(self.distances_sq(), kind="stable"))

    def validate(self) -> "Bodies":
        """Raise BodyDataError if the population breaks the body invariants."""
        for name in ("positions", "velocities") + _SCALAR_FIELDS:
            if not np.all(np.isfinite(getattr(self, name))):
                raise BodyDataError(f"{name} contains non-finite values")
        if len(self) > 1 and np.any(self.masses[1:] <= 0):
            bad = int(np.argmax(self.masses[1:] <= 0)) + 1
            raise BodyDataError(f"body {bad} has non-positive mass {self.masses[bad]}")
        for name, label in (("radii", "radius"), ("temperatures", "temperature"),
                            ("luminosities", "luminosity")):
            arr = getattr(self, name)
            if np.any(arr < 0):
                bad = int(np.argmax(arr < 0))
                raise BodyDataError(f"body {bad} has negative {label} {arr[bad]}")
        return self

    def __repr__(self) -> str:
        return f"Bodies(n={len(self)})"


def _as_array(values, name: str) -> np.ndarray:
    try:
        return np.ascontiguousarray(values, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise BodyDataError(f"{name} is not numeric: {e}") from e
