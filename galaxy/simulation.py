"""
Galaxy simulation state.

GalaxySimulation owns one body population for the lifetime of a run:
it builds the population once (generated or supplied), then advances
positions and velocities every tick. The caller holds the instance and
passes it wherever the state is needed.
"""

from typing import Optional

import numpy as np

from .body import Bodies
from .config import GalaxyConfig
from .generator import GalaxyGenerator, mass_histogram
from .gravity import step, step_bodies
from .random_source import RandomSource


class GalaxySimulation:
    """
    Spiral galaxy around a fixed central mass.

    Steps run on the CPU (Numba parallel) unless use_gpu is set and a
    CUDA device is available.
    """

    def __init__(self, config: Optional[GalaxyConfig] = None, initial_bodies=None,
                 random_source=None, seed: Optional[int] = None, use_gpu: bool = False):
        self.config = (config or GalaxyConfig()).validate()
        self.random = random_source if random_source is not None else RandomSource(seed)

        self._initial_bodies = initial_bodies
        self._initial_snapshot = None
        if initial_bodies is not None and len(initial_bodies) > 0 and isinstance(initial_bodies, Bodies):
            self._initial_snapshot = initial_bodies.copy()

        self.time = 0.0
        self.step_count = 0
        self.enclosed_mass: Optional[np.ndarray] = None

        self._init_bodies(initial_bodies)

        self._gpu_stepper = None
        self._use_gpu = False
        self._host_stale = False
        if use_gpu:
            self._init_gpu_backend()
        else:
            self._warmup_numba()

        print(f"[Sim] Initialized {self.num_bodies:,} bodies")

    def _init_bodies(self, initial_bodies):
        generator = GalaxyGenerator(self.config, self.random)
        self._bodies = generator.build(initial_bodies)
        self.enclosed_mass = generator.enclosed_mass

    def _init_gpu_backend(self):
        """Try to move the body arrays onto a GPU."""
        from .gpu_backend import create_gpu_stepper

        self._gpu_stepper = create_gpu_stepper(
            self._bodies, self.config.g_constant, self.config.dark_matter
        )
        self._use_gpu = self._gpu_stepper is not None
        if self._use_gpu:
            print("[Sim] GPU acceleration enabled")
        else:
            print("[Sim] Using CPU backend (Numba parallel)")
            self._warmup_numba()

    def _warmup_numba(self):
        """Pre-compile the step kernel with small arrays."""
        n = 4
        pos = np.random.rand(n, 3) * 10
        vel = np.zeros((n, 3))
        mass = np.ones(n)
        step_bodies(pos, vel, mass, 0.01, 1.0, 0.0, 0.0, n)

    @property
    def num_bodies(self) -> int:
        return len(self._bodies)

    @property
    def use_gpu(self) -> bool:
        return self._use_gpu

    @property
    def bodies(self) -> Bodies:
        """Current body state (pulled back from the GPU when needed)."""
        if self._host_stale:
            self._gpu_stepper.download(self._bodies)
            self._host_stale = False
        return self._bodies

    def update(self, dt: float):
        """Advance the simulation one tick."""
        if self.config.max_dt is not None:
            dt = min(dt, self.config.max_dt)

        if self._use_gpu:
            self._gpu_stepper.step(dt)
            self._host_stale = True
        else:
            step(self._bodies, dt, self.config.g_constant, self.config.dark_matter)

        self.time += dt
        self.step_count += 1

    def reset(self):
        """Rebuild the population (new draws for a generated galaxy)."""
        initial = self._initial_bodies
        if self._initial_snapshot is not None:
            initial = self._initial_snapshot.copy()
        self._init_bodies(initial)
        self.time = 0.0
        self.step_count = 0
        self._host_stale = False
        if self._use_gpu:
            self._init_gpu_backend()

    def diagnostics(self) -> dict:
        """Generation sanity checks and current extent."""
        bodies = self.bodies
        counts, mean_mass = mass_histogram(bodies, self.config.mass_range)
        distances = np.sqrt(bodies.distances_sq())
        return {
            "count": len(bodies),
            "time": self.time,
            "steps": self.step_count,
            "mass_histogram": counts.tolist(),
            "mean_stellar_mass": mean_mass,
            "total_mass": float(bodies.masses.sum()),
            "max_radius": float(distances.max()) if len(bodies) else 0.0,
        }
