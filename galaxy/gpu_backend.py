"""
Compute backend for the per-tick step.

The step has no inter-body dependency, so it maps onto one GPU thread per
body. CUDA (numba.cuda) keeps the body arrays device-resident; otherwise
the Numba parallel CPU kernel in galaxy.gravity is used.

Generation and orbital initialization always run on the CPU; the host
uploads the finished body arrays once and steps them every frame.
"""

import math
import os
import platform
from enum import Enum
from typing import Optional, Tuple


class Backend(Enum):
    CUDA = "cuda"
    CPU = "cpu"


def _probe_cuda() -> Optional[str]:
    """Name and compute capability of the CUDA device, or None."""
    try:
        from numba import cuda
        if not cuda.is_available():
            return None
        device = cuda.get_current_device()
    except Exception as e:
        print(f"[GPU] CUDA probe failed: {e}")
        return None

    name = device.name.decode() if isinstance(device.name, bytes) else device.name
    major, minor = device.compute_capability
    return f"{name} (CC {major}.{minor})"


def detect_backend() -> Tuple[Backend, str]:
    device = _probe_cuda()
    if device is not None:
        return Backend.CUDA, device
    cpu = platform.processor() or "Unknown CPU"
    return Backend.CPU, f"{cpu} ({os.cpu_count() or 1} cores)"


_selected: Optional[Tuple[Backend, str]] = None


def get_backend() -> Tuple[Backend, str]:
    """Detected (or forced) backend; detection runs once per process."""
    global _selected
    if _selected is None:
        _selected = detect_backend()
        print(f"[GPU] Backend: {_selected[0].value} - {_selected[1]}")
    return _selected


def force_backend(backend: Optional[Backend]):
    """Pin the backend, or pass None to detect again on next use."""
    global _selected
    _selected = None if backend is None else (backend, f"Forced: {backend.value}")


# =============================================================================
# CUDA IMPLEMENTATION (NVIDIA)
# =============================================================================

def _init_cuda_kernels():
    """Compile the CUDA step kernel."""
    from numba import cuda

    @cuda.jit(fastmath=True)
    def step_bodies_cuda(positions, velocities, central_mass, dt, G,
                         central_density, scale_radius, n):
        """One thread per body; body 0 (galactic center) is skipped."""
        i = cuda.grid(1)
        if i == 0 or i >= n:
            return

        px = positions[i, 0] - positions[0, 0]
        py = positions[i, 1] - positions[0, 1]
        pz = positions[i, 2] - positions[0, 2]
        r_sq = px * px + py * py + pz * pz

        ax, ay, az = 0.0, 0.0, 0.0
        if r_sq > 0.0:
            r = math.sqrt(r_sq)
            m = central_mass
            # Same halo mass as galaxy.gravity.dark_matter_enclosed_mass
            if central_density != 0.0 and scale_radius != 0.0:
                rs = scale_radius
                m += 4.0 * math.pi * central_density * rs * rs * rs * (
                    math.log(1.0 + r / rs) - r / (r + rs)
                )
            f = -G * m / (r_sq * r)
            ax = px * f
            ay = py * f
            az = pz * f

        velocities[i, 0] += ax * dt
        velocities[i, 1] += ay * dt
        velocities[i, 2] += az * dt

        positions[i, 0] += velocities[i, 0] * dt
        positions[i, 1] += velocities[i, 1] * dt
        positions[i, 2] += velocities[i, 2] * dt

    return {'step': step_bodies_cuda}


class CUDAStepper:
    """Device-resident copy of the body arrays, stepped on the GPU."""

    def __init__(self, bodies, G: float, halo=None):
        from numba import cuda

        self.n = len(bodies)
        self.G = float(G)
        self.central_density = float(halo.central_density) if halo is not None else 0.0
        self.scale_radius = float(halo.scale_radius) if halo is not None else 0.0
        self.central_mass = float(bodies.masses[0]) if self.n > 0 else 0.0

        self.kernels = _init_cuda_kernels()

        # Upload once; the host reads back only when it needs the state
        self.d_positions = cuda.to_device(bodies.positions)
        self.d_velocities = cuda.to_device(bodies.velocities)

        self.threads_per_block = 256
        self.blocks = max(1, (self.n + self.threads_per_block - 1) // self.threads_per_block)

        print(f"[CUDA] Initialized with {self.n:,} bodies")

    def step(self, dt: float):
        """Advance the device arrays by dt."""
        self.kernels['step'][self.blocks, self.threads_per_block](
            self.d_positions, self.d_velocities, self.central_mass, float(dt),
            self.G, self.central_density, self.scale_radius, self.n
        )

    def download(self, bodies):
        """Copy positions and velocities back into the host arrays."""
        self.d_positions.copy_to_host(bodies.positions)
        self.d_velocities.copy_to_host(bodies.velocities)
        return bodies


# =============================================================================
# FACTORY FUNCTION
# =============================================================================

# Smallest population stepped on CUDA unless force_gpu is set
CUDA_MIN_BODIES = 20_000


def create_gpu_stepper(bodies, G: float, halo=None, force_gpu: bool = False):
    """Create a GPU stepper, or None when the CPU path should be used.

    Args:
        bodies: Initialized Bodies (index 0 is the galactic center)
        G: Gravitational constant
        halo: Optional DarkMatterHalo
        force_gpu: If True, use the GPU whenever one is available
    """
    backend, _ = get_backend()
    n = len(bodies)

    if backend == Backend.CUDA:
        if n >= CUDA_MIN_BODIES or force_gpu:
            try:
                return CUDAStepper(bodies, G, halo)
            except Exception as e:
                print(f"[GPU] CUDA init failed, using CPU: {e}")
                return None
        print(f"[GPU] {n:,} bodies below CUDA threshold ({CUDA_MIN_BODIES:,}), using CPU")

    return None
