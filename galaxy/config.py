"""Galaxy generation and simulation parameters."""

import math
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Callable, Optional, Tuple

from .curve import Curve
from .errors import GalaxyConfigError
from .gravity import dark_matter_enclosed_mass


class VelocityModel(Enum):
    """How initial orbital speed is derived from enclosed mass."""
    SHELL = "shell"                # v = sqrt(G * M_enc / r)
    ACCELERATION = "acceleration"  # v = sqrt(|a(r)| * r), includes the halo


@dataclass(frozen=True)
class DarkMatterHalo:
    """NFW-like halo. Disabled while either parameter is zero."""
    central_density: float = 0.0
    scale_radius: float = 0.0

    @property
    def enabled(self) -> bool:
        return self.central_density > 0.0 and self.scale_radius > 0.0

    def enclosed_mass(self, r: float) -> float:
        return dark_matter_enclosed_mass(float(r), self.central_density, self.scale_radius)


@dataclass
class GalaxyConfig:
    # Galaxy
    count: int = 1_000
    depth_scale: Tuple[float, float, float] = (1.0, 0.2, 1.0)
    radius: float = 1_500.0
    max_velocity_offset: float = 30.0
    central_mass: float = 800_000_000.0

    # Stars
    mass_range: Tuple[float, float] = (1_000.0, 500_000.0)
    reference_mass: float = 10_000.0
    mass_integrate_step: float = 1.0
    reference_temperature: float = 5778.0
    temperature_variability: float = 0.05
    reference_radius: float = 0.05
    radius_variability: float = 0.05
    luminosity_temperature_scale: float = 1.0
    radius_remap: Callable = field(default_factory=Curve.linear)

    # Spiral arms
    arm_count: int = 2
    spiral_start_radius: float = 30.0
    spiral_looseness: float = 0.3
    spiral_bias: float = 0.5
    spiral_radius_scatter: float = 8.0
    spiral_angular_scatter: float = 15.0  # degrees
    spiral_core_smoothing: float = 10.0

    # Physics
    g_constant: float = 100.0
    dark_matter: DarkMatterHalo = field(default_factory=DarkMatterHalo)
    velocity_model: VelocityModel = VelocityModel.ACCELERATION
    max_dt: Optional[float] = None

    validate_initial_bodies: bool = False

    @property
    def mass_min(self) -> float:
        return self.mass_range[0]

    @property
    def mass_max(self) -> float:
        return self.mass_range[1]

    @property
    def max_arm_angle(self) -> float:
        """Spiral angle reached at the generation radius."""
        return math.log(self.radius / self.spiral_start_radius) / self.spiral_looseness

    @classmethod
    def from_dict(cls, values: dict) -> "GalaxyConfig":
        """Build a config from a plain dict (config module or preset)."""
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise GalaxyConfigError(f"Unknown galaxy config keys: {', '.join(sorted(unknown))}")

        kwargs = dict(values)
        for key in ("depth_scale", "mass_range"):
            if key in kwargs:
                kwargs[key] = tuple(float(v) for v in kwargs[key])
        if isinstance(kwargs.get("radius_remap"), (list, tuple)):
            kwargs["radius_remap"] = Curve(kwargs["radius_remap"])
        if isinstance(kwargs.get("dark_matter"), dict):
            kwargs["dark_matter"] = DarkMatterHalo(**kwargs["dark_matter"])
        if isinstance(kwargs.get("velocity_model"), str):
            try:
                kwargs["velocity_model"] = VelocityModel(kwargs["velocity_model"])
            except ValueError:
                raise GalaxyConfigError(f"Unknown velocity model: {kwargs['velocity_model']!r}") from None

        return cls(**kwargs)

    def copy(self, **changes) -> "GalaxyConfig":
        return replace(self, **changes)

    def validate(self) -> "GalaxyConfig":
        """Raise GalaxyConfigError on the first invalid parameter."""
        if self.count < 0:
            raise GalaxyConfigError(f"count must be >= 0, got {self.count}")
        if len(self.depth_scale) != 3:
            raise GalaxyConfigError(f"depth_scale needs 3 components, got {self.depth_scale!r}")
        if len(self.mass_range) != 2:
            raise GalaxyConfigError(f"mass_range needs (min, max), got {self.mass_range!r}")
        if self.mass_min <= 0:
            raise GalaxyConfigError(f"mass_range min must be positive, got {self.mass_min}")
        if self.mass_min >= self.mass_max:
            raise GalaxyConfigError(
                f"mass_range is empty: min {self.mass_min} >= max {self.mass_max}"
            )
        if not self.mass_integrate_step > 0:
            raise GalaxyConfigError(
                f"mass_integrate_step must be positive, got {self.mass_integrate_step}"
            )
        if self.reference_mass <= 0:
            raise GalaxyConfigError(f"reference_mass must be positive, got {self.reference_mass}")
        if self.radius < 0:
            raise GalaxyConfigError(f"radius must be >= 0, got {self.radius}")
        for name in ("temperature_variability", "radius_variability", "spiral_bias"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise GalaxyConfigError(f"{name} must be within [0, 1], got {value}")
        if self.arm_count < 0:
            raise GalaxyConfigError(f"arm_count must be >= 0, got {self.arm_count}")
        if self.arm_count > 0:
            if self.spiral_start_radius <= 0:
                raise GalaxyConfigError(
                    f"spiral_start_radius must be positive with arms, got {self.spiral_start_radius}"
                )
            if self.spiral_looseness <= 0:
                raise GalaxyConfigError(
                    f"spiral_looseness must be positive with arms, got {self.spiral_looseness}"
                )
            if self.radius <= 0:
                raise GalaxyConfigError("radius must be positive when spiral arms are configured")
        if self.dark_matter.central_density < 0 or self.dark_matter.scale_radius < 0:
            raise GalaxyConfigError(f"dark matter parameters must be >= 0, got {self.dark_matter}")
        if self.max_dt is not None and self.max_dt <= 0:
            raise GalaxyConfigError(f"max_dt must be positive, got {self.max_dt}")
        if not callable(self.radius_remap):
            raise GalaxyConfigError("radius_remap must be callable")
        if isinstance(self.radius_remap, Curve) and not self.radius_remap.is_monotonic():
            raise GalaxyConfigError(f"radius_remap must be non-decreasing, got {self.radius_remap!r}")
        return self
