"""
Galaxy Presets Library
======================

Pre-configured galaxies. Each preset is a dict of GalaxyConfig overrides
merged over config.galaxy.GALAXY, plus a name and description.

Categories:
- SPIRAL: Armed disk galaxies
- ELLIPTICAL: Armless, thick galaxies
- DARK_MATTER: Galaxies with a dark-matter halo
- TINY: Small populations for testing
"""

from typing import Dict, List, Optional, Tuple

from config import galaxy as config


PRESETS: Dict[str, dict] = {}

# -----------------------------------------------------------------------------
# SPIRAL
# -----------------------------------------------------------------------------

PRESETS["milky_way"] = {
    "name": "Milky Way",
    "description": "Two-armed spiral with the base parameters",
    "category": "SPIRAL",
    "overrides": {},
}

PRESETS["grand_design"] = {
    "name": "Grand Design",
    "description": "Four tightly wound, well defined arms",
    "category": "SPIRAL",
    "overrides": {
        "count": 40_000,
        "arm_count": 4,
        "spiral_looseness": 0.2,
        "spiral_bias": 0.8,
        "spiral_radius_scatter": 5.0,
        "spiral_angular_scatter": 8.0,
    },
}

PRESETS["flocculent"] = {
    "name": "Flocculent",
    "description": "Loose, patchy arms with heavy scatter",
    "category": "SPIRAL",
    "overrides": {
        "arm_count": 3,
        "spiral_looseness": 0.5,
        "spiral_bias": 0.35,
        "spiral_radius_scatter": 40.0,
        "spiral_angular_scatter": 35.0,
    },
}

# -----------------------------------------------------------------------------
# ELLIPTICAL
# -----------------------------------------------------------------------------

PRESETS["elliptical"] = {
    "name": "Elliptical",
    "description": "No arms, thick ellipsoid",
    "category": "ELLIPTICAL",
    "overrides": {
        "arm_count": 0,
        "depth_scale": (1.0, 0.6, 0.8),
        "radius_remap": [(0.0, 0.0), (0.5, 0.2), (1.0, 1.0)],
    },
}

# -----------------------------------------------------------------------------
# DARK MATTER
# -----------------------------------------------------------------------------

PRESETS["dark_halo"] = {
    "name": "Dark Halo",
    "description": "Spiral held together by an NFW-like halo",
    "category": "DARK_MATTER",
    "overrides": {
        "central_mass": 200_000_000.0,
        "dark_matter": {"central_density": 2_000.0, "scale_radius": 600.0},
        "velocity_model": "acceleration",
    },
}

PRESETS["shell_orbits"] = {
    "name": "Shell Orbits",
    "description": "Orbits from enclosed mass only (shell model, no halo)",
    "category": "DARK_MATTER",
    "overrides": {
        "velocity_model": "shell",
    },
}

# -----------------------------------------------------------------------------
# TINY
# -----------------------------------------------------------------------------

PRESETS["tiny"] = {
    "name": "Tiny Galaxy",
    "description": "Very small galaxy for testing",
    "category": "TINY",
    "overrides": {
        "count": 500,
        "mass_range": (1_000.0, 50_000.0),
        "mass_integrate_step": 10.0,
    },
}


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================

CATEGORY_ORDER = ["TINY", "SPIRAL", "ELLIPTICAL", "DARK_MATTER"]


def get_preset_list() -> List[Tuple[str, dict]]:
    """Get list of all presets sorted by category."""
    return sorted(
        PRESETS.items(),
        key=lambda x: (CATEGORY_ORDER.index(x[1]["category"]) if x[1]["category"] in CATEGORY_ORDER else 99, x[0])
    )


def print_preset_menu():
    """Print formatted preset list."""
    current_category = None

    print("\n" + "=" * 60)
    print("  GALAXY PRESETS")
    print("=" * 60)

    for key, preset in get_preset_list():
        if preset["category"] != current_category:
            current_category = preset["category"]
            print(f"\n  {current_category}")
            print(f"{'─' * 60}")
        count = preset["overrides"].get("count", config.GALAXY["count"])
        print(f"  {key:<14} {preset['name']:<16} {count:>7,} bodies")
        print(f"  {'':<14} {preset['description']}")

    print("=" * 60)


def get_preset_config(key: str) -> Optional[dict]:
    """GalaxyConfig values for a preset: base GALAXY dict with overrides applied."""
    if key not in PRESETS:
        return None

    values = dict(config.GALAXY)
    overrides = PRESETS[key]["overrides"]
    if "dark_matter" in overrides:
        values["dark_matter"] = {**values.get("dark_matter", {}), **overrides["dark_matter"]}
    values.update({k: v for k, v in overrides.items() if k != "dark_matter"})
    return values
