"""Configuration for the spiral galaxy simulation viewer."""

# =============================================================================
# GALAXY - overrides for galaxy.GalaxyConfig (unset keys keep its defaults)
# =============================================================================

GALAXY = {
    "count": 20_000,                       # Bodies including the galactic center
    "depth_scale": (1.0, 0.2, 1.0),        # Flatten Y into a disk
    "radius": 1_500.0,                     # Generation radius
    "max_velocity_offset": 30.0,           # Random velocity jitter before orbits
    "central_mass": 800_000_000.0,         # Galactic center mass

    # Stars
    "mass_range": (1_000.0, 500_000.0),
    "reference_mass": 10_000.0,            # Sun-like star
    "mass_integrate_step": 1.0,            # IMF table resolution
    "reference_temperature": 5778.0,
    "temperature_variability": 0.05,
    "reference_radius": 0.05,
    "radius_variability": 0.05,
    "radius_remap": [(0.0, 0.0), (0.3, 0.15), (1.0, 1.0)],  # Denser core

    # Spiral arms
    "arm_count": 2,
    "spiral_start_radius": 30.0,
    "spiral_looseness": 0.3,               # Lower = tighter winding
    "spiral_bias": 0.5,                    # 0 = uniform disk, 1 = pure spiral
    "spiral_radius_scatter": 8.0,
    "spiral_angular_scatter": 15.0,        # Degrees
    "spiral_core_smoothing": 10.0,

    # Physics
    "g_constant": 100.0,
    "dark_matter": {"central_density": 0.0, "scale_radius": 0.0},
    "velocity_model": "acceleration",      # "acceleration" or "shell"
    "max_dt": 0.05,
}

SIMULATION = {
    "seed": None,          # None = different galaxy every run
    "use_gpu": True,       # CUDA when available and worthwhile
    "time_scale": 1.0,     # Simulated seconds per real second
}

# =============================================================================

WINDOW = {
    "width": 1280,
    "height": 720,
    "title": "Spiral Galaxy"
}

CAMERA = {
    "fov": 60.0,
    "near_clip": 1.0,
    "far_clip": 20000.0,
    "initial_radius": 3000.0,
    "initial_theta": 45.0,
    "initial_phi": 40.0,
    "min_radius": 50.0,
    "max_radius": 12000.0,
    "min_phi": -89.0,
    "max_phi": 89.0,
    "keyboard_rotate_speed": 60.0,
    "keyboard_zoom_speed": 1500.0,
    "mouse_sensitivity": 0.3,
    "zoom_smoothing": 8.0,
}

GRID = {
    "ring_count": 6,        # Guide rings in the galactic plane
    "segments": 96,
    "color": (0.08, 0.08, 0.14)
}

RENDER = {
    "point_size": 2.0,
    # Apparent size/brightness: mul * value ** exp
    "radius_mul": 2.0,
    "radius_exp": 0.5,
    "luminosity_mul": 0.01,
    "luminosity_exp": 0.001,
    "min_brightness": 0.25,
}

COLORS = {
    "background": (0.0, 0.0, 0.02, 1.0),
    "text": (230, 230, 230)
}
