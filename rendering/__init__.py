"""
Rendering components for the galaxy viewer.

Modules are imported directly (rendering.galaxy_renderer, rendering.hud,
rendering.plane_grid) so that rendering.appearance stays usable without
an OpenGL context.
"""
