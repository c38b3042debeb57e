"""Orbital camera looking at the galactic center."""

import math
import numpy as np
from OpenGL.GL import *
from OpenGL.GLU import *

from config import galaxy as config


class Camera:
    """Orbits the origin at (radius, theta, phi) with smoothed zoom."""

    def __init__(self, settings: dict = None):
        self.settings = settings or config.CAMERA
        self.reset()

    def reset(self):
        s = self.settings
        self.radius = s["initial_radius"]
        self.target_radius = self.radius
        self.theta = s["initial_theta"]
        self.phi = s["initial_phi"]
        self.zoom_smoothing = s.get("zoom_smoothing", 8.0)

    def frame(self, extent: float):
        """Pull back far enough to see a galaxy of the given radius."""
        half_fov = math.radians(self.settings["fov"]) / 2
        self.target_radius = self._clamp_radius(extent / math.tan(half_fov) * 1.2)

    def _clamp_radius(self, r: float) -> float:
        return max(self.settings["min_radius"], min(self.settings["max_radius"], r))

    def get_direction(self) -> np.ndarray:
        """Unit vector from the origin toward the camera."""
        theta_rad = math.radians(self.theta)
        phi_rad = math.radians(self.phi)
        return np.array([
            math.cos(phi_rad) * math.cos(theta_rad),
            math.sin(phi_rad),
            math.cos(phi_rad) * math.sin(theta_rad),
        ])

    def get_position(self) -> np.ndarray:
        return self.radius * self.get_direction()

    def get_camera_axes(self) -> tuple:
        """(forward, right, up) unit vectors; forward points at the origin."""
        forward = -self.get_direction()
        right = np.cross(forward, np.array([0.0, 1.0, 0.0]))
        right_len = np.linalg.norm(right)
        right = right / right_len if right_len > 1e-3 else np.array([1.0, 0.0, 0.0])
        up = np.cross(right, forward)
        return forward, right, up / np.linalg.norm(up)

    def rotate(self, d_theta: float, d_phi: float):
        """Rotate by the given angles in degrees."""
        self.theta = (self.theta + d_theta) % 360
        self.phi = max(self.settings["min_phi"], min(self.settings["max_phi"], self.phi + d_phi))

    def zoom(self, delta: float):
        self.radius = self._clamp_radius(self.radius + delta)
        self.target_radius = self.radius

    def zoom_smooth(self, delta: float):
        self.target_radius = self._clamp_radius(self.target_radius + delta)

    def update(self, dt: float):
        self.radius += (self.target_radius - self.radius) * min(1.0, self.zoom_smoothing * dt)
        self.radius = self._clamp_radius(self.radius)

    def apply(self):
        """Load the view transform into the OpenGL modelview matrix."""
        pos = self.get_position()
        glLoadIdentity()
        gluLookAt(pos[0], pos[1], pos[2], 0.0, 0.0, 0.0, 0.0, 1.0, 0.0)
