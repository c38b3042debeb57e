"""Point-sprite rendering of the body population."""

import math
import numpy as np
from numba import njit, prange
from OpenGL.GL import *
from OpenGL.arrays import vbo

from config import galaxy as config
from .appearance import fill_apparent, size_classes, star_colors


SIZE_SCALES = (1.0, 1.75, 2.5)


@njit(parallel=True, fastmath=True, cache=True)
def compute_visibility_points(
    positions: np.ndarray,
    cam_pos: np.ndarray,
    cam_forward: np.ndarray,
    cam_right: np.ndarray,
    cam_up: np.ndarray,
    tan_h: float,
    tan_v: float,
    far_dist: float,
    visible_mask: np.ndarray,
    num_bodies: int
):
    """Frustum culling for point rendering."""
    for i in prange(num_bodies):
        dx = positions[i, 0] - cam_pos[0]
        dy = positions[i, 1] - cam_pos[1]
        dz = positions[i, 2] - cam_pos[2]

        z = dx * cam_forward[0] + dy * cam_forward[1] + dz * cam_forward[2]
        if z < 0.1 or z > far_dist:
            visible_mask[i] = False
            continue

        x = dx * cam_right[0] + dy * cam_right[1] + dz * cam_right[2]
        y = dx * cam_up[0] + dy * cam_up[1] + dz * cam_up[2]

        visible_mask[i] = abs(x) < z * tan_h * 1.2 and abs(y) < z * tan_v * 1.2


class GalaxyRenderer:
    """
    Draws bodies as additive-blended points colored by temperature.

    Temperature, radius and luminosity never change during a run, so
    colors and size classes are computed once per population. Bodies are
    drawn in three passes (small/medium/large apparent radius).
    """

    def __init__(self, bodies):
        self.settings = config.RENDER
        self.far_clip = float(config.CAMERA["far_clip"])
        self._vbo_positions = None
        self._vbo_colors = None
        self.visible_count = 0
        self.set_bodies(bodies)

    def set_bodies(self, bodies):
        """(Re)derive per-body appearance for a new population."""
        n = len(bodies)
        fill_apparent(bodies, self.settings)

        classes = size_classes(bodies.apparent_radii)
        self._order = np.argsort(classes, kind="stable")
        self._class_bounds = np.searchsorted(classes[self._order], np.arange(len(SIZE_SCALES) + 1))
        self._colors = star_colors(bodies, self.settings["min_brightness"])[self._order]

        self._visible_mask = np.ones(n, dtype=np.bool_)
        self._cam = np.zeros((4, 3), dtype=np.float64)

    def _init_vbos(self):
        if self._vbo_positions is not None:
            return
        try:
            self._vbo_positions = vbo.VBO(np.zeros((1, 3), dtype=np.float32), usage=GL_DYNAMIC_DRAW)
            self._vbo_colors = vbo.VBO(np.zeros((1, 3), dtype=np.float32), usage=GL_DYNAMIC_DRAW)
        except Exception as e:
            print(f"[Render] VBO init failed, using client arrays: {e}")
            self._vbo_positions = self._vbo_colors = None

    def _compute_visibility(self, positions, cam_pos, cam_forward, cam_right, cam_up, fov, aspect):
        self._cam[0] = cam_pos
        self._cam[1] = cam_forward
        self._cam[2] = cam_right
        self._cam[3] = cam_up

        half_fov_v = math.radians(fov) / 2
        half_fov_h = math.atan(math.tan(half_fov_v) * aspect)

        compute_visibility_points(
            positions, self._cam[0], self._cam[1], self._cam[2], self._cam[3],
            math.tan(half_fov_h), math.tan(half_fov_v), self.far_clip,
            self._visible_mask, positions.shape[0]
        )

    def draw(self, positions, cam_pos, cam_forward, cam_right, cam_up, fov, aspect):
        """Render the current positions as seen from the camera."""
        if positions.shape[0] == 0:
            self.visible_count = 0
            return

        self._init_vbos()
        self._compute_visibility(positions, cam_pos, cam_forward, cam_right, cam_up, fov, aspect)

        mask = self._visible_mask[self._order]
        visible_pos = positions[self._order][mask].astype(np.float32)
        visible_colors = self._colors[mask]
        self.visible_count = len(visible_pos)
        if self.visible_count == 0:
            return

        # Visible bodies stay grouped by size class; count how many of each survived
        per_class = [
            int(mask[self._class_bounds[c]:self._class_bounds[c + 1]].sum())
            for c in range(len(SIZE_SCALES))
        ]

        glEnable(GL_POINT_SMOOTH)
        glEnable(GL_BLEND)
        glBlendFunc(GL_SRC_ALPHA, GL_ONE)
        glDepthMask(GL_FALSE)
        glEnableClientState(GL_VERTEX_ARRAY)
        glEnableClientState(GL_COLOR_ARRAY)

        if self._vbo_positions is not None:
            self._vbo_positions.set_array(visible_pos)
            self._vbo_colors.set_array(visible_colors)
            self._vbo_positions.bind()
            glVertexPointer(3, GL_FLOAT, 0, None)
            self._vbo_colors.bind()
            glColorPointer(3, GL_FLOAT, 0, None)
        else:
            glVertexPointer(3, GL_FLOAT, 0, visible_pos)
            glColorPointer(3, GL_FLOAT, 0, visible_colors)

        first = 0
        for scale, count in zip(SIZE_SCALES, per_class):
            if count:
                glPointSize(self.settings["point_size"] * scale)
                glDrawArrays(GL_POINTS, first, count)
            first += count

        if self._vbo_positions is not None:
            self._vbo_positions.unbind()
            self._vbo_colors.unbind()

        glDisableClientState(GL_VERTEX_ARRAY)
        glDisableClientState(GL_COLOR_ARRAY)
        glDepthMask(GL_TRUE)
        glDisable(GL_BLEND)
        glDisable(GL_POINT_SMOOTH)
