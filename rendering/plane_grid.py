"""Guide rings in the galactic plane."""

import math
from OpenGL.GL import *

from config import galaxy as config


class PlaneGrid:
    """Concentric rings on the XZ plane out to the generation radius, plus axes."""

    def __init__(self, radius: float):
        self.radius = radius
        self.ring_count = config.GRID["ring_count"]
        self.segments = config.GRID["segments"]
        self.color = config.GRID["color"]
        self._circle = [
            (math.cos(2 * math.pi * k / self.segments), math.sin(2 * math.pi * k / self.segments))
            for k in range(self.segments)
        ]

    def draw(self):
        glColor3f(*self.color)

        for ring in range(1, self.ring_count + 1):
            r = self.radius * ring / self.ring_count
            glBegin(GL_LINE_LOOP)
            for cx, cz in self._circle:
                glVertex3f(r * cx, 0.0, r * cz)
            glEnd()

        e = self.radius
        glBegin(GL_LINES)
        for a, b in (((-e, 0.0, 0.0), (e, 0.0, 0.0)), ((0.0, 0.0, -e), (0.0, 0.0, e))):
            glVertex3f(*a)
            glVertex3f(*b)
        glEnd()
