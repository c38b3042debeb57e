"""HUD text overlay."""

import pygame
from OpenGL.GL import *

from config import galaxy as config


class HUD:
    """Stacks lines of text in the top-left corner using pygame fonts."""

    def __init__(self, font_name: str = "monospace", font_size: int = 18, line_height: int = 25):
        pygame.font.init()
        self.font = pygame.font.SysFont(font_name, font_size)
        self.line_height = line_height
        self.color = config.COLORS["text"]

    def draw_lines(self, lines, screen_size: tuple, x: int = 10, y: int = 10):
        """Draw each line below the previous one, starting at (x, y) from the top-left."""
        width, height = screen_size

        glMatrixMode(GL_PROJECTION)
        glPushMatrix()
        glLoadIdentity()
        glOrtho(0, width, 0, height, -1, 1)
        glMatrixMode(GL_MODELVIEW)
        glPushMatrix()
        glLoadIdentity()

        glDisable(GL_DEPTH_TEST)
        glEnable(GL_BLEND)
        glBlendFunc(GL_SRC_ALPHA, GL_ONE_MINUS_SRC_ALPHA)

        for row, text in enumerate(lines):
            surface = self.font.render(text, True, self.color)
            w, h = surface.get_size()
            glRasterPos2f(x, height - (y + row * self.line_height) - h)
            glDrawPixels(w, h, GL_RGBA, GL_UNSIGNED_BYTE, pygame.image.tostring(surface, "RGBA", True))

        glDisable(GL_BLEND)
        glEnable(GL_DEPTH_TEST)

        glPopMatrix()
        glMatrixMode(GL_PROJECTION)
        glPopMatrix()
        glMatrixMode(GL_MODELVIEW)
