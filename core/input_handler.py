"""Keyboard and mouse input for the galaxy viewer."""

import pygame
from pygame.locals import *

from config import galaxy as config
from .camera import Camera


class InputHandler:
    """
    Camera controls plus simulation commands.

    Discrete key presses are reported back as command strings so the
    application decides what they do.
    """

    COMMANDS = {
        K_SPACE: "pause",
        K_r: "reset",
        K_h: "help",
        K_f: "frame",
        K_PERIOD: "faster",
        K_COMMA: "slower",
    }

    def __init__(self, camera: Camera):
        self.camera = camera
        self.drag_origin = None

    def handle_event(self, event: pygame.event.Event):
        """
        Handle a single pygame event.
        Returns "quit", a command name from COMMANDS, or None.
        """
        if event.type == QUIT:
            return "quit"
        elif event.type == KEYDOWN:
            if event.key == K_ESCAPE:
                return "quit"
            return self.COMMANDS.get(event.key)
        elif event.type == MOUSEBUTTONDOWN and event.button == 1:
            self.drag_origin = pygame.mouse.get_pos()
        elif event.type == MOUSEBUTTONUP and event.button == 1:
            self.drag_origin = None
        elif event.type == MOUSEWHEEL:
            self.camera.zoom_smooth(-event.y * config.CAMERA["keyboard_zoom_speed"] * 0.25)
        return None

    def handle_continuous_input(self, dt: float):
        """Held keys and mouse drag (called each frame)."""
        keys = pygame.key.get_pressed()
        orbit = config.CAMERA["keyboard_rotate_speed"] * dt
        dolly = config.CAMERA["keyboard_zoom_speed"] * dt

        d_theta = orbit * (keys[K_d] - keys[K_a])
        d_phi = orbit * (keys[K_w] - keys[K_s])
        if d_theta or d_phi:
            self.camera.rotate(d_theta, d_phi)
        if keys[K_e] != keys[K_q]:
            self.camera.zoom(dolly if keys[K_e] else -dolly)

        if self.drag_origin is not None:
            x, y = pygame.mouse.get_pos()
            gain = config.CAMERA["mouse_sensitivity"]
            self.camera.rotate((x - self.drag_origin[0]) * gain, (self.drag_origin[1] - y) * gain)
            self.drag_origin = (x, y)
