"""Main application: window, render loop and simulation stepping."""

import pygame
from pygame.locals import *
from OpenGL.GL import *
from OpenGL.GLU import *

from config import galaxy as config
from galaxy import GalaxySimulation
from rendering.galaxy_renderer import GalaxyRenderer
from rendering.hud import HUD
from rendering.plane_grid import PlaneGrid
from .camera import Camera
from .input_handler import InputHandler


class GalaxyApplication:
    """Hosts a GalaxySimulation: steps it every frame and draws the bodies."""

    def __init__(self, galaxy_config, seed=None, use_gpu=None):
        pygame.init()
        pygame.display.set_mode(
            (config.WINDOW["width"], config.WINDOW["height"]),
            DOUBLEBUF | OPENGL
        )
        pygame.display.set_caption(config.WINDOW["title"])

        self.camera = Camera()
        self.input_handler = InputHandler(self.camera)

        print("[App] Initializing galaxy simulation...")
        if use_gpu is None:
            use_gpu = config.SIMULATION["use_gpu"]
        self.simulation = GalaxySimulation(galaxy_config, seed=seed, use_gpu=use_gpu)

        self.renderer = GalaxyRenderer(self.simulation.bodies)
        self.grid = PlaneGrid(galaxy_config.radius)
        self.hud = HUD()
        self.camera.frame(galaxy_config.radius)

        self.clock = pygame.time.Clock()
        self.running = True
        self.paused = False
        self.show_help = True
        self.fps = 0.0
        self.time_scale = config.SIMULATION["time_scale"]

        self._setup_gl()
        print("[App] Ready!")

    def _setup_gl(self):
        glClearColor(*config.COLORS["background"])
        glEnable(GL_DEPTH_TEST)
        glDepthFunc(GL_LEQUAL)

        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        gluPerspective(
            config.CAMERA["fov"],
            config.WINDOW["width"] / config.WINDOW["height"],
            config.CAMERA["near_clip"],
            config.CAMERA["far_clip"]
        )
        glMatrixMode(GL_MODELVIEW)

    def _run_command(self, command):
        if command == "quit":
            self.running = False
        elif command == "pause":
            self.paused = not self.paused
            print(f"[App] {'Paused' if self.paused else 'Running'}")
        elif command == "reset":
            print("[App] Regenerating galaxy...")
            self.simulation.reset()
            self.renderer.set_bodies(self.simulation.bodies)
        elif command == "help":
            self.show_help = not self.show_help
        elif command == "frame":
            self.camera.frame(self.simulation.config.radius)
        elif command == "faster":
            self.time_scale *= 2.0
        elif command == "slower":
            self.time_scale *= 0.5

    def _handle_events(self):
        for event in pygame.event.get():
            command = self.input_handler.handle_event(event)
            if command is not None:
                self._run_command(command)

    def _update(self, dt: float):
        self.input_handler.handle_continuous_input(dt)
        self.camera.update(dt)

        if not self.paused:
            self.simulation.update(dt * self.time_scale)

    def _render(self):
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)
        self.camera.apply()
        self.grid.draw()

        cam_forward, cam_right, cam_up = self.camera.get_camera_axes()
        aspect = config.WINDOW["width"] / config.WINDOW["height"]
        self.renderer.draw(
            self.simulation.bodies.positions,
            self.camera.get_position(), cam_forward, cam_right, cam_up,
            config.CAMERA["fov"], aspect
        )

        status = "PAUSED" if self.paused else "RUNNING"
        backend = "GPU" if self.simulation.use_gpu else "CPU"
        lines = [
            f"Bodies: {self.renderer.visible_count:,}/{self.simulation.num_bodies:,}  |  FPS: {self.fps:.0f}  |  {status}",
            f"t = {self.simulation.time:.1f}  |  x{self.time_scale:g}  |  {backend}",
        ]
        if self.show_help:
            lines.append("WASD: Rotate | QE: Zoom | SPACE: Pause | R: Regenerate | F: Frame | ,/.: Speed | H: Help")

        self.hud.draw_lines(lines, (config.WINDOW["width"], config.WINDOW["height"]))
        pygame.display.flip()

    def run(self):
        """Main application loop."""
        print("[App] Starting main loop...")

        while self.running:
            dt = self.clock.tick() / 1000.0
            self.fps = self.clock.get_fps()

            self._handle_events()
            self._update(dt)
            self._render()

        pygame.quit()
        print("[App] Shutdown complete")
