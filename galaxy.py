# galaxy.py
"""
The galaxy controller.

This module defines the Galaxy class, which owns the settings, the particle
system and the attractor list, and runs the per-frame update/draw cycle.
All user commands (clicks, settings changes, reset, pause, big bang) arrive
here as method calls from the host window.
"""
import logging
import numpy as np
from typing import Optional

from attractor import Attractor
from connections import draw_connections
from constants import (
    BIG_BANG_ATTRACTORS, BIG_BANG_FORCE_MIN, BIG_BANG_FORCE_SPAN, MOTION_BLUR_ALPHA,
)
from colors import RGBA, COLOR_MODES
from particle import ParticleSystem
from settings import Settings
from simulation import Simulation

# --- Data Contracts ---
#
# class Galaxy:
#   - __init__(self, settings: Settings, width: float, height: float,
#              use_spatial_grid: bool = False, seed: Optional[int] = None):
#     - Side Effects: Creates settings.particle_count particles at random
#       positions. Starts in the running state with no attractors.
#
#   - update(self) -> None:
#     - Advances every particle, then every attractor. Attractors whose
#       life ran out are dropped; survivors keep their relative order.
#
#   - draw(self, canvas) -> None:
#     - Fades the previous frame with a translucent black rectangle, then
#       draws particles, attractors and the connection overlay.
#
#   - tick(self, canvas) -> bool:
#     - One update+draw if running. Returns whether a frame was produced.


class Galaxy:
    """
    Owns the particle and attractor collections and applies user commands.
    """
    def __init__(self, settings: Settings, width: float, height: float,
                 use_spatial_grid: bool = False, seed: Optional[int] = None):
        self.settings = settings
        self.width = width
        self.height = height
        # Unseeded unless the config asks for reproducible runs.
        self.rng = np.random.default_rng(seed)

        self.simulation = Simulation(width, height, use_spatial_grid)
        self.particles: Optional[ParticleSystem] = None
        self.attractors = []
        self.is_running = True
        self.mouse_pos = (0.0, 0.0)
        self.tick_count = 0

        self.init()

    def init(self) -> None:
        """(Re)populates the galaxy with settings.particle_count fresh particles."""
        self.particles = ParticleSystem(
            self.settings.particle_count, self.width, self.height, self.rng
        )

    def resize_particle_population(self, target: int) -> None:
        self.particles.resize(target, self.width, self.height)

    def set_particle_count(self, count: int) -> None:
        self.settings.particle_count = max(int(count), 0)
        self.resize_particle_population(self.settings.particle_count)
        logging.info(f"Particle count set to {self.settings.particle_count}.")

    def set_gravity(self, gravity: float) -> None:
        self.settings.gravity = float(gravity)
        logging.info(f"Gravity set to {self.settings.gravity:.2f}.")

    def set_speed(self, speed: float) -> None:
        self.settings.speed = float(speed)
        logging.info(f"Speed set to {self.settings.speed:.2f}.")

    def set_color_mode(self, color_mode: str) -> None:
        if color_mode not in COLOR_MODES:
            logging.warning(f"Unknown color mode {color_mode!r}; rendering as 'default'.")
        self.settings.color_mode = color_mode
        logging.info(f"Color mode set to '{color_mode}'.")

    def reset(self) -> None:
        self.attractors = []
        self.init()
        logging.info("Galaxy reset by user.")

    def toggle_pause(self) -> bool:
        """Flips the running flag and returns the new value."""
        self.is_running = not self.is_running
        logging.info("Simulation resumed." if self.is_running else "Simulation paused.")
        return self.is_running

    def spawn_attractor(self, x: float, y: float) -> Attractor:
        attractor = Attractor(x, y, pulse_phase=self.rng.random() * np.pi * 2)
        self.attractors.append(attractor)
        logging.debug(f"Spawned {attractor!r}")
        return attractor

    def move_pointer(self, x: float, y: float) -> None:
        self.mouse_pos = (x, y)

    def add_initial_attractors(self) -> None:
        """Seeds the scene with two attractors on the main diagonal."""
        self.spawn_attractor(self.width * 0.3, self.height * 0.3)
        self.spawn_attractor(self.width * 0.7, self.height * 0.7)

    def big_bang(self) -> None:
        """
        Kicks every particle in a random direction and adds a burst of
        attractors at random positions. Nothing is reset.
        """
        self.particles.apply_impulse(BIG_BANG_FORCE_MIN, BIG_BANG_FORCE_SPAN)
        for _ in range(BIG_BANG_ATTRACTORS):
            self.spawn_attractor(
                self.rng.random() * self.width,
                self.rng.random() * self.height
            )
        logging.info(
            f"Big bang: {self.particles.particle_count} particles scattered, "
            f"{BIG_BANG_ATTRACTORS} attractors added."
        )

    def resize(self, width: float, height: float) -> None:
        """Adopts new surface dimensions. Particle positions are not rescaled."""
        self.width = width
        self.height = height
        self.simulation.resize(width, height)
        logging.info(f"Galaxy resized to {width}x{height}.")

    def update(self) -> None:
        self.simulation.step(
            self.particles, self.attractors,
            self.settings.gravity, self.settings.speed
        )
        self.attractors = [attractor for attractor in self.attractors if attractor.update()]

    def draw(self, canvas) -> None:
        # Fade instead of clearing, which leaves motion-blur trails
        canvas.fill_rect(0, 0, self.width, self.height, RGBA(0, 0, 0, MOTION_BLUR_ALPHA))

        self.particles.draw(canvas, self.settings.color_mode)
        for attractor in self.attractors:
            attractor.draw(canvas)
        self.draw_connections(canvas)

    def draw_connections(self, canvas) -> None:
        draw_connections(canvas, self.particles.positions)

    def tick(self, canvas) -> bool:
        if not self.is_running:
            return False
        self.update()
        self.draw(canvas)
        self.tick_count += 1
        return True
