# particle.py
"""
Manages the state of all particles in the galaxy.

This module defines the ParticleSystem class, which is responsible for
initializing, growing, shrinking and drawing the particle population.
Per-particle state (position, velocity, size, life, trail, color) is kept
in NumPy arrays; the physics step that moves them lives in simulation.py.
"""
import logging
import numpy as np
from typing import Optional

from colors import get_color
from constants import (
    MAX_TRAIL_LENGTH, HUE_STEP, HUE_MAX,
    PARTICLE_SIZE_MIN, PARTICLE_SIZE_SPAN,
    PARTICLE_DECAY_MIN, PARTICLE_DECAY_SPAN,
    PARTICLE_BRIGHTNESS_MIN, PARTICLE_BRIGHTNESS_SPAN,
    PARTICLE_MASS_RATIO, PARTICLE_GLOW_RATIO,
    TRAIL_OPACITY, TRAIL_SIZE_RATIO,
)

# --- Data Contracts ---
#
# class ParticleSystem:
#   - __init__(self, count: int, width: float, height: float, rng: Optional[np.random.Generator] = None):
#     - Inputs:
#       - count: number of particles. Values <= 0 give an empty system.
#       - width, height: bounds for the uniformly random initial positions.
#       - rng: random generator shared with the owning controller.
#     - Side Effects: Allocates the state arrays.
#     - Invariants:
#       - positions, velocities: float64 arrays of shape (N, 2).
#       - sizes, masses, life, decay, hue, brightness: float64 arrays of shape (N,).
#       - trail: float64 array of shape (N, MAX_TRAIL_LENGTH, 3) holding
#         (x, y, life) snapshots, oldest first; only the first
#         trail_length[i] rows of particle i are meaningful.
#       - 0 < life <= 1 and trail_length <= MAX_TRAIL_LENGTH for every particle.
#
#   - resize(self, target: int, width: float, height: float) -> None:
#     - Appends new particles or truncates to the first `target`. Existing
#       particles keep their order and state.
#
#   - draw(self, canvas, color_mode: str) -> None:
#     - Renders every particle's trail, glow and core onto the canvas.


class ParticleSystem:
    """
    A container for all particles, managing their state via NumPy arrays.
    """
    def __init__(self, count: int, width: float, height: float,
                 rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng()

        self.positions = np.empty((0, 2), dtype=np.float64)
        self.velocities = np.empty((0, 2), dtype=np.float64)
        self.sizes = np.empty(0, dtype=np.float64)
        self.masses = np.empty(0, dtype=np.float64)
        self.life = np.empty(0, dtype=np.float64)
        self.decay = np.empty(0, dtype=np.float64)
        self.hue = np.empty(0, dtype=np.float64)
        self.brightness = np.empty(0, dtype=np.float64)
        self.trail = np.empty((0, MAX_TRAIL_LENGTH, 3), dtype=np.float64)
        self.trail_length = np.empty(0, dtype=np.int64)

        self.add_particles(count, width, height)

        logging.info(f"ParticleSystem initialized with {self.particle_count} particles.")
        logging.debug(
            f"Particle data arrays created. "
            f"Positions shape: {self.positions.shape}, "
            f"Trail shape: {self.trail.shape}"
        )

    @property
    def particle_count(self) -> int:
        return self.positions.shape[0]

    def add_particles(self, count: int, width: float, height: float) -> None:
        """Appends `count` freshly initialized particles at random positions."""
        if count <= 0:
            return
        rng = self.rng
        positions = rng.uniform(low=[0, 0], high=[width, height], size=(count, 2))
        velocities = (rng.random((count, 2)) - 0.5) * 2
        sizes = rng.random(count) * PARTICLE_SIZE_SPAN + PARTICLE_SIZE_MIN

        self.positions = np.concatenate([self.positions, positions])
        self.velocities = np.concatenate([self.velocities, velocities])
        self.sizes = np.concatenate([self.sizes, sizes])
        self.masses = np.concatenate([self.masses, sizes * PARTICLE_MASS_RATIO])
        self.life = np.concatenate([self.life, np.ones(count)])
        self.decay = np.concatenate(
            [self.decay, rng.random(count) * PARTICLE_DECAY_SPAN + PARTICLE_DECAY_MIN]
        )
        self.hue = np.concatenate([self.hue, rng.random(count) * HUE_MAX])
        self.brightness = np.concatenate(
            [self.brightness, rng.random(count) * PARTICLE_BRIGHTNESS_SPAN + PARTICLE_BRIGHTNESS_MIN]
        )
        self.trail = np.concatenate(
            [self.trail, np.zeros((count, MAX_TRAIL_LENGTH, 3), dtype=np.float64)]
        )
        self.trail_length = np.concatenate(
            [self.trail_length, np.zeros(count, dtype=np.int64)]
        )

    def truncate(self, count: int) -> None:
        """Keeps the first `count` particles and discards the rest."""
        count = max(count, 0)
        self.positions = self.positions[:count]
        self.velocities = self.velocities[:count]
        self.sizes = self.sizes[:count]
        self.masses = self.masses[:count]
        self.life = self.life[:count]
        self.decay = self.decay[:count]
        self.hue = self.hue[:count]
        self.brightness = self.brightness[:count]
        self.trail = self.trail[:count]
        self.trail_length = self.trail_length[:count]

    def resize(self, target: int, width: float, height: float) -> None:
        current = self.particle_count
        if target > current:
            self.add_particles(target - current, width, height)
        elif target < current:
            self.truncate(target)
        logging.debug(f"Particle population resized from {current} to {self.particle_count}.")

    def record_trail(self) -> None:
        """
        Appends the current (x, y, life) of every particle to its trail,
        evicting the oldest snapshot of trails that are already full.
        """
        n = self.particle_count
        if n == 0:
            return
        full = self.trail_length >= MAX_TRAIL_LENGTH
        self.trail[full, :-1] = self.trail[full, 1:]

        slot = np.minimum(self.trail_length, MAX_TRAIL_LENGTH - 1)
        rows = np.arange(n)
        self.trail[rows, slot, 0] = self.positions[:, 0]
        self.trail[rows, slot, 1] = self.positions[:, 1]
        self.trail[rows, slot, 2] = self.life
        self.trail_length = np.minimum(self.trail_length + 1, MAX_TRAIL_LENGTH)

    def age(self) -> None:
        """
        Depletes life and cycles hue. Particles never die: once life runs out
        it is restored to 1 and the particle gets a new random hue.
        """
        self.life -= self.decay
        expired = self.life <= 0
        expired_count = int(np.count_nonzero(expired))
        if expired_count:
            self.life[expired] = 1.0
            self.hue[expired] = self.rng.random(expired_count) * HUE_MAX

        self.hue += HUE_STEP
        self.hue[self.hue > HUE_MAX] = 0.0

    def apply_impulse(self, min_force: float, force_span: float) -> None:
        """Kicks every particle in a random direction with a random magnitude."""
        n = self.particle_count
        angles = self.rng.random(n) * np.pi * 2
        forces = self.rng.random(n) * force_span + min_force
        self.velocities[:, 0] += np.cos(angles) * forces
        self.velocities[:, 1] += np.sin(angles) * forces

    def draw(self, canvas, color_mode: str) -> None:
        for i in range(self.particle_count):
            self._draw_particle(canvas, i, color_mode)

    def _draw_particle(self, canvas, i: int, color_mode: str) -> None:
        hue = self.hue[i]
        brightness = self.brightness[i]
        size = self.sizes[i]
        life = self.life[i]

        # Trail: older points are fainter and smaller
        length = int(self.trail_length[i])
        for index in range(length):
            x, y, point_life = self.trail[i, index]
            fraction = index / length
            alpha = fraction * point_life * TRAIL_OPACITY
            canvas.save()
            canvas.global_alpha = alpha
            canvas.fill_circle(
                x, y, fraction * size * TRAIL_SIZE_RATIO,
                get_color(color_mode, hue, brightness, alpha)
            )
            canvas.restore()

        x, y = self.positions[i]
        canvas.save()
        canvas.global_alpha = life

        # Glow
        canvas.fill_radial_gradient(
            x, y, size * PARTICLE_GLOW_RATIO,
            [
                (0.0, get_color(color_mode, hue, brightness, life)),
                (1.0, get_color(color_mode, hue, brightness, 0)),
            ]
        )

        # Core
        canvas.fill_circle(x, y, size, get_color(color_mode, hue, brightness, life))
        canvas.restore()
