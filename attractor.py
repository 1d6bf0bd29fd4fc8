# attractor.py
"""
Short-lived point sources of gravity.

Attractors are spawned by clicks and by the big bang, pull on every particle
while they live, and fade out over about a hundred frames.
"""
import math
import numpy as np
from typing import List, Tuple

from colors import RGBA
from constants import ATTRACTOR_MASS, ATTRACTOR_DECAY, ATTRACTOR_PULSE_STEP

GLOW_STOPS = (
    (0.0, RGBA(255, 255, 255, 0.8)),
    (0.5, RGBA(100, 200, 255, 0.4)),
    (1.0, RGBA(100, 200, 255, 0.0)),
)


class Attractor:
    def __init__(self, x: float, y: float, pulse_phase: float = 0.0,
                 mass: float = ATTRACTOR_MASS, decay: float = ATTRACTOR_DECAY):
        self.x = x
        self.y = y
        self.mass = mass
        self.life = 1.0
        self.decay = decay
        self.pulse_phase = pulse_phase

    def __repr__(self) -> str:
        return f"Attractor(x={self.x:.1f}, y={self.y:.1f}, life={self.life:.2f})"

    def update(self) -> bool:
        """
        Advances the attractor by one frame.

        Returns:
            bool: False once the attractor has run out of life and should be removed.
        """
        self.life -= self.decay
        self.pulse_phase += ATTRACTOR_PULSE_STEP
        return self.life > 0

    def visual_size(self) -> float:
        pulse = math.sin(self.pulse_phase) * 0.3 + 0.7
        return self.mass * 0.3 * pulse * self.life

    def draw(self, canvas) -> None:
        size = self.visual_size()

        canvas.save()
        canvas.global_alpha = self.life * 0.8

        # Outer glow
        canvas.fill_radial_gradient(self.x, self.y, size * 2, GLOW_STOPS)

        # Core
        canvas.fill_circle(self.x, self.y, size * 0.3, RGBA(255, 255, 255, self.life))
        canvas.restore()


def attractor_arrays(attractors: List[Attractor]) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Packs attractor positions and masses into arrays for the physics kernel."""
    count = len(attractors)
    xs = np.empty(count, dtype=np.float64)
    ys = np.empty(count, dtype=np.float64)
    masses = np.empty(count, dtype=np.float64)
    for i, attractor in enumerate(attractors):
        xs[i] = attractor.x
        ys[i] = attractor.y
        masses[i] = attractor.mass
    return xs, ys, masses
