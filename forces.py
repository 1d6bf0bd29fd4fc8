# forces.py
"""
Pairwise force model.

Two scalar functions, compiled with Numba so the particle kernel in
simulation.py can call them from nopython code. Both return the (fx, fy)
velocity change for the particle at (px, py).
"""
import math
from numba import jit

from constants import REPULSION_RADIUS, REPULSION_STRENGTH

# --- Data Contracts ---
#
# attraction(px, py, particle_mass, ax, ay, attractor_mass, gravity) -> (float, float):
#   - Force magnitude gravity * M * m / d^2, directed from the particle
#     towards the attractor. Returns (0.0, 0.0) when d == 0.
#   - The caller scales the result by the global speed factor.
#
# repulsion(px, py, ox, oy) -> (float, float):
#   - Force magnitude REPULSION_STRENGTH / d^2, directed away from the other
#     particle, for 0 < d < REPULSION_RADIUS. Returns (0.0, 0.0) otherwise.
#   - Not scaled by speed.


@jit(nopython=True)
def attraction(px, py, particle_mass, ax, ay, attractor_mass, gravity):
    dx = ax - px
    dy = ay - py
    distance = math.sqrt(dx * dx + dy * dy)
    if distance > 0:
        force = (gravity * attractor_mass * particle_mass) / (distance * distance)
        angle = math.atan2(dy, dx)
        return math.cos(angle) * force, math.sin(angle) * force
    return 0.0, 0.0


@jit(nopython=True)
def repulsion(px, py, ox, oy):
    dx = ox - px
    dy = oy - py
    distance = math.sqrt(dx * dx + dy * dy)
    if 0 < distance < REPULSION_RADIUS:
        force = REPULSION_STRENGTH / (distance * distance)
        angle = math.atan2(dy, dx)
        # Pointing away from the other particle
        return -math.cos(angle) * force, -math.sin(angle) * force
    return 0.0, 0.0
