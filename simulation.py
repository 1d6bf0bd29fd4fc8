# simulation.py
"""
Handles the core physics of the galaxy.

This module defines the Simulation class, which advances the particle system
by one frame: trail bookkeeping, attraction towards attractors, repulsion
between nearby particles, integration, boundary wrapping, friction and aging.
The force loop is compiled with Numba.
"""
import logging
import numpy as np
from typing import List
from numba import jit
from numba.core import types
from numba.typed import List as TypedList

from attractor import Attractor, attractor_arrays
from constants import FRICTION, REPULSION_RADIUS
from forces import attraction, repulsion
from particle import ParticleSystem

# --- Data Contracts ---
#
# class Simulation:
#   - __init__(self, width: float, height: float, use_spatial_grid: bool = False):
#     - Inputs:
#       - width, height: wrap bounds of the world.
#       - use_spatial_grid: restrict the repulsion search to neighbouring
#         grid cells instead of testing every pair.
#
#   - step(self, particles: ParticleSystem, attractors: List[Attractor],
#          gravity: float, speed: float) -> None:
#     - Side Effects: Updates every particle in collection order. Each
#       particle sees the already-updated positions of the particles before
#       it. Attractors are read, not modified.
#     - Invariants: Particle count remains constant. Positions stay within
#       [0, width] x [0, height] once a particle has been updated.


@jit(nopython=True)
def _integrate(i, positions, velocities, vx, vy, speed, world_width, world_height):
    """Moves particle i, wraps it around the world edges and applies friction."""
    x = positions[i, 0] + vx * speed
    y = positions[i, 1] + vy * speed

    # Leaving one edge teleports the particle to the opposite one
    if x < 0:
        x = world_width
    if x > world_width:
        x = 0.0
    if y < 0:
        y = world_height
    if y > world_height:
        y = 0.0

    positions[i, 0] = x
    positions[i, 1] = y
    velocities[i, 0] = vx * FRICTION
    velocities[i, 1] = vy * FRICTION


@jit(nopython=True)
def _advance_particles_numba(
    positions, velocities, masses,
    attractor_x, attractor_y, attractor_mass,
    gravity, speed, world_width, world_height
):
    """
    Numba-jitted per-particle update with all-pairs repulsion.
    Particles are processed in order and updated in place.
    """
    particle_count = positions.shape[0]
    attractor_count = attractor_x.shape[0]

    for i in range(particle_count):
        px = positions[i, 0]
        py = positions[i, 1]
        vx = velocities[i, 0]
        vy = velocities[i, 1]

        for a in range(attractor_count):
            fx, fy = attraction(
                px, py, masses[i],
                attractor_x[a], attractor_y[a], attractor_mass[a], gravity
            )
            vx += fx * speed
            vy += fy * speed

        for j in range(particle_count):
            if j == i:
                continue
            fx, fy = repulsion(px, py, positions[j, 0], positions[j, 1])
            vx += fx
            vy += fy

        _integrate(i, positions, velocities, vx, vy, speed, world_width, world_height)


@jit(nopython=True)
def _cell_of(x, y, grid_width, grid_height, grid_cell_size):
    """
    Index of the grid cell holding (x, y). Positions outside the world
    (wrapped onto the far edge, or left behind after the world shrinks)
    are clamped into the border cells.
    """
    cell_x = min(max(int(x / grid_cell_size), 0), grid_width - 1)
    cell_y = min(max(int(y / grid_cell_size), 0), grid_height - 1)
    return cell_x + cell_y * grid_width


@jit(nopython=True)
def _update_grid_numba(positions, grid, grid_width, grid_height, grid_cell_size):
    """
    Numba-jitted function to populate the spatial grid.
    """
    # Clear the grid
    for cell in grid:
        cell.clear()

    particle_count = positions.shape[0]
    for i in range(particle_count):
        grid[_cell_of(positions[i, 0], positions[i, 1], grid_width, grid_height, grid_cell_size)].append(i)


@jit(nopython=True)
def _move_to_cell(grid, i, old_cell, new_cell):
    """Moves particle index i from one grid cell list to another."""
    members = grid[old_cell]
    for k in range(len(members)):
        if members[k] == i:
            members.pop(k)
            break
    grid[new_cell].append(i)


@jit(nopython=True)
def _advance_particles_grid_numba(
    positions, velocities, masses,
    attractor_x, attractor_y, attractor_mass,
    gravity, speed, world_width, world_height,
    grid, grid_width, grid_height, grid_cell_size
):
    """
    Same update as _advance_particles_numba, but repulsion only looks at the
    3x3 block of grid cells around each particle.

    Each particle is re-filed under its new cell as soon as it moves, so the
    grid always reflects the live positions later particles see.
    """
    particle_count = positions.shape[0]
    attractor_count = attractor_x.shape[0]

    for i in range(particle_count):
        px = positions[i, 0]
        py = positions[i, 1]
        vx = velocities[i, 0]
        vy = velocities[i, 1]

        for a in range(attractor_count):
            fx, fy = attraction(
                px, py, masses[i],
                attractor_x[a], attractor_y[a], attractor_mass[a], gravity
            )
            vx += fx * speed
            vy += fy * speed

        cell = _cell_of(px, py, grid_width, grid_height, grid_cell_size)
        cell_x = cell % grid_width
        cell_y = cell // grid_width

        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                nx, ny = cell_x + dx, cell_y + dy
                if 0 <= nx < grid_width and 0 <= ny < grid_height:
                    for j in grid[nx + ny * grid_width]:
                        if j == i:
                            continue
                        fx, fy = repulsion(px, py, positions[j, 0], positions[j, 1])
                        vx += fx
                        vy += fy

        _integrate(i, positions, velocities, vx, vy, speed, world_width, world_height)

        new_cell = _cell_of(positions[i, 0], positions[i, 1], grid_width, grid_height, grid_cell_size)
        if new_cell != cell:
            _move_to_cell(grid, i, cell, new_cell)


class Simulation:
    """
    Advances the galaxy's particles, optionally using a spatial grid
    to speed up the repulsion search.
    """
    def __init__(self, width: float, height: float, use_spatial_grid: bool = False):
        self.use_spatial_grid = use_spatial_grid
        self.grid_cell_size = REPULSION_RADIUS
        self.grid = None
        self.grid_width = 0
        self.grid_height = 0
        self.resize(width, height)

        logging.info(
            "Simulation physics initialized "
            f"({'spatial grid' if use_spatial_grid else 'all-pairs'} repulsion)."
        )

    def resize(self, width: float, height: float) -> None:
        """Changes the wrap bounds. Particle positions are left untouched."""
        self.world_width = float(width)
        self.world_height = float(height)

        if not self.use_spatial_grid:
            return

        # --- Spatial Grid Initialization ---
        self.grid_width = max(int(np.ceil(self.world_width / self.grid_cell_size)), 1)
        self.grid_height = max(int(np.ceil(self.world_height / self.grid_cell_size)), 1)

        # Numba requires typed data structures for JIT compilation.
        self.grid = TypedList(
            [TypedList.empty_list(types.int64) for _ in range(self.grid_width * self.grid_height)]
        )
        logging.info(
            f"Spatial grid enabled for performance: "
            f"{self.grid_width}x{self.grid_height} grid, "
            f"cell size {self.grid_cell_size:.2f}px."
        )

    def step(self, particles: ParticleSystem, attractors: List[Attractor],
             gravity: float, speed: float) -> None:
        """
        Executes one frame of particle physics.
        """
        # 1. Remember where every particle was
        particles.record_trail()

        # 2. Forces, integration, wrapping and friction (using Numba)
        attractor_x, attractor_y, attractor_mass = attractor_arrays(attractors)
        gravity = float(gravity)
        speed = float(speed)

        if self.use_spatial_grid:
            _update_grid_numba(
                particles.positions, self.grid,
                self.grid_width, self.grid_height, self.grid_cell_size
            )
            _advance_particles_grid_numba(
                particles.positions, particles.velocities, particles.masses,
                attractor_x, attractor_y, attractor_mass,
                gravity, speed, self.world_width, self.world_height,
                self.grid, self.grid_width, self.grid_height, self.grid_cell_size
            )
        else:
            _advance_particles_numba(
                particles.positions, particles.velocities, particles.masses,
                attractor_x, attractor_y, attractor_mass,
                gravity, speed, self.world_width, self.world_height
            )

        # 3. Life and color cycling
        particles.age()
