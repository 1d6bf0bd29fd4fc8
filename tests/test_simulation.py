import numpy as np
import pytest

from attractor import Attractor
from constants import MAX_TRAIL_LENGTH
from particle import ParticleSystem
from simulation import Simulation

WIDTH, HEIGHT = 200.0, 100.0


def _single_particle(rng, position, velocity):
    particles = ParticleSystem(1, WIDTH, HEIGHT, rng)
    particles.positions[0] = position
    particles.velocities[0] = velocity
    return particles


@pytest.mark.parametrize("position, velocity, expected", [
    ((0.5, 50.0), (-1.5, 0.0), (WIDTH, 50.0)),
    ((WIDTH - 0.5, 50.0), (1.5, 0.0), (0.0, 50.0)),
    ((100.0, 0.5), (0.0, -1.5), (100.0, HEIGHT)),
    ((100.0, HEIGHT - 0.5), (0.0, 1.5), (100.0, 0.0)),
])
def test_particles_wrap_to_the_opposite_edge(rng, position, velocity, expected):
    particles = _single_particle(rng, position, velocity)
    Simulation(WIDTH, HEIGHT).step(particles, [], 0.5, 1.0)
    assert tuple(particles.positions[0]) == pytest.approx(expected)


def test_integration_scales_with_speed_and_applies_friction(rng):
    particles = _single_particle(rng, (50.0, 50.0), (1.0, -0.5))
    Simulation(WIDTH, HEIGHT).step(particles, [], 0.5, 2.0)

    assert tuple(particles.positions[0]) == pytest.approx((52.0, 49.0))
    assert tuple(particles.velocities[0]) == pytest.approx((0.999, -0.4995))


def test_attraction_is_scaled_by_speed(rng):
    particles = _single_particle(rng, (100.0, 50.0), (0.0, 0.0))
    mass = particles.masses[0]
    attractor = Attractor(110.0, 50.0, pulse_phase=0.0)

    Simulation(WIDTH, HEIGHT).step(particles, [attractor], 0.5, 2.0)

    dv = 0.5 * 50.0 * mass / 100.0 * 2.0
    assert particles.velocities[0, 0] == pytest.approx(dv * 0.999)
    assert particles.velocities[0, 1] == pytest.approx(0.0, abs=1e-12)


def test_nearby_particles_push_each_other_apart(rng):
    particles = ParticleSystem(2, WIDTH, HEIGHT, rng)
    particles.positions[:] = [(100.0, 50.0), (110.0, 50.0)]
    particles.velocities[:] = 0.0

    Simulation(WIDTH, HEIGHT).step(particles, [], 0.5, 1.0)

    expected = 0.01 / 100 * 0.999
    assert particles.velocities[0, 0] == pytest.approx(-expected, rel=1e-3)
    assert particles.velocities[1, 0] == pytest.approx(expected, rel=1e-3)
    assert particles.velocities[:, 1] == pytest.approx([0.0, 0.0], abs=1e-12)


def test_repulsion_ignores_speed(rng):
    particles = ParticleSystem(2, WIDTH, HEIGHT, rng)
    particles.positions[:] = [(100.0, 50.0), (110.0, 50.0)]
    particles.velocities[:] = 0.0

    Simulation(WIDTH, HEIGHT).step(particles, [], 0.5, 3.0)

    assert particles.velocities[0, 0] == pytest.approx(-0.01 / 100 * 0.999, rel=1e-3)


def test_life_and_trail_invariants_hold_over_many_steps(rng):
    particles = ParticleSystem(40, WIDTH, HEIGHT, rng)
    simulation = Simulation(WIDTH, HEIGHT)
    attractors = [Attractor(50.0, 50.0, pulse_phase=0.0)]

    for _ in range(120):
        simulation.step(particles, attractors, 0.5, 1.0)
        assert np.all(particles.life > 0)
        assert np.all(particles.life <= 1)
        assert np.all(particles.trail_length <= MAX_TRAIL_LENGTH)

    assert np.all(particles.trail_length == MAX_TRAIL_LENGTH)
    assert np.all((particles.positions[:, 0] >= 0) & (particles.positions[:, 0] <= WIDTH))
    assert np.all((particles.positions[:, 1] >= 0) & (particles.positions[:, 1] <= HEIGHT))


def test_step_records_trail_before_moving(rng):
    particles = _single_particle(rng, (50.0, 50.0), (1.0, 0.0))
    Simulation(WIDTH, HEIGHT).step(particles, [], 0.5, 1.0)

    assert particles.trail_length[0] == 1
    assert np.array_equal(particles.trail[0, 0], [50.0, 50.0, 1.0])


def _lattice(rng):
    particles = ParticleSystem(64, WIDTH, WIDTH, rng)
    xs, ys = np.meshgrid(np.arange(8) * 20.0 + 15.0, np.arange(8) * 20.0 + 15.0)
    particles.positions[:] = np.stack([xs.ravel(), ys.ravel()], axis=1)
    particles.velocities[:] = 0.0
    return particles


def test_spatial_grid_matches_all_pairs():
    exact = _lattice(np.random.default_rng(3))
    gridded = _lattice(np.random.default_rng(3))

    Simulation(WIDTH, WIDTH).step(exact, [], 0.5, 1.0)
    Simulation(WIDTH, WIDTH, use_spatial_grid=True).step(gridded, [], 0.5, 1.0)

    assert np.allclose(gridded.velocities, exact.velocities, rtol=1e-9, atol=1e-15)
    assert np.allclose(gridded.positions, exact.positions)


def test_spatial_grid_survives_shrinking_world(rng):
    particles = ParticleSystem(30, WIDTH, HEIGHT, rng)
    simulation = Simulation(WIDTH, HEIGHT, use_spatial_grid=True)
    simulation.resize(60.0, 40.0)

    simulation.step(particles, [], 0.5, 1.0)

    assert simulation.grid_width == 2
    assert simulation.grid_height == 1
    assert particles.particle_count == 30


def test_resize_changes_wrap_bounds(rng):
    particles = _single_particle(rng, (55.0, 20.0), (10.0, 0.0))
    simulation = Simulation(WIDTH, HEIGHT)
    simulation.resize(60.0, 40.0)

    simulation.step(particles, [], 0.5, 1.0)

    assert particles.positions[0, 0] == 0.0


def _step_both(rng_seed, positions, velocities, width=WIDTH, height=HEIGHT, speed=1.0):
    results = []
    for use_grid in (False, True):
        particles = ParticleSystem(len(positions), width, height, np.random.default_rng(rng_seed))
        particles.positions[:] = positions
        particles.velocities[:] = velocities
        Simulation(width, height, use_spatial_grid=use_grid).step(particles, [], 0.5, speed)
        results.append(particles)
    return results


def test_spatial_grid_sees_neighbour_that_wrapped_this_frame():
    # Particle 0 wraps from x=-1 to x=WIDTH, right next to particle 1
    exact, gridded = _step_both(
        5, [(1.0, 50.0), (199.5, 50.0)], [(-2.0, 0.0), (0.0, 0.0)]
    )

    assert exact.velocities[1, 0] == pytest.approx(-0.01 / 0.25 * 0.999)
    assert np.allclose(gridded.velocities, exact.velocities, rtol=1e-9, atol=1e-15)
    assert np.allclose(gridded.positions, exact.positions)


def test_spatial_grid_sees_neighbour_that_jumped_several_cells():
    # Particle 0 travels 120 px, from cell 0 into cell 2, landing beside particle 1
    exact, gridded = _step_both(
        6, [(10.0, 50.0), (131.0, 50.0)], [(40.0, 0.0), (0.0, 0.0)], speed=3.0
    )

    assert exact.velocities[1, 0] > 0
    assert np.allclose(gridded.velocities, exact.velocities, rtol=1e-9, atol=1e-15)
    assert np.allclose(gridded.positions, exact.positions)


def test_spatial_grid_matches_all_pairs_after_big_kicks():
    rng = np.random.default_rng(11)
    positions = rng.uniform(low=[0, 0], high=[WIDTH, HEIGHT], size=(120, 2))
    angles = rng.random(120) * np.pi * 2
    forces = rng.random(120) * 10 + 5
    velocities = np.stack([np.cos(angles) * forces, np.sin(angles) * forces], axis=1)

    exact, gridded = _step_both(12, positions, velocities, speed=3.0)

    assert np.allclose(gridded.velocities, exact.velocities, rtol=1e-9, atol=1e-12)
    assert np.allclose(gridded.positions, exact.positions)
