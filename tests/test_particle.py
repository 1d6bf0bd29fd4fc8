import numpy as np
import pytest

from constants import MAX_TRAIL_LENGTH
from particle import ParticleSystem


def test_new_particles_are_initialized_within_ranges(rng):
    particles = ParticleSystem(200, 300, 100, rng)

    assert particles.particle_count == 200
    assert particles.positions.shape == (200, 2)
    assert np.all((particles.positions[:, 0] >= 0) & (particles.positions[:, 0] <= 300))
    assert np.all((particles.positions[:, 1] >= 0) & (particles.positions[:, 1] <= 100))
    assert np.all(np.abs(particles.velocities) <= 1)
    assert np.all((particles.sizes >= 1) & (particles.sizes < 4))
    assert np.allclose(particles.masses, particles.sizes * 0.1)
    assert np.all(particles.life == 1)
    assert np.all((particles.decay >= 0.005) & (particles.decay < 0.025))
    assert np.all((particles.hue >= 0) & (particles.hue < 360))
    assert np.all((particles.brightness >= 50) & (particles.brightness < 100))
    assert particles.trail.shape == (200, MAX_TRAIL_LENGTH, 3)
    assert np.all(particles.trail_length == 0)


@pytest.mark.parametrize("count", [0, -5])
def test_non_positive_count_gives_empty_system(rng, count):
    particles = ParticleSystem(count, 100, 100, rng)
    assert particles.particle_count == 0
    particles.record_trail()
    particles.age()
    assert particles.particle_count == 0


def test_growing_keeps_existing_particles_in_place(rng):
    particles = ParticleSystem(100, 200, 200, rng)
    before = particles.positions.copy()
    hues = particles.hue.copy()

    particles.resize(150, 200, 200)

    assert particles.particle_count == 150
    assert np.array_equal(particles.positions[:100], before)
    assert np.array_equal(particles.hue[:100], hues)
    assert particles.trail.shape[0] == 150
    assert particles.trail_length.shape == (150,)


def test_shrinking_keeps_the_first_particles(rng):
    particles = ParticleSystem(100, 200, 200, rng)
    before = particles.positions.copy()

    particles.resize(60, 200, 200)

    assert particles.particle_count == 60
    assert np.array_equal(particles.positions, before[:60])
    for array in (particles.velocities, particles.sizes, particles.masses, particles.life,
                  particles.decay, particles.hue, particles.brightness, particles.trail,
                  particles.trail_length):
        assert array.shape[0] == 60


def test_trail_records_snapshots_in_order(rng):
    particles = ParticleSystem(2, 100, 100, rng)
    particles.positions[0] = (10.0, 20.0)
    particles.life[0] = 0.75
    particles.record_trail()

    assert particles.trail_length[0] == 1
    assert np.array_equal(particles.trail[0, 0], [10.0, 20.0, 0.75])


def test_full_trail_evicts_oldest_snapshot(rng):
    particles = ParticleSystem(1, 100, 100, rng)
    for step in range(MAX_TRAIL_LENGTH):
        particles.positions[0] = (step, step)
        particles.record_trail()
    assert particles.trail_length[0] == MAX_TRAIL_LENGTH

    particles.positions[0] = (99.0, 98.0)
    particles.record_trail()

    assert particles.trail_length[0] == MAX_TRAIL_LENGTH
    assert particles.trail[0, 0, 0] == 1.0
    assert np.array_equal(particles.trail[0, -1, :2], [99.0, 98.0])
    assert list(particles.trail[0, :, 0]) == [1, 2, 3, 4, 5, 6, 7, 8, 9, 99]


def test_age_depletes_life(rng):
    particles = ParticleSystem(1, 100, 100, rng)
    particles.decay[0] = 0.02
    particles.hue[0] = 100.0
    particles.age()
    assert particles.life[0] == pytest.approx(0.98)
    assert particles.hue[0] == pytest.approx(100.5)


def test_exhausted_particle_is_recycled(rng):
    particles = ParticleSystem(1, 100, 100, rng)
    particles.life[0] = 0.005
    particles.decay[0] = 0.01
    particles.age()

    assert particles.life[0] == 1.0
    # New random hue plus one hue step, wrapped
    assert 0.0 <= particles.hue[0] <= 360.0


@pytest.mark.parametrize("hue, expected", [(359.8, 0.0), (360.0, 0.0), (359.5, 360.0)])
def test_hue_wraps_past_360(rng, hue, expected):
    particles = ParticleSystem(1, 100, 100, rng)
    particles.hue[0] = hue
    particles.age()
    assert particles.hue[0] == pytest.approx(expected)


def test_impulse_changes_every_velocity(rng):
    particles = ParticleSystem(50, 100, 100, rng)
    before = particles.velocities.copy()

    particles.apply_impulse(5.0, 10.0)

    kick = np.linalg.norm(particles.velocities - before, axis=1)
    assert np.all(kick >= 5.0 - 1e-9)
    assert np.all(kick < 15.0)


def test_draw_renders_trail_glow_and_core(rng, canvas):
    particles = ParticleSystem(1, 100, 100, rng)
    particles.positions[0] = (10.0, 10.0)
    particles.record_trail()
    particles.positions[0] = (12.0, 10.0)
    particles.record_trail()
    particles.positions[0] = (14.0, 10.0)
    particles.life[0] = 0.8
    size = particles.sizes[0]

    particles.draw(canvas, "rainbow")

    circles = canvas.named("fill_circle")
    gradients = canvas.named("fill_radial_gradient")
    assert len(circles) == 3
    assert len(gradients) == 1

    # Oldest trail point is invisible, the next is half strength
    first, second, core = circles
    assert first[2] == 0 and first[4] == 0
    assert second[1] == (12.0, 10.0)
    assert second[2] == pytest.approx(0.5 * size * 0.5)
    assert second[4] == pytest.approx(0.5 * 1.0 * 0.3)
    assert second[3].alpha == pytest.approx(second[4])

    _, center, radius, stops, alpha = gradients[0]
    assert center == (14.0, 10.0)
    assert radius == pytest.approx(size * 3)
    assert alpha == pytest.approx(0.8)
    assert stops[0][1].alpha == pytest.approx(0.8)
    assert stops[1][1].alpha == 0

    assert core[1] == (14.0, 10.0)
    assert core[2] == pytest.approx(size)
    assert core[3].alpha == pytest.approx(0.8)
    assert canvas.global_alpha == 1.0


def test_draw_uses_color_mode(rng, canvas):
    particles = ParticleSystem(1, 100, 100, rng)
    particles.hue[0] = 100.0
    particles.draw(canvas, "neon")
    core = canvas.named("fill_circle")[-1]
    assert core[3].lightness == 80
