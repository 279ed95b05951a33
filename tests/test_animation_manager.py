"""
Tests for particles, screen shake and the animation driver.
"""

import math
import random

import pytest

from kiosk.animation import AnimationManager, ParticleSystem
from kiosk.animation.easing import linear
from kiosk.animation.manager import SHAKE_X, SHAKE_Y
from kiosk.animation.particles import GRAVITY, LIFE_DECAY, UPWARD_BIAS


# ============================================================================
# Particles
# ============================================================================


class TestParticleBurst:
    """Test burst geometry and integration."""

    def test_burst_count_and_defaults(self):
        system = ParticleSystem(rng=random.Random(1))
        system.burst(100.0, 200.0, (34, 197, 94), count=8)
        particles = system.particles
        assert len(particles) == 8
        for p in particles:
            assert (p.x, p.y) == (100.0, 200.0)
            assert p.life == 1.0
            assert 3.0 <= p.size < 6.0
            assert p.color == (34, 197, 94)

    def test_burst_is_radial_fan(self):
        """Test particle i leaves at angle 2*pi*i/count with speed in [2, 5)."""
        system = ParticleSystem(rng=random.Random(2))
        system.burst(0.0, 0.0, (255, 255, 255), count=4)
        for i, p in enumerate(system.particles):
            vy = p.vy - UPWARD_BIAS
            speed = math.hypot(p.vx, vy)
            assert 2.0 <= speed < 5.0
            angle = math.atan2(vy, p.vx) % (2 * math.pi)
            assert angle == pytest.approx((2 * math.pi * i / 4) % (2 * math.pi), abs=1e-9)

    def test_advance_integrates_one_frame(self):
        system = ParticleSystem(rng=random.Random(3))
        system.burst(0.0, 0.0, (255, 255, 255), count=1)
        before = system.particles[0]
        vx, vy = before.vx, before.vy
        system.advance()
        after = system.particles[0]
        assert after.x == pytest.approx(vx)
        assert after.y == pytest.approx(vy)
        assert after.vy == pytest.approx(vy + GRAVITY)
        assert after.life == pytest.approx(1.0 - LIFE_DECAY)
        assert after.alpha == pytest.approx(1.0 - LIFE_DECAY)

    def test_particles_die_after_life_runs_out(self):
        system = ParticleSystem(rng=random.Random(4))
        system.burst(0.0, 0.0, (255, 255, 255), count=5)
        for _ in range(int(1 / LIFE_DECAY) + 1):
            system.advance()
        assert len(system) == 0

    def test_cap_drops_oldest(self):
        system = ParticleSystem(rng=random.Random(5), max_particles=10)
        system.burst(0.0, 0.0, (1, 1, 1), count=8)
        system.burst(50.0, 50.0, (2, 2, 2), count=8)
        particles = system.particles
        assert len(particles) == 10
        assert sum(1 for p in particles if p.color == (2, 2, 2)) == 8

    def test_particles_property_is_copy(self):
        system = ParticleSystem(rng=random.Random(6))
        system.burst(0.0, 0.0, (1, 1, 1), count=3)
        system.particles.clear()
        assert len(system) == 3


# ============================================================================
# AnimationManager
# ============================================================================


class TestAnimationDriver:
    """Test the per-frame driver on the scheduler."""

    def test_start_is_idempotent(self, scheduler):
        manager = AnimationManager(scheduler)
        manager.start()
        manager.start()
        assert manager.running
        assert scheduler.pending_count == 1

    def test_driver_advances_each_frame(self, scheduler):
        manager = AnimationManager(scheduler)
        manager.create_animation('x', 0.0, 10.0, 1.0, linear)
        manager.start()
        scheduler.advance(0.5)
        assert manager.value_of('x') == pytest.approx(5.0)
        assert manager.running
        assert scheduler.pending_count == 1

    def test_stop_cancels_and_is_safe_twice(self, scheduler):
        manager = AnimationManager(scheduler)
        manager.create_animation('x', 0.0, 10.0, 1.0, linear)
        manager.start()
        manager.stop()
        manager.stop()
        assert not manager.running
        scheduler.advance(0.5)
        assert manager.value_of('x') == 0.0

    def test_clear_drops_tweens_and_particles(self, scheduler):
        manager = AnimationManager(scheduler, rng=random.Random(7))
        manager.create_animation('x', 0.0, 1.0, 1.0)
        manager.burst(0.0, 0.0, (1, 2, 3), count=5)
        manager.clear()
        assert manager.value_of('x') is None
        assert manager.particles == []

    def test_value_of_default(self, scheduler):
        manager = AnimationManager(scheduler)
        assert manager.value_of('missing', 1.0) == 1.0
        assert manager.is_complete('missing')


class TestScreenShake:
    """Test shake tweens and offset sampling."""

    def test_no_shake_is_zero_offset(self, scheduler):
        manager = AnimationManager(scheduler)
        assert manager.shake_offset() == (0.0, 0.0)

    def test_shake_starts_at_full_intensity_and_decays(self, scheduler):
        manager = AnimationManager(scheduler, rng=random.Random(8))
        manager.screen_shake(intensity=10.0, duration=0.3)
        assert manager.value_of(SHAKE_X) == 10.0
        assert manager.value_of(SHAKE_Y) == 10.0

        manager.advance(0.3)
        assert manager.value_of(SHAKE_X) == 0.0
        assert manager.shake_offset() == (0.0, 0.0)

    def test_offset_bounded_by_magnitude(self, scheduler):
        manager = AnimationManager(scheduler, rng=random.Random(9))
        manager.screen_shake(intensity=10.0)
        for _ in range(50):
            dx, dy = manager.shake_offset()
            assert -5.0 <= dx <= 5.0
            assert -5.0 <= dy <= 5.0

    def test_direction_resampled_each_call(self, scheduler):
        manager = AnimationManager(scheduler, rng=random.Random(10))
        manager.screen_shake(intensity=10.0)
        samples = {manager.shake_offset() for _ in range(5)}
        assert len(samples) > 1
