"""
Animation manager - tweens, particles and screen shake behind one driver.

Each game owns one AnimationManager. Its driver advances tweens and
particles once per frame through the game's FrameScheduler, so everything
the game reads during a frame has already been advanced for that frame.
"""
import random
from typing import List, Optional, Tuple

from kiosk.animation.easing import EasingFn, ease_out_cubic, ease_out_elastic
from kiosk.animation.particles import Particle, ParticleSystem
from kiosk.animation.tweens import Tween, TweenRegistry
from kiosk.logging import get_logger
from kiosk.scheduler import FrameScheduler

log = get_logger('animation')

SHAKE_X = 'screen_shake_x'
SHAKE_Y = 'screen_shake_y'


class AnimationManager:
    """Tween registry, particle system and frame driver for one game.

    Args:
        scheduler: Frame scheduler that drives ``advance()`` and provides the clock
        rng: Random source for particles and shake jitter
        max_particles: Cap on live particles
    """

    def __init__(
        self,
        scheduler: FrameScheduler,
        rng: Optional[random.Random] = None,
        max_particles: int = 300,
    ):
        self._scheduler = scheduler
        self._rng = rng or random.Random()
        self._tweens = TweenRegistry(clock=scheduler.now)
        self._particles = ParticleSystem(rng=self._rng, max_particles=max_particles)
        self._frame_handle: Optional[int] = None

    # ------------------------------------------------------------------
    # Driver
    # ------------------------------------------------------------------

    @property
    def running(self) -> bool:
        """True while the driver has a frame requested."""
        return self._frame_handle is not None

    def start(self) -> None:
        """Start the per-frame driver. Calling it again while running does nothing."""
        if self._frame_handle is not None:
            return
        self._frame_handle = self._scheduler.request_frame(self._drive)
        log.debug("Animation driver started")

    def stop(self) -> None:
        """Cancel the driver's pending frame. Safe when already stopped."""
        if self._frame_handle is None:
            return
        self._scheduler.cancel_frame(self._frame_handle)
        self._frame_handle = None
        log.debug("Animation driver stopped")

    def _drive(self, now: float) -> None:
        self.advance(now)
        self._frame_handle = self._scheduler.request_frame(self._drive)

    def advance(self, now: Optional[float] = None) -> None:
        """Advance tweens to ``now`` and integrate particles by one frame."""
        self._tweens.update(now)
        self._particles.advance()

    def clear(self) -> None:
        """Drop every tween and particle."""
        self._tweens.clear()
        self._particles.clear()

    # ------------------------------------------------------------------
    # Tweens
    # ------------------------------------------------------------------

    @property
    def tweens(self) -> TweenRegistry:
        return self._tweens

    def create_animation(
        self,
        key: str,
        start_value: float,
        end_value: float,
        duration: float,
        easing: EasingFn = ease_out_cubic,
    ) -> Tween:
        """Install or replace the tween under ``key``."""
        return self._tweens.create(key, start_value, end_value, duration, easing)

    def value_of(self, key: str, default: Optional[float] = None) -> Optional[float]:
        """Current tween value, or ``default`` when there is none."""
        value = self._tweens.value_of(key)
        return default if value is None else value

    def is_complete(self, key: str) -> bool:
        return self._tweens.is_complete(key)

    # ------------------------------------------------------------------
    # Particles
    # ------------------------------------------------------------------

    @property
    def particles(self) -> List[Particle]:
        """Snapshot list of live particles."""
        return self._particles.particles

    def burst(self, x: float, y: float, color: Tuple[int, int, int], count: int = 10) -> None:
        self._particles.burst(x, y, color, count)

    # ------------------------------------------------------------------
    # Screen shake
    # ------------------------------------------------------------------

    def screen_shake(self, intensity: float = 10.0, duration: float = 0.3) -> None:
        """Start a shake whose magnitude decays from ``intensity`` to 0."""
        self._tweens.create(SHAKE_X, intensity, 0.0, duration, ease_out_elastic)
        self._tweens.create(SHAKE_Y, intensity, 0.0, duration, ease_out_elastic)

    def shake_offset(self) -> Tuple[float, float]:
        """Sample a jitter offset for this frame.

        The magnitude follows the shake tweens; the direction is drawn fresh
        on every call.
        """
        magnitude_x = self.value_of(SHAKE_X, 0.0)
        magnitude_y = self.value_of(SHAKE_Y, 0.0)
        if not magnitude_x and not magnitude_y:
            return (0.0, 0.0)
        return (
            (self._rng.random() - 0.5) * magnitude_x,
            (self._rng.random() - 0.5) * magnitude_y,
        )
