"""
Particle bursts.

Particles are integrated once per frame in per-frame units: velocity is in
pixels per frame, gravity in pixels per frame squared, and life drops by a
fixed amount each frame.
"""
import math
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

GRAVITY = 0.1        # px/frame² added to vy each frame
LIFE_DECAY = 0.02    # life lost per frame (50 frames from 1.0)
UPWARD_BIAS = -2.0   # added to vy at spawn
SPEED_RANGE = (2.0, 5.0)
SIZE_RANGE = (3.0, 6.0)


@dataclass
class Particle:
    """A single burst particle.

    Attributes:
        x, y: Center position
        vx, vy: Velocity in px/frame
        life: Remaining life, counts down to 0
        max_life: Life at spawn
        size: Radius in pixels
        color: RGB tuple
    """
    x: float
    y: float
    vx: float
    vy: float
    life: float = 1.0
    max_life: float = 1.0
    size: float = 4.0
    color: Tuple[int, int, int] = (255, 255, 255)

    @property
    def alpha(self) -> float:
        """Opacity in [0, 1], fading with remaining life."""
        if self.max_life <= 0:
            return 0.0
        return max(0.0, min(1.0, self.life / self.max_life))

    @property
    def is_alive(self) -> bool:
        return self.life > 0


class ParticleSystem:
    """Holds and integrates burst particles.

    Args:
        rng: Random source (a private Random when omitted)
        max_particles: Cap on live particles; oldest are dropped first
    """

    def __init__(self, rng: Optional[random.Random] = None, max_particles: int = 300):
        self._rng = rng or random.Random()
        self._max_particles = max_particles
        self._particles: List[Particle] = []

    def __len__(self) -> int:
        return len(self._particles)

    @property
    def particles(self) -> List[Particle]:
        """Snapshot list of live particles."""
        return list(self._particles)

    def burst(self, x: float, y: float, color: Tuple[int, int, int], count: int = 10) -> None:
        """Spawn ``count`` particles fanned evenly around (x, y)."""
        for i in range(count):
            angle = (math.pi * 2 * i) / count
            speed = self._rng.uniform(*SPEED_RANGE)
            self._particles.append(Particle(
                x=x,
                y=y,
                vx=math.cos(angle) * speed,
                vy=math.sin(angle) * speed + UPWARD_BIAS,
                size=self._rng.uniform(*SIZE_RANGE),
                color=color,
            ))

        overflow = len(self._particles) - self._max_particles
        if overflow > 0:
            del self._particles[:overflow]

    def advance(self) -> None:
        """Integrate one frame and drop dead particles."""
        for p in self._particles:
            p.x += p.vx
            p.y += p.vy
            p.vy += GRAVITY
            p.life -= LIFE_DECAY
        self._particles = [p for p in self._particles if p.is_alive]

    def clear(self) -> None:
        self._particles = []
