"""
Keyed, time-based tweens.

A tween interpolates one float from a start value to an end value over a
duration, measured on wall-clock time from its own start rather than from a
shared frame delta. Tweens are addressed by string key; creating a tween
under an existing key replaces it.
"""
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from kiosk.animation.easing import EasingFn, ease_out_cubic


@dataclass
class Tween:
    """One running interpolation.

    Attributes:
        key: Registry key
        start_value: Value at progress 0
        end_value: Value at progress 1
        duration: Length in seconds
        start_time: Clock time the tween was created
        easing: Easing curve applied to progress
        current_value: Value computed by the last update
        complete: Set by the update that reached progress 1
    """
    key: str
    start_value: float
    end_value: float
    duration: float
    start_time: float
    easing: EasingFn = ease_out_cubic
    current_value: float = 0.0
    complete: bool = False

    def progress_at(self, now: float) -> float:
        """Normalized progress clamped to [0, 1]."""
        if self.duration <= 0:
            return 1.0
        return min(max((now - self.start_time) / self.duration, 0.0), 1.0)


class TweenRegistry:
    """Owns every tween of one game instance.

    A tween that reaches the end is set to exactly its end value and marked
    complete by that update; it is dropped at the beginning of the next
    update. Between the two, ``value_of()`` returns the end value once.

    Args:
        clock: Time source in seconds (defaults to time.monotonic)
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        self._clock = clock or time.monotonic
        self._tweens: Dict[str, Tween] = {}

    def __len__(self) -> int:
        return len(self._tweens)

    def __contains__(self, key: str) -> bool:
        return key in self._tweens

    def create(
        self,
        key: str,
        start_value: float,
        end_value: float,
        duration: float,
        easing: EasingFn = ease_out_cubic,
    ) -> Tween:
        """Install a tween, replacing any tween already under ``key``."""
        tween = Tween(
            key=key,
            start_value=start_value,
            end_value=end_value,
            duration=duration,
            start_time=self._clock(),
            easing=easing,
            current_value=start_value,
        )
        self._tweens[key] = tween
        return tween

    def update(self, now: Optional[float] = None) -> None:
        """Advance every tween to ``now`` (defaults to the clock)."""
        if now is None:
            now = self._clock()

        for key in [k for k, tween in self._tweens.items() if tween.complete]:
            del self._tweens[key]

        for tween in self._tweens.values():
            progress = tween.progress_at(now)
            if progress >= 1.0:
                tween.current_value = tween.end_value
                tween.complete = True
            else:
                eased = tween.easing(progress)
                tween.current_value = (
                    tween.start_value + (tween.end_value - tween.start_value) * eased
                )

    def value_of(self, key: str) -> Optional[float]:
        """Current value, or None when no tween is installed under ``key``."""
        tween = self._tweens.get(key)
        return tween.current_value if tween is not None else None

    def is_complete(self, key: str) -> bool:
        """True when the tween finished or does not exist."""
        tween = self._tweens.get(key)
        return tween.complete if tween is not None else True

    def clear(self) -> None:
        self._tweens.clear()
