"""
Easing functions for tweens.

Each function maps normalized progress ``t`` in [0, 1] to an eased value.
Every curve returns 0 at t=0 and 1 at t=1; some overshoot in between
(``ease_out_back``, ``ease_out_elastic``).
"""
import math
from typing import Callable, Dict

EasingFn = Callable[[float], float]


def linear(t: float) -> float:
    return t


def ease_out_bounce(t: float) -> float:
    """Decaying bounces settling on 1."""
    n1 = 7.5625
    d1 = 2.75
    if t < 1 / d1:
        return n1 * t * t
    if t < 2 / d1:
        t -= 1.5 / d1
        return n1 * t * t + 0.75
    if t < 2.5 / d1:
        t -= 2.25 / d1
        return n1 * t * t + 0.9375
    t -= 2.625 / d1
    return n1 * t * t + 0.984375


def ease_out_back(t: float) -> float:
    """Overshoots past 1 and settles back."""
    c1 = 1.70158
    c3 = c1 + 1
    return 1 + c3 * (t - 1) ** 3 + c1 * (t - 1) ** 2


def ease_out_quart(t: float) -> float:
    return 1 - (1 - t) ** 4


def ease_out_cubic(t: float) -> float:
    return 1 - (1 - t) ** 3


def ease_in_out_cubic(t: float) -> float:
    if t < 0.5:
        return 4 * t * t * t
    return 1 - (-2 * t + 2) ** 3 / 2


def ease_out_elastic(t: float) -> float:
    """Springy oscillation around 1 with exponential decay."""
    if t == 0:
        return 0.0
    if t == 1:
        return 1.0
    c4 = (2 * math.pi) / 3
    return 2 ** (-10 * t) * math.sin((t * 10 - 0.75) * c4) + 1


def ease_out_expo(t: float) -> float:
    if t == 1:
        return 1.0
    return 1 - 2 ** (-10 * t)


EASINGS: Dict[str, EasingFn] = {
    'linear': linear,
    'ease_out_bounce': ease_out_bounce,
    'ease_out_back': ease_out_back,
    'ease_out_quart': ease_out_quart,
    'ease_out_cubic': ease_out_cubic,
    'ease_in_out_cubic': ease_in_out_cubic,
    'ease_out_elastic': ease_out_elastic,
    'ease_out_expo': ease_out_expo,
}
