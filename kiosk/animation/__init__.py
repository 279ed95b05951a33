"""
Animation support for kiosk games.

Provides:
- easing: Easing curves and the EASINGS name table
- tweens: Keyed, wall-clock tweens (Tween, TweenRegistry)
- particles: Radial particle bursts (Particle, ParticleSystem)
- manager: AnimationManager tying tweens, particles and screen shake to a frame driver
"""

from kiosk.animation.easing import EASINGS, EasingFn
from kiosk.animation.tweens import Tween, TweenRegistry
from kiosk.animation.particles import Particle, ParticleSystem
from kiosk.animation.manager import AnimationManager

__all__ = [
    'EASINGS',
    'EasingFn',
    'Tween',
    'TweenRegistry',
    'Particle',
    'ParticleSystem',
    'AnimationManager',
]
