"""
Kiosk game platform.

Frame-driven building blocks for short arcade games on kiosks and phones:
frame scheduler, object pool, animation (tweens, particles, shake), image
assets, pointer input and the base game interface.
"""
