"""
Pointer input layer for kiosk games.

Mouse and touch both reduce to a horizontal pointer position, so games work
the same on a desktop browser kiosk and on a phone.
"""

from kiosk.input.input_event import PointerEvent
from kiosk.input.input_manager import InputManager
from kiosk.input.sources import InputSource, PointerInputSource

__all__ = ['PointerEvent', 'InputManager', 'InputSource', 'PointerInputSource']
