"""
Input source implementations.
"""

from kiosk.input.sources.base import InputSource
from kiosk.input.sources.pointer import PointerInputSource

__all__ = ['InputSource', 'PointerInputSource']
