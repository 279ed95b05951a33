"""
Base Input Source - Abstract interface for pointer backends.
"""
from abc import ABC, abstractmethod
from typing import List

from kiosk.input.input_event import PointerEvent


class InputSource(ABC):
    """Abstract base class for input sources.

    Every backend (mouse, touch, scripted test input) converts its native
    events to PointerEvent.
    """

    @abstractmethod
    def poll_events(self) -> List[PointerEvent]:
        """Poll for new input events.

        Returns:
            List of PointerEvent objects since last poll.
        """
        pass

    @abstractmethod
    def update(self, dt: float) -> None:
        """Update the input source, collecting events.

        Args:
            dt: Delta time in seconds since last update.
        """
        pass

    def clear(self) -> None:
        """Drop queued events."""
        self.poll_events()
