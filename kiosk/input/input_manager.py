"""
Input Manager - Collects pointer input from the active source.
"""
from typing import List, Optional

from kiosk.input.input_event import PointerEvent
from kiosk.input.sources.base import InputSource


class InputManager:
    """Holds the active input source and collects its events.

    Games read events from the manager rather than from a source, so the
    host can swap mouse for touch (or a scripted source in tests) at runtime.
    """

    def __init__(self, source: Optional[InputSource] = None):
        self._source = source

    def set_source(self, source: InputSource) -> None:
        self._source = source

    def get_source(self) -> Optional[InputSource]:
        return self._source

    def has_source(self) -> bool:
        return self._source is not None

    def update(self, dt: float) -> None:
        """Update the active input source.

        Args:
            dt: Delta time in seconds since last update.
        """
        if self._source is not None:
            self._source.update(dt)

    def get_events(self) -> List[PointerEvent]:
        """Get collected events since last update."""
        if self._source is None:
            return []
        return self._source.poll_events()

    def clear_events(self) -> None:
        if self._source is not None:
            self._source.clear()
