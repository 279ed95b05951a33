"""
Pointer Input Source - Mouse and touch input.

Mouse motion and clicks, and finger down/motion from touch screens, all
become PointerEvents with a field-local x coordinate. Touch events report
normalized coordinates, which are scaled by the display width.
"""
import time
from typing import Callable, List, Optional

import pygame

from kiosk.input.input_event import PointerEvent
from kiosk.input.sources.base import InputSource

_POINTER_EVENTS = (
    pygame.MOUSEMOTION,
    pygame.MOUSEBUTTONDOWN,
    pygame.FINGERDOWN,
    pygame.FINGERMOTION,
)


class PointerInputSource(InputSource):
    """Mouse and touch input source.

    Non-pointer events are re-posted to the pygame event queue for the main
    loop, unless ``events`` are handed in explicitly via ``feed()``.

    Args:
        field_left: Screen x of the play field's left edge
        display_width: Callable returning the display width used to scale
            normalized touch coordinates (defaults to the active surface)
    """

    def __init__(
        self,
        field_left: float = 0.0,
        display_width: Optional[Callable[[], int]] = None,
    ):
        self._field_left = field_left
        self._display_width = display_width or _surface_width
        self._event_queue: List[PointerEvent] = []

    @property
    def field_left(self) -> float:
        return self._field_left

    @field_left.setter
    def field_left(self, value: float) -> None:
        self._field_left = value

    def poll_events(self) -> List[PointerEvent]:
        """Get new pointer events since last poll."""
        events = self._event_queue.copy()
        self._event_queue.clear()
        return events

    def update(self, dt: float) -> None:
        """Drain the pygame queue, keeping pointer events."""
        for event in pygame.event.get():
            if event.type in _POINTER_EVENTS:
                self.feed(event)
            else:
                pygame.event.post(event)

    def feed(self, event: pygame.event.Event) -> bool:
        """Convert one pygame event. Returns True if it was a pointer event."""
        if event.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN):
            if event.type == pygame.MOUSEBUTTONDOWN and event.button != 1:
                return False
            screen_x = float(event.pos[0])
        elif event.type in (pygame.FINGERDOWN, pygame.FINGERMOTION):
            screen_x = float(event.x) * self._display_width()
        else:
            return False

        self._event_queue.append(PointerEvent(
            x=screen_x - self._field_left,
            timestamp=time.monotonic(),
        ))
        return True

    def clear(self) -> None:
        self._event_queue.clear()


def _surface_width() -> int:
    surface = pygame.display.get_surface()
    return surface.get_width() if surface is not None else 0
