"""
Tests for pointer input: events, the pygame source and the manager.
"""

import pygame
import pytest

from kiosk.input import InputManager, InputSource, PointerEvent, PointerInputSource


class ScriptedSource(InputSource):
    """Source that replays a fixed list of x positions."""

    def __init__(self, xs):
        self._pending = [PointerEvent(x=x, timestamp=0.0) for x in xs]

    def poll_events(self):
        events, self._pending = self._pending, []
        return events

    def update(self, dt):
        pass


class TestPointerEvent:
    """Test the immutable event type."""

    def test_negative_timestamp_rejected(self):
        with pytest.raises(ValueError):
            PointerEvent(x=1.0, timestamp=-0.1)

    def test_frozen(self):
        event = PointerEvent(x=1.0, timestamp=0.0)
        with pytest.raises(AttributeError):
            event.x = 2.0

    def test_negative_x_allowed(self):
        """Test positions outside the field are passed through for clamping."""
        assert PointerEvent(x=-50.0, timestamp=1.0).x == -50.0


class TestPointerInputSource:
    """Test conversion of pygame events."""

    def test_mouse_motion_is_field_local(self):
        source = PointerInputSource(field_left=100.0)
        assert source.feed(pygame.event.Event(pygame.MOUSEMOTION, pos=(250, 40), rel=(0, 0), buttons=(0, 0, 0)))
        events = source.poll_events()
        assert [e.x for e in events] == [150.0]
        assert source.poll_events() == []

    def test_left_click_only(self):
        source = PointerInputSource()
        assert source.feed(pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=(10, 10), button=1))
        assert not source.feed(pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=(20, 10), button=3))
        assert [e.x for e in source.poll_events()] == [10.0]

    def test_finger_scaled_by_display_width(self):
        source = PointerInputSource(display_width=lambda: 400)
        source.feed(pygame.event.Event(pygame.FINGERDOWN, x=0.25, y=0.5, dx=0.0, dy=0.0,
                                       touch_id=0, finger_id=0, pressure=1.0))
        source.feed(pygame.event.Event(pygame.FINGERMOTION, x=0.5, y=0.5, dx=0.0, dy=0.0,
                                       touch_id=0, finger_id=0, pressure=1.0))
        assert [e.x for e in source.poll_events()] == [100.0, 200.0]

    def test_other_events_ignored(self):
        source = PointerInputSource()
        assert not source.feed(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_r))
        assert source.poll_events() == []

    def test_clear(self):
        source = PointerInputSource()
        source.feed(pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=(10, 10), button=1))
        source.clear()
        assert source.poll_events() == []


class TestInputManager:
    """Test source management."""

    def test_no_source(self):
        manager = InputManager()
        assert not manager.has_source()
        manager.update(0.016)
        assert manager.get_events() == []

    def test_events_from_source(self):
        manager = InputManager(ScriptedSource([10.0, 20.0]))
        manager.update(0.016)
        assert [e.x for e in manager.get_events()] == [10.0, 20.0]
        assert manager.get_events() == []

    def test_swap_source(self):
        manager = InputManager(ScriptedSource([1.0]))
        manager.set_source(ScriptedSource([2.0]))
        assert [e.x for e in manager.get_events()] == [2.0]

    def test_clear_events(self):
        manager = InputManager(ScriptedSource([1.0]))
        manager.clear_events()
        assert manager.get_events() == []
