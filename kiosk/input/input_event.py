"""
Pointer Event - A single horizontal pointer position.

The catch games only care where the player's pointer is along the x axis,
so events carry nothing else. Frozen dataclass so events can be passed
around and queued without copying.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class PointerEvent:
    """Immutable pointer sample from any source.

    Attributes:
        x: Field-local x coordinate in pixels (may lie outside the field;
           consumers clamp)
        timestamp: Time the event occurred (seconds, monotonic clock)
    """
    x: float
    timestamp: float

    def __post_init__(self):
        """Validate timestamp is non-negative."""
        if self.timestamp < 0:
            raise ValueError(f'Timestamp must be non-negative, got {self.timestamp}')

    def __str__(self) -> str:
        return f"PointerEvent(x={self.x:.1f}, t={self.timestamp:.3f})"
