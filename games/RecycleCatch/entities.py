"""
RecycleCatch - Falling items, score popups and the container.

Items and popups are pooled: the game never constructs them directly but
acquires them from an ObjectPool and fills in the fields. Every field
therefore needs a default so ``reset()`` can restore it.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

from kiosk.pool import PooledObject
from models import ItemCategory


@dataclass
class FallingItem(PooledObject):
    """An item falling down the play field.

    Position is the top-left corner. Size and category are fixed at spawn;
    ``y`` grows by ``speed`` every tick. ``scale``, ``alpha`` and
    ``rotation`` are visual state copied from the item's spawn tweens.
    """
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    category: ItemCategory = ItemCategory.RECYCLABLE
    speed: float = 0.0
    asset_name: Optional[str] = None
    scale: float = 1.0
    alpha: float = 1.0
    rotation: float = 0.0

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    def tween_key(self, channel: str) -> str:
        """Animation key for one of this item's tweens (scale, alpha, rotation)."""
        return f"item_{self.handle}_{channel}"


@dataclass
class ScorePopup(PooledObject):
    """Floating ``+20 DKK`` / ``-20 DKK`` text shown where an item was caught.

    ``origin_y`` is where the popup appeared; it rises from there at a
    constant speed while ``opacity`` falls linearly to 0.
    """
    x: float = 0.0
    y: float = 0.0
    origin_y: float = 0.0
    text: str = ''
    color: Tuple[int, int, int] = (255, 255, 255)
    opacity: float = 1.0
    scale: float = 1.0
    created_at: float = 0.0

    def tween_key(self) -> str:
        return f"popup_{self.handle}_scale"


class Container:
    """The player's catcher, moved horizontally along the bottom of the field.

    ``x`` is always kept within ``[0, field_width - width]``. When the field
    is narrower than the container, it sits at 0.

    Args:
        width: Container width in pixels
        height: Container height in pixels (the catch band)
        bottom_offset: Gap between container bottom and field bottom
        field_width: Play field width
        field_height: Play field height
    """

    def __init__(
        self,
        width: float,
        height: float,
        bottom_offset: float,
        field_width: float,
        field_height: float,
    ):
        self.width = width
        self.height = height
        self.bottom_offset = bottom_offset
        self.field_width = field_width
        self.field_height = field_height
        self.x = 0.0
        self.scale = 1.0
        self.rotation = 0.0
        self.center()

    @property
    def y(self) -> float:
        """Top edge, derived from the field height and bottom offset."""
        return self.field_height - self.height - self.bottom_offset

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    def clamp(self, x: float) -> float:
        """Clamp a left-edge x into the field."""
        return max(0.0, min(self.field_width - self.width, x))

    def center(self) -> None:
        """Move to the middle of the field."""
        self.x = self.clamp(self.field_width / 2 - self.width / 2)

    def move_to(self, pointer_x: float) -> None:
        """Center on a pointer x, clamped to the field."""
        self.x = self.clamp(pointer_x - self.width / 2)

    def set_field_size(self, field_width: float, field_height: float) -> None:
        """Adopt a new field size and re-clamp x."""
        self.field_width = field_width
        self.field_height = field_height
        self.x = self.clamp(self.x)

    def catches(self, item: FallingItem) -> bool:
        """Band-overlap catch test, all boundaries inclusive.

        The item's bottom edge must lie within the container's vertical
        extent and its horizontal center within the container's width. Not
        swept: an item moving more than ``height`` per tick can pass through.
        """
        top = self.y
        return (top <= item.bottom <= top + self.height
                and self.left <= item.center_x <= self.right)
