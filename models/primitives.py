"""
Shared primitive data types for the kiosk games.

Basic geometric and color types used by the platform (`kiosk`) and the
games built on it.
"""

from pydantic import BaseModel, Field, field_validator, computed_field, ConfigDict
from typing import Tuple


class Point2D(BaseModel):
    """Immutable 2D point/vector for positions, offsets and velocities.

    Attributes:
        x: X coordinate (horizontal)
        y: Y coordinate (vertical, grows downward as on screen)

    Examples:
        >>> pos = Point2D(x=100.0, y=200.0)
        >>> shake = Point2D(x=-3.5, y=1.25)
    """
    x: float
    y: float

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        """String representation for debugging."""
        return f"Point2D(x={self.x:.2f}, y={self.y:.2f})"


class Resolution(BaseModel):
    """Pixel size of a drawing surface.

    Zero is allowed: a surface that has not been laid out yet reports 0x0.

    Attributes:
        width: Width in pixels
        height: Height in pixels

    Examples:
        >>> Resolution(width=1280, height=720).width
        1280
    """
    width: int = Field(..., ge=0)
    height: int = Field(..., ge=0)

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        """String representation for debugging."""
        return f"Resolution({self.width}x{self.height})"


class Color(BaseModel):
    """Immutable RGBA color with validation.

    All color components must be in the range [0, 255] inclusive.

    Attributes:
        r: Red component (0-255)
        g: Green component (0-255)
        b: Blue component (0-255)
        a: Alpha/opacity component (0-255), where 255 is fully opaque

    Examples:
        >>> Color.from_hex('#22C55E').as_rgb_tuple
        (34, 197, 94)
    """
    r: int
    g: int
    b: int
    a: int = 255

    @field_validator('r', 'g', 'b', 'a')
    @classmethod
    def validate_color_range(cls, v: int) -> int:
        """Validate color components are in valid range [0, 255]."""
        if not 0 <= v <= 255:
            raise ValueError(f'Color component must be in range [0, 255], got {v}')
        return v

    @classmethod
    def from_hex(cls, value: str, alpha: int = 255) -> 'Color':
        """Build a color from a CSS-style ``#RRGGBB`` string.

        Args:
            value: Hex string, with or without the leading ``#``
            alpha: Alpha component

        Raises:
            ValueError: If the string is not six hex digits
        """
        digits = value.lstrip('#')
        if len(digits) != 6:
            raise ValueError(f'Expected #RRGGBB, got {value!r}')
        return cls(
            r=int(digits[0:2], 16),
            g=int(digits[2:4], 16),
            b=int(digits[4:6], 16),
            a=alpha,
        )

    @computed_field
    @property
    def as_tuple(self) -> Tuple[int, int, int, int]:
        """Return color as RGBA tuple for pygame."""
        return (self.r, self.g, self.b, self.a)

    @computed_field
    @property
    def as_rgb_tuple(self) -> Tuple[int, int, int]:
        """Return color as RGB tuple (without alpha)."""
        return (self.r, self.g, self.b)

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        """String representation for debugging."""
        return f"Color(r={self.r}, g={self.g}, b={self.b}, a={self.a})"
