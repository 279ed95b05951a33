"""
Unified models library for the kiosk catch game.

This package provides the Pydantic data models used across the system:
- Primitives: Basic geometric and color types (Point2D, Resolution, Color)
- Catch game: Item categories, end-of-run statistics and rule constants

Usage:
    >>> from models import Point2D, Color
    >>> from models import ItemCategory, GameStats, CatchRules
"""

# ============================================================================
# Primitives (basic types used everywhere)
# ============================================================================
from .primitives import (
    Point2D,
    Resolution,
    Color,
)

# ============================================================================
# Catch game models
# ============================================================================
from .catch_game import (
    ItemCategory,
    GameStats,
    CatchRules,
)

__all__ = [
    # Primitives
    "Point2D",
    "Resolution",
    "Color",
    # Catch game
    "ItemCategory",
    "GameStats",
    "CatchRules",
]
