"""
Data models for the falling-item catch game.

ItemCategory is the closed set of item kinds; GameStats is what the game
reports to its host when a run ends; CatchRules bundles the rule constants
of a single run and validates them up front.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator


class ItemCategory(str, Enum):
    """Kinds of falling items.

    Attributes:
        RECYCLABLE: Worth catching, scores a reward
        NOISE: Should be avoided, catching it costs a penalty
    """
    RECYCLABLE = "recyclable"
    NOISE = "noise"


class GameStats(BaseModel):
    """Immutable end-of-run catch statistics.

    Attributes:
        items_caught: Every item that landed in the container
        correct_catches: Recyclable items caught
        wrong_catches: Noise items caught

    Examples:
        >>> stats = GameStats(items_caught=4, correct_catches=3, wrong_catches=1)
        >>> stats.accuracy
        0.75
        >>> GameStats().accuracy
        0.0
    """
    items_caught: int = 0
    correct_catches: int = 0
    wrong_catches: int = 0

    @field_validator('items_caught', 'correct_catches', 'wrong_catches')
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        """Validate counters are non-negative."""
        if v < 0:
            raise ValueError(f'Catch counters must be non-negative, got {v}')
        return v

    @model_validator(mode='after')
    def validate_totals(self) -> 'GameStats':
        """Caught items are exactly the correct plus the wrong catches."""
        if self.items_caught != self.correct_catches + self.wrong_catches:
            raise ValueError(
                f'items_caught ({self.items_caught}) must equal correct_catches + '
                f'wrong_catches ({self.correct_catches} + {self.wrong_catches})'
            )
        return self

    @computed_field
    @property
    def accuracy(self) -> float:
        """Fraction of catches that were recyclable, 0.0 with no catches."""
        if self.items_caught == 0:
            return 0.0
        return self.correct_catches / self.items_caught

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        """String representation for debugging."""
        return (f"GameStats(caught={self.items_caught}, correct={self.correct_catches}, "
                f"wrong={self.wrong_catches})")


class CatchRules(BaseModel):
    """Rule constants for one run of the catch game.

    Times are in seconds, speeds in pixels per tick, sizes in pixels.

    Attributes:
        duration: Length of a run
        spawn_interval: Minimum time between two spawns
        recyclable_chance: Probability that a spawn is recyclable
        score_per_correct: Points added for a recyclable catch
        penalty_per_wrong: Points removed for a noise catch
        score_floor: Score never drops below this
        popup_lifetime: How long a score popup stays visible
        item_size: Width and height of a falling item
        fall_speed: Pixels an item descends per tick
        container_width: Width of the catcher
        container_height: Height of the catcher (the catch band)
        container_bottom_offset: Gap between catcher and field bottom
    """
    duration: float = Field(40.0, gt=0)
    spawn_interval: float = Field(0.6, gt=0)
    recyclable_chance: float = Field(0.65, ge=0, le=1)
    score_per_correct: int = Field(20, ge=0)
    penalty_per_wrong: int = Field(20, ge=0)
    score_floor: int = Field(0, ge=0)
    popup_lifetime: float = Field(1.5, gt=0)
    item_size: float = Field(100.0, gt=0)
    fall_speed: float = Field(3.0, gt=0)
    container_width: float = Field(140.0, gt=0)
    container_height: float = Field(100.0, gt=0)
    container_bottom_offset: float = Field(60.0, ge=0)

    model_config = ConfigDict(frozen=True)

    @computed_field
    @property
    def may_tunnel(self) -> bool:
        """True when an item can skip the whole catch band in one tick."""
        return self.fall_speed > self.container_height
