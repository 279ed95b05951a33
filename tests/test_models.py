"""
Tests for the pydantic models: primitives and catch-game models.
"""

import pytest
from pydantic import ValidationError

from models import CatchRules, Color, GameStats, ItemCategory, Resolution


# ============================================================================
# Primitives
# ============================================================================


class TestResolution:
    """Test surface size model."""

    def test_size(self):
        res = Resolution(width=800, height=600)
        assert (res.width, res.height) == (800, 600)
        assert str(res) == "Resolution(800x600)"

    def test_zero_allowed(self):
        assert Resolution(width=0, height=0).width == 0

    def test_negative_rejected(self):
        with pytest.raises(ValidationError):
            Resolution(width=-1, height=10)


class TestColor:
    """Test color validation and hex parsing."""

    def test_from_hex(self):
        color = Color.from_hex('#EF4444')
        assert color.as_rgb_tuple == (239, 68, 68)
        assert color.as_tuple == (239, 68, 68, 255)

    def test_from_hex_without_hash_and_alpha(self):
        assert Color.from_hex('000000', alpha=77).as_tuple == (0, 0, 0, 77)

    def test_bad_hex(self):
        with pytest.raises(ValueError):
            Color.from_hex('#FFF')

    def test_out_of_range(self):
        with pytest.raises(ValidationError):
            Color(r=256, g=0, b=0)



# ============================================================================
# Catch game models
# ============================================================================


class TestItemCategory:
    def test_values(self):
        assert {c.value for c in ItemCategory} == {'recyclable', 'noise'}


class TestGameStats:
    """Test end-of-run stats."""

    def test_defaults(self):
        stats = GameStats()
        assert stats.items_caught == 0
        assert stats.accuracy == 0.0

    def test_accuracy(self):
        stats = GameStats(items_caught=4, correct_catches=3, wrong_catches=1)
        assert stats.accuracy == 0.75

    def test_negative_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            GameStats(items_caught=-1, correct_catches=0, wrong_catches=-1)
        assert 'non-negative' in str(exc_info.value).lower()

    def test_totals_must_match(self):
        with pytest.raises(ValidationError):
            GameStats(items_caught=2, correct_catches=1, wrong_catches=0)

    def test_frozen(self):
        stats = GameStats()
        with pytest.raises(ValidationError):
            stats.items_caught = 5

    def test_dump_includes_accuracy(self):
        dumped = GameStats(items_caught=1, correct_catches=1, wrong_catches=0).model_dump()
        assert dumped['accuracy'] == 1.0


class TestCatchRules:
    """Test rule validation."""

    def test_defaults(self):
        rules = CatchRules()
        assert rules.duration == 40.0
        assert rules.penalty_per_wrong == 20
        assert rules.recyclable_chance == 0.65
        assert not rules.may_tunnel

    @pytest.mark.parametrize('field, value', [
        ('duration', 0),
        ('spawn_interval', -1),
        ('recyclable_chance', 1.5),
        ('penalty_per_wrong', -5),
        ('fall_speed', 0),
        ('container_width', 0),
        ('score_floor', -50),
    ])
    def test_invalid_values(self, field, value):
        with pytest.raises(ValidationError):
            CatchRules(**{field: value})

    def test_may_tunnel(self):
        assert CatchRules(fall_speed=120.0, container_height=100.0).may_tunnel
