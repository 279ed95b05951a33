"""
Tests for the container geometry, pooled entities and the item spawner.
"""

import random

import pytest

from games.RecycleCatch import config
from games.RecycleCatch.entities import Container, FallingItem, ScorePopup
from games.RecycleCatch.spawner import ItemSpawner
from kiosk.assets import AssetRegistry
from kiosk.pool import ObjectPool
from models import CatchRules, ItemCategory


@pytest.fixture
def container():
    """Desktop container on an 800x600 field: x 330..470, y 440..540."""
    return Container(width=140, height=100, bottom_offset=60, field_width=800, field_height=600)


def item_at(center_x, bottom, size=100.0):
    return FallingItem(x=center_x - size / 2, y=bottom - size, width=size, height=size)


class TestContainerGeometry:
    """Test position, clamping and field changes."""

    def test_starts_centered(self, container):
        assert container.x == 330.0
        assert container.y == 440.0
        assert (container.left, container.right) == (330.0, 470.0)

    @pytest.mark.parametrize('pointer_x, expected', [
        (400.0, 330.0),
        (0.0, 0.0),
        (-1000.0, 0.0),
        (799.0, 660.0),
        (5000.0, 660.0),
    ])
    def test_move_to_clamps(self, container, pointer_x, expected):
        container.move_to(pointer_x)
        assert container.x == expected

    def test_field_narrower_than_container(self):
        container = Container(width=140, height=100, bottom_offset=60, field_width=100, field_height=600)
        assert container.x == 0.0
        container.move_to(50.0)
        assert container.x == 0.0

    def test_set_field_size(self, container):
        container.move_to(10000.0)
        container.set_field_size(500.0, 400.0)
        assert container.x == 360.0
        assert container.y == 240.0


class TestContainerCatch:
    """Test the band-overlap catch test, edges inclusive."""

    @pytest.mark.parametrize('center_x, bottom', [
        (400.0, 440.0),   # top edge of the band
        (400.0, 540.0),   # bottom edge of the band
        (330.0, 490.0),   # left edge
        (470.0, 490.0),   # right edge
    ])
    def test_boundaries_catch(self, container, center_x, bottom):
        assert container.catches(item_at(center_x, bottom))

    @pytest.mark.parametrize('center_x, bottom', [
        (400.0, 439.9),
        (400.0, 540.1),
        (329.9, 490.0),
        (470.1, 490.0),
    ])
    def test_just_outside_misses(self, container, center_x, bottom):
        assert not container.catches(item_at(center_x, bottom))

    def test_wide_item_overlapping_edge_needs_center_inside(self, container):
        # 100px item whose right half overlaps the container but center does not
        assert not container.catches(item_at(300.0, 490.0))


class TestPooledEntities:
    """Test entity defaults survive pool recycling."""

    def test_item_reset_on_release(self):
        pool = ObjectPool(FallingItem, max_size=2)
        item = pool.acquire()
        item.category = ItemCategory.NOISE
        item.scale = 0.3
        item.asset_name = 'banana-peel'
        pool.release(item)
        assert item.category == ItemCategory.RECYCLABLE
        assert item.scale == 1.0
        assert item.asset_name is None

    def test_tween_keys_follow_handle(self):
        pool = ObjectPool(FallingItem, max_size=1)
        first = pool.acquire()
        key = first.tween_key('scale')
        pool.release(first)
        second = pool.acquire()
        assert second is first
        assert second.tween_key('scale') != key

    def test_popup_key(self):
        popup = ScorePopup(handle=7)
        assert popup.tween_key() == 'popup_7_scale'

    def test_item_edges(self):
        item = FallingItem(x=10.0, y=20.0, width=100.0, height=50.0)
        assert item.bottom == 70.0
        assert item.center_x == 60.0


class TestSpawner:
    """Test category, asset and position choices."""

    def test_fill(self):
        rules = CatchRules(item_size=100.0, fall_speed=3.0)
        spawner = ItemSpawner(rules, random.Random(1))
        item = spawner.fill(FallingItem(), field_width=800.0)
        assert 0.0 <= item.x <= 700.0
        assert item.y == -100.0
        assert (item.width, item.height, item.speed) == (100.0, 100.0, 3.0)
        assert item.asset_name is None

    def test_x_keeps_item_inside_field(self):
        spawner = ItemSpawner(CatchRules(), random.Random(2))
        xs = [spawner.spawn_x(800.0) for _ in range(500)]
        assert min(xs) >= 0.0
        assert max(xs) <= 700.0

    def test_narrow_field_spawns_at_zero(self):
        spawner = ItemSpawner(CatchRules(), random.Random(3))
        assert spawner.spawn_x(50.0) == 0.0

    @pytest.mark.parametrize('chance, expected', [
        (1.0, {ItemCategory.RECYCLABLE}),
        (0.0, {ItemCategory.NOISE}),
    ])
    def test_category_extremes(self, chance, expected):
        spawner = ItemSpawner(CatchRules(recyclable_chance=chance), random.Random(4))
        assert {spawner.choose_category() for _ in range(100)} == expected

    def test_category_ratio(self):
        spawner = ItemSpawner(CatchRules(recyclable_chance=0.65), random.Random(5))
        picks = [spawner.choose_category() for _ in range(4000)]
        ratio = picks.count(ItemCategory.RECYCLABLE) / len(picks)
        assert 0.6 < ratio < 0.7

    def test_asset_from_matching_category(self):
        assets = AssetRegistry(rng=random.Random(6))
        assets.register('bottle', 'bottle.png', 'recyclable')
        assets.register('banana-peel', 'banana.png', 'noise')
        spawner = ItemSpawner(CatchRules(), random.Random(7), assets)
        assert spawner.choose_asset(ItemCategory.RECYCLABLE) == 'bottle'
        assert spawner.choose_asset(ItemCategory.NOISE) == 'banana-peel'

    def test_bundled_manifest_covers_both_categories(self):
        assets = AssetRegistry.from_yaml(config.ASSET_MANIFEST)
        assert assets.names('recyclable')
        assert assets.names('noise')
        assert config.CONTAINER_ASSET in assets.names('ui')
        assert config.BACKGROUND_ASSET in assets.names('background')
