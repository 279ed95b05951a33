"""
RecycleCatch - Item spawner.

Decides what the next falling item is and where it starts. Timing is the
game loop's job; the spawner only fills in a pooled item.
"""
import random
from typing import Optional

from games.RecycleCatch.entities import FallingItem
from kiosk.assets import AssetCategory, AssetRegistry
from models import CatchRules, ItemCategory

_ASSET_CATEGORIES = {
    ItemCategory.RECYCLABLE: AssetCategory.RECYCLABLE,
    ItemCategory.NOISE: AssetCategory.NOISE,
}


class ItemSpawner:
    """Fills in new falling items.

    Category is a weighted coin flip (recyclable with probability
    ``rules.recyclable_chance``); the asset is picked uniformly within the
    category; x is uniform across the field so the item stays fully inside.

    Args:
        rules: Rule constants for the run
        rng: Random source
        assets: Registry to pick item images from (None = placeholders only)
    """

    def __init__(
        self,
        rules: CatchRules,
        rng: random.Random,
        assets: Optional[AssetRegistry] = None,
    ):
        self.rules = rules
        self._rng = rng
        self._assets = assets

    def choose_category(self) -> ItemCategory:
        if self._rng.random() < self.rules.recyclable_chance:
            return ItemCategory.RECYCLABLE
        return ItemCategory.NOISE

    def choose_asset(self, category: ItemCategory) -> Optional[str]:
        if self._assets is None:
            return None
        return self._assets.pick_random(_ASSET_CATEGORIES[category])

    def spawn_x(self, field_width: float) -> float:
        max_x = max(0.0, field_width - self.rules.item_size)
        return self._rng.uniform(0.0, max_x)

    def fill(self, item: FallingItem, field_width: float) -> FallingItem:
        """Initialize an acquired item just above the top of the field."""
        size = self.rules.item_size
        item.category = self.choose_category()
        item.asset_name = self.choose_asset(item.category)
        item.x = self.spawn_x(field_width)
        item.y = -size
        item.width = size
        item.height = size
        item.speed = self.rules.fall_speed
        item.scale = 1.0
        item.alpha = 1.0
        item.rotation = 0.0
        return item
