"""Image asset registry.

Loads images named in a YAML manifest on a background thread and hands
them out by logical name. Nothing here ever blocks a frame: until an image
has finished loading (or if it failed), ``get()`` returns None and the
caller draws a placeholder.

Manifest format (assets.yaml):

    base_dir: images            # optional, relative to the manifest
    assets:
      - name: argan-conditioner
        file: items/ArganConditioner.png
        category: recyclable
      - name: trash-10
        file: items/trash-10.png
        category: noise
        weight: 2               # optional, for pick_random()
      - name: container
        file: ui/container.png
        category: ui

Usage:
    registry = AssetRegistry.from_yaml(Path('assets/assets.yaml'))
    registry.load_all()                       # returns a Future, don't wait on it
    name = registry.pick_random(AssetCategory.RECYCLABLE)
    surface = registry.get(name)              # None until loaded
"""
import random
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pygame
import yaml

from kiosk.logging import get_logger

log = get_logger('assets')


class AssetCategory(str, Enum):
    """Tag used to group assets for random picks."""
    RECYCLABLE = "recyclable"
    NOISE = "noise"
    UI = "ui"
    BACKGROUND = "background"


@dataclass
class ImageAsset:
    """One registered image and its load status."""
    name: str
    file: str
    category: AssetCategory
    weight: float = 1.0
    loaded: bool = False
    failed: bool = False
    image: Optional[pygame.Surface] = field(default=None, repr=False)


class AssetRegistry:
    """Asynchronous image loader and cache keyed by logical name.

    Args:
        base_dir: Directory that relative asset paths resolve against
        rng: Random source for pick_random()
    """

    def __init__(self, base_dir: Optional[Path] = None, rng: Optional[random.Random] = None):
        self._base_dir = base_dir or Path('.')
        self._rng = rng or random.Random()
        self._assets: Dict[str, ImageAsset] = {}
        self._executor: Optional[ThreadPoolExecutor] = None
        self._load_future: Optional[Future] = None

    @classmethod
    def from_yaml(cls, manifest_path: Path, rng: Optional[random.Random] = None) -> 'AssetRegistry':
        """Build a registry from a YAML manifest.

        A missing or malformed manifest yields an empty registry; the game
        then renders placeholders for everything.
        """
        registry = cls(base_dir=manifest_path.parent, rng=rng)
        try:
            data = yaml.safe_load(manifest_path.read_text())
        except (OSError, yaml.YAMLError) as e:
            log.warning("Could not read asset manifest %s: %s", manifest_path, e)
            return registry

        if not isinstance(data, dict):
            log.warning("Asset manifest %s is empty or not a mapping", manifest_path)
            return registry

        registry.register_manifest(data)
        return registry

    def register_manifest(self, data: Dict[str, Any]) -> None:
        """Register every entry of an already-parsed manifest."""
        if data.get('base_dir'):
            self._base_dir = self._base_dir / data['base_dir']

        for entry in data.get('assets') or []:
            try:
                self.register(
                    name=entry['name'],
                    file=entry['file'],
                    category=entry.get('category', AssetCategory.UI.value),
                    weight=float(entry.get('weight', 1.0)),
                )
            except (KeyError, TypeError, ValueError) as e:
                log.warning("Skipping invalid asset entry %r: %s", entry, e)

    def register(
        self,
        name: str,
        file: str,
        category: Union[AssetCategory, str],
        weight: float = 1.0,
    ) -> ImageAsset:
        """Register an image under a logical name (replaces an existing entry)."""
        asset = ImageAsset(
            name=name,
            file=file,
            category=AssetCategory(category),
            weight=weight,
        )
        self._assets[name] = asset
        return asset

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_all(self) -> Future:
        """Start loading every registered image in the background.

        Returns:
            Future that completes when every load has been attempted.
            Calling again while a load is in flight returns the same Future.
        """
        if self._load_future is not None and not self._load_future.done():
            return self._load_future
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix='asset-loader')
        log.info("Loading %d assets...", len(self._assets))
        self._load_future = self._executor.submit(self.load_all_blocking)
        return self._load_future

    def load_all_blocking(self) -> int:
        """Load every image that is not loaded yet, on the calling thread.

        Returns:
            Number of loaded assets afterwards
        """
        for name in list(self._assets):
            self.load(name)
        log.info("Asset loading complete (%d/%d)", self.loaded_count(), self.total_count())
        return self.loaded_count()

    def load(self, name: str) -> Optional[pygame.Surface]:
        """Load one image. Failures are logged and leave it unloaded."""
        asset = self._assets.get(name)
        if asset is None:
            log.warning("Asset '%s' not found", name)
            return None
        if asset.loaded:
            return asset.image

        path = Path(asset.file)
        if not path.is_absolute():
            path = self._base_dir / path

        try:
            image = pygame.image.load(str(path))
        except (pygame.error, FileNotFoundError, OSError) as e:
            asset.failed = True
            log.warning("Failed to load asset '%s' from %s: %s", name, path, e)
            return None

        asset.image = image
        asset.loaded = True
        asset.failed = False
        log.debug("Loaded asset: %s", name)
        return image

    def shutdown(self) -> None:
        """Stop the loader thread (pending loads are abandoned)."""
        if self._executor is not None:
            self._executor.shutdown(wait=False, cancel_futures=True)
            self._executor = None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get(self, name: Optional[str]) -> Optional[pygame.Surface]:
        """Loaded image for ``name``, or None if unknown or not loaded yet."""
        if not name:
            return None
        asset = self._assets.get(name)
        if asset is None or not asset.loaded:
            return None
        return asset.image

    def is_loaded(self, name: str) -> bool:
        asset = self._assets.get(name)
        return asset is not None and asset.loaded

    def names(self, category: Union[AssetCategory, str]) -> List[str]:
        """Logical names registered under a category."""
        category = AssetCategory(category)
        return [a.name for a in self._assets.values() if a.category == category]

    def pick_random(self, category: Union[AssetCategory, str]) -> Optional[str]:
        """Weighted random name within a category, None if the category is empty."""
        category = AssetCategory(category)
        candidates = [a for a in self._assets.values() if a.category == category]
        if not candidates:
            return None
        weights = [a.weight for a in candidates]
        if sum(weights) <= 0:
            return self._rng.choice(candidates).name
        return self._rng.choices(candidates, weights=weights, k=1)[0].name

    def loaded_count(self) -> int:
        return sum(1 for a in self._assets.values() if a.loaded)

    def total_count(self) -> int:
        return len(self._assets)
