"""
RecycleCatch - Render pass.

Draws one FrameSnapshot. Everything is drawn onto an offscreen layer the
size of the field, and the layer is blitted to the target once, offset by
the frame's shake sample, so the whole scene shakes together.

Images come from the asset registry when loaded; anything missing falls
back to drawn placeholders, so the game is playable before (or without)
its artwork.
"""
from typing import TYPE_CHECKING, Dict, Optional, Tuple

import pygame

from games.RecycleCatch import config
from games.RecycleCatch.entities import FallingItem, ScorePopup
from kiosk.animation import Particle
from kiosk.assets import AssetRegistry
from models import ItemCategory

if TYPE_CHECKING:
    from games.RecycleCatch.game_mode import ContainerView, FrameSnapshot

_ITEM_LABELS = {
    ItemCategory.RECYCLABLE: 'PARK',
    ItemCategory.NOISE: 'TRASH',
}

_ITEM_COLORS = {
    ItemCategory.RECYCLABLE: config.RECYCLABLE_COLORS,
    ItemCategory.NOISE: config.NOISE_COLORS,
}

SHADOW_OFFSET = 3
OUTLINE_WIDTH = 2


class CatchRenderer:
    """Draws frame snapshots of the catch game.

    Args:
        assets: Image registry (None = placeholders only)
    """

    def __init__(self, assets: Optional[AssetRegistry] = None):
        self._assets = assets
        self._layer: Optional[pygame.Surface] = None
        self._gradient: Optional[pygame.Surface] = None
        self._fonts: Dict[int, pygame.font.Font] = {}
        self._scaled: Dict[str, Tuple[Tuple[int, int], pygame.Surface]] = {}
        self._placeholders: Dict[Tuple[ItemCategory, int, int], pygame.Surface] = {}

    def render(self, target: pygame.Surface, snapshot: 'FrameSnapshot') -> None:
        """Draw ``snapshot`` onto ``target`` at the origin."""
        size = (max(1, int(snapshot.field_width)), max(1, int(snapshot.field_height)))
        layer = self._get_layer(size)

        self._draw_background(layer, size)
        self._draw_ground(layer, size)
        for item in snapshot.items:
            self._draw_item(layer, item)
        for particle in snapshot.particles:
            self._draw_particle(layer, particle)
        for popup in snapshot.popups:
            self._draw_popup(layer, popup)
        self._draw_container(layer, snapshot.container)
        self._draw_flash(layer, snapshot.flash_color, snapshot.flash_alpha)

        offset = (round(snapshot.shake.x), round(snapshot.shake.y))
        if offset != (0, 0):
            # uncovered edges while shaking
            target.fill(config.GROUND_COLOR.as_rgb_tuple, pygame.Rect((0, 0), size))
        target.blit(layer, offset)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _get_layer(self, size: Tuple[int, int]) -> pygame.Surface:
        if self._layer is None or self._layer.get_size() != size:
            self._layer = pygame.Surface(size)
        return self._layer

    def _font(self, size: int) -> pygame.font.Font:
        if size not in self._fonts:
            if not pygame.font.get_init():
                pygame.font.init()
            self._fonts[size] = pygame.font.Font(None, size)
        return self._fonts[size]

    def _image(self, name: Optional[str], width: int, height: int) -> Optional[pygame.Surface]:
        """Loaded asset scaled to size. One scaled copy is kept per name."""
        if self._assets is None or not name:
            return None
        image = self._assets.get(name)
        if image is None:
            return None
        size = (max(1, width), max(1, height))
        cached = self._scaled.get(name)
        if cached is None or cached[0] != size:
            cached = (size, pygame.transform.scale(image, size))
            self._scaled[name] = cached
        return cached[1]

    @staticmethod
    def _blit_transformed(
        layer: pygame.Surface,
        surface: pygame.Surface,
        center: Tuple[float, float],
        scale: float = 1.0,
        rotation: float = 0.0,
        alpha: float = 1.0,
    ) -> None:
        """Blit ``surface`` centered at ``center`` with scale, rotation (degrees) and alpha."""
        if scale <= 0 or alpha <= 0:
            return
        if scale != 1.0 or rotation:
            # canvas rotation is clockwise, pygame's is counterclockwise
            surface = pygame.transform.rotozoom(surface, -rotation, scale)
        if alpha < 1.0:
            surface = surface.copy()
            surface.set_alpha(int(alpha * 255))
        rect = surface.get_rect(center=(round(center[0]), round(center[1])))
        layer.blit(surface, rect)

    # =========================================================================
    # Scene
    # =========================================================================

    def _draw_background(self, layer: pygame.Surface, size: Tuple[int, int]) -> None:
        image = self._image(config.BACKGROUND_ASSET, *size)
        if image is not None:
            layer.blit(image, (0, 0))
            return

        if self._gradient is None or self._gradient.get_size() != size:
            self._gradient = _vertical_gradient(
                size, config.BACKGROUND_TOP.as_rgb_tuple, config.BACKGROUND_BOTTOM.as_rgb_tuple)
        layer.blit(self._gradient, (0, 0))

    def _draw_ground(self, layer: pygame.Surface, size: Tuple[int, int]) -> None:
        width, height = size
        top = height - config.GROUND_HEIGHT
        image = self._image(config.GROUND_ASSET, width, config.GROUND_HEIGHT)
        if image is not None:
            layer.blit(image, (0, top))
        else:
            layer.fill(config.GROUND_COLOR.as_rgb_tuple, pygame.Rect(0, top, width, config.GROUND_HEIGHT))

    def _draw_item(self, layer: pygame.Surface, item: FallingItem) -> None:
        width, height = int(item.width), int(item.height)
        surface = self._image(item.asset_name, width, height)
        if surface is None:
            key = (item.category, width, height)
            if key not in self._placeholders:
                self._placeholders[key] = self._placeholder_item(item.category, width, height)
            surface = self._placeholders[key]
        center = (item.x + item.width / 2, item.y + item.height / 2)
        self._blit_transformed(layer, surface, center, item.scale, item.rotation, item.alpha)

    def _placeholder_item(self, category: ItemCategory, width: int, height: int) -> pygame.Surface:
        """Labelled box with a drop shadow, coloured by category."""
        body, border = _ITEM_COLORS[category]
        surface = pygame.Surface((width + SHADOW_OFFSET, height + SHADOW_OFFSET), pygame.SRCALPHA)
        surface.fill(config.ITEM_SHADOW.as_tuple, pygame.Rect(SHADOW_OFFSET, SHADOW_OFFSET, width, height))
        surface.fill(body.as_tuple, pygame.Rect(0, 0, width, height))
        pygame.draw.rect(surface, border.as_tuple, pygame.Rect(0, 0, width, height), 2)

        label = self._font(config.LABEL_FONT_SIZE).render(_ITEM_LABELS[category], True, (255, 255, 255))
        surface.blit(label, label.get_rect(center=(width // 2, height // 2)))
        return surface

    def _draw_particle(self, layer: pygame.Surface, particle: Particle) -> None:
        radius = max(1, int(particle.size))
        alpha = int(particle.alpha * 255)
        if alpha <= 0:
            return
        surf = pygame.Surface((radius * 2 + 2, radius * 2 + 2), pygame.SRCALPHA)
        pygame.draw.circle(surf, (*particle.color, alpha), (radius + 1, radius + 1), radius)
        layer.blit(surf, (int(particle.x) - radius - 1, int(particle.y) - radius - 1))

    def _draw_popup(self, layer: pygame.Surface, popup: ScorePopup) -> None:
        if popup.opacity <= 0:
            return
        font = self._font(config.POPUP_FONT_SIZE)
        fill = font.render(popup.text, True, popup.color)
        outline = font.render(popup.text, True, (255, 255, 255))

        w, h = fill.get_size()
        surface = pygame.Surface((w + OUTLINE_WIDTH * 2, h + OUTLINE_WIDTH * 2), pygame.SRCALPHA)
        for dx in (-OUTLINE_WIDTH, 0, OUTLINE_WIDTH):
            for dy in (-OUTLINE_WIDTH, 0, OUTLINE_WIDTH):
                if dx or dy:
                    surface.blit(outline, (OUTLINE_WIDTH + dx, OUTLINE_WIDTH + dy))
        surface.blit(fill, (OUTLINE_WIDTH, OUTLINE_WIDTH))

        # text baseline sits on popup.y
        center = (popup.x, popup.y - surface.get_height() / 2)
        self._blit_transformed(layer, surface, center, popup.scale, 0.0, popup.opacity)

    def _draw_container(self, layer: pygame.Surface, container: 'ContainerView') -> None:
        width, height = int(container.width), int(container.height)
        surface = self._image(config.CONTAINER_ASSET, width, height)
        if surface is None:
            surface = _drawn_bin(width, height)
        center = (container.x + container.width / 2, container.y + container.height / 2)
        self._blit_transformed(layer, surface, center, container.scale, container.rotation)

    def _draw_flash(self, layer: pygame.Surface, color: Tuple[int, int, int], alpha: float) -> None:
        if alpha <= 0:
            return
        overlay = pygame.Surface(layer.get_size(), pygame.SRCALPHA)
        overlay.fill((*color, int(min(alpha, 1.0) * 255)))
        layer.blit(overlay, (0, 0))


def _vertical_gradient(
    size: Tuple[int, int],
    top: Tuple[int, int, int],
    bottom: Tuple[int, int, int],
) -> pygame.Surface:
    width, height = size
    surface = pygame.Surface(size)
    span = max(1, height - 1)
    for y in range(height):
        t = y / span
        color = tuple(int(a + (b - a) * t) for a, b in zip(top, bottom))
        pygame.draw.line(surface, color, (0, y), (width - 1, y))
    return surface


def _drawn_bin(width: int, height: int) -> pygame.Surface:
    """Open-topped recycling bin drawn with primitives."""
    surface = pygame.Surface((width, height), pygame.SRCALPHA)
    inset = max(1, width // 10)
    rim = max(4, height // 8)
    body = [(0, rim), (width - 1, rim), (width - 1 - inset, height - 1), (inset, height - 1)]
    pygame.draw.polygon(surface, config.CONTAINER_BODY.as_tuple, body)
    pygame.draw.polygon(surface, config.CONTAINER_RIM.as_tuple, body, 3)
    pygame.draw.rect(surface, config.CONTAINER_RIM.as_tuple, pygame.Rect(0, 0, width, rim))
    return surface
