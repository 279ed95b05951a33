"""
RecycleCatch Game Mode

Timed catch game: items fall down the field, the player moves a bin along
the bottom to catch recyclable items and avoid noise items.

The game never runs its own loop. Once started it requests a tick on the
frame scheduler and each tick requests the next, until the timer runs out
or the host tears it down. The animation driver is started before the first
tick is requested, so tweens are already advanced when a tick reads them.

At the end of each tick the game publishes a FrameSnapshot; the renderer
draws only that, never the live pools.
"""
import random
from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Optional, Tuple

import pygame

from games.RecycleCatch import config, game_info
from games.RecycleCatch.config import DevicePreset
from games.RecycleCatch.entities import Container, FallingItem, ScorePopup
from games.RecycleCatch.renderer import CatchRenderer
from games.RecycleCatch.spawner import ItemSpawner
from kiosk.animation import AnimationManager, Particle
from kiosk.animation.easing import ease_out_back, ease_out_bounce, ease_out_cubic, ease_out_elastic, linear
from kiosk.assets import AssetRegistry
from kiosk.games import BaseGame, GameState
from kiosk.input import PointerEvent
from kiosk.logging import emit_record, get_logger
from kiosk.pool import ObjectPool
from kiosk.scheduler import FrameScheduler, MonotonicFrameScheduler
from models import CatchRules, Color, GameStats, ItemCategory, Point2D, Resolution

log = get_logger('game_mode')

BOUNCE_KEY = 'container_bounce'
WOBBLE_KEY = 'container_wobble'
FLASH_KEY = 'catch_flash'
POPUP_START_SCALE = 0.5

SizeProvider = Callable[[], Tuple[float, float]]


@dataclass(frozen=True)
class ContainerView:
    """Container geometry and visual state for one frame."""
    x: float
    y: float
    width: float
    height: float
    scale: float
    rotation: float


@dataclass(frozen=True)
class FrameSnapshot:
    """Everything the renderer needs for one frame.

    Items, popups and particles are copies, so the pools can be mutated
    (or cleared) while a frame is being drawn.
    """
    field_width: float
    field_height: float
    state: GameState
    score: int
    remaining: float
    items: Tuple[FallingItem, ...]
    popups: Tuple[ScorePopup, ...]
    particles: Tuple[Particle, ...]
    container: ContainerView
    shake: Point2D
    flash_color: Tuple[int, int, int]
    flash_alpha: float


class RecycleCatchMode(BaseGame):
    """RecycleCatch game mode - catch recyclables, dodge trash, beat the clock.

    Lifecycle: IDLE -> RUNNING -> ENDED. ``set_playing(True)`` starts a run
    once; ``set_playing(False)`` or ``dispose()`` tears it down without
    reporting game-ended. When the timer runs out, ``on_game_end`` fires
    exactly once.
    """

    NAME = game_info.NAME
    DESCRIPTION = game_info.DESCRIPTION
    VERSION = game_info.VERSION
    AUTHOR = game_info.AUTHOR
    ARGUMENTS = game_info.ARGUMENTS

    def __init__(
        self,
        scheduler: Optional[FrameScheduler] = None,
        assets: Optional[AssetRegistry] = None,
        animations: Optional[AnimationManager] = None,
        rng: Optional[random.Random] = None,
        field_width: float = config.SCREEN_WIDTH,
        field_height: float = config.SCREEN_HEIGHT,
        preset: str = config.DEFAULT_PRESET,
        on_score_change: Optional[Callable[[int], None]] = None,
        on_time_change: Optional[Callable[[float], None]] = None,
        on_game_end: Optional[Callable[[int, GameStats], None]] = None,
        **overrides,
    ):
        """Initialize RecycleCatch game.

        Args:
            scheduler: Frame scheduler driving ticks (wall clock by default)
            assets: Image registry (None = placeholder graphics only)
            animations: Animation manager on the same scheduler (created if None)
            rng: Random source for spawns and effects
            field_width: Play field width in pixels
            field_height: Play field height in pixels
            preset: Device preset name (desktop, mobile, auto)
            on_score_change: Called with the new score after every change
            on_time_change: Called with the remaining seconds every tick
            on_game_end: Called once with final score and stats when time runs out
            **overrides: CatchRules field overrides (None values ignored)

        Raises:
            ValueError: Unknown preset name
            pydantic.ValidationError: Invalid rule override
        """
        self._scheduler = scheduler or MonotonicFrameScheduler()
        self._assets = assets
        self._rng = rng or random.Random()
        self._animations = animations or AnimationManager(
            self._scheduler, rng=self._rng, max_particles=config.MAX_PARTICLES,
        )

        self._preset: DevicePreset = config.get_preset(preset, field_width)
        self._rules: CatchRules = config.default_rules(self._preset, **overrides)
        if self._rules.may_tunnel:
            log.warning(
                "fall_speed %.1f exceeds container height %.1f; fast items can pass through the bin",
                self._rules.fall_speed, self._rules.container_height,
            )

        self._on_score_change = on_score_change or (lambda score: None)
        self._on_time_change = on_time_change or (lambda remaining: None)
        self._on_game_end = on_game_end or (lambda score, stats: None)

        self._field_width = float(field_width)
        self._field_height = float(field_height)
        self._container = Container(
            width=self._rules.container_width,
            height=self._rules.container_height,
            bottom_offset=self._rules.container_bottom_offset,
            field_width=self._field_width,
            field_height=self._field_height,
        )
        self._spawner = ItemSpawner(self._rules, self._rng, assets)
        self._items: ObjectPool[FallingItem] = ObjectPool(
            FallingItem, max_size=config.MAX_ITEMS, name='items')
        self._popups: ObjectPool[ScorePopup] = ObjectPool(
            ScorePopup, max_size=config.MAX_POPUPS, name='popups')
        self._catch_handlers: Dict[ItemCategory, Callable[[FallingItem, float], None]] = {
            ItemCategory.RECYCLABLE: self._correct_catch,
            ItemCategory.NOISE: self._wrong_catch,
        }

        self._state = GameState.IDLE
        self._start_time: Optional[float] = None
        self._last_spawn = 0.0
        self._remaining = self._rules.duration
        self._score = 0
        self._items_caught = 0
        self._correct_catches = 0
        self._wrong_catches = 0
        self._items_spawned = 0
        self._items_missed = 0
        self._flash_color = config.POSITIVE_COLOR.as_rgb_tuple
        self._game_end_reported = False

        self._tick_handle: Optional[int] = None
        self._resize_handle: Optional[int] = None
        self._renderer: Optional[CatchRenderer] = None

        self._snapshot = self._build_snapshot()
        log.debug("Created %s (%s preset, field %dx%d)",
                  self.NAME, self._preset.name, field_width, field_height)

    # =========================================================================
    # Properties
    # =========================================================================

    def _get_internal_state(self) -> GameState:
        return self._state

    def get_score(self) -> int:
        return self._score

    @property
    def score(self) -> int:
        return self._score

    @property
    def remaining_time(self) -> float:
        return self._remaining

    @property
    def stats(self) -> GameStats:
        return GameStats(
            items_caught=self._items_caught,
            correct_catches=self._correct_catches,
            wrong_catches=self._wrong_catches,
        )

    @property
    def rules(self) -> CatchRules:
        return self._rules

    @property
    def preset(self) -> DevicePreset:
        return self._preset

    @property
    def field_size(self) -> Resolution:
        return Resolution(width=int(self._field_width), height=int(self._field_height))

    @property
    def container(self) -> Container:
        return self._container

    @property
    def animations(self) -> AnimationManager:
        return self._animations

    @property
    def item_pool(self) -> ObjectPool[FallingItem]:
        return self._items

    @property
    def popup_pool(self) -> ObjectPool[ScorePopup]:
        return self._popups

    @property
    def items_spawned(self) -> int:
        return self._items_spawned

    @property
    def items_missed(self) -> int:
        return self._items_missed

    @property
    def snapshot(self) -> FrameSnapshot:
        """Last published frame."""
        return self._snapshot

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def set_playing(self, playing: bool) -> None:
        """Start the run (once) or tear it down.

        Starting is only possible from IDLE with no run recorded; repeated
        start signals are ignored. Stopping a running game is teardown and
        does not report game-ended.
        """
        if playing:
            if self._state is not GameState.IDLE or self._start_time is not None:
                log.debug("Ignoring start signal in state %s", self._state.value)
                return
            self._start(self._scheduler.now())
        elif self._state is GameState.RUNNING:
            log.info("Run stopped by host at %.1fs remaining", self._remaining)
            self._state = GameState.ENDED
            self._teardown()
            self._publish_snapshot()

    def dispose(self) -> None:
        """Cancel everything. No callbacks fire afterwards."""
        if self._state is not GameState.ENDED:
            log.debug("Disposed in state %s", self._state.value)
        self._state = GameState.ENDED
        self._teardown()
        self._cancel_resize_retry()

    def _start(self, now: float) -> None:
        self._score = 0
        self._items_caught = 0
        self._correct_catches = 0
        self._wrong_catches = 0
        self._items_spawned = 0
        self._items_missed = 0
        self._start_time = now
        self._last_spawn = now
        self._remaining = self._rules.duration
        self._container.center()
        self._items.clear()
        self._popups.clear()
        self._animations.clear()

        self._state = GameState.RUNNING
        log.info("Run started: %.0fs, %s preset", self._rules.duration, self._preset.name)

        # Driver first so tweens are advanced before each tick reads them
        self._animations.start()
        self._on_score_change(self._score)
        self._on_time_change(self._remaining)
        self._publish_snapshot()
        if self._state is GameState.RUNNING:
            self._tick_handle = self._scheduler.request_frame(self._tick)

    def _teardown(self) -> None:
        if self._tick_handle is not None:
            self._scheduler.cancel_frame(self._tick_handle)
            self._tick_handle = None
        self._animations.stop()
        self._animations.clear()
        self._items.clear()
        self._popups.clear()

    def _end_game(self) -> None:
        self._state = GameState.ENDED
        stats = self.stats
        log.info("Time up: score %d (%d caught, %d correct, %d wrong)",
                 self._score, stats.items_caught, stats.correct_catches, stats.wrong_catches)
        emit_record('session', {
            'type': 'game_end',
            'game': 'recycle_catch',
            'preset': self._preset.name,
            'score': self._score,
            'duration': self._rules.duration,
            'items_spawned': self._items_spawned,
            'items_missed': self._items_missed,
            'item_pool_evictions': self._items.stats().evictions,
            **stats.model_dump(),
        })
        self._teardown()
        self._publish_snapshot()

        if not self._game_end_reported:
            self._game_end_reported = True
            self._on_game_end(self._score, stats)

    # =========================================================================
    # Input and layout
    # =========================================================================

    def handle_input(self, events: List[PointerEvent]) -> None:
        """Apply the most recent pointer position."""
        if events:
            self.set_target_x(events[-1].x)

    def set_target_x(self, x: float) -> None:
        """Center the container on a field-local pointer x (clamped)."""
        self._container.move_to(x)
        if self._state is not GameState.RUNNING:
            self._publish_snapshot()

    def resize(self, width: float, height: float) -> None:
        """Apply a new field size. Zero or negative sizes are ignored."""
        if width <= 0 or height <= 0:
            log.debug("Ignoring resize to %sx%s", width, height)
            return
        self._field_width = float(width)
        self._field_height = float(height)
        self._container.set_field_size(self._field_width, self._field_height)
        log.debug("Field resized to %dx%d", width, height)
        if self._state is not GameState.RUNNING:
            self._publish_snapshot()

    def request_resize(self, size_provider: SizeProvider) -> None:
        """Read the field size from ``size_provider`` and apply it.

        A provider reporting a zero dimension means layout has not settled
        yet; the read is retried on later frames at the RESIZE_RETRY_DELAYS
        offsets from this call, then given up.
        """
        self._cancel_resize_retry()
        self._try_resize(size_provider, self._scheduler.now(), 0)

    def _try_resize(self, size_provider: SizeProvider, started_at: float, attempt: int) -> None:
        width, height = size_provider()
        if width > 0 and height > 0:
            self.resize(width, height)
            return

        if attempt >= len(config.RESIZE_RETRY_DELAYS):
            log.warning("Field size still %sx%s after %d retries; keeping %dx%d",
                        width, height, attempt, self._field_width, self._field_height)
            return

        delay = config.RESIZE_RETRY_DELAYS[attempt]

        def wait(now: float) -> None:
            self._resize_handle = None
            if now - started_at < delay:
                self._resize_handle = self._scheduler.request_frame(wait)
                return
            self._try_resize(size_provider, started_at, attempt + 1)

        self._resize_handle = self._scheduler.request_frame(wait)

    def _cancel_resize_retry(self) -> None:
        if self._resize_handle is not None:
            self._scheduler.cancel_frame(self._resize_handle)
            self._resize_handle = None

    # =========================================================================
    # Tick
    # =========================================================================

    def _tick(self, now: float) -> None:
        self._tick_handle = None
        if self._state is not GameState.RUNNING:
            return

        self._remaining = max(0.0, self._rules.duration - (now - self._start_time))
        self._on_time_change(self._remaining)
        if self._state is not GameState.RUNNING:
            return

        if self._remaining <= 0:
            self._end_game()
            return

        if now - self._last_spawn > self._rules.spawn_interval:
            self._spawn_item()
            self._last_spawn = now

        self._apply_tweens()
        self._update_items(now)
        self._update_popups(now)

        if self._state is GameState.RUNNING:
            self._publish_snapshot()
            self._tick_handle = self._scheduler.request_frame(self._tick)

    def _spawn_item(self) -> None:
        item = self._spawner.fill(self._items.acquire(), self._field_width)
        self._items_spawned += 1

        anims = self._animations
        anims.create_animation(item.tween_key('scale'), 0.3, 1.0, config.ITEM_SPAWN, ease_out_back)
        anims.create_animation(item.tween_key('alpha'), 0.0, 1.0, config.ITEM_SPAWN, ease_out_cubic)
        anims.create_animation(item.tween_key('rotation'), -12.0, 0.0, config.ITEM_SPAWN, ease_out_cubic)
        log.trace("Spawned %s item %d at x=%.0f", item.category.value, item.handle, item.x)

    def _apply_tweens(self) -> None:
        anims = self._animations
        self._container.scale = anims.value_of(BOUNCE_KEY, 1.0)
        self._container.rotation = anims.value_of(WOBBLE_KEY, 0.0)
        for item in self._items.active_objects():
            item.scale = anims.value_of(item.tween_key('scale'), 1.0)
            item.alpha = anims.value_of(item.tween_key('alpha'), 1.0)
            item.rotation = anims.value_of(item.tween_key('rotation'), 0.0)

    def _update_items(self, now: float) -> None:
        limit = self._field_height + config.OFFSCREEN_MARGIN
        for item in reversed(self._items.active_objects()):
            if self._state is not GameState.RUNNING:
                break  # host tore the game down from a score callback
            item.y += item.speed
            if self._container.catches(item):
                self._catch_handlers[item.category](item, now)
                self._items.release(item)
            elif item.y > limit:
                self._items_missed += 1
                self._items.release(item)

    def _correct_catch(self, item: FallingItem, now: float) -> None:
        reward = self._rules.score_per_correct
        self._score += reward
        self._items_caught += 1
        self._correct_catches += 1

        color = config.POSITIVE_COLOR.as_rgb_tuple
        self._add_popup(item.center_x, item.y, f"+{reward} {config.SCORE_UNIT}", color, now)
        self._animations.create_animation(
            BOUNCE_KEY, 1.2, 1.0, config.ITEM_CAUGHT_BOUNCE, ease_out_bounce)
        self._animations.burst(item.center_x, item.y, color, config.PARTICLE_BURST_COUNT)
        self._flash(config.POSITIVE_COLOR, config.CORRECT_CATCH_FLASH)
        log.debug("Caught recyclable %d: score %d", item.handle, self._score)
        self._on_score_change(self._score)

    def _wrong_catch(self, item: FallingItem, now: float) -> None:
        penalty = self._rules.penalty_per_wrong
        self._score = max(self._rules.score_floor, self._score - penalty)
        self._items_caught += 1
        self._wrong_catches += 1

        color = config.NEGATIVE_COLOR.as_rgb_tuple
        self._add_popup(item.center_x, item.y, f"-{penalty} {config.SCORE_UNIT}", color, now)
        self._animations.screen_shake(config.SCREEN_SHAKE_INTENSITY, config.SCREEN_SHAKE)
        self._animations.create_animation(
            WOBBLE_KEY, 8.0, 0.0, config.SCREEN_SHAKE, ease_out_elastic)
        self._flash(config.NEGATIVE_COLOR, config.WRONG_CATCH_FLASH)
        log.debug("Caught noise %d: score %d", item.handle, self._score)
        self._on_score_change(self._score)

    def _flash(self, color: Color, duration: float) -> None:
        self._flash_color = color.as_rgb_tuple
        self._animations.create_animation(FLASH_KEY, config.FLASH_ALPHA, 0.0, duration, linear)

    def _add_popup(self, x: float, y: float, text: str, color: Tuple[int, int, int], now: float) -> None:
        popup = self._popups.acquire()
        popup.x = x
        popup.y = y
        popup.origin_y = y
        popup.text = text
        popup.color = color
        popup.opacity = 1.0
        popup.created_at = now
        popup.scale = POPUP_START_SCALE
        self._animations.create_animation(
            popup.tween_key(), POPUP_START_SCALE, 1.0, config.SCORE_POP, ease_out_back)

    def _update_popups(self, now: float) -> None:
        lifetime = self._rules.popup_lifetime
        for popup in reversed(self._popups.active_objects()):
            age = now - popup.created_at
            if age >= lifetime:
                popup.opacity = 0.0
                self._popups.release(popup)
                continue
            popup.y = popup.origin_y - config.POPUP_RISE_SPEED * age
            popup.opacity = 1.0 - age / lifetime
            popup.scale = self._animations.value_of(popup.tween_key(), 1.0)

    # =========================================================================
    # Snapshot and rendering
    # =========================================================================

    def _build_snapshot(self) -> FrameSnapshot:
        container = self._container
        return FrameSnapshot(
            field_width=self._field_width,
            field_height=self._field_height,
            state=self._state,
            score=self._score,
            remaining=self._remaining,
            items=tuple(replace(item) for item in self._items.active_objects()),
            popups=tuple(replace(popup) for popup in self._popups.active_objects()),
            particles=tuple(replace(p) for p in self._animations.particles),
            container=ContainerView(
                x=container.x,
                y=container.y,
                width=container.width,
                height=container.height,
                scale=container.scale,
                rotation=container.rotation,
            ),
            shake=self._sample_shake(),
            flash_color=self._flash_color,
            flash_alpha=self._animations.value_of(FLASH_KEY, 0.0),
        )

    def _sample_shake(self) -> Point2D:
        # one sample per frame so every element shakes by the same offset
        dx, dy = self._animations.shake_offset()
        return Point2D(x=dx, y=dy)

    def _publish_snapshot(self) -> None:
        self._snapshot = self._build_snapshot()

    def render(self, screen: pygame.Surface) -> None:
        """Draw the last published frame."""
        if self._renderer is None:
            self._renderer = CatchRenderer(self._assets)
        self._renderer.render(screen, self._snapshot)
