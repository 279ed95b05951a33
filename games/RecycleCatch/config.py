"""
RecycleCatch - Configuration loader with device presets.

Every constant can be overridden from a ``.env`` file beside this module or
from the environment. Container geometry and fall speed depend on the
device class (desktop kiosk or phone), selected by field width.
"""
import os
from pathlib import Path
from dataclasses import dataclass
from typing import Any, Dict

from dotenv import load_dotenv

from models import CatchRules, Color

# Load .env from game directory
_env_path = Path(__file__).parent / '.env'
load_dotenv(_env_path)


def _get_bool(key: str, default: bool) -> bool:
    """Get boolean from environment."""
    val = os.getenv(key, str(default)).lower()
    return val in ('true', '1', 'yes')


def _get_int(key: str, default: int) -> int:
    """Get integer from environment."""
    return int(os.getenv(key, str(default)))


def _get_float(key: str, default: float) -> float:
    """Get float from environment."""
    return float(os.getenv(key, str(default)))


# Display (standalone host only; a kiosk shell passes its own field size)
SCREEN_WIDTH = _get_int('SCREEN_WIDTH', 1280)
SCREEN_HEIGHT = _get_int('SCREEN_HEIGHT', 720)
FULLSCREEN = _get_bool('FULLSCREEN', False)
TARGET_FPS = _get_int('TARGET_FPS', 60)

# Game rules
GAME_DURATION = _get_float('GAME_DURATION', 40.0)          # seconds
SPAWN_INTERVAL = _get_float('SPAWN_INTERVAL', 0.6)         # seconds between spawns
RECYCLABLE_CHANCE = _get_float('RECYCLABLE_CHANCE', 0.65)
SCORE_PER_CORRECT = _get_int('SCORE_PER_CORRECT', 20)
PENALTY_PER_WRONG = _get_int('PENALTY_PER_WRONG', 20)
SCORE_FLOOR = _get_int('SCORE_FLOOR', 0)
SCORE_UNIT = os.getenv('SCORE_UNIT', 'DKK')

# Items
ITEM_SIZE = _get_float('ITEM_SIZE', 100.0)
OFFSCREEN_MARGIN = _get_float('OFFSCREEN_MARGIN', 100.0)   # below field bottom

# Score popups
POPUP_LIFETIME = _get_float('POPUP_LIFETIME', 1.5)         # seconds
POPUP_RISE_SPEED = _get_float('POPUP_RISE_SPEED', 120.0)   # pixels/second

# Pool and particle caps
MAX_ITEMS = _get_int('MAX_ITEMS', 50)
MAX_POPUPS = _get_int('MAX_POPUPS', 30)
MAX_PARTICLES = _get_int('MAX_PARTICLES', 300)
PARTICLE_BURST_COUNT = _get_int('PARTICLE_BURST_COUNT', 12)

# Animation durations (seconds)
ITEM_CAUGHT_BOUNCE = _get_float('ITEM_CAUGHT_BOUNCE', 0.2)
SCORE_POP = _get_float('SCORE_POP', 0.15)
ITEM_SPAWN = _get_float('ITEM_SPAWN', 0.3)
SCREEN_SHAKE = _get_float('SCREEN_SHAKE', 0.3)
SCREEN_SHAKE_INTENSITY = _get_float('SCREEN_SHAKE_INTENSITY', 10.0)
WRONG_CATCH_FLASH = _get_float('WRONG_CATCH_FLASH', 0.3)
CORRECT_CATCH_FLASH = _get_float('CORRECT_CATCH_FLASH', 0.4)

# Layout retries while the surface reports a zero size (seconds after first try)
RESIZE_RETRY_DELAYS = (0.05, 0.1, 0.25, 0.5)

# Device presets - container geometry and fall speed bundled together
MOBILE_BREAKPOINT = _get_int('MOBILE_BREAKPOINT', 768)


@dataclass
class DevicePreset:
    """Geometry and speed for one device class."""
    name: str
    container_width: float
    container_height: float
    container_bottom_offset: float
    fall_speed: float          # pixels per tick


DEVICE_PRESETS: Dict[str, DevicePreset] = {
    'desktop': DevicePreset(
        name='desktop',
        container_width=140,
        container_height=100,
        container_bottom_offset=60,
        fall_speed=3.0,
    ),
    'mobile': DevicePreset(
        name='mobile',
        container_width=120,
        container_height=80,
        container_bottom_offset=20,
        fall_speed=3.75,
    ),
}

DEFAULT_PRESET = os.getenv('DEFAULT_PRESET', 'auto')


def preset_for_width(width: float) -> DevicePreset:
    """Pick the device preset for a field width (mobile below the breakpoint)."""
    if width < MOBILE_BREAKPOINT:
        return DEVICE_PRESETS['mobile']
    return DEVICE_PRESETS['desktop']


def get_preset(name: str, width: float = SCREEN_WIDTH) -> DevicePreset:
    """Look up a preset by name; 'auto' picks by width.

    Raises:
        ValueError: If the name is not a known preset
    """
    if name == 'auto':
        return preset_for_width(width)
    if name not in DEVICE_PRESETS:
        raise ValueError(
            f"Unknown device preset {name!r}, expected one of: auto, {', '.join(DEVICE_PRESETS)}"
        )
    return DEVICE_PRESETS[name]


def default_rules(preset: DevicePreset, **overrides: Any) -> CatchRules:
    """Build validated rules from config constants, the preset and overrides.

    Overrides set to None are ignored, so CLI defaults can be passed through.

    Raises:
        pydantic.ValidationError: If any resulting value is out of range
    """
    values: Dict[str, Any] = {
        'duration': GAME_DURATION,
        'spawn_interval': SPAWN_INTERVAL,
        'recyclable_chance': RECYCLABLE_CHANCE,
        'score_per_correct': SCORE_PER_CORRECT,
        'penalty_per_wrong': PENALTY_PER_WRONG,
        'score_floor': SCORE_FLOOR,
        'popup_lifetime': POPUP_LIFETIME,
        'item_size': ITEM_SIZE,
        'fall_speed': preset.fall_speed,
        'container_width': preset.container_width,
        'container_height': preset.container_height,
        'container_bottom_offset': preset.container_bottom_offset,
    }
    values.update({k: v for k, v in overrides.items() if v is not None})
    return CatchRules(**values)


# Visual
POSITIVE_COLOR = Color.from_hex('#22C55E')
NEGATIVE_COLOR = Color.from_hex('#EF4444')

BACKGROUND_TOP = Color.from_hex('#87CEEB')
BACKGROUND_BOTTOM = Color.from_hex('#4682B4')
GROUND_COLOR = Color.from_hex('#2D3748')
GROUND_HEIGHT = 50

# Placeholder item colors by category: (body, border)
RECYCLABLE_COLORS = (Color.from_hex('#2563EB'), Color.from_hex('#1D4ED8'))
NOISE_COLORS = (Color.from_hex('#DC2626'), Color.from_hex('#B91C1C'))
ITEM_SHADOW = Color(r=0, g=0, b=0, a=77)

CONTAINER_BODY = Color.from_hex('#15803D')
CONTAINER_RIM = Color.from_hex('#166534')

POPUP_FONT_SIZE = 32
LABEL_FONT_SIZE = 16
HUD_FONT_SIZE = 36
HUD_COLOR = Color(r=255, g=255, b=255)

# Max alpha of the full-screen catch flash
FLASH_ALPHA = _get_float('FLASH_ALPHA', 0.25)

# Asset names the renderer looks up
BACKGROUND_ASSET = 'game-background'
GROUND_ASSET = 'ground'
CONTAINER_ASSET = 'container'
ASSET_MANIFEST = Path(__file__).parent / 'assets' / 'assets.yaml'
