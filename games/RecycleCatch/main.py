#!/usr/bin/env python3
"""
Recycle Catch - Standalone entry point.

Runs one timed catch round with mouse or touch input and shows the result.
In a kiosk the surrounding shell owns screen routing; this host stands in
for it with a HUD and a result overlay.

Usage:
    python main.py
    python main.py --fullscreen
    python main.py --width 390 --height 844 --preset mobile
    python main.py --duration 20 --seed 42
"""

import argparse
import math
import sys
import os
from typing import Optional

import pygame

# Support running from any directory - add project root to path
_project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from games.RecycleCatch import config
from games.RecycleCatch.game_info import get_game_mode
from games.RecycleCatch.game_mode import RecycleCatchMode
from kiosk.assets import AssetRegistry
from kiosk.games import GameState
from kiosk.input import InputManager, PointerInputSource
from kiosk.logging import close_all_sinks, create_sink_for_module, get_logger, register_sink
from kiosk.scheduler import MonotonicFrameScheduler
from models import GameStats

log = get_logger('recycle_catch')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=RecycleCatchMode.DESCRIPTION)
    parser.add_argument('--width', type=int, default=config.SCREEN_WIDTH, help='Screen width')
    parser.add_argument('--height', type=int, default=config.SCREEN_HEIGHT, help='Screen height')
    parser.add_argument('--fullscreen', action='store_true', default=config.FULLSCREEN,
                        help='Run fullscreen')
    for arg in RecycleCatchMode.get_arguments():
        arg = dict(arg)
        name = arg.pop('name')
        parser.add_argument(name, **arg)
    return parser


def render_hud(screen: pygame.Surface, font: pygame.font.Font, score: int, remaining: float) -> None:
    """Score with unit top-left, seconds left (rounded up) top-right."""
    color = config.HUD_COLOR.as_rgb_tuple
    score_text = font.render(f"{score} {config.SCORE_UNIT}", True, color)
    screen.blit(score_text, (20, 20))

    time_text = font.render(f"{math.ceil(remaining)}s", True, color)
    screen.blit(time_text, (screen.get_width() - time_text.get_width() - 20, 20))


def render_result(screen: pygame.Surface, font: pygame.font.Font, score: int, stats: GameStats) -> None:
    """Darkened overlay with final score and catch stats."""
    overlay = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
    overlay.fill((0, 0, 0, 170))
    screen.blit(overlay, (0, 0))

    lines = [
        (f"{score} {config.SCORE_UNIT}", config.POSITIVE_COLOR.as_rgb_tuple),
        (f"Caught {stats.items_caught}  |  Correct {stats.correct_catches}  |  "
         f"Wrong {stats.wrong_catches}", config.HUD_COLOR.as_rgb_tuple),
        (f"Accuracy {stats.accuracy:.0%}", config.HUD_COLOR.as_rgb_tuple),
        ("R to play again, ESC to quit", (180, 180, 180)),
    ]
    center_x = screen.get_width() // 2
    y = screen.get_height() // 2 - len(lines) * font.get_linesize() // 2
    for text, color in lines:
        surface = font.render(text, True, color)
        screen.blit(surface, surface.get_rect(midtop=(center_x, y)))
        y += font.get_linesize() + 8


def main(argv: Optional[list] = None) -> int:
    """Run Recycle Catch."""
    args = build_parser().parse_args(argv)

    pygame.init()
    if args.fullscreen:
        screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
    else:
        screen = pygame.display.set_mode((args.width, args.height), pygame.RESIZABLE)
    pygame.display.set_caption(RecycleCatchMode.NAME)

    register_sink('session', create_sink_for_module('session'))

    assets = AssetRegistry.from_yaml(config.ASSET_MANIFEST)
    assets.load_all()

    scheduler = MonotonicFrameScheduler()
    input_manager = InputManager(PointerInputSource())
    hud_font = pygame.font.Font(None, config.HUD_FONT_SIZE)

    game_kwargs = {
        'preset': args.preset,
        'duration': args.duration,
        'spawn_interval': args.spawn_interval,
        'recyclable_chance': args.recyclable_chance,
        'fall_speed': args.fall_speed,
        'penalty_per_wrong': args.penalty_per_wrong,
        'seed': args.seed,
    }
    result = {}

    def on_game_end(score: int, stats: GameStats) -> None:
        result['score'] = score
        result['stats'] = stats

    def new_game() -> RecycleCatchMode:
        result.clear()
        game = get_game_mode(
            scheduler=scheduler,
            assets=assets,
            field_width=screen.get_width(),
            field_height=screen.get_height(),
            on_game_end=on_game_end,
            **game_kwargs,
        )
        game.request_resize(screen.get_size)
        game.set_playing(True)
        return game

    game = new_game()
    clock = pygame.time.Clock()
    running = True

    print("=" * 50)
    print(RecycleCatchMode.NAME.upper())
    print("=" * 50)
    print("\nCatch the recyclables, dodge the trash!")
    print("\nControls:")
    print("  - Move the mouse (or drag a finger) to move the bin")
    print("  - R to restart")
    print("  - ESC to quit")
    print("=" * 50)

    while running:
        dt = clock.tick(config.TARGET_FPS) / 1000.0
        input_manager.update(dt)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_r:
                    game.dispose()
                    game = new_game()
                    print("\n--- RESTARTING ---\n")
            elif event.type == pygame.VIDEORESIZE:
                game.request_resize(screen.get_size)

        game.handle_input(input_manager.get_events())
        scheduler.run_frame()

        game.render(screen)
        if game.state is GameState.ENDED and result:
            render_result(screen, hud_font, result['score'], result['stats'])
        else:
            render_hud(screen, hud_font, game.get_score(), game.remaining_time)
        pygame.display.flip()

    game.dispose()
    assets.shutdown()
    close_all_sinks()
    pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())
