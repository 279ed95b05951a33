"""Shared pytest fixtures.

Pygame runs headless: the dummy SDL drivers are selected before pygame is
first imported by any test module.
"""
import copy
import os
import random

os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')
os.environ.setdefault('SDL_AUDIODRIVER', 'dummy')

import pygame
import pytest

from kiosk import logging as kiosk_logging
from kiosk.scheduler import ManualFrameScheduler


@pytest.fixture
def scheduler():
    """Scheduler on a synthetic clock starting at t=0."""
    return ManualFrameScheduler()


@pytest.fixture
def headless_pygame():
    """Initialized pygame with a tiny dummy display."""
    pygame.init()
    pygame.display.set_mode((1, 1))
    yield
    pygame.quit()


@pytest.fixture
def restore_logging():
    """Snapshot the logging configuration and sinks, restore afterwards."""
    saved_config = copy.deepcopy(kiosk_logging._config)
    saved_sinks = dict(kiosk_logging._sinks)
    yield kiosk_logging
    kiosk_logging._config.clear()
    kiosk_logging._config.update(saved_config)
    kiosk_logging._sinks.clear()
    kiosk_logging._sinks.update(saved_sinks)


@pytest.fixture
def make_game(scheduler):
    """Factory for RecycleCatchMode on the manual scheduler.

    Defaults: 800x600 field, desktop preset (container 140x100, 60 px above
    the bottom, so the catch band is y 440..540), seeded rng.
    """
    from games.RecycleCatch.game_mode import RecycleCatchMode

    created = []

    def factory(**kwargs):
        kwargs.setdefault('rng', random.Random(1234))
        kwargs.setdefault('field_width', 800)
        kwargs.setdefault('field_height', 600)
        kwargs.setdefault('preset', 'desktop')
        game = RecycleCatchMode(scheduler=scheduler, **kwargs)
        created.append(game)
        return game

    yield factory
    for game in created:
        game.dispose()
