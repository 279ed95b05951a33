"""Base game interface and standard states for kiosk games."""

from kiosk.games.base_game import BaseGame
from kiosk.games.game_state import GameState

__all__ = ['BaseGame', 'GameState']
