"""Common GameState enum for kiosk games.

Every game reports one of these states through its ``state`` property, so
the host can decide what to show (attract screen, HUD, result overlay)
without knowing the game's internals.
"""
from enum import Enum


class GameState(Enum):
    """Standard game states used by kiosk hosts.

    States:
        IDLE: Constructed, waiting for the host to start play
        RUNNING: Timer counting down, frames being ticked
        ENDED: Timer ran out or the host tore the game down; terminal
    """
    IDLE = "idle"
    RUNNING = "running"
    ENDED = "ended"
