"""Base class for kiosk games.

Game metadata (NAME, DESCRIPTION, etc.) and CLI arguments (ARGUMENTS) are
declared as class attributes, so a host can build its argument parser and
info screen from the class alone.

Kiosk games are frame-driven: they schedule their own ticks on a
FrameScheduler once the host calls ``set_playing(True)``, and the host only
pumps the scheduler and asks the game to render.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List

import pygame

from kiosk.games.game_state import GameState


class BaseGame(ABC):
    """Abstract base class for kiosk games.

    Class Attributes (metadata):
        NAME: Display name for the game
        DESCRIPTION: Short description of gameplay
        VERSION: Semantic version string
        AUTHOR: Author/team name
        ARGUMENTS: List of CLI argument definitions for argparse

    Subclasses must implement:
        - _get_internal_state() -> GameState
        - get_score() -> int
        - set_playing(playing): Start or tear down a run
        - dispose(): Release everything, no further callbacks
        - handle_input(events): Process pointer events
        - render(screen): Draw the current frame
    """

    NAME: str = "Unnamed Game"
    DESCRIPTION: str = "No description"
    VERSION: str = "1.0.0"
    AUTHOR: str = "Unknown"

    # Each entry is a dict with keys: name, type, default, help, choices (optional)
    ARGUMENTS: List[Dict[str, Any]] = []

    @classmethod
    def get_arguments(cls) -> List[Dict[str, Any]]:
        """CLI argument definitions, duplicates by name removed."""
        seen_names = set()
        result = []
        for arg in cls.ARGUMENTS:
            name = arg.get('name', '')
            if name and name not in seen_names:
                seen_names.add(name)
                result.append(arg)
        return result

    @classmethod
    def get_info(cls) -> Dict[str, Any]:
        """Game metadata as a dictionary.

        Returns:
            Dict with keys: name, description, version, author, arguments
        """
        return {
            'name': cls.NAME,
            'description': cls.DESCRIPTION,
            'version': cls.VERSION,
            'author': cls.AUTHOR,
            'arguments': cls.get_arguments(),
        }

    @property
    def state(self) -> GameState:
        """Current game state (standard interface).

        Games should not override this - override _get_internal_state instead.
        """
        return self._get_internal_state()

    @abstractmethod
    def _get_internal_state(self) -> GameState:
        pass

    @abstractmethod
    def get_score(self) -> int:
        pass

    @abstractmethod
    def set_playing(self, playing: bool) -> None:
        """Start the run (True) or tear it down (False)."""
        pass

    @abstractmethod
    def dispose(self) -> None:
        pass

    @abstractmethod
    def handle_input(self, events: List) -> None:
        """Process input events.

        Args:
            events: List of PointerEvent objects
        """
        pass

    @abstractmethod
    def render(self, screen: pygame.Surface) -> None:
        """Render the game.

        Args:
            screen: Pygame surface to draw on
        """
        pass
