"""Terminal front end: screen, renderer, menu and control loop."""

from .screen import Screen, CursesScreen, KeyEvent, ResizeEvent, Event, translate_key
from .renderer import Renderer, FULL_BLOCK, CHECK_MARK, GAME_OVER_MESSAGE, VICTORY_MESSAGE
from .menu import MenuState
from .app import GameApp

__all__ = [
    # Screen
    "Screen",
    "CursesScreen",
    "KeyEvent",
    "ResizeEvent",
    "Event",
    "translate_key",
    # Rendering
    "Renderer",
    "FULL_BLOCK",
    "CHECK_MARK",
    "GAME_OVER_MESSAGE",
    "VICTORY_MESSAGE",
    # Control
    "MenuState",
    "GameApp",
]
