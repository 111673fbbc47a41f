"""Game session engine for Glyph Recall."""

from .models import (
    Visibility,
    GameState,
    Difficulty,
    Cell,
    SessionSnapshot,
    RoundResult,
    GameConfig,
    char_range,
)
from .charset import (
    CharacterSetError,
    InvalidSizeError,
    InsufficientPoolError,
    sample_characters,
)
from .difficulties import DIFFICULTIES, DEFAULT_DIFFICULTY
from .board import Board, CellCounts
from .notifier import RenderNotifier
from .scheduler import HideScheduler
from .session import GameSession, HIDDEN_RATIO_LIMIT

__all__ = [
    "Visibility",
    "GameState",
    "Difficulty",
    "Cell",
    "SessionSnapshot",
    "RoundResult",
    "GameConfig",
    "char_range",
    "CharacterSetError",
    "InvalidSizeError",
    "InsufficientPoolError",
    "sample_characters",
    "DIFFICULTIES",
    "DEFAULT_DIFFICULTY",
    "Board",
    "CellCounts",
    "RenderNotifier",
    "HideScheduler",
    "GameSession",
    "HIDDEN_RATIO_LIMIT",
]
