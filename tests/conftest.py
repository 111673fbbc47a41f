"""Shared fixtures for the Glyph Recall tests."""

import queue
from typing import Dict, Tuple

import pytest

from src.engine import Difficulty, GameSession, RenderNotifier


class FakeScreen:
    """In-memory Screen that records drawn cells and replays queued events."""

    def __init__(self, width: int = 40, height: int = 20):
        self.width = width
        self.height = height
        self.cells: Dict[Tuple[int, int], Tuple[str, str]] = {}
        self.presents = 0
        self.events: "queue.Queue" = queue.Queue()

    def size(self):
        return self.width, self.height

    def set_cell(self, x, y, char, style="default"):
        self.cells[(x, y)] = (char, style)

    def clear(self):
        self.cells = {}

    def present(self):
        self.presents += 1

    def poll_event(self):
        return self.events.get()

    def row_text(self, y: int) -> str:
        """The characters drawn on row y, left to right, gaps removed."""
        return "".join(char for (x, row), (char, _) in sorted(self.cells.items()) if row == y)

    def text(self) -> str:
        rows = sorted({y for _, y in self.cells})
        return "\n".join(self.row_text(y) for y in rows)

    def chars(self):
        return [char for char, _ in self.cells.values()]


@pytest.fixture
def small_difficulty() -> Difficulty:
    """A 3x2 board: 5 points per guess, 2 points penalty per invalid press."""
    return Difficulty(
        name="small",
        rows=3,
        columns=2,
        correct_guess_points=5,
        invalid_key_press_penalty=2,
        start_delay=0.0,
        hide_interval=0.01,
        pools=["123456"],
    )


@pytest.fixture
def notifier() -> RenderNotifier:
    return RenderNotifier()


@pytest.fixture
def session(small_difficulty, notifier) -> GameSession:
    """A session whose scheduler is not running; tests hide cells by hand."""
    return GameSession.create(small_difficulty, notifier=notifier, seed=7, auto_start=False)


@pytest.fixture
def fake_screen() -> FakeScreen:
    return FakeScreen()
