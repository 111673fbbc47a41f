"""Painting of game sessions and the difficulty menu onto a Screen."""

from typing import Optional, Tuple

from ..engine.models import SessionSnapshot
from .menu import MenuState
from .screen import Screen, Style


FULL_BLOCK = "█"
CHECK_MARK = "✓"

GAME_OVER_MESSAGE = "GAME OVER"
VICTORY_MESSAGE = "Congratulations! You have won!"
ROUND_OVER_HINT = "r: restart   m: menu   ctrl-c: quit"
PLAYING_HINT = "type the hidden characters   esc: menu"
MENU_TITLE = "Choose a difficulty"
MENU_HINT = "up/down: select   enter: start   q: quit"


class Renderer:
    """
    Stateless painter; reusable for any session and any screen.

    Only reads snapshots and menu state, never mutates game data.
    """

    def __init__(self, horizontal_spacing: int = 2, vertical_spacing: int = 1) -> None:
        self.horizontal_spacing = horizontal_spacing
        self.vertical_spacing = vertical_spacing

    def draw_text(self, screen: Screen, x: int, y: int, text: str, style: Style = "default") -> None:
        for offset, char in enumerate(text):
            screen.set_cell(x + offset, y, char, style)

    def draw_centered(self, screen: Screen, y: int, text: str, style: Style = "default") -> None:
        width, _ = screen.size()
        self.draw_text(screen, max(0, (width - len(text)) // 2), y, text, style)

    def board_origin(self, screen: Screen, snapshot: SessionSnapshot) -> Tuple[int, int]:
        """Top-left screen position of the board so that it sits centred."""
        width, height = screen.size()
        board_width = (snapshot.columns - 1) * (self.horizontal_spacing + 1) + 1
        board_height = (snapshot.rows - 1) * (self.vertical_spacing + 1) + 1
        return max(0, (width - board_width) // 2), max(0, (height - board_height) // 2)

    def draw_session(self, screen: Screen, snapshot: SessionSnapshot) -> None:
        """Fill the screen with the state of one round."""
        screen.clear()
        _, height = screen.size()

        status = (
            f"{snapshot.difficulty_name}   score: {snapshot.score}   "
            f"invalid presses: {snapshot.invalid_key_presses}"
        )
        self.draw_centered(screen, 0, status, "title")

        if snapshot.state == "ongoing":
            origin_x, origin_y = self.board_origin(screen, snapshot)
            for row in range(snapshot.rows):
                for column in range(snapshot.columns):
                    cell = snapshot.cell_at(row, column)
                    x = origin_x + column * (self.horizontal_spacing + 1)
                    y = origin_y + row * (self.vertical_spacing + 1)
                    if cell.visibility == "hidden":
                        screen.set_cell(x, y, FULL_BLOCK, "hidden")
                    elif cell.visibility == "guessed":
                        screen.set_cell(x, y, CHECK_MARK, "guessed")
                    else:
                        screen.set_cell(x, y, cell.character)
            self.draw_centered(screen, height - 1, PLAYING_HINT)
        else:
            message = VICTORY_MESSAGE if snapshot.state == "victory" else GAME_OVER_MESSAGE
            self.draw_centered(screen, height // 2, message, "title" if snapshot.state == "victory" else "error")
            self.draw_centered(screen, height // 2 + 2, ROUND_OVER_HINT)

        screen.present()

    def draw_menu(self, screen: Screen, menu: MenuState, error: Optional[str] = None) -> None:
        """Fill the screen with the difficulty menu."""
        screen.clear()
        _, height = screen.size()

        top = max(0, height // 2 - len(menu.difficulties) - 1)
        self.draw_centered(screen, top, MENU_TITLE, "title")
        for index, difficulty in enumerate(menu.difficulties):
            label = f" {difficulty.name:<10} {difficulty.rows}x{difficulty.columns} "
            style = "highlight" if index == menu.selected else "default"
            self.draw_centered(screen, top + 2 + index, label, style)

        if error:
            self.draw_centered(screen, top + 3 + len(menu.difficulties), error, "error")
        self.draw_centered(screen, height - 1, MENU_HINT)

        screen.present()
