from typing import List
from pydantic import BaseModel, Field

from ..engine.models import Difficulty, GameConfig


class MenuState(BaseModel):
    """
    Difficulty selection, kept for the whole run.

    The same instance is passed through every round so that returning to the
    menu starts on the last chosen difficulty.

    Attributes:
        difficulties: The selectable difficulties, in display order
        selected: Index of the highlighted difficulty
    """

    difficulties: List[Difficulty] = Field(default_factory=list)
    selected: int = Field(default=0, ge=0)

    @classmethod
    def from_config(cls, config: GameConfig) -> "MenuState":
        """Create a menu pre-selecting the configured default difficulty."""
        return cls(
            difficulties=list(config.difficulties),
            selected=config.index_of(config.default_difficulty),
        )

    @property
    def difficulty(self) -> Difficulty:
        """The difficulty chosen by the user."""
        return self.difficulties[self.selected]

    def move_up(self) -> None:
        self.selected = (self.selected - 1) % len(self.difficulties)

    def move_down(self) -> None:
        self.selected = (self.selected + 1) % len(self.difficulties)
