"""
Pydantic models for the engine layer.

This module contains the data records (difficulty, cells, snapshots, results,
configuration) shared by the engine and the terminal front end. The stateful
classes (Board, GameSession, HideScheduler) live in their own files.
"""

from typing import List, Optional, Literal, Any
from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator


# Type aliases
Visibility = Literal["shown", "hidden", "guessed"]
GameState = Literal["ongoing", "game_over", "victory"]


def char_range(start: str, end: str) -> str:
    """
    Build a pool containing every character between start and end.

    Both ends are inclusive, so char_range("a", "c") == "abc".
    """
    if len(start) != 1 or len(end) != 1:
        raise ValueError(f"Range bounds must be single characters, got {start!r} and {end!r}")
    if ord(start) > ord(end):
        raise ValueError(f"Range start {start!r} comes after range end {end!r}")
    return "".join(chr(code) for code in range(ord(start), ord(end) + 1))


class Difficulty(BaseModel):
    """Immutable settings for one round of the game."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    start_delay: float = Field(default=1.5, ge=0)  # seconds before the first hide
    hide_interval: float = Field(default=1.25, gt=0)  # seconds between hides
    rows: int = Field(default=3, ge=1)
    columns: int = Field(default=3, ge=1)
    correct_guess_points: int = Field(default=5, ge=0)
    invalid_key_press_penalty: int = Field(default=2, ge=0)
    pools: List[str] = Field(default_factory=list)

    @field_validator("pools", mode="before")
    @classmethod
    def _expand_ranges(cls, value: Any) -> Any:
        # Pools may be written as {"from": "a", "to": "z"} in YAML.
        if not isinstance(value, list):
            return value
        pools = []
        for pool in value:
            if isinstance(pool, dict):
                if "from" not in pool or "to" not in pool:
                    raise ValueError(f"Range pool needs 'from' and 'to', got {pool}")
                pools.append(char_range(str(pool["from"]), str(pool["to"])))
            else:
                pools.append(pool)
        return pools

    @model_validator(mode="after")
    def _check_pools_disjoint(self) -> "Difficulty":
        # The sampler draws from the concatenation, so a shared character
        # could land on the board twice.
        seen = set()
        for pool in self.pools:
            for char in pool:
                if char in seen:
                    raise ValueError(f"Character {char!r} appears more than once across pools")
                seen.add(char)
        return self

    @property
    def board_size(self) -> int:
        """Number of cells on a board of this difficulty."""
        return self.rows * self.columns


class Cell(BaseModel):
    """A single board position."""
    character: str = Field(..., min_length=1, max_length=1)
    visibility: Visibility = "shown"


class SessionSnapshot(BaseModel):
    """Read-only copy of everything a renderer needs from a session."""
    model_config = ConfigDict(frozen=True)

    difficulty_name: str
    rows: int
    columns: int
    cells: List[Cell] = Field(default_factory=list)
    score: int = 0
    invalid_key_presses: int = 0
    state: GameState = "ongoing"
    hidden_remaining: int = 0  # cells still waiting in the hide queue

    def cell_at(self, row: int, column: int) -> Cell:
        return self.cells[row * self.columns + column]


class RoundResult(BaseModel):
    """Outcome of a single round, collected for the end-of-run summary."""
    difficulty: str
    state: GameState
    score: int = 0
    invalid_key_presses: int = 0


class GameConfig(BaseModel):
    """Configuration for a run of the game."""
    default_difficulty: str = "normal"
    difficulties: List[Difficulty] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_difficulties(self) -> "GameConfig":
        if not self.difficulties:
            # Imported lazily, the table itself depends on this module.
            from .difficulties import DIFFICULTIES
            self.difficulties = list(DIFFICULTIES)

        names = [d.name for d in self.difficulties]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate difficulty names in {names}")
        if self.default_difficulty not in names:
            raise ValueError(
                f"Unknown default difficulty {self.default_difficulty!r}; "
                f"available: {', '.join(names)}"
            )
        return self

    def index_of(self, name: str) -> int:
        """Position of the named difficulty in the list."""
        for index, difficulty in enumerate(self.difficulties):
            if difficulty.name == name:
                return index
        raise KeyError(name)

    def find(self, name_or_index: str) -> Optional[Difficulty]:
        """Look up a difficulty by name or by 0-based index."""
        for difficulty in self.difficulties:
            if difficulty.name == name_or_index:
                return difficulty
        if name_or_index.isdigit():
            index = int(name_or_index)
            if index < len(self.difficulties):
                return self.difficulties[index]
        return None
