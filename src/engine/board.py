import logging
from typing import List, Dict, NamedTuple, Optional, Sequence
from pydantic import BaseModel, Field, ConfigDict

from .models import Cell


logger = logging.getLogger(__name__)


class CellCounts(NamedTuple):
    """Visibility tally of a board; the three values sum to the board size."""
    guessed: int
    hidden: int
    shown: int


class Board(BaseModel):
    """
    Ordered cells of a single round, stored row by row.

    Every character on a board is unique, so a character identifies at most
    one cell. Visibility only ever moves forward:
    shown -> hidden (scheduler), hidden -> guessed (correct guess).

    The board does no locking of its own; the owning session serialises
    all access.

    Attributes:
        rows: Number of board rows
        columns: Number of board columns
        cells: The cells, row-major
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    rows: int = Field(default=1, ge=1)
    columns: int = Field(default=1, ge=1)
    cells: List[Cell] = Field(default_factory=list)
    _positions: Dict[str, int] = None

    def model_post_init(self, __context) -> None:
        """Build the character position cache."""
        if len(self.cells) != self.rows * self.columns:
            raise ValueError(
                f"A {self.rows}x{self.columns} board needs {self.rows * self.columns} "
                f"cells, got {len(self.cells)}"
            )
        self._positions = {}
        for index, cell in enumerate(self.cells):
            if cell.character in self._positions:
                raise ValueError(f"Duplicate character {cell.character!r} on board")
            self._positions[cell.character] = index

    @classmethod
    def create(cls, characters: Sequence[str], rows: int, columns: int) -> "Board":
        """
        Factory method to build a board of shown cells.

        Args:
            characters: Exactly rows * columns distinct characters
            rows: Number of rows
            columns: Number of columns

        Returns:
            A new Board with every cell shown
        """
        cells = [Cell(character=char) for char in characters]
        return cls(rows=rows, columns=columns, cells=cells)

    @property
    def size(self) -> int:
        return len(self.cells)

    def index_of(self, character: str) -> Optional[int]:
        """Index of the cell holding `character`, or None."""
        return self._positions.get(character)

    def hide(self, index: int) -> bool:
        """
        Hide a shown cell.

        Returns:
            True if the cell went from shown to hidden
        """
        cell = self.cells[index]
        if cell.visibility != "shown":
            return False
        cell.visibility = "hidden"
        logger.debug("Hid cell %d (%r)", index, cell.character)
        return True

    def reveal(self, character: str) -> bool:
        """
        Mark the hidden cell holding `character` as guessed.

        Returns:
            True on a correct guess; False if no cell holds the character
            or the cell is not currently hidden
        """
        index = self.index_of(character)
        if index is None:
            return False

        cell = self.cells[index]
        if cell.visibility != "hidden":
            return False
        cell.visibility = "guessed"
        return True

    def counts(self) -> CellCounts:
        """Count cells by visibility."""
        guessed = hidden = shown = 0
        for cell in self.cells:
            if cell.visibility == "guessed":
                guessed += 1
            elif cell.visibility == "hidden":
                hidden += 1
            else:
                shown += 1
        return CellCounts(guessed, hidden, shown)

    def copy_cells(self) -> List[Cell]:
        """Detached copies of the cells, safe to hand to other threads."""
        return [cell.model_copy() for cell in self.cells]
