"""Test the board model."""

import pytest

from src.engine import Board, Cell


@pytest.fixture
def board():
    return Board.create("abcdef", rows=3, columns=2)


class TestBoardCreation:
    """Test board construction and its invariants."""

    def test_all_cells_start_shown(self, board):
        assert board.size == 6
        assert all(cell.visibility == "shown" for cell in board.cells)

    def test_cells_keep_character_order(self, board):
        assert [cell.character for cell in board.cells] == list("abcdef")

    def test_wrong_cell_count_rejected(self):
        with pytest.raises(ValueError):
            Board.create("abcde", rows=3, columns=2)

    def test_duplicate_characters_rejected(self):
        with pytest.raises(ValueError):
            Board(rows=1, columns=2, cells=[Cell(character="a"), Cell(character="a")])

    def test_index_of(self, board):
        assert board.index_of("d") == 3
        assert board.index_of("z") is None


class TestVisibilityTransitions:
    """Visibility only moves shown -> hidden -> guessed."""

    def test_hide_shown_cell(self, board):
        assert board.hide(2) is True
        assert board.cells[2].visibility == "hidden"

    def test_hide_twice_is_rejected(self, board):
        board.hide(2)
        assert board.hide(2) is False
        assert board.cells[2].visibility == "hidden"

    def test_reveal_hidden_cell(self, board):
        board.hide(0)
        assert board.reveal("a") is True
        assert board.cells[0].visibility == "guessed"

    def test_reveal_shown_cell_fails(self, board):
        assert board.reveal("a") is False
        assert board.cells[0].visibility == "shown"

    def test_reveal_guessed_cell_fails(self, board):
        board.hide(0)
        board.reveal("a")
        assert board.reveal("a") is False
        assert board.cells[0].visibility == "guessed"

    def test_guessed_cell_cannot_be_hidden_again(self, board):
        board.hide(0)
        board.reveal("a")
        assert board.hide(0) is False
        assert board.cells[0].visibility == "guessed"

    def test_reveal_unknown_character(self, board):
        assert board.reveal("-") is False


class TestCounts:
    """Test visibility tallies."""

    def test_counts_sum_to_size(self, board):
        board.hide(0)
        board.hide(1)
        board.reveal("a")
        counts = board.counts()
        assert counts == (1, 1, 4)
        assert counts.guessed + counts.hidden + counts.shown == board.size

    def test_copy_cells_is_detached(self, board):
        copies = board.copy_cells()
        board.hide(0)
        assert copies[0].visibility == "shown"
