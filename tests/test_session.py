"""Test the game session state machine and scoring."""

import random
import threading

import pytest

from src.engine import (
    Difficulty,
    GameSession,
    InsufficientPoolError,
    InvalidSizeError,
    RenderNotifier,
)


def hidden_character(session: GameSession) -> str:
    for cell in session.board.cells:
        if cell.visibility == "hidden":
            return cell.character
    raise AssertionError("no hidden cell")


def shown_character(session: GameSession) -> str:
    for cell in session.board.cells:
        if cell.visibility == "shown":
            return cell.character
    raise AssertionError("no shown cell")


def assert_score_formula(session: GameSession) -> None:
    counts = session.board.counts()
    expected = (
        counts.guessed * session.difficulty.correct_guess_points
        - session.invalid_key_presses * session.difficulty.invalid_key_press_penalty
    )
    assert session.score == expected


class TestSessionCreation:
    """Test newly created sessions."""

    def test_initial_state(self, session):
        assert session.state == "ongoing"
        assert session.score == 0
        assert session.invalid_key_presses == 0
        assert session.is_active
        assert session.scheduler is None

    def test_board_geometry(self, session):
        assert session.rows == 3
        assert session.columns == 2
        assert session.board.size == 6

    def test_board_characters_unique(self, session):
        characters = [cell.character for cell in session.board.cells]
        assert len(set(characters)) == len(characters)

    def test_all_cells_shown(self, session):
        assert all(cell.visibility == "shown" for cell in session.board.cells)

    def test_hide_queue_is_permutation(self, session):
        assert sorted(session.hide_queue) == list(range(6))

    def test_seed_reproduces_session(self, small_difficulty):
        first = GameSession.create(small_difficulty, seed=11, auto_start=False)
        second = GameSession.create(small_difficulty, seed=11, auto_start=False)
        assert first.board.cells == second.board.cells
        assert first.hide_queue == second.hide_queue

    def test_injected_rng(self, small_difficulty):
        session = GameSession.create(small_difficulty, rng=random.Random(1), auto_start=False)
        assert session.board.size == 6

    def test_insufficient_pool_propagates(self):
        difficulty = Difficulty(name="tiny", rows=3, columns=3, pools=["abc"])
        with pytest.raises(InsufficientPoolError):
            GameSession.create(difficulty, auto_start=False)

    def test_empty_pools_propagate(self):
        difficulty = Difficulty(name="empty", rows=1, columns=1, pools=[])
        with pytest.raises(InsufficientPoolError):
            GameSession.create(difficulty, auto_start=False)

    def test_invalid_size_reported(self):
        """Zero-sized boards never get past Difficulty validation."""
        with pytest.raises(ValueError):
            Difficulty(name="none", rows=0, columns=3, pools=["abc"])
        assert issubclass(InvalidSizeError, ValueError)


class TestHiding:
    """Test hiding cells one at a time."""

    def test_hide_pops_from_queue_end(self, session):
        expected = session.hide_queue[-1]
        assert session.hide_one_cell() is True
        assert session.board.cells[expected].visibility == "hidden"
        assert len(session.hide_queue) == 5

    def test_queue_holds_exactly_shown_cells(self, session):
        session.hide_one_cell()
        session.hide_one_cell()
        shown = {i for i, cell in enumerate(session.board.cells) if cell.visibility == "shown"}
        assert set(session.hide_queue) == shown

    def test_hide_notifies(self, session, notifier):
        session.hide_one_cell()
        assert notifier.pending


class TestGameOverByAttrition:
    """No input: game over once 40% of the board is hidden."""

    def test_third_hide_ends_round(self, session):
        session.hide_one_cell()
        assert session.state == "ongoing"
        session.hide_one_cell()
        assert session.state == "ongoing"
        session.hide_one_cell()
        assert session.state == "game_over"
        assert session.score == 0

    def test_threshold_ignores_score(self, small_difficulty):
        """A high score does not save a board with too many hidden cells."""
        session = GameSession.create(small_difficulty, seed=3, auto_start=False)
        session.hide_one_cell()
        session.apply_guess(hidden_character(session))
        session.hide_one_cell()
        session.apply_guess(hidden_character(session))
        assert session.score == 10
        session.hide_one_cell()
        session.hide_one_cell()
        session.hide_one_cell()
        assert session.board.counts().hidden == 3
        assert session.state == "game_over"
        assert session.score == 10

    def test_exact_forty_percent_loses(self):
        difficulty = Difficulty(name="five", rows=1, columns=5, pools=["abcde"])
        session = GameSession.create(difficulty, seed=1, auto_start=False)
        session.hide_one_cell()
        assert session.state == "ongoing"
        session.hide_one_cell()
        assert session.state == "game_over"


class TestInvalidInput:
    """Invalid key presses cost points but never end the round by themselves."""

    def test_unmatched_character(self, session):
        expected_scores = [-2, -4, -6, -8]
        for presses, expected in enumerate(expected_scores, 1):
            session.apply_guess("-")
            assert session.invalid_key_presses == presses
            assert session.score == expected
            assert session.state == "ongoing"

    def test_shown_character(self, session):
        """Typing a character that is still visible is invalid."""
        for presses in range(1, 5):
            session.apply_guess(shown_character(session))
            assert session.invalid_key_presses == presses
            assert session.score == -2 * presses
            assert session.state == "ongoing"
        assert all(cell.visibility == "shown" for cell in session.board.cells)

    def test_repeat_guessed_character(self, session):
        session.hide_one_cell()
        char = hidden_character(session)
        session.apply_guess(char)
        assert session.score == 5

        session.apply_guess(char)
        assert session.invalid_key_presses == 1
        assert session.board.counts().guessed == 1
        assert session.score == 3

    def test_invalid_press_notifies(self, session, notifier):
        session.apply_guess("-")
        assert notifier.wait(0) is True


class TestCompletion:
    """Test rounds where every cell gets guessed."""

    def test_all_guesses_correct(self, session):
        for expected in [5, 10, 15, 20, 25]:
            session.hide_one_cell()
            session.apply_guess(hidden_character(session))
            assert session.score == expected
            assert session.state == "ongoing"

        session.hide_one_cell()
        session.apply_guess(hidden_character(session))
        assert session.score == 30
        assert session.state == "victory"

    def test_one_incorrect_guess(self, session):
        steps = [
            (True, "hidden", 5, 0, "ongoing"),
            (True, "hidden", 10, 0, "ongoing"),
            (True, "hidden", 15, 0, "ongoing"),
            (True, "-", 13, 1, "ongoing"),
            (True, "hidden", 18, 1, "ongoing"),
            (True, "hidden", 23, 1, "ongoing"),
            (False, "hidden", 28, 1, "victory"),
        ]
        for hide, guess, score, invalid, state in steps:
            if hide:
                session.hide_one_cell()
            session.apply_guess(hidden_character(session) if guess == "hidden" else guess)
            assert session.score == score
            assert session.invalid_key_presses == invalid
            assert session.state == state
            assert_score_formula(session)

    def test_completed_board_with_non_positive_score_loses(self):
        difficulty = Difficulty(
            name="harsh",
            rows=1,
            columns=3,
            correct_guess_points=1,
            invalid_key_press_penalty=5,
            pools=["abc"],
        )
        session = GameSession.create(difficulty, seed=2, auto_start=False)
        session.apply_guess("-")
        for _ in range(2):
            session.hide_one_cell()
            session.apply_guess(hidden_character(session))
            assert session.state == "ongoing"
        session.hide_one_cell()
        session.apply_guess(hidden_character(session))
        assert session.score == -2
        assert session.state == "game_over"


class TestTerminalStickiness:
    """Once decided, nothing changes the outcome."""

    def _lose(self, session):
        for _ in range(3):
            session.hide_one_cell()
        assert session.state == "game_over"

    def test_guess_after_game_over_is_ignored(self, session):
        self._lose(session)
        session.apply_guess(hidden_character(session))
        session.apply_guess("-")
        assert session.state == "game_over"
        assert session.score == 0
        assert session.invalid_key_presses == 0

    def test_hide_after_game_over_is_ignored(self, session):
        self._lose(session)
        queued = len(session.hide_queue)
        assert session.hide_one_cell() is False
        assert len(session.hide_queue) == queued

    def test_evaluate_after_victory_is_noop(self, session):
        for _ in range(6):
            session.hide_one_cell()
            session.apply_guess(hidden_character(session))
        assert session.state == "victory"
        session.invalid_key_presses = 100
        session.evaluate()
        assert session.state == "victory"
        assert session.score == 30


class TestRetire:
    """Retired sessions are never mutated."""

    def test_retired_session_ignores_mutations(self, session):
        session.hide_one_cell()
        session.retire()
        assert not session.is_active
        assert session.hide_one_cell() is False
        session.apply_guess(hidden_character(session))
        session.apply_guess("-")
        assert session.score == 0
        assert session.invalid_key_presses == 0
        assert session.board.counts().hidden == 1

    def test_retire_twice(self, session):
        session.retire()
        session.retire()
        assert not session.is_active


class TestSnapshot:
    """Test read-only snapshots for rendering."""

    def test_snapshot_fields(self, session):
        session.hide_one_cell()
        session.apply_guess("-")
        snapshot = session.snapshot()
        assert snapshot.difficulty_name == "small"
        assert (snapshot.rows, snapshot.columns) == (3, 2)
        assert snapshot.score == -2
        assert snapshot.invalid_key_presses == 1
        assert snapshot.state == "ongoing"
        assert snapshot.hidden_remaining == 5
        assert len(snapshot.cells) == 6

    def test_snapshot_is_detached(self, session):
        snapshot = session.snapshot()
        session.hide_one_cell()
        assert all(cell.visibility == "shown" for cell in snapshot.cells)

    def test_cell_at(self, session):
        snapshot = session.snapshot()
        assert snapshot.cell_at(1, 1).character == session.board.cells[3].character


class TestConcurrentMutation:
    """Guesses and hides from many threads keep the session consistent."""

    def test_parallel_guesses_and_hides(self):
        difficulty = Difficulty(
            name="big",
            rows=5,
            columns=5,
            pools=["0123456789abcdefghijklmnopqrstuvwxyz"],
        )
        session = GameSession.create(difficulty, notifier=RenderNotifier(), seed=5, auto_start=False)
        characters = [cell.character for cell in session.board.cells]

        def guesser():
            for _ in range(20):
                for char in characters:
                    with session.lock:
                        session.apply_guess(char)

        def hider():
            while session.hide_one_cell():
                pass

        threads = [threading.Thread(target=guesser) for _ in range(3)]
        threads.append(threading.Thread(target=hider))
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=10)

        counts = session.board.counts()
        assert counts.guessed + counts.hidden + counts.shown == 25
        shown = {i for i, cell in enumerate(session.board.cells) if cell.visibility == "shown"}
        assert set(session.hide_queue) == shown
        assert_score_formula(session)
