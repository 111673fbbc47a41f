import logging
import random
import threading
from typing import Any, List, Optional
from pydantic import BaseModel, Field, ConfigDict

from .board import Board
from .charset import sample_characters
from .models import Difficulty, GameState, SessionSnapshot
from .notifier import RenderNotifier
from .scheduler import HideScheduler


logger = logging.getLogger(__name__)

# Share of simultaneously hidden cells at which the round is lost
HIDDEN_RATIO_LIMIT = 0.4


class GameSession(BaseModel):
    """
    The locked, mutable state of a single round.

    Owns the board, the order in which cells get hidden, the score and the
    game state. Three threads touch a session: the hide scheduler, the input
    listener and the draw loop. Every read or write of the fields below goes
    through `lock`.

    A session is never reset. Restarting builds a new session and retires
    the old one, after which the old one ignores all mutations and its
    scheduler exits.

    Attributes:
        difficulty: The settings this round was built from
        board: The cells of the round
        hide_queue: Indices still to be hidden, popped from the end
        score: Current score; may go negative
        invalid_key_presses: Guesses that did not reveal a hidden cell
        state: ongoing, game_over or victory
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    difficulty: Difficulty
    board: Board
    hide_queue: List[int] = Field(default_factory=list)
    score: int = 0
    invalid_key_presses: int = 0
    state: GameState = "ongoing"
    notifier: Optional[RenderNotifier] = None
    _lock: Any = None
    _active: bool = True
    _scheduler: Optional[HideScheduler] = None

    def model_post_init(self, __context) -> None:
        """Create the session lock."""
        self._lock = threading.RLock()

    @classmethod
    def create(
        cls,
        difficulty: Difficulty,
        notifier: Optional[RenderNotifier] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        auto_start: bool = True,
    ) -> "GameSession":
        """
        Factory method to build a session and start hiding cells.

        Args:
            difficulty: Settings for the round
            notifier: Channel signalled after every state evaluation
            seed: Optional random seed, ignored when `rng` is given
            rng: Random source for characters and hide order
            auto_start: Start the hide scheduler before returning

        Returns:
            A new ongoing GameSession

        Raises:
            CharacterSetError: If the difficulty's pools cannot fill the board
        """
        if rng is None:
            rng = random.Random(seed)

        characters = sample_characters(difficulty.board_size, difficulty.pools, rng=rng)
        board = Board.create(characters, difficulty.rows, difficulty.columns)

        # Independent shuffle: hide order must not follow character order
        hide_queue = list(range(board.size))
        rng.shuffle(hide_queue)

        session = cls(difficulty=difficulty, board=board, hide_queue=hide_queue, notifier=notifier)
        logger.debug(
            "Created %s session with %dx%d board",
            difficulty.name, difficulty.rows, difficulty.columns
        )

        if auto_start:
            session.start()
        return session

    @property
    def lock(self) -> Any:
        return self._lock

    @property
    def rows(self) -> int:
        return self.board.rows

    @property
    def columns(self) -> int:
        return self.board.columns

    @property
    def is_active(self) -> bool:
        """False once the session has been retired."""
        return self._active

    @property
    def scheduler(self) -> Optional[HideScheduler]:
        return self._scheduler

    def start(self) -> HideScheduler:
        """Start the background hide scheduler (once)."""
        with self._lock:
            if self._scheduler is None:
                self._scheduler = HideScheduler(
                    self,
                    start_delay=self.difficulty.start_delay,
                    hide_interval=self.difficulty.hide_interval,
                )
                self._scheduler.start()
            return self._scheduler

    def retire(self) -> None:
        """
        Mark this session as superseded.

        Later guesses and hides are ignored and the scheduler is woken so it
        exits immediately instead of after its next interval.
        """
        with self._lock:
            if not self._active:
                return
            self._active = False
            scheduler = self._scheduler
        if scheduler is not None:
            scheduler.stop()
        logger.debug("Retired %s session in state %s", self.difficulty.name, self.state)

    def hide_one_cell(self) -> bool:
        """
        Hide the next cell in the hide queue and re-evaluate the round.

        Returns:
            True if a cell was hidden; False when there is nothing left to do
            (queue drained, round decided or session retired)
        """
        with self._lock:
            if not self._active or self.state != "ongoing" or not self.hide_queue:
                return False

            index = self.hide_queue.pop()
            self.board.hide(index)
            self.evaluate()
            return True

    def apply_guess(self, character: str) -> None:
        """
        Apply one key press to the round.

        A press counts as correct only if it names a currently hidden cell;
        anything else (unknown character, shown cell, already guessed cell)
        is an invalid key press. Presses after the round ended are dropped.
        """
        with self._lock:
            if not self._active or self.state != "ongoing":
                return

            if not self.board.reveal(character):
                self.invalid_key_presses += 1
            self.evaluate()

    def evaluate(self) -> None:
        """Recompute the score and decide whether the round is over."""
        with self._lock:
            # Terminal states are sticky
            if self.state != "ongoing":
                return

            counts = self.board.counts()
            self.score = (
                counts.guessed * self.difficulty.correct_guess_points
                - self.invalid_key_presses * self.difficulty.invalid_key_press_penalty
            )

            # If at least 40 percent of the board is hidden, the player lost.
            if counts.hidden > 0 and counts.hidden / self.board.size >= HIDDEN_RATIO_LIMIT:
                self._transition("game_over")
            elif counts.shown == 0 and counts.hidden == 0:
                # Every cell guessed; a non-positive score still loses
                self._transition("victory" if self.score > 0 else "game_over")

            if self.notifier is not None:
                self.notifier.notify()

    def _transition(self, state: GameState) -> None:
        logger.debug(
            "%s session: %s -> %s (score %d, invalid presses %d)",
            self.difficulty.name, self.state, state, self.score, self.invalid_key_presses
        )
        self.state = state

    def snapshot(self) -> SessionSnapshot:
        """Take a consistent copy of the session for rendering."""
        with self._lock:
            return SessionSnapshot(
                difficulty_name=self.difficulty.name,
                rows=self.board.rows,
                columns=self.board.columns,
                cells=self.board.copy_cells(),
                score=self.score,
                invalid_key_presses=self.invalid_key_presses,
                state=self.state,
                hidden_remaining=len(self.hide_queue),
            )
