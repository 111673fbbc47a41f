"""
Main control loop of the terminal game.

Two threads run here: an input thread that turns screen events into menu
actions and guesses, and the calling thread, which waits on the render
notifier and repaints. Each round's GameSession adds its own hide
scheduler thread.
"""

import logging
import random
import threading
from typing import List, Literal, Optional

from ..engine.models import RoundResult
from ..engine.notifier import RenderNotifier
from ..engine.session import GameSession
from .menu import MenuState
from .renderer import Renderer
from .screen import Event, KeyEvent, ResizeEvent, Screen


logger = logging.getLogger(__name__)

Mode = Literal["menu", "playing"]


class GameApp:
    """
    Ties a Screen, the menu and the current GameSession together.

    Attributes:
        screen: Where everything is drawn and input comes from
        menu: Difficulty selection, remembered across rounds
        notifier: Render channel shared by every session of the run
        results: Outcome of every round left so far
    """

    # Upper bound between repaints, so a resize without input still redraws
    REDRAW_TIMEOUT = 0.5

    def __init__(
        self,
        screen: Screen,
        menu: MenuState,
        renderer: Optional[Renderer] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.screen = screen
        self.menu = menu
        self.renderer = renderer or Renderer()
        self.rng = rng or random.Random()
        self.notifier = RenderNotifier()
        self.results: List[RoundResult] = []

        self.mode: Mode = "menu"
        self.session: Optional[GameSession] = None
        self.error: Optional[str] = None
        self.running = False
        # Guards mode and session swaps; session contents have their own lock.
        self._lock = threading.Lock()

    def start_round(self) -> Optional[GameSession]:
        """
        Begin a round with the selected difficulty.

        A difficulty whose pools cannot fill its board, or whose board
        cannot be built, aborts back to the menu with the error shown there.
        """
        difficulty = self.menu.difficulty
        with self._lock:
            self._leave_session()
            try:
                session = GameSession.create(difficulty, notifier=self.notifier, rng=self.rng)
            except ValueError as e:
                # CharacterSetError, or a pydantic ValidationError from the board
                logger.error("Cannot start %s round: %s", difficulty.name, e)
                self.error = f"Cannot start {difficulty.name}: {e}"
                self.mode = "menu"
            else:
                logger.info("Started %s round", difficulty.name)
                self.session = session
                self.error = None
                self.mode = "playing"
        self.notifier.notify()
        return self.session

    def back_to_menu(self) -> None:
        with self._lock:
            self._leave_session()
            self.mode = "menu"
        self.notifier.notify()

    def stop(self) -> None:
        """End the run; wakes the draw loop and retires the current session."""
        with self._lock:
            self.running = False
            self._leave_session()
        self.notifier.close()

    def _leave_session(self) -> None:
        # Caller holds self._lock
        session = self.session
        if session is None:
            return

        session.retire()
        snapshot = session.snapshot()
        self.results.append(RoundResult(
            difficulty=snapshot.difficulty_name,
            state=snapshot.state,
            score=snapshot.score,
            invalid_key_presses=snapshot.invalid_key_presses,
        ))
        logger.info(
            "Left %s round: %s, score %d",
            snapshot.difficulty_name, snapshot.state, snapshot.score
        )
        self.session = None

    def handle_event(self, event: Event) -> bool:
        """
        Apply one input event.

        Returns:
            False once the user asked to quit
        """
        if isinstance(event, ResizeEvent):
            self.notifier.notify()
            return True

        if not isinstance(event, KeyEvent):
            return True

        if event.key == "ctrl_c":
            self.stop()
            return False

        if self.mode == "menu":
            return self._handle_menu_key(event)
        return self._handle_round_key(event)

    def _handle_menu_key(self, event: KeyEvent) -> bool:
        if event.key == "up" or event.char == "k":
            self.menu.move_up()
        elif event.key == "down" or event.char == "j":
            self.menu.move_down()
        elif event.key == "enter":
            self.start_round()
            return True
        elif event.char == "q":
            self.stop()
            return False
        self.notifier.notify()
        return True

    def _handle_round_key(self, event: KeyEvent) -> bool:
        session = self.session
        if session is None:
            return True

        with session.lock:
            ongoing = session.state == "ongoing"

        if ongoing:
            if event.key == "escape":
                self.back_to_menu()
            elif event.key == "rune":
                with session.lock:
                    session.apply_guess(event.char)
            return True

        # Round decided
        if event.char == "r":
            self.start_round()
        elif event.char == "m" or event.key == "escape":
            self.back_to_menu()
        return True

    def draw(self) -> None:
        """Repaint the screen for the current mode."""
        with self._lock:
            mode = self.mode
            session = self.session
            error = self.error

        if mode == "playing" and session is not None:
            self.renderer.draw_session(self.screen, session.snapshot())
        else:
            self.renderer.draw_menu(self.screen, self.menu, error)

    def _listen(self) -> None:
        while self.running:
            event = self.screen.poll_event()
            if not self.handle_event(event):
                break

    def run(self) -> List[RoundResult]:
        """
        Run until the user quits.

        Returns:
            The results of all rounds played, also after an interrupt
        """
        self.running = True
        listener = threading.Thread(target=self._listen, name="input-listener", daemon=True)
        listener.start()

        try:
            self.draw()
            while self.running:
                self.notifier.wait(self.REDRAW_TIMEOUT)
                if not self.running:
                    break
                self.draw()
        except KeyboardInterrupt:
            logger.info("Interrupted, stopping")
            self.stop()

        return self.results
