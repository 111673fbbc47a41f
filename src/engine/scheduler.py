import logging
import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .session import GameSession


logger = logging.getLogger(__name__)


class HideScheduler(threading.Thread):
    """
    Background thread that hides one cell of a session per interval.

    Waits `start_delay` seconds, then every `hide_interval` seconds asks the
    session to hide its next cell. The session lock is only taken inside
    hide_one_cell(), never across a wait. The thread exits on its own once
    the session reports nothing left to hide (queue drained, round decided,
    or session retired); stop() cuts a pending wait short.
    """

    def __init__(self, session: "GameSession", start_delay: float, hide_interval: float) -> None:
        super().__init__(name=f"hide-scheduler-{id(session):x}", daemon=True)
        self.session = session
        self.start_delay = start_delay
        self.hide_interval = hide_interval
        self._stop_event = threading.Event()
        self.hides = 0

    def stop(self) -> None:
        """Wake the thread so it exits without waiting out its timer."""
        self._stop_event.set()

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def run(self) -> None:
        # Grace period before anything disappears
        if self._stop_event.wait(self.start_delay):
            logger.debug("%s stopped during start delay", self.name)
            return

        while not self._stop_event.wait(self.hide_interval):
            if not self.session.hide_one_cell():
                break
            self.hides += 1

        logger.debug("%s exiting after %d hides", self.name, self.hides)
