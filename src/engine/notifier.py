"""Render-notification channel between game sessions and the draw loop."""

import threading
from typing import Optional


class RenderNotifier:
    """
    Payload-free "something changed, redraw" signal.

    Producers call notify() while holding a session lock, so it never blocks:
    a pending signal absorbs any further ones until the consumer takes it.
    """

    def __init__(self) -> None:
        self._pending = threading.Event()
        self._closed = False
        # Makes "consume unless closed" atomic against close()
        self._close_lock = threading.Lock()

    def notify(self) -> None:
        """Signal a pending redraw."""
        self._pending.set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Block until a redraw is pending or the timeout expires.

        Returns:
            True if a signal was consumed (or the channel is closed)
        """
        signalled = self._pending.wait(timeout)
        if signalled:
            with self._close_lock:
                if not self._closed:
                    self._pending.clear()
        return signalled

    def close(self) -> None:
        """Wake all waiters for good; later wait() calls return immediately."""
        with self._close_lock:
            self._closed = True
            self._pending.set()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def pending(self) -> bool:
        return self._pending.is_set()
