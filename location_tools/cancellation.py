"""
Cooperative cancellation.

A CancellationToken is handed to a lookup by its caller. The retry loop
checks it before every network call and sleeps on it between attempts,
so cancelling wakes a pending backoff immediately.
"""

import threading


class CancellationToken:
    """Thread-safe cancellation flag backed by a threading.Event."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self):
        """Signal cancellation. Idempotent."""
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: float) -> bool:
        """
        Sleep for up to `timeout` seconds.

        Returns:
            True if the token was cancelled before or during the wait
        """
        if timeout <= 0:
            return self._event.is_set()
        return self._event.wait(timeout)

    def __repr__(self):
        state = "cancelled" if self.is_cancelled else "active"
        return f"<CancellationToken: {state}>"
