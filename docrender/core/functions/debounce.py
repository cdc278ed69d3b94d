# docrender/core/functions/debounce.py
"""
Debouncer - Trailing-edge delayed task for search input

Cooperative, single-threaded schedule-then-cancel pattern:
every push() replaces the pending value and restarts the quiet window;
only when the window elapses without new input does the callback fire.

There is no timer thread. The host event loop pumps the debouncer by
calling tick() (e.g. from its idle/timer callback), and the clock is
injectable so tests can drive time deterministically.

Usage:
    debouncer = Debouncer(on_query, delay=0.3)
    debouncer.push("e")
    debouncer.push("en")
    debouncer.push("eng")
    ...
    debouncer.tick()   # fires on_query("eng") once 0.3s have passed
"""
import logging
import time
from typing import Callable, Generic, Optional, TypeVar

logger = logging.getLogger("document-renderer")

T = TypeVar("T")

DEFAULT_DEBOUNCE_DELAY = 0.3


class Debouncer(Generic[T]):
    """Trailing-edge debouncer driven by an injectable monotonic clock.

    Attributes:
        delay: Quiet window in seconds
    """

    def __init__(
        self,
        callback: Callable[[T], None],
        delay: float = DEFAULT_DEBOUNCE_DELAY,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize Debouncer.

        Args:
            callback: Called with the last pushed value once the window elapses
            delay: Quiet window in seconds (0 fires on the next tick)
            clock: Monotonic time source in seconds
        """
        if delay < 0:
            raise ValueError(f"Debounce delay must be >= 0, got {delay}")
        self.delay = delay
        self._callback = callback
        self._clock = clock
        self._pending: Optional[T] = None
        self._has_pending = False
        self._deadline = 0.0

    @property
    def pending(self) -> bool:
        """Whether a value is waiting for its quiet window to elapse."""
        return self._has_pending

    @property
    def deadline(self) -> Optional[float]:
        return self._deadline if self._has_pending else None

    def push(self, value: T) -> None:
        """Schedule value, cancelling any previously pending one."""
        self._pending = value
        self._has_pending = True
        self._deadline = self._clock() + self.delay

    def tick(self) -> bool:
        """Fire the pending value if its quiet window has elapsed.

        Returns:
            True if the callback fired
        """
        if not self._has_pending or self._clock() < self._deadline:
            return False
        return self.flush()

    def flush(self) -> bool:
        """Fire the pending value immediately, ignoring the window."""
        if not self._has_pending:
            return False
        value = self._pending
        self.cancel()
        self._callback(value)
        return True

    def cancel(self) -> None:
        self._pending = None
        self._has_pending = False


__all__ = [
    "DEFAULT_DEBOUNCE_DELAY",
    "Debouncer",
]
