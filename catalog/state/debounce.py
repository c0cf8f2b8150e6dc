from __future__ import annotations

import time
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class Debouncer(Generic[T]):
    """Trailing-edge debounce for a single input value.

    ``push`` records the latest raw value and restarts the quiet window.
    ``poll`` hands back the value once it has been stable for ``delay_ms``
    and it differs from the last committed value; otherwise it returns None.
    The clock is injectable so callers (and tests) control time.
    """

    def __init__(
        self,
        delay_ms: int = 700,
        initial: Optional[T] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.delay = delay_ms / 1000.0
        self._clock = clock
        self._committed: Optional[T] = initial
        self._raw: Optional[T] = initial
        self._last_push: Optional[float] = None

    @property
    def committed(self) -> Optional[T]:
        return self._committed

    @property
    def raw(self) -> Optional[T]:
        return self._raw

    @property
    def pending(self) -> bool:
        return self._last_push is not None

    def push(self, value: T) -> None:
        # Only a changed value restarts the window; reruns re-push the same text
        if value == self._raw:
            return
        self._raw = value
        self._last_push = self._clock()

    def remaining(self) -> float:
        """Seconds left in the current quiet window (0 when nothing is pending)."""
        if self._last_push is None:
            return 0.0
        return max(0.0, self._last_push + self.delay - self._clock())

    def poll(self) -> Optional[T]:
        if self._last_push is None or self.remaining() > 0:
            return None
        self._last_push = None
        if self._raw == self._committed:
            return None
        self._committed = self._raw
        return self._committed
