"""Per-question countdown driven by an injectable monotonic clock."""
from __future__ import annotations

import math
import time
from typing import Optional, Protocol


class Clock(Protocol):
    def monotonic(self) -> float: ...


class SystemClock:
    def monotonic(self) -> float:
        return time.monotonic()


class Countdown:
    """Seconds-remaining timer; nothing runs in the background, callers poll it."""

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._clock = clock or SystemClock()
        self._deadline: Optional[float] = None

    @property
    def running(self) -> bool:
        return self._deadline is not None

    def start(self, seconds: float) -> None:
        self._deadline = self._clock.monotonic() + max(0.0, float(seconds))

    def cancel(self) -> None:
        self._deadline = None

    def remaining(self, now: Optional[float] = None) -> Optional[int]:
        """Whole seconds left, rounded up; ``None`` when not running."""

        if self._deadline is None:
            return None
        current = self._clock.monotonic() if now is None else now
        return max(0, math.ceil(self._deadline - current))

    def expired(self, now: Optional[float] = None) -> bool:
        left = self.remaining(now)
        return left is not None and left <= 0


__all__ = ["Clock", "SystemClock", "Countdown"]
