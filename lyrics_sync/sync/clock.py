from __future__ import annotations

import time


class PlaybackClock:
    """Source of the player's current position, polled once per tick."""

    def position_ms(self) -> int:
        raise NotImplementedError

    def finished(self) -> bool:
        raise NotImplementedError


class WallClock(PlaybackClock):
    """
    Simulated player: position advances with the monotonic clock from
    `start_ms`, scaled by `rate`. Finishes once `duration_ms` is reached.
    """

    def __init__(self, start_ms: int = 0, rate: float = 1.0, duration_ms: int | None = None):
        if rate <= 0:
            raise ValueError("rate must be positive")
        self.start_ms = int(start_ms)
        self.rate = float(rate)
        self.duration_ms = duration_ms
        self._t0: float | None = None

    def position_ms(self) -> int:
        now = time.monotonic()
        if self._t0 is None:
            self._t0 = now
        elapsed = now - self._t0
        return self.start_ms + int(elapsed * 1000 * self.rate)

    def finished(self) -> bool:
        if self.duration_ms is None:
            return False
        return self.position_ms() >= self.duration_ms
