"""Wall-clock to fixed-period tick conversion for the driver loop."""
from __future__ import annotations

import time
from dataclasses import dataclass, field


@dataclass
class FrameTimer:
    """Seconds elapsed between calls, based on :func:`time.perf_counter`."""

    last_time: float = field(default_factory=time.perf_counter)

    def tick(self) -> float:
        now = time.perf_counter()
        elapsed = now - self.last_time
        self.last_time = now
        return elapsed


@dataclass
class TickAccumulator:
    """Banks elapsed time and pays it out as whole simulation ticks.

    At most ``max_catchup`` ticks are released per frame; any backlog beyond
    that is dropped so a stalled window does not fast-forward the universe.
    """

    period: float
    max_catchup: int
    value: float = 0.0
    dropped: int = 0

    def accrue(self, elapsed: float) -> None:
        if elapsed > 0.0:
            self.value += elapsed

    def clear(self) -> None:
        self.value = 0.0

    def consume(self) -> int:
        due = int(self.value // self.period)
        if due <= 0:
            return 0
        if due > self.max_catchup:
            self.dropped += due - self.max_catchup
            self.value = self.value % self.period
            return self.max_catchup
        self.value -= due * self.period
        return due


__all__ = ["FrameTimer", "TickAccumulator"]
