"""The system clock: counts executed instructions and raises ticks."""

from __future__ import annotations

import time

from .errors import Err, SimulationError

INSTRUCTION_COUNTER = 0
CPU_TIME_MS = 1


class Clock:
    """Advances once per instruction; signals an interrupt every `period` ticks."""

    def __init__(self, period: int = 0) -> None:
        self.period = period
        self._now = 0

    def tick(self) -> bool:
        """Advance one unit; return True when a clock interrupt is due."""
        self._now += 1
        return self.period != 0 and self._now % self.period == 0

    def now(self) -> int:
        """Return the current time in instruction units."""
        return self._now

    def read(self, device_id: int) -> int:
        """Read as a device: 0 gives the counter, 1 the process CPU time in ms."""
        if device_id == INSTRUCTION_COUNTER:
            return self._now
        if device_id == CPU_TIME_MS:
            return int(time.process_time() * 1000)
        raise SimulationError(Err.INVALID_ADDRESS, device_id)