"""Process schedulers: pick which process the CPU runs next."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from .processes import Metrics, Process, ProcessState, ProcessTable

QUANTUM = 20


def expected_time(metrics: Metrics) -> int:
    """Estimate a process's next CPU burst from its running history.

    A process that has never stopped is assumed to use a whole quantum.
    """
    stops = metrics.blocks + metrics.preemptions
    if stops <= 0:
        return QUANTUM
    return metrics.total_running // stops


class Scheduler(ABC):
    """Keeps track of the running process and chooses the next one."""

    def __init__(self, running: Optional[Process] = None) -> None:
        self.running = running

    def _preempts(self, process: Process, clock: int) -> bool:
        """Return True if the running `process` must give up the CPU."""
        return clock - process.metrics.last_change > QUANTUM

    @abstractmethod
    def _pick(self, table: ProcessTable, clock: int) -> Optional[Process]:
        """Choose among the ready processes of `table`, or None."""

    def schedule(
        self, table: ProcessTable, clock: int, delta_clock: int = 0
    ) -> Optional[Process]:
        """Return the process that should run now, or None if none is ready."""
        current = self.running
        if current is not None and current.state is ProcessState.RUNNING:
            if not self._preempts(current, clock):
                return current
            current.change_state(ProcessState.READY, clock)
        self.running = self._pick(table, clock)
        return self.running

    def remove_running(self) -> None:
        """Forget the running process (it has ended)."""
        self.running = None


def _ready(table: ProcessTable) -> list[Process]:
    return [p for p in table if p is not None and p.state is ProcessState.READY]


class SimpleScheduler(Scheduler):
    """Runs a process until it stops; then takes the last ready one in the table."""

    def _preempts(self, process: Process, clock: int) -> bool:
        return False

    def _pick(self, table: ProcessTable, clock: int) -> Optional[Process]:
        ready = _ready(table)
        return ready[-1] if ready else None


class RoundRobinScheduler(Scheduler):
    """Preempts after a quantum; runs the process that has waited longest."""

    def _pick(self, table: ProcessTable, clock: int) -> Optional[Process]:
        return min(_ready(table), key=lambda p: p.metrics.last_change, default=None)


class ShortestJobScheduler(Scheduler):
    """Preempts after a quantum; runs the process with the shortest expected burst."""

    def _pick(self, table: ProcessTable, clock: int) -> Optional[Process]:
        return min(_ready(table), key=lambda p: expected_time(p.metrics), default=None)