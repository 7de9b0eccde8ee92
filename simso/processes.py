"""Processes, their accounting metrics and the process table."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional, Sequence

from .cpu_state import CpuState
from .io import Access
from .memory import Memory

TABLE_GROWTH = 5


class ProcessState(Enum):
    """Scheduling state of a process."""

    BLOCKED = "blocked"
    READY = "ready"
    RUNNING = "running"


class BlockKind(Enum):
    """Reason a process is blocked."""

    IO = "io"


@dataclass
class Metrics:
    """Clock accounting of a process's life."""

    start: int = 0
    last_change: int = 0
    end: int = 0
    total_running: int = 0
    total_blocked: int = 0
    total_ready: int = 0
    blocks: int = 0
    preemptions: int = 0


@dataclass(frozen=True)
class IOWait:
    """The device access a process blocked on."""

    device: int
    access: Access


@dataclass(frozen=True)
class Program:
    """Machine code to be loaded at address 0 of a new process."""

    code: tuple[int, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "code", tuple(self.code))

    def __len__(self) -> int:
        return len(self.code)


class Process:
    """A program in execution: its own memory image, registers and state."""

    def __init__(
        self, program: Program, program_number: int, memory_size: int, clock: int
    ) -> None:
        self.memory = Memory(memory_size)
        for address, value in enumerate(program.code):
            self.memory.write(address, value)
        self.cpu = CpuState()
        self.state = ProcessState.READY
        self.program_number = program_number
        self.block_kind: Optional[BlockKind] = None
        self.block_info: Optional[IOWait] = None
        self.metrics = Metrics(start=clock, last_change=clock)

    def _account(self, clock: int) -> None:
        elapsed = clock - self.metrics.last_change
        if self.state is ProcessState.RUNNING:
            self.metrics.total_running += elapsed
        elif self.state is ProcessState.BLOCKED:
            self.metrics.total_blocked += elapsed
        else:
            self.metrics.total_ready += elapsed
        self.metrics.last_change = clock

    def change_state(self, state: ProcessState, clock: int) -> None:
        """Move to `state` at time `clock`, charging time to the old state."""
        if state is self.state:
            return
        self._account(clock)
        if self.state is ProcessState.RUNNING:
            if state is ProcessState.BLOCKED:
                self.metrics.blocks += 1
            elif state is ProcessState.READY:
                self.metrics.preemptions += 1
        self.state = state

    def block(self, kind: BlockKind, info: Optional[IOWait], clock: int) -> None:
        """Block the process for `kind`, remembering what it waits for."""
        self.change_state(ProcessState.BLOCKED, clock)
        self.block_kind = kind
        self.block_info = info

    def finish(self, clock: int) -> None:
        """Close the accounting of the process at time `clock`."""
        self._account(clock)
        self.metrics.end = clock


class ProcessTable:
    """Slots holding processes; a freed slot is reused before the table grows."""

    def __init__(self, size: int) -> None:
        self._slots: list[Optional[Process]] = [None] * size

    def add(self, process: Process) -> int:
        """Put `process` in the first free slot, growing if needed; return its index."""
        try:
            index = self._slots.index(None)
        except ValueError:
            index = len(self._slots)
            self._slots.extend([None] * TABLE_GROWTH)
        self._slots[index] = process
        return index

    def index_of(self, process: Process) -> int:
        """Return the slot holding `process`; raise ValueError if absent."""
        for index, slot in enumerate(self._slots):
            if slot is process:
                return index
        raise ValueError("process not in table")

    def remove(self, index: int) -> Optional[Process]:
        """Empty slot `index` and return what it held."""
        process = self._slots[index]
        self._slots[index] = None
        return process

    def has_processes(self) -> bool:
        """Return True if any slot holds a process."""
        return any(slot is not None for slot in self._slots)

    def __iter__(self) -> Iterator[Optional[Process]]:
        """Yield every slot in order, None where it is empty."""
        return iter(self._slots)

    def __len__(self) -> int:
        return len(self._slots)

    def __getitem__(self, index: int) -> Optional[Process]:
        return self._slots[index]


def _as_program(code: Sequence[int]) -> Program:
    return Program(tuple(code))