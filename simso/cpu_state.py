"""Register and mode state of the simulated CPU."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum

from .errors import Err


class CpuMode(Enum):
    """Execution mode.

    SUPERVISOR runs every instruction, USER faults on privileged ones,
    ZOMBIE runs nothing (used when no process is ready).
    """

    SUPERVISOR = "supervisor"
    USER = "user"
    ZOMBIE = "zombie"


@dataclass
class CpuState:
    """Registers, pending error and mode of the CPU."""

    pc: int = 0
    a: int = 0
    x: int = 0
    error: Err = Err.OK
    complement: int = 0
    mode: CpuMode = CpuMode.SUPERVISOR

    def copy(self) -> CpuState:
        """Return an independent copy of this state."""
        return dataclasses.replace(self)

    def set_error(self, err: Err, complement: int = 0) -> None:
        """Record an error and its complement (e.g. the faulting address)."""
        self.error = Err(err)
        self.complement = complement