"""Error conditions raised by the simulated hardware."""

from __future__ import annotations

from enum import IntEnum


class Err(IntEnum):
    """Conditions that can stop an instruction or interrupt the CPU."""

    OK = 0
    INVALID_ADDRESS = 1
    INVALID_OPERATION = 2
    BUSY = 3
    CPU_HALTED = 4
    PRIVILEGED = 5
    INVALID_INSTRUCTION = 6
    CLOCK_TICK = 7
    SYSCALL = 8


_NAMES = {
    Err.OK: "OK",
    Err.INVALID_ADDRESS: "Endereço inválido",
    Err.INVALID_OPERATION: "Operação inválida",
    Err.BUSY: "Dispositivo ocupado",
    Err.CPU_HALTED: "CPU parada",
    Err.PRIVILEGED: "Instrução privilegiada",
    Err.INVALID_INSTRUCTION: "Instrução inválida",
    Err.SYSCALL: "Chamada de sistema",
    Err.CLOCK_TICK: "Interrupção de relógio",
}

UNKNOWN_NAME = "DESCONHECIDO"


def error_name(err: int) -> str:
    """Return the display name of an error code, or 'DESCONHECIDO'."""
    try:
        return _NAMES[Err(err)]
    except ValueError:
        return UNKNOWN_NAME


class SimulationError(Exception):
    """A hardware access failed with the given error code."""

    def __init__(self, err: Err, complement: int = 0) -> None:
        self.err = Err(err)
        self.complement = complement
        super().__init__(f"{error_name(self.err)} ({complement})")