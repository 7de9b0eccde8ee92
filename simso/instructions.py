"""Instruction set of the simulated CPU and the assembler's pseudo-instructions."""

from __future__ import annotations

from enum import IntEnum


class Opcode(IntEnum):
    """Machine opcodes, followed by the assembler pseudo-instructions."""

    NOP = 0
    PARA = 1
    CARGI = 2
    CARGM = 3
    CARGX = 4
    ARMM = 5
    ARMX = 6
    MVAX = 7
    MVXA = 8
    INCX = 9
    SOMA = 10
    SUB = 11
    MULT = 12
    DIV = 13
    RESTO = 14
    NEG = 15
    DESV = 16
    DESVZ = 17
    DESVNZ = 18
    DESVN = 19
    DESVP = 20
    CHAMA = 21
    RET = 22
    LE = 23
    ESCR = 24
    SISOP = 25
    # pseudo-instructions
    DEFINE = 26
    VALOR = 27
    ESPACO = 28


_ARGS = {
    Opcode.NOP: 0,
    Opcode.PARA: 0,
    Opcode.CARGI: 1,
    Opcode.CARGM: 1,
    Opcode.CARGX: 1,
    Opcode.ARMM: 1,
    Opcode.ARMX: 1,
    Opcode.MVAX: 0,
    Opcode.MVXA: 0,
    Opcode.INCX: 0,
    Opcode.SOMA: 1,
    Opcode.SUB: 1,
    Opcode.MULT: 1,
    Opcode.DIV: 1,
    Opcode.RESTO: 1,
    Opcode.NEG: 0,
    Opcode.DESV: 1,
    Opcode.DESVZ: 1,
    Opcode.DESVNZ: 1,
    Opcode.DESVN: 1,
    Opcode.DESVP: 1,
    Opcode.CHAMA: 1,
    Opcode.RET: 1,
    Opcode.LE: 1,
    Opcode.ESCR: 1,
    Opcode.SISOP: 1,
    Opcode.VALOR: 1,
    Opcode.ESPACO: 1,
    Opcode.DEFINE: 1,
}


def _as_opcode(opcode: int) -> Opcode | None:
    try:
        return Opcode(opcode)
    except ValueError:
        return None


def opcode_for(name: str | None) -> Opcode | None:
    """Return the opcode named `name` (case-insensitive), or None."""
    if name is None:
        return None
    return Opcode.__members__.get(name.upper())


def opcode_name(opcode: int) -> str | None:
    """Return the mnemonic of `opcode`, or None if it is unknown."""
    op = _as_opcode(opcode)
    return None if op is None else op.name


def arg_count(opcode: int) -> int | None:
    """Return how many arguments `opcode` takes, or None if it is unknown."""
    op = _as_opcode(opcode)
    return None if op is None else _ARGS[op]