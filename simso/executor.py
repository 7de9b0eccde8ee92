"""Instruction execution unit of the simulated CPU."""

from __future__ import annotations

from typing import Callable

from .cpu_state import CpuMode, CpuState
from .errors import Err, SimulationError
from .instructions import Opcode
from .io import IOController
from .memory import Memory


def _c_div(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def _c_mod(a: int, b: int) -> int:
    """Remainder with the sign of the dividend."""
    return a - b * _c_div(a, b)


class Executor:
    """Runs one instruction at a time against a memory and an I/O controller."""

    def __init__(self, memory: Memory, io: IOController) -> None:
        self.memory = memory
        self.io = io
        self._state = CpuState()
        self._ops: dict[int, Callable[[], None]] = {
            Opcode.NOP: self._nop,
            Opcode.PARA: self._para,
            Opcode.CARGI: self._cargi,
            Opcode.CARGM: self._cargm,
            Opcode.CARGX: self._cargx,
            Opcode.ARMM: self._armm,
            Opcode.ARMX: self._armx,
            Opcode.MVAX: self._mvax,
            Opcode.MVXA: self._mvxa,
            Opcode.INCX: self._incx,
            Opcode.SOMA: lambda: self._arith(lambda a, m: a + m),
            Opcode.SUB: lambda: self._arith(lambda a, m: a - m),
            Opcode.MULT: lambda: self._arith(lambda a, m: a * m),
            Opcode.DIV: lambda: self._arith(_c_div, divides=True),
            Opcode.RESTO: lambda: self._arith(_c_mod, divides=True),
            Opcode.NEG: self._neg,
            Opcode.DESV: self._desv,
            Opcode.DESVZ: lambda: self._branch(self._state.a == 0),
            Opcode.DESVNZ: lambda: self._branch(self._state.a != 0),
            Opcode.DESVN: lambda: self._branch(self._state.a < 0),
            Opcode.DESVP: lambda: self._branch(self._state.a > 0),
            Opcode.CHAMA: self._chama,
            Opcode.RET: self._ret,
            Opcode.LE: self._le,
            Opcode.ESCR: self._escr,
            Opcode.SISOP: self._sisop,
        }

    def copy_state(self) -> CpuState:
        """Return a copy of the CPU's internal state."""
        return self._state.copy()

    def set_state(self, state: CpuState) -> None:
        """Replace the CPU's internal state with a copy of `state`."""
        self._state = state.copy()

    def step(self) -> Err:
        """Execute the instruction at PC and return the CPU's error state."""
        st = self._state
        if st.mode is CpuMode.ZOMBIE:
            return Err.OK
        if st.error != Err.OK:
            return st.error
        try:
            opcode = self.memory.read(st.pc)
            op = self._ops.get(opcode)
            if op is None:
                st.set_error(Err.INVALID_INSTRUCTION, 0)
            else:
                op()
        except SimulationError as exc:
            st.set_error(exc.err, exc.complement)
        return st.error

    # helpers -------------------------------------------------------------

    def _arg(self) -> int:
        return self.memory.read(self._state.pc + 1)

    def _io_read(self, device: int) -> int:
        try:
            return self.io.read(device)
        except SimulationError as exc:
            raise SimulationError(exc.err, device) from None

    def _io_write(self, device: int, value: int) -> None:
        try:
            self.io.write(device, value)
        except SimulationError as exc:
            raise SimulationError(exc.err, device) from None

    def _privileged(self, opcode: Opcode) -> None:
        if self._state.mode is not CpuMode.SUPERVISOR:
            raise SimulationError(Err.PRIVILEGED, int(opcode))

    # instructions --------------------------------------------------------

    def _nop(self) -> None:
        self._state.pc += 1

    def _para(self) -> None:
        self._privileged(Opcode.PARA)
        self._state.set_error(Err.CPU_HALTED, 0)

    def _cargi(self) -> None:
        self._state.a = self._arg()
        self._state.pc += 2

    def _cargm(self) -> None:
        self._state.a = self.memory.read(self._arg())
        self._state.pc += 2

    def _cargx(self) -> None:
        x = self._state.x
        self._state.a = self.memory.read(self._arg() + x)
        self._state.pc += 2

    def _armm(self) -> None:
        self.memory.write(self._arg(), self._state.a)
        self._state.pc += 2

    def _armx(self) -> None:
        x = self._state.x
        self.memory.write(self._arg() + x, self._state.a)
        self._state.pc += 2

    def _mvax(self) -> None:
        self._state.x = self._state.a
        self._state.pc += 1

    def _mvxa(self) -> None:
        self._state.a = self._state.x
        self._state.pc += 1

    def _incx(self) -> None:
        self._state.x += 1
        self._state.pc += 1

    def _arith(self, fn: Callable[[int, int], int], divides: bool = False) -> None:
        address = self._arg()
        operand = self.memory.read(address)
        if divides and operand == 0:
            raise SimulationError(Err.INVALID_OPERATION, address)
        self._state.a = fn(self._state.a, operand)
        self._state.pc += 2

    def _neg(self) -> None:
        self._state.a = -self._state.a
        self._state.pc += 1

    def _desv(self) -> None:
        self._state.pc = self._arg()

    def _branch(self, taken: bool) -> None:
        if taken:
            self._desv()
        else:
            self._state.pc += 2

    def _chama(self) -> None:
        pc = self._state.pc
        target = self._arg()
        self.memory.write(target, pc + 2)
        self._state.pc = target + 1

    def _ret(self) -> None:
        self._state.pc = self.memory.read(self._arg())

    def _le(self) -> None:
        self._privileged(Opcode.LE)
        self._state.a = self._io_read(self._arg())
        self._state.pc += 2

    def _escr(self) -> None:
        self._privileged(Opcode.ESCR)
        self._io_write(self._arg(), self._state.a)
        self._state.pc += 2

    def _sisop(self) -> None:
        # PC is left in place; the operating system advances it.
        self._state.set_error(Err.SYSCALL, self._arg())