"""The simulated hardware: memory, CPU, devices and the execution loop."""

from __future__ import annotations

from typing import Callable, Optional, Protocol

from .clock import CPU_TIME_MS, INSTRUCTION_COUNTER, Clock
from .errors import Err, SimulationError, error_name
from .executor import Executor
from .instructions import arg_count, opcode_name
from .io import IOController
from .memory import Memory
from .random_device import RandomDevice
from .screen import Screen
from .terminal import Terminal

MEM_TAM = 2000
TERMINAL_DEVICES = range(0, 7)
RANDOM_DEVICE = 10
CLOCK_CYCLES_DEVICE = 99
CLOCK_TIME_DEVICE = 98


class OperatingSystemLike(Protocol):
    def interrupt(self, err: Err) -> None: ...

    def ok(self) -> bool: ...


class Machine:
    """Owns the hardware and runs instructions, handing interrupts to the OS."""

    def __init__(self, screen: Optional[Screen] = None, clock_period: int = 1) -> None:
        self.screen = screen if screen is not None else Screen()
        self.memory = Memory(MEM_TAM)
        self.terminal = Terminal(self.screen)
        self.clock = Clock(clock_period)
        self.random = RandomDevice()
        self.io = IOController()
        for number in TERMINAL_DEVICES:
            self.io.register(
                number,
                read=lambda n=number: self.terminal.read(n),
                write=lambda value, n=number: self.terminal.write(n, value),
                ready=lambda access, n=number: self.terminal.ready(n, access),
            )
        self.io.register(RANDOM_DEVICE, read=lambda: self.random.read(0))
        self.io.register(
            CLOCK_CYCLES_DEVICE, read=lambda: self.clock.read(INSTRUCTION_COUNTER)
        )
        self.io.register(CLOCK_TIME_DEVICE, read=lambda: self.clock.read(CPU_TIME_MS))
        self.executor = Executor(self.memory, self.io)
        self.os: Optional[OperatingSystemLike] = None

    def attach_os(self, os: OperatingSystemLike) -> None:
        """Tell the machine which operating system handles its interrupts."""
        self.os = os

    def _interrupt(self, err: Err) -> None:
        if self.os is None:
            raise RuntimeError("no operating system attached")
        self.os.interrupt(err)

    def step(self) -> None:
        """Execute one instruction, advance the clock and refresh the status line."""
        err = self.executor.step()
        if err != Err.OK:
            self._interrupt(err)
        if self.clock.tick():
            self._interrupt(Err.CLOCK_TICK)
        self.screen.set_status(self.status_line())

    def run(self, refresh: Optional[Callable[[], None]] = None) -> None:
        """Step until the operating system says to stop, calling `refresh` each step."""
        if self.os is None:
            raise RuntimeError("no operating system attached")
        while True:
            self.step()
            if refresh is not None:
                refresh()
            if not self.os.ok():
                break
        self.screen.log("Fim da execução.")
        self.screen.log(f"relógio: {self.clock.now()}\n")

    def status_line(self) -> str:
        """Describe registers, the instruction at PC and any pending error."""
        state = self.executor.copy_state()
        pc = state.pc
        try:
            opcode = self.memory.read(pc)
        except SimulationError:
            opcode = -1
        name = opcode_name(opcode) or "(null)"
        text = f"PC={pc:04d} A={state.a:06d} X={state.x:06d} {opcode:02d} {name}"
        count = arg_count(opcode)
        if count is not None and count > 0:
            try:
                arg = self.memory.read(pc + 1)
            except SimulationError:
                arg = 0
            text += f" {arg}"
        if state.error != Err.OK:
            text += f" E={int(state.error)}({state.complement}) {error_name(state.error)}"
        return text