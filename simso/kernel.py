"""The operating system: processes, system calls and scheduling on interrupts."""

from __future__ import annotations

from enum import IntEnum
from typing import Iterable, Optional, Sequence, Union

from .cpu_state import CpuMode, CpuState
from .errors import Err, SimulationError, error_name
from .io import Access
from .machine import CLOCK_CYCLES_DEVICE, Machine
from .processes import (
    BlockKind,
    IOWait,
    Process,
    ProcessState,
    ProcessTable,
    Program,
)
from .schedulers import Scheduler, SimpleScheduler


class SystemCall(IntEnum):
    """System calls, selected by the argument of the SISOP instruction."""

    READ = 1  # read from device in A; value goes to X
    WRITE = 2  # write X to device in A
    EXIT = 3  # end the calling process
    CREATE = 4  # start a process running program number A


ProgramLike = Union[Program, Sequence[int]]


class OperatingSystem:
    """Handles the machine's interrupts and manages the processes.

    On creation it starts program 0 as the first process and puts the
    CPU in user mode.
    """

    def __init__(
        self,
        machine: Machine,
        programs: Iterable[ProgramLike],
        scheduler: Optional[Scheduler] = None,
    ) -> None:
        self.machine = machine
        self.programs = [
            p if isinstance(p, Program) else Program(tuple(p)) for p in programs
        ]
        if not self.programs:
            raise ValueError("at least one program is needed")
        self.panicked = False
        self.total_interrupts = 0
        self.clock = 0
        self.delta_clock = 0
        self.idle_clock = 0
        self.table = ProcessTable(len(self.programs))

        first = self._new_process(0)
        self._running_index: Optional[int] = self.table.add(first)
        first.change_state(ProcessState.RUNNING, self.clock)

        self.scheduler = scheduler if scheduler is not None else SimpleScheduler()
        self.scheduler.running = first
        self._load_context(first)
        self._set_mode(CpuMode.USER)

    # public interface ----------------------------------------------------

    def running_process(self) -> Optional[Process]:
        """Return the process that holds the CPU, or None."""
        index = self._running_index
        if index is None or index >= len(self.table):
            return None
        return self.table[index]

    def ok(self) -> bool:
        """Return False once the system must shut down."""
        if self.panicked:
            self._log(
                f"(so) total: {self.clock}, "
                f"total_cpu: {self.clock - self.idle_clock}, "
                f"qtd_interrupcoes: {self.total_interrupts}"
            )
        return not self.panicked

    def interrupt(self, err: Err) -> None:
        """Handle an interrupt of kind `err` and choose who runs next."""
        self.total_interrupts += 1
        self._set_mode(CpuMode.SUPERVISOR)
        self._update_clock()
        proc = self.running_process()
        if proc is not None:
            if err == Err.SYSCALL:
                self._syscall(proc)
            elif err == Err.CLOCK_TICK:
                pass
            else:
                self._log(f"SO: interrupção não tratada [{error_name(err)}]")
                self.panicked = True
        else:
            self.idle_clock += self.delta_clock
        self._unblock_ready()
        chosen = self.scheduler.schedule(self.table, self.clock, self.delta_clock)
        self._switch_to(chosen)
        self._acknowledge_syscall()
        self._set_mode(CpuMode.USER)

    # helpers -------------------------------------------------------------

    def _log(self, text: str) -> None:
        self.machine.screen.log(text)

    def _panic(self) -> None:
        self._log("Problema irrecuperável no SO")
        self.panicked = True

    def _new_process(self, number: int) -> Process:
        return Process(
            self.programs[number], number, len(self.machine.memory), self.clock
        )

    def _update_clock(self) -> None:
        now = self.machine.io.read(CLOCK_CYCLES_DEVICE)
        self.delta_clock = now - self.clock
        self.clock = now

    def _set_mode(self, mode: CpuMode) -> None:
        state = self.machine.executor.copy_state()
        state.mode = mode
        self.machine.executor.set_state(state)
        proc = self.running_process()
        if proc is not None:
            proc.cpu = state

    def _save_context(self, proc: Process) -> None:
        proc.memory.copy_from(self.machine.memory)
        proc.cpu = self.machine.executor.copy_state()

    def _load_context(self, proc: Process) -> None:
        self.machine.memory.copy_from(proc.memory)
        self.machine.executor.set_state(proc.cpu)

    def _switch_to(self, chosen: Optional[Process]) -> None:
        if not self.table.has_processes():
            # nothing left to run
            self.panicked = True
            return
        current = self.running_process()
        if current is not None:
            self._save_context(current)
        if chosen is None:
            self._set_mode(CpuMode.ZOMBIE)
        else:
            self._load_context(chosen)
            chosen.change_state(ProcessState.RUNNING, self.clock)
            self._running_index = self.table.index_of(chosen)

    def _acknowledge_syscall(self) -> None:
        proc = self.running_process()
        if proc is None or self.panicked:
            return
        if proc.cpu.error == Err.SYSCALL:
            state = self.machine.executor.copy_state()
            state.set_error(Err.OK, 0)
            self.machine.executor.set_state(state)
            proc.cpu = state

    def _unblock_ready(self) -> None:
        for proc in self.table:
            if proc is None or proc.state is not ProcessState.BLOCKED:
                continue
            if proc.block_kind is BlockKind.IO and proc.block_info is not None:
                wait = proc.block_info
                if self.machine.io.ready(wait.device, wait.access):
                    proc.change_state(ProcessState.READY, self.clock)

    @staticmethod
    def _io_wait(cpu: CpuState) -> IOWait:
        access = Access.READ if cpu.complement == SystemCall.READ else Access.WRITE
        return IOWait(cpu.a, access)

    def _finish_call(self, cpu: CpuState) -> None:
        cpu.pc += 2
        self.machine.executor.set_state(cpu)

    # system calls --------------------------------------------------------

    def _syscall(self, proc: Process) -> None:
        proc.cpu = self.machine.executor.copy_state()
        call = proc.cpu.complement
        if call == SystemCall.READ:
            self._sys_read(proc)
        elif call == SystemCall.WRITE:
            self._sys_write(proc)
        elif call == SystemCall.EXIT:
            self._sys_exit(proc)
        elif call == SystemCall.CREATE:
            self._sys_create(proc)
        else:
            self._log(f"so: chamada de sistema não reconhecida {call}\n")
            self._panic()

    def _sys_read(self, proc: Process) -> None:
        cpu = proc.cpu
        device = cpu.a
        io = self.machine.io
        if not io.ready(device, Access.READ):
            proc.block(BlockKind.IO, self._io_wait(cpu), self.clock)
            return
        try:
            value = io.read(device)
            err = Err.OK
        except SimulationError as exc:
            err = exc.err
        cpu.a = int(err)
        if err == Err.OK:
            cpu.x = value
        self._finish_call(cpu)

    def _sys_write(self, proc: Process) -> None:
        cpu = proc.cpu
        device = cpu.a
        io = self.machine.io
        if not io.ready(device, Access.WRITE):
            proc.block(BlockKind.IO, self._io_wait(cpu), self.clock)
            return
        try:
            io.write(device, cpu.x)
            err = Err.OK
        except SimulationError as exc:
            err = exc.err
        cpu.a = int(err)
        self._finish_call(cpu)

    def _sys_exit(self, proc: Process) -> None:
        proc.finish(self.clock)
        m = proc.metrics
        self._log(
            f"({proc.program_number}) e: {m.total_running}, b: {m.total_blocked}, "
            f"qtd_b: {m.blocks}, p: {m.total_ready}, qtd_p: {m.preemptions}, "
            f"total: {m.end - m.start}"
        )
        self.scheduler.remove_running()
        if self._running_index is not None:
            self.table.remove(self._running_index)
        self._running_index = None

    def _sys_create(self, proc: Process) -> None:
        cpu = proc.cpu
        number = cpu.a
        err = Err.OK
        if not 0 <= number < len(self.programs):
            err = Err.INVALID_OPERATION
        else:
            try:
                child = self._new_process(number)
            except SimulationError as exc:
                self._log(f"so.cria_proc: erro de memória, endereco {exc.complement}\n")
                err = exc.err
            else:
                self.table.add(child)
        cpu.a = int(err)
        self._finish_call(cpu)