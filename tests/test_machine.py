import pytest

from simso.cpu_state import CpuMode
from simso.errors import Err, SimulationError
from simso.instructions import Opcode
from simso.machine import MEM_TAM, Machine
from simso.screen import Screen


class RecordingOS:
    def __init__(self, limit=None):
        self.interrupts = []
        self.limit = limit

    def interrupt(self, err):
        self.interrupts.append(err)

    def ok(self):
        return self.limit is None or len(self.interrupts) < self.limit


def test_memory_size():
    assert len(Machine().memory) == MEM_TAM


def test_initial_status_line():
    machine = Machine()
    assert machine.status_line() == "PC=0000 A=000000 X=000000 00 NOP"


def test_status_line_shows_argument_and_error():
    machine = Machine()
    machine.memory.write(0, int(Opcode.CARGI))
    machine.memory.write(1, 42)
    assert machine.status_line().endswith("CARGI 42")
    state = machine.executor.copy_state()
    state.set_error(Err.SYSCALL, 3)
    machine.executor.set_state(state)
    assert machine.status_line().endswith(" E=8(3) Chamada de sistema")


def test_step_executes_and_updates_status():
    machine = Machine(clock_period=0)
    machine.attach_os(RecordingOS())
    machine.memory.write(0, int(Opcode.CARGI))
    machine.memory.write(1, 5)
    machine.step()
    assert machine.executor.copy_state().a == 5
    assert machine.clock.now() == 1
    assert machine.screen.status.rstrip() == machine.status_line()


def test_clock_tick_interrupts_os():
    machine = Machine(clock_period=1)
    os = RecordingOS()
    machine.attach_os(os)
    machine.step()
    assert os.interrupts == [Err.CLOCK_TICK]


def test_cpu_error_interrupts_os():
    machine = Machine(clock_period=0)
    os = RecordingOS()
    machine.attach_os(os)
    machine.memory.write(0, int(Opcode.PARA))
    machine.step()
    assert os.interrupts == [Err.CPU_HALTED]


def test_step_without_os_raises_on_interrupt():
    machine = Machine(clock_period=1)
    with pytest.raises(RuntimeError):
        machine.step()


def test_terminal_devices_are_wired():
    machine = Machine()
    machine.io.write(3, 7)
    assert machine.screen.outputs[3] == [7]
    machine.screen.push_input(6, 11)
    assert machine.io.read(6) == 11


def test_terminal_read_without_input_is_busy():
    machine = Machine()
    with pytest.raises(SimulationError) as info:
        machine.io.read(0)
    assert info.value.err == Err.BUSY


def test_clock_device_reads_counter():
    machine = Machine(clock_period=0)
    machine.attach_os(RecordingOS())
    machine.step()
    machine.step()
    assert machine.io.read(99) == machine.clock.now()


def test_random_device_is_read_only():
    machine = Machine()
    assert 0 <= machine.io.read(10) < 10
    with pytest.raises(SimulationError) as info:
        machine.io.write(10, 1)
    assert info.value.err == Err.INVALID_OPERATION


def test_run_stops_when_os_says_so_and_logs():
    screen = Screen()
    machine = Machine(screen, clock_period=1)
    os = RecordingOS(limit=3)
    machine.attach_os(os)
    refreshes = []
    machine.run(lambda: refreshes.append(machine.clock.now()))
    assert len(os.interrupts) == 3
    assert refreshes == [1, 2, 3]
    assert list(screen.console)[-2:] == ["Fim da execução.", "relógio: 3"]


def test_zombie_cpu_does_not_execute():
    machine = Machine(clock_period=0)
    os = RecordingOS()
    machine.attach_os(os)
    machine.memory.write(0, int(Opcode.PARA))
    state = machine.executor.copy_state()
    state.mode = CpuMode.ZOMBIE
    machine.executor.set_state(state)
    machine.step()
    assert os.interrupts == []
    assert machine.executor.copy_state().pc == 0