from functools import partial

import pytest

from simso.errors import Err, SimulationError
from simso.io import Access, IOController
from simso.screen import QUEUE_SIZE, Screen
from simso.terminal import Terminal


def test_read_empty_is_busy():
    term = Terminal(Screen())
    with pytest.raises(SimulationError) as info:
        term.read(0)
    assert info.value.err is Err.BUSY


def test_read_returns_pushed_value():
    screen = Screen()
    screen.push_input(2, 15)
    term = Terminal(screen)
    assert term.ready(2, Access.READ)
    assert term.read(2) == 15
    assert not term.ready(2, Access.READ)


def test_write_appears_on_screen():
    screen = Screen()
    Terminal(screen).write(1, 8)
    assert screen.outputs[1] == [8]


def test_write_full_is_busy():
    screen = Screen()
    term = Terminal(screen)
    for n in range(QUEUE_SIZE):
        term.write(0, n)
    assert not term.ready(0, Access.WRITE)
    with pytest.raises(SimulationError) as info:
        term.write(0, 1)
    assert info.value.err is Err.BUSY
    assert screen.outputs[0] == list(range(QUEUE_SIZE))


def test_through_io_controller():
    screen = Screen()
    term = Terminal(screen)
    io = IOController()
    io.register(
        3,
        read=partial(term.read, 3),
        write=partial(term.write, 3),
        ready=partial(term.ready, 3),
    )
    assert io.read(103) == 0
    assert io.read(203) == 1
    screen.push_input(3, 21)
    assert io.read(103) == 1
    assert io.read(3) == 21
    io.write(3, 4)
    assert screen.outputs[3] == [4]
    with pytest.raises(SimulationError) as info:
        io.read(3)
    assert info.value.err is Err.BUSY