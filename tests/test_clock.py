import pytest

from simso.clock import Clock
from simso.errors import Err, SimulationError


def test_counts_ticks():
    clock = Clock()
    assert clock.now() == 0
    for _ in range(5):
        clock.tick()
    assert clock.now() == 5


def test_period_zero_never_interrupts():
    clock = Clock(0)
    assert not any(clock.tick() for _ in range(50))


def test_interrupt_every_period():
    clock = Clock(3)
    due = [clock.tick() for _ in range(9)]
    assert due == [False, False, True] * 3


def test_period_one_interrupts_every_tick():
    clock = Clock(1)
    assert all(clock.tick() for _ in range(4))


def test_read_counter():
    clock = Clock()
    clock.tick()
    clock.tick()
    assert clock.read(0) == clock.now()


def test_read_cpu_time_is_monotonic():
    clock = Clock()
    first = clock.read(1)
    second = clock.read(1)
    assert 0 <= first <= second


@pytest.mark.parametrize("device_id", [2, -1])
def test_read_unknown_device(device_id):
    with pytest.raises(SimulationError) as info:
        Clock().read(device_id)
    assert info.value.err is Err.INVALID_ADDRESS