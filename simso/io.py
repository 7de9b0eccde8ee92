"""Input/output controller dispatching to registered devices."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from .errors import Err, SimulationError

DEVICE_COUNT = 100
READ_READY_BASE = 100
WRITE_READY_BASE = 200


class Access(Enum):
    """Kind of access made to a device."""

    READ = "read"
    WRITE = "write"


ReadFn = Callable[[], int]
WriteFn = Callable[[int], None]
ReadyFn = Callable[[Access], bool]


@dataclass
class _Device:
    read: Optional[ReadFn] = None
    write: Optional[WriteFn] = None
    ready: Optional[ReadyFn] = None


class IOController:
    """Maps device numbers 0..99 to read, write and readiness callables.

    Reading number 100+i yields 1 if device i is ready for reading,
    and 200+i yields 1 if it is ready for writing.
    """

    def __init__(self) -> None:
        self._devices = [_Device() for _ in range(DEVICE_COUNT)]

    def register(
        self,
        number: int,
        read: Optional[ReadFn] = None,
        write: Optional[WriteFn] = None,
        ready: Optional[ReadyFn] = None,
    ) -> None:
        """Attach a device; a missing read/write makes that access invalid,
        a missing ready means always ready."""
        if not 0 <= number < DEVICE_COUNT:
            raise ValueError(f"device number out of range: {number}")
        self._devices[number] = _Device(read, write, ready)

    def _device(self, number: int, access: Access) -> _Device:
        if not 0 <= number < DEVICE_COUNT:
            raise SimulationError(Err.INVALID_ADDRESS, number)
        device = self._devices[number]
        handler = device.read if access is Access.READ else device.write
        if handler is None:
            raise SimulationError(Err.INVALID_OPERATION, number)
        return device

    def read(self, device: int) -> int:
        """Read an integer from `device` (or a readiness flag for 100+)."""
        if device >= WRITE_READY_BASE:
            return int(self.ready(device - WRITE_READY_BASE, Access.WRITE))
        if device >= READ_READY_BASE:
            return int(self.ready(device - READ_READY_BASE, Access.READ))
        return self._device(device, Access.READ).read()

    def write(self, device: int, value: int) -> None:
        """Write `value` to `device`."""
        self._device(device, Access.WRITE).write(value)

    def ready(self, device: int, access: Access) -> bool:
        """Return True if `access` to `device` can be done now."""
        try:
            dev = self._device(device, access)
        except SimulationError:
            return False
        if dev.ready is None:
            return True
        return dev.ready(access)