"""Numeric terminals as devices for the I/O controller."""

from __future__ import annotations

from .errors import Err, SimulationError
from .io import Access
from .screen import Screen


class Terminal:
    """Reads from and writes to the numeric terminals of a Screen."""

    def __init__(self, screen: Screen) -> None:
        self.screen = screen

    def read(self, device_id: int) -> int:
        """Take a number from terminal `device_id`; BUSY if none is waiting."""
        if not self.ready(device_id, Access.READ):
            raise SimulationError(Err.BUSY, device_id)
        return self.screen.take_input(device_id)

    def write(self, device_id: int, value: int) -> None:
        """Show `value` on terminal `device_id`; BUSY if its output is full."""
        if not self.ready(device_id, Access.WRITE):
            raise SimulationError(Err.BUSY, device_id)
        self.screen.put_output(device_id, value)

    def ready(self, device_id: int, access: Access) -> bool:
        """Return True if `access` on terminal `device_id` can be done now."""
        if access is Access.READ:
            return self.screen.has_input(device_id)
        if access is Access.WRITE:
            return self.screen.output_free(device_id)
        return False