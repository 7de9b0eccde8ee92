"""Main memory: a fixed-size array of integers."""

from __future__ import annotations

import os

from .errors import Err, SimulationError

PAGE_SIZE = 10


class Memory:
    """A region of `size` integer cells, addressed from 0."""

    def __init__(self, size: int) -> None:
        if size < 0:
            raise ValueError(f"memory size must not be negative: {size}")
        self._cells = [0] * size

    def __len__(self) -> int:
        return len(self._cells)

    def _check(self, address: int) -> None:
        if not 0 <= address < len(self._cells):
            raise SimulationError(Err.INVALID_ADDRESS, address)

    def read(self, address: int) -> int:
        """Return the value at `address`; raise SimulationError if invalid."""
        self._check(address)
        return self._cells[address]

    def write(self, address: int, value: int) -> None:
        """Store `value` at `address`; raise SimulationError if invalid."""
        self._check(address)
        self._cells[address] = value

    def copy_from(self, other: Memory) -> None:
        """Copy every cell of `other` into the same address here."""
        for address in range(len(other)):
            self.write(address, other.read(address))

    def dump(self, path: str | os.PathLike[str]) -> None:
        """Write the contents to `path`, ten cells to a line."""
        with open(path, "w", encoding="utf-8") as out:
            for address, value in enumerate(self._cells):
                if address % PAGE_SIZE == 0:
                    out.write(f"\n({address // PAGE_SIZE:8d}): ")
                out.write(f"{value:16d}, ")