"""A read-only device that yields pseudo-random integers."""

from __future__ import annotations

import random

RANDOM_MIN = 0
RANDOM_MAX = 10


class RandomDevice:
    """Produces integers in the range [RANDOM_MIN, RANDOM_MAX)."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    def read(self, device_id: int = 0) -> int:
        """Return the next random value; the device id is ignored."""
        return self._rng.randrange(RANDOM_MIN, RANDOM_MAX)