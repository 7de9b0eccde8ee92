"""Screen model: numeric terminals, a status line and a debug console."""

from __future__ import annotations

import re
from collections import deque
from enum import Enum

N_LIN = 24
N_COL = 80
N_TERM = 8
QUEUE_SIZE = 9
CONSOLE_LINES = N_LIN - 2 - N_TERM * 2
_LOG_LIMIT = CONSOLE_LINES * (N_COL + 1) - 1

_NUMBER = re.compile(r"\s*([+-]?\d+)")


class ConsoleMode(Enum):
    """How the simulation proceeds between screen updates."""

    PAUSED = "paused"
    STEP = "step"
    RUNNING = "running"


class Screen:
    """State of the terminals and console, independent of any display."""

    def __init__(self) -> None:
        self.inputs: list[list[int]] = [[] for _ in range(N_TERM)]
        self.outputs: list[list[int]] = [[] for _ in range(N_TERM)]
        self.status = ""
        self.console: deque[str] = deque([""] * CONSOLE_LINES, maxlen=CONSOLE_LINES)
        self.typing = ""
        self.mode = ConsoleMode.PAUSED

    # terminal queues -----------------------------------------------------

    def output_free(self, terminal: int) -> bool:
        """Return True if terminal `terminal` can accept another number."""
        return len(self.outputs[terminal]) < QUEUE_SIZE

    def put_output(self, terminal: int, number: int) -> None:
        """Show `number` on a terminal; ignored when its queue is full."""
        queue = self.outputs[terminal]
        if len(queue) < QUEUE_SIZE:
            queue.append(number)

    def has_input(self, terminal: int) -> bool:
        """Return True if a number is waiting to be read from `terminal`."""
        return bool(self.inputs[terminal])

    def take_input(self, terminal: int) -> int:
        """Remove and return the oldest input number, or 0 if there is none."""
        queue = self.inputs[terminal]
        return queue.pop(0) if queue else 0

    def push_input(self, terminal: int, number: int) -> None:
        """Queue `number` as input on `terminal`; ignored when full."""
        queue = self.inputs[terminal]
        if len(queue) < QUEUE_SIZE:
            queue.append(number)

    # text ----------------------------------------------------------------

    def set_status(self, text: str) -> None:
        """Replace the status line, left-aligned in N_COL columns."""
        self.status = text.ljust(N_COL)[:N_COL]

    def log(self, text: str) -> None:
        """Append text to the console, one console line per text line."""
        parts = text[:_LOG_LIMIT].split("\n")
        if parts[-1] == "":
            parts.pop()
        for part in parts:
            self.console.append(part[:N_COL])

    # keyboard ------------------------------------------------------------

    def key(self, ch: int | str) -> None:
        """Feed one typed character into the command line."""
        code = ord(ch) if isinstance(ch, str) else ch
        if code in (0x08, 0x7F):
            self.typing = self.typing[:-1]
        elif code == ord("\n"):
            self.interpret(self.typing)
            self.typing = ""
        elif ord(" ") <= code < 127 and len(self.typing) < N_COL:
            self.typing += chr(code)

    @staticmethod
    def _terminal(line: str) -> int | None:
        if len(line) < 2:
            return None
        t = ord(line[1].lower()) - ord("a")
        return t if 0 <= t < N_TERM else None

    def interpret(self, line: str) -> str:
        """Run a console command, log it with its outcome and return the outcome.

        Commands: e<t><n> enters n on terminal t, l<t> removes an output
        number, z<t> clears the output, p pauses, s steps, c continues.
        """
        result = "OK"
        command = line[:1].lower()
        if command == "e":
            t = self._terminal(line)
            match = _NUMBER.match(line[2:])
            if t is None:
                result = "terminal inválido"
            elif match is None:
                result = "esperava número"
            elif not len(self.inputs[t]) < QUEUE_SIZE:
                result = "fila cheia"
            else:
                self.inputs[t].append(int(match.group(1)))
        elif command == "l":
            t = self._terminal(line)
            if t is None:
                result = "terminal inválido"
            elif not self.outputs[t]:
                result = "fila vazia"
            else:
                self.outputs[t].pop(0)
        elif command == "z":
            t = self._terminal(line)
            if t is None:
                result = "terminal inválido"
            else:
                self.outputs[t].clear()
        elif command == "p":
            self.mode = ConsoleMode.PAUSED
        elif command == "s":
            self.mode = ConsoleMode.STEP
        elif command == "c":
            self.mode = ConsoleMode.RUNNING
        else:
            result = "não reconhecido"
        self.log(f"{line} [{result}]")
        return result