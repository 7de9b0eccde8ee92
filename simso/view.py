"""Text rendering of the Screen and its interactive curses front end."""

from __future__ import annotations

from typing import Any

try:
    import curses
except ImportError:  # pragma: no cover - platforms without curses
    curses = None  # type: ignore[assignment]

from .screen import CONSOLE_LINES, N_COL, N_LIN, N_TERM, QUEUE_SIZE, ConsoleMode, Screen

HELP = "P=para C=continua S=passo Lt=lê Zt=zera Etn=entra"
EXIT_TEXT = "  digite ENTER para sair  "
NUMBER_WIDTH = 8
STATUS_ROW = N_TERM * 2
CONSOLE_ROW = N_LIN - 1 - CONSOLE_LINES
INPUT_ROW = N_LIN - 1
_NO_KEY = -1
_ENTER = 10

_DRAW_ERRORS: tuple = (curses.error,) if curses is not None else ()


def _terminal_rows(screen: Screen, t: int) -> tuple[str, str]:
    letter = chr(ord("a") + t)
    out = f"S{letter}" + "".join(f"{n:{NUMBER_WIDTH}d}" for n in screen.outputs[t])
    inp = f"E{letter}" + "".join(f"{n:{NUMBER_WIDTH}d}" for n in screen.inputs[t])
    return out.ljust(N_COL), inp.ljust(N_COL)


def _input_row(screen: Screen) -> str:
    help_text = HELP.rjust(N_COL)
    return (screen.typing + help_text[len(screen.typing):]).ljust(N_COL)


def render(screen: Screen) -> list[str]:
    """Return the N_LIN text rows of the screen, each N_COL wide."""
    rows: list[str] = []
    for t in range(N_TERM):
        rows.extend(_terminal_rows(screen, t))
    rows.append(screen.status.ljust(N_COL)[:N_COL])
    rows.extend(line.ljust(N_COL) for line in screen.console)
    rows.append(_input_row(screen))
    return rows


def _color_attrs() -> dict[int, int]:
    if curses is None:
        return {}
    try:
        curses.start_color()
        pairs = {
            1: (curses.COLOR_GREEN, curses.COLOR_BLACK),
            2: (curses.COLOR_YELLOW, curses.COLOR_BLACK),
            3: (curses.COLOR_BLUE, curses.COLOR_BLACK),
            4: (curses.COLOR_GREEN, curses.COLOR_BLACK),
            5: (curses.COLOR_BLACK, curses.COLOR_RED),
        }
        for number, (fg, bg) in pairs.items():
            curses.init_pair(number, fg, bg)
        return {number: curses.color_pair(number) for number in pairs}
    except (curses.error, AttributeError):
        return {}


class CursesView:
    """Draws a Screen on a curses window and feeds it the keys typed."""

    def __init__(self, screen: Screen, window: Any) -> None:
        self.screen = screen
        self.window = window
        window.timeout(10)
        self._attrs = _color_attrs()

    def _attr(self, pair: int) -> int:
        return self._attrs.get(pair, 0)

    def _put(self, y: int, x: int, text: str, attr: int = 0) -> None:
        try:
            self.window.addstr(y, x, text, attr)
        except _DRAW_ERRORS:
            pass  # writing the bottom-right cell moves the cursor off screen

    def _draw(self) -> None:
        rows = render(self.screen)
        for t in range(N_TERM):
            attr = self._attr(1 + t % 2)
            self._put(2 * t, 0, rows[2 * t], attr)
            self._put(2 * t + 1, 0, rows[2 * t + 1], attr)
            outputs = self.screen.outputs[t]
            if len(outputs) >= QUEUE_SIZE:
                last = QUEUE_SIZE - 1
                self._put(
                    2 * t,
                    2 + last * NUMBER_WIDTH,
                    f"{outputs[last]:{NUMBER_WIDTH}d}",
                    self._attr(5),
                )
        self._put(STATUS_ROW, 0, rows[STATUS_ROW], self._attr(4))
        for line in range(CONSOLE_LINES):
            row = CONSOLE_ROW + line
            self._put(row, 0, rows[row], self._attr(3))
        self._put(INPUT_ROW, 0, rows[INPUT_ROW], self._attr(4))

    def update(self) -> None:
        """Read a key, redraw, and keep doing so while the console is paused."""
        if self.screen.mode is ConsoleMode.STEP:
            self.screen.mode = ConsoleMode.PAUSED
        while True:
            ch = self.window.getch()
            if ch != _NO_KEY:
                self.screen.key(ch)
            self._draw()
            self.window.refresh()
            if self.screen.mode is not ConsoleMode.PAUSED:
                break

    def finish(self) -> None:
        """Show the final screen and wait for ENTER."""
        self.update()
        self._put(INPUT_ROW, 0, EXIT_TEXT, self._attr(5))
        self.window.refresh()
        while self.window.getch() != _ENTER:
            pass