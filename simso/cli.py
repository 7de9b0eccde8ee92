"""Command line entry point: boot the machine and its operating system."""

from __future__ import annotations

import argparse
import sys

try:
    import curses
except ImportError:  # pragma: no cover - platforms without curses
    curses = None  # type: ignore[assignment]

from .kernel import OperatingSystem
from .machine import Machine
from .programs import load_program
from .schedulers import RoundRobinScheduler, ShortestJobScheduler, SimpleScheduler
from .screen import N_TERM, ConsoleMode, Screen
from .view import CursesView

SCHEDULERS = {
    "simples": SimpleScheduler,
    "circular": RoundRobinScheduler,
    "curto": ShortestJobScheduler,
}


def _terminal_input(text: str) -> tuple[int, int]:
    """Parse '<terminal letter><number>', e.g. 'b30'."""
    if len(text) < 2:
        raise argparse.ArgumentTypeError(f"expected <terminal><number>: {text!r}")
    terminal = ord(text[0].lower()) - ord("a")
    if not 0 <= terminal < N_TERM:
        raise argparse.ArgumentTypeError(f"invalid terminal: {text[0]!r}")
    try:
        number = int(text[1:])
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a number: {text[1:]!r}") from None
    return terminal, number


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser of the command."""
    parser = argparse.ArgumentParser(
        prog="simso", description="Run machine-code programs on the simulated computer."
    )
    parser.add_argument(
        "programs",
        nargs="+",
        metavar="PROGRAM",
        help="machine-code files; the first one is started",
    )
    parser.add_argument(
        "--scheduler", choices=sorted(SCHEDULERS), default="circular",
        help="process scheduling policy",
    )
    parser.add_argument(
        "--input", action="append", default=[], type=_terminal_input,
        metavar="TN", help="queue number N on terminal T before starting (e.g. b30)",
    )
    parser.add_argument(
        "--headless", action="store_true",
        help="run without the interactive screen and print the result",
    )
    return parser


def _report(screen: Screen) -> None:
    for line in screen.console:
        if line:
            print(line)
    for t, outputs in enumerate(screen.outputs):
        if outputs:
            letter = chr(ord("a") + t)
            print(f"S{letter}: " + " ".join(str(n) for n in outputs))


def main(argv: list[str] | None = None) -> int:
    """Load the programs, boot the system and run it until it stops."""
    args = build_parser().parse_args(argv)
    try:
        programs = [load_program(path) for path in args.programs]
    except (OSError, ValueError) as exc:
        print(f"erro: {exc}", file=sys.stderr)
        return 1

    screen = Screen()
    for terminal, number in args.input:
        screen.push_input(terminal, number)
    machine = Machine(screen)
    os_ = OperatingSystem(machine, programs, SCHEDULERS[args.scheduler]())
    machine.attach_os(os_)

    if args.headless:
        screen.mode = ConsoleMode.RUNNING
        machine.run()
        _report(screen)
        return 0

    if curses is None:
        print("erro: curses is not available; use --headless", file=sys.stderr)
        return 1

    def interactive(window) -> None:
        view = CursesView(screen, window)
        machine.run(refresh=view.update)
        view.finish()

    curses.wrapper(interactive)
    return 0