from simso.screen import N_COL, N_LIN, N_TERM, ConsoleMode, Screen
from simso.view import EXIT_TEXT, HELP, CursesView, render


class FakeWindow:
    def __init__(self, keys=()):
        self.keys = [ord(k) if isinstance(k, str) else k for k in keys]
        self.drawn = {}
        self.refreshes = 0
        self.delay = None

    def timeout(self, ms):
        self.delay = ms

    def getch(self):
        return self.keys.pop(0) if self.keys else -1

    def addstr(self, y, x, text, attr=0):
        self.drawn[(y, x)] = text

    def refresh(self):
        self.refreshes += 1


def test_render_has_full_size_rows():
    rows = render(Screen())
    assert len(rows) == N_LIN
    assert all(len(row) == N_COL for row in rows)


def test_render_terminal_rows():
    screen = Screen()
    screen.put_output(0, 5)
    screen.push_input(1, 12)
    rows = render(screen)
    assert rows[0].startswith("Sa       5")
    assert rows[3].startswith("Eb      12")
    assert rows[2].rstrip() == "Sb"


def test_render_status_console_and_input():
    screen = Screen()
    screen.set_status("estado")
    screen.log("mensagem")
    rows = render(screen)
    assert rows[2 * N_TERM] == screen.status
    assert rows[-2].rstrip() == "mensagem"
    assert rows[-1].endswith(HELP)
    screen.typing = "eb3"
    assert render(screen)[-1].startswith("eb3")


def test_update_when_running_draws_once():
    screen = Screen()
    screen.mode = ConsoleMode.RUNNING
    screen.set_status("linha")
    window = FakeWindow()
    CursesView(screen, window).update()
    assert window.refreshes == 1
    assert window.drawn[(2 * N_TERM, 0)] == screen.status


def test_update_waits_while_paused():
    screen = Screen()
    window = FakeWindow(["c", "\n"])
    CursesView(screen, window).update()
    assert screen.mode is ConsoleMode.RUNNING
    assert screen.console[-1] == "c [OK]"
    assert window.keys == []


def test_step_mode_pauses_again():
    screen = Screen()
    screen.mode = ConsoleMode.STEP
    window = FakeWindow(["s", "\n"])
    CursesView(screen, window).update()
    assert screen.mode is ConsoleMode.STEP
    assert screen.console[-1] == "s [OK]"


def test_finish_waits_for_enter():
    screen = Screen()
    screen.mode = ConsoleMode.RUNNING
    window = FakeWindow(["x", "y", "\n"])
    CursesView(screen, window).finish()
    assert window.keys == []
    assert window.drawn[(N_LIN - 1, 0)] == EXIT_TEXT
    assert screen.typing == "x"