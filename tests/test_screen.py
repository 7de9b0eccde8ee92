import pytest

from simso.screen import (
    CONSOLE_LINES,
    N_COL,
    QUEUE_SIZE,
    ConsoleMode,
    Screen,
)


def test_input_is_fifo():
    s = Screen()
    s.push_input(2, 11)
    s.push_input(2, 22)
    assert s.has_input(2)
    assert s.take_input(2) == 11
    assert s.take_input(2) == 22
    assert not s.has_input(2)


def test_take_input_when_empty_gives_zero():
    assert Screen().take_input(0) == 0


def test_input_queue_capacity():
    s = Screen()
    for n in range(QUEUE_SIZE + 1):
        s.push_input(0, n)
    assert s.inputs[0] == list(range(QUEUE_SIZE))


def test_output_free_until_full():
    s = Screen()
    for n in range(QUEUE_SIZE):
        assert s.output_free(3)
        s.put_output(3, n)
    assert not s.output_free(3)
    s.put_output(3, 999)
    assert s.outputs[3] == list(range(QUEUE_SIZE))


def test_terminals_are_independent():
    s = Screen()
    s.push_input(1, 5)
    assert not s.has_input(0)


def test_log_keeps_last_lines():
    s = Screen()
    for n in range(CONSOLE_LINES + 2):
        s.log(f"line {n}")
    assert len(s.console) == CONSOLE_LINES
    assert s.console[-1] == f"line {CONSOLE_LINES + 1}"
    assert s.console[0] == "line 2"


def test_log_splits_lines():
    s = Screen()
    s.log("one\ntwo\n")
    assert list(s.console)[-2:] == ["one", "two"]


def test_log_empty_adds_nothing():
    s = Screen()
    before = list(s.console)
    s.log("")
    assert list(s.console) == before


def test_log_truncates_long_lines():
    s = Screen()
    s.log("x" * (N_COL + 20))
    assert s.console[-1] == "x" * N_COL


def test_status_is_padded():
    s = Screen()
    s.set_status("PC=0000")
    assert len(s.status) == N_COL
    assert s.status.rstrip() == "PC=0000"


def test_enter_number():
    s = Screen()
    assert s.interpret("eb30") == "OK"
    assert s.inputs[1] == [30]
    assert s.console[-1] == "eb30 [OK]"


def test_enter_negative_with_spaces():
    s = Screen()
    s.interpret("EA -4")
    assert s.inputs[0] == [-4]


@pytest.mark.parametrize("line", ["ez5", "e", "l9", "z"])
def test_invalid_terminal(line):
    assert Screen().interpret(line) == "terminal inválido"


def test_expected_number():
    assert Screen().interpret("ea") == "esperava número"


def test_full_queue():
    s = Screen()
    for n in range(QUEUE_SIZE):
        s.push_input(0, n)
    assert s.interpret("ea1") == "fila cheia"


def test_remove_output():
    s = Screen()
    assert s.interpret("la") == "fila vazia"
    s.put_output(0, 1)
    s.put_output(0, 2)
    assert s.interpret("la") == "OK"
    assert s.outputs[0] == [2]


def test_clear_output():
    s = Screen()
    s.put_output(4, 1)
    s.put_output(4, 2)
    s.interpret("ze")
    assert s.outputs[4] == []


def test_modes():
    s = Screen()
    assert s.mode is ConsoleMode.PAUSED
    s.interpret("c")
    assert s.mode is ConsoleMode.RUNNING
    s.interpret("s")
    assert s.mode is ConsoleMode.STEP
    s.interpret("P")
    assert s.mode is ConsoleMode.PAUSED


@pytest.mark.parametrize("line", ["", "x", "?"])
def test_unrecognised(line):
    assert Screen().interpret(line) == "não reconhecido"


def test_typing_and_enter():
    s = Screen()
    for ch in "ea7":
        s.key(ch)
    assert s.typing == "ea7"
    s.key("\n")
    assert s.typing == ""
    assert s.inputs[0] == [7]


def test_backspace_and_ignored_keys():
    s = Screen()
    s.key("a")
    s.key("b")
    s.key(0x7F)
    s.key("\t")
    assert s.typing == "a"
    s.key("\b")
    s.key("\b")
    assert s.typing == ""


def test_typing_limited_to_width():
    s = Screen()
    for _ in range(N_COL + 5):
        s.key("a")
    assert len(s.typing) == N_COL