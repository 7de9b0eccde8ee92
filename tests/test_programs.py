import pytest

from simso.assembler import Assembler
from simso.processes import Program
from simso.programs import load_program, parse_maq


def test_parse_ignores_comments():
    program = parse_maq("    /*   0 */ 2, 5, 25, 3,\n")
    assert program.code == (2, 5, 25, 3)


def test_parse_negative_and_line_comments():
    program = parse_maq("// header\n 1, -4,\n  7 // tail\n")
    assert program.code == (1, -4, 7)


def test_parse_empty_text_gives_empty_program():
    assert len(parse_maq("  /* nothing */ \n")) == 0


def test_round_trip_with_assembler_output():
    assembler = Assembler()
    assembler.assemble_lines(
        [
            "inicio CARGI 7",
            "       ARMM dado",
            "       DESV inicio",
            "dado   VALOR -3",
            "       ESPACO 12",
        ]
    )
    assembler.resolve()
    assert parse_maq(assembler.format()) == Program(tuple(assembler.code))


def test_invalid_value_raises():
    with pytest.raises(ValueError):
        parse_maq("1, abc, 2")


def test_load_program_reads_file(tmp_path):
    path = tmp_path / "p.maq"
    path.write_text("/* 0 */ 2, 9, 25, 3,\n", encoding="utf-8")
    assert load_program(path).code == (2, 9, 25, 3)


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        load_program(tmp_path / "absent.maq")