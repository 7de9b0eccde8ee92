import pytest

from simso.instructions import Opcode, arg_count, opcode_for, opcode_name


@pytest.mark.parametrize("name", ["cargi", "CARGI", "CargI"])
def test_lookup_is_case_insensitive(name):
    assert opcode_for(name) is Opcode.CARGI


def test_unknown_and_missing_names():
    assert opcode_for("xyz") is None
    assert opcode_for("") is None
    assert opcode_for(None) is None


@pytest.mark.parametrize("op", list(Opcode))
def test_name_round_trip(op):
    assert opcode_for(opcode_name(op)) is op


def test_documented_opcode_numbers():
    assert Opcode.NOP == 0
    assert Opcode.SISOP == 25
    assert opcode_name(Opcode.SISOP) == "SISOP"


def test_unknown_opcode():
    assert opcode_name(-1) is None
    assert opcode_name(len(Opcode)) is None
    assert arg_count(len(Opcode)) is None


def test_argument_counts():
    assert arg_count(Opcode.NOP) == 0
    assert arg_count(Opcode.PARA) == 0
    assert arg_count(Opcode.NEG) == 0
    assert arg_count(Opcode.CARGI) == 1
    assert arg_count(Opcode.ESPACO) == 1
    assert arg_count(Opcode.DEFINE) == 1


def test_every_opcode_takes_at_most_one_argument():
    assert {arg_count(op) for op in Opcode} == {0, 1}