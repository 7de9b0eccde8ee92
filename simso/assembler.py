"""Assembler for the simulated CPU's instruction set.

A line has the form ``[label][ instruction[ argument]]``; fields are
separated by spaces or tabs and everything from ``;`` on is a comment.
"""

from __future__ import annotations

import os
import re
import sys
from dataclasses import dataclass
from typing import Iterable

from .instructions import Opcode, arg_count, opcode_for

MEMORY_LIMIT = 1000
SYMBOL_LIMIT = 1000
REFERENCE_LIMIT = 1000
VALUES_PER_LINE = 10

_BLANKS = " \t"
_COMMENT = re.compile(r"[;\n\r]")
_NUMBER = re.compile(r"-?[0-9]+")


class AssemblyError(Exception):
    """A fatal condition that stops the assembly."""


@dataclass(frozen=True)
class _Reference:
    name: str
    line: int
    address: int


def _number(text: str | None) -> int | None:
    """Return the integer at the start of `text`, or None if it has none."""
    if text is None:
        return None
    match = _NUMBER.match(text)
    return int(match.group()) if match else None


def _take_token(text: str) -> tuple[str, str]:
    """Split `text` at its first blank into (token, rest)."""
    for index, ch in enumerate(text):
        if ch in _BLANKS:
            return text[:index], text[index:]
    return text, ""


class Assembler:
    """Accumulates assembled code, symbols and references line by line.

    Non-fatal problems are collected in `errors`; fatal ones raise
    AssemblyError.
    """

    def __init__(self) -> None:
        self.code: list[int] = []
        self.symbols: dict[str, int] = {}
        self.errors: list[str] = []
        self._references: list[_Reference] = []

    # output memory -------------------------------------------------------

    def _emit(self, value: int) -> None:
        if len(self.code) >= MEMORY_LIMIT - 1:
            raise AssemblyError("programa muito grande! Aumente MEM_TAM no montador.")
        self.code.append(value)

    def _patch(self, address: int, value: int) -> None:
        if not 0 <= address < len(self.code):
            raise AssemblyError("erro interno, alteração de região não inicializada")
        self.code[address] = value

    # symbols and references ---------------------------------------------

    def _define(self, name: str, value: int) -> None:
        if name in self.symbols:
            self.errors.append(f"ERRO: redefinicao do simbolo '{name}'")
            return
        if len(self.symbols) >= SYMBOL_LIMIT:
            raise AssemblyError("Excesso de símbolos. Aumente SIMB_TAM no montador.")
        self.symbols[name] = value

    def _refer(self, name: str, line_no: int, address: int) -> None:
        if len(self._references) >= REFERENCE_LIMIT:
            raise AssemblyError("excesso de referências. Aumente REF_TAM no montador.")
        self._references.append(_Reference(name, line_no, address))

    def resolve(self) -> None:
        """Fill every symbolic argument with its symbol's value (-1 if undefined)."""
        for ref in self._references:
            value = self.symbols.get(ref.name)
            if value is None:
                self.errors.append(
                    f"ERRO: simbolo '{ref.name}' referenciado na linha {ref.line} "
                    "não foi definido"
                )
                value = -1
            self._patch(ref.address, value)

    # assembly ------------------------------------------------------------

    def _assemble_instruction(self, line_no: int, opcode: Opcode, arg: str | None) -> None:
        if opcode is Opcode.ESPACO:
            count = _number(arg)
            if count is None:
                count = self.symbols.get(arg or "", -1)
            if count < 1:
                self.errors.append(f"ERRO: linha {line_no} 'ESPACO' deve ter valor positivo")
                return
            for _ in range(count):
                self._emit(0)
            return
        if opcode is not Opcode.VALOR:
            self._emit(int(opcode))
        if arg_count(opcode) == 0 or arg is None:
            return
        value = _number(arg)
        if value is not None:
            self._emit(value)
        else:
            self._refer(arg, line_no, len(self.code))
            self._emit(0)

    def _assemble_fields(
        self, line_no: int, label: str | None, instruction: str | None, arg: str | None
    ) -> None:
        opcode = opcode_for(instruction)
        if opcode is Opcode.DEFINE:
            value = _number(arg)
            if label is None:
                self.errors.append(f"ERRO: linha {line_no}: 'DEFINE' exige um label")
            elif value is None:
                self.errors.append(f"ERRO: linha {line_no} 'DEFINE' exige valor numérico")
            else:
                self._define(label, value)
            return

        if label is not None:
            self._define(label, len(self.code))

        if instruction is None:
            return
        if opcode is None:
            self.errors.append(
                f"ERRO: linha {line_no}: instrucao '{instruction}' desconhecida"
            )
            return
        count = arg_count(opcode)
        if count == 0 and arg is not None:
            self.errors.append(
                f"ERRO: linha {line_no}: instrucao '{instruction}' não tem argumento"
            )
            return
        if count == 1 and arg is None:
            self.errors.append(
                f"ERRO: linha {line_no}: instrucao '{instruction}' necessita argumento"
            )
            return
        self._assemble_instruction(line_no, opcode, arg)

    def assemble_line(self, line_no: int, text: str) -> None:
        """Assemble one source line numbered `line_no`."""
        text = _COMMENT.split(text, maxsplit=1)[0]
        if not text:
            return
        label = instruction = arg = None
        rest = text
        if rest[0] not in _BLANKS:
            label, rest = _take_token(rest)
        rest = rest.lstrip(_BLANKS)
        if rest:
            instruction, rest = _take_token(rest)
            rest = rest.lstrip(_BLANKS)
        if rest:
            arg, rest = _take_token(rest)
            rest = rest.lstrip(_BLANKS)
        if rest:
            self.errors.append(f"linha {line_no}: ignorando '{rest}'")
        if label is not None or instruction is not None:
            self._assemble_fields(line_no, label, instruction, arg)

    def assemble_lines(self, lines: Iterable[str]) -> None:
        """Assemble each line in turn, numbering them from 1."""
        for line_no, text in enumerate(lines, start=1):
            self.assemble_line(line_no, text)

    def format(self) -> str:
        """Render the code as C initialiser lines, ten values per line."""
        out = []
        for start in range(0, len(self.code), VALUES_PER_LINE):
            chunk = self.code[start:start + VALUES_PER_LINE]
            out.append(f"    /*{start:4d} */" + "".join(f" {v}," for v in chunk) + "\n")
        return "".join(out)


def assemble(text: str) -> list[int]:
    """Assemble a whole source text and return the resolved code."""
    assembler = Assembler()
    assembler.assemble_lines(text.split("\n"))
    assembler.resolve()
    return assembler.code


def main(argv: list[str] | None = None) -> int:
    """Assemble the file named on the command line and print its code."""
    if argv is None:
        argv = sys.argv[1:]
    if len(argv) != 1:
        prog = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "montador"
        print(f"ERRO: chame como '{prog} nome_do_arquivo'", file=sys.stderr)
        return 1
    path = argv[0]
    assembler = Assembler()
    try:
        with open(path, encoding="utf-8") as source:
            assembler.assemble_lines(source)
            assembler.resolve()
    except OSError:
        print(f"Não foi possível abrir o arquivo '{path}'", file=sys.stderr)
    except AssemblyError as exc:
        for message in assembler.errors:
            print(message, file=sys.stderr)
        print(f"ERRO FATAL: {exc}", file=sys.stderr)
        return 1
    for message in assembler.errors:
        print(message, file=sys.stderr)
    sys.stdout.write(assembler.format())
    return 0