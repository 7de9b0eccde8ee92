"""Loading of machine-code programs written as C initialiser lists."""

from __future__ import annotations

import os
import re

from .processes import Program

_COMMENT = re.compile(r"/\*.*?\*/|//[^\n]*", re.S)


def parse_maq(text: str) -> Program:
    """Parse comma-separated integers, ignoring C comments, into a Program."""
    body = _COMMENT.sub(" ", text)
    values = []
    for item in body.split(","):
        item = item.strip()
        if not item:
            continue
        try:
            values.append(int(item))
        except ValueError:
            raise ValueError(f"invalid value in machine code: {item!r}") from None
    return Program(tuple(values))


def load_program(path: str | os.PathLike[str]) -> Program:
    """Read and parse the machine-code file at `path`."""
    with open(path, encoding="utf-8") as source:
        return parse_maq(source.read())