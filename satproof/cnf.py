"""Reading DIMACS CNF files."""

from __future__ import annotations

import os
import re
import warnings
from dataclasses import dataclass, field
from typing import IO, Iterable, Iterator

_SEPARATORS = re.compile(r"[ \t]+")
_END_OF_DATA = "\xff"


class CnfFormatError(ValueError):
    """Raised when a CNF file or trace cannot be understood."""


@dataclass
class CnfFile:
    """A parsed CNF problem: header values and clauses in DIMACS literals."""

    num_vars: int = 0
    num_clauses: int = 0
    clauses: list[list[int]] = field(default_factory=list)
    header_seen: bool = False


def parse_int(token: str) -> int:
    """Convert a decimal token with an optional sign into an integer."""
    negative = False
    digits = token
    if digits.startswith("-"):
        negative = True
        digits = digits[1:]
    elif digits.startswith("+"):
        digits = digits[1:]
    result = 0
    for ch in digits:
        if not "0" <= ch <= "9":
            raise CnfFormatError(f"unable to change {digits} into a number")
        result = result * 10 + (ord(ch) - ord("0"))
    return -result if negative else result


def read_lines(stream: IO[str]) -> Iterator[str]:
    """Yield the lines of ``stream`` without line ends or carriage returns."""
    for raw in stream:
        text = raw.rstrip("\n").replace("\r", "")
        yield from text.split(_END_OF_DATA)


def _tokens(line: str) -> list[str]:
    return [tok for tok in _SEPARATORS.split(line.split("\n", 1)[0]) if tok]


def parse_cnf(lines: Iterable[str]) -> CnfFile:
    """Parse DIMACS lines into a :class:`CnfFile`.

    Only the first token of a line is checked for ``c`` or ``p``; every
    other token is a literal, and ``0`` ends a clause.
    """
    cnf = CnfFile()
    literals: list[int] = []

    def feed(token: str) -> None:
        lit = parse_int(token)
        if lit != 0:
            literals.append(lit)
        else:
            cnf.clauses.append(list(literals))
            literals.clear()

    for line in lines:
        tokens = _tokens(line)
        if not tokens:
            continue
        head = tokens[0]
        if head == "c":
            continue
        if head == "p":
            rest = tokens[1:] + [""] * 3
            if rest[0] != "cnf":
                raise CnfFormatError("format error, expected: p cnf NumVar NumCls")
            cnf.num_vars = parse_int(rest[1])
            cnf.num_clauses = parse_int(rest[2])
            cnf.header_seen = True
            continue
        for token in tokens:
            feed(token)

    if literals:
        raise CnfFormatError("trailing numbers without termination")
    if len(cnf.clauses) != cnf.num_clauses:
        warnings.warn(
            "clause count inconsistent with the header", UserWarning, stacklevel=2
        )
    return cnf


def read_cnf(path: str | os.PathLike[str]) -> CnfFile:
    """Read and parse the CNF file at ``path``."""
    with open(path, encoding="latin-1", newline="") as stream:
        return parse_cnf(read_lines(stream))


def format_literal(lit: int) -> str:
    """Render an internal ``2 * var + sign`` literal in DIMACS form."""
    return f"{'-' if lit & 1 else ''}{lit >> 1}"