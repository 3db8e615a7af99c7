"""Clause generators that encode logic gates as CNF.

Literals follow the ``2 * variable + sign`` convention: sign ``0`` is the
positive phase and sign ``1`` the negated one.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass, field
from typing import Iterable, Protocol, Sequence

VERSION = "2007.3.12"


class ClauseSink(Protocol):
    """Anything that accepts original clauses."""

    def add_orig_clause(self, lits: Sequence[int], gid: int = 0) -> object:
        ...


def pos(lit: int) -> int:
    """The literal in its given phase, checked to be a valid encoded literal."""
    value = operator.index(lit)
    if value < 0:
        raise ValueError(f"literal must be non-negative, got {value}")
    return value


def neg(lit: int) -> int:
    """The literal with its phase flipped."""
    return pos(lit) ^ 1


@dataclass
class ClauseCollector:
    """Collects generated clauses together with their group ids."""

    clauses: list[tuple[list[int], int]] = field(default_factory=list)

    def add_orig_clause(self, lits: Iterable[int], gid: int = 0) -> int:
        """Record a clause and return its index."""
        self.clauses.append((list(lits), gid))
        return len(self.clauses) - 1


def and2(solver: ClauseSink, a: int, b: int, o: int, gid: int = 0) -> None:
    """o = a AND b  <=>  (a + o')(b + o')(a' + b' + o)."""
    solver.add_orig_clause([pos(a), neg(o)], gid)
    solver.add_orig_clause([pos(b), neg(o)], gid)
    solver.add_orig_clause([neg(a), neg(b), pos(o)], gid)


def and_n(solver: ClauseSink, inputs: Sequence[int], o: int, gid: int = 0) -> None:
    """o = AND of all ``inputs``."""
    for lit in inputs:
        solver.add_orig_clause([pos(lit), neg(o)], gid)
    solver.add_orig_clause([*(neg(lit) for lit in inputs), pos(o)], gid)


def or2(solver: ClauseSink, a: int, b: int, o: int, gid: int = 0) -> None:
    """o = a OR b  <=>  (a' + o)(b' + o)(a + b + o')."""
    solver.add_orig_clause([neg(a), pos(o)], gid)
    solver.add_orig_clause([neg(b), pos(o)], gid)
    solver.add_orig_clause([pos(a), pos(b), neg(o)], gid)


def or_n(solver: ClauseSink, inputs: Sequence[int], o: int, gid: int = 0) -> None:
    """o = OR of all ``inputs``."""
    for lit in inputs:
        solver.add_orig_clause([neg(lit), pos(o)], gid)
    solver.add_orig_clause([*(pos(lit) for lit in inputs), neg(o)], gid)


def nand2(solver: ClauseSink, a: int, b: int, o: int, gid: int = 0) -> None:
    """o = a NAND b  <=>  (a + o)(b + o)(a' + b' + o')."""
    solver.add_orig_clause([pos(a), pos(o)], gid)
    solver.add_orig_clause([pos(b), pos(o)], gid)
    solver.add_orig_clause([neg(a), neg(b), neg(o)], gid)


def nand_n(solver: ClauseSink, inputs: Sequence[int], o: int, gid: int = 0) -> None:
    """o = NAND of all ``inputs``."""
    for lit in inputs:
        solver.add_orig_clause([pos(lit), pos(o)], gid)
    solver.add_orig_clause([*(neg(lit) for lit in inputs), neg(o)], gid)


def nor2(solver: ClauseSink, a: int, b: int, o: int, gid: int = 0) -> None:
    """o = a NOR b  <=>  (a' + o')(b' + o')(a + b + o)."""
    solver.add_orig_clause([neg(a), neg(o)], gid)
    solver.add_orig_clause([neg(b), neg(o)], gid)
    solver.add_orig_clause([pos(a), pos(b), pos(o)], gid)


def nor_n(solver: ClauseSink, inputs: Sequence[int], o: int, gid: int = 0) -> None:
    """o = NOR of all ``inputs``."""
    for lit in inputs:
        solver.add_orig_clause([neg(lit), neg(o)], gid)
    solver.add_orig_clause([*(pos(lit) for lit in inputs), pos(o)], gid)


def xor2(solver: ClauseSink, a: int, b: int, o: int, gid: int = 0) -> None:
    """o = a XOR b, encoded by four three-literal clauses."""
    solver.add_orig_clause([neg(a), neg(b), neg(o)], gid)
    solver.add_orig_clause([pos(a), pos(b), neg(o)], gid)
    solver.add_orig_clause([neg(a), pos(b), pos(o)], gid)
    solver.add_orig_clause([pos(a), neg(b), pos(o)], gid)


def not1(solver: ClauseSink, a: int, o: int, gid: int = 0) -> None:
    """o = NOT a  <=>  (a' + o')(a + o)."""
    solver.add_orig_clause([neg(a), neg(o)], gid)
    solver.add_orig_clause([pos(a), pos(o)], gid)