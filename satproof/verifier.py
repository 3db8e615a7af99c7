"""Checking resolution traces that claim a CNF formula is unsatisfiable.

A trace lists learned clauses as chains of resolvents, the final variable
assignments with their antecedent clauses, and the final conflicting
clause.  Verification rebuilds every learned clause that matters, checks
that the conflict really follows from the assignments, and resolves the
conflict down to the empty clause.  The original clauses used along the
way form an unsatisfiable core.
"""

from __future__ import annotations

import heapq
import os
import re
import sys
import time
from dataclasses import dataclass, field
from typing import IO, Iterable, Iterator, Sequence

from satproof.cnf import (
    CnfFile,
    CnfFormatError,
    format_literal,
    parse_int,
    read_lines,
)
from satproof.cnf import read_cnf as _read_cnf_file

UNKNOWN = 2
CORE_FILE = "unsat_core.cnf"
_PROG = "verify"
_SEPARATORS = re.compile(r"[ \t]+")


class VerificationError(Exception):
    """Raised when a proof trace does not establish unsatisfiability."""


@dataclass
class _Clause:
    literals: list[int] = field(default_factory=list)
    resolvents: list[int] = field(default_factory=list)
    is_involved: bool = False
    is_built: bool = False
    is_needed: bool = False


@dataclass
class _Variable:
    value: int = UNKNOWN
    antecedent: int = -1
    num_lits: list[int] = field(default_factory=lambda: [0, 0])
    level: int = -1
    is_needed: bool = False


@dataclass
class VerificationReport:
    """Figures gathered by a successful verification."""

    num_init_clauses: int
    num_learned_clauses: int
    num_built_clauses: int
    needed_clauses: int
    total_variables: int
    needed_variables: int
    core_clause_ids: list[int]
    missing_conf_literals: list[int]


def get_cpu_time() -> float:
    """CPU time, user plus system, used by this process in seconds."""
    return time.process_time()


def _tokens(line: str) -> Iterator[str]:
    return iter([tok for tok in _SEPARATORS.split(line.split("\n", 1)[0]) if tok])


def _expect(tokens: Iterator[str], word: str) -> None:
    tok = next(tokens, "")
    if tok != word:
        raise VerificationError(f"expected {word!r} in trace, found {tok!r}")


class ProofVerifier:
    """Holds a clause database and checks a resolution trace against it."""

    def __init__(self) -> None:
        self.num_init_clauses = 0
        self._variables: list[_Variable] = []
        self._clauses: list[_Clause] = []
        self._conf_id = -1
        self._conf_clause: list[int] = []
        self._orig_count = 0
        self._core_ids: list[int] | None = None

    # ------------------------------------------------------------------
    # building the database

    def set_var_number(self, nvar: int) -> None:
        """Make room for variables ``1..nvar`` and clear their values."""
        if nvar < 0:
            raise VerificationError(f"negative variable count {nvar}")
        while len(self._variables) < nvar + 1:
            self._variables.append(_Variable())
        del self._variables[nvar + 1:]
        for var in self._variables:
            var.value = UNKNOWN

    def add_original_clause(self, lits: Sequence[int]) -> int:
        """Add a clause given in DIMACS literals and return its index."""
        self._orig_count += 1
        if not lits:
            raise VerificationError("empty clause encountered")
        phases: dict[int, int] = {}
        literals: list[int] = []
        for lit in lits:
            vid, phase = (-lit, 1) if lit < 0 else (lit, 0)
            if vid == 0 or vid > len(self._variables) - 1:
                raise VerificationError(f"variable index {vid} out of range")
            seen = phases.get(vid)
            if seen is None:
                phases[vid] = phase
                literals.append(vid + vid + phase)
            elif seen != phase:
                raise VerificationError(
                    f"clause {self._orig_count} contains both a literal and its negation"
                )
        for lit in literals:
            self._variables[lit >> 1].num_lits[lit & 1] += 1
        self._clauses.append(_Clause(literals=literals, is_built=True))
        return len(self._clauses) - 1

    def add_learned_clause(self, resolvents: Iterable[int]) -> int:
        """Add a clause to be built later from ``resolvents``; return its index."""
        self._clauses.append(_Clause(resolvents=list(resolvents)))
        return len(self._clauses) - 1

    def load_cnf(self, cnf: CnfFile) -> None:
        """Take the variables and original clauses of a parsed CNF problem."""
        self.set_var_number(cnf.num_vars)
        self.num_init_clauses = cnf.num_clauses
        for clause in cnf.clauses:
            self.add_original_clause(clause)

    def read_cnf(self, path: str | os.PathLike[str]) -> None:
        try:
            cnf = _read_cnf_file(path)
        except OSError as exc:
            raise VerificationError(f"can't open input CNF file {path}") from exc
        self.load_cnf(cnf)

    # ------------------------------------------------------------------
    # reading the trace

    def _check_var(self, vid: int) -> None:
        if not 0 < vid < len(self._variables):
            raise VerificationError(f"variable index {vid} out of range in trace")

    def parse_trace(self, lines: Iterable[str]) -> None:
        """Read ``CL:``, ``VAR:`` and ``CONF:`` records; other lines are ignored."""
        for line in lines:
            tokens = _tokens(line)
            head = next(tokens, "")
            if head == "CL:":
                cl_id = parse_int(next(tokens, ""))
                _expect(tokens, "<=")
                resolvents = [parse_int(tok) for tok in tokens]
                added = self.add_learned_clause(resolvents)
                if added != cl_id:
                    raise VerificationError(
                        f"learned clause {cl_id} out of sequence, expected {added}"
                    )
            elif head == "VAR:":
                vid = parse_int(next(tokens, ""))
                _expect(tokens, "L:")
                next(tokens, "")
                _expect(tokens, "V:")
                value = parse_int(next(tokens, ""))
                if value not in (0, 1):
                    raise VerificationError(f"variable {vid} has value {value}")
                _expect(tokens, "A:")
                ante = parse_int(next(tokens, ""))
                _expect(tokens, "Lits:")
                self._check_var(vid)
                self._variables[vid].value = value
                self._variables[vid].antecedent = ante
            elif head == "CONF:":
                self._conf_id = parse_int(next(tokens, ""))
                _expect(tokens, "==")
                for tok in tokens:
                    lit = parse_int(tok)
                    if lit <= 0 or (lit >> 1) >= len(self._variables):
                        raise VerificationError(f"bad literal {lit} in conflict clause")
                    self._conf_clause.append(lit)
        if self._conf_id == -1:
            raise VerificationError("no final conflicting clause defined")

    def read_trace(self, path: str | os.PathLike[str]) -> None:
        try:
            stream = open(path, encoding="latin-1", newline="")
        except OSError as exc:
            raise VerificationError(f"can't open trace file {path}") from exc
        with stream:
            self.parse_trace(read_lines(stream))

    # ------------------------------------------------------------------
    # helpers

    def _clause(self, cl_id: int) -> _Clause:
        if not 0 <= cl_id < len(self._clauses):
            raise VerificationError(f"clause index {cl_id} out of range")
        return self._clauses[cl_id]

    def _lit_value(self, lit: int) -> int:
        var = self._variables[lit >> 1]
        if var.value == UNKNOWN:
            raise VerificationError(f"variable {lit >> 1} has no value")
        return var.value ^ (lit & 1)

    def _resolve(self, cl_id: int) -> None:
        cl = self._clauses[cl_id]
        phase: dict[int, int] = {}
        literals: list[int] = []
        first = self._clause(cl.resolvents[0])
        if not first.is_built:
            raise VerificationError(f"clause {cl.resolvents[0]} is not built")
        for lit in first.literals:
            phase[lit >> 1] = lit & 1
            literals.append(lit)
        for other_id in cl.resolvents[1:]:
            other = self._clause(other_id)
            if not other.is_built:
                raise VerificationError(f"clause {other_id} is not built")
            distance = 0
            for lit in other.literals:
                vid, sign = lit >> 1, lit & 1
                seen = phase.get(vid)
                if seen is None:
                    phase[vid] = sign
                    literals.append(lit)
                elif seen != sign:
                    distance += 1
                    del phase[vid]
            if distance != 1:
                raise VerificationError(
                    "resolve between two clauses with distance larger than 1: "
                    f"resulting clause {cl_id}, starting clause {cl.resolvents[0]}, "
                    f"clause involved {other_id}"
                )
        result: list[int] = []
        for lit in literals:
            vid = lit >> 1
            if vid not in phase:
                continue
            if phase.pop(vid) != (lit & 1):
                raise VerificationError(f"inconsistent literals building clause {cl_id}")
            result.append(lit)
        cl.literals = result
        cl.is_built = True

    def _construct(self, cl_id: int) -> None:
        stack = [(cl_id, False)]
        while stack:
            cid, ready = stack.pop()
            cl = self._clause(cid)
            if cl.is_built:
                continue
            if ready:
                self._resolve(cid)
                continue
            if len(cl.resolvents) <= 1:
                raise VerificationError(f"clause {cid} has too few resolvents")
            stack.append((cid, True))
            for r in reversed(cl.resolvents):
                self._clause(r).is_needed = True
                stack.append((r, False))

    def _find_involved(self, cl_id: int) -> None:
        stack = [cl_id]
        while stack:
            cid = stack.pop()
            cl = self._clause(cid)
            if cl.is_involved:
                continue
            cl.is_involved = True
            self._construct(cid)
            num_true = 0
            antecedents: list[int] = []
            for lit in cl.literals:
                if self._lit_value(lit) == 1:
                    num_true += 1
                    if num_true > 1:
                        raise VerificationError(
                            f"clause {cid} has more than one value 1 literals"
                        )
                else:
                    ante = self._variables[lit >> 1].antecedent
                    if ante == -1:
                        raise VerificationError(
                            f"variable {lit >> 1} has no antecedent"
                        )
                    antecedents.append(ante)
            stack.extend(reversed(antecedents))

    def _antecedent_others(self, vid: int) -> list[int]:
        var = self._variables[vid]
        if var.value == UNKNOWN or var.antecedent == -1:
            raise VerificationError(f"variable {vid} has no implied value")
        ante = self._clause(var.antecedent)
        if not ante.is_involved:
            raise VerificationError(f"antecedent of variable {vid} is not involved")
        others: list[int] = []
        for lit in ante.literals:
            v, s = lit >> 1, lit & 1
            if v == vid:
                if self._variables[v].value == s:
                    raise VerificationError(f"variable {vid} is false in its antecedent")
            elif self._variables[v].value != s:
                raise VerificationError(
                    f"antecedent of variable {vid} is not really an antecedent"
                )
            else:
                others.append(v)
        return others

    def _find_level(self, vid: int) -> None:
        in_progress: set[int] = set()
        stack = [(vid, False)]
        while stack:
            v, finishing = stack.pop()
            var = self._variables[v]
            if var.level != -1:
                continue
            others = self._antecedent_others(v)
            if finishing:
                var.level = max((self._variables[u].level for u in others), default=-1) + 1
                in_progress.discard(v)
                continue
            in_progress.add(v)
            stack.append((v, True))
            for u in others:
                if self._variables[u].level == -1:
                    if u in in_progress:
                        raise VerificationError(f"cyclic antecedents at variable {u}")
                    stack.append((u, False))

    # ------------------------------------------------------------------
    # verification

    def verify(self) -> VerificationReport:
        """Check the trace; raise :class:`VerificationError` if it fails."""
        variables = self._variables
        # 1. Values without an antecedent must be pure literals.
        for i, var in enumerate(variables[1:], start=1):
            if var.value != UNKNOWN and var.antecedent == -1:
                pure = (var.num_lits[0] == 0 and var.value == 0) or (
                    var.num_lits[1] == 0 and var.value == 1
                )
                if not pure:
                    raise VerificationError(
                        f"don't know why variable {i} is assigned {var.value} for no reasons"
                    )
        if self._conf_id == -1:
            raise VerificationError("no final conflicting clause defined")

        # 2. Build everything the final conflict depends on.
        conf = self._clause(self._conf_id)
        conf.is_needed = True
        self._find_involved(self._conf_id)
        num_built = sum(1 for cl in self._clauses[self.num_init_clauses:] if cl.is_built)

        # 2.5. The conflict clause literals given in the trace.
        missing = [lit for lit in self._conf_clause if lit not in conf.literals]

        # 3. Levelize implied variables.
        for i, var in enumerate(variables[1:], start=1):
            if var.value != UNKNOWN and var.antecedent != -1:
                if self._clause(var.antecedent).is_involved:
                    self._find_level(i)

        # 4. Resolve the conflict down to the empty clause.
        heap: list[tuple[int, int, int]] = []
        queued: set[int] = set()

        def push(v: int) -> None:
            if v not in queued:
                queued.add(v)
                heapq.heappush(heap, (-variables[v].level, -v, v))

        for lit in conf.literals:
            if self._lit_value(lit) != 0:
                raise VerificationError(
                    f"conflict clause literal {format_literal(lit)} is not false"
                )
            push(lit >> 1)
        while heap:
            _, _, vid = heapq.heappop(heap)
            queued.discard(vid)
            ante_id = variables[vid].antecedent
            if ante_id == -1:
                raise VerificationError(f"variable {vid} has a null antecedent")
            ante = self._clause(ante_id)
            ante.is_needed = True
            distance = 0
            for lit in ante.literals:
                v = lit >> 1
                if self._lit_value(lit) == 1:
                    if v != vid:
                        raise VerificationError(
                            "the antecedent of the variable is not really an antecedent"
                        )
                    distance += 1
                else:
                    push(v)
            if distance != 1:
                raise VerificationError(f"antecedent of variable {vid} does not imply it")

        # 5. Collect the unsatisfiable core.
        core_ids: list[int] = []
        needed_vars = 0
        for i, cl in enumerate(self._clauses[: self.num_init_clauses]):
            if cl.is_needed:
                core_ids.append(i)
                for lit in cl.literals:
                    var = variables[lit >> 1]
                    if not var.is_needed:
                        var.is_needed = True
                        needed_vars += 1
        for i, cl in enumerate(self._clauses):
            if cl.is_built and not (cl.is_needed or i < self.num_init_clauses):
                raise VerificationError(f"clause {i} was built but is not needed")
        self._core_ids = core_ids
        return VerificationReport(
            num_init_clauses=self.num_init_clauses,
            num_learned_clauses=len(self._clauses) - self.num_init_clauses,
            num_built_clauses=num_built,
            needed_clauses=len(core_ids),
            total_variables=max(len(variables) - 1, 0),
            needed_variables=needed_vars,
            core_clause_ids=core_ids,
            missing_conf_literals=missing,
        )

    def write_core(self, stream: IO[str]) -> None:
        """Write the unsatisfiable core found by :meth:`verify` as CNF."""
        if self._core_ids is None:
            raise VerificationError("the trace has not been verified")
        stream.write("c Variables Not Involved: ")
        k = 0
        for i, var in enumerate(self._variables[1:], start=1):
            if not var.is_needed:
                if k % 20 == 0:
                    stream.write("\nc ")
                k += 1
                stream.write(f"{i} ")
        stream.write("\n")
        stream.write(f"p cnf {max(len(self._variables) - 1, 0)} {len(self._core_ids)}\n")
        for i in self._core_ids:
            stream.write(f"c Original Cls ID: {i}\n")
            body = "".join(
                f" {format_literal(lit)}" for lit in self._clauses[i].literals
            )
            stream.write(f"{body} 0\n")

    def dump(self) -> str:
        """Render the clause database in DIMACS form."""
        lines = [f"p cnf {max(len(self._variables) - 1, 0)} {self.num_init_clauses}"]
        for cl in self._clauses:
            lines.append("".join(f"{format_literal(lit)} " for lit in cl.literals) + "0")
        return "\n".join(lines) + "\n"


def main(argv: Sequence[str] | None = None) -> int:
    """Verify a CNF file against a resolution trace from the command line."""
    args = list(sys.argv[1:] if argv is None else argv)
    print("SAT proof verifier")
    if len(args) not in (2, 3):
        print(
            f"Usage: {_PROG} CNF_File Dump_File [-core]\n-core: dump the unsat core\n",
            file=sys.stderr,
        )
        return 1
    dump_core = len(args) == 3
    if dump_core and args[2] != "-core":
        print("Must use -core as the third parameter", file=sys.stderr)
        return 1
    print("COMMAND LINE: " + "".join(f"{a} " for a in [_PROG, *args]))

    verifier = ProofVerifier()
    begin = get_cpu_time()
    try:
        print("Read in original clauses ... ", end="")
        verifier.read_cnf(args[0])
        print(f"{verifier.num_init_clauses} Clauses ")
        verifier.read_trace(args[1])
        print("Begin constructing all involved clauses ")
        report = verifier.verify()
    except (VerificationError, CnfFormatError) as exc:
        print(file=sys.stdout)
        print(f"Failed to verify the result: {exc}", file=sys.stderr)
        return 1

    print(f"Num. Learned Clause:\t\t\t{report.num_learned_clauses}")
    print(f"Num. Clause Built:\t\t\t{report.num_built_clauses}")
    print("Constructed all involved clauses ")
    for lit in report.missing_conf_literals:
        print("The conflict clause in trace can't be verified! ", file=sys.stderr)
        print(f"Literal {lit} is not found.", file=sys.stderr)
    print("Conflict clause verification finished.")
    print("Empty clause generated.")
    print(f"Original Num. Clauses:\t\t\t{report.num_init_clauses}")
    print(f"Needed Clauses to Construct Empty:\t{report.needed_clauses}")
    print(f"Total Variable count:\t\t\t{report.total_variables}")
    print(f"Variables involved in Empty:\t\t{report.needed_variables}")
    if dump_core:
        print(f"Unsat Core dumped:\t\t\t{CORE_FILE}")
        with open(CORE_FILE, "w", encoding="latin-1") as out:
            verifier.write_core(out)
    print(f"CPU Time:\t\t\t\t{get_cpu_time() - begin}")
    print("Verification Successful ")
    return 0