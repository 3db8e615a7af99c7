# satproof

Building blocks for SAT solvers, clause generators for logic gates, and a
checker for the resolution traces that a solver writes when it reports an
instance unsatisfiable.

## Installing

    pip install .

To run the tests:

    pip install .[test]
    pytest

## Checking an unsatisfiability proof

    satproof-verify instance.cnf trace.txt
    satproof-verify instance.cnf trace.txt -core

The first argument is a DIMACS CNF file. The second is the solver's trace.
The checker reads these lines from it and ignores all other lines:

- `CL: <id> <= <r1> <r2> ...` is a learned clause, resolved from the listed
  clauses. Learned clause ids must follow on from the original clauses in order.
- `VAR: <v> L: <level> V: <0|1> A: <antecedent> Lits: ...` is a variable's
  value and the clause that implied it. Use `-1` for a value with no
  antecedent, which is accepted only for a pure literal.
- `CONF: <id> == <lits>` is the final conflicting clause. The literals are
  written as `2 * variable + sign`.

The checker rebuilds every learned clause that the final conflict depends on.
It checks that each resolution step is between clauses that clash on exactly
one variable, and that the conflict clause is false under the given values.
It then resolves the conflict down to the empty clause. Conflict literals from
the trace that are missing from the rebuilt clause are reported, but they do
not make the check fail. With `-core`, the original clauses that were used are
written to `unsat_core.cnf` in the current directory. The command exits with
status 0 on success and 1 on failure.

The same checks can be run from Python:

```python
from satproof.verifier import ProofVerifier

verifier = ProofVerifier()
verifier.read_cnf("instance.cnf")
verifier.read_trace("trace.txt")
report = verifier.verify()
print(report.needed_clauses, report.core_clause_ids)

with open("core.cnf", "w") as out:
    verifier.write_core(out)
```

`verify` returns a `VerificationReport`. If a check fails it raises
`VerificationError`. Malformed numbers and headers raise
`satproof.cnf.CnfFormatError`.

## Reading CNF files

`satproof.cnf.read_cnf(path)` and `parse_cnf(lines)` return a `CnfFile`. It
holds `num_vars`, `num_clauses`, `header_seen` and `clauses`, where each clause
is a list of DIMACS literals. If the number of clauses read differs from the
header, a `UserWarning` is issued. `format_literal` renders a
`2 * variable + sign` literal in DIMACS form.

## Encoding gates as clauses

`satproof.gates` turns logic gates into clauses. A literal is written
`2 * variable + sign`, where the sign is 1 for a negated literal. The
generators are `and2`, `and_n`, `or2`, `or_n`, `nand2`, `nand_n`, `nor2`,
`nor_n`, `xor2` and `not1`. Each one writes to any object that has an
`add_orig_clause(lits, gid)` method, such as `ClauseCollector`:

```python
from satproof.gates import ClauseCollector, and2, xor2

clauses = ClauseCollector()
and2(clauses, 2, 4, 6, 0)   # x3 = x1 AND x2
xor2(clauses, 2, 4, 8, 0)   # x4 = x1 XOR x2
print(clauses.clauses)      # [(literals, gid), ...]
```

## Data structures

- `satproof.heap.Heap`: a binary min-heap over distinct hashable keys, ordered
  by a "less than" function. It supports `decrease`, `increase`, `update`,
  `remove`, `remove_min` and `build`.
- `satproof.intmap.IntMap` and `IntSet`: a map and an ordered set over keys that
  map onto small non-negative integers.
- `satproof.ringqueue.RingQueue`: a FIFO queue in a growable ring buffer.
- `satproof.sorting`: in-place `sort` and `selection_sort`, each taking an
  optional "less than" function.
- `satproof.rnd.SeededRandom`: a deterministic generator with `drand`, `irand`
  and `shuffle`.
- `satproof.alg`: `remove`, `find`, `deep_copy` and `append` helpers for lists.
- `satproof.region.RegionAllocator`: a region allocator that hands out integer
  references. It raises `OutOfMemoryError` when 32-bit references run out.

## What it does not do

The package does not solve CNF instances. It only checks the traces of
instances that were reported unsatisfiable. It has no general-purpose hash
table type; use Python's `dict`.