import io

import pytest

from satproof.cnf import parse_cnf
from satproof.verifier import (
    ProofVerifier,
    VerificationError,
    get_cpu_time,
    main,
)

CNF_TEXT = """p cnf 3 5
1 2 0
1 -2 0
-1 2 0
-1 -2 0
3 0
"""

TRACE = [
    "CL: 5 <= 0 1",
    "VAR: 1 L: 0 V: 1 A: 5 Lits: 2",
    "VAR: 2 L: 0 V: 1 A: 2 Lits: 3 4",
    "CONF: 3 == 3 5",
]

ORIGINAL = [[1, 2], [1, -2], [-1, 2], [-1, -2]]


def make_verifier(cnf_text=CNF_TEXT, trace=TRACE):
    verifier = ProofVerifier()
    verifier.load_cnf(parse_cnf(cnf_text.splitlines()))
    verifier.parse_trace(trace)
    return verifier


def trivial_verifier(trace):
    verifier = ProofVerifier()
    verifier.load_cnf(parse_cnf(["p cnf 1 2", "1 0", "-1 0"]))
    verifier.parse_trace(trace)
    return verifier


def test_verify_with_learned_clause():
    report = make_verifier().verify()
    assert report.core_clause_ids == [0, 1, 2, 3]
    assert report.num_learned_clauses == 1
    assert report.num_built_clauses == 1
    assert report.total_variables == 3
    assert report.needed_clauses == len(report.core_clause_ids)
    assert report.missing_conf_literals == []


def test_core_round_trip():
    verifier = make_verifier()
    verifier.verify()
    buf = io.StringIO()
    verifier.write_core(buf)
    lines = buf.getvalue().splitlines()
    core = parse_cnf(lines)
    assert core.clauses == ORIGINAL
    assert core.num_vars == 3
    assert "c 3 " in lines


def test_trivial_conflict():
    report = trivial_verifier(["VAR: 1 L: 0 V: 1 A: 0 Lits: 1", "CONF: 1 == 3"]).verify()
    assert report.core_clause_ids == [0, 1]
    assert report.needed_variables == report.total_variables


def test_missing_conflict_literal_reported():
    report = trivial_verifier(
        ["VAR: 1 L: 0 V: 1 A: 0 Lits: 1", "CONF: 1 == 3 2"]
    ).verify()
    assert report.missing_conf_literals == [2]


def test_pure_variable_without_reason_is_accepted():
    verifier = ProofVerifier()
    verifier.load_cnf(parse_cnf(["p cnf 2 3", "1 0", "-1 0", "2 0"]))
    verifier.parse_trace(
        ["VAR: 1 L: 0 V: 1 A: 0 Lits: 1", "VAR: 2 L: 0 V: 1 A: -1 Lits: 0", "CONF: 1 == 3"]
    )
    report = verifier.verify()
    assert report.core_clause_ids == [0, 1]
    assert report.needed_variables == 1


def test_assignment_without_reason_fails():
    verifier = trivial_verifier(["VAR: 1 L: 0 V: 1 A: -1 Lits: 0", "CONF: 1 == 3"])
    with pytest.raises(VerificationError, match="no reasons"):
        verifier.verify()


def test_resolution_distance_two_fails():
    verifier = ProofVerifier()
    verifier.load_cnf(parse_cnf(["p cnf 2 2", "1 2 0", "-1 -2 0"]))
    verifier.parse_trace(["CL: 2 <= 0 1", "CONF: 2 =="])
    with pytest.raises(VerificationError, match="distance"):
        verifier.verify()


def test_wrong_assignment_fails():
    verifier = trivial_verifier(["VAR: 1 L: 0 V: 0 A: 0 Lits: 1", "CONF: 1 == 3"])
    with pytest.raises(VerificationError):
        verifier.verify()


def test_trace_without_conflict_fails():
    verifier = ProofVerifier()
    verifier.load_cnf(parse_cnf(["p cnf 1 2", "1 0", "-1 0"]))
    with pytest.raises(VerificationError, match="conflicting"):
        verifier.parse_trace(["VAR: 1 L: 0 V: 1 A: 0 Lits: 1"])


def test_learned_clause_out_of_sequence():
    verifier = ProofVerifier()
    verifier.load_cnf(parse_cnf(["p cnf 1 2", "1 0", "-1 0"]))
    with pytest.raises(VerificationError):
        verifier.parse_trace(["CL: 7 <= 0 1", "CONF: 1 == 3"])


def test_learned_clause_missing_arrow():
    verifier = ProofVerifier()
    verifier.load_cnf(parse_cnf(["p cnf 1 2", "1 0", "-1 0"]))
    with pytest.raises(VerificationError, match="<="):
        verifier.parse_trace(["CL: 2 0 1", "CONF: 1 == 3"])


def test_verify_without_trace_fails():
    verifier = ProofVerifier()
    verifier.load_cnf(parse_cnf(["p cnf 1 2", "1 0", "-1 0"]))
    with pytest.raises(VerificationError):
        verifier.verify()


def test_write_core_before_verify_fails():
    with pytest.raises(VerificationError):
        make_verifier().write_core(io.StringIO())


def test_add_original_clause_errors():
    verifier = ProofVerifier()
    verifier.set_var_number(2)
    with pytest.raises(VerificationError):
        verifier.add_original_clause([])
    with pytest.raises(VerificationError, match="out of range"):
        verifier.add_original_clause([3])
    with pytest.raises(VerificationError, match="negation"):
        verifier.add_original_clause([1, -1])


def test_duplicate_literals_are_merged_and_dumped():
    verifier = ProofVerifier()
    verifier.set_var_number(2)
    verifier.num_init_clauses = 2
    assert verifier.add_original_clause([1, 1, -2]) == 0
    assert verifier.add_original_clause([2]) == 1
    parsed = parse_cnf(verifier.dump().splitlines())
    assert parsed.clauses == [[1, -2], [2]]
    assert parsed.num_vars == 2


def test_add_learned_clause_index():
    verifier = ProofVerifier()
    verifier.set_var_number(1)
    first = verifier.add_original_clause([1])
    assert verifier.add_learned_clause([0, 0]) == first + 1


def test_main_success_writes_core(tmp_path, monkeypatch, capsys):
    cnf_path = tmp_path / "problem.cnf"
    cnf_path.write_text(CNF_TEXT)
    trace_path = tmp_path / "trace.txt"
    trace_path.write_text("\n".join(TRACE) + "\n")
    monkeypatch.chdir(tmp_path)
    assert main([str(cnf_path), str(trace_path), "-core"]) == 0
    assert "Verification Successful" in capsys.readouterr().out
    core = parse_cnf((tmp_path / "unsat_core.cnf").read_text().splitlines())
    assert core.clauses == ORIGINAL


def test_main_usage_errors(tmp_path):
    assert main([]) == 1
    assert main(["a.cnf", "b.txt", "-x"]) == 1
    assert main([str(tmp_path / "missing.cnf"), str(tmp_path / "missing.txt")]) == 1


def test_cpu_time_monotonic():
    first = get_cpu_time()
    second = get_cpu_time()
    assert 0 <= first <= second