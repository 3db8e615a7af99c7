"""SAT solver data structures, CNF reading, gate-to-clause encoding and a resolution-proof verifier."""

__version__ = "0.1.0"