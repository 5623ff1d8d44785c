#!/usr/bin/env python3
"""
Tests for the solve.py command line: exit codes, clause files and JSON output.
"""

import io
import json
import sys
import tempfile
from contextlib import redirect_stdout
from pathlib import Path

import solve


def run_cli(argv):
    """Run solve.main and return (exit_code, stdout)."""
    out = io.StringIO()
    with redirect_stdout(out):
        code = solve.main(argv)
    return code, out.getvalue()


def test_sat_exit_code():
    code, output = run_cli(["(A)"])
    assert code == solve.EXIT_SAT
    assert "SATISFIABLE" in output
    assert "A = true" in output


def test_unsat_exit_code():
    code, output = run_cli(["(A)", "(¬A)"])
    assert code == solve.EXIT_UNSAT
    assert "UNSATISFIABLE" in output


def test_parse_error_exit_code():
    code, output = run_cli(["(A ∨ )"])
    assert code == solve.EXIT_PARSE_ERROR
    assert "RESULT" not in output


def test_missing_file_exit_code():
    with tempfile.TemporaryDirectory() as tmp:
        missing = str(Path(tmp) / "missing.txt")
        code, _ = run_cli(["--file", missing])
    assert code == solve.EXIT_IO_ERROR
    assert len({solve.EXIT_SAT, solve.EXIT_UNSAT, solve.EXIT_PARSE_ERROR, solve.EXIT_IO_ERROR}) == 4


def test_file_with_json_output():
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "clauses.txt"
        path.write_text("# playground\n(A ∨ B)\n\n(¬A ∨ C)\n(¬B ∨ ¬C)\n", encoding="utf-8")
        code, output = run_cli(["--file", str(path), "--json"])

    assert code == solve.EXIT_SAT
    payload = json.loads(output)
    assert set(payload) == {"clauses", "satisfiable", "assignment", "stats", "trace"}
    assert payload["clauses"] == ["(A ∨ B)", "(¬A ∨ C)", "(¬B ∨ ¬C)"]
    assert payload["satisfiable"] is True
    assert payload["assignment"] == {"A": True, "B": False, "C": True}
    assert payload["trace"][0] == {"event": "branch", "variable": "A", "value": True, "kind": "try", "depth": 0}


def test_unsat_json_has_no_assignment():
    code, output = run_cli(["(A ∨ B)", "(¬A)", "(¬B)", "--json"])
    assert code == solve.EXIT_UNSAT
    payload = json.loads(output)
    assert payload["satisfiable"] is False
    assert payload["assignment"] is None
    assert [e["event"] for e in payload["trace"]] == ["unit_propagation", "unit_propagation", "conflict"]


def main():
    """Run all tests."""
    print("=" * 50)
    print("Command Line Tests")
    print("=" * 50)

    tests = [obj for name, obj in sorted(globals().items()) if name.startswith("test_")]
    failed = 0
    for test in tests:
        try:
            test()
            print(f"  {test.__name__}: PASS")
        except AssertionError as e:
            failed += 1
            print(f"  {test.__name__}: FAIL {e}")

    print("\n" + "=" * 50)
    if not failed:
        print("ALL TESTS PASSED")
    else:
        print(f"{failed} TESTS FAILED")
    print("=" * 50)

    return 0 if not failed else 1


if __name__ == "__main__":
    sys.exit(main())
