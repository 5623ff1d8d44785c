#!/usr/bin/env python3
"""
Tests for trace collection, PySAT cross-checking and dataset export.
"""

import json
import random
import sys
import tempfile
from pathlib import Path

from dpll_trace import (
    check_with_pysat,
    collect_traces,
    create_datasets,
    formula_to_dimacs,
    generate_random_formula,
    parse_formula,
    solve,
)


def test_formula_to_dimacs():
    formula = parse_formula(["(A ∨ ¬B)", "(¬C ∨ A)"])
    assert formula_to_dimacs(formula) == [[1, -2], [-3, 1]]


def test_random_formula_shape():
    rng = random.Random(1)
    formula = generate_random_formula(5, rng=rng)
    assert 25 <= len(formula) <= 31
    for clause in formula:
        assert len(clause.variables()) == 3
        assert all(var.startswith("x") for var in clause.variables())


def test_pysat_agrees():
    rng = random.Random(2)
    for n_vars in range(3, 9):
        formula = generate_random_formula(n_vars, rng=rng)
        check_with_pysat(formula, solve(formula))


def test_collect_and_save():
    data = collect_traces(var_min=3, var_max=5, target_count=20, seed=4)
    assert len(data["examples"]) == 20
    assert data["n_sat"] + data["n_unsat"] == 20
    assert data["verification_failures"] == 0

    example = data["examples"][0]
    assert len(example["text"].splitlines()) == len(example["events"])

    with tempfile.TemporaryDirectory() as tmp:
        create_datasets(data, tmp, test_size=5, prefix="small_", rng=random.Random(0))
        train = json.loads((Path(tmp) / "small_train.json").read_text(encoding="utf-8"))
        test = json.loads((Path(tmp) / "small_test.json").read_text(encoding="utf-8"))
    assert len(train) == 15
    assert len(test) == 5


def main():
    """Run all tests."""
    print("=" * 50)
    print("Collector Tests")
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
