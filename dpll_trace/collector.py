"""
Data collection and dataset creation for DPLL solver traces.
"""

import json
import logging
import random
from pathlib import Path
from typing import Dict, List, Optional

from tqdm import tqdm

from .format import fmt_clause
from .formula import Formula, generate_random_formula
from .solver import DPLLSolver, SatResult
from .verifier import verify_result

logger = logging.getLogger(__name__)


def formula_to_dimacs(formula: Formula) -> List[List[int]]:
    """Integer clauses for external solvers, numbering variables in first-seen order."""
    var2id = {var: i for i, var in enumerate(formula.variables(), start=1)}
    return [
        [-var2id[lit.variable] if lit.negated else var2id[lit.variable] for lit in clause]
        for clause in formula
    ]


def check_with_pysat(formula: Formula, result: SatResult) -> None:
    """
    Cross-check a result against PySAT's Glucose3.

    Raises:
        AssertionError: If satisfiability disagrees or the model is rejected.
    """
    from pysat.solvers import Glucose3

    clauses = formula_to_dimacs(formula)
    with Glucose3(bootstrap_with=clauses) as g:
        is_sat_pysat = g.solve()
    assert is_sat_pysat == result.satisfiable, "Result mismatch with PySAT"

    if result.satisfiable:
        var2id = {var: i for i, var in enumerate(formula.variables(), start=1)}
        assumptions = [
            var2id[var] if value else -var2id[var]
            for var, value in result.assignment.items()
        ]
        with Glucose3(bootstrap_with=clauses) as g_verify:
            assert g_verify.solve(assumptions=assumptions), "Invalid solution"


def collect_traces(
    var_min: int,
    var_max: int,
    target_count: int,
    clause_length: int = 3,
    verify: bool = True,
    use_pysat_verification: bool = True,
    seed: Optional[int] = None,
) -> Dict:
    """
    Solve random formulas and collect their traces.

    Args:
        var_min: Minimum number of variables.
        var_max: Maximum number of variables.
        target_count: Number of formulas to solve.
        clause_length: Literals per clause.
        verify: Whether to replay-verify each trace.
        use_pysat_verification: Whether to cross-check results against PySAT.
        seed: Seed for formula generation.

    Returns:
        Dictionary with traces and statistics.
    """
    rng = random.Random(seed)
    examples = []
    verification_failures = 0
    n_sat = 0

    for _ in tqdm(range(target_count), desc="Solving formulas"):
        n_vars = rng.randint(var_min, var_max)
        formula = generate_random_formula(n_vars, clause_length=clause_length, rng=rng)

        result = DPLLSolver(formula).solve()
        if result.satisfiable:
            n_sat += 1

        if use_pysat_verification:
            check_with_pysat(formula, result)

        if verify and not verify_result(formula, result):
            verification_failures += 1
            logger.warning("Trace verification failed (total: %d)", verification_failures)

        examples.append({
            "clauses": [fmt_clause(clause) for clause in formula],
            "satisfiable": result.satisfiable,
            "assignment": result.assignment if result.satisfiable else None,
            "stats": result.stats.to_dict(),
            "text": "\n".join(result.trace.lines()),
            "events": result.trace.to_dicts(),
        })

    if verify:
        logger.info("Verification complete. Total failures: %d", verification_failures)

    return {
        "examples": examples,
        "n_sat": n_sat,
        "n_unsat": len(examples) - n_sat,
        "verification_failures": verification_failures,
    }


def create_datasets(
    data: Dict,
    output_dir: str,
    test_size: int = 256,
    prefix: str = "",
    rng: Optional[random.Random] = None,
) -> None:
    """
    Save collected traces to dataset files.

    Args:
        data: Dictionary from collect_traces().
        output_dir: Output directory path.
        test_size: Number of test examples.
        prefix: Prefix for filenames (e.g., "small_").
        rng: Random source for the shuffle.
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    examples = list(data["examples"])
    (rng or random).shuffle(examples)

    test_data = examples[:test_size]
    train_data = examples[test_size:]

    with open(output_path / f"{prefix}train.json", "w", encoding="utf-8") as f:
        json.dump(train_data, f, indent=2, ensure_ascii=False)

    with open(output_path / f"{prefix}test.json", "w", encoding="utf-8") as f:
        json.dump(test_data, f, indent=2, ensure_ascii=False)

    logger.info("Saved datasets to %s", output_path)
    logger.info("  Train: %d examples", len(train_data))
    logger.info("  Test: %d examples", len(test_data))
