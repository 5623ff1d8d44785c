#!/usr/bin/env python3
"""
Solve a CNF formula given as clause strings and print the decision trace.

Usage:
    python solve.py "(A ∨ B)" "(¬A ∨ C)" "(¬B ∨ ¬C)"
    python solve.py --file clauses.txt
    python solve.py "(A | B)" "(!A)" --json
"""

import argparse
import json
import logging
import sys

from dpll_trace import (
    ParseError,
    fmt_assignment,
    fmt_formula,
    parse_formula,
    read_clause_lines,
    solve,
)

logger = logging.getLogger(__name__)

# Default playground formula
DEFAULT_CLAUSES = ["(A ∨ B)", "(¬A ∨ C)", "(¬B ∨ ¬C)"]

EXIT_SAT = 0
EXIT_UNSAT = 1
EXIT_PARSE_ERROR = 2
EXIT_IO_ERROR = 3


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="DPLL SAT solver with decision trace")
    parser.add_argument(
        "clauses",
        nargs="*",
        help='Clauses such as "(A ∨ ¬B)" or "(A | !B)"'
    )
    parser.add_argument(
        "--file",
        type=str,
        default=None,
        help="Read clauses from a file, one per line ('#' starts a comment)"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Do not print the trace"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log every solver event"
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    clause_texts = list(args.clauses)
    if args.file:
        try:
            with open(args.file, "r", encoding="utf-8") as f:
                clause_texts.extend(read_clause_lines(f))
        except OSError as e:
            logger.error("Cannot read clause file: %s", e)
            return EXIT_IO_ERROR
    if not clause_texts and not args.file:
        clause_texts = DEFAULT_CLAUSES

    try:
        formula = parse_formula(clause_texts)
    except ParseError as e:
        logger.error("%s", e)
        return EXIT_PARSE_ERROR

    result = solve(formula)

    if args.json:
        print(json.dumps({
            "clauses": clause_texts,
            "satisfiable": result.satisfiable,
            "assignment": result.assignment if result.satisfiable else None,
            "stats": result.stats.to_dict(),
            "trace": result.trace.to_dicts(),
        }, indent=2, ensure_ascii=False))
        return EXIT_SAT if result.satisfiable else EXIT_UNSAT

    print(f"Formula: {fmt_formula(formula)}")
    if not args.quiet:
        print("\n=== TRACE ===")
        for line in result.trace.lines():
            print(f"  {line}")

    print("\n=== RESULT ===")
    if result.satisfiable:
        print("SATISFIABLE")
        print(f"Assignment: {fmt_assignment(result.assignment)}")
    else:
        print("UNSATISFIABLE")
    stats = result.stats
    print(f"Decisions: {stats.decisions}, backtracks: {stats.backtracks}, "
          f"propagations: {stats.propagations}, conflicts: {stats.conflicts}")

    return EXIT_SAT if result.satisfiable else EXIT_UNSAT


if __name__ == "__main__":
    sys.exit(main())
