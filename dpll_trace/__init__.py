"""
DPLL Trace Package

This package provides a recursive DPLL SAT solver over clause strings
such as "(A ∨ ¬B ∨ C)" that records every decision it makes, plus tools
for verifying those traces and collecting them in bulk.
"""

from .formula import Literal, Clause, Formula, generate_random_formula
from .assignment import Assignment
from .trace import (
    Trace, TraceEvent, UnitPropagation, Conflict, AllSatisfied, Branch, BranchKind,
    event_to_dict,
)
from .parser import (
    parse_literal, parse_clause, parse_formula, read_clause_lines,
    parse_trace_line, parse_trace,
)
from .format import (
    fmt_bool, fmt_lit, fmt_clause, fmt_formula, fmt_assignment, fmt_event, fmt_trace,
)
from .solver import DPLLSolver, SatResult, Satisfiable, Unsatisfiable, SolveStats, solve, solve_clauses
from .verifier import TraceVerifier, verify_result
from .collector import collect_traces, create_datasets, formula_to_dimacs, check_with_pysat
from .errors import ParseError, TraceFormatError, AssignmentConflictError

__all__ = [
    # Model
    'Literal',
    'Clause',
    'Formula',
    'Assignment',
    'generate_random_formula',

    # Trace
    'Trace',
    'TraceEvent',
    'UnitPropagation',
    'Conflict',
    'AllSatisfied',
    'Branch',
    'BranchKind',
    'event_to_dict',

    # Parsing
    'parse_literal',
    'parse_clause',
    'parse_formula',
    'read_clause_lines',
    'parse_trace_line',
    'parse_trace',

    # Formatting
    'fmt_bool',
    'fmt_lit',
    'fmt_clause',
    'fmt_formula',
    'fmt_assignment',
    'fmt_event',
    'fmt_trace',

    # Solver
    'DPLLSolver',
    'SatResult',
    'Satisfiable',
    'Unsatisfiable',
    'SolveStats',
    'solve',
    'solve_clauses',

    # Verification
    'TraceVerifier',
    'verify_result',

    # Data collection
    'collect_traces',
    'create_datasets',
    'formula_to_dimacs',
    'check_with_pysat',

    # Errors
    'ParseError',
    'TraceFormatError',
    'AssignmentConflictError',
]
