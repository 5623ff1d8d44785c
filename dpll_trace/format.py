"""
Trace formatting utilities for DPLL solver output.

Trace lines are indented two spaces per recursion depth so a reader can
follow the search tree top to bottom.
"""

from typing import Iterable, Mapping

from .formula import Clause, Formula, Literal
from .trace import AllSatisfied, Branch, BranchKind, Conflict, TraceEvent, UnitPropagation

NEGATION = "¬"
DISJUNCTION = " ∨ "
INDENT = "  "


def fmt_bool(value: bool) -> str:
    """Format truth value: True -> 'true'"""
    return "true" if value else "false"


def fmt_lit(lit: Literal) -> str:
    """Format literal: Literal('B', True) -> '¬B'"""
    return f"{NEGATION}{lit.variable}" if lit.negated else lit.variable


def fmt_clause(clause: Clause) -> str:
    """Format clause: [A, ¬B, C] -> '(A ∨ ¬B ∨ C)'"""
    return "(" + DISJUNCTION.join(fmt_lit(lit) for lit in clause) + ")"


def fmt_formula(formula: Formula) -> str:
    """Format formula as a conjunction of clauses."""
    if not len(formula):
        return "⊤"
    return " ∧ ".join(fmt_clause(clause) for clause in formula)


def fmt_assignment(assignment: Mapping[str, bool]) -> str:
    """Format assignment: {A: True, B: False} -> 'A = true, B = false'"""
    if not assignment:
        return ""
    return ", ".join(f"{var} = {fmt_bool(value)}" for var, value in assignment.items())


def fmt_event(event: TraceEvent) -> str:
    """
    Format one trace event.

    Unit propagation: A = true
    Conflict detected in clause 2
    All clauses satisfied
    Branching: try A = true
    Backtrack: try A = false
    """
    indent = INDENT * event.depth
    if isinstance(event, UnitPropagation):
        body = f"Unit propagation: {event.variable} = {fmt_bool(event.value)}"
    elif isinstance(event, Conflict):
        body = f"Conflict detected in clause {event.clause_index}"
    elif isinstance(event, AllSatisfied):
        body = "All clauses satisfied"
    elif isinstance(event, Branch):
        label = "Branching" if event.kind is BranchKind.TRY else "Backtrack"
        body = f"{label}: try {event.variable} = {fmt_bool(event.value)}"
    else:
        raise TypeError(f"Unknown trace event: {event!r}")
    return indent + body


def fmt_trace(events: Iterable[TraceEvent]) -> str:
    return "\n".join(fmt_event(event) for event in events)
