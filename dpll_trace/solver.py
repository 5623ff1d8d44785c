"""
DPLL SAT Solver with decision trace generation.

The solver is plain recursive DPLL: unit propagation to a fixed point,
a satisfaction check, then a branch on the next unassigned variable
(true first, false on backtrack). Every decision is appended to a Trace
that is returned with the result for step-by-step display.
"""

import logging
import sys
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .assignment import Assignment
from .formula import Clause, Formula, Literal
from .format import fmt_event
from .parser import parse_formula
from .trace import AllSatisfied, Branch, BranchKind, Conflict, Trace, TraceEvent, UnitPropagation

logger = logging.getLogger(__name__)

# Python frames kept free for callers when sizing the recursion limit
RECURSION_HEADROOM = 200


@dataclass
class SolveStats:
    decisions: int = 0
    backtracks: int = 0
    propagations: int = 0
    conflicts: int = 0
    max_depth: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "decisions": self.decisions,
            "backtracks": self.backtracks,
            "propagations": self.propagations,
            "conflicts": self.conflicts,
            "max_depth": self.max_depth,
        }


@dataclass
class Satisfiable:
    """
    A model was found.

    `assignment` maps every variable of the formula to a bool; variables
    the search never had to decide are set to True. `partial` is the
    search's own snapshot at the point all clauses became satisfied.
    """
    assignment: Dict[str, bool]
    partial: Assignment
    trace: Trace
    stats: SolveStats = field(default_factory=SolveStats)
    satisfiable: bool = field(default=True, init=False)


@dataclass
class Unsatisfiable:
    """The search space was exhausted without a model."""
    trace: Trace
    stats: SolveStats = field(default_factory=SolveStats)
    satisfiable: bool = field(default=False, init=False)


SatResult = Union[Satisfiable, Unsatisfiable]


class DPLLSolver:
    """
    DPLL SAT solver that records a decision trace.

    Each recursive frame owns its own Assignment snapshot; the Trace and
    the statistics are the only state shared across the call tree, and
    both are recreated on every call to `solve`.
    """

    def __init__(self, formula: Formula):
        self.formula = formula
        self.variables = formula.variables()
        self.trace = Trace()
        self.stats = SolveStats()

    def solve(self) -> SatResult:
        """
        Run the search to completion.

        Returns Satisfiable with a full assignment, or Unsatisfiable.
        """
        self.trace = Trace()
        self.stats = SolveStats()
        logger.debug(
            "Solving %d clauses over %d variables", len(self.formula), len(self.variables)
        )
        previous_limit = sys.getrecursionlimit()
        self._ensure_recursion_limit()
        try:
            model = self._search(Assignment(), 0)
        finally:
            sys.setrecursionlimit(previous_limit)

        if model is None:
            logger.debug(
                "UNSAT after %d decisions, %d conflicts",
                self.stats.decisions, self.stats.conflicts,
            )
            return Unsatisfiable(self.trace, self.stats)

        assignment = {var: model.get(var, True) for var in self.variables}
        logger.debug(
            "SAT after %d decisions, %d propagations",
            self.stats.decisions, self.stats.propagations,
        )
        return Satisfiable(assignment, model, self.trace, self.stats)

    def _search(self, assignment: Assignment, depth: int) -> Optional[Assignment]:
        """Solve below `assignment`; returns the satisfying snapshot or None."""
        self.stats.max_depth = max(self.stats.max_depth, depth)

        assignment = self._unit_propagate(assignment, depth)
        if assignment is None:
            return None

        if self.formula.evaluate(assignment):
            self._emit(AllSatisfied(depth))
            return assignment

        var = self._pick_branching_variable(assignment)
        if var is None:
            return None

        self.stats.decisions += 1
        self._emit(Branch(var, True, BranchKind.TRY, depth))
        model = self._search(assignment.bind(var, True), depth + 1)
        if model is not None:
            return model

        self.stats.backtracks += 1
        self._emit(Branch(var, False, BranchKind.BACKTRACK, depth))
        return self._search(assignment.bind(var, False), depth + 1)

    def _unit_propagate(self, assignment: Assignment, depth: int) -> Optional[Assignment]:
        """
        Unit propagation to a fixed point.

        Returns the extended snapshot, or None if a clause is falsified.
        """
        while True:
            propagated = False

            for index, clause in enumerate(self.formula):
                satisfied, unassigned = self._evaluate_clause(clause, assignment)
                if satisfied:
                    continue

                if not unassigned:
                    self.stats.conflicts += 1
                    self._emit(Conflict(index, depth))
                    return None

                if len(unassigned) == 1:
                    lit = unassigned[0]
                    assignment = assignment.bind(lit.variable, lit.satisfying_value)
                    self.stats.propagations += 1
                    self._emit(UnitPropagation(lit.variable, lit.satisfying_value, depth))
                    propagated = True

            if not propagated:
                return assignment

    def _evaluate_clause(
        self, clause: Clause, assignment: Assignment
    ) -> Tuple[bool, List[Literal]]:
        """
        Evaluate a clause under an assignment.

        Returns (satisfied, unassigned_literals).
        """
        unassigned = []
        for lit in clause:
            value = assignment.value_of(lit)
            if value is None:
                unassigned.append(lit)
            elif value:
                return True, []
        return False, unassigned

    def _pick_branching_variable(self, assignment: Assignment) -> Optional[str]:
        """First variable in first-seen order that is not yet assigned."""
        for var in self.variables:
            if var not in assignment:
                return var
        return None

    def _emit(self, event: TraceEvent) -> None:
        self.trace.append(event)
        logger.debug("%s", fmt_event(event))

    def _ensure_recursion_limit(self) -> None:
        """Raise the recursion limit for this solve; `solve` restores it afterwards."""
        needed = len(self.variables) + RECURSION_HEADROOM
        if sys.getrecursionlimit() < needed:
            sys.setrecursionlimit(needed)


def solve(formula: Formula) -> SatResult:
    """Decide satisfiability of `formula`, returning the result and its trace."""
    return DPLLSolver(formula).solve()


def solve_clauses(clause_texts: Iterable[str]) -> SatResult:
    """
    Parse clause strings and solve them.

    Raises:
        ParseError: If any clause is malformed; no search is attempted.
    """
    return solve(parse_formula(clause_texts))
