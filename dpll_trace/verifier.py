"""
Replay verification for DPLL solver traces.

Verifies that a trace is a faithful record of a search over the formula:
replaying its events frame by frame must reproduce the solver's result.
"""

import logging
from typing import Dict, List, Optional

from .formula import Formula, Literal
from .format import fmt_event
from .solver import SatResult
from .trace import AllSatisfied, Branch, BranchKind, Conflict, TraceEvent, UnitPropagation

logger = logging.getLogger(__name__)


class TraceVerifier:
    """
    Replays a trace with one assignment per recursion depth.

    The frame at depth d holds the bindings of the search frame that emits
    events at depth d. A TRY or BACKTRACK at depth d opens frame d + 1 as a
    copy of frame d plus the branch binding.
    """

    def __init__(self, formula: Formula, result: SatResult):
        self.formula = formula
        self.result = result
        self.failure: Optional[str] = None

    def verify(self) -> bool:
        """
        Verify the whole trace.

        Returns True if the trace is consistent, False otherwise. The
        reason for a failure is kept in `self.failure`.
        """
        self.failure = self._replay(list(self.result.trace))
        if self.failure:
            logger.warning("Trace verification failed: %s", self.failure)
            return False
        return True

    def _replay(self, events: List[TraceEvent]) -> Optional[str]:
        frames: Dict[int, Dict[str, bool]] = {0: {}}
        open_tries: Dict[int, str] = {}
        satisfied_frame: Optional[Dict[str, bool]] = None

        for position, event in enumerate(events):
            if satisfied_frame is not None:
                return f"event after success at {position}: {fmt_event(event)}"

            depth = event.depth
            if depth not in frames:
                return f"no open frame at depth {depth} for event {position}"
            unfinished = sorted(d for d in open_tries if d > depth)
            if unfinished:
                return f"left depth {unfinished[0]} before backtracking on {open_tries[unfinished[0]]}"
            for stale in [d for d in frames if d > depth]:
                del frames[stale]
            frame = frames[depth]

            if isinstance(event, UnitPropagation):
                if event.variable in frame:
                    return f"propagated variable {event.variable} already assigned"
                if not self._is_forced(frame, Literal(event.variable, not event.value)):
                    return f"no unit clause forces {event.variable} = {event.value}"
                frame[event.variable] = event.value

            elif isinstance(event, Conflict):
                if not 0 <= event.clause_index < len(self.formula):
                    return f"conflict names unknown clause {event.clause_index}"
                if not self._is_falsified(frame, event.clause_index):
                    return f"clause {event.clause_index} is not falsified at event {position}"

            elif isinstance(event, AllSatisfied):
                if not self.formula.evaluate(frame):
                    return f"formula not satisfied at event {position}"
                satisfied_frame = frame

            elif isinstance(event, Branch):
                if event.kind is BranchKind.TRY:
                    if event.variable in frame:
                        return f"branch on assigned variable {event.variable}"
                    if not event.value:
                        return f"first branch on {event.variable} must try true"
                    if depth in open_tries:
                        return f"second try at depth {depth} while {open_tries[depth]} is still open"
                    if self._has_pending_unit(frame):
                        return f"branch on {event.variable} before propagation finished"
                    open_tries[depth] = event.variable
                else:
                    if open_tries.get(depth) != event.variable or event.value:
                        return f"backtrack on {event.variable} without a matching try"
                    del open_tries[depth]
                child = dict(frame)
                child[event.variable] = event.value
                frames[depth + 1] = child

            else:
                return f"unknown event type {type(event).__name__}"

        return self._check_outcome(satisfied_frame, open_tries)

    def _check_outcome(
        self, satisfied_frame: Optional[Dict[str, bool]], open_tries: Dict[int, str]
    ) -> Optional[str]:
        if not self.result.satisfiable:
            if satisfied_frame is not None:
                return "UNSAT result but trace reports success"
            if not self._ends_in_conflict():
                return "UNSAT trace does not end in a conflict"
            if open_tries:
                return f"UNSAT result with unexplored false branches: {sorted(open_tries.values())}"
            return None

        if satisfied_frame is None:
            return "SAT result but trace never reports success"
        if satisfied_frame != self.result.partial.to_dict():
            return "replayed assignment differs from the solver's"
        if not self.formula.evaluate(self.result.assignment):
            return "returned assignment does not satisfy the formula"
        return None

    def _is_forced(self, frame: Dict[str, bool], lit: Literal) -> bool:
        """True if some clause is unit under `frame` with `lit` as its only unassigned literal."""
        for clause in self.formula:
            if clause.is_satisfied(frame):
                continue
            if clause.unassigned(frame) == [lit]:
                return True
        return False

    def _has_pending_unit(self, frame: Dict[str, bool]) -> bool:
        """True if some unsatisfied clause has at most one unassigned literal."""
        return any(
            not clause.is_satisfied(frame) and len(clause.unassigned(frame)) <= 1
            for clause in self.formula
        )

    def _ends_in_conflict(self) -> bool:
        events = self.result.trace
        return len(events) > 0 and isinstance(events[-1], Conflict)

    def _is_falsified(self, frame: Dict[str, bool], index: int) -> bool:
        clause = self.formula[index]
        return not clause.is_satisfied(frame) and not clause.unassigned(frame)


def verify_result(formula: Formula, result: SatResult) -> bool:
    """
    Verify the trace of a solver result.

    Args:
        formula: The formula that was solved.
        result: Satisfiable or Unsatisfiable returned by `solve`.

    Returns:
        True if the trace replays to the same outcome, False otherwise.
    """
    return TraceVerifier(formula, result).verify()
