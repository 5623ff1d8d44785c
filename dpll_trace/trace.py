"""
Decision trace records for the DPLL solver.

A Trace is created by the solver at the start of each solve call and handed
back with the result. Events are only ever appended.
"""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Dict, Iterator, List, Union


class BranchKind(Enum):
    """Whether a branch event opens the first (true) or second (false) subtree."""
    TRY = "try"
    BACKTRACK = "backtrack"


@dataclass(frozen=True)
class UnitPropagation:
    variable: str
    value: bool
    depth: int = 0


@dataclass(frozen=True)
class Conflict:
    """A clause with every literal false under the current frame's assignment."""
    clause_index: int
    depth: int = 0


@dataclass(frozen=True)
class AllSatisfied:
    depth: int = 0


@dataclass(frozen=True)
class Branch:
    variable: str
    value: bool
    kind: BranchKind
    depth: int = 0


TraceEvent = Union[UnitPropagation, Conflict, AllSatisfied, Branch]

EVENT_TAGS = {
    UnitPropagation: "unit_propagation",
    Conflict: "conflict",
    AllSatisfied: "all_satisfied",
    Branch: "branch",
}


def event_to_dict(event: TraceEvent) -> Dict:
    """Tagged, JSON-ready form of an event."""
    data = asdict(event)
    if isinstance(event, Branch):
        data["kind"] = event.kind.value
    data["event"] = EVENT_TAGS[type(event)]
    return data


class Trace:
    """
    Append-only ordered log of decision events.

    Event order mirrors decision order: propagations precede the branch
    that follows them, a TRY precedes its subtree, a BACKTRACK follows the
    failed TRY subtree and precedes the false subtree.
    """

    def __init__(self):
        self._events: List[TraceEvent] = []

    def append(self, event: TraceEvent) -> None:
        self._events.append(event)

    def __iter__(self) -> Iterator[TraceEvent]:
        return iter(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return tuple(self._events[index])
        return self._events[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Trace):
            return NotImplemented
        return self._events == other._events

    def __repr__(self) -> str:
        return f"Trace({len(self._events)} events)"

    def events(self) -> tuple:
        return tuple(self._events)

    def lines(self) -> List[str]:
        """Human-readable rendering, one line per event."""
        from .format import fmt_event
        return [fmt_event(event) for event in self._events]

    def to_dicts(self) -> List[Dict]:
        return [event_to_dict(event) for event in self._events]
