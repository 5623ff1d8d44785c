"""
Immutable partial assignments.

Each search frame owns one Assignment. Extending it never touches the
parent snapshot, so sibling branches cannot observe each other's bindings.
"""

from collections.abc import Mapping
from typing import Dict, Iterator, Optional

from .errors import AssignmentConflictError
from .formula import Literal


class Assignment(Mapping):
    """
    A partial mapping from variable name to bool.

    Unassigned variables are absent. Iteration follows binding order.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Optional[Dict[str, bool]] = None):
        self._values: Dict[str, bool] = dict(values or {})

    def __getitem__(self, variable: str) -> bool:
        return self._values[variable]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        inner = ", ".join(f"{var}={value}" for var, value in self._values.items())
        return f"Assignment({inner})"

    def bind(self, variable: str, value: bool) -> "Assignment":
        """
        Return a new snapshot with `variable` bound to `value`.

        Binding a variable to the value it already has returns `self`.

        Raises:
            AssignmentConflictError: If `variable` is bound to the other value.
        """
        current = self._values.get(variable)
        if current is not None:
            if current != value:
                raise AssignmentConflictError(variable, current, value)
            return self
        values = dict(self._values)
        values[variable] = value
        return Assignment(values)

    def value_of(self, literal: Literal) -> Optional[bool]:
        """Truth value of `literal`, or None if its variable is unassigned."""
        return literal.evaluate(self._values)

    def to_dict(self) -> Dict[str, bool]:
        return dict(self._values)
