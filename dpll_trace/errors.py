"""
Custom exceptions for the DPLL solver.
"""

from typing import Optional


class ParseError(Exception):
    """Raised when clause text cannot be turned into a Clause."""

    def __init__(self, text: str, reason: str = "", index: Optional[int] = None):
        self.text = text
        self.reason = reason
        self.index = index
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.index is not None:
            msg = f"Invalid clause #{self.index}: {repr(self.text)}"
        else:
            msg = f"Invalid clause: {repr(self.text)}"
        if self.reason:
            msg += f"\n  Reason: {self.reason}"
        return msg

    def at_index(self, index: int) -> "ParseError":
        """Return a copy of this error tagged with the clause position."""
        return ParseError(self.text, self.reason, index)


class TraceFormatError(Exception):
    """Raised when a rendered trace line cannot be parsed back into an event."""

    def __init__(self, line: str, reason: str = ""):
        self.line = line
        self.reason = reason
        msg = f"Malformed trace line: {repr(line)}"
        if reason:
            msg += f"\n  Reason: {reason}"
        super().__init__(msg)


class AssignmentConflictError(Exception):
    """Raised when an Assignment is asked to rebind a variable to another value."""

    def __init__(self, variable: str, current: bool, requested: bool):
        self.variable = variable
        self.current = current
        self.requested = requested
        super().__init__(
            f"Variable {variable} is already bound to {current}, cannot bind to {requested}"
        )
