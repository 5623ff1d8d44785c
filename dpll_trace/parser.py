"""
Parsers for clause text and rendered trace lines.

Clause grammar:
    "(" LITERAL (SEP LITERAL)* ")"
    LITERAL = [¬!]? IDENTIFIER
    SEP     = "∨" | "|"
"""

import logging
import re
from typing import Iterable, List

from .errors import ParseError, TraceFormatError
from .formula import Clause, Formula, Literal
from .format import INDENT
from .trace import AllSatisfied, Branch, BranchKind, Conflict, TraceEvent, UnitPropagation

logger = logging.getLogger(__name__)

PARENS_PATTERN = re.compile(r"[()]")
SEPARATOR_PATTERN = re.compile(r"\s*[∨|]\s*")
NEGATION_PATTERN = re.compile(r"[¬!]")
NEGATION_MARKERS = ("¬", "!")

UNIT_PATTERN = re.compile(r"Unit propagation: (?P<var>.+) = (?P<value>true|false)")
CONFLICT_PATTERN = re.compile(r"Conflict detected in clause (?P<index>\d+)")
SATISFIED_PATTERN = re.compile(r"All clauses satisfied")
BRANCH_PATTERN = re.compile(r"(?P<label>Branching|Backtrack): try (?P<var>.+) = (?P<value>true|false)")


def parse_literal(token: str) -> Literal:
    """
    Parse one literal token such as 'A', '¬B' or '!C'.

    Raises:
        ParseError: If no identifier remains once negation markers are stripped.
    """
    token = token.strip()
    negated = token.startswith(NEGATION_MARKERS)
    variable = NEGATION_PATTERN.sub("", token).strip()
    if not variable:
        raise ParseError(token, "literal has an empty variable name")
    return Literal(variable, negated)


def parse_clause(text: str) -> Clause:
    """
    Parse a clause string like '(A ∨ ¬B ∨ C)' or '(A | !B | C)'.

    Duplicate literals and tautologies are kept as written.

    Raises:
        ParseError: If the clause is empty or a literal has no variable name.
    """
    cleaned = PARENS_PATTERN.sub("", text).strip()
    if not cleaned:
        raise ParseError(text, "clause has no literals")

    literals = []
    for token in SEPARATOR_PATTERN.split(cleaned):
        try:
            literals.append(parse_literal(token))
        except ParseError as e:
            raise ParseError(text, e.reason) from e
    return Clause(tuple(literals))


def parse_formula(clause_texts: Iterable[str]) -> Formula:
    """
    Parse an ordered list of clause strings into a Formula.

    Raises:
        ParseError: For the first malformed clause, tagged with its index.
    """
    clauses = []
    for i, text in enumerate(clause_texts):
        try:
            clauses.append(parse_clause(text))
        except ParseError as e:
            raise e.at_index(i) from e
    logger.debug("Parsed %d clauses", len(clauses))
    return Formula(tuple(clauses))


def read_clause_lines(lines: Iterable[str]) -> List[str]:
    """
    Collect clause strings from a clause file, one clause per line.

    Blank lines and lines starting with '#' are skipped.
    """
    clauses = []
    for line in lines:
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        clauses.append(line)
    return clauses


def _parse_value(text: str) -> bool:
    return text == "true"


def parse_trace_line(line: str) -> TraceEvent:
    """
    Parse one rendered trace line back into an event.

    The depth is recovered from the indentation.

    Raises:
        TraceFormatError: If the line does not match any event format.
    """
    line = line.rstrip("\n")
    body = line.lstrip(" ")
    n_spaces = len(line) - len(body)
    if n_spaces % len(INDENT):
        raise TraceFormatError(line, f"indentation of {n_spaces} spaces is not a whole depth")
    depth = n_spaces // len(INDENT)

    match = UNIT_PATTERN.fullmatch(body)
    if match:
        return UnitPropagation(match.group("var"), _parse_value(match.group("value")), depth)

    match = BRANCH_PATTERN.fullmatch(body)
    if match:
        kind = BranchKind.TRY if match.group("label") == "Branching" else BranchKind.BACKTRACK
        return Branch(match.group("var"), _parse_value(match.group("value")), kind, depth)

    match = CONFLICT_PATTERN.fullmatch(body)
    if match:
        return Conflict(int(match.group("index")), depth)

    if SATISFIED_PATTERN.fullmatch(body):
        return AllSatisfied(depth)

    raise TraceFormatError(line, "unrecognized event")


def parse_trace(lines: Iterable[str]) -> List[TraceEvent]:
    """Parse rendered trace lines, skipping blank ones."""
    return [parse_trace_line(line) for line in lines if line.strip()]
