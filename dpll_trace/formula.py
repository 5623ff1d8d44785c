"""
CNF formula model and random formula generation.

A Formula is an ordered conjunction of Clauses, a Clause an ordered
disjunction of Literals. All three are immutable once built.
"""

import random
from dataclasses import dataclass, field
from typing import Iterator, List, Mapping, Optional, Tuple

from .errors import ParseError


# Empirically determined clause counts for balanced (phase transition) 3-SAT
BALANCED_CLAUSE_COUNTS = {
    3: 19, 4: 24, 5: 28, 6: 33, 7: 37, 8: 41, 9: 45, 10: 50,
    11: 54, 12: 58, 13: 63, 14: 67, 15: 71, 16: 76, 17: 79,
    18: 83, 19: 87, 20: 92
}


@dataclass(frozen=True)
class Literal:
    """A variable reference with polarity."""
    variable: str
    negated: bool = False

    @property
    def satisfying_value(self) -> bool:
        """The value of `variable` that makes this literal true."""
        return not self.negated

    def negate(self) -> "Literal":
        return Literal(self.variable, not self.negated)

    def is_complement_of(self, other: "Literal") -> bool:
        return self.variable == other.variable and self.negated != other.negated

    def evaluate(self, assignment: Mapping[str, bool]) -> Optional[bool]:
        """True/False under the assignment, None if the variable is unassigned."""
        if self.variable not in assignment:
            return None
        return assignment[self.variable] == self.satisfying_value


@dataclass(frozen=True)
class Clause:
    """
    A disjunction of literals.

    Literal order is kept as written. Duplicate and complementary literals
    are not simplified away.
    """
    literals: Tuple[Literal, ...]

    def __post_init__(self):
        if not self.literals:
            raise ParseError("", "clause has no literals")
        object.__setattr__(self, "literals", tuple(self.literals))

    def __iter__(self) -> Iterator[Literal]:
        return iter(self.literals)

    def __len__(self) -> int:
        return len(self.literals)

    def variables(self) -> List[str]:
        """Variable names in first-seen order."""
        return list(dict.fromkeys(lit.variable for lit in self.literals))

    def is_satisfied(self, assignment: Mapping[str, bool]) -> bool:
        return any(lit.evaluate(assignment) for lit in self.literals)

    def unassigned(self, assignment: Mapping[str, bool]) -> List[Literal]:
        return [lit for lit in self.literals if lit.variable not in assignment]


@dataclass(frozen=True)
class Formula:
    """
    An ordered conjunction of clauses.

    The branching order of the solver is `variables()`: every variable in
    first-seen order across clauses, then literals within each clause.
    """
    clauses: Tuple[Clause, ...] = ()
    _variables: Tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "clauses", tuple(self.clauses))
        seen = {}
        for clause in self.clauses:
            for lit in clause:
                seen.setdefault(lit.variable, None)
        object.__setattr__(self, "_variables", tuple(seen))

    def __iter__(self) -> Iterator[Clause]:
        return iter(self.clauses)

    def __len__(self) -> int:
        return len(self.clauses)

    def __getitem__(self, index: int) -> Clause:
        return self.clauses[index]

    def variables(self) -> Tuple[str, ...]:
        return self._variables

    def with_clause(self, clause: Clause) -> "Formula":
        """Return a new formula with `clause` appended."""
        return Formula(self.clauses + (clause,))

    def without_clause(self, index: int) -> "Formula":
        """Return a new formula with the clause at `index` removed."""
        if not -len(self.clauses) <= index < len(self.clauses):
            raise IndexError(f"clause index {index} out of range for {len(self.clauses)} clauses")
        clauses = list(self.clauses)
        del clauses[index]
        return Formula(tuple(clauses))

    def evaluate(self, assignment: Mapping[str, bool]) -> bool:
        """True iff every clause has a literal that is true under `assignment`."""
        return all(clause.is_satisfied(assignment) for clause in self.clauses)


def generate_random_formula(
    n_vars: int,
    clause_length: int = 3,
    variance: float = 0.1,
    n_clauses: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> Formula:
    """
    Generate a random k-SAT formula near the phase transition.

    Args:
        n_vars: Number of variables, named x1..xn.
        clause_length: Number of literals per clause (default 3 for 3-SAT).
            Capped at n_vars.
        variance: Relative standard deviation in clause count (e.g., 0.1 = +/-10%).
        n_clauses: Fixed number of clauses. If None, uses phase transition estimate.
        rng: Random source; the module-level generator is used if None.

    Returns:
        A Formula whose clauses each mention `clause_length` distinct variables.
    """
    rng = rng or random
    if n_clauses is None:
        base = BALANCED_CLAUSE_COUNTS.get(n_vars, int(n_vars * 4.26))
        delta = int(base * variance)
        n_clauses = rng.randint(max(base - delta, 1), base + delta)

    names = [f"x{i}" for i in range(1, n_vars + 1)]
    k = min(clause_length, n_vars)

    clauses = []
    for _ in range(n_clauses):
        clause_vars = rng.sample(names, k)
        clause = Clause(tuple(Literal(var, rng.random() < 0.5) for var in clause_vars))
        clauses.append(clause)

    return Formula(tuple(clauses))
