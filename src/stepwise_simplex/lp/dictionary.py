from __future__ import annotations

import logging
from fractions import Fraction
from typing import TYPE_CHECKING, Dict, Iterator, List, NamedTuple, Optional, Sequence, Tuple, Union

from ..exceptions import ConstructionError, InvalidPivotError
from ..schemas import Status
from .expression import Constraint, LinearExpression
from .policies import CyclingAvoidancePolicy, PivotPolicy

if TYPE_CHECKING:
    from .simplex import Step

logger = logging.getLogger(__name__)


class PivotCandidate(NamedTuple):
    variable: str
    constraint: Constraint
    bound: Fraction

    @property
    def leaving(self) -> str:
        return self.constraint.basic


class Dictionary:
    """
    A linear program in dictionary form: maximise ``objective`` where every
    constraint ``basic = b + sum(a * x)`` isolates one basic variable and all
    right-hand sides (and the objective) only use non-basic variables.

    ``variables`` is the number of non-basic variables. By default the
    objective and constraints are copied so that pivoting never touches the
    caller's expressions; pass ``deep_copy=False`` to work on them directly.
    """

    def __init__(
        self,
        variables: int,
        objective: LinearExpression,
        constraints: Sequence[Constraint],
        deep_copy: bool = True,
        policy: Optional[PivotPolicy] = None,
    ) -> None:
        if variables <= 0:
            raise ConstructionError(f"Invalid number of variables: {variables}")

        non_basics: Dict[str, None] = dict.fromkeys(objective.variables())
        basics: Dict[str, None] = {}
        for constraint in constraints:
            if not constraint.is_dictionary_row() or len(constraint.rhs) > variables:
                raise ConstructionError(
                    f"Invalid constraint equation `{constraint}` (acceptable example: w1 = 4 - x1 - x2)"
                )
            basic = constraint.basic
            if basic in basics:
                raise ConstructionError(f"Basic variable '{basic}' isolated by more than one constraint.")
            basics[basic] = None
            non_basics.update(dict.fromkeys(constraint.rhs.variables()))

        overlap = [name for name in basics if name in non_basics]
        if overlap:
            raise ConstructionError(
                f"Basic variables must not appear on right-hand sides or the objective: {', '.join(overlap)}"
            )
        if len(non_basics) != variables:
            raise ConstructionError(
                f"The number of non-basic variables ({len(non_basics)}) does not match "
                f"the designated number ({variables})."
            )

        self.variables = variables
        self._basics = basics
        self._non_basics = non_basics
        if deep_copy:
            self.objective = objective.copy()
            self.constraints: List[Constraint] = [constraint.copy() for constraint in constraints]
        else:
            self.objective = objective
            self.constraints = list(constraints)
        self.helper: Optional[str] = None
        self.pivots = 0
        self.policy: PivotPolicy = policy if policy is not None else CyclingAvoidancePolicy()

    @property
    def basics(self) -> Tuple[str, ...]:
        return tuple(self._basics)

    @property
    def non_basics(self) -> Tuple[str, ...]:
        return tuple(self._non_basics)

    def copy(self) -> "Dictionary":
        clone = Dictionary.__new__(Dictionary)
        clone.variables = self.variables
        clone._basics = dict(self._basics)
        clone._non_basics = dict(self._non_basics)
        clone.objective = self.objective.copy()
        clone.constraints = [constraint.copy() for constraint in self.constraints]
        clone.helper = self.helper
        clone.pivots = self.pivots
        clone.policy = self.policy
        return clone

    def is_feasible(self) -> bool:
        return all(constraint.constant >= 0 for constraint in self.constraints)

    def is_optimal(self) -> bool:
        """Only meaningful once the dictionary is feasible."""
        return all(coef <= 0 for _, coef in self.objective.items())

    def is_unbounded(self) -> bool:
        for name, coef in self.objective.items():
            if coef > 0 and all(constraint.rhs.coefficient(name) >= 0 for constraint in self.constraints):
                return True
        return False

    def entering_candidates(self) -> Union[Status, List[PivotCandidate]]:
        """
        Ratio test over every profitable non-basic variable.

        Returns ``Status.OPTIMAL`` when nothing is profitable,
        ``Status.UNBOUNDED`` as soon as a profitable variable is not limited by
        any constraint, otherwise one candidate per profitable variable in
        non-basic order. Expects a feasible dictionary.
        """
        candidates: List[PivotCandidate] = []
        for name in self._non_basics:
            if self.objective.coefficient(name) <= 0:
                continue
            tightest: Optional[PivotCandidate] = None
            for constraint in self.constraints:
                coef = constraint.rhs.coefficient(name)
                if coef < 0:
                    bound = constraint.constant / -coef
                    if tightest is None or bound < tightest.bound:
                        tightest = PivotCandidate(name, constraint, bound)
            if tightest is None:
                return Status.UNBOUNDED
            candidates.append(tightest)
        if not candidates:
            return Status.OPTIMAL
        return candidates

    def pivot(self, entering: str, constraint: Constraint) -> None:
        """``entering`` becomes basic in ``constraint``; its basic variable leaves."""
        if entering not in self._non_basics:
            raise InvalidPivotError(f"'{entering}' is not a non-basic variable.")
        position = self._position(constraint)
        leaving = constraint.basic
        if constraint.rhs.coefficient(entering) == 0:
            raise InvalidPivotError(f"'{entering}' does not appear in `{constraint}`.")

        solved = constraint.solve_for(entering)
        replacement = {entering: solved}
        self.constraints = [
            Constraint(entering, solved) if idx == position
            else Constraint(other.lhs, other.rhs.substitute(replacement))
            for idx, other in enumerate(self.constraints)
        ]
        self.objective = self.objective.substitute(replacement)

        del self._non_basics[entering]
        self._non_basics[leaving] = None
        del self._basics[leaving]
        self._basics[entering] = None
        self.pivots += 1
        logger.debug("Pivot: %s enters, %s leaves; objective now %s", entering, leaving, self.objective)

    def introduce(self, name: str) -> None:
        """Add a fresh non-basic variable that does not appear anywhere yet."""
        if name in self._non_basics or name in self._basics:
            raise ConstructionError(f"Variable '{name}' already exists.")
        self._non_basics[name] = None
        self.variables += 1

    def eliminate(self, name: str) -> None:
        """Fix a non-basic variable at zero and drop it from the dictionary."""
        if name not in self._non_basics:
            raise InvalidPivotError(f"'{name}' is not a non-basic variable.")
        fixed = {name: 0}
        self.constraints = [
            Constraint(constraint.lhs, constraint.rhs.substitute(fixed)) for constraint in self.constraints
        ]
        self.objective = self.objective.substitute(fixed)
        del self._non_basics[name]
        self.variables -= 1

    def take_basis(self, other: "Dictionary") -> None:
        """Adopt the constraints and basic/non-basic split of ``other``; the objective is kept."""
        self.variables = other.variables
        self.constraints = [constraint.copy() for constraint in other.constraints]
        self._basics = dict(other._basics)
        self._non_basics = dict(other._non_basics)
        self.pivots = other.pivots

    def _position(self, constraint: Constraint) -> int:
        for idx, candidate in enumerate(self.constraints):
            if candidate is constraint:
                return idx
        raise InvalidPivotError(f"`{constraint}` is not a constraint of this dictionary.")

    def current_value(self) -> Fraction:
        return self.objective.constant

    def basic_solution(self) -> Dict[str, Fraction]:
        values = {name: Fraction(0) for name in self._non_basics}
        for constraint in self.constraints:
            values[constraint.basic] = constraint.constant
        return values

    def get_dual(self) -> "Dictionary":
        raise NotImplementedError("Dual dictionaries are not implemented.")

    def next(self) -> Status:
        from .simplex import advance  # local import to avoid cycle

        return advance(self)

    def solve(self) -> Iterator["Step"]:
        from .simplex import solve  # local import to avoid cycle

        return solve(self)

    def __str__(self) -> str:
        lines = [f"Objective: {self.objective}"]
        lines.extend(str(constraint) for constraint in self.constraints)
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"<Dictionary variables={self.variables} constraints={len(self.constraints)}>"
