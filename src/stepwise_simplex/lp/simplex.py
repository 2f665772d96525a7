from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Tuple

from ..exceptions import SimplexLogicError
from ..schemas import SolveOptions, SolveTrace, Status, StepRecord
from .dictionary import Dictionary
from .expression import Constraint, LinearExpression, format_fraction

logger = logging.getLogger(__name__)

Step = Tuple[Dictionary, Status]

HELPER_NAME = "x0"


def advance(dictionary: Dictionary) -> Status:
    """
    Perform at most one pivot and report where the dictionary stands.

    Unboundedness is checked before feasibility, so an unbounded dictionary is
    reported as such even when its current basic solution is infeasible.
    """

    if dictionary.is_unbounded():
        return Status.UNBOUNDED
    if not dictionary.is_feasible():
        return Status.HELP_NEEDED

    candidates = dictionary.entering_candidates()
    if candidates is Status.OPTIMAL:
        return Status.OPTIMAL
    if candidates is Status.UNBOUNDED:
        raise SimplexLogicError(
            "Unbounded dictionary detected, but the dictionary is detected as bounded previously"
        )

    choice = dictionary.policy.pick(candidates, dictionary)
    logger.debug(
        "Entering %s, leaving %s, bound %s (policy %s)",
        choice.variable,
        choice.leaving,
        choice.bound,
        dictionary.policy.name,
    )
    dictionary.pivot(choice.variable, choice.constraint)
    if not dictionary.is_feasible():
        raise SimplexLogicError(f"Pivot on {choice.variable} lost feasibility:\n{dictionary}")
    if dictionary.is_optimal():
        return Status.OPTIMAL
    if dictionary.is_unbounded():
        return Status.UNBOUNDED
    return Status.OPTIMIZABLE


def solve(dictionary: Dictionary) -> Iterator[Step]:
    """
    Yield ``(snapshot, status)`` after every transition until a terminal
    status. Infeasible starts go through the auxiliary dictionary first and
    every one of its steps is yielded as well.
    """

    status = advance(dictionary)
    while status is Status.OPTIMIZABLE:
        yield dictionary.copy(), status
        status = advance(dictionary)
    if status.is_terminal:
        dictionary.policy.reset()
        logger.info("Dictionary reached %s with value %s", status.value, dictionary.current_value())
    yield dictionary.copy(), status
    if status is not Status.HELP_NEEDED:
        return

    auxiliary: Optional[Dictionary] = None
    last_status: Optional[Status] = None
    for auxiliary, last_status in _resolve_infeasibility(dictionary):
        yield auxiliary, last_status
    if last_status is not Status.OPTIMAL or auxiliary is None:
        raise SimplexLogicError(f"Helper LP should not end up with result {last_status}")

    dictionary.pivots = auxiliary.pivots
    if auxiliary.current_value() != 0:
        dictionary.policy.reset()
        logger.info("Auxiliary optimum is %s; the linear program is infeasible", auxiliary.current_value())
        yield dictionary.copy(), Status.INFEASIBLE
        return

    _restore_origin(dictionary, auxiliary)
    dictionary.policy.reset()
    logger.info("Recovered a feasible dictionary for the original objective")
    yield dictionary.copy(), Status.ORIGIN_FEASIBLE
    yield from solve(dictionary)


def build_auxiliary(dictionary: Dictionary) -> Tuple[Dictionary, Constraint]:
    """
    Phase-one dictionary: maximise ``-x0`` with ``x0`` added to every
    right-hand side. Also returns the constraint with the smallest constant,
    the one ``x0`` has to enter against to become feasible.
    """

    auxiliary = dictionary.copy()
    helper = _fresh_name(dictionary)
    auxiliary.introduce(helper)
    auxiliary.helper = helper
    auxiliary.objective = LinearExpression({helper: -1})
    auxiliary.constraints = [
        Constraint(constraint.lhs, constraint.rhs.add(LinearExpression.variable(helper)))
        for constraint in auxiliary.constraints
    ]

    most_violated = auxiliary.constraints[0]
    for constraint in auxiliary.constraints[1:]:
        if constraint.constant < most_violated.constant:
            most_violated = constraint
    return auxiliary, most_violated


def _resolve_infeasibility(dictionary: Dictionary) -> Iterator[Step]:
    auxiliary, most_violated = build_auxiliary(dictionary)
    dictionary.policy.reset()
    logger.info("Dictionary is infeasible; created helper variable %s", auxiliary.helper)
    yield auxiliary.copy(), Status.HELPER_CREATED

    auxiliary.pivot(auxiliary.helper, most_violated)
    if not auxiliary.is_feasible():
        raise SimplexLogicError(f"Helper dictionary is still infeasible:\n{auxiliary}")
    yield auxiliary.copy(), Status.HELPER_FEASIBLE
    yield from solve(auxiliary)


def _restore_origin(dictionary: Dictionary, auxiliary: Dictionary) -> None:
    """Turn the optimal phase-one dictionary back into one for the original objective."""
    # The yielded snapshot belongs to the consumer.
    auxiliary = auxiliary.copy()
    helper = auxiliary.helper
    if helper in auxiliary.basics:
        _drive_out(auxiliary, helper)
    auxiliary.eliminate(helper)

    substitution = {constraint.basic: constraint.rhs for constraint in auxiliary.constraints}
    objective = dictionary.objective.substitute(substitution)
    dictionary.take_basis(auxiliary)
    dictionary.objective = objective


def _drive_out(auxiliary: Dictionary, helper: str) -> None:
    # A basic helper at value 0: any non-zero coefficient in its row gives a degenerate pivot.
    for constraint in auxiliary.constraints:
        if constraint.basic != helper:
            continue
        for name, coef in constraint.rhs.items():
            if coef != 0:
                auxiliary.pivot(name, constraint)
                return
    raise SimplexLogicError(f"Helper variable {helper} cannot leave the basis:\n{auxiliary}")


def _fresh_name(dictionary: Dictionary) -> str:
    taken = set(dictionary.basics) | set(dictionary.non_basics)
    name = HELPER_NAME
    suffix = 0
    while name in taken:
        suffix += 1
        name = f"{HELPER_NAME}_{suffix}"
    return name


def trace(dictionary: Dictionary, opts: Optional[SolveOptions] = None) -> SolveTrace:
    """Run ``solve`` to completion (or ``max_steps`` pairs) and collect every step."""
    opts = opts or SolveOptions()
    steps: List[StepRecord] = []
    final: Optional[Step] = None

    for index, (snapshot, status) in enumerate(dictionary.solve()):
        if index >= opts.max_steps:
            return SolveTrace(
                status="step_limit",
                objective_value=None,
                x=None,
                steps=steps,
                pivots=final[0].pivots if final else 0,
                message=f"Stopped after {opts.max_steps} steps.",
            )
        steps.append(
            StepRecord(
                index=index,
                status=status,
                objective_value=format_fraction(snapshot.current_value()),
                basics=list(snapshot.basics),
                non_basics=list(snapshot.non_basics),
                text=str(snapshot),
            )
        )
        final = (snapshot, status)

    snapshot, status = final  # solve() always yields at least once
    if status is Status.OPTIMAL:
        values = snapshot.basic_solution()
        return SolveTrace(
            status="optimal",
            objective_value=format_fraction(snapshot.current_value()),
            x={name: format_fraction(values[name]) for name in sorted(values)},
            steps=steps,
            pivots=snapshot.pivots,
        )
    return SolveTrace(
        status=status.value,
        objective_value=None,
        x=None,
        steps=steps,
        pivots=snapshot.pivots,
        message="Unbounded." if status is Status.UNBOUNDED else "Infeasible.",
    )
