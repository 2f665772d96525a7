import numpy as np
from typing import Dict, List, Tuple

from scipy.optimize import linprog

from .dictionary import Dictionary

_STATUS_MAP = {
    0: "optimal",
    2: "infeasible",
    3: "unbounded",
}


def to_matrix_form(dictionary: Dictionary) -> Tuple[np.ndarray, float, np.ndarray, np.ndarray, List[str]]:
    """
    Express the dictionary as: maximise c @ x + c0 subject to A_ub @ x <= b_ub, x >= 0,
    where x are the non-basic variables. Each row ``w = b + a @ x`` becomes ``-a @ x <= b``.
    Return c, c0, A_ub, b_ub and the column names.
    """

    names = list(dictionary.non_basics)
    index: Dict[str, int] = {name: idx for idx, name in enumerate(names)}

    c = np.zeros(len(names), dtype=float)
    for name, coef in dictionary.objective.items():
        c[index[name]] = float(coef)
    c0 = float(dictionary.objective.constant)

    rows: List[List[float]] = []
    rhs_values: List[float] = []
    for constraint in dictionary.constraints:
        row = [0.0] * len(names)
        for name, coef in constraint.rhs.items():
            row[index[name]] = -float(coef)
        rows.append(row)
        rhs_values.append(float(constraint.constant))

    if rows:
        A_ub = np.array(rows, dtype=float)
        b_ub = np.array(rhs_values, dtype=float)
    else:
        A_ub = np.zeros((0, len(names)), dtype=float)
        b_ub = np.zeros(0, dtype=float)
    return c, c0, A_ub, b_ub, names


def reference_optimum(dictionary: Dictionary) -> Tuple[str, float | None]:
    """Solve the same program with SciPy's HiGHS in floating point, for verification."""
    c, c0, A_ub, b_ub, _ = to_matrix_form(dictionary)
    res = linprog(
        -c,
        A_ub=A_ub if A_ub.size else None,
        b_ub=b_ub if b_ub.size else None,
        bounds=[(0, None)] * len(c),
        method="highs",
    )
    status = _STATUS_MAP.get(res.status, "error")
    if status != "optimal":
        return status, None
    return status, float(-res.fun + c0)
