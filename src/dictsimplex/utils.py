"""
Utility functions: solution checks and reference solves with scipy.
"""

import warnings
from typing import Dict, Optional, Tuple

import numpy as np
from scipy.optimize import linprog

from .data_models import LinearProgram, SolveStatus
from .dictionary import Dictionary

# scipy.optimize.linprog status codes
_LINPROG_STATUS = {
    0: SolveStatus.OPTIMAL,
    1: SolveStatus.ITERATION_LIMIT,
    2: SolveStatus.INFEASIBLE,
    3: SolveStatus.UNBOUNDED,
}


def _linprog_max(c: np.ndarray, A_ub: np.ndarray, b_ub: np.ndarray) -> Tuple[SolveStatus, Optional[float]]:
    """Maximise cᵀx s.t. A_ub x ≤ b_ub, x ≥ 0 with HiGHS."""
    if c.shape[0] == 0:
        return SolveStatus.OPTIMAL, 0.0
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        res = linprog(-c,
                      A_ub=A_ub if A_ub.shape[0] else None,
                      b_ub=b_ub if A_ub.shape[0] else None,
                      bounds=(0, None), method="highs")
    status = _LINPROG_STATUS.get(int(res.status))
    if status is None:
        raise RuntimeError(f"linprog failed: {res.message}")
    if status is not SolveStatus.OPTIMAL:
        return status, None
    return status, float(-res.fun)


def reference_solve(lp: LinearProgram) -> Tuple[SolveStatus, Optional[float]]:
    """
    Solve ``lp`` with scipy.optimize.linprog (HiGHS).

    Returns:
        Tuple of (status, objective); objective is None unless OPTIMAL
    """
    return _linprog_max(lp.c.as_array(), lp.A.as_array(), lp.b.as_array())


def reference_solve_dictionary(dictionary: Dictionary) -> Tuple[SolveStatus, Optional[float]]:
    """
    Solve the program a dictionary encodes with scipy.

    Basic variables are x_B = b + A x_N ≥ 0, which is -A x_N ≤ b over the
    nonbasic variables, and the objective is c0 + cᵀx_N.
    """
    status, objective = _linprog_max(dictionary.c.as_array(),
                                     -dictionary.A.as_array(),
                                     dictionary.b.as_array())
    if objective is not None:
        objective += dictionary.c0
    return status, objective


def validate_basis(dictionary: Dictionary) -> bool:
    """
    Check that basic and nonbasic variables partition 1..n+m.

    The artificial variable 0 is accepted in place of one index while the
    auxiliary problem is being solved.
    """
    basic = [int(v) for v in dictionary.basic]
    non_basic = [int(v) for v in dictionary.non_basic]
    variables = basic + non_basic
    if len(set(variables)) != len(variables):
        return False
    expected = set(range(1, len(variables) + 1))
    if 0 in variables:
        expected = set(range(0, len(variables)))
    return set(variables) == expected


def compute_objective(lp: LinearProgram, values: Dict[int, float]) -> float:
    """cᵀx for the original variables 1..n in ``values``."""
    x = np.array([values.get(j + 1, 0.0) for j in range(lp.num_variables)])
    return float(lp.c.as_array() @ x)


def validate_solution(lp: LinearProgram, values: Dict[int, float], tolerance: float = 1e-6) -> bool:
    """
    Check Ax ≤ b and x ≥ 0 for the original variables in ``values``.

    Args:
        lp: The linear program
        values: Variable index -> value, as returned by Dictionary.primal_solution
        tolerance: Numerical tolerance

    Returns:
        True if the point is feasible
    """
    x = np.array([values.get(j + 1, 0.0) for j in range(lp.num_variables)])
    if np.any(x < -tolerance):
        return False
    if lp.num_constraints == 0:
        return True
    residual = lp.A.as_array() @ x - lp.b.as_array()
    return bool(np.all(residual <= tolerance))
