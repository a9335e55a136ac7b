"""
Dictionary-based simplex pivoting engine.

A dictionary represents one basis of a linear program

    max  cᵀx
    s.t. Ax ≤ b, x ≥ 0

after introducing slack variables. Row i stores the equation

    x_basic[i] = b_i + Σ_k A[i,k] · x_nonBasic[k]

and the objective row stores z = c0 + Σ_k c_k · x_nonBasic[k]. Original
variables are numbered 1..n, slack variables n+1..n+m and the artificial
variable of the auxiliary problem is 0.
"""

import logging
from typing import Dict, List, Optional, Tuple

import numpy as np

from .containers import Matrix, Vector
from .data_models import (DEFAULT_MAX_ITERATIONS, DEFAULT_TOLERANCE, LinearProgram,
                          OptimizeOutcome, PivotRule, SolveStatus)
from .errors import (IterationLimitError, NoEnteringVariableError, NoLeavingVariableError,
                     PivotPreconditionError, ShapeMismatchError, UnknownVariableError)

logger = logging.getLogger(__name__)

ARTIFICIAL_VARIABLE = 0


def _as_indices(vector: Vector) -> List[int]:
    return [int(round(v)) for v in vector]


class Dictionary:
    """
    Mutable state of one basis of the tableau.

    Build instances through ``from_linear_program`` or ``from_components``;
    both take their own copy of every container they are given.

    Attributes:
        tolerance: Absolute tolerance of every sign test
    """

    def __init__(self, c0: float, c: Vector, A: Matrix, b: Vector,
                 non_basic: Vector, basic: Vector,
                 tolerance: float = DEFAULT_TOLERANCE) -> None:
        self._c0 = float(c0)
        self._c = c.copy()
        self._A = A.copy()
        self._b = b.copy()
        self._non_basic = non_basic.copy()
        self._basic = basic.copy()
        self._history: List[Tuple[int, int]] = []
        self.tolerance = tolerance

    # ---------- construction ----------

    @classmethod
    def from_linear_program(cls, lp: LinearProgram,
                            tolerance: float = DEFAULT_TOLERANCE) -> "Dictionary":
        """
        Initial slack-form dictionary of ``lp``.

        The slack x_{n+i} = b_i - Σ_j A[i,j] x_j is basic on row i, so the
        dictionary's coefficient matrix is -A and its objective value is 0.
        """
        n = lp.num_variables
        m = lp.num_constraints
        A = Matrix(m, n)
        A.load((-lp.A.as_array()).ravel())
        non_basic = Vector.from_array(range(1, n + 1))
        basic = Vector.from_array(range(n + 1, n + m + 1))
        return cls(0.0, lp.c, A, lp.b, non_basic, basic, tolerance=tolerance)

    @classmethod
    def from_components(cls, c0: float, c, A, b, non_basic, basic,
                        tolerance: float = DEFAULT_TOLERANCE) -> "Dictionary":
        """
        Dictionary from its six raw components.

        Args:
            c0: Objective value
            c: Reduced costs of the nonbasic variables
            A: Coefficients, one row per basic variable
            b: Values of the basic variables
            non_basic: Variable associated with each column
            basic: Variable associated with each row

        Returns:
            Dictionary owning copies of the components

        Raises:
            ShapeMismatchError: If the sizes disagree or the variable
                vectors overlap or contain duplicates
        """
        c = c if isinstance(c, Vector) else Vector.from_array(c)
        A = A if isinstance(A, Matrix) else Matrix.from_array(A)
        b = b if isinstance(b, Vector) else Vector.from_array(b)
        non_basic = non_basic if isinstance(non_basic, Vector) else Vector.from_array(non_basic)
        basic = basic if isinstance(basic, Vector) else Vector.from_array(basic)

        if A.rows() == 0 and A.columns() == 0 and b.size() == 0:
            # Matrix.from_array([]) has no width; a dictionary without rows keeps c's width
            A = Matrix(0, c.size())
        if basic.size() != A.rows() or b.size() != A.rows():
            raise ShapeMismatchError(
                f"basic ({basic.size()}), b ({b.size()}) and rows of A ({A.rows()}) must agree"
            )
        if non_basic.size() != A.columns() or c.size() != A.columns():
            raise ShapeMismatchError(
                f"nonBasic ({non_basic.size()}), c ({c.size()}) and columns of A ({A.columns()}) must agree"
            )
        variables = _as_indices(basic) + _as_indices(non_basic)
        if len(set(variables)) != len(variables):
            raise ShapeMismatchError("Basic and nonbasic variables must be distinct")
        return cls(c0, c, A, b, non_basic, basic, tolerance=tolerance)

    def copy(self) -> "Dictionary":
        """Independent duplicate, history included."""
        duplicate = Dictionary(self._c0, self._c, self._A, self._b, self._non_basic, self._basic,
                               tolerance=self.tolerance)
        duplicate._history = list(self._history)
        return duplicate

    # ---------- accessors ----------

    @property
    def c0(self) -> float:
        return self._c0

    @property
    def c(self) -> Vector:
        return self._c.copy()

    @property
    def A(self) -> Matrix:
        return self._A.copy()

    @property
    def b(self) -> Vector:
        return self._b.copy()

    @property
    def basic(self) -> Vector:
        return self._basic.copy()

    @property
    def non_basic(self) -> Vector:
        return self._non_basic.copy()

    @property
    def history(self) -> Tuple[Tuple[int, int], ...]:
        return tuple(self._history)

    @property
    def latest_entering(self) -> Optional[int]:
        return self._history[-1][0] if self._history else None

    @property
    def latest_leaving(self) -> Optional[int]:
        return self._history[-1][1] if self._history else None

    def objective_value(self) -> float:
        return self._c0

    def basic_index(self, variable: int) -> int:
        """Row of ``variable`` in the basic vector."""
        try:
            return _as_indices(self._basic).index(int(variable))
        except ValueError:
            raise UnknownVariableError(variable, "basic") from None

    def non_basic_index(self, variable: int) -> int:
        """Column of ``variable`` in the nonbasic vector."""
        try:
            return _as_indices(self._non_basic).index(int(variable))
        except ValueError:
            raise UnknownVariableError(variable, "nonbasic") from None

    def primal_solution(self) -> Dict[int, float]:
        """Value of every variable at the current basic solution."""
        values = {var: 0.0 for var in _as_indices(self._non_basic)}
        for var, value in zip(_as_indices(self._basic), self._b):
            values[var] = value
        return dict(sorted(values.items()))

    # ---------- predicates ----------

    def is_feasible(self) -> bool:
        """All basic variables are non-negative."""
        return bool(np.all(self._b.as_array() >= -self.tolerance))

    def is_final(self) -> bool:
        """No nonbasic variable improves the objective."""
        return bool(np.all(self._c.as_array() <= self.tolerance))

    def is_unbounded(self) -> bool:
        """Some improving column has no negative coefficient to bound it."""
        c = self._c.as_array()
        A = self._A.as_array()
        for j in range(c.shape[0]):
            if c[j] > self.tolerance and np.all(A[:, j] >= -self.tolerance):
                return True
        return False

    # ---------- variable selection ----------

    def identify_entering_variable(self, rule=PivotRule.BLAND) -> int:
        """
        Entering variable under ``rule``.

        Bland's rule picks the lowest-numbered variable among the columns
        with positive reduced cost; the largest coefficient rule picks the
        variable of the largest reduced cost (first one on ties).

        Raises:
            InvalidRuleError: If ``rule`` is not a PivotRule
            NoEnteringVariableError: If the dictionary is final
        """
        rule = PivotRule.coerce(rule)
        c = self._c.as_array()
        non_basic = _as_indices(self._non_basic)
        eligible = [k for k in range(c.shape[0]) if c[k] > self.tolerance]
        if not eligible:
            raise NoEnteringVariableError()

        if rule is PivotRule.BLAND:
            return min(non_basic[k] for k in eligible)
        return non_basic[max(eligible, key=lambda k: c[k])]

    def identify_leaving_variable(self, entering: int, rule=PivotRule.BLAND) -> int:
        """
        Leaving variable for ``entering`` by the minimum ratio test.

        Every row with a negative coefficient in the entering column bounds
        the increase of the entering variable by b_i / |A[i,j]|. A ratio of
        zero (degenerate row) is a valid candidate. Ties go to the
        lowest-numbered basic variable under both rules.

        Raises:
            InvalidRuleError: If ``rule`` is not a PivotRule
            UnknownVariableError: If ``entering`` is not nonbasic
            NoLeavingVariableError: If no row bounds the entering variable
        """
        PivotRule.coerce(rule)
        j = self.non_basic_index(entering)
        A = self._A.as_array()
        b = self._b.as_array()
        basic = _as_indices(self._basic)

        best_ratio = None
        leaving = None
        for i in range(b.shape[0]):
            a = A[i, j]
            if a >= -self.tolerance:
                continue
            ratio = max(b[i], 0.0) / -a
            if (best_ratio is None or ratio < best_ratio - self.tolerance
                    or (abs(ratio - best_ratio) <= self.tolerance and basic[i] < leaving)):
                best_ratio = ratio
                leaving = basic[i]

        if leaving is None:
            raise NoLeavingVariableError(entering)
        return leaving

    def identify_most_infeasible_variable(self) -> int:
        """
        Basic variable with the most negative value.

        Raises:
            PivotPreconditionError: If the dictionary is feasible
        """
        b = self._b.as_array()
        i = int(np.argmin(b)) if b.shape[0] else -1
        if i < 0 or b[i] >= -self.tolerance:
            raise PivotPreconditionError(
                "Could not identify most infeasible basic variable: dictionary is feasible."
            )
        return _as_indices(self._basic)[i]

    # ---------- pivoting ----------

    def perform_row_operations(self, entering: int, leaving: int, auxiliary: bool = False) -> None:
        """
        Pivot ``entering`` into and ``leaving`` out of the basis.

        A regular pivot needs a negative pivot coefficient and a non-negative
        value of the leaving variable. The forced first pivot of phase one
        (``auxiliary=True``) brings the artificial variable in against the
        most infeasible row: the coefficient there is +1 and the leaving
        value is negative, which makes the result feasible.

        Raises:
            UnknownVariableError: If the variables are not where expected
            PivotPreconditionError: If the pair violates the sign conditions
        """
        j = self.non_basic_index(entering)
        i = self.basic_index(leaving)
        p = self._A.get(i, j)
        b_leaving = self._b.get(i)

        if auxiliary:
            if p <= self.tolerance:
                raise PivotPreconditionError(
                    f"Auxiliary pivot coefficient of x{entering} in row of x{leaving} "
                    f"must be positive, got {p}"
                )
            if b_leaving > self.tolerance:
                raise PivotPreconditionError(
                    f"Auxiliary pivot requires x{leaving} to be infeasible, got b = {b_leaving}"
                )
        else:
            if p >= -self.tolerance:
                raise PivotPreconditionError(
                    f"Pivot coefficient of x{entering} in row of x{leaving} must be negative, got {p}"
                )
            if b_leaving < -self.tolerance:
                raise PivotPreconditionError(
                    f"Value of leaving variable x{leaving} is negative ({b_leaving}): "
                    f"dictionary may be infeasible"
                )

        self._pivot(i, j)

    def _pivot(self, i: int, j: int) -> None:
        """Row operations for pivot row ``i`` and column ``j`` without sign checks."""
        A = self._A.as_array()
        b = self._b.as_array()
        c = self._c.as_array()

        # snapshot of the pivot row and column before anything is overwritten
        row = A[i, :].copy()
        col = A[:, j].copy()
        p = row[j]
        b_leaving = b[i]
        c_entering = c[j]

        scaled = row / -p
        A += np.outer(col, scaled)
        A[:, j] = col / p
        A[i, :] = scaled
        A[i, j] = 1.0 / p

        b += col * (b_leaving / -p)
        b[i] = b_leaving / -p

        c += c_entering * scaled
        c[j] = c_entering / p

        self._c0 += c_entering * b_leaving / -p
        self._A.load(A.ravel())
        self._b.load(b)
        self._c.load(c)

        entering = int(round(self._non_basic.get(j)))
        leaving = int(round(self._basic.get(i)))
        self._non_basic.set(j, leaving)
        self._basic.set(i, entering)
        self._history.append((entering, leaving))
        logger.debug(f"Pivot {len(self._history)}: x{entering} enters, x{leaving} leaves, "
                     f"objective={self._c0:.6g}")

    # ---------- two-phase procedure ----------

    def get_auxiliary_dictionary(self) -> "Dictionary":
        """
        Auxiliary dictionary of phase one.

        The artificial variable x0 is prepended as nonbasic column 0 with a
        coefficient of 1 in every row, and the objective becomes max -x0.
        """
        m = self._A.rows()
        n = self._A.columns()
        A = self._A.copy()
        A.resize(m, n + 1)
        for i in range(m):
            A.set(i, 0, 1.0)
            for j in range(n):
                A.set(i, j + 1, self._A.get(i, j))

        non_basic = Vector.from_array([ARTIFICIAL_VARIABLE] + _as_indices(self._non_basic))
        c = Vector(n + 1)
        c.set(0, -1.0)
        return Dictionary(0.0, c, A, self._b, non_basic, self._basic, tolerance=self.tolerance)

    def initialize(self, rule=PivotRule.BLAND, max_iterations: Optional[int] = None) -> bool:
        """
        Phase one: find a feasible basis through the auxiliary problem.

        On success the dictionary is rewritten in terms of the feasible basis
        found, with the objective row recomputed by substituting every
        original nonbasic variable that became basic.

        Returns:
            True if the linear program is feasible, False otherwise (the
            dictionary is then left untouched and should not be optimized)

        Raises:
            PivotPreconditionError: If the dictionary already uses x0
            IterationLimitError: If the auxiliary problem hits the pivot budget
        """
        variables = _as_indices(self._basic) + _as_indices(self._non_basic)
        if ARTIFICIAL_VARIABLE in variables:
            raise PivotPreconditionError(
                f"x{ARTIFICIAL_VARIABLE} is reserved for the auxiliary problem"
            )

        aux = self.get_auxiliary_dictionary()
        leaving = aux.identify_most_infeasible_variable()
        aux.perform_row_operations(ARTIFICIAL_VARIABLE, leaving, auxiliary=True)
        if not aux.is_feasible():
            raise PivotPreconditionError("Auxiliary dictionary is not feasible after the initial pivot")

        outcome = aux.optimize(rule, max_iterations)
        if outcome.status is SolveStatus.ITERATION_LIMIT:
            raise IterationLimitError(DEFAULT_MAX_ITERATIONS if max_iterations is None else max_iterations)
        if outcome.status is not SolveStatus.OPTIMAL:
            # the auxiliary problem is feasible and bounded by 0
            raise PivotPreconditionError(
                f"Auxiliary problem ended {outcome.status.name} instead of OPTIMAL"
            )

        if aux.c0 < -self.tolerance:
            logger.info(f"Auxiliary optimum {aux.c0:.6g} < 0: linear program is infeasible")
            return False

        self._adopt_feasible_basis(aux)
        logger.info(f"Phase one found a feasible basis after {len(aux._history)} pivots")
        return True

    def _drive_out_artificial(self) -> None:
        """Pivot a degenerate basic x0 out against any column with a nonzero coefficient."""
        r = self.basic_index(ARTIFICIAL_VARIABLE)
        row = self._A.row(r).as_array()
        candidates = np.flatnonzero(np.abs(row) > self.tolerance)
        if candidates.shape[0] == 0:
            raise PivotPreconditionError(f"Cannot pivot x{ARTIFICIAL_VARIABLE} out of the basis")
        self._pivot(r, int(candidates[0]))

    def _adopt_feasible_basis(self, aux: "Dictionary") -> None:
        """Take over the basis of a zero-cost auxiliary dictionary and rebuild the objective."""
        if ARTIFICIAL_VARIABLE in _as_indices(aux._basic):
            aux._drive_out_artificial()

        h = aux.non_basic_index(ARTIFICIAL_VARIABLE)
        A = np.delete(aux._A.as_array(), h, axis=1)
        b = aux._b.as_array()
        non_basic = [v for v in _as_indices(aux._non_basic) if v != ARTIFICIAL_VARIABLE]
        basic = _as_indices(aux._basic)

        old_non_basic = _as_indices(self._non_basic)
        old_c = self._c.as_array()
        c = np.zeros(len(non_basic))
        c0 = self._c0
        for k, variable in enumerate(old_non_basic):
            coefficient = old_c[k]
            if variable in non_basic:
                c[non_basic.index(variable)] += coefficient
            else:
                r = basic.index(variable)
                c += coefficient * A[r, :]
                c0 += coefficient * b[r]

        self._A.load(A.ravel())
        self._b.load(b)
        self._c.load(c)
        self._c0 = float(c0)
        self._non_basic.load(non_basic)
        self._basic.load(basic)
        self._history.extend(aux._history)

    def optimize(self, rule=PivotRule.BLAND, max_iterations: Optional[int] = None) -> OptimizeOutcome:
        """
        Phase two: pivot until the dictionary is final.

        Args:
            rule: Entering/leaving variable selection rule
            max_iterations: Pivot budget (default: DEFAULT_MAX_ITERATIONS)

        Returns:
            OptimizeOutcome with status OPTIMAL and the objective value, or
            INFEASIBLE / UNBOUNDED / ITERATION_LIMIT without one

        A final dictionary reports OPTIMAL with its c0 without checking
        feasibility; run ``initialize`` first on an infeasible start.
        """
        rule = PivotRule.coerce(rule)
        limit = DEFAULT_MAX_ITERATIONS if max_iterations is None else max_iterations
        iterations = 0

        while not self.is_final():
            if not self.is_feasible():
                logger.info("Dictionary is infeasible, stopping phase two")
                return OptimizeOutcome(SolveStatus.INFEASIBLE, None, iterations)
            if self.is_unbounded():
                logger.info(f"Dictionary is unbounded after {iterations} pivots")
                return OptimizeOutcome(SolveStatus.UNBOUNDED, None, iterations)
            if iterations >= limit:
                logger.warning(f"Pivot budget of {limit} iterations exhausted")
                return OptimizeOutcome(SolveStatus.ITERATION_LIMIT, None, iterations)

            entering = self.identify_entering_variable(rule)
            leaving = self.identify_leaving_variable(entering, rule)
            self.perform_row_operations(entering, leaving)
            iterations += 1

        return OptimizeOutcome(SolveStatus.OPTIMAL, self._c0, iterations)

    # ---------- representation ----------

    def __str__(self) -> str:
        from .parser import format_dictionary
        return format_dictionary(self)

    def __repr__(self) -> str:
        return (f"Dictionary(m={self._basic.size()}, n={self._non_basic.size()}, "
                f"c0={self._c0:.6g}, feasible={self.is_feasible()}, final={self.is_final()})")
