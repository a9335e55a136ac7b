"""
Two-phase simplex orchestration on top of the dictionary engine.

Phase one runs only when the starting dictionary is infeasible; phase two
then optimizes the feasible dictionary. Results are reported as Solution
objects with one of the statuses OPTIMAL, INFEASIBLE, UNBOUNDED or
ITERATION_LIMIT.
"""

import logging
import time
from pathlib import Path
from typing import NamedTuple, Optional, Union

from .data_models import LinearProgram, Solution, SolverConfig, SolveStatus
from .dictionary import Dictionary
from .errors import IterationLimitError, NoLeavingVariableError
from .parser import read_dictionary
from .utils import reference_solve, reference_solve_dictionary

logger = logging.getLogger(__name__)


class PivotReport(NamedTuple):
    """Outcome of a single pivot step."""
    status: str  # "PIVOTED", "FINAL" or "UNBOUNDED"
    entering: Optional[int] = None
    leaving: Optional[int] = None
    objective: Optional[float] = None


def solve_dictionary(dictionary: Dictionary, config: Optional[SolverConfig] = None) -> Solution:
    """
    Solve ``dictionary`` in place with the two-phase method.

    Args:
        dictionary: Starting dictionary; mutated by the pivots
        config: Solver settings (default: SolverConfig())

    Returns:
        Solution with status, objective value and pivot statistics
    """
    config = config or SolverConfig()
    dictionary.tolerance = config.tolerance
    start_time = time.time()
    pivots_before = len(dictionary.history)
    phase_one = not dictionary.is_feasible()
    objective = None

    try:
        if phase_one and not dictionary.initialize(config.rule, config.max_iterations):
            status = SolveStatus.INFEASIBLE
        else:
            outcome = dictionary.optimize(config.rule, config.max_iterations)
            status = outcome.status
            objective = outcome.objective
    except IterationLimitError as e:
        logger.warning(f"Phase one did not converge: {e}")
        status = SolveStatus.ITERATION_LIMIT

    elapsed = time.time() - start_time
    history = list(dictionary.history[pivots_before:])
    values = dictionary.primal_solution() if status is SolveStatus.OPTIMAL else {}

    solution = Solution(
        status=status,
        objective=objective,
        iterations=len(history),
        time=elapsed,
        phase_one=phase_one,
        history=history,
        values=values,
    )
    logger.info(f"Solved: {solution}")
    return solution


def pivot_once(dictionary: Dictionary, config: Optional[SolverConfig] = None) -> PivotReport:
    """
    Perform exactly one pivot on a feasible dictionary.

    Returns:
        PivotReport with the entering and leaving variables and the new
        objective, or status FINAL / UNBOUNDED when no pivot is possible
    """
    config = config or SolverConfig()
    dictionary.tolerance = config.tolerance
    if dictionary.is_final():
        return PivotReport("FINAL")
    entering = dictionary.identify_entering_variable(config.rule)
    try:
        leaving = dictionary.identify_leaving_variable(entering, config.rule)
    except NoLeavingVariableError:
        return PivotReport("UNBOUNDED", entering=entering)
    dictionary.perform_row_operations(entering, leaving)
    return PivotReport("PIVOTED", entering, leaving, dictionary.c0)


class DictionarySimplexSolver:
    """
    Dictionary simplex solver with optional scipy cross-check.
    """

    def __init__(self, config: Optional[SolverConfig] = None) -> None:
        self.config = config or SolverConfig()

    def solve(self, dictionary: Dictionary) -> Solution:
        """Solve ``dictionary`` in place."""
        reference = None
        if self.config.verify:
            reference = reference_solve_dictionary(dictionary.copy())
        solution = solve_dictionary(dictionary, self.config)
        if reference is not None:
            self._attach_reference(solution, *reference)
        return solution

    def solve_linear_program(self, lp: LinearProgram) -> Solution:
        """Solve ``lp`` starting from its slack-form dictionary."""
        dictionary = Dictionary.from_linear_program(lp, tolerance=self.config.tolerance)
        solution = solve_dictionary(dictionary, self.config)
        if self.config.verify:
            self._attach_reference(solution, *reference_solve(lp))
        return solution

    def solve_file(self, filepath: Union[str, Path]) -> Solution:
        """Read a dictionary file and solve it."""
        dictionary = read_dictionary(filepath, tolerance=self.config.tolerance)
        return self.solve(dictionary)

    def _attach_reference(self, solution: Solution, status: SolveStatus,
                          objective: Optional[float]) -> None:
        solution.reference_objective = objective
        if status is not solution.status:
            logger.warning(f"Status mismatch: simplex={solution.status.value}, "
                           f"linprog={status.value}")
        if objective is not None and solution.objective is not None:
            solution.objective_gap = abs(objective - solution.objective)
            if solution.objective_gap > 1e-6 * max(1.0, abs(objective)):
                logger.warning(f"Objective mismatch: simplex={solution.objective:.6g}, "
                               f"linprog={objective:.6g}")
