"""
Dictionary-based two-phase simplex solver.

This package solves linear programs in standard inequality form

    max cᵀx  s.t.  Ax ≤ b, x ≥ 0

with the dictionary (slack form) simplex method:
- Dictionary pivoting engine with Bland's and largest-coefficient rules
- Phase one through the auxiliary problem
- Reader/writer for the textual dictionary format
- Batch driver reporting the optimum, INFEASIBLE or UNBOUNDED
"""

from .containers import Vector, Matrix
from .data_models import (LinearProgram, PivotRule, SolveStatus, SolverConfig, Solution,
                          OptimizeOutcome)
from .dictionary import Dictionary, ARTIFICIAL_VARIABLE
from .errors import (SimplexError, ShapeMismatchError, OutOfRangeError, InvalidRuleError,
                     NoEnteringVariableError, NoLeavingVariableError, PivotPreconditionError,
                     UnknownVariableError, IterationLimitError, DictionaryFormatError)
from .parser import parse_dictionary, format_dictionary, read_dictionary, write_dictionary
from .simplex_solver import DictionarySimplexSolver, PivotReport, solve_dictionary, pivot_once
from .utils import (reference_solve, reference_solve_dictionary, validate_basis,
                    compute_objective, validate_solution)

__all__ = [
    "Vector",
    "Matrix",
    "LinearProgram",
    "PivotRule",
    "SolveStatus",
    "SolverConfig",
    "Solution",
    "OptimizeOutcome",
    "Dictionary",
    "ARTIFICIAL_VARIABLE",
    "SimplexError",
    "ShapeMismatchError",
    "OutOfRangeError",
    "InvalidRuleError",
    "NoEnteringVariableError",
    "NoLeavingVariableError",
    "PivotPreconditionError",
    "UnknownVariableError",
    "IterationLimitError",
    "DictionaryFormatError",
    "parse_dictionary",
    "format_dictionary",
    "read_dictionary",
    "write_dictionary",
    "DictionarySimplexSolver",
    "PivotReport",
    "solve_dictionary",
    "pivot_once",
    "reference_solve",
    "reference_solve_dictionary",
    "validate_basis",
    "compute_objective",
    "validate_solution",
]
