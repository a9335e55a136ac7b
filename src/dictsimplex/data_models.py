"""
Data models for the dictionary simplex solver.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, NamedTuple, Optional, Tuple

from .containers import Matrix, Vector
from .errors import InvalidRuleError, ShapeMismatchError

DEFAULT_MAX_ITERATIONS = 1000
DEFAULT_TOLERANCE = 1e-9


def format_number(value: float) -> str:
    """Shortest text that reads back as ``value``; integral values without a fraction."""
    value = float(value) + 0.0
    if value.is_integer():
        return str(int(value))
    return repr(value)


class PivotRule(Enum):
    """Entering/leaving variable selection rule."""
    BLAND = "bland"
    LARGEST_COEFFICIENT = "largest"

    @classmethod
    def coerce(cls, rule) -> "PivotRule":
        if isinstance(rule, cls):
            return rule
        try:
            return cls(rule)
        except ValueError:
            raise InvalidRuleError(rule) from None


class SolveStatus(Enum):
    OPTIMAL = "optimal"
    INFEASIBLE = "infeasible"
    UNBOUNDED = "unbounded"
    ITERATION_LIMIT = "iteration_limit"


class OptimizeOutcome(NamedTuple):
    """Result of one run of the phase-two loop."""
    status: SolveStatus
    objective: Optional[float]
    iterations: int


@dataclass(frozen=True)
class LinearProgram:
    """
    Linear program in standard inequality form.

    max  cᵀx
    s.t. Ax ≤ b
         x ≥ 0
    """
    c: Vector  # Objective coefficients
    A: Matrix  # Constraint matrix
    b: Vector  # Right-hand side

    def __post_init__(self):
        """Convert plain sequences to containers and validate dimensions."""
        c = self.c if isinstance(self.c, Vector) else Vector.from_array(self.c)
        A = self.A if isinstance(self.A, Matrix) else Matrix.from_array(self.A)
        b = self.b if isinstance(self.b, Vector) else Vector.from_array(self.b)
        if A.rows() == 0 and A.columns() == 0 and b.size() == 0:
            # no constraints: A keeps the width of c
            A = Matrix(0, c.size())
        if b.size() != A.rows():
            raise ShapeMismatchError(
                f"Size of b ({b.size()}) must equal number of rows of A ({A.rows()})"
            )
        if A.columns() != c.size():
            raise ShapeMismatchError(
                f"Number of columns of A ({A.columns()}) must equal size of c ({c.size()})"
            )
        object.__setattr__(self, 'c', c.copy())
        object.__setattr__(self, 'A', A.copy())
        object.__setattr__(self, 'b', b.copy())

    @property
    def num_variables(self) -> int:
        return self.c.size()

    @property
    def num_constraints(self) -> int:
        return self.b.size()

    def to_dictionary(self):
        """Initial all-slack-basic dictionary of this program."""
        from .dictionary import Dictionary
        return Dictionary.from_linear_program(self)


@dataclass
class SolverConfig:
    """
    Solver settings shared by the engine, the orchestration layer and the CLI.
    """
    rule: PivotRule = PivotRule.BLAND
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    tolerance: float = DEFAULT_TOLERANCE
    verify: bool = False

    def __post_init__(self):
        self.rule = PivotRule.coerce(self.rule)
        if self.max_iterations < 0:
            raise ValueError(f"max_iterations must be non-negative, got {self.max_iterations}")
        if self.tolerance < 0:
            raise ValueError(f"tolerance must be non-negative, got {self.tolerance}")


@dataclass
class Solution:
    """
    Final solution of one problem instance.
    """
    status: SolveStatus
    objective: Optional[float]
    iterations: int
    time: float
    phase_one: bool = False
    history: List[Tuple[int, int]] = field(default_factory=list)
    values: dict = field(default_factory=dict)

    # Only filled in when the solve was cross-checked against scipy
    reference_objective: Optional[float] = None
    objective_gap: Optional[float] = None

    @property
    def converged(self) -> bool:
        return self.status is not SolveStatus.ITERATION_LIMIT

    def format_result(self) -> str:
        """Driver-facing result string: objective value or status keyword."""
        if self.status is SolveStatus.OPTIMAL:
            return format_number(self.objective)
        return self.status.name

    def __repr__(self) -> str:
        obj = f"{self.objective:.6f}" if self.objective is not None else "n/a"
        return (f"Solution(status={self.status.value}, obj={obj}, "
                f"iters={self.iterations}, time={self.time:.4f}s)")
