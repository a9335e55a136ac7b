"""
Exception hierarchy for the dictionary simplex solver.

All of these signal a violated precondition (a caller bug or malformed
input), not a data condition the solve loop is expected to recover from.
"""

from typing import Optional


class SimplexError(Exception):
    """Base class for every error raised by this package."""


class ShapeMismatchError(SimplexError, ValueError):
    """Container or linear program dimensions do not agree."""


class OutOfRangeError(SimplexError, IndexError):
    """Index outside the bounds of a Vector or Matrix."""


class InvalidRuleError(SimplexError, ValueError):
    """Unrecognised pivot rule."""

    def __init__(self, rule) -> None:
        self.rule = rule
        super().__init__(f"Invalid pivot rule: {rule!r}")


class NoEnteringVariableError(SimplexError):
    """No nonbasic variable has a positive reduced cost."""

    def __init__(self) -> None:
        super().__init__("Could not identify entering variable: dictionary is final.")


class NoLeavingVariableError(SimplexError):
    """No row bounds the increase of the entering variable."""

    def __init__(self, entering: int) -> None:
        self.entering = entering
        super().__init__(
            f"Could not identify leaving variable for x{entering}: dictionary is unbounded."
        )


class PivotPreconditionError(SimplexError):
    """The (entering, leaving) pair does not admit a valid pivot."""


class UnknownVariableError(SimplexError, KeyError):
    """Variable index is not part of the basic / nonbasic vector."""

    def __init__(self, variable: int, where: str) -> None:
        self.variable = variable
        self.where = where
        super().__init__(f"x{variable} is not a {where} variable.")

    def __str__(self) -> str:
        # KeyError would otherwise quote the message
        return self.args[0]


class IterationLimitError(SimplexError):
    """The pivot loop exceeded its iteration budget."""

    def __init__(self, max_iterations: int) -> None:
        self.max_iterations = max_iterations
        super().__init__(f"Pivot budget of {max_iterations} iterations exceeded.")


class DictionaryFormatError(SimplexError, ValueError):
    """Malformed dictionary text."""

    def __init__(self, message: str, line: Optional[int] = None) -> None:
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
