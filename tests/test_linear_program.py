"""
Tests for LinearProgram, SolverConfig and Solution.
"""

import dataclasses

import pytest

from dictsimplex import (InvalidRuleError, LinearProgram, Matrix, PivotRule, ShapeMismatchError,
                         Solution, SolverConfig, SolveStatus, Vector)


def test_construct_from_containers():
    c = Vector.from_array([1, 1])
    A = Matrix.from_array([[1, 0], [0, 1]])
    b = Vector.from_array([5, 10])
    lp = LinearProgram(c, A, b)

    assert lp.c.size() == c.size()
    assert lp.A.rows() == A.rows()
    assert lp.A.columns() == A.columns()
    assert lp.b.size() == b.size()
    assert lp.num_variables == 2
    assert lp.num_constraints == 2


def test_construct_from_sequences_and_copies_input():
    c = Vector.from_array([1, 2])
    lp = LinearProgram(c, [[1, 0]], [3])
    c.set(0, 100)
    assert lp.c.as_list() == [1.0, 2.0]
    assert isinstance(lp.A, Matrix)


@pytest.mark.parametrize("c, A, b", [
    ([1, 1], [[1, 0], [0, 1]], [5]),          # b too short
    ([1, 1, 1], [[1, 0], [0, 1]], [5, 10]),   # c too long
])
def test_shape_mismatch(c, A, b):
    with pytest.raises(ShapeMismatchError):
        LinearProgram(c, A, b)


def test_linear_program_is_immutable():
    lp = LinearProgram([1], [[1]], [1])
    with pytest.raises(dataclasses.FrozenInstanceError):
        lp.c = Vector(1)


def test_to_dictionary_is_slack_form():
    lp = LinearProgram([1, 1], [[1, 0], [0, 1]], [5, 10])
    dictionary = lp.to_dictionary()

    assert dictionary.basic.as_list() == [3.0, 4.0]
    assert dictionary.non_basic.as_list() == [1.0, 2.0]
    assert dictionary.c0 == 0
    assert dictionary.c.as_list() == [1.0, 1.0]
    assert dictionary.A.as_list() == [[-1.0, 0.0], [0.0, -1.0]]
    assert dictionary.b.as_list() == [5.0, 10.0]


def test_solver_config_coerces_rule():
    assert SolverConfig(rule="largest").rule is PivotRule.LARGEST_COEFFICIENT
    with pytest.raises(InvalidRuleError):
        SolverConfig(rule="steepest")
    with pytest.raises(ValueError):
        SolverConfig(max_iterations=-1)


@pytest.mark.parametrize("status, objective, expected", [
    (SolveStatus.OPTIMAL, 15.0, "15"),
    (SolveStatus.OPTIMAL, -0.0, "0"),
    (SolveStatus.OPTIMAL, 1.5, "1.5"),
    (SolveStatus.OPTIMAL, 1234567.5, "1234567.5"),
    (SolveStatus.OPTIMAL, 1 / 3, "0.3333333333333333"),
    (SolveStatus.OPTIMAL, 1e7, "10000000"),
    (SolveStatus.INFEASIBLE, None, "INFEASIBLE"),
    (SolveStatus.UNBOUNDED, None, "UNBOUNDED"),
    (SolveStatus.ITERATION_LIMIT, None, "ITERATION_LIMIT"),
])
def test_solution_format_result(status, objective, expected):
    solution = Solution(status=status, objective=objective, iterations=0, time=0.0)
    assert solution.format_result() == expected
    assert solution.converged is (status is not SolveStatus.ITERATION_LIMIT)


def test_program_without_constraints():
    lp = LinearProgram([1, 2], [], [])
    assert lp.num_constraints == 0
    assert lp.A.shape() == (0, 2)

    dictionary = lp.to_dictionary()
    assert dictionary.non_basic.as_list() == [1.0, 2.0]
    assert dictionary.basic.size() == 0
