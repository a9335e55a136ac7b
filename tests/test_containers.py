"""
Tests for the Vector and Matrix containers.
"""

import numpy as np
import pytest

from dictsimplex import Matrix, OutOfRangeError, ShapeMismatchError, Vector


def test_vector_is_zero_initialised():
    v = Vector(3)
    assert v.size() == 3
    assert len(v) == 3
    assert v.as_list() == [0.0, 0.0, 0.0]


@pytest.mark.parametrize("index", [-1, 3, 10])
def test_vector_get_out_of_range(index):
    v = Vector.from_array([1, 2, 3])
    with pytest.raises(OutOfRangeError):
        v.get(index)
    with pytest.raises(IndexError):
        v.set(index, 1.0)


def test_vector_rejects_non_integer_index():
    v = Vector(2)
    with pytest.raises(OutOfRangeError):
        v.get(1.5)


@pytest.mark.parametrize("size", [-1, 2.5, "3"])
def test_vector_rejects_bad_size(size):
    with pytest.raises(ShapeMismatchError):
        Vector(size)


def test_vector_copy_does_not_alias():
    v = Vector.from_array([1, 2, 3])
    w = v.copy()
    w.set(0, 42)
    assert v.get(0) == 1.0
    assert w.get(0) == 42.0
    assert v != w


def test_vector_as_array_is_a_copy():
    v = Vector.from_array([1, 2])
    data = v.as_array()
    data[0] = 99
    assert v[0] == 1.0


def test_vector_load_and_set_all():
    v = Vector(3)
    v.load([4, 5, 6])
    assert v.as_list() == [4.0, 5.0, 6.0]
    v.set_all(-1)
    assert list(v) == [-1.0, -1.0, -1.0]
    with pytest.raises(ShapeMismatchError):
        v.load([1, 2])


def test_matrix_from_array_and_access():
    A = Matrix.from_array([[1, 2, 3], [4, 5, 6]])
    assert A.rows() == 2
    assert A.columns() == 3
    assert A.get(1, 2) == 6.0
    assert A[0, 1] == 2.0
    A[0, 1] = 7
    assert A.as_list() == [[1.0, 7.0, 3.0], [4.0, 5.0, 6.0]]


@pytest.mark.parametrize("i, j", [(2, 0), (0, 3), (-1, 0), (0, -1)])
def test_matrix_out_of_range(i, j):
    A = Matrix(2, 3)
    with pytest.raises(OutOfRangeError):
        A.get(i, j)
    with pytest.raises(OutOfRangeError):
        A.set(i, j, 1.0)


def test_matrix_rejects_ragged_rows():
    with pytest.raises(ShapeMismatchError):
        Matrix.from_array([[1, 2], [3]])


def test_matrix_copy_does_not_alias():
    A = Matrix.from_array([[1, 2], [3, 4]])
    B = A.copy()
    B.set(0, 0, -5)
    assert A.get(0, 0) == 1.0
    assert A == Matrix.from_array([[1, 2], [3, 4]])


def test_matrix_row_and_column_are_copies():
    A = Matrix.from_array([[1, 2], [3, 4]])
    row = A.row(1)
    col = A.column(0)
    assert row.as_list() == [3.0, 4.0]
    assert col.as_list() == [1.0, 3.0]
    row.set(0, 100)
    assert A.get(1, 0) == 3.0
    with pytest.raises(OutOfRangeError):
        A.row(2)
    with pytest.raises(OutOfRangeError):
        A.column(5)


def test_matrix_resize_keeps_top_left_block():
    A = Matrix.from_array([[1, 2], [3, 4]])
    A.resize(3, 3)
    assert A.as_list() == [[1.0, 2.0, 0.0], [3.0, 4.0, 0.0], [0.0, 0.0, 0.0]]
    A.resize(1, 2)
    assert A.as_list() == [[1.0, 2.0]]


def test_matrix_load_row_major():
    A = Matrix(2, 2)
    A.load([1, 2, 3, 4])
    np.testing.assert_array_equal(A.as_array(), np.array([[1.0, 2.0], [3.0, 4.0]]))
    with pytest.raises(ShapeMismatchError):
        A.load([1, 2, 3])
