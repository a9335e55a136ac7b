"""
Dense numeric containers used by the dictionary.

Vector and Matrix own a private numpy float64 buffer. Every accessor that
hands data out of the container returns a copy, so two containers never share
storage unless the caller goes through ``as_array`` and writes it back.
"""

from typing import Iterable, List, Sequence, Union

import numpy as np

from .errors import OutOfRangeError, ShapeMismatchError

Number = Union[int, float]


def _check_dimension(value, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ShapeMismatchError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise ShapeMismatchError(f"{name} must be non-negative, got {value}")
    return int(value)


class Vector:
    """
    Fixed-length vector of reals.

    Attributes:
        _data: Owned 1-D float64 buffer
    """

    def __init__(self, size: int) -> None:
        size = _check_dimension(size, "Vector size")
        self._data = np.zeros(size, dtype=np.float64)

    @classmethod
    def from_array(cls, values: Iterable[Number]) -> "Vector":
        """Build a vector holding a copy of ``values``."""
        data = np.array(list(values), dtype=np.float64)
        if data.ndim != 1:
            raise ShapeMismatchError(f"Vector data must be one-dimensional, got shape {data.shape}")
        vector = cls(data.shape[0])
        vector._data[:] = data
        return vector

    def size(self) -> int:
        return self._data.shape[0]

    def __len__(self) -> int:
        return self.size()

    def _check_index(self, i) -> int:
        if isinstance(i, bool) or not isinstance(i, (int, np.integer)):
            raise OutOfRangeError(f"Vector index must be an integer, got {i!r}")
        if i < 0 or i >= self.size():
            raise OutOfRangeError(f"Vector index {i} out of range [0, {self.size()})")
        return int(i)

    def get(self, i: int) -> float:
        return float(self._data[self._check_index(i)])

    def set(self, i: int, value: Number) -> None:
        self._data[self._check_index(i)] = value

    __getitem__ = get
    __setitem__ = set

    def __iter__(self):
        return (float(v) for v in self._data)

    def set_all(self, value: Number) -> None:
        self._data[:] = value

    def load(self, values: Sequence[Number]) -> None:
        """Overwrite all entries from a flat sequence of exactly ``size()`` numbers."""
        data = np.asarray(values, dtype=np.float64)
        if data.shape != self._data.shape:
            raise ShapeMismatchError(
                f"Cannot load {data.shape[0] if data.ndim else 0} values into a Vector of size {self.size()}"
            )
        self._data[:] = data

    def copy(self) -> "Vector":
        duplicate = Vector(self.size())
        duplicate._data[:] = self._data
        return duplicate

    def as_list(self) -> List[float]:
        return self._data.tolist()

    def as_array(self) -> np.ndarray:
        return self._data.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return self._data.shape == other._data.shape and bool(np.array_equal(self._data, other._data))

    __hash__ = None

    def __repr__(self) -> str:
        return f"Vector({self.as_list()})"


class Matrix:
    """
    Dense row-major matrix of reals.

    Attributes:
        _data: Owned 2-D float64 buffer
    """

    def __init__(self, rows: int, columns: int) -> None:
        rows = _check_dimension(rows, "Matrix rows")
        columns = _check_dimension(columns, "Matrix columns")
        self._data = np.zeros((rows, columns), dtype=np.float64)

    @classmethod
    def from_array(cls, rows: Iterable[Sequence[Number]]) -> "Matrix":
        """
        Build a matrix from a nested sequence of rows.

        Args:
            rows: Row sequences, all of the same length

        Returns:
            Matrix holding a copy of the data

        Raises:
            ShapeMismatchError: If the rows are ragged
        """
        rows = [list(r) for r in rows]
        width = len(rows[0]) if rows else 0
        if any(len(r) != width for r in rows):
            raise ShapeMismatchError("Matrix rows must all have the same length")
        matrix = cls(len(rows), width)
        if rows and width:
            matrix._data[:, :] = np.array(rows, dtype=np.float64)
        return matrix

    def rows(self) -> int:
        return self._data.shape[0]

    def columns(self) -> int:
        return self._data.shape[1]

    @property
    def shape(self):
        return self._data.shape

    def _check_index(self, i, j):
        return self._check_row(i), self._check_column(j)

    def get(self, i: int, j: int) -> float:
        return float(self._data[self._check_index(i, j)])

    def set(self, i: int, j: int, value: Number) -> None:
        self._data[self._check_index(i, j)] = value

    def __getitem__(self, index) -> float:
        i, j = index
        return self.get(i, j)

    def __setitem__(self, index, value: Number) -> None:
        i, j = index
        self.set(i, j, value)

    def row(self, i: int) -> Vector:
        return Vector.from_array(self._data[self._check_row(i), :])

    def column(self, j: int) -> Vector:
        return Vector.from_array(self._data[:, self._check_column(j)])

    def _check_row(self, i) -> int:
        if isinstance(i, bool) or not isinstance(i, (int, np.integer)) or i < 0 or i >= self.rows():
            raise OutOfRangeError(f"Matrix row index {i!r} out of range [0, {self.rows()})")
        return int(i)

    def _check_column(self, j) -> int:
        if isinstance(j, bool) or not isinstance(j, (int, np.integer)) or j < 0 or j >= self.columns():
            raise OutOfRangeError(f"Matrix column index {j!r} out of range [0, {self.columns()})")
        return int(j)

    def set_all(self, value: Number) -> None:
        self._data[:, :] = value

    def load(self, values: Sequence[Number]) -> None:
        """Overwrite all entries from a flat, row-major sequence."""
        data = np.asarray(values, dtype=np.float64).ravel()
        if data.shape[0] != self._data.size:
            raise ShapeMismatchError(
                f"Cannot load {data.shape[0]} values into a {self.rows()}x{self.columns()} Matrix"
            )
        self._data[:, :] = data.reshape(self._data.shape)

    def resize(self, rows: int, columns: int) -> None:
        """Change the shape in place, keeping the overlapping top-left block."""
        rows = _check_dimension(rows, "Matrix rows")
        columns = _check_dimension(columns, "Matrix columns")
        data = np.zeros((rows, columns), dtype=np.float64)
        r = min(rows, self.rows())
        c = min(columns, self.columns())
        data[:r, :c] = self._data[:r, :c]
        self._data = data

    def copy(self) -> "Matrix":
        duplicate = Matrix(self.rows(), self.columns())
        duplicate._data[:, :] = self._data
        return duplicate

    def as_list(self) -> List[List[float]]:
        return self._data.tolist()

    def as_array(self) -> np.ndarray:
        return self._data.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self._data.shape == other._data.shape and bool(np.array_equal(self._data, other._data))

    __hash__ = None

    def __repr__(self) -> str:
        return f"Matrix({self.rows()}x{self.columns()}, {self.as_list()})"
