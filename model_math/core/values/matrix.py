"""
Dense matrix containers backed by numpy.

The four matrix flavors share one implementation and differ only in their
numpy dtype and value type tag. Rows and columns are 1-indexed at the API
surface; single-index access and ``build`` coefficients are column major.
Iteration visits coefficients row by row.
"""

from typing import Any, Callable, ClassVar, Iterator, Optional

import numpy as np

from ..base.exceptions import check_index
from .value_type import ValueType


class Matrix:
    """Base class for the dense matrix types.

    Parameters
    ----------
    number_rows : int
        Number of rows
    number_columns : int
        Number of columns

    Notes
    -----
    A freshly constructed matrix is zero filled. Use :meth:`build` or
    :meth:`from_array` to create a pre-initialized matrix.
    """

    dtype: ClassVar[type] = np.float64
    matrix_value_type: ClassVar[ValueType] = ValueType.MATRIX_REAL

    def __init__(self, number_rows: int = 0, number_columns: int = 0):
        if number_rows < 0 or number_columns < 0:
            raise ValueError(f"Invalid matrix shape ({number_rows}, {number_columns})")
        self._data = np.zeros((int(number_rows), int(number_columns)), dtype=self.dtype)

    @classmethod
    def build(cls, number_rows: int, number_columns: int, *coefficients: Any) -> "Matrix":
        """Create a pre-initialized matrix.

        Parameters
        ----------
        number_rows : int
            Number of rows
        number_columns : int
            Number of columns
        *coefficients
            Coefficients in column major order; at least
            ``number_rows * number_columns`` values are required.

        Returns
        -------
        Matrix
            The new matrix
        """
        count = number_rows * number_columns
        if len(coefficients) < count:
            raise ValueError(f"build requires {count} coefficients, got {len(coefficients)}")

        values = [cls._coerce(c) for c in coefficients[:count]]
        result = cls(number_rows, number_columns)
        result._data[:, :] = np.array(values, dtype=cls.dtype).reshape(
            (number_columns, number_rows)
        ).T
        return result

    @classmethod
    def from_array(cls, array: Any) -> "Matrix":
        """Create a matrix from a nested sequence or numpy array.

        One dimensional input becomes a single row.
        """
        data = np.array(array, dtype=cls.dtype)
        if data.ndim == 1:
            data = data.reshape((1, data.shape[0]))
        if data.ndim != 2:
            raise ValueError(f"Matrix data must be two dimensional, got {data.ndim} dimensions")

        result = cls()
        result._data = data
        return result

    @classmethod
    def generate(cls, number_rows: int, number_columns: int,
                 function: Callable[[], Any]) -> "Matrix":
        """Create a matrix whose cells are filled by successive calls to ``function``.

        Cells are filled in column major order so that a seeded generator
        produces the same matrix as successive single-index updates would.
        """
        result = cls(number_rows, number_columns)
        for column in range(result._data.shape[1]):
            for row in range(result._data.shape[0]):
                result._data[row, column] = cls._coerce(function())
        return result

    @classmethod
    def _coerce(cls, value: Any) -> Any:
        return cls.dtype(value)

    def value_type(self) -> ValueType:
        return self.matrix_value_type

    def number_rows(self) -> int:
        return int(self._data.shape[0])

    def number_columns(self) -> int:
        return int(self._data.shape[1])

    def number_coefficients(self) -> int:
        return int(self._data.size)

    def is_empty(self) -> bool:
        return self._data.size == 0

    def _position(self, row: int, column: Optional[int]):
        if column is None:
            check_index(row, 1, self.number_coefficients(), "index")
            column, row = divmod(int(row) - 1, self.number_rows())
            return row, column

        check_index(row, 1, self.number_rows(), "row")
        check_index(column, 1, self.number_columns(), "column")
        return int(row) - 1, int(column) - 1

    def at(self, row: int, column: Optional[int] = None) -> Any:
        """Return a coefficient.

        Parameters
        ----------
        row : int
            1-based row, or the 1-based column major index if ``column`` is omitted
        column : int, optional
            1-based column

        Returns
        -------
        bool, int, float or complex
            The coefficient as a Python scalar
        """
        return self._data[self._position(row, column)].item()

    def update(self, row: int, column: Any, value: Any = None) -> None:
        """Set a coefficient.

        Call as ``update(row, column, value)`` or ``update(index, value)``.
        """
        if value is None:
            position = self._position(row, None)
            value = column
        else:
            position = self._position(row, column)
        self._data[position] = self._coerce(value)

    def to_numpy(self) -> np.ndarray:
        """Return a copy of the coefficients as a numpy array."""
        return self._data.copy()

    def coefficients(self) -> Iterator[Any]:
        """Iterate over the coefficients row by row as Python scalars."""
        for value in self._data.flat:
            yield value.item()

    def __iter__(self) -> Iterator[Any]:
        return self.coefficients()

    def __len__(self) -> int:
        return self.number_coefficients()

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Matrix) or type(self) is not type(other):
            return NotImplemented
        return self._data.shape == other._data.shape and bool(np.array_equal(self._data, other._data))

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._data.shape, self._data.tobytes()))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._data.tolist()!r})"


class MatrixBoolean(Matrix):
    """Matrix of boolean coefficients."""

    dtype = np.bool_
    matrix_value_type = ValueType.MATRIX_BOOLEAN


class MatrixInteger(Matrix):
    """Matrix of signed 64-bit integer coefficients."""

    dtype = np.int64
    matrix_value_type = ValueType.MATRIX_INTEGER


class MatrixReal(Matrix):
    """Matrix of binary64 coefficients."""

    dtype = np.float64
    matrix_value_type = ValueType.MATRIX_REAL


class MatrixComplex(Matrix):
    """Matrix of complex coefficients."""

    dtype = np.complex128
    matrix_value_type = ValueType.MATRIX_COMPLEX


MATRIX_CLASSES = {
    ValueType.MATRIX_BOOLEAN: MatrixBoolean,
    ValueType.MATRIX_INTEGER: MatrixInteger,
    ValueType.MATRIX_REAL: MatrixReal,
    ValueType.MATRIX_COMPLEX: MatrixComplex,
}
