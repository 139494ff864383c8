"""
Matrix Module

This module implements the dense 2-D matrix used as the building block of
the multi-layer perceptron: weights, biases and layer activations are all
Matrix instances.

Arithmetic operations (add, subtract, scale, element-wise and matrix products,
transpose) always return a NEW matrix and leave their operands untouched.
'transform' and 'randomize' are the only operations modifying a matrix in
place; both return the matrix itself so that calls can be chained.

Classes:
    Matrix: A rows x cols array of real numbers
"""

import numpy as np
from typing import Callable, Sequence, Union

from evomlp.errors import (
    DimensionMismatchError,
    InvalidDimensionError,
    InvalidShapeError,
    ShapeMismatchError,
)

# Signature of the per-element callback accepted by Matrix.transform:
#     fn(value, row, col) -> new value
ElementFunction = Callable[[float, int, int], float]

class Matrix:
    """
    A dense matrix of real numbers with a shape fixed at construction.

    Elements are stored in a numpy float64 array. No broadcasting is ever
    performed: binary element-wise operations require operands of identical
    shape, and the matrix product requires 'self.cols == other.rows'.

    Public Properties:
        rows:  Number of rows
        cols:  Number of columns
        shape: The tuple (rows, cols)

    Public Methods:
        randomize(rng):             Fill with values drawn uniformly from [-1, 1] (in place)
        add(other):                 Element-wise sum with a matrix or a scalar
        subtract(other):            Element-wise difference with a matrix or a scalar
        scale(factor):              Multiply every element by a scalar
        elementwise_multiply(other): Element-wise (Hadamard) product
        multiply(other):            Matrix product
        transpose():                Flip rows and columns
        transform(fn):              Apply fn(value, row, col) to every element (in place)
        column(index):              Copy of one column as a list
        to_flat_list():             Row-major flattening
        tolist():                   Copy of the elements as nested lists
        clone():                    Deep copy

    Class Methods:
        from_values(values): Build a matrix from a rectangular nested sequence
        from_column(values): Build a (len(values), 1) column matrix
    """

    def __init__(self, rows: int, cols: int):
        """
        Create a zero-filled matrix.

        Parameters:
            rows: number of rows (at least 1)
            cols: number of columns (at least 1)

        Raises:
            InvalidDimensionError: if either dimension is smaller than 1
        """
        if rows < 1 or cols < 1:
            raise InvalidDimensionError(f"Matrix dimensions must be at least 1x1, got {rows}x{cols}")

        self._rows: int        = rows
        self._cols: int        = cols
        self._data: np.ndarray = np.zeros((rows, cols), dtype=np.float64)

    @classmethod
    def from_values(cls, values: Sequence[Sequence[float]]) -> 'Matrix':
        """
        Build a matrix holding a copy of the given rows.

        Parameters:
            values: a non-empty sequence of equally long, non-empty rows

        Returns:
            A new Matrix; later changes to 'values' do not affect it

        Raises:
            InvalidDimensionError: if there are no rows or the rows are empty
            InvalidShapeError:     if the rows are not all the same length
        """
        rows = len(values)
        cols = len(values[0]) if rows else 0
        for r, row in enumerate(values):
            if len(row) != cols:
                raise InvalidShapeError(f"Row {r} has {len(row)} elements, expected {cols}")

        matrix = cls(rows, cols)
        matrix._data[:, :] = np.asarray(values, dtype=np.float64)
        return matrix

    @classmethod
    def from_column(cls, values: Sequence[float]) -> 'Matrix':
        """
        Build a column matrix from a flat sequence.

        This is how input and target vectors enter the network.

        Parameters:
            values: the column entries, top to bottom

        Returns:
            A new (len(values), 1) Matrix
        """
        matrix = cls(len(values), 1)
        for r, value in enumerate(values):
            matrix._data[r, 0] = value
        return matrix

    @property
    def rows(self) -> int:
        """Number of rows."""
        return self._rows

    @property
    def cols(self) -> int:
        """Number of columns."""
        return self._cols

    @property
    def shape(self) -> tuple[int, int]:
        """The tuple (rows, cols)."""
        return (self._rows, self._cols)

    def __getitem__(self, index: tuple[int, int]) -> float:
        row, col = index
        return float(self._data[row, col])

    def __setitem__(self, index: tuple[int, int], value: float) -> None:
        row, col = index
        self._data[row, col] = value

    def randomize(self, rng: np.random.Generator) -> 'Matrix':
        """
        Replace every element with a value drawn uniformly from [-1, 1].

        NOTE: This modifies the current matrix!

        Parameters:
            rng: the random number generator to draw from

        Returns:
            self
        """
        return self.transform(lambda value, row, col: rng.random() * 2 - 1)

    def add(self, other: Union['Matrix', float]) -> 'Matrix':
        """
        Element-wise sum.

        Parameters:
            other: a matrix of the same shape, or a scalar added to every element

        Returns:
            A new Matrix
        """
        if isinstance(other, Matrix):
            self._check_same_shape(other, "add")
            return self._wrap(self._data + other._data)
        return self._wrap(self._data + other)

    def subtract(self, other: Union['Matrix', float]) -> 'Matrix':
        """
        Element-wise difference (self - other).

        Parameters:
            other: a matrix of the same shape, or a scalar subtracted from every element

        Returns:
            A new Matrix
        """
        if isinstance(other, Matrix):
            self._check_same_shape(other, "subtract")
            return self._wrap(self._data - other._data)
        return self._wrap(self._data - other)

    def scale(self, factor: float) -> 'Matrix':
        """Return a new Matrix with every element multiplied by 'factor'."""
        return self._wrap(self._data * factor)

    def elementwise_multiply(self, other: 'Matrix') -> 'Matrix':
        """
        Multiply matching elements of two matrices of the same shape.

        Returns:
            A new Matrix
        """
        self._check_same_shape(other, "multiply element-wise")
        return self._wrap(self._data * other._data)

    def multiply(self, other: 'Matrix') -> 'Matrix':
        """
        Matrix product (self . other).

        Element (r, c) of the result is sum_k self[r, k] * other[k, c].

        Parameters:
            other: a matrix with as many rows as this matrix has columns

        Returns:
            A new (self.rows, other.cols) Matrix

        Raises:
            DimensionMismatchError: if self.cols != other.rows
        """
        if self._cols != other._rows:
            raise DimensionMismatchError(
                f"Cannot multiply {self._rows}x{self._cols} by {other._rows}x{other._cols}: "
                f"columns of the left operand must match rows of the right operand")
        return self._wrap(self._data @ other._data)

    def transpose(self) -> 'Matrix':
        """
        Return a new (cols, rows) Matrix with result[c, r] = self[r, c].

            [1, 2]
            [3, 4]   =>   [1, 3, 5]
            [5, 6]        [2, 4, 6]
        """
        return self._wrap(self._data.T)

    def transform(self, fn: ElementFunction) -> 'Matrix':
        """
        Apply 'fn' to every element, row by row.

        NOTE: This modifies the current matrix!

        Parameters:
            fn: called as fn(value, row, col); its result replaces the element

        Returns:
            self
        """
        for r in range(self._rows):
            for c in range(self._cols):
                self._data[r, c] = fn(float(self._data[r, c]), r, c)
        return self

    def column(self, index: int) -> list[float]:
        """Return a copy of column 'index' as a list, top to bottom."""
        return [float(v) for v in self._data[:, index]]

    def to_flat_list(self) -> list[float]:
        """
        Flatten the matrix in row-major order.
        [[1, 2, 3], [4, 5, 6]] => [1, 2, 3, 4, 5, 6]
        """
        return [float(v) for v in self._data.ravel()]

    def tolist(self) -> list[list[float]]:
        """Return a copy of the elements as a list of rows."""
        return self._data.tolist()

    def clone(self) -> 'Matrix':
        """Return a deep copy sharing no storage with this matrix."""
        return self._wrap(self._data)

    def _check_same_shape(self, other: 'Matrix', operation: str) -> None:
        if self.shape != other.shape:
            raise ShapeMismatchError(
                f"Cannot {operation} {self._rows}x{self._cols} and {other._rows}x{other._cols} matrices")

    def _wrap(self, data: np.ndarray) -> 'Matrix':
        """Build a new Matrix owning a copy of 'data'."""
        matrix = Matrix(data.shape[0], data.shape[1])
        matrix._data[:, :] = data
        return matrix

    def __eq__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._data, other._data))

    __hash__ = None

    def __str__(self):
        return "\n".join("[" + ", ".join(str(float(v)) for v in row) + "]" for row in self._data)

    def __repr__(self):
        return f"Matrix.from_values({self._data.tolist()})"
