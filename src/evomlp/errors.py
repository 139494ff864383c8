"""
Exceptions raised by matrix and network operations.

All of them derive from ValueError: every failure is caused by an argument
whose shape or size does not fit the operation, and is raised before any
matrix or network state is modified.
"""

class MatrixError(ValueError):
    """Base class for malformed or incompatible matrices."""

class InvalidDimensionError(MatrixError):
    """A matrix was requested with fewer than one row or one column."""

class InvalidShapeError(MatrixError):
    """The values used to build a matrix are not rectangular."""

class ShapeMismatchError(MatrixError):
    """An element-wise operation received operands of different shapes."""

class DimensionMismatchError(MatrixError):
    """A matrix product received operands whose inner dimensions differ."""

class InvalidArgumentError(ValueError):
    """An input or target vector does not match the network topology."""

class IncompatibleTopologyError(ValueError):
    """Two networks with different topologies were combined."""
