"""
Matrix Package

This package provides the dense matrix arithmetic the network is built on.

Exported:
    Matrix:          A rows x cols array of real numbers
    ElementFunction: Signature of the callbacks accepted by Matrix.transform
"""

from evomlp.matrix.matrix import Matrix, ElementFunction

__all__ = [
    'Matrix',
    'ElementFunction'
]
