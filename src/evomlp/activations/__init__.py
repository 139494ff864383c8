"""
Activations Package

This package provides the activation functions available to a Network.

Exported:
    ActivationFunction: Immutable (function, derivative) pair
    activations:        Dictionary mapping activation function names to ActivationFunction objects
    SIGMOID, TANH, RELU, IDENTITY: the built-in activation function pairs
"""

from evomlp.activations.basic_activations import (
    ActivationFunction,
    activations,
    SIGMOID,
    TANH,
    RELU,
    IDENTITY
)

__all__ = [
    'ActivationFunction',
    'activations',
    'SIGMOID',
    'TANH',
    'RELU',
    'IDENTITY'
]
