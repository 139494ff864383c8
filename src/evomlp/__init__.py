"""
evomlp - A minimal multi-layer perceptron with backpropagation and neuroevolution.

This package provides dense matrix arithmetic, a fully-connected feed-forward
network built from it, a single-sample backpropagation training rule, simple
evolutionary operators (mutation, crossover) and binary persistence of the
learned parameters.

Main components:
- matrix:      Dense matrix arithmetic
- activations: Activation function / derivative pairs
- network:     The multi-layer perceptron and its persistence
- pool:        Individuals and populations of evolving networks
- run:         Trial execution, configuration, and experiment framework

Example:
    >>> from evomlp import Network, TANH
    >>> network = Network(2, 2, 1)
    >>> network.activation_function = TANH
    >>> network.learning_rate = 0.05
    >>> network.train([0.0, 1.0], [1.0])
    >>> network.process([0.0, 1.0])
"""

__version__ = "0.1.0"

# Import main classes for convenient access
from evomlp.errors import (
    InvalidDimensionError,
    InvalidShapeError,
    ShapeMismatchError,
    DimensionMismatchError,
    InvalidArgumentError,
    IncompatibleTopologyError,
)
from evomlp.matrix      import Matrix
from evomlp.activations import ActivationFunction, SIGMOID, TANH, RELU, IDENTITY, activations
from evomlp.network     import Network
from evomlp.pool        import Individual, Population
from evomlp.run         import Config, Trial, TrialGrad, Experiment, train_epochs

__all__ = [
    "Matrix",
    "Network",
    "ActivationFunction",
    "SIGMOID",
    "TANH",
    "RELU",
    "IDENTITY",
    "activations",
    "Individual",
    "Population",
    "Config",
    "Trial",
    "TrialGrad",
    "Experiment",
    "train_epochs",
    "InvalidDimensionError",
    "InvalidShapeError",
    "ShapeMismatchError",
    "DimensionMismatchError",
    "InvalidArgumentError",
    "IncompatibleTopologyError",
]
