"""
Network Package

This package provides the multi-layer perceptron and the persistence of its parameters.

Exported:
    Network:          Fully-connected feed-forward neural network
    write_parameters: Save the weights and biases of a Network to a binary stream
    read_parameters:  Load the weights and biases of a Network from a binary stream
"""

from evomlp.network.persistence import write_parameters, read_parameters
from evomlp.network.network     import Network

__all__ = [
    'Network',
    'write_parameters',
    'read_parameters'
]
