"""
Network Persistence Module

Binary (de)serialization of the learned parameters of a Network.

Layout: a flat sequence of big-endian IEEE-754 doubles, with no header and no
shape information:
    weights[0], weights[1], ..., biases[0], biases[1], ...
each matrix written in row-major order. A network can only be read back into
a network of identical topology; nothing in the data allows this to be checked.

Functions:
    write_parameters(network, stream): Write every weight and bias to a binary stream
    read_parameters(network, stream):  Overwrite every weight and bias from a binary stream
"""

from typing import BinaryIO, TYPE_CHECKING
import numpy as np

if TYPE_CHECKING:
    from evomlp.network.network import Network

DOUBLE = np.dtype('>f8')

def write_parameters(network: 'Network', stream: BinaryIO) -> None:
    """
    Write all weights, then all biases, to 'stream'.

    Parameters:
        network: the network whose parameters are saved
        stream:  a binary file object open for writing
    """
    for matrix in network.weights + network.biases:
        stream.write(np.asarray(matrix.to_flat_list(), dtype=DOUBLE).tobytes())

def read_parameters(network: 'Network', stream: BinaryIO) -> None:
    """
    Overwrite all weights, then all biases, with values read from 'stream'.

    Exactly 'network.parameter_count' doubles are consumed; anything after
    them is left unread.

    Parameters:
        network: the network receiving the parameters (its topology is trusted)
        stream:  a binary file object open for reading

    Raises:
        EOFError: if the stream ends before every parameter has been read
    """
    expected = network.parameter_count * DOUBLE.itemsize
    data     = stream.read(expected)
    if len(data) < expected:
        raise EOFError(f"Expected {expected} bytes of parameters, got {len(data)}")

    values = np.frombuffer(data, dtype=DOUBLE)
    offset = 0
    for matrix in network.weights + network.biases:
        cols = matrix.cols
        matrix.transform(lambda value, row, col: values[offset + row * cols + col])
        offset += matrix.rows * cols
