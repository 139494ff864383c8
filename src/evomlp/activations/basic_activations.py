from dataclasses import dataclass
from typing      import Callable
import numpy as np

@dataclass(frozen=True)
class ActivationFunction:
    """
    An activation function paired with its derivative.

    The derivative is expressed in terms of the function's OUTPUT: for the
    sigmoid y = s(z) the derivative is y * (1 - y), evaluated on y, not z.
    Instances are immutable, so networks (and their clones) can share them.
    """
    name      : str
    function  : Callable[[float], float]
    derivative: Callable[[float], float]

def sigmoid_activation(z):
    z = np.clip(z, -500, 500)   # to prevent overflow when calculating exp
    return 1.0 / (1.0 + np.exp(-z))

def sigmoid_derivative(y):
    return y * (1.0 - y)

def tanh_activation(z):
    return np.tanh(z)

def tanh_derivative(y):
    return 1.0 - y * y

def relu_activation(z):
    return np.maximum(0.0, z)

def relu_derivative(y):
    # a positive output can only come from a positive input
    return np.where(y > 0.0, 1.0, 0.0)

def identity_activation(z):
    return z

def identity_derivative(y):
    return np.ones_like(y)

SIGMOID  = ActivationFunction("sigmoid" , sigmoid_activation , sigmoid_derivative)
TANH     = ActivationFunction("tanh"    , tanh_activation    , tanh_derivative)
RELU     = ActivationFunction("relu"    , relu_activation    , relu_derivative)
IDENTITY = ActivationFunction("identity", identity_activation, identity_derivative)

activations = {
    "sigmoid" : SIGMOID,
    "tanh"    : TANH,
    "relu"    : RELU,
    "identity": IDENTITY
    }
