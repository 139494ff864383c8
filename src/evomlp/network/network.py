"""
Network Module

This module implements a fully-connected feed-forward neural network (a
multi-layer perceptron) built entirely out of Matrix operations.

The network supports:
    - forward inference ('process')
    - single-sample backpropagation training ('train')
    - evolutionary operators ('mutate_weights', 'mutate_biases', 'crossover')
    - binary persistence of its parameters ('write_to', 'read_from')

Classes:
    Network: A multi-layer perceptron with uniform hidden layer width
"""

import logging
import os
from typing import BinaryIO, Optional, Sequence, Union, TYPE_CHECKING
import graphviz  # type: ignore
import numpy as np

from evomlp.activations import ActivationFunction, SIGMOID, activations
from evomlp.errors      import IncompatibleTopologyError, InvalidArgumentError
from evomlp.matrix      import Matrix
from evomlp.network.persistence import read_parameters, write_parameters

if TYPE_CHECKING:
    from evomlp.run.config import Config

logger = logging.getLogger(__name__)

# Inputs whose magnitude exceeds this value are reported (but still processed)
INPUT_RANGE_LIMIT = 2.0

class Network:
    """
    A multi-layer perceptron with 'hidden_layers' hidden layers of 'hidden_nodes' neurons each.

    The network owns one weight matrix and one bias (column) matrix per layer
    transition, 'hidden_layers + 1' of each. With layer widths
        [input_nodes, hidden_nodes, ..., hidden_nodes, output_nodes]
    weights[i] has shape (width[i+1], width[i]) and biases[i] has shape (width[i+1], 1).
    All parameters are drawn uniformly from [-1, 1] at construction; the topology
    never changes afterwards.

    Each layer computes:
        activation(weights[i] . previous + biases[i])

    Public Attributes:
        input_nodes:   Number of inputs
        hidden_layers: Number of hidden layers (may be 0)
        hidden_nodes:  Width of every hidden layer
        output_nodes:  Number of outputs

    Public Properties:
        weights:             The weight matrices, in layer order
        biases:              The bias matrices, in layer order
        learning_rate:       Step size used by 'train' (default 0.01)
        activation_function: The ActivationFunction applied by every layer (default sigmoid)
        layer_sizes:         Widths of all layers, input to output
        parameter_count:     Total number of weights and biases

    Public Methods:
        process(inputs):              Forward pass, returns the outputs
        train(inputs, targets):       One stochastic backpropagation step
        mutate_weights(chance, rng):  Randomly perturb weights (in place)
        mutate_biases(chance, rng):   Randomly perturb parameters with a larger step (in place)
        crossover(other, rng):        Mix the weights of two networks into a new one
        clone():                      Deep copy
        write_to(target):             Save all parameters
        read_from(source):            Load all parameters
        visualize(view):              Draw the network with graphviz

    A Network is not safe for concurrent mutation; clone it per worker instead.
    """

    def __init__(self, input_nodes: int, *sizes: int, rng: Optional[np.random.Generator] = None):
        """
        Create a randomly initialized network.

        Two forms are accepted:
            Network(input_nodes, hidden_nodes, output_nodes)                 # one hidden layer
            Network(input_nodes, hidden_layers, hidden_nodes, output_nodes)

        Parameters:
            input_nodes: number of inputs
            sizes:       (hidden_nodes, output_nodes) or (hidden_layers, hidden_nodes, output_nodes)
            rng:         random generator used to initialize the parameters;
                         a freshly seeded one is used if omitted
        """
        if len(sizes) == 2:
            hidden_layers = 1
            hidden_nodes, output_nodes = sizes
        elif len(sizes) == 3:
            hidden_layers, hidden_nodes, output_nodes = sizes
        else:
            raise TypeError(f"Network() takes 3 or 4 size arguments, got {len(sizes) + 1}")

        if hidden_layers < 0:
            raise ValueError(f"hidden_layers must be non-negative, got {hidden_layers}")

        if rng is None:
            rng = np.random.default_rng()

        self.input_nodes  : int = input_nodes
        self.hidden_layers: int = hidden_layers
        self.hidden_nodes : int = hidden_nodes
        self.output_nodes : int = output_nodes

        widths = self.layer_sizes
        self._weights: list[Matrix] = [Matrix(widths[i + 1], widths[i]).randomize(rng) for i in range(hidden_layers + 1)]
        self._biases : list[Matrix] = [Matrix(widths[i + 1], 1).randomize(rng)         for i in range(hidden_layers + 1)]

        self._learning_rate      : float              = 0.01
        self._activation_function: ActivationFunction = SIGMOID

    @classmethod
    def from_config(cls, config: 'Config', rng: Optional[np.random.Generator] = None) -> 'Network':
        """
        Create a network whose topology, learning rate and activation come from a Config.

        Parameters:
            config: Stores configuration parameters ([NETWORK] section)
            rng:    random generator used to initialize the parameters
        """
        network = cls(config.input_nodes, config.hidden_layers, config.hidden_nodes, config.output_nodes, rng=rng)
        network.learning_rate       = config.learning_rate
        network.activation_function = activations[config.activation]
        return network

    @property
    def weights(self) -> list[Matrix]:
        """The weight matrices, in layer order."""
        return self._weights

    @property
    def biases(self) -> list[Matrix]:
        """The bias (column) matrices, in layer order."""
        return self._biases

    @property
    def learning_rate(self) -> float:
        """Scales every update applied by 'train'."""
        return self._learning_rate

    @learning_rate.setter
    def learning_rate(self, learning_rate: float) -> None:
        self._learning_rate = learning_rate

    @property
    def activation_function(self) -> ActivationFunction:
        """The activation applied by every layer; its derivative takes the activation output."""
        return self._activation_function

    @activation_function.setter
    def activation_function(self, activation_function: ActivationFunction) -> None:
        self._activation_function = activation_function

    @property
    def layer_sizes(self) -> list[int]:
        """Width of every layer: [input_nodes, hidden_nodes, ..., output_nodes]."""
        return [self.input_nodes] + [self.hidden_nodes] * self.hidden_layers + [self.output_nodes]

    @property
    def parameter_count(self) -> int:
        """Total number of weights and biases."""
        return sum(m.rows * m.cols for m in self._weights) + sum(m.rows * m.cols for m in self._biases)

    def same_topology(self, other: 'Network') -> bool:
        """Whether 'other' has the same number of inputs, hidden layers, hidden nodes and outputs."""
        return (self.input_nodes   == other.input_nodes   and
                self.hidden_layers == other.hidden_layers and
                self.hidden_nodes  == other.hidden_nodes  and
                self.output_nodes  == other.output_nodes)

    def process(self, inputs: Sequence[float]) -> list[float]:
        """
        Perform a complete forward pass through the network.

        Inputs with a magnitude above 2 are logged as out of the expected
        range but are processed normally.

        Parameters:
            inputs: the network inputs (as many as input nodes)

        Returns:
            the network outputs (as many as output nodes)

        Raises:
            InvalidArgumentError: if the number of inputs is wrong
        """
        self._check_length(inputs, self.input_nodes, "Input")

        for i, value in enumerate(inputs):
            if abs(value) > INPUT_RANGE_LIMIT:
                logger.warning("Input %d (%s) is out of the expected range [-%s, %s]",
                               i, value, INPUT_RANGE_LIMIT, INPUT_RANGE_LIMIT)

        layer = Matrix.from_column(inputs)
        for weight, bias in zip(self._weights, self._biases):
            layer = self._feed_forward(weight, bias, layer)
        return layer.to_flat_list()

    def train(self, inputs: Sequence[float], targets: Sequence[float]) -> None:
        """
        Perform one stochastic backpropagation step on a single sample.

        The forward pass keeps the activation of every layer (layers[0] being
        the input itself). The backward pass then visits the layers from the
        output down; for layer i:

            error     = target - layers[i]
            gradient  = derivative(layers[i]) * error * learning_rate
            biases[i-1]  += gradient
            weights[i-1] += gradient . layers[i-1]^T
            target    = weights[i-1]^T . error + layers[i-1]

        The last line propagates a pseudo-target rather than a pure error
        signal, so the next layer's error becomes weights^T . error, computed
        with the freshly updated weights.

        Parameters:
            inputs:  the network inputs (as many as input nodes)
            targets: the expected outputs (as many as output nodes)

        Raises:
            InvalidArgumentError: if either vector has the wrong length
        """
        self._check_length(inputs, self.input_nodes, "Input")
        self._check_length(targets, self.output_nodes, "Output")

        # Forward pass, remembering every layer's activation
        layers = [Matrix.from_column(inputs)]
        for weight, bias in zip(self._weights, self._biases):
            layers.append(self._feed_forward(weight, bias, layers[-1]))

        derivative = self._activation_function.derivative

        # Backward pass, from the output layer down to the first hidden layer
        target = Matrix.from_column(targets)
        for i in range(self.hidden_layers + 1, 0, -1):
            error = target.subtract(layers[i])

            gradient = layers[i].clone().transform(lambda value, row, col: derivative(value))
            gradient = gradient.elementwise_multiply(error).scale(self._learning_rate)

            delta = gradient.multiply(layers[i - 1].transpose())

            self._biases[i - 1]  = self._biases[i - 1].add(gradient)
            self._weights[i - 1] = self._weights[i - 1].add(delta)

            target = self._weights[i - 1].transpose().multiply(error).add(layers[i - 1])

    def mutate_weights(self, chance: float, rng: Optional[np.random.Generator] = None) -> 'Network':
        """
        Perturb each weight, with probability 'chance', by a value drawn uniformly from (-0.1, 0.1).

        NOTE: This modifies the current network!

        Parameters:
            chance: probability that any single weight is perturbed
            rng:    random generator; a freshly seeded one is used if omitted

        Returns:
            self
        """
        if rng is None:
            rng = np.random.default_rng()
        self._perturb_weights(chance, 0.1, rng)
        return self

    def mutate_biases(self, chance: float, rng: Optional[np.random.Generator] = None) -> 'Network':
        """
        Perturb parameters, with probability 'chance', by a value drawn uniformly from (-1.5, 1.5).

        Despite its name this operator perturbs the WEIGHT matrices; the bias
        matrices are left untouched.

        NOTE: This modifies the current network!

        Parameters:
            chance: probability that any single parameter is perturbed
            rng:    random generator; a freshly seeded one is used if omitted

        Returns:
            self
        """
        if rng is None:
            rng = np.random.default_rng()
        self._perturb_weights(chance, 1.5, rng)
        return self

    def _perturb_weights(self, chance: float, strength: float, rng: np.random.Generator) -> None:
        def perturb(value, row, col):
            if rng.random() < chance:
                return value + (rng.random() * 2 - 1) * strength
            return value

        for weight in self._weights:
            weight.transform(perturb)

    def crossover(self, other: 'Network', rng: Optional[np.random.Generator] = None) -> 'Network':
        """
        Create a new network mixing the weights of this network and 'other'.

        The offspring starts as a clone of this network; each of its weights is
        then independently replaced, with probability 1/2, by the matching
        weight of 'other'. Biases, learning rate and activation come from this
        network. Neither parent is modified.

        Parameters:
            other: a network with the same topology
            rng:   random generator; a freshly seeded one is used if omitted

        Returns:
            the offspring network

        Raises:
            IncompatibleTopologyError: if the topologies differ
        """
        if not self.same_topology(other):
            raise IncompatibleTopologyError(
                f"Cannot cross a {self.layer_sizes} network with a {other.layer_sizes} network")

        if rng is None:
            rng = np.random.default_rng()

        offspring = self.clone()
        for weight, other_weight in zip(offspring._weights, other._weights):
            weight.transform(lambda value, row, col: value if rng.random() >= 0.5 else other_weight[row, col])
        return offspring

    def clone(self) -> 'Network':
        """
        Return a deep copy of this network.

        Weight and bias matrices are copied; the (immutable) activation function is shared.
        """
        network = Network.__new__(Network)
        network.input_nodes   = self.input_nodes
        network.hidden_layers = self.hidden_layers
        network.hidden_nodes  = self.hidden_nodes
        network.output_nodes  = self.output_nodes
        network._weights      = [m.clone() for m in self._weights]
        network._biases       = [m.clone() for m in self._biases]
        network._learning_rate       = self._learning_rate
        network._activation_function = self._activation_function
        return network

    def write_to(self, target: Union[str, os.PathLike, BinaryIO]) -> None:
        """
        Save all weights and biases.

        Parameters:
            target: a file path, or a binary file object open for writing
        """
        if isinstance(target, (str, os.PathLike)):
            with open(target, "wb") as stream:
                write_parameters(self, stream)
        else:
            write_parameters(self, target)

    def read_from(self, source: Union[str, os.PathLike, BinaryIO]) -> None:
        """
        Load all weights and biases previously saved with 'write_to'.

        The data holds no shape information: this network must have the same
        topology as the one that was saved.

        Parameters:
            source: a file path, or a binary file object open for reading
        """
        if isinstance(source, (str, os.PathLike)):
            with open(source, "rb") as stream:
                read_parameters(self, stream)
        else:
            read_parameters(self, source)

    def visualize(self, view: bool = False) -> graphviz.Digraph:
        """
        Visualize the network using Graphviz.

        Neurons are grouped by layer, left to right. Edges are blue for
        positive weights and red for negative ones, thicker for larger
        magnitudes.

        Parameters:
            view: If True, automatically open the visualization after rendering

        Returns:
            graphviz.Digraph object representing the network
        """
        dot = graphviz.Digraph()
        dot.attr(rankdir='LR')
        dot.attr('graph', labelloc='t', label=f"{self.layer_sizes} {self._activation_function.name}")

        node_attrs = {'color': 'black', 'style': 'filled', 'shape': 'circle', 'penwidth': '0.5',
                      'fontsize': '5', 'width': '0.5', 'height': '0.5', 'fixedsize': 'true'}
        fill_colors = ['lightgrey'] + ['lightblue'] * self.hidden_layers + ['white']

        for layer, width in enumerate(self.layer_sizes):
            with dot.subgraph(name=f'cluster_{layer}') as cluster:
                cluster.attr(rank='same', style='invisible')
                for n in range(width):
                    attrs = dict(node_attrs, fillcolor=fill_colors[layer])
                    if layer == 0:
                        attrs['label'] = f"in{n}"
                    else:
                        attrs['label'] = f"L{layer}:{n}\\nbias={self._biases[layer - 1][n, 0]:.2f}"
                    cluster.node(f"{layer}_{n}", **attrs)

        for layer, weight in enumerate(self._weights):
            for r in range(weight.rows):
                for c in range(weight.cols):
                    w = weight[r, c]
                    dot.edge(f"{layer}_{c}", f"{layer + 1}_{r}",
                             label=f"{w:.2f}",
                             color='blue' if w > 0 else 'red',
                             penwidth=str(min(abs(w) * 2, 5)),
                             fontsize='5',
                             arrowsize='0.5')

        if view:
            dot.view(cleanup=True)

        return dot

    def _feed_forward(self, weight: Matrix, bias: Matrix, previous: Matrix) -> Matrix:
        function = self._activation_function.function
        return weight.multiply(previous).add(bias).transform(lambda value, row, col: function(value))

    @staticmethod
    def _check_length(values: Sequence[float], expected: int, kind: str) -> None:
        if len(values) != expected:
            raise InvalidArgumentError(
                f"{kind} must have {expected} element{'' if expected == 1 else 's'}, got {len(values)}")

    def __str__(self):
        layers = []
        for i, (weight, bias) in enumerate(zip(self._weights, self._biases)):
            layers.append(f"Layer {i + 1} weights:\n{weight}\nLayer {i + 1} biases:\n{bias}")
        return "\n\n".join(layers)

    def __repr__(self):
        return (f"Network(input_nodes={self.input_nodes}, hidden_layers={self.hidden_layers}, "
                f"hidden_nodes={self.hidden_nodes}, output_nodes={self.output_nodes})")
