"""
Unit tests for Network.train (single-sample backpropagation).

The expected updates are recomputed here with plain numpy, following the
training rule step by step, including the propagation of a pseudo-target
(weights^T . error + previous activation) to the layer below.
"""

import pytest
import numpy as np
from evomlp.activations import SIGMOID, TANH
from evomlp.errors      import InvalidArgumentError
from evomlp.network     import Network


def numpy_train(network, inputs, targets):
    """Apply the training rule with numpy; return the expected (weights, biases)."""
    f  = network.activation_function.function
    df = network.activation_function.derivative
    lr = network.learning_rate

    weights = [np.array(w.tolist()) for w in network.weights]
    biases  = [np.array(b.tolist()) for b in network.biases]

    layers = [np.array(inputs, dtype=float).reshape(-1, 1)]
    for w, b in zip(weights, biases):
        layers.append(f(w @ layers[-1] + b))

    target = np.array(targets, dtype=float).reshape(-1, 1)
    for i in range(len(weights), 0, -1):
        error    = target - layers[i]
        gradient = df(layers[i]) * error * lr
        biases[i - 1]  = biases[i - 1] + gradient
        weights[i - 1] = weights[i - 1] + gradient @ layers[i - 1].T
        target = weights[i - 1].T @ error + layers[i - 1]

    return weights, biases


class TestTrainValidation:
    """Test argument checks."""

    def test_wrong_input_length(self, small_network):
        with pytest.raises(InvalidArgumentError, match="Input must have 2 elements"):
            small_network.train([1.0], [0.0])

    def test_wrong_target_length(self, small_network):
        with pytest.raises(InvalidArgumentError, match="Output must have 1 element,"):
            small_network.train([1.0, 0.0], [0.0, 1.0])

    def test_failed_call_leaves_network_unchanged(self, small_network):
        """Test that a rejected call does not modify any parameter."""
        before = small_network.clone()
        with pytest.raises(InvalidArgumentError):
            small_network.train([1.0, 0.0], [])
        assert small_network.weights == before.weights
        assert small_network.biases == before.biases


class TestTrainUpdate:
    """Test the parameter updates of a single training step."""

    @pytest.mark.parametrize("activation", [SIGMOID, TANH], ids=lambda a: a.name)
    def test_matches_numpy_single_hidden(self, small_network, activation):
        small_network.activation_function = activation
        small_network.learning_rate = 0.1
        expected_w, expected_b = numpy_train(small_network, [0.3, -0.8], [0.9])

        small_network.train([0.3, -0.8], [0.9])

        for actual, expected in zip(small_network.weights, expected_w):
            np.testing.assert_allclose(actual.tolist(), expected, rtol=1e-12, atol=1e-14)
        for actual, expected in zip(small_network.biases, expected_b):
            np.testing.assert_allclose(actual.tolist(), expected, rtol=1e-12, atol=1e-14)

    def test_matches_numpy_deep(self, deep_network):
        deep_network.learning_rate = 0.5
        expected_w, expected_b = numpy_train(deep_network, [1.0, 0.5], [0.2, 0.7])

        deep_network.train([1.0, 0.5], [0.2, 0.7])

        for actual, expected in zip(deep_network.weights, expected_w):
            np.testing.assert_allclose(actual.tolist(), expected, rtol=1e-12, atol=1e-14)
        for actual, expected in zip(deep_network.biases, expected_b):
            np.testing.assert_allclose(actual.tolist(), expected, rtol=1e-12, atol=1e-14)

    def test_zero_learning_rate_is_noop(self, deep_network):
        """Test that a learning rate of 0 leaves every parameter unchanged."""
        deep_network.learning_rate = 0.0
        before = deep_network.clone()
        deep_network.train([0.1, 0.9], [1.0, 0.0])
        assert deep_network.weights == before.weights
        assert deep_network.biases == before.biases

    def test_output_moves_towards_target(self, rng):
        """Test that repeated training on one sample reduces its error."""
        network = Network(3, 4, 2, rng=rng)
        network.learning_rate = 0.1
        inputs, targets = [0.2, -0.4, 0.9], [0.1, 0.8]

        error_before = np.sum((np.array(network.process(inputs)) - targets) ** 2)
        for _ in range(200):
            network.train(inputs, targets)
        error_after = np.sum((np.array(network.process(inputs)) - targets) ** 2)

        assert error_after < error_before

    def test_shapes_preserved(self, deep_network):
        """Test that training never resizes a matrix."""
        shapes = [m.shape for m in deep_network.weights + deep_network.biases]
        deep_network.train([0.5, 0.5], [1.0, 1.0])
        assert [m.shape for m in deep_network.weights + deep_network.biases] == shapes
