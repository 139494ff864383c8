"""
Unit tests for the activation function pairs.

Derivatives are checked against finite differences, expressed (like the
network uses them) in terms of the activation OUTPUT.
"""

import dataclasses

import pytest
import numpy as np
from evomlp.activations import (
    ActivationFunction,
    activations,
    SIGMOID,
    TANH,
    RELU,
    IDENTITY,
)


class TestActivationsDictionary:
    """Test that all activations are accessible via the activations dictionary."""

    def test_all_functions_in_dictionary(self):
        """Test that every built-in pair is registered under its name."""
        for pair in (SIGMOID, TANH, RELU, IDENTITY):
            assert activations[pair.name] is pair

    def test_dictionary_entries_are_pairs(self):
        """Test that every entry holds two callables."""
        for name, pair in activations.items():
            assert isinstance(pair, ActivationFunction)
            assert callable(pair.function), f"{name} function is not callable"
            assert callable(pair.derivative), f"{name} derivative is not callable"

    def test_pairs_are_immutable(self):
        """Test that an activation pair cannot be modified after creation."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            SIGMOID.function = TANH.function


class TestSigmoid:
    """Test the logistic sigmoid pair."""

    def test_values(self):
        """Test a few known values."""
        assert SIGMOID.function(0.0) == 0.5
        assert SIGMOID.function(100.0) == pytest.approx(1.0)
        assert SIGMOID.function(-100.0) == pytest.approx(0.0)

    def test_no_overflow(self):
        """Test that extreme inputs do not overflow."""
        with np.errstate(over='raise'):
            assert SIGMOID.function(-1e6) == pytest.approx(0.0)
            assert SIGMOID.function(1e6) == pytest.approx(1.0)

    def test_derivative_of_output(self):
        """Test y * (1 - y) evaluated on the output."""
        assert SIGMOID.derivative(0.5) == 0.25
        assert SIGMOID.derivative(1.0) == 0.0


class TestTanh:
    """Test the hyperbolic tangent pair."""

    def test_values(self):
        """Test a few known values."""
        assert TANH.function(0.0) == 0.0
        assert TANH.function(1.0) == pytest.approx(np.tanh(1.0))

    def test_derivative_of_output(self):
        """Test 1 - y^2 evaluated on the output."""
        assert TANH.derivative(0.0) == 1.0
        assert TANH.derivative(0.5) == 0.75


class TestRelu:
    """Test the rectified linear unit pair."""

    def test_values(self):
        """Test negative, zero and positive inputs."""
        assert RELU.function(-1.0) == 0.0
        assert RELU.function(0.0) == 0.0
        assert RELU.function(2.5) == 2.5

    def test_derivative_of_output(self):
        """Test that the derivative is 1 for positive outputs, 0 otherwise."""
        assert RELU.derivative(2.5) == 1.0
        assert RELU.derivative(0.0) == 0.0


class TestIdentity:
    """Test the identity pair."""

    def test_values(self):
        assert IDENTITY.function(-3.0) == -3.0
        assert IDENTITY.derivative(-3.0) == 1.0


@pytest.mark.parametrize("pair", [SIGMOID, TANH, IDENTITY], ids=lambda p: p.name)
@pytest.mark.parametrize("z", [-1.5, -0.3, 0.2, 1.1])
def test_derivative_matches_finite_difference(pair, z):
    """Test derivative(function(z)) against a central finite difference."""
    h = 1e-6
    numeric = (pair.function(z + h) - pair.function(z - h)) / (2 * h)
    assert pair.derivative(pair.function(z)) == pytest.approx(numeric, rel=1e-5, abs=1e-8)
