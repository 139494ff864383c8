"""
Unit tests for Individual class.
"""

from itertools import count

import pytest
from evomlp.network         import Network
from evomlp.pool.individual import Individual


@pytest.fixture(autouse=True)
def reset_individual_id_generator():
    """Reset Individual ID generator before each test."""
    Individual._id_generator = count(0)
    yield
    Individual._id_generator = count(0)


class TestIndividual:
    """Test Individual creation and cloning."""

    def test_init(self, small_network):
        individual = Individual(small_network)
        assert individual.ID == 0
        assert individual.fitness is None
        assert individual.network is small_network

    def test_ids_are_unique(self, rng):
        individuals = [Individual(Network(2, 3, 1, rng=rng)) for _ in range(5)]
        assert [ind.ID for ind in individuals] == [0, 1, 2, 3, 4]

    def test_clone(self, small_network):
        """Test that a clone has a new ID, no fitness, and a copy of the network."""
        individual = Individual(small_network)
        individual.fitness = 3.5

        clone = individual.clone()

        assert clone.ID != individual.ID
        assert clone.fitness is None
        assert clone.network is not small_network
        assert clone.network.weights == small_network.weights
        assert clone.network.biases == small_network.biases

    def test_repr(self, small_network):
        individual = Individual(small_network)
        individual.fitness = 1.25
        assert repr(individual).startswith("Individual(ID=0, fitness=1.25")
