"""Pytest configuration and shared fixtures."""

import pytest
import sys
from pathlib import Path

import numpy as np

# Add the project sources to the Python path
root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir / "src"))
sys.path.insert(0, str(root_dir))


@pytest.fixture
def rng():
    """A seeded random generator, for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def small_network(rng):
    """A (2, 3, 1) network: one hidden layer of 3 nodes."""
    from evomlp.network import Network
    return Network(2, 3, 1, rng=rng)


@pytest.fixture
def deep_network(rng):
    """A network with 2 inputs, 2 hidden layers of 3 nodes and 2 outputs."""
    from evomlp.network import Network
    return Network(2, 2, 3, 2, rng=rng)
