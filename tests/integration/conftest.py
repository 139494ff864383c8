"""
Shared fixtures for integration tests.
"""

import os
from itertools import count

import pytest
from evomlp.pool       import Individual
from evomlp.run.config import Config


CONFIG_DIR = os.path.join(os.path.dirname(__file__), '..', '..', 'examples', 'configs')


@pytest.fixture(autouse=True)
def reset_individual_id_generator():
    """Reset Individual ID generator for reproducibility."""
    Individual._id_generator = count(0)
    yield
    Individual._id_generator = count(0)


@pytest.fixture
def xor_config_path():
    return os.path.abspath(os.path.join(CONFIG_DIR, 'config_xor.ini'))


@pytest.fixture
def xor_config(xor_config_path):
    """The XOR example configuration, seeded and shortened for testing."""
    config = Config(xor_config_path)
    config.seed                   = 1
    config.max_number_generations = 40
    return config
