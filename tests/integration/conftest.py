"""
Shared fixtures for integration tests.
"""

import pytest
import numpy as np
from evonet.run.config import Config


@pytest.fixture
def xor_inputs():
    """XOR inputs, one row per case."""
    return np.array([[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]])


@pytest.fixture
def xor_outputs():
    """XOR expected outputs."""
    return np.array([0.0, 1.0, 1.0, 0.0])


@pytest.fixture
def evolution_config():
    """Config for a short, seeded run on a 20-network population."""
    config = Config()
    config.population_size        = 20
    config.topology               = (2, 4, 1)
    config.activation             = 'sigmoid'
    config.sigmoid_coefficient    = 1.0
    config.mutation_chance        = 0.3
    config.mutation_strength      = 0.5
    config.crossover_chance       = 0.5
    config.crossover_probability  = 0.3
    config.max_number_generations = 30
    config.seed                   = 42
    return config

