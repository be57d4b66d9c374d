"""Pytest configuration and shared fixtures."""

import numpy as np
import pytest
import sys
from pathlib import Path

# Add the source directory to the Python path
src_dir = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_dir))


@pytest.fixture
def rng():
    """Seeded random number generator, for reproducible draws."""
    return np.random.default_rng(42)


@pytest.fixture
def small_config():
    """Default Config shrunk to a small population."""
    from evonet.run.config import Config
    config = Config()
    config.population_size = 4
    config.topology        = (5, 3, 2)
    config.seed            = 42
    return config
