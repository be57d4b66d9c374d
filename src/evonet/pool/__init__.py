"""
Pool Package

This package contains the classes managing a population of networks and its
evolution from one generation to the next.

Modules:
    population:       The population and the genetic-algorithm step
    generation_stats: Fitness summary emitted at every generation transition

Exported Classes:
    Population:      Fixed-size generation of networks and the evolution step
    GenerationStats: Summary record of one generation
"""

from evonet.pool.generation_stats import GenerationStats
from evonet.pool.population       import Population

__all__ = [
    'GenerationStats',
    'Population',
]
