"""
evonet - feedforward neural networks trained by a genetic algorithm.

This package provides fixed-topology, fully connected feedforward networks
and a population-based training loop that evolves their weights from fitness
scores supplied by an external environment (a simulation, a game, a benchmark).

Main components:
- activations: Activation functions (rectified, sigmoid, tanh)
- phenotype: Layers, networks, and the Individual boundary used by the environment
- pool: Population and the generation transition (selection, crossover, mutation, reinsertion)
- run: Configuration, trial and experiment framework

Example:
    >>> from evonet import Config, Trial
    >>> config = Config("config.ini")
    >>> class MyTrial(Trial):
    ...     def _evaluate_fitness(self, individual):
    ...         # Drive individual.feed_forward() in your environment
    ...         pass
    >>> trial = MyTrial(config)
    >>> trial.run()
"""

__version__ = "0.1.0"

# Import main classes for convenient access
from evonet.errors import ShapeMismatch, InvalidTopology, NullActivation
from evonet.activations import ActivationFunction, RectifiedActivation, SigmoidActivation, TanhActivation
from evonet.phenotype import Layer, Network, Individual
from evonet.pool import GenerationStats, Population
from evonet.run.config import Config
from evonet.run.trial import Trial
from evonet.run.experiment import Experiment

__all__ = [
    "ShapeMismatch",
    "InvalidTopology",
    "NullActivation",
    "ActivationFunction",
    "RectifiedActivation",
    "SigmoidActivation",
    "TanhActivation",
    "Layer",
    "Network",
    "Individual",
    "GenerationStats",
    "Population",
    "Config",
    "Trial",
    "Experiment",
]
