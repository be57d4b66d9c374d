"""
Individual Module

This module implements the Individual class, the boundary through which the
environment drives a network and reports back how well it did.

Classes:
    Individual: A population slot paired with the network occupying it
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from evonet.phenotype.network import Network

class Individual:
    """
    A member of the current generation, as seen by the environment.

    You can regard an individual as a thin wrapper around the network that
    powers it, to which it adds its position in the population. The fitness
    is stored on the network itself, so assigning it here is the same as
    assigning network.fitness.

    Public Attributes:
        index:   Position of the network in the population
        network: The network powering this individual

    Public Properties:
        fitness: Read or assign the network's fitness

    Public Methods:
        feed_forward(inputs): Run the network on one set of inputs
    """

    def __init__(self, index: int, network: 'Network'):
        self.index   = index
        self.network = network

    @property
    def fitness(self) -> float:
        return self.network.fitness

    @fitness.setter
    def fitness(self, value: float):
        self.network.fitness = float(value)

    def feed_forward(self, inputs):
        return self.network.feed_forward(inputs)

    def __str__(self):
        return f"index={self.index}, fitness={self.fitness:.4f}\n{self.network}"

    def __repr__(self):
        return f"Individual(index={self.index}, network={self.network!r})"
