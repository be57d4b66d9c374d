"""
Phenotype Package

This package implements the executable side of the library: the layers and
networks that turn sensor inputs into outputs, and the Individual wrapper the
environment uses to drive a network and report its fitness.

Modules:
    layer:      One fully connected stage (weights, biases, activation)
    network:    A chain of layers sized from a topology
    individual: A population slot paired with its network

Exported Classes:
    Layer:      Fully connected layer with evolvable weights and biases
    Network:    Fixed-topology feedforward network with a fitness score
    Individual: Boundary object pairing a population index with its network
"""

from evonet.phenotype.layer      import Layer
from evonet.phenotype.network    import Network
from evonet.phenotype.individual import Individual

__all__ = ['Layer',
           'Network',
           'Individual']
