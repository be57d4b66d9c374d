"""
Feedforward Network Module

This module implements the Network class, a fully connected feedforward
neural network built from a chain of Layer objects, together with the
whole-network operations used by the genetic algorithm.

Classes:
    Network: Fixed-topology feedforward network with a fitness score
"""

import numpy as np
import graphviz  # type: ignore
from typing import TYPE_CHECKING, Sequence

from evonet.errors            import InvalidTopology, NullActivation
from evonet.phenotype.layer   import Layer
if TYPE_CHECKING:
    from evonet.activations import ActivationFunction

class Network:
    """
    A fully connected feedforward neural network.

    The topology lists the neuron count of every stage, input stage first and
    output stage last. Consecutive stages are joined by one Layer, so a
    network has len(topology) - 1 layers and layer i feeds layer i+1.

    The fitness is written by whoever evaluates the network and only means
    something within the generation it was assigned in. Networks compare by
    fitness ('<', '>' and compare_to()), which is what ranks a population;
    equality is left as identity.

    Public Attributes:
        fitness: Score assigned by the environment (0.0 until evaluated)

    Public Properties:
        topology:     Neuron count per stage
        layers:       The layers, in propagation order
        weight_count: Diagnostic count of connections, counting one bias unit per stage

    Public Methods:
        feed_forward(inputs):            Propagate inputs through all layers
        randomize(min, max, rng):        Randomize weights and biases of every layer
        set_activation_function(fn):     Install one activation function in every layer
        topology_copy():                 Blank network with the same structure
        deep_copy():                     Independent copy including weights
        mutate(chance, magnitude, rng):  Perturb every layer in place
        compare_to(other):               -1, 0, 1 by fitness
        visualize(view):                 Graphviz rendering of the network
    """

    def __init__(self, topology: Sequence[int]):
        """
        Build a network with zero weights and biases and sigmoid activations.

        Parameters:
            topology: Neuron count of each stage, from input to output
        """
        topology = tuple(int(size) for size in topology)
        if len(topology) < 2:
            raise InvalidTopology(f"a topology needs at least 2 stages, got {len(topology)}")
        if any(size < 1 for size in topology):
            raise InvalidTopology(f"every stage needs at least one neuron, got {list(topology)}")

        self._topology = topology
        self._layers   = tuple(Layer(n_in, n_out) for n_in, n_out in zip(topology[:-1], topology[1:]))
        self.fitness: float = 0.0

        # +1 for a virtual bias unit per stage; not checked against layer storage
        self._weight_count = sum((n_in + 1) * n_out for n_in, n_out in zip(topology[:-1], topology[1:]))

    @property
    def topology(self) -> tuple:
        return self._topology

    @property
    def layers(self) -> tuple:
        return self._layers

    @property
    def weight_count(self) -> int:
        return self._weight_count

    def feed_forward(self, inputs) -> np.ndarray:
        """
        Process the given inputs using the current weights.

        Parameters:
            inputs: Sequence of topology[0] input values

        Returns:
            Array of topology[-1] output values
        """
        outputs = inputs
        for layer in self._layers:
            outputs = layer.calculate(outputs)
        return outputs

    def randomize(self, min_value: float, max_value: float, rng: np.random.Generator):
        for layer in self._layers:
            layer.randomize_weights(min_value, max_value, rng)
            layer.randomize_biases(min_value, max_value, rng)

    def set_activation_function(self, fn: 'ActivationFunction'):
        if fn is None:
            raise NullActivation("a network needs an activation function")
        for layer in self._layers:
            layer.set_activation_function(fn)

    def topology_copy(self) -> 'Network':
        """
        Return a network with the same topology and activation functions,
        but with all weights and biases set to zero.
        """
        copy = Network(self._topology)
        for source, target in zip(self._layers, copy._layers):
            target.set_activation_function(source.activation_function)
        return copy

    def deep_copy(self) -> 'Network':
        """
        Return an independent copy of this network, weights and fitness included.
        """
        copy = Network(self._topology)
        copy._layers  = tuple(layer.deep_copy() for layer in self._layers)
        copy.fitness  = self.fitness
        return copy

    def mutate(self, chance: float, magnitude: float, rng: np.random.Generator):
        for layer in self._layers:
            layer.mutate(chance, magnitude, rng)

    def compare_to(self, other: 'Network | None') -> int:
        if other is None:
            return 1
        if self.fitness > other.fitness:
            return 1
        if self.fitness < other.fitness:
            return -1
        return 0

    def __lt__(self, other: 'Network') -> bool:
        return self.compare_to(other) < 0

    def __gt__(self, other: 'Network') -> bool:
        return self.compare_to(other) > 0

    def visualize(self, view: bool = False) -> graphviz.Digraph:
        """
        Visualize the network using Graphviz.

        Neurons are grouped by stage from left to right; every edge is labelled
        with its weight. The bias sum of each layer is shown on its input stage.

        Parameters:
            view: If True, render the graph and open the result

        Returns:
            graphviz.Digraph object representing the network
        """
        dot = graphviz.Digraph()
        dot.attr(rankdir='LR')
        node_attrs = {'style': 'filled', 'shape': 'circle', 'penwidth': '0.5', 'fontsize': '5',
                      'width': '0.5', 'height': '0.5', 'fixedsize': 'true'}
        colors = ['lightgrey'] + ['lightblue'] * (len(self._topology) - 2) + ['white']

        for stage, size in enumerate(self._topology):
            with dot.subgraph(name=f'cluster_{stage}') as cluster:
                label = f"bias sum={self._layers[stage].biases.sum():.2f}" if stage < len(self._layers) else 'Outputs'
                cluster.attr(rank='same', label=label, style='invisible')
                for i in range(size):
                    cluster.node(f"{stage}_{i}", label=f"{stage}:{i}", fillcolor=colors[stage], **node_attrs)

        for stage, layer in enumerate(self._layers):
            for i in range(layer.neuron_count):
                for j in range(layer.output_count):
                    dot.edge(f"{stage}_{i}", f"{stage + 1}_{j}", label=f"w={layer.weights[i, j]:.2f}",
                             fontsize='5', penwidth='0.5', arrowsize='0.5')

        if view:
            dot.view(cleanup=True)

        return dot

    def __str__(self):
        return "\n".join(f"Layer_{i}:\n{layer}\n" for i, layer in enumerate(self._layers))

    def __repr__(self):
        return f"Network(topology={list(self._topology)}, fitness={self.fitness:.4f})"
