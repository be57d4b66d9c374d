"""
Network Layer Module

This module implements the Layer class, one fully connected stage of a
feedforward network: a dense weight matrix from N input neurons to M output
neurons, a bias vector, and the activation function applied to the outputs.

Classes:
    Layer: Fully connected layer with evolvable weights and biases
"""

import numpy as np
from typing import TYPE_CHECKING

from evonet.activations import SigmoidActivation
from evonet.errors      import NullActivation, ShapeMismatch
if TYPE_CHECKING:
    from evonet.activations import ActivationFunction

def uniform(rng: np.random.Generator, min_value: float, max_value: float, size=None):
    """
    Draw uniform values spanning |max_value - min_value| upwards from 'min_value'.
    """
    return min_value + rng.random(size) * abs(max_value - min_value)

class Layer:
    """
    A fully connected layer of a feedforward network.

    The weights are stored as a C-contiguous (N, M) float64 array, that is a
    flat row-major buffer: weights[i, j] is the strength of the connection
    from input neuron i to output neuron j, and the flat index of that entry
    is i*M + j. The shape never changes after construction; only the values
    are overwritten, in place.

    There is one bias per *input* neuron (N of them) and the whole bias
    vector is summed into every output:

        out[j] = f( sum_i inputs[i] * weights[i, j] + sum_i biases[i] )

    Public Attributes:
        neuron_count:        Number of input neurons (N)
        output_count:        Number of output neurons (M)

    Public Properties:
        weights:             (N, M) weight array
        biases:              (N,) bias array
        activation_function: Activation applied to every output sum
        weight_count:        Number of evolvable values (N*M + N)

    Public Methods:
        set_weights(values):          Overwrite all weights from a flat sequence
        set_biases(values):           Overwrite all biases
        calculate(inputs):            Propagate inputs through the layer
        mutate(chance, magnitude, rng): Randomly perturb weights and biases
        randomize_weights(min, max, rng): Draw new uniform weights
        randomize_biases(min, max, rng):  Draw new uniform biases
        deep_copy():                  Copy with independent storage
        set_activation_function(fn):  Swap the activation function
    """

    def __init__(self, neuron_count: int, output_count: int):
        """
        Create a layer with all weights and biases set to zero.

        Parameters:
            neuron_count: Number of neurons feeding this layer
            output_count: Number of neurons this layer feeds, i.e. those of the next stage
        """
        self.neuron_count = int(neuron_count)
        self.output_count = int(output_count)

        self._weights = np.zeros((self.neuron_count, self.output_count), dtype=np.float64)
        self._biases  = np.zeros(self.neuron_count, dtype=np.float64)
        self._activation_function: 'ActivationFunction' = SigmoidActivation()

    @property
    def weights(self) -> np.ndarray:
        return self._weights

    @property
    def biases(self) -> np.ndarray:
        return self._biases

    @property
    def activation_function(self) -> 'ActivationFunction':
        return self._activation_function

    @property
    def weight_count(self) -> int:
        return self._weights.size + self._biases.size

    def set_weights(self, values):
        """
        Overwrite the weights with the given values.

        The values are consumed in neuron order: for a layer with 2 neurons
        feeding 3 outputs, values[0:3] are the weights from neuron 0 to outputs
        0-2 and values[3:6] the weights from neuron 1 to outputs 0-2.

        Parameters:
            values: Flat sequence of exactly N*M numbers
        """
        values = np.asarray(values, dtype=np.float64).ravel()
        if values.size != self._weights.size:
            raise ShapeMismatch("weights", self._weights.size, values.size)
        self._weights[...] = values.reshape(self._weights.shape)

    def set_biases(self, values):
        """
        Overwrite the biases with the given values (exactly N of them).
        """
        values = np.asarray(values, dtype=np.float64).ravel()
        if values.size != self._biases.size:
            raise ShapeMismatch("biases", self._biases.size, values.size)
        self._biases[...] = values

    def calculate(self, inputs) -> np.ndarray:
        """
        Process the given inputs using the current weights.

        Parameters:
            inputs: Sequence of exactly N input values

        Returns:
            A new array holding the M activated outputs
        """
        inputs = np.asarray(inputs, dtype=np.float64)
        if inputs.ndim != 1 or inputs.size != self.neuron_count:
            raise ShapeMismatch("inputs", self.neuron_count, inputs.size)

        sums = inputs @ self._weights + self._biases.sum()
        return np.asarray(self._activation_function.forward(sums), dtype=np.float64)

    def mutate(self, chance: float, magnitude: float, rng: np.random.Generator):
        """
        Perturb weights and biases in place.

        Each value is considered independently: a uniform draw in [0, 1) at or
        below 'chance' adds a uniform offset in [-magnitude, +magnitude].

        Parameters:
            chance:    Probability that a given value is perturbed
            magnitude: Largest absolute perturbation
            rng:       Source of randomness
        """
        for values in (self._weights, self._biases):
            mask = rng.random(values.shape) <= chance
            offsets = uniform(rng, -magnitude, magnitude, values.shape)
            values[mask] += offsets[mask]

    def randomize_weights(self, min_value: float, max_value: float, rng: np.random.Generator):
        self._weights[...] = uniform(rng, min_value, max_value, self._weights.shape)

    def randomize_biases(self, min_value: float, max_value: float, rng: np.random.Generator):
        self._biases[...] = uniform(rng, min_value, max_value, self._biases.shape)

    def deep_copy(self) -> 'Layer':
        """
        Copy this layer, including its weights and biases.

        The copy owns its storage; the activation function is shared.
        """
        layer = Layer(self.neuron_count, self.output_count)
        layer._weights = self._weights.copy()
        layer._biases  = self._biases.copy()
        layer._activation_function = self._activation_function
        return layer

    def set_activation_function(self, fn: 'ActivationFunction'):
        if fn is None:
            raise NullActivation("a layer needs an activation function")
        self._activation_function = fn

    def __str__(self):
        lines = ["Weights"]
        for i in range(self.neuron_count):
            lines.append(" ".join(f"[{i},{j}]: {self._weights[i, j]:.2f}" for j in range(self.output_count)))
        lines.append("Biases")
        lines.append(" ".join(f"[{i}]: {b:.2f}" for i, b in enumerate(self._biases)))
        return "\n".join(lines)

    def __repr__(self):
        return (f"Layer(neurons={self.neuron_count}, outputs={self.output_count}, "
                f"activation={self._activation_function!r})")
