import numpy as np
from abc import ABC, abstractmethod

class ActivationFunction(ABC):
    """
    Scalar transform applied elementwise by a layer after the weighted sum.

    Instances hold no mutable state, so a single instance is shared by every
    layer (and every copied network) it is installed in.

    'derivative' follows the convention of gradient code that caches the
    activated output: for sigmoid and tanh it expects the already-activated
    value, not the raw weighted sum. The evolutionary loop never calls it.
    """

    name = None

    @abstractmethod
    def forward(self, x):
        pass

    @abstractmethod
    def derivative(self, x):
        pass

    def __call__(self, x):
        return self.forward(x)

    def __repr__(self):
        return f"{type(self).__name__}()"


class RectifiedActivation(ActivationFunction):

    name = "relu"

    def forward(self, x):
        return np.maximum(0.0, x)

    def derivative(self, x):
        # same as the forward pass, not a 0/1 step
        return np.maximum(0.0, x)


class SigmoidActivation(ActivationFunction):
    """
    Logistic function 1 / (1 + exp(-coefficient * x)).

    The coefficient controls the steepness and is fixed at construction.
    """

    name = "sigmoid"

    def __init__(self, coefficient: float = 0.5):
        self._coefficient = float(coefficient)

    @property
    def coefficient(self) -> float:
        return self._coefficient

    def forward(self, x):
        Z = np.asarray(x, dtype=np.float64) * self._coefficient
        Z = np.clip(Z, -500, 500)   # exp would overflow past ~709
        return 1.0 / (1.0 + np.exp(-Z))

    def derivative(self, x):
        x = np.asarray(x, dtype=np.float64)
        return x * (1 - x)

    def __repr__(self):
        return f"SigmoidActivation(coefficient={self._coefficient})"


class TanhActivation(ActivationFunction):

    name = "tanh"

    def forward(self, x):
        return np.tanh(x)

    def derivative(self, x):
        x = np.asarray(x, dtype=np.float64)
        return 1 - x * x


activations = {
    "relu"   : RectifiedActivation,
    "sigmoid": SigmoidActivation,
    "tanh"   : TanhActivation
    }

# 3-letter identifiers for each activation function
activation_codes = {
    "relu"   : "RLU",
    "sigmoid": "SIG",
    "tanh"   : "TNH"
    }

def get_activation(name: str, **kwargs) -> ActivationFunction:
    """
    Build the activation function registered under 'name'.

    Parameters:
        name:   One of the keys of 'activations'
        kwargs: Constructor arguments (only 'coefficient' for sigmoid)

    Returns:
        A new ActivationFunction instance
    """
    if name not in activations:
        raise ValueError(f"Unknown activation function '{name}', use one of {list(activations)}")
    return activations[name](**kwargs)
