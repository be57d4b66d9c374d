"""
Errors raised by the network and evolution code.

All of them signal a programming or integration mistake by the caller:
they are raised synchronously and never caught inside the library.

Classes:
    ShapeMismatch:   An input, weight or bias vector has the wrong length
    InvalidTopology: A network topology cannot form any layer
    NullActivation:  An absent activation function was installed
"""

class ShapeMismatch(ValueError):
    """A value vector does not match the dimension it is assigned to."""

    def __init__(self, what: str, expected: int, actual: int):
        self.what     = what
        self.expected = expected
        self.actual   = actual
        super().__init__(f"{what}: expected {expected} values, got {actual}")


class InvalidTopology(ValueError):
    """A topology needs at least two stages, each with at least one neuron."""


class NullActivation(TypeError):
    """Raised when None is installed as an activation function."""
