"""
Activations Package

This package provides the activation functions applied by network layers.

Exported:
    ActivationFunction:  Abstract base class, exposes forward() and derivative()
    RectifiedActivation: max(0, x)
    SigmoidActivation:   Logistic function with a configurable steepness coefficient
    TanhActivation:      Hyperbolic tangent
    activations:         Dictionary mapping activation names to classes
    activation_codes:    Dictionary mapping activation names to 3-letter codes
    get_activation:      Build an activation function from its name
"""

from evonet.activations.basic_activations import (
    ActivationFunction,
    RectifiedActivation,
    SigmoidActivation,
    TanhActivation,
    activations,
    activation_codes,
    get_activation
)

__all__ = [
    'ActivationFunction',
    'RectifiedActivation',
    'SigmoidActivation',
    'TanhActivation',
    'activations',
    'activation_codes',
    'get_activation'
]
