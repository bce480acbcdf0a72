"""
Activation Registry - the closed catalog of neuron nonlinearities

Each entry maps a real number to a real number and carries:
- its closed-form derivative
- its tunable parameters (gain, slope) with domain limits
- display metadata (formula, derivative formula, output range)

All functions are vectorised: they accept a scalar or a numpy array.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

import numpy as np

from .errors import UnknownFunctionError
from .parsing import clamp

LEAKY_SLOPE = 0.01


def sigmoid(x: np.ndarray, gain: float = 1.0) -> np.ndarray:
    """Logistic curve, bounded (0, 1). Saturates to 0.0/1.0 for large |x|."""
    with np.errstate(over='ignore'):
        return 1.0 / (1.0 + np.exp(-gain * x))


def sigmoid_derivative(x: np.ndarray, gain: float = 1.0) -> np.ndarray:
    s = sigmoid(x, gain)
    return gain * s * (1.0 - s)


def tanh(x: np.ndarray, gain: float = 1.0) -> np.ndarray:
    """Hyperbolic tangent, bounded (-1, 1)."""
    return np.tanh(gain * x)


def tanh_derivative(x: np.ndarray, gain: float = 1.0) -> np.ndarray:
    return gain * (1.0 - np.tanh(gain * x) ** 2)


def relu(x: np.ndarray) -> np.ndarray:
    return np.maximum(0.0, x)


def relu_derivative(x: np.ndarray) -> np.ndarray:
    return np.where(x > 0, 1.0, 0.0)


def leaky_relu(x: np.ndarray) -> np.ndarray:
    return np.where(x > 0, x, LEAKY_SLOPE * x)


def leaky_relu_derivative(x: np.ndarray) -> np.ndarray:
    return np.where(x > 0, 1.0, LEAKY_SLOPE)


def linear(x: np.ndarray, slope: float = 1.0) -> np.ndarray:
    """Identity scaled by 1/slope and clamped to [-1, 1] so the plot stays bounded."""
    return np.clip(x / slope, -1.0, 1.0)


def linear_derivative(x: np.ndarray, slope: float = 1.0) -> np.ndarray:
    return np.where(np.abs(x / slope) <= 1.0, 1.0 / slope, 0.0)


def step(x: np.ndarray) -> np.ndarray:
    """Heaviside step; 0 maps to 1."""
    return np.where(x >= 0, 1.0, 0.0)


def sign(x: np.ndarray) -> np.ndarray:
    """Sign with 0 mapped to 1, so the output is always -1 or 1."""
    return np.where(x >= 0, 1.0, -1.0)


def flat_derivative(x: np.ndarray) -> np.ndarray:
    return np.zeros_like(np.asarray(x, dtype=float))


@dataclass(frozen=True)
class ParamSpec:
    """A tunable activation parameter and its allowed domain"""
    name: str
    label: str
    default: float
    minimum: float
    maximum: Optional[float] = None
    step: float = 0.1

    def clamp(self, value: float) -> float:
        return clamp(value, self.minimum, self.maximum)


@dataclass(frozen=True)
class ActivationFunction:
    """Wrapper for an activation function with its derivative and metadata"""
    name: str
    func: Callable
    derivative: Optional[Callable]
    formula: str
    derivative_formula: str
    output_range: Tuple[float, float]
    description: str
    params: Tuple[ParamSpec, ...] = field(default_factory=tuple)

    @property
    def has_derivative(self) -> bool:
        return self.derivative is not None

    def param_spec(self, name: str) -> Optional[ParamSpec]:
        for spec in self.params:
            if spec.name == name:
                return spec
        return None

    def default_params(self) -> Dict[str, float]:
        return {spec.name: spec.default for spec in self.params}

    def resolve_params(self, values: Optional[Dict[str, float]] = None) -> Dict[str, float]:
        """Fill in defaults, drop unknown keys and clamp everything into its domain"""
        values = values or {}
        resolved = {}
        for spec in self.params:
            raw = values.get(spec.name, spec.default)
            resolved[spec.name] = spec.clamp(float(raw))
        return resolved

    def __call__(self, x, params: Optional[Dict[str, float]] = None):
        return self._apply(self.func, x, params)

    def grad(self, x, params: Optional[Dict[str, float]] = None):
        if self.derivative is None:
            return None
        return self._apply(self.derivative, x, params)

    def _apply(self, fn: Callable, x, params):
        y = fn(np.asarray(x, dtype=float), **self.resolve_params(params))
        if np.ndim(x) == 0:
            return float(y)
        return y

    def __repr__(self):
        return f"ActivationFunction({self.name})"


GAIN = ParamSpec(name='gain', label='Gain', default=1.0, minimum=1.0, maximum=20.0)
SLOPE = ParamSpec(name='slope', label='Slope', default=1.0, minimum=1.0, maximum=100.0, step=1.0)


# Registry, in selector order
ACTIVATIONS: Dict[str, ActivationFunction] = {
    'Sigmoid': ActivationFunction(
        name='Sigmoid',
        func=sigmoid,
        derivative=sigmoid_derivative,
        formula='σ(x) = 1 / (1 + e^(−g·x))',
        derivative_formula="σ'(x) = g · σ(x) · (1 − σ(x))",
        output_range=(0.0, 1.0),
        description='Smooth, bounded between 0 and 1',
        params=(GAIN,),
    ),
    'Tanh': ActivationFunction(
        name='Tanh',
        func=tanh,
        derivative=tanh_derivative,
        formula='tanh(g·x)',
        derivative_formula="g · (1 − tanh²(g·x))",
        output_range=(-1.0, 1.0),
        description='Smooth, zero-centred, bounded between -1 and 1',
        params=(GAIN,),
    ),
    'ReLU': ActivationFunction(
        name='ReLU',
        func=relu,
        derivative=relu_derivative,
        formula='max(0, x)',
        derivative_formula='1 if x > 0 else 0',
        output_range=(0.0, np.inf),
        description='Rectified linear unit, piecewise linear and sparse',
    ),
    'Leaky ReLU': ActivationFunction(
        name='Leaky ReLU',
        func=leaky_relu,
        derivative=leaky_relu_derivative,
        formula=f'x if x > 0 else {LEAKY_SLOPE}·x',
        derivative_formula=f'1 if x > 0 else {LEAKY_SLOPE}',
        output_range=(-np.inf, np.inf),
        description='ReLU with a small gradient for negative inputs',
    ),
    'Linear': ActivationFunction(
        name='Linear',
        func=linear,
        derivative=linear_derivative,
        formula='clip(x / k, −1, 1)',
        derivative_formula='1/k inside [−k, k], else 0',
        output_range=(-1.0, 1.0),
        description='Identity divided by the slope, clamped to [-1, 1]',
        params=(SLOPE,),
    ),
    'Step': ActivationFunction(
        name='Step',
        func=step,
        derivative=flat_derivative,
        formula='1 if x ≥ 0 else 0',
        derivative_formula='0 (undefined at x = 0)',
        output_range=(0.0, 1.0),
        description='Threshold unit, fires when the input reaches 0',
    ),
    'Sign': ActivationFunction(
        name='Sign',
        func=sign,
        derivative=flat_derivative,
        formula='1 if x ≥ 0 else −1',
        derivative_formula='0 (undefined at x = 0)',
        output_range=(-1.0, 1.0),
        description='Bipolar threshold unit',
    ),
}

DEFAULT_ACTIVATION = 'Sigmoid'


def get_activation(name: str) -> ActivationFunction:
    """Get an activation function by name.

    Raises:
        UnknownFunctionError: if the name is not registered
    """
    if name not in ACTIVATIONS:
        raise UnknownFunctionError('activation', name, ACTIVATIONS.keys())
    return ACTIVATIONS[name]


def list_activations() -> Dict[str, Dict]:
    """List all activations with their display metadata."""
    return {
        name: {
            'formula': act.formula,
            'derivative_formula': act.derivative_formula,
            'range': act.output_range,
            'description': act.description,
            'params': [spec.name for spec in act.params],
        }
        for name, act in ACTIVATIONS.items()
    }
