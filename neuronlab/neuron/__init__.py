"""
Neuron core - the numeric pipeline behind the simulator

aggregation -> bias -> activation -> coordinate mapping

Core Components:
- ACTIVATIONS / get_activation: closed catalog of activation functions
- AGGREGATIONS / get_aggregation: Sum, Product, Max, Min over value × weight
- evaluate: one forward pass of the neuron
- CurveSampler: memoized dense samples of the active curve
- CoordinateMapper: world <-> screen affine transform with pan/zoom
- InteractionController: Idle/Dragging state machine for pan and zoom
- NeuronSession: mutation operations and snapshots for the UI
"""

from .errors import (
    NeuronLabError,
    InvalidNumericInput,
    UnknownFunctionError,
    InvariantViolation,
)
from .activations import ACTIVATIONS, ActivationFunction, ParamSpec, get_activation, list_activations
from .aggregations import AGGREGATIONS, AggregationFunction, get_aggregation
from .evaluator import Input, NeuronConfig, Evaluation, evaluate, evaluate_config
from .sampler import CurveSampler, CurveSamples
from .viewport import CoordinateMapper, ViewportState
from .interaction import DragState, InteractionController, translate_relayout
from .session import NeuronSession, NeuronSnapshot

__all__ = [
    'NeuronLabError',
    'InvalidNumericInput',
    'UnknownFunctionError',
    'InvariantViolation',
    'ACTIVATIONS',
    'ActivationFunction',
    'ParamSpec',
    'get_activation',
    'list_activations',
    'AGGREGATIONS',
    'AggregationFunction',
    'get_aggregation',
    'Input',
    'NeuronConfig',
    'Evaluation',
    'evaluate',
    'evaluate_config',
    'CurveSampler',
    'CurveSamples',
    'CoordinateMapper',
    'ViewportState',
    'DragState',
    'InteractionController',
    'translate_relayout',
    'NeuronSession',
    'NeuronSnapshot',
]
