"""
Neuron Evaluator

aggregated = aggregation(inputs) + bias
output     = activation(aggregated, params)
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Union

from .activations import DEFAULT_ACTIVATION, ActivationFunction, get_activation
from .aggregations import DEFAULT_AGGREGATION, AggregationFunction, get_aggregation


@dataclass
class Input:
    """One weighted input line into the neuron"""
    id: str
    value: float = 0.0
    weight: float = 1.0

    def to_dict(self) -> Dict:
        return {'id': self.id, 'value': self.value, 'weight': self.weight}

    @classmethod
    def from_dict(cls, data: Dict) -> 'Input':
        return cls(id=str(data['id']), value=float(data['value']), weight=float(data['weight']))


@dataclass
class NeuronConfig:
    """Everything besides the inputs that determines the neuron's output"""
    aggregation: str = DEFAULT_AGGREGATION
    activation: str = DEFAULT_ACTIVATION
    bias: float = 0.0
    # activation name -> {param name -> value}; remembered across switches
    params: Dict[str, Dict[str, float]] = field(default_factory=dict)

    @property
    def aggregation_fn(self) -> AggregationFunction:
        return get_aggregation(self.aggregation)

    @property
    def activation_fn(self) -> ActivationFunction:
        return get_activation(self.activation)

    def activation_params(self, name: Optional[str] = None) -> Dict[str, float]:
        name = name or self.activation
        return get_activation(name).resolve_params(self.params.get(name))

    def to_dict(self) -> Dict:
        return {
            'aggregation': self.aggregation,
            'activation': self.activation,
            'bias': self.bias,
            'params': {name: dict(values) for name, values in self.params.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'NeuronConfig':
        return cls(
            aggregation=data.get('aggregation', DEFAULT_AGGREGATION),
            activation=data.get('activation', DEFAULT_ACTIVATION),
            bias=float(data.get('bias', 0.0)),
            params={name: dict(values) for name, values in data.get('params', {}).items()},
        )


@dataclass(frozen=True)
class Evaluation:
    aggregated: float
    output: float
    derivative: Optional[float]
    formula: str
    output_formula: str


def evaluate(
    inputs: Sequence[Input],
    aggregation: Union[str, AggregationFunction],
    bias: float,
    activation: Union[str, ActivationFunction],
    params: Optional[Dict[str, float]] = None
) -> Evaluation:
    """
    Run one forward pass of the neuron.

    Args:
        inputs: Non-empty ordered inputs
        aggregation: Reduction applied to value × weight products, or its name
        bias: Additive offset applied after aggregation
        activation: Nonlinearity applied to the aggregated value, or its name
        params: Activation parameters (gain/slope); missing ones use defaults

    Returns:
        Evaluation with the aggregated value, output, derivative at the
        operating point and the two display formulas

    Raises:
        InvariantViolation: if inputs is empty
        UnknownFunctionError: if a name is not registered
    """
    if isinstance(aggregation, str):
        aggregation = get_aggregation(aggregation)
    if isinstance(activation, str):
        activation = get_activation(activation)

    aggregated, formula = aggregation.aggregate(inputs, bias)
    output = activation(aggregated, params)
    derivative = activation.grad(aggregated, params)

    return Evaluation(
        aggregated=aggregated,
        output=output,
        derivative=derivative,
        formula=formula,
        output_formula=f"{activation.name}({aggregated:.3f}) = {output:.3f}",
    )


def evaluate_config(inputs: List[Input], config: NeuronConfig) -> Evaluation:
    """evaluate() with everything looked up from a NeuronConfig"""
    return evaluate(
        inputs,
        config.aggregation_fn,
        config.bias,
        config.activation_fn,
        config.activation_params(),
    )
