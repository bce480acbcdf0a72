"""
Aggregation Registry - how weighted inputs are reduced to one number

Every aggregation works on the per-input products value × weight:
- Sum:     Σ (value × weight)
- Product: Π (value × weight)
- Max/Min: max/min over the products

Bias is never part of the reduction. It is always added afterwards as a
final offset, whatever the aggregation, and the formula strings show it
that way.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence, Tuple

import numpy as np

from .errors import InvariantViolation, UnknownFunctionError


def format_operand(value: float) -> str:
    """Shortest readable form of an operand: 2 -> '2', -0.5 -> '-0.5'"""
    value = float(value)
    if value.is_integer() and abs(value) < 1e15:
        return str(int(value))
    return repr(value)


def format_term(item) -> str:
    return f"({format_operand(item.value)} × {format_operand(item.weight)})"


def weighted_products(inputs: Sequence) -> np.ndarray:
    """value × weight for each input, in input order"""
    return np.array([item.value * item.weight for item in inputs], dtype=float)


def _join_with(operator: str) -> Callable[[List[str]], str]:
    def join(terms: List[str]) -> str:
        return f" {operator} ".join(terms)
    return join


def _wrap_in(name: str) -> Callable[[List[str]], str]:
    def wrap(terms: List[str]) -> str:
        return f"{name}({', '.join(terms)})"
    return wrap


@dataclass(frozen=True)
class AggregationFunction:
    """A named reduction over weighted inputs plus its display formatter"""
    name: str
    reduce: Callable[[np.ndarray], float]
    render_terms: Callable[[List[str]], str]
    symbol: str

    def __call__(self, inputs: Sequence) -> float:
        if len(inputs) == 0:
            raise InvariantViolation(f"{self.name} aggregation needs at least one input")
        # Product may overflow to inf
        with np.errstate(over='ignore'):
            return float(self.reduce(weighted_products(inputs)))

    def format(self, inputs: Sequence, bias: float, result: float) -> str:
        """Human-readable computation, e.g. '(2 × 3) + (-1 × 4) + 0.5 = 2.500'"""
        text = self.render_terms([format_term(item) for item in inputs])
        if bias != 0:
            text += f" + {format_operand(bias)}"
        return f"{text} = {result:.3f}"

    def aggregate(self, inputs: Sequence, bias: float = 0.0) -> Tuple[float, str]:
        """Reduce the inputs and add the bias

        Returns:
            (aggregated_value, formula_string)
        """
        aggregated = self(inputs) + bias
        return aggregated, self.format(inputs, bias, aggregated)

    def __repr__(self):
        return f"AggregationFunction({self.name})"


AGGREGATIONS: Dict[str, AggregationFunction] = {
    'Sum': AggregationFunction(
        name='Sum', reduce=np.sum, render_terms=_join_with('+'), symbol='Σ'),
    'Product': AggregationFunction(
        name='Product', reduce=np.prod, render_terms=_join_with('×'), symbol='Π'),
    'Max': AggregationFunction(
        name='Max', reduce=np.max, render_terms=_wrap_in('max'), symbol='max'),
    'Min': AggregationFunction(
        name='Min', reduce=np.min, render_terms=_wrap_in('min'), symbol='min'),
}

DEFAULT_AGGREGATION = 'Sum'


def get_aggregation(name: str) -> AggregationFunction:
    """Get an aggregation function by name.

    Raises:
        UnknownFunctionError: if the name is not registered
    """
    if name not in AGGREGATIONS:
        raise UnknownFunctionError('aggregation', name, AGGREGATIONS.keys())
    return AGGREGATIONS[name]
