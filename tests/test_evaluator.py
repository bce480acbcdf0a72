"""
Tests for the neuron forward pass.

Run with: python -m pytest tests/test_evaluator.py -v
"""

import math
import warnings

import pytest

from neuronlab.neuron.activations import get_activation
from neuronlab.neuron.aggregations import AGGREGATIONS, get_aggregation
from neuronlab.neuron.errors import InvariantViolation, UnknownFunctionError
from neuronlab.neuron.evaluator import Input, NeuronConfig, evaluate, evaluate_config


class TestScenarios:
    """End-to-end evaluations with known answers."""

    def test_sum_sigmoid(self, scenario_one_inputs):
        result = evaluate(scenario_one_inputs, get_aggregation('Sum'), 0.0,
                          get_activation('Sigmoid'), {'gain': 1})
        assert result.aggregated == 2.0
        assert result.output == pytest.approx(0.8808, abs=1e-4)
        assert result.output_formula == 'Sigmoid(2.000) = 0.881'

    def test_step_fires_at_zero(self):
        result = evaluate([Input("1", value=5, weight=1)], 'Sum', -5.0, 'Step')
        assert result.aggregated == 0.0
        assert result.output == 1.0
        assert result.formula == '(5 × 1) + -5 = 0.000'

    def test_product_linear_clamps(self):
        inputs = [Input("1", value=2, weight=2), Input("2", value=3, weight=3)]
        result = evaluate(inputs, 'Product', 1.0, 'Linear', {'slope': 10})
        assert result.aggregated == 37.0
        assert result.output == 1.0
        assert result.derivative == 0.0

    def test_derivative_at_operating_point(self, scenario_one_inputs):
        result = evaluate(scenario_one_inputs, 'Sum', 0.0, 'Sigmoid')
        s = 1 / (1 + math.exp(-2))
        assert result.derivative == pytest.approx(s * (1 - s))

    def test_names_and_objects_are_equivalent(self, scenario_one_inputs):
        by_name = evaluate(scenario_one_inputs, 'Max', 1.0, 'Tanh', {'gain': 2})
        by_object = evaluate(scenario_one_inputs, get_aggregation('Max'), 1.0,
                             get_activation('Tanh'), {'gain': 2})
        assert by_name == by_object


class TestErrors:
    """Tests for rejected evaluations."""

    def test_empty_inputs(self):
        with pytest.raises(InvariantViolation):
            evaluate([], 'Sum', 0.0, 'Sigmoid')

    def test_unknown_activation(self, scenario_one_inputs):
        with pytest.raises(UnknownFunctionError):
            evaluate(scenario_one_inputs, 'Sum', 0.0, 'Softmax')


class TestNeuronConfig:
    """Tests for NeuronConfig."""

    def test_defaults(self):
        config = NeuronConfig()
        assert config.aggregation == 'Sum'
        assert config.activation == 'Sigmoid'
        assert config.bias == 0.0
        assert config.activation_params() == {'gain': 1.0}

    def test_params_remembered_per_activation(self):
        config = NeuronConfig(params={'Tanh': {'gain': 3.0}, 'Linear': {'slope': 5.0}})
        config.activation = 'Tanh'
        assert config.activation_params() == {'gain': 3.0}
        assert config.activation_params('Linear') == {'slope': 5.0}
        assert config.activation_params('Sigmoid') == {'gain': 1.0}

    def test_evaluate_config(self, scenario_one_inputs):
        config = NeuronConfig(aggregation='Sum', activation='ReLU', bias=-1.0)
        result = evaluate_config(scenario_one_inputs, config)
        assert result.aggregated == 1.0
        assert result.output == 1.0

    def test_dict_round_trip(self):
        config = NeuronConfig(aggregation='Min', activation='Linear', bias=0.25,
                              params={'Linear': {'slope': 4.0}})
        assert NeuronConfig.from_dict(config.to_dict()) == config

    def test_input_round_trip(self):
        item = Input("7", value=-1.5, weight=2.0)
        assert Input.from_dict(item.to_dict()) == item


class TestFiniteness:
    """Tests for IEEE behaviour of the aggregated value."""

    INPUT_SETS = [
        [Input("1", value=0, weight=0)],
        [Input("1", value=2, weight=3), Input("2", value=-1, weight=4)],
        [Input("1", value=-7.5, weight=0.1), Input("2", value=1e3, weight=-2), Input("3", value=0.5, weight=0.5)],
        [Input(str(i), value=i - 4.5, weight=(-1) ** i) for i in range(10)],
    ]

    @pytest.mark.parametrize("aggregation", list(AGGREGATIONS))
    def test_finite_inputs_give_finite_aggregate(self, aggregation):
        for inputs in self.INPUT_SETS:
            for bias in (-3.0, 0.0, 2.5):
                result = evaluate(inputs, aggregation, bias, 'Sigmoid')
                assert math.isfinite(result.aggregated)
                assert math.isfinite(result.output)

    def test_product_overflow_is_quiet_inf(self):
        inputs = [Input("1", value=1e200, weight=1), Input("2", value=1e200, weight=1)]
        with warnings.catch_warnings():
            warnings.simplefilter('error')
            result = evaluate(inputs, 'Product', 0.0, 'Sigmoid')
        assert result.aggregated == math.inf
        assert result.output == 1.0
        assert result.formula.endswith('= inf')
