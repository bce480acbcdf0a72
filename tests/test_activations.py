"""
Tests for the activation registry.

Run with: python -m pytest tests/test_activations.py -v
"""

import math

import numpy as np
import pytest

from neuronlab.neuron.activations import (
    ACTIVATIONS,
    DEFAULT_ACTIVATION,
    LEAKY_SLOPE,
    get_activation,
    list_activations,
)
from neuronlab.neuron.errors import UnknownFunctionError


class TestRegistry:
    """Tests for lookup and catalog metadata."""

    def test_catalog_order(self):
        assert list(ACTIVATIONS) == ['Sigmoid', 'Tanh', 'ReLU', 'Leaky ReLU', 'Linear', 'Step', 'Sign']
        assert DEFAULT_ACTIVATION == 'Sigmoid'

    def test_unknown_name_raises(self):
        with pytest.raises(UnknownFunctionError) as exc_info:
            get_activation('Swish')
        assert exc_info.value.kind == 'activation'
        assert 'Swish' in str(exc_info.value)
        assert 'Sigmoid' in str(exc_info.value)

    def test_unknown_name_is_a_key_error(self):
        with pytest.raises(KeyError):
            get_activation('swish')

    def test_list_activations_metadata(self):
        catalog = list_activations()
        assert catalog['Sigmoid']['params'] == ['gain']
        assert catalog['Linear']['params'] == ['slope']
        assert catalog['ReLU']['params'] == []
        assert catalog['Tanh']['range'] == (-1.0, 1.0)

    def test_every_activation_has_derivative(self):
        for act in ACTIVATIONS.values():
            assert act.has_derivative


class TestValues:
    """Tests for the function values themselves."""

    def test_sigmoid_at_two(self):
        assert get_activation('Sigmoid')(2.0) == pytest.approx(1 / (1 + math.exp(-2)))

    def test_sigmoid_gain_scales_input(self):
        sigmoid = get_activation('Sigmoid')
        assert sigmoid(1.0, {'gain': 3}) == pytest.approx(sigmoid(3.0))

    def test_sigmoid_saturates_without_warning(self):
        sigmoid = get_activation('Sigmoid')
        with np.errstate(all='raise'):
            assert sigmoid(-1000.0) == 0.0
        assert sigmoid(1000.0) == 1.0

    def test_tanh_gain(self):
        assert get_activation('Tanh')(0.5, {'gain': 2}) == pytest.approx(math.tanh(1.0))

    def test_relu(self):
        relu = get_activation('ReLU')
        assert relu(-3.0) == 0.0
        assert relu(2.5) == 2.5

    def test_leaky_relu(self):
        leaky = get_activation('Leaky ReLU')
        assert leaky(-10.0) == pytest.approx(-10.0 * LEAKY_SLOPE)
        assert leaky(4.0) == 4.0

    def test_linear_divides_and_clamps(self):
        linear = get_activation('Linear')
        assert linear(3.7 * 10, {'slope': 10}) == 1.0
        assert linear(5.0, {'slope': 10}) == pytest.approx(0.5)
        assert linear(-50.0, {'slope': 10}) == -1.0

    def test_step_and_sign_at_zero(self):
        """Zero counts as non-negative for both threshold units."""
        assert get_activation('Step')(0.0) == 1.0
        assert get_activation('Step')(-0.001) == 0.0
        assert get_activation('Sign')(0.0) == 1.0
        assert get_activation('Sign')(-2.0) == -1.0

    def test_scalar_in_scalar_out(self):
        assert isinstance(get_activation('Tanh')(1.0), float)

    def test_vectorised(self):
        xs = np.linspace(-5, 5, 11)
        ys = get_activation('ReLU')(xs)
        assert isinstance(ys, np.ndarray)
        assert ys.shape == xs.shape
        np.testing.assert_allclose(ys, np.maximum(xs, 0))


class TestDerivatives:
    """Tests for closed-form derivatives against finite differences."""

    @pytest.mark.parametrize("name, params", [
        ('Sigmoid', {'gain': 1}),
        ('Sigmoid', {'gain': 4}),
        ('Tanh', {'gain': 2}),
    ])
    def test_smooth_derivatives_match_finite_difference(self, name, params):
        act = get_activation(name)
        h = 1e-6
        for x in (-1.5, -0.2, 0.0, 0.7):
            numeric = (act(x + h, params) - act(x - h, params)) / (2 * h)
            assert act.grad(x, params) == pytest.approx(numeric, rel=1e-4, abs=1e-8)

    def test_piecewise_derivatives(self):
        assert get_activation('ReLU').grad(2.0) == 1.0
        assert get_activation('ReLU').grad(-2.0) == 0.0
        assert get_activation('Leaky ReLU').grad(-2.0) == LEAKY_SLOPE
        assert get_activation('Linear').grad(5.0, {'slope': 10}) == pytest.approx(0.1)
        assert get_activation('Linear').grad(50.0, {'slope': 10}) == 0.0

    def test_threshold_units_are_flat(self):
        assert get_activation('Step').grad(3.0) == 0.0
        assert get_activation('Sign').grad(-3.0) == 0.0


class TestParams:
    """Tests for parameter resolution and clamping."""

    def test_defaults_fill_missing(self):
        assert get_activation('Sigmoid').resolve_params(None) == {'gain': 1.0}
        assert get_activation('ReLU').resolve_params({'gain': 5}) == {}

    def test_out_of_domain_is_clamped(self):
        sigmoid = get_activation('Sigmoid')
        assert sigmoid.resolve_params({'gain': 0.1}) == {'gain': 1.0}
        assert sigmoid.resolve_params({'gain': 500}) == {'gain': 20.0}
        assert get_activation('Linear').resolve_params({'slope': 0}) == {'slope': 1.0}

    def test_param_spec_lookup(self):
        linear = get_activation('Linear')
        assert linear.param_spec('slope').maximum == 100.0
        assert linear.param_spec('gain') is None


class TestOutputRanges:
    """Tests that every activation stays inside its stated range."""

    @pytest.mark.parametrize("name, gain", [
        ('Sigmoid', 1.0), ('Sigmoid', 4.0), ('Sigmoid', 20.0),
        ('Tanh', 1.0), ('Tanh', 4.0), ('Tanh', 20.0),
    ])
    def test_smooth_functions_in_open_interval(self, name, gain):
        # Beyond |g·x| ~ 15 doubles round to the bound itself
        act = get_activation(name)
        lo, hi = act.output_range
        ys = act(np.linspace(-15.0 / gain, 15.0 / gain, 2001), {'gain': gain})
        assert np.all(ys > lo)
        assert np.all(ys < hi)

    @pytest.mark.parametrize("name, gain", [('Sigmoid', 20.0), ('Tanh', 20.0)])
    def test_saturation_stays_in_closed_interval(self, name, gain):
        act = get_activation(name)
        lo, hi = act.output_range
        ys = act(np.linspace(-30.0, 30.0, 2001), {'gain': gain})
        assert np.all(np.isfinite(ys))
        assert np.all((ys >= lo) & (ys <= hi))

    def test_threshold_units_take_two_values(self):
        xs = np.linspace(-30.0, 30.0, 2001)
        assert set(np.unique(get_activation('Step')(xs))) <= {0.0, 1.0}
        assert set(np.unique(get_activation('Sign')(xs))) <= {-1.0, 1.0}

    @pytest.mark.parametrize("slope", [1.0, 10.0, 100.0])
    def test_linear_in_closed_interval(self, slope):
        ys = get_activation('Linear')(np.linspace(-300.0, 300.0, 2001), {'slope': slope})
        assert np.all((ys >= -1.0) & (ys <= 1.0))
        assert ys.min() == -1.0
        assert ys.max() == 1.0
