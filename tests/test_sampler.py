"""
Tests for the memoized curve sampler.

Run with: python -m pytest tests/test_sampler.py -v
"""

import numpy as np
import pytest

from neuronlab.neuron.activations import get_activation
from neuronlab.neuron.sampler import CurveSampler


@pytest.fixture
def sampler():
    return CurveSampler(samples_per_view=100, margin_fraction=0.5, cache_size=2)


class TestSampling:
    """Tests for the sampled domain and values."""

    def test_domain_includes_margin(self, sampler):
        samples = sampler.sample(get_activation('Tanh'), None, -20.0, 20.0)
        assert samples.domain == (-40.0, 40.0)
        assert len(samples) == 201

    def test_step_is_relative_to_visible_span(self, sampler):
        samples = sampler.sample(get_activation('Tanh'), None, -2.0, 2.0)
        steps = np.diff(samples.xs)
        np.testing.assert_allclose(steps, 4.0 / 100)

    def test_values_follow_activation(self, sampler):
        sigmoid = get_activation('Sigmoid')
        samples = sampler.sample(sigmoid, {'gain': 3}, -1.0, 1.0)
        np.testing.assert_allclose(samples.ys, sigmoid(samples.xs, {'gain': 3}))

    def test_restartable_iteration(self, sampler):
        samples = sampler.sample(get_activation('ReLU'), None, -1.0, 1.0)
        first = list(samples)
        assert first == list(samples)
        assert isinstance(first[0][0], float)
        assert samples.to_list()[0] == {'x': first[0][0], 'y': first[0][1]}

    def test_samples_are_read_only(self, sampler):
        samples = sampler.sample(get_activation('ReLU'), None, -1.0, 1.0)
        with pytest.raises(ValueError):
            samples.xs[0] = 99.0

    def test_empty_span_rejected(self, sampler):
        with pytest.raises(ValueError):
            sampler.sample(get_activation('ReLU'), None, 1.0, 1.0)

    def test_too_few_samples_rejected(self):
        with pytest.raises(ValueError):
            CurveSampler(samples_per_view=1)


class TestMemo:
    """Tests for memoization on (activation, params, visible extent)."""

    def test_same_key_returns_same_samples(self, sampler):
        tanh = get_activation('Tanh')
        first = sampler.sample(tanh, {'gain': 2}, -5.0, 5.0)
        assert sampler.sample(tanh, {'gain': 2.0}, -5.0, 5.0) is first

    def test_defaults_and_explicit_defaults_share_entry(self, sampler):
        tanh = get_activation('Tanh')
        assert sampler.sample(tanh, None, -5.0, 5.0) is sampler.sample(tanh, {'gain': 1.0}, -5.0, 5.0)

    def test_different_params_or_extent_resample(self, sampler):
        tanh = get_activation('Tanh')
        base = sampler.sample(tanh, None, -5.0, 5.0)
        assert sampler.sample(tanh, {'gain': 2}, -5.0, 5.0) is not base
        assert sampler.sample(tanh, None, -4.0, 5.0) is not base

    def test_oldest_entry_evicted(self, sampler):
        relu = get_activation('ReLU')
        oldest = sampler.sample(relu, None, -1.0, 1.0)
        sampler.sample(relu, None, -2.0, 2.0)
        sampler.sample(relu, None, -3.0, 3.0)
        assert sampler.cache_len == 2
        assert sampler.sample(relu, None, -1.0, 1.0) is not oldest

    def test_recent_use_protects_entry(self, sampler):
        relu = get_activation('ReLU')
        kept = sampler.sample(relu, None, -1.0, 1.0)
        sampler.sample(relu, None, -2.0, 2.0)
        sampler.sample(relu, None, -1.0, 1.0)
        sampler.sample(relu, None, -3.0, 3.0)
        assert sampler.sample(relu, None, -1.0, 1.0) is kept

    def test_clear(self, sampler):
        sampler.sample(get_activation('ReLU'), None, -1.0, 1.0)
        sampler.clear()
        assert sampler.cache_len == 0
