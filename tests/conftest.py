"""Shared fixtures for the NeuronLab test suite."""

import sys
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from neuronlab.config import merge_settings
from neuronlab.neuron import Input, NeuronSession


@pytest.fixture
def settings():
    """Default settings, as if no config.yaml existed."""
    return merge_settings(None)


@pytest.fixture
def session(settings):
    return NeuronSession(settings=settings)


@pytest.fixture
def scenario_one_inputs():
    """(2 × 3) + (-1 × 4) = 2"""
    return [Input("1", value=2, weight=3), Input("2", value=-1, weight=4)]
