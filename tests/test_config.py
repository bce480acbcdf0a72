"""
Tests for YAML configuration loading and saving.

Run with: python -m pytest tests/test_config.py -v
"""

import pytest

from neuronlab import config
from neuronlab.neuron import NeuronSession
from neuronlab.config import (
    DEFAULT_SETTINGS,
    get_dashboard_settings,
    get_config_path,
    get_sampler_settings,
    get_viewport_settings,
    load_config,
    load_settings,
    merge_settings,
    save_settings,
    use_config,
)


@pytest.fixture
def active_config(monkeypatch, tmp_path):
    """Point the active config at a temp file, restored after the test."""
    monkeypatch.setattr(config, '_active_config', config._active_config)
    path = tmp_path / 'config.yaml'
    use_config(path)
    return path


class TestMerge:
    """Tests for overlaying a loaded file onto the defaults."""

    def test_nothing_loaded_gives_defaults(self):
        assert merge_settings(None) == DEFAULT_SETTINGS

    def test_defaults_are_not_shared(self):
        settings = merge_settings(None)
        settings['viewport']['zoom_max'] = 9.0
        assert DEFAULT_SETTINGS['viewport']['zoom_max'] == 1.5

    def test_partial_section_keeps_other_keys(self):
        settings = merge_settings({'viewport': {'zoom_max': 3.0}})
        assert settings['viewport']['zoom_max'] == 3.0
        assert settings['viewport']['zoom_min'] == 0.2
        assert settings['sampler'] == DEFAULT_SETTINGS['sampler']

    def test_empty_section_keeps_defaults(self):
        settings = merge_settings({'viewport': None, 'neuron': {'max_inputs': 3}})
        assert settings['viewport'] == DEFAULT_SETTINGS['viewport']
        assert settings['neuron']['max_inputs'] == 3


class TestFiles:
    """Tests for reading and writing config.yaml."""

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / 'absent.yaml')

    def test_missing_file_means_defaults(self, tmp_path):
        assert load_settings(tmp_path / 'absent.yaml') == DEFAULT_SETTINGS

    def test_empty_file_means_defaults(self, tmp_path):
        path = tmp_path / 'config.yaml'
        path.write_text('')
        assert load_settings(path) == DEFAULT_SETTINGS

    def test_bare_section_header_in_yaml(self, tmp_path):
        path = tmp_path / 'config.yaml'
        path.write_text('viewport:\nsampler:\n  cache_size: 8\n')
        settings = load_settings(path)
        assert settings['viewport'] == DEFAULT_SETTINGS['viewport']
        assert settings['sampler']['cache_size'] == 8
        assert NeuronSession(settings=settings).mapper.width == 400

    def test_save_and_reload(self, tmp_path):
        path = tmp_path / 'config.yaml'
        settings = merge_settings({'neuron': {'max_inputs': 4}})
        assert save_settings(settings, path) == path
        assert load_settings(path)['neuron']['max_inputs'] == 4

    def test_use_config_switches_default_path(self, active_config):
        assert get_config_path() == active_config
        active_config.write_text('dashboard:\n  port: 9000\n')
        assert get_dashboard_settings()['port'] == 9000

    def test_save_without_path_writes_active_config(self, active_config):
        save_settings(merge_settings({'sampler': {'samples_per_view': 500}}))
        assert active_config.exists()
        assert get_sampler_settings()['samples_per_view'] == 500


class TestAccessors:
    """Tests for section accessors."""

    def test_sections(self):
        settings = merge_settings(None)
        assert get_dashboard_settings(settings)['port'] == 8050
        assert get_viewport_settings(settings)['width'] == 400
