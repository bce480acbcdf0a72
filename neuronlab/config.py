"""Configuration management for NeuronLab

Settings live in a YAML file (./config.yaml next to the package by default).
Missing keys fall back to DEFAULT_SETTINGS, so an empty or absent file is a
valid configuration.
"""
import copy
import yaml
from pathlib import Path
from typing import Dict, Any, Optional

# Default config location
DEFAULT_CONFIG = Path(__file__).parent.parent / "config.yaml"
EXAMPLE_CONFIG = Path(__file__).parent.parent / "config.yaml.example"

DEFAULT_SETTINGS: Dict[str, Any] = {
    'dashboard': {
        'host': '0.0.0.0',
        'port': 8050,
        'debug': False,
        'log_level': 'INFO',
    },
    'neuron': {
        'max_inputs': 10,
        'initial_inputs': 2,
    },
    'viewport': {
        'width': 400,
        'height': 300,
        'x_range': [-20.0, 20.0],
        'y_range': [-15.0, 15.0],
        'zoom_min': 0.2,
        'zoom_max': 1.5,
        'wheel_factor': 1.1,
        'button_factor': 1.2,
    },
    'sampler': {
        'samples_per_view': 1000,
        'margin_fraction': 0.5,
        'cache_size': 32,
    },
}

_active_config = DEFAULT_CONFIG

def use_config(config_path: Path):
    """Make config_path the file read when no explicit path is given (--config)"""
    global _active_config
    _active_config = Path(config_path).expanduser()

def get_config_path() -> Path:
    return _active_config

def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration from YAML file

    Args:
        config_path: Path to config file (default: the active config, ./config.yaml)

    Returns:
        Configuration dictionary, exactly as written in the file

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    if config_path is None:
        config_path = _active_config
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            f"Copy {EXAMPLE_CONFIG} to {config_path} and customize"
        )

    with open(config_path) as f:
        return yaml.safe_load(f) or {}

def merge_settings(loaded: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Overlay loaded sections onto a copy of DEFAULT_SETTINGS"""
    settings = copy.deepcopy(DEFAULT_SETTINGS)
    for section, values in (loaded or {}).items():
        if values is None:
            # An empty section in the YAML keeps its defaults
            continue
        if isinstance(values, dict) and isinstance(settings.get(section), dict):
            settings[section] = {**settings[section], **values}
        else:
            settings[section] = values
    return settings

def load_settings(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration merged over the defaults; a missing file means defaults"""
    try:
        loaded = load_config(config_path)
    except FileNotFoundError:
        loaded = {}
    return merge_settings(loaded)

def save_settings(settings: Dict[str, Any], config_path: Optional[Path] = None) -> Path:
    """Write settings to YAML and return the path written"""
    config_path = Path(config_path) if config_path is not None else _active_config
    with open(config_path, 'w') as f:
        yaml.dump(settings, f, default_flow_style=False, sort_keys=False)
    return config_path

def get_dashboard_settings(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Get web server settings"""
    if config is None:
        config = load_settings()
    return config['dashboard']

def get_neuron_settings(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Get input count limits"""
    if config is None:
        config = load_settings()
    return config['neuron']

def get_viewport_settings(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Get plot geometry and zoom limits"""
    if config is None:
        config = load_settings()
    return config['viewport']

def get_sampler_settings(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Get curve sampling density"""
    if config is None:
        config = load_settings()
    return config['sampler']
