"""
Settings Page - Application-Level Configuration

Display settings that apply to every new simulator view:
- Input count limit
- Zoom range and zoom step factors
- Curve sampling density
- Debug mode (strict function-name checking)

Neuron configurations themselves are never saved; only these display
settings go to config.yaml.
"""

import logging

import dash
from dash import html, dcc, callback, Input, Output, State
import dash_bootstrap_components as dbc

from .. import __version__
from ..config import load_settings, save_settings, get_config_path
from ..neuron.activations import ACTIVATIONS
from ..neuron.aggregations import AGGREGATIONS
from ..neuron.parsing import parse_bounded

logger = logging.getLogger(__name__)


def apply_form(settings, max_inputs, zoom_range, wheel_factor, button_factor,
               samples_per_view, margin_fraction, features):
    """Fold the form values into a settings dict, clamping each to a sane range"""
    settings['neuron']['max_inputs'] = int(parse_bounded(max_inputs, 1, 50))
    settings['neuron']['initial_inputs'] = min(
        settings['neuron'].get('initial_inputs', 2), settings['neuron']['max_inputs']
    )

    zoom_min, zoom_max = zoom_range or (0.2, 1.5)
    settings['viewport']['zoom_min'] = min(float(zoom_min), 1.0)
    settings['viewport']['zoom_max'] = max(float(zoom_max), 1.0)
    settings['viewport']['wheel_factor'] = parse_bounded(wheel_factor, 1.01, 2.0)
    settings['viewport']['button_factor'] = parse_bounded(button_factor, 1.01, 2.0)

    settings['sampler']['samples_per_view'] = int(parse_bounded(samples_per_view, 100, 5000))
    settings['sampler']['margin_fraction'] = parse_bounded(margin_fraction, 0.0, 2.0)

    settings['dashboard']['debug'] = 'debug_mode' in (features or [])
    return settings


def layout(**kwargs):
    settings = load_settings()
    neuron = settings['neuron']
    viewport = settings['viewport']
    sampler = settings['sampler']

    return html.Div([
        dbc.Row([
            dbc.Col([
                html.H2([
                    html.I(className="bi bi-gear-fill me-3"),
                    "Application Settings"
                ]),
                html.P("Display settings applied to every new simulator view", className="text-muted"),
                html.Hr(),
            ])
        ]),

        # Plot Settings Section
        dbc.Row([
            dbc.Col([
                dbc.Card([
                    dbc.CardHeader([
                        html.I(className="bi bi-graph-up me-2"),
                        html.Strong("Plot Settings")
                    ]),
                    dbc.CardBody([
                        dbc.Row([
                            dbc.Col([
                                html.Label("Zoom Range:", className="fw-bold"),
                                dcc.RangeSlider(
                                    id='zoom-range-slider',
                                    min=0.1,
                                    max=3.0,
                                    step=0.1,
                                    value=[viewport['zoom_min'], viewport['zoom_max']],
                                    marks={0.1: '10%', 0.5: '50%', 1.0: '100%', 1.5: '150%', 3.0: '300%'},
                                    tooltip={"placement": "bottom", "always_visible": True}
                                ),
                                html.P("Must include 100%, the reset zoom",
                                       className="text-muted small mt-2"),
                            ], md=6),

                            dbc.Col([
                                html.Label("Zoom Factors (wheel / buttons):", className="fw-bold"),
                                dbc.InputGroup([
                                    dbc.Input(id='wheel-factor-input', type='number',
                                              value=viewport['wheel_factor'], min=1.01, max=2.0, step=0.01),
                                    dbc.Input(id='button-factor-input', type='number',
                                              value=viewport['button_factor'], min=1.01, max=2.0, step=0.01),
                                ], className="mb-2"),
                                html.P("Multiplier per scroll notch / per button press",
                                       className="text-muted small"),
                            ], md=6),
                        ]),

                        html.Hr(),

                        dbc.Row([
                            dbc.Col([
                                html.Label("Curve Samples per View:", className="fw-bold"),
                                dcc.Input(
                                    id='samples-per-view-input',
                                    type='number',
                                    value=sampler['samples_per_view'],
                                    min=100,
                                    max=5000,
                                    className="form-control mb-2"
                                ),
                            ], md=6),
                            dbc.Col([
                                html.Label("Sampling Margin (fraction of visible span):", className="fw-bold"),
                                dcc.Input(
                                    id='margin-fraction-input',
                                    type='number',
                                    value=sampler['margin_fraction'],
                                    min=0,
                                    max=2,
                                    step=0.1,
                                    className="form-control mb-2"
                                ),
                            ], md=6),
                        ]),
                    ])
                ], className="mb-4"),
            ], md=12),
        ]),

        # Neuron Settings Section
        dbc.Row([
            dbc.Col([
                dbc.Card([
                    dbc.CardHeader([
                        html.I(className="bi bi-diagram-2 me-2"),
                        html.Strong("Neuron Settings")
                    ]),
                    dbc.CardBody([
                        html.Label("Max Inputs:", className="fw-bold"),
                        dcc.Input(
                            id='max-inputs-input',
                            type='number',
                            value=neuron['max_inputs'],
                            min=1,
                            max=50,
                            className="form-control mb-2"
                        ),
                        html.Hr(),
                        dbc.Checklist(
                            id='feature-toggles',
                            options=[
                                {'label': ' Debug mode (unknown function names raise errors)', 'value': 'debug_mode'},
                            ],
                            value=['debug_mode'] if settings['dashboard'].get('debug') else [],
                            className="mb-3"
                        ),

                        dbc.Button(
                            "Save Settings",
                            id='save-settings-btn',
                            color="primary",
                            className="mt-3"
                        ),

                        dbc.Alert(
                            id='settings-save-status',
                            is_open=False,
                            duration=3000,
                            color='success'
                        ),
                    ])
                ], className="mb-4"),
            ], md=12),
        ]),

        # System Information Section
        dbc.Row([
            dbc.Col([
                dbc.Card([
                    dbc.CardHeader([
                        html.I(className="bi bi-info-circle me-2"),
                        html.Strong("System Information")
                    ]),
                    dbc.CardBody(create_system_info()),
                ], className="mb-4"),
            ], md=12),
        ]),
    ])


dash.register_page(__name__, path='/settings', name='Settings', order=3, layout=layout)


def create_system_info():
    config_file = get_config_path()
    exists = config_file.exists()
    return [
        html.Div([
            html.Strong("Version: "),
            html.Span(f"v{__version__}")
        ], className="mb-2"),
        html.Div([
            html.Strong("Config File: "),
            html.Code(str(config_file)),
            html.Span(" ✓ Exists" if exists else " ✗ Not Found (using defaults)",
                      className="ms-2 text-success" if exists else "ms-2 text-muted")
        ], className="mb-2"),
        html.Div([
            html.Strong("Activation Functions: "),
            html.Span(", ".join(ACTIVATIONS))
        ], className="mb-2"),
        html.Div([
            html.Strong("Aggregations: "),
            html.Span(", ".join(AGGREGATIONS))
        ], className="mb-2"),
    ]


@callback(
    Output('settings-save-status', 'children'),
    Output('settings-save-status', 'is_open'),
    Output('settings-save-status', 'color'),
    Input('save-settings-btn', 'n_clicks'),
    [State('max-inputs-input', 'value'),
     State('zoom-range-slider', 'value'),
     State('wheel-factor-input', 'value'),
     State('button-factor-input', 'value'),
     State('samples-per-view-input', 'value'),
     State('margin-fraction-input', 'value'),
     State('feature-toggles', 'value')],
    prevent_initial_call=True
)
def save_display_settings(n_clicks, max_inputs, zoom_range, wheel_factor, button_factor,
                          samples_per_view, margin_fraction, features):
    """Save display settings"""
    if n_clicks is None:
        return "", False, 'success'

    settings = apply_form(load_settings(), max_inputs, zoom_range, wheel_factor, button_factor,
                          samples_per_view, margin_fraction, features)
    try:
        path = save_settings(settings)
    except OSError as e:
        logger.error(f"Failed to save settings: {e}")
        return f"Failed to save configuration: {e}", True, 'danger'

    logger.info(f"Settings saved to {path}")
    return "Settings saved; new simulator views will use them", True, 'success'
