#!/usr/bin/env python3
"""
NeuronLab Dashboard - Artificial Neuron Simulator

Pages:
- Simulator: inputs, weights, bias, aggregation, activation, live curve
- Functions: activation/aggregation reference with f and f' plots
- Settings: display settings (zoom range, sampling density, input limit)

Usage:
    python -m neuronlab.dashboard [--port PORT] [--host HOST] [--config PATH]
    Or: neuronlab

Default port: 8050
"""

import argparse
import logging
from pathlib import Path

import dash
from dash import html
import dash_bootstrap_components as dbc

from . import __version__
from .config import use_config, load_config, merge_settings, get_dashboard_settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Initialize Dash app
app = dash.Dash(
    __name__,
    external_stylesheets=[dbc.themes.BOOTSTRAP, dbc.icons.BOOTSTRAP],
    suppress_callback_exceptions=True,
    use_pages=True,  # Enable multi-page support
    pages_folder="",  # Pages register themselves on import below
)

from .pages import home, functions, settings as settings_page  # noqa: E402,F401

app.title = "NeuronLab - Artificial Neuron Simulator"

# Navigation bar
navbar = dbc.Navbar(
    dbc.Container([
        dbc.Row([
            dbc.Col([
                html.A(
                    dbc.Row([
                        dbc.Col(html.I(className="bi bi-diagram-2 me-2", style={'fontSize': '1.5rem'})),
                        dbc.Col(dbc.NavbarBrand("NeuronLab", className="ms-2")),
                    ], align="center", className="g-0"),
                    href="/",
                    style={"textDecoration": "none"},
                )
            ], width="auto"),
            dbc.Col([
                dbc.Nav([
                    dbc.NavItem(dbc.NavLink([
                        html.I(className="bi bi-sliders me-1"),
                        "Simulator"
                    ], href="/", active="exact")),
                    dbc.NavItem(dbc.NavLink([
                        html.I(className="bi bi-journal-text me-1"),
                        "Functions"
                    ], href="/functions", active="exact")),
                    dbc.NavItem(dbc.NavLink([
                        html.I(className="bi bi-gear me-1"),
                        "Settings"
                    ], href="/settings", active="exact")),
                ], navbar=True, className="me-auto"),
            ], className="flex-grow-1"),
            dbc.Col([
                html.Div([
                    html.Span("Single-neuron playground", className="text-muted small me-3"),
                    html.Span(f"v{__version__}", className="badge bg-success")
                ])
            ], className="ms-auto text-end", width="auto"),
        ], className="w-100 align-items-center"),
    ], fluid=True),
    color="dark",
    dark=True,
    className="mb-3",
)

# Layout
app.layout = html.Div([
    navbar,
    dbc.Container([
        dash.page_container  # Pages will be rendered here
    ], fluid=True)
])


def main():
    """Entry point for dashboard"""
    parser = argparse.ArgumentParser(description="NeuronLab - Artificial Neuron Simulator")
    parser.add_argument('--port', type=int, help='Port to run dashboard on')
    parser.add_argument('--host', type=str, help='Host to bind to (default: 0.0.0.0)')
    parser.add_argument('--config', type=Path, help='Path to config.yaml')
    args = parser.parse_args()

    if args.config:
        use_config(args.config)

    # Load config for host/port
    try:
        settings = merge_settings(load_config())
    except FileNotFoundError as e:
        print(f"⚠️  {e}")
        print("Using defaults: port=8050, debug=False")
        settings = merge_settings(None)

    dashboard = get_dashboard_settings(settings)
    port = args.port if args.port else dashboard['port']
    host = args.host if args.host else dashboard['host']
    debug = bool(dashboard['debug'])

    logging.basicConfig(
        level=getattr(logging, str(dashboard.get('log_level', 'INFO')).upper(), logging.INFO),
        format=LOG_FORMAT
    )

    print("=" * 70)
    print(f"NeuronLab - Artificial Neuron Simulator v{__version__}")
    print("=" * 70)
    print(f"\nStarting dashboard on http://localhost:{port}")
    print("\nKey Features:")
    print("  ✓ Sum / Product / Max / Min aggregation with additive bias")
    print("  ✓ Sigmoid, Tanh, ReLU, Leaky ReLU, Linear, Step, Sign")
    print("  ✓ Live activation curve with drag-to-pan and scroll zoom")
    print("\nPress Ctrl+C to stop")
    print("=" * 70)
    print()

    app.run(
        host=host,
        port=port,
        debug=debug
    )


if __name__ == '__main__':
    main()
