"""
Home Page - Artificial Neuron Simulator

Configure inputs, weights, bias, aggregation and activation, and watch the
operating point move along the activation curve.

State flow:
- neuron-session-store holds the session as a plain dict
- apply_event: one UI event -> one session mutation -> new store data
- render_outputs: store -> snapshot -> figure and readouts

A page load builds a fresh session, so nothing outlives the view.
"""

import logging
from typing import Tuple

import dash
from dash import html, dcc, callback, ctx, Input, Output, State, ALL, no_update
import dash_bootstrap_components as dbc

from ..config import load_settings, get_dashboard_settings
from ..components.activation_graph import create_activation_figure
from ..components.controls import (
    create_neuron_controls,
    create_input_rows,
    create_param_controls,
    create_calculation_display,
    create_graph_toolbar,
    format_zoom,
    graph_config,
)
from ..neuron.parsing import parse_number
from ..neuron.session import NeuronSession

logger = logging.getLogger(__name__)


def restore_session(data) -> NeuronSession:
    """Rebuild the session held in the store under the current settings"""
    settings = load_settings()
    strict = bool(get_dashboard_settings(settings).get('debug', False))
    return NeuronSession.from_dict(data, settings=settings, strict=strict)


def layout(**kwargs):
    session = restore_session(None)
    snapshot = session.snapshot()

    return html.Div([
        dcc.Store(id='neuron-session-store', data=session.to_dict()),

        dbc.Row([
            dbc.Col([
                html.H2([
                    html.I(className="bi bi-diagram-2 me-3"),
                    "Artificial Neuron Simulator"
                ]),
                html.P("Interactive neural network visualization", className="lead text-muted"),
                html.Hr()
            ])
        ]),

        dbc.Row([
            # Left: configuration
            dbc.Col([create_neuron_controls(session)], lg=5),

            # Right: calculation + graph
            dbc.Col([
                dbc.Card([
                    dbc.CardHeader(html.Strong("Calculation")),
                    dbc.CardBody(
                        create_calculation_display(snapshot, session.config.aggregation),
                        id='calculation-display',
                    ),
                ], className="mb-3"),

                dbc.Card([
                    dbc.CardHeader(dbc.Row([
                        dbc.Col(html.Strong("Activation Function Graph")),
                        dbc.Col(create_graph_toolbar(session), width="auto"),
                    ], className="align-items-center")),
                    dbc.CardBody([
                        html.Small([
                            html.I(className="bi bi-mouse me-1"),
                            "Drag to pan • Scroll to zoom • Double-click to reset"
                        ], className="text-muted"),
                        dcc.Graph(
                            id='activation-graph',
                            figure=create_activation_figure(
                                snapshot, session.mapper, session.config.activation
                            ),
                            config=graph_config(),
                        ),
                    ]),
                ]),
            ], lg=7),
        ]),
    ])


dash.register_page(
    __name__,
    path='/',
    name='Simulator',
    order=1,
    title="Artificial Neuron Simulator",
    description="Interactive artificial neuron visualization with activation functions",
    layout=layout,
)


def _field_entries(entries):
    """[(input_or_param_id, raw_value), ...] from a pattern-matched inputs_list slot"""
    return [(entry['id']['index'], entry.get('value')) for entry in entries or []]


def handle_event(session: NeuronSession, trigger, value=None, entries=None) -> Tuple[bool, bool]:
    """
    Apply one UI event to the session.

    Args:
        session: Session rebuilt from the store
        trigger: Component id that fired (str, or dict for pattern-matched ids)
        value: The firing property's new value
        entries: For field edits, every (id, raw value) of that field family

    Returns:
        (inputs_changed_shape, params_stale) so the caller knows which
        control lists need re-rendering; params_stale is set when the
        activation changed or a typed parameter was clamped
    """
    kind = trigger.get('type') if isinstance(trigger, dict) else trigger

    if kind == 'add-input-btn':
        return session.add_input(), False
    if kind == 'remove-input-btn':
        # Re-rendered buttons report n_clicks=None; only real clicks count
        return (bool(value) and session.remove_input(trigger['index'])), False
    if kind in ('input-value', 'input-weight'):
        field = 'value' if kind == 'input-value' else 'weight'
        for input_id, raw in entries or []:
            session.update_input(input_id, field, raw)
    elif kind == 'activation-param':
        clamped = False
        for name, raw in entries or []:
            session.set_activation_param(name, raw)
            # Re-render when the stored value is not what the field shows
            if parse_number(raw, default=None) != session.config.activation_params().get(name):
                clamped = True
        return False, clamped
    elif kind == 'bias-input':
        session.set_bias(value)
    elif kind == 'aggregation-selector':
        session.select_aggregation(value)
    elif kind == 'activation-selector':
        return False, session.select_activation(value)
    elif kind == 'zoom-in-btn':
        session.zoom_in()
    elif kind == 'zoom-out-btn':
        session.zoom_out()
    elif kind == 'reset-view-btn':
        session.reset_view()
    elif kind == 'activation-graph':
        session.apply_relayout(value)
    else:
        logger.warning(f"Unhandled trigger: {trigger!r}")
    return False, False


@callback(
    Output('neuron-session-store', 'data'),
    Output('inputs-list', 'children'),
    Output('param-controls', 'children'),
    Output('add-input-btn', 'disabled'),
    Input('add-input-btn', 'n_clicks'),
    Input({'type': 'remove-input-btn', 'index': ALL}, 'n_clicks'),
    Input({'type': 'input-value', 'index': ALL}, 'value'),
    Input({'type': 'input-weight', 'index': ALL}, 'value'),
    Input('bias-input', 'value'),
    Input('aggregation-selector', 'value'),
    Input('activation-selector', 'value'),
    Input({'type': 'activation-param', 'index': ALL}, 'value'),
    Input('zoom-in-btn', 'n_clicks'),
    Input('zoom-out-btn', 'n_clicks'),
    Input('reset-view-btn', 'n_clicks'),
    Input('activation-graph', 'relayoutData'),
    State('neuron-session-store', 'data'),
    prevent_initial_call=True
)
def apply_event(add_clicks, remove_clicks, values, weights, bias, aggregation,
                activation, param_values, zoom_in, zoom_out, reset, relayout, data):
    """Apply the one event that fired this callback to the stored session"""
    trigger = ctx.triggered_id
    if trigger is None:
        return no_update, no_update, no_update, no_update

    # Field families are positional in the Input list above
    entries = None
    if isinstance(trigger, dict):
        slot = {'input-value': 2, 'input-weight': 3, 'activation-param': 7}.get(trigger.get('type'))
        if slot is not None:
            entries = _field_entries(ctx.inputs_list[slot])

    session = restore_session(data)
    inputs_changed, params_stale = handle_event(
        session, trigger, ctx.triggered[0]['value'], entries
    )

    inputs_children = (
        create_input_rows(session.inputs, session.can_remove_input)
        if inputs_changed else no_update
    )
    param_children = (
        create_param_controls(session.config.activation_fn, session.config.activation_params())
        if params_stale else no_update
    )
    return session.to_dict(), inputs_children, param_children, not session.can_add_input


@callback(
    Output('activation-graph', 'figure'),
    Output('calculation-display', 'children'),
    Output('zoom-level', 'children'),
    Output('zoom-in-btn', 'disabled'),
    Output('zoom-out-btn', 'disabled'),
    Input('neuron-session-store', 'data'),
    prevent_initial_call=True
)
def render_outputs(data):
    """Recompute the snapshot and redraw everything that depends on it"""
    session = restore_session(data)
    snapshot = session.snapshot()

    figure = create_activation_figure(snapshot, session.mapper, session.config.activation)
    calculation = create_calculation_display(snapshot, session.config.aggregation)

    return (
        figure,
        calculation,
        format_zoom(session.viewport.zoom),
        not session.controller.can_zoom_in,
        not session.controller.can_zoom_out,
    )
