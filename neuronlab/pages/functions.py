"""
Functions Page - Activation and Aggregation Reference

Every registered activation with its formula, derivative formula, output
range and a plot of f and f'. Gain/slope can be tried out per card.
"""

import math

import dash
from dash import html, dcc, callback, Input, Output, MATCH
import dash_bootstrap_components as dbc

from ..components.activation_graph import create_reference_figure
from ..neuron.activations import ACTIVATIONS, get_activation
from ..neuron.aggregations import AGGREGATIONS
from ..neuron.evaluator import Input as NeuronInput
from ..neuron.parsing import parse_bounded

_EXAMPLE_INPUTS = [NeuronInput(id="1", value=2, weight=3), NeuronInput(id="2", value=-1, weight=4)]


def format_range(bounds) -> str:
    def fmt(value):
        if math.isinf(value):
            return '∞' if value > 0 else '−∞'
        return f'{value:g}'
    lo, hi = bounds
    return f'({fmt(lo)}, {fmt(hi)})'


def create_activation_card(name: str) -> dbc.Card:
    activation = get_activation(name)

    param_inputs = []
    for spec in activation.params:
        param_inputs.append(dbc.InputGroup([
            dbc.InputGroupText(spec.label),
            dbc.Input(
                id={'type': 'reference-param', 'index': name},
                type='number',
                value=spec.default,
                min=spec.minimum,
                max=spec.maximum,
                step=spec.step,
                debounce=True,
            ),
        ], size="sm", className="mb-2"))

    return dbc.Card([
        dbc.CardHeader(html.Strong(activation.name)),
        dbc.CardBody([
            html.P(activation.description, className="text-muted small"),
            html.Div([html.Strong("f(x) = "), html.Code(activation.formula)], className="mb-1"),
            html.Div([html.Strong("f'(x) = "), html.Code(activation.derivative_formula)], className="mb-1"),
            html.Div([html.Strong("Range: "), html.Span(format_range(activation.output_range))],
                     className="mb-2"),
            *param_inputs,
            dcc.Graph(
                id={'type': 'reference-graph', 'index': name},
                figure=create_reference_figure(activation),
                config={'displayModeBar': False},
            ),
        ]),
    ], className="mb-3 h-100")


def create_aggregation_table() -> dbc.Table:
    header = html.Thead(html.Tr([html.Th("Aggregation"), html.Th("Computes"), html.Th("Example")]))
    rows = [
        html.Tr([html.Td(name), html.Td(f'{agg.symbol} (value × weight) + θ'), html.Td(html.Code(
            agg.aggregate(_EXAMPLE_INPUTS, bias=1.0)[1]
        ))])
        for name, agg in AGGREGATIONS.items()
    ]
    return dbc.Table([header, html.Tbody(rows)], bordered=False, hover=True, size="sm")


layout = html.Div([
    dbc.Row([
        dbc.Col([
            html.H2([
                html.I(className="bi bi-journal-text me-3"),
                "Function Reference"
            ]),
            html.P("Activation functions, their derivatives, and the aggregation rules",
                   className="text-muted"),
            html.Hr(),
        ])
    ]),

    dbc.Row([
        dbc.Col([
            dbc.Card([
                dbc.CardHeader([
                    html.I(className="bi bi-sigma me-2"),
                    html.Strong("Aggregations")
                ]),
                dbc.CardBody([
                    html.P("The bias θ is always added after aggregation, never folded into it.",
                           className="text-muted small"),
                    create_aggregation_table(),
                ]),
            ], className="mb-4"),
        ], md=12),
    ]),

    dbc.Row([
        dbc.Col(create_activation_card(name), lg=4, md=6, className="mb-3")
        for name in ACTIVATIONS
    ]),
])


dash.register_page(__name__, path='/functions', name='Functions', order=2, layout=layout)


@callback(
    Output({'type': 'reference-graph', 'index': MATCH}, 'figure'),
    Input({'type': 'reference-param', 'index': MATCH}, 'value'),
    prevent_initial_call=True
)
def update_reference_graph(raw):
    """Redraw one card's plot for a new gain/slope"""
    name = dash.ctx.triggered_id['index']
    activation = get_activation(name)
    spec = activation.params[0]
    return create_reference_figure(activation, {spec.name: parse_bounded(raw, spec.minimum, spec.maximum)})
