"""
Neuron Controls Component

Builders for the simulator's control panel:
- Inputs & weights list (add/remove)
- Bias field
- Aggregation and activation selectors
- Activation parameter fields (gain, slope)
- Calculation readout

Pattern-matching ids ({'type': ..., 'index': ...}) identify per-input and
per-parameter fields so one callback can serve any number of them.
"""

from typing import Dict, List

from dash import html
import dash_bootstrap_components as dbc

from ..neuron.activations import ACTIVATIONS, ActivationFunction
from ..neuron.aggregations import AGGREGATIONS
from ..neuron.evaluator import Input
from ..neuron.session import NeuronSession, NeuronSnapshot


def _field_value(value: float):
    # Zero shows as an empty field with a "0" placeholder
    return None if value == 0 else value


def create_input_rows(inputs: List[Input], can_remove: bool) -> List[html.Div]:
    """One row per input: label, value field, weight field, remove button"""
    rows = []
    for position, item in enumerate(inputs, start=1):
        rows.append(dbc.Row([
            dbc.Col(html.Strong(f"Input {position}"), width=2, className="pt-2"),
            dbc.Col(dbc.InputGroup([
                dbc.InputGroupText("Value"),
                dbc.Input(
                    id={'type': 'input-value', 'index': item.id},
                    type='number',
                    value=_field_value(item.value),
                    step=0.1,
                    placeholder="0",
                    debounce=True,
                ),
            ], size="sm"), width=4),
            dbc.Col(dbc.InputGroup([
                dbc.InputGroupText("Weight"),
                dbc.Input(
                    id={'type': 'input-weight', 'index': item.id},
                    type='number',
                    value=_field_value(item.weight),
                    step=0.1,
                    placeholder="0",
                    debounce=True,
                ),
            ], size="sm"), width=4),
            dbc.Col(dbc.Button(
                html.I(className="bi bi-x-lg"),
                id={'type': 'remove-input-btn', 'index': item.id},
                color="danger",
                outline=True,
                size="sm",
                disabled=not can_remove,
                title="Remove input",
            ), width=2, className="text-end"),
        ], className="mb-2 align-items-center"))
    return rows


def create_param_controls(activation: ActivationFunction, params: Dict[str, float]) -> html.Div:
    """Fields for the selected activation's parameters (empty for parameterless ones)"""
    if not activation.params:
        return html.Small(f"{activation.name} has no parameters", className="text-muted")

    fields = []
    for spec in activation.params:
        bounds = f"≥ {spec.minimum:g}" if spec.maximum is None else f"{spec.minimum:g} – {spec.maximum:g}"
        fields.append(dbc.Col([
            dbc.Label(f"{spec.label} ({bounds}):"),
            dbc.Input(
                id={'type': 'activation-param', 'index': spec.name},
                type='number',
                value=params.get(spec.name, spec.default),
                min=spec.minimum,
                max=spec.maximum,
                step=spec.step,
                debounce=True,
            ),
        ], md=6))
    return dbc.Row(fields)


def create_neuron_controls(session: NeuronSession) -> html.Div:
    """Left-hand control panel for the simulator page"""
    activation = session.config.activation_fn

    return html.Div([
        dbc.Card([
            dbc.CardHeader(dbc.Row([
                dbc.Col(html.Strong("Inputs & Weights")),
                dbc.Col(dbc.Button(
                    [html.I(className="bi bi-plus-lg me-1"), "Add Input"],
                    id='add-input-btn',
                    color="primary",
                    size="sm",
                    disabled=not session.can_add_input,
                ), width="auto"),
            ], className="align-items-center")),
            dbc.CardBody([
                html.Div(
                    create_input_rows(session.inputs, session.can_remove_input),
                    id='inputs-list',
                ),
                html.Small(f"Up to {session.max_inputs} inputs", className="text-muted"),
                html.Hr(),
                dbc.InputGroup([
                    dbc.InputGroupText("Bias (θ)"),
                    dbc.Input(
                        id='bias-input',
                        type='number',
                        value=session.config.bias,
                        step=0.1,
                        placeholder="0",
                        debounce=True,
                    ),
                ]),
            ]),
        ], className="mb-3"),

        dbc.Card([
            dbc.CardHeader(html.Strong("Aggregation")),
            dbc.CardBody([
                dbc.RadioItems(
                    id='aggregation-selector',
                    options=[{'label': name, 'value': name} for name in AGGREGATIONS],
                    value=session.config.aggregation,
                    className="btn-group flex-wrap",
                    inputClassName="btn-check",
                    labelClassName="btn btn-outline-secondary btn-sm",
                    labelCheckedClassName="active",
                ),
                html.Small("Bias is always added after aggregation", className="d-block text-muted mt-2"),
            ]),
        ], className="mb-3"),

        dbc.Card([
            dbc.CardHeader(html.Strong("Activation Function")),
            dbc.CardBody([
                dbc.RadioItems(
                    id='activation-selector',
                    options=[{'label': name, 'value': name} for name in ACTIVATIONS],
                    value=activation.name,
                    className="btn-group flex-wrap mb-3",
                    inputClassName="btn-check",
                    labelClassName="btn btn-outline-primary btn-sm",
                    labelCheckedClassName="active",
                ),
                html.Div(
                    create_param_controls(activation, session.config.activation_params()),
                    id='param-controls',
                ),
            ]),
        ], className="mb-3"),
    ])


def create_calculation_display(snapshot: NeuronSnapshot, aggregation: str) -> html.Div:
    """Aggregated value and output, spelled out"""
    rows = [
        html.Div([
            html.Span(f"{aggregation}: ", className="fw-bold me-2"),
            html.Code(snapshot.formula),
        ], className="mb-2"),
        html.Div([
            html.Span("Output: ", className="fw-bold me-2"),
            html.Code(snapshot.output_formula),
        ], className="mb-2"),
    ]
    if snapshot.derivative is not None:
        rows.append(html.Div([
            html.Span("Slope at point: ", className="fw-bold me-2"),
            html.Code(f"f'({snapshot.aggregated_value:.3f}) = {snapshot.derivative:.3f}"),
        ], className="text-muted small"))
    return html.Div(rows)


def format_zoom(zoom: float) -> str:
    return f"{zoom * 100:.0f}%"


def create_graph_toolbar(session: NeuronSession) -> dbc.Row:
    """Zoom out / level / zoom in / reset"""
    controller = session.controller
    return dbc.Row([
        dbc.Col(dbc.ButtonGroup([
            dbc.Button("−", id='zoom-out-btn', color="secondary", outline=True, size="sm",
                       disabled=not controller.can_zoom_out, title="Zoom Out"),
            dbc.Button(format_zoom(session.viewport.zoom), id='zoom-level', color="light",
                       size="sm", disabled=True),
            dbc.Button("+", id='zoom-in-btn', color="secondary", outline=True, size="sm",
                       disabled=not controller.can_zoom_in, title="Zoom In"),
        ]), width="auto"),
        dbc.Col(dbc.Button(
            [html.I(className="bi bi-arrows-fullscreen me-1"), "Reset View"],
            id='reset-view-btn',
            color="secondary",
            size="sm",
        ), width="auto"),
    ], className="g-2 align-items-center")


def graph_config(scroll_zoom: bool = True) -> Dict:
    return {
        'scrollZoom': scroll_zoom,
        'displayModeBar': False,
        'doubleClick': 'autosize',
    }
