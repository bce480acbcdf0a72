"""
Activation Graph Component

Plotly figures for the activation curve.

The simulator plot is drawn directly in screen space: the axes are fixed to
the view box ([0, width] x [0, height], y pointing down) and every world
coordinate goes through the session's CoordinateMapper. Pan and zoom
therefore come from the mapper, not from plotly's own axis ranges; plotly
gestures are only read back as relayout events.
"""

import math
from typing import Dict, Optional, Tuple

import numpy as np
import plotly.graph_objects as go

from ..neuron.activations import ActivationFunction
from ..neuron.session import NeuronSnapshot
from ..neuron.viewport import CoordinateMapper

CURVE_COLOR = '#3b82f6'
DERIVATIVE_COLOR = '#f59e0b'
POINT_COLOR = '#ef4444'
AXIS_COLOR = '#374151'
MINOR_GRID_COLOR = '#d1d5db'
MAJOR_GRID_COLOR = '#9ca3af'

# Grid spacing in world units; every fifth line is a major one
GRID_STEP = 2.0
MAJOR_EVERY = 5


def _grid_positions(lo: float, hi: float, step: float):
    first = math.floor(lo / step)
    last = math.ceil(hi / step)
    return [(i, i * step) for i in range(first, last + 1)]


def _grid_traces(mapper: CoordinateMapper, bounds: Tuple[float, float, float, float]):
    """Minor and major grid lines as two None-separated line traces"""
    x_min, x_max, y_min, y_max = bounds
    lines = {'minor': ([], []), 'major': ([], [])}

    for i, gx in _grid_positions(x_min, x_max, GRID_STEP):
        sx, _ = mapper.world_to_screen(gx, 0.0)
        xs, ys = lines['major' if i % MAJOR_EVERY == 0 else 'minor']
        xs.extend([sx, sx, None])
        ys.extend([0.0, mapper.height, None])

    for i, gy in _grid_positions(y_min, y_max, GRID_STEP):
        _, sy = mapper.world_to_screen(0.0, gy)
        xs, ys = lines['major' if i % MAJOR_EVERY == 0 else 'minor']
        xs.extend([0.0, mapper.width, None])
        ys.extend([sy, sy, None])

    traces = []
    for kind, color, width, opacity in (
        ('minor', MINOR_GRID_COLOR, 0.5, 0.6),
        ('major', MAJOR_GRID_COLOR, 0.8, 0.8),
    ):
        xs, ys = lines[kind]
        traces.append(go.Scatter(
            x=xs, y=ys,
            mode='lines',
            line=dict(color=color, width=width),
            opacity=opacity,
            hoverinfo='skip',
            showlegend=False,
            name=f'{kind} grid',
        ))
    return traces


def create_activation_figure(
    snapshot: NeuronSnapshot,
    mapper: CoordinateMapper,
    activation_name: str,
    height_px: int = 450
) -> go.Figure:
    """
    Activation curve with the current operating point, in screen space.

    Args:
        snapshot: Result of NeuronSession.snapshot()
        mapper: The session's mapper (same viewport the snapshot used)
        activation_name: Shown in the hover label
        height_px: Rendered height; width follows the view's aspect ratio

    Returns:
        Plotly figure with fixed axes covering the view box
    """
    fig = go.Figure()

    for trace in _grid_traces(mapper, snapshot.visible_bounds):
        fig.add_trace(trace)

    # World axes
    axis_x, axis_y = mapper.world_to_screen(0.0, 0.0)
    fig.add_trace(go.Scatter(
        x=[axis_x, axis_x, None, 0.0, mapper.width],
        y=[0.0, mapper.height, None, axis_y, axis_y],
        mode='lines',
        line=dict(color=AXIS_COLOR, width=2),
        hoverinfo='skip',
        showlegend=False,
        name='axes',
    ))

    samples = snapshot.samples
    fig.add_trace(go.Scatter(
        x=snapshot.screen_xs,
        y=snapshot.screen_ys,
        customdata=np.column_stack([samples.xs, samples.ys]),
        mode='lines',
        line=dict(color=CURVE_COLOR, width=3),
        hovertemplate=f'{activation_name}(%{{customdata[0]:.2f}}) = %{{customdata[1]:.3f}}<extra></extra>',
        showlegend=False,
        name=activation_name,
    ))

    px, py = snapshot.current_point_screen
    wx, wy = snapshot.current_point
    fig.add_trace(go.Scatter(
        x=[px],
        y=[py],
        mode='markers+text',
        marker=dict(size=12, color=POINT_COLOR, line=dict(color='#ffffff', width=2)),
        text=[f'({wx:.1f}, {wy:.1f})'],
        textposition='top center',
        hovertemplate=f'x = {wx:.3f}<br>y = {wy:.3f}<extra>operating point</extra>',
        showlegend=False,
        name='operating point',
    ))

    fig.add_annotation(x=axis_x, y=12, text='y', showarrow=False, xshift=10,
                       font=dict(color=AXIS_COLOR))
    fig.add_annotation(x=mapper.width - 10, y=axis_y, text='x', showarrow=False, yshift=10,
                       font=dict(color=AXIS_COLOR))

    # constrain='domain' keeps the ranges exact; relayout spans are compared against them
    fig.update_xaxes(range=[0, mapper.width], visible=False, constrain='domain')
    fig.update_yaxes(range=[mapper.height, 0], visible=False, constrain='domain',
                     scaleanchor='x', scaleratio=1)
    fig.update_layout(
        template='plotly_white',
        dragmode='pan',
        hovermode='closest',
        height=height_px,
        margin=dict(l=0, r=0, t=0, b=0),
        plot_bgcolor='#ffffff',
        showlegend=False,
    )

    return fig


def create_reference_figure(
    activation: ActivationFunction,
    params: Optional[Dict[str, float]] = None,
    x_range: Tuple[float, float] = (-6.0, 6.0),
    n_points: int = 400
) -> go.Figure:
    """f(x) and f'(x) over a fixed world range, for the function catalog"""
    x = np.linspace(x_range[0], x_range[1], n_points)

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=x,
        y=activation(x, params),
        mode='lines',
        name='f(x)',
        line=dict(color=CURVE_COLOR, width=2),
    ))
    if activation.has_derivative:
        fig.add_trace(go.Scatter(
            x=x,
            y=activation.grad(x, params),
            mode='lines',
            name="f'(x)",
            line=dict(color=DERIVATIVE_COLOR, width=1.5, dash='dash'),
        ))

    fig.add_hline(y=0, line_width=0.5, line_color='gray')
    fig.add_vline(x=0, line_width=0.5, line_color='gray')
    fig.update_layout(
        title=activation.name,
        xaxis_title='x',
        template='plotly_white',
        hovermode='x unified',
        height=260,
        margin=dict(l=40, r=10, t=40, b=40),
        legend=dict(x=0.02, y=0.98),
    )

    return fig
