"""
Interaction Controller - pan/zoom/drag state for the activation plot

States: IDLE, DRAGGING.
- pointer down   -> DRAGGING, anchor = pointer - pan
- pointer move   -> pan = pointer - anchor (only while DRAGGING)
- pointer up     -> IDLE
- pointer leave  -> IDLE
- wheel          -> zoom by wheel_factor per notch, any state, no transition
- reset          -> pan (0, 0), zoom 1.0

Plotly reports finished gestures as relayout events rather than raw pointer
events; translate_relayout() turns those back into the calls above.
"""

from enum import Enum
import logging
from typing import Dict, Optional, Tuple

from .parsing import clamp
from .viewport import ViewportState

logger = logging.getLogger(__name__)


class DragState(Enum):
    IDLE = 'idle'
    DRAGGING = 'dragging'


class InteractionController:
    def __init__(
        self,
        viewport: ViewportState,
        zoom_min: float = 0.2,
        zoom_max: float = 1.5,
        wheel_factor: float = 1.1,
        button_factor: float = 1.2
    ):
        if not 0 < zoom_min <= 1.0 <= zoom_max:
            raise ValueError(f"Zoom range must contain 1.0: [{zoom_min}, {zoom_max}]")
        self.viewport = viewport
        self.zoom_min = zoom_min
        self.zoom_max = zoom_max
        self.wheel_factor = wheel_factor
        self.button_factor = button_factor
        self.state = DragState.IDLE
        self.anchor: Optional[Tuple[float, float]] = None

    @property
    def is_dragging(self) -> bool:
        return self.state is DragState.DRAGGING

    def pointer_down(self, x: float, y: float):
        self.state = DragState.DRAGGING
        self.anchor = (x - self.viewport.pan_x, y - self.viewport.pan_y)

    def pointer_move(self, x: float, y: float) -> bool:
        if not self.is_dragging:
            return False
        self.viewport.pan_x = x - self.anchor[0]
        self.viewport.pan_y = y - self.anchor[1]
        return True

    def pointer_up(self):
        self.state = DragState.IDLE
        self.anchor = None

    pointer_leave = pointer_up

    def pan(self, dx: float, dy: float):
        """Translate by a screen delta; drag state and anchor are left alone"""
        self.viewport.pan_x += dx
        self.viewport.pan_y += dy

    def zoom_by(self, factor: float) -> float:
        self.viewport.zoom = clamp(self.viewport.zoom * factor, self.zoom_min, self.zoom_max)
        return self.viewport.zoom

    def wheel(self, delta_y: float) -> float:
        """One wheel notch: scrolling down zooms out, up zooms in"""
        if delta_y == 0:
            return self.viewport.zoom
        factor = 1.0 / self.wheel_factor if delta_y > 0 else self.wheel_factor
        return self.zoom_by(factor)

    def zoom_in(self) -> float:
        return self.zoom_by(self.button_factor)

    def zoom_out(self) -> float:
        return self.zoom_by(1.0 / self.button_factor)

    @property
    def can_zoom_in(self) -> bool:
        return self.viewport.zoom < self.zoom_max

    @property
    def can_zoom_out(self) -> bool:
        return self.viewport.zoom > self.zoom_min

    def reset(self):
        self.viewport.reset()

    def to_dict(self) -> Dict:
        return {'state': self.state.value, 'anchor': list(self.anchor) if self.anchor else None}

    def restore(self, data: Optional[Dict]):
        if not data:
            return
        self.state = DragState(data.get('state', DragState.IDLE.value))
        anchor = data.get('anchor')
        self.anchor = tuple(anchor) if anchor else None


def translate_relayout(
    relayout: Optional[Dict],
    width: float,
    height: float,
    tolerance: float = 1e-6
) -> Optional[Tuple[str, Tuple[float, ...]]]:
    """
    Classify a plotly relayoutData payload for a plot whose axes span
    [0, width] x [0, height] in screen units.

    Returns:
        ('reset', ())           double-click / autorange
        ('pan', (dx, dy))       range shifted with unchanged span
        ('wheel', (delta_y,))   span changed (scroll zoom)
        None                    anything else (autosize, shape edits, ...)
    """
    if not relayout:
        return None

    if relayout.get('xaxis.autorange') or relayout.get('yaxis.autorange'):
        return ('reset', ())

    x_range = _axis_range(relayout, 'xaxis')
    y_range = _axis_range(relayout, 'yaxis')
    if x_range is None and y_range is None:
        return None

    x_lo, x_hi = sorted(x_range) if x_range else (0.0, width)
    y_lo, y_hi = sorted(y_range) if y_range else (0.0, height)
    x_span = x_hi - x_lo
    y_span = y_hi - y_lo

    if abs(x_span - width) > tolerance * width or abs(y_span - height) > tolerance * height:
        # Narrower window means the content was magnified
        magnified = x_span < width if x_range else y_span < height
        return ('wheel', (-1.0 if magnified else 1.0,))

    # Content moves opposite to the window
    return ('pan', (-x_lo, -y_lo))


def _axis_range(relayout: Dict, axis: str) -> Optional[Tuple[float, float]]:
    if f'{axis}.range[0]' in relayout and f'{axis}.range[1]' in relayout:
        return float(relayout[f'{axis}.range[0]']), float(relayout[f'{axis}.range[1]'])
    if f'{axis}.range' in relayout:
        lo, hi = relayout[f'{axis}.range']
        return float(lo), float(hi)
    return None
