"""
Neuron Session - the single owner of one interactive view's state

Holds the inputs, the neuron configuration and the viewport, and exposes the
mutation operations the UI may call. Every mutation is synchronous and
returns whether anything changed; after each one the UI asks for a fresh
snapshot and redraws.

The session round-trips through a plain dict (to_dict/from_dict) so it can
live in a dcc.Store between callbacks. Nothing is persisted beyond that.
"""

from collections import OrderedDict
from dataclasses import dataclass
import logging
from typing import Any, Dict, List, Optional, Tuple

from .activations import get_activation
from .aggregations import get_aggregation
from .errors import InvariantViolation, UnknownFunctionError
from .evaluator import Input, NeuronConfig, evaluate_config
from .interaction import InteractionController, translate_relayout
from .parsing import parse_bounded, parse_number
from .sampler import CurveSampler, CurveSamples
from .viewport import CoordinateMapper, ViewportState

logger = logging.getLogger(__name__)

INPUT_FIELDS = ('value', 'weight')

# One sampler (and memo) per sampler configuration, process-wide; the least
# recently used configuration is dropped beyond MAX_SAMPLERS
MAX_SAMPLERS = 4
_SAMPLERS: "OrderedDict[Tuple, CurveSampler]" = OrderedDict()


def get_sampler(samples_per_view: int = 1000, margin_fraction: float = 0.5, cache_size: int = 32) -> CurveSampler:
    key = (samples_per_view, margin_fraction, cache_size)
    if key in _SAMPLERS:
        _SAMPLERS.move_to_end(key)
        return _SAMPLERS[key]

    sampler = CurveSampler(samples_per_view, margin_fraction, cache_size)
    _SAMPLERS[key] = sampler
    if len(_SAMPLERS) > MAX_SAMPLERS:
        _SAMPLERS.popitem(last=False)
    return sampler


@dataclass(frozen=True)
class NeuronSnapshot:
    """Read-only result of one recompute, consumed by the presentation layer"""
    aggregated_value: float
    output: float
    derivative: Optional[float]
    formula: str
    output_formula: str
    samples: CurveSamples
    screen_xs: Any
    screen_ys: Any
    current_point: Tuple[float, float]
    current_point_screen: Tuple[float, float]
    visible_bounds: Tuple[float, float, float, float]
    zoom: float

    @property
    def screen_samples(self) -> List[Dict[str, float]]:
        return [{'x': float(x), 'y': float(y)} for x, y in zip(self.screen_xs, self.screen_ys)]

    def to_dict(self) -> Dict:
        return {
            'aggregatedValue': self.aggregated_value,
            'output': self.output,
            'derivative': self.derivative,
            'formulaString': self.formula,
            'outputFormula': self.output_formula,
            'samples': self.samples.to_list(),
            'screenSamples': self.screen_samples,
            'currentPoint': {'x': self.current_point[0], 'y': self.current_point[1]},
            'currentPointScreen': {'x': self.current_point_screen[0], 'y': self.current_point_screen[1]},
            'zoom': self.zoom,
        }


class NeuronSession:
    """
    Interactive state of one neuron view.

    Args:
        settings: Merged application settings (see neuronlab.config); only the
            'neuron', 'viewport' and 'sampler' sections are read
        strict: Raise on unknown function names instead of ignoring them
    """

    def __init__(self, settings: Optional[Dict] = None, strict: bool = False):
        settings = settings or {}
        neuron_cfg = settings.get('neuron', {})
        viewport_cfg = settings.get('viewport', {})
        sampler_cfg = settings.get('sampler', {})

        self.strict = strict
        self.max_inputs = int(neuron_cfg.get('max_inputs', 10))
        initial_inputs = max(1, min(int(neuron_cfg.get('initial_inputs', 2)), self.max_inputs))

        self.inputs: List[Input] = [Input(id=str(i + 1)) for i in range(initial_inputs)]
        self.next_id = initial_inputs + 1
        self.config = NeuronConfig()

        self.viewport = ViewportState()
        self.controller = InteractionController(
            self.viewport,
            zoom_min=viewport_cfg.get('zoom_min', 0.2),
            zoom_max=viewport_cfg.get('zoom_max', 1.5),
            wheel_factor=viewport_cfg.get('wheel_factor', 1.1),
            button_factor=viewport_cfg.get('button_factor', 1.2),
        )
        self.mapper = CoordinateMapper(
            self.viewport,
            width=viewport_cfg.get('width', 400),
            height=viewport_cfg.get('height', 300),
            x_range=tuple(viewport_cfg.get('x_range', (-20.0, 20.0))),
            y_range=tuple(viewport_cfg.get('y_range', (-15.0, 15.0))),
        )
        self.sampler = get_sampler(
            samples_per_view=sampler_cfg.get('samples_per_view', 1000),
            margin_fraction=sampler_cfg.get('margin_fraction', 0.5),
            cache_size=sampler_cfg.get('cache_size', 32),
        )

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    @property
    def can_add_input(self) -> bool:
        return len(self.inputs) < self.max_inputs

    @property
    def can_remove_input(self) -> bool:
        return len(self.inputs) > 1

    def check_can_add(self):
        if not self.can_add_input:
            raise InvariantViolation(f"At most {self.max_inputs} inputs allowed")

    def check_can_remove(self):
        if not self.can_remove_input:
            raise InvariantViolation("The last remaining input cannot be removed")

    def add_input(self) -> bool:
        try:
            self.check_can_add()
        except InvariantViolation as e:
            logger.info(f"add_input rejected: {e}")
            return False

        new_input = Input(id=str(self.next_id))
        self.next_id += 1
        self.inputs.append(new_input)
        return True

    def remove_input(self, input_id: str) -> bool:
        try:
            self.check_can_remove()
        except InvariantViolation as e:
            logger.info(f"remove_input rejected: {e}")
            return False

        remaining = [item for item in self.inputs if item.id != str(input_id)]
        if len(remaining) == len(self.inputs):
            logger.warning(f"remove_input: no input with id {input_id!r}")
            return False
        self.inputs = remaining
        return True

    def get_input(self, input_id: str) -> Optional[Input]:
        for item in self.inputs:
            if item.id == str(input_id):
                return item
        return None

    def update_input(self, input_id: str, field: str, raw) -> bool:
        if field not in INPUT_FIELDS:
            logger.warning(f"update_input: unknown field {field!r}")
            return False

        item = self.get_input(input_id)
        if item is None:
            logger.warning(f"update_input: no input with id {input_id!r}")
            return False

        value = parse_number(raw)
        if getattr(item, field) == value:
            return False
        setattr(item, field, value)
        return True

    # ------------------------------------------------------------------
    # Neuron configuration
    # ------------------------------------------------------------------

    def set_bias(self, raw) -> bool:
        value = parse_number(raw)
        if value == self.config.bias:
            return False
        self.config.bias = value
        return True

    def select_aggregation(self, name: str) -> bool:
        try:
            get_aggregation(name)
        except UnknownFunctionError as e:
            return self._reject_unknown(e)
        changed = name != self.config.aggregation
        self.config.aggregation = name
        return changed

    def select_activation(self, name: str) -> bool:
        try:
            get_activation(name)
        except UnknownFunctionError as e:
            return self._reject_unknown(e)
        changed = name != self.config.activation
        self.config.activation = name
        return changed

    def _reject_unknown(self, error: UnknownFunctionError) -> bool:
        if self.strict:
            raise error
        logger.warning(f"{error}; keeping current selection")
        return False

    def set_activation_param(self, name: str, raw) -> bool:
        activation = self.config.activation_fn
        spec = activation.param_spec(name)
        if spec is None:
            logger.warning(f"{activation.name} has no parameter {name!r}")
            return False

        value = parse_bounded(raw, spec.minimum, spec.maximum)
        params = self.config.params.setdefault(activation.name, activation.default_params())
        if params.get(name) == value:
            return False
        params[name] = value
        return True

    # ------------------------------------------------------------------
    # Viewport
    # ------------------------------------------------------------------

    def pan(self, dx: float, dy: float) -> bool:
        if dx == 0 and dy == 0:
            return False
        self.controller.pan(dx, dy)
        return True

    def zoom(self, factor: float) -> bool:
        before = self.viewport.zoom
        return self.controller.zoom_by(factor) != before

    def zoom_in(self) -> bool:
        before = self.viewport.zoom
        return self.controller.zoom_in() != before

    def zoom_out(self) -> bool:
        before = self.viewport.zoom
        return self.controller.zoom_out() != before

    def wheel(self, delta_y: float) -> bool:
        before = self.viewport.zoom
        return self.controller.wheel(delta_y) != before

    def pointer_down(self, x: float, y: float):
        self.controller.pointer_down(x, y)

    def pointer_move(self, x: float, y: float) -> bool:
        return self.controller.pointer_move(x, y)

    def pointer_up(self):
        self.controller.pointer_up()

    def reset_view(self) -> bool:
        before = self.viewport.to_dict()
        self.controller.reset()
        return self.viewport.to_dict() != before

    def apply_relayout(self, relayout: Optional[Dict]) -> bool:
        """Apply a plotly relayoutData payload from the activation plot"""
        action = translate_relayout(relayout, self.mapper.width, self.mapper.height)
        if action is None:
            return False

        kind, args = action
        logger.debug(f"relayout -> {kind}{args}")
        if kind == 'reset':
            return self.reset_view()
        if kind == 'pan':
            return self.pan(*args)
        return self.wheel(*args)

    # ------------------------------------------------------------------
    # Recompute
    # ------------------------------------------------------------------

    def snapshot(self) -> NeuronSnapshot:
        """Evaluate the neuron and map the curve and operating point to screen space"""
        evaluation = evaluate_config(self.inputs, self.config)

        x_min, x_max, y_min, y_max = self.mapper.visible_world_bounds()
        samples = self.sampler.sample(
            self.config.activation_fn, self.config.activation_params(), x_min, x_max
        )
        screen_xs, screen_ys = self.mapper.world_to_screen_array(samples.xs, samples.ys)
        point = (evaluation.aggregated, evaluation.output)

        return NeuronSnapshot(
            aggregated_value=evaluation.aggregated,
            output=evaluation.output,
            derivative=evaluation.derivative,
            formula=evaluation.formula,
            output_formula=evaluation.output_formula,
            samples=samples,
            screen_xs=screen_xs,
            screen_ys=screen_ys,
            current_point=point,
            current_point_screen=self.mapper.world_to_screen(*point),
            visible_bounds=(x_min, x_max, y_min, y_max),
            zoom=self.viewport.zoom,
        )

    # ------------------------------------------------------------------
    # dcc.Store round trip
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict:
        return {
            'inputs': [item.to_dict() for item in self.inputs],
            'next_id': self.next_id,
            'config': self.config.to_dict(),
            'viewport': self.viewport.to_dict(),
            'interaction': self.controller.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict], settings: Optional[Dict] = None, strict: bool = False) -> 'NeuronSession':
        session = cls(settings, strict=strict)
        if not data:
            return session

        inputs = [Input.from_dict(item) for item in data.get('inputs', [])]
        if inputs:
            session.inputs = inputs[:session.max_inputs]
        session.next_id = max(
            int(data.get('next_id', 0)),
            max((int(item.id) for item in session.inputs if item.id.isdigit()), default=0) + 1,
        )
        # Names go through the selectors so a stale store cannot smuggle one in
        config = NeuronConfig.from_dict(data.get('config', {}))
        session.config.bias = config.bias
        session.config.params = config.params
        session.select_aggregation(config.aggregation)
        session.select_activation(config.activation)

        viewport = ViewportState.from_dict(data.get('viewport', {}))
        session.viewport.pan_x = viewport.pan_x
        session.viewport.pan_y = viewport.pan_y
        session.viewport.zoom = viewport.zoom
        session.controller.zoom_by(1.0)  # clamp into the current zoom range
        session.controller.restore(data.get('interaction'))
        return session
