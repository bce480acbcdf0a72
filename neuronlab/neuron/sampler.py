"""
Curve Sampler - dense (x, y) samples of the active activation for plotting

The sampled domain is the visible x span widened by a margin on both sides,
so a pan never uncovers an unsampled stretch before the next redraw. The
step is fixed relative to the visible span (samples_per_view points across
it). Sample sets are memoized on (activation, params, visible x extent).
"""

from collections import OrderedDict
import logging
from typing import Dict, Iterator, Optional, Tuple

import numpy as np

from .activations import ActivationFunction

logger = logging.getLogger(__name__)


class CurveSamples:
    """Finite, restartable sequence of (x, y) samples

    Iterating twice yields the same points twice; nothing is consumed.
    """

    def __init__(self, activation_name: str, xs: np.ndarray, ys: np.ndarray):
        self.activation_name = activation_name
        self.xs = xs
        self.ys = ys
        self.xs.setflags(write=False)
        self.ys.setflags(write=False)

    def __iter__(self) -> Iterator[Tuple[float, float]]:
        for x, y in zip(self.xs, self.ys):
            yield float(x), float(y)

    def __len__(self) -> int:
        return len(self.xs)

    @property
    def domain(self) -> Tuple[float, float]:
        return float(self.xs[0]), float(self.xs[-1])

    def to_list(self):
        return [{'x': x, 'y': y} for x, y in self]

    def __repr__(self):
        lo, hi = self.domain
        return f"CurveSamples({self.activation_name}, n={len(self)}, x=[{lo:.2f}, {hi:.2f}])"


class CurveSampler:
    """Samples activation curves over a viewport, with a bounded memo"""

    def __init__(
        self,
        samples_per_view: int = 1000,
        margin_fraction: float = 0.5,
        cache_size: int = 32
    ):
        if samples_per_view < 2:
            raise ValueError(f"samples_per_view must be >= 2, got {samples_per_view}")
        self.samples_per_view = samples_per_view
        self.margin_fraction = margin_fraction
        self.cache_size = cache_size
        self._cache: "OrderedDict[tuple, CurveSamples]" = OrderedDict()

    def sample(
        self,
        activation: ActivationFunction,
        params: Optional[Dict[str, float]],
        x_min: float,
        x_max: float
    ) -> CurveSamples:
        """
        Sample `activation` across the visible span [x_min, x_max] plus margin.

        Args:
            activation: Function to sample
            params: Activation parameters (resolved against the function's specs)
            x_min: Left edge of the visible world region
            x_max: Right edge of the visible world region

        Returns:
            CurveSamples, shared with later calls that use the same key
        """
        if x_max <= x_min:
            raise ValueError(f"Empty sampling span: [{x_min}, {x_max}]")

        resolved = activation.resolve_params(params)
        key = (
            activation.name,
            tuple(sorted(resolved.items())),
            round(x_min, 9),
            round(x_max, 9),
        )

        cached = self._cache.get(key)
        if cached is not None:
            self._cache.move_to_end(key)
            return cached

        span = x_max - x_min
        step = span / self.samples_per_view
        margin = span * self.margin_fraction
        n_points = int(round((span + 2 * margin) / step)) + 1
        xs = np.linspace(x_min - margin, x_max + margin, n_points)
        ys = np.asarray(activation(xs, resolved), dtype=float)

        samples = CurveSamples(activation.name, xs, ys)
        logger.debug(f"Sampled {samples}")

        self._cache[key] = samples
        if len(self._cache) > self.cache_size:
            self._cache.popitem(last=False)
        return samples

    def clear(self):
        self._cache.clear()

    @property
    def cache_len(self) -> int:
        return len(self._cache)
