"""
Coordinate Mapper - world (function domain/range) <-> screen (pixels)

Base map, with the y axis inverted because screen y grows downward:

    bx = origin_x + (x - x_min) / (x_max - x_min) * width
    by = origin_y - (y - y_min) / (y_max - y_min) * height

Pan and zoom are applied on top, zooming about the centre of the view:

    screen = center + zoom * (base - center) + pan

The whole map is affine, so it is exactly invertible. Inversion is what
turns a drag distance in pixels into a distance in world units.
"""

from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np


@dataclass
class ViewportState:
    """Pan/zoom of the plot; affects only what is visible, never the result"""
    pan_x: float = 0.0
    pan_y: float = 0.0
    zoom: float = 1.0

    def reset(self):
        self.pan_x = 0.0
        self.pan_y = 0.0
        self.zoom = 1.0

    def to_dict(self) -> Dict:
        return {'pan_x': self.pan_x, 'pan_y': self.pan_y, 'zoom': self.zoom}

    @classmethod
    def from_dict(cls, data: Dict) -> 'ViewportState':
        return cls(
            pan_x=float(data.get('pan_x', 0.0)),
            pan_y=float(data.get('pan_y', 0.0)),
            zoom=float(data.get('zoom', 1.0)),
        )


class CoordinateMapper:
    """Affine transform between world and screen coordinates for one viewport"""

    def __init__(
        self,
        viewport: ViewportState,
        width: float = 400.0,
        height: float = 300.0,
        x_range: Tuple[float, float] = (-20.0, 20.0),
        y_range: Tuple[float, float] = (-15.0, 15.0)
    ):
        if x_range[1] <= x_range[0] or y_range[1] <= y_range[0]:
            raise ValueError(f"Empty world window: x={x_range}, y={y_range}")
        if width <= 0 or height <= 0:
            raise ValueError(f"Empty view: {width}x{height}")

        self.viewport = viewport
        self.width = float(width)
        self.height = float(height)
        self.x_min, self.x_max = (float(v) for v in x_range)
        self.y_min, self.y_max = (float(v) for v in y_range)

        # Screen position of the world's (x_min, y_min) corner
        self.origin_x = 0.0
        self.origin_y = self.height
        self.center_x = self.width / 2
        self.center_y = self.height / 2

    @property
    def x_scale(self) -> float:
        """Pixels per world unit along x at zoom 1"""
        return self.width / (self.x_max - self.x_min)

    @property
    def y_scale(self) -> float:
        return self.height / (self.y_max - self.y_min)

    def world_to_screen(self, x: float, y: float) -> Tuple[float, float]:
        sx, sy = self.world_to_screen_array(x, y)
        return float(sx), float(sy)

    def world_to_screen_array(self, xs, ys) -> Tuple[np.ndarray, np.ndarray]:
        """Vectorised world_to_screen for whole sample sets"""
        xs = np.asarray(xs, dtype=float)
        ys = np.asarray(ys, dtype=float)
        vp = self.viewport

        base_x = self.origin_x + (xs - self.x_min) * self.x_scale
        base_y = self.origin_y - (ys - self.y_min) * self.y_scale

        sx = self.center_x + vp.zoom * (base_x - self.center_x) + vp.pan_x
        sy = self.center_y + vp.zoom * (base_y - self.center_y) + vp.pan_y
        return sx, sy

    def screen_to_world(self, sx: float, sy: float) -> Tuple[float, float]:
        vp = self.viewport
        base_x = self.center_x + (sx - vp.pan_x - self.center_x) / vp.zoom
        base_y = self.center_y + (sy - vp.pan_y - self.center_y) / vp.zoom

        x = self.x_min + (base_x - self.origin_x) / self.x_scale
        y = self.y_min + (self.origin_y - base_y) / self.y_scale
        return x, y

    def screen_delta_to_world(self, dx: float, dy: float) -> Tuple[float, float]:
        """Pixel drag distance -> world distance (y flips sign)"""
        zoom = self.viewport.zoom
        return dx / (zoom * self.x_scale), -dy / (zoom * self.y_scale)

    def visible_world_bounds(self) -> Tuple[float, float, float, float]:
        """(x_min, x_max, y_min, y_max) of the world region currently on screen"""
        left, top = self.screen_to_world(0.0, 0.0)
        right, bottom = self.screen_to_world(self.width, self.height)
        return left, right, bottom, top
