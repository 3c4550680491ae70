"""Helpers for finished layouts: bounding boxes, scaling and grids."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Sequence, Set, Tuple

from .lattice import Lattice
from .logging_utils import apply_debug_logging
from .model import Element, Layout, Point

logger = logging.getLogger(__name__)

Rectangle = Tuple[float, float, float, float]


def enclosing_rectangle(points: Iterable[Sequence[float]]) -> Rectangle:
    """Return ``(x_min, y_min, x_max, y_max)`` of ``points``."""

    pts = list(points)
    if not pts:
        raise ValueError("enclosing_rectangle requires at least one point")
    xs = [float(p[0]) for p in pts]
    ys = [float(p[1]) for p in pts]
    return (min(xs), min(ys), max(xs), max(ys))


def scale_layout(lower_left: Sequence[float], upper_right: Sequence[float], layout: Layout) -> Layout:
    """Scale ``layout`` so that it exactly fills the given rectangle.

    An axis along which all points agree is mapped onto the lower bound.
    """

    x_min, y_min, x_max, y_max = enclosing_rectangle(layout.positions.values())
    target_x, target_y = float(lower_left[0]), float(lower_left[1])
    span_x, span_y = x_max - x_min, y_max - y_min
    width = float(upper_right[0]) - target_x
    height = float(upper_right[1]) - target_y

    scaled: Dict[Element, Point] = {}
    for element, (x, y) in layout.positions.items():
        nx = 0.0 if span_x == 0 else (x - x_min) / span_x
        ny = 0.0 if span_y == 0 else (y - y_min) / span_y
        scaled[element] = (target_x + nx * width, target_y + ny * height)

    logger.info("Scaled layout with %d element(s) onto %s-%s", len(scaled), lower_left, upper_right)
    return Layout(scaled, layout.connections)


def _snap(value: float, origin: float, pad: float) -> float:
    if pad == 0:
        return value
    return origin + round((value - origin) / pad) * pad


def fit_layout_to_grid(
    layout: Layout, origin: Sequence[float], x_pad: float, y_pad: float
) -> Layout:
    """Move every point to the nearest node of the grid through ``origin``."""

    ox, oy = float(origin[0]), float(origin[1])
    x_pad, y_pad = float(x_pad), float(y_pad)
    fitted = {
        element: (_snap(x, ox, x_pad), _snap(y, oy, y_pad))
        for element, (x, y) in layout.positions.items()
    }
    return Layout(fitted, layout.connections)


def discretize_layout(layout: Layout, x_count: int, y_count: int) -> Layout:
    """Snap ``layout`` to a grid of ``x_count`` by ``y_count`` cells over its bounding box."""

    if x_count <= 0 or y_count <= 0:
        raise ValueError("grid cell counts must be positive")
    x_min, y_min, x_max, y_max = enclosing_rectangle(layout.positions.values())
    return fit_layout_to_grid(
        layout,
        (x_min, y_min),
        (x_max - x_min) / x_count,
        (y_max - y_min) / y_count,
    )


def layers(lattice: Lattice) -> List[List[Element]]:
    """Split ``lattice`` into layers, the top element first.

    An element joins a layer once all of its upper neighbours are placed.
    """

    result: List[List[Element]] = []
    placed: Set[Element] = set()
    remaining = list(lattice.base_set())
    while remaining:
        layer = [x for x in remaining if all(y in placed for y in lattice.upper_neighbours(x))]
        result.append(layer)
        placed.update(layer)
        remaining = [x for x in remaining if x not in placed]
    return result


def top_down_elements_in_layout(layout: Layout) -> List[Element]:
    """Order the elements of ``layout`` so upper endpoints precede lower ones."""

    uppers: Dict[Element, Set[Element]] = {element: set() for element in layout.positions}
    for lower, upper in layout.connections:
        uppers[lower].add(upper)

    ordered: List[Element] = []
    emitted: Set[Element] = set()
    remaining = list(layout.positions)
    while remaining:
        ready = [x for x in remaining if uppers[x] <= emitted]
        if not ready:
            raise ValueError("layout connections contain a cycle")
        ordered.extend(ready)
        emitted.update(ready)
        remaining = [x for x in remaining if x not in emitted]
    return ordered


apply_debug_logging(globals(), logger=logger)


__all__ = [
    "discretize_layout",
    "enclosing_rectangle",
    "fit_layout_to_grid",
    "layers",
    "scale_layout",
    "top_down_elements_in_layout",
]
