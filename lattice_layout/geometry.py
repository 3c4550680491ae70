"""Plane geometry helpers used by the energy terms.

All helpers take points as pairs of numbers and return plain floats or
tuples.  None of them raise on degenerate input: coincident points give a
zero unit vector and a collapsed segment degrades to a point.
"""

from __future__ import annotations

import math
from typing import Optional, Sequence, Tuple

Point = Tuple[float, float]
Vector = Tuple[float, float]


def _sub(a: Sequence[float], b: Sequence[float]) -> Vector:
    return (float(a[0]) - float(b[0]), float(a[1]) - float(b[1]))


def _dot(a: Sequence[float], b: Sequence[float]) -> float:
    return float(a[0]) * float(b[0]) + float(a[1]) * float(b[1])


def squared_length(v: Sequence[float]) -> float:
    """Return the squared Euclidean length of ``v``."""

    return _dot(v, v)


def line_length_squared(a: Sequence[float], b: Sequence[float]) -> float:
    """Return the squared length of the line between ``a`` and ``b``."""

    return squared_length(_sub(a, b))


def distance(a: Sequence[float], b: Sequence[float]) -> float:
    return math.sqrt(line_length_squared(a, b))


def unit_vector(a: Sequence[float], b: Sequence[float]) -> Vector:
    """Return the unit vector pointing from ``a`` to ``b``.

    Coincident points give ``(0.0, 0.0)``.
    """

    length = distance(a, b)
    if length == 0.0:
        return (0.0, 0.0)
    dx, dy = _sub(b, a)
    return (dx / length, dy / length)


def rotate90(v: Sequence[float]) -> Vector:
    """Rotate ``v`` by pi/2 in positive direction."""

    return (-float(v[1]), float(v[0]))


def projection_parameter(
    point: Sequence[float], segment: Tuple[Sequence[float], Sequence[float]]
) -> Optional[float]:
    """Return the unclamped parameter of ``point`` projected onto ``segment``.

    ``0`` corresponds to the first endpoint and ``1`` to the second one.
    ``None`` is returned when the endpoints coincide.
    """

    a, b = segment
    direction = _sub(b, a)
    denom = squared_length(direction)
    if denom == 0.0:
        return None
    return _dot(_sub(point, a), direction) / denom


def segment_point(segment: Tuple[Sequence[float], Sequence[float]], r: float) -> Point:
    a, b = segment
    return (
        float(a[0]) + r * (float(b[0]) - float(a[0])),
        float(a[1]) + r * (float(b[1]) - float(a[1])),
    )


def point_to_segment_distance(
    point: Sequence[float], segment: Tuple[Sequence[float], Sequence[float]]
) -> float:
    """Return the distance from ``point`` to the closed segment."""

    r = projection_parameter(point, segment)
    if r is None:
        return distance(point, segment[0])
    r = min(max(r, 0.0), 1.0)
    return distance(point, segment_point(segment, r))


__all__ = [
    "Point",
    "Vector",
    "distance",
    "line_length_squared",
    "point_to_segment_distance",
    "projection_parameter",
    "rotate90",
    "segment_point",
    "squared_length",
    "unit_vector",
]
