"""Energy and force terms of the force directed lattice layout.

The layout energy is the weighted sum of three terms:

* a repulsive term pushing every node away from every edge it does not
  belong to,
* an attractive term treating every covering edge as a spring,
* a gravitative term keeping the edge from an infimum-irreducible element to
  its upper neighbour away from the horizontal.

Every term comes with a force, the partial derivative of the term after one
coordinate of one infimum-irreducible element.  Moving an irreducible ``n``
is taken to drag every element ``v`` with ``n <= v`` along with it.

Degenerate configurations (a node lying on an edge, an edge of length zero
under the gravitative term) make the corresponding energy infinite.  Forces
are ``0.0`` at such singular points.
"""

from __future__ import annotations

import enum
import logging
import math
from typing import Callable, Optional, Tuple

from .geometry import (
    line_length_squared,
    point_to_segment_distance,
    projection_parameter,
    rotate90,
    segment_point,
    unit_vector,
)
from .model import Element, ForceWeights, Layout, LayoutInformation, Point

logger = logging.getLogger(__name__)

INFINITY = math.inf


class SegmentRegime(enum.Enum):
    """Where a node projects onto an edge oriented upper endpoint first."""

    BEFORE = "before"  # closest to the upper endpoint
    INSIDE = "inside"
    AFTER = "after"  # closest to the lower endpoint


class DragCase(enum.Enum):
    """Which of node, upper and lower endpoint move together with ``n``."""

    UPPER_ONLY = "upper_only"
    EDGE_ONLY = "edge_only"
    NODE_ONLY = "node_only"
    NODE_AND_UPPER = "node_and_upper"
    NONE = "none"


class AngularBand(enum.Enum):
    LOW = "low"
    MIDDLE = "middle"
    HIGH = "high"


def classify_segment_regime(r: Optional[float]) -> SegmentRegime:
    if r is None or r <= 0.0:
        return SegmentRegime.BEFORE
    if r >= 1.0:
        return SegmentRegime.AFTER
    return SegmentRegime.INSIDE


_DRAG_CASES = {
    (False, True, False): DragCase.UPPER_ONLY,
    (False, True, True): DragCase.EDGE_ONLY,
    (True, False, False): DragCase.NODE_ONLY,
    (True, True, False): DragCase.NODE_AND_UPPER,
}


def classify_drag(node_moves: bool, upper_moves: bool, lower_moves: bool) -> DragCase:
    return _DRAG_CASES.get((node_moves, upper_moves, lower_moves), DragCase.NONE)


def classify_angle(phi: float, phi_0: float) -> AngularBand:
    if 0.0 <= phi <= phi_0:
        return AngularBand.LOW
    if math.pi - phi_0 <= phi <= math.pi:
        return AngularBand.HIGH
    return AngularBand.MIDDLE


# Repulsive energy and force


def repulsive_energy(layout: Layout) -> float:
    """Sum of ``1 / dist(v, edge)`` over all nodes and non-incident edges."""

    positions = layout.positions
    edges = [(x, y, positions[x], positions[y]) for x, y in layout.connections]
    total = 0.0
    for v, pos_v in positions.items():
        for x, y, pos_x, pos_y in edges:
            if v == x or v == y:
                continue
            dist = point_to_segment_distance(pos_v, (pos_x, pos_y))
            if dist == 0.0:
                logger.debug("Node %r lies on edge (%r, %r); repulsive energy is infinite", v, x, y)
                return INFINITY
            total += 1.0 / dist
    return total


def node_line_distance_derivative(
    point: Point,
    segment: Tuple[Point, Point],
    drag: DragCase,
    part: int,
) -> float:
    """Derivative of the node/edge distance for the given drag case.

    ``segment`` is ``(upper, lower)``.  The regime of the projection is
    classified first and the closed form picked by switching on both tags.
    """

    upper, lower = segment
    r = projection_parameter(point, segment)
    regime = classify_segment_regime(r)

    if regime is SegmentRegime.BEFORE:
        u = unit_vector(upper, point)
        if drag in (DragCase.UPPER_ONLY, DragCase.EDGE_ONLY):
            return -u[part]
        if drag is DragCase.NODE_ONLY:
            return u[part]
        return 0.0

    if regime is SegmentRegime.AFTER:
        u = unit_vector(lower, point)
        if drag is DragCase.EDGE_ONLY:
            return -u[part]
        if drag in (DragCase.NODE_ONLY, DragCase.NODE_AND_UPPER):
            return u[part]
        return 0.0

    assert r is not None
    w = unit_vector(segment_point(segment, r), point)
    if drag is DragCase.UPPER_ONLY:
        return -(1.0 - r) * w[part]
    if drag is DragCase.EDGE_ONLY:
        return -w[part]
    if drag is DragCase.NODE_ONLY:
        return w[part]
    if drag is DragCase.NODE_AND_UPPER:
        return r * w[part]
    return 0.0


def repulsive_force(layout: Layout, n: Element, part: int, information: LayoutInformation) -> float:
    """Partial derivative of the repulsive energy after ``part`` of ``n``."""

    positions = layout.positions
    leq = information.leq
    total = 0.0
    for v, pos_v in positions.items():
        node_moves = leq(n, v)
        for lower, upper in layout.connections:
            if v == lower or v == upper:
                continue
            segment = (positions[upper], positions[lower])
            dist = point_to_segment_distance(pos_v, segment)
            if dist == 0.0:
                continue
            drag = classify_drag(node_moves, leq(n, upper), leq(n, lower))
            if drag is DragCase.NONE:
                continue
            total -= node_line_distance_derivative(pos_v, segment, drag, part) / (dist * dist)
    return total


# Attractive energy and force


def attractive_energy(layout: Layout) -> float:
    """Sum of the squared lengths of all edges."""

    positions = layout.positions
    return float(sum(line_length_squared(positions[x], positions[y]) for x, y in layout.connections))


def attractive_force(layout: Layout, n: Element, part: int, information: LayoutInformation) -> float:
    positions = layout.positions
    leq = information.leq
    total = 0.0
    for x, y in layout.connections:
        for v_1, v_2 in ((x, y), (y, x)):
            if leq(n, v_1) and not leq(n, v_2):
                total += positions[v_1][part] - positions[v_2][part]
    return 2.0 * total


# Gravitative energy and force


def phi(lower: Point, upper: Point) -> float:
    """Angle of the edge from ``lower`` to ``upper``, clamped to ``[0, pi]``."""

    result = math.atan2(upper[1] - lower[1], upper[0] - lower[0])
    return min(max(0.0, result), math.pi)


def base_angle(information: LayoutInformation) -> float:
    return math.pi / (1 + len(information.inf_irreducibles))


def gravitative_energy(layout: Layout, information: LayoutInformation) -> float:
    """Penalty for edges to upper neighbours outside ``[phi_0, pi - phi_0]``."""

    positions = layout.positions
    phi_0 = base_angle(information)
    sin_sq_0 = math.sin(phi_0) ** 2
    e_0 = -phi_0 - math.sin(phi_0) * math.cos(phi_0)
    e_1 = e_0 + math.pi

    total = 0.0
    for n in information.inf_irreducibles:
        phi_n = phi(positions[n], positions[information.upper_neighbours[n]])
        band = classify_angle(phi_n, phi_0)
        if band is AngularBand.MIDDLE:
            continue
        # tan vanishes at both ends of the clamped range
        if phi_n == 0.0 or phi_n == math.pi:
            logger.debug("Edge above %r is horizontal or inverted; gravitative energy is infinite", n)
            return INFINITY
        tan_n = math.tan(phi_n)
        if band is AngularBand.LOW:
            total += phi_n + sin_sq_0 / tan_n + e_0
        else:
            total += -phi_n - sin_sq_0 / tan_n + e_1
    return total


def gravitative_force(layout: Layout, n: Element, part: int, information: LayoutInformation) -> float:
    # NOTE: the coefficients follow Zschalig's description, which is not
    # consistent with the gravitative energy above; only the band structure
    # and the signs are reliable.
    positions = layout.positions
    pos_n = positions[n]
    pos_upper = positions[information.upper_neighbours[n]]
    phi_n = phi(pos_n, pos_upper)
    phi_0 = base_angle(information)

    sin_sq_n = math.sin(phi_n) ** 2
    if sin_sq_n == 0.0:
        return 0.0
    sin_sq_0 = math.sin(phi_0) ** 2
    direction = rotate90(unit_vector(pos_n, pos_upper))[part]

    band = classify_angle(phi_n, phi_0)
    if band is AngularBand.LOW:
        return direction * (sin_sq_n - sin_sq_0) / sin_sq_n
    if band is AngularBand.HIGH:
        return direction * (sin_sq_0 - sin_sq_n) / sin_sq_n
    return 0.0


# Overall energy and force


def layout_energy(
    layout: Layout, information: LayoutInformation, weights: ForceWeights = ForceWeights()
) -> float:
    """Weighted sum of the three energy terms.

    Terms with weight zero are not evaluated, so an infinite term never turns
    into ``0 * inf``.
    """

    terms: Tuple[Tuple[float, Callable[[], float]], ...] = (
        (weights.repulsive, lambda: repulsive_energy(layout)),
        (weights.attractive, lambda: attractive_energy(layout)),
        (weights.gravitative, lambda: gravitative_energy(layout, information)),
    )
    total = 0.0
    for weight, term in terms:
        if weight == 0.0:
            continue
        total += weight * term()
    return float(total)


def layout_force(
    layout: Layout,
    index: int,
    information: LayoutInformation,
    weights: ForceWeights = ForceWeights(),
) -> float:
    """Weighted force for coordinate ``index`` of the flattened irreducibles."""

    part = index % 2
    n = information.inf_irreducibles[index // 2]
    total = 0.0
    if weights.repulsive != 0.0:
        total += weights.repulsive * repulsive_force(layout, n, part, information)
    if weights.attractive != 0.0:
        total += weights.attractive * attractive_force(layout, n, part, information)
    if weights.gravitative != 0.0:
        total += weights.gravitative * gravitative_force(layout, n, part, information)
    return float(total)


__all__ = [
    "AngularBand",
    "DragCase",
    "INFINITY",
    "SegmentRegime",
    "attractive_energy",
    "attractive_force",
    "base_angle",
    "classify_angle",
    "classify_drag",
    "classify_segment_regime",
    "gravitative_energy",
    "gravitative_force",
    "layout_energy",
    "layout_force",
    "node_line_distance_derivative",
    "phi",
    "repulsive_energy",
    "repulsive_force",
]
