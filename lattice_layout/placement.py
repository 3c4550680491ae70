"""Layouts derived from the positions of the infimum-irreducible elements."""

from __future__ import annotations

import logging
from typing import Dict, Mapping

from .lattice import Lattice
from .logging_utils import debug_log_call
from .model import Element, Layout, LayoutError, Point
from .util import layers

logger = logging.getLogger(__name__)


@debug_log_call(logger)
def layout_by_placement(lattice: Lattice, placement: Mapping[Element, Point]) -> Layout:
    """Return the additive layout of ``lattice`` given by ``placement``.

    ``placement`` maps every infimum-irreducible element to its target
    position.  The top element is placed at the origin.  Each irreducible
    ``n`` contributes a vector ``vec(n)`` and every element ``v`` is drawn at
    the sum of ``vec(n)`` over all irreducibles ``n >= v``.  The vectors are
    recovered top-down so that irreducibles land exactly on their target.
    """

    inf_irrs = lattice.inf_irreducibles()
    missing = [n for n in inf_irrs if n not in placement]
    if missing:
        raise LayoutError(f"placement is missing irreducible element(s) {missing!r}")

    # elements strictly above n have strictly smaller up-sets
    top_down = sorted(inf_irrs, key=lambda n: len(lattice.up_set(n)))
    vectors: Dict[Element, Point] = {}
    for n in top_down:
        x, y = (float(c) for c in placement[n])
        for m, (vx, vy) in vectors.items():
            if lattice.leq(n, m):
                x -= vx
                y -= vy
        vectors[n] = (x, y)

    positions: Dict[Element, Point] = {}
    for v in lattice.base_set():
        x = y = 0.0
        for n, (vx, vy) in vectors.items():
            if lattice.leq(v, n):
                x += vx
                y += vy
        positions[v] = (x, y)
    for n in inf_irrs:
        px, py = placement[n]
        positions[n] = (float(px), float(py))

    logger.debug("Placed %d element(s) from %d irreducible(s)", len(positions), len(inf_irrs))
    return Layout(positions, lattice.edges())


def simple_layered_layout(lattice: Lattice) -> Layout:
    """Place the layers of ``lattice`` on horizontal lines, top layer at ``y = 0``."""

    positions: Dict[Element, Point] = {}
    for depth, layer in enumerate(layers(lattice)):
        offset = (len(layer) - 1) / 2.0
        for idx, element in enumerate(layer):
            positions[element] = (float(idx) - offset, -float(depth))
    logger.info("Built layered layout with %d element(s)", len(positions))
    return Layout(positions, lattice.edges())


__all__ = ["layout_by_placement", "simple_layered_layout"]
