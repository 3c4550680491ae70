"""Force directed refinement of lattice layouts.

Follows the energy model described by C. Zschalig: only the positions of the
infimum-irreducible elements are optimised, the rest of the diagram is
reconstructed from them by :func:`layout_by_placement`.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Sequence

import numpy as np

from .energy import layout_energy, layout_force
from .lattice import Lattice, lattice_from_layout
from .logging_utils import debug_log_call
from .model import (
    Element,
    ForceLayoutOptions,
    ForceLayoutResult,
    ForceWeights,
    Layout,
    LayoutInformation,
    Point,
)
from .optimize import minimize
from .placement import layout_by_placement

logger = logging.getLogger(__name__)


def _points_from_vector(coordinates: Sequence[float]) -> List[Point]:
    flat = [float(c) for c in coordinates]
    return [(flat[i], flat[i + 1]) for i in range(0, len(flat), 2)]


def _placement_from_vector(
    inf_irrs: Sequence[Element], coordinates: Sequence[float]
) -> Dict[Element, Point]:
    return dict(zip(inf_irrs, _points_from_vector(coordinates)))


def layout_information(lattice: Lattice, inf_irrs: Sequence[Element]) -> LayoutInformation:
    """Build the read-only context for one optimisation pass."""

    upper_neighbours = {n: lattice.upper_neighbours(n)[0] for n in inf_irrs}
    return LayoutInformation(
        inf_irreducibles=tuple(inf_irrs),
        upper_neighbours=upper_neighbours,
        order=lattice.order,
    )


def energy_by_inf_irr_positions(
    lattice: Lattice,
    inf_irrs: Sequence[Element],
    weights: ForceWeights = ForceWeights(),
) -> Callable[[Sequence[float]], float]:
    """Return the layout energy as a function of the flattened irreducible positions.

    ``inf_irrs`` fixes which element the coordinates ``2i`` and ``2i + 1``
    belong to.
    """

    information = layout_information(lattice, inf_irrs)

    def energy(coordinates: Sequence[float]) -> float:
        placement = _placement_from_vector(information.inf_irreducibles, coordinates)
        return layout_energy(layout_by_placement(lattice, placement), information, weights)

    return energy


def force_by_inf_irr_positions(
    lattice: Lattice,
    inf_irrs: Sequence[Element],
    weights: ForceWeights = ForceWeights(),
) -> Callable[[int, Sequence[float]], float]:
    """Return ``force(index, coordinates)``, the force component ``index``."""

    information = layout_information(lattice, inf_irrs)

    def force(index: int, coordinates: Sequence[float]) -> float:
        placement = _placement_from_vector(information.inf_irreducibles, coordinates)
        return layout_force(layout_by_placement(lattice, placement), index, information, weights)

    return force


@debug_log_call(logger, log_result=False)
def force_layout_with_result(
    layout: Layout, options: Optional[ForceLayoutOptions] = None
) -> ForceLayoutResult:
    """Improve ``layout`` with the force layout and report the minimiser outcome."""

    options = options or ForceLayoutOptions()

    # the lattice is rederived on every call
    lattice = lattice_from_layout(layout)
    inf_irrs = lattice.inf_irreducibles()
    top_x, top_y = layout.position(lattice.top())
    logger.info(
        "Force layout of %d element(s) with %d irreducible(s), top at (%.6g, %.6g)",
        len(lattice),
        len(inf_irrs),
        top_x,
        top_y,
    )

    # layout_by_placement puts the top element at the origin
    initial: List[float] = []
    for n in inf_irrs:
        x, y = layout.position(n)
        initial.extend((x - top_x, y - top_y))

    energy = energy_by_inf_irr_positions(lattice, inf_irrs, options.weights)
    force = force_by_inf_irr_positions(lattice, inf_irrs, options.weights)
    result = minimize(
        energy,
        np.asarray(initial, dtype=float),
        partial_derivative=force,
        options=options.minimize,
    )

    placement = _placement_from_vector(inf_irrs, result.x)
    reconstructed = layout_by_placement(lattice, placement)
    final = reconstructed.translate(top_x, top_y)

    logger.info("Force layout finished with energy %.6g (success=%s)", result.value, result.success)
    return ForceLayoutResult(
        layout=final,
        energy=result.value,
        success=result.success,
        iterations=result.iterations,
        message=result.message,
        placement=placement,
    )


def force_layout(layout: Layout, options: Optional[ForceLayoutOptions] = None) -> Layout:
    """Improve ``layout`` with the force layout."""

    return force_layout_with_result(layout, options).layout


__all__ = [
    "energy_by_inf_irr_positions",
    "force_by_inf_irr_positions",
    "force_layout",
    "force_layout_with_result",
    "layout_information",
]
