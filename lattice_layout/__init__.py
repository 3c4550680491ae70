from .model import (
    ForceLayoutOptions,
    ForceLayoutResult,
    ForceWeights,
    LatticeError,
    Layout,
    LayoutError,
    LayoutInformation,
    MinimizeOptions,
    MinimizeResult,
)
from .lattice import Lattice, lattice_from_layout
from .geometry import (
    distance,
    point_to_segment_distance,
    rotate90,
    squared_length,
    unit_vector,
)
from .energy import (
    attractive_energy,
    attractive_force,
    gravitative_energy,
    gravitative_force,
    layout_energy,
    layout_force,
    repulsive_energy,
    repulsive_force,
)
from .placement import layout_by_placement, simple_layered_layout
from .optimize import minimize
from .force import (
    energy_by_inf_irr_positions,
    force_by_inf_irr_positions,
    force_layout,
    force_layout_with_result,
)
from .util import (
    discretize_layout,
    enclosing_rectangle,
    fit_layout_to_grid,
    layers,
    scale_layout,
    top_down_elements_in_layout,
)

__all__ = [
    'ForceLayoutOptions',
    'ForceLayoutResult',
    'ForceWeights',
    'Lattice',
    'LatticeError',
    'Layout',
    'LayoutError',
    'LayoutInformation',
    'MinimizeOptions',
    'MinimizeResult',
    'attractive_energy',
    'attractive_force',
    'discretize_layout',
    'distance',
    'enclosing_rectangle',
    'energy_by_inf_irr_positions',
    'fit_layout_to_grid',
    'force_by_inf_irr_positions',
    'force_layout',
    'force_layout_with_result',
    'gravitative_energy',
    'gravitative_force',
    'lattice_from_layout',
    'layers',
    'layout_by_placement',
    'layout_energy',
    'layout_force',
    'minimize',
    'point_to_segment_distance',
    'repulsive_energy',
    'repulsive_force',
    'rotate90',
    'scale_layout',
    'simple_layered_layout',
    'squared_length',
    'top_down_elements_in_layout',
    'unit_vector',
]
