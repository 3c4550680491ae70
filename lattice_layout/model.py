"""Core data structures for the force layout pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, Hashable, Iterable, List, Mapping, Optional, Tuple

Element = Hashable
Point = Tuple[float, float]
Edge = Tuple[Any, Any]
OrderPredicate = Callable[[Any, Any], bool]


class LatticeError(ValueError):
    """Raised when a relation does not describe a finite lattice."""


class LayoutError(ValueError):
    """Raised when a layout is structurally inconsistent."""


def _as_point(value: Iterable[float]) -> Point:
    x, y = value
    return (float(x), float(y))


@dataclass(frozen=True)
class Layout:
    """Positions of lattice elements plus the covering edges to draw.

    Connections are stored as ``(lower, upper)`` pairs.
    """

    positions: Mapping[Element, Point]
    connections: FrozenSet[Edge] = frozenset()

    def __post_init__(self) -> None:
        positions = {element: _as_point(point) for element, point in self.positions.items()}
        connections = frozenset((lower, upper) for lower, upper in self.connections)
        for lower, upper in connections:
            for element in (lower, upper):
                if element not in positions:
                    raise LayoutError(f"connection endpoint {element!r} has no position")
        object.__setattr__(self, "positions", positions)
        object.__setattr__(self, "connections", connections)

    def elements(self) -> List[Element]:
        return list(self.positions)

    def position(self, element: Element) -> Point:
        try:
            return self.positions[element]
        except KeyError as exc:
            raise LayoutError(f"Unknown element {element!r} in layout") from exc

    def translate(self, dx: float, dy: float) -> "Layout":
        """Return a copy of the layout moved by ``(dx, dy)``."""

        moved = {element: (x + dx, y + dy) for element, (x, y) in self.positions.items()}
        return Layout(moved, self.connections)

    def __iter__(self):
        # allows ``positions, connections = layout``
        yield self.positions
        yield self.connections


@dataclass(frozen=True)
class LayoutInformation:
    """Read-only context shared by the energy and force terms of one pass."""

    inf_irreducibles: Tuple[Element, ...]
    upper_neighbours: Mapping[Element, Element]
    order: Optional[OrderPredicate] = None

    def leq(self, a: Element, b: Element) -> bool:
        if self.order is None:
            raise LatticeError("layout information carries no order predicate")
        return bool(self.order(a, b))


@dataclass(frozen=True)
class ForceWeights:
    """Weights of the repulsive, attractive and gravitative energy terms."""

    repulsive: float = 500.0
    attractive: float = 0.005
    gravitative: float = 100.0


@dataclass
class MinimizeOptions:
    """Options forwarded to ``scipy.optimize.minimize``."""

    method: str = "Nelder-Mead"
    tol: float = 1e-6
    max_iterations: Optional[int] = None
    use_forces: bool = True


@dataclass
class ForceLayoutOptions:
    weights: ForceWeights = field(default_factory=ForceWeights)
    minimize: MinimizeOptions = field(default_factory=MinimizeOptions)


@dataclass
class MinimizeResult:
    x: List[float]
    value: float
    success: bool = True
    iterations: int = 0
    message: str = ""

    def astuple(self) -> Tuple[List[float], float]:
        return list(self.x), self.value


@dataclass
class ForceLayoutResult:
    layout: Layout
    energy: float
    success: bool
    iterations: int
    message: str = ""
    placement: Dict[Element, Point] = field(default_factory=dict)


__all__ = [
    "Edge",
    "Element",
    "ForceLayoutOptions",
    "ForceLayoutResult",
    "ForceWeights",
    "LatticeError",
    "Layout",
    "LayoutError",
    "LayoutInformation",
    "MinimizeOptions",
    "MinimizeResult",
    "OrderPredicate",
    "Point",
]
