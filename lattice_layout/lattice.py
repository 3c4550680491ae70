"""Finite lattices given by an explicit order relation.

This module only provides what the layout code needs: the order predicate,
the covering relation, top and bottom, joins and meets and the
infimum-irreducible elements.  Lattices are immutable; all derived data is
computed once at construction time.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, FrozenSet, Iterable, List, Optional, Sequence, Set, Tuple

from .logging_utils import debug_log_call
from .model import Edge, Element, LatticeError, Layout

logger = logging.getLogger(__name__)


def _unique_ordered(elements: Iterable[Element]) -> List[Element]:
    seen: Set[Element] = set()
    ordered: List[Element] = []
    for element in elements:
        if element not in seen:
            seen.add(element)
            ordered.append(element)
    return ordered


def _transitive_closure(
    elements: Sequence[Element], pairs: Iterable[Tuple[Element, Element]]
) -> Dict[Element, Set[Element]]:
    """Return ``above[x]``: every element ``y`` with ``x <= y``."""

    above: Dict[Element, Set[Element]] = {x: {x} for x in elements}
    for lower, upper in pairs:
        if lower not in above or upper not in above:
            raise LatticeError(f"pair ({lower!r}, {upper!r}) mentions an unknown element")
        above[lower].add(upper)
    # Warshall on the up-sets
    for k in elements:
        above_k = above[k]
        for x in elements:
            if k in above[x]:
                above[x] |= above_k
    return above


class Lattice:
    """A finite lattice on ``base_set`` ordered by ``order``."""

    def __init__(self, base_set: Iterable[Element], order: Callable[[Element, Element], bool]):
        self._elements: Tuple[Element, ...] = tuple(_unique_ordered(base_set))
        if not self._elements:
            raise LatticeError("a lattice needs at least one element")
        self._above: Dict[Element, FrozenSet[Element]] = {
            x: frozenset(y for y in self._elements if order(x, y)) for x in self._elements
        }
        self._check_partial_order()
        self._upper: Dict[Element, Tuple[Element, ...]] = {}
        self._lower: Dict[Element, List[Element]] = {x: [] for x in self._elements}
        for x in self._elements:
            strictly_above = [y for y in self._elements if y != x and y in self._above[x]]
            covers = tuple(
                y
                for y in strictly_above
                if not any(z != y and y in self._above[z] for z in strictly_above)
            )
            self._upper[x] = covers
            for y in covers:
                self._lower[y].append(x)
        self._top = self._extremum(lambda x: all(x in self._above[y] for y in self._elements), "top")
        self._bottom = self._extremum(lambda x: len(self._above[x]) == len(self._elements), "bottom")
        self._check_bounds()

    @classmethod
    def from_relation(
        cls, elements: Iterable[Element], pairs: Iterable[Tuple[Element, Element]]
    ) -> "Lattice":
        """Build the lattice generated by ``pairs`` of ``(lower, upper)`` elements."""

        ordered = _unique_ordered(elements)
        above = _transitive_closure(ordered, pairs)
        return cls(ordered, lambda a, b: b in above[a])

    def _check_partial_order(self) -> None:
        for x in self._elements:
            if x not in self._above[x]:
                raise LatticeError(f"order is not reflexive at {x!r}")
            for y in self._above[x]:
                if y != x and x in self._above[y]:
                    raise LatticeError(f"order is not antisymmetric: {x!r} and {y!r}")
                if not self._above[y] <= self._above[x]:
                    raise LatticeError(f"order is not transitive above {x!r}")

    def _extremum(self, predicate: Callable[[Element], bool], name: str) -> Element:
        for x in self._elements:
            if predicate(x):
                return x
        raise LatticeError(f"ordered set has no {name} element")

    def _least(self, candidates: Iterable[Element]) -> Optional[Element]:
        pool = list(candidates)
        for x in pool:
            if all(y in self._above[x] for y in pool):
                return x
        return None

    def _greatest(self, candidates: Iterable[Element]) -> Optional[Element]:
        pool = list(candidates)
        for x in pool:
            if all(x in self._above[y] for y in pool):
                return x
        return None

    def _check_bounds(self) -> None:
        for i, a in enumerate(self._elements):
            for b in self._elements[i + 1 :]:
                if self._least(self._above[a] & self._above[b]) is None:
                    raise LatticeError(f"{a!r} and {b!r} have no join")
                lower = [x for x in self._elements if a in self._above[x] and b in self._above[x]]
                if self._greatest(lower) is None:
                    raise LatticeError(f"{a!r} and {b!r} have no meet")

    # order-theoretic queries

    def base_set(self) -> Tuple[Element, ...]:
        return self._elements

    def __len__(self) -> int:
        return len(self._elements)

    def __contains__(self, element: object) -> bool:
        return element in self._above

    def leq(self, a: Element, b: Element) -> bool:
        return b in self._above[a]

    @property
    def order(self) -> Callable[[Element, Element], bool]:
        return self.leq

    def up_set(self, x: Element) -> FrozenSet[Element]:
        return self._above[x]

    def upper_neighbours(self, x: Element) -> Tuple[Element, ...]:
        return self._upper[x]

    def lower_neighbours(self, x: Element) -> Tuple[Element, ...]:
        return tuple(self._lower[x])

    def directly_neighboured(self, a: Element, b: Element) -> bool:
        """Return ``True`` when ``b`` covers ``a``."""

        return b in self._upper[a]

    def top(self) -> Element:
        return self._top

    def bottom(self) -> Element:
        return self._bottom

    def join(self, a: Element, b: Element) -> Element:
        result = self._least(self._above[a] & self._above[b])
        assert result is not None
        return result

    def meet(self, a: Element, b: Element) -> Element:
        result = self._greatest(x for x in self._elements if self.leq(x, a) and self.leq(x, b))
        assert result is not None
        return result

    def inf_irreducibles(self) -> List[Element]:
        """Elements with exactly one upper neighbour, in base-set order."""

        return [x for x in self._elements if len(self._upper[x]) == 1]

    def sup_irreducibles(self) -> List[Element]:
        return [x for x in self._elements if len(self._lower[x]) == 1]

    def edges(self) -> FrozenSet[Edge]:
        return frozenset((x, y) for x in self._elements for y in self._upper[x])

    def __repr__(self) -> str:
        return f"Lattice(size={len(self._elements)}, top={self._top!r}, bottom={self._bottom!r})"


@debug_log_call(logger)
def lattice_from_layout(layout: Layout) -> Lattice:
    """Rederive the lattice drawn by ``layout`` from its connections."""

    lattice = Lattice.from_relation(layout.positions.keys(), layout.connections)
    logger.debug("Derived %r from layout with %d connection(s)", lattice, len(layout.connections))
    return lattice


__all__ = ["Lattice", "lattice_from_layout"]
