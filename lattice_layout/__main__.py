import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from lattice_layout import (
    ForceLayoutOptions,
    Lattice,
    Layout,
    MinimizeOptions,
    force_layout_with_result,
    simple_layered_layout,
)

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _load_layout(data: Dict[str, Any]) -> Layout:
    connections = [tuple(pair) for pair in data.get("connections", [])]
    if "positions" in data:
        return Layout(
            {name: tuple(point) for name, point in data["positions"].items()},
            frozenset(connections),
        )
    elements = data.get("elements")
    if not elements:
        raise ValueError("layout file needs either 'positions' or 'elements'")
    logger.info("No positions given; starting from a layered layout")
    return simple_layered_layout(Lattice.from_relation(elements, connections))


def _dump_layout(layout: Layout) -> Dict[str, Any]:
    return {
        "positions": {str(name): [x, y] for name, (x, y) in layout.positions.items()},
        "connections": sorted([str(lower), str(upper)] for lower, upper in layout.connections),
    }


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Refine lattice diagrams with a force layout")
    parser.add_argument("path", help="Path to a JSON layout or relation")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--method",
        default="Nelder-Mead",
        help="scipy.optimize.minimize method (default: Nelder-Mead)",
    )
    parser.add_argument(
        "--max-iterations",
        type=int,
        help="Iteration limit passed to the minimiser",
    )
    parser.add_argument(
        "--no-forces",
        action="store_true",
        help="Do not hand the analytic forces to gradient based methods",
    )
    parser.add_argument(
        "--output",
        help="Write the resulting layout as JSON to the given path",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    with open(args.path) as fin:
        data = json.load(fin)

    logger.info("Reading layout from %s", args.path)
    layout = _load_layout(data)

    options = ForceLayoutOptions(
        minimize=MinimizeOptions(
            method=args.method,
            max_iterations=args.max_iterations,
            use_forces=not args.no_forces,
        )
    )
    result = force_layout_with_result(layout, options)

    print("Success:", result.success)
    print(f"Energy: {result.energy:.6g}")
    print(f"Iterations: {result.iterations}")
    print("Coordinates:")
    for name, (x, y) in result.layout.positions.items():
        print(f"  {name}: ({x:.6f}, {y:.6f})")

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Writing layout to %s", output_path)
        output_path.write_text(json.dumps(_dump_layout(result.layout), indent=2), encoding="utf-8")
        print(f"Layout written to {output_path}")


if __name__ == "__main__":
    main(sys.argv[1:])
