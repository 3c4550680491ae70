"""Example pipeline: layered start layout of the pentagon N5, then force layout."""

from lattice_layout import Lattice, force_layout, layout_energy, simple_layered_layout
from lattice_layout.force import layout_information

ELEMENTS = ["0", "a", "b", "c", "1"]
COVERS = [("0", "a"), ("a", "c"), ("c", "1"), ("0", "b"), ("b", "1")]


def main() -> None:
    lattice = Lattice.from_relation(ELEMENTS, COVERS)
    start = simple_layered_layout(lattice)
    information = layout_information(lattice, lattice.inf_irreducibles())
    print(f"Start energy: {layout_energy(start, information):.6g}")

    refined = force_layout(start)
    print(f"Final energy: {layout_energy(refined, information):.6g}")
    for name, (x, y) in refined.positions.items():
        print(f"{name}: ({x:.6f}, {y:.6f})")


if __name__ == "__main__":
    main()
