"""Example pipeline: refine a diamond lattice drawn with both atoms on top of each other."""

from lattice_layout import Layout, force_layout_with_result

LAYOUT = Layout(
    {
        "bottom": (0.0, 0.0),
        "a": (0.0, 1.0),
        "b": (0.0, 1.0),
        "top": (0.0, 2.0),
    },
    frozenset({("bottom", "a"), ("bottom", "b"), ("a", "top"), ("b", "top")}),
)


def main() -> None:
    result = force_layout_with_result(LAYOUT)

    print("Success:", result.success)
    print(f"Energy: {result.energy:.6g}")
    for name, (x, y) in result.layout.positions.items():
        print(f"{name}: ({x:.6f}, {y:.6f})")


if __name__ == "__main__":
    main()
