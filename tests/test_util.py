import pytest

from lattice_layout import (
    Lattice,
    Layout,
    discretize_layout,
    enclosing_rectangle,
    fit_layout_to_grid,
    layers,
    scale_layout,
    top_down_elements_in_layout,
)

TEST_LAYOUTS = [
    Layout({1: (0, 0), 2: (1, 2), 3: (10, 20)}, frozenset({(1, 2), (2, 3)})),
    Layout(
        {1: (0, 0), 2: (-1, 1), 3: (1, 1), 4: (0, 2)},
        frozenset({(1, 2), (1, 3), (2, 4), (3, 4)}),
    ),
]


def _is_multiple(value: float, pad: float) -> bool:
    ratio = value / pad
    return abs(ratio - round(ratio)) < 1e-9


def test_enclosing_rectangle():
    with pytest.raises(ValueError):
        enclosing_rectangle([])
    assert enclosing_rectangle([(1, 2), (2, 3), (3, 4)]) == (1.0, 2.0, 3.0, 4.0)


@pytest.mark.parametrize("layout", TEST_LAYOUTS)
def test_scale_layout(layout):
    scaled = scale_layout((0, 0), (100, 100), layout)

    assert enclosing_rectangle(scaled.positions.values()) == pytest.approx((0.0, 0.0, 100.0, 100.0))
    assert scaled.connections == layout.connections


def test_scale_layout_flat_axis_goes_to_lower_bound():
    layout = Layout({"a": (0, 5), "b": (2, 5)})
    scaled = scale_layout((10, 10), (20, 30), layout)

    assert scaled.positions == {"a": (10.0, 10.0), "b": (20.0, 10.0)}


@pytest.mark.parametrize("layout", TEST_LAYOUTS)
def test_fit_layout_to_grid(layout):
    fitted = fit_layout_to_grid(layout, (0.5, -1.3), 0.4, 0.7)
    points = list(fitted.positions.values())

    for a, b in points:
        for c, d in points:
            assert _is_multiple(a - c, 0.4)
            assert _is_multiple(b - d, 0.7)


@pytest.mark.parametrize("layout", TEST_LAYOUTS)
def test_discretize_layout(layout):
    x_min, y_min, x_max, y_max = enclosing_rectangle(layout.positions.values())
    discrete = discretize_layout(layout, 3, 7)
    x_pad = (x_max - x_min) / 3
    y_pad = (y_max - y_min) / 7

    for a, b in discrete.positions.values():
        assert _is_multiple(a - x_min, x_pad)
        assert _is_multiple(b - y_min, y_pad)


def test_discretize_layout_rejects_empty_grid():
    with pytest.raises(ValueError):
        discretize_layout(TEST_LAYOUTS[0], 0, 3)


def test_layers():
    lattice = Lattice(range(1, 6), lambda a, b: a <= b)
    assert layers(lattice) == [[5], [4], [3], [2], [1]]

    diamond = Lattice.from_relation(
        ["bottom", "a", "b", "top"],
        [("bottom", "a"), ("bottom", "b"), ("a", "top"), ("b", "top")],
    )
    assert layers(diamond) == [["top"], ["a", "b"], ["bottom"]]


@pytest.mark.parametrize("layout", TEST_LAYOUTS)
def test_top_down_elements_in_layout(layout):
    index = {element: idx for idx, element in enumerate(top_down_elements_in_layout(layout))}

    for lower, upper in layout.connections:
        assert index[upper] < index[lower]
