import math

import pytest

from lattice_layout.geometry import (
    distance,
    line_length_squared,
    point_to_segment_distance,
    projection_parameter,
    rotate90,
    squared_length,
    unit_vector,
)


def test_lengths_and_distance():
    assert squared_length((3.0, 4.0)) == 25.0
    assert line_length_squared((1.0, 1.0), (4.0, 5.0)) == 25.0
    assert distance((0.0, 0.0), (3.0, 4.0)) == 5.0


def test_unit_vector_points_from_first_to_second():
    assert unit_vector((0.0, 0.0), (0.0, 2.0)) == (0.0, 1.0)
    ux, uy = unit_vector((1.0, 1.0), (4.0, 5.0))
    assert ux == pytest.approx(0.6)
    assert uy == pytest.approx(0.8)


def test_unit_vector_of_coincident_points_is_zero():
    assert unit_vector((1.5, -2.0), (1.5, -2.0)) == (0.0, 0.0)


def test_rotate90():
    assert rotate90((1.0, 2.0)) == (-2.0, 1.0)
    assert rotate90(rotate90((1.0, 2.0))) == (-1.0, -2.0)


def test_point_to_segment_distance_regimes():
    segment = ((-1.0, 0.0), (1.0, 0.0))
    assert point_to_segment_distance((0.0, 1.0), segment) == pytest.approx(1.0)
    assert point_to_segment_distance((3.0, 0.0), segment) == pytest.approx(2.0)
    assert point_to_segment_distance((-4.0, 3.0), segment) == pytest.approx(math.sqrt(18.0))


def test_point_to_segment_distance_degenerate_segment():
    segment = ((0.0, 0.0), (0.0, 0.0))
    assert projection_parameter((3.0, 4.0), segment) is None
    assert point_to_segment_distance((3.0, 4.0), segment) == pytest.approx(5.0)


def test_projection_parameter_is_unclamped():
    segment = ((0.0, 0.0), (2.0, 0.0))
    assert projection_parameter((1.0, 5.0), segment) == pytest.approx(0.5)
    assert projection_parameter((-2.0, 0.0), segment) == pytest.approx(-1.0)
    assert projection_parameter((6.0, 1.0), segment) == pytest.approx(3.0)
