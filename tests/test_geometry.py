# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

import numpy as np
import pytest
from shapely.geometry import LineString, Polygon, box

from polygon_skeleton.geometry import (
    Circle,
    Line,
    as_vertex_array,
    contains_points,
    edge_lengths,
    ensure_clockwise,
    line_segment,
    polygon_perimeter,
    regular_polygon,
    segment_circle,
    segment_geometry,
    segment_segment,
    signed_area,
    square,
    SAMPLE_SHAPES,
)

"""Unit tests for polygon normalisation, winding and intersection helpers."""


def test_as_vertex_array_drops_closing_vertex():
    ring = [(0, 0), (1, 0), (1, 1), (0, 1), (0, 0)]
    verts = as_vertex_array(ring)
    assert verts.shape == (4, 2)
    assert verts.dtype == float


def test_as_vertex_array_accepts_shapely_polygon():
    verts = as_vertex_array(Polygon([(0, 0), (2, 0), (2, 1)]))
    assert verts.shape == (3, 2)
    np.testing.assert_allclose(verts[1], [2.0, 0.0])


def test_as_vertex_array_rejects_malformed_input():
    with pytest.raises(ValueError):
        as_vertex_array([(0, 0, 0), (1, 0, 0)])
    with pytest.raises(ValueError):
        as_vertex_array([("a", "b"), ("c", "d")])


def test_as_vertex_array_empty():
    assert as_vertex_array([]).shape == (0, 2)
    assert as_vertex_array(Polygon()).shape == (0, 2)


def test_signed_area_sign_follows_winding():
    ccw = square(2.0)
    assert signed_area(ccw) == pytest.approx(4.0)
    assert signed_area(ccw[::-1]) == pytest.approx(-4.0)


def test_ensure_clockwise_reverses_only_ccw():
    ccw = square()
    cw = ensure_clockwise(ccw)
    assert signed_area(cw) < 0
    np.testing.assert_allclose(ensure_clockwise(cw), cw)


def test_perimeter_and_edge_lengths():
    rect = SAMPLE_SHAPES['rectangle']()
    np.testing.assert_allclose(edge_lengths(rect), [20.0, 10.0, 20.0, 10.0])
    assert polygon_perimeter(rect) == pytest.approx(60.0)


def test_contains_points_is_strict_interior():
    poly = Polygon(square())
    mask = contains_points(poly, np.array([[0.5, 0.5], [0.0, 0.5], [2.0, 2.0]]))
    assert mask.tolist() == [True, False, False]


def test_regular_polygon_needs_three_sides():
    assert regular_polygon(5).shape == (5, 2)
    with pytest.raises(ValueError):
        regular_polygon(2)


def test_sample_shapes_are_counter_clockwise():
    for name, factory in SAMPLE_SHAPES.items():
        assert signed_area(factory()) > 0, name


def test_line_through_points():
    line = Line.through((0, 1), (2, 5))
    assert line.slope == pytest.approx(2.0)
    assert line.intercept == pytest.approx(1.0)
    assert Line.through((3, 0), (3, 7)).is_vertical
    with pytest.raises(ValueError):
        Line.through((1, 1), (1, 1))


def test_segment_segment_crossing_and_parallel():
    hit = segment_segment((0, 0), (2, 2), (0, 2), (2, 0))
    assert hit == pytest.approx((1.0, 1.0))
    assert segment_segment((0, 0), (1, 0), (0, 1), (1, 1)) is None
    assert segment_segment((0, 0), (1, 1), (3, 0), (2, 1)) is None


def test_line_segment_same_side_rejected():
    line = Line.vertical(0.5)
    assert line_segment(line, (0, 0), (1, 0)) == pytest.approx((0.5, 0.0))
    assert line_segment(line, (1, 0), (2, 0)) is None

    diagonal = Line(slope=1.0, intercept=0.0)
    assert line_segment(diagonal, (0, 1), (1, 0)) == pytest.approx((0.5, 0.5))


def test_segment_circle_chord_reports_both_crossings():
    hits = segment_circle((-2, 0), (2, 0), Circle((0.0, 0.0), 1.0))
    assert len(hits) == 2
    np.testing.assert_allclose(hits, [[-1.0, 0.0], [1.0, 0.0]])
    # segment entirely inside the circle never crosses it
    assert segment_circle((-0.5, 0), (0.5, 0), Circle((0.0, 0.0), 1.0)) == []


def test_segment_geometry_polygon_and_polyline():
    hits = segment_geometry((-1, 0.5), (2, 0.5), box(0, 0, 1, 1))
    assert sorted(x for x, _ in hits) == pytest.approx([0.0, 1.0])

    path = LineString([(0.5, -1), (0.5, 1)])
    assert segment_geometry((0, 0), (1, 0), path) == [pytest.approx((0.5, 0.0))]

    with pytest.raises(TypeError):
        segment_geometry((0, 0), (1, 0), "not a geometry")


def test_segment_geometry_through_corners_and_along_edges():
    # the diagonal enters and leaves the box exactly at two corners
    hits = segment_geometry((-1, -1), (2, 2), box(0, 0, 1, 1))
    assert sorted(hits) == [pytest.approx((0.0, 0.0)), pytest.approx((1.0, 1.0))]

    # a segment lying on the bottom side overlaps it and reports no crossing
    assert segment_geometry((0.2, 0.0), (0.8, 0.0), box(0, 0, 1, 1)) == []
    assert segment_geometry((5, 5), (6, 6), box(0, 0, 1, 1)) == []
