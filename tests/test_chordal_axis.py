# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

import numpy as np
import pytest
from scipy.spatial import Delaunay
from shapely.geometry import Polygon

from polygon_skeleton.algorithms import chordal_axis, constrained_triangulation
from polygon_skeleton.geometry import contains_points, square

"""Tests for the chordal-axis transform."""

SQUARE = [(0, 0), (10, 0), (10, 10), (0, 10)]
RECTANGLE = [(0, 0), (20, 0), (20, 10), (0, 10)]
L_SHAPE = [(0, 0), (20, 0), (20, 10), (10, 10), (10, 20), (0, 20)]
T_SHAPE = [(0, 0), (30, 0), (30, 8), (18, 8), (18, 25), (12, 25), (12, 8), (0, 8)]


def test_constrained_triangulation_square():
    dt, boundary = constrained_triangulation(np.array(SQUARE, dtype=float))
    assert len(dt.triangles) == 2
    assert boundary == {(3, 4), (4, 5), (5, 6), (3, 6)}


def test_constrained_triangulation_l_shape_keeps_interior_only():
    vertices = np.array(L_SHAPE, dtype=float)
    dt, _ = constrained_triangulation(vertices)
    assert len(dt.triangles) == len(L_SHAPE) - 2
    centroids = np.array([dt.triangle_centroid(t) for t in dt.triangles])
    assert contains_points(Polygon(vertices), centroids).all()


def test_square_gives_path_through_centre():
    sk = chordal_axis(SQUARE)
    # two terminal triangles: diagonal midpoint to each opposite corner
    assert sk.edge_count == 2
    assert sk.node_count == 3
    assert any(np.allclose(node, [5.0, 5.0]) for node in sk.nodes)
    assert len(sk.junction_nodes()) == 0
    assert len(sk.longest_path()) == 3


def test_terminal_triangle_connects_to_opposite_vertex():
    sk = chordal_axis(square())
    for start, end in sk.edges:
        np.testing.assert_allclose(start, [0.5, 0.5])
        assert tuple(end) in {(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)}


def test_single_triangle_has_no_chords():
    assert chordal_axis([(0, 0), (4, 0), (0, 3)]).is_empty


def test_degenerate_input_is_empty():
    assert chordal_axis([(0, 0), (1, 1)]).is_empty


@pytest.mark.parametrize("points", [SQUARE, RECTANGLE, L_SHAPE, T_SHAPE])
def test_edge_count_bounded_by_triangle_count(points):
    sk = chordal_axis(points)
    reference = len(Delaunay(np.array(points, dtype=float)).simplices)
    assert sk.edge_count >= 1
    assert sk.edge_count <= reference * 3 + 5


@pytest.mark.parametrize("points", [L_SHAPE, T_SHAPE])
def test_edges_stay_inside_polygon(points):
    sk = chordal_axis(points)
    midpoints = sk.edges.mean(axis=1)
    assert contains_points(Polygon(points), midpoints).all()
