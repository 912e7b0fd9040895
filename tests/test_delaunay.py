# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

import numpy as np
import pytest
from scipy.spatial import Delaunay

from polygon_skeleton.triangulation import DelaunayTriangulation, Triangle

"""Tests for the incremental Delaunay triangulator.

scipy.spatial.Delaunay (Qhull) is used as an independent reference for
triangle counts on the point sets where both cover the full convex hull.
"""

SQUARE = [(0, 0), (10, 0), (10, 10), (0, 10)]
RECTANGLE = [(0, 0), (20, 0), (20, 10), (0, 10)]
L_SHAPE = [(0, 0), (20, 0), (20, 10), (10, 10), (10, 20), (0, 20)]
T_SHAPE = [(0, 0), (30, 0), (30, 8), (18, 8), (18, 25), (12, 25), (12, 8), (0, 8)]


def test_empty_input_produces_no_triangles():
    dt = DelaunayTriangulation.create([])
    assert dt.triangles == []
    assert len(dt.points) == 0


def test_super_vertices_excluded_and_indices_offset():
    dt = DelaunayTriangulation.create(SQUARE)
    assert len(dt.points) == len(SQUARE) + 3
    np.testing.assert_allclose(dt.points[3:], np.array(SQUARE, dtype=float))
    for tri in dt.triangles:
        assert min(tri) >= 3


@pytest.mark.parametrize("points", [SQUARE, RECTANGLE, L_SHAPE, T_SHAPE])
def test_triangle_count_matches_scipy(points):
    dt = DelaunayTriangulation.create(points)
    reference = Delaunay(np.array(points, dtype=float))
    assert len(dt.triangles) == len(reference.simplices)


def test_empty_circumcircle_property_random_points():
    rng = np.random.default_rng(7)
    pts = rng.random((40, 2)) * 10.0
    dt = DelaunayTriangulation.create(pts)
    coords = dt.points

    assert len(dt.triangles) > 0
    for tri in dt.triangles:
        cx, cy = dt.circumcenter(tri)
        radius = np.hypot(*(coords[tri.a] - (cx, cy)))
        dist = np.hypot(pts[:, 0] - cx, pts[:, 1] - cy)
        # no input point strictly inside any circumcircle
        assert np.all(dist >= radius - 1e-7)


def test_circumcenter_right_triangle():
    dt = DelaunayTriangulation.create([(0, 0), (2, 0), (0, 2)])
    assert len(dt.triangles) == 1
    assert dt.circumcenter(dt.triangles[0]) == pytest.approx((1.0, 1.0))


def test_circumcenter_collinear_falls_back_to_centroid():
    dt = DelaunayTriangulation.create([(0, 0), (1, 0), (2, 0)])
    assert dt.circumcenter(Triangle(3, 4, 5)) == pytest.approx((1.0, 0.0))


def test_triangle_helpers():
    tri = Triangle(3, 4, 5)
    assert tri.contains(4)
    assert not tri.contains(6)
    assert tri.edges() == ((3, 4), (4, 5), (5, 3))

    dt = DelaunayTriangulation.create([(0, 0), (2, 0), (0, 2)])
    assert dt.opposite_vertex(tri, 3, 4) == 5
    assert dt.edge_midpoint(3, 4) == pytest.approx((1.0, 0.0))
    assert dt.triangle_centroid(tri) == pytest.approx((2.0 / 3.0, 2.0 / 3.0))


def test_square_adjacency_and_internal_edges():
    dt = DelaunayTriangulation.create(SQUARE)
    assert len(dt.triangles) == 2
    # the two triangles share exactly the diagonal
    assert dt.internal_edge_count(0) == 1
    assert dt.internal_edge_count(1) == 1
    a, b = dt.get_internal_edges(0)[0]
    assert dt.find_adjacent_triangle(0, a, b) == 1
    # every hull edge belongs to exactly one triangle
    for a, b in [(3, 4), (4, 5), (5, 6), (6, 3)]:
        owners = [i for i, t in enumerate(dt.triangles) if t.contains(a) and t.contains(b)]
        assert len(owners) == 1
        assert dt.find_adjacent_triangle(owners[0], a, b) == -1


def test_constraints_on_hull_edges_are_present():
    dt = DelaunayTriangulation.create(SQUARE)
    n = len(SQUARE)
    for i in range(n):
        assert dt.enforce_constraint(i + 3, (i + 1) % n + 3)


@pytest.mark.parametrize("points", [L_SHAPE, T_SHAPE])
def test_enforce_constraint_reports_edge_presence(points):
    dt = DelaunayTriangulation.create(points)
    n = len(points)
    for i in range(n):
        a, b = i + 3, (i + 1) % n + 3
        present = dt.enforce_constraint(a, b)
        # either the edge exists or the flip ceiling left it unresolved
        assert present == dt.has_edge(a, b)


def test_remove_exterior_triangles_l_shape():
    dt = DelaunayTriangulation.create(L_SHAPE)
    n = len(L_SHAPE)
    for i in range(n):
        dt.enforce_constraint(i + 3, (i + 1) % n + 3)
    before = len(dt.triangles)
    dt.remove_exterior_triangles(L_SHAPE)
    after = len(dt.triangles)
    # the hull triangle over the notch is dropped
    assert after < before
    assert after == n - 2


def test_voronoi_edges_square():
    dt = DelaunayTriangulation.create(SQUARE)
    edges = dt.voronoi_edges()
    # one shared edge, both circumcenters at the square centre
    assert len(edges) == 1
    np.testing.assert_allclose(np.array(edges[0]), [[5.0, 5.0], [5.0, 5.0]], atol=1e-9)


def test_voronoi_edges_count_equals_shared_edges():
    rng = np.random.default_rng(3)
    dt = DelaunayTriangulation.create(rng.random((25, 2)))
    shared = sum(dt.internal_edge_count(i) for i in range(len(dt.triangles))) // 2
    assert len(dt.voronoi_edges()) == shared
