# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

import numpy as np
import pytest
from shapely.geometry import Polygon

from polygon_skeleton import Skeleton, SkeletonAlgo, compute_skeleton
from polygon_skeleton.algorithms import ALGORITHMS
from polygon_skeleton.geometry import contains_points, rectangle, square

"""Cross-algorithm checks through the compute_skeleton dispatcher."""

SHAPES = {
    'square': [(0, 0), (10, 0), (10, 10), (0, 10)],
    'rectangle': [(0, 0), (20, 0), (20, 10), (0, 10)],
    'l-shape': [(0, 0), (20, 0), (20, 10), (10, 10), (10, 20), (0, 20)],
    't-shape': [(0, 0), (30, 0), (30, 8), (18, 8), (18, 25), (12, 25), (12, 8), (0, 8)],
    'arrow': [(0, 8), (20, 8), (20, 0), (35, 12), (20, 24), (20, 16), (0, 16)],
}

ALGOS = [algo.value for algo in SkeletonAlgo]


def test_registry_covers_every_algorithm():
    assert set(ALGORITHMS) == set(SkeletonAlgo)


def test_dispatch_by_string_and_enum():
    by_name = compute_skeleton(square(), 'chordal')
    by_member = compute_skeleton(square(), SkeletonAlgo.CHORDAL_AXIS)
    assert by_name == by_member


def test_default_is_straight_skeleton():
    assert compute_skeleton(square()) == compute_skeleton(square(), 'straight')


def test_unknown_algorithm_raises():
    with pytest.raises(ValueError, match='straight'):
        compute_skeleton(square(), 'medial')


@pytest.mark.parametrize("algo", ALGOS)
@pytest.mark.parametrize("name", sorted(SHAPES))
def test_nodes_stay_near_polygon_bounds(name, algo):
    points = np.array(SHAPES[name], dtype=float)
    sk = compute_skeleton(points, algo)
    assert isinstance(sk, Skeleton)
    assert sk.edge_count >= 1

    lo = points.min(axis=0) - 2.0
    hi = points.max(axis=0) + 2.0
    assert np.all(sk.nodes >= lo)
    assert np.all(sk.nodes <= hi)


@pytest.mark.parametrize("algo", ALGOS)
def test_rectangle_edges_lie_inside(algo):
    verts = rectangle(20.0, 10.0)
    sk = compute_skeleton(verts, algo)
    midpoints = sk.edges.mean(axis=1)
    assert contains_points(Polygon(verts), midpoints).all()


@pytest.mark.parametrize("algo", ALGOS)
@pytest.mark.parametrize("name", ['square', 'rectangle'])
def test_longest_path_is_connected(name, algo):
    sk = compute_skeleton(SHAPES[name], algo)
    path = sk.longest_path()
    assert len(path) >= 2
    # consecutive path nodes are joined by an edge
    for p, q in zip(path[:-1], path[1:]):
        joined = np.any(
            np.all(np.isclose(sk.edges, [p, q]), axis=(1, 2))
            | np.all(np.isclose(sk.edges, [q, p]), axis=(1, 2))
        )
        assert joined


@pytest.mark.parametrize("algo", ALGOS)
def test_degenerate_polygon_is_empty(algo):
    assert compute_skeleton([(0, 0), (1, 1)], algo).is_empty
