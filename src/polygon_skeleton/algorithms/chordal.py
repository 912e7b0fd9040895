# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

"""
Chordal-axis transform.

The polygon interior is covered by a constrained Delaunay triangulation and
each triangle contributes skeleton edges according to how many of its edges
are internal chords (shared with a neighbour and not on the boundary):

- 1 chord (terminal): chord midpoint to the opposite vertex
- 2 chords (sleeve): midpoint to midpoint
- 3 chords (junction): centroid to each midpoint
"""

import logging
from typing import List, Set, Tuple

from ..geometry.primitives import PolygonLike, as_vertex_array
from ..topology.skeleton import Skeleton
from ..triangulation.delaunay import SUPER_VERTEX_COUNT, DelaunayTriangulation, Triangle
from ..utils.helpers import NodeCollector

logger = logging.getLogger(__name__)

MIDPOINT_EPS = 1e-9

Point = Tuple[float, float]


def constrained_triangulation(vertices) -> Tuple[DelaunayTriangulation, Set[Tuple[int, int]]]:
    """
    Triangulate the polygon interior with its edges enforced as constraints.

    :param vertices: (N, 2) polygon vertices.
    :type vertices: np.ndarray
    :return: Tuple of (triangulation, boundary edge keys in triangulation indices).
    :rtype: Tuple[DelaunayTriangulation, Set[Tuple[int, int]]]
    """
    n = len(vertices)
    dt = DelaunayTriangulation.create(vertices)
    boundary = set()
    unresolved = 0
    for i in range(n):
        a = i + SUPER_VERTEX_COUNT
        b = (i + 1) % n + SUPER_VERTEX_COUNT
        if not dt.enforce_constraint(a, b):
            unresolved += 1
        boundary.add((min(a, b), max(a, b)))
    dt.remove_exterior_triangles(vertices)
    if unresolved:
        logger.debug("%d of %d boundary constraints unresolved", unresolved, n)
    return dt, boundary


def _opposite_point(dt: DelaunayTriangulation, tri: Triangle, chord_mid: Point) -> Point:
    """Vertex facing the chord whose midpoint is ``chord_mid``; the centroid if none matches."""
    points = dt.points
    verts = tuple(tri)
    for i in range(3):
        mx, my = dt.edge_midpoint(verts[i], verts[(i + 1) % 3])
        if abs(mx - chord_mid[0]) < MIDPOINT_EPS and abs(my - chord_mid[1]) < MIDPOINT_EPS:
            x, y = points[verts[(i + 2) % 3]]
            return float(x), float(y)
    return dt.triangle_centroid(tri)


def chordal_axis(polygon: PolygonLike) -> Skeleton:
    """
    Chordal-axis skeleton of a simple polygon.

    :param polygon: Polygon input.
    :type polygon: PolygonLike
    :return: Skeleton built from chord midpoints.
    :rtype: Skeleton
    """
    vertices = as_vertex_array(polygon)
    if len(vertices) < 3:
        return Skeleton.empty()

    dt, boundary = constrained_triangulation(vertices)
    triangles = dt.triangles
    collector = NodeCollector()

    for t_idx, tri in enumerate(triangles):
        chords: List[Point] = []
        for a, b in tri.edges():
            if (min(a, b), max(a, b)) in boundary:
                continue
            if dt.find_adjacent_triangle(t_idx, a, b) >= 0:
                chords.append(dt.edge_midpoint(a, b))

        if len(chords) == 1:
            collector.add_edge(chords[0], _opposite_point(dt, tri, chords[0]))
        elif len(chords) == 2:
            collector.add_edge(chords[0], chords[1])
        elif len(chords) == 3:
            centroid = dt.triangle_centroid(tri)
            for mid in chords:
                collector.add_edge(centroid, mid)

    logger.debug("Chordal axis: %d triangles, %d nodes, %d edges",
                 len(triangles), len(collector), len(collector.edges))
    return Skeleton(collector.nodes, collector.edges)
