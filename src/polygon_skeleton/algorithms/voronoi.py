# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

"""
Voronoi skeleton: densify the boundary, keep the interior Voronoi edges of the
samples, then prune short dangling branches until the graph is stable.
"""

import logging
import math
import numpy as np
from typing import Dict, List, Set, Tuple

from ..geometry.primitives import (PolygonLike, as_shapely_polygon, as_vertex_array,
                                   contains_points, edge_lengths, polygon_perimeter)
from ..topology.skeleton import Skeleton
from ..triangulation.delaunay import DelaunayTriangulation
from ..utils.helpers import collect_nodes, node_key

logger = logging.getLogger(__name__)

DEGENERATE_EPS = 1e-6
MIN_SPACING = 1e-10
FALLBACK_SPACING = 0.01

Point = Tuple[float, float]
Segment = Tuple[Point, Point]


def densify_boundary(vertices: np.ndarray, divisor: float = 5) -> np.ndarray:
    """
    Sample points along the polygon boundary.

    Spacing is the average edge length divided by ``divisor``; every edge gets
    ``max(1, round(length / spacing))`` evenly spaced samples starting at its
    first vertex.

    :param vertices: (N, 2) polygon vertices.
    :type vertices: np.ndarray
    :param divisor: Samples per average-length edge.
    :type divisor: float
    :return: (K, 2) array of boundary samples.
    :rtype: np.ndarray
    """
    n = len(vertices)
    if n == 0:
        return np.empty((0, 2), dtype=float)
    lengths = edge_lengths(vertices)
    spacing = float(np.sum(lengths)) / n / divisor
    if spacing <= MIN_SPACING:
        spacing = FALLBACK_SPACING

    samples = []
    for i in range(n):
        start = vertices[i]
        delta = vertices[(i + 1) % n] - start
        steps = max(1, int(round(lengths[i] / spacing)))
        for s in range(steps):
            samples.append(start + delta * (s / steps))
    return np.array(samples, dtype=float).reshape(-1, 2)


def _segment_length(edge: Segment) -> float:
    (x0, y0), (x1, y1) = edge
    return math.hypot(x1 - x0, y1 - y0)


def _trace_branch(leaf: Point, incident: Dict[Point, List[int]], keys: List[Tuple[Point, Point]],
                  edges: List[Segment]) -> Tuple[List[int], float, Point]:
    """Edges, length and far end of the branch walked from a leaf through degree-2 nodes."""
    branch: List[int] = []
    length = 0.0
    node = leaf
    visited = {node}
    while True:
        next_edge = -1
        for e_idx in incident[node]:
            if e_idx not in branch:
                next_edge = e_idx
                break
        if next_edge < 0:
            return branch, length, node

        branch.append(next_edge)
        length += _segment_length(edges[next_edge])
        sk, ek = keys[next_edge]
        other = ek if sk == node else sk
        if other in visited or len(incident[other]) != 2:
            return branch, length, other
        visited.add(other)
        node = other


def prune_dangling(edges: List[Segment], threshold: float, max_passes: int = 50) -> List[Segment]:
    """
    Remove leaf branches shorter than ``threshold``, repeating while anything changes.

    A branch is traced from a leaf through degree-2 nodes and stops at a
    junction, another leaf, or when it closes a cycle. When every branch
    ending at a node is short, that node keeps all of them, so a connected
    component is never pruned away entirely.

    :param edges: Skeleton edges.
    :type edges: List[Segment]
    :param threshold: Minimum total length for a branch to survive.
    :type threshold: float
    :param max_passes: Maximum pruning passes.
    :type max_passes: int
    :return: Remaining edges, in their original order.
    :rtype: List[Segment]
    """
    current = list(edges)
    for pass_no in range(max_passes):
        keys = [(node_key(*start), node_key(*end)) for start, end in current]
        incident: Dict[Point, List[int]] = {}
        for e_idx, (sk, ek) in enumerate(keys):
            incident.setdefault(sk, []).append(e_idx)
            incident.setdefault(ek, []).append(e_idx)

        leaves = [node for node, edge_ids in incident.items() if len(edge_ids) == 1]
        if not leaves:
            break

        short: Dict[Point, List[List[int]]] = {}
        for leaf in leaves:
            branch, length, end = _trace_branch(leaf, incident, keys, current)
            if length < threshold:
                short.setdefault(end, []).append(branch)

        removed: Set[int] = set()
        for end, branches in short.items():
            if len(branches) >= len(incident[end]):
                continue
            for branch in branches:
                removed.update(branch)

        if not removed:
            break
        current = [edge for e_idx, edge in enumerate(current) if e_idx not in removed]
        logger.debug("Prune pass %d removed %d edges", pass_no + 1, len(removed))
    return current


def voronoi_skeleton(polygon: PolygonLike, densify_divisor: float = 5,
                     max_passes: int = 50) -> Skeleton:
    """
    Skeleton from the interior Voronoi diagram of densified boundary samples.

    :param polygon: Polygon input.
    :type polygon: PolygonLike
    :param densify_divisor: Boundary samples per average-length edge.
    :type densify_divisor: float
    :param max_passes: Maximum dangling-branch pruning passes.
    :type max_passes: int
    :return: Pruned Voronoi skeleton.
    :rtype: Skeleton
    """
    vertices = as_vertex_array(polygon)
    n = len(vertices)
    if n < 3:
        return Skeleton.empty()

    samples = densify_boundary(vertices, densify_divisor)
    dt = DelaunayTriangulation.create(samples)
    candidates = dt.voronoi_edges()
    if not candidates:
        return Skeleton.empty()

    shape = as_shapely_polygon(vertices)
    segments = np.array(candidates, dtype=float).reshape(-1, 2, 2)
    inside = contains_points(shape, segments[:, 0]) & contains_points(shape, segments[:, 1])
    deltas = np.abs(segments[:, 1] - segments[:, 0])
    keep = inside & ((deltas[:, 0] > DEGENERATE_EPS) | (deltas[:, 1] > DEGENERATE_EPS))
    interior = [edge for edge, kept in zip(candidates, keep) if kept]

    threshold = polygon_perimeter(vertices) / (2 * n)
    pruned = prune_dangling(interior, threshold, max_passes)
    logger.debug("Voronoi skeleton: %d samples, %d interior edges, %d after pruning",
                 len(samples), len(interior), len(pruned))
    if not pruned:
        return Skeleton.empty()
    return Skeleton(collect_nodes(pruned), pruned)
