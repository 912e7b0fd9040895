# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

"""
Immutable skeleton value and its graph queries.

A skeleton is a pair of arrays: node positions ``(N, 2)`` and edge segments
``(M, 2, 2)``. Edges do not store node indices; adjacency is rebuilt from the
coordinates whenever a graph query needs it.
"""

import math
import numpy as np
from scipy.spatial import KDTree
from shapely.geometry import LineString, Polygon
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from ..geometry.intersections import line_segment, segment_circle, segment_geometry
from ..geometry.primitives import Circle, Line
from ..utils.helpers import NODE_MATCH_EPS, NodeCollector, collect_nodes
from .adjacency import build_adjacency, edge_node_pairs, node_degrees
from .traversal import branches as graph_branches
from .traversal import leaf_branches, longest_path

QueryShape = Union[Line, Circle, LineString, Polygon]


def _frozen(array: np.ndarray) -> np.ndarray:
    array = np.array(array, dtype=float)
    array.flags.writeable = False
    return array


class Skeleton:
    """
    Medial-axis approximation of a polygon as a planar graph.
    """

    def __init__(self, nodes: Optional[Iterable] = None, edges: Optional[Iterable] = None):
        """
        Initialize a skeleton.

        :param nodes: (N, 2) node positions; collected from the edges when omitted.
        :type nodes: Optional[Iterable]
        :param edges: (M, 2, 2) edge segments.
        :type edges: Optional[Iterable]
        """
        edge_array = np.asarray(edges if edges is not None else [], dtype=float).reshape(-1, 2, 2)
        if nodes is None:
            node_array = collect_nodes(edge_array)
        else:
            node_array = np.asarray(nodes, dtype=float).reshape(-1, 2)
        self._nodes = _frozen(node_array)
        self._edges = _frozen(edge_array)

    @classmethod
    def empty(cls) -> 'Skeleton':
        return cls()

    @classmethod
    def from_edges(cls, edges: Iterable) -> 'Skeleton':
        return cls(edges=list(edges))

    @classmethod
    def from_polygon(cls, polygon, algo='straight') -> 'Skeleton':
        """
        Compute the skeleton of a polygon.

        :param polygon: Polygon input accepted by ``as_vertex_array``.
        :param algo: SkeletonAlgo member or its string value.
        :return: The polygon's skeleton.
        :rtype: Skeleton
        """
        from ..algorithms import compute_skeleton
        return compute_skeleton(polygon, algo)

    @property
    def nodes(self) -> np.ndarray:
        return self._nodes

    @property
    def edges(self) -> np.ndarray:
        return self._edges

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    @property
    def is_empty(self) -> bool:
        return len(self._nodes) == 0 and len(self._edges) == 0

    def __repr__(self) -> str:
        return f"Skeleton(nodes={self.node_count}, edges={self.edge_count})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Skeleton):
            return NotImplemented
        if self._nodes.shape != other._nodes.shape or self._edges.shape != other._edges.shape:
            return False
        return (np.allclose(self._nodes, other._nodes, rtol=0.0, atol=NODE_MATCH_EPS)
                and np.allclose(self._edges, other._edges, rtol=0.0, atol=NODE_MATCH_EPS))

    __hash__ = None

    # Graph structure

    def adjacency(self) -> List[List[int]]:
        return build_adjacency(self._nodes, self._edges)

    def degrees(self) -> np.ndarray:
        return node_degrees(self.adjacency())

    def junction_nodes(self) -> np.ndarray:
        """Positions of nodes with three or more neighbours."""
        return self._nodes[self.degrees() >= 3]

    def leaf_nodes(self) -> np.ndarray:
        return self._nodes[self.degrees() == 1]

    def total_length(self) -> float:
        if self.edge_count == 0:
            return 0.0
        deltas = self._edges[:, 1] - self._edges[:, 0]
        return float(np.sum(np.hypot(deltas[:, 0], deltas[:, 1])))

    def longest_path(self) -> np.ndarray:
        """
        Longest node path found by double breadth-first search from node 0.

        :return: (K, 2) array of node positions along the path.
        :rtype: np.ndarray
        """
        if self.node_count == 0:
            return np.empty((0, 2), dtype=float)
        path = longest_path(self.adjacency())
        return self._nodes[path].copy()

    def branches(self) -> List[np.ndarray]:
        """
        Paths between endpoint nodes (leaves and junctions).

        :return: One (K, 2) position array per branch.
        :rtype: List[np.ndarray]
        """
        return [self._nodes[path].copy() for path in graph_branches(self.adjacency())]

    def _without_pairs(self, pairs: set) -> 'Skeleton':
        kept = []
        for e_idx, a, b in edge_node_pairs(self._nodes, self._edges):
            if (min(a, b), max(a, b)) not in pairs:
                kept.append(self._edges[e_idx])
        return Skeleton.from_edges(kept)

    def spine(self) -> 'Skeleton':
        """
        Skeleton with every leaf-to-junction branch removed.

        Pruning repeats until no junction keeps a leaf branch, so a component
        without junctions is returned as it is and ``spine().spine() == spine()``.

        :return: Pruned skeleton holding only nodes still referenced by an edge.
        :rtype: Skeleton
        """
        current = self
        while True:
            pruned = leaf_branches(current.adjacency())
            if not pruned:
                return current
            pairs = set()
            for path in pruned:
                for u, v in zip(path, path[1:]):
                    pairs.add((min(u, v), max(u, v)))
            current = current._without_pairs(pairs)

    def split_leaf_edges(self) -> Tuple['Skeleton', 'Skeleton']:
        """
        Separate the edges that touch a degree-1 node.

        :return: Tuple of (core, leaves) skeletons.
        :rtype: Tuple[Skeleton, Skeleton]
        """
        degrees = self.degrees()
        core, leaves = [], []
        for e_idx, a, b in edge_node_pairs(self._nodes, self._edges):
            if degrees[a] == 1 or degrees[b] == 1:
                leaves.append(self._edges[e_idx])
            else:
                core.append(self._edges[e_idx])
        return Skeleton.from_edges(core), Skeleton.from_edges(leaves)

    def nearest_node(self, point: Sequence[float]) -> Tuple[int, float]:
        """
        Closest node to a point.

        :param point: Query (x, y).
        :type point: Sequence[float]
        :return: Tuple of (node index, distance).
        :rtype: Tuple[int, float]
        :raises ValueError: If the skeleton has no nodes.
        """
        if self.node_count == 0:
            raise ValueError("Cannot query the nearest node of an empty skeleton")
        distance, index = KDTree(self._nodes).query(np.asarray(point, dtype=float))
        return int(index), float(distance)

    # Geometry

    def bounding_box(self) -> Tuple[float, float, float, float]:
        """Axis-aligned bounds of the nodes as (x, y, width, height)."""
        if self.node_count == 0:
            return 0.0, 0.0, 0.0, 0.0
        min_x, min_y = self._nodes.min(axis=0)
        max_x, max_y = self._nodes.max(axis=0)
        return float(min_x), float(min_y), float(max_x - min_x), float(max_y - min_y)

    def _centre(self) -> np.ndarray:
        x, y, w, h = self.bounding_box()
        return np.array([x + w / 2.0, y + h / 2.0])

    def _mapped(self, transform) -> 'Skeleton':
        return Skeleton(transform(self._nodes), transform(self._edges))

    def scale(self, factor: float) -> 'Skeleton':
        """Uniform scale about the bounding-box centre."""
        centre = self._centre()
        return self._mapped(lambda pts: (pts - centre) * factor + centre)

    def rotate(self, degrees: float, origin: Optional[Sequence[float]] = None) -> 'Skeleton':
        """
        Rotate counter-clockwise about a point.

        :param degrees: Rotation angle in degrees.
        :type degrees: float
        :param origin: Centre of rotation; the bounding-box centre when omitted.
        :type origin: Optional[Sequence[float]]
        :return: Rotated skeleton.
        :rtype: Skeleton
        """
        centre = self._centre() if origin is None else np.asarray(origin, dtype=float)
        theta = math.radians(degrees)
        rotation = np.array([[math.cos(theta), -math.sin(theta)],
                             [math.sin(theta), math.cos(theta)]])
        return self._mapped(lambda pts: (pts - centre) @ rotation.T + centre)

    def __add__(self, vector) -> 'Skeleton':
        offset = np.asarray(vector, dtype=float)
        return self._mapped(lambda pts: pts + offset)

    def __sub__(self, vector) -> 'Skeleton':
        offset = np.asarray(vector, dtype=float)
        return self._mapped(lambda pts: pts - offset)

    def __mul__(self, size) -> 'Skeleton':
        factors = np.broadcast_to(np.asarray(size, dtype=float), (2,))
        return self._mapped(lambda pts: pts * factors)

    def __truediv__(self, size) -> 'Skeleton':
        factors = np.broadcast_to(np.asarray(size, dtype=float), (2,))
        return self._mapped(lambda pts: pts / factors)

    # Intersections

    def intersections(self, shape: QueryShape) -> np.ndarray:
        """
        Points where skeleton edges meet a query shape.

        Lines use a same-side pre-test; circles report boundary crossings;
        segments and polylines (``LineString``) and triangles, rectangles and
        polygons (``Polygon``) are tested edge by edge against their boundary.

        :param shape: Line, Circle, shapely LineString or shapely Polygon.
        :type shape: QueryShape
        :return: (K, 2) array of unique intersection points.
        :rtype: np.ndarray
        :raises TypeError: For unsupported query shapes.
        """
        if not isinstance(shape, (Line, Circle, LineString, Polygon)):
            raise TypeError(f"Unsupported query shape: {type(shape).__name__}")

        found = NodeCollector()
        for start, end in self._edges:
            if isinstance(shape, Line):
                hit = line_segment(shape, start, end)
                hits = [] if hit is None else [hit]
            elif isinstance(shape, Circle):
                hits = segment_circle(start, end, shape)
            else:
                hits = segment_geometry(start, end, shape)
            for x, y in hits:
                found.add_node(x, y)
        return found.nodes
