# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

"""
Adjacency reconstruction for skeleton graphs.

Edges only carry coordinates, so node indices are recovered by looking each
endpoint up in a uniform spatial hash over the node positions.
"""

import math
import numpy as np
from typing import Dict, List, Tuple

from ..utils.helpers import NODE_MATCH_EPS


class SpatialHash:
    """
    Grid hash mapping coordinates to node indices within a per-axis tolerance.
    """

    def __init__(self, nodes: np.ndarray, eps: float = NODE_MATCH_EPS):
        """
        Index node positions.

        :param nodes: (N, 2) array of node positions.
        :type nodes: np.ndarray
        :param eps: Per-axis match tolerance; the grid cell is twice this size.
        :type eps: float
        """
        self.eps = eps
        self.cell = 2.0 * eps
        self.nodes = np.asarray(nodes, dtype=float).reshape(-1, 2)
        self._cells: Dict[Tuple[int, int], List[int]] = {}
        for idx, (x, y) in enumerate(self.nodes):
            self._cells.setdefault(self._quantize(x, y), []).append(idx)

    def _quantize(self, x: float, y: float) -> Tuple[int, int]:
        return (math.floor(x / self.cell), math.floor(y / self.cell))

    def find(self, x: float, y: float) -> int:
        """
        Index of the first node within tolerance of (x, y), or -1.

        :param x: Query X coordinate.
        :type x: float
        :param y: Query Y coordinate.
        :type y: float
        :return: Node index or -1.
        :rtype: int
        """
        qx, qy = self._quantize(x, y)
        for ix in (qx - 1, qx, qx + 1):
            for iy in (qy - 1, qy, qy + 1):
                for idx in self._cells.get((ix, iy), ()):
                    nx, ny = self.nodes[idx]
                    if abs(nx - x) < self.eps and abs(ny - y) < self.eps:
                        return idx
        return -1


def edge_node_pairs(nodes: np.ndarray, edges: np.ndarray) -> List[Tuple[int, int, int]]:
    """
    Resolve every edge to its (edge_index, start_node, end_node) triple.

    Edges with an unknown endpoint or whose endpoints collapse to one node are skipped.

    :param nodes: (N, 2) node positions.
    :type nodes: np.ndarray
    :param edges: (M, 2, 2) edge segments.
    :type edges: np.ndarray
    :return: List of (edge_index, a, b) triples.
    :rtype: List[Tuple[int, int, int]]
    """
    index = SpatialHash(nodes)
    pairs = []
    for e_idx, ((x0, y0), (x1, y1)) in enumerate(edges):
        a = index.find(x0, y0)
        b = index.find(x1, y1)
        if a < 0 or b < 0 or a == b:
            continue
        pairs.append((e_idx, a, b))
    return pairs


def build_adjacency(nodes: np.ndarray, edges: np.ndarray) -> List[List[int]]:
    """
    Neighbour lists of the skeleton graph, without duplicate neighbours.

    :param nodes: (N, 2) node positions.
    :type nodes: np.ndarray
    :param edges: (M, 2, 2) edge segments.
    :type edges: np.ndarray
    :return: One list of neighbour indices per node.
    :rtype: List[List[int]]
    """
    adjacency: List[List[int]] = [[] for _ in range(len(nodes))]
    for _, a, b in edge_node_pairs(nodes, edges):
        if b not in adjacency[a]:
            adjacency[a].append(b)
        if a not in adjacency[b]:
            adjacency[b].append(a)
    return adjacency


def node_degrees(adjacency: List[List[int]]) -> np.ndarray:
    return np.array([len(neighbours) for neighbours in adjacency], dtype=int)
