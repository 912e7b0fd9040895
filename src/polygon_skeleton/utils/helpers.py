# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

"""
Utility functions and helpers.

This module holds the shared numeric tolerances and the node de-duplication
helpers used by every skeleton algorithm.
"""

import numpy as np
from typing import Dict, Iterable, List, Tuple


# Node identity tolerances (shared by all algorithms and graph queries)
NODE_KEY_DECIMALS = 7  # rounding applied to node coordinates before hashing
NODE_MATCH_EPS = 1e-7  # per-axis distance under which two points are one node


def node_key(x: float, y: float) -> Tuple[float, float]:
    """
    Round a coordinate pair to the node-identity key.

    :param x: X coordinate.
    :type x: float
    :param y: Y coordinate.
    :type y: float
    :return: Rounded (x, y) tuple usable as a dict/set key.
    :rtype: Tuple[float, float]
    """
    return (round(float(x), NODE_KEY_DECIMALS), round(float(y), NODE_KEY_DECIMALS))


class NodeCollector:
    """
    Ordered set of skeleton node positions keyed by rounded coordinates.

    The first position seen for a key is the one kept, so near-coincident
    points produced by independent algorithm passes collapse into one node.
    """

    def __init__(self):
        self._keys: Dict[Tuple[float, float], int] = {}
        self._points: List[Tuple[float, float]] = []
        self._edges: List[Tuple[Tuple[float, float], Tuple[float, float]]] = []

    def add_node(self, x: float, y: float) -> None:
        key = node_key(x, y)
        if key not in self._keys:
            self._keys[key] = len(self._points)
            self._points.append((float(x), float(y)))

    def add_edge(self, start: Tuple[float, float], end: Tuple[float, float]) -> None:
        """
        Record an edge and both of its endpoints as nodes.

        :param start: Edge start (x, y).
        :type start: Tuple[float, float]
        :param end: Edge end (x, y).
        :type end: Tuple[float, float]
        """
        self.add_node(*start)
        self.add_node(*end)
        self._edges.append(((float(start[0]), float(start[1])),
                            (float(end[0]), float(end[1]))))

    @property
    def nodes(self) -> np.ndarray:
        return np.array(self._points, dtype=float).reshape(-1, 2)

    @property
    def edges(self) -> np.ndarray:
        return np.array(self._edges, dtype=float).reshape(-1, 2, 2)

    def __len__(self) -> int:
        return len(self._points)


def collect_nodes(edges: Iterable) -> np.ndarray:
    """
    Collect the unique endpoints of a list of edges, in first-seen order.

    :param edges: Iterable of ((x0, y0), (x1, y1)) edges.
    :type edges: Iterable
    :return: (N, 2) array of unique node positions.
    :rtype: np.ndarray
    """
    collector = NodeCollector()
    for start, end in edges:
        collector.add_node(*start)
        collector.add_node(*end)
    return collector.nodes


def print_progress(current: int, total: int, prefix: str = 'Progress') -> None:
    """
    Print a simple progress indicator.

    :param current: Current iteration (0-based or 1-based).
    :type current: int
    :param total: Total number of iterations.
    :type total: int
    :param prefix: Prefix text for progress message.
    :type prefix: str
    """
    percentage = (current / total) * 100 if total > 0 else 0
    print(f"{prefix}: {current}/{total} ({percentage:.1f}%)")
