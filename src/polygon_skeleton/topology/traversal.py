# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

"""
Graph traversal over skeleton adjacency lists.

This module provides functions for breadth-first search, tree-diameter paths and
the decomposition of a skeleton graph into branches between endpoint nodes.
"""

from collections import deque
from typing import Dict, List, Optional, Set, Tuple


def bfs(adjacency: List[List[int]], start: int) -> Tuple[int, Dict[int, Optional[int]]]:
    """
    Breadth-first search from a start node.

    :param adjacency: Neighbour lists.
    :type adjacency: List[List[int]]
    :param start: Start node index.
    :type start: int
    :return: Tuple of (farthest node reached, parent map of visited nodes).
    :rtype: Tuple[int, Dict[int, Optional[int]]]
    """
    parents: Dict[int, Optional[int]] = {start: None}
    queue = deque([start])
    farthest = start
    while queue:
        node = queue.popleft()
        farthest = node
        for neighbour in adjacency[node]:
            if neighbour not in parents:
                parents[neighbour] = node
                queue.append(neighbour)
    return farthest, parents


def bfs_path(adjacency: List[List[int]], start: int, goal: int) -> List[int]:
    """Node path from start to goal, empty when goal is unreachable."""
    _, parents = bfs(adjacency, start)
    if goal not in parents:
        return []
    path = [goal]
    while parents[path[-1]] is not None:
        path.append(parents[path[-1]])
    path.reverse()
    return path


def longest_path(adjacency: List[List[int]], start: int = 0) -> List[int]:
    """
    Approximate graph diameter by double BFS (exact on trees).

    Only the component containing ``start`` is considered.

    :param adjacency: Neighbour lists.
    :type adjacency: List[List[int]]
    :param start: Node the first search starts from.
    :type start: int
    :return: Node indices along the path, end to end.
    :rtype: List[int]
    """
    if not adjacency:
        return []
    first, _ = bfs(adjacency, start)
    second, _ = bfs(adjacency, first)
    return bfs_path(adjacency, first, second)


def _walk(adjacency: List[List[int]], degrees: List[int], start: int, nxt: int) -> List[int]:
    path = [start, nxt]
    prev, cur = start, nxt
    while degrees[cur] == 2 and cur != start:
        a, b = adjacency[cur]
        prev, cur = cur, (b if a == prev else a)
        path.append(cur)
    return path


def branches(adjacency: List[List[int]]) -> List[List[int]]:
    """
    Split the graph into maximal paths between endpoint nodes (degree != 2).

    Cycles without any endpoint are not reported.

    :param adjacency: Neighbour lists.
    :type adjacency: List[List[int]]
    :return: List of node-index paths, each starting and ending at an endpoint.
    :rtype: List[List[int]]
    """
    degrees = [len(neighbours) for neighbours in adjacency]
    endpoints = [i for i, d in enumerate(degrees) if d > 0 and d != 2]
    visited: Set[Tuple[int, int]] = set()
    result = []
    for start in endpoints:
        for nxt in adjacency[start]:
            if (start, nxt) in visited:
                continue
            path = _walk(adjacency, degrees, start, nxt)
            for u, v in zip(path, path[1:]):
                visited.add((u, v))
                visited.add((v, u))
            result.append(path)
    return result


def leaf_branches(adjacency: List[List[int]]) -> List[List[int]]:
    """Branches joining a leaf (degree 1) to a junction (degree >= 3)."""
    degrees = [len(neighbours) for neighbours in adjacency]
    leaves = []
    for path in branches(adjacency):
        ends = sorted((degrees[path[0]], degrees[path[-1]]))
        if ends[0] == 1 and ends[1] >= 3:
            leaves.append(path)
    return leaves
