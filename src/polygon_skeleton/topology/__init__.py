# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

"""Topology module for the skeleton graph and its queries."""

from .adjacency import (
    SpatialHash,
    edge_node_pairs,
    build_adjacency,
    node_degrees
)

from .traversal import (
    bfs,
    bfs_path,
    longest_path,
    branches,
    leaf_branches
)

from .skeleton import Skeleton

__all__ = [
    # Adjacency
    'SpatialHash',
    'edge_node_pairs',
    'build_adjacency',
    'node_degrees',
    # Traversal
    'bfs',
    'bfs_path',
    'longest_path',
    'branches',
    'leaf_branches',
    # Skeleton value
    'Skeleton',
]
