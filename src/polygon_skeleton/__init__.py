# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

"""
Polygon Skeleton Package

A modular Python package for extracting medial-axis skeletons from simple
polygons.

Modules:
    - geometry: Polygon normalisation, query shapes, intersections, sample shapes
    - triangulation: Constrained Delaunay triangulation
    - algorithms: Straight skeleton, chordal axis and Voronoi skeleton extraction
    - topology: Skeleton graph value, adjacency and traversal queries
    - utils: Shared tolerances and node helpers
"""

__version__ = '0.1.0'
__author__ = 'Rami Ardati'

from . import geometry
from . import triangulation
from . import algorithms
from . import topology
from . import utils

from .algorithms import SkeletonAlgo, compute_skeleton
from .topology import Skeleton

__all__ = [
    'geometry',
    'triangulation',
    'algorithms',
    'topology',
    'utils',
    'SkeletonAlgo',
    'compute_skeleton',
    'Skeleton',
]
