# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

"""
Algorithms module for skeleton extraction.

Each algorithm is a plain function ``polygon -> Skeleton``; ``compute_skeleton``
selects one through the ``SkeletonAlgo`` enumeration.
"""

from enum import Enum
from typing import Callable, Dict, Union

from ..geometry.primitives import PolygonLike
from ..topology.skeleton import Skeleton
from .chordal import MIDPOINT_EPS, chordal_axis, constrained_triangulation
from .straight import HIGH_EPS, LOW_EPS, MED_EPS, PASS_FACTOR, Wavefront, straight_skeleton
from .voronoi import DEGENERATE_EPS, densify_boundary, prune_dangling, voronoi_skeleton


class SkeletonAlgo(Enum):
    STRAIGHT_SKELETON = 'straight'
    CHORDAL_AXIS = 'chordal'
    VORONOI = 'voronoi'


ALGORITHMS: Dict[SkeletonAlgo, Callable[[PolygonLike], Skeleton]] = {
    SkeletonAlgo.STRAIGHT_SKELETON: straight_skeleton,
    SkeletonAlgo.CHORDAL_AXIS: chordal_axis,
    SkeletonAlgo.VORONOI: voronoi_skeleton,
}


def compute_skeleton(polygon: PolygonLike,
                     algo: Union[SkeletonAlgo, str] = SkeletonAlgo.STRAIGHT_SKELETON) -> Skeleton:
    """
    Compute a polygon skeleton with the selected algorithm.

    :param polygon: Polygon input.
    :type polygon: PolygonLike
    :param algo: Algorithm member or its string value ('straight', 'chordal', 'voronoi').
    :type algo: Union[SkeletonAlgo, str]
    :return: The skeleton.
    :rtype: Skeleton
    :raises ValueError: If the algorithm is unknown.
    """
    try:
        selected = SkeletonAlgo(algo)
    except ValueError:
        choices = ', '.join(a.value for a in SkeletonAlgo)
        raise ValueError(f"Unknown skeleton algorithm {algo!r} (expected one of: {choices})")
    return ALGORITHMS[selected](polygon)


__all__ = [
    # Selection
    'SkeletonAlgo',
    'ALGORITHMS',
    'compute_skeleton',
    # Straight skeleton
    'HIGH_EPS',
    'MED_EPS',
    'LOW_EPS',
    'PASS_FACTOR',
    'Wavefront',
    'straight_skeleton',
    # Chordal axis
    'MIDPOINT_EPS',
    'constrained_triangulation',
    'chordal_axis',
    # Voronoi
    'DEGENERATE_EPS',
    'densify_boundary',
    'prune_dangling',
    'voronoi_skeleton',
]
