# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

"""
Exact intersection tests between segments and query primitives.

Points are plain (x, y) tuples; every function returns ``None`` or a list when
there is nothing to report rather than raising.
"""

import math
from typing import List, Optional, Sequence, Tuple

import shapely
from shapely.geometry import LineString, Polygon

from .primitives import Circle, Line

Point = Tuple[float, float]

PARALLEL_EPS = 1e-10


def _cross(ax: float, ay: float, bx: float, by: float) -> float:
    return ax * by - ay * bx


def segment_segment(p0: Sequence[float], p1: Sequence[float],
                    q0: Sequence[float], q1: Sequence[float]) -> Optional[Point]:
    """
    Intersection point of segments p0-p1 and q0-q1.

    Parallel and collinear segments report no intersection.

    :param p0: First segment start.
    :type p0: Sequence[float]
    :param p1: First segment end.
    :type p1: Sequence[float]
    :param q0: Second segment start.
    :type q0: Sequence[float]
    :param q1: Second segment end.
    :type q1: Sequence[float]
    :return: Intersection point or None.
    :rtype: Optional[Point]
    """
    d1x, d1y = p1[0] - p0[0], p1[1] - p0[1]
    d2x, d2y = q1[0] - q0[0], q1[1] - q0[1]
    denom = _cross(d1x, d1y, d2x, d2y)
    if abs(denom) < PARALLEL_EPS:
        return None

    diffx, diffy = q0[0] - p0[0], q0[1] - p0[1]
    t = _cross(diffx, diffy, d2x, d2y) / denom
    u = _cross(diffx, diffy, d1x, d1y) / denom
    if 0.0 <= t <= 1.0 and 0.0 <= u <= 1.0:
        return (p0[0] + t * d1x, p0[1] + t * d1y)
    return None


def line_segment(line: Line, a: Sequence[float], b: Sequence[float]) -> Optional[Point]:
    """
    Intersection of an infinite line with segment a-b.

    Endpoints strictly on the same side of the line are rejected before any
    division is attempted.
    """
    side_a = line.side(a[0], a[1])
    side_b = line.side(b[0], b[1])
    if (side_a > 0 and side_b > 0) or (side_a < 0 and side_b < 0):
        return None

    dx, dy = line.direction()
    px, py = line.point()
    sx, sy = b[0] - a[0], b[1] - a[1]
    denom = _cross(sx, sy, dx, dy)
    if abs(denom) < PARALLEL_EPS:
        # Collinear segment: report its start
        if side_a == 0:
            return (float(a[0]), float(a[1]))
        return None
    t = _cross(px - a[0], py - a[1], dx, dy) / denom
    t = min(max(t, 0.0), 1.0)
    return (a[0] + t * sx, a[1] + t * sy)


def segment_circle(a: Sequence[float], b: Sequence[float], circle: Circle) -> List[Point]:
    """
    Points where segment a-b crosses the circle boundary.

    :param a: Segment start.
    :type a: Sequence[float]
    :param b: Segment end.
    :type b: Sequence[float]
    :param circle: Query circle.
    :type circle: Circle
    :return: Zero, one or two boundary crossings, ordered from a to b.
    :rtype: List[Point]
    """
    cx, cy = circle.center
    dx, dy = b[0] - a[0], b[1] - a[1]
    fx, fy = a[0] - cx, a[1] - cy

    qa = dx * dx + dy * dy
    if qa == 0.0:
        return []
    qb = 2.0 * (fx * dx + fy * dy)
    qc = fx * fx + fy * fy - circle.radius * circle.radius
    disc = qb * qb - 4.0 * qa * qc
    if disc < 0.0:
        return []

    root = math.sqrt(disc)
    hits = []
    for t in sorted({(-qb - root) / (2.0 * qa), (-qb + root) / (2.0 * qa)}):
        if 0.0 <= t <= 1.0:
            hits.append((a[0] + t * dx, a[1] + t * dy))
    return hits


def segment_geometry(a: Sequence[float], b: Sequence[float], geometry) -> List[Point]:
    """
    Crossings of segment a-b with the boundary of a shapely LineString or Polygon.

    Stretches where the segment runs along the boundary are not reported,
    matching the parallel rule of ``segment_segment``.

    :param a: Segment start.
    :type a: Sequence[float]
    :param b: Segment end.
    :type b: Sequence[float]
    :param geometry: Shapely LineString (open path) or Polygon (exterior ring).
    :return: Intersection points.
    :rtype: List[Point]
    :raises TypeError: For any other geometry type.
    """
    if isinstance(geometry, Polygon):
        target = geometry.exterior
    elif isinstance(geometry, LineString):
        target = geometry
    else:
        raise TypeError(f"Unsupported query geometry: {type(geometry).__name__}")

    crossing = LineString([tuple(a), tuple(b)]).intersection(target)
    return [(part.x, part.y) for part in shapely.get_parts(crossing)
            if part.geom_type == 'Point' and not part.is_empty]
