# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

"""
Incremental (Bowyer-Watson) Delaunay triangulation with edge-flip constraints.

The point array is prefixed with three super-triangle vertices, so input point
``i`` lives at index ``i + 3``. Triangles touching the super vertices are dropped
once every input point has been inserted.
"""

import logging
import numpy as np
from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple

from ..geometry.intersections import segment_segment
from ..geometry.primitives import PolygonLike, as_shapely_polygon, contains_points

logger = logging.getLogger(__name__)

EPS = 1e-10
SUPER_TRIANGLE_MARGIN = 10
SUPER_VERTEX_COUNT = 3

Point = Tuple[float, float]
Segment = Tuple[Point, Point]


class Triangle(NamedTuple):
    """Three vertex indices into the triangulation's point array."""

    a: int
    b: int
    c: int

    def contains(self, idx: int) -> bool:
        return self.a == idx or self.b == idx or self.c == idx

    def edges(self) -> Tuple[Tuple[int, int], Tuple[int, int], Tuple[int, int]]:
        return (self.a, self.b), (self.b, self.c), (self.c, self.a)


def _edge_key(a: int, b: int) -> Tuple[int, int]:
    return (a, b) if a < b else (b, a)


class DelaunayTriangulation:
    """
    Delaunay triangulation of a point set.

    Build instances with :meth:`create`; constraints and exterior removal then
    mutate the triangle list in place.
    """

    def __init__(self):
        """
        Initialize an empty triangulation.
        """
        self._points: List[Point] = []
        self._triangles: List[Triangle] = []

    @classmethod
    def create(cls, points: Sequence[Sequence[float]]) -> 'DelaunayTriangulation':
        """
        Triangulate a point set.

        :param points: Sequence of (x, y) coordinates.
        :type points: Sequence[Sequence[float]]
        :return: Triangulation whose triangles reference ``points`` shifted by 3.
        :rtype: DelaunayTriangulation
        """
        tri = cls()
        coords = np.asarray(points, dtype=float).reshape(-1, 2)
        if len(coords) == 0:
            return tri

        min_x, min_y = coords.min(axis=0)
        max_x, max_y = coords.max(axis=0)
        dmax = max(max_x - min_x, max_y - min_y)
        if dmax <= 0.0:
            dmax = 1.0
        mid_x = (min_x + max_x) / 2.0
        mid_y = (min_y + max_y) / 2.0
        margin = SUPER_TRIANGLE_MARGIN * dmax

        tri._points = [
            (mid_x - margin, mid_y - margin),
            (mid_x + margin, mid_y - margin),
            (mid_x, mid_y + margin),
        ]
        tri._points.extend((float(x), float(y)) for x, y in coords)
        tri._triangles = [Triangle(0, 1, 2)]

        for idx in range(SUPER_VERTEX_COUNT, len(tri._points)):
            tri._insert(idx)

        tri._triangles = [t for t in tri._triangles
                          if min(t) >= SUPER_VERTEX_COUNT]
        logger.debug("Triangulated %d points into %d triangles",
                     len(coords), len(tri._triangles))
        return tri

    @property
    def points(self) -> np.ndarray:
        """All points including the three super vertices, as a read-only array."""
        arr = np.array(self._points, dtype=float).reshape(-1, 2)
        arr.flags.writeable = False
        return arr

    @property
    def triangles(self) -> List[Triangle]:
        return list(self._triangles)

    def __len__(self) -> int:
        return len(self._triangles)

    def _insert(self, p_idx: int) -> None:
        px, py = self._points[p_idx]
        bad = [i for i, t in enumerate(self._triangles)
               if self._in_circumcircle(t, px, py)]

        counts: Dict[Tuple[int, int], int] = {}
        for i in bad:
            for a, b in self._triangles[i].edges():
                key = _edge_key(a, b)
                counts[key] = counts.get(key, 0) + 1

        boundary = []
        for i in bad:
            for a, b in self._triangles[i].edges():
                if counts[_edge_key(a, b)] == 1:
                    boundary.append((a, b))

        for i in sorted(bad, reverse=True):
            del self._triangles[i]
        for a, b in boundary:
            self._triangles.append(Triangle(a, b, p_idx))

    def _in_circumcircle(self, t: Triangle, px: float, py: float) -> bool:
        """
        Whether (px, py) lies inside the circumcircle of ``t``.

        The determinant sign is corrected for the triangle's own winding, and
        co-circular points count as inside.
        """
        (ax, ay), (bx, by), (cx, cy) = (self._points[t.a], self._points[t.b],
                                        self._points[t.c])
        cross = (bx - ax) * (cy - ay) - (by - ay) * (cx - ax)

        ax, ay = ax - px, ay - py
        bx, by = bx - px, by - py
        cx, cy = cx - px, cy - py
        a_sq = ax * ax + ay * ay
        b_sq = bx * bx + by * by
        c_sq = cx * cx + cy * cy
        det = (ax * (by * c_sq - cy * b_sq)
               - bx * (ay * c_sq - cy * a_sq)
               + cx * (ay * b_sq - by * a_sq))

        if cross > 0:
            return det > -EPS
        return det < EPS

    def has_edge(self, a: int, b: int) -> bool:
        for t in self._triangles:
            if t.contains(a) and t.contains(b):
                return True
        return False

    def find_adjacent_triangle(self, exclude: int, a: int, b: int) -> int:
        """
        Index of the triangle other than ``exclude`` sharing edge (a, b), or -1.

        :param exclude: Triangle index to skip.
        :type exclude: int
        :param a: First edge vertex.
        :type a: int
        :param b: Second edge vertex.
        :type b: int
        :return: Adjacent triangle index or -1 on the hull.
        :rtype: int
        """
        for i, t in enumerate(self._triangles):
            if i != exclude and t.contains(a) and t.contains(b):
                return i
        return -1

    def opposite_vertex(self, t: Triangle, a: int, b: int) -> int:
        """The vertex of ``t`` that is neither ``a`` nor ``b``."""
        for v in t:
            if v != a and v != b:
                return v
        return -1

    def internal_edge_count(self, t_idx: int) -> int:
        return len(self.get_internal_edges(t_idx))

    def get_internal_edges(self, t_idx: int) -> List[Tuple[int, int]]:
        """Edges of triangle ``t_idx`` that are shared with another triangle."""
        t = self._triangles[t_idx]
        return [(a, b) for a, b in t.edges()
                if self.find_adjacent_triangle(t_idx, a, b) >= 0]

    def edge_midpoint(self, a: int, b: int) -> Point:
        (ax, ay), (bx, by) = self._points[a], self._points[b]
        return ((ax + bx) / 2.0, (ay + by) / 2.0)

    def triangle_centroid(self, t: Triangle) -> Point:
        (ax, ay), (bx, by), (cx, cy) = (self._points[t.a], self._points[t.b],
                                        self._points[t.c])
        return ((ax + bx + cx) / 3.0, (ay + by + cy) / 3.0)

    def circumcenter(self, t: Triangle) -> Point:
        """
        Circumcenter of ``t``, or its centroid when the vertices are collinear.

        :param t: Triangle.
        :type t: Triangle
        :return: (x, y) circumcenter.
        :rtype: Point
        """
        (ax, ay), (bx, by), (cx, cy) = (self._points[t.a], self._points[t.b],
                                        self._points[t.c])
        d = 2.0 * (ax * (by - cy) + bx * (cy - ay) + cx * (ay - by))
        if abs(d) < EPS:
            return self.triangle_centroid(t)

        a_sq = ax * ax + ay * ay
        b_sq = bx * bx + by * by
        c_sq = cx * cx + cy * cy
        ux = (a_sq * (by - cy) + b_sq * (cy - ay) + c_sq * (ay - by)) / d
        uy = (a_sq * (cx - bx) + b_sq * (ax - cx) + c_sq * (bx - ax)) / d
        return (ux, uy)

    def enforce_constraint(self, a: int, b: int) -> bool:
        """
        Flip edges until segment (a, b) is an edge of the triangulation.

        The search gives up after ``2 * len(triangles)`` flips; an unresolved
        constraint is left in place without raising.

        :param a: First constraint vertex index.
        :type a: int
        :param b: Second constraint vertex index.
        :type b: int
        :return: True when the edge is present afterwards.
        :rtype: bool
        """
        if self.has_edge(a, b):
            return True

        max_iter = 2 * len(self._triangles)
        for _ in range(max_iter):
            flipped = False
            for t_idx in range(len(self._triangles)):
                if self._try_flip(t_idx, a, b):
                    flipped = True
                    break
            if not flipped:
                break
            if self.has_edge(a, b):
                return True

        present = self.has_edge(a, b)
        if not present:
            logger.debug("Constraint edge (%d, %d) left unresolved", a, b)
        return present

    def _try_flip(self, t_idx: int, a: int, b: int) -> bool:
        t = self._triangles[t_idx]
        pa, pb = self._points[a], self._points[b]
        for ea, eb in t.edges():
            if ea in (a, b) or eb in (a, b):
                continue
            if segment_segment(self._points[ea], self._points[eb], pa, pb) is None:
                continue
            adj = self.find_adjacent_triangle(t_idx, ea, eb)
            if adj < 0:
                continue

            ec = self.opposite_vertex(t, ea, eb)
            od = self.opposite_vertex(self._triangles[adj], ea, eb)
            self._triangles[t_idx] = Triangle(ec, ea, od)
            self._triangles[adj] = Triangle(ec, od, eb)
            return True
        return False

    def remove_exterior_triangles(self, boundary: PolygonLike) -> None:
        """
        Drop triangles whose centroid is not strictly inside ``boundary``.

        :param boundary: Polygon in input coordinates.
        :type boundary: PolygonLike
        """
        if not self._triangles:
            return
        polygon = as_shapely_polygon(boundary)
        centroids = np.array([self.triangle_centroid(t) for t in self._triangles])
        inside = contains_points(polygon, centroids)
        self._triangles = [t for t, keep in zip(self._triangles, inside) if keep]

    def voronoi_edges(self) -> List[Segment]:
        """
        Segments joining the circumcenters of triangles that share an edge.

        Hull edges (a single incident triangle) produce nothing.

        :return: List of ((x0, y0), (x1, y1)) segments.
        :rtype: List[Segment]
        """
        first_seen: Dict[Tuple[int, int], int] = {}
        segments = []
        for t_idx, t in enumerate(self._triangles):
            for a, b in t.edges():
                key = _edge_key(a, b)
                other: Optional[int] = first_seen.pop(key, None)
                if other is None:
                    first_seen[key] = t_idx
                else:
                    segments.append((self.circumcenter(self._triangles[other]),
                                     self.circumcenter(t)))
        return segments
