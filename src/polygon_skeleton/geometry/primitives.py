# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

"""
Polygon normalisation and basic measurements.

This module converts the accepted polygon inputs (shapely polygons, coordinate
arrays, sequences of pairs) into plain vertex arrays, and provides the winding,
perimeter and containment helpers the skeleton algorithms rely on.
"""

import math
import numpy as np
import shapely
from dataclasses import dataclass
from shapely.geometry import Polygon
from typing import Optional, Sequence, Tuple, Union

PolygonLike = Union[Polygon, np.ndarray, Sequence[Sequence[float]]]


def as_vertex_array(polygon: PolygonLike) -> np.ndarray:
    """
    Normalise a polygon input to an (N, 2) float array of its vertices.

    A repeated closing vertex (first == last) is dropped.

    :param polygon: Shapely Polygon, (N, 2) array-like, or sequence of (x, y) pairs.
    :type polygon: PolygonLike
    :return: (N, 2) array of vertex coordinates.
    :rtype: np.ndarray
    :raises ValueError: If the input is not a list of 2D coordinates.
    """
    if isinstance(polygon, Polygon):
        if polygon.is_empty:
            return np.empty((0, 2), dtype=float)
        coords = np.asarray(polygon.exterior.coords, dtype=float)[:, :2]
    else:
        try:
            coords = np.asarray(polygon, dtype=float)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Polygon coordinates must be numeric: {exc}") from exc
        if coords.size == 0:
            return np.empty((0, 2), dtype=float)
        if coords.ndim != 2 or coords.shape[1] != 2:
            raise ValueError(f"Expected (N, 2) coordinates, got shape {coords.shape}")

    if len(coords) > 1 and np.array_equal(coords[0], coords[-1]):
        coords = coords[:-1]
    return np.ascontiguousarray(coords, dtype=float)


def as_shapely_polygon(polygon: PolygonLike) -> Polygon:
    """
    Return the input as a shapely Polygon (used for containment queries).

    :param polygon: Polygon input.
    :type polygon: PolygonLike
    :return: Shapely Polygon.
    :rtype: Polygon
    """
    if isinstance(polygon, Polygon):
        return polygon
    return Polygon(as_vertex_array(polygon))


def signed_area(vertices: np.ndarray) -> float:
    """
    Shoelace signed area. Positive for counter-clockwise (y-up) winding.

    :param vertices: (N, 2) vertex array.
    :type vertices: np.ndarray
    :return: Signed area.
    :rtype: float
    """
    if len(vertices) < 3:
        return 0.0
    x, y = vertices[:, 0], vertices[:, 1]
    return 0.5 * float(np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1)))


def ensure_clockwise(vertices: np.ndarray) -> np.ndarray:
    """Return the vertices in clockwise order (reversed copy if counter-clockwise)."""
    if signed_area(vertices) > 0.0:
        return vertices[::-1].copy()
    return vertices.copy()


def edge_lengths(vertices: np.ndarray) -> np.ndarray:
    """Lengths of the closed polygon's edges, edge i running from vertex i to i+1."""
    if len(vertices) == 0:
        return np.empty(0, dtype=float)
    deltas = np.roll(vertices, -1, axis=0) - vertices
    return np.hypot(deltas[:, 0], deltas[:, 1])


def polygon_perimeter(vertices: np.ndarray) -> float:
    return float(np.sum(edge_lengths(vertices)))


def contains_points(polygon: Polygon, points: np.ndarray) -> np.ndarray:
    """
    Vectorised strict-interior test.

    :param polygon: Shapely Polygon.
    :type polygon: Polygon
    :param points: (M, 2) array of query points.
    :type points: np.ndarray
    :return: Boolean mask of length M; boundary points are outside.
    :rtype: np.ndarray
    """
    points = np.asarray(points, dtype=float).reshape(-1, 2)
    if len(points) == 0:
        return np.zeros(0, dtype=bool)
    return np.asarray(shapely.contains_xy(polygon, points[:, 0], points[:, 1]), dtype=bool)


@dataclass(frozen=True)
class Line:
    """
    Infinite line, either y = slope * x + intercept or the vertical x = vertical_x.
    """

    slope: float = 0.0
    intercept: float = 0.0
    vertical_x: Optional[float] = None

    @property
    def is_vertical(self) -> bool:
        return self.vertical_x is not None

    @classmethod
    def vertical(cls, x: float) -> 'Line':
        return cls(vertical_x=float(x))

    @classmethod
    def through(cls, p0: Sequence[float], p1: Sequence[float]) -> 'Line':
        """
        Build the line through two distinct points.

        :raises ValueError: If the points coincide.
        """
        (x0, y0), (x1, y1) = p0, p1
        if x0 == x1 and y0 == y1:
            raise ValueError("A line needs two distinct points")
        if x0 == x1:
            return cls.vertical(x0)
        slope = (y1 - y0) / (x1 - x0)
        return cls(slope=float(slope), intercept=float(y0 - slope * x0))

    def side(self, x: float, y: float) -> float:
        """Signed side proxy: the sign tells which half-plane (x, y) lies in."""
        if self.is_vertical:
            return x - self.vertical_x
        return self.slope * x - y + self.intercept

    def direction(self) -> Tuple[float, float]:
        if self.is_vertical:
            return 0.0, 1.0
        norm = math.hypot(1.0, self.slope)
        return 1.0 / norm, self.slope / norm

    def point(self) -> Tuple[float, float]:
        if self.is_vertical:
            return self.vertical_x, 0.0
        return 0.0, self.intercept


@dataclass(frozen=True)
class Circle:
    center: Tuple[float, float]
    radius: float
