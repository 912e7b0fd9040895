# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

"""Geometry module for polygon primitives, query shapes and intersections."""

from .primitives import (
    PolygonLike,
    as_vertex_array,
    as_shapely_polygon,
    signed_area,
    ensure_clockwise,
    edge_lengths,
    polygon_perimeter,
    contains_points,
    Line,
    Circle
)

from .intersections import (
    segment_segment,
    line_segment,
    segment_circle,
    segment_geometry
)

from .shapes import (
    square,
    rectangle,
    equilateral_triangle,
    l_shape,
    t_shape,
    arrow,
    regular_polygon,
    star,
    SAMPLE_SHAPES
)

__all__ = [
    # Primitives
    'PolygonLike',
    'as_vertex_array',
    'as_shapely_polygon',
    'signed_area',
    'ensure_clockwise',
    'edge_lengths',
    'polygon_perimeter',
    'contains_points',
    'Line',
    'Circle',
    # Intersections
    'segment_segment',
    'line_segment',
    'segment_circle',
    'segment_geometry',
    # Sample shapes
    'square',
    'rectangle',
    'equilateral_triangle',
    'l_shape',
    't_shape',
    'arrow',
    'regular_polygon',
    'star',
    'SAMPLE_SHAPES',
]
