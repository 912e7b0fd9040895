# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

"""Triangulation module for constrained Delaunay triangulation."""

from .delaunay import (
    EPS,
    SUPER_TRIANGLE_MARGIN,
    SUPER_VERTEX_COUNT,
    Triangle,
    DelaunayTriangulation
)

__all__ = [
    'EPS',
    'SUPER_TRIANGLE_MARGIN',
    'SUPER_VERTEX_COUNT',
    'Triangle',
    'DelaunayTriangulation',
]
