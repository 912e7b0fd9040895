# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

"""Sample polygons, counter-clockwise, used by the command-line driver and the tests."""

import numpy as np
from typing import Callable, Dict


def square(size: float = 1.0) -> np.ndarray:
    return np.array([[0.0, 0.0], [size, 0.0], [size, size], [0.0, size]])


def rectangle(width: float = 20.0, height: float = 10.0) -> np.ndarray:
    return np.array([[0.0, 0.0], [width, 0.0], [width, height], [0.0, height]])


def equilateral_triangle(side: float = 10.0) -> np.ndarray:
    return np.array([[0.0, 0.0], [side, 0.0], [side / 2.0, side * np.sqrt(3.0) / 2.0]])


def l_shape(size: float = 10.0, thickness: float = 4.0) -> np.ndarray:
    """L with both arms `size` long and `thickness` wide, corner at the origin."""
    return np.array([
        [0.0, 0.0], [size, 0.0], [size, thickness],
        [thickness, thickness], [thickness, size], [0.0, size],
    ])


def t_shape(width: float = 12.0, height: float = 12.0, thickness: float = 4.0) -> np.ndarray:
    left = (width - thickness) / 2.0
    right = left + thickness
    top = height - thickness
    return np.array([
        [left, 0.0], [right, 0.0], [right, top], [width, top],
        [width, height], [0.0, height], [0.0, top], [left, top],
    ])


def arrow(length: float = 20.0, shaft: float = 4.0, head: float = 10.0) -> np.ndarray:
    """Right-pointing arrow; the head takes the last third of the length."""
    neck = length * 2.0 / 3.0
    half_shaft = shaft / 2.0
    half_head = head / 2.0
    return np.array([
        [0.0, -half_shaft], [neck, -half_shaft], [neck, -half_head],
        [length, 0.0], [neck, half_head], [neck, half_shaft], [0.0, half_shaft],
    ])


def regular_polygon(sides: int = 6, radius: float = 5.0) -> np.ndarray:
    """
    Regular polygon centred on the origin.

    :param sides: Number of vertices (at least 3).
    :type sides: int
    :param radius: Circumradius.
    :type radius: float
    :return: (sides, 2) vertex array.
    :rtype: np.ndarray
    """
    if sides < 3:
        raise ValueError("A regular polygon needs at least 3 sides")
    angles = 2.0 * np.pi * np.arange(sides) / sides
    return np.column_stack([radius * np.cos(angles), radius * np.sin(angles)])


def star(points: int = 5, outer: float = 10.0, inner: float = 4.0) -> np.ndarray:
    angles = np.pi / 2.0 + np.pi * np.arange(2 * points) / points
    radii = np.where(np.arange(2 * points) % 2 == 0, outer, inner)
    return np.column_stack([radii * np.cos(angles), radii * np.sin(angles)])


SAMPLE_SHAPES: Dict[str, Callable[[], np.ndarray]] = {
    'square': square,
    'rectangle': rectangle,
    'triangle': equilateral_triangle,
    'l-shape': l_shape,
    't-shape': t_shape,
    'arrow': arrow,
    'hexagon': regular_polygon,
    'star': star,
}
