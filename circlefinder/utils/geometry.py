"""Leaf-node hull geometry helpers. No engine imports.

Hulls are Nx2 integer arrays of (x, y) vertices. All scores are integers
on an arbitrary scale.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

TWO_PI = 2 * math.pi

# Default angular step on the ideal circle: roughly π/6
CIRCUMFERENCE_ANGLE_INCREMENT = 0.1667 * math.pi


def round_half_away(value: float) -> int:
    """C-style round: halves go away from zero (2.5 → 3, -2.5 → -3)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def hull_dimensions(
    hull: NDArray[np.int64],
    width: int = 0,
    height: int = 0,
    center_x: int = 0,
    center_y: int = 0,
) -> tuple[int, int, int, int]:
    """Bounding (width, height, center_x, center_y) of a hull.

    Width and height are max - min of the coordinates; the center is the
    floor midpoint. With fewer than 2 points the given defaults come back
    untouched.
    """
    if len(hull) < 2:
        return width, height, center_x, center_y

    points = np.asarray(hull, dtype=np.int64)
    min_x, max_x = int(points[:, 0].min()), int(points[:, 0].max())
    min_y, max_y = int(points[:, 1].min()), int(points[:, 1].max())
    return max_x - min_x, max_y - min_y, (max_x + min_x) // 2, (max_y + min_y) // 2


def circumference_angles(angle_increment: float = CIRCUMFERENCE_ANGLE_INCREMENT) -> list[float]:
    """Sample angles in [0, 2π), accumulated step by step."""
    angles: list[float] = []
    angle = 0.0
    while angle < TWO_PI:
        angles.append(angle)
        angle += angle_increment
    return angles


def point_on_circumference(center_x: int, center_y: int, radius: int, angle: float) -> tuple[int, int]:
    return (
        center_x + round_half_away(radius * math.cos(angle)),
        center_y + round_half_away(radius * math.sin(angle)),
    )


def circle_circumference_error(
    hull: NDArray[np.int64],
    width: int,
    height: int,
    center_x: int,
    center_y: int,
    angle_increment: float = CIRCUMFERENCE_ANGLE_INCREMENT,
) -> int:
    """Score how far a hull is from the ideal circle fitted to its bounds.

    Points are sampled on a circle of radius round((width + height) / 4)
    around the hull center. For each sample, the Manhattan distance to every
    hull point is normalised by (width + height) // 2, scaled by the aspect
    factor width // height, and the largest value is kept. The result is the
    sum over all samples; lower is rounder.

    Partially visible objects are not supported: a hull covering only part
    of a ball scores unreliably. Returns -1 for an empty hull.
    """
    points = np.asarray(hull, dtype=np.int64).reshape(-1, 2)
    if len(points) == 0:
        return -1

    radius = round_half_away((width + height) / 4)
    normalizer = (width + height) // 2
    aspect = width // height if height != 0 else None

    total_error = 0
    for angle in circumference_angles(angle_increment):
        sample_x, sample_y = point_on_circumference(center_x, center_y, radius, angle)
        errors = np.abs(points[:, 0] - sample_x) + np.abs(points[:, 1] - sample_y)
        # Degenerate bounds (width + height < 2) keep the raw distance
        if normalizer > 0:
            errors = errors // normalizer
        if aspect is not None:
            errors = errors * aspect
        total_error += int(errors.max())

    return total_error


def circle_area_error(measured_diameter: float, measured_area: float) -> float:
    """|measured area - area of a perfect circle with the measured diameter|."""
    radius = measured_diameter / 2
    return abs(measured_area - math.pi * radius * radius)


def center_within_bounds(
    x: float,
    y: float,
    bounds_width: int,
    bounds_height: int,
    bounds_center_x: int,
    bounds_center_y: int,
) -> bool:
    """Rectangular test: is (x, y) within half the width/height of the bounds center?"""
    return (
        abs(bounds_center_x - x) <= bounds_width // 2
        and abs(bounds_center_y - y) <= bounds_height // 2
    )
