"""
Sample points on the unit sphere.

Points are placed with the golden-section spiral, which spaces them
quasi-uniformly and orders them so that consecutive points are spatial
neighbors.
"""

import numpy as np
from numpy.typing import NDArray

from .constants import GOLDEN_ANGLE


def generate_sphere_points(n_points: int, out: NDArray[np.floating] | None = None) -> NDArray[np.floating]:
    """
    Compute quasi-uniform points on the unit sphere.

    Point i has y = i * offset - 1 + offset / 2 with offset = 2 / n_points,
    lies on the circle of radius sqrt(1 - y**2), and is rotated by
    i times the golden angle about the y-axis.

    :param n_points: number of points to generate
    :param out: optional buffer of shape (n_points, 3) to fill in place
    :returns: unit vectors, shape (n_points, 3)
    :raises ValueError: if n_points is less than 1
    """
    if n_points < 1:
        raise ValueError(f"n_points must be positive, got {n_points}.")

    if out is None:
        out = np.empty((n_points, 3), dtype=np.float64)

    offset = 2.0 / n_points
    i = np.arange(n_points, dtype=np.float64)
    y = i * offset - 1.0 + offset / 2.0
    r = np.sqrt(1.0 - y * y)
    phi = i * GOLDEN_ANGLE

    out[:, 0] = np.cos(phi) * r
    out[:, 1] = y
    out[:, 2] = np.sin(phi) * r
    return out
