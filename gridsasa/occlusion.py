"""
Occlusion testing of sphere points against neighboring atoms.

Sphere points are scanned in generation order. Consecutive points of the
golden-section spiral are close together, so the neighbor that buried the
previous point is the most likely to bury the next one; the scan over
neighbors therefore starts at that neighbor and wraps around the list.
Every neighbor is still visited before a point is declared accessible, so
only the cost of the test depends on the starting position.
"""

import numpy as np
from numpy.typing import NDArray


def accessible_points(
    centered_points: NDArray[np.floating],
    xyz: NDArray[np.floating],
    radii: NDArray[np.floating],
    neighbor_indices: NDArray[np.integer],
    n_neighbors: int,
    out: NDArray[np.bool_] | None = None,
) -> NDArray[np.bool_]:
    """
    Determine which sphere points lie outside every neighbor sphere.

    A point is buried by neighbor j when its squared distance to atom j is
    strictly below radii[j]**2.

    :param centered_points: sphere points placed on the subject atom's surface, shape (n_points, 3)
    :param xyz: atomic positions of the frame, shape (n_atoms, 3)
    :param radii: effective radii, shape (n_atoms,)
    :param neighbor_indices: neighbor buffer filled by find_neighbors()
    :param n_neighbors: number of valid entries in neighbor_indices
    :param out: optional boolean buffer of shape (n_points,)
    :returns: boolean mask, True where the point is accessible
    """
    n_points = len(centered_points)
    if out is None:
        out = np.empty(n_points, dtype=bool)

    # Empty neighbor list: nothing can bury a point
    if n_neighbors == 0:
        out[:] = True
        return out

    nbrs = neighbor_indices[:n_neighbors]
    nbr_xyz = xyz[nbrs].tolist()
    nbr_rsq = (radii[nbrs] ** 2).tolist()
    points = centered_points.tolist()

    closest = 0
    for k, (px, py, pz) in enumerate(points):
        accessible = True
        for step in range(n_neighbors):
            m = closest + step
            if m >= n_neighbors:
                m -= n_neighbors
            qx, qy, qz = nbr_xyz[m]
            dx = px - qx
            dy = py - qy
            dz = pz - qz
            if dx * dx + dy * dy + dz * dz < nbr_rsq[m]:
                closest = m
                accessible = False
                break
        out[k] = accessible

    return out
