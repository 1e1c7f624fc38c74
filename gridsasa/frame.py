"""
Per-frame SASA rasterization.

Runs neighbor search, occlusion testing and grid accumulation for every
selected atom of one frame, using scratch memory owned by the caller.
"""

import logging
import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from .grid import GridGeometry, rasterize
from .neighbors import find_neighbors
from .occlusion import accessible_points

logger = logging.getLogger(__name__)


@dataclass
class ScratchBuffers:
    """
    Work memory for process_frame(), private to one worker.

    Reusing one instance across frames avoids reallocating these buffers
    for every atom and frame.

    :param neighbor_indices: neighbor list of the current atom, shape (n_atoms,)
    :param centered_points: sphere points placed on the current atom, shape (n_points, 3)
    :param accessible: accessibility of each centered point, shape (n_points,)
    """

    neighbor_indices: NDArray[np.intp]
    centered_points: NDArray[np.floating]
    accessible: NDArray[np.bool_]

    @classmethod
    def allocate(cls, n_atoms: int, n_points: int) -> "ScratchBuffers":
        return cls(
            neighbor_indices=np.empty(n_atoms, dtype=np.intp),
            centered_points=np.empty((n_points, 3), dtype=np.float64),
            accessible=np.empty(n_points, dtype=bool),
        )


def process_frame(
    xyz: NDArray[np.floating],
    radii: NDArray[np.floating],
    sphere_points: NDArray[np.floating],
    mask: NDArray[np.bool_],
    geometry: GridGeometry,
    scratch: ScratchBuffers,
    out_grid: NDArray[np.floating],
    frame: int | None = None,
) -> NDArray[np.floating]:
    """
    Rasterize the accessible surface of one frame onto its grid.

    The grid is zeroed first. Each selected atom contributes
    4 * pi * r**2 / n_points to the voxel under each of its accessible
    sphere points. Unselected atoms are never subjects of the calculation
    but still bury points of their neighbors.

    :param xyz: atomic positions, shape (n_atoms, 3)
    :param radii: effective (van der Waals + probe) radii, shape (n_atoms,)
    :param sphere_points: unit sphere points from generate_sphere_points()
    :param mask: True for atoms whose area is computed, shape (n_atoms,)
    :param geometry: grid geometry
    :param scratch: work buffers sized for n_atoms and n_points
    :param out_grid: this frame's slice of the output, shape (n_voxels,), overwritten
    :param frame: frame index, used in log messages and errors
    :returns: accessible area of each atom, zero for unselected atoms; this
              includes points that fell outside the grid
    :raises DegenerateGeometryError: if a selected atom coincides with another atom
    """
    out_grid[:] = 0.0

    n_atoms = len(xyz)
    n_points = len(sphere_points)
    constant = 4.0 * math.pi / n_points
    areas = np.zeros(n_atoms, dtype=np.float64)

    centered = scratch.centered_points
    accessible = scratch.accessible
    n_deposited = 0
    n_exposed = 0

    for i in np.flatnonzero(mask):
        r_i = radii[i]
        n_neighbors = find_neighbors(xyz, radii, i, scratch.neighbor_indices, frame=frame)

        # Center the sphere points on atom i
        np.multiply(sphere_points, r_i, out=centered)
        centered += xyz[i]

        accessible_points(centered, xyz, radii, scratch.neighbor_indices, n_neighbors, out=accessible)

        n_acc = int(accessible.sum())
        if n_acc == 0:
            continue
        value = constant * r_i * r_i
        areas[i] = value * n_acc
        n_exposed += n_acc
        n_deposited += rasterize(centered[accessible], value, geometry, out_grid)

    logger.debug(
        f"Frame {frame}: {int(np.count_nonzero(mask))} selected atoms, "
        f"area {areas.sum():.2f}, {n_exposed - n_deposited}/{n_exposed} points outside grid"
    )
    return areas
