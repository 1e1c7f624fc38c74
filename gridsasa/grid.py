"""
Voxel grid geometry and rasterization of accessible area.

The grid is a fixed observation window anchored at the origin: voxel
(ix, iy, iz) is centered on (ix, iy, iz) * spacing. Each frame owns one
grid stored z-major, then y, then x in a flat buffer.
"""

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class GridGeometry:
    """
    Shape and resolution of the voxel grid.

    :param counts: number of voxels along x, y and z
    :param spacing: edge length of a voxel, in the units of the coordinates
    """

    counts: tuple[int, int, int]
    spacing: float

    @property
    def n_voxels(self) -> int:
        nx, ny, nz = self.counts
        return nx * ny * nz

    @property
    def shape(self) -> tuple[int, int, int]:
        """Array shape (nz, ny, nx) of one frame's grid."""
        nx, ny, nz = self.counts
        return nz, ny, nx


def voxel_indices(points: NDArray[np.floating], geometry: GridGeometry) -> NDArray[np.int64]:
    """
    Snap points to the nearest grid node and return its integer indices.

    Each coordinate is rounded independently to the nearest multiple of the
    spacing, halves rounding away from zero. Indices may fall outside the
    grid; see rasterize().

    :param points: positions, shape (n, 3)
    :param geometry: grid geometry
    :returns: voxel indices (ix, iy, iz), shape (n, 3)
    """
    q = np.asarray(points, dtype=np.float64) / geometry.spacing
    return np.copysign(np.floor(np.abs(q) + 0.5), q).astype(np.int64)


def flat_indices(indices: NDArray[np.integer], geometry: GridGeometry) -> NDArray[np.int64]:
    """
    Convert (ix, iy, iz) triples to offsets into one frame's flat grid.

    :param indices: voxel indices, shape (n, 3), all within bounds
    :param geometry: grid geometry
    :returns: offsets iz * ny * nx + iy * nx + ix, shape (n,)
    """
    nx, ny, _ = geometry.counts
    ix, iy, iz = indices[:, 0], indices[:, 1], indices[:, 2]
    return (iz * ny + iy) * nx + ix


def rasterize(
    points: NDArray[np.floating],
    value: float,
    geometry: GridGeometry,
    grid: NDArray[np.floating],
) -> int:
    """
    Add a fixed contribution to the voxel under each point.

    Points whose voxel lies outside [0, count) on any axis are dropped
    without error. Contributions are accumulated in point order, so
    repeated voxels receive every contribution.

    :param points: accessible point positions, shape (n, 3)
    :param value: area added per point
    :param geometry: grid geometry
    :param grid: one frame's flat grid, shape (n_voxels,), modified in place
    :returns: number of points that landed inside the grid
    """
    if len(points) == 0:
        return 0

    idx = voxel_indices(points, geometry)
    counts = np.asarray(geometry.counts)
    inside = np.all((idx >= 0) & (idx < counts), axis=1)
    if not inside.any():
        return 0

    np.add.at(grid, flat_indices(idx[inside], geometry), value)
    return int(inside.sum())


def as_grid_stack(flat: NDArray[np.floating], geometry: GridGeometry) -> NDArray[np.floating]:
    """
    View a flat multi-frame buffer as a stack of 3D grids.

    :param flat: buffer of size n_frames * n_voxels
    :param geometry: grid geometry
    :returns: view of shape (n_frames, nz, ny, nx)
    """
    return flat.reshape((-1, *geometry.shape))
