"""
Parallel driver over the frames of a trajectory.

Frames are independent: each is processed start to finish by one worker
and writes only its own slice of the flat output buffer, so workers share
inputs read-only and never synchronize on writes.
"""

import logging
import os
import threading
from concurrent.futures import ThreadPoolExecutor

import numpy as np
from numpy.typing import NDArray

from .errors import DegenerateGeometryError
from .frame import ScratchBuffers, process_frame
from .grid import GridGeometry
from .sphere import generate_sphere_points

logger = logging.getLogger(__name__)


def partition_frames(n_frames: int, n_workers: int) -> list[NDArray[np.intp]]:
    """
    Split frame indices into contiguous, disjoint, non-empty blocks.

    :param n_frames: number of frames
    :param n_workers: number of workers
    :returns: one array of frame indices per worker that has work
    """
    blocks = np.array_split(np.arange(n_frames, dtype=np.intp), max(1, n_workers))
    return [b for b in blocks if b.size]


def _run_block(
    frames: NDArray[np.intp],
    trajectory: NDArray[np.floating],
    radii: NDArray[np.floating],
    sphere_points: NDArray[np.floating],
    mask: NDArray[np.bool_],
    geometry: GridGeometry,
    out: NDArray[np.floating],
    atom_areas: NDArray[np.floating] | None,
    abort: threading.Event,
) -> None:
    scratch = ScratchBuffers.allocate(trajectory.shape[1], len(sphere_points))
    n_voxels = geometry.n_voxels

    for f in frames.tolist():
        if abort.is_set():
            return
        try:
            areas = process_frame(
                trajectory[f],
                radii,
                sphere_points,
                mask,
                geometry,
                scratch,
                out[f * n_voxels : (f + 1) * n_voxels],
                frame=f,
            )
        except DegenerateGeometryError:
            abort.set()
            raise
        if atom_areas is not None:
            atom_areas[f] = areas


def compute_sasa_grids(
    trajectory: NDArray[np.floating],
    radii: NDArray[np.floating],
    n_sphere_points: int,
    mask: NDArray[np.bool_],
    geometry: GridGeometry,
    n_workers: int | None = None,
    atom_areas: NDArray[np.floating] | None = None,
) -> NDArray[np.floating]:
    """
    Rasterize the accessible surface of every frame onto its own grid.

    The sphere point set is generated once and shared by all workers. Each
    worker processes a contiguous block of frames with scratch buffers it
    allocates once. The result does not depend on the number of workers.
    The occlusion loop holds the GIL, so extra workers do not make the
    calculation faster.

    :param trajectory: atomic positions, shape (n_frames, n_atoms, 3)
    :param radii: effective (van der Waals + probe) radii, shape (n_atoms,)
    :param n_sphere_points: number of sphere points per atom
    :param mask: True for atoms whose area is computed, shape (n_atoms,)
    :param geometry: grid geometry shared by all frames
    :param n_workers: number of worker threads; None uses os.cpu_count()
    :param atom_areas: optional buffer of shape (n_frames, n_atoms) that
                       receives the accessible area of each atom
    :returns: flat buffer of size n_frames * n_voxels, frame f occupying
              [f * n_voxels, (f + 1) * n_voxels) in z, y, x order
    :raises DegenerateGeometryError: if two atoms of any frame coincide;
                                     the whole calculation is abandoned
    """
    n_frames = len(trajectory)
    if n_workers is None:
        n_workers = os.cpu_count() or 1

    sphere_points = generate_sphere_points(n_sphere_points)
    out = np.zeros(n_frames * geometry.n_voxels, dtype=np.float64)
    blocks = partition_frames(n_frames, n_workers)
    abort = threading.Event()
    args = (trajectory, radii, sphere_points, mask, geometry, out, atom_areas, abort)

    logger.info(f"Rasterizing SASA of {n_frames} frames on {len(blocks)} worker(s)")

    try:
        if len(blocks) <= 1:
            for block in blocks:
                _run_block(block, *args)
        else:
            with ThreadPoolExecutor(max_workers=len(blocks)) as executor:
                futures = [executor.submit(_run_block, block, *args) for block in blocks]
                for future in futures:
                    future.result()
    except DegenerateGeometryError as e:
        logger.error(f"Aborting SASA calculation: {e}")
        raise

    return out
