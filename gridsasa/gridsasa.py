"""
Main entry point for grid SASA calculations.

This module contains the run_grid_sasa() function which builds the
per-atom inputs from element symbols and runs the rasterization over a
whole trajectory.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np
from numpy.typing import ArrayLike

from .atoms import Atom, assign_radii, effective_radii, selection_mask
from .constants import DEFAULT_N_SPHERE_POINTS, DEFAULT_PROBE_RADIUS
from .grid import GridGeometry, as_grid_stack
from .scheduler import compute_sasa_grids

logger = logging.getLogger(__name__)


def run_grid_sasa(
    atomic_symbols: list[str],
    trajectory: ArrayLike,
    counts: Sequence[int],
    spacing: float,
    probe: float = DEFAULT_PROBE_RADIUS,
    n_sphere_points: int = DEFAULT_N_SPHERE_POINTS,
    selection: Sequence[int] | Sequence[bool] | None = None,
    n_workers: int | None = None,
) -> dict:
    """
    Rasterize the solvent-accessible surface of a trajectory onto voxel grids.

    :param atomic_symbols: element symbols for each atom (e.g., ["C", "O", "H", ...])
    :param trajectory: cartesian coordinates in Angstroms, shape (n_frames, n_atoms, 3);
                       a single frame of shape (n_atoms, 3) is also accepted
    :param counts: number of voxels along x, y and z
    :param spacing: voxel edge length in Angstroms
    :param probe: probe sphere radius in Angstroms
    :param n_sphere_points: number of sphere points per atom
    :param selection: atom indices or boolean mask of atoms whose area is computed;
                      if None, every atom is selected
    :param n_workers: number of worker threads; None uses all CPUs
    :returns: dictionary containing atoms, radii, mask, geometry, flat (the raw
              output buffer), grids of shape (n_frames, nz, ny, nx), atom_areas of
              shape (n_frames, n_atoms), and total_area per frame
    :raises ValueError: if the inputs have inconsistent shapes or invalid grid parameters
    :raises DegenerateGeometryError: if two atoms of a frame coincide
    """
    xyz = np.asarray(trajectory, dtype=np.float64)
    if xyz.ndim == 2:
        xyz = xyz[np.newaxis]
    if xyz.ndim != 3 or xyz.shape[2] != 3:
        raise ValueError(f"Trajectory must have shape (n_frames, n_atoms, 3), got {xyz.shape}.")
    n_frames, n_atoms, _ = xyz.shape
    if n_frames == 0:
        raise ValueError("Trajectory has no frames.")
    if len(atomic_symbols) != n_atoms:
        raise ValueError(f"{len(atomic_symbols)} atomic symbols for {n_atoms} atoms.")
    if len(counts) != 3 or min(counts) < 1:
        raise ValueError(f"Grid counts must be three positive integers, got {counts}.")
    if spacing <= 0:
        raise ValueError(f"Grid spacing must be positive, got {spacing}.")
    if n_sphere_points < 1:
        raise ValueError(f"n_sphere_points must be positive, got {n_sphere_points}.")

    mask = selection_mask(n_atoms, selection)
    atoms = [
        Atom(element=symbol, x=pos[0], y=pos[1], z=pos[2])
        for symbol, pos in zip(atomic_symbols, xyz[0].tolist(), strict=True)
    ]
    assign_radii(atoms)
    radii = effective_radii(atoms, probe)
    geometry = GridGeometry(counts=(int(counts[0]), int(counts[1]), int(counts[2])), spacing=float(spacing))

    logger.info(f"{n_atoms} atoms, {int(mask.sum())} selected, {n_frames} frames")
    logger.info(f"Grid {geometry.counts} with spacing {geometry.spacing:.3f} Å, probe {probe:.2f} Å")
    logger.debug(f"{n_sphere_points} sphere points per atom")

    atom_areas = np.zeros((n_frames, n_atoms), dtype=np.float64)
    flat = compute_sasa_grids(xyz, radii, n_sphere_points, mask, geometry, n_workers=n_workers, atom_areas=atom_areas)
    grids = as_grid_stack(flat, geometry)
    total_area = grids.sum(axis=(1, 2, 3))

    logger.info(f"Mean SASA on grid: {total_area.mean():.2f} Å²")
    logger.info(f"Mean SASA of selection: {atom_areas.sum(axis=1).mean():.2f} Å²")

    return {
        "atoms": atoms,
        "radii": radii,
        "mask": mask,
        "geometry": geometry,
        "flat": flat,
        "grids": grids,
        "atom_areas": atom_areas,
        "total_area": total_area,
    }
