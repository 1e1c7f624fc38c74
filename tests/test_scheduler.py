"""Tests for the parallel frame driver."""

import logging
import math

import numpy as np
import pytest
from pytest import approx

from gridsasa.errors import DegenerateGeometryError
from gridsasa.grid import GridGeometry, as_grid_stack
from gridsasa.scheduler import compute_sasa_grids, partition_frames

GEOMETRY = GridGeometry(counts=(16, 14, 12), spacing=0.8)


def _trajectory(n_frames: int = 6, n_atoms: int = 12, seed: int = 3) -> tuple[np.ndarray, np.ndarray]:
    rng = np.random.default_rng(seed)
    base = rng.uniform(3.0, 7.0, size=(n_atoms, 3))
    traj = base + rng.normal(scale=0.3, size=(n_frames, n_atoms, 3))
    radii = rng.uniform(1.6, 2.4, size=n_atoms)
    return traj, radii


def test_partition_is_disjoint_and_complete() -> None:
    blocks = partition_frames(10, 3)
    assert [b.tolist() for b in blocks] == [[0, 1, 2, 3], [4, 5, 6], [7, 8, 9]]


def test_partition_skips_idle_workers() -> None:
    blocks = partition_frames(2, 8)
    assert [b.tolist() for b in blocks] == [[0], [1]]
    assert partition_frames(0, 4) == []


def test_output_layout() -> None:
    traj, radii = _trajectory(n_frames=3)
    mask = np.ones(traj.shape[1], dtype=bool)

    out = compute_sasa_grids(traj, radii, 100, mask, GEOMETRY, n_workers=1)

    assert out.shape == (3 * GEOMETRY.n_voxels,)
    assert as_grid_stack(out, GEOMETRY).shape == (3, 12, 14, 16)
    assert out.min() >= 0.0


def test_independent_of_worker_count() -> None:
    traj, radii = _trajectory()
    mask = np.ones(traj.shape[1], dtype=bool)
    mask[4] = False

    serial = compute_sasa_grids(traj, radii, 200, mask, GEOMETRY, n_workers=1)
    for n_workers in (2, 4, 16, None):
        parallel = compute_sasa_grids(traj, radii, 200, mask, GEOMETRY, n_workers=n_workers)
        np.testing.assert_array_equal(parallel, serial)


def test_frames_match_their_own_geometry() -> None:
    traj, radii = _trajectory(n_frames=4)
    mask = np.ones(traj.shape[1], dtype=bool)

    out = as_grid_stack(compute_sasa_grids(traj, radii, 150, mask, GEOMETRY, n_workers=2), GEOMETRY)
    reversed_out = as_grid_stack(compute_sasa_grids(traj[::-1], radii, 150, mask, GEOMETRY, n_workers=2), GEOMETRY)

    np.testing.assert_array_equal(out, reversed_out[::-1])


def test_collects_atom_areas() -> None:
    traj = np.array([[[5.0, 5.0, 5.0]], [[6.0, 5.0, 5.0]]])
    radii = np.array([1.5])
    areas = np.zeros((2, 1))

    out = compute_sasa_grids(traj, radii, 300, np.ones(1, dtype=bool), GEOMETRY, n_workers=2, atom_areas=areas)

    np.testing.assert_allclose(areas, 4 * math.pi * 1.5**2)
    for grid in as_grid_stack(out, GEOMETRY):
        assert grid.sum() == approx(4 * math.pi * 1.5**2)


def test_degenerate_frame_aborts_everything(caplog: pytest.LogCaptureFixture) -> None:
    traj, radii = _trajectory(n_frames=5)
    traj[3, 1] = traj[3, 0]
    mask = np.ones(traj.shape[1], dtype=bool)

    for n_workers in (1, 3):
        caplog.clear()
        with caplog.at_level(logging.ERROR, logger="gridsasa.scheduler"):
            with pytest.raises(DegenerateGeometryError) as excinfo:
                compute_sasa_grids(traj, radii, 50, mask, GEOMETRY, n_workers=n_workers)
        assert excinfo.value.frame == 3
        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert "frame 3" in errors[0].getMessage()
