"""Tests for sphere point occlusion."""

import numpy as np

from gridsasa.neighbors import find_neighbors
from gridsasa.occlusion import accessible_points
from gridsasa.sphere import generate_sphere_points


def _naive_accessible(points, xyz, radii, neighbors) -> np.ndarray:
    result = np.ones(len(points), dtype=bool)
    for k, p in enumerate(points):
        for j in neighbors:
            if np.sum((p - xyz[j]) ** 2) < radii[j] ** 2:
                result[k] = False
                break
    return result


def _cluster(seed: int, n_atoms: int = 30) -> tuple[np.ndarray, np.ndarray]:
    rng = np.random.default_rng(seed)
    xyz = rng.uniform(0.0, 8.0, size=(n_atoms, 3))
    radii = rng.uniform(1.5, 3.2, size=n_atoms)
    return xyz, radii


def test_empty_neighbor_list_is_fully_accessible() -> None:
    points = generate_sphere_points(64) * 2.0
    xyz = np.zeros((1, 3))
    result = accessible_points(points, xyz, np.array([2.0]), np.empty(1, dtype=np.intp), 0)
    assert result.all()


def test_point_inside_neighbor_is_buried() -> None:
    xyz = np.array([[0.0, 0.0, 0.0], [2.0, 0.0, 0.0]])
    radii = np.array([1.0, 1.5])
    points = np.array([[1.0, 0.0, 0.0], [-1.0, 0.0, 0.0]])
    neighbors = np.array([1, 0], dtype=np.intp)

    result = accessible_points(points, xyz, radii, neighbors, 1)

    assert result.tolist() == [False, True]


def test_point_on_neighbor_surface_is_accessible() -> None:
    xyz = np.array([[0.0, 0.0, 0.0], [2.0, 0.0, 0.0]])
    radii = np.array([1.0, 1.0])
    points = np.array([[1.0, 0.0, 0.0]])

    result = accessible_points(points, xyz, radii, np.array([1, 0], dtype=np.intp), 1)

    assert result.tolist() == [True]


def test_rotating_search_matches_naive_scan() -> None:
    sphere = generate_sphere_points(300)
    for seed in range(5):
        xyz, radii = _cluster(seed)
        buf = np.empty(len(xyz), dtype=np.intp)
        for i in range(len(xyz)):
            n = find_neighbors(xyz, radii, i, buf)
            points = xyz[i] + radii[i] * sphere
            expected = _naive_accessible(points, xyz, radii, buf[:n])
            np.testing.assert_array_equal(accessible_points(points, xyz, radii, buf, n), expected)


def test_writes_into_caller_buffer() -> None:
    xyz, radii = _cluster(11, n_atoms=10)
    buf = np.empty(10, dtype=np.intp)
    n = find_neighbors(xyz, radii, 0, buf)
    points = xyz[0] + radii[0] * generate_sphere_points(100)
    out = np.zeros(100, dtype=bool)

    result = accessible_points(points, xyz, radii, buf, n, out=out)

    assert result is out
