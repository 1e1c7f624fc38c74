"""
Neighbor discovery for a single atom.

A full pairwise scan is used: for the few hundred to few thousand atoms
of a typical system this is cheaper than maintaining a spatial index
across frames.
"""

import math

import numpy as np
from numpy.typing import NDArray

from .constants import DEGENERATE_DISTANCE_SQ
from .errors import DegenerateGeometryError


def find_neighbors(
    xyz: NDArray[np.floating],
    radii: NDArray[np.floating],
    i: int,
    neighbor_indices: NDArray[np.integer],
    frame: int | None = None,
) -> int:
    """
    Collect the atoms whose spheres overlap the sphere of atom i.

    Atom j is a neighbor when the squared distance between the two atoms
    is below (radii[i] + radii[j])**2. Neighbors are written in ascending
    index order to the front of neighbor_indices.

    :param xyz: atomic positions of one frame, shape (n_atoms, 3)
    :param radii: effective (van der Waals + probe) radii, shape (n_atoms,)
    :param i: index of the subject atom
    :param neighbor_indices: scratch buffer of length n_atoms that receives the neighbors
    :param frame: frame index reported in errors
    :returns: number of neighbors written
    :raises DegenerateGeometryError: if any other atom is virtually on top of atom i
    """
    diff = xyz - xyz[i]
    r2 = np.einsum("ij,ij->i", diff, diff)
    cutoff = radii + radii[i]

    close = r2 < DEGENERATE_DISTANCE_SQ
    close[i] = False
    if close.any():
        j = int(np.argmax(close))
        raise DegenerateGeometryError(int(i), j, math.sqrt(r2[j]), frame=frame)

    is_neighbor = r2 < cutoff * cutoff
    is_neighbor[i] = False
    found = np.flatnonzero(is_neighbor)

    n_neighbors = len(found)
    neighbor_indices[:n_neighbors] = found
    return n_neighbors
