"""
Atom representation and per-atom input arrays.

This module provides the Atom dataclass, van der Waals radius assignment
by element, and construction of the effective radius and selection arrays
consumed by the SASA kernel.
"""

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from .constants import DEFAULT_PROBE_RADIUS, DEFAULT_VDW_RADIUS, VDW_RADII


@dataclass
class Atom:
    """
    Representation of an atom for the SASA calculation.

    :param element: element symbol (e.g., 'C', 'N', 'O', 'CL')
    :param x: x-coordinate in Angstroms (first frame)
    :param y: y-coordinate in Angstroms (first frame)
    :param z: z-coordinate in Angstroms (first frame)
    :param name: atom name (e.g., 'CA', 'N', 'O1')
    :param radius: van der Waals radius in Angstroms, without the probe
    """

    element: str
    x: float
    y: float
    z: float
    name: str = ""
    radius: float = 0.0


def assign_radii(atoms: list[Atom]) -> None:
    """
    Assign van der Waals radii based on element.

    Elements missing from the radius table get DEFAULT_VDW_RADIUS.
    Modifies atoms in place, setting the radius attribute.

    :param atoms: list of atoms (modified in place)
    """
    for atom in atoms:
        atom.radius = VDW_RADII.get(atom.element.strip().upper(), DEFAULT_VDW_RADIUS)


def effective_radii(atoms: list[Atom], probe: float = DEFAULT_PROBE_RADIUS) -> NDArray[np.floating]:
    """
    Radii of the solvent-accessible spheres: van der Waals radius plus probe.

    :param atoms: atoms with radius assigned
    :param probe: probe sphere radius in Angstroms
    :returns: effective radius of each atom, shape (n_atoms,)
    """
    return np.array([a.radius for a in atoms], dtype=np.float64) + probe


def selection_mask(n_atoms: int, selection: Sequence[int] | Sequence[bool] | None = None) -> NDArray[np.bool_]:
    """
    Build a boolean atom selection mask.

    :param n_atoms: number of atoms
    :param selection: either atom indices, one boolean per atom, or None to select every atom
    :returns: boolean mask, shape (n_atoms,)
    :raises ValueError: if a boolean selection has the wrong length or an index is out of range
    """
    if selection is None:
        return np.ones(n_atoms, dtype=bool)

    sel = np.asarray(selection)
    if sel.dtype == bool:
        if sel.shape != (n_atoms,):
            raise ValueError(f"Selection mask has {sel.size} entries for {n_atoms} atoms.")
        return sel.copy()

    mask = np.zeros(n_atoms, dtype=bool)
    if sel.size == 0:
        return mask
    sel = sel.astype(np.intp)
    if sel.min() < 0 or sel.max() >= n_atoms:
        raise ValueError(f"Selection indices must lie in [0, {n_atoms}).")
    mask[sel] = True
    return mask
