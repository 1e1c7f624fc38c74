"""
Numerical constants, default parameters, and atomic radii.

This module contains the defaults used by the grid SASA calculation,
including the Monte-Carlo sphere resolution, the solvent probe radius,
the degeneracy threshold for coincident atoms, and per-element van der
Waals radii.
"""

import math

GOLDEN_ANGLE = math.pi * (3.0 - math.sqrt(5.0))
"""Azimuthal increment (radians) of the golden-section spiral."""

DEFAULT_N_SPHERE_POINTS = 960
"""Number of sample points placed on each atomic sphere."""

DEFAULT_PROBE_RADIUS = 1.4
"""Solvent probe radius in Angstroms (water = 1.4 A)."""

DEGENERATE_DISTANCE_SQ = 1e-10
"""Squared separation (Å²) below which two atoms are treated as coincident."""


VDW_RADII: dict[str, float] = {
    "H": 1.20,
    "HE": 1.40,
    "C": 1.70,
    "N": 1.55,
    "O": 1.52,
    "F": 1.47,
    "NA": 2.27,
    "MG": 1.73,
    "P": 1.80,
    "S": 1.80,
    "CL": 1.75,
    "K": 2.75,
    "CA": 2.31,
    "NI": 1.63,
    "CU": 1.40,
    "ZN": 1.39,
    "SE": 1.90,
    "BR": 1.85,
    "I": 1.98,
}
"""Van der Waals radii (Å) indexed by uppercase element symbol."""

DEFAULT_VDW_RADIUS = 2.0
"""Radius (Å) used for elements missing from VDW_RADII."""
