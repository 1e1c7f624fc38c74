"""
gridsasa: Solvent-accessible surface area rasterized onto voxel grids.

Monte-Carlo (Shrake-Rupley style) SASA computed frame by frame over a
trajectory, with the area of every accessible sphere point deposited in
the voxel it falls in rather than summed per atom.

Example usage:

    from gridsasa import run_grid_sasa

    symbols = ["C", "O"]
    trajectory = [[[10.0, 10.0, 10.0], [11.2, 10.0, 10.0]]]
    results = run_grid_sasa(symbols, trajectory, counts=(20, 20, 20), spacing=1.0)
    print(f"SASA: {results['total_area'][0]:.2f}")
"""

from .atoms import Atom, assign_radii, effective_radii, selection_mask
from .errors import DegenerateGeometryError
from .frame import ScratchBuffers, process_frame
from .grid import GridGeometry, as_grid_stack, rasterize, voxel_indices
from .gridsasa import run_grid_sasa
from .neighbors import find_neighbors
from .occlusion import accessible_points
from .scheduler import compute_sasa_grids
from .sphere import generate_sphere_points

__version__ = "0.1.0"

__all__ = [
    # Main functions
    "run_grid_sasa",
    "compute_sasa_grids",
    # Data structures
    "Atom",
    "GridGeometry",
    "ScratchBuffers",
    # Kernel
    "generate_sphere_points",
    "find_neighbors",
    "accessible_points",
    "voxel_indices",
    "rasterize",
    "process_frame",
    # Utilities
    "as_grid_stack",
    "assign_radii",
    "effective_radii",
    "selection_mask",
    # Errors
    "DegenerateGeometryError",
]
