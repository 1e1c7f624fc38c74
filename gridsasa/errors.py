"""Exceptions raised by the grid SASA calculation."""


class DegenerateGeometryError(ValueError):
    """
    Two atoms of one frame lie virtually on top of one another.

    Occlusion geometry is undefined at zero separation, so the whole
    calculation is aborted rather than the offending frame skipped.

    :param atom_i: index of the atom whose neighbors were being searched
    :param atom_j: index of the coincident atom
    :param separation: distance between the two atoms
    :param frame: index of the frame, if known
    """

    def __init__(self, atom_i: int, atom_j: int, separation: float, frame: int | None = None) -> None:
        self.atom_i = atom_i
        self.atom_j = atom_j
        self.separation = separation
        self.frame = frame
        where = f" in frame {frame}" if frame is not None else ""
        super().__init__(
            f"Atoms {atom_i} and {atom_j}{where} are {separation:.3g} apart; "
            "SASA is undefined for atoms on top of one another."
        )
