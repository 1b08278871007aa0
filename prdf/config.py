# prdf/config.py
from dataclasses import dataclass, field

import numpy as np

from prdf.constants import NEIGHBOR_MARGIN


@dataclass
class RDFSettings:
    """
    Run parameters.

    r_max : float
        Largest radius reported (Å).
    dr : float
        Shell width (Å).
    margin : float
        Neighbor list cutoff is r_max + margin * dr; must exceed 1.
    workers : int
        Threads used for the loop over atoms of one species.
    overwrite : bool
        Replace existing output tables.
    options : tuple of str
        Options applied to every configuration after it is read.
    progress : bool
        Allow progress bars for large pairs.
    """

    r_max: float
    dr: float
    margin: float = NEIGHBOR_MARGIN
    workers: int = 1
    overwrite: bool = False
    options: tuple = field(default_factory=tuple)
    progress: bool = True

    def __post_init__(self):
        self.r_max = float(self.r_max)
        self.dr = float(self.dr)
        self.margin = float(self.margin)
        self.workers = int(self.workers)
        self.options = tuple(self.options)

        if not self.r_max > 0.0:
            raise ValueError(f"r_max must be positive, got {self.r_max}")
        if not self.dr > 0.0:
            raise ValueError(f"dr must be positive, got {self.dr}")
        if not self.margin > 1.0:
            raise ValueError(f"margin must be greater than 1, got {self.margin}")
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")

    @property
    def n_steps(self):
        """Number of shells: nearest integer of r_max/dr, plus 2."""
        return int(np.floor(self.r_max / self.dr + 0.5)) + 2

    @property
    def cutoff(self):
        """Neighbor list construction radius."""
        return self.r_max + self.margin * self.dr

    @property
    def radii(self):
        """Inner radius R_j = j * dr of every shell."""
        return np.arange(self.n_steps, dtype=float) * self.dr
