# prdf/configuration.py
import os

import numpy as np
import ase
import ase.io
from ase.io.formats import UnknownFileTypeError

from prdf.errors import ConfigurationError, ParseError
from prdf.geometry import cell_volume, wrap_positions


class Configuration:
    """
    One atomic snapshot.
    Holds:
        - cell (rows are the lattice vectors, Å)
        - positions (Å)
        - species codes (atomic numbers)
        - extra per-file fields

    Read fresh for every listed file and dropped once its contribution
    has been accumulated.
    """

    def __init__(self, cell, positions, numbers, source="", info=None):
        self.cell = np.array(cell, dtype=float)
        self.pos = np.array(positions, dtype=float)
        self.numbers = np.array(numbers, dtype=np.int64)
        self.source = str(source)
        self.info = dict(info or {})

        if self.pos.ndim == 1 and self.pos.size == 0:
            self.pos = self.pos.reshape(0, 3)
        self.N = self.pos.shape[0]

    # --- Geometry ---
    def volume(self):
        """Cell volume in Å^3 (triclinic)."""
        return cell_volume(self.cell)

    def wrap(self):
        """Wrap atoms back into the cell."""
        self.pos = wrap_positions(self.pos, self.cell)

    # --- Species ---
    def species_count(self, code):
        return int(np.count_nonzero(self.numbers == code))

    def copy(self):
        return Configuration(
            self.cell, self.pos, self.numbers, source=self.source, info=self.info
        )

    # --- Checks ---
    def validate(self):
        """
        Raise ConfigurationError unless the configuration can be analyzed:
        a 3x3 cell of non-zero volume, N x 3 finite positions and one
        species code per atom.
        """
        where = self.source or "configuration"
        if self.cell.shape != (3, 3):
            raise ConfigurationError(f"{where}: cell must be 3x3, got {self.cell.shape}")
        if self.pos.ndim != 2 or self.pos.shape[1] != 3:
            raise ConfigurationError(f"{where}: positions must be N x 3, got {self.pos.shape}")
        if self.numbers.shape != (self.N,):
            raise ConfigurationError(
                f"{where}: {self.numbers.size} species codes for {self.N} atoms"
            )
        if self.N == 0:
            raise ConfigurationError(f"{where}: no atoms")
        if not np.all(np.isfinite(self.pos)) or not np.all(np.isfinite(self.cell)):
            raise ConfigurationError(f"{where}: non-finite coordinates")
        if self.volume() <= 0.0:
            raise ConfigurationError(f"{where}: cell has zero volume")

    def __repr__(self):
        return f"Configuration(N={self.N}, volume={self.volume():.3f}, source={self.source!r})"


# ------------------------------------------------------------
# ASE bridge
# ------------------------------------------------------------
def from_atoms(atoms, source=""):
    return Configuration(
        atoms.cell.array,
        atoms.get_positions(),
        atoms.get_atomic_numbers(),
        source=source,
        info=atoms.info,
    )


def to_atoms(config):
    return ase.Atoms(
        numbers=config.numbers,
        positions=config.pos,
        cell=config.cell,
        pbc=True,
        info=config.info,
    )


def read_configuration(path, format=None):
    """
    Read the last frame of `path` with ASE.

    Raises FileNotFoundError when the file does not exist and ParseError
    for anything ASE cannot read.
    """
    if not os.path.isfile(path):
        raise FileNotFoundError(path)
    try:
        atoms = ase.io.read(path, format=format)
    except (OSError, ValueError, KeyError, IndexError, StopIteration,
            UnknownFileTypeError) as exc:
        raise ParseError(path, exc) from exc
    return from_atoms(atoms, source=path)
