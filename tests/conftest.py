import numpy as np
import pytest

from prdf.configuration import Configuration
from prdf.lattice import make_lattice, make_sc_lattice


@pytest.fixture
def sc_config():
    """Simple cubic, a = 3 Å, 3x3x3 cells (27 atoms, box 9 Å)."""
    pos, cell, numbers = make_sc_lattice(3.0, 3, 3, 3, number=29)
    return Configuration(cell, pos, numbers, source="sc")


@pytest.fixture
def single_atom_config():
    """One atom in a 3 Å cubic cell: every neighbor is a periodic image."""
    return Configuration(3.0 * np.eye(3), [[0.0, 0.0, 0.0]], [29], source="single")


@pytest.fixture
def cscl_config():
    """CsCl-type Na/Cl lattice, a = 4 Å, 2x2x2 cells (8 Na + 8 Cl)."""
    pos, cell, numbers = make_lattice(
        4.0, 2, 2, 2, [[0.0, 0.0, 0.0], [0.5, 0.5, 0.5]], [11, 17]
    )
    return Configuration(cell, pos, numbers, source="cscl")


@pytest.fixture
def random_config():
    """40 atoms of two species in a triclinic cell."""
    rng = np.random.default_rng(7)
    cell = np.array([[7.0, 0.0, 0.0], [1.5, 6.5, 0.0], [0.5, 1.0, 7.5]])
    frac = rng.uniform(0.0, 1.0, size=(40, 3))
    numbers = rng.choice([8, 14], size=40)
    return Configuration(cell, frac @ cell, numbers, source="random")

