# prdf/constants.py

# Distances below this are the untranslated atom itself
SELF_IMAGE_TOL = 1e-12

# Species codes are compared with this absolute tolerance
SPECIES_TOL = 1e-9

# Neighbor list cutoff is r_max + NEIGHBOR_MARGIN * dr
NEIGHBOR_MARGIN = 1.1

# Show a progress bar when n_steps * n_atoms_A exceeds this
PROGRESS_MIN_WORK = 20000

# Warn that a pair may be slow above this many species-A atoms
LARGE_SPECIES_COUNT = 10000

# Two 24-wide columns, 8 decimals
TABLE_FORMAT = "%24.8f"

TOTAL_TABLE = "rdf_total.dat"


# FCC lattice constants (Å)
LATTICE_CONSTANTS = {
    "Ag": 4.09,
    "Al": 4.05,
    "Au": 4.08,
    "Cu": 3.615,
    "Ni": 3.52,
    "Pb": 4.95,
    "Pd": 3.89,
    "Pt": 3.92,
}


def get_lattice_constant(symbol):
    """Return the FCC lattice constant of a metal in Å."""
    try:
        return LATTICE_CONSTANTS[symbol]
    except KeyError:
        raise ValueError(
            f"Invalid material {symbol!r}; choose one of "
            f"{', '.join(sorted(LATTICE_CONSTANTS))}"
        ) from None


def pair_table_name(label_a, label_b):
    return f"rdf_{label_a}{label_b}.dat"
