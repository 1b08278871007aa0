# prdf/species.py
import itertools
import logging

import numpy as np
from ase.data import chemical_symbols

from prdf.constants import SPECIES_TOL
from prdf.errors import SpeciesMismatchError

log = logging.getLogger(__name__)


def find_species(numbers):
    """
    Distinct species codes and how often each occurs.

    Codes come back in ascending order so repeated calls agree.

    Returns
    -------
    list of (code, count)
    """
    codes, counts = np.unique(np.asarray(numbers, dtype=np.int64), return_counts=True)
    return [(int(c), int(n)) for c, n in zip(codes, counts)]


def species_label(code):
    """Chemical symbol of a species code, used for file names only."""
    code = int(code)
    if 0 < code < len(chemical_symbols):
        return chemical_symbols[code]
    return f"X{code}"


def symbol_to_code(symbol):
    try:
        return chemical_symbols.index(symbol)
    except ValueError:
        raise ValueError(f"unknown chemical symbol {symbol!r}") from None


class SpeciesTable:
    """
    Species set fixed by the first processed configuration.

    Later configurations may lack some species but may not add any.
    Populations are recounted per configuration.
    """

    def __init__(self, entries):
        self.entries = list(entries)
        self.codes = np.array([c for c, _ in self.entries], dtype=np.int64)

    @classmethod
    def from_configuration(cls, config):
        table = cls(find_species(config.numbers))
        log.debug("Nspecies = %d", len(table))
        for code, count in table.entries:
            log.debug("    #%d (%s): %d atoms", code, species_label(code), count)
        return table

    def __len__(self):
        return len(self.entries)

    @property
    def labels(self):
        return [species_label(c) for c in self.codes]

    def pairs(self):
        """Index pairs (k, l) with k <= l, row by row."""
        return list(itertools.combinations_with_replacement(range(len(self)), 2))

    @property
    def n_pairs(self):
        n = len(self)
        return n * (n + 1) // 2

    def check(self, config):
        """Raise SpeciesMismatchError if `config` holds a species not in the table."""
        present = np.unique(config.numbers)
        unknown = [
            int(c) for c in present
            if not np.any(np.abs(self.codes - c) < SPECIES_TOL)
        ]
        if unknown:
            names = ", ".join(species_label(c) for c in unknown)
            raise SpeciesMismatchError(
                f"{config.source or 'configuration'}: species {names} not present "
                f"in the first configuration ({', '.join(self.labels)})"
            )

    def counts_for(self, config):
        """Population of every table species in `config`."""
        return np.array([config.species_count(c) for c in self.codes], dtype=np.int64)
