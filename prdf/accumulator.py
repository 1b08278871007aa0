# prdf/accumulator.py

import numpy as np

from prdf.errors import NoConfigurationError


def shell_volumes(radii, dr):
    """
    Volume of every shell [R, R + dR):

        Vshell = (4/3) π [ (R + dR)^3 - R^3 ]
    """
    r = np.asarray(radii, dtype=float)
    outer = (4.0 / 3.0) * np.pi * (r + dr) ** 3
    inner = (4.0 / 3.0) * np.pi * r ** 3
    return outer - inner


def normalize_counts(raw_counts, radii, dr, count_a, count_b, volume):
    """
    Space-averaged partial g_AB(R) of one configuration.

        density_B = count_b / V
        norm(j)   = Vshell(j) * density_B
        g(j)      = raw(j) / norm(j) / count_a

    raw_counts : array, shape (n_steps,)
        Counts summed over all A atoms.
    A pair with no A or no B atoms gives zeros.
    """
    raw = np.asarray(raw_counts, dtype=float)
    if count_a <= 0 or count_b <= 0 or volume <= 0.0:
        return np.zeros_like(raw)

    density_b = count_b / volume
    norm = shell_volumes(radii, dr) * density_b
    return raw / norm / count_a


class RDFAccumulator:
    """
    Running sums of the space-averaged partial RDFs, one row per
    unordered species pair.

    The ensemble average and the total curve are separate steps so their
    divisors (configuration count, pair count) can be checked on their own.
    """

    def __init__(self, n_pairs, radii, dr):
        self.radii = np.asarray(radii, dtype=float)
        self.dr = float(dr)
        self.sums = np.zeros((n_pairs, self.radii.size), dtype=float)
        self.n_configurations = 0

    @property
    def n_pairs(self):
        return self.sums.shape[0]

    def add(self, pair_index, raw_counts, count_a, count_b, volume):
        """Fold one configuration's raw counts for one pair into the sums."""
        g = normalize_counts(raw_counts, self.radii, self.dr, count_a, count_b, volume)
        self.sums[pair_index] += g
        return g

    def commit(self):
        """Mark one more configuration as fully processed."""
        self.n_configurations += 1

    def ensemble_average(self):
        """Partial RDFs averaged over the processed configurations."""
        if self.n_configurations <= 0:
            raise NoConfigurationError("no configuration was processed")
        return self.sums / self.n_configurations


def total_rdf(partials):
    """Bin-by-bin mean over all unordered pair curves."""
    partials = np.asarray(partials, dtype=float)
    if partials.shape[0] == 0:
        return np.zeros(partials.shape[1:], dtype=float)
    return partials.sum(axis=0) / partials.shape[0]
