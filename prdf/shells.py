# prdf/shells.py
#
# Raw neighbor counts per radial shell for one pair of species.

from concurrent.futures import ThreadPoolExecutor

import numpy as np
from tqdm import tqdm

from prdf.constants import SELF_IMAGE_TOL, SPECIES_TOL


def shell_index(distances, dr):
    """
    Index j of the shell [j*dr, j*dr + dr) holding each distance.

    The guess floor(d/dr) is corrected against the shell edges so that
    membership follows the same comparisons as the edges themselves
    (lower edge inclusive, upper edge exclusive).
    """
    d = np.asarray(distances, dtype=float)
    j = np.floor(d / dr).astype(np.int64)
    j = np.where(d < j * dr, j - 1, j)
    j = np.where(d >= j * dr + dr, j + 1, j)
    return j


def bin_distances(distances, dr, n_steps):
    """Histogram of distances over the shells 0..n_steps-1."""
    j = shell_index(distances, dr)
    j = j[(j >= 0) & (j < n_steps)]
    return np.bincount(j, minlength=n_steps).astype(np.int64)


def self_image_distances(shifts):
    """Lengths of the non-zero lattice translations."""
    d = np.linalg.norm(shifts, axis=1)
    return d[np.abs(d) > SELF_IMAGE_TOL]


class ShellCounter:
    """
    Counts, for one configuration, the B atoms found in each shell
    [R_j, R_j + dR) around every A atom.

    Periodic copies of the A atom itself count when A == B, and every
    lattice translation of every listed neighbor is tested, so short
    cells contribute all their images.

    shifts : array, shape (M, 3)
        Lattice translations to try, zero translation included.
    """

    def __init__(self, config, neighbor_list, shifts, dr, n_steps):
        self.pos = config.pos
        self.numbers = config.numbers
        self.nl = neighbor_list
        self.shifts = np.asarray(shifts, dtype=float)
        self.dr = float(dr)
        self.n_steps = int(n_steps)
        self._self_bins = bin_distances(
            self_image_distances(self.shifts), self.dr, self.n_steps
        )

    def _is_species(self, idx, code):
        return np.abs(self.numbers[idx] - code) < SPECIES_TOL

    # ------------------------------------------------------------
    # One atom of species A
    # ------------------------------------------------------------
    def count_atom(self, i, code_b):
        """Raw counts per shell around atom i."""
        counts = np.zeros(self.n_steps, dtype=np.int64)

        # replicas of atom i, never atom i itself
        if self._is_species(i, code_b):
            counts += self._self_bins

        nbrs = self.nl.neighbors(i)
        nbrs = nbrs[self._is_species(nbrs, code_b)]
        if nbrs.size:
            vec = self.pos[nbrs] - self.pos[i]
            images = vec[:, None, :] + self.shifts[None, :, :]
            d = np.sqrt(np.einsum("nmk,nmk->nm", images, images)).ravel()
            counts += bin_distances(d, self.dr, self.n_steps)
        return counts

    def count_chunk(self, atoms, code_b):
        """Summed counts over a chunk of atoms; also returns the chunk size."""
        counts = np.zeros(self.n_steps, dtype=np.int64)
        for i in atoms:
            counts += self.count_atom(i, code_b)
        return counts, len(atoms)

    # ------------------------------------------------------------
    # All atoms of species A
    # ------------------------------------------------------------
    def count(self, code_a, code_b, workers=1, progress=False, desc=None):
        """
        Total raw counts per shell over all atoms of species `code_a`.

        With workers > 1 the atoms are split into chunks that run on a
        thread pool. Each chunk owns its scratch arrays and returns its
        own count vector; the vectors and the processed-atom counts are
        summed here, in the calling thread.
        """
        atoms = np.nonzero(self._is_species(np.arange(len(self.numbers)), code_a))[0]
        total = np.zeros(self.n_steps, dtype=np.int64)

        bar = tqdm(total=len(atoms), desc=desc, disable=not progress, leave=False)
        try:
            if workers <= 1 or len(atoms) < 2:
                for i in atoms:
                    total += self.count_atom(i, code_b)
                    bar.update(1)
                return total

            n_chunks = min(len(atoms), 4 * workers)
            chunks = np.array_split(atoms, n_chunks)
            with ThreadPoolExecutor(max_workers=workers) as pool:
                futures = [pool.submit(self.count_chunk, c, code_b) for c in chunks]
                for fut in futures:
                    counts, done = fut.result()
                    total += counts
                    bar.update(done)
            return total
        finally:
            bar.close()
