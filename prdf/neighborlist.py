# prdf/neighborlist.py
import logging

import numpy as np

from prdf.geometry import periodic_range, replica_translations

log = logging.getLogger(__name__)


class NeighborList:
    """
    Candidate neighbor table for one configuration.

    Atom j is listed for atom i when its best periodic image is within
    `cutoff` of atom i. Works for any triclinic cell: all lattice
    translations in the periodic range of the cutoff are tried and the
    exact distances compared.

    The table is stored flat: the neighbors of atom i are
    indices[offsets[i]:offsets[i + 1]].
    """

    def __init__(self, cutoff, positions, cell):
        self.cutoff = float(cutoff)
        self.cell = np.array(cell, dtype=float)
        self.N = positions.shape[0]

        self.offsets = np.zeros(self.N + 1, dtype=np.int64)
        self.indices = np.empty(0, dtype=np.int64)
        self.pairs = np.empty((0, 2), dtype=np.int64)

        self._build(np.asarray(positions, dtype=float))

    # ------------------------------------------------------------
    # Distance to the best periodic image
    # ------------------------------------------------------------
    def _pbc_diff(self, pos, i):
        """Compute r_j - r_i for all j, folded to the nearest cell in fractional space."""
        dr = pos - pos[i]
        frac = dr @ self._inv_cell
        frac -= np.round(frac)
        return frac @ self.cell

    # ------------------------------------------------------------
    # Build neighbor list from scratch
    # ------------------------------------------------------------
    def _build(self, pos):
        self._inv_cell = np.linalg.inv(self.cell)
        shifts = replica_translations(
            self.cell, periodic_range(self.cell, self.cutoff)
        )
        cutoff2 = self.cutoff ** 2

        rows = []
        counts = np.zeros(self.N, dtype=np.int64)
        for i in range(self.N):
            dr = self._pbc_diff(pos, i)
            # (N, M, 3) images of every atom as seen from atom i
            images = dr[:, None, :] + shifts[None, :, :]
            d2 = np.min(np.einsum("nmk,nmk->nm", images, images), axis=1)

            mask = d2 <= cutoff2
            mask[i] = False
            row = np.nonzero(mask)[0]
            rows.append(row)
            counts[i] = row.size

        self.offsets[1:] = np.cumsum(counts)
        if rows:
            self.indices = np.concatenate(rows).astype(np.int64)

        owner = np.repeat(np.arange(self.N, dtype=np.int64), counts)
        upper = owner < self.indices
        self.pairs = np.stack([owner[upper], self.indices[upper]], axis=1)

        log.debug(
            "neighbor list: %d atoms, cutoff %.4f, %d pairs, max %d neighbors",
            self.N, self.cutoff, len(self.pairs), int(counts.max(initial=0)),
        )

    # ------------------------------------------------------------
    # Access
    # ------------------------------------------------------------
    def neighbors(self, i):
        """Indices of the candidate neighbors of atom i."""
        return self.indices[self.offsets[i]:self.offsets[i + 1]]

    def count(self, i):
        return int(self.offsets[i + 1] - self.offsets[i])

    def __len__(self):
        return self.N
