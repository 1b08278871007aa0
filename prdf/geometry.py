# prdf/geometry.py

import numpy as np


def vector_length(v):
    """Euclidean norm of a 3-vector."""
    v = np.asarray(v, dtype=float)
    return float(np.sqrt(np.dot(v, v)))


def cell_volume(H):
    """
    Volume of the parallelepiped spanned by the rows of H.

    V = |a · (b × c)|

    H : array-like, shape (3, 3)
        Lattice vectors as rows (Å).
    """
    H = np.asarray(H, dtype=float)
    return float(abs(np.dot(H[0], np.cross(H[1], H[2]))))


def periodic_range(H, cutoff):
    """
    Integer bounds of the lattice translations to try so that no periodic
    image within `cutoff` is missed.

    A lattice vector shorter than (or equal to) the cutoff gets
    ±(ceil(cutoff/|a|) + 1), every other vector ±1.

    Returns
    -------
    ranges : list of 3 (min, max) tuples
    """
    H = np.asarray(H, dtype=float)
    ranges = []
    for k in range(3):
        length = vector_length(H[k])
        n = 1
        if 0.0 < length <= cutoff:
            n = int(np.ceil(cutoff / length)) + 1
        ranges.append((-n, n))
    return ranges


def replica_translations(H, ranges):
    """
    Cartesian translation vectors u*a + v*b + w*c for every integer
    combination inside `ranges`, including the zero translation.

    Returns
    -------
    shifts : array, shape (M, 3)
    """
    H = np.asarray(H, dtype=float)
    (umin, umax), (vmin, vmax), (wmin, wmax) = ranges
    u, v, w = np.meshgrid(
        np.arange(umin, umax + 1),
        np.arange(vmin, vmax + 1),
        np.arange(wmin, wmax + 1),
        indexing="ij",
    )
    uvw = np.stack([u.ravel(), v.ravel(), w.ravel()], axis=1).astype(float)
    return uvw @ H


def to_fractional(pos, H):
    """Cartesian positions (rows) to fractional coordinates of H."""
    return np.asarray(pos, dtype=float) @ np.linalg.inv(H)


def wrap_positions(pos, H):
    """
    Wrap Cartesian positions back into the cell spanned by H.

    Atoms are moved by whole lattice vectors only, so atoms already
    inside the cell keep their exact coordinates.
    """
    H = np.asarray(H, dtype=float)
    pos = np.asarray(pos, dtype=float)
    shift = np.floor(to_fractional(pos, H))
    return pos - shift @ H
