import numpy as np


def replicate(positions, cell, numbers, nx, ny, nz):
    # Repeat a periodic cell nx * ny * nz times along its lattice vectors
    # Return: positions, cell, numbers
    cell = np.asarray(cell, dtype=float)
    positions = np.asarray(positions, dtype=float)
    numbers = np.asarray(numbers)

    blocks = []
    for i in range(nx):
        for j in range(ny):
            for k in range(nz):
                origin = np.array([i, j, k], dtype=float) @ cell
                blocks.append(positions + origin)

    positions = np.concatenate(blocks) if blocks else positions[:0]
    numbers = np.tile(numbers, nx * ny * nz)
    cell = cell * np.array([nx, ny, nz], dtype=float)[:, None]
    return positions, cell, numbers


def make_lattice(a, nx, ny, nz, basis, numbers):
    # Build a cubic lattice with lattice constant a (Å) from a fractional basis
    basis = np.asarray(basis, dtype=float)
    unit = a * np.eye(3)
    return replicate(basis @ unit, unit, numbers, nx, ny, nz)


def make_sc_lattice(a, nx, ny, nz, number=1):
    return make_lattice(a, nx, ny, nz, [[0.0, 0.0, 0.0]], [number])


def make_fcc_lattice(a, nx, ny, nz, number=1):
    basis = np.array([
        [0.0, 0.0, 0.0],
        [0.0, 0.5, 0.5],
        [0.5, 0.0, 0.5],
        [0.5, 0.5, 0.0]
    ])
    return make_lattice(a, nx, ny, nz, basis, [number] * 4)
