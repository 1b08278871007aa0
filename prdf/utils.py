# prdf/utils.py
import logging
import os

import numpy as np

from prdf.constants import TABLE_FORMAT
from prdf.errors import OutputExistsError
from prdf.species import species_label

log = logging.getLogger(__name__)


def write_xyz(config, filename, step=None, append=False):
    """
    Write extended XYZ with cell information (OVITO and ASE compatible).
    """
    mode = "a" if append else "w"
    with open(filename, mode) as f:
        lattice = " ".join(f"{x:.10f}" for x in config.cell.ravel())
        header = f'Lattice="{lattice}" Properties=species:S:1:pos:R:3 pbc="T T T"'
        if step is not None:
            header = f"Step={step} " + header

        f.write(f"{config.N}\n")
        f.write(header + "\n")
        for code, (x, y, z) in zip(config.numbers, config.pos):
            f.write(f"{species_label(code)} {x:.10f} {y:.10f} {z:.10f}\n")


def read_file_list(listfile):
    """
    Names of the configuration files listed in `listfile`, one per line.
    Blank lines and lines starting with '#' are skipped. A name that does
    not exist as given but exists next to the list file is resolved there.
    """
    base = os.path.dirname(os.path.abspath(listfile))
    names = []
    with open(listfile, "r") as f:
        for line in f:
            name = line.strip()
            if not name or name.startswith("#"):
                continue
            if not os.path.isabs(name) and not os.path.exists(name):
                candidate = os.path.join(base, name)
                if os.path.exists(candidate):
                    name = candidate
            names.append(name)
    return names


def check_writable(path, overwrite=False):
    if os.path.exists(path) and not overwrite:
        raise OutputExistsError(f"{path} already exists (use overwrite to replace it)")


def write_rdf_table(path, radii, values, overwrite=False):
    """Write (R, g(R)) as two fixed-width columns."""
    check_writable(path, overwrite)
    data = np.column_stack([np.asarray(radii, dtype=float), np.asarray(values, dtype=float)])
    np.savetxt(path, data, fmt=TABLE_FORMAT, delimiter="")
    log.info("RDF written to %s", path)
    return path


def write_results(result, outdir=".", overwrite=False):
    """
    Write every table of `result` into `outdir`.

    All targets are checked before the first one is written, so an
    existing file leaves the directory untouched.
    """
    tables = result.tables()
    paths = {name: os.path.join(outdir, name) for name in tables}
    for path in paths.values():
        check_writable(path, overwrite)

    os.makedirs(outdir, exist_ok=True)
    written = []
    try:
        for name, (r, g) in tables.items():
            current = paths[name]
            written.append(write_rdf_table(current, r, g, overwrite=True))
    except Exception:
        # leave no partial set of tables behind
        for path in written + [current]:
            if os.path.exists(path):
                os.remove(path)
        raise
    result.report.outputs.extend(written)
    return written


# ---------------------------------------------------------------------
# Utility to load 2-column data safely
# ---------------------------------------------------------------------
def load_two_column_file(filename):
    try:
        data = np.loadtxt(filename)
    except (OSError, ValueError) as e:
        log.error("Error loading %s: %s", filename, e)
        return None, None
    if data.ndim == 1:
        data = data[None, :]
    return data[:, 0], data[:, 1]
