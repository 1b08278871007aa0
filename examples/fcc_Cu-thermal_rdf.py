import numpy as np
import os
import sys

SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(SCRIPT_DIR)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from prdf.config import RDFSettings
from prdf.configuration import Configuration
from prdf.constants import get_lattice_constant
from prdf.lattice import make_fcc_lattice
from prdf.plot import plot_rdf
from prdf.rdf import compute_rdf_from_list
from prdf.utils import write_results, write_xyz


# -----------------------------
# Inputs
# -----------------------------
metal = "Cu"        # Choose Ag, Al, Au, Cu, Ni, Pb, Pd, Pt
nx = ny = nz = 4    # Num cells in x/y/z direction
n_frames = 5        # Num snapshots
sigma_disp = 0.08   # Thermal displacement (Å)

r_max = 6.0         # Largest radius (Å)
dr = 0.05           # Shell width (Å)

out_dir = "rdf-Cu"
list_file = os.path.join(out_dir, "frames.txt")


# -----------------------------
# Snapshots: FCC + Gaussian noise
# -----------------------------
a = get_lattice_constant(metal)
pos, cell, numbers = make_fcc_lattice(a, nx, ny, nz, number=29)
rng = np.random.default_rng(123)

os.makedirs(out_dir, exist_ok=True)
names = []
for frame in range(n_frames):
    noisy = pos + rng.normal(0.0, sigma_disp, size=pos.shape)
    config = Configuration(cell, noisy, numbers, source=f"frame{frame}")
    name = os.path.join(out_dir, f"frame{frame:03d}.xyz")
    write_xyz(config, name, step=frame)
    names.append(os.path.basename(name))

with open(list_file, "w") as f:
    f.write("# thermally displaced FCC snapshots\n")
    f.write("\n".join(names) + "\n")


# -----------------------------
# RDF
# -----------------------------
settings = RDFSettings(r_max=r_max, dr=dr, workers=4, overwrite=True)
result = compute_rdf_from_list(list_file, settings)
write_results(result, out_dir, overwrite=True)
plot_rdf(result, os.path.join(out_dir, "rdf.png"))

r = result.radii
g = result.total
idx_peak = np.argmax(g)

print("\n=== Summary ===")
print(f"Frames analyzed: {result.n_configurations}")
print(f"First peak: r = {r[idx_peak] + 0.5 * dr:.3f} Å (ideal a/sqrt(2) = {a / np.sqrt(2):.3f} Å)")
print(f"g(r) at peak: {g[idx_peak]:.3f}")
print("=================\n")
