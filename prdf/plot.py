# prdf/plot.py
#
# Plot partial and total RDFs, either from a result or from written tables.

import os

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from prdf.utils import load_two_column_file


def _finish(fig, ax, filename):
    ax.set_xlabel("r (Å)")
    ax.set_ylabel("g(r)")
    ax.set_title("Radial Distribution Function")
    ax.grid(True, alpha=0.3)
    ax.legend()
    fig.tight_layout()
    fig.savefig(filename, dpi=300)
    plt.close(fig)
    return filename


def plot_rdf(result, filename="rdf.png"):
    fig, ax = plt.subplots(figsize=(6, 4))
    for name, (r, g_r) in result.tables().items():
        label = os.path.splitext(name)[0].replace("rdf_", "")
        ax.plot(r, g_r, lw=2 if label == "total" else 1, label=label)
    return _finish(fig, ax, filename)


def plot_rdf_files(paths, filename="rdf.png"):
    fig, ax = plt.subplots(figsize=(6, 4))
    for path in paths:
        r, g_r = load_two_column_file(path)
        if r is None:
            continue
        ax.plot(r, g_r, lw=2, label=os.path.basename(path))
    return _finish(fig, ax, filename)
