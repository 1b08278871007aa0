# prdf/cli.py
import argparse
import logging
import sys

from prdf.config import RDFSettings
from prdf.constants import NEIGHBOR_MARGIN
from prdf.errors import RDFError
from prdf.plot import plot_rdf
from prdf.rdf import compute_rdf_from_list
from prdf.utils import write_results

log = logging.getLogger("prdf")


def build_parser():
    ap = argparse.ArgumentParser(
        prog="prdf",
        description="Partial and total radial distribution functions of periodic configurations.",
    )
    ap.add_argument("listfile", help="text file with one configuration file name per line")
    ap.add_argument("--rmax", type=float, required=True, help="largest radius (Å)")
    ap.add_argument("--dr", type=float, required=True, help="shell width (Å)")
    ap.add_argument("--margin", type=float, default=NEIGHBOR_MARGIN,
                    help="neighbor list cutoff is rmax + margin*dr (default: %(default)s)")
    ap.add_argument("--workers", type=int, default=1, help="threads per species pair")
    ap.add_argument("--option", action="append", default=[], metavar="OPT",
                    help='option applied to every configuration, e.g. "duplicate 2 2 2" (repeatable)')
    ap.add_argument("--outdir", default=".", help="directory for the rdf_*.dat tables")
    ap.add_argument("--overwrite", action="store_true", help="replace existing tables")
    ap.add_argument("--plot", metavar="PNG", help="also plot the curves to this file")
    ap.add_argument("--no-progress", action="store_true", help="never show progress bars")
    ap.add_argument("-v", "--verbose", action="count", default=0)
    ap.add_argument("-q", "--quiet", action="store_true")
    return ap


def main(argv=None):
    a = build_parser().parse_args(argv)

    level = logging.INFO
    if a.quiet:
        level = logging.WARNING
    elif a.verbose:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        settings = RDFSettings(
            r_max=a.rmax,
            dr=a.dr,
            margin=a.margin,
            workers=a.workers,
            overwrite=a.overwrite,
            options=a.option,
            progress=not a.no_progress,
        )
        result = compute_rdf_from_list(a.listfile, settings)
        write_results(result, a.outdir, overwrite=settings.overwrite)
        if a.plot:
            plot_rdf(result, a.plot)
    except (RDFError, ValueError, OSError) as exc:
        log.error("%s", exc)
        return 1

    report = result.report
    log.info(
        "%d file(s) analyzed, %d skipped, %d warning(s)",
        result.n_configurations, len(report.skipped), report.n_warnings,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
