# prdf/rdf.py
#
# Partial and total radial distribution functions averaged over the atoms
# of each configuration and over all configurations.

import logging
from dataclasses import dataclass, field

import numpy as np

from prdf.accumulator import RDFAccumulator, total_rdf
from prdf.configuration import read_configuration
from prdf.constants import LARGE_SPECIES_COUNT, PROGRESS_MIN_WORK, TOTAL_TABLE, pair_table_name
from prdf.errors import NoConfigurationError, ParseError
from prdf.geometry import periodic_range, replica_translations
from prdf.neighborlist import NeighborList
from prdf.options import apply_options
from prdf.shells import ShellCounter
from prdf.species import SpeciesTable
from prdf.utils import read_file_list

log = logging.getLogger(__name__)


@dataclass
class RunReport:
    """What happened during a run: files used, files skipped, warnings, outputs."""

    processed: list = field(default_factory=list)
    skipped: list = field(default_factory=list)
    warnings: list = field(default_factory=list)
    outputs: list = field(default_factory=list)

    def warn(self, message):
        log.warning(message)
        self.warnings.append(message)

    @property
    def n_warnings(self):
        return len(self.warnings)


@dataclass
class RDFResult:
    settings: object
    species: SpeciesTable
    partials: np.ndarray
    total: np.ndarray
    n_configurations: int
    report: RunReport

    @property
    def radii(self):
        return self.settings.radii

    @property
    def pair_labels(self):
        labels = self.species.labels
        return [(labels[k], labels[l]) for k, l in self.species.pairs()]

    def partial(self, label_a, label_b):
        """Partial RDF of `label_b` atoms around `label_a` atoms."""
        for idx, pair in enumerate(self.pair_labels):
            if pair == (label_a, label_b) or pair == (label_b, label_a):
                return self.partials[idx]
        raise KeyError(f"no pair {label_a}-{label_b} in {self.pair_labels}")

    def tables(self):
        """
        Output tables by file name: one per pair when more than one species
        exists, plus the total. The last shell is dropped.
        """
        r = self.radii[:-1]
        tables = {}
        if len(self.species) > 1:
            for idx, (a, b) in enumerate(self.pair_labels):
                tables[pair_table_name(a, b)] = (r, self.partials[idx, :-1])
        tables[TOTAL_TABLE] = (r, self.total[:-1])
        return tables


class RDFCalculator:
    """
    Consumes configurations one at a time and keeps the running sums.

    The species table and the accumulator are sized by the first
    configuration. Later configurations must not add species.
    """

    def __init__(self, settings, report=None):
        self.settings = settings
        self.report = report if report is not None else RunReport()
        self.species = None
        self.accumulator = None

    def process(self, config):
        """Add one configuration (options already applied) to the sums."""
        s = self.settings
        config.validate()
        # the translation range assumes every atom sits inside the cell
        config = config.copy()
        config.wrap()

        if self.species is None:
            self.species = SpeciesTable.from_configuration(config)
            self.accumulator = RDFAccumulator(self.species.n_pairs, s.radii, s.dr)
        else:
            self.species.check(config)

        volume = config.volume()
        shifts = replica_translations(config.cell, periodic_range(config.cell, s.cutoff))

        # neighbors up to R + dR are needed for the shell at R
        nl = NeighborList(s.cutoff, config.pos, config.cell)
        counter = ShellCounter(config, nl, shifts, s.dr, s.n_steps)

        counts = self.species.counts_for(config)
        labels = self.species.labels
        codes = self.species.codes
        for pair_index, (k, l) in enumerate(self.species.pairs()):
            log.info("Computing RDF of %s atoms around %s atoms", labels[l], labels[k])
            if counts[k] > LARGE_SPECIES_COUNT:
                log.warning("%d %s atoms: this may take a while", counts[k], labels[k])

            show = s.progress and s.n_steps * counts[k] > PROGRESS_MIN_WORK
            raw = counter.count(
                codes[k], codes[l], workers=s.workers, progress=show,
                desc=f"{labels[k]}-{labels[l]}",
            )
            self.accumulator.add(pair_index, raw, counts[k], counts[l], volume)

        self.accumulator.commit()
        self.report.processed.append(config.source)

    def finalize(self):
        """Ensemble average, then the total curve."""
        if self.accumulator is None or self.accumulator.n_configurations == 0:
            raise NoConfigurationError("no configuration could be analyzed")
        partials = self.accumulator.ensemble_average()
        total = total_rdf(partials)
        n = self.accumulator.n_configurations
        log.info("RDF averaged over %d configuration(s)", n)
        return RDFResult(
            settings=self.settings,
            species=self.species,
            partials=partials,
            total=total,
            n_configurations=n,
            report=self.report,
        )


def compute_rdf(configurations, settings):
    """
    Partial and total RDFs of in-memory configurations.

    configurations : iterable of Configuration
    settings : RDFSettings
        Its options are applied to each configuration first.
    """
    calc = RDFCalculator(settings)
    for config in configurations:
        calc.process(apply_options(settings.options, config))
    return calc.finalize()


def compute_rdf_from_files(paths, settings, reader=read_configuration):
    """
    Partial and total RDFs of the configuration files in `paths`.

    A file that is missing or cannot be read is skipped with a warning.
    Option and validation errors stop the run.
    """
    log.info("RDF up to R = %.4f Å with dR = %.4f Å", settings.r_max, settings.dr)
    calc = RDFCalculator(settings)
    for path in paths:
        try:
            config = reader(path)
        except FileNotFoundError:
            calc.report.skipped.append(path)
            calc.report.warn(f"file {path} does not exist, skipping")
            continue
        except ParseError as exc:
            calc.report.skipped.append(path)
            calc.report.warn(f"{exc}, skipping")
            continue

        calc.process(apply_options(settings.options, config))
    return calc.finalize()


def compute_rdf_from_list(listfile, settings, reader=read_configuration):
    """Same as compute_rdf_from_files, reading the names from `listfile`."""
    return compute_rdf_from_files(read_file_list(listfile), settings, reader=reader)
