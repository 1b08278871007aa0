# prdf/options.py
#
# Geometry and selection options applied to every configuration after it
# is read. Each option is a string: a name followed by its arguments,
# e.g. "duplicate 2 2 1" or "remove-species O H".

import logging
import shlex

import numpy as np

from prdf.configuration import Configuration
from prdf.errors import OptionError
from prdf.lattice import replicate
from prdf.species import symbol_to_code

log = logging.getLogger(__name__)


def _floats(name, args, counts):
    if len(args) not in counts:
        raise OptionError(f"{name}: expected {' or '.join(map(str, counts))} values, got {len(args)}")
    try:
        return [float(a) for a in args]
    except ValueError:
        raise OptionError(f"{name}: non-numeric argument in {args}") from None


def _codes(name, args):
    if not args:
        raise OptionError(f"{name}: expected at least one chemical symbol")
    try:
        return [symbol_to_code(a) for a in args]
    except ValueError as exc:
        raise OptionError(f"{name}: {exc}") from None


def _subset(config, keep):
    return Configuration(
        config.cell, config.pos[keep], config.numbers[keep],
        source=config.source, info=config.info,
    )


# ------------------------------------------------------------
# Individual options
# ------------------------------------------------------------
def opt_wrap(config, args):
    if args:
        raise OptionError(f"wrap: takes no arguments, got {args}")
    config = config.copy()
    config.wrap()
    return config


def opt_duplicate(config, args):
    values = _floats("duplicate", args, (3,))
    if any(v != int(v) or v < 1 for v in values):
        raise OptionError(f"duplicate: factors must be positive integers, got {args}")
    nx, ny, nz = (int(v) for v in values)
    pos, cell, numbers = replicate(config.pos, config.cell, config.numbers, nx, ny, nz)
    return Configuration(cell, pos, numbers, source=config.source, info=config.info)


def opt_remove_species(config, args):
    codes = _codes("remove-species", args)
    return _subset(config, ~np.isin(config.numbers, codes))


def opt_select_species(config, args):
    codes = _codes("select-species", args)
    return _subset(config, np.isin(config.numbers, codes))


def opt_scale(config, args):
    factors = np.array(_floats("scale", args, (1, 3)))
    if np.any(factors <= 0.0):
        raise OptionError(f"scale: factors must be positive, got {args}")
    if factors.size == 1:
        factors = np.repeat(factors, 3)
    # scale along each lattice vector, keeping fractional coordinates
    frac = config.pos @ np.linalg.inv(config.cell)
    cell = config.cell * factors[:, None]
    return Configuration(cell, frac @ cell, config.numbers, source=config.source, info=config.info)


OPTIONS = {
    "wrap": opt_wrap,
    "duplicate": opt_duplicate,
    "dup": opt_duplicate,
    "remove-species": opt_remove_species,
    "select-species": opt_select_species,
    "scale": opt_scale,
}


def parse_option(option):
    """Split an option string into (name, args)."""
    if isinstance(option, str):
        words = shlex.split(option)
    else:
        words = [str(w) for w in option]
    if not words:
        raise OptionError("empty option")
    name = words[0].lstrip("-").lower()
    if name not in OPTIONS:
        raise OptionError(f"unknown option {words[0]!r}; known: {', '.join(sorted(OPTIONS))}")
    return name, words[1:]


def apply_options(options, config):
    """
    Apply `options` in order and return the resulting configuration.
    The input configuration is left untouched.

    Raises OptionError on any unknown or malformed option; the caller
    treats this as fatal for the run.
    """
    for option in options:
        name, args = parse_option(option)
        log.debug("%s: applying option %s %s", config.source, name, " ".join(args))
        config = OPTIONS[name](config, args)
    return config
