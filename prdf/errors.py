# prdf/errors.py


class RDFError(Exception):
    """Base class for every error raised by prdf."""


class ParseError(RDFError):
    """A listed configuration file could not be read or is malformed."""

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot read {path}: {reason}")


class OptionError(RDFError):
    """An option is unknown, malformed, or failed to apply."""


class ConfigurationError(RDFError):
    """A configuration failed validation after options were applied."""


class SpeciesMismatchError(ConfigurationError):
    """A configuration holds a species the first configuration did not have."""


class NoConfigurationError(RDFError):
    """No configuration was processed, so there is no RDF to report."""


class OutputExistsError(RDFError, FileExistsError):
    """An output file exists and overwriting was not allowed."""
