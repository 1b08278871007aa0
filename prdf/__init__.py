# prdf: partial and total radial distribution functions

from prdf.config import RDFSettings
from prdf.configuration import Configuration, read_configuration
from prdf.rdf import compute_rdf, compute_rdf_from_files, compute_rdf_from_list

__version__ = "0.1"
