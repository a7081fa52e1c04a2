# File: mendelcheck/__init__.py
# Location: mendelcheck/mendelcheck/__init__.py

"""
mendelcheck Package.

This package checks genotype calls of families for compatibility with the
Mendelian modes of inheritance (autosomal and X-linked dominant and
recessive, compound heterozygous, mitochondrial).
"""

from .calls import ChromosomeType, GenotypeCalls, GenotypeCallsBuilder
from .exceptions import IncompatiblePedigreeError, MendelCheckError, PedParseError
from .genotype_utils import Genotype, parse_genotype
from .inheritance import MendelianInheritanceChecker, ModeOfInheritance, SubModeOfInheritance
from .pedigree import Pedigree, Person
from .version import __version__

__all__ = [
    "ChromosomeType",
    "Genotype",
    "GenotypeCalls",
    "GenotypeCallsBuilder",
    "IncompatiblePedigreeError",
    "MendelCheckError",
    "MendelianInheritanceChecker",
    "ModeOfInheritance",
    "PedParseError",
    "Pedigree",
    "Person",
    "SubModeOfInheritance",
    "__version__",
    "parse_genotype",
]
