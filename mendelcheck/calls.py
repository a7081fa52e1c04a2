"""
Genotype calls of multiple samples at one site.

This module defines the site record consumed by the Mendelian inheritance
checkers: the chromosome classification of the site, the genotype of each
sample and an opaque payload owned by the caller (e.g. the row index of the
variant table the record was built from).
"""

from __future__ import annotations

import logging
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Generic, Iterable, Iterator, Mapping, Optional, Tuple, TypeVar

from .config import get_chromosome_aliases
from .genotype_utils import GT_NO_CALL, Genotype

logger = logging.getLogger(__name__)

PayloadT = TypeVar("PayloadT")


class ChromosomeType(Enum):
    """Classification of the chromosome a site lies on."""

    AUTOSOMAL = "autosomal"
    X_CHROMOSOMAL = "x_chromosomal"
    Y_CHROMOSOMAL = "y_chromosomal"
    MITOCHONDRIAL = "mitochondrial"


def classify_chromosome(
    chrom: str, aliases: Optional[Dict[str, set]] = None
) -> ChromosomeType:
    """
    Classify a contig name as autosomal, X, Y or mitochondrial.

    Parameters
    ----------
    chrom : str
        Contig name, e.g. "chr1", "X", "chrM"
    aliases : dict, optional
        Upper-cased alias sets as returned by ``config.get_chromosome_aliases``

    Returns
    -------
    ChromosomeType
    """
    if aliases is None:
        aliases = get_chromosome_aliases()
    name = str(chrom).strip().upper()
    if name in aliases.get("x", set()):
        return ChromosomeType.X_CHROMOSOMAL
    if name in aliases.get("y", set()):
        return ChromosomeType.Y_CHROMOSOMAL
    if name in aliases.get("mitochondrial", set()):
        return ChromosomeType.MITOCHONDRIAL
    return ChromosomeType.AUTOSOMAL


class GenotypeCalls(Generic[PayloadT]):
    """
    Genotypes of all samples at one site.

    Records are never merged by value: two records with the same genotypes
    at different sites are different records, so equality and hashing fall
    back to object identity.
    """

    def __init__(
        self,
        chrom_type: ChromosomeType,
        sample_to_genotype: Iterable[Tuple[str, Genotype]] | Mapping[str, Genotype],
        payload: Optional[PayloadT] = None,
    ):
        self.chrom_type = chrom_type
        if isinstance(sample_to_genotype, Mapping):
            sample_to_genotype = sample_to_genotype.items()
        mapping: Dict[str, Genotype] = {}
        for sample, genotype in sample_to_genotype:
            mapping[sample] = genotype
        self._sample_to_genotype = MappingProxyType(mapping)
        self._sample_names = tuple(mapping)
        self.payload = payload

    @property
    def n_samples(self) -> int:
        return len(self._sample_names)

    @property
    def sample_names(self) -> Tuple[str, ...]:
        return self._sample_names

    @property
    def sample_to_genotype(self) -> Mapping[str, Genotype]:
        """Read-only mapping from sample name to genotype, in insertion order."""
        return self._sample_to_genotype

    def genotype_for_sample(self, sample: str) -> Genotype:
        """Return the genotype of ``sample``; samples without a call are not observed."""
        return self._sample_to_genotype.get(sample, GT_NO_CALL)

    def genotype_by_sample_no(self, sample_no: int) -> Genotype:
        """Return the genotype of the sample at 0-based position ``sample_no``."""
        return self._sample_to_genotype[self._sample_names[sample_no]]

    def __iter__(self) -> Iterator[Tuple[str, Genotype]]:
        return iter(self._sample_to_genotype.items())

    def __repr__(self) -> str:
        genotypes = ", ".join(f"{s}={gt}" for s, gt in self)
        return (
            f"GenotypeCalls(chrom_type={self.chrom_type.name}, {{{genotypes}}}, "
            f"payload={self.payload!r})"
        )


class GenotypeCallsBuilder:
    """Mutable helper for assembling a GenotypeCalls record sample by sample."""

    def __init__(self, chrom_type: Optional[ChromosomeType] = None, payload: Any = None):
        self.chrom_type = chrom_type
        self.payload = payload
        self.sample_to_genotype: Dict[str, Genotype] = {}

    def add(self, sample: str, genotype: Genotype) -> "GenotypeCallsBuilder":
        self.sample_to_genotype[sample] = genotype
        return self

    def build(self) -> GenotypeCalls:
        if self.chrom_type is None:
            raise ValueError("Chromosome type must be set before building GenotypeCalls")
        return GenotypeCalls(self.chrom_type, self.sample_to_genotype.items(), self.payload)
