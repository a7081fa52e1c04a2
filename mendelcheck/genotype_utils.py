"""
Genotype model and parsing utilities.

A genotype is the ordered list of allele numbers called for one individual at
one site. Allele 0 is the reference, positive numbers are alternative alleles
and ``NO_CALL`` marks an allele that could not be called. This module also
parses the genotype strings commonly found in VCF files.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

NO_CALL = -1
REF_CALL = 0


@dataclass(frozen=True)
class Genotype:
    """
    Immutable allele call of one individual at one site.

    Fields
    ------
    alleles : tuple of int
        Allele numbers, ``REF_CALL`` for the reference and ``NO_CALL`` for a
        missing allele. Haploid calls have a single entry.
    """

    alleles: tuple[int, ...]

    def __init__(self, alleles: Iterable[int] = ()):
        object.__setattr__(self, "alleles", tuple(int(a) for a in alleles))

    @property
    def ploidy(self) -> int:
        return len(self.alleles)

    def is_not_observed(self) -> bool:
        """Return True if no allele was called, or any allele is a no-call."""
        return not self.alleles or NO_CALL in self.alleles

    def is_hom_ref(self) -> bool:
        """Return True if all alleles are the reference allele."""
        return bool(self.alleles) and all(a == REF_CALL for a in self.alleles)

    def is_hom_alt(self) -> bool:
        """Return True if all alleles are the same alternative allele."""
        if self.is_not_observed():
            return False
        first = self.alleles[0]
        return first > REF_CALL and all(a == first for a in self.alleles)

    def is_het(self) -> bool:
        """Return True for exactly two distinct called alleles, at least one alternative."""
        if self.is_not_observed():
            return False
        distinct = set(self.alleles)
        return len(distinct) == 2 and any(a > REF_CALL for a in distinct)

    @property
    def genotype_type(self) -> str:
        """
        Get a string representation of the genotype type.

        Returns
        -------
        str
            One of: 'ref', 'het', 'hom_alt', 'missing'
        """
        if self.is_not_observed():
            return "missing"
        elif self.is_hom_ref():
            return "ref"
        elif self.is_het():
            return "het"
        elif self.is_hom_alt():
            return "hom_alt"
        else:
            return "missing"

    def __str__(self) -> str:
        if not self.alleles:
            return "."
        return "/".join("." if a == NO_CALL else str(a) for a in self.alleles)


# Canonical genotype returned for samples without a call
GT_NO_CALL = Genotype((NO_CALL,))


def parse_genotype(gt: str | None) -> Genotype:
    """
    Parse a genotype string into a Genotype.

    Parameters
    ----------
    gt : str
        Genotype string (e.g., "0/1", "1|1", "./.", "1", "0/1:35")

    Returns
    -------
    Genotype
        The parsed genotype; malformed input yields the canonical no-call
    """
    if gt is None:
        return GT_NO_CALL
    gt = str(gt).strip()
    # Drop trailing FORMAT fields such as "0/1:35:99"
    if ":" in gt:
        gt = gt.split(":", 1)[0]
    if not gt or gt in (".", "./.", ".|.", "nan"):
        return GT_NO_CALL

    # Handle both / and | separators
    parts = gt.replace("|", "/").split("/")

    try:
        return Genotype(NO_CALL if part == "." else int(part) for part in parts)
    except ValueError:
        return GT_NO_CALL
