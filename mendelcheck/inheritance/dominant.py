"""
Compatibility checks for autosomal and X-linked dominant inheritance.

For dominant inheritance there must be a variant shared heterozygously by
the affected individuals and carried by no unaffected individual. Affected
individuals may not be homozygous alt (except males on X, where the single
X copy is reported as hom. alt).
"""

import logging
from typing import Collection, List

from ..calls import ChromosomeType, GenotypeCalls
from ..pedigree import Pedigree, PedigreeQuery
from ..ped_reader import Disease

logger = logging.getLogger(__name__)


def filter_compatible_ad(
    pedigree: Pedigree, query: PedigreeQuery, calls: Collection[GenotypeCalls]
) -> List[GenotypeCalls]:
    """
    Filter genotype calls for compatibility with autosomal dominant inheritance.

    Parameters
    ----------
    pedigree : Pedigree
        Pedigree to check against
    query : PedigreeQuery
        Query helper for ``pedigree``
    calls : collection of GenotypeCalls
        Records to filter

    Returns
    -------
    list of GenotypeCalls
        Autosomal records compatible with AD inheritance, in input order
    """
    is_compatible = (
        _is_compatible_ad_singleton if pedigree.n_members == 1 else _is_compatible_ad_family
    )
    return [
        call
        for call in calls
        if call.chrom_type == ChromosomeType.AUTOSOMAL and is_compatible(pedigree, call)
    ]


def _is_compatible_ad_singleton(pedigree: Pedigree, call: GenotypeCalls) -> bool:
    return call.genotype_for_sample(pedigree.members[0].name).is_het()


def _is_compatible_ad_family(pedigree: Pedigree, call: GenotypeCalls) -> bool:
    num_affected_with_het = 0
    for person in pedigree.members:
        gt = call.genotype_for_sample(person.name)
        if person.disease == Disease.AFFECTED:
            if gt.is_hom_ref() or gt.is_hom_alt():
                return False
            elif gt.is_het():
                num_affected_with_het += 1
        elif person.disease == Disease.UNAFFECTED:
            if gt.is_het() or gt.is_hom_alt():
                return False
    return num_affected_with_het > 0


def filter_compatible_xd(
    pedigree: Pedigree, query: PedigreeQuery, calls: Collection[GenotypeCalls]
) -> List[GenotypeCalls]:
    """
    Filter genotype calls for compatibility with X-linked dominant inheritance.

    Returns
    -------
    list of GenotypeCalls
        X-chromosomal records compatible with XD inheritance, in input order
    """
    is_compatible = (
        _is_compatible_xd_singleton if pedigree.n_members == 1 else _is_compatible_xd_family
    )
    return [
        call
        for call in calls
        if call.chrom_type == ChromosomeType.X_CHROMOSOMAL and is_compatible(pedigree, call)
    ]


def _is_compatible_xd_singleton(pedigree: Pedigree, call: GenotypeCalls) -> bool:
    person = pedigree.members[0]
    gt = call.genotype_for_sample(person.name)
    if person.is_female:
        return gt.is_het()
    # Hemizygous males (and unknown sex) may be called het or hom. alt
    return gt.is_het() or gt.is_hom_alt()


def _is_compatible_xd_family(pedigree: Pedigree, call: GenotypeCalls) -> bool:
    num_affected_with_var = 0
    for person in pedigree.members:
        gt = call.genotype_for_sample(person.name)
        if person.disease == Disease.AFFECTED:
            if gt.is_hom_ref() or (person.is_female and gt.is_hom_alt()):
                return False
            elif person.is_female and gt.is_het():
                num_affected_with_var += 1
            elif not person.is_female and (gt.is_het() or gt.is_hom_alt()):
                num_affected_with_var += 1
        elif person.disease == Disease.UNAFFECTED:
            if gt.is_het() or gt.is_hom_alt():
                return False
    return num_affected_with_var > 0
