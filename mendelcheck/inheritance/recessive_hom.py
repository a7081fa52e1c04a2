"""
Compatibility checks for homozygous recessive inheritance (autosomal and X).

In the case of a single individual a homozygous alt call is required (on X,
a het call in a non-female is accepted as a miscalled hemizygous variant).

In the case of multiple individuals all of the following must hold:

- no affected individual is hom. ref. or het. (het is tolerated for
  non-female affecteds on X) and at least one affected carries the variant
- the obligate carriers among the parents are het.
- no unaffected individual is hom. alt. (on X, unaffected males may not
  carry the variant at all)
"""

import logging
from typing import Collection, List

from ..calls import ChromosomeType, GenotypeCalls
from ..pedigree import Pedigree, PedigreeQuery

logger = logging.getLogger(__name__)


def filter_compatible_ar_hom(
    pedigree: Pedigree, query: PedigreeQuery, calls: Collection[GenotypeCalls]
) -> List[GenotypeCalls]:
    """
    Filter genotype calls for compatibility with autosomal recessive hom. alt inheritance.

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
        Autosomal records compatible with AR hom. alt inheritance, in input order
    """
    autosomal = [call for call in calls if call.chrom_type == ChromosomeType.AUTOSOMAL]
    if pedigree.n_members == 1:
        name = pedigree.members[0].name
        return [call for call in autosomal if call.genotype_for_sample(name).is_hom_alt()]

    obligate_carriers = query.unaffected_parent_names_of_affecteds()
    return [
        call
        for call in autosomal
        if _ar_affecteds_are_compatible(pedigree, call)
        and _obligate_carriers_are_het(obligate_carriers, call)
        and _ar_unaffecteds_are_not_hom_alt(pedigree, call)
    ]


def _ar_affecteds_are_compatible(pedigree: Pedigree, call: GenotypeCalls) -> bool:
    num_hom_alt = 0
    for person in pedigree.members:
        if person.is_affected:
            gt = call.genotype_for_sample(person.name)
            if gt.is_hom_ref() or gt.is_het():
                return False
            elif gt.is_hom_alt():
                num_hom_alt += 1
    return num_hom_alt > 0


def _obligate_carriers_are_het(names, call: GenotypeCalls) -> bool:
    for name in names:
        gt = call.genotype_for_sample(name)
        if gt.is_hom_alt() or gt.is_hom_ref():
            return False
    return True


def _ar_unaffecteds_are_not_hom_alt(pedigree: Pedigree, call: GenotypeCalls) -> bool:
    return not any(
        person.is_unaffected and call.genotype_for_sample(person.name).is_hom_alt()
        for person in pedigree.members
    )


def filter_compatible_xr_hom(
    pedigree: Pedigree, query: PedigreeQuery, calls: Collection[GenotypeCalls]
) -> List[GenotypeCalls]:
    """
    Filter genotype calls for compatibility with X-linked recessive hom. alt inheritance.

    Returns
    -------
    list of GenotypeCalls
        X-chromosomal records compatible with XR hom. alt inheritance, in input order
    """
    x_calls = [call for call in calls if call.chrom_type == ChromosomeType.X_CHROMOSOMAL]
    if pedigree.n_members == 1:
        person = pedigree.members[0]
        result = []
        for call in x_calls:
            gt = call.genotype_for_sample(person.name)
            if gt.is_hom_alt() or (not person.is_female and gt.is_het()):
                result.append(call)
        return result

    female_parent_names = query.affected_female_parent_names()
    return [
        call
        for call in x_calls
        if _xr_affecteds_are_compatible(pedigree, call)
        and _xr_parents_are_compatible(pedigree, female_parent_names, call)
        and _xr_unaffecteds_are_compatible(pedigree, call)
    ]


def _xr_affecteds_are_compatible(pedigree: Pedigree, call: GenotypeCalls) -> bool:
    num_var = 0
    for person in pedigree.members:
        if not person.is_affected:
            continue
        gt = call.genotype_for_sample(person.name)
        if gt.is_hom_ref():
            return False
        elif person.is_female and gt.is_het():
            # A heterozygous female is a carrier, not affected
            return False
        elif gt.is_hom_alt() or (not person.is_female and gt.is_het()):
            num_var += 1
    return num_var > 0


def _xr_parents_are_compatible(pedigree: Pedigree, parent_names, call: GenotypeCalls) -> bool:
    """
    Check the parents of affected females, who must have inherited the variant from both.

    The parents of affected males are not checked: a male inherits his X
    from his mother only.
    """
    for person in pedigree.members:
        if person.name not in parent_names:
            continue
        if person.is_male and person.is_unaffected:
            # The father of an affected female carries the variant on his only X
            return False
        if person.is_female and not person.is_affected:
            gt = call.genotype_for_sample(person.name)
            if gt.is_hom_alt() or gt.is_hom_ref():
                return False
    return True


def _xr_unaffecteds_are_compatible(pedigree: Pedigree, call: GenotypeCalls) -> bool:
    for person in pedigree.members:
        if not person.is_unaffected:
            continue
        gt = call.genotype_for_sample(person.name)
        # Any allele dosage in a male is hemizygous
        if person.is_male and (gt.is_het() or gt.is_hom_alt()):
            return False
        elif gt.is_hom_alt():
            return False
    return True
