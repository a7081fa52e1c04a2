"""
Compound heterozygous analyzer for recessive inheritance.

This module identifies pairs of heterozygous variants in the same unit (e.g.
a gene) that can jointly explain a recessive phenotype, one variant having
been inherited from each parent.

In the case of a single individual, two or more heterozygous calls are
sufficient. For families the analysis runs in three steps:

1. Candidate generation around each affected individual with a parent in the
   pedigree: variants that can come from the father (het or no-call in child
   and father, hom. ref or no-call in the mother) are paired with variants
   that can come from the mother. Without any parent in the pedigree, all
   het or no-call variants of each affected are paired with each other.
2. Every affected individual must be het for both variants, the parents
   must not be homozygous for the variant they transmitted, and no
   unaffected full sibling may be het for both. Both orientations of the
   pair are tried since different founders may transmit via opposite parents.
3. No unaffected individual may be hom. alt for either variant, or carry
   both variants in trans as shown by the genotypes of its parents.
"""

import logging
from itertools import combinations
from typing import Collection, Dict, Iterable, List, NamedTuple, Optional, Sequence

from ..calls import ChromosomeType, GenotypeCalls
from ..genotype_utils import Genotype
from ..pedigree import Pedigree, PedigreeQuery, Person

logger = logging.getLogger(__name__)


class Candidate(NamedTuple):
    """
    Candidate compound heterozygous pair found around one affected individual.

    ``paternal`` is compatible with transmission from the father and
    ``maternal`` with transmission from the mother.
    """

    paternal: GenotypeCalls
    maternal: GenotypeCalls


def _het_or_not_observed(gt: Genotype) -> bool:
    return gt.is_het() or gt.is_not_observed()


def _ref_or_not_observed(gt: Genotype) -> bool:
    return gt.is_hom_ref() or gt.is_not_observed()


def _is_homozygous(gt: Genotype) -> bool:
    return gt.is_hom_ref() or gt.is_hom_alt()


def _pair_candidates(
    person: Person, paternal: Iterable[GenotypeCalls], maternal: Sequence[GenotypeCalls]
) -> List[Candidate]:
    candidates = []
    for pat in paternal:
        for mat in maternal:
            if pat is mat:
                continue
            if (
                pat.genotype_for_sample(person.name).is_not_observed()
                and mat.genotype_for_sample(person.name).is_not_observed()
            ):
                continue
            candidates.append(Candidate(pat, mat))
    return candidates


def _trio_candidates(
    pedigree: Pedigree, person: Person, calls: Sequence[GenotypeCalls]
) -> List[Candidate]:
    """Pair variants transmissible by the father with those transmissible by the mother."""
    father = pedigree.father_of(person)
    mother = pedigree.mother_of(person)

    def transmissible(call: GenotypeCalls, transmitter: Optional[Person], other: Optional[Person]):
        if not _het_or_not_observed(call.genotype_for_sample(person.name)):
            return False
        if transmitter is not None and not _het_or_not_observed(
            call.genotype_for_sample(transmitter.name)
        ):
            return False
        return other is None or _ref_or_not_observed(call.genotype_for_sample(other.name))

    paternal = [call for call in calls if transmissible(call, father, mother)]
    maternal = [call for call in calls if transmissible(call, mother, father)]
    return _pair_candidates(person, paternal, maternal)


def _sibling_candidates(person: Person, calls: Sequence[GenotypeCalls]) -> List[Candidate]:
    """Pair all het or no-call variants of an affected individual without parents."""
    bucket = [
        call for call in calls if _het_or_not_observed(call.genotype_for_sample(person.name))
    ]
    return [
        Candidate(first, second)
        for first, second in combinations(bucket, 2)
        if not (
            first.genotype_for_sample(person.name).is_not_observed()
            and second.genotype_for_sample(person.name).is_not_observed()
        )
    ]


def collect_trio_candidates(pedigree: Pedigree, calls: Sequence[GenotypeCalls]) -> List[Candidate]:
    """
    Collect candidate pairs from the trios around the affected individuals.

    Parameters
    ----------
    pedigree : Pedigree
        Pedigree with at least two members
    calls : sequence of GenotypeCalls
        All records of the unit under investigation (e.g. a gene)

    Returns
    -------
    list of Candidate
        Candidate pairs, possibly with repetitions across affected individuals
    """
    affecteds = [person for person in pedigree.members if person.is_affected]
    with_parents = [
        person
        for person in affecteds
        if pedigree.father_of(person) is not None or pedigree.mother_of(person) is not None
    ]

    candidates: List[Candidate] = []
    if with_parents:
        for person in with_parents:
            candidates.extend(_trio_candidates(pedigree, person, calls))
    else:
        # e.g. only siblings sequenced
        for person in affecteds:
            candidates.extend(_sibling_candidates(person, calls))
    return candidates


def _violates_trio(
    pedigree: Pedigree,
    siblings: Dict[str, List[Person]],
    person: Person,
    paternal: GenotypeCalls,
    maternal: GenotypeCalls,
) -> bool:
    """Return True if the pair, in this orientation, contradicts the trio around ``person``."""
    if _is_homozygous(paternal.genotype_for_sample(person.name)) or _is_homozygous(
        maternal.genotype_for_sample(person.name)
    ):
        return True

    father = pedigree.father_of(person)
    if father is not None and _is_homozygous(paternal.genotype_for_sample(father.name)):
        return True
    mother = pedigree.mother_of(person)
    if mother is not None and _is_homozygous(maternal.genotype_for_sample(mother.name)):
        return True

    for sibling in siblings.get(person.name, []):
        if (
            sibling.is_unaffected
            and paternal.genotype_for_sample(sibling.name).is_het()
            and maternal.genotype_for_sample(sibling.name).is_het()
        ):
            return True
    return False


def is_compatible_with_affected_trios(
    pedigree: Pedigree, siblings: Dict[str, List[Person]], candidate: Candidate
) -> bool:
    """
    Check a candidate pair against the trios around all affected individuals.

    Parameters
    ----------
    pedigree : Pedigree
        Pedigree to check against
    siblings : dict
        Full siblings of each member, see ``PedigreeQuery.siblings``
    candidate : Candidate
        Pair to check

    Returns
    -------
    bool
        True unless some affected individual contradicts the pair in both orientations
    """
    for person in pedigree.members:
        if not person.is_affected:
            continue
        if _violates_trio(
            pedigree, siblings, person, candidate.paternal, candidate.maternal
        ) and _violates_trio(pedigree, siblings, person, candidate.maternal, candidate.paternal):
            return False
    return True


def is_compatible_with_unaffected(pedigree: Pedigree, candidate: Candidate) -> bool:
    """
    Check that no unaffected individual carries the pair as a recessive genotype.

    An unaffected individual may not be hom. alt for either variant. When it
    is het for both and the genotypes of both parents show that each parent
    transmitted one of the variants, the unaffected individual is compound
    heterozygous and the pair is rejected. Missing parents or parent
    genotypes are not evidence for rejection.
    """
    for person in pedigree.members:
        if not person.is_unaffected:
            continue
        pat_gt = candidate.paternal.genotype_for_sample(person.name)
        mat_gt = candidate.maternal.genotype_for_sample(person.name)
        if pat_gt.is_hom_alt() or mat_gt.is_hom_alt():
            return False
        if not (pat_gt.is_het() and mat_gt.is_het()):
            continue

        father = pedigree.father_of(person)
        mother = pedigree.mother_of(person)
        if father is None or mother is None:
            continue
        # <parent><variant>: genotype of father/mother of person for the paternal/maternal variant
        fp = candidate.paternal.genotype_for_sample(father.name)
        mp = candidate.paternal.genotype_for_sample(mother.name)
        fm = candidate.maternal.genotype_for_sample(father.name)
        mm = candidate.maternal.genotype_for_sample(mother.name)
        if fp.is_het() and mp.is_hom_ref() and fm.is_hom_ref() and mm.is_het():
            return False
        if fp.is_hom_ref() and mp.is_het() and fm.is_het() and mm.is_hom_ref():
            return False
    return True


def find_compatible_pairs(
    pedigree: Pedigree, query: PedigreeQuery, calls: Sequence[GenotypeCalls]
) -> List[Candidate]:
    """
    Return the distinct candidate pairs compatible with compound het inheritance.

    Parameters
    ----------
    pedigree : Pedigree
        Pedigree with at least two members
    query : PedigreeQuery
        Query helper for ``pedigree``
    calls : sequence of GenotypeCalls
        Records of one unit, already restricted to one chromosome type

    Returns
    -------
    list of Candidate
        Surviving pairs in order of generation, without repetitions
    """
    candidates = collect_trio_candidates(pedigree, calls)
    siblings = query.siblings

    seen = set()
    result = []
    for candidate in candidates:
        key = (id(candidate.paternal), id(candidate.maternal))
        if key in seen:
            continue
        seen.add(key)
        if is_compatible_with_affected_trios(
            pedigree, siblings, candidate
        ) and is_compatible_with_unaffected(pedigree, candidate):
            result.append(candidate)

    logger.debug(
        f"Compound het: {len(seen)} distinct candidate pairs, {len(result)} compatible "
        f"in pedigree {pedigree.name}"
    )
    return result


def _filter_single_sample(
    pedigree: Pedigree, calls: Sequence[GenotypeCalls]
) -> List[GenotypeCalls]:
    name = pedigree.members[0].name
    het_calls = [call for call in calls if call.genotype_for_sample(name).is_het()]
    return het_calls if len(het_calls) > 1 else []


def filter_compatible_comp_het(
    pedigree: Pedigree,
    query: PedigreeQuery,
    calls: Collection[GenotypeCalls],
    chrom_type: ChromosomeType,
) -> List[GenotypeCalls]:
    """
    Filter the records of one unit for compatibility with compound het inheritance.

    Parameters
    ----------
    pedigree : Pedigree
        Pedigree to check against
    query : PedigreeQuery
        Query helper for ``pedigree``
    calls : collection of GenotypeCalls
        Genotypes of all pedigree members at all sites of the unit
    chrom_type : ChromosomeType
        Only records on this chromosome type are considered

    Returns
    -------
    list of GenotypeCalls
        Each record taking part in at least one compatible pair, once, in input order
    """
    selected = [call for call in calls if call.chrom_type == chrom_type]
    if pedigree.n_members == 1:
        return _filter_single_sample(pedigree, selected)

    compatible_ids = set()
    for candidate in find_compatible_pairs(pedigree, query, selected):
        compatible_ids.add(id(candidate.paternal))
        compatible_ids.add(id(candidate.maternal))
    return [call for call in selected if id(call) in compatible_ids]


def filter_compatible_ar_comp_het(
    pedigree: Pedigree, query: PedigreeQuery, calls: Collection[GenotypeCalls]
) -> List[GenotypeCalls]:
    """Filter autosomal records for compatibility with AR compound het inheritance."""
    return filter_compatible_comp_het(pedigree, query, calls, ChromosomeType.AUTOSOMAL)


def filter_compatible_xr_comp_het(
    pedigree: Pedigree, query: PedigreeQuery, calls: Collection[GenotypeCalls]
) -> List[GenotypeCalls]:
    """Filter X-chromosomal records for compatibility with XR compound het inheritance."""
    return filter_compatible_comp_het(pedigree, query, calls, ChromosomeType.X_CHROMOSOMAL)
