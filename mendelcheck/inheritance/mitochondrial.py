"""
Compatibility check for mitochondrial inheritance.

Mitochondrial variants are transmitted by the mother to all of her children.
A single individual must carry the variant (het calls reflect heteroplasmy).
In families, every affected individual carries the variant, no unaffected
individual on the maternal line of an affected individual carries it, and
the genotyped mother of an affected individual is not hom. ref. unless she
is herself unaffected.
"""

import logging
from typing import Collection, List, Set

from ..calls import ChromosomeType, GenotypeCalls
from ..genotype_utils import Genotype
from ..pedigree import Pedigree, PedigreeQuery

logger = logging.getLogger(__name__)


def _carries(gt: Genotype) -> bool:
    return gt.is_het() or gt.is_hom_alt()


def filter_compatible_mt(
    pedigree: Pedigree, query: PedigreeQuery, calls: Collection[GenotypeCalls]
) -> List[GenotypeCalls]:
    """
    Filter genotype calls for compatibility with mitochondrial inheritance.

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
        Mitochondrial records compatible with maternal transmission, in input order
    """
    mt_calls = [call for call in calls if call.chrom_type == ChromosomeType.MITOCHONDRIAL]
    if pedigree.n_members == 1:
        name = pedigree.members[0].name
        return [call for call in mt_calls if _carries(call.genotype_for_sample(name))]

    affected_lines = {
        query.maternal_founder_name(person) for person in pedigree.members if person.is_affected
    }
    return [
        call for call in mt_calls if _is_compatible_family(pedigree, query, affected_lines, call)
    ]


def _is_compatible_family(
    pedigree: Pedigree, query: PedigreeQuery, affected_lines: Set[str], call: GenotypeCalls
) -> bool:
    num_affected_carriers = 0
    for person in pedigree.members:
        gt = call.genotype_for_sample(person.name)
        if person.is_affected:
            if gt.is_hom_ref():
                return False
            if _carries(gt):
                num_affected_carriers += 1
            mother = pedigree.mother_of(person)
            if (
                mother is not None
                and not mother.is_unaffected
                and call.genotype_for_sample(mother.name).is_hom_ref()
            ):
                return False
        elif person.is_unaffected:
            if _carries(gt) and query.maternal_founder_name(person) in affected_lines:
                return False
    return num_affected_carriers > 0
