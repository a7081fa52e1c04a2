"""
Facade for checking genotype calls for compatibility with Mendelian inheritance.

The MendelianInheritanceChecker binds one checker function per sub-mode of
inheritance to a pedigree and dispatches to them through a fixed table. All
checkers are pure functions of the (immutable) pedigree and the calls passed
in, so one facade may be shared between threads.
"""

import logging
from functools import partial
from typing import Callable, Collection, Dict, List, Optional

from ..calls import GenotypeCalls
from ..exceptions import IncompatiblePedigreeError
from ..pedigree import Pedigree, PedigreeQuery
from .comp_het import filter_compatible_ar_comp_het, filter_compatible_xr_comp_het
from .dominant import filter_compatible_ad, filter_compatible_xd
from .mitochondrial import filter_compatible_mt
from .modes import ModeOfInheritance, SubModeOfInheritance
from .recessive_hom import filter_compatible_ar_hom, filter_compatible_xr_hom

logger = logging.getLogger(__name__)

CheckerFunction = Callable[
    [Pedigree, PedigreeQuery, Collection[GenotypeCalls]], List[GenotypeCalls]
]

CHECKERS: Dict[SubModeOfInheritance, CheckerFunction] = {
    SubModeOfInheritance.AUTOSOMAL_DOMINANT: filter_compatible_ad,
    SubModeOfInheritance.AUTOSOMAL_RECESSIVE_COMP_HET: filter_compatible_ar_comp_het,
    SubModeOfInheritance.AUTOSOMAL_RECESSIVE_HOM_ALT: filter_compatible_ar_hom,
    SubModeOfInheritance.X_DOMINANT: filter_compatible_xd,
    SubModeOfInheritance.X_RECESSIVE_COMP_HET: filter_compatible_xr_comp_het,
    SubModeOfInheritance.X_RECESSIVE_HOM_ALT: filter_compatible_xr_hom,
    SubModeOfInheritance.MITOCHONDRIAL: filter_compatible_mt,
}

# Recessive modes are the union of their hom. alt and compound het sub-modes
_RECESSIVE_SUB_MODES = {
    ModeOfInheritance.AUTOSOMAL_RECESSIVE: (
        SubModeOfInheritance.AUTOSOMAL_RECESSIVE_HOM_ALT,
        SubModeOfInheritance.AUTOSOMAL_RECESSIVE_COMP_HET,
    ),
    ModeOfInheritance.X_RECESSIVE: (
        SubModeOfInheritance.X_RECESSIVE_HOM_ALT,
        SubModeOfInheritance.X_RECESSIVE_COMP_HET,
    ),
}

_SIMPLE_SUB_MODES = {
    ModeOfInheritance.AUTOSOMAL_DOMINANT: SubModeOfInheritance.AUTOSOMAL_DOMINANT,
    ModeOfInheritance.X_DOMINANT: SubModeOfInheritance.X_DOMINANT,
    ModeOfInheritance.MITOCHONDRIAL: SubModeOfInheritance.MITOCHONDRIAL,
}


class MendelianInheritanceChecker:
    """
    Check collections of GenotypeCalls for compatibility with each mode of inheritance.

    Parameters
    ----------
    pedigree : Pedigree
        Pedigree to use for the checks; every sample of the checked calls
        must be a member
    """

    def __init__(self, pedigree: Pedigree):
        self.pedigree = pedigree
        self.query = PedigreeQuery(pedigree)
        self.checkers: Dict[SubModeOfInheritance, Callable] = {
            sub_mode: partial(checker, pedigree, self.query)
            for sub_mode, checker in CHECKERS.items()
        }

    def check_mendelian_inheritance(
        self,
        calls: Collection[GenotypeCalls],
        recessive_calls: Optional[Collection[GenotypeCalls]] = None,
    ) -> Dict[ModeOfInheritance, List[GenotypeCalls]]:
        """
        Filter calls for every mode of inheritance.

        Parameters
        ----------
        calls : collection of GenotypeCalls
            Records checked for the non-recessive modes
        recessive_calls : collection of GenotypeCalls, optional
            Records checked for the recessive modes, e.g. all records of a
            gene; defaults to ``calls``

        Returns
        -------
        dict
            For each ModeOfInheritance, the compatible records

        Raises
        ------
        IncompatiblePedigreeError
            If any record has a sample that is not in the pedigree
        """
        if recessive_calls is None:
            recessive_calls = calls
        self._check_compatible_with_pedigree(calls)
        self._check_compatible_with_pedigree(recessive_calls)

        result = {}
        for mode in ModeOfInheritance:
            if mode.is_recessive:
                result[mode] = self._filter_mode(recessive_calls, mode)
            else:
                result[mode] = self._filter_mode(calls, mode)
        self._log_counts(result)
        return result

    def check_mendelian_inheritance_sub(
        self,
        calls: Collection[GenotypeCalls],
        comp_het_recessive_calls: Optional[Collection[GenotypeCalls]] = None,
    ) -> Dict[SubModeOfInheritance, List[GenotypeCalls]]:
        """
        Filter calls for every sub-mode of inheritance.

        Parameters
        ----------
        calls : collection of GenotypeCalls
            Records checked for all but the compound het sub-modes
        comp_het_recessive_calls : collection of GenotypeCalls, optional
            Records checked for the compound het sub-modes; defaults to ``calls``

        Returns
        -------
        dict
            For each SubModeOfInheritance, the compatible records

        Raises
        ------
        IncompatiblePedigreeError
            If any record has a sample that is not in the pedigree
        """
        if comp_het_recessive_calls is None:
            comp_het_recessive_calls = calls
        self._check_compatible_with_pedigree(calls)
        self._check_compatible_with_pedigree(comp_het_recessive_calls)

        result = {}
        for sub_mode in SubModeOfInheritance:
            if sub_mode.is_comp_het:
                result[sub_mode] = self._filter_sub_mode(comp_het_recessive_calls, sub_mode)
            else:
                result[sub_mode] = self._filter_sub_mode(calls, sub_mode)
        self._log_counts(result)
        return result

    def filter_compatible_records(
        self, calls: Collection[GenotypeCalls], mode: ModeOfInheritance
    ) -> List[GenotypeCalls]:
        """
        Return the records of ``calls`` compatible with ``mode``.

        Raises
        ------
        IncompatiblePedigreeError
            If any record has a sample that is not in the pedigree
        """
        self._check_compatible_with_pedigree(calls)
        return self._filter_mode(calls, mode)

    def filter_compatible_records_sub(
        self, calls: Collection[GenotypeCalls], sub_mode: SubModeOfInheritance
    ) -> List[GenotypeCalls]:
        """
        Return the records of ``calls`` compatible with ``sub_mode``.

        Raises
        ------
        IncompatiblePedigreeError
            If any record has a sample that is not in the pedigree
        """
        self._check_compatible_with_pedigree(calls)
        return self._filter_sub_mode(calls, sub_mode)

    def _filter_mode(
        self, calls: Collection[GenotypeCalls], mode: ModeOfInheritance
    ) -> List[GenotypeCalls]:
        if mode in _SIMPLE_SUB_MODES:
            return self.checkers[_SIMPLE_SUB_MODES[mode]](calls)
        if mode in _RECESSIVE_SUB_MODES:
            compatible_ids = set()
            for sub_mode in _RECESSIVE_SUB_MODES[mode]:
                compatible_ids.update(id(call) for call in self.checkers[sub_mode](calls))
            return [call for call in calls if id(call) in compatible_ids]
        return list(calls)

    def _filter_sub_mode(
        self, calls: Collection[GenotypeCalls], sub_mode: SubModeOfInheritance
    ) -> List[GenotypeCalls]:
        if sub_mode == SubModeOfInheritance.ANY:
            return list(calls)
        return self.checkers[sub_mode](calls)

    def is_compatible_with_pedigree(self, calls: GenotypeCalls) -> bool:
        """Return True if all samples of ``calls`` are members of the pedigree."""
        return all(self.pedigree.has_person(sample) for sample in calls.sample_names)

    def _check_compatible_with_pedigree(self, calls: Collection[GenotypeCalls]) -> None:
        unknown = set()
        for call in calls:
            unknown.update(s for s in call.sample_names if not self.pedigree.has_person(s))
        if unknown:
            raise IncompatiblePedigreeError(
                f"GenotypeCalls not compatible with pedigree {self.pedigree.name}", unknown
            )

    @staticmethod
    def _log_counts(result: Dict) -> None:
        if logger.isEnabledFor(logging.DEBUG):
            counts = {mode.value: len(records) for mode, records in result.items()}
            logger.debug(f"Compatible records per mode: {counts}")
