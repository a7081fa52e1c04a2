"""
Modes and sub-modes of Mendelian inheritance.

The coarse modes are what a user prioritizes variants by. The sub-modes
split the two recessive modes into homozygous-alt and compound heterozygous
variants; every sub-mode maps onto exactly one coarse mode.
"""

from enum import Enum
from typing import Optional


class ModeOfInheritance(Enum):
    """Main Mendelian modes of inheritance; ANY is the identity filter."""

    AUTOSOMAL_DOMINANT = "autosomal_dominant"
    AUTOSOMAL_RECESSIVE = "autosomal_recessive"
    X_RECESSIVE = "x_linked_recessive"
    X_DOMINANT = "x_linked_dominant"
    MITOCHONDRIAL = "mitochondrial"
    ANY = "any"

    @property
    def is_recessive(self) -> bool:
        return self in (ModeOfInheritance.AUTOSOMAL_RECESSIVE, ModeOfInheritance.X_RECESSIVE)

    @property
    def is_dominant(self) -> bool:
        return self in (ModeOfInheritance.AUTOSOMAL_DOMINANT, ModeOfInheritance.X_DOMINANT)

    @property
    def abbreviation(self) -> Optional[str]:
        return _MODE_ABBREVIATIONS.get(self)


class SubModeOfInheritance(Enum):
    """Refinement of ModeOfInheritance distinguishing compound het from hom. alt recessive."""

    AUTOSOMAL_DOMINANT = "autosomal_dominant"
    AUTOSOMAL_RECESSIVE_COMP_HET = "autosomal_recessive_comp_het"
    AUTOSOMAL_RECESSIVE_HOM_ALT = "autosomal_recessive_hom_alt"
    X_RECESSIVE_COMP_HET = "x_linked_recessive_comp_het"
    X_RECESSIVE_HOM_ALT = "x_linked_recessive_hom_alt"
    X_DOMINANT = "x_linked_dominant"
    MITOCHONDRIAL = "mitochondrial"
    ANY = "any"

    def to_mode_of_inheritance(self) -> ModeOfInheritance:
        return _SUB_MODE_TO_MODE[self]

    @property
    def is_recessive(self) -> bool:
        return self.to_mode_of_inheritance().is_recessive

    @property
    def is_dominant(self) -> bool:
        return self.to_mode_of_inheritance().is_dominant

    @property
    def is_comp_het(self) -> bool:
        return self in (
            SubModeOfInheritance.AUTOSOMAL_RECESSIVE_COMP_HET,
            SubModeOfInheritance.X_RECESSIVE_COMP_HET,
        )

    @property
    def abbreviation(self) -> Optional[str]:
        return _SUB_MODE_ABBREVIATIONS.get(self)


_MODE_ABBREVIATIONS = {
    ModeOfInheritance.AUTOSOMAL_DOMINANT: "AD",
    ModeOfInheritance.AUTOSOMAL_RECESSIVE: "AR",
    ModeOfInheritance.X_DOMINANT: "XD",
    ModeOfInheritance.X_RECESSIVE: "XR",
    ModeOfInheritance.MITOCHONDRIAL: "MT",
}

_SUB_MODE_ABBREVIATIONS = {
    SubModeOfInheritance.AUTOSOMAL_DOMINANT: "AD",
    SubModeOfInheritance.AUTOSOMAL_RECESSIVE_COMP_HET: "AR_COMP_HET",
    SubModeOfInheritance.AUTOSOMAL_RECESSIVE_HOM_ALT: "AR_HOM_ALT",
    SubModeOfInheritance.X_DOMINANT: "XD",
    SubModeOfInheritance.X_RECESSIVE_COMP_HET: "XR_COMP_HET",
    SubModeOfInheritance.X_RECESSIVE_HOM_ALT: "XR_HOM_ALT",
    SubModeOfInheritance.MITOCHONDRIAL: "MT",
}

_SUB_MODE_TO_MODE = {
    SubModeOfInheritance.AUTOSOMAL_DOMINANT: ModeOfInheritance.AUTOSOMAL_DOMINANT,
    SubModeOfInheritance.AUTOSOMAL_RECESSIVE_COMP_HET: ModeOfInheritance.AUTOSOMAL_RECESSIVE,
    SubModeOfInheritance.AUTOSOMAL_RECESSIVE_HOM_ALT: ModeOfInheritance.AUTOSOMAL_RECESSIVE,
    SubModeOfInheritance.X_DOMINANT: ModeOfInheritance.X_DOMINANT,
    SubModeOfInheritance.X_RECESSIVE_COMP_HET: ModeOfInheritance.X_RECESSIVE,
    SubModeOfInheritance.X_RECESSIVE_HOM_ALT: ModeOfInheritance.X_RECESSIVE,
    SubModeOfInheritance.MITOCHONDRIAL: ModeOfInheritance.MITOCHONDRIAL,
    SubModeOfInheritance.ANY: ModeOfInheritance.ANY,
}
