"""Pytest configuration and fixtures for inheritance tests."""

import pytest

from mendelcheck.ped_reader import Disease, PedFileContents, PedPerson, Sex
from mendelcheck.pedigree import Pedigree


@pytest.fixture
def nuclear_family() -> Pedigree:
    """Unaffected parents, an affected son and an unaffected daughter."""
    contents = PedFileContents(
        [],
        [
            PedPerson("ped", "I.1", "0", "0", Sex.MALE, Disease.UNAFFECTED),
            PedPerson("ped", "I.2", "0", "0", Sex.FEMALE, Disease.UNAFFECTED),
            PedPerson("ped", "II.1", "I.1", "I.2", Sex.MALE, Disease.AFFECTED),
            PedPerson("ped", "II.2", "I.1", "I.2", Sex.FEMALE, Disease.UNAFFECTED),
        ],
    )
    return Pedigree.from_ped_file_contents(contents, "ped")


@pytest.fixture
def three_generation_family() -> Pedigree:
    """
    Three generations with an affected aunt and an affected grandson.

    The affected individuals inherit from different grandparents, so a
    compound het pair may be transmitted via opposite parents.
    """
    contents = PedFileContents(
        [],
        [
            PedPerson("ped", "I.1", "0", "0", Sex.MALE, Disease.UNAFFECTED),
            PedPerson("ped", "I.2", "0", "0", Sex.FEMALE, Disease.UNAFFECTED),
            PedPerson("ped", "II.1", "I.1", "I.2", Sex.FEMALE, Disease.AFFECTED),
            PedPerson("ped", "II.2", "I.1", "I.2", Sex.MALE, Disease.UNAFFECTED),
            PedPerson("ped", "II.3", "0", "0", Sex.FEMALE, Disease.UNAFFECTED),
            PedPerson("ped", "III.1", "II.2", "II.3", Sex.MALE, Disease.AFFECTED),
            PedPerson("ped", "III.2", "II.2", "II.3", Sex.FEMALE, Disease.UNAFFECTED),
        ],
    )
    return Pedigree.from_ped_file_contents(contents, "ped")


@pytest.fixture
def affected_siblings() -> Pedigree:
    """Two affected siblings without parents in the pedigree."""
    contents = PedFileContents(
        [],
        [
            PedPerson("fam", "sib1", "0", "0", Sex.MALE, Disease.AFFECTED),
            PedPerson("fam", "sib2", "0", "0", Sex.FEMALE, Disease.AFFECTED),
        ],
    )
    return Pedigree.from_ped_file_contents(contents, "fam")
