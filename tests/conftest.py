"""Shared pytest fixtures for all test modules."""

from typing import Callable, List, Sequence

import pytest

from mendelcheck.calls import ChromosomeType, GenotypeCalls
from mendelcheck.genotype_utils import parse_genotype
from mendelcheck.ped_reader import Disease, PedFileContents, PedPerson, Sex
from mendelcheck.pedigree import Pedigree


@pytest.fixture
def make_calls() -> Callable[..., GenotypeCalls]:
    """Build a GenotypeCalls record from sample names and genotype strings."""

    def _make(
        names: Sequence[str],
        genotypes: Sequence[str],
        chrom_type: ChromosomeType = ChromosomeType.AUTOSOMAL,
        payload=None,
    ) -> GenotypeCalls:
        return GenotypeCalls(
            chrom_type,
            [(name, parse_genotype(gt)) for name, gt in zip(names, genotypes)],
            payload,
        )

    return _make


@pytest.fixture
def make_calls_list(make_calls) -> Callable[..., List[GenotypeCalls]]:
    """Build one GenotypeCalls record per genotype list, all for the same samples."""

    def _make(names, *genotype_lists, chrom_type=ChromosomeType.AUTOSOMAL):
        return [
            make_calls(names, genotypes, chrom_type, payload=i)
            for i, genotypes in enumerate(genotype_lists)
        ]

    return _make


@pytest.fixture
def trio_ped_contents() -> PedFileContents:
    """Unaffected parents with an affected son."""
    return PedFileContents(
        [],
        [
            PedPerson("FAM1", "father", "0", "0", Sex.MALE, Disease.UNAFFECTED),
            PedPerson("FAM1", "mother", "0", "0", Sex.FEMALE, Disease.UNAFFECTED),
            PedPerson("FAM1", "child", "father", "mother", Sex.MALE, Disease.AFFECTED),
        ],
    )


@pytest.fixture
def trio_pedigree(trio_ped_contents) -> Pedigree:
    """Standard trio pedigree."""
    return Pedigree.from_ped_file_contents(trio_ped_contents, "FAM1")


@pytest.fixture
def single_pedigree() -> Pedigree:
    """Pedigree of one affected individual of unknown sex."""
    return Pedigree.construct_single_sample_pedigree("Sample1")


@pytest.fixture
def trio_ped_text() -> str:
    """Trio PED file content with a header line."""
    return (
        "#PEDIGREE\tNAME\tFATHER\tMOTHER\tSEX\tDISEASE\n"
        "FAM1\tfather\t0\t0\t1\t1\n"
        "FAM1\tmother\t0\t0\t2\t1\n"
        "FAM1\tchild\tfather\tmother\t1\t2\n"
    )


@pytest.fixture
def trio_ped_file(tmp_path, trio_ped_text):
    """Trio PED file on disk."""
    path = tmp_path / "trio.ped"
    path.write_text(trio_ped_text)
    return path
