"""
PED file reader and writer for pedigree information.

This module parses the standard pedigree format used in genetic analysis to
define family relationships. Each line describes one individual with at least
six whitespace-separated columns::

    pedigree  name  father  mother  sex  disease  [extra ...]

Sex is encoded as 1=male, 2=female, 0=unknown and disease status as
0=unknown, 1=unaffected, 2=affected. A missing parent is written as ``0``.
An optional first line starting with ``#`` names the columns; the names of
columns past the sixth are kept as extra column headers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Tuple, Union

import pandas as pd

from .exceptions import PedParseError

logger = logging.getLogger(__name__)

PED_HEADER = ["#PEDIGREE", "NAME", "FATHER", "MOTHER", "SEX", "DISEASE"]

# Parent identifiers meaning "not in the pedigree"
MISSING_PARENT = "0"
_MISSING_PARENT_TOKENS = {"0", "."}


class Sex(Enum):
    """Sex of an individual as encoded in PED files."""

    UNKNOWN = 0
    MALE = 1
    FEMALE = 2

    def to_int(self) -> int:
        return self.value

    @classmethod
    def from_ped(cls, value: str) -> "Sex":
        try:
            return cls(int(value))
        except ValueError:
            raise PedParseError(f"Invalid PED sex value: {value}") from None


class Disease(Enum):
    """Disease status of an individual as encoded in PED files."""

    UNKNOWN = 0
    UNAFFECTED = 1
    AFFECTED = 2

    def to_int(self) -> int:
        return self.value

    @classmethod
    def from_ped(cls, value: str) -> "Disease":
        try:
            return cls(int(value))
        except ValueError:
            raise PedParseError(f"Invalid PED disease status value: {value}") from None


@dataclass(frozen=True)
class PedPerson:
    """One line of a PED file; parents are referenced by name, "0" if missing."""

    pedigree: str
    name: str
    father: str = MISSING_PARENT
    mother: str = MISSING_PARENT
    sex: Sex = Sex.UNKNOWN
    disease: Disease = Disease.UNKNOWN
    extra_fields: Tuple[str, ...] = ()

    @property
    def is_founder(self) -> bool:
        return self.father == MISSING_PARENT and self.mother == MISSING_PARENT


@dataclass
class PedFileContents:
    """
    Contents of a PED file.

    Fields
    ------
    extra_column_headers : list of str
        Names of the columns past the sixth, from the header line
    individuals : list of PedPerson
        All individuals, in file order
    """

    extra_column_headers: List[str] = field(default_factory=list)
    individuals: List[PedPerson] = field(default_factory=list)

    def __post_init__(self):
        self.extra_column_headers = list(self.extra_column_headers)
        self.individuals = list(self.individuals)
        self.name_to_person: Dict[str, PedPerson] = {p.name: p for p in self.individuals}

    @property
    def pedigree_names(self) -> List[str]:
        """Pedigree names in order of first appearance."""
        return list(dict.fromkeys(p.pedigree for p in self.individuals))


def _parse_header(line: str) -> List[str]:
    return line.strip()[1:].split("\t")[6:]


def _parse_parent(value: str) -> str:
    return MISSING_PARENT if value in _MISSING_PARENT_TOKENS else value


def read_ped_text(text: str) -> PedFileContents:
    """
    Parse PED content from a string.

    Parameters
    ----------
    text : str
        PED file content

    Returns
    -------
    PedFileContents
        Extra column headers and all individuals of the file

    Raises
    ------
    PedParseError
        If the content is empty, a line has fewer than six fields, or a sex
        or disease code is invalid
    """
    lines = text.splitlines()
    extra_headers: List[str] = []
    if lines and lines[0].startswith("#"):
        extra_headers = _parse_header(lines[0])
        lines = lines[1:]

    records = [line.strip() for line in lines if line.strip()]
    if not records:
        raise PedParseError("PED file is empty")

    # One column per whitespace-separated field; short rows are padded with None
    ped_df = pd.Series(records, dtype=str).str.split(expand=True)
    n_fields = ped_df.notna().sum(axis=1).tolist()
    ped_df = ped_df.fillna("")

    individuals = []
    rows = ped_df.itertuples(index=False, name=None)
    for record, count, row in zip(records, n_fields, rows):
        if count < 6:
            raise PedParseError("Insufficient number of fields in line", record)
        pedigree, name, father, mother, sex, disease = row[:6]
        extra_fields = tuple(value for value in row[6:] if value != "")
        try:
            individuals.append(
                PedPerson(
                    pedigree=pedigree,
                    name=name,
                    father=_parse_parent(father),
                    mother=_parse_parent(mother),
                    sex=Sex.from_ped(sex),
                    disease=Disease.from_ped(disease),
                    extra_fields=extra_fields,
                )
            )
        except PedParseError as e:
            raise PedParseError(str(e), record) from None

    logger.debug(f"Parsed {len(individuals)} individuals from PED content")
    return PedFileContents(extra_headers, individuals)


def read_ped_file(file_path: Union[str, Path]) -> PedFileContents:
    """
    Parse a PED file.

    Parameters
    ----------
    file_path : str or Path
        Path to the PED file

    Returns
    -------
    PedFileContents
        Extra column headers and all individuals of the file

    Raises
    ------
    PedParseError
        If the PED file is invalid or cannot be parsed
    """
    with open(file_path, "r", encoding="utf-8") as f:
        contents = read_ped_text(f.read())
    logger.info(
        f"Successfully parsed PED file {file_path} with {len(contents.individuals)} individuals "
        f"in {len(contents.pedigree_names)} pedigree(s)"
    )
    return contents


def ped_contents_to_dataframe(contents: PedFileContents) -> pd.DataFrame:
    """Render PED contents as a DataFrame with the PED header as column names."""
    extra_headers = list(contents.extra_column_headers)
    n_extra = max([len(extra_headers)] + [len(p.extra_fields) for p in contents.individuals])
    extra_headers += [f"EXTRA{i + 1}" for i in range(len(extra_headers), n_extra)]

    rows = []
    for person in contents.individuals:
        extra = list(person.extra_fields) + [""] * (n_extra - len(person.extra_fields))
        rows.append(
            [
                person.pedigree,
                person.name,
                person.father,
                person.mother,
                str(person.sex.to_int()),
                str(person.disease.to_int()),
            ]
            + extra
        )
    return pd.DataFrame(rows, columns=PED_HEADER + extra_headers)


def write_ped_file(contents: PedFileContents, file_path: Union[str, Path]) -> None:
    """
    Write PED contents to a tab-separated file with a ``#`` header line.

    Parameters
    ----------
    contents : PedFileContents
        Individuals to write
    file_path : str or Path
        Output path
    """
    ped_df = ped_contents_to_dataframe(contents)
    ped_df.to_csv(file_path, sep="\t", index=False, lineterminator="\n")
    logger.debug(f"Wrote {len(ped_df)} individuals to {file_path}")

