"""
Pedigree structure for Mendelian inheritance checking.

A Pedigree is an ordered, immutable list of Person records. Parent links are
stored as member names and resolved through the pedigree, so the structure
stays flat and serializable; since a parent must be a member of the pedigree
to be linked, the relationships always form a directed acyclic graph.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import cached_property
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, NamedTuple, Optional, Set, Tuple

from .exceptions import PedParseError
from .ped_reader import MISSING_PARENT, Disease, PedFileContents, Sex

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Person:
    """
    Member of a pedigree.

    Fields
    ------
    name : str
        Unique name of the individual within the pedigree
    father, mother : str or None
        Names of the parents, None when not part of the pedigree
    sex : Sex
    disease : Disease
    extra_fields : tuple of str
        Free-form fields from the extra PED columns
    """

    name: str
    father: Optional[str] = None
    mother: Optional[str] = None
    sex: Sex = Sex.UNKNOWN
    disease: Disease = Disease.UNKNOWN
    extra_fields: Tuple[str, ...] = ()

    @property
    def is_male(self) -> bool:
        return self.sex == Sex.MALE

    @property
    def is_female(self) -> bool:
        return self.sex == Sex.FEMALE

    @property
    def is_affected(self) -> bool:
        return self.disease == Disease.AFFECTED

    @property
    def is_unaffected(self) -> bool:
        return self.disease == Disease.UNAFFECTED

    @property
    def is_founder(self) -> bool:
        return self.father is None and self.mother is None


class IndexedPerson(NamedTuple):
    """A pedigree member together with its position in the member list."""

    idx: int
    person: Person


class Pedigree:
    """
    Named family with an ordered list of members.

    The member order is stable; the position of a member is its sample index.
    """

    def __init__(self, name: str, members: Iterable[Person]):
        self.name = name
        self.members: Tuple[Person, ...] = tuple(members)
        name_to_member: Dict[str, IndexedPerson] = {}
        for idx, person in enumerate(self.members):
            if person.name in name_to_member:
                raise PedParseError(f"Duplicate member {person.name} in pedigree {name}")
            name_to_member[person.name] = IndexedPerson(idx, person)
        self.name_to_member: Mapping[str, IndexedPerson] = MappingProxyType(name_to_member)

    @classmethod
    def from_ped_file_contents(cls, contents: PedFileContents, pedigree_name: str) -> "Pedigree":
        """Build the pedigree ``pedigree_name`` from parsed PED contents."""
        return cls(pedigree_name, extract_pedigree(contents, pedigree_name))

    @classmethod
    def construct_single_sample_pedigree(cls, sample_name: str) -> "Pedigree":
        """Build a pedigree of one affected individual of unknown sex."""
        person = Person(sample_name, None, None, Sex.UNKNOWN, Disease.AFFECTED)
        return cls("pedigree", [person])

    @staticmethod
    def pedigree_names(contents: PedFileContents) -> List[str]:
        """Return the names of all pedigrees in ``contents``, in file order."""
        return contents.pedigree_names

    @property
    def n_members(self) -> int:
        return len(self.members)

    @property
    def names(self) -> List[str]:
        return [person.name for person in self.members]

    def has_person(self, name: str) -> bool:
        return name in self.name_to_member

    def get_person(self, name: Optional[str]) -> Optional[Person]:
        entry = self.name_to_member.get(name) if name is not None else None
        return entry.person if entry is not None else None

    def father_of(self, person: Person) -> Optional[Person]:
        return self.get_person(person.father)

    def mother_of(self, person: Person) -> Optional[Person]:
        return self.get_person(person.mother)

    def subset_of_members(self, names: Iterable[str]) -> "Pedigree":
        """
        Return a pedigree restricted to ``names``.

        Parent links to individuals that are not retained are removed.
        """
        names = list(names)
        keep = set(names)
        members = []
        for name in names:
            person = self.get_person(name)
            if person is None:
                continue
            members.append(
                Person(
                    person.name,
                    person.father if person.father in keep else None,
                    person.mother if person.mother in keep else None,
                    person.sex,
                    person.disease,
                    person.extra_fields,
                )
            )
        return Pedigree(self.name, members)

    def __repr__(self) -> str:
        return f"Pedigree(name={self.name!r}, members={list(self.members)!r})"


def extract_pedigree(contents: PedFileContents, name: str) -> List[Person]:
    """
    Extract the members of one pedigree from PED contents.

    Every father and mother reference in the whole file must name a known
    individual, otherwise the file is rejected. Parent references that point
    to an individual of another pedigree are not linked.

    Parameters
    ----------
    contents : PedFileContents
        Parsed PED file
    name : str
        Name of the pedigree to extract

    Returns
    -------
    list of Person
        Members of the pedigree, in file order

    Raises
    ------
    PedParseError
        On unknown parent identifiers, duplicate names within the pedigree or
        if the pedigree does not exist
    """
    for ped_person in contents.individuals:
        if ped_person.father != MISSING_PARENT and ped_person.father not in contents.name_to_person:
            raise PedParseError(f"Unknown individual identifier for father: {ped_person.father}")
        if ped_person.mother != MISSING_PARENT and ped_person.mother not in contents.name_to_person:
            raise PedParseError(f"Unknown individual identifier for mother: {ped_person.mother}")

    selected = [p for p in contents.individuals if p.pedigree == name]
    if not selected:
        raise PedParseError(f"No individuals found for pedigree {name}")

    member_names: Set[str] = set()
    for ped_person in selected:
        if ped_person.name in member_names:
            raise PedParseError(f"Duplicate individual {ped_person.name} in pedigree {name}")
        member_names.add(ped_person.name)

    def link(parent: str, child: str) -> Optional[str]:
        if parent == MISSING_PARENT:
            return None
        if parent not in member_names:
            logger.warning(
                f"Parent {parent} of {child} is not part of pedigree {name}; link dropped"
            )
            return None
        return parent

    persons = [
        Person(
            p.name,
            link(p.father, p.name),
            link(p.mother, p.name),
            p.sex,
            p.disease,
            tuple(p.extra_fields),
        )
        for p in selected
    ]
    logger.debug(f"Extracted pedigree {name} with {len(persons)} members")
    return persons


class PedigreeQuery:
    """Derived queries on a pedigree (parents, affected/unaffected sets, siblings)."""

    def __init__(self, pedigree: Pedigree):
        self.pedigree = pedigree

    def _parents_of(self, person: Person) -> List[Person]:
        return [
            parent
            for parent in (self.pedigree.father_of(person), self.pedigree.mother_of(person))
            if parent is not None
        ]

    def is_parent_of_affected(self, person: Person) -> bool:
        return any(
            person in self._parents_of(member)
            for member in self.pedigree.members
            if member.is_affected
        )

    def affected_names(self) -> Set[str]:
        return {member.name for member in self.pedigree.members if member.is_affected}

    def unaffected_names(self) -> Set[str]:
        return {member.name for member in self.pedigree.members if member.is_unaffected}

    def parent_names(self) -> Set[str]:
        names = set()
        for member in self.pedigree.members:
            names.update(parent.name for parent in self._parents_of(member))
        return names

    def affected_female_parent_names(self) -> Set[str]:
        """Names of the parents of affected females."""
        names = set()
        for member in self.pedigree.members:
            if member.is_affected and member.is_female:
                names.update(parent.name for parent in self._parents_of(member))
        return names

    def affected_male_parent_names(self) -> Set[str]:
        """Names of the parents of affected males."""
        names = set()
        for member in self.pedigree.members:
            if member.is_affected and member.is_male:
                names.update(parent.name for parent in self._parents_of(member))
        return names

    def unaffected_parent_names_of_affecteds(self) -> Set[str]:
        """Names of unaffected parents of affected individuals (obligate carriers)."""
        names = set()
        for member in self.pedigree.members:
            if member.is_affected:
                names.update(
                    parent.name for parent in self._parents_of(member) if parent.is_unaffected
                )
        return names

    def parents(self) -> List[Person]:
        """Members that are a parent of another member, in member order."""
        parent_names = self.parent_names()
        return [member for member in self.pedigree.members if member.name in parent_names]

    def number_of_parents(self) -> int:
        return len(self.parent_names())

    def number_of_affecteds(self) -> int:
        return sum(1 for member in self.pedigree.members if member.is_affected)

    def number_of_unaffecteds(self) -> int:
        return sum(1 for member in self.pedigree.members if member.is_unaffected)

    @cached_property
    def siblings(self) -> Dict[str, List[Person]]:
        """
        Full siblings of each member with both parents in the pedigree.

        Returns
        -------
        dict
            Member name to the other members sharing both father and mother
        """
        result: Dict[str, List[Person]] = {}
        for p1 in self.pedigree.members:
            father, mother = self.pedigree.father_of(p1), self.pedigree.mother_of(p1)
            if father is None or mother is None:
                continue
            result[p1.name] = [
                p2
                for p2 in self.pedigree.members
                if p2.name != p1.name and p2.father == father.name and p2.mother == mother.name
            ]
        return result

    def maternal_founder_name(self, person: Person) -> str:
        """Name of the earliest known ancestor along the maternal line of ``person``."""
        current = person
        seen = {person.name}
        mother = self.pedigree.mother_of(current)
        while mother is not None and mother.name not in seen:
            seen.add(mother.name)
            current = mother
            mother = self.pedigree.mother_of(current)
        return current.name
