"""Tests for the compound heterozygous checkers."""

import pytest

from mendelcheck.calls import ChromosomeType
from mendelcheck.inheritance.comp_het import (
    Candidate,
    collect_trio_candidates,
    filter_compatible_ar_comp_het,
    filter_compatible_xr_comp_het,
    find_compatible_pairs,
)
from mendelcheck.ped_reader import Disease, Sex
from mendelcheck.pedigree import Pedigree, PedigreeQuery, Person

HET, REF, ALT, UKN = "0/1", "0/0", "1/1", "./."

TRIO = ["father", "mother", "child"]
FAMILY = ["I.1", "I.2", "II.1", "II.2"]
LARGE = ["I.1", "I.2", "II.1", "II.2", "II.3", "III.1", "III.2"]


def run_ar(pedigree, calls):
    return filter_compatible_ar_comp_het(pedigree, PedigreeQuery(pedigree), calls)


class TestSingleSample:

    @pytest.mark.parametrize(
        "genotypes,expected",
        [
            ([HET, HET], 2),
            ([HET, HET, REF], 2),
            ([HET, ALT], 0),
            ([HET, UKN], 0),
            ([HET], 0),
        ],
    )
    def test_singleton(self, single_pedigree, make_calls, genotypes, expected):
        """Two or more het calls are sufficient for a single individual."""
        calls = [make_calls(["Sample1"], [gt]) for gt in genotypes]
        assert len(run_ar(single_pedigree, calls)) == expected


class TestTrio:

    def test_trans_configuration(self, trio_pedigree, make_calls_list):
        """One variant from each parent is compatible."""
        calls = make_calls_list(TRIO, [HET, REF, HET], [REF, HET, HET])
        assert run_ar(trio_pedigree, calls) == calls

    def test_cis_configuration(self, trio_pedigree, make_calls_list):
        """Both variants from the same parent are not compatible."""
        calls = make_calls_list(TRIO, [HET, REF, HET], [HET, REF, HET])
        assert run_ar(trio_pedigree, calls) == []

    def test_result_in_input_order(self, trio_pedigree, make_calls_list):
        """Records are returned in input order regardless of which parent transmitted them."""
        calls = make_calls_list(TRIO, [REF, HET, HET], [REF, REF, REF], [HET, REF, HET])
        assert run_ar(trio_pedigree, calls) == [calls[0], calls[2]]

    def test_missing_parent_genotype(self, trio_pedigree, make_calls_list):
        """A no-call in a parent is not evidence against a pair."""
        calls = make_calls_list(TRIO, [HET, UKN, HET], [REF, HET, HET])
        assert run_ar(trio_pedigree, calls) == calls

    def test_parent_hom_alt(self, trio_pedigree, make_calls_list):
        """A hom. alt parent would be affected."""
        calls = make_calls_list(TRIO, [ALT, REF, HET], [REF, HET, HET])
        assert run_ar(trio_pedigree, calls) == []

    def test_child_not_observed_for_both(self, trio_pedigree, make_calls_list):
        """Pairs not observed in the child at all are skipped."""
        calls = make_calls_list(TRIO, [HET, REF, UKN], [REF, HET, UKN])
        assert run_ar(trio_pedigree, calls) == []

    def test_child_not_observed_for_one(self, trio_pedigree, make_calls_list):
        """A pair observed in the child for one variant is kept."""
        calls = make_calls_list(TRIO, [HET, REF, HET], [REF, HET, UKN])
        assert run_ar(trio_pedigree, calls) == calls

    def test_only_autosomal_records(self, trio_pedigree, make_calls_list):
        calls = make_calls_list(
            TRIO, [HET, REF, HET], [REF, HET, HET], chrom_type=ChromosomeType.X_CHROMOSOMAL
        )
        assert run_ar(trio_pedigree, calls) == []
        pedigree, query = trio_pedigree, PedigreeQuery(trio_pedigree)
        assert filter_compatible_xr_comp_het(pedigree, query, calls) == calls


class TestUnaffectedSibling:

    def test_sibling_compound_het(self, nuclear_family, make_calls_list):
        """An unaffected sister carrying both variants rules the pair out."""
        calls = make_calls_list(FAMILY, [HET, REF, HET, HET], [REF, HET, HET, HET])
        assert run_ar(nuclear_family, calls) == []

    def test_sibling_carrier(self, nuclear_family, make_calls_list):
        """An unaffected sister carrying one variant is compatible."""
        calls = make_calls_list(FAMILY, [HET, REF, HET, HET], [REF, HET, HET, REF])
        assert run_ar(nuclear_family, calls) == calls

    def test_sibling_hom_alt(self, nuclear_family, make_calls_list):
        """An unaffected sister hom. alt for one variant rules the pair out."""
        calls = make_calls_list(FAMILY, [HET, REF, HET, ALT], [REF, HET, HET, REF])
        assert run_ar(nuclear_family, calls) == []

    def test_parents_transmit_opposite_variants(self, nuclear_family, make_calls_list):
        """Mother transmits the first, father the second variant."""
        calls = make_calls_list(FAMILY, [REF, HET, HET, UKN], [HET, REF, HET, REF])
        assert run_ar(nuclear_family, calls) == calls


class TestUnaffectedCousin:
    """Phase check for unaffected relatives who are not siblings of an affected."""

    NAMES = ["father", "mother", "child", "uncle", "aunt", "cousin"]

    @pytest.fixture
    def cousin_family(self):
        """Affected child and an unaffected cousin, each with both parents."""
        return Pedigree(
            "fam",
            [
                Person("father", sex=Sex.MALE, disease=Disease.UNAFFECTED),
                Person("mother", sex=Sex.FEMALE, disease=Disease.UNAFFECTED),
                Person("child", "father", "mother", Sex.MALE, Disease.AFFECTED),
                Person("uncle", sex=Sex.MALE, disease=Disease.UNAFFECTED),
                Person("aunt", sex=Sex.FEMALE, disease=Disease.UNAFFECTED),
                Person("cousin", "uncle", "aunt", Sex.FEMALE, Disease.UNAFFECTED),
            ],
        )

    def test_cousin_in_trans(self, cousin_family, make_calls_list):
        """A cousin whose parents each transmitted one variant rules the pair out."""
        calls = make_calls_list(
            self.NAMES, [HET, REF, HET, HET, REF, HET], [REF, HET, HET, REF, HET, HET]
        )
        assert run_ar(cousin_family, calls) == []

    def test_cousin_parent_not_observed(self, cousin_family, make_calls_list):
        """A parent without a call is no evidence for the cousin's phase."""
        calls = make_calls_list(
            self.NAMES, [HET, REF, HET, HET, REF, HET], [REF, HET, HET, REF, UKN, HET]
        )
        assert run_ar(cousin_family, calls) == calls

    def test_cousin_parent_missing(self, make_calls_list):
        """A cousin with a parent outside the pedigree keeps the pair."""
        pedigree = Pedigree(
            "fam",
            [
                Person("father", sex=Sex.MALE, disease=Disease.UNAFFECTED),
                Person("mother", sex=Sex.FEMALE, disease=Disease.UNAFFECTED),
                Person("child", "father", "mother", Sex.MALE, Disease.AFFECTED),
                Person("uncle", sex=Sex.MALE, disease=Disease.UNAFFECTED),
                Person("cousin", father="uncle", sex=Sex.FEMALE, disease=Disease.UNAFFECTED),
            ],
        )
        names = ["father", "mother", "child", "uncle", "cousin"]
        calls = make_calls_list(names, [HET, REF, HET, HET, HET], [REF, HET, HET, REF, HET])
        assert run_ar(pedigree, calls) == calls

    def test_cousin_cis(self, cousin_family, make_calls_list):
        """Both variants from the same parent of the cousin are compatible."""
        calls = make_calls_list(
            self.NAMES, [HET, REF, HET, HET, REF, HET], [REF, HET, HET, HET, REF, HET]
        )
        assert run_ar(cousin_family, calls) == calls


class TestThreeGenerations:
    """Affected aunt and nephew who inherited the variants via different parents."""

    @pytest.mark.parametrize(
        "first,second,expected",
        [
            (
                [HET, REF, HET, HET, REF, HET, HET],
                [REF, HET, HET, REF, HET, HET, REF],
                2,
            ),
            (
                [HET, REF, HET, HET, REF, HET, UKN],
                [REF, HET, HET, REF, HET, HET, UKN],
                2,
            ),
            (
                [HET, REF, HET, REF, HET, HET, REF],
                [REF, HET, HET, HET, REF, HET, REF],
                2,
            ),
            (
                [HET, REF, HET, HET, REF, HET, HET],
                [REF, HET, HET, REF, HET, HET, HET],
                0,
            ),
        ],
    )
    def test_pairs(self, three_generation_family, make_calls_list, first, second, expected):
        """A pair is rejected only if an affected contradicts it in both orientations."""
        calls = make_calls_list(LARGE, first, second)
        assert len(run_ar(three_generation_family, calls)) == expected

    def test_candidates_from_each_trio(self, three_generation_family, make_calls_list):
        """Each affected with parents contributes its own candidates."""
        calls = make_calls_list(
            LARGE, [HET, REF, HET, REF, HET, HET, REF], [REF, HET, HET, HET, REF, HET, REF]
        )
        candidates = collect_trio_candidates(three_generation_family, calls)
        assert Candidate(calls[0], calls[1]) in candidates
        assert Candidate(calls[1], calls[0]) in candidates


class TestAffectedSiblings:

    def test_without_parents(self, affected_siblings, make_calls_list):
        """Without parents the het variants of each affected are paired."""
        calls = make_calls_list(["sib1", "sib2"], [HET, HET], [HET, HET])
        assert run_ar(affected_siblings, calls) == calls

    def test_sibling_hom_ref(self, affected_siblings, make_calls_list):
        """Every affected must be het for both variants."""
        calls = make_calls_list(["sib1", "sib2"], [HET, HET], [HET, REF])
        assert run_ar(affected_siblings, calls) == []

    def test_pairs_are_distinct(self, make_calls_list):
        """Two affected children of the same parents yield each pair once."""
        pedigree = Pedigree(
            "fam",
            [
                Person("father", sex=Sex.MALE, disease=Disease.UNAFFECTED),
                Person("mother", sex=Sex.FEMALE, disease=Disease.UNAFFECTED),
                Person("kid1", "father", "mother", Sex.MALE, Disease.AFFECTED),
                Person("kid2", "father", "mother", Sex.FEMALE, Disease.AFFECTED),
            ],
        )
        names = ["father", "mother", "kid1", "kid2"]
        calls = make_calls_list(names, [HET, REF, HET, HET], [REF, HET, HET, HET])

        pairs = find_compatible_pairs(pedigree, PedigreeQuery(pedigree), calls)

        assert pairs == [Candidate(calls[0], calls[1])]
