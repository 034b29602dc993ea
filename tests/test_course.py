"""Tests für Kurskatalog und Bitmasken-Codec."""

from itertools import combinations

import pytest
from pydantic import ValidationError

from models.course import (
    CATALOGUE_MASK,
    COURSE_CATALOGUE,
    CourseId,
    CourseSelection,
    course_by_code,
    course_by_label,
    course_label,
    decode,
    encode,
    select_options,
    selected_labels,
)


def _all_subsets() -> list[set[CourseId]]:
    ids = [c.id for c in COURSE_CATALOGUE]
    return [set(combo) for r in range(len(ids) + 1) for combo in combinations(ids, r)]


class TestCatalogue:
    def test_seven_courses(self):
        assert len(COURSE_CATALOGUE) == 7

    def test_bits_are_explicit_powers_of_two(self):
        codes = [c.code for c in COURSE_CATALOGUE]
        assert codes == [1, 2, 4, 8, 16, 32, 64]
        assert len(set(codes)) == len(codes)

    def test_bit_mapping_is_by_id_not_position(self):
        assert course_by_code(4).id == CourseId.OPERATING_SYSTEM
        assert course_by_code(64).id == CourseId.BIG_DATA_ANALYSIS

    def test_catalogue_mask(self):
        assert CATALOGUE_MASK == 127

    def test_every_id_in_catalogue(self):
        assert {c.id for c in COURSE_CATALOGUE} == set(CourseId)


class TestCodec:
    def test_empty_selection_is_zero(self):
        assert encode(set()) == 0
        assert decode(0) == set()

    def test_encode_sums_bits(self):
        assert encode({CourseId.SOFTWARE_ENGINEERING, CourseId.OPERATING_SYSTEM}) == 5

    def test_encode_accepts_string_values(self):
        assert encode(["neural_network"]) == 32

    def test_round_trip_all_subsets(self):
        subsets = _all_subsets()
        assert len(subsets) == 128
        for s in subsets:
            assert decode(encode(s)) == s

    def test_foreign_bit_ignored(self):
        for s in _all_subsets():
            assert decode(encode(s) | 128) == s

    def test_foreign_bits_not_round_tripped(self):
        assert encode(decode(128 | 3)) == 3

    def test_decode_full_mask(self):
        assert decode(127) == set(CourseId)


class TestLookups:
    def test_course_label(self):
        assert course_label(CourseId.NEURAL_NETWORK) == "Neuronale Netze"

    def test_course_label_unknown_passthrough(self):
        assert course_label("chemie") == "chemie"

    def test_course_by_label(self):
        assert course_by_label("Betriebssysteme").code == 4
        assert course_by_label("Unbekannt") is None

    def test_course_by_code_requires_exact_bit(self):
        assert course_by_code(3) is None

    def test_selected_labels_in_catalogue_order(self):
        assert selected_labels(64 | 1) == ["Software Engineering", "Big-Data-Analyse"]

    def test_select_options(self):
        options = select_options()
        assert options[0] == {
            "label": "Software Engineering",
            "value": "software_engineering",
            "title": "Software-Lebenszyklus, Projektmanagement",
        }
        assert len(options) == 7


class TestCourseSelection:
    def test_from_courses(self):
        sel = CourseSelection.from_courses([CourseId.AI_INTRODUCTION])
        assert sel.mask == 8
        assert sel.courses == {CourseId.AI_INTRODUCTION}

    def test_negative_mask_rejected(self):
        with pytest.raises(ValidationError):
            CourseSelection(mask=-1)

    def test_is_empty_with_only_foreign_bits(self):
        assert CourseSelection(mask=256).is_empty
