import pytest

from degree_audit_export.text import (
    collapse_repeated_halves,
    deduplicate_repeated_halves,
    normalize,
    slugify,
    strip_boilerplate,
    title_case_words,
)


def test_normalize():
    assert normalize("  Major \n\t Requirements  ") == "Major Requirements"
    assert normalize("a b") == "a b"
    assert normalize("") == ""
    assert normalize(None) == ""


class TestStripBoilerplate:
    def test_complete_phrases(self):
        assert strip_boilerplate("Major Requirements Requirement is complete") == "Major Requirements"
        assert strip_boilerplate("Not complete  Upper Division") == "Upper Division"

    def test_case_insensitive(self):
        assert strip_boilerplate("Writing REQUIREMENT IS COMPLETE") == "Writing"

    def test_in_progress_disclaimer(self):
        text = (
            "Core Courses When the in-progress classes are completed "
            "this requirement should be complete"
        )
        assert strip_boilerplate(text) == "Core Courses"
        text = (
            "Core Courses when the in progress classes are completed "
            "this requirement should be complete"
        )
        assert strip_boilerplate(text) == "Core Courses"

    def test_only_boilerplate(self):
        assert strip_boilerplate("Requirement is complete") == ""


class TestRepeatedHalves:
    def test_doubled_label_dropped(self):
        assert deduplicate_repeated_halves("Software Engineering Software Engineering") == ""

    def test_doubled_label_case_insensitive(self):
        assert deduplicate_repeated_halves("Software Engineering SOFTWARE ENGINEERING") == ""

    def test_single_word_doubled(self):
        assert deduplicate_repeated_halves("Writing Writing") == ""

    @pytest.mark.parametrize(
        "text",
        [
            "Software Engineering",
            "Major Requirements in Computer Science",
            "Writing",
            "A B C A B D",
        ],
    )
    def test_unchanged(self, text):
        assert deduplicate_repeated_halves(text) == text

    def test_collapse_keeps_first_half(self):
        assert collapse_repeated_halves("Computer Networks Computer Networks") == "Computer Networks"
        assert collapse_repeated_halves("Computer Networks") == "Computer Networks"


def test_slugify():
    assert slugify("Major Requirements: Computer Science") == "major_requirements_computer_science"
    assert slugify("Degree in Bachelor of Science") == "degree_in_bachelor_of_science"
    assert len(slugify("x" * 100)) == 64


def test_title_case_words():
    assert title_case_words("fall 2022") == "Fall 2022"
    assert title_case_words("FALL 2022") == "FALL 2022"
