"""Tests for the candidate name cascade, tier by tier."""

import pytest
from talentsift.core.name_extractor import (
    extract_name,
    name_from_careful_line_scan,
    name_from_first_lines,
    name_from_global_patterns,
    name_from_labeled_header,
    name_from_token_window,
)
from talentsift.core.schemas import UNKNOWN_NAME
from talentsift.core.section_segmenter import SegmentedText


def test_name_on_first_line_followed_by_contacts():
    text = "Hari Babu Kariprolu\nhari.babu@example.com\n+91 98765 43210\nHyderabad, Telangana"
    assert extract_name(text) == "Hari Babu Kariprolu"


def test_sample_resume_name(sample_resume):
    assert extract_name(sample_resume) == "Priya Sharma"


def test_compact_camel_case_name():
    assert extract_name("KomalWadhwani\nkomal@example.com") == "KomalWadhwani"


def test_name_inside_summary_is_not_used():
    text = "Summary\nWorked closely with John Smith on renewals.\n\njane@example.com"
    assert extract_name(text) == UNKNOWN_NAME


@pytest.mark.parametrize("text", ["", "   ", "1234 5678\n@@@", "\n\n\n"])
def test_unknown_name_sentinel(text):
    assert extract_name(text) == UNKNOWN_NAME


class TestFirstLines:

    def test_skips_contact_lines(self):
        doc = SegmentedText(body="komal@example.com\nhttps://linkedin.com/in/x\nJane Doe")
        assert name_from_first_lines(doc) == "Jane Doe"

    def test_skips_resume_banner(self):
        doc = SegmentedText(body="Resume Of\nJane Doe")
        assert name_from_first_lines(doc) == "Jane Doe"

    def test_only_first_five_lines(self):
        doc = SegmentedText(body="a1\nb2\nc3\nd4\ne5\nJane Doe")
        assert name_from_first_lines(doc) is None


class TestGlobalPatterns:

    def test_all_caps_name(self):
        doc = SegmentedText(body="RESUME\nSAI DIVYA KANTA\nsai@example.com")
        assert name_from_first_lines(doc) is None
        assert name_from_global_patterns(doc) == "SAI DIVYA KANTA"

    def test_rejects_names_only_in_summary(self):
        doc = SegmentedText(
            body="Worked alongside John Smith on renewals",
            removed_summary="John Smith mentored me",
        )
        assert name_from_global_patterns(doc) is None

    def test_rejects_skill_phrases(self):
        doc = SegmentedText(body="Customer Success\nAccount Management")
        assert name_from_global_patterns(doc) is None

    def test_rejects_section_headers(self):
        doc = SegmentedText(body="WORK EXPERIENCE\nEDUCATION DETAILS")
        assert name_from_global_patterns(doc) is None


class TestCarefulLineScan:

    def test_accepts_non_ascii_name(self):
        doc = SegmentedText(body="Objective: grow\nMaria José Fernandes\nmaria@example.com")
        assert name_from_careful_line_scan(doc) == "Maria José Fernandes"

    def test_falls_through_to_careful_scan(self):
        assert extract_name("Maria José Fernandes\nmaria@example.com") == "Maria José Fernandes"

    def test_skips_digits_bullets_and_colons(self):
        doc = SegmentedText(body="2020 Annual Report\n• Key Accounts\nPhone: 555\nEmail Me")
        assert name_from_careful_line_scan(doc) is None


class TestLabeledHeader:

    def test_label_value(self):
        doc = SegmentedText(body="Candidate: dr. ana lima\nana@example.com")
        assert name_from_labeled_header(doc) == "dr. ana lima"

    def test_value_too_short(self):
        doc = SegmentedText(body="Name: X\nsomething")
        assert name_from_labeled_header(doc) is None


class TestTokenWindow:

    def test_camel_token(self):
        doc = SegmentedText(body="worked with PriyaSharma daily")
        assert name_from_token_window(doc) == "PriyaSharma"

    def test_three_caps_window(self):
        doc = SegmentedText(body="contact: SAI DIVYA KANTA, ops")
        assert name_from_token_window(doc) is None
        doc = SegmentedText(body="contact SAI DIVYA KANTA ops")
        assert name_from_token_window(doc) == "SAI DIVYA KANTA"

    def test_nothing_name_shaped(self):
        doc = SegmentedText(body="managed 40 accounts across apac")
        assert name_from_token_window(doc) is None
