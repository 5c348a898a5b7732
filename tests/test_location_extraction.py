"""Tests for the location cascade."""

from talentsift.core.location_extractor import (
    extract_location,
    location_from_city_state,
    location_from_first_lines,
    location_from_header,
    location_from_international_pattern,
    location_from_known_cities,
)
from talentsift.core.schemas import UNKNOWN_LOCATION
from talentsift.core.section_segmenter import SegmentedText


def test_sample_resume_location(sample_resume):
    assert extract_location(sample_resume) == "Pune, Maharashtra"


def test_header_wins():
    assert extract_location("Jane Doe\nLocation: Pune, Maharashtra") == "Pune, Maharashtra"


def test_sentinel_when_nothing_found():
    assert extract_location("jane@example.com") == UNKNOWN_LOCATION
    assert extract_location("") == UNKNOWN_LOCATION


def test_headline_under_name_is_not_a_location():
    text = "Jane Doe\nSoftware Engineer, Google\njane@x.com\n\nEXPERIENCE\nEngineer\nGoogle LLC\n2019 - 2021"
    assert extract_location(text) == UNKNOWN_LOCATION


class TestHeader:

    def test_based_in(self):
        doc = SegmentedText(body="Based in: Chennai")
        assert location_from_header(doc) == "Chennai"

    def test_rejects_narrative(self):
        doc = SegmentedText(body="Location: open to relocation, 5 years experience")
        assert location_from_header(doc) is None

    def test_rejects_overlong(self):
        doc = SegmentedText(body="Address: " + "x" * 120)
        assert location_from_header(doc) is None


class TestFirstLines:

    def test_gazetteer_city_line(self):
        doc = SegmentedText(body="Jane Doe\nBangalore\njane@example.com")
        assert location_from_first_lines(doc) == "Bangalore"

    def test_city_region_country(self):
        doc = SegmentedText(body="Hari Babu Kariprolu\nHyderabad, Telangana, India")
        assert location_from_first_lines(doc) == "Hyderabad, Telangana, India"

    def test_skips_company_lines(self):
        doc = SegmentedText(body="Senior Manager, Acme Company\nAustin, Texas")
        assert location_from_first_lines(doc) == "Austin, Texas"

    def test_name_line_is_not_a_location(self):
        doc = SegmentedText(body="Hari Babu Kariprolu\nhari@example.com")
        assert location_from_first_lines(doc) is None

    def test_skill_pairs_rejected(self):
        doc = SegmentedText(body="Customer Success, Account Management")
        assert location_from_first_lines(doc) is None

    def test_known_city_without_comma(self):
        doc = SegmentedText(body="Jane Doe\nPune Maharashtra 411001")
        assert location_from_first_lines(doc) == "Pune Maharashtra"

    def test_title_employer_headline_rejected(self):
        doc = SegmentedText(body="Jane Doe\nSoftware Engineer, Google\njane@x.com")
        assert location_from_first_lines(doc) is None


class TestCityState:

    def test_city_state_zip(self):
        doc = SegmentedText(body="Jane Doe\nAustin, TX 78701")
        assert location_from_city_state(doc) == "Austin, TX"

    def test_context_excludes_company(self):
        doc = SegmentedText(body="Company: Dallas, TX")
        assert location_from_city_state(doc) is None


class TestInternational:

    def test_city_country(self):
        doc = SegmentedText(body="Relocating from Berlin, Germany next year")
        assert location_from_international_pattern(doc) == "Berlin, Germany"

    def test_university_excluded(self):
        doc = SegmentedText(body="Stanford University, California")
        assert location_from_international_pattern(doc) is None


class TestKnownCities:

    def test_city_mentioned(self):
        doc = SegmentedText(body="open to roles in the Seattle area")
        assert location_from_known_cities(doc) == "Seattle"

    def test_employer_context_excluded(self):
        doc = SegmentedText(body="worked at Seattle Technologies")
        assert location_from_known_cities(doc) is None
