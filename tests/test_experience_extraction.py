"""Tests for experience extraction from resumes."""

from talentsift.core.experience_extractor import (
    DATE_RANGE_RE,
    RELAXED_DATE_RANGE_RE,
    classify_lines,
    experiences_from_document,
    experiences_from_lines,
    experiences_from_section,
    extract_experiences,
    find_experience_section,
    primary_policy,
)
from talentsift.core.lexicon import get_lexicon
from talentsift.core.schemas import MAX_EXPERIENCES, UNKNOWN_COMPANY, ExperienceEntry
from talentsift.core.section_segmenter import SegmentedText


def test_sample_resume_experiences(sample_resume):
    experiences = extract_experiences(sample_resume)

    assert experiences == [
        ExperienceEntry(
            role="Senior Customer Success Manager",
            company="Freshworks Technologies",
            period="Jan 2020 - Present",
        ),
        ExperienceEntry(role="Account Manager", company="Zoho Corp", period="Mar 2016 - Dec 2019"),
    ]


def test_bullets_never_become_roles(sample_resume):
    roles = [e.role for e in extract_experiences(sample_resume)]
    assert not any(r.startswith("•") for r in roles)


class TestDateRanges:

    def test_primary_formats(self):
        for text in ["Jan 2020 - Present", "2018 – 2021", "March 2019 | Dec 2022", "Sept 2015 - Current"]:
            assert DATE_RANGE_RE.search(text), text

    def test_phone_numbers_are_not_dates(self):
        assert DATE_RANGE_RE.search("+1 555-123-4567") is None
        assert DATE_RANGE_RE.search("9876-5432") is None

    def test_relaxed_formats(self):
        assert RELAXED_DATE_RANGE_RE.search("01/2019 to 04/2021")
        assert RELAXED_DATE_RANGE_RE.search("2019 to Present")
        assert DATE_RANGE_RE.search("01/2019 to 04/2021") is None


class TestSection:

    def test_header_priority(self):
        body = "EXPERIENCE\nintro\nWORK EXPERIENCE\nAnalyst"
        assert find_experience_section(body) == "\nAnalyst"

    def test_header_must_be_whole_line(self):
        assert find_experience_section("5 years of experience in SaaS") is None

    def test_same_line_role_and_company(self):
        doc = SegmentedText(body="WORK EXPERIENCE\nProduct Manager | Acme Inc | Jan 2018 - Dec 2019")
        assert experiences_from_section(doc) == [
            ExperienceEntry(role="Product Manager", company="Acme Inc", period="Jan 2018 - Dec 2019"),
        ]

    def test_company_defaults_when_missing(self):
        doc = SegmentedText(body="EXPERIENCE\nRegional Director\n2015 - 2018")
        assert experiences_from_section(doc) == [
            ExperienceEntry(role="Regional Director", company=UNKNOWN_COMPANY, period="2015 - 2018"),
        ]

    def test_no_header_means_no_entries(self):
        doc = SegmentedText(body="Data Analyst\nAcme Solutions\n2019 - 2021")
        assert experiences_from_section(doc) == []


def test_whole_document_fallback_with_relaxed_dates():
    text = "Jane Doe\nData Analyst\nAcme Solutions\n01/2019 to 04/2021"
    assert extract_experiences(text) == [
        ExperienceEntry(role="Data Analyst", company="Acme Solutions", period="01/2019 to 04/2021"),
    ]
    doc = SegmentedText(body=text)
    assert experiences_from_document(doc) == extract_experiences(text)


def test_company_suffix_needs_word_boundary():
    role, company = classify_lines(["Principal Consultant"], primary_policy(get_lexicon()))
    assert role == "Principal Consultant"
    assert company == ""


def test_results_capped():
    blocks = "".join(f"Analyst {i}\nCompany {i} Inc\n{2010 + i} - {2011 + i}\n" for i in range(7))
    experiences = extract_experiences("EXPERIENCE\n" + blocks)

    assert len(experiences) == MAX_EXPERIENCES
    assert [e.role for e in experiences] == [f"Analyst {i}" for i in range(5)]
    assert all(e.role for e in experiences)


class TestFinalFallbacks:

    def test_dash_delimited_line(self):
        doc = SegmentedText(body="Analyst - Acme Corp - 2019")
        assert experiences_from_lines(doc) == [
            ExperienceEntry(role="Analyst", company="Acme Corp", period="2019"),
        ]

    def test_job_title_placeholder(self):
        text = "Jane Doe\nMarketing Coordinator at Acme\nSkills"
        assert extract_experiences(text) == [
            ExperienceEntry(role="Marketing Coordinator at Acme", company="Previous Company", period="Work Experience"),
        ]

    def test_generic_placeholder_for_empty_input(self):
        assert extract_experiences("") == [
            ExperienceEntry(role="Professional Experience", company="Previous Employer", period="Work History"),
        ]

    def test_never_empty(self):
        for text in ["", "x", "lorem ipsum dolor", "• bullet only"]:
            experiences = extract_experiences(text)
            assert 1 <= len(experiences) <= MAX_EXPERIENCES
            assert all(e.role for e in experiences)
