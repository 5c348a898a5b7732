"""
Candidate assembly.

Entry points for both scoring modes:

- parse_resume_text() + build_candidate_from_parsed_data(): resume-only mode,
  heuristic score with generated strengths/weaknesses and a score-derived
  recommendation.
- generate_candidates_from_requirements(): requirements-driven batch mode,
  keyword-weight score, matched/missing skills as strengths/weaknesses,
  recommendation left at 'approve' for a reviewer to reassign.

Both modes share the same name/location/experience extractors.
"""

import logging
import uuid
from typing import List, Optional, Sequence

from talentsift.core.education_extractor import extract_education
from talentsift.core.experience_extractor import extract_experiences_from
from talentsift.core.lexicon import Lexicon, get_lexicon
from talentsift.core.location_extractor import extract_location_from
from talentsift.core.name_extractor import extract_name_from
from talentsift.core.schemas import (
    UNKNOWN_COMPANY,
    UNKNOWN_ROLE,
    Candidate,
    ParsedResumeData,
    Recommendation,
)
from talentsift.core.section_segmenter import segment_sections
from talentsift.core.skill_matcher import (
    extract_skills,
    match_requirements,
    parse_requirements,
    score_resume,
)
from talentsift.core.text_normalization import normalize_text

logger = logging.getLogger(__name__)


APPROVE_THRESHOLD = 8.0
HOLD_THRESHOLD = 6.5

MIN_STRENGTHS = 3
MAX_STRENGTHS = 5
MAX_WEAKNESSES = 3

NO_SKILLS_MATCHED = "No skills matched"
NO_SKILLS_MISSING = "None"


def parse_resume_text(raw_text: str, lexicon: Optional[Lexicon] = None) -> ParsedResumeData:
    """Structural extraction of one resume. Never raises; unknown fields carry sentinels."""
    lexicon = lexicon or get_lexicon()
    normalized = normalize_text(raw_text, lexicon)
    doc = segment_sections(normalized)

    experiences = extract_experiences_from(doc, lexicon)
    first = experiences[0] if experiences else None

    data = ParsedResumeData(
        name=extract_name_from(doc, lexicon),
        location=extract_location_from(doc, lexicon),
        current_role=first.role if first else UNKNOWN_ROLE,
        current_company=first.company if first else UNKNOWN_COMPANY,
        experiences=experiences,
        skills=extract_skills(raw_text or "", lexicon),
        education=extract_education(normalized),
    )
    logger.debug(
        f"Parsed resume: name={data.name!r}, location={data.location!r}, "
        f"{len(data.experiences)} experiences, {len(data.skills)} skills"
    )
    return data


def recommend(score: float) -> Recommendation:
    if score >= APPROVE_THRESHOLD:
        return "approve"
    if score >= HOLD_THRESHOLD:
        return "hold"
    return "reject"


def _mentions(text: str, words: Sequence[str]) -> bool:
    low = text.lower()
    return any(w.lower() in low for w in words)


def generate_strengths(data: ParsedResumeData, lexicon: Lexicon) -> List[str]:
    strengths: List[str] = []
    if len(data.experiences) >= 3:
        strengths.append(f"{len(data.experiences)}+ years in relevant roles")
    if any(_mentions(s, lexicon.customer_success_background_markers) for s in data.skills):
        strengths.append("Strong Customer Success background")
    if any(_mentions(e.company, lexicon.notable_employers) for e in data.experiences):
        strengths.append("Experience at leading tech companies")
    if any(_mentions(e.role, lexicon.progression_keywords) for e in data.experiences):
        strengths.append("Demonstrated career progression")

    for generic in lexicon.generic_strengths:
        if len(strengths) >= MIN_STRENGTHS:
            break
        if generic not in strengths:
            strengths.append(generic)
    return strengths[:MAX_STRENGTHS]


def generate_weaknesses(data: ParsedResumeData, lexicon: Lexicon) -> List[str]:
    weaknesses: List[str] = []
    if len(data.experiences) < 2:
        weaknesses.append("Limited work experience")
    if not any(_mentions(e.role, lexicon.customer_success_role_markers) for e in data.experiences):
        weaknesses.append("No direct Customer Success experience")
    if not weaknesses:
        weaknesses.append(lexicon.generic_weakness)
    return weaknesses[:MAX_WEAKNESSES]


def build_candidate_from_parsed_data(
    data: ParsedResumeData,
    candidate_id: Optional[str] = None,
    lexicon: Optional[Lexicon] = None,
) -> Candidate:
    """Resume-only mode. A random id is generated when the caller does not supply one."""
    lexicon = lexicon or get_lexicon()
    score = score_resume(data, lexicon)
    return Candidate(
        id=candidate_id or uuid.uuid4().hex,
        name=data.name,
        location=data.location,
        current_role=data.current_role,
        current_company=data.current_company,
        score=score,
        experiences=data.experiences,
        strengths=generate_strengths(data, lexicon),
        weaknesses=generate_weaknesses(data, lexicon),
        recommendation=recommend(score),
    )


def generate_candidates_from_requirements(
    requirements_text: str,
    resume_texts: Sequence[str],
    lexicon: Optional[Lexicon] = None,
) -> List[Candidate]:
    """
    Requirements-driven batch mode.

    Ids are "1", "2", ... in input order. Scores are pure functions of the
    requirements and the raw resume text.
    """
    lexicon = lexicon or get_lexicon()
    spec = parse_requirements(requirements_text)
    logger.debug(f"Requirements: must_have={spec.must_have}, nice_to_have={spec.nice_to_have}")

    candidates = []
    for idx, text in enumerate(resume_texts):
        data = parse_resume_text(text, lexicon)
        match = match_requirements(spec, text or "")
        candidates.append(Candidate(
            id=str(idx + 1),
            name=data.name,
            location=data.location,
            current_role=data.current_role,
            current_company=data.current_company,
            score=match.score,
            experiences=data.experiences,
            strengths=match.matched_skills or [NO_SKILLS_MATCHED],
            weaknesses=match.missing_skills or [NO_SKILLS_MISSING],
            recommendation="approve",
        ))
    return candidates


def apply_recommendation_override(
    candidates: Sequence[Candidate],
    candidate_id: str,
    recommendation: Recommendation,
) -> List[Candidate]:
    """New list with one candidate's recommendation replaced; unknown ids change nothing."""
    return [
        c.model_copy(update={"recommendation": recommendation}) if c.id == candidate_id else c
        for c in candidates
    ]
