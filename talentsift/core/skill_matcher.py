"""
Skill matching and scoring.

Two independent scoring strategies:

- Requirements-driven: weighted keyword presence against a job's
  "Must Have" (3 points) / "Nice to Have" (1 point) lists, scaled to 0-10.
- Resume-only: a base of 5.0 plus bonuses for experience depth, customer
  success skills, tech/SaaS employers and seniority, clamped to 1-10.
"""

import logging
import math
import re
from functools import lru_cache
from typing import List, Optional, Pattern

from talentsift.core.lexicon import Lexicon, get_lexicon
from talentsift.core.schemas import (
    MUST_HAVE_WEIGHT,
    NICE_TO_HAVE_WEIGHT,
    ParsedResumeData,
    RequirementsMatch,
    RequirementsSpec,
)

logger = logging.getLogger(__name__)


MUST_HAVE_RE = re.compile(r"Must Have:[^\S\n]*([^\n]*)", re.IGNORECASE)
NICE_TO_HAVE_RE = re.compile(r"Nice to Have:[^\S\n]*([^\n]*)", re.IGNORECASE)

MAX_RESUME_SKILLS = 10

BASE_SCORE = 5.0
MIN_SCORE = 1.0
MAX_SCORE = 10.0


def round_score(value: float) -> float:
    """One decimal, halves rounded up (7.25 -> 7.3)."""
    return math.floor(value * 10 + 0.5) / 10


def _split_skills(raw: str) -> List[str]:
    return [s.strip() for s in raw.split(",") if s.strip()]


def parse_requirements(text: str) -> RequirementsSpec:
    """
    Read must-have / nice-to-have skill lists from requirements text.

    Examples:
      "Must Have: Golang, gRPC\\nNice to Have: Microservices"
        -> must_have=["Golang", "gRPC"], nice_to_have=["Microservices"]
      "Nice to Have: Kafka" -> must_have=[], nice_to_have=["Kafka"]
    """
    must = MUST_HAVE_RE.search(text or "")
    nice = NICE_TO_HAVE_RE.search(text or "")
    return RequirementsSpec(
        must_have=_split_skills(must.group(1)) if must else [],
        nice_to_have=_split_skills(nice.group(1)) if nice else [],
    )


def format_requirements_text(must_have: str = "", nice_to_have: str = "") -> str:
    """Compose requirements text from the two editor fields."""
    return f"Must Have: {must_have or ''}\nNice to Have: {nice_to_have or ''}"


@lru_cache(maxsize=1024)
def skill_pattern(skill: str) -> Pattern[str]:
    """
    Case-insensitive pattern for a requirements token.

    Tokens are treated as regular expressions ("Node(\\.js)?"); tokens that do not
    compile ("C++") are matched literally.
    """
    try:
        return re.compile(skill, re.IGNORECASE)
    except re.error:
        logger.debug(f"Skill {skill!r} is not a valid pattern, matching literally")
        return re.compile(re.escape(skill), re.IGNORECASE)


def skill_in_text(skill: str, text: str) -> bool:
    return skill_pattern(skill).search(text) is not None


def match_requirements(spec: RequirementsSpec, resume_text: str) -> RequirementsMatch:
    """
    Weighted presence of requirement tokens in the raw resume text.

    score = matched_weight / max_weight * 10, one decimal; 0.0 when there are no requirements.
    """
    matched_must = [s for s in spec.must_have if skill_in_text(s, resume_text)]
    matched_nice = [s for s in spec.nice_to_have if skill_in_text(s, resume_text)]
    missing = [s for s in spec.all_skills if not skill_in_text(s, resume_text)]

    matched_weight = MUST_HAVE_WEIGHT * len(matched_must) + NICE_TO_HAVE_WEIGHT * len(matched_nice)
    max_weight = spec.max_score
    score = min(round_score(matched_weight / max_weight * 10), MAX_SCORE) if max_weight else 0.0

    return RequirementsMatch(
        matched_skills=matched_must + matched_nice,
        missing_skills=missing,
        matched_weight=matched_weight,
        max_weight=max_weight,
        score=score,
    )


def extract_skills(text: str, lexicon: Optional[Lexicon] = None) -> List[str]:
    """Dictionary skills present in the text (case-insensitive substring), dictionary order, max 10."""
    lexicon = lexicon or get_lexicon()
    low = (text or "").lower()
    return [s for s in lexicon.resume_skills if s.lower() in low][:MAX_RESUME_SKILLS]


def _contains_any(text: str, words) -> bool:
    low = text.lower()
    return any(w.lower() in low for w in words)


def customer_success_skills(skills: List[str], lexicon: Lexicon) -> List[str]:
    return [s for s in skills if _contains_any(s, lexicon.customer_success_markers)]


def score_resume(data: ParsedResumeData, lexicon: Optional[Lexicon] = None) -> float:
    """
    Resume-only heuristic score.

    5.0 base
    + min(0.5 per experience, 2.0)
    + min(0.3 per customer-success skill, 1.5)
    + 0.8 if any role/company mentions a tech/SaaS keyword
    + 0.7 if any role carries a seniority keyword
    clamped to [1.0, 10.0], one decimal.
    """
    lexicon = lexicon or get_lexicon()
    score = BASE_SCORE
    score += min(len(data.experiences) * 0.5, 2.0)
    score += min(len(customer_success_skills(data.skills, lexicon)) * 0.3, 1.5)

    if any(_contains_any(f"{e.company} {e.role}", lexicon.tech_keywords) for e in data.experiences):
        score += 0.8
    if any(_contains_any(e.role, lexicon.seniority_keywords) for e in data.experiences):
        score += 0.7

    return round_score(max(MIN_SCORE, min(MAX_SCORE, score)))
