from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import List, Literal, Optional


Recommendation = Literal["approve", "hold", "reject"]

MAX_EXPERIENCES = 5

UNKNOWN_NAME = "Unknown Name"
UNKNOWN_LOCATION = "Location not specified"
UNKNOWN_ROLE = "Role not specified"
UNKNOWN_COMPANY = "Company not specified"

MUST_HAVE_WEIGHT = 3
NICE_TO_HAVE_WEIGHT = 1


class RequirementsSpec(BaseModel):
    """Must-have / nice-to-have skill tokens parsed from a requirements description."""
    model_config = ConfigDict(frozen=True)

    must_have: List[str] = Field(default_factory=list)
    nice_to_have: List[str] = Field(default_factory=list)

    @property
    def all_skills(self) -> List[str]:
        return [*self.must_have, *self.nice_to_have]

    @property
    def max_score(self) -> int:
        return MUST_HAVE_WEIGHT * len(self.must_have) + NICE_TO_HAVE_WEIGHT * len(self.nice_to_have)


class ExperienceEntry(BaseModel):
    """One work-history line item. Period is the raw matched text, e.g. 'Jan 2020 - Present'."""
    model_config = ConfigDict(frozen=True)

    role: str = Field(..., min_length=1)
    company: str = UNKNOWN_COMPANY
    period: str = ""


class ParsedResumeData(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = UNKNOWN_NAME
    location: str = UNKNOWN_LOCATION
    current_role: str = UNKNOWN_ROLE
    current_company: str = UNKNOWN_COMPANY
    experiences: List[ExperienceEntry] = Field(default_factory=list, max_length=MAX_EXPERIENCES)
    skills: List[str] = Field(default_factory=list)  # order-preserving set
    education: List[str] = Field(default_factory=list)

    @field_validator("skills")
    @classmethod
    def _dedupe_skills(cls, v: List[str]) -> List[str]:
        return list(dict.fromkeys(v))


class RequirementsMatch(BaseModel):
    """Outcome of requirements-driven scoring for one resume."""
    model_config = ConfigDict(frozen=True)

    matched_skills: List[str] = Field(default_factory=list)
    missing_skills: List[str] = Field(default_factory=list)
    matched_weight: int = 0
    max_weight: int = 0
    score: float = Field(default=0.0, ge=0.0, le=10.0)


class Candidate(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    location: str
    current_role: str
    current_company: str
    score: float = Field(..., ge=0.0, le=10.0, description="Fit score, one decimal")
    experiences: List[ExperienceEntry] = Field(default_factory=list, max_length=MAX_EXPERIENCES)
    strengths: List[str] = Field(..., min_length=1)
    weaknesses: List[str] = Field(..., min_length=1)
    recommendation: Recommendation


# ---- HTTP request bodies ----

class ResumeTextRequest(BaseModel):
    text: str


class CandidateFromResumeRequest(BaseModel):
    text: str
    id: Optional[str] = None


class MatchRequest(BaseModel):
    """
    Requirements-driven batch request.

    Either requirements_text ("Must Have: ...\\nNice to Have: ...") or the two
    editor fields must_have / nice_to_have may be supplied.
    """
    requirements_text: Optional[str] = None
    must_have: Optional[str] = None
    nice_to_have: Optional[str] = None
    resumes: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _requirements_present(self) -> "MatchRequest":
        if self.requirements_text is None and self.must_have is None and self.nice_to_have is None:
            raise ValueError("Provide requirements_text or must_have/nice_to_have")
        return self


class RecommendationOverrideRequest(BaseModel):
    candidates: List[Candidate]
    candidate_id: str
    recommendation: Recommendation
