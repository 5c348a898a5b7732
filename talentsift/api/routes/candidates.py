import logging
from typing import List

from fastapi import APIRouter, File, Form, HTTPException, UploadFile

from talentsift.api.routes.parse import read_upload_text
from talentsift.config import get_settings
from talentsift.core.candidate_assembler import (
    apply_recommendation_override,
    build_candidate_from_parsed_data,
    generate_candidates_from_requirements,
    parse_resume_text,
)
from talentsift.core.schemas import (
    Candidate,
    CandidateFromResumeRequest,
    MatchRequest,
    RecommendationOverrideRequest,
)
from talentsift.core.skill_matcher import format_requirements_text

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/candidates", tags=["candidates"])


def _check_batch_size(count: int) -> None:
    limit = get_settings().max_batch_size
    if count > limit:
        raise HTTPException(status_code=413, detail=f"Batch of {count} resumes exceeds the limit of {limit}.")


@router.post(
    "/from-resume",
    response_model=Candidate,
    summary="Score Resume",
    description="Resume-only mode: heuristic score, strengths, weaknesses and an approve/hold/reject recommendation.",
)
def candidate_from_resume(payload: CandidateFromResumeRequest):
    data = parse_resume_text(payload.text)
    candidate = build_candidate_from_parsed_data(data, candidate_id=payload.id)
    logger.info(f"Scored resume for {candidate.name!r}: {candidate.score} ({candidate.recommendation})")
    return candidate


@router.post(
    "/match",
    response_model=List[Candidate],
    summary="Match Resumes to Requirements",
    description=(
        "Requirements-driven mode. Each must-have skill found in a resume scores 3, each "
        "nice-to-have 1; the score is the matched share scaled to 0-10. Ids follow input order."
    ),
)
def match_candidates(payload: MatchRequest):
    _check_batch_size(len(payload.resumes))
    requirements = payload.requirements_text
    if requirements is None:
        requirements = format_requirements_text(payload.must_have or "", payload.nice_to_have or "")
    candidates = generate_candidates_from_requirements(requirements, payload.resumes)
    logger.info(f"Matched {len(candidates)} resumes against requirements")
    return candidates


@router.post(
    "/match/files",
    response_model=List[Candidate],
    summary="Match Uploaded Resumes to Requirements",
    description="Same as /candidates/match for uploaded DOCX, PDF or TXT files, scored in upload order.",
    responses={
        400: {"description": "Empty file uploaded"},
        413: {"description": "File or batch too large"},
        415: {"description": "Unsupported file format"},
        422: {"description": "File has no extractable text"}
    }
)
async def match_candidate_files(
    must_have: str = Form("", description="Comma-separated must-have skills"),
    nice_to_have: str = Form("", description="Comma-separated nice-to-have skills"),
    files: List[UploadFile] = File(..., description="Resume files"),
):
    _check_batch_size(len(files))
    texts = [await read_upload_text(f) for f in files]
    candidates = generate_candidates_from_requirements(
        format_requirements_text(must_have, nice_to_have), texts
    )
    logger.info(f"Matched {len(candidates)} uploaded resumes against requirements")
    return candidates


@router.post(
    "/recommendation",
    response_model=List[Candidate],
    summary="Override Recommendation",
    description="Return the candidate list with one candidate's recommendation replaced by a reviewer's decision.",
)
def override_recommendation(payload: RecommendationOverrideRequest):
    return apply_recommendation_override(payload.candidates, payload.candidate_id, payload.recommendation)
