import logging

from fastapi import APIRouter, File, HTTPException, UploadFile

from talentsift.config import get_settings
from talentsift.core.candidate_assembler import parse_resume_text
from talentsift.core.document_decoder import (
    DocumentDecodeError,
    UnsupportedDocumentError,
    decode_document,
)
from talentsift.core.schemas import ParsedResumeData, ResumeTextRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["parse"])


async def read_upload_text(file: UploadFile) -> str:
    """
    Read and decode one uploaded resume, mapping decoder failures to HTTP errors.

    400 empty, 413 over the size limit, 415 unsupported type, 422 unreadable / no text.
    """
    raw = await file.read()
    if not raw:
        raise HTTPException(status_code=400, detail=f"Empty file uploaded: {file.filename or 'unnamed'}.")

    limit_mb = get_settings().max_upload_size_mb
    if len(raw) > limit_mb * 1024 * 1024:
        raise HTTPException(status_code=413, detail=f"File exceeds the {limit_mb} MB upload limit.")

    try:
        return decode_document(raw, file.filename or "", file.content_type or "")
    except UnsupportedDocumentError as exc:
        raise HTTPException(status_code=415, detail=str(exc)) from exc
    except DocumentDecodeError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.post(
    "/parse",
    response_model=ParsedResumeData,
    summary="Parse Resume",
    description="Extract name, location, work history, skills and education from a resume file (DOCX, PDF, or TXT).",
    responses={
        200: {
            "description": "Successfully parsed resume",
            "content": {
                "application/json": {
                    "example": {
                        "name": "Priya Sharma",
                        "location": "Pune, Maharashtra",
                        "current_role": "Senior Customer Success Manager",
                        "current_company": "Freshworks Technologies",
                        "experiences": [
                            {
                                "role": "Senior Customer Success Manager",
                                "company": "Freshworks Technologies",
                                "period": "Jan 2020 - Present"
                            }
                        ],
                        "skills": ["Customer Success", "Salesforce", "SaaS"],
                        "education": ["MBA, Symbiosis Institute of Business Management"]
                    }
                }
            }
        },
        400: {"description": "Empty file uploaded"},
        413: {"description": "File too large"},
        415: {"description": "Unsupported file format"},
        422: {"description": "File has no extractable text"}
    }
)
async def parse_resume(
    file: UploadFile = File(..., description="Resume file (DOCX, PDF, or TXT format)")
):
    """
    Parse a resume file.

    **Supported formats:**
    - DOCX (.docx)
    - PDF (.pdf) - Text-layer extraction only, OCR not supported
    - TXT (.txt, .md)

    Fields that cannot be found carry placeholder values such as
    "Unknown Name" or "Location not specified".
    """
    text = await read_upload_text(file)
    data = parse_resume_text(text)
    logger.info(f"Parsed {file.filename!r}: {len(data.experiences)} experiences")
    return data


@router.post(
    "/parse/text",
    response_model=ParsedResumeData,
    summary="Parse Resume Text",
    description="Same as /parse for resume text that has already been extracted.",
)
def parse_resume_plain_text(payload: ResumeTextRequest):
    return parse_resume_text(payload.text)
