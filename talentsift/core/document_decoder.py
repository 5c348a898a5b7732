"""
Uploaded document -> plain text.

Sits in front of the extraction engine: the engine only ever sees decoded,
newline-delimited text. PDF text-layer only (no OCR).
"""

import logging
from io import BytesIO
from typing import Any, Dict, List

import pdfplumber
from docx import Document

logger = logging.getLogger(__name__)


DOCX_CONTENT_TYPES = {"application/vnd.openxmlformats-officedocument.wordprocessingml.document"}
PDF_CONTENT_TYPES = {"application/pdf"}
TEXT_CONTENT_TYPES = {"text/plain", "text/markdown"}

# Points of vertical drift tolerated within one PDF text line
PDF_LINE_TOLERANCE = 3


class DocumentError(Exception):
    """Base class for document decoding failures."""


class UnsupportedDocumentError(DocumentError):
    pass


class DocumentDecodeError(DocumentError):
    pass


def extract_docx_text(docx_bytes: bytes) -> str:
    """Non-empty paragraph texts joined by newlines."""
    doc = Document(BytesIO(docx_bytes))
    paras = [(p.text or "").strip() for p in doc.paragraphs]
    return "\n".join(t for t in paras if t)


def _page_lines(page: Any) -> str:
    """Words grouped into lines by vertical position, joined with single spaces."""
    words = page.extract_words(x_tolerance=3, y_tolerance=2, use_text_flow=True)
    rows: Dict[int, List[Any]] = {}
    for w in words:
        rows.setdefault(round(w["top"] / PDF_LINE_TOLERANCE), []).append(w)
    return "\n".join(
        " ".join(w["text"] for w in sorted(row, key=lambda w: w["x0"]))
        for _, row in sorted(rows.items())
    )


def extract_pdf_text(pdf_bytes: bytes) -> str:
    """Text layer of every page; pages separated by a blank line."""
    with pdfplumber.open(BytesIO(pdf_bytes)) as pdf:
        pages = [_page_lines(page) for page in pdf.pages]
    return "\n\n".join(p for p in pages if p.strip())


def _is_docx(filename: str, content_type: str) -> bool:
    return filename.endswith(".docx") or content_type in DOCX_CONTENT_TYPES


def _is_pdf(filename: str, content_type: str) -> bool:
    return filename.endswith(".pdf") or content_type in PDF_CONTENT_TYPES


def _is_text(filename: str, content_type: str) -> bool:
    return filename.endswith((".txt", ".md")) or content_type in TEXT_CONTENT_TYPES


def decode_document(raw: bytes, filename: str = "", content_type: str = "") -> str:
    """
    Decode an uploaded resume by file extension or content type.

    Raises:
        UnsupportedDocumentError: not DOCX, PDF or plain text
        DocumentDecodeError: the file could not be read or has no text
    """
    filename = (filename or "").lower()
    content_type = (content_type or "").lower()

    if _is_docx(filename, content_type):
        kind, decoder = "docx", extract_docx_text
    elif _is_pdf(filename, content_type):
        kind, decoder = "pdf", extract_pdf_text
    elif _is_text(filename, content_type):
        kind, decoder = "text", lambda b: b.decode("utf-8", errors="replace")
    else:
        raise UnsupportedDocumentError(f"Unsupported content type: {content_type or filename or 'unknown'}")

    try:
        text = decoder(raw)
    except Exception as exc:
        raise DocumentDecodeError(f"Could not read {kind} file: {exc}") from exc

    if not text.strip():
        if kind == "pdf":
            raise DocumentDecodeError("PDF appears to have no extractable text. OCR is not supported.")
        raise DocumentDecodeError(f"{kind} file has no extractable text.")

    logger.debug(f"Decoded {kind} document {filename!r}: {len(text)} chars")
    return text
