"""
Summary/objective section excision.

Narrative summary prose ("A highly motivated professional with 8 years of
experience...") is the largest source of false-positive names and locations,
so it is cut out of the body before the extractors run. The removed text is
kept so extractors can reject candidates that only occur inside it.
"""

import re
from dataclasses import dataclass
from typing import List, Optional

from talentsift.core.lexicon import Lexicon
from talentsift.core.text_normalization import non_empty_lines, normalize_text


# A summary block ends after a line closing a sentence, at a blank line, at the next
# section header line, or at end of text. Header lines are ALL-CAPS lines or a known
# section title (case-sensitive on the capital).
_SECTION_END = (
    r"(?="
    r"(?<=[.!?])\n"
    r"|\n[^\S\n]*\n"
    r"|\n(?-i:[A-Z][A-Z&/ ]{2,}):?[^\S\n]*(?:\n|\Z)"
    r"|\n(?-i:(?:Professional |Work )?Experience|Employment(?: History)?|Career History"
    r"|Education|(?:Technical |Key )?Skills|Projects|Certifications)[^\S\n]*:?[^\S\n]*(?:\n|\Z)"
    r"|\Z)"
)

SUMMARY_PATTERNS = [
    re.compile(
        r"^[^\S\n]*(?:profile summary|professional summary|career objective|summary|objective)(?![-\w])"
        r"[\s\S]*?" + _SECTION_END,
        re.IGNORECASE | re.MULTILINE,
    ),
    re.compile(
        r"^[^\S\n]*A\s+(?:highly\s+)?(?:motivated|experienced|skilled|dedicated|results-driven)\b"
        r"[\s\S]*?" + _SECTION_END,
        re.IGNORECASE | re.MULTILINE,
    ),
    re.compile(
        r"^[^\S\n]*(?:seeking|looking for|aspiring|passionate about)\b"
        r"[\s\S]*?" + _SECTION_END,
        re.IGNORECASE | re.MULTILINE,
    ),
]

BLANK_RUN_RE = re.compile(r"\n{3,}")


@dataclass(frozen=True)
class SegmentedText:
    body: str
    removed_summary: str = ""

    @property
    def lines(self) -> List[str]:
        return non_empty_lines(self.body)

    def in_summary(self, candidate: str) -> bool:
        return bool(self.removed_summary) and candidate.lower() in self.removed_summary.lower()


def segment_sections(text: str) -> SegmentedText:
    """
    Excise summary/objective blocks from normalized text.

    Each pattern is applied to the body left by the previous one; every match is
    erased and appended to removed_summary. With no match, body == text.
    """
    body = text
    removed: List[str] = []
    for pattern in SUMMARY_PATTERNS:
        matches = [m.group(0).strip() for m in pattern.finditer(body) if m.group(0).strip()]
        if not matches:
            continue
        removed.extend(matches)
        body = pattern.sub("", body)

    if not removed:
        return SegmentedText(body=text, removed_summary="")

    body = BLANK_RUN_RE.sub("\n\n", "\n".join(ln.strip() for ln in body.split("\n"))).strip()
    return SegmentedText(body=body, removed_summary=" ".join(removed))


def prepare_text(raw: str, lexicon: Optional[Lexicon] = None) -> SegmentedText:
    """Normalize then segment: the shared front half of every extractor."""
    return segment_sections(normalize_text(raw, lexicon))
