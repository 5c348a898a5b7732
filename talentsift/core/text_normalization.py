"""
Text normalization for already-extracted resume text.

Removes document artifacts (reader banners, "Page N" footers, form feeds, tabs)
and irregular spacing while keeping the line structure that the section,
name, location and experience heuristics depend on.

normalize_text() is idempotent: normalize_text(normalize_text(x)) == normalize_text(x).
"""

import re
from typing import Optional

from talentsift.core.lexicon import Lexicon, get_lexicon


# Any whitespace except a newline
HSPACE_RE = re.compile(r"[^\S\n]+")
BLANK_RUN_RE = re.compile(r"\n{3,}")


def _strip_boilerplate(text: str, lexicon: Lexicon) -> str:
    """
    Remove boilerplate until none is left.

    Removing one artifact can glue two halves of another together
    ("Microsoft Page 2 Word"), so a single pass is not enough.
    """
    pattern = lexicon.boilerplate_re
    while True:
        cleaned = pattern.sub("", text)
        if cleaned == text:
            return cleaned
        text = cleaned


def normalize_text(raw: str, lexicon: Optional[Lexicon] = None) -> str:
    """
    Normalize raw extracted text.

    Pipeline:
    1. Unify line endings (\\r\\n, \\r -> \\n)
    2. Remove boilerplate substrings (case-insensitive, from the lexicon)
    3. Collapse form feeds, tabs and runs of horizontal whitespace to one space
    4. Trim every line; collapse 2+ consecutive blank lines into one
    5. Trim the whole text

    Examples:
      "Document Reader\\nJANE\\tDOE\\fPage 1" -> "JANE DOE"
      "Jane   Doe \\n\\n\\n\\nSkills" -> "Jane Doe\\n\\nSkills"
    """
    if not raw:
        return ""
    lexicon = lexicon or get_lexicon()

    text = raw.replace("\r\n", "\n").replace("\r", "\n")
    text = _strip_boilerplate(text, lexicon)
    text = HSPACE_RE.sub(" ", text)
    text = "\n".join(line.strip() for line in text.split("\n"))
    text = BLANK_RUN_RE.sub("\n\n", text)
    return text.strip()


def non_empty_lines(text: str) -> list[str]:
    """Trimmed, non-empty lines in document order."""
    return [ln.strip() for ln in text.split("\n") if ln.strip()]
