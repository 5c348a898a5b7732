"""
Candidate name detection.

A cascade of increasingly permissive strategies over normalized, summary-free
text. Earlier tiers look at few lines with strict name shapes; later tiers scan
more text and trade precision for recall. Never raises: falls back to
UNKNOWN_NAME when nothing name-shaped survives the filters.
"""

import logging
import re
from functools import partial
from typing import List, Optional

from talentsift.core.cascade import run_cascade
from talentsift.core.lexicon import Lexicon, get_lexicon
from talentsift.core.schemas import UNKNOWN_NAME
from talentsift.core.section_segmenter import SegmentedText, prepare_text

logger = logging.getLogger(__name__)


# KomalWadhwani, SaiDivyaKanta
CAMEL_NAME_RE = re.compile(r"[A-Z][a-z]+(?:[A-Z][a-z]+){1,2}")
CAMEL_HUMP_RE = re.compile(r"[A-Z][a-z]+")
CAPITALIZED_WORD_RE = re.compile(r"[A-Z][a-z]+")
CV_RE = re.compile(r"\bcv\b", re.IGNORECASE)

FIRST_LINE_SKIP = ("resume", "profile", "summary", "naukri")

CAREFUL_SKIP = (
    "phone", "email", "linkedin", "resume", "document", "reader", "profile",
    "summary", "objective", "years of experience", "experienced", "skilled",
    "specializing", "expertise", "background", "seeking", "looking for",
    "passionate about",
)

# Tried in this order
GLOBAL_NAME_PATTERNS = [
    re.compile(r"\b([A-Z][A-Z ]{2,}[A-Z])\b"),                  # SAI DIVYA KANTA
    re.compile(r"\b([A-Z][a-z]+(?: [A-Z][a-z]+)+)\b"),          # John Smith
    re.compile(r"^([A-Z]+(?: [A-Z]+)+) *$", re.MULTILINE),      # JOHN SMITH on its own line
    re.compile(r"\b([A-Z][a-z]*[A-Z][a-z]*) *$", re.MULTILINE), # ...KomalWadhwani at line end
    re.compile(r"^([A-Z][a-z]*[A-Z][a-z]*)\b", re.MULTILINE),   # KomalWadhwani at line start
    re.compile(r"([A-Z][a-z]+[A-Z][a-z]+(?:[A-Z][a-z]+)*)"),    # camelCase anywhere
]

NAME_LABELS = ("name:", "candidate:", "applicant:", "full name:")

TWO_WORD_NAME_RE = re.compile(r"[A-Z][a-z]+ [A-Z][a-z]+")
THREE_WORD_CAPS_RE = re.compile(r"[A-Z]{2,}(?: [A-Z]{2,}){2}")


def _name_words(candidate: str) -> List[str]:
    """Words of a name; a compact camel-case token counts each capitalized hump as a word."""
    if " " in candidate.strip():
        return candidate.split()
    humps = CAMEL_HUMP_RE.findall(candidate)
    if humps and "".join(humps) == candidate:
        return humps
    return [candidate]


def _passes_name_filters(candidate: str, doc: SegmentedText, lexicon: Lexicon) -> bool:
    """
    Shared rejection rules for pattern-found names.

    Rejects: document/section/job-title vocabulary, known skill phrases, text that
    only appears inside the removed summary, overlong matches, narrative words.
    """
    words = _name_words(candidate)
    excluded = set(lexicon.name_excluded_words)
    role_words = {w.upper() for w in (*lexicon.role_keywords, *lexicon.extra_role_keywords)}
    upper_words = {w.upper() for w in words}
    if upper_words & excluded or upper_words & role_words:
        return False
    if candidate.lower() in lexicon.skill_keys:
        return False
    if doc.in_summary(candidate):
        return False
    if len(candidate) > 40:
        return False
    low = candidate.lower()
    if any(w in low for w in lexicon.name_narrative_words):
        return False
    return True


def name_from_first_lines(doc: SegmentedText, lexicon: Optional[Lexicon] = None) -> Optional[str]:
    """Tier 1: a strictly name-shaped line among the first 5 lines."""
    for line in doc.lines[:5]:
        low = line.lower()
        if (
            "@" in line
            or "http" in low
            or any(w in low for w in FIRST_LINE_SKIP)
            or CV_RE.search(line)
            or len(line) < 3
        ):
            continue

        if 5 <= len(line) <= 30 and CAMEL_NAME_RE.fullmatch(line):
            return line

        words = line.split()
        if 2 <= len(words) <= 3 and len(line) < 40 and all(
            CAPITALIZED_WORD_RE.fullmatch(w) and 2 <= len(w) <= 15 for w in words
        ):
            return line
    return None


def name_from_global_patterns(doc: SegmentedText, lexicon: Optional[Lexicon] = None) -> Optional[str]:
    """Tier 2: name-shaped regex families over the whole body, in priority order."""
    lexicon = lexicon or get_lexicon()
    for pattern in GLOBAL_NAME_PATTERNS:
        for m in pattern.finditer(doc.body):
            name = m.group(1).strip()
            words = _name_words(name)
            if not (2 <= len(words) <= 4 and len(name) <= 50):
                continue
            if _passes_name_filters(name, doc, lexicon):
                return name
            logger.debug(f"Rejected potential name: {name!r}")
    return None


def name_from_careful_line_scan(doc: SegmentedText, lexicon: Optional[Lexicon] = None) -> Optional[str]:
    """Tier 3: first 15 lines with a broad exclusion list and looser shapes."""
    lexicon = lexicon or get_lexicon()
    excluded = set(lexicon.name_excluded_words)
    for line in doc.lines[:15]:
        low = line.lower()
        if (
            "@" in line
            or "http" in low
            or any(w in low for w in CAREFUL_SKIP)
            or CV_RE.search(line)
            or line[0].isdigit()
            or "•" in line
            or ":" in line
            or not 3 <= len(line) <= 60
        ):
            continue

        words = line.split()
        if {w.upper() for w in words} & excluded:
            continue

        if 2 <= len(words) <= 4 and all(w[0].isupper() and 2 <= len(w) <= 20 for w in words):
            return line

        if len(words) == 1 and 5 < len(line) < 25 and CAMEL_NAME_RE.fullmatch(line):
            return line
    return None


def name_from_labeled_header(doc: SegmentedText, lexicon: Optional[Lexicon] = None) -> Optional[str]:
    """Tier 4: 'Name: Jane Doe' style labels."""
    low = doc.body.lower()
    for label in NAME_LABELS:
        idx = low.find(label)
        if idx == -1:
            continue
        value = doc.body[idx + len(label):].split("\n", 1)[0].strip()
        if 2 <= len(value) <= 50:
            return value
    return None


def name_from_token_window(doc: SegmentedText, lexicon: Optional[Lexicon] = None) -> Optional[str]:
    """Tier 5: slide over whitespace tokens looking for 1-, 2- or 3-token name shapes."""
    lexicon = lexicon or get_lexicon()
    tokens = doc.body.split()
    for i, token in enumerate(tokens):
        if 5 < len(token) < 30 and CAMEL_NAME_RE.fullmatch(token):
            if _passes_name_filters(token, doc, lexicon):
                return token

        if i + 1 < len(tokens):
            two = f"{tokens[i]} {tokens[i + 1]}"
            if len(two) < 40 and TWO_WORD_NAME_RE.fullmatch(two) and _passes_name_filters(two, doc, lexicon):
                return two

        if i + 2 < len(tokens):
            three = f"{tokens[i]} {tokens[i + 1]} {tokens[i + 2]}"
            if len(three) < 50 and THREE_WORD_CAPS_RE.fullmatch(three) and _passes_name_filters(three, doc, lexicon):
                return three
    return None


NAME_TIERS = [
    ("first_lines", name_from_first_lines),
    ("global_patterns", name_from_global_patterns),
    ("careful_line_scan", name_from_careful_line_scan),
    ("labeled_header", name_from_labeled_header),
    ("token_window", name_from_token_window),
]


def extract_name_from(doc: SegmentedText, lexicon: Optional[Lexicon] = None) -> str:
    lexicon = lexicon or get_lexicon()
    tiers = [(label, partial(fn, lexicon=lexicon)) for label, fn in NAME_TIERS]
    return run_cascade(tiers, doc, "name") or UNKNOWN_NAME


def extract_name(text: str, lexicon: Optional[Lexicon] = None) -> str:
    """Best-guess candidate full name; UNKNOWN_NAME when no tier succeeds."""
    return extract_name_from(prepare_text(text, lexicon), lexicon)
