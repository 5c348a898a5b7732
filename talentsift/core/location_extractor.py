"""
Candidate location detection.

Same cascade shape as the name extractor: explicit headers first, then
geography-shaped patterns near the top of the resume, then document-wide
patterns with context checks, then a shortlist of well-known cities.
"""

import logging
import re
from functools import partial
from typing import Optional

from talentsift.core.cascade import run_cascade
from talentsift.core.lexicon import Lexicon, get_lexicon
from talentsift.core.schemas import UNKNOWN_LOCATION
from talentsift.core.section_segmenter import SegmentedText, prepare_text

logger = logging.getLogger(__name__)


LOCATION_HEADER_RE = re.compile(
    r"\b(?:Address|Location|Based in|Located in|City|Residence)[^\S\n]*:[^\S\n]*([^\n]+)",
    re.IGNORECASE,
)
HEADER_NARRATIVE = ("experience", "skilled", "seeking", "years")

FIRST_LINE_SKIP = ("profile", "summary", "experienced", "skilled", "seeking", "years", "objective")
INSTITUTION_WORDS = ("company", "university", "college")

_PLACE = r"[A-Z][a-z]+(?: [A-Z][a-z]+)*"

# Hyderabad, Telangana, India / Austin, TX
GEO_PAIR_RE = re.compile(rf"\b({_PLACE}), ?({_PLACE}|[A-Z]{{2}})\b(?:, ?({_PLACE}))?")
# Pune Maharashtra (no comma; first token must be a known city)
GEO_BARE_PAIR_RE = re.compile(rf"\b({_PLACE}) ([A-Z][a-z]+)\b")

CITY_STATE_RE = re.compile(rf"\b({_PLACE}), ?([A-Z]{{2}})(?: ?\d{{5}})?\b")
CITY_STATE_CONTEXT_EXCLUDE = ("experience", "skilled", "company")

INTERNATIONAL_RE = re.compile(rf"\b({_PLACE}), ?({_PLACE})\b")
INTERNATIONAL_EXCLUDE = ("university", "college", "company", "technologies")

KNOWN_CITY_CONTEXT_EXCLUDE = ("company", "technologies", "experience", "skilled")

WORD_RE = re.compile(r"[a-z]+")


def _mentions_skill(location: str, lexicon: Lexicon) -> bool:
    low = location.lower()
    parts = [p.strip() for p in low.split(",")] + low.replace(",", " ").split()
    return low in lexicon.skill_keys or any(p in lexicon.skill_keys for p in parts)


def _mentions_role(location: str, lexicon: Lexicon) -> bool:
    """'Software Engineer, Google' is a headline, not a place."""
    roles = {w.lower() for w in (*lexicon.role_keywords, *lexicon.extra_role_keywords)}
    return any(w in roles for w in WORD_RE.findall(location.lower()))


def _rejected_place(location: str, lexicon: Lexicon) -> bool:
    return _mentions_skill(location, lexicon) or _mentions_role(location, lexicon)


def _known_city(name: str, lexicon: Lexicon) -> bool:
    low = name.lower()
    return low in lexicon.indian_city_keys or low in {c.lower() for c in lexicon.well_known_cities}


def location_from_header(doc: SegmentedText, lexicon: Optional[Lexicon] = None) -> Optional[str]:
    """Tier 1: 'Location: Pune, Maharashtra' style labels."""
    for m in LOCATION_HEADER_RE.finditer(doc.body):
        value = m.group(1).strip(" ,;|-")
        low = value.lower()
        if not value or len(value) > 100:
            continue
        if any(w in low for w in HEADER_NARRATIVE) or doc.in_summary(value):
            logger.debug(f"Rejected header location: {value!r}")
            continue
        return value
    return None


def location_from_first_lines(doc: SegmentedText, lexicon: Optional[Lexicon] = None) -> Optional[str]:
    """
    Tier 2: geography near the top of the resume.

    A line that is exactly a gazetteer city wins outright. Otherwise a
    comma-separated pair of capitalized phrases, or a bare pair led by a known
    city. Lines with labels, contact info or employer/school words are skipped.
    """
    lexicon = lexicon or get_lexicon()
    for line in doc.lines[:10]:
        low = line.lower()
        if (
            "@" in line
            or "http" in low
            or ":" in line
            or any(w in low for w in FIRST_LINE_SKIP)
            or any(w in low for w in INSTITUTION_WORDS)
            or not 3 <= len(line) <= 100
        ):
            continue

        if low in lexicon.indian_city_keys:
            return line

        m = GEO_PAIR_RE.search(line)
        if m and not _rejected_place(m.group(0), lexicon) and not doc.in_summary(m.group(0)):
            return m.group(0).strip()

        m = GEO_BARE_PAIR_RE.search(line)
        if m and _known_city(m.group(1), lexicon) and not _mentions_role(m.group(0), lexicon):
            return m.group(0).strip()
    return None


def location_from_city_state(doc: SegmentedText, lexicon: Optional[Lexicon] = None) -> Optional[str]:
    """Tier 3: 'City, ST' with optional postal code, anywhere in the body."""
    lexicon = lexicon or get_lexicon()
    body = doc.body
    for m in CITY_STATE_RE.finditer(body):
        context = body[max(0, m.start() - 50): m.end() + 50].lower()
        if any(w in context for w in CITY_STATE_CONTEXT_EXCLUDE):
            continue
        location = f"{m.group(1)}, {m.group(2)}"
        if _rejected_place(location, lexicon):
            continue
        return location
    return None


def location_from_international_pattern(doc: SegmentedText, lexicon: Optional[Lexicon] = None) -> Optional[str]:
    """Tier 4: 'City, Region' with both parts written as capitalized phrases."""
    lexicon = lexicon or get_lexicon()
    for m in INTERNATIONAL_RE.finditer(doc.body):
        location = f"{m.group(1)}, {m.group(2)}"
        low = location.lower()
        if len(location) >= 50 or any(w in low for w in INTERNATIONAL_EXCLUDE):
            continue
        if _rejected_place(location, lexicon) or doc.in_summary(location):
            continue
        return location
    return None


def location_from_known_cities(doc: SegmentedText, lexicon: Optional[Lexicon] = None) -> Optional[str]:
    """Tier 5: any well-known city name whose surroundings do not look like an employer or narrative."""
    lexicon = lexicon or get_lexicon()
    body = doc.body
    for city in lexicon.well_known_cities:
        for m in re.finditer(rf"\b{re.escape(city)}\b", body, re.IGNORECASE):
            context = body[max(0, m.start() - 30): m.end() + 30].lower()
            if any(w in context for w in KNOWN_CITY_CONTEXT_EXCLUDE):
                continue
            return city
    return None


LOCATION_TIERS = [
    ("header", location_from_header),
    ("first_lines", location_from_first_lines),
    ("city_state", location_from_city_state),
    ("international_pattern", location_from_international_pattern),
    ("known_cities", location_from_known_cities),
]


def extract_location_from(doc: SegmentedText, lexicon: Optional[Lexicon] = None) -> str:
    lexicon = lexicon or get_lexicon()
    tiers = [(label, partial(fn, lexicon=lexicon)) for label, fn in LOCATION_TIERS]
    return run_cascade(tiers, doc, "location") or UNKNOWN_LOCATION


def extract_location(text: str, lexicon: Optional[Lexicon] = None) -> str:
    """Best-guess candidate location; UNKNOWN_LOCATION when no tier succeeds."""
    return extract_location_from(prepare_text(text, lexicon), lexicon)
