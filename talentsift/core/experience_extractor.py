"""
Work-history extraction.

Experience entries are anchored on date ranges ("Jan 2020 - Present",
"2018 – 2021"). For every date found, nearby lines are classified as role or
company by keyword heuristics:

    Senior Customer Success Manager      <- role (seniority/role word)
    Zendesk Inc                          <- company (company suffix)
    Jan 2020 - Present                   <- anchor
    • Owned a book of 40 enterprise ...  <- ignored (bullet)

Tiers:
1. Date-anchored scan inside the experience section
2. Same scan over the whole document with relaxed dates and line lengths
3. Line-by-line fallbacks that always produce at least one entry
"""

import logging
import re
from dataclasses import dataclass
from functools import lru_cache, partial
from typing import List, Optional, Pattern, Tuple

from talentsift.core.cascade import run_cascade
from talentsift.core.lexicon import Lexicon, get_lexicon
from talentsift.core.schemas import MAX_EXPERIENCES, UNKNOWN_COMPANY, ExperienceEntry
from talentsift.core.section_segmenter import SegmentedText, prepare_text

logger = logging.getLogger(__name__)


MONTH = (
    r"(?:Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|June?|July?|Aug(?:ust)?"
    r"|Sep(?:t(?:ember)?)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)\.?"
)
YEAR = r"(?:19|20)\d{2}"
_HS = r"[^\S\n]"

# Examples: "Jan 2020 - Present", "2018 – 2021", "March 2019 | Dec 2022"
DATE_RANGE_RE = re.compile(
    rf"\b(?:{MONTH}{_HS}+{YEAR}|{YEAR}){_HS}*[-–—|]{_HS}*"
    rf"(?:{MONTH}{_HS}+{YEAR}|{YEAR}|Present|Current)\b",
    re.IGNORECASE,
)

# Adds numeric months and "to": "01/2019 to 04/2021", "2019 to Present"
RELAXED_DATE_RANGE_RE = re.compile(
    rf"\b(?:{MONTH}{_HS}+{YEAR}|\d{{1,2}}/{YEAR}|{YEAR}){_HS}*(?:[-–—|]|to){_HS}*"
    rf"(?:{MONTH}{_HS}+{YEAR}|\d{{1,2}}/{YEAR}|{YEAR}|Present|Current|Now)\b",
    re.IGNORECASE,
)

MONTH_OR_YEAR_RE = re.compile(rf"\b(?:{MONTH}|{YEAR}|Present|Current)\b", re.IGNORECASE)

# Priority order: the most specific header wins when several are present
EXPERIENCE_HEADERS = [
    r"professional\s+experience",
    r"work\s+experience",
    r"employment\s+history",
    r"experience",
    r"employment",
    r"career\s+history",
]
EXPERIENCE_HEADER_RES = [
    re.compile(rf"^{_HS}*{h}{_HS}*:?{_HS}*$", re.IGNORECASE | re.MULTILINE)
    for h in EXPERIENCE_HEADERS
]

# Bullet/achievement line detector
BULLET_RE = re.compile(r"^[\s•●▪◦\-*>+]+")
EDGE_SEPARATORS = " \t|,;-–—@"

# Common resume section headers (never a role or company)
HEADER_BLACKLIST = {
    "objective", "summary", "professional summary", "profile",
    "experience", "work experience", "employment", "employment history",
    "professional experience", "career history", "work history",
    "education", "skills", "technical skills", "core competencies",
    "projects", "certifications", "awards", "references", "languages",
}

ROLE_COMPANY_SEPARATORS = (" | ", " at ", " @ ", ", ", " - ", " – ")

PLACEHOLDER_ROLE = "Professional Role"
PLACEHOLDER_COMPANY = "Company"


@dataclass(frozen=True)
class ScanPolicy:
    date_re: Pattern[str]
    max_line_len: int
    company_re: Pattern[str]
    role_re: Pattern[str]
    lines_before: int = 10
    lines_after: int = 3


@lru_cache(maxsize=None)
def _keyword_re(words: Tuple[str, ...]) -> Pattern[str]:
    alternation = "|".join(re.escape(w) for w in words)
    return re.compile(rf"\b(?:{alternation})s?\b\.?", re.IGNORECASE)


def primary_policy(lexicon: Lexicon) -> ScanPolicy:
    return ScanPolicy(
        date_re=DATE_RANGE_RE,
        max_line_len=80,
        company_re=_keyword_re(lexicon.company_suffixes),
        role_re=_keyword_re(lexicon.role_keywords),
    )


def relaxed_policy(lexicon: Lexicon) -> ScanPolicy:
    return ScanPolicy(
        date_re=RELAXED_DATE_RANGE_RE,
        max_line_len=120,
        company_re=_keyword_re(lexicon.company_suffixes + lexicon.extra_company_suffixes),
        role_re=_keyword_re(lexicon.role_keywords + lexicon.extra_role_keywords),
    )


def find_experience_section(body: str) -> Optional[str]:
    """Text following the highest-priority experience header line, or None."""
    for header_re in EXPERIENCE_HEADER_RES:
        m = header_re.search(body)
        if m:
            logger.debug(f"Experience section header: {m.group(0).strip()!r}")
            return body[m.end():]
    return None


def _is_candidate_line(line: str, policy: ScanPolicy, lexicon: Lexicon) -> bool:
    if len(line) < 3 or len(line) > policy.max_line_len:
        return False
    if BULLET_RE.match(line) or "•" in line:
        return False
    low = line.lower()
    if "@" in line or "http" in low:
        return False
    if low.rstrip(":") in HEADER_BLACKLIST:
        return False
    return not any(p in low for p in lexicon.narrative_phrases)


def _clean(line: str) -> str:
    return line.strip(EDGE_SEPARATORS)


def _lines_before(prefix: str, policy: ScanPolicy) -> List[str]:
    """
    Lines preceding a date match, nearest first.

    The text before the date on the same line is the first candidate. Walking
    stops at the previous entry's date line.
    """
    raw = prefix.split("\n")
    out = []
    same_line = _clean(raw[-1])
    if same_line:
        out.append(same_line)
    taken = 0
    for line in reversed(raw[:-1]):
        if taken >= policy.lines_before:
            break
        line = line.strip()
        if not line:
            continue
        if policy.date_re.search(line):
            break
        out.append(_clean(line))
        taken += 1
    return [ln for ln in out if ln]


def _lines_after(suffix: str, policy: ScanPolicy) -> List[str]:
    raw = suffix.split("\n")
    out = []
    same_line = _clean(raw[0])
    if same_line:
        out.append(same_line)
    for line in raw[1:]:
        if len(out) >= policy.lines_after + (1 if same_line else 0):
            break
        line = line.strip()
        if not line:
            continue
        if policy.date_re.search(line):
            break
        out.append(_clean(line))
    return [ln for ln in out if ln]


def split_role_company(line: str, policy: ScanPolicy) -> Optional[Tuple[str, str]]:
    """
    Split "Role at Company" / "Role | Company" / "Company, Role" lines.

    Only splits when exactly one side carries a company suffix.
    """
    for sep in ROLE_COMPANY_SEPARATORS:
        if sep not in line:
            continue
        left, right = (_clean(p) for p in line.split(sep, 1))
        if not left or not right:
            continue
        left_co = bool(policy.company_re.search(left))
        right_co = bool(policy.company_re.search(right))
        if right_co and not left_co:
            return left, right
        if left_co and not right_co:
            return right, left
    return None


def classify_lines(lines: List[str], policy: ScanPolicy) -> Tuple[str, str]:
    """
    Pick (role, company) from candidate lines, nearest first.

    Company lines carry a suffix word (Inc, Ltd, Solutions...). Role lines carry a
    role word (Manager, Analyst...). The first unclassified line is the role by default.
    """
    role = company = ""
    for line in lines:
        is_company = bool(policy.company_re.search(line))
        is_role = bool(policy.role_re.search(line))

        if is_company and is_role and not role and not company:
            split = split_role_company(line, policy)
            if split:
                role, company = split
                break

        if is_company and not company:
            company = line
        elif is_role and not role:
            role = line
        elif not role and not is_company:
            role = line

        if role and company:
            break
    return role, company


def scan_date_anchored(text: str, policy: ScanPolicy, lexicon: Lexicon) -> List[ExperienceEntry]:
    """One entry per date range whose surroundings yield a role."""
    entries: List[ExperienceEntry] = []
    for m in policy.date_re.finditer(text):
        if len(entries) >= MAX_EXPERIENCES:
            break
        before = _lines_before(text[:m.start()], policy)
        after = _lines_after(text[m.end():], policy)
        candidates = [ln for ln in before + after if _is_candidate_line(ln, policy, lexicon)]
        role, company = classify_lines(candidates, policy)
        if not role:
            logger.debug(f"No role found around date {m.group(0)!r}")
            continue
        entries.append(ExperienceEntry(
            role=role,
            company=company or UNKNOWN_COMPANY,
            period=m.group(0).strip(),
        ))
    return entries


def experiences_from_section(doc: SegmentedText, lexicon: Optional[Lexicon] = None) -> List[ExperienceEntry]:
    """Tier 1: date-anchored scan bounded to the experience section."""
    lexicon = lexicon or get_lexicon()
    section = find_experience_section(doc.body)
    if section is None:
        return []
    return scan_date_anchored(section, primary_policy(lexicon), lexicon)


def experiences_from_document(doc: SegmentedText, lexicon: Optional[Lexicon] = None) -> List[ExperienceEntry]:
    """Tier 2: the same scan over the entire body, relaxed."""
    lexicon = lexicon or get_lexicon()
    return scan_date_anchored(doc.body, relaxed_policy(lexicon), lexicon)


def _simple_candidate(line: str) -> bool:
    return 3 <= len(line) <= 100 and not BULLET_RE.match(line) and line.lower().rstrip(":") not in HEADER_BLACKLIST


def _from_dated_lines(lines: List[str]) -> List[ExperienceEntry]:
    entries = []
    for i, line in enumerate(lines):
        if len(entries) >= MAX_EXPERIENCES:
            break
        m = RELAXED_DATE_RANGE_RE.search(line)
        if not m:
            continue
        role = company = ""
        for prev in reversed(lines[max(0, i - 3):i]):
            if not _simple_candidate(prev) or RELAXED_DATE_RANGE_RE.search(prev):
                continue
            if not role:
                role = prev
            elif not company:
                company = prev
        entries.append(ExperienceEntry(
            role=role or PLACEHOLDER_ROLE,
            company=company or PLACEHOLDER_COMPANY,
            period=m.group(0).strip(),
        ))
    return entries


def _from_dash_delimited(lines: List[str]) -> List[ExperienceEntry]:
    """'Analyst - Acme Corp - 2019' style single lines."""
    entries = []
    for line in lines:
        if len(entries) >= MAX_EXPERIENCES:
            break
        if " - " not in line or not 10 < len(line) < 150:
            continue
        parts = [p.strip() for p in line.split(" - ") if p.strip()]
        dated = [p for p in parts if MONTH_OR_YEAR_RE.search(p)]
        if not dated:
            continue
        others = [p for p in parts if p is not dated[0]]
        entries.append(ExperienceEntry(
            role=others[0] if others else PLACEHOLDER_ROLE,
            company=others[1] if len(others) > 1 else PLACEHOLDER_COMPANY,
            period=dated[0],
        ))
    return entries


def _placeholder(lines: List[str], lexicon: Lexicon) -> ExperienceEntry:
    role_re = _keyword_re(lexicon.role_keywords + lexicon.extra_role_keywords)
    for line in lines[:20]:
        if role_re.search(line) and line.lower().rstrip(":") not in HEADER_BLACKLIST:
            return ExperienceEntry(role=line, company="Previous Company", period="Work Experience")
    return ExperienceEntry(role="Professional Experience", company="Previous Employer", period="Work History")


def experiences_from_lines(doc: SegmentedText, lexicon: Optional[Lexicon] = None) -> List[ExperienceEntry]:
    """
    Tier 3: never empty.

    Dated lines with up to 3 preceding lines as role/company, then dash-delimited
    single lines, then one placeholder entry.
    """
    lexicon = lexicon or get_lexicon()
    lines = doc.lines
    return _from_dated_lines(lines) or _from_dash_delimited(lines) or [_placeholder(lines, lexicon)]


EXPERIENCE_TIERS = [
    ("section", experiences_from_section),
    ("document", experiences_from_document),
    ("lines", experiences_from_lines),
]


def extract_experiences_from(doc: SegmentedText, lexicon: Optional[Lexicon] = None) -> List[ExperienceEntry]:
    lexicon = lexicon or get_lexicon()
    tiers = [(label, partial(fn, lexicon=lexicon)) for label, fn in EXPERIENCE_TIERS]
    entries = run_cascade(tiers, doc, "experiences") or []
    return entries[:MAX_EXPERIENCES]


def extract_experiences(text: str, lexicon: Optional[Lexicon] = None) -> List[ExperienceEntry]:
    """Up to MAX_EXPERIENCES entries in document order; always at least one."""
    return extract_experiences_from(prepare_text(text, lexicon), lexicon)
