"""
Education line extraction.

Degree lines first, then institution lines, at most three of each, in document
order. An institution match already contained in a collected degree line is
not repeated.
"""

import re
from typing import List

# Examples: "Bachelor of Science in Economics", "MBA, Marketing", "B.S. Computer Science"
DEGREE_RE = re.compile(
    r"[^\n]*\b(?:Bachelor|Master|MBA|PhD|B\.S\.|M\.S\.|B\.A\.|M\.A\.)[^\n]*",
    re.IGNORECASE,
)
# Examples: "University of Pune", "College of Engineering, Guindy"
INSTITUTION_RE = re.compile(r"[^\n]*\b(?:University|College|Institute)[^\n]*", re.IGNORECASE)

MAX_PER_FAMILY = 3


def extract_education(text: str) -> List[str]:
    entries: List[str] = []
    for pattern in (DEGREE_RE, INSTITUTION_RE):
        found = 0
        for m in pattern.finditer(text or ""):
            if found >= MAX_PER_FAMILY:
                break
            value = m.group(0).strip(" \t,;|-")
            if not value or any(value in e for e in entries):
                continue
            entries.append(value)
            found += 1
    return entries
