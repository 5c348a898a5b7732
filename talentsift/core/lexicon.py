"""
Static keyword lists used by the extraction and scoring engine.

Gazetteers, skill dictionaries and vocabulary filters live in a JSON file
(core/data/lexicon.json by default) so they can be maintained and swapped
without touching extraction code. The lexicon is loaded once and is immutable.
"""

import json
import logging
import re
from dataclasses import dataclass, fields
from functools import lru_cache
from pathlib import Path
from typing import Optional, Pattern, Tuple

from talentsift.config import get_settings

logger = logging.getLogger(__name__)

DEFAULT_LEXICON_PATH = Path(__file__).parent / "data" / "lexicon.json"


class LexiconError(ValueError):
    """Raised when a lexicon file is missing or malformed."""


@dataclass(frozen=True)
class Lexicon:
    boilerplate_patterns: Tuple[str, ...]
    indian_cities: Tuple[str, ...]
    well_known_cities: Tuple[str, ...]
    resume_skills: Tuple[str, ...]
    customer_success_markers: Tuple[str, ...]
    customer_success_background_markers: Tuple[str, ...]
    customer_success_role_markers: Tuple[str, ...]
    tech_keywords: Tuple[str, ...]
    seniority_keywords: Tuple[str, ...]
    progression_keywords: Tuple[str, ...]
    notable_employers: Tuple[str, ...]
    company_suffixes: Tuple[str, ...]
    extra_company_suffixes: Tuple[str, ...]
    role_keywords: Tuple[str, ...]
    extra_role_keywords: Tuple[str, ...]
    narrative_phrases: Tuple[str, ...]
    name_excluded_words: Tuple[str, ...]
    name_narrative_words: Tuple[str, ...]
    generic_strengths: Tuple[str, ...]
    generic_weakness: str

    @property
    def boilerplate_re(self) -> Pattern[str]:
        return _compile_alternation(self.boilerplate_patterns)

    @property
    def indian_city_keys(self) -> frozenset:
        return frozenset(c.lower() for c in self.indian_cities)

    @property
    def skill_keys(self) -> frozenset:
        return frozenset(s.lower() for s in self.resume_skills)


@lru_cache(maxsize=None)
def _compile_alternation(patterns: Tuple[str, ...]) -> Pattern[str]:
    if not patterns:
        # Matches nothing
        return re.compile(r"(?!x)x")
    return re.compile("|".join(f"(?:{p})" for p in patterns), re.IGNORECASE)


def _coerce(name: str, value):
    if name == "generic_weakness":
        if not isinstance(value, str) or not value.strip():
            raise LexiconError("generic_weakness must be a non-empty string")
        return value
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise LexiconError(f"{name} must be a list of strings")
    return tuple(value)


def load_lexicon(path: Optional[Path] = None) -> Lexicon:
    """
    Load a lexicon from JSON.

    Every field of Lexicon must be present. Regex fields are compiled eagerly so
    a bad pattern fails at startup instead of on the first resume.
    """
    source = Path(path) if path else DEFAULT_LEXICON_PATH
    try:
        raw = json.loads(source.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise LexiconError(f"Lexicon file not found: {source}") from exc
    except json.JSONDecodeError as exc:
        raise LexiconError(f"Lexicon file is not valid JSON: {source}: {exc}") from exc

    if not isinstance(raw, dict):
        raise LexiconError("Lexicon root must be a JSON object")

    names = [f.name for f in fields(Lexicon)]
    missing = [n for n in names if n not in raw]
    if missing:
        raise LexiconError(f"Lexicon is missing keys: {', '.join(missing)}")

    lexicon = Lexicon(**{n: _coerce(n, raw[n]) for n in names})
    if not lexicon.generic_strengths:
        raise LexiconError("generic_strengths must not be empty")

    try:
        lexicon.boilerplate_re
    except re.error as exc:
        raise LexiconError(f"Invalid boilerplate pattern: {exc}") from exc

    logger.debug(
        f"Loaded lexicon from {source}: {len(lexicon.indian_cities)} cities, "
        f"{len(lexicon.resume_skills)} skills"
    )
    return lexicon


@lru_cache
def get_lexicon() -> Lexicon:
    """Process-wide lexicon, loaded once from settings.lexicon_path or the packaged default."""
    return load_lexicon(get_settings().lexicon_path)
