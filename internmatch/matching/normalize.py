"""Text and list normalization for matching.

Every token compared by the evaluator passes through ``normalize_text`` first,
so "Financial_Modeling", "financial-modeling" and " Financial  Modeling "
all compare equal.
"""

import re
from collections.abc import Iterable
from typing import NamedTuple

from internmatch.schemas.enums import (
    InternshipExperienceLevel,
    Season,
    StudentExperienceLevel,
    WorkMode,
)
from internmatch.schemas.internship import InternshipMatchInput

_SEPARATORS = re.compile(r"[\s_-]+")
_WORK_MODE_SUFFIX = re.compile(r"\(([^)]+)\)\s*$")
_TRAILING_PARENTHETICAL = re.compile(r"\s*\([^)]*\)\s*$")
_SEASON_LINE = re.compile(r"^season:\s*(.+)$", re.IGNORECASE | re.MULTILINE)
_REQUIRED_SKILLS_LINE = re.compile(
    r"^required skills?:\s*(.+)$", re.IGNORECASE | re.MULTILINE
)
_PREFERRED_SKILLS_LINE = re.compile(
    r"^preferred skills?:\s*(.+)$", re.IGNORECASE | re.MULTILINE
)

# Season names are checked before month names.
_SEASON_KEYWORDS = [
    (Season.SUMMER, ("summer",)),
    (Season.FALL, ("fall", "autumn")),
    (Season.SPRING, ("spring",)),
    (Season.WINTER, ("winter",)),
]
_MONTH_PATTERNS = [
    (Season.SUMMER, re.compile(r"\b(jun|june|jul|july|aug|august)\b")),
    (Season.FALL, re.compile(r"\b(sep|sept|september|oct|october|nov|november)\b")),
    (Season.WINTER, re.compile(r"\b(dec|december|jan|january|feb|february)\b")),
    (Season.SPRING, re.compile(r"\b(mar|march|apr|april|may)\b")),
]
_MONTH_PREFIXES = [
    (Season.SUMMER, ("jun", "jul", "aug")),
    (Season.FALL, ("sep", "oct", "nov")),
    (Season.WINTER, ("dec", "jan", "feb")),
    (Season.SPRING, ("mar", "apr", "may")),
]


class SkillRequirements(NamedTuple):
    """Skills an internship asks for, canonical IDs and text side by side."""

    required_ids: list[str]
    preferred_ids: list[str]
    required: list[str]
    preferred: list[str]


def normalize_text(value: str | None) -> str:
    """Lowercase, trim, and collapse runs of whitespace, '_' and '-' to one space."""
    if not value:
        return ""
    return _SEPARATORS.sub(" ", str(value).lower()).strip()


def unique(items: Iterable[str]) -> list[str]:
    """Drop falsy items and duplicates, keeping first-seen order."""
    return list(dict.fromkeys(item for item in items if item))


def parse_list(value: list[str] | str | None) -> list[str]:
    """Split a sequence or a comma-delimited string into normalized tokens.

    Empty tokens are dropped; repeats are kept.
    """
    if not value:
        return []
    items = value.split(",") if isinstance(value, str) else value
    tokens = [normalize_text(str(item)) for item in items if item is not None]
    return [token for token in tokens if token]


def parse_majors(value: list[str] | str | None) -> list[str]:
    return parse_list(value)


def parse_work_mode(value: str | None) -> WorkMode | None:
    if not value:
        return None
    try:
        return WorkMode(value)
    except ValueError:
        return None


def derive_work_mode(internship: InternshipMatchInput) -> WorkMode | None:
    """Explicit ``work_mode`` first, then a '(Hybrid)' suffix on ``location``."""
    explicit = parse_work_mode(internship.work_mode)
    if explicit:
        return explicit

    match = _WORK_MODE_SUFFIX.search(internship.location or "")
    if not match:
        return None
    return parse_work_mode(match.group(1))


def derive_term(internship: InternshipMatchInput) -> str:
    """Explicit ``term`` first, then a 'Season:' line in the description."""
    if internship.term and internship.term.strip():
        return normalize_text(internship.term)

    match = _SEASON_LINE.search(internship.description or "")
    if not match:
        return ""
    return normalize_text(match.group(1))


def derive_location_name(internship: InternshipMatchInput) -> str:
    location = internship.location or ""
    if not location:
        return ""
    return normalize_text(_TRAILING_PARENTHETICAL.sub("", location))


def season_from_term(term: str) -> str:
    """Reduce a normalized term such as 'summer 2026' to its season.

    Unrecognized terms are returned unchanged.
    """
    if not term:
        return ""
    for season, keywords in _SEASON_KEYWORDS:
        if any(keyword in term for keyword in keywords):
            return season.value
    for season, pattern in _MONTH_PATTERNS:
        if pattern.search(term):
            return season.value
    return term


def season_from_month(value: str | None) -> str:
    """Map an availability start month ('June', 'sep') to a season, or ''."""
    text = normalize_text(value)
    for season, prefixes in _MONTH_PREFIXES:
        if text.startswith(prefixes):
            return season.value
    return ""


def infer_skills(internship: InternshipMatchInput) -> SkillRequirements:
    """Collect required/preferred skills from every channel the listing offers.

    Canonical IDs are deduplicated. Text skills are the union of the explicit
    lists and the legacy 'Required skills:' / 'Preferred skills:' lines.
    """
    description = internship.description or ""
    required_line = _REQUIRED_SKILLS_LINE.search(description)
    preferred_line = _PREFERRED_SKILLS_LINE.search(description)

    required_from_description = parse_list(required_line.group(1)) if required_line else []
    preferred_from_description = parse_list(preferred_line.group(1)) if preferred_line else []

    return SkillRequirements(
        required_ids=unique(internship.required_skill_ids),
        preferred_ids=unique(internship.preferred_skill_ids),
        required=unique(parse_list(internship.required_skills) + required_from_description),
        preferred=unique(parse_list(internship.preferred_skills) + preferred_from_description),
    )


def normalize_graduation_year(value: str | None) -> str:
    """'Class of 20 28' style tokens lose internal whitespace: '20 28' == '2028'."""
    return re.sub(r"\s+", "", normalize_text(value))


def parse_internship_experience(value: str | None) -> InternshipExperienceLevel | None:
    if not value or not value.strip():
        return None
    try:
        return InternshipExperienceLevel(value)
    except ValueError:
        return None


def parse_student_experience(value: str | None) -> StudentExperienceLevel | None:
    if not value or not value.strip():
        return None
    try:
        return StudentExperienceLevel(value)
    except ValueError:
        return None


def overlap_count(left: list[str], right: Iterable[str]) -> int:
    """Count items of ``left`` present in ``right`` (repeats in ``left`` count)."""
    if not left:
        return 0
    right_set = set(right)
    return sum(1 for item in left if item in right_set)


def ratio(numerator: float, denominator: float) -> float:
    if denominator <= 0:
        return 0.0
    return numerator / denominator


def clean_sentence(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()
