"""Admin matching preview.

Turns database-shaped rows (student profiles, internships and their
canonical link rows) into match inputs with coverage indicators, and runs
the matcher over them so admins can see how a given student ranks the
current inventory.

Relation columns may arrive as a single object or a list of objects,
depending on how the query embedded them; both are accepted.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Literal

from pydantic import BaseModel, Field

from internmatch.config import MATCHING_VERSION, PREVIEW_STUDENT_LIMIT
from internmatch.matching.evaluator import evaluate_internship_match
from internmatch.matching.normalize import parse_majors, unique
from internmatch.matching.ranker import rank_internships
from internmatch.schemas.enums import WorkMode
from internmatch.schemas.internship import InternshipMatchInput, coerce_hours
from internmatch.schemas.match import (
    DEFAULT_MATCH_WEIGHTS,
    SIGNAL_DEFINITIONS,
    InternshipMatchResult,
    MatchWeights,
    SignalKey,
)
from internmatch.schemas.student import StudentMatchProfile
from internmatch.services.preferences import (
    parse_student_preference_signals,
    resolve_preferred_terms,
)

logger = logging.getLogger(__name__)

Row = Mapping[str, Any]


class MatchingCoverage(BaseModel):
    """How many of the matching dimensions a record fills in."""

    total_dimensions: int
    present_dimensions: int
    missing_dimensions: list[str] = Field(default_factory=list)


class MatchingPreviewFilters(BaseModel):
    category: str | None = None
    remote: Literal["all", "remote_only"] = "all"
    term: str | None = None


class StudentPreviewOption(BaseModel):
    user_id: str
    name: str
    email: str
    school: str | None = None
    major_label: str
    year: str | None = None
    experience_level: str | None = None
    canonical_skill_labels: list[str] = Field(default_factory=list)
    coursework_category_names: list[str] = Field(default_factory=list)
    preferred_terms: list[str] = Field(default_factory=list)
    preferred_work_modes: list[WorkMode] = Field(default_factory=list)
    preferred_locations: list[str] = Field(default_factory=list)
    coverage: MatchingCoverage
    profile: StudentMatchProfile


class InternshipPreviewItem(BaseModel):
    id: str
    title: str | None = None
    company_name: str | None = None
    category: str | None = None
    role_category: str | None = None
    experience_level: str | None = None
    location: str | None = None
    work_mode: str | None = None
    term: str | None = None
    required_skills: list[str] = Field(default_factory=list)
    preferred_skills: list[str] = Field(default_factory=list)
    recommended_coursework: list[str] = Field(default_factory=list)
    majors: list[str] = Field(default_factory=list)
    target_graduation_years: list[str] = Field(default_factory=list)
    hours_per_week: int | float | None = None
    coverage: MatchingCoverage
    match_input: InternshipMatchInput


class PreviewRankedItem(BaseModel):
    internship: InternshipPreviewItem
    match: InternshipMatchResult


class SignalContributionRow(BaseModel):
    signal_key: SignalKey
    weight: float
    raw_match_value: float
    points_awarded: float
    evidence: list[str] = Field(default_factory=list)


class MatchingReportSummary(BaseModel):
    matching_version: str
    signal_keys: list[SignalKey]
    signal_definitions: dict[SignalKey, str]
    weights: MatchWeights
    max_score: float
    normalization_formula: str


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _extract_label(value: Any) -> str:
    """Read ``name`` (or ``label``) from an embedded relation object."""
    if not isinstance(value, Mapping):
        return ""
    for key in ("name", "label"):
        if key in value:
            text = value[key]
            return text.strip() if isinstance(text, str) else ""
    return ""


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _string_ids(rows: Iterable[Row] | None, key: str) -> list[str]:
    return [row[key] for row in rows or [] if isinstance(row.get(key), str)]


def canonical_major_name(value: Any) -> str | None:
    """Name of the embedded canonical major, or None."""
    items = _as_list(value)
    if not items or not isinstance(items[0], Mapping):
        return None
    name = items[0].get("name")
    return name if isinstance(name, str) else None


def name_from_auth_metadata(
    fallback_id: str,
    first_name: str | None = None,
    last_name: str | None = None,
    email: str | None = None,
) -> str:
    """Display name: first + last, else the email local part, else a short ID."""
    joined = f"{_text(first_name)} {_text(last_name)}".strip()
    if joined:
        return joined
    email_name = _text(email).split("@")[0].strip()
    if email_name:
        return email_name
    return f"Student {fallback_id[:8]}"


def _coverage(checks: list[tuple[str, bool]]) -> MatchingCoverage:
    return MatchingCoverage(
        total_dimensions=len(checks),
        present_dimensions=sum(1 for _, ok in checks if ok),
        missing_dimensions=[label for label, ok in checks if not ok],
    )


def build_student_coverage(
    majors: list[str],
    year: str | None,
    experience_level: str | None,
    preferred_terms: list[str],
    availability_hours: float | None,
    preferred_locations: list[str],
    preferred_work_modes: list[WorkMode],
    skill_count: int,
    coursework_category_count: int,
) -> MatchingCoverage:
    return _coverage(
        [
            ("majors", bool(majors)),
            ("skills", skill_count > 0),
            ("coursework categories", coursework_category_count > 0),
            ("term", bool(preferred_terms)),
            ("hours", availability_hours is not None and availability_hours > 0),
            ("location/work mode", bool(preferred_locations or preferred_work_modes)),
            ("grad year", bool(_text(year))),
            ("experience", bool(_text(experience_level))),
        ]
    )


def build_internship_coverage(row: Row) -> MatchingCoverage:
    required_count = len(_as_list(row.get("required_skills")))
    preferred_count = len(_as_list(row.get("preferred_skills")))
    category_links = _as_list(row.get("internship_coursework_category_links"))
    hours = coerce_hours(row.get("hours_per_week"))
    has_location = bool(
        row.get("remote_allowed")
        or _text(row.get("location_city"))
        or _text(row.get("location_state"))
    )
    return _coverage(
        [
            ("majors", bool(parse_majors(row.get("majors")))),
            ("skills", required_count + preferred_count > 0),
            ("coursework categories", any(link.get("category_id") for link in category_links)),
            ("term", bool(_text(row.get("term")))),
            ("hours", hours is not None and hours > 0),
            ("location/remote", has_location),
            ("grad year", bool(_as_list(row.get("target_graduation_years")))),
            ("experience", bool(_text(row.get("experience_level")))),
        ]
    )


def build_student_preview_option(
    row: Row,
    skill_rows: Iterable[Row] = (),
    coursework_category_rows: Iterable[Row] = (),
    coursework_item_rows: Iterable[Row] = (),
    auth_user: Row | None = None,
) -> StudentPreviewOption:
    """Assemble a student's match profile and coverage from profile rows.

    Link rows are filtered to the student by ``student_id``, so the same
    batch of rows can be passed for every student.

    Args:
        row: ``student_profiles`` row.
        skill_rows: ``student_skill_items`` rows with an embedded ``skill``.
        coursework_category_rows: ``student_coursework_category_links`` rows
            with an embedded ``category``.
        coursework_item_rows: ``student_coursework_items`` rows.
        auth_user: Auth record with ``email`` and ``user_metadata``.

    Returns:
        StudentPreviewOption with the profile ready for matching.
    """
    user_id = row["user_id"]

    def own(rows: Iterable[Row]) -> list[Row]:
        return [item for item in rows if item.get("student_id") == user_id]

    own_skill_rows = own(skill_rows)
    own_category_rows = own(coursework_category_rows)

    skill_ids = unique(_string_ids(own_skill_rows, "skill_id"))
    skill_labels = unique(
        _extract_label(skill)
        for item in own_skill_rows
        for skill in _as_list(item.get("skill"))
    )
    category_ids = unique(_string_ids(own_category_rows, "category_id"))
    category_names = unique(
        _extract_label(category)
        for item in own_category_rows
        for category in _as_list(item.get("category"))
    )
    item_ids = unique(_string_ids(own(coursework_item_rows), "coursework_item_id"))

    major_name = canonical_major_name(row.get("major"))
    majors = parse_majors([major_name]) if major_name else parse_majors(row.get("majors"))

    signals = parse_student_preference_signals(row.get("interests"))
    preferred_terms = resolve_preferred_terms(
        signals.preferred_terms, row.get("availability_start_month")
    )
    availability = coerce_hours(row.get("availability_hours_per_week"))

    profile = StudentMatchProfile(
        majors=majors,
        year=row.get("year"),
        experience_level=row.get("experience_level"),
        skills=signals.skills,
        skill_ids=skill_ids,
        coursework=[],
        coursework_item_ids=item_ids,
        coursework_category_ids=category_ids,
        availability_hours_per_week=availability,
        preferred_terms=preferred_terms,
        preferred_locations=signals.preferred_locations,
        preferred_work_modes=signals.preferred_work_modes,
        remote_only=signals.remote_only,
    )

    auth_user = auth_user or {}
    metadata = auth_user.get("user_metadata") or {}
    email = auth_user.get("email")

    return StudentPreviewOption(
        user_id=user_id,
        name=name_from_auth_metadata(
            user_id,
            first_name=metadata.get("first_name"),
            last_name=metadata.get("last_name"),
            email=email,
        ),
        email=email or "Email not set",
        school=row.get("school"),
        major_label=majors[0] if majors else "Major not set",
        year=profile.year,
        experience_level=row.get("experience_level"),
        canonical_skill_labels=skill_labels,
        coursework_category_names=category_names,
        preferred_terms=preferred_terms,
        preferred_work_modes=signals.preferred_work_modes,
        preferred_locations=signals.preferred_locations,
        coverage=build_student_coverage(
            majors=majors,
            year=profile.year,
            experience_level=row.get("experience_level"),
            preferred_terms=preferred_terms,
            availability_hours=availability,
            preferred_locations=signals.preferred_locations,
            preferred_work_modes=signals.preferred_work_modes,
            skill_count=len(skill_ids),
            coursework_category_count=len(category_ids),
        ),
        profile=profile,
    )


def build_internship_preview_item(row: Row) -> InternshipPreviewItem:
    """Convert an ``internships`` row with its link rows into a preview item."""
    category_links = _as_list(row.get("internship_coursework_category_links"))

    match_input = InternshipMatchInput(
        id=row["id"],
        title=row.get("title"),
        description=row.get("description"),
        majors=row.get("majors"),
        target_graduation_years=row.get("target_graduation_years"),
        experience_level=row.get("experience_level"),
        category=row.get("role_category") or row.get("category"),
        hours_per_week=row.get("hours_per_week"),
        location=row.get("location"),
        work_mode=row.get("work_mode"),
        term=row.get("term"),
        required_skills=row.get("required_skills"),
        preferred_skills=row.get("preferred_skills"),
        recommended_coursework=row.get("recommended_coursework"),
        required_skill_ids=_string_ids(
            _as_list(row.get("internship_required_skill_items")), "skill_id"
        ),
        preferred_skill_ids=_string_ids(
            _as_list(row.get("internship_preferred_skill_items")), "skill_id"
        ),
        coursework_item_ids=_string_ids(
            _as_list(row.get("internship_coursework_items")), "coursework_item_id"
        ),
        coursework_category_ids=_string_ids(category_links, "category_id"),
        coursework_category_names=[
            name for link in category_links if (name := _extract_label(link.get("category")))
        ],
        created_at=row.get("created_at"),
    )

    return InternshipPreviewItem(
        id=row["id"],
        title=row.get("title"),
        company_name=row.get("company_name"),
        category=row.get("category"),
        role_category=row.get("role_category"),
        experience_level=row.get("experience_level"),
        location=row.get("location"),
        work_mode=row.get("work_mode"),
        term=row.get("term"),
        required_skills=match_input.required_skills,
        preferred_skills=match_input.preferred_skills,
        recommended_coursework=match_input.recommended_coursework,
        majors=parse_majors(row.get("majors")),
        target_graduation_years=match_input.target_graduation_years,
        hours_per_week=match_input.hours_per_week,
        coverage=build_internship_coverage(row),
        match_input=match_input,
    )


def _is_remote_row(row: Row) -> bool:
    work_mode = _text(row.get("work_mode")).lower()
    location = _text(row.get("location")).lower()
    return "remote" in work_mode or "remote" in location or bool(row.get("remote_allowed"))


def filter_internship_rows(
    rows: Iterable[Row], filters: MatchingPreviewFilters | None = None
) -> list[Row]:
    """Apply the admin preview filters to raw internship rows.

    Category and term are case-insensitive substring filters; ``remote_only``
    keeps listings whose work mode or location mentions remote, or that
    allow remote work.
    """
    filters = filters or MatchingPreviewFilters()
    category = _text(filters.category).lower()
    term = _text(filters.term).lower()

    kept = []
    for row in rows:
        if category:
            row_category = _text(row.get("category") or row.get("role_category")).lower()
            if category not in row_category:
                continue
        if filters.remote == "remote_only" and not _is_remote_row(row):
            continue
        if term and term not in _text(row.get("term")).lower():
            continue
        kept.append(row)
    return kept


def search_student_options(
    options: Iterable[StudentPreviewOption],
    query: str = "",
    limit: int = PREVIEW_STUDENT_LIMIT,
) -> list[StudentPreviewOption]:
    """Case-insensitive search over name, email, school, major, year and ID.

    Results are sorted by email and capped at ``limit``.
    """
    needle = query.strip().lower()
    matches = []
    for option in options:
        if needle:
            haystack = " ".join(
                [
                    option.name,
                    option.email,
                    option.school or "",
                    option.major_label,
                    option.year or "",
                    option.user_id,
                ]
            ).lower()
            if needle not in haystack:
                continue
        matches.append(option)

    matches.sort(key=lambda option: option.email)
    return matches[:limit]


def rank_internships_for_student_preview(
    internships: list[InternshipPreviewItem],
    profile: StudentMatchProfile,
    explain: bool = False,
) -> list[PreviewRankedItem]:
    """Rank preview items for one student using the default weights."""
    ranked = rank_internships(
        [item.match_input for item in internships],
        profile,
        DEFAULT_MATCH_WEIGHTS,
        explain=explain,
    )
    by_id = {item.id: item for item in internships}
    results = [
        PreviewRankedItem(internship=by_id[item.internship.id], match=item.match)
        for item in ranked
        if item.internship.id in by_id
    ]
    logger.info(f"Preview ranked {len(results)} of {len(internships)} internships")
    return results


def evaluate_single_preview_match(
    internship: InternshipPreviewItem, profile: StudentMatchProfile
) -> InternshipMatchResult:
    """Evaluate one preview item with the breakdown attached."""
    return evaluate_internship_match(
        internship.match_input, profile, DEFAULT_MATCH_WEIGHTS, explain=True
    )


def get_matching_report_summary() -> MatchingReportSummary:
    return MatchingReportSummary(
        matching_version=MATCHING_VERSION,
        signal_keys=expected_signal_keys(),
        signal_definitions=dict(SIGNAL_DEFINITIONS),
        weights=DEFAULT_MATCH_WEIGHTS,
        max_score=DEFAULT_MATCH_WEIGHTS.max_score,
        normalization_formula="normalized_score = total_score / max_score",
    )


def build_signal_contribution_rows(
    match: InternshipMatchResult,
) -> list[SignalContributionRow]:
    """Flatten a match breakdown into table rows; empty without a breakdown."""
    if match.breakdown is None:
        return []
    return [
        SignalContributionRow(
            signal_key=row.signal_key,
            weight=row.weight,
            raw_match_value=row.raw_match_value,
            points_awarded=row.points_awarded,
            evidence=row.evidence,
        )
        for row in match.breakdown.per_signal_contributions
    ]


def expected_signal_keys() -> list[SignalKey]:
    return list(SignalKey)
