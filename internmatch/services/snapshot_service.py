"""Match snapshot recorded on an application at submit time."""

import logging
import math
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field

from internmatch.config import MATCHING_VERSION
from internmatch.matching.evaluator import evaluate_internship_match
from internmatch.schemas.internship import InternshipMatchInput, coerce_text_list
from internmatch.schemas.student import StudentMatchProfile
from internmatch.services.preferences import resolve_preferred_terms

logger = logging.getLogger(__name__)


class ApplicationMatchSnapshot(BaseModel):
    match_score: int = Field(description="Match score rounded half up to a whole number")
    match_reasons: list[str] = Field(default_factory=list)
    match_gaps: list[str] = Field(default_factory=list)
    matching_version: str = MATCHING_VERSION


def build_application_match_snapshot(
    internship: Mapping[str, Any],
    profile: Mapping[str, Any] | None,
) -> ApplicationMatchSnapshot:
    """Evaluate an application's listing against the applicant's profile.

    The listing's ``role_category`` becomes the match category. When the
    profile has no explicit preferred terms, the season of
    ``availability_start_month`` is used instead. A missing profile is
    treated as empty.

    Args:
        internship: Internship row as stored.
        profile: Applicant profile row, or None.

    Returns:
        ApplicationMatchSnapshot stamped with the current matching version.
    """
    profile = profile or {}

    internship_input = InternshipMatchInput(
        id=internship["id"],
        title=internship.get("title"),
        majors=internship.get("majors"),
        hours_per_week=internship.get("hours_per_week"),
        location=internship.get("location"),
        description=internship.get("description"),
        work_mode=internship.get("work_mode"),
        term=internship.get("term"),
        category=internship.get("role_category"),
        required_skills=internship.get("required_skills"),
        preferred_skills=internship.get("preferred_skills"),
    )

    explicit_terms = coerce_text_list(profile.get("preferred_terms"))
    profile_input = StudentMatchProfile(
        majors=profile.get("majors"),
        skills=profile.get("skills"),
        coursework=profile.get("coursework"),
        availability_hours_per_week=profile.get("availability_hours_per_week"),
        preferred_terms=resolve_preferred_terms(
            explicit_terms, profile.get("availability_start_month")
        ),
        preferred_locations=profile.get("preferred_locations"),
        preferred_work_modes=profile.get("preferred_work_modes"),
        remote_only=bool(profile.get("remote_only")),
    )

    match = evaluate_internship_match(internship_input, profile_input)
    logger.debug(f"Snapshot for internship {internship_input.id}: score {match.score}")

    return ApplicationMatchSnapshot(
        match_score=math.floor(match.score + 0.5),
        match_reasons=match.reasons,
        match_gaps=match.gaps,
    )
