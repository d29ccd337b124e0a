"""Ranking of internships for one student profile."""

import logging
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from typing import Any

from internmatch.matching.evaluator import (
    as_internship,
    as_profile,
    evaluate_internship_match,
)
from internmatch.schemas.internship import InternshipMatchInput
from internmatch.schemas.match import MatchWeights, RankedInternship
from internmatch.schemas.student import StudentMatchProfile

logger = logging.getLogger(__name__)


def created_at_timestamp(internship: InternshipMatchInput) -> float:
    """Recency key; listings without a timestamp count as the epoch.

    Naive datetimes are read as UTC.
    """
    created_at = internship.created_at
    if created_at is None:
        return 0.0
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=UTC)
    return created_at.timestamp()


def rank_internships(
    internships: Iterable[InternshipMatchInput | Mapping[str, Any]],
    profile: StudentMatchProfile | Mapping[str, Any],
    weights: MatchWeights | None = None,
    explain: bool = False,
    top_n: int | None = None,
) -> list[RankedInternship]:
    """Evaluate every internship, drop ineligible ones, and sort the rest.

    Args:
        internships: Internship snapshots to rank.
        profile: Student profile to match against.
        weights: Signal weights (None uses the defaults).
        explain: Attach per-signal breakdowns to each match.
        top_n: Maximum number of results to return (None for all).

    Returns:
        List of RankedInternship sorted by score descending, then by
        created_at descending.
    """
    profile = as_profile(profile)

    evaluated = []
    for item in internships:
        internship = as_internship(item)
        match = evaluate_internship_match(internship, profile, weights, explain=explain)
        evaluated.append(RankedInternship(internship=internship, match=match))

    results = [item for item in evaluated if item.match.eligible]
    logger.debug(
        f"{len(results)} of {len(evaluated)} internships passed eligibility filters"
    )

    results.sort(
        key=lambda r: (r.match.score, created_at_timestamp(r.internship)),
        reverse=True,
    )

    if top_n is not None:
        results = results[:top_n]

    return results
