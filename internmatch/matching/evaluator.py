"""Rule-based internship/student match evaluation."""

import logging
from collections.abc import Mapping
from typing import Any

from internmatch.matching.filter import find_exclusion
from internmatch.matching.normalize import clean_sentence
from internmatch.matching.resolve import resolve_internship, resolve_profile
from internmatch.matching.signals import SIGNAL_SCORERS, SignalOutcome
from internmatch.schemas.internship import InternshipMatchInput
from internmatch.schemas.match import (
    DEFAULT_MATCH_WEIGHTS,
    HardFilter,
    InternshipMatchResult,
    MatchBreakdown,
    MatchWeights,
    SignalContribution,
)
from internmatch.schemas.student import StudentMatchProfile
from internmatch.utils import round_to

logger = logging.getLogger(__name__)


def as_internship(value: InternshipMatchInput | Mapping[str, Any]) -> InternshipMatchInput:
    if isinstance(value, InternshipMatchInput):
        return value
    return InternshipMatchInput.model_validate(value)


def as_profile(value: StudentMatchProfile | Mapping[str, Any]) -> StudentMatchProfile:
    if isinstance(value, StudentMatchProfile):
        return value
    return StudentMatchProfile.model_validate(value)


def normalized_score(score: float, max_score: float) -> float:
    """score / max_score clamped to [0, 1], 4 decimals; 0 when max_score is 0."""
    if max_score <= 0:
        return 0.0
    return round_to(min(1.0, max(0.0, score / max_score)), 4)


def render_evidence(details: Mapping[str, Any]) -> list[str]:
    """Render structured details as 'key=value' strings for admin debugging."""
    evidence = []
    for key, value in details.items():
        if isinstance(value, (list, tuple)):
            value = ",".join(str(item) for item in value)
        evidence.append(f"{key}={value}")
    return evidence


def _contribution(outcome: SignalOutcome, weight: float) -> SignalContribution:
    return SignalContribution(
        signal_key=outcome.key,
        weight=weight,
        raw_match_value=round_to(outcome.raw_value, 4),
        points_awarded=round_to(outcome.points, 3),
        details=outcome.details,
        evidence=render_evidence(outcome.details),
    )


def _ineligible_result(
    internship_id: str,
    hard_filter: HardFilter,
    gap: str,
    max_score: float,
    explain: bool,
) -> InternshipMatchResult:
    breakdown = None
    if explain:
        breakdown = MatchBreakdown(
            per_signal_contributions=[],
            total_score=0.0,
            max_score=max_score,
            normalized_score=0.0,
        )
    return InternshipMatchResult(
        internship_id=internship_id,
        score=0.0,
        reasons=[],
        gaps=[clean_sentence(gap)],
        eligible=False,
        excluded_by=hard_filter,
        max_score=max_score,
        normalized_score=0.0,
        breakdown=breakdown,
    )


def evaluate_internship_match(
    internship: InternshipMatchInput | Mapping[str, Any],
    profile: StudentMatchProfile | Mapping[str, Any],
    weights: MatchWeights | None = None,
    explain: bool = False,
) -> InternshipMatchResult:
    """Score one internship against one student profile.

    Hard filters run first, in order; the first failure returns an ineligible
    result with score 0 and a single gap. Survivors are scored on eight
    weighted signals.

    Args:
        internship: Internship snapshot (model or raw mapping).
        profile: Student profile (model or raw mapping).
        weights: Signal weights (defaults to DEFAULT_MATCH_WEIGHTS).
        explain: Attach a per-signal breakdown to the result.

    Returns:
        InternshipMatchResult. Inputs are never mutated.
    """
    internship = as_internship(internship)
    profile = as_profile(profile)
    weights = weights or DEFAULT_MATCH_WEIGHTS
    max_score = weights.max_score

    resolved_internship = resolve_internship(internship)
    resolved_profile = resolve_profile(profile)

    exclusion = find_exclusion(resolved_internship, resolved_profile)
    if exclusion is not None:
        hard_filter, gap = exclusion
        logger.debug(f"Internship {internship.id} excluded by {hard_filter.value}: {gap}")
        return _ineligible_result(internship.id, hard_filter, gap, max_score, explain)

    outcomes = [
        scorer(resolved_internship, resolved_profile, weights.weight_for(key))
        for key, scorer in SIGNAL_SCORERS.items()
    ]

    # Score is the sum of the rounded per-signal points so the breakdown adds up.
    score = round_to(sum(round_to(outcome.points, 3) for outcome in outcomes), 3)

    ranked_outcomes = sorted(
        (outcome for outcome in outcomes if outcome.reason),
        key=lambda outcome: outcome.points,
        reverse=True,
    )
    reasons = [outcome.reason for outcome in ranked_outcomes]
    gaps = [clean_sentence(outcome.gap) for outcome in outcomes if outcome.gap]

    breakdown = None
    if explain:
        breakdown = MatchBreakdown(
            per_signal_contributions=[
                _contribution(outcome, weights.weight_for(outcome.key))
                for outcome in outcomes
            ],
            total_score=score,
            max_score=max_score,
            normalized_score=normalized_score(score, max_score),
        )

    logger.debug(f"Internship {internship.id} scored {score}/{max_score}")

    return InternshipMatchResult(
        internship_id=internship.id,
        score=score,
        reasons=reasons,
        gaps=gaps,
        eligible=True,
        max_score=max_score,
        normalized_score=normalized_score(score, max_score),
        breakdown=breakdown,
    )
