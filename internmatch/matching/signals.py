"""Per-signal scorers.

Each scorer looks at one dimension of fit and returns a SignalOutcome with
its raw match value, the unrounded points (weight x raw value), an optional
reason detail and gap, and structured details for explain mode. When
canonical IDs exist on both sides of a signal the text path is not consulted.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from internmatch.matching.normalize import overlap_count, ratio
from internmatch.matching.resolve import ResolvedInternship, ResolvedProfile
from internmatch.schemas.match import SignalKey
from internmatch.utils import format_number

CATEGORY_FALLBACK_RATIO = 0.5


@dataclass
class SignalOutcome:
    key: SignalKey
    label: str
    raw_value: float = 0.0
    points: float = 0.0
    detail: str | None = None
    gap: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def reason(self) -> str | None:
        """'<label>: <detail> (+<points>)', only when points were awarded."""
        if self.points <= 0 or not self.detail:
            return None
        return f"{self.label}: {self.detail} (+{self.points:.1f})"


def _split_overlap(
    required: list[str], available: list[str]
) -> tuple[list[str], list[str]]:
    available_set = set(available)
    matched = [item for item in required if item in available_set]
    missing = [item for item in required if item not in available_set]
    return matched, missing


def score_required_skills(
    internship: ResolvedInternship, profile: ResolvedProfile, weight: float
) -> SignalOutcome:
    outcome = SignalOutcome(SignalKey.SKILLS_REQUIRED, "Required skills")
    required_ids = internship.required_skill_ids

    if required_ids and profile.skill_ids:
        matched, missing = _split_overlap(required_ids, profile.skill_ids)
        outcome.raw_value = ratio(len(matched), len(required_ids))
        outcome.details = {
            "path": "canonical",
            "matched": len(matched),
            "required": len(required_ids),
            "matched_ids": matched,
        }
        if missing:
            outcome.gap = f"Missing required skills: {len(missing)} canonical skill(s)"
    elif internship.required_skills:
        required = internship.required_skills
        matched, missing = _split_overlap(required, profile.skill_pool)
        outcome.raw_value = ratio(len(matched), len(required))
        outcome.details = {
            "path": "text",
            "matched": len(matched),
            "required": len(required),
            "matched_skills": matched,
        }
        if missing:
            outcome.gap = f"Missing required skills: {', '.join(missing)}"
    else:
        outcome.details = {"path": "none"}
        return outcome

    outcome.points = weight * outcome.raw_value
    outcome.detail = f"{outcome.details['matched']}/{outcome.details['required']} matched"
    return outcome


def score_preferred_skills(
    internship: ResolvedInternship, profile: ResolvedProfile, weight: float
) -> SignalOutcome:
    """Same canonical-first shape as required skills, but misses are not gaps."""
    outcome = SignalOutcome(SignalKey.SKILLS_PREFERRED, "Preferred skills")
    preferred_ids = internship.preferred_skill_ids

    if preferred_ids and profile.skill_ids:
        matched, _ = _split_overlap(preferred_ids, profile.skill_ids)
        outcome.raw_value = ratio(len(matched), len(preferred_ids))
        outcome.details = {
            "path": "canonical",
            "matched": len(matched),
            "preferred": len(preferred_ids),
            "matched_ids": matched,
        }
    elif internship.preferred_skills:
        preferred = internship.preferred_skills
        matched, _ = _split_overlap(preferred, profile.skill_pool)
        outcome.raw_value = ratio(len(matched), len(preferred))
        outcome.details = {
            "path": "text",
            "matched": len(matched),
            "preferred": len(preferred),
            "matched_skills": matched,
        }
    else:
        outcome.details = {"path": "none"}
        return outcome

    outcome.points = weight * outcome.raw_value
    outcome.detail = f"{outcome.details['matched']}/{outcome.details['preferred']} matched"
    return outcome


def score_coursework(
    internship: ResolvedInternship, profile: ResolvedProfile, weight: float
) -> SignalOutcome:
    """Score exactly one tier: category IDs, else item IDs, else coursework text."""
    outcome = SignalOutcome(SignalKey.COURSEWORK_ALIGNMENT, "Coursework alignment")

    if internship.coursework_category_ids and profile.coursework_category_ids:
        wanted, have, path, noun = (
            internship.coursework_category_ids,
            profile.coursework_category_ids,
            "canonical_category",
            "coursework categories",
        )
    elif internship.coursework_item_ids and profile.coursework_item_ids:
        wanted, have, path, noun = (
            internship.coursework_item_ids,
            profile.coursework_item_ids,
            "canonical_item",
            "coursework items",
        )
    elif internship.coursework:
        wanted, have, path, noun = (
            internship.coursework,
            profile.coursework,
            "text",
            "courses",
        )
    else:
        outcome.details = {"path": "none"}
        return outcome

    matched, _ = _split_overlap(wanted, have)
    outcome.raw_value = ratio(len(matched), len(wanted))
    outcome.points = weight * outcome.raw_value
    outcome.details = {
        "path": path,
        "matched": len(matched),
        "recommended": len(wanted),
        "matched_items": matched,
    }
    if path == "canonical_category":
        names_by_id = internship.category_names_by_id
        names = [names_by_id[item] for item in matched if item in names_by_id]
        if names:
            outcome.details["matched_names"] = names
    outcome.detail = f"{len(matched)}/{len(wanted)} {noun} matched"
    return outcome


def score_major_category(
    internship: ResolvedInternship, profile: ResolvedProfile, weight: float
) -> SignalOutcome:
    outcome = SignalOutcome(SignalKey.MAJOR_CATEGORY_ALIGNMENT, "Major/category alignment")
    if not profile.majors:
        outcome.details = {"path": "none"}
        return outcome

    major_hits = overlap_count(internship.majors, profile.majors)
    category = internship.category
    category_hit = bool(category) and any(major in category for major in profile.majors)

    if major_hits > 0:
        outcome.raw_value = ratio(major_hits, max(1, len(internship.majors)))
        outcome.detail = f"{major_hits} major overlap"
        outcome.details = {
            "path": "major",
            "matched": major_hits,
            "internship_majors": len(internship.majors),
        }
    elif category_hit:
        outcome.raw_value = CATEGORY_FALLBACK_RATIO
        outcome.detail = f"category match ({category})"
        outcome.details = {"path": "category", "category": category}
    else:
        outcome.details = {"path": "none", "category": category}

    outcome.points = weight * outcome.raw_value
    if outcome.points <= 0:
        outcome.gap = "No major/category alignment"
    return outcome


def score_graduation_year(
    internship: ResolvedInternship, profile: ResolvedProfile, weight: float
) -> SignalOutcome:
    """All-or-nothing; a mismatching year has already been excluded."""
    outcome = SignalOutcome(SignalKey.GRADUATION_YEAR_ALIGNMENT, "Graduation year fit")
    if not internship.graduation_years or not profile.year:
        outcome.details = {"path": "none"}
        return outcome

    outcome.raw_value = 1.0
    outcome.points = weight
    outcome.detail = f"{profile.year} is a target year"
    outcome.details = {
        "path": "year",
        "student_year": profile.year,
        "target_years": list(internship.graduation_years),
    }
    return outcome


def score_experience(
    internship: ResolvedInternship, profile: ResolvedProfile, weight: float
) -> SignalOutcome:
    outcome = SignalOutcome(SignalKey.EXPERIENCE_ALIGNMENT, "Experience fit")
    if internship.experience is None or profile.experience is None:
        outcome.details = {"path": "none"}
        return outcome

    student = profile.experience.name.lower()
    required = internship.experience.name.lower()
    outcome.raw_value = 1.0
    outcome.points = weight
    outcome.detail = f"{student} meets {required}"
    outcome.details = {"path": "ordinal", "student": student, "required": required}
    return outcome


def score_availability(
    internship: ResolvedInternship, profile: ResolvedProfile, weight: float
) -> SignalOutcome:
    """Continuous closeness of hours, on top of the hard ceiling."""
    outcome = SignalOutcome(SignalKey.AVAILABILITY, "Availability fit")
    hours = internship.hours_per_week
    available = profile.availability_hours_per_week
    if hours is None or available is None:
        outcome.details = {"path": "none"}
        return outcome

    difference = abs(hours - available)
    outcome.raw_value = max(0.0, 1 - difference / max(1, available))
    outcome.points = weight * outcome.raw_value
    outcome.detail = f"{format_number(hours)} hrs/week"
    outcome.details = {
        "path": "hours",
        "internship_hours": hours,
        "student_hours": available,
        "difference": difference,
    }
    return outcome


def score_location_mode(
    internship: ResolvedInternship, profile: ResolvedProfile, weight: float
) -> SignalOutcome:
    outcome = SignalOutcome(SignalKey.LOCATION_MODE_PREFERENCE, "Work mode fit")
    mode = internship.work_mode
    if mode is None:
        outcome.details = {"path": "none"}
        return outcome

    preferred = profile.preferred_work_modes
    hit = not preferred or mode in preferred
    outcome.raw_value = 1.0 if hit else 0.0
    outcome.points = weight * outcome.raw_value
    outcome.detail = mode.value
    outcome.details = {
        "path": "mode",
        "work_mode": mode.value,
        "preferred": [item.value for item in preferred],
    }
    return outcome


SignalScorer = Callable[[ResolvedInternship, ResolvedProfile, float], SignalOutcome]

# Breakdown order follows SignalKey order.
SIGNAL_SCORERS: dict[SignalKey, SignalScorer] = {
    SignalKey.SKILLS_REQUIRED: score_required_skills,
    SignalKey.SKILLS_PREFERRED: score_preferred_skills,
    SignalKey.COURSEWORK_ALIGNMENT: score_coursework,
    SignalKey.MAJOR_CATEGORY_ALIGNMENT: score_major_category,
    SignalKey.GRADUATION_YEAR_ALIGNMENT: score_graduation_year,
    SignalKey.EXPERIENCE_ALIGNMENT: score_experience,
    SignalKey.AVAILABILITY: score_availability,
    SignalKey.LOCATION_MODE_PREFERENCE: score_location_mode,
}
