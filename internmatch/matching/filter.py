"""Hard eligibility filters for internship matching.

Each check returns the gap sentence explaining the exclusion, or None when
the listing passes. Checks only fire when both sides carry the data they
compare; missing data never excludes a listing.
"""

from collections.abc import Callable

from internmatch.matching.resolve import ResolvedInternship, ResolvedProfile
from internmatch.schemas.match import HardFilter
from internmatch.utils import format_number

FilterCheck = Callable[[ResolvedInternship, ResolvedProfile], str | None]


def check_remote_only(
    internship: ResolvedInternship, profile: ResolvedProfile
) -> str | None:
    if profile.remote_only and internship.is_in_person:
        return "Requires in-person work but your profile is remote-only."
    return None


def check_work_mode(
    internship: ResolvedInternship, profile: ResolvedProfile
) -> str | None:
    mode = internship.work_mode
    if profile.preferred_work_modes and mode and mode not in profile.preferred_work_modes:
        return f"Work mode mismatch ({mode.value})."
    return None


def check_term(internship: ResolvedInternship, profile: ResolvedProfile) -> str | None:
    """Compare seasons, so 'Summer 2026' satisfies a 'summer' preference."""
    if profile.preferred_seasons and internship.term:
        if internship.season not in profile.preferred_seasons:
            return f"Term mismatch ({internship.term})."
    return None


def check_availability(
    internship: ResolvedInternship, profile: ResolvedProfile
) -> str | None:
    """Strict ceiling: internship hours may not exceed the student's availability."""
    hours = internship.hours_per_week
    available = profile.availability_hours_per_week
    if hours is not None and available is not None and hours > available:
        return (
            f"Hours exceed availability "
            f"({format_number(hours)} > {format_number(available)} hrs/week)."
        )
    return None


def check_location(
    internship: ResolvedInternship, profile: ResolvedProfile
) -> str | None:
    """In-person listings must sit in (or contain) a preferred location."""
    if not internship.is_in_person:
        return None

    name = internship.location_name
    if not profile.preferred_locations or not name:
        return None

    if any(
        preferred in name or name in preferred
        for preferred in profile.preferred_locations
    ):
        return None
    return f"In-person location mismatch ({name})."


def check_graduation_year(
    internship: ResolvedInternship, profile: ResolvedProfile
) -> str | None:
    if internship.graduation_years and profile.year:
        if profile.year not in internship.graduation_years:
            targets = ", ".join(internship.graduation_years)
            return f"Graduation year mismatch ({profile.year} not in {targets})."
    return None


def check_experience(
    internship: ResolvedInternship, profile: ResolvedProfile
) -> str | None:
    required = internship.experience
    actual = profile.experience
    if required is not None and actual is not None and actual < required:
        return (
            f"Experience level below requirement "
            f"({actual.name.lower()} < {required.name.lower()})."
        )
    return None


HARD_FILTERS: list[tuple[HardFilter, FilterCheck]] = [
    (HardFilter.REMOTE_ONLY, check_remote_only),
    (HardFilter.TERM, check_term),
    (HardFilter.AVAILABILITY, check_availability),
    (HardFilter.LOCATION, check_location),
    (HardFilter.WORK_MODE, check_work_mode),
    (HardFilter.GRADUATION_YEAR, check_graduation_year),
    (HardFilter.EXPERIENCE, check_experience),
]


def find_exclusion(
    internship: ResolvedInternship,
    profile: ResolvedProfile,
) -> tuple[HardFilter, str] | None:
    """Run the hard filters in order and stop at the first failure.

    Args:
        internship: Resolved internship view.
        profile: Resolved student profile view.

    Returns:
        (filter, gap) for the first failing filter, or None if all pass.
    """
    for hard_filter, check in HARD_FILTERS:
        gap = check(internship, profile)
        if gap is not None:
            return hard_filter, gap
    return None
