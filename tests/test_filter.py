"""Tests for hard eligibility filters."""

from internmatch.matching.evaluator import evaluate_internship_match
from internmatch.matching.filter import HARD_FILTERS, find_exclusion
from internmatch.matching.resolve import resolve_internship, resolve_profile
from internmatch.schemas.match import HardFilter
from tests.test_utils import (
    make_finance_internship,
    make_finance_student,
    make_test_internship,
    make_test_profile,
)


def _exclusion(internship, profile):
    return find_exclusion(resolve_internship(internship), resolve_profile(profile))


class TestRemoteOnly:
    def test_in_person_listing_excluded(self):
        internship = make_test_internship(location="Austin, TX (On-site)")
        profile = make_test_profile(remote_only=True)

        result = evaluate_internship_match(internship, profile)

        assert result.eligible is False
        assert result.excluded_by == HardFilter.REMOTE_ONLY
        assert result.gaps == ["Requires in-person work but your profile is remote-only."]

    def test_hybrid_counts_as_in_person(self):
        internship = make_test_internship(work_mode="hybrid")
        profile = make_test_profile(remote_only=True)

        assert _exclusion(internship, profile)[0] == HardFilter.REMOTE_ONLY

    def test_remote_listing_passes(self):
        internship = make_test_internship(location="Remote (Remote)")
        profile = make_test_profile(remote_only=True)

        assert _exclusion(internship, profile) is None

    def test_unknown_mode_passes(self):
        profile = make_test_profile(remote_only=True)
        assert _exclusion(make_test_internship(location="Austin, TX"), profile) is None


class TestWorkMode:
    def test_mode_outside_preferences(self):
        internship = make_test_internship(work_mode="hybrid")
        profile = make_test_profile(preferred_work_modes=["remote"])

        result = evaluate_internship_match(internship, profile)

        assert result.excluded_by == HardFilter.WORK_MODE
        assert result.gaps == ["Work mode mismatch (hybrid)."]

    def test_no_preferences_accepts_any_mode(self):
        internship = make_test_internship(work_mode="on-site")
        assert _exclusion(internship, make_test_profile()) is None


class TestTerm:
    def test_season_mismatch(self, finance_student):
        internship = make_test_internship(term="Fall 2026")

        result = evaluate_internship_match(internship, finance_student)

        assert result.excluded_by == HardFilter.TERM
        assert result.gaps == ["Term mismatch (fall 2026)."]

    def test_season_compared_not_full_term(self):
        internship = make_test_internship(term="Summer 2027")
        profile = make_test_profile(preferred_terms=["Summer"])

        assert _exclusion(internship, profile) is None

    def test_month_term_maps_to_season(self):
        internship = make_test_internship(term="June 2026")
        profile = make_test_profile(preferred_terms=["summer"])

        assert _exclusion(internship, profile) is None

    def test_listing_without_term_passes(self):
        profile = make_test_profile(preferred_terms=["summer"])
        assert _exclusion(make_test_internship(), profile) is None


class TestAvailability:
    def test_hours_above_availability(self):
        internship = make_test_internship(hours_per_week=35)
        profile = make_test_profile(availability_hours_per_week=20)

        result = evaluate_internship_match(internship, profile)

        assert result.excluded_by == HardFilter.AVAILABILITY
        assert result.gaps == ["Hours exceed availability (35 > 20 hrs/week)."]

    def test_equal_hours_pass(self):
        internship = make_test_internship(hours_per_week=20)
        profile = make_test_profile(availability_hours_per_week=20)

        assert _exclusion(internship, profile) is None

    def test_fractional_hours_formatting(self):
        internship = make_test_internship(hours_per_week=20.5)
        profile = make_test_profile(availability_hours_per_week=20)

        _, gap = _exclusion(internship, profile)

        assert gap == "Hours exceed availability (20.5 > 20 hrs/week)."


class TestLocation:
    def test_in_person_outside_preferred_locations(self, finance_student):
        internship = make_test_internship(
            location="Chicago, IL (On-site)", majors=["operations", "business"]
        )

        result = evaluate_internship_match(internship, finance_student)

        assert result.eligible is False
        assert result.excluded_by == HardFilter.LOCATION
        assert result.gaps == ["In-person location mismatch (chicago, il)."]

    def test_containment_either_way(self):
        internship = make_test_internship(location="New York, NY (Hybrid)")
        profile = make_test_profile(preferred_locations=["New York"])

        assert _exclusion(internship, profile) is None

    def test_remote_listing_ignores_location(self):
        internship = make_test_internship(location="Chicago, IL (Remote)")
        profile = make_test_profile(preferred_locations=["boston"])

        assert _exclusion(internship, profile) is None


class TestGraduationYear:
    def test_year_not_targeted(self):
        internship = make_test_internship(target_graduation_years=["2027"])
        profile = make_test_profile(year="2028")

        result = evaluate_internship_match(internship, profile)

        assert result.excluded_by == HardFilter.GRADUATION_YEAR
        assert result.gaps == ["Graduation year mismatch (2028 not in 2027)."]

    def test_lists_every_target_year(self):
        internship = make_test_internship(target_graduation_years="2026, 2027")
        profile = make_test_profile(year=2028)

        _, gap = _exclusion(internship, profile)

        assert gap == "Graduation year mismatch (2028 not in 2026, 2027)."

    def test_missing_year_passes(self):
        internship = make_test_internship(target_graduation_years=["2027"])
        assert _exclusion(internship, make_test_profile()) is None


class TestExperience:
    def test_below_requirement(self):
        internship = make_test_internship(experience_level="mid")
        profile = make_test_profile(experience_level="none")

        result = evaluate_internship_match(internship, profile)

        assert result.excluded_by == HardFilter.EXPERIENCE
        assert result.gaps == ["Experience level below requirement (none < mid)."]

    def test_meets_requirement(self):
        internship = make_test_internship(experience_level="mid")
        profile = make_test_profile(experience_level="projects")

        assert _exclusion(internship, profile) is None

    def test_unparseable_level_passes(self):
        internship = make_test_internship(experience_level="expert")
        profile = make_test_profile(experience_level="none")

        assert _exclusion(internship, profile) is None


class TestFilterOrder:
    def test_first_failure_wins(self):
        internship = make_test_internship(
            location="Chicago, IL (On-site)",
            hours_per_week=35,
            target_graduation_years=["2027"],
        )
        profile = make_finance_student(year="2028")

        result = evaluate_internship_match(internship, profile)

        assert result.excluded_by == HardFilter.AVAILABILITY
        assert len(result.gaps) == 1

    def test_order_matches_enum(self):
        assert [hard_filter for hard_filter, _ in HARD_FILTERS] == list(HardFilter)

    def test_passing_listing_has_no_exclusion(self):
        assert _exclusion(make_finance_internship(), make_finance_student()) is None
