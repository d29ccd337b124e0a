"""Tests for text normalization and field derivation."""

from internmatch.matching.normalize import (
    derive_location_name,
    derive_term,
    derive_work_mode,
    infer_skills,
    normalize_graduation_year,
    normalize_text,
    overlap_count,
    parse_internship_experience,
    parse_list,
    parse_majors,
    parse_student_experience,
    parse_work_mode,
    season_from_month,
    season_from_term,
)
from internmatch.schemas.enums import (
    InternshipExperienceLevel,
    StudentExperienceLevel,
    WorkMode,
)
from tests.test_utils import make_test_internship


class TestNormalizeText:
    def test_separators_collapse(self):
        assert normalize_text("  Financial_Modeling ") == "financial modeling"
        assert normalize_text("financial-modeling") == "financial modeling"
        assert normalize_text("Financial   Modeling") == "financial modeling"

    def test_empty_values(self):
        assert normalize_text(None) == ""
        assert normalize_text("") == ""


class TestParseList:
    def test_comma_delimited_string(self):
        assert parse_list("Excel, SQL ,, ") == ["excel", "sql"]

    def test_sequence(self):
        assert parse_list(["Data Science", " Statistics "]) == ["data science", "statistics"]

    def test_none_and_empty(self):
        assert parse_list(None) == []
        assert parse_list([]) == []

    def test_majors_use_list_parsing(self):
        assert parse_majors("Finance, Accounting") == ["finance", "accounting"]


class TestWorkMode:
    def test_parse_free_text(self):
        assert parse_work_mode("Hybrid (3 days)") == WorkMode.HYBRID
        assert parse_work_mode("onsite") == WorkMode.ON_SITE
        assert parse_work_mode("On-site") == WorkMode.ON_SITE
        assert parse_work_mode("In person") == WorkMode.ON_SITE
        assert parse_work_mode("Remote") == WorkMode.REMOTE

    def test_unknown_is_none(self):
        assert parse_work_mode("flexible") is None
        assert parse_work_mode(None) is None

    def test_explicit_field_wins(self):
        internship = make_test_internship(
            work_mode="remote", location="Chicago, IL (On-site)"
        )
        assert derive_work_mode(internship) == WorkMode.REMOTE

    def test_location_suffix_fallback(self):
        internship = make_test_internship(location="Chicago, IL (On-site)")
        assert derive_work_mode(internship) == WorkMode.ON_SITE

    def test_no_mode_anywhere(self):
        internship = make_test_internship(location="Chicago, IL")
        assert derive_work_mode(internship) is None


class TestDeriveTerm:
    def test_explicit_term(self):
        internship = make_test_internship(
            term="Fall 2026", description="Season: Summer 2026"
        )
        assert derive_term(internship) == "fall 2026"

    def test_description_season_line(self):
        internship = make_test_internship(description="Intro\nSeason: Summer 2026\n")
        assert derive_term(internship) == "summer 2026"

    def test_missing(self):
        assert derive_term(make_test_internship()) == ""


class TestDeriveLocationName:
    def test_strips_work_mode_suffix(self):
        internship = make_test_internship(location="New York, NY (Hybrid)")
        assert derive_location_name(internship) == "new york, ny"

    def test_missing(self):
        assert derive_location_name(make_test_internship()) == ""


class TestSeasons:
    def test_season_names(self):
        assert season_from_term("summer 2026") == "summer"
        assert season_from_term("autumn 2026") == "fall"
        assert season_from_term("spring") == "spring"

    def test_month_names(self):
        assert season_from_term("june 2026") == "summer"
        assert season_from_term("starts in sept") == "fall"
        assert season_from_term("jan 2027") == "winter"

    def test_unrecognized_passes_through(self):
        assert season_from_term("q3 2026") == "q3 2026"
        assert season_from_term("") == ""

    def test_season_from_month(self):
        assert season_from_month("June") == "summer"
        assert season_from_month("sep") == "fall"
        assert season_from_month("December") == "winter"
        assert season_from_month("april") == "spring"

    def test_season_from_unknown_month(self):
        assert season_from_month("") == ""
        assert season_from_month(None) == ""
        assert season_from_month("someday") == ""


class TestInferSkills:
    def test_union_of_lists_and_description_lines(self):
        internship = make_test_internship(
            required_skills=["SQL"],
            description="Required skills: python, sql\nPreferred skills: Tableau",
        )

        skills = infer_skills(internship)

        assert skills.required == ["sql", "python"]
        assert skills.preferred == ["tableau"]

    def test_canonical_ids_deduplicated(self):
        internship = make_test_internship(required_skill_ids=["s1", "s2", "s1"])
        assert infer_skills(internship).required_ids == ["s1", "s2"]


class TestScalars:
    def test_graduation_year_whitespace_removed(self):
        assert normalize_graduation_year("20 28") == "2028"
        assert normalize_graduation_year(None) == ""

    def test_internship_experience(self):
        assert parse_internship_experience("Entry level") == InternshipExperienceLevel.ENTRY
        assert parse_internship_experience("MID") == InternshipExperienceLevel.MID
        assert parse_internship_experience("expert") is None
        assert parse_internship_experience(None) is None

    def test_student_experience(self):
        assert parse_student_experience("Projects") == StudentExperienceLevel.PROJECTS
        assert parse_student_experience("internship") == StudentExperienceLevel.INTERNSHIP
        assert parse_student_experience("") is None

    def test_overlap_counts_repeats(self):
        assert overlap_count(["a", "a", "b"], ["a"]) == 2
        assert overlap_count([], ["a"]) == 0
