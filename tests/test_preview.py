"""Tests for the admin matching preview service."""

import json

from internmatch.schemas.enums import WorkMode
from internmatch.schemas.match import SignalKey
from internmatch.services.preview_service import (
    MatchingPreviewFilters,
    build_internship_preview_item,
    build_signal_contribution_rows,
    build_student_preview_option,
    evaluate_single_preview_match,
    expected_signal_keys,
    filter_internship_rows,
    get_matching_report_summary,
    name_from_auth_metadata,
    rank_internships_for_student_preview,
    search_student_options,
)


def make_student_row(user_id="user-1234567890", **overrides):
    row = {
        "user_id": user_id,
        "school": "State University",
        "major": {"name": "Finance"},
        "majors": ["economics"],
        "year": "2027",
        "experience_level": "projects",
        "interests": json.dumps(
            {
                "skills": ["Excel"],
                "preferredWorkModes": ["hybrid"],
                "preferredLocations": ["New York"],
            }
        ),
        "availability_start_month": "June",
        "availability_hours_per_week": 20,
    }
    row.update(overrides)
    return row


def make_internship_row(id="int-1", **overrides):
    row = {
        "id": id,
        "title": "Finance Intern",
        "company_name": "Acme Capital",
        "description": "Deal support.",
        "majors": ["finance"],
        "target_graduation_years": ["2027"],
        "experience_level": "entry",
        "role_category": "Finance",
        "category": "Business",
        "hours_per_week": 20,
        "location": "New York, NY (Hybrid)",
        "location_city": "New York",
        "location_state": "NY",
        "remote_allowed": False,
        "work_mode": "hybrid",
        "term": "Summer 2026",
        "required_skills": ["excel"],
        "preferred_skills": None,
        "recommended_coursework": None,
        "internship_required_skill_items": [{"skill_id": "skill-excel"}, {"skill_id": None}],
        "internship_preferred_skill_items": [],
        "internship_coursework_items": [{"coursework_item_id": "item-1"}],
        "internship_coursework_category_links": [
            {"category_id": "cat-1", "category": {"name": "Corporate Finance"}}
        ],
    }
    row.update(overrides)
    return row


SKILL_ROWS = [
    {"student_id": "user-1234567890", "skill_id": "skill-excel", "skill": {"label": "Excel"}},
    {"student_id": "user-1234567890", "skill_id": "skill-excel", "skill": [{"label": "Excel"}]},
    {"student_id": "someone-else", "skill_id": "skill-sql", "skill": {"label": "SQL"}},
]
CATEGORY_ROWS = [
    {"student_id": "user-1234567890", "category_id": "cat-1", "category": {"name": "Corporate Finance"}},
]
ITEM_ROWS = [
    {"student_id": "user-1234567890", "coursework_item_id": "item-1"},
    {"student_id": "user-1234567890", "coursework_item_id": None},
]


class TestNameFromAuthMetadata:
    def test_first_and_last(self):
        assert name_from_auth_metadata("id", first_name=" Ada ", last_name="Lovelace") == "Ada Lovelace"

    def test_email_local_part(self):
        assert name_from_auth_metadata("id", email="ada@example.com") == "ada"

    def test_short_id_fallback(self):
        assert name_from_auth_metadata("abcdef123456") == "Student abcdef12"


class TestStudentPreviewOption:
    def test_profile_built_from_rows(self):
        option = build_student_preview_option(
            make_student_row(),
            SKILL_ROWS,
            CATEGORY_ROWS,
            ITEM_ROWS,
            auth_user={"email": "ada@example.com", "user_metadata": {"first_name": "Ada"}},
        )

        assert option.name == "Ada"
        assert option.email == "ada@example.com"
        assert option.major_label == "finance"
        assert option.canonical_skill_labels == ["Excel"]
        assert option.coursework_category_names == ["Corporate Finance"]
        assert option.preferred_terms == ["summer"]

        profile = option.profile
        assert profile.majors == ["finance"]
        assert profile.skill_ids == ["skill-excel"]
        assert profile.coursework_category_ids == ["cat-1"]
        assert profile.coursework_item_ids == ["item-1"]
        assert profile.skills == ["Excel"]
        assert profile.preferred_work_modes == [WorkMode.HYBRID]
        assert profile.availability_hours_per_week == 20

    def test_full_coverage(self):
        option = build_student_preview_option(
            make_student_row(), SKILL_ROWS, CATEGORY_ROWS, ITEM_ROWS
        )

        assert option.coverage.total_dimensions == 8
        assert option.coverage.present_dimensions == 8
        assert option.coverage.missing_dimensions == []

    def test_sparse_profile(self):
        row = make_student_row(
            major=None,
            majors=None,
            year=None,
            experience_level=None,
            interests=None,
            availability_start_month=None,
            availability_hours_per_week=None,
        )

        option = build_student_preview_option(row)

        assert option.email == "Email not set"
        assert option.major_label == "Major not set"
        assert option.name == "Student user-123"
        assert option.coverage.present_dimensions == 0
        assert option.coverage.missing_dimensions == [
            "majors",
            "skills",
            "coursework categories",
            "term",
            "hours",
            "location/work mode",
            "grad year",
            "experience",
        ]

    def test_raw_majors_used_without_canonical_major(self):
        option = build_student_preview_option(make_student_row(major=[]))
        assert option.profile.majors == ["economics"]


class TestInternshipPreviewItem:
    def test_match_input_flattens_link_rows(self):
        item = build_internship_preview_item(make_internship_row())
        match_input = item.match_input

        assert match_input.category == "Finance"
        assert match_input.required_skill_ids == ["skill-excel"]
        assert match_input.coursework_item_ids == ["item-1"]
        assert match_input.coursework_category_ids == ["cat-1"]
        assert match_input.coursework_category_names == ["Corporate Finance"]
        assert item.preferred_skills == []

    def test_category_fallback(self):
        item = build_internship_preview_item(make_internship_row(role_category=None))
        assert item.match_input.category == "Business"

    def test_coverage(self):
        item = build_internship_preview_item(
            make_internship_row(
                term=None,
                location_city=None,
                location_state=None,
                remote_allowed=True,
                target_graduation_years=[],
            )
        )

        assert item.coverage.present_dimensions == 6
        assert item.coverage.missing_dimensions == ["term", "grad year"]


class TestFilterInternshipRows:
    def test_no_filters_keeps_everything(self):
        rows = [make_internship_row("a"), make_internship_row("b")]
        assert filter_internship_rows(rows) == rows

    def test_category_substring_prefers_category_column(self):
        rows = [
            make_internship_row("a", category="Business Operations"),
            make_internship_row("b", category=None, role_category="Finance"),
        ]

        kept = filter_internship_rows(rows, MatchingPreviewFilters(category="finance"))

        assert [row["id"] for row in kept] == ["b"]

    def test_remote_only(self):
        rows = [
            make_internship_row("hybrid"),
            make_internship_row("remote_mode", work_mode="Remote"),
            make_internship_row("remote_location", work_mode=None, location="Remote (US)"),
            make_internship_row("remote_allowed", remote_allowed=True),
        ]

        kept = filter_internship_rows(rows, MatchingPreviewFilters(remote="remote_only"))

        assert [row["id"] for row in kept] == ["remote_mode", "remote_location", "remote_allowed"]

    def test_term_substring(self):
        rows = [make_internship_row("a"), make_internship_row("b", term="Fall 2026")]

        kept = filter_internship_rows(rows, MatchingPreviewFilters(term="FALL"))

        assert [row["id"] for row in kept] == ["b"]


class TestSearchStudentOptions:
    def _options(self):
        return [
            build_student_preview_option(
                make_student_row("u2"), auth_user={"email": "zed@example.com"}
            ),
            build_student_preview_option(
                make_student_row("u1", school="Tech Institute"),
                auth_user={"email": "amy@example.com"},
            ),
        ]

    def test_sorted_by_email(self):
        results = search_student_options(self._options())
        assert [option.email for option in results] == ["amy@example.com", "zed@example.com"]

    def test_query_matches_school(self):
        results = search_student_options(self._options(), query="  tech ")
        assert [option.user_id for option in results] == ["u1"]

    def test_limit(self):
        assert len(search_student_options(self._options(), limit=1)) == 1


class TestPreviewMatching:
    def test_rank_for_student(self):
        student = build_student_preview_option(
            make_student_row(), SKILL_ROWS, CATEGORY_ROWS, ITEM_ROWS
        )
        items = [
            build_internship_preview_item(make_internship_row("good")),
            build_internship_preview_item(make_internship_row("far", location="Denver, CO (On-site)", work_mode=None)),
        ]

        ranked = rank_internships_for_student_preview(items, student.profile, explain=True)

        assert [item.internship.id for item in ranked] == ["good"]
        assert ranked[0].internship.company_name == "Acme Capital"
        assert ranked[0].match.breakdown is not None

    def test_single_match_is_explained(self):
        student = build_student_preview_option(
            make_student_row(), SKILL_ROWS, CATEGORY_ROWS, ITEM_ROWS
        )
        item = build_internship_preview_item(make_internship_row())

        match = evaluate_single_preview_match(item, student.profile)
        rows = build_signal_contribution_rows(match)

        assert match.eligible is True
        assert [row.signal_key for row in rows] == expected_signal_keys()
        skills_row = rows[0]
        assert skills_row.signal_key == SignalKey.SKILLS_REQUIRED
        assert skills_row.points_awarded == 4.0
        assert "path=canonical" in skills_row.evidence

    def test_contribution_rows_empty_without_breakdown(self):
        student = build_student_preview_option(make_student_row())
        item = build_internship_preview_item(make_internship_row())
        match = rank_internships_for_student_preview([item], student.profile)[0].match

        assert build_signal_contribution_rows(match) == []


class TestReportSummary:
    def test_summary(self):
        summary = get_matching_report_summary()

        assert summary.matching_version
        assert summary.signal_keys == list(SignalKey)
        assert summary.max_score == 17
        assert "max_score" in summary.normalization_formula
