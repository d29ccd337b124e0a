"""Matching report for admins: how scoring works and where its data comes from."""

import logging
from datetime import UTC, datetime

from pydantic import BaseModel, Field

from internmatch.fixtures import MOCK_INTERNSHIPS, MOCK_STUDENTS
from internmatch.matching.evaluator import evaluate_internship_match
from internmatch.schemas.enums import (
    InternshipExperienceLevel,
    Season,
    StudentExperienceLevel,
    WorkMode,
)
from internmatch.schemas.match import DEFAULT_MATCH_WEIGHTS, InternshipMatchResult
from internmatch.services.preview_service import (
    MatchingReportSummary,
    get_matching_report_summary,
)

logger = logging.getLogger(__name__)


class MatchingDataSource(BaseModel):
    field: str
    used_for: str
    source_table: str
    source_column: str
    notes: str


class RiskMitigation(BaseModel):
    risk: str
    mitigation: str


class MajorInternshipMatrixRow(BaseModel):
    major: str
    suggested_coursework_categories: list[str]
    internship_types: list[str]


class QualityOverQuantity(BaseModel):
    bullets: list[str]
    messaging: list[str]
    risks_and_mitigations: list[RiskMitigation]


class SampleBreakdown(BaseModel):
    student_label: str
    internship_label: str
    match: InternshipMatchResult


class MatchingReport(BaseModel):
    generated_at: datetime
    summary: MatchingReportSummary
    canonical_enums: dict[str, list[str]]
    data_sources: list[MatchingDataSource]
    quality_over_quantity: QualityOverQuantity
    major_internship_matrix: list[MajorInternshipMatrixRow] = Field(default_factory=list)
    sample: SampleBreakdown


MATCHING_CANONICAL_ENUMS: dict[str, list[str]] = {
    "experience_levels_internship": [
        level.name.lower() for level in InternshipExperienceLevel
    ],
    "experience_levels_student": [level.name.lower() for level in StudentExperienceLevel],
    "work_modes": [mode.value for mode in WorkMode],
    "term_seasons": [season.value for season in Season],
}

MATCHING_DATA_SOURCES: list[MatchingDataSource] = [
    MatchingDataSource(
        field="Student majors",
        used_for="Major/category alignment",
        source_table="student_profiles + canonical_majors",
        source_column="student_profiles.major_id / student_profiles.majors",
        notes="Canonical major relation first, text fallback if needed.",
    ),
    MatchingDataSource(
        field="Student grad year",
        used_for="Graduation-year eligibility + scoring",
        source_table="student_profiles",
        source_column="year",
        notes="Compared against internship target years.",
    ),
    MatchingDataSource(
        field="Student experience",
        used_for="Experience eligibility + scoring",
        source_table="student_profiles",
        source_column="experience_level",
        notes="Mapped to ordinal levels none/projects/internship.",
    ),
    MatchingDataSource(
        field="Student availability",
        used_for="Hours eligibility + availability fit",
        source_table="student_profiles",
        source_column="availability_hours_per_week",
        notes="Hard filter when internship hours exceed availability.",
    ),
    MatchingDataSource(
        field="Student preferred terms/work mode/location",
        used_for="Eligibility + location/mode scoring",
        source_table="student_profiles",
        source_column="interests JSON",
        notes="Parsed by the preference signal parser, with a start-month fallback for terms.",
    ),
    MatchingDataSource(
        field="Student canonical skills",
        used_for="Required/preferred skill overlap",
        source_table="student_skill_items + skills",
        source_column="student_skill_items.skill_id",
        notes="Canonical skill IDs are the primary matching path.",
    ),
    MatchingDataSource(
        field="Student canonical coursework categories",
        used_for="Coursework alignment (primary)",
        source_table="student_coursework_category_links + coursework_categories",
        source_column="category_id",
        notes="Category overlap is preferred over coursework-item or text overlap.",
    ),
    MatchingDataSource(
        field="Student canonical coursework items",
        used_for="Coursework alignment (secondary)",
        source_table="student_coursework_items + coursework_items",
        source_column="coursework_item_id",
        notes="Used when category IDs are not available on either side.",
    ),
    MatchingDataSource(
        field="Internship majors/category",
        used_for="Major/category alignment",
        source_table="internships",
        source_column="majors, category, role_category",
        notes="Major overlap first, category text fallback.",
    ),
    MatchingDataSource(
        field="Internship required/preferred skills",
        used_for="Skills alignment",
        source_table="internships + internship_*_skill_items",
        source_column="required_skills, preferred_skills, skill_id links",
        notes="Canonical IDs first; skill lines in the description are also parsed.",
    ),
    MatchingDataSource(
        field="Internship coursework categories/items",
        used_for="Coursework alignment",
        source_table="internships + internship_coursework_* links",
        source_column="coursework_category_ids, coursework_item_ids, recommended_coursework",
        notes="Order: category IDs, then item IDs, then text.",
    ),
    MatchingDataSource(
        field="Internship term/work mode/location/hours",
        used_for="Eligibility + fit scoring",
        source_table="internships",
        source_column="term, work_mode, location, hours_per_week",
        notes="Term, mode and location are strict filters on mismatch.",
    ),
]

QUALITY_OVER_QUANTITY_BULLETS = [
    "Canonical category-first matching: normalized skill, coursework and major IDs are matched before raw text.",
    "Explainable fit: each ranking shows why it matched and where gaps exist, reducing blind applicant spam.",
    "Verification gates: email verification and role constraints reduce low-effort, fake or duplicate submissions.",
    "Constraint-aware ranking: internships that fail core constraints (term, availability, mode, location, grad year, experience) are filtered out.",
    "Curated local inventory and concierge posting support make quality internship supply a product feature.",
]

DIFFERENTIATION_MESSAGING = [
    "Fewer but better applicants: eligibility and fit are optimized before exposure.",
    "Transparent matching: employers can see why candidates are being prioritized.",
    "Structured student signals: major, coursework and skill categories are standardized, not free-form guesswork.",
    "Spam resistance: verification and profile completeness expectations improve inbound quality.",
]

DIFFERENTIATION_RISKS_AND_MITIGATIONS = [
    RiskMitigation(
        risk="If canonical tags are missing on internships or students, scoring quality drops toward text fallback behavior.",
        mitigation="Admin match-coverage indicators highlight missing majors, skills, coursework, term, hours, location, grad year and experience.",
    ),
    RiskMitigation(
        risk="Sparse student profiles can suppress good opportunities through hard filters.",
        mitigation="Profile completion nudges and admin student-coverage views make gaps visible and actionable.",
    ),
]

MAJOR_INTERNSHIP_MATRIX: list[MajorInternshipMatrixRow] = [
    MajorInternshipMatrixRow(
        major="Computer Science",
        suggested_coursework_categories=[
            "Software Engineering Fundamentals",
            "SQL / Databases",
            "Statistics / Probability",
        ],
        internship_types=[
            "Software Engineering Intern",
            "Backend Engineer Intern",
            "Data Engineering Intern",
        ],
    ),
    MajorInternshipMatrixRow(
        major="Information Systems",
        suggested_coursework_categories=[
            "SQL / Databases",
            "Data Visualization (Tableau/Power BI)",
            "Product Management Fundamentals",
        ],
        internship_types=[
            "Business Systems Analyst Intern",
            "Product Operations Intern",
            "Business Intelligence Intern",
        ],
    ),
    MajorInternshipMatrixRow(
        major="Finance",
        suggested_coursework_categories=[
            "Corporate Finance / Valuation",
            "Financial Modeling (Excel)",
            "Statistics / Probability",
        ],
        internship_types=[
            "Financial Analyst Intern",
            "FP&A Intern",
            "Investment Analyst Intern",
        ],
    ),
    MajorInternshipMatrixRow(
        major="Accounting",
        suggested_coursework_categories=[
            "Financial Accounting",
            "Managerial Accounting",
            "Financial Modeling (Excel)",
        ],
        internship_types=["Audit Intern", "Tax Intern", "Corporate Accounting Intern"],
    ),
    MajorInternshipMatrixRow(
        major="Marketing",
        suggested_coursework_categories=[
            "Marketing Analytics",
            "Data Visualization (Tableau/Power BI)",
            "Statistics / Probability",
        ],
        internship_types=[
            "Growth Marketing Intern",
            "Digital Marketing Intern",
            "Market Research Intern",
        ],
    ),
    MajorInternshipMatrixRow(
        major="Data Science / Statistics",
        suggested_coursework_categories=[
            "Statistics / Probability",
            "Econometrics / Regression",
            "SQL / Databases",
        ],
        internship_types=[
            "Data Analyst Intern",
            "Data Science Intern",
            "Analytics Engineering Intern",
        ],
    ),
    MajorInternshipMatrixRow(
        major="Business Administration",
        suggested_coursework_categories=[
            "Operations / Supply Chain",
            "Corporate Finance / Valuation",
            "Product Management Fundamentals",
        ],
        internship_types=["Operations Intern", "Business Analyst Intern", "Strategy Intern"],
    ),
    MajorInternshipMatrixRow(
        major="Economics",
        suggested_coursework_categories=[
            "Econometrics / Regression",
            "Statistics / Probability",
            "Corporate Finance / Valuation",
        ],
        internship_types=[
            "Economic Research Intern",
            "Policy Analyst Intern",
            "Quantitative Analyst Intern",
        ],
    ),
]


def build_sample_breakdown() -> SampleBreakdown:
    """Explain the first built-in student against the first built-in listing."""
    student = MOCK_STUDENTS[0]
    internship = MOCK_INTERNSHIPS[0]
    match = evaluate_internship_match(
        internship, student.profile, DEFAULT_MATCH_WEIGHTS, explain=True
    )
    return SampleBreakdown(
        student_label=student.name,
        internship_label=internship.title or internship.id,
        match=match,
    )


def build_matching_report_model() -> MatchingReport:
    """Assemble the full matching report.

    Returns:
        MatchingReport with the scoring summary, canonical enums, data
        sources, positioning notes, the major matrix and a sample breakdown.
    """
    logger.info("Building matching report")
    return MatchingReport(
        generated_at=datetime.now(UTC),
        summary=get_matching_report_summary(),
        canonical_enums=MATCHING_CANONICAL_ENUMS,
        data_sources=MATCHING_DATA_SOURCES,
        quality_over_quantity=QualityOverQuantity(
            bullets=QUALITY_OVER_QUANTITY_BULLETS,
            messaging=DIFFERENTIATION_MESSAGING,
            risks_and_mitigations=DIFFERENTIATION_RISKS_AND_MITIGATIONS,
        ),
        major_internship_matrix=MAJOR_INTERNSHIP_MATRIX,
        sample=build_sample_breakdown(),
    )
