"""Built-in sample students and internships for sanity runs and the report."""

from typing import NamedTuple

from internmatch.schemas.internship import InternshipMatchInput
from internmatch.schemas.student import StudentMatchProfile


class FixtureStudent(NamedTuple):
    id: str
    name: str
    profile: StudentMatchProfile


MOCK_STUDENTS: list[FixtureStudent] = [
    FixtureStudent(
        id="student_1",
        name="Finance student (Summer, 20h)",
        profile=StudentMatchProfile(
            majors=["finance"],
            skills=["excel", "financial modeling", "powerpoint"],
            coursework=["valuation", "accounting"],
            availability_hours_per_week=20,
            preferred_terms=["summer"],
            preferred_work_modes=["hybrid", "remote"],
            preferred_locations=["new york", "boston"],
        ),
    ),
    FixtureStudent(
        id="student_2",
        name="Data student (Fall, remote-only)",
        profile=StudentMatchProfile(
            majors=["data science", "statistics"],
            skills=["sql", "python", "tableau"],
            coursework=["machine learning", "database systems"],
            availability_hours_per_week=30,
            preferred_terms=["fall"],
            preferred_work_modes=["remote"],
            remote_only=True,
        ),
    ),
]

MOCK_INTERNSHIPS: list[InternshipMatchInput] = [
    InternshipMatchInput(
        id="internship_finance_1",
        title="Private Equity Summer Analyst",
        majors=["finance", "accounting"],
        hours_per_week=20,
        location="New York, NY (Hybrid)",
        description=(
            "Work on live deal support.\n"
            "Category: Finance\n"
            "Season: Summer 2026\n"
            "Required skills: excel, financial modeling\n"
            "Preferred skills: powerpoint, accounting"
        ),
    ),
    InternshipMatchInput(
        id="internship_data_1",
        title="Data Analytics Intern",
        majors=["data science", "computer science"],
        hours_per_week=25,
        location="Remote (Remote)",
        description=(
            "Build weekly dashboards.\n"
            "Category: Data\n"
            "Season: Fall 2026\n"
            "Required skills: sql, python\n"
            "Preferred skills: tableau, experimentation"
        ),
    ),
    InternshipMatchInput(
        id="internship_ops_1",
        title="Operations Intern",
        majors=["operations", "business"],
        hours_per_week=35,
        location="Chicago, IL (On-site)",
        description=(
            "Support fulfillment projects.\n"
            "Category: Operations\n"
            "Season: Summer 2026\n"
            "Required skills: excel\n"
            "Preferred skills: communication"
        ),
    ),
]
