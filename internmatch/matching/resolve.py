"""Resolve raw match inputs into the normalized views the scorers read.

Each field is resolved once, in documented priority order, so no scorer ever
parses the description or guesses at a list shape itself:

- work mode: ``work_mode`` -> '(...)' suffix on ``location``
- term: ``term`` -> 'Season:' line in ``description``
- location name: ``location`` without its trailing parenthetical
- category: ``category`` -> first major
- skills: canonical ID lists; text from explicit lists + description lines
- coursework: category IDs -> item IDs -> ``recommended_coursework`` text
"""

from dataclasses import dataclass, field

from internmatch.matching.normalize import (
    derive_location_name,
    derive_term,
    derive_work_mode,
    infer_skills,
    normalize_graduation_year,
    normalize_text,
    parse_internship_experience,
    parse_list,
    parse_majors,
    parse_student_experience,
    season_from_term,
    unique,
)
from internmatch.schemas.enums import (
    InternshipExperienceLevel,
    StudentExperienceLevel,
    WorkMode,
)
from internmatch.schemas.internship import InternshipMatchInput
from internmatch.schemas.student import StudentMatchProfile


@dataclass(frozen=True)
class ResolvedInternship:
    id: str
    work_mode: WorkMode | None
    term: str
    season: str
    location_name: str
    hours_per_week: float | None
    majors: list[str]
    category: str
    graduation_years: list[str]
    experience: InternshipExperienceLevel | None
    required_skill_ids: list[str]
    preferred_skill_ids: list[str]
    required_skills: list[str]
    preferred_skills: list[str]
    coursework_category_ids: list[str]
    coursework_item_ids: list[str]
    coursework: list[str]
    category_names_by_id: dict[str, str] = field(default_factory=dict)

    @property
    def is_in_person(self) -> bool:
        return self.work_mode is not None and self.work_mode.is_in_person


@dataclass(frozen=True)
class ResolvedProfile:
    majors: list[str]
    year: str
    experience: StudentExperienceLevel | None
    skill_pool: list[str]
    skill_ids: list[str]
    coursework: list[str]
    coursework_item_ids: list[str]
    coursework_category_ids: list[str]
    availability_hours_per_week: float | None
    preferred_seasons: list[str]
    preferred_locations: list[str]
    preferred_work_modes: list[WorkMode]
    remote_only: bool


def resolve_internship(internship: InternshipMatchInput) -> ResolvedInternship:
    majors = parse_majors(internship.majors)
    category = normalize_text(internship.category) if internship.category else ""
    if not category and majors:
        category = majors[0]

    term = derive_term(internship)
    skills = infer_skills(internship)

    category_names_by_id = {}
    if len(internship.coursework_category_ids) == len(internship.coursework_category_names):
        category_names_by_id = dict(
            zip(internship.coursework_category_ids, internship.coursework_category_names)
        )

    return ResolvedInternship(
        id=internship.id,
        work_mode=derive_work_mode(internship),
        term=term,
        season=season_from_term(term),
        location_name=derive_location_name(internship),
        hours_per_week=internship.hours_per_week,
        majors=majors,
        category=category,
        graduation_years=unique(
            normalize_graduation_year(year) for year in internship.target_graduation_years
        ),
        experience=parse_internship_experience(internship.experience_level),
        required_skill_ids=skills.required_ids,
        preferred_skill_ids=skills.preferred_ids,
        required_skills=skills.required,
        preferred_skills=skills.preferred,
        coursework_category_ids=unique(internship.coursework_category_ids),
        coursework_item_ids=unique(internship.coursework_item_ids),
        coursework=unique(parse_list(internship.recommended_coursework)),
        category_names_by_id=category_names_by_id,
    )


def resolve_profile(profile: StudentMatchProfile) -> ResolvedProfile:
    majors = parse_majors(profile.majors)
    coursework = parse_list(profile.coursework)

    # Text skill matching also credits coursework and majors.
    skill_pool = parse_list(profile.skills) + coursework + majors

    return ResolvedProfile(
        majors=majors,
        year=normalize_graduation_year(profile.year),
        experience=parse_student_experience(profile.experience_level),
        skill_pool=skill_pool,
        skill_ids=unique(profile.skill_ids),
        coursework=unique(coursework),
        coursework_item_ids=unique(profile.coursework_item_ids),
        coursework_category_ids=unique(profile.coursework_category_ids),
        availability_hours_per_week=profile.availability_hours_per_week,
        preferred_seasons=unique(
            season_from_term(normalize_text(term)) for term in profile.preferred_terms
        ),
        preferred_locations=parse_list(profile.preferred_locations),
        preferred_work_modes=list(profile.preferred_work_modes),
        remote_only=profile.remote_only,
    )
