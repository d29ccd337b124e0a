from pydantic import BaseModel, ConfigDict, Field, field_validator

from internmatch.schemas.enums import WorkMode
from internmatch.schemas.internship import coerce_hours, coerce_text, coerce_text_list


class StudentMatchProfile(BaseModel):
    """A student's matchable attributes, built fresh by the caller per request."""

    model_config = ConfigDict(extra="ignore")

    majors: list[str] = Field(default_factory=list, description="Declared majors")
    year: str | None = Field(
        default=None, description="Graduation year token, e.g. '2028'"
    )
    experience_level: str | None = Field(
        default=None, description="Reported experience: none, projects or internship"
    )
    skills: list[str] = Field(default_factory=list, description="Free-text skills")
    skill_ids: list[str] = Field(default_factory=list, description="Canonical skill IDs")
    coursework: list[str] = Field(default_factory=list, description="Free-text coursework")
    coursework_item_ids: list[str] = Field(default_factory=list)
    coursework_category_ids: list[str] = Field(default_factory=list)
    availability_hours_per_week: int | float | None = Field(
        default=None, description="Hours per week the student can commit"
    )
    preferred_terms: list[str] = Field(default_factory=list)
    preferred_locations: list[str] = Field(default_factory=list)
    preferred_work_modes: list[WorkMode] = Field(
        default_factory=list,
        description="Accepted work modes; unrecognized values are dropped",
    )
    remote_only: bool = Field(default=False)

    @field_validator(
        "majors",
        "skills",
        "skill_ids",
        "coursework",
        "coursework_item_ids",
        "coursework_category_ids",
        "preferred_terms",
        "preferred_locations",
        mode="before",
    )
    @classmethod
    def _coerce_lists(cls, value):
        return coerce_text_list(value)

    @field_validator("preferred_work_modes", mode="before")
    @classmethod
    def _parse_work_modes(cls, value):
        modes = []
        for item in coerce_text_list(value):
            try:
                mode = WorkMode(item)
            except ValueError:
                continue
            if mode not in modes:
                modes.append(mode)
        return modes

    @field_validator("availability_hours_per_week", mode="before")
    @classmethod
    def _lenient_hours(cls, value):
        return coerce_hours(value)

    @field_validator("year", mode="before")
    @classmethod
    def _year_as_text(cls, value):
        if value is None:
            return None
        return str(value)

    @field_validator("remote_only", mode="before")
    @classmethod
    def _none_is_false(cls, value):
        return bool(value) if value is None else value

    @field_validator("experience_level", mode="before")
    @classmethod
    def _lenient_experience(cls, value):
        return coerce_text(value)
