from datetime import datetime
from enum import Enum

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidatorFunctionWrapHandler,
    field_validator,
)


def coerce_text_list(value) -> list[str]:
    """Accept None, a sequence, or one comma-delimited string and return a list.

    Items are stripped and empty items dropped. Case is preserved; comparison
    normalization happens in the matching layer.
    """
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple, set, frozenset)):
        items = [
            item.value if isinstance(item, Enum) else str(item)
            for item in value
            if item is not None
        ]
    else:
        items = [str(value)]
    return [item.strip() for item in items if item.strip()]


def coerce_text(value) -> str | None:
    """Return scalar text as a string; None for booleans and non-scalar values."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


class InternshipMatchInput(BaseModel):
    """Snapshot of one internship listing's matchable attributes.

    Canonical ID lists take precedence over the free-text fields wherever both
    are present.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = Field(description="Unique identifier for the internship")
    title: str | None = Field(default=None, description="Listing title")
    majors: list[str] = Field(
        default_factory=list,
        description="Target majors (list or comma-joined string)",
    )
    target_graduation_years: list[str] = Field(
        default_factory=list,
        description="Graduation years the listing is open to",
    )
    hours_per_week: int | float | None = Field(
        default=None, description="Expected weekly hours"
    )
    location: str | None = Field(
        default=None,
        description="Location, optionally suffixed with a work mode, e.g. 'New York, NY (Hybrid)'",
    )
    description: str | None = Field(
        default=None,
        description="Free-text description; may carry legacy 'Season:' and 'Required skills:' lines",
    )
    work_mode: str | None = Field(default=None, description="Explicit work mode")
    term: str | None = Field(default=None, description="Explicit term, e.g. 'Summer 2026'")
    experience_level: str | None = Field(
        default=None, description="Required experience: entry, mid or senior"
    )
    category: str | None = Field(default=None, description="Role category")
    required_skills: list[str] = Field(default_factory=list)
    preferred_skills: list[str] = Field(default_factory=list)
    recommended_coursework: list[str] = Field(default_factory=list)
    required_skill_ids: list[str] = Field(default_factory=list)
    preferred_skill_ids: list[str] = Field(default_factory=list)
    coursework_item_ids: list[str] = Field(default_factory=list)
    coursework_category_ids: list[str] = Field(default_factory=list)
    coursework_category_names: list[str] = Field(default_factory=list)
    created_at: datetime | None = Field(
        default=None, description="Creation timestamp, used as the ranking tie-break"
    )

    @field_validator(
        "majors",
        "target_graduation_years",
        "required_skills",
        "preferred_skills",
        "recommended_coursework",
        "required_skill_ids",
        "preferred_skill_ids",
        "coursework_item_ids",
        "coursework_category_ids",
        "coursework_category_names",
        mode="before",
    )
    @classmethod
    def _coerce_lists(cls, value):
        return coerce_text_list(value)

    @field_validator("hours_per_week", mode="before")
    @classmethod
    def _lenient_hours(cls, value):
        return coerce_hours(value)

    @field_validator(
        "title",
        "location",
        "description",
        "work_mode",
        "term",
        "experience_level",
        "category",
        mode="before",
    )
    @classmethod
    def _lenient_text(cls, value):
        return coerce_text(value)

    @field_validator("created_at", mode="wrap")
    @classmethod
    def _lenient_created_at(cls, value, handler: ValidatorFunctionWrapHandler):
        """Unparseable timestamps become None and rank as the epoch."""
        try:
            return handler(value)
        except ValidationError:
            return None


def coerce_hours(value) -> int | float | None:
    """Return a numeric hour count, or None for booleans and unparseable text."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            number = float(text)
        except ValueError:
            return None
        return int(number) if number.is_integer() else number
    return None
