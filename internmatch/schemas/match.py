from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from internmatch.config import MATCHING_VERSION
from internmatch.schemas.internship import InternshipMatchInput


class SignalKey(str, Enum):
    """The eight independently weighted scoring signals, in breakdown order."""

    SKILLS_REQUIRED = "skills_required"
    SKILLS_PREFERRED = "skills_preferred"
    COURSEWORK_ALIGNMENT = "coursework_alignment"
    MAJOR_CATEGORY_ALIGNMENT = "major_category_alignment"
    GRADUATION_YEAR_ALIGNMENT = "graduation_year_alignment"
    EXPERIENCE_ALIGNMENT = "experience_alignment"
    AVAILABILITY = "availability"
    LOCATION_MODE_PREFERENCE = "location_mode_preference"


SIGNAL_DEFINITIONS: dict[SignalKey, str] = {
    SignalKey.SKILLS_REQUIRED: "Share of required skills the student has (canonical IDs first, text fallback).",
    SignalKey.SKILLS_PREFERRED: "Share of preferred skills the student has (canonical IDs first, text fallback).",
    SignalKey.COURSEWORK_ALIGNMENT: "Coursework overlap: category IDs, then item IDs, then coursework text.",
    SignalKey.MAJOR_CATEGORY_ALIGNMENT: "Major overlap, with a half-credit fallback on category text.",
    SignalKey.GRADUATION_YEAR_ALIGNMENT: "Full credit when the student's year is a target year.",
    SignalKey.EXPERIENCE_ALIGNMENT: "Full credit when the student meets the required experience level.",
    SignalKey.AVAILABILITY: "Closeness of internship hours to the student's weekly availability.",
    SignalKey.LOCATION_MODE_PREFERENCE: "Full credit when the work mode is among the student's preferences.",
}


class HardFilter(str, Enum):
    """Eligibility preconditions, in evaluation order."""

    REMOTE_ONLY = "remote_only"
    TERM = "term"
    AVAILABILITY = "availability"
    LOCATION = "location"
    WORK_MODE = "work_mode"
    GRADUATION_YEAR = "graduation_year"
    EXPERIENCE = "experience"


class MatchWeights(BaseModel):
    """Per-signal weights. Immutable; pass a new instance to override."""

    model_config = ConfigDict(frozen=True)

    skills_required: float = Field(default=4.0, ge=0)
    skills_preferred: float = Field(default=2.0, ge=0)
    coursework_alignment: float = Field(default=1.5, ge=0)
    major_category_alignment: float = Field(default=3.5, ge=0)
    graduation_year_alignment: float = Field(default=1.5, ge=0)
    experience_alignment: float = Field(default=1.5, ge=0)
    availability: float = Field(default=2.0, ge=0)
    location_mode_preference: float = Field(default=1.0, ge=0)

    def weight_for(self, key: SignalKey) -> float:
        return getattr(self, key.value)

    @property
    def max_score(self) -> float:
        return sum(self.weight_for(key) for key in SignalKey)


DEFAULT_MATCH_WEIGHTS = MatchWeights()


class SignalContribution(BaseModel):
    """Explain-mode record of what one signal contributed."""

    signal_key: SignalKey = Field(description="Which signal this row describes")
    weight: float = Field(description="Configured weight for the signal")
    raw_match_value: float = Field(
        description="Ratio in [0, 1], or 1/0 for pass/fail signals (4 decimals)"
    )
    points_awarded: float = Field(description="weight x raw value (3 decimals)")
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Structured evidence: counts, matched IDs, scoring path",
    )
    evidence: list[str] = Field(
        default_factory=list,
        description="Human-readable rendering of details, e.g. 'matched=2'",
    )


class MatchBreakdown(BaseModel):
    per_signal_contributions: list[SignalContribution] = Field(default_factory=list)
    total_score: float
    max_score: float
    normalized_score: float


class InternshipMatchResult(BaseModel):
    """Result of evaluating one internship against one student profile."""

    internship_id: str
    score: float = Field(description="Total points awarded (3 decimals)")
    reasons: list[str] = Field(
        default_factory=list, description="Positive signals, highest points first"
    )
    gaps: list[str] = Field(
        default_factory=list,
        description="Why points were withheld, or why the listing was excluded",
    )
    eligible: bool
    excluded_by: HardFilter | None = Field(
        default=None, description="The hard filter that excluded the listing"
    )
    matching_version: str = MATCHING_VERSION
    max_score: float
    normalized_score: float = Field(description="score / max_score (4 decimals)")
    breakdown: MatchBreakdown | None = None


class RankedInternship(BaseModel):
    internship: InternshipMatchInput
    match: InternshipMatchResult
