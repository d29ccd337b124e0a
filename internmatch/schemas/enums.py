import re
from enum import Enum, IntEnum


def _fold(value: str) -> str:
    return re.sub(r"[\s_-]+", " ", value.strip().lower())


class WorkMode(str, Enum):
    """Where the internship work happens.

    Use _missing_ to parse free text such as "Hybrid (3 days)" or "onsite".
    """

    REMOTE = "remote"
    HYBRID = "hybrid"
    ON_SITE = "on-site"

    @classmethod
    def _missing_(cls, value):
        """Map free-text work-mode descriptions onto the closed set."""
        if not isinstance(value, str):
            return None
        text = _fold(value)
        if "remote" in text:
            return cls.REMOTE
        if "hybrid" in text:
            return cls.HYBRID
        if "on site" in text or "onsite" in text or "in person" in text:
            return cls.ON_SITE
        return None

    @property
    def is_in_person(self) -> bool:
        return self in (WorkMode.HYBRID, WorkMode.ON_SITE)


class _OrdinalLevel(IntEnum):
    @classmethod
    def _missing_(cls, value):
        """Allow case-insensitive string lookup, e.g. "Entry level" -> ENTRY."""
        if isinstance(value, str):
            text = _fold(value)
            for member in cls:
                name = member.name.lower()
                if text == name or text.startswith(f"{name} "):
                    return member
        return None


class InternshipExperienceLevel(_OrdinalLevel):
    """Experience an internship asks for, in ascending order."""

    ENTRY = 0
    MID = 1
    SENIOR = 2


class StudentExperienceLevel(_OrdinalLevel):
    """Experience a student reports, in ascending order."""

    NONE = 0
    PROJECTS = 1
    INTERNSHIP = 2


class Season(str, Enum):
    SPRING = "spring"
    SUMMER = "summer"
    FALL = "fall"
    WINTER = "winter"
