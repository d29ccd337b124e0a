"""Parsing of the preference signals students store in their interests JSON."""

import json
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field

from internmatch.matching.normalize import parse_work_mode, season_from_month, unique
from internmatch.schemas.enums import Season, WorkMode

logger = logging.getLogger(__name__)

_KNOWN_SEASONS = {season.value for season in Season}


class StudentPreferenceSignals(BaseModel):
    """Preferences extracted from a student's free-form interests payload."""

    preferred_terms: list[str] = Field(default_factory=list)
    remote_only: bool = False
    remote_ok: bool = Field(
        default=False, description="Student accepts remote work; informational only"
    )
    skills: list[str] = Field(default_factory=list)
    preferred_locations: list[str] = Field(default_factory=list)
    preferred_work_modes: list[WorkMode] = Field(default_factory=list)


def _first_list(payload: Mapping[str, Any], *keys: str) -> list[Any]:
    for key in keys:
        value = payload.get(key)
        if isinstance(value, list):
            return value
    return []


def _strings(values: list[Any]) -> list[str]:
    return unique(item.strip() for item in values if isinstance(item, str) and item.strip())


def _work_modes(values: list[Any]) -> list[WorkMode]:
    modes = [parse_work_mode(item) for item in _strings(values)]
    return list(dict.fromkeys(mode for mode in modes if mode is not None))


def parse_student_preference_signals(
    interests: str | Mapping[str, Any] | None,
) -> StudentPreferenceSignals:
    """Extract matching preferences from a student's interests value.

    Accepts the raw JSON string stored on the profile or an already decoded
    mapping. Seasons are read from ``seasons`` and fall back to the legacy
    ``availability`` key. Malformed payloads yield empty signals.

    Args:
        interests: JSON text, mapping or None.

    Returns:
        StudentPreferenceSignals, empty when nothing usable was found.
    """
    if interests is None:
        return StudentPreferenceSignals()

    payload: Any = interests
    if isinstance(interests, str):
        if not interests.strip():
            return StudentPreferenceSignals()
        try:
            payload = json.loads(interests)
        except json.JSONDecodeError as e:
            logger.debug(f"Ignoring malformed interests payload: {e}")
            return StudentPreferenceSignals()

    if not isinstance(payload, Mapping):
        logger.debug(f"Ignoring interests payload of type {type(payload).__name__}")
        return StudentPreferenceSignals()

    seasons = _first_list(payload, "seasons", "availability", "preferredTerms")
    terms = [term.lower() for term in _strings(seasons)]

    return StudentPreferenceSignals(
        preferred_terms=unique(term for term in terms if term in _KNOWN_SEASONS),
        remote_only=bool(payload.get("remoteOnly") or payload.get("remote_only")),
        remote_ok=bool(payload.get("remoteOk")),
        skills=_strings(_first_list(payload, "skills")),
        preferred_locations=_strings(
            _first_list(payload, "preferredLocations", "preferred_locations", "locations")
        ),
        preferred_work_modes=_work_modes(
            _first_list(
                payload, "preferredWorkModes", "preferred_work_modes", "workModes"
            )
        ),
    )


def resolve_preferred_terms(
    explicit_terms: list[str], availability_start_month: str | None
) -> list[str]:
    """Use explicit terms when present, else the season of the start month."""
    if explicit_terms:
        return explicit_terms
    season = season_from_month(availability_start_month)
    return [season] if season else []
