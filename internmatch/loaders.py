"""Loading match inputs from JSON files."""

import logging
from pathlib import Path

from pydantic import ValidationError

from internmatch.schemas.internship import InternshipMatchInput
from internmatch.schemas.match import MatchWeights
from internmatch.schemas.student import StudentMatchProfile
from internmatch.utils import MatchInputError, load_json_file

logger = logging.getLogger(__name__)


def load_internship(file_path: Path) -> InternshipMatchInput:
    data = load_json_file(file_path)
    try:
        return InternshipMatchInput.model_validate(data)
    except ValidationError as e:
        raise MatchInputError(f"Invalid internship in {file_path}: {e}") from e


def load_internships(file_path: Path) -> list[InternshipMatchInput]:
    """Load internships from a JSON array or an ``{"internships": [...]}`` object.

    Raises:
        MatchInputError: If the file is missing, malformed, or any entry fails
            validation.
    """
    data = load_json_file(file_path)
    if isinstance(data, dict) and "internships" in data:
        data = data["internships"]
    if not isinstance(data, list):
        raise MatchInputError(f"Expected a list of internships in {file_path}")

    internships = []
    for index, item in enumerate(data):
        try:
            internships.append(InternshipMatchInput.model_validate(item))
        except ValidationError as e:
            raise MatchInputError(
                f"Invalid internship at index {index} in {file_path}: {e}"
            ) from e

    logger.info(f"Loaded {len(internships)} internships from {file_path}")
    return internships


def load_profile(file_path: Path) -> StudentMatchProfile:
    data = load_json_file(file_path)
    try:
        return StudentMatchProfile.model_validate(data)
    except ValidationError as e:
        raise MatchInputError(f"Invalid student profile in {file_path}: {e}") from e


def load_weights(file_path: Path | None) -> MatchWeights | None:
    """Load weight overrides; unspecified signals keep their defaults."""
    if file_path is None:
        return None
    data = load_json_file(file_path)
    try:
        return MatchWeights.model_validate(data)
    except ValidationError as e:
        raise MatchInputError(f"Invalid weights in {file_path}: {e}") from e
