"""Shared utilities for internmatch."""

import json
import logging
from pathlib import Path
from typing import Any

from internmatch.config import LOG_FORMAT, LOG_LEVEL


class MatchInputError(Exception):
    """Raised when match input files are missing or malformed."""

    pass


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for CLI runs."""
    logging.basicConfig(level=level or LOG_LEVEL, format=LOG_FORMAT)
    logging.getLogger().setLevel(level or LOG_LEVEL)


def load_json_file(file_path: Path) -> Any:
    """Load a JSON document from disk.

    Args:
        file_path: Path to the JSON file.

    Returns:
        The decoded JSON value.

    Raises:
        MatchInputError: If the file is missing or is not valid JSON.
    """
    if not file_path.exists():
        raise MatchInputError(f"File not found: {file_path}")

    try:
        with open(file_path, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise MatchInputError(f"Invalid JSON in {file_path}: {e}") from e


def format_number(value: float) -> str:
    """Render 35.0 as '35' and 20.5 as '20.5'."""
    return f"{value:g}"


def round_to(value: float, digits: int) -> float:
    """Round for output stability, normalizing -0.0 to 0.0."""
    rounded = round(value, digits)
    return 0.0 if rounded == 0 else rounded
