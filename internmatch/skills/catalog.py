"""Canonical skill catalog and free-text skill normalization."""

import logging
import re
from collections.abc import Iterable
from pathlib import Path
from typing import NamedTuple

from pydantic import BaseModel, Field, ValidationError
from rapidfuzz import fuzz, process

from internmatch.config import SKILL_MATCH_THRESHOLD
from internmatch.utils import MatchInputError, load_json_file

logger = logging.getLogger(__name__)

_APOSTROPHES = re.compile(r"['’]")
_NON_SLUG = re.compile(r"[^a-z0-9]+")
_NON_ALNUM = re.compile(r"[^a-z0-9]")
_WHITESPACE = re.compile(r"\s+")


def slugify(value: str) -> str:
    """'Node.js ' -> 'node-js'; apostrophes are dropped, not separated."""
    text = _APOSTROPHES.sub("", value.strip().lower())
    return _NON_SLUG.sub("-", text).strip("-")


def compact(value: str) -> str:
    """Keep only ASCII letters and digits: 'c++' -> 'c', 'Node.js' -> 'nodejs'."""
    return _NON_ALNUM.sub("", value.lower())


def normalize_label(value: str) -> str:
    return _WHITESPACE.sub(" ", value.strip())


class CatalogSkill(BaseModel):
    id: str = Field(description="Canonical skill ID")
    slug: str = Field(description="URL-safe unique key, e.g. 'financial-modeling'")
    label: str = Field(description="Display label")
    aliases: list[str] = Field(
        default_factory=list, description="Alternative spellings, matched verbatim"
    )


class SkillCatalog(BaseModel):
    skills: list[CatalogSkill] = Field(default_factory=list)

    def alias_index(self) -> dict[str, str]:
        """Alias token -> skill ID. Aliases are stored lowercase."""
        index: dict[str, str] = {}
        for skill in self.skills:
            for alias in skill.aliases:
                index.setdefault(alias.strip().lower(), skill.id)
        return index

    def slug_index(self) -> dict[str, str]:
        return {skill.slug: skill.id for skill in self.skills}

    def fuzzy_choices(self) -> dict[str, str]:
        """Lowercased labels and aliases -> skill ID, for fuzzy lookup."""
        choices: dict[str, str] = {}
        for skill in self.skills:
            for text in [skill.label, *skill.aliases]:
                key = normalize_label(text).lower()
                if key:
                    choices.setdefault(key, skill.id)
        return choices


class NormalizedSkills(NamedTuple):
    skill_ids: list[str]
    unknown: list[str]


def load_skill_catalog(path: Path) -> SkillCatalog:
    """Load a skill catalog from JSON.

    Accepts either ``{"skills": [...]}`` or a bare list of skills.

    Raises:
        MatchInputError: If the file is missing, not JSON, or not a catalog.
    """
    data = load_json_file(path)
    if isinstance(data, list):
        data = {"skills": data}
    try:
        catalog = SkillCatalog.model_validate(data)
    except ValidationError as e:
        raise MatchInputError(f"Invalid skill catalog in {path}: {e}") from e
    logger.info(f"Loaded {len(catalog.skills)} skills from {path}")
    return catalog


def _lookup(
    label: str,
    aliases: dict[str, str],
    slugs: dict[str, str],
    choices: dict[str, str],
    threshold: int,
) -> str | None:
    slug = slugify(label)
    candidates = [slug, compact(label), label.lower()]
    for candidate in candidates:
        if candidate and candidate in aliases:
            return aliases[candidate]

    if slug and slug in slugs:
        return slugs[slug]

    if not choices:
        return None
    best = process.extractOne(
        label.lower(), choices.keys(), scorer=fuzz.ratio, score_cutoff=threshold
    )
    if best is None:
        return None
    matched, score, _ = best
    logger.debug(f"Fuzzy matched skill '{label}' to '{matched}' ({score:.0f})")
    return choices[matched]


def normalize_skills(
    labels: Iterable[str],
    catalog: SkillCatalog,
    threshold: int = SKILL_MATCH_THRESHOLD,
) -> NormalizedSkills:
    """Map free-text skill labels to canonical skill IDs.

    Each label is tried as an alias (slug, compact and raw lowercase forms),
    then as a slug, then fuzzily against catalog labels and aliases.

    Args:
        labels: Skill labels as typed by a user.
        catalog: Canonical skill catalog.
        threshold: Minimum rapidfuzz ratio (0-100) for a fuzzy match.

    Returns:
        NormalizedSkills with deduplicated IDs and unmatched labels, both in
        input order. Unknown labels are deduplicated case-insensitively.
    """
    cleaned = [normalize_label(label) for label in labels if isinstance(label, str)]
    cleaned = [label for label in cleaned if label]
    if not cleaned:
        return NormalizedSkills(skill_ids=[], unknown=[])

    aliases = catalog.alias_index()
    slugs = catalog.slug_index()
    choices = catalog.fuzzy_choices()

    skill_ids: list[str] = []
    unknown: list[str] = []
    seen_unknown: set[str] = set()

    for label in cleaned:
        skill_id = _lookup(label, aliases, slugs, choices, threshold)
        if skill_id is not None:
            if skill_id not in skill_ids:
                skill_ids.append(skill_id)
            continue

        key = label.lower()
        if key not in seen_unknown:
            seen_unknown.add(key)
            unknown.append(label)

    logger.debug(f"Normalized {len(cleaned)} skills: {len(skill_ids)} known, {len(unknown)} unknown")
    return NormalizedSkills(skill_ids=skill_ids, unknown=unknown)
