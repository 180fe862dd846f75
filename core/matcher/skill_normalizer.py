#!/usr/bin/env python3
"""
Skill Normalizer - Canonicalizes heterogeneous skill collections.

Profiles store skills in several shapes depending on when they were created:
bare names, {"skill": ..., "experience_level": ...} dicts, [name, level]
pairs, or any of those serialized as a JSON string. Everything past this
module sees only CandidateSkill / SkillRequirement lists.

Normalization never raises. Absent or unrecognized data yields an empty list,
since new profiles legitimately have no skills yet.
"""

import json
import logging
from typing import Any, List, Optional, Tuple

from core.matcher.models import (
    CandidateSkill,
    ExperienceLevel,
    SkillImportance,
    SkillRequirement,
)

logger = logging.getLogger(__name__)

_NAME_KEYS = ("skill", "name")
_LEVEL_KEYS = ("experience_level", "experienceLevel", "level")
_IMPORTANCE_KEYS = ("importance",)


def skill_key(name: str) -> str:
    """Comparison key for skill names (trimmed, case-insensitive)."""
    return name.strip().casefold()


def _first(data: dict, keys: Tuple[str, ...]) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return None


def _decode(raw: Any) -> Any:
    """Decode a JSON blob; a plain string is treated as a single bare name.

    A string that opens like JSON but does not decode (including blobs nested
    too deeply for the parser) is malformed and yields no skills.
    """
    if not isinstance(raw, str):
        return raw
    text = raw.strip()
    if not text:
        return []
    if text[0] in "[{\"":
        try:
            return json.loads(text)
        except (ValueError, RecursionError):
            logger.debug("Skill blob looks like JSON but does not decode, ignoring")
            return []
    return [text]


def _parse_entry(entry: Any) -> Optional[Tuple[str, Any, Any]]:
    """Return (name, level, importance) for one entry, or None if unusable."""
    if isinstance(entry, str):
        return entry, None, None
    if isinstance(entry, dict):
        name = _first(entry, _NAME_KEYS)
        return (
            (name, _first(entry, _LEVEL_KEYS), _first(entry, _IMPORTANCE_KEYS))
            if isinstance(name, str) else None
        )
    if isinstance(entry, (list, tuple)) and entry and isinstance(entry[0], str):
        level = entry[1] if len(entry) > 1 else None
        importance = entry[2] if len(entry) > 2 else None
        return entry[0], level, importance
    if isinstance(entry, (CandidateSkill, SkillRequirement)):
        importance = getattr(entry, "importance", None)
        return entry.name, entry.experience_level, importance
    return None


def _iter_entries(raw: Any) -> List[Tuple[str, Any, Any]]:
    data = _decode(raw)
    if data is None:
        return []
    if isinstance(data, dict):
        # A single {"skill": ...} object, or a {"name": "level"} mapping.
        if _first(data, _NAME_KEYS) is not None:
            data = [data]
        else:
            data = [[k, v] for k, v in data.items() if isinstance(k, str)]
    if isinstance(data, str):
        data = [data]
    if not isinstance(data, (list, tuple)):
        logger.debug(f"Unrecognized skill collection type {type(data).__name__}, ignoring")
        return []

    entries = []
    seen = set()
    for item in data:
        parsed = _parse_entry(item)
        if parsed is None:
            continue
        name = parsed[0].strip()
        if not name or skill_key(name) in seen:
            continue
        seen.add(skill_key(name))
        entries.append((name, parsed[1], parsed[2]))
    return entries


def normalize_candidate_skills(raw: Any) -> List[CandidateSkill]:
    """Normalize any supported skill shape into CandidateSkill values.

    Missing experience levels default to Intermediate. Duplicate names keep
    their first occurrence.
    """
    return [
        CandidateSkill(name=name, experience_level=ExperienceLevel.parse(level))
        for name, level, _ in _iter_entries(raw)
    ]


def normalize_job_requirements(
    raw: Any,
    default_level: ExperienceLevel = ExperienceLevel.INTERMEDIATE
) -> List[SkillRequirement]:
    """Normalize a job's requirement list into SkillRequirement values.

    Entries without a level inherit the job-wide ``default_level``; entries
    without an importance are treated as required.
    """
    requirements = []
    for name, level, importance in _iter_entries(raw):
        requirements.append(SkillRequirement(
            name=name,
            experience_level=ExperienceLevel.parse(level) if level is not None else default_level,
            importance=SkillImportance.parse(importance),
        ))
    return requirements


def normalize_skill_names(raw: Any) -> List[str]:
    """Flat list of trimmed, de-duplicated skill names."""
    return [name for name, _, _ in _iter_entries(raw)]
