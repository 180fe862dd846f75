#!/usr/bin/env python3
"""
Matcher Models - Data structures for matching.

Profiles are read-only views handed over by the data collaborator; everything
here is built per request and discarded after the response, except MatchResult
values held by the score cache.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Dict, Any, Optional, Union

ProfileId = Union[int, str]


class ExperienceLevel(Enum):
    """Ordinal experience tier."""
    BEGINNER = 1
    INTERMEDIATE = 2
    EXPERT = 3

    @classmethod
    def parse(cls, value: Any) -> "ExperienceLevel":
        """Parse a level from an enum, name or rank; unknown values become INTERMEDIATE."""
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            return cls.INTERMEDIATE
        if isinstance(value, int):
            for level in cls:
                if level.value == value:
                    return level
            return cls.INTERMEDIATE
        if isinstance(value, str):
            key = value.strip().upper()
            if key in cls.__members__:
                return cls[key]
            if key.isdigit():
                return cls.parse(int(key))
        return cls.INTERMEDIATE

    @property
    def label(self) -> str:
        return self.name.capitalize()


class SkillImportance(Enum):
    REQUIRED = "required"
    PREFERRED = "preferred"

    @classmethod
    def parse(cls, value: Any) -> "SkillImportance":
        if isinstance(value, cls):
            return value
        if isinstance(value, str) and value.strip().lower() == "preferred":
            return cls.PREFERRED
        return cls.REQUIRED


class ScoreSource(Enum):
    EXTERNAL = "external"
    DETERMINISTIC = "deterministic"


class MatchPerspective(Enum):
    """Who the ranking is for.

    EMPLOYER ranks candidates for a job (competence + trust), WORKER ranks
    jobs for a candidate (relevance + quality).
    """
    EMPLOYER = "employer"
    WORKER = "worker"


@dataclass(frozen=True)
class SkillRequirement:
    """A single skill a job asks for."""
    name: str
    experience_level: ExperienceLevel = ExperienceLevel.INTERMEDIATE
    importance: SkillImportance = SkillImportance.REQUIRED

    @property
    def is_required(self) -> bool:
        return self.importance is SkillImportance.REQUIRED


@dataclass(frozen=True)
class CandidateSkill:
    """A single skill a candidate lists."""
    name: str
    experience_level: ExperienceLevel = ExperienceLevel.INTERMEDIATE


@dataclass(frozen=True)
class JobProfile:
    """Read-only job view.

    ``required_skills`` is the structured per-skill breakdown; ``skill_names``
    is the flat list older postings carry instead.
    """
    id: ProfileId
    title: str = ""
    description: str = ""
    required_skills: List[SkillRequirement] = field(default_factory=list)
    experience_level: ExperienceLevel = ExperienceLevel.INTERMEDIATE
    budget_min: Optional[float] = None
    budget_max: Optional[float] = None
    budget_type: str = "fixed"
    skill_names: List[str] = field(default_factory=list)
    employer_id: Optional[ProfileId] = None
    bid_count: int = 0
    status: str = "open"

    @property
    def is_open(self) -> bool:
        return self.status == "open"

    @property
    def has_structured_requirements(self) -> bool:
        return bool(self.required_skills)

    def all_skill_names(self) -> List[str]:
        if self.required_skills:
            return [s.name for s in self.required_skills]
        return list(self.skill_names)


@dataclass(frozen=True)
class CandidateProfile:
    """Read-only candidate (gig worker) view."""
    id: ProfileId
    title: str = ""
    skills: List[CandidateSkill] = field(default_factory=list)
    experience_level: ExperienceLevel = ExperienceLevel.INTERMEDIATE
    hourly_rate: Optional[float] = None
    bio: str = ""
    profile_completed: bool = True


@dataclass(frozen=True)
class MatchResult:
    """A complete, valid score for one (job, candidate) pair."""
    job_id: ProfileId
    candidate_id: ProfileId
    score: int
    reason: str
    source: ScoreSource
    computed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        if isinstance(self.score, bool) or not isinstance(self.score, int):
            raise TypeError(f"score must be an int, got {type(self.score).__name__}")
        if not 0 <= self.score <= 100:
            raise ValueError(f"score must be within [0, 100], got {self.score}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "job_id": self.job_id,
            "candidate_id": self.candidate_id,
            "score": self.score,
            "reason": self.reason,
            "source": self.source.value,
            "computed_at": self.computed_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchResult":
        return cls(
            job_id=data["job_id"],
            candidate_id=data["candidate_id"],
            score=int(data["score"]),
            reason=data.get("reason", ""),
            source=ScoreSource(data.get("source", ScoreSource.DETERMINISTIC.value)),
            computed_at=datetime.fromisoformat(data["computed_at"]),
        )
