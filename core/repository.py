"""
Profile Repository - Read-only access to job and candidate profiles.

The marketplace's own persistence is out of scope; the matching core only
depends on this interface. InMemoryProfileRepository backs the CLI, the web
app and the tests, and can be seeded from a JSON file shaped like:

    {"jobs": [{...}, ...], "candidates": [{...}, ...], "categories": ["...", ...]}

Raw records go through the skill normalizer on the way in, so any supported
skill shape is accepted.
"""
import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional

from core.exceptions import ConfigurationError
from core.matcher.models import CandidateProfile, ExperienceLevel, JobProfile, ProfileId
from core.matcher.skill_normalizer import (
    normalize_candidate_skills,
    normalize_job_requirements,
    normalize_skill_names,
)

logger = logging.getLogger(__name__)


def _to_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _to_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def job_from_dict(data: Dict[str, Any]) -> JobProfile:
    """Build a JobProfile from a raw record."""
    level = ExperienceLevel.parse(data.get("experience_level"))
    return JobProfile(
        id=data["id"],
        title=data.get("title") or "",
        description=data.get("description") or "",
        required_skills=normalize_job_requirements(data.get("required_skills"), default_level=level),
        experience_level=level,
        budget_min=_to_float(data.get("budget_min")),
        budget_max=_to_float(data.get("budget_max")),
        budget_type=data.get("budget_type") or "fixed",
        skill_names=normalize_skill_names(data.get("skills", data.get("skill_names"))),
        employer_id=data.get("employer_id"),
        bid_count=_to_int(data.get("bid_count")),
        status=data.get("status") or "open",
    )


def categories_from_dict(data: Dict[str, Any]) -> List[str]:
    """
    Taxonomy category names, de-duplicated in first-seen order.

    Accepts a flat "categories" list (names or {"name": ...} records) and/or
    the nested {"services": [{"categories": [{"name": ...}]}]} taxonomy shape.
    """
    raw = list(data.get("categories") or [])
    for service in data.get("services") or []:
        if isinstance(service, dict):
            raw.extend(service.get("categories") or [])

    names = {}
    for entry in raw:
        name = entry.get("name") if isinstance(entry, dict) else entry
        if isinstance(name, str) and name.strip():
            names.setdefault(name.strip().lower(), name.strip())
    return list(names.values())


def candidate_from_dict(data: Dict[str, Any]) -> CandidateProfile:
    """Build a CandidateProfile from a raw record."""
    return CandidateProfile(
        id=data["id"],
        title=data.get("title") or data.get("professional_title") or "",
        skills=normalize_candidate_skills(data.get("skills")),
        experience_level=ExperienceLevel.parse(data.get("experience_level")),
        hourly_rate=_to_float(data.get("hourly_rate")),
        bio=data.get("bio") or "",
        profile_completed=bool(data.get("profile_completed", True)),
    )


class ProfileRepository(ABC):
    """Read-only data collaborator for the matching core."""

    @abstractmethod
    def get_job(self, job_id: ProfileId) -> Optional[JobProfile]:
        pass

    @abstractmethod
    def get_candidate(self, candidate_id: ProfileId) -> Optional[CandidateProfile]:
        pass

    @abstractmethod
    def candidate_pool(self, job: JobProfile, limit: int) -> List[CandidateProfile]:
        """Candidates with a completed profile, excluding the job's employer."""
        pass

    @abstractmethod
    def job_pool(self, candidate: CandidateProfile, limit: int) -> List[JobProfile]:
        """Open jobs, excluding jobs the candidate posted."""
        pass

    @abstractmethod
    def count_bids(self, job_id: ProfileId) -> int:
        pass

    def list_jobs(self) -> List[JobProfile]:
        return []

    def list_candidates(self) -> List[CandidateProfile]:
        return []

    def list_categories(self) -> List[str]:
        """Taxonomy categories free text is reconciled against."""
        return []


class InMemoryProfileRepository(ProfileRepository):
    """Profiles held in dicts, in insertion order."""

    def __init__(
        self,
        jobs: Optional[Iterable[JobProfile]] = None,
        candidates: Optional[Iterable[CandidateProfile]] = None,
        categories: Optional[Iterable[str]] = None
    ):
        self._jobs: Dict[str, JobProfile] = {}
        self._candidates: Dict[str, CandidateProfile] = {}
        self._categories: List[str] = list(categories or [])
        for job in jobs or []:
            self.add_job(job)
        for candidate in candidates or []:
            self.add_candidate(candidate)

    @staticmethod
    def _key(profile_id: ProfileId) -> str:
        return str(profile_id).strip()

    def add_job(self, job: JobProfile) -> None:
        self._jobs[self._key(job.id)] = job

    def add_candidate(self, candidate: CandidateProfile) -> None:
        self._candidates[self._key(candidate.id)] = candidate

    def get_job(self, job_id):
        return self._jobs.get(self._key(job_id))

    def get_candidate(self, candidate_id):
        return self._candidates.get(self._key(candidate_id))

    def candidate_pool(self, job, limit):
        employer_key = self._key(job.employer_id) if job.employer_id is not None else None
        pool = [
            c for c in self._candidates.values()
            if c.profile_completed and self._key(c.id) != employer_key
        ]
        return pool[:max(0, limit)]

    def job_pool(self, candidate, limit):
        candidate_key = self._key(candidate.id)
        pool = [
            j for j in self._jobs.values()
            if j.is_open and (j.employer_id is None or self._key(j.employer_id) != candidate_key)
        ]
        return pool[:max(0, limit)]

    def count_bids(self, job_id):
        job = self.get_job(job_id)
        return job.bid_count if job else 0

    def list_jobs(self):
        return list(self._jobs.values())

    def list_candidates(self):
        return list(self._candidates.values())

    def list_categories(self):
        return list(self._categories)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InMemoryProfileRepository":
        jobs = [job_from_dict(j) for j in data.get("jobs") or []]
        candidates = [candidate_from_dict(c) for c in data.get("candidates") or []]
        categories = categories_from_dict(data)
        logger.info(f"Loaded {len(jobs)} jobs, {len(candidates)} candidates and {len(categories)} categories")
        return cls(jobs=jobs, candidates=candidates, categories=categories)

    @classmethod
    def from_file(cls, path: str) -> "InMemoryProfileRepository":
        """Load profiles from a JSON file. Unreadable files raise ConfigurationError."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot load profiles from {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Profiles file {path} must contain a JSON object")
        try:
            return cls.from_dict(data)
        except KeyError as e:
            raise ConfigurationError(f"Profile record in {path} is missing {e}") from e
