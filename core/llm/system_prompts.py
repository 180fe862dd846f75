from typing import Tuple

from core.matcher.models import CandidateProfile, JobProfile, MatchPerspective

JOB_DESCRIPTION_MAX_CHARS = 300
BIO_MAX_CHARS = 150

EMPLOYER_SCORING_SYSTEM_PROMPT = """
You are an expert hiring advisor for freelance marketplaces.

Task
- Evaluate how well one candidate fits one job posting, for the employer.

Criteria
1. COMPETENCE: skills and experience level against the job's required and preferred skills.
2. TRUST: reliability signals present in the profile (completeness, clear bio, stated rate).

Rules
- Score from 0 to 100.
- Use only the information given. Do not invent skills or history.
- Missing required skills weigh more than missing preferred skills.

Output format (exactly two lines, nothing else)
Score: <number>
Reason: <2-3 sentences covering competence and trust>
""".strip()

WORKER_SCORING_SYSTEM_PROMPT = """
You are an expert career advisor for freelance workers.

Task
- Evaluate how worthwhile one job posting is for one worker.

Criteria
1. RELEVANCE: match between the job's skills and level and the worker's skills and level.
2. QUALITY: clarity of the posting and whether the budget is reasonable for the work and the worker's rate.

Rules
- Score from 0 to 100.
- Protect the worker from vague or underpaid posts.
- Use only the information given.

Output format (exactly two lines, nothing else)
Score: <number>
Reason: <2-3 sentences covering relevance and quality>
""".strip()


def truncate(text: str, limit: int) -> str:
    text = (text or "").strip()
    if len(text) <= limit:
        return text
    return text[:limit].rstrip() + "..."


def _format_budget(job: JobProfile) -> str:
    if job.budget_min is None and job.budget_max is None:
        return "Not specified"
    low = job.budget_min if job.budget_min is not None else "?"
    high = job.budget_max if job.budget_max is not None else "?"
    return f"{low} - {high} ({job.budget_type})"


def build_job_text(job: JobProfile) -> str:
    """Plain-text job summary with a truncated description."""
    required = [r for r in job.required_skills if r.is_required]
    preferred = [r for r in job.required_skills if not r.is_required]

    if required:
        required_text = ", ".join(f"{r.name} ({r.experience_level.label})" for r in required)
    else:
        required_text = ", ".join(job.skill_names) or "None listed"

    lines = [
        f"Title: {job.title or 'Untitled'}",
        f"Description: {truncate(job.description, JOB_DESCRIPTION_MAX_CHARS) or 'None'}",
        f"Required skills: {required_text}",
    ]
    if preferred:
        lines.append("Preferred: " + ", ".join(r.name for r in preferred))
    lines.append(f"Experience: {job.experience_level.label}")
    lines.append(f"Budget: {_format_budget(job)}")
    return "\n".join(lines)


def build_candidate_text(candidate: CandidateProfile) -> str:
    """Plain-text candidate summary with a truncated bio."""
    skills = ", ".join(f"{s.name} ({s.experience_level.label})" for s in candidate.skills)
    rate = candidate.hourly_rate if candidate.hourly_rate else "Not set"
    return "\n".join([
        f"Worker: {candidate.title or 'Untitled'}",
        f"Skills: {skills or 'None listed'}",
        f"Experience level: {candidate.experience_level.label}",
        f"Hourly rate: {rate}",
        f"Bio: {truncate(candidate.bio, BIO_MAX_CHARS) or 'None'}",
    ])


def build_prompts(
    job: JobProfile,
    candidate: CandidateProfile,
    perspective: MatchPerspective
) -> Tuple[str, str]:
    """Return (system_prompt, user_prompt) for the given perspective."""
    job_text = build_job_text(job)
    candidate_text = build_candidate_text(candidate)

    if perspective is MatchPerspective.WORKER:
        user_prompt = f"WORKER PROFILE:\n{candidate_text}\n\nJOB:\n{job_text}\n\nProvide Score and Reason."
        return WORKER_SCORING_SYSTEM_PROMPT, user_prompt

    user_prompt = f"JOB:\n{job_text}\n\nCANDIDATE:\n{candidate_text}\n\nProvide Score and Reason."
    return EMPLOYER_SCORING_SYSTEM_PROMPT, user_prompt
