"""
External Scoring Client - Ordered multi-model failover over a ScoringProvider.

Models are tried one after another; the first parseable answer wins. Any
failure (rate limit, server error, timeout, unparseable content) is logged
and the next model is tried. When every model fails the caller gets None and
falls back to deterministic scoring.
"""
from typing import List, Optional, Tuple
import logging
import re

from core.config_loader import ProviderConfig
from core.exceptions import ConfigurationError, ProviderError
from core.llm.interfaces import ScoringAttempt, ScoringProvider
from core.llm.system_prompts import build_prompts
from core.matcher.models import (
    CandidateProfile,
    JobProfile,
    MatchPerspective,
    MatchResult,
    ScoreSource,
)

logger = logging.getLogger(__name__)

_SCORE_PATTERN = re.compile(r"Score:\s*(\d+)")
_REASON_PATTERN = re.compile(r"Reason:\s*(.+)")
_THINK_BLOCK = re.compile(r"<think>.*?</think>", re.DOTALL | re.IGNORECASE)


def parse_score_response(content: str) -> Optional[Tuple[int, str]]:
    """
    Extract (score, reason) from a "Score: N / Reason: ..." response.

    Reasoning blocks some models emit are ignored. Both lines are required;
    the score is clamped to 0-100. Returns None if the content is unusable.
    """
    if not content:
        return None
    text = _THINK_BLOCK.sub("", content)

    score_match = _SCORE_PATTERN.search(text)
    reason_match = _REASON_PATTERN.search(text)
    if not score_match or not reason_match:
        return None

    reason = reason_match.group(1).strip()
    if not reason:
        return None

    score = max(0, min(100, int(score_match.group(1))))
    return score, reason


class ExternalScoringClient:
    """
    Scores a pair through an ordered list of models on one provider.

    Args:
        provider: ScoringProvider that performs a single attempt
        models: ordered model list; earlier entries are preferred
    """

    def __init__(self, provider: ScoringProvider, models: List[ProviderConfig]):
        if not models:
            raise ConfigurationError("External scoring needs at least one model")
        for model in models:
            if model.timeout_seconds <= 0:
                raise ConfigurationError(f"Timeout for {model.model} must be positive")
            if model.max_completion_tokens <= 0:
                raise ConfigurationError(f"max_completion_tokens for {model.model} must be positive")

        self.provider = provider
        self.attempts = [
            ScoringAttempt(
                provider=provider.name,
                model=m.model,
                timeout_seconds=m.timeout_seconds,
                temperature=m.temperature,
                max_completion_tokens=m.max_completion_tokens,
                top_p=m.top_p,
            )
            for m in models
        ]

    def score(
        self,
        job: JobProfile,
        candidate: CandidateProfile,
        perspective: MatchPerspective = MatchPerspective.EMPLOYER
    ) -> Optional[MatchResult]:
        """Return the first successful MatchResult, or None if every model failed."""
        system_prompt, user_prompt = build_prompts(job, candidate, perspective)

        for attempt in self.attempts:
            try:
                content = self.provider.attempt(system_prompt, user_prompt, attempt)
            except ProviderError as e:
                logger.warning(
                    f"Scoring model {attempt.model} failed ({type(e).__name__}): {e}. "
                    f"Trying next model."
                )
                continue
            except Exception:
                logger.warning(
                    f"Scoring model {attempt.model} raised an unexpected error, trying next model",
                    exc_info=True
                )
                continue

            parsed = parse_score_response(content)
            if parsed is None:
                logger.warning(f"Scoring model {attempt.model} returned unparseable content, trying next model")
                continue

            score, reason = parsed
            logger.debug(f"Scored job {job.id} / candidate {candidate.id} with {attempt.model}: {score}")
            return MatchResult(
                job_id=job.id,
                candidate_id=candidate.id,
                score=score,
                reason=reason,
                source=ScoreSource.EXTERNAL,
            )

        logger.error(f"All {len(self.attempts)} scoring models failed for job {job.id} / candidate {candidate.id}")
        return None
