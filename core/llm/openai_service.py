"""
OpenAI Service - Scoring provider for any OpenAI-compatible chat-completions API.

Groq is the default endpoint; anything that speaks the OpenAI protocol works.
"""
from typing import Optional
import logging

import openai
from openai import OpenAI
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)
from tenacity import RetryCallState

from core.exceptions import (
    ConfigurationError,
    ProviderError,
    ProviderRateLimited,
    ProviderResponseError,
    ProviderTimeout,
    ProviderUnavailable,
)
from core.llm.interfaces import ScoringAttempt, ScoringProvider

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Retry helpers
# ---------------------------------------------------------------------------

def _is_retryable(exc: BaseException) -> bool:
    """Only connection failures are retried on the same model.

    Rate limits, server errors and timeouts fail over to the next model
    instead, so one slow provider cannot stall the batch.
    """
    return (
        isinstance(exc, openai.APIConnectionError)
        and not isinstance(exc, openai.APITimeoutError)
    )


def _log_retry(retry_state: RetryCallState) -> None:
    """Log a warning before each retry sleep."""
    exc = retry_state.outcome.exception()
    wait = retry_state.next_action.sleep if retry_state.next_action else 0
    logger.warning(
        "Connection error (attempt %s). Waiting %.1fs before retry. Details: %s",
        retry_state.attempt_number, wait, exc,
    )


def _connection_retry(max_retries: int, **kwargs):
    """Return a tenacity @retry decorator for connection errors."""
    return retry(
        retry=retry_if_exception(_is_retryable),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
        stop=stop_after_attempt(max_retries + 1),
        before_sleep=_log_retry,
        reraise=True,
        **kwargs,
    )


def _to_provider_error(exc: Exception, model: str) -> ProviderError:
    """Map an SDK exception onto the provider error taxonomy."""
    if isinstance(exc, openai.APITimeoutError):
        return ProviderTimeout(f"{model} timed out", model=model)
    if isinstance(exc, openai.RateLimitError):
        return ProviderRateLimited(f"{model} rate limited", model=model, status_code=429)
    if isinstance(exc, openai.APIStatusError):
        status = exc.status_code
        if status >= 500:
            return ProviderUnavailable(f"{model} unavailable (HTTP {status})", model=model, status_code=status)
        return ProviderResponseError(f"{model} rejected request (HTTP {status})", model=model, status_code=status)
    if isinstance(exc, openai.APIConnectionError):
        return ProviderUnavailable(f"{model} unreachable: {exc}", model=model)
    return ProviderResponseError(f"{model} failed: {exc}", model=model)


class OpenAICompatibleProvider(ScoringProvider):
    """
    OpenAI-compatible chat-completion provider.

    SDK-level retries are disabled; the per-call timeout comes from the
    ScoringAttempt so each model keeps its own budget.
    """

    name = "openai-compatible"

    def __init__(
        self,
        api_key: Optional[str],
        base_url: Optional[str] = None,
        max_connection_retries: int = 1,
        client: Optional[OpenAI] = None
    ):
        if client is None:
            if not api_key:
                raise ConfigurationError("An API key is required for external scoring")
            client_kwargs = {'api_key': api_key, 'max_retries': 0}
            if base_url:
                client_kwargs['base_url'] = base_url
            client = OpenAI(**client_kwargs)

        if max_connection_retries < 0:
            raise ConfigurationError("max_connection_retries must be >= 0")

        self.client = client
        self.max_connection_retries = max_connection_retries
        self._create = _connection_retry(max_connection_retries)(self._create_completion)

    def _create_completion(self, system_prompt: str, user_prompt: str, attempt: ScoringAttempt):
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        return self.client.chat.completions.create(
            model=attempt.model,
            messages=messages,
            temperature=attempt.temperature,
            max_completion_tokens=attempt.max_completion_tokens,
            top_p=attempt.top_p,
            timeout=attempt.timeout_seconds,
        )

    def attempt(self, system_prompt: str, user_prompt: str, attempt: ScoringAttempt) -> str:
        try:
            response = self._create(system_prompt, user_prompt, attempt)
        except openai.OpenAIError as e:
            raise _to_provider_error(e, attempt.model) from e

        try:
            content = response.choices[0].message.content
        except (IndexError, AttributeError, TypeError) as e:
            raise ProviderResponseError(f"{attempt.model} returned no choices", model=attempt.model) from e

        if not content or not content.strip():
            raise ProviderResponseError(f"{attempt.model} returned empty content", model=attempt.model)
        return content
