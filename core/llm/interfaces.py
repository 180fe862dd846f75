"""
Scoring Provider Interface - Abstract base for external scoring backends.

This module defines the interface for chat-completion services (Groq, OpenAI,
any OpenAI-compatible endpoint) used by the ExternalScoringClient.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ScoringAttempt:
    """Parameters for a single call to one model. Lives only inside one client call."""
    provider: str
    model: str
    timeout_seconds: float = 30.0
    temperature: float = 1.0
    max_completion_tokens: int = 1024
    top_p: float = 1.0


class ScoringProvider(ABC):
    """
    Abstract Interface for external scoring providers.
    """

    name = "provider"

    @abstractmethod
    def attempt(self, system_prompt: str, user_prompt: str, attempt: ScoringAttempt) -> str:
        """
        Run one chat completion and return the raw message content.

        Raises:
            ProviderError: (or a subclass) for rate limits, unavailability,
                timeouts and unusable responses. Nothing else may escape.
        """
        pass
