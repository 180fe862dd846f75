"""LLM Module - External scoring providers and failover client."""
from core.llm.interfaces import ScoringProvider, ScoringAttempt
from core.llm.openai_service import OpenAICompatibleProvider
from core.llm.scoring_client import ExternalScoringClient, parse_score_response

__all__ = [
    'ScoringProvider', 'ScoringAttempt', 'OpenAICompatibleProvider',
    'ExternalScoringClient', 'parse_score_response'
]
