#!/usr/bin/env python3
"""
Core exceptions.

Only ConfigurationError ever leaves the core: it is raised while services are
being wired, never while a score is being computed.
"""


class ConfigurationError(Exception):
    """Raised at construction time when a service is configured inconsistently."""
    pass


class ProviderError(Exception):
    """Base class for a single failed call to an external scoring provider."""

    def __init__(self, message: str, model: str = "", status_code: int = 0):
        super().__init__(message)
        self.model = model
        self.status_code = status_code


class ProviderRateLimited(ProviderError):
    """Provider answered 429."""
    pass


class ProviderUnavailable(ProviderError):
    """Provider answered 5xx or could not be reached."""
    pass


class ProviderTimeout(ProviderError):
    """Provider did not answer within the attempt timeout."""
    pass


class ProviderResponseError(ProviderError):
    """Provider answered, but the response was unusable."""
    pass
