#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

from functools import lru_cache

from fastapi import Depends

from core.app_context import AppContext
from .config import get_config
from .services.match_service import MatchService


@lru_cache()
def get_app_context() -> AppContext:
    """
    Build the wired application context once per process.

    Tests override this dependency with a context built around an in-memory
    repository.
    """
    return AppContext.build(get_config())


def get_match_service(context: AppContext = Depends(get_app_context)) -> MatchService:
    """
    FastAPI dependency that yields a MatchService over the shared context.

    Usage:
        @app.get("/endpoint")
        def my_endpoint(service: MatchService = Depends(get_match_service)):
            ...
    """
    return MatchService(context)
