#!/usr/bin/env python3
"""
Configuration management for the matching web application.

The web app reads the same config.yaml as the CLI through
core.config_loader; this module only caches it for request handlers.
"""

import os
from pathlib import Path
from functools import lru_cache

from core.config_loader import AppConfig, load_config


def get_project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent.parent


@lru_cache()
def get_config() -> AppConfig:
    """
    Get application configuration (cached).

    GIGMATCH_CONFIG points at an alternative YAML file.

    Returns:
        AppConfig: Application configuration.
    """
    config_path = os.environ.get("GIGMATCH_CONFIG") or str(get_project_root() / "config.yaml")
    return load_config(config_path)
