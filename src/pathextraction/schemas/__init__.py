"""Pydantic schema definitions for application settings."""

from __future__ import annotations

from .config import AppConfig, ExtractorSettings, SearchPathSpec, load_config

__all__ = [
    "AppConfig",
    "ExtractorSettings",
    "SearchPathSpec",
    "load_config",
]
