"""Core module - Configuration, errors and local settings."""

from proposalgen.core.config import get_settings, Settings, missing_credentials, slugify

__all__ = [
    "get_settings",
    "Settings",
    "missing_credentials",
    "slugify",
]
