"""Configuration management for the study group service."""

from studygroup_service.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
