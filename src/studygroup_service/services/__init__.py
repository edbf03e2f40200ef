"""
Business logic services.

This module exports all account-settings services.
"""

from studygroup_service.services.settings_service import SettingsService

__all__ = [
    "SettingsService",
]
