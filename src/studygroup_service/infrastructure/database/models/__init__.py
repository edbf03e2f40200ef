"""
Database models for the study group service.

This package contains all SQLModel models used in the application.
"""

from .account import AccountRecord, AccountTagLink
from .tag import TagRecord

__all__ = [
    "AccountRecord",
    "AccountTagLink",
    "TagRecord",
]
