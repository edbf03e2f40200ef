"""Repositories for database access."""
from .base import BaseRepository
from .account import AccountRepository
from .tag import TagRepository

__all__ = [
    "BaseRepository",
    "AccountRepository",
    "TagRepository",
]
